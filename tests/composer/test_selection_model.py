"""
Unit Tests for SelectionModel

Marking, shift-range marking and the anchor.
"""

import pytest

from exam_assembler.composer import (
    ALT_CLICK,
    PLAIN_CLICK,
    SHIFT_CLICK,
    Anchor,
    ClickModifiers,
    PoolName,
    SelectionModel,
)

AVAILABLE = PoolName.AVAILABLE
CHOSEN = PoolName.CHOSEN
VISUAL = [1, 3, 5, 7, 9]


@pytest.fixture
def model() -> SelectionModel:
    return SelectionModel()


class TestClickModifiers:

    def test_alt_wins_over_shift(self):
        both = ClickModifiers(shift=True, alt=True)
        assert both.is_info
        assert not both.is_range

    def test_plain_click_is_neither(self):
        assert not PLAIN_CLICK.is_info
        assert not PLAIN_CLICK.is_range


class TestToggle:

    def test_mark_when_unmarked_then_marks_and_sets_anchor(self, model):
        result = model.mark(AVAILABLE, 3)
        assert result.marked
        assert model.marked(AVAILABLE) == {3}
        assert model.anchor == Anchor(AVAILABLE, 3)

    def test_mark_when_marked_then_unmarks_and_keeps_anchor(self, model):
        model.mark(AVAILABLE, 3)
        model.mark(AVAILABLE, 5)
        result = model.mark(AVAILABLE, 3)
        assert not result.marked
        assert model.marked(AVAILABLE) == {5}
        assert model.anchor == Anchor(AVAILABLE, 5)

    def test_pools_have_independent_marks(self, model):
        model.mark(AVAILABLE, 3)
        model.mark(CHOSEN, 4)
        assert model.marked(AVAILABLE) == {3}
        assert model.marked(CHOSEN) == {4}

    def test_clear_keeps_anchor(self, model):
        model.mark(AVAILABLE, 3)
        model.clear(AVAILABLE)
        assert model.marked(AVAILABLE) == frozenset()
        assert model.anchor_for(AVAILABLE) == 3


class TestRangeMark:

    def test_shift_click_when_anchor_before_then_marks_range(self, model):
        model.mark(AVAILABLE, 3, PLAIN_CLICK, VISUAL)
        result = model.mark(AVAILABLE, 7, SHIFT_CLICK, VISUAL)
        assert model.marked(AVAILABLE) == {3, 5, 7}
        assert result.added == (5,)
        assert model.anchor == Anchor(AVAILABLE, 7)

    def test_shift_click_when_anchor_after_then_marks_range_backwards(self, model):
        model.mark(AVAILABLE, 9, PLAIN_CLICK, VISUAL)
        model.mark(AVAILABLE, 3, SHIFT_CLICK, VISUAL)
        assert model.marked(AVAILABLE) == {3, 5, 7, 9}

    def test_shift_click_on_adjacent_item_adds_nothing_between(self, model):
        model.mark(AVAILABLE, 3, PLAIN_CLICK, VISUAL)
        result = model.mark(AVAILABLE, 5, SHIFT_CLICK, VISUAL)
        assert result.added == ()
        assert model.marked(AVAILABLE) == {3, 5}

    def test_shift_click_on_anchor_only_flips_it(self, model):
        model.mark(AVAILABLE, 3, PLAIN_CLICK, VISUAL)
        result = model.mark(AVAILABLE, 3, SHIFT_CLICK, VISUAL)
        assert not result.marked
        assert model.marked(AVAILABLE) == frozenset()

    def test_shift_click_keeps_marks_between_that_were_already_set(self, model):
        model.mark(AVAILABLE, 5, PLAIN_CLICK, VISUAL)
        model.mark(AVAILABLE, 1, PLAIN_CLICK, VISUAL)
        result = model.mark(AVAILABLE, 9, SHIFT_CLICK, VISUAL)
        assert result.added == (3, 7)
        assert model.marked(AVAILABLE) == {1, 3, 5, 7, 9}

    def test_shift_click_when_clicked_item_marked_then_unmarks_it_but_fills_range(self, model):
        model.mark(AVAILABLE, 7, PLAIN_CLICK, VISUAL)
        model.mark(AVAILABLE, 3, PLAIN_CLICK, VISUAL)
        result = model.mark(AVAILABLE, 7, SHIFT_CLICK, VISUAL)
        assert not result.marked
        assert model.marked(AVAILABLE) == {3, 5}
        # anchor only moves to a newly marked item
        assert model.anchor == Anchor(AVAILABLE, 3)

    def test_shift_click_without_anchor_then_plain_toggle(self, model):
        result = model.mark(AVAILABLE, 7, SHIFT_CLICK, VISUAL)
        assert result.degraded
        assert model.marked(AVAILABLE) == {7}
        assert model.anchor == Anchor(AVAILABLE, 7)

    def test_shift_click_when_anchor_in_other_pool_then_plain_toggle(self, model):
        model.mark(CHOSEN, 4)
        result = model.mark(AVAILABLE, 7, SHIFT_CLICK, VISUAL)
        assert result.degraded
        assert model.marked(AVAILABLE) == {7}
        assert model.marked(CHOSEN) == {4}
        assert model.anchor == Anchor(AVAILABLE, 7)

    def test_shift_click_when_anchor_not_displayed_then_plain_toggle(self, model):
        model.mark(AVAILABLE, 2)
        result = model.mark(AVAILABLE, 7, SHIFT_CLICK, VISUAL)
        assert result.degraded
        assert model.marked(AVAILABLE) == {2, 7}

    def test_range_uses_visual_order_not_id_order(self, model):
        order = [12, 5, 1, 9]
        model.mark(CHOSEN, 12, PLAIN_CLICK, order)
        model.mark(CHOSEN, 1, SHIFT_CLICK, order)
        assert model.marked(CHOSEN) == {12, 5, 1}


class TestInfoClick:

    def test_alt_click_never_changes_marks_or_anchor(self, model):
        model.mark(AVAILABLE, 3, PLAIN_CLICK, VISUAL)
        result = model.mark(AVAILABLE, 5, ALT_CLICK, VISUAL)
        assert result.is_info_request
        assert result.info_item_id == 5
        assert not result.marked
        assert model.marked(AVAILABLE) == {3}
        assert model.anchor == Anchor(AVAILABLE, 3)

    def test_alt_shift_click_is_info_request(self, model):
        model.mark(AVAILABLE, 3, PLAIN_CLICK, VISUAL)
        result = model.mark(AVAILABLE, 9, ClickModifiers(shift=True, alt=True), VISUAL)
        assert result.is_info_request
        assert model.marked(AVAILABLE) == {3}

    def test_alt_click_on_marked_item_reports_marked(self, model):
        model.mark(AVAILABLE, 3)
        assert model.mark(AVAILABLE, 3, ALT_CLICK).marked
