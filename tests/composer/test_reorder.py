"""
Unit Tests for Reordering

reposition_sequence, ReorderEngine and DragSession.
"""

import pytest

from exam_assembler.composer import (
    END_OF_LIST,
    CategoryIndex,
    DragSession,
    PoolManager,
    PoolName,
    ReorderEngine,
    ReorderError,
    SelectionModel,
    reposition_sequence,
)

from conftest import make_items

SEQUENCE = [1, 5, 9, 12]


class TestRepositionSequence:

    @pytest.mark.parametrize(
        "moved, target, expected",
        [
            (1, 9, [5, 1, 9, 12]),
            (1, 12, [5, 9, 1, 12]),
            (12, 1, [12, 1, 5, 9]),
            (9, 5, [1, 9, 5, 12]),
            (1, END_OF_LIST, [5, 9, 12, 1]),
            (5, END_OF_LIST, [1, 9, 12, 5]),
        ],
    )
    def test_moved_item_lands_ahead_of_target(self, moved, target, expected):
        assert reposition_sequence(SEQUENCE, moved, target) == expected

    def test_last_item_to_end_is_unchanged(self):
        assert reposition_sequence(SEQUENCE, 12, END_OF_LIST) == SEQUENCE

    def test_drop_on_itself_is_unchanged(self):
        assert reposition_sequence(SEQUENCE, 9, 9) == SEQUENCE

    @pytest.mark.parametrize("index", range(len(SEQUENCE) - 1))
    def test_drop_ahead_of_own_successor_is_unchanged(self, index):
        moved, successor = SEQUENCE[index], SEQUENCE[index + 1]
        assert reposition_sequence(SEQUENCE, moved, successor) == SEQUENCE

    def test_input_is_not_modified(self):
        sequence = list(SEQUENCE)
        reposition_sequence(sequence, 1, 12)
        assert sequence == SEQUENCE

    def test_result_is_a_permutation(self):
        for moved in SEQUENCE:
            for target in SEQUENCE + [END_OF_LIST]:
                assert sorted(reposition_sequence(SEQUENCE, moved, target)) == sorted(SEQUENCE)

    def test_unknown_moved_item_raises(self):
        with pytest.raises(ReorderError, match="Moved question 4"):
            reposition_sequence(SEQUENCE, 4, 9)

    def test_unknown_target_raises(self):
        with pytest.raises(ReorderError, match="Target question 4"):
            reposition_sequence(SEQUENCE, 1, 4)

    def test_key_maps_elements_to_ids(self):
        items = make_items((1, 1), (5, 1), (9, 1))
        result = reposition_sequence(items, 9, 1, key=lambda item: item.id)
        assert [item.id for item in result] == [9, 1, 5]


@pytest.fixture
def pools() -> PoolManager:
    pools = PoolManager(
        make_items((1, 1), (5, 1), (9, 1), (12, 1), (20, 1)),
        SelectionModel(),
        CategoryIndex((1,)),
    )
    for item_id in SEQUENCE:
        pools.selection.mark(PoolName.AVAILABLE, item_id)
    pools.transfer_to_chosen()
    return pools


class TestReorderEngine:

    def test_reposition_updates_chosen(self, pools):
        engine = ReorderEngine(pools)
        assert engine.reposition(1, 9) is True
        assert pools.chosen_ids() == (5, 1, 9, 12)

    def test_reposition_when_no_change_then_returns_false(self, pools):
        engine = ReorderEngine(pools)
        assert engine.reposition(12, END_OF_LIST) is False
        assert pools.chosen_ids() == (1, 5, 9, 12)

    def test_reposition_when_target_in_available_then_raises(self, pools):
        engine = ReorderEngine(pools)
        with pytest.raises(ReorderError):
            engine.reposition(1, 20)
        assert pools.chosen_ids() == (1, 5, 9, 12)

    def test_reposition_never_touches_available(self, pools):
        ReorderEngine(pools).reposition(12, 1)
        assert [item.id for item in pools.available] == [20]


class TestDragSession:

    @pytest.fixture
    def drag(self, pools) -> DragSession:
        return DragSession(ReorderEngine(pools))

    def test_only_drop_mutates_chosen(self, drag, pools):
        drag.start(1)
        assert drag.over() is True
        drag.enter(12)
        drag.leave(12)
        drag.enter(9)
        assert pools.chosen_ids() == (1, 5, 9, 12)
        assert drag.hover_ref == 9

        assert drag.drop(9) is True
        assert pools.chosen_ids() == (5, 1, 9, 12)

    def test_drop_ends_the_drag(self, drag):
        drag.start(1)
        drag.drop(END_OF_LIST)
        assert not drag.active
        assert drag.hover_ref is None

    def test_drop_when_target_unknown_then_raises_and_ends_drag(self, drag, pools):
        drag.start(1)
        with pytest.raises(ReorderError):
            drag.drop(99)
        assert not drag.active
        assert pools.chosen_ids() == (1, 5, 9, 12)

    def test_drop_without_drag_raises(self, drag):
        with pytest.raises(ReorderError, match="without a drag"):
            drag.drop(9)

    def test_start_when_item_not_chosen_then_raises(self, drag):
        with pytest.raises(ReorderError):
            drag.start(20)

    def test_cancel_leaves_chosen_alone(self, drag, pools):
        drag.start(5)
        drag.enter(12)
        drag.cancel()
        assert not drag.active
        assert pools.chosen_ids() == (1, 5, 9, 12)

    def test_over_when_idle_then_rejects(self, drag):
        assert drag.over() is False

    def test_leave_of_other_element_keeps_hover(self, drag):
        drag.start(1)
        drag.enter(9)
        drag.leave(12)
        assert drag.hover_ref == 9
