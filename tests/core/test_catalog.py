"""
Unit Tests for Catalog
"""

import pytest

from exam_assembler.core.models import Catalog, Item


class TestCatalog:

    def test_init_when_duplicate_ids_then_raises_error(self):
        items = (Item(1, 1, "a"), Item(2, 1, "b"), Item(1, 2, "c"))
        with pytest.raises(ValueError, match=r"Duplicate item ids in catalog: \[1\]"):
            Catalog(items=items)

    def test_get_item_when_known_then_returns_item(self, catalog):
        assert catalog.get_item(7).text == "Was ist ein Reim?"

    def test_get_item_when_unknown_then_returns_none(self, catalog):
        assert catalog.get_item(999) is None

    def test_answers_for_groups_by_question_in_stored_order(self, catalog):
        answers = catalog.answers_for(1)
        assert [a.option_id for a in answers] == ["a", "b"]
        assert catalog.answers_for(2) == ()

    def test_get_context(self, catalog):
        assert catalog.get_context(10).source == "Faust I"
        assert catalog.get_context(None) is None
        assert catalog.get_context(99) is None

    def test_category_ids_in_listed_order(self, catalog):
        assert catalog.category_ids == (1, 2, 3, 4)

    def test_len(self, catalog):
        assert len(catalog) == 10
