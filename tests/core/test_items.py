"""
Unit Tests for Item Models

Tests for Item, Category, Context, Tag and AnswerOption.
"""

import pytest

from exam_assembler.core.models import AnswerOption, Category, Context, Item, Tag


class TestItem:
    """Tests for Item dataclass."""

    def test_init_when_id_not_positive_then_raises_error(self):
        with pytest.raises(ValueError, match="positive integer"):
            Item(id=0, category_id=1, text="x")

    def test_init_when_id_is_bool_then_raises_error(self):
        with pytest.raises(ValueError):
            Item(id=True, category_id=1, text="x")

    def test_init_when_category_not_int_then_raises_error(self):
        with pytest.raises(ValueError, match="non-integer category"):
            Item(id=3, category_id="1", text="x")

    def test_from_dict_when_legacy_keys_then_maps_fields(self):
        item = Item.from_dict({
            "frage_id": 7,
            "fragekategorie_id": 2,
            "frage_text": "Wer schrieb Faust?",
            "fragekontext_id": 4,
            "tags": [1, 3],
        })
        assert item == Item(7, 2, "Wer schrieb Faust?", 4, (1, 3))

    def test_from_dict_when_english_keys_then_maps_fields(self):
        item = Item.from_dict({"id": 7, "category_id": 2, "text": "t"})
        assert item.id == 7
        assert item.category_id == 2
        assert item.context_id is None
        assert item.tags == ()

    def test_to_dict_when_roundtrip_then_equal(self):
        item = Item(5, 1, "Frage", context_id=10, tags=(100,))
        assert Item.from_dict(item.to_dict()) == item

    def test_to_dict_when_no_context_then_key_omitted(self):
        assert "context_id" not in Item(5, 1, "Frage").to_dict()

    def test_has_any_tag(self):
        item = Item(5, 1, "Frage", tags=(100, 101))
        assert item.has_any_tag({101, 200})
        assert not item.has_any_tag({200})
        assert not item.has_any_tag(set())

    def test_repr_is_concise(self):
        assert repr(Item(2, 1, "a long question text")) == "Item(2, category=1)"

    def test_items_are_hashable_and_compare_by_value(self):
        assert len({Item(1, 1, "a"), Item(1, 1, "a")}) == 1


class TestReferenceRecords:
    """Tests for Category, Context, Tag and AnswerOption."""

    def test_category_from_legacy_dict(self):
        assert Category.from_dict({"kategorieid": 2, "kategoriename": "Mathe"}) == Category(2, "Mathe")

    def test_context_from_legacy_dict(self):
        context = Context.from_dict({"fragekontext_id": 10, "fragekontext_quelle": "Faust I"})
        assert context == Context(10, "Faust I")

    def test_tag_from_legacy_dict(self):
        assert Tag.from_dict({"tagid": 100, "tagname": "Klassik"}) == Tag(100, "Klassik")

    def test_answer_option_from_legacy_dict(self):
        answer = AnswerOption.from_dict({
            "frage_id": 1,
            "option_id": "a",
            "option_text": "Goethe",
            "option_correct": 1,
        })
        assert answer.item_id == 1
        assert answer.correct is True
        assert answer.label == "a: Goethe"

    def test_answer_option_defaults_to_incorrect(self):
        answer = AnswerOption.from_dict({"frage_id": 1, "option_id": "b", "option_text": "Schiller"})
        assert answer.correct is False
