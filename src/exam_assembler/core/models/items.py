"""
Module: items

Purpose:
    Provides the Item dataclass (one question in the pool) and the small
    reference records that travel with it: Category, Context, Tag and
    AnswerOption. All are frozen; a loaded item is never mutated.

Key Functions:
    - Item.from_dict(data): Accepts both the legacy German keys
      (frage_id, fragekategorie_id, ...) and plain English keys
    - Item.to_dict(): English-keyed dict for JSON storage
    - Item.has_any_tag(tags): Tag filter helper

Dependencies:
    - dataclasses (std)

Used By:
    - core.models.catalog.Catalog
    - composer (every engine module)
    - composer.loading.loader
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Iterable, Optional, Tuple


def _pick(data: dict, *keys: str, default: Any = None) -> Any:
    """Return the value of the first key present in data."""
    for key in keys:
        if key in data:
            return data[key]
    return default


@dataclass(frozen=True)
class Item:
    """
    A single question in the pool (immutable).

    Identity is ``id``; two items with the same id are the same question.

    Attributes:
        id: Unique question id (positive integer)
        category_id: Category bucket the question belongs to
        text: Question text as shown in the lists
        context_id: Optional id of the source text the question refers to
        tags: Tag ids attached to the question

    Example:
        >>> item = Item(id=7, category_id=2, text="Wer schrieb Faust?")
        >>> item.has_any_tag({3})
        False
    """

    id: int
    category_id: int
    text: str
    context_id: Optional[int] = None
    tags: Tuple[int, ...] = field(default_factory=tuple)

    def __post_init__(self) -> None:
        """Validate item on construction."""
        if not isinstance(self.id, int) or isinstance(self.id, bool) or self.id <= 0:
            raise ValueError(f"Item id must be a positive integer: {self.id!r}")
        if not isinstance(self.category_id, int) or isinstance(self.category_id, bool):
            raise ValueError(f"Item {self.id} has non-integer category: {self.category_id!r}")

    def has_any_tag(self, tag_ids: Iterable[int]) -> bool:
        """True if the item carries at least one of ``tag_ids``."""
        return not set(self.tags).isdisjoint(tag_ids)

    def to_dict(self) -> dict:
        """Serialize to dictionary for JSON storage."""
        d = {
            "id": self.id,
            "category_id": self.category_id,
            "text": self.text,
            "tags": list(self.tags),
        }
        if self.context_id is not None:
            d["context_id"] = self.context_id
        return d

    @classmethod
    def from_dict(cls, data: dict) -> Item:
        """
        Deserialize from dictionary.

        Args:
            data: Dict using either ``frage_id``-style or ``id``-style keys

        Returns:
            Item instance
        """
        return cls(
            id=_pick(data, "id", "frage_id"),
            category_id=_pick(data, "category_id", "fragekategorie_id"),
            text=_pick(data, "text", "frage_text", default=""),
            context_id=_pick(data, "context_id", "fragekontext_id"),
            tags=tuple(_pick(data, "tags", "fragetags", default=()) or ()),
        )

    def __repr__(self) -> str:
        """Concise representation for debugging."""
        return f"Item({self.id}, category={self.category_id})"


@dataclass(frozen=True)
class Category:
    """A question category shown in the category dropdown."""

    id: int
    name: str

    @classmethod
    def from_dict(cls, data: dict) -> Category:
        return cls(
            id=_pick(data, "id", "kategorieid"),
            name=_pick(data, "name", "kategoriename", default=""),
        )

    def to_dict(self) -> dict:
        return {"id": self.id, "name": self.name}


@dataclass(frozen=True)
class Context:
    """Source text (excerpt, poem, ...) that several questions may share."""

    id: int
    source: str

    @classmethod
    def from_dict(cls, data: dict) -> Context:
        return cls(
            id=_pick(data, "id", "fragekontext_id"),
            source=_pick(data, "source", "fragekontext_quelle", default=""),
        )

    def to_dict(self) -> dict:
        return {"id": self.id, "source": self.source}


@dataclass(frozen=True)
class Tag:
    """A free-form label attached to questions."""

    id: int
    name: str

    @classmethod
    def from_dict(cls, data: dict) -> Tag:
        return cls(
            id=_pick(data, "id", "tagid"),
            name=_pick(data, "name", "tagname", default=""),
        )

    def to_dict(self) -> dict:
        return {"id": self.id, "name": self.name}


@dataclass(frozen=True)
class AnswerOption:
    """
    One answer option of a multiple-choice question.

    Only read by the info popup; the engine never changes these.

    Attributes:
        item_id: Question the option belongs to
        option_id: Option label as stored (e.g. "a" or 1)
        text: Option text
        correct: Whether this is a correct answer
    """

    item_id: int
    option_id: Any
    text: str
    correct: bool = False

    @classmethod
    def from_dict(cls, data: dict) -> AnswerOption:
        return cls(
            item_id=_pick(data, "item_id", "frage_id"),
            option_id=_pick(data, "option_id", "id"),
            text=_pick(data, "text", "option_text", default=""),
            correct=bool(_pick(data, "correct", "option_correct", default=False)),
        )

    def to_dict(self) -> dict:
        return {
            "item_id": self.item_id,
            "option_id": self.option_id,
            "text": self.text,
            "correct": self.correct,
        }

    @property
    def label(self) -> str:
        """Display text like ``"b: Goethe"``."""
        return f"{self.option_id}: {self.text}"
