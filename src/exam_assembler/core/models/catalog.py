"""
Module: catalog

Purpose:
    Provides the Catalog dataclass: everything a data source delivers in one
    immutable bundle (items, categories, contexts, tags and answer options).

Key Functions:
    - Catalog.get_item(item_id): Lookup by id
    - Catalog.answers_for(item_id): Answer options for the info popup
    - Catalog.category_ids: Known category ids in display order

Dependencies:
    - dataclasses (std)
    - functools (std)
    - .items

Used By:
    - composer.controller.ComposerController
    - composer.loading.loader
    - composer.output.question_sheet
"""

from __future__ import annotations

from collections import Counter
from dataclasses import dataclass, field
from functools import cached_property
from typing import Dict, Optional, Tuple

from .items import AnswerOption, Category, Context, Item, Tag


@dataclass(frozen=True)
class Catalog:
    """
    The full universe of items plus reference data (immutable).

    Attributes:
        items: Every question, in load order
        categories: Known categories
        contexts: Known source texts
        tags: Known tags
        answers: All answer options (grouped on demand)

    Invariants:
        - item ids are unique
    """

    items: Tuple[Item, ...]
    categories: Tuple[Category, ...] = field(default_factory=tuple)
    contexts: Tuple[Context, ...] = field(default_factory=tuple)
    tags: Tuple[Tag, ...] = field(default_factory=tuple)
    answers: Tuple[AnswerOption, ...] = field(default_factory=tuple)

    def __post_init__(self) -> None:
        """Validate catalog on construction."""
        ids = [item.id for item in self.items]
        if len(ids) != len(set(ids)):
            duplicates = sorted(i for i, n in Counter(ids).items() if n > 1)
            raise ValueError(f"Duplicate item ids in catalog: {duplicates}")

    @cached_property
    def _by_id(self) -> Dict[int, Item]:
        return {item.id: item for item in self.items}

    @cached_property
    def _answers_by_item(self) -> Dict[int, Tuple[AnswerOption, ...]]:
        grouped: Dict[int, list[AnswerOption]] = {}
        for answer in self.answers:
            grouped.setdefault(answer.item_id, []).append(answer)
        return {key: tuple(value) for key, value in grouped.items()}

    @property
    def category_ids(self) -> Tuple[int, ...]:
        """Category ids in the order the data source listed them."""
        return tuple(c.id for c in self.categories)

    def get_item(self, item_id: int) -> Optional[Item]:
        """Find an item by id, or None."""
        return self._by_id.get(item_id)

    def answers_for(self, item_id: int) -> Tuple[AnswerOption, ...]:
        """Answer options of one question (empty tuple if none)."""
        return self._answers_by_item.get(item_id, ())

    def get_context(self, context_id: Optional[int]) -> Optional[Context]:
        if context_id is None:
            return None
        for context in self.contexts:
            if context.id == context_id:
                return context
        return None

    def __len__(self) -> int:
        return len(self.items)

    def __repr__(self) -> str:
        return (
            f"Catalog(items={len(self.items)}, categories={len(self.categories)}, "
            f"contexts={len(self.contexts)}, tags={len(self.tags)})"
        )
