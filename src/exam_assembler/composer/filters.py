"""
Module: composer.filters

Purpose:
    Decide which Available items are displayed: the selected category
    bucket, narrowed by an optional context filter and selected tags.
    Filters are visual only; they never move items between pools.

Key Classes:
    - ViewFilter: Category, context and tag selection

Used By:
    - composer.controller: Visual order of the Available list
"""

from __future__ import annotations

from typing import FrozenSet, Iterable, Optional, Sequence, Tuple

from exam_assembler.core.models import Item


class ViewFilter:
    """
    Display filter for the Available list.

    Choosing a category clears the context filter. Tag selection survives
    category changes.

    Attributes:
        category_id: Displayed category, None before the first choice
        context_id: Only items with this context are shown, if set
        tag_ids: If non-empty, only items carrying one of these tags
    """

    def __init__(self) -> None:
        self.category_id: Optional[int] = None
        self.context_id: Optional[int] = None
        self.tag_ids: FrozenSet[int] = frozenset()

    def select_category(self, category_id: int) -> None:
        self.category_id = category_id
        self.context_id = None

    def set_context(self, context_id: Optional[int]) -> None:
        self.context_id = context_id

    def clear_context(self) -> None:
        self.context_id = None

    def set_tags(self, tag_ids: Iterable[int]) -> None:
        self.tag_ids = frozenset(tag_ids)

    def visible(self, bucket: Sequence[Item]) -> Tuple[Item, ...]:
        """Items of ``bucket`` that pass the context and tag filters."""
        shown = []
        for item in bucket:
            if self.context_id is not None and item.context_id != self.context_id:
                continue
            if self.tag_ids and not item.has_any_tag(self.tag_ids):
                continue
            shown.append(item)
        return tuple(shown)
