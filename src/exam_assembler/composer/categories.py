"""
Module: composer.categories

Purpose:
    Partition the Available pool into fixed category buckets, each sorted
    by ascending item id.

Key Classes:
    - CategoryIndex: Pull-based bucket view over Available
    - UnknownCategoryError: Item with a category that has no bucket

Key Functions:
    - count_by_category(): Per-category totals for any item sequence

Dependencies:
    - logging (std)
    - exam_assembler.core.models: Item

Used By:
    - composer.pools.PoolManager: Recompute after every transfer
    - composer.controller: Category dropdown and summary counts
"""

from __future__ import annotations

import logging
from typing import Dict, Iterable, Optional, Sequence, Tuple

from exam_assembler.core.models import Item

logger = logging.getLogger(__name__)


class UnknownCategoryError(Exception):
    """Item refers to a category that is not in the known set."""

    def __init__(self, category_id: int, item_id: Optional[int] = None):
        if item_id is None:
            message = f"Unknown category {category_id}"
        else:
            message = f"Question {item_id} has unknown category {category_id}"
        super().__init__(message)
        self.item_id = item_id
        self.category_id = category_id


def sort_by_id(items: Iterable[Item]) -> list[Item]:
    """Ascending-id order, the natural order of the Available pool."""
    return sorted(items, key=lambda item: item.id)


def count_by_category(
    items: Iterable[Item],
    known_categories: Sequence[int],
) -> Dict[int, int]:
    """
    Count items per known category.

    Categories without items report 0. Unknown categories raise, the same
    as in recompute.
    """
    counts = {category_id: 0 for category_id in known_categories}
    for item in items:
        if item.category_id not in counts:
            raise UnknownCategoryError(item.category_id, item_id=item.id)
        counts[item.category_id] += 1
    return counts


class CategoryIndex:
    """
    Category buckets over the Available pool.

    Recompute is pull-based: call it after every Available mutation. It
    does not track deltas, it rebuilds every bucket from scratch.

    Example:
        >>> index = CategoryIndex((1, 2))
        >>> buckets = index.recompute(items)
        >>> [item.id for item in buckets[1]]
        [1, 4, 9]
    """

    def __init__(self, known_categories: Sequence[int]):
        self.known_categories: Tuple[int, ...] = tuple(known_categories)
        self._buckets: Dict[int, Tuple[Item, ...]] = {
            category_id: () for category_id in self.known_categories
        }

    def recompute(self, available_items: Iterable[Item]) -> Dict[int, Tuple[Item, ...]]:
        """
        Sort ``available_items`` by id, then group into one bucket per
        known category.

        Every known category gets a bucket, empty or not.

        Raises:
            UnknownCategoryError: If an item's category has no bucket. The
                previous buckets are kept in that case.
        """
        grouped: Dict[int, list[Item]] = {
            category_id: [] for category_id in self.known_categories
        }
        for item in sort_by_id(available_items):
            bucket = grouped.get(item.category_id)
            if bucket is None:
                logger.error(
                    f"Question {item.id} has category {item.category_id}, "
                    f"known categories are {list(self.known_categories)}"
                )
                raise UnknownCategoryError(item.category_id, item_id=item.id)
            bucket.append(item)

        self._buckets = {key: tuple(value) for key, value in grouped.items()}
        logger.debug(
            "Recomputed category buckets: "
            + ", ".join(f"{key}={len(value)}" for key, value in self._buckets.items())
        )
        return dict(self._buckets)

    def bucket(self, category_id: int) -> Tuple[Item, ...]:
        """Items of one category from the last recompute."""
        if category_id not in self._buckets:
            raise UnknownCategoryError(category_id)
        return self._buckets[category_id]

    def counts(self) -> Dict[int, int]:
        """Bucket sizes from the last recompute."""
        return {key: len(value) for key, value in self._buckets.items()}

    def __contains__(self, category_id: object) -> bool:
        return category_id in self._buckets
