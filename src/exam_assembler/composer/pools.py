"""
Module: composer.pools

Purpose:
    Own the two ordered pools (Available and Chosen) and move marked items
    between them while preserving relative order.

Key Classes:
    - PoolManager: The pools, transfers and the partition invariant
    - PoolError: Pool contents would stop partitioning the item universe

Dependencies:
    - logging (std)
    - composer.categories: CategoryIndex, sort_by_id
    - composer.selection: SelectionModel

Used By:
    - composer.reorder.ReorderEngine: Writes the new Chosen order
    - composer.controller: Transfer buttons

Design Note:
    Transfers are two-phase: scan the whole source pool and collect the
    matches first, then rebuild the source without them. Removing matches
    while scanning forward skips every item that follows a removed one,
    so three contiguous marked items would only move two.
"""

from __future__ import annotations

import logging
from typing import FrozenSet, Iterable, List, Optional, Sequence, Tuple

from exam_assembler.core.models import Item

from .categories import CategoryIndex, sort_by_id
from .pool_name import PoolName
from .selection import SelectionModel

logger = logging.getLogger(__name__)


class PoolError(Exception):
    """Requested pool change would break the partition of the item universe."""
    pass


def _partition(
    items: Sequence[Item],
    marked_ids: FrozenSet[int],
) -> Tuple[List[Item], List[Item]]:
    """
    Split ``items`` into (marked, unmarked), each in original relative order.

    Collects over the full sequence before anything is removed.
    """
    marked: List[Item] = []
    unmarked: List[Item] = []
    for item in items:
        (marked if item.id in marked_ids else unmarked).append(item)
    return marked, unmarked


class PoolManager:
    """
    The Available and Chosen pools.

    Every item belongs to exactly one pool at any time. Available is kept
    in ascending id order; Chosen is kept in test order.

    Attributes:
        selection: Mark state read (and cleared) by transfers
        index: Category buckets, recomputed as the last step of every
            Available mutation

    Example:
        >>> pools = PoolManager(items, SelectionModel(), CategoryIndex((1,)))
        >>> _ = pools.selection.mark(PoolName.AVAILABLE, 2)
        >>> pools.transfer_to_chosen()
        (Item(2, category=1),)
    """

    def __init__(
        self,
        items: Iterable[Item],
        selection: SelectionModel,
        index: CategoryIndex,
    ):
        self.selection = selection
        self.index = index
        self._available: List[Item] = sort_by_id(items)
        self._chosen: List[Item] = []
        self._universe: FrozenSet[int] = frozenset(item.id for item in self._available)
        if len(self._universe) != len(self._available):
            raise PoolError("Duplicate item ids in pool universe")
        self._recompute()

    # ─────────────────────────────────────────────────────────────────────────
    # Queries
    # ─────────────────────────────────────────────────────────────────────────

    @property
    def available(self) -> Tuple[Item, ...]:
        return tuple(self._available)

    @property
    def chosen(self) -> Tuple[Item, ...]:
        return tuple(self._chosen)

    @property
    def universe(self) -> FrozenSet[int]:
        """Ids of every item managed by the pools."""
        return self._universe

    def items(self, pool: PoolName) -> Tuple[Item, ...]:
        return self.available if pool is PoolName.AVAILABLE else self.chosen

    def chosen_ids(self) -> Tuple[int, ...]:
        """Chosen item ids in test order (what gets saved)."""
        return tuple(item.id for item in self._chosen)

    def pool_of(self, item_id: int) -> Optional[PoolName]:
        """Pool currently holding ``item_id``, or None if unknown."""
        if item_id not in self._universe:
            return None
        if any(item.id == item_id for item in self._chosen):
            return PoolName.CHOSEN
        return PoolName.AVAILABLE

    # ─────────────────────────────────────────────────────────────────────────
    # Transfers
    # ─────────────────────────────────────────────────────────────────────────

    def transfer_to_chosen(self) -> Tuple[Item, ...]:
        """
        Move the marked Available items to the end of Chosen.

        The moved items keep their Available order (ascending id), not the
        order they were clicked in. Available marks are cleared afterwards.

        Returns:
            The moved items, in the order they were appended. Empty if
            nothing was marked.
        """
        marked_ids = self.selection.marked(PoolName.AVAILABLE)
        if not marked_ids:
            logger.debug("Transfer to chosen: nothing marked")
            return ()

        moved, kept = _partition(self._available, marked_ids)
        self._available = kept
        self._chosen.extend(moved)
        self.selection.clear(PoolName.AVAILABLE)
        self._recompute()

        logger.info(
            f"Moved {len(moved)} question(s) to the test: {[item.id for item in moved]}"
        )
        return tuple(moved)

    def transfer_to_available(self) -> Tuple[Item, ...]:
        """
        Move the marked Chosen items back to Available.

        Returned items land at their ascending-id position, not at the end:
        the recompute re-sorts Available. Chosen marks are cleared afterwards.

        Returns:
            The moved items, in their former Chosen order. Empty if nothing
            was marked.
        """
        marked_ids = self.selection.marked(PoolName.CHOSEN)
        if not marked_ids:
            logger.debug("Transfer to available: nothing marked")
            return ()

        moved, kept = _partition(self._chosen, marked_ids)
        self._chosen = kept
        self._available.extend(moved)
        self.selection.clear(PoolName.CHOSEN)
        self._recompute()

        logger.info(
            f"Returned {len(moved)} question(s) to the pool: {[item.id for item in moved]}"
        )
        return tuple(moved)

    def reorder_chosen(self, new_order: Sequence[Item]) -> None:
        """
        Replace Chosen with a permutation of itself.

        Raises:
            PoolError: If ``new_order`` is not a permutation of Chosen
        """
        current = sorted(item.id for item in self._chosen)
        proposed = sorted(item.id for item in new_order)
        if current != proposed:
            raise PoolError(
                f"New chosen order is not a permutation of the current one: "
                f"{proposed} vs {current}"
            )
        self._chosen = list(new_order)

    def reset(self) -> None:
        """Return every chosen item to Available and clear all marks."""
        self._available.extend(self._chosen)
        self._chosen = []
        for pool in PoolName:
            self.selection.clear(pool)
        self._recompute()
        logger.info("Test cleared, all questions returned to the pool")

    # ─────────────────────────────────────────────────────────────────────────
    # Internals
    # ─────────────────────────────────────────────────────────────────────────

    def _recompute(self) -> None:
        self._available = sort_by_id(self._available)
        self.index.recompute(self._available)
