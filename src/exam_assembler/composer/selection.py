"""
Module: composer.selection

Purpose:
    Track which items of each pool are marked for the next action.
    Implements plain toggle, shift-range marking from an anchor, and the
    alt-click info request that never touches the marks.

Key Classes:
    - ClickModifiers: Modifier keys held during a click
    - Anchor: Most recently marked item, start point for ranges
    - MarkResult: What a click did
    - SelectionModel: Mark sets per pool plus the anchor

Dependencies:
    - dataclasses (std)
    - logging (std)
    - composer.pool_name: PoolName

Used By:
    - composer.pools.PoolManager: Reads and clears marks on transfer
    - composer.controller: Click dispatch

Design Note:
    Range marking works on an explicit visual order (a sequence of item
    ids as currently displayed) instead of walking rendered sibling
    elements, so it does not depend on any rendering technology.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Dict, FrozenSet, Optional, Sequence, Set, Tuple

from .pool_name import PoolName

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ClickModifiers:
    """
    Modifier keys held during a click.

    Alt wins over shift: an alt-click is always an info request.

    Attributes:
        shift: Range marking from the anchor
        alt: Info request, no marking
    """

    shift: bool = False
    alt: bool = False

    @property
    def is_info(self) -> bool:
        return self.alt

    @property
    def is_range(self) -> bool:
        return self.shift and not self.alt


PLAIN_CLICK = ClickModifiers()
SHIFT_CLICK = ClickModifiers(shift=True)
ALT_CLICK = ClickModifiers(alt=True)


@dataclass(frozen=True)
class Anchor:
    """Reference point for range marking: an item id in a specific pool."""

    pool: PoolName
    item_id: int


@dataclass(frozen=True)
class MarkResult:
    """
    Outcome of one click.

    Attributes:
        item_id: Clicked item
        marked: State of the clicked item afterwards (unchanged for info clicks)
        added: Items marked in addition to the clicked one by a range click
        info_item_id: Set for info clicks; the item whose details to show
        degraded: True if a range click fell back to a plain toggle
    """

    item_id: int
    marked: bool
    added: Tuple[int, ...] = field(default_factory=tuple)
    info_item_id: Optional[int] = None
    degraded: bool = False

    @property
    def is_info_request(self) -> bool:
        return self.info_item_id is not None


class SelectionModel:
    """
    Mark sets for both pools plus a single anchor.

    Marks in Available and marks in Chosen are independent. The anchor
    remembers which pool it was set in; a range click only uses it when
    the click happens in that same pool.

    The anchor is left alone by ``clear()``. A stale anchor is
    harmless: range marking against an item that is no longer in the visual
    order falls back to a plain toggle.

    Example:
        >>> model = SelectionModel()
        >>> _ = model.mark(PoolName.AVAILABLE, 3, PLAIN_CLICK, [1, 3, 5, 7, 9])
        >>> _ = model.mark(PoolName.AVAILABLE, 7, SHIFT_CLICK, [1, 3, 5, 7, 9])
        >>> sorted(model.marked(PoolName.AVAILABLE))
        [3, 5, 7]
    """

    def __init__(self) -> None:
        self._marks: Dict[PoolName, Set[int]] = {pool: set() for pool in PoolName}
        self._anchor: Optional[Anchor] = None

    # ─────────────────────────────────────────────────────────────────────────
    # Queries
    # ─────────────────────────────────────────────────────────────────────────

    @property
    def anchor(self) -> Optional[Anchor]:
        return self._anchor

    def marked(self, pool: PoolName) -> FrozenSet[int]:
        """Snapshot of the marked ids of ``pool``."""
        return frozenset(self._marks[pool])

    def is_marked(self, pool: PoolName, item_id: int) -> bool:
        return item_id in self._marks[pool]

    def anchor_for(self, pool: PoolName) -> Optional[int]:
        """Anchor item id if the anchor belongs to ``pool``, else None."""
        if self._anchor is not None and self._anchor.pool is pool:
            return self._anchor.item_id
        return None

    # ─────────────────────────────────────────────────────────────────────────
    # Mutations
    # ─────────────────────────────────────────────────────────────────────────

    def mark(
        self,
        pool: PoolName,
        item_id: int,
        modifiers: ClickModifiers = PLAIN_CLICK,
        visual_order: Sequence[int] = (),
    ) -> MarkResult:
        """
        Apply one click to the marks of ``pool``.

        Args:
            pool: Pool the clicked item is displayed in
            item_id: Clicked item
            modifiers: Modifier keys held during the click
            visual_order: Item ids of ``pool`` as currently displayed, used
                to resolve shift-ranges

        Returns:
            MarkResult describing the change
        """
        if modifiers.is_info:
            logger.debug(f"Info request for question {item_id} ({pool.value})")
            return MarkResult(
                item_id=item_id,
                marked=self.is_marked(pool, item_id),
                info_item_id=item_id,
            )

        if modifiers.is_range:
            return self._range_mark(pool, item_id, visual_order)

        return self._toggle(pool, item_id)

    def clear(self, pool: PoolName) -> None:
        """Unmark everything in ``pool``. The anchor is left as it is."""
        if self._marks[pool]:
            logger.debug(f"Clearing {len(self._marks[pool])} marks in {pool.value}")
        self._marks[pool].clear()

    # ─────────────────────────────────────────────────────────────────────────
    # Internals
    # ─────────────────────────────────────────────────────────────────────────

    def _flip(self, pool: PoolName, item_id: int) -> bool:
        marks = self._marks[pool]
        if item_id in marks:
            marks.discard(item_id)
            return False
        marks.add(item_id)
        return True

    def _toggle(self, pool: PoolName, item_id: int, *, degraded: bool = False) -> MarkResult:
        now_marked = self._flip(pool, item_id)
        if now_marked:
            self._anchor = Anchor(pool, item_id)
        logger.debug(
            f"Question {item_id} {'marked' if now_marked else 'unmarked'} in {pool.value}"
        )
        return MarkResult(item_id=item_id, marked=now_marked, degraded=degraded)

    def _range_mark(
        self,
        pool: PoolName,
        item_id: int,
        visual_order: Sequence[int],
    ) -> MarkResult:
        anchor_id = self.anchor_for(pool)
        if anchor_id is None:
            if self._anchor is not None:
                logger.debug(
                    f"Range click in {pool.value} ignored: anchor "
                    f"{self._anchor.item_id} is in {self._anchor.pool.value}"
                )
            return self._toggle(pool, item_id, degraded=True)

        if anchor_id == item_id:
            now_marked = self._flip(pool, item_id)
            return MarkResult(item_id=item_id, marked=now_marked)

        order = list(visual_order)
        if anchor_id not in order or item_id not in order:
            logger.debug(
                f"Range click in {pool.value} ignored: anchor {anchor_id} "
                f"or question {item_id} not displayed"
            )
            return self._toggle(pool, item_id, degraded=True)

        anchor_pos = order.index(anchor_id)
        clicked_pos = order.index(item_id)
        low, high = sorted((anchor_pos, clicked_pos))
        between = order[low + 1:high]

        now_marked = self._flip(pool, item_id)
        marks = self._marks[pool]
        added = tuple(i for i in between if i not in marks)
        marks.update(between)
        if now_marked:
            self._anchor = Anchor(pool, item_id)

        logger.debug(
            f"Range {anchor_id}..{item_id} in {pool.value}: "
            f"added {list(added)}, clicked {'marked' if now_marked else 'unmarked'}"
        )
        return MarkResult(item_id=item_id, marked=now_marked, added=added)
