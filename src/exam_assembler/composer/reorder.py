"""
Module: composer.reorder

Purpose:
    Reposition one item within the Chosen pool in response to a drop, and
    model the drag gesture as discrete events of which only the drop
    touches the pool.

Key Functions:
    - reposition_sequence(): Pure remove-then-insert on a sequence

Key Classes:
    - ReorderEngine: Applies repositions to the Chosen pool
    - DragSession: start / over / enter / leave / drop
    - ReorderError: Drop that cannot be resolved (contract violation)

Dependencies:
    - enum (std)
    - logging (std)
    - composer.pools: PoolManager

Used By:
    - composer.controller: Drag events from the render surface

Design Note:
    A drop reports the item that currently follows the drop point, or
    END_OF_LIST. The moved item ends up immediately ahead of that item.
    Removing the moved item first shifts every later index down by one,
    so a target that sat after the source is found one slot earlier once
    the source is gone. Getting that offset wrong is the classic
    off-by-one of this operation.
"""

from __future__ import annotations

import logging
from enum import Enum
from typing import Any, List, Optional, Sequence, TypeVar, Union

from .pools import PoolManager

logger = logging.getLogger(__name__)

T = TypeVar("T")


class ReorderError(Exception):
    """Drop refers to an item that is not in the Chosen pool."""
    pass


class _EndOfList(Enum):
    END_OF_LIST = "end-of-list"

    def __repr__(self) -> str:
        return "END_OF_LIST"


END_OF_LIST = _EndOfList.END_OF_LIST

TargetRef = Union[int, _EndOfList]


def _index_of(ids: Sequence[int], item_id: int, role: str) -> int:
    try:
        return list(ids).index(item_id)
    except ValueError:
        raise ReorderError(f"{role} question {item_id} is not in the test") from None


def reposition_sequence(
    sequence: Sequence[T],
    moved_id: int,
    target_ref: TargetRef,
    key=lambda element: element,
) -> List[T]:
    """
    Return a copy of ``sequence`` with ``moved_id`` moved ahead of
    ``target_ref`` (or to the end for END_OF_LIST).

    Args:
        sequence: Elements in current order
        moved_id: Id of the element being moved
        target_ref: Id of the element following the drop point, or END_OF_LIST
        key: Maps an element to its id

    Returns:
        New list; the input is not modified

    Raises:
        ReorderError: If ``moved_id`` or ``target_ref`` is not in the sequence

    Example:
        >>> reposition_sequence([1, 5, 9, 12], 1, 9)
        [5, 1, 9, 12]
        >>> reposition_sequence([1, 5, 9, 12], 12, END_OF_LIST)
        [1, 5, 9, 12]
    """
    result = list(sequence)
    ids = [key(element) for element in result]
    source_index = _index_of(ids, moved_id, "Moved")

    if target_ref is END_OF_LIST:
        moved = result.pop(source_index)
        result.append(moved)
        return result

    target_index = _index_of(ids, target_ref, "Target")
    if target_index == source_index:
        return result

    moved = result.pop(source_index)
    if target_index > source_index:
        # target slid down one slot when the source was removed
        destination = target_index - 1
    else:
        destination = target_index
    result.insert(destination, moved)
    return result


class ReorderEngine:
    """
    Repositions items within the Chosen pool.

    Example:
        >>> engine = ReorderEngine(pools)
        >>> engine.reposition(1, 9)      # Chosen was [1, 5, 9, 12]
        True
        >>> pools.chosen_ids()
        (5, 1, 9, 12)
    """

    def __init__(self, pools: PoolManager):
        self.pools = pools

    def reposition(self, moved_id: int, target_ref: TargetRef) -> bool:
        """
        Move ``moved_id`` so it sits immediately ahead of ``target_ref``.

        Dropping an item on itself, or ahead of its own successor, leaves
        Chosen unchanged.

        Returns:
            True if the Chosen order changed

        Raises:
            ReorderError: If either id is not a Chosen member
        """
        before = self.pools.chosen
        after = reposition_sequence(before, moved_id, target_ref, key=lambda item: item.id)
        if list(before) == after:
            logger.debug(f"Reposition of {moved_id} before {target_ref!r}: no change")
            return False

        self.pools.reorder_chosen(after)
        logger.debug(
            f"Repositioned {moved_id} before {target_ref!r}: "
            f"{[item.id for item in after]}"
        )
        return True


class DragSession:
    """
    One drag gesture over the Chosen list.

    Only ``drop`` mutates the pool. ``over``, ``enter`` and ``leave`` only
    update ``hover_ref``, which a render surface may use for visual
    feedback.

    Attributes:
        dragging: Id of the item being dragged, None when idle
        hover_ref: Element the pointer is currently over, if any
    """

    def __init__(self, engine: ReorderEngine):
        self.engine = engine
        self.dragging: Optional[int] = None
        self.hover_ref: Optional[Any] = None

    @property
    def active(self) -> bool:
        return self.dragging is not None

    def start(self, item_id: int) -> None:
        if item_id not in self.engine.pools.chosen_ids():
            raise ReorderError(f"Cannot drag question {item_id}: it is not in the test")
        self.dragging = item_id
        self.hover_ref = None
        logger.debug(f"Drag started on {item_id}")

    def over(self) -> bool:
        """Pointer moves over the list. Returns whether a drop is accepted here."""
        return self.active

    def enter(self, ref: Any) -> None:
        if self.active:
            self.hover_ref = ref

    def leave(self, ref: Any) -> None:
        if self.active and self.hover_ref == ref:
            self.hover_ref = None

    def drop(self, target_ref: TargetRef) -> bool:
        """
        Finish the drag by repositioning the dragged item.

        Returns:
            True if the Chosen order changed

        Raises:
            ReorderError: If no drag is in progress or the ids don't resolve
        """
        if self.dragging is None:
            raise ReorderError("Drop without a drag in progress")
        moved_id = self.dragging
        try:
            return self.engine.reposition(moved_id, target_ref)
        finally:
            self.cancel()

    def cancel(self) -> None:
        """Abandon the drag without touching the pool."""
        self.dragging = None
        self.hover_ref = None
