"""
Module: composer.pool_name

Purpose:
    Enum naming the two pools every item is partitioned into.

Key Classes:
    - PoolName: AVAILABLE or CHOSEN

Used By:
    - composer.selection: Mark sets and anchor are scoped per pool
    - composer.pools: PoolManager.pool_of
    - composer.controller: Gesture routing
"""

from enum import Enum


class PoolName(Enum):
    """
    The two pools of the composer.

    Attributes:
        AVAILABLE: Questions not yet in the test, shown by category
        CHOSEN: Questions in the test, in test order

    Example:
        >>> PoolName.AVAILABLE.other is PoolName.CHOSEN
        True
    """

    AVAILABLE = "available"
    CHOSEN = "chosen"

    @property
    def other(self) -> "PoolName":
        """The opposite pool."""
        return PoolName.CHOSEN if self is PoolName.AVAILABLE else PoolName.AVAILABLE
