"""
Module: composer

Purpose:
    Dual-pool selection, transfer and reorder engine for assembling a test
    from a question pool.

Key Classes:
    - ComposerController: Owning controller, entry point for gestures
    - CategoryIndex: Category buckets of the Available pool
    - SelectionModel: Marks and anchor
    - PoolManager: Available/Chosen pools and transfers
    - ReorderEngine / DragSession: Drag reordering of Chosen

Dependencies:
    - exam_assembler.core.models: Item, Catalog

Used By:
    - exam_assembler.gui: PySide6 front end
"""

from .categories import CategoryIndex, UnknownCategoryError, count_by_category
from .config import ComposerConfig
from .controller import ComposerController, ComposerError
from .filters import ViewFilter
from .info import InfoPanel, InfoRequest
from .pool_name import PoolName
from .pools import PoolError, PoolManager
from .reorder import (
    END_OF_LIST,
    DragSession,
    ReorderEngine,
    ReorderError,
    TargetRef,
    reposition_sequence,
)
from .selection import (
    ALT_CLICK,
    PLAIN_CLICK,
    SHIFT_CLICK,
    Anchor,
    ClickModifiers,
    MarkResult,
    SelectionModel,
)
from .surfaces import (
    INFO_PANEL_ID,
    DataSource,
    RenderSurface,
    SaveSurface,
    element_id,
    parse_element_id,
)

__all__ = [
    "ALT_CLICK",
    "END_OF_LIST",
    "INFO_PANEL_ID",
    "PLAIN_CLICK",
    "SHIFT_CLICK",
    "Anchor",
    "CategoryIndex",
    "ClickModifiers",
    "ComposerConfig",
    "ComposerController",
    "ComposerError",
    "DataSource",
    "DragSession",
    "InfoPanel",
    "InfoRequest",
    "MarkResult",
    "PoolError",
    "PoolManager",
    "PoolName",
    "RenderSurface",
    "ReorderEngine",
    "ReorderError",
    "SaveSurface",
    "SelectionModel",
    "TargetRef",
    "UnknownCategoryError",
    "ViewFilter",
    "count_by_category",
    "element_id",
    "parse_element_id",
    "reposition_sequence",
]
