"""
Module: composer.controller

Purpose:
    The single owner of all composer state. Routes gestures reported by a
    render surface to the engine components and pushes the resulting
    state back to the surface.

    Click → SelectionModel | InfoPanel
    Transfer button → PoolManager → CategoryIndex
    Drag events → DragSession → ReorderEngine
    Save → SaveSurface

Key Classes:
    - ComposerController: Owning controller
    - ComposerError: Gesture that refers to an unknown item or category

Dependencies:
    - logging (std)
    - composer.*: Engine components
    - exam_assembler.core.models: Catalog

Used By:
    - gui.widgets.composer_panel
    - gui.main_window
"""

from __future__ import annotations

import logging
from typing import Dict, Iterable, Optional, Sequence, Tuple

from exam_assembler.core.models import Catalog, Item

from .categories import CategoryIndex, count_by_category
from .config import ComposerConfig
from .filters import ViewFilter
from .info import InfoPanel, InfoRequest
from .pool_name import PoolName
from .pools import PoolManager
from .reorder import DragSession, ReorderEngine, TargetRef
from .selection import PLAIN_CLICK, ClickModifiers, MarkResult, SelectionModel
from .surfaces import RenderSurface, SaveSurface, element_id

logger = logging.getLogger(__name__)


class ComposerError(Exception):
    """Gesture refers to something the composer does not hold."""
    pass


class ComposerController:
    """
    Owns the pools, marks, anchor, drag state, info panel and view filter.

    Constructed once per loaded catalog. All mutation goes through its
    methods; every method runs to completion before the next gesture.

    Attributes:
        catalog: Loaded items and reference data
        config: Composer configuration
        index: Category buckets of Available
        selection: Marks and anchor
        pools: Available and Chosen
        reorder: Drop handling for Chosen
        drag: Current drag gesture
        info: Info panel state
        view: Category, context and tag filter of the Available list
        surface: Attached render surface, if any

    Raises:
        UnknownCategoryError: On construction, if an item's category is not
            in ``config.known_categories``

    Example:
        >>> controller = ComposerController(catalog)
        >>> controller.select_category(1)
        >>> _ = controller.click(PoolName.AVAILABLE, 2)
        >>> _ = controller.transfer_to_chosen()
        >>> controller.chosen_ids()
        (2,)
    """

    def __init__(
        self,
        catalog: Catalog,
        config: Optional[ComposerConfig] = None,
        surface: Optional[RenderSurface] = None,
    ):
        self.catalog = catalog
        self.config = config or ComposerConfig()
        self.index = CategoryIndex(self.config.known_categories)
        self.selection = SelectionModel()
        self.pools = PoolManager(catalog.items, self.selection, self.index)
        self.reorder = ReorderEngine(self.pools)
        self.drag = DragSession(self.reorder)
        self.info = InfoPanel(self.config.item_kind)
        self.view = ViewFilter()
        self.surface: Optional[RenderSurface] = None

        logger.info(
            f"Composer ready with {len(catalog.items)} questions in "
            f"{len(self.config.known_categories)} categories"
        )
        if surface is not None:
            self.attach(surface)

    # ─────────────────────────────────────────────────────────────────────────
    # Surface
    # ─────────────────────────────────────────────────────────────────────────

    def attach(self, surface: RenderSurface) -> None:
        """Attach a render surface and push the full state to it."""
        self.surface = surface
        self.refresh()

    def refresh(self) -> None:
        """Push everything to the attached surface."""
        self._show_available()
        self._show_chosen()
        self._show_counts()
        if self.surface is not None:
            if self.info.current is not None:
                self.surface.show_info(self.info.current)
            else:
                self.surface.hide_info()

    def _show_available(self) -> None:
        if self.surface is None:
            return
        self.surface.show_available(self.displayed_available())
        self.surface.show_marks(PoolName.AVAILABLE, self.selection.marked(PoolName.AVAILABLE))

    def _show_chosen(self) -> None:
        if self.surface is None:
            return
        self.surface.show_chosen(self.pools.chosen)
        self.surface.show_marks(PoolName.CHOSEN, self.selection.marked(PoolName.CHOSEN))

    def _show_counts(self) -> None:
        if self.surface is None:
            return
        self.surface.show_counts(self.chosen_counts(), len(self.pools.chosen))

    def _close_info(self) -> None:
        if self.info.close() and self.surface is not None:
            self.surface.hide_info()

    # ─────────────────────────────────────────────────────────────────────────
    # Queries
    # ─────────────────────────────────────────────────────────────────────────

    def displayed_available(self) -> Tuple[Item, ...]:
        """Available items as currently displayed (empty before a category is chosen)."""
        if self.view.category_id is None:
            return ()
        return self.view.visible(self.index.bucket(self.view.category_id))

    def visual_order(self, pool: PoolName) -> Tuple[int, ...]:
        """Ids of ``pool`` in display order, used for range marking."""
        if pool is PoolName.AVAILABLE:
            return tuple(item.id for item in self.displayed_available())
        return self.pools.chosen_ids()

    def chosen_ids(self) -> Tuple[int, ...]:
        return self.pools.chosen_ids()

    def chosen_counts(self) -> Dict[int, int]:
        """Number of chosen questions per category."""
        return count_by_category(self.pools.chosen, self.config.known_categories)

    def element_id(self, item_id: int) -> str:
        return element_id(self.config.item_kind, item_id)

    # ─────────────────────────────────────────────────────────────────────────
    # View filter
    # ─────────────────────────────────────────────────────────────────────────

    def select_category(self, category_id: int) -> None:
        """
        Display another category bucket.

        Available marks are cleared. Only displayed items carry marks.
        """
        if category_id not in self.index:
            raise ComposerError(f"Unknown category {category_id}")
        self.view.select_category(category_id)
        self.selection.clear(PoolName.AVAILABLE)
        logger.debug(f"Showing category {category_id}")
        self._show_available()

    def set_context_filter(self, context_id: int) -> None:
        self.view.set_context(context_id)
        logger.debug(f"Context filter set to {context_id}")
        self._show_available()

    def clear_context_filter(self) -> None:
        self.view.clear_context()
        self._show_available()

    def set_tag_filter(self, tag_ids: Iterable[int]) -> None:
        self.view.set_tags(tag_ids)
        logger.debug(f"Tag filter set to {sorted(self.view.tag_ids)}")
        self._show_available()

    # ─────────────────────────────────────────────────────────────────────────
    # Gestures
    # ─────────────────────────────────────────────────────────────────────────

    def click(
        self,
        pool: PoolName,
        item_id: int,
        modifiers: ClickModifiers = PLAIN_CLICK,
    ) -> MarkResult:
        """
        Handle a click on an item.

        Any open info panel is closed first, whatever the click does.

        Raises:
            ComposerError: If ``item_id`` is not in ``pool``
        """
        holder = self.pools.pool_of(item_id)
        if holder is not pool:
            raise ComposerError(
                f"Question {item_id} is not in {pool.value} "
                f"(it is in {holder.value if holder else 'no pool'})"
            )

        self._close_info()
        result = self.selection.mark(pool, item_id, modifiers, self.visual_order(pool))

        if result.is_info_request:
            item = self.catalog.get_item(item_id)
            self.info.open(InfoRequest.for_item(self.catalog, item))
            if self.surface is not None:
                self.surface.show_info(self.info.current)
        elif self.surface is not None:
            self.surface.show_marks(pool, self.selection.marked(pool))
        return result

    def outside_click(self, target_id: Optional[str]) -> bool:
        """
        Handle a click anywhere in the window.

        Returns:
            True if the info panel was closed
        """
        closed = self.info.handle_outside_click(target_id)
        if closed and self.surface is not None:
            self.surface.hide_info()
        return closed

    def transfer_to_chosen(self) -> Tuple[Item, ...]:
        """Move the marked Available questions to the end of the test."""
        moved = self.pools.transfer_to_chosen()
        if moved:
            self._reset_context_filter()
            self._show_available()
            self._show_chosen()
            self._show_counts()
        return moved

    def transfer_to_available(self) -> Tuple[Item, ...]:
        moved = self.pools.transfer_to_available()
        if moved:
            self._reset_context_filter()
            self._show_available()
            self._show_chosen()
            self._show_counts()
        return moved

    def _reset_context_filter(self) -> None:
        # A transfer rebuilds the Available list with the context filter off
        if self.view.context_id is not None:
            logger.debug(f"Context filter {self.view.context_id} cleared by transfer")
            self.view.clear_context()

    def clear_test(self) -> None:
        """Return every chosen question to the pool."""
        self.drag.cancel()
        self.pools.reset()
        self._show_available()
        self._show_chosen()
        self._show_counts()

    # Drag events: only drop mutates the pools

    def drag_start(self, item_id: int) -> None:
        self.drag.start(item_id)

    def drag_over(self) -> bool:
        return self.drag.over()

    def drag_enter(self, ref) -> None:
        self.drag.enter(ref)

    def drag_leave(self, ref) -> None:
        self.drag.leave(ref)

    def drag_drop(self, target_ref: TargetRef) -> bool:
        """
        Finish a drag over the Chosen list.

        Returns:
            True if the Chosen order changed
        """
        changed = self.drag.drop(target_ref)
        if changed:
            self._show_chosen()
        return changed

    def drag_cancel(self) -> None:
        self.drag.cancel()

    # ─────────────────────────────────────────────────────────────────────────
    # Save
    # ─────────────────────────────────────────────────────────────────────────

    def save(self, surface: SaveSurface) -> Tuple[int, ...]:
        """
        Hand the Chosen id sequence to ``surface``.

        Returns:
            The ids that were saved, in test order
        """
        ids = self.pools.chosen_ids()
        logger.info(f"Saving test with {len(ids)} question(s): {list(ids)}")
        surface.save(ids)
        return ids

    def restore(self, chosen_ids: Sequence[int]) -> None:
        """
        Rebuild Chosen from a saved id sequence (e.g. reopening a plan).

        Unknown ids are skipped with a warning.
        """
        self.pools.reset()
        ordered = list(dict.fromkeys(chosen_ids))
        known = [i for i in ordered if self.pools.pool_of(i) is PoolName.AVAILABLE]
        skipped = [i for i in ordered if i not in known]
        if skipped:
            logger.warning(f"Skipped unknown questions while restoring: {skipped}")

        for item_id in known:
            self.selection.mark(PoolName.AVAILABLE, item_id)
        self.pools.transfer_to_chosen()
        # transfer appends in id order; restore the saved order
        by_id = {item.id: item for item in self.pools.chosen}
        self.pools.reorder_chosen([by_id[i] for i in known])
        self.refresh()
