"""
Composer panel: the Qt render surface of the composer.

Layout:
    [category ▾] [context ▾]                          tags
    Available list   [Hinzufügen →] [← Entfernen]   Chosen list
    counts per category                   [Test leeren] [Test speichern]
    info popup (hidden until requested)

The panel never changes composer state itself. Gestures go to the
ComposerController, which pushes the new state back through the
show_* / hide_info methods.
"""
import logging
from typing import Dict, Iterable, List, Optional, Sequence

from PySide6.QtCore import QEvent, QObject, Qt, Signal
from PySide6.QtWidgets import (
    QApplication,
    QComboBox,
    QHBoxLayout,
    QLabel,
    QListWidget,
    QListWidgetItem,
    QPushButton,
    QVBoxLayout,
    QWidget,
)

from exam_assembler.composer import (
    INFO_PANEL_ID,
    ClickModifiers,
    ComposerController,
    ComposerError,
    InfoRequest,
    PoolName,
    ReorderError,
    TargetRef,
)
from exam_assembler.core.models import Item
from exam_assembler.gui.widgets.info_popup import InfoPopup
from exam_assembler.gui.widgets.pool_list import PoolListWidget

logger = logging.getLogger(__name__)

ALL_CONTEXTS = "Alle Kontexte"


class ComposerPanel(QWidget):
    """Two pool lists with filters, transfer buttons and counters."""

    categoryChanged = Signal(int)
    saveRequested = Signal()

    def __init__(self, parent=None):
        super().__init__(parent)
        self.controller: Optional[ComposerController] = None
        self._updating = False
        self._hover_ref = None

        root = QVBoxLayout(self)

        # Filters
        filter_row = QHBoxLayout()
        self.category_combo = QComboBox()
        self.category_combo.setObjectName("categoryCombo")
        self.context_combo = QComboBox()
        self.context_combo.setObjectName("contextCombo")
        filter_row.addWidget(QLabel("Kategorie:"))
        filter_row.addWidget(self.category_combo)
        filter_row.addWidget(QLabel("Kontext:"))
        filter_row.addWidget(self.context_combo, 1)
        root.addLayout(filter_row)

        # Pools
        pools_row = QHBoxLayout()
        available_col = QVBoxLayout()
        available_col.addWidget(QLabel("Fragenpool"))
        self.available_list = PoolListWidget(PoolName.AVAILABLE)
        available_col.addWidget(self.available_list, 1)
        self.tag_list = QListWidget()
        self.tag_list.setObjectName("tagList")
        self.tag_list.setMaximumHeight(110)
        available_col.addWidget(QLabel("Tags:"))
        available_col.addWidget(self.tag_list)
        pools_row.addLayout(available_col, 1)

        buttons_col = QVBoxLayout()
        buttons_col.addStretch(1)
        self.add_btn = QPushButton("Hinzufügen →")
        self.remove_btn = QPushButton("← Entfernen")
        buttons_col.addWidget(self.add_btn)
        buttons_col.addWidget(self.remove_btn)
        buttons_col.addStretch(1)
        pools_row.addLayout(buttons_col)

        chosen_col = QVBoxLayout()
        chosen_col.addWidget(QLabel("Test"))
        self.chosen_list = PoolListWidget(PoolName.CHOSEN, reorderable=True)
        chosen_col.addWidget(self.chosen_list, 1)
        pools_row.addLayout(chosen_col, 1)
        root.addLayout(pools_row, 1)

        # Counters and actions
        bottom_row = QHBoxLayout()
        self.counts_layout = QHBoxLayout()
        self.count_labels: Dict[int, QLabel] = {}
        self.total_label = QLabel("Gesamt: 0")
        bottom_row.addLayout(self.counts_layout)
        bottom_row.addWidget(self.total_label)
        bottom_row.addStretch(1)
        self.clear_btn = QPushButton("Test leeren")
        self.save_btn = QPushButton("Test speichern")
        bottom_row.addWidget(self.clear_btn)
        bottom_row.addWidget(self.save_btn)
        root.addLayout(bottom_row)

        self.info_popup = InfoPopup(self)
        root.addWidget(self.info_popup)

        # Wiring
        self.category_combo.currentIndexChanged.connect(self._on_category_changed)
        self.context_combo.currentIndexChanged.connect(self._on_context_changed)
        self.tag_list.itemChanged.connect(self._on_tags_changed)
        self.available_list.questionClicked.connect(
            lambda item_id, mods: self._on_click(PoolName.AVAILABLE, item_id, mods)
        )
        self.chosen_list.questionClicked.connect(
            lambda item_id, mods: self._on_click(PoolName.CHOSEN, item_id, mods)
        )
        self.chosen_list.dragStarted.connect(self._on_drag_started)
        self.chosen_list.dragHovered.connect(self._on_drag_hovered)
        self.chosen_list.dropRequested.connect(self._on_drop)
        self.chosen_list.dragAborted.connect(self._on_drag_aborted)
        self.add_btn.clicked.connect(self._on_add)
        self.remove_btn.clicked.connect(self._on_remove)
        self.clear_btn.clicked.connect(self._on_clear)
        self.save_btn.clicked.connect(self.saveRequested.emit)

        app = QApplication.instance()
        if app is not None:
            app.installEventFilter(self)

        self._set_enabled(False)

    # ─────────────────────────────────────────────────────────────────────────
    # Controller
    # ─────────────────────────────────────────────────────────────────────────

    def set_controller(self, controller: ComposerController, category_id: Optional[int] = None) -> None:
        """Show a freshly loaded catalog, optionally starting on ``category_id``."""
        self.controller = controller
        catalog = controller.catalog
        names = {category.id: category.name for category in catalog.categories}

        self._updating = True
        self.category_combo.clear()
        for cid in controller.config.known_categories:
            self.category_combo.addItem(names.get(cid, f"Kategorie {cid}"), cid)

        self.context_combo.clear()
        self.context_combo.addItem(ALL_CONTEXTS, None)
        for context in catalog.contexts:
            self.context_combo.addItem(context.source, context.id)

        self.tag_list.clear()
        for tag in catalog.tags:
            row = QListWidgetItem(tag.name)
            row.setFlags(Qt.ItemFlag.ItemIsUserCheckable | Qt.ItemFlag.ItemIsEnabled)
            row.setCheckState(Qt.CheckState.Unchecked)
            row.setData(Qt.ItemDataRole.UserRole, tag.id)
            self.tag_list.addItem(row)

        self._build_count_labels(controller.config.known_categories, names)
        self._updating = False

        controller.attach(self)
        self._set_enabled(True)

        start = category_id if category_id in controller.index else controller.config.known_categories[0]
        index = self.category_combo.findData(start)
        if index == self.category_combo.currentIndex():
            self._on_category_changed(index)
        else:
            self.category_combo.setCurrentIndex(index)

    def _build_count_labels(self, categories: Sequence[int], names: Dict[int, str]) -> None:
        for label in self.count_labels.values():
            self.counts_layout.removeWidget(label)
            label.deleteLater()
        self.count_labels = {}
        for cid in categories:
            label = QLabel(f"{names.get(cid, cid)}: 0")
            self.count_labels[cid] = label
            self.counts_layout.addWidget(label)

    def _set_enabled(self, enabled: bool) -> None:
        for widget in (
            self.category_combo,
            self.context_combo,
            self.tag_list,
            self.clear_btn,
            self.save_btn,
        ):
            widget.setEnabled(enabled)
        self._update_transfer_buttons()

    def _update_transfer_buttons(self) -> None:
        """Transfer buttons are only enabled while their list has marked rows."""
        loaded = self.controller is not None
        self.add_btn.setEnabled(loaded and bool(self.available_list.marked_ids()))
        self.remove_btn.setEnabled(loaded and bool(self.chosen_list.marked_ids()))

    def _sync_context_combo(self) -> None:
        if self.controller is None:
            return
        context_id = self.controller.view.context_id
        index = 0 if context_id is None else max(self.context_combo.findData(context_id), 0)
        if index != self.context_combo.currentIndex():
            self._updating = True
            self.context_combo.setCurrentIndex(index)
            self._updating = False

    def selected_tag_ids(self) -> List[int]:
        return [
            self.tag_list.item(row).data(Qt.ItemDataRole.UserRole)
            for row in range(self.tag_list.count())
            if self.tag_list.item(row).checkState() == Qt.CheckState.Checked
        ]

    def list_for(self, pool: PoolName) -> PoolListWidget:
        return self.available_list if pool is PoolName.AVAILABLE else self.chosen_list

    # ─────────────────────────────────────────────────────────────────────────
    # RenderSurface
    # ─────────────────────────────────────────────────────────────────────────

    def show_available(self, items: Sequence[Item]) -> None:
        self.available_list.set_items(items)
        self._sync_context_combo()

    def show_chosen(self, items: Sequence[Item]) -> None:
        self.chosen_list.set_items(items)

    def show_marks(self, pool: PoolName, item_ids: Iterable[int]) -> None:
        self.list_for(pool).set_marks(item_ids)
        self._update_transfer_buttons()

    def show_counts(self, counts: Dict[int, int], total: int) -> None:
        names = {}
        if self.controller is not None:
            names = {category.id: category.name for category in self.controller.catalog.categories}
        for cid, label in self.count_labels.items():
            label.setText(f"{names.get(cid, cid)}: {counts.get(cid, 0)}")
        self.total_label.setText(f"Gesamt: {total}")

    def show_info(self, request: InfoRequest) -> None:
        self.info_popup.show_request(request)

    def hide_info(self) -> None:
        self.info_popup.dismiss()

    # ─────────────────────────────────────────────────────────────────────────
    # Gestures
    # ─────────────────────────────────────────────────────────────────────────

    def _on_category_changed(self, index: int) -> None:
        if self._updating or self.controller is None or index < 0:
            return
        category_id = self.category_combo.itemData(index)
        try:
            self.controller.select_category(category_id)
        except ComposerError as e:
            logger.error(str(e))
            return

        # Choosing a category clears the context filter
        self._updating = True
        self.context_combo.setCurrentIndex(0)
        self._updating = False
        self.categoryChanged.emit(category_id)

    def _on_context_changed(self, index: int) -> None:
        if self._updating or self.controller is None or index < 0:
            return
        context_id = self.context_combo.itemData(index)
        if context_id is None:
            self.controller.clear_context_filter()
        else:
            self.controller.set_context_filter(context_id)

    def _on_tags_changed(self, _item: QListWidgetItem) -> None:
        if self._updating or self.controller is None:
            return
        self.controller.set_tag_filter(self.selected_tag_ids())

    def _on_click(self, pool: PoolName, item_id: int, modifiers: ClickModifiers) -> None:
        if self.controller is None:
            return
        try:
            self.controller.click(pool, item_id, modifiers)
        except ComposerError as e:
            logger.warning(str(e))

    def _on_add(self) -> None:
        if self.controller is not None:
            self.controller.transfer_to_chosen()

    def _on_remove(self) -> None:
        if self.controller is not None:
            self.controller.transfer_to_available()

    def _on_clear(self) -> None:
        if self.controller is not None:
            self.controller.clear_test()

    def _on_drag_started(self, item_id: int) -> None:
        if self.controller is None:
            return
        try:
            self.controller.drag_start(item_id)
        except ReorderError as e:
            logger.warning(str(e))

    def _on_drag_hovered(self, ref) -> None:
        if self.controller is None:
            return
        if self._hover_ref is not None:
            self.controller.drag_leave(self._hover_ref)
        self._hover_ref = ref
        if ref is not None:
            self.controller.drag_enter(ref)
            self.controller.drag_over()

    def _on_drop(self, target_ref: TargetRef) -> None:
        self._hover_ref = None
        if self.controller is None:
            return
        try:
            self.controller.drag_drop(target_ref)
        except ReorderError as e:
            logger.error(f"Drop ignored: {e}")

    def _on_drag_aborted(self) -> None:
        self._hover_ref = None
        if self.controller is not None:
            self.controller.drag_cancel()

    # ─────────────────────────────────────────────────────────────────────────
    # Outside clicks
    # ─────────────────────────────────────────────────────────────────────────

    def target_id_for(self, widget: QWidget, global_pos) -> Optional[str]:
        """Element id of whatever sits under a click: the info panel, a question, or None."""
        if widget is self.info_popup or self.info_popup.isAncestorOf(widget):
            return INFO_PANEL_ID
        for pool_list in (self.available_list, self.chosen_list):
            if widget is pool_list.viewport():
                item_id = pool_list.id_at(pool_list.viewport().mapFromGlobal(global_pos))
                if item_id is not None and self.controller is not None:
                    return self.controller.element_id(item_id)
        return None

    def eventFilter(self, obj: QObject, event: QEvent) -> bool:
        if (
            event.type() == QEvent.Type.MouseButtonPress
            and isinstance(obj, QWidget)
            and self.controller is not None
            and self.controller.info.is_open
        ):
            global_pos = event.globalPosition().toPoint()
            widget = QApplication.widgetAt(global_pos) or obj
            self.controller.outside_click(self.target_id_for(widget, global_pos))
        return False
