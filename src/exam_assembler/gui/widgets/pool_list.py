"""
List widget for one question pool.

Reports gestures instead of acting on them: clicks (with their modifier
keys) and, for the reorderable Chosen list, the drag start, the drop
target under the pointer and the final drop. Marks are painted from the
controller's state; Qt's own selection is disabled.
"""
from typing import Iterable, List, Optional, Sequence

from PySide6.QtCore import QByteArray, QMimeData, QPoint, Qt, Signal
from PySide6.QtGui import QBrush, QColor, QDrag
from PySide6.QtWidgets import QAbstractItemView, QApplication, QListWidget, QListWidgetItem

from exam_assembler.composer import END_OF_LIST, ClickModifiers, PoolName, TargetRef
from exam_assembler.core.models import Item
from exam_assembler.gui.styles.theme import get_colors

MIME_TYPE = "application/x-exam-assembler-question"
PREVIEW_LENGTH = 90


def item_label(item: Item) -> str:
    """One-line label: id and the start of the question text."""
    text = " ".join(item.text.split())
    if len(text) > PREVIEW_LENGTH:
        text = text[:PREVIEW_LENGTH - 1] + "…"
    return f"{item.id}: {text}"


class PoolListWidget(QListWidget):
    """Displays one pool and reports clicks and drags on its rows."""

    questionClicked = Signal(int, object)   # item id, ClickModifiers
    dragStarted = Signal(int)
    dragHovered = Signal(object)            # TargetRef under the pointer, None when outside
    dropRequested = Signal(object)          # TargetRef
    dragAborted = Signal()

    def __init__(self, pool: PoolName, reorderable: bool = False, parent=None):
        super().__init__(parent)
        self.pool = pool
        self.reorderable = reorderable
        self.setObjectName(f"{pool.value}List")
        self.setSelectionMode(QAbstractItemView.SelectionMode.NoSelection)
        self.setDropIndicatorShown(False)
        if reorderable:
            self.setAcceptDrops(True)
            self.viewport().setAcceptDrops(True)

        self._press_pos: Optional[QPoint] = None
        self._press_id: Optional[int] = None
        self._dragging = False
        self._hover_ref = None

    # ─────────────────────────────────────────────────────────────────────────
    # Content
    # ─────────────────────────────────────────────────────────────────────────

    def set_items(self, items: Sequence[Item]) -> None:
        self.clear()
        for item in items:
            row = QListWidgetItem(item_label(item))
            row.setData(Qt.ItemDataRole.UserRole, item.id)
            row.setToolTip(item.text)
            self.addItem(row)

    def item_ids(self) -> List[int]:
        """Ids in display order."""
        return [self.item(row).data(Qt.ItemDataRole.UserRole) for row in range(self.count())]

    def row_of(self, item_id: int) -> int:
        """Row of ``item_id``, or -1."""
        for row in range(self.count()):
            if self.item(row).data(Qt.ItemDataRole.UserRole) == item_id:
                return row
        return -1

    def set_marks(self, item_ids: Iterable[int]) -> None:
        C = get_colors()
        marked = set(item_ids)
        for row in range(self.count()):
            list_item = self.item(row)
            if list_item.data(Qt.ItemDataRole.UserRole) in marked:
                list_item.setBackground(QBrush(QColor(C.MARK_BG)))
                list_item.setForeground(QBrush(QColor(C.MARK_TEXT)))
            else:
                list_item.setBackground(QBrush())
                list_item.setForeground(QBrush())

    def marked_ids(self) -> List[int]:
        """Ids whose rows are painted as marked, in display order."""
        C = get_colors()
        return [
            self.item(row).data(Qt.ItemDataRole.UserRole)
            for row in range(self.count())
            if self.item(row).background().color() == QColor(C.MARK_BG)
        ]

    def id_at(self, pos: QPoint) -> Optional[int]:
        list_item = self.itemAt(pos)
        if list_item is None:
            return None
        return list_item.data(Qt.ItemDataRole.UserRole)

    def target_ref_at(self, pos: QPoint) -> TargetRef:
        """
        Item that follows the drop point at ``pos`` (viewport coordinates).

        The upper half of a row drops ahead of that row, the lower half
        ahead of the next one. Below the last row is END_OF_LIST.
        """
        list_item = self.itemAt(pos)
        if list_item is None:
            return END_OF_LIST
        row = self.row(list_item)
        if pos.y() >= self.visualItemRect(list_item).center().y():
            row += 1
        if row >= self.count():
            return END_OF_LIST
        return self.item(row).data(Qt.ItemDataRole.UserRole)

    # ─────────────────────────────────────────────────────────────────────────
    # Mouse
    # ─────────────────────────────────────────────────────────────────────────

    def mousePressEvent(self, event):
        pos = event.position().toPoint()
        self._press_pos = pos
        self._press_id = self.id_at(pos)
        self._dragging = False
        event.accept()

    def mouseMoveEvent(self, event):
        if (
            not self.reorderable
            or self._press_id is None
            or self._press_pos is None
            or not (event.buttons() & Qt.MouseButton.LeftButton)
        ):
            return
        distance = (event.position().toPoint() - self._press_pos).manhattanLength()
        if distance >= QApplication.startDragDistance():
            self._start_drag(self._press_id)

    def mouseReleaseEvent(self, event):
        pressed_id = self._press_id
        self._press_id = None
        self._press_pos = None
        if self._dragging or pressed_id is None:
            self._dragging = False
            return
        if self.id_at(event.position().toPoint()) != pressed_id:
            return

        keys = event.modifiers()
        modifiers = ClickModifiers(
            shift=bool(keys & Qt.KeyboardModifier.ShiftModifier),
            alt=bool(keys & Qt.KeyboardModifier.AltModifier)
            or event.button() == Qt.MouseButton.RightButton,
        )
        self.questionClicked.emit(pressed_id, modifiers)
        event.accept()

    def _start_drag(self, item_id: int) -> None:
        self._dragging = True
        self._press_id = None
        self.dragStarted.emit(item_id)

        mime = QMimeData()
        mime.setData(MIME_TYPE, QByteArray(str(item_id).encode("ascii")))
        drag = QDrag(self)
        drag.setMimeData(mime)
        result = drag.exec(Qt.DropAction.MoveAction)
        if result == Qt.DropAction.IgnoreAction:
            self.dragAborted.emit()
        self._hover_ref = None

    # ─────────────────────────────────────────────────────────────────────────
    # Drop target
    # ─────────────────────────────────────────────────────────────────────────

    def _accepts(self, event) -> bool:
        return (
            self.reorderable
            and event.source() is self
            and event.mimeData().hasFormat(MIME_TYPE)
        )

    def dragEnterEvent(self, event):
        if self._accepts(event):
            event.acceptProposedAction()
        else:
            event.ignore()

    def dragMoveEvent(self, event):
        if not self._accepts(event):
            event.ignore()
            return
        ref = self.target_ref_at(event.position().toPoint())
        if ref != self._hover_ref:
            self._hover_ref = ref
            self.dragHovered.emit(ref)
        event.acceptProposedAction()

    def dragLeaveEvent(self, event):
        if self._hover_ref is not None:
            self._hover_ref = None
            self.dragHovered.emit(None)
        event.accept()

    def dropEvent(self, event):
        if not self._accepts(event):
            event.ignore()
            return
        ref = self.target_ref_at(event.position().toPoint())
        event.acceptProposedAction()
        self.dropRequested.emit(ref)
