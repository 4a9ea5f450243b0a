"""
Info popup for one question: text, context source, tags and answer options.

Shown by ComposerPanel.show_info for an alt-click or right-click. Closed by
the next click anywhere outside it.
"""
from typing import Optional

from PySide6.QtCore import Qt
from PySide6.QtWidgets import QFrame, QLabel, QVBoxLayout

from exam_assembler.composer import INFO_PANEL_ID, InfoRequest
from exam_assembler.gui.styles.theme import get_colors


class InfoPopup(QFrame):
    def __init__(self, parent=None):
        super().__init__(parent)
        self.setObjectName(INFO_PANEL_ID)
        self.setFrameShape(QFrame.Shape.StyledPanel)
        self.request: Optional[InfoRequest] = None

        layout = QVBoxLayout(self)
        layout.setContentsMargins(12, 8, 12, 8)

        self.title_label = QLabel()
        self.title_label.setObjectName("infoTitle")
        self.text_label = QLabel()
        self.text_label.setWordWrap(True)
        self.text_label.setTextInteractionFlags(Qt.TextInteractionFlag.TextSelectableByMouse)
        self.context_label = QLabel()
        self.context_label.setWordWrap(True)
        self.tags_label = QLabel()
        self.answers_label = QLabel()
        self.answers_label.setWordWrap(True)
        self.answers_label.setTextFormat(Qt.TextFormat.RichText)

        for label in (
            self.title_label,
            self.text_label,
            self.context_label,
            self.tags_label,
            self.answers_label,
        ):
            layout.addWidget(label)

        self.update_theme()
        self.hide()

    def show_request(self, request: InfoRequest) -> None:
        self.request = request
        item = request.item
        self.title_label.setText(f"<b>Frage {item.id}</b> (Kategorie {item.category_id})")
        self.text_label.setText(item.text)

        self.context_label.setVisible(request.context is not None)
        if request.context is not None:
            self.context_label.setText(f"Kontext: {request.context.source}")

        self.tags_label.setVisible(bool(request.tags))
        self.tags_label.setText("Tags: " + ", ".join(tag.name for tag in request.tags))

        if request.answers:
            C = get_colors()
            rows = []
            for answer in request.answers:
                if answer.correct:
                    rows.append(f'<span style="color:{C.SUCCESS}">&#10004; {answer.label}</span>')
                else:
                    rows.append(f"&#8226; {answer.label}")
            self.answers_label.setText("<br>".join(rows))
        else:
            self.answers_label.setText("<i>Keine Antwortoptionen</i>")

        self.show()
        self.raise_()

    def dismiss(self) -> None:
        self.request = None
        self.hide()

    def update_theme(self):
        C = get_colors()
        self.setStyleSheet(f"""
            QFrame#{INFO_PANEL_ID} {{
                background-color: {C.SURFACE};
                border: 1px solid {C.PRIMARY_BLUE};
                border-radius: 6px;
            }}
        """)
