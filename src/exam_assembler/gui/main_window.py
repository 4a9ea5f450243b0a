"""
Main Window for the Exam Assembler GUI.
"""
import logging
import queue
from pathlib import Path
from typing import Optional

from PySide6.QtCore import Qt, QTimer
from PySide6.QtGui import QAction, QKeySequence
from PySide6.QtWidgets import (
    QApplication, QFileDialog, QInputDialog, QMainWindow, QMessageBox, QSplitter
)

from exam_assembler import __version__
from exam_assembler.composer import ComposerConfig, ComposerController, UnknownCategoryError
from exam_assembler.composer.loading import JsonDataSource, LoaderError
from exam_assembler.composer.output import JsonPlanWriter, PdfQuestionSheet, SaveError, read_plan
from exam_assembler.gui.models.settings import SettingsStore
from exam_assembler.gui.styles.theme import GLOBAL_STYLESHEET, GLOBAL_STYLESHEET_DARK, set_dark_mode
from exam_assembler.gui.utils.logging_utils import attach_queue_handler, detach_queue_handler
from exam_assembler.gui.utils.paths import get_default_tests_dir, get_settings_path
from exam_assembler.gui.widgets.composer_panel import ComposerPanel
from exam_assembler.gui.widgets.console_widget import ConsoleWidget

logger = logging.getLogger(__name__)

JSON_FILTER = "JSON Files (*.json);;All Files (*)"
PDF_FILTER = "PDF Files (*.pdf)"


class MainWindow(QMainWindow):
    def __init__(
        self,
        settings: Optional[SettingsStore] = None,
        config: Optional[ComposerConfig] = None,
    ):
        super().__init__()
        self.settings = settings or SettingsStore(get_settings_path())
        self.config = config or ComposerConfig()
        self.controller: Optional[ComposerController] = None

        self.setWindowTitle("Exam Assembler")
        self.resize(1200, 820)

        # Logging
        self.log_queue: "queue.Queue" = queue.Queue()
        self.log_handler = attach_queue_handler(
            self.log_queue, "exam_assembler", self.config.logging_level
        )
        self.log_timer = QTimer(self)
        self.log_timer.timeout.connect(self._drain_log_queue)
        self.log_timer.start(100)

        # Central widget
        self.panel = ComposerPanel()
        self.console = ConsoleWidget()
        self.splitter = QSplitter(Qt.Orientation.Vertical)
        self.splitter.addWidget(self.panel)
        self.splitter.addWidget(self.console)
        self.splitter.setStretchFactor(0, 4)
        self.splitter.setStretchFactor(1, 1)
        self.setCentralWidget(self.splitter)

        self.panel.saveRequested.connect(self._save_plan)
        self.panel.categoryChanged.connect(self.settings.set_last_category)

        self._build_menus()
        self._update_actions()

    def _build_menus(self) -> None:
        file_menu = self.menuBar().addMenu("File")

        self.open_action = QAction("Open Question Files...", self)
        self.open_action.setShortcut(QKeySequence.StandardKey.Open)
        self.open_action.triggered.connect(self._choose_data_files)
        file_menu.addAction(self.open_action)

        self.open_plan_action = QAction("Open Test Plan...", self)
        self.open_plan_action.triggered.connect(self._open_plan)
        file_menu.addAction(self.open_plan_action)

        file_menu.addSeparator()

        self.save_action = QAction("Save Test Plan...", self)
        self.save_action.setShortcut(QKeySequence.StandardKey.Save)
        self.save_action.triggered.connect(self._save_plan)
        file_menu.addAction(self.save_action)

        self.export_action = QAction("Export Question Sheet (PDF)...", self)
        self.export_action.triggered.connect(self._export_pdf)
        file_menu.addAction(self.export_action)

        self.title_action = QAction("Set Test Title...", self)
        self.title_action.triggered.connect(self._edit_title)
        file_menu.addAction(self.title_action)

        file_menu.addSeparator()
        exit_action = QAction("Quit", self)
        exit_action.triggered.connect(self.close)
        file_menu.addAction(exit_action)

        view_menu = self.menuBar().addMenu("View")
        self.dark_mode_action = QAction("Dark Mode", self)
        self.dark_mode_action.setCheckable(True)
        self.dark_mode_action.setChecked(self.settings.get_dark_mode())
        self.dark_mode_action.toggled.connect(self._toggle_theme)
        view_menu.addAction(self.dark_mode_action)

        help_menu = self.menuBar().addMenu("Help")
        about_action = QAction("About", self)
        about_action.triggered.connect(self._show_about)
        help_menu.addAction(about_action)

    def _update_actions(self) -> None:
        loaded = self.controller is not None
        self.open_plan_action.setEnabled(loaded)
        self.save_action.setEnabled(loaded)
        self.export_action.setEnabled(loaded)

    # ─────────────────────────────────────────────────────────────────────────
    # Loading
    # ─────────────────────────────────────────────────────────────────────────

    def restore_last_session(self) -> bool:
        """Reload the data files of the previous session, if they still exist."""
        questions = self.settings.get_questions_path()
        if not questions or not Path(questions).exists():
            return False
        metadata = self.settings.get_metadata_path()
        if metadata and not Path(metadata).exists():
            metadata = None
        return self.load_data(Path(questions), Path(metadata) if metadata else None)

    def load_data(self, questions_path: Path, metadata_path: Optional[Path] = None) -> bool:
        """
        Load the question pool and show it.

        Errors are reported to the user and the log; the previous pool
        stays in place.
        """
        source = JsonDataSource(questions_path, metadata_path)
        try:
            catalog = source.load()
            controller = ComposerController(catalog, self.config)
        except (LoaderError, UnknownCategoryError) as e:
            logger.error(f"Loading failed: {e}")
            QMessageBox.critical(self, "Loading Failed", str(e))
            return False

        self.controller = controller
        self.panel.set_controller(controller, self.settings.get_last_category())
        self.settings.set_data_files(
            str(questions_path), str(metadata_path) if metadata_path else None
        )
        self.statusBar().showMessage(f"{len(catalog)} questions loaded", 5000)
        self._update_actions()
        return True

    def _choose_data_files(self) -> None:
        start_dir = self.settings.get_questions_path() or str(Path.cwd())
        questions, _ = QFileDialog.getOpenFileName(
            self, "Open Questions File", start_dir, JSON_FILTER
        )
        if not questions:
            return
        metadata, _ = QFileDialog.getOpenFileName(
            self,
            "Open Tags/Categories File (cancel to skip)",
            str(Path(questions).parent),
            JSON_FILTER,
        )
        self.load_data(Path(questions), Path(metadata) if metadata else None)

    # ─────────────────────────────────────────────────────────────────────────
    # Saving
    # ─────────────────────────────────────────────────────────────────────────

    def _default_save_dir(self) -> Path:
        saved = self.settings.get_save_dir()
        return Path(saved) if saved else get_default_tests_dir()

    def _has_questions(self) -> bool:
        if self.controller is None:
            return False
        if not self.controller.chosen_ids():
            QMessageBox.information(self, "Empty Test", "Add questions to the test first.")
            return False
        return True

    def _ask_save_path(self, caption: str, filename: str, file_filter: str) -> Optional[Path]:
        path, _ = QFileDialog.getSaveFileName(
            self, caption, str(self._default_save_dir() / filename), file_filter
        )
        if not path:
            return None
        self.settings.set_save_dir(str(Path(path).parent))
        return Path(path)

    def save_to(self, surface) -> bool:
        """Hand the chosen questions to ``surface``, reporting failures."""
        try:
            ids = self.controller.save(surface)
        except SaveError as e:
            logger.error(str(e))
            QMessageBox.critical(self, "Save Failed", str(e))
            return False
        self.statusBar().showMessage(f"Saved {len(ids)} question(s)", 5000)
        return True

    def _save_plan(self) -> None:
        if not self._has_questions():
            return
        path = self._ask_save_path("Save Test Plan", "test_plan.json", JSON_FILTER)
        if path is None:
            return
        writer = JsonPlanWriter(
            path,
            title=self.settings.get_test_title(),
            counts_provider=self.controller.chosen_counts,
        )
        self.save_to(writer)

    def _export_pdf(self) -> None:
        if not self._has_questions():
            return
        path = self._ask_save_path("Export Question Sheet", "question_sheet.pdf", PDF_FILTER)
        if path is None:
            return
        self.save_to(PdfQuestionSheet(path, self.controller.catalog, title=self.settings.get_test_title()))

    def _open_plan(self) -> None:
        if self.controller is None:
            return
        path, _ = QFileDialog.getOpenFileName(
            self, "Open Test Plan", str(self._default_save_dir()), JSON_FILTER
        )
        if not path:
            return
        try:
            ids = read_plan(Path(path))
        except SaveError as e:
            logger.error(str(e))
            QMessageBox.critical(self, "Opening Failed", str(e))
            return
        self.controller.restore(ids)

    def _edit_title(self) -> None:
        title, ok = QInputDialog.getText(
            self, "Test Title", "Title:", text=self.settings.get_test_title()
        )
        if ok and title.strip():
            self.settings.set_test_title(title.strip())

    # ─────────────────────────────────────────────────────────────────────────
    # Misc
    # ─────────────────────────────────────────────────────────────────────────

    def _toggle_theme(self, checked: bool) -> None:
        self.settings.set_dark_mode(checked)
        set_dark_mode(checked)
        app = QApplication.instance()
        if app is not None:
            app.setStyleSheet(GLOBAL_STYLESHEET_DARK if checked else GLOBAL_STYLESHEET)
        self.console.update_theme()
        self.panel.info_popup.update_theme()
        if self.controller is not None:
            self.controller.refresh()

    def _drain_log_queue(self) -> None:
        while True:
            try:
                msg = self.log_queue.get_nowait()
            except queue.Empty:
                break
            if isinstance(msg, tuple) and len(msg) == 2:
                text, level = msg
                self.console.append_log(level, text)
            else:
                self.console.append_log("INFO", str(msg))
            self.log_queue.task_done()

    def _show_about(self) -> None:
        QMessageBox.about(
            self,
            "About Exam Assembler",
            "<h3>Exam Assembler</h3>"
            f"<p>Version: {__version__}</p>"
            "<p>Compose entrance tests from a question pool.</p>",
        )

    def closeEvent(self, event):
        """Save UI state on close."""
        self.settings.set_window_geometry(self.saveGeometry().toHex().data().decode())
        self.log_timer.stop()
        detach_queue_handler(self.log_handler, "exam_assembler")
        super().closeEvent(event)
