"""
Entry point for the PySide6 GUI.

Usage:
    python -m exam_assembler.gui.app [questions.json [metadata.json]] [--debug-level N]
"""
import argparse
import logging
import sys
from pathlib import Path
from typing import List, Optional


def _parse_args(argv: List[str]) -> argparse.Namespace:
    parser = argparse.ArgumentParser(prog="exam-assembler", description="Compose a test from a question pool.")
    parser.add_argument("questions", nargs="?", type=Path, help="Questions JSON file")
    parser.add_argument("metadata", nargs="?", type=Path, help="Tags/categories/contexts/answers JSON file")
    parser.add_argument(
        "--debug-level",
        type=int,
        default=2,
        help="0 = silent, 1 = errors, 2 = info (default), 3 = debug",
    )
    # Qt consumes its own options from sys.argv
    args, _unknown = parser.parse_known_args(argv)
    return args


def run(argv: Optional[List[str]] = None):
    """
    Main entry point for the GUI application.
    """
    from PySide6.QtWidgets import QApplication
    from exam_assembler.composer import ComposerConfig
    from exam_assembler.gui.main_window import MainWindow
    from exam_assembler.gui.models.settings import SettingsStore
    from exam_assembler.gui.styles.theme import set_dark_mode, GLOBAL_STYLESHEET, GLOBAL_STYLESHEET_DARK
    from exam_assembler.gui.utils.paths import get_settings_path, ensure_directories

    args = _parse_args(sys.argv[1:] if argv is None else argv)
    config = ComposerConfig.from_debug_level(args.debug_level)
    logging.basicConfig(level=config.logging_level, format="%(levelname)s %(name)s: %(message)s")

    app = QApplication(sys.argv)
    app.setApplicationName("Exam Assembler")
    app.setApplicationDisplayName("Exam Assembler")
    app.setOrganizationName("Exam Assembler")

    ensure_directories()
    settings = SettingsStore(get_settings_path())

    # Check for malformed settings and prompt user to reset if needed
    if not settings.check_load_error():
        sys.exit(1)

    is_dark = settings.get_dark_mode()
    set_dark_mode(is_dark)
    app.setStyleSheet(GLOBAL_STYLESHEET_DARK if is_dark else GLOBAL_STYLESHEET)

    window = MainWindow(settings=settings, config=config)
    if args.questions is not None:
        window.load_data(args.questions, args.metadata)
    else:
        window.restore_last_session()
    window.show()

    sys.exit(app.exec())


if __name__ == "__main__":
    run()
