"""
Path utilities for handling dev vs production (frozen) file locations.

Dev mode: Uses local workspace/ directory
Frozen mode: Uses the per-user application data directory
"""
from __future__ import annotations

import sys
from pathlib import Path

from PySide6.QtCore import QStandardPaths


def is_frozen() -> bool:
    """Check if running as a frozen (PyInstaller) application."""
    return getattr(sys, 'frozen', False) or hasattr(sys, '_MEIPASS')


def get_app_data_dir() -> Path:
    """
    Get the application data directory for internal state files.

    Frozen: AppLocalDataLocation of the Qt application
    Dev: workspace/
    """
    if is_frozen():
        app_data = Path(QStandardPaths.writableLocation(
            QStandardPaths.StandardLocation.AppLocalDataLocation
        ))
        app_data.mkdir(parents=True, exist_ok=True)
        return app_data
    return Path.cwd() / "workspace"


def get_default_tests_dir() -> Path:
    """
    Get the default directory for saved test plans and question sheets.

    Frozen: ~/Documents/Exam Assembler
    Dev: workspace/tests_out
    """
    if is_frozen():
        docs = Path(QStandardPaths.writableLocation(
            QStandardPaths.StandardLocation.DocumentsLocation
        ))
        return docs / "Exam Assembler"
    return Path.cwd() / "workspace" / "tests_out"


def get_settings_path() -> Path:
    """Get the path for storing GUI settings."""
    return get_app_data_dir() / "gui_settings.json"


def ensure_directories() -> None:
    """Create the output directory on startup in frozen mode."""
    if not is_frozen():
        return
    get_default_tests_dir().mkdir(parents=True, exist_ok=True)
