"""
Settings persistence model for the GUI.

This module handles all persistent GUI state with robust error handling.
Any malformed data should result in graceful fallback to defaults, never CTD.
"""
import json
import logging
from pathlib import Path
from typing import Dict, Optional

from PySide6.QtCore import QObject, Signal

logger = logging.getLogger(__name__)


class SettingsStore(QObject):
    """Lightweight JSON-backed store for persisting GUI preferences."""

    dataFilesChanged = Signal(str, str)
    CURRENT_VERSION = 1

    def __init__(self, path: Path) -> None:
        super().__init__()
        self.path = Path(path)
        self.data: Dict[str, object] = {}
        self._load_error: Optional[str] = None

        if self.path.exists():
            try:
                self.data = json.loads(self.path.read_text(encoding="utf-8"))
                self._migrate()
            except json.JSONDecodeError as e:
                self._load_error = f"Settings file is corrupted:\n{e}"
                self.data = {}
            except OSError as e:
                self._load_error = f"Failed to read settings:\n{e}"
                self.data = {}

        # Ensure version is set for new files
        if "version" not in self._get_dict():
            self.data["version"] = self.CURRENT_VERSION
        if "app_version" not in self._get_dict():
            self.data["app_version"] = self._get_app_version()

    @property
    def load_error(self) -> Optional[str]:
        return self._load_error

    def check_load_error(self) -> bool:
        """
        Check if there was an error loading settings and prompt user to reset.

        Returns True if app should continue, False if app should exit.
        Call this after QApplication is created.
        """
        if not self._load_error:
            return True

        from PySide6.QtWidgets import QMessageBox

        msg = QMessageBox()
        msg.setIcon(QMessageBox.Icon.Warning)
        msg.setWindowTitle("Settings Error")
        msg.setText("Your GUI settings file could not be loaded.")
        msg.setInformativeText(
            f"{self._load_error}\n\n"
            "Would you like to reset settings to defaults and continue?"
        )
        msg.setStandardButtons(
            QMessageBox.StandardButton.Yes | QMessageBox.StandardButton.No
        )
        msg.setDefaultButton(QMessageBox.StandardButton.Yes)

        if msg.exec() == QMessageBox.StandardButton.Yes:
            self._save()
            self._load_error = None
            return True
        return False

    def _migrate(self) -> None:
        """Drop remembered files from a different major.minor app version."""
        stored_version = str(self._get_dict().get("app_version", "0.0.0"))
        current_version = self._get_app_version()

        if stored_version.split(".")[:2] != current_version.split(".")[:2]:
            self.data.pop("data_files", None)

        self.data["app_version"] = current_version
        self._save()

    def _get_app_version(self) -> str:
        from exam_assembler import __version__
        return __version__

    # ─────────────────────────────────────────────────────────────────────────
    # Data files
    # ─────────────────────────────────────────────────────────────────────────

    def get_questions_path(self) -> Optional[str]:
        files = self._get_section("data_files")
        value = files.get("questions")
        return value if isinstance(value, str) else None

    def get_metadata_path(self) -> Optional[str]:
        files = self._get_section("data_files")
        value = files.get("metadata")
        return value if isinstance(value, str) else None

    def set_data_files(self, questions: str, metadata: Optional[str]) -> None:
        files = self._get_section("data_files")
        files["questions"] = questions
        files["metadata"] = metadata
        self._save()
        self.dataFilesChanged.emit(questions, metadata or "")

    # ─────────────────────────────────────────────────────────────────────────
    # Composer state
    # ─────────────────────────────────────────────────────────────────────────

    def get_last_category(self) -> Optional[int]:
        value = self._get_section("composer").get("category")
        if isinstance(value, bool) or not isinstance(value, int):
            return None
        return value

    def set_last_category(self, category_id: int) -> None:
        self._get_section("composer")["category"] = category_id
        self._save()

    def get_save_dir(self) -> Optional[str]:
        value = self._get_section("composer").get("save_dir")
        return value if isinstance(value, str) else None

    def set_save_dir(self, value: str) -> None:
        self._get_section("composer")["save_dir"] = value
        self._save()

    def get_test_title(self) -> str:
        value = self._get_section("composer").get("title")
        return value if isinstance(value, str) else "Aufnahmetest"

    def set_test_title(self, value: str) -> None:
        self._get_section("composer")["title"] = value
        self._save()

    # ─────────────────────────────────────────────────────────────────────────
    # UI
    # ─────────────────────────────────────────────────────────────────────────

    def get_dark_mode(self) -> bool:
        return bool(self._get_section("ui").get("dark_mode", False))

    def set_dark_mode(self, enabled: bool) -> None:
        self._get_section("ui")["dark_mode"] = enabled
        self._save()

    def get_window_geometry(self) -> Optional[str]:
        value = self._get_section("ui").get("geometry")
        return value if isinstance(value, str) else None

    def set_window_geometry(self, geometry_hex: str) -> None:
        self._get_section("ui")["geometry"] = geometry_hex
        self._save()

    def _get_dict(self) -> Dict[str, object]:
        if not isinstance(self.data, dict):
            self.data = {}
        return self.data

    def _get_section(self, name: str) -> Dict[str, object]:
        data = self._get_dict()
        section = data.get(name)
        if not isinstance(section, dict):
            section = {}
            data[name] = section
        return section

    def _save(self) -> None:
        """Safely write settings with atomic replacement.

        Uses a temp file to prevent corruption if write is interrupted.
        """
        temp_path = self.path.with_suffix('.tmp')
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            temp_path.write_text(json.dumps(self.data, indent=2), encoding="utf-8")
            temp_path.replace(self.path)
        except OSError as e:
            logger.warning(f"Failed to save settings: {e}")
            try:
                if temp_path.exists():
                    temp_path.unlink()
            except OSError as cleanup_error:
                logger.debug(f"Could not remove {temp_path}: {cleanup_error}")
