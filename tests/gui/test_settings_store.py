"""
Unit tests for GUI settings persistence.
"""
import json

import pytest

from exam_assembler.gui.models.settings import SettingsStore


@pytest.fixture
def settings_path(tmp_path):
    return tmp_path / "gui_settings.json"


class TestSettingsStore:

    def test_data_files_persist(self, qtbot, settings_path):
        store = SettingsStore(settings_path)
        with qtbot.waitSignal(store.dataFilesChanged, timeout=1000) as blocker:
            store.set_data_files("/data/02-fragen.json", "/data/01-tags-cats.json")
        assert blocker.args == ["/data/02-fragen.json", "/data/01-tags-cats.json"]

        reloaded = SettingsStore(settings_path)
        assert reloaded.get_questions_path() == "/data/02-fragen.json"
        assert reloaded.get_metadata_path() == "/data/01-tags-cats.json"

    def test_new_file_records_app_version(self, settings_path):
        from exam_assembler import __version__

        SettingsStore(settings_path).set_data_files("/data/q.json", None)
        saved = json.loads(settings_path.read_text(encoding="utf-8"))
        assert saved["app_version"] == __version__

        # A second restart must not treat the file as coming from an old version
        SettingsStore(settings_path)
        assert SettingsStore(settings_path).get_questions_path() == "/data/q.json"

    def test_metadata_path_optional(self, settings_path):
        store = SettingsStore(settings_path)
        store.set_data_files("/data/q.json", None)
        assert SettingsStore(settings_path).get_metadata_path() is None

    def test_composer_state_persists(self, settings_path):
        store = SettingsStore(settings_path)
        store.set_last_category(3)
        store.set_save_dir("/tests")
        store.set_test_title("Aufnahmetest Herbst")
        reloaded = SettingsStore(settings_path)
        assert reloaded.get_last_category() == 3
        assert reloaded.get_save_dir() == "/tests"
        assert reloaded.get_test_title() == "Aufnahmetest Herbst"

    def test_defaults(self, settings_path):
        store = SettingsStore(settings_path)
        assert store.get_questions_path() is None
        assert store.get_last_category() is None
        assert store.get_test_title() == "Aufnahmetest"
        assert store.get_dark_mode() is False

    def test_corrupted_file_falls_back_to_defaults(self, settings_path):
        settings_path.write_text("{not json", encoding="utf-8")
        store = SettingsStore(settings_path)
        assert store.load_error is not None
        assert store.get_questions_path() is None

    def test_malformed_values_are_ignored(self, settings_path):
        from exam_assembler import __version__

        settings_path.write_text(json.dumps({
            "app_version": __version__,
            "composer": {"category": "drei", "save_dir": 5},
            "data_files": ["not", "a", "dict"],
        }), encoding="utf-8")
        store = SettingsStore(settings_path)
        assert store.get_last_category() is None
        assert store.get_save_dir() is None
        assert store.get_questions_path() is None

    def test_version_change_drops_remembered_files(self, settings_path):
        settings_path.write_text(json.dumps({
            "app_version": "0.0.1",
            "data_files": {"questions": "/old/q.json"},
            "composer": {"category": 2},
        }), encoding="utf-8")
        store = SettingsStore(settings_path)
        assert store.get_questions_path() is None
        assert store.get_last_category() == 2
