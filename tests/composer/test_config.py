"""
Unit Tests for ComposerConfig
"""

import logging

import pytest

from exam_assembler.composer import ComposerConfig


class TestComposerConfig:

    def test_defaults(self):
        config = ComposerConfig()
        assert config.known_categories == (1, 2, 3, 4)
        assert config.item_kind == "question"
        assert config.logging_level == logging.INFO

    def test_empty_categories_rejected(self):
        with pytest.raises(ValueError, match="must not be empty"):
            ComposerConfig(known_categories=())

    def test_duplicate_categories_rejected(self):
        with pytest.raises(ValueError, match="duplicates"):
            ComposerConfig(known_categories=(1, 2, 1))

    @pytest.mark.parametrize("kind", ["", "multi-choice"])
    def test_bad_item_kind_rejected(self, kind):
        with pytest.raises(ValueError, match="item_kind"):
            ComposerConfig(item_kind=kind)

    def test_bad_log_level_rejected(self):
        with pytest.raises(ValueError, match="log_level"):
            ComposerConfig(log_level="CHATTY")

    @pytest.mark.parametrize(
        "debug_level, expected",
        [(0, logging.CRITICAL), (1, logging.ERROR), (2, logging.INFO), (3, logging.DEBUG), (7, logging.DEBUG)],
    )
    def test_from_debug_level(self, debug_level, expected):
        assert ComposerConfig.from_debug_level(debug_level).logging_level == expected

    def test_from_debug_level_passes_other_fields(self):
        config = ComposerConfig.from_debug_level(3, known_categories=(1, 2))
        assert config.known_categories == (1, 2)

    def test_from_debug_level_negative_rejected(self):
        with pytest.raises(ValueError):
            ComposerConfig.from_debug_level(-1)

    def test_config_is_frozen(self):
        config = ComposerConfig()
        with pytest.raises(AttributeError):
            config.item_kind = "frage"
