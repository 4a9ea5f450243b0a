"""
Module: composer.config

Purpose:
    Configuration dataclass for the composer engine. Immutable
    configuration with validation on construction.

Key Classes:
    - ComposerConfig: Known categories, element id kind, log level

Dependencies:
    - dataclasses (std)
    - logging (std)

Used By:
    - composer.controller: Owning controller
    - composer.categories: Bucket layout
    - gui.main_window: Startup
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Tuple

# 0 = silent, 1 = error, 2 = info, 3 = debug
_DEBUG_LEVELS = {0: "CRITICAL", 1: "ERROR", 2: "INFO", 3: "DEBUG"}
_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


@dataclass(frozen=True)
class ComposerConfig:
    """
    Configuration for the composer engine (immutable).

    Attributes:
        known_categories: Category ids that get a bucket, in display order
        item_kind: Prefix of item element ids (``question-12``)
        log_level: Name of the logging level for the package logger

    Invariants:
        - known_categories is non-empty and has no duplicates
        - item_kind is a non-empty string without "-"

    Example:
        >>> config = ComposerConfig(known_categories=(1, 2, 3, 4))
        >>> config.logging_level == logging.INFO
        True
    """

    known_categories: Tuple[int, ...] = (1, 2, 3, 4)
    item_kind: str = "question"
    log_level: str = "INFO"

    def __post_init__(self) -> None:
        """Validate configuration on construction."""
        if not self.known_categories:
            raise ValueError("known_categories must not be empty")
        if len(set(self.known_categories)) != len(self.known_categories):
            raise ValueError(f"known_categories has duplicates: {self.known_categories}")
        if not self.item_kind or "-" in self.item_kind:
            raise ValueError(f"item_kind must be non-empty and contain no '-': {self.item_kind!r}")
        if self.log_level.upper() not in _LOG_LEVELS:
            raise ValueError(f"log_level must be one of {_LOG_LEVELS}: {self.log_level!r}")

    @property
    def logging_level(self) -> int:
        """Numeric logging level."""
        return logging.getLevelName(self.log_level.upper())

    @classmethod
    def from_debug_level(cls, debug_level: int, **kwargs) -> ComposerConfig:
        """
        Build a config from the numeric debug level used by the old page.

        Args:
            debug_level: 0 (silent) to 3 (debug); values above 3 clamp to 3
        """
        if debug_level < 0:
            raise ValueError(f"debug_level must be non-negative: {debug_level}")
        return cls(log_level=_DEBUG_LEVELS[min(debug_level, 3)], **kwargs)
