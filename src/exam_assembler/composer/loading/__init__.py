"""
Module: composer.loading

Purpose:
    Question pool loading from the JSON export format.

Key Functions:
    - load_catalog(): Load questions and reference data
    - parse_questions(): Validate and build Items
    - parse_metadata(): Validate and build reference records

Used By:
    - gui.main_window
"""

from .loader import (
    JsonDataSource,
    LoaderError,
    load_catalog,
    parse_metadata,
    parse_questions,
)

__all__ = [
    "JsonDataSource",
    "LoaderError",
    "load_catalog",
    "parse_metadata",
    "parse_questions",
]
