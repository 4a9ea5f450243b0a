"""
Core Models Package

Immutable data models that serve as the single source of truth for
questions and their reference data.

All models in this package are frozen dataclasses. Items are loaded once
and never mutated; pools only ever hold references to them.
"""

from .items import AnswerOption, Category, Context, Item, Tag
from .catalog import Catalog

__all__ = [
    "AnswerOption",
    "Catalog",
    "Category",
    "Context",
    "Item",
    "Tag",
]
