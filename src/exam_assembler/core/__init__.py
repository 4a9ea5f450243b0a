"""
Exam Assembler Core Package

Shared data models and payload validation used by the composer engine,
the loaders and the GUI.
"""

from .models import AnswerOption, Catalog, Category, Context, Item, Tag
from .schemas import ValidationError

__all__ = [
    "AnswerOption",
    "Catalog",
    "Category",
    "Context",
    "Item",
    "Tag",
    "ValidationError",
]
