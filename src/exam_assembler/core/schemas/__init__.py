"""
Payload validation for question and metadata JSON files.
"""

from .validator import (
    ValidationError,
    validate_item_payload,
    validate_items_payload,
    validate_metadata_payload,
)

__all__ = [
    "ValidationError",
    "validate_item_payload",
    "validate_items_payload",
    "validate_metadata_payload",
]
