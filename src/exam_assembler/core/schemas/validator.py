"""
Payload Validation Utilities

Validates raw JSON dictionaries before they are turned into models.

The question file and the metadata file come from a hand-maintained
database export. Both use the legacy German keys (``frage_id``,
``fragekategorie_id``, ...); newer exports use plain English keys. Either
spelling is accepted, but a record must use one of them for every
required field.

Fail fast on any violation: an item that silently drops out of the pool is
invisible in the UI with no indication why.
"""

from __future__ import annotations

from typing import Any, Iterable, Sequence


# (english, legacy) spellings of the required item fields
ITEM_REQUIRED_FIELDS: tuple[tuple[str, str], ...] = (
    ("id", "frage_id"),
    ("category_id", "fragekategorie_id"),
    ("text", "frage_text"),
)

METADATA_SECTIONS: dict[str, tuple[tuple[str, str], ...]] = {
    "fragetags": (("id", "tagid"), ("name", "tagname")),
    "fragekategorie": (("id", "kategorieid"), ("name", "kategoriename")),
    "fragekontext": (("id", "fragekontext_id"), ("source", "fragekontext_quelle")),
    "antwortoption": (("item_id", "frage_id"), ("option_id", "option_id"), ("text", "option_text")),
}


class ValidationError(Exception):
    """Raised when data fails payload validation."""

    def __init__(self, message: str, path: str = "", errors: list[str] | None = None):
        super().__init__(message)
        self.path = path
        self.errors = errors or []


def _is_int(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


def _first_present(data: dict, keys: Iterable[str]) -> Any:
    for key in keys:
        if key in data:
            return data[key]
    return None


def validate_item_payload(data: dict[str, Any], *, index: int | None = None) -> None:
    """
    Validate one question record.

    Args:
        data: Question dictionary from the questions file
        index: Position in the file, used in error paths

    Raises:
        ValidationError: If data is invalid
    """
    where = f"[{index}]" if index is not None else ""

    if not isinstance(data, dict):
        raise ValidationError(
            f"Question record{where} must be an object, got {type(data).__name__}",
            path=where,
        )

    missing = [
        english for english, legacy in ITEM_REQUIRED_FIELDS
        if english not in data and legacy not in data
    ]
    if missing:
        raise ValidationError(
            f"Question record{where} missing required fields: {missing}",
            path=where,
            errors=[f"Missing field: {f}" for f in missing],
        )

    item_id = _first_present(data, ("id", "frage_id"))
    if not _is_int(item_id) or item_id <= 0:
        raise ValidationError(
            f"Invalid question id{where}: {item_id!r} (must be a positive integer)",
            path=f"{where}.id",
        )

    category_id = _first_present(data, ("category_id", "fragekategorie_id"))
    if not _is_int(category_id):
        raise ValidationError(
            f"Invalid category id for question {item_id}: {category_id!r}",
            path=f"{where}.category_id",
        )

    text = _first_present(data, ("text", "frage_text"))
    if not isinstance(text, str):
        raise ValidationError(
            f"Question {item_id} text must be a string, got {type(text).__name__}",
            path=f"{where}.text",
        )

    context_id = _first_present(data, ("context_id", "fragekontext_id"))
    if context_id is not None and not _is_int(context_id):
        raise ValidationError(
            f"Invalid context id for question {item_id}: {context_id!r}",
            path=f"{where}.context_id",
        )

    tags = _first_present(data, ("tags", "fragetags"))
    if tags is not None:
        if not isinstance(tags, list) or not all(_is_int(t) for t in tags):
            raise ValidationError(
                f"Tags for question {item_id} must be a list of integers: {tags!r}",
                path=f"{where}.tags",
            )


def validate_items_payload(data: Sequence[Any]) -> None:
    """Validate a whole questions file (a JSON list of records)."""
    if not isinstance(data, list):
        raise ValidationError(
            f"Questions file must contain a list, got {type(data).__name__}"
        )
    for index, record in enumerate(data):
        validate_item_payload(record, index=index)


def validate_metadata_payload(data: dict[str, Any]) -> None:
    """
    Validate the tags/categories/contexts/answers file.

    Every section is optional, but a present section must be a list of
    objects carrying its key fields.

    Raises:
        ValidationError: If data is invalid
    """
    if not isinstance(data, dict):
        raise ValidationError(
            f"Metadata file must contain an object, got {type(data).__name__}"
        )

    errors: list[str] = []
    for section, required in METADATA_SECTIONS.items():
        records = data.get(section)
        if records is None:
            continue
        if not isinstance(records, list):
            errors.append(f"{section}: must be a list")
            continue
        for index, record in enumerate(records):
            if not isinstance(record, dict):
                errors.append(f"{section}[{index}]: must be an object")
                continue
            missing = [
                english for english, legacy in required
                if english not in record and legacy not in record
            ]
            if missing:
                errors.append(f"{section}[{index}]: missing {missing}")

    if errors:
        raise ValidationError(
            f"Invalid metadata ({len(errors)} problems): {errors[0]}",
            errors=errors,
        )
