"""
Module: composer.loading.loader

Purpose:
    Load the question pool and its reference data from the two JSON
    files exported from the question database, with full validation.

    questions file: list of question records
        [{"frage_id": 1, "fragekategorie_id": 2, "frage_text": "...",
          "fragekontext_id": 4, "tags": [1, 3]}, ...]

    metadata file: tags, categories, contexts and answer options
        {"fragetags": [...], "fragekategorie": [...],
         "fragekontext": [...], "antwortoption": [...]}

Key Functions:
    - load_catalog(): Load and validate both files into a Catalog
    - parse_questions(): Records → Items
    - parse_metadata(): Metadata dict → reference tuples

Key Classes:
    - JsonDataSource: DataSource over the two files
    - LoaderError: Exception for loading failures

Dependencies:
    - json (std)
    - pathlib (std)
    - exam_assembler.core.models: Catalog, Item, ...
    - exam_assembler.core.schemas: Payload validation

Used By:
    - gui.main_window: Open data files
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple

from exam_assembler.core.models import AnswerOption, Catalog, Category, Context, Item, Tag
from exam_assembler.core.schemas import (
    ValidationError,
    validate_items_payload,
    validate_metadata_payload,
)

logger = logging.getLogger(__name__)


class LoaderError(Exception):
    """Error loading the question pool."""
    pass


def _read_json(path: Path) -> Any:
    if not path.exists():
        raise LoaderError(f"File does not exist: {path}")
    try:
        with open(path, "r", encoding="utf-8") as f:
            return json.load(f)
    except json.JSONDecodeError as e:
        raise LoaderError(f"Invalid JSON in {path.name}: {e}") from e
    except OSError as e:
        raise LoaderError(f"Failed to read {path}: {e}") from e


def parse_questions(records: List[Dict[str, Any]]) -> Tuple[Item, ...]:
    """
    Validate question records and build Items.

    Raises:
        ValidationError: If any record is malformed
    """
    validate_items_payload(records)
    return tuple(Item.from_dict(record) for record in records)


def parse_metadata(
    data: Dict[str, Any],
) -> Tuple[Tuple[Category, ...], Tuple[Context, ...], Tuple[Tag, ...], Tuple[AnswerOption, ...]]:
    """
    Validate the metadata dict and build the reference records.

    Raises:
        ValidationError: If the metadata is malformed
    """
    validate_metadata_payload(data)
    categories = tuple(Category.from_dict(c) for c in data.get("fragekategorie") or [])
    contexts = tuple(Context.from_dict(c) for c in data.get("fragekontext") or [])
    tags = tuple(Tag.from_dict(t) for t in data.get("fragetags") or [])
    answers = tuple(AnswerOption.from_dict(a) for a in data.get("antwortoption") or [])
    return categories, contexts, tags, answers


def load_catalog(
    questions_path: Path,
    metadata_path: Optional[Path] = None,
) -> Catalog:
    """
    Load the question pool.

    Process:
    1. Read and validate the questions file
    2. Read and validate the metadata file (if given)
    3. Build the Catalog (rejects duplicate ids)

    Args:
        questions_path: JSON list of question records
        metadata_path: JSON object with tags/categories/contexts/answers

    Returns:
        Catalog with all items in file order

    Raises:
        LoaderError: If a file is missing, unreadable or malformed

    Example:
        >>> catalog = load_catalog(Path("02-fragen.json"), Path("01-tags-cats.json"))
        >>> len(catalog)
        120
    """
    raw_questions = _read_json(Path(questions_path))
    try:
        items = parse_questions(raw_questions)
    except (ValidationError, ValueError) as e:
        raise LoaderError(f"Invalid questions file {Path(questions_path).name}: {e}") from e

    categories: Tuple[Category, ...] = ()
    contexts: Tuple[Context, ...] = ()
    tags: Tuple[Tag, ...] = ()
    answers: Tuple[AnswerOption, ...] = ()
    if metadata_path is not None:
        raw_metadata = _read_json(Path(metadata_path))
        try:
            categories, contexts, tags, answers = parse_metadata(raw_metadata)
        except (ValidationError, ValueError) as e:
            raise LoaderError(f"Invalid metadata file {Path(metadata_path).name}: {e}") from e

    try:
        catalog = Catalog(
            items=items,
            categories=categories,
            contexts=contexts,
            tags=tags,
            answers=answers,
        )
    except ValueError as e:
        raise LoaderError(str(e)) from e

    if tags and categories and contexts and answers:
        logger.info("Tags, categories, contexts and answer options loaded")
    logger.info(f"Loaded {len(items)} questions from {Path(questions_path).name}")
    return catalog


class JsonDataSource:
    """
    DataSource over the questions file and the optional metadata file.

    Attributes:
        questions_path: JSON list of question records
        metadata_path: JSON object with reference data, or None
    """

    def __init__(self, questions_path: Path, metadata_path: Optional[Path] = None):
        self.questions_path = Path(questions_path)
        self.metadata_path = Path(metadata_path) if metadata_path else None

    def load(self) -> Catalog:
        return load_catalog(self.questions_path, self.metadata_path)

    def __repr__(self) -> str:
        return f"JsonDataSource({self.questions_path.name!r}, {self.metadata_path!r})"
