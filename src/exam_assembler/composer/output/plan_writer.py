"""
Module: composer.output.plan_writer

Purpose:
    SaveSurface that writes the chosen question ids, in test order, to a
    JSON test plan, and reads such a plan back.

Key Functions:
    - build_plan(): Plan dictionary for a chosen id sequence
    - read_plan(): Ids from a plan file

Key Classes:
    - JsonPlanWriter: SaveSurface writing build_plan() output
    - SaveError: Write/read failure

Dependencies:
    - json (std)
    - datetime (std)

Used By:
    - gui.main_window: Save / open test plan
"""

from __future__ import annotations

import json
import logging
from datetime import datetime
from pathlib import Path
from typing import Dict, List, Optional, Sequence

logger = logging.getLogger(__name__)

PLAN_SCHEMA_VERSION = 1


class SaveError(Exception):
    """Error writing or reading a test plan."""

    def __init__(self, message: str, path: Optional[Path] = None):
        super().__init__(message)
        self.path = path


def build_plan(
    chosen_ids: Sequence[int],
    *,
    counts: Optional[Dict[int, int]] = None,
    title: str = "",
) -> dict:
    """
    Build the plan dictionary.

    Args:
        chosen_ids: Question ids in test order
        counts: Optional questions-per-category summary
        title: Optional test title

    Returns:
        Dictionary ready for JSON serialization

    Example:
        >>> build_plan([5, 1, 9])["question_ids"]
        [5, 1, 9]
    """
    from exam_assembler import __version__

    plan = {
        "schema_version": PLAN_SCHEMA_VERSION,
        "generated_at": datetime.now().isoformat(timespec="seconds"),
        "app_version": __version__,
        "title": title,
        "question_count": len(chosen_ids),
        "question_ids": list(chosen_ids),
    }
    if counts is not None:
        # JSON object keys are strings
        plan["per_category"] = {str(key): value for key, value in counts.items()}
    return plan


def read_plan(path: Path) -> List[int]:
    """
    Read question ids from a plan file.

    Raises:
        SaveError: If the file is missing or malformed
    """
    path = Path(path)
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except (OSError, json.JSONDecodeError) as e:
        raise SaveError(f"Failed to read test plan {path}: {e}", path) from e

    ids = data.get("question_ids") if isinstance(data, dict) else None
    if not isinstance(ids, list) or not all(isinstance(i, int) and not isinstance(i, bool) for i in ids):
        raise SaveError(f"Test plan {path.name} has no valid question_ids list", path)
    return ids


class JsonPlanWriter:
    """
    Writes the chosen ids to a JSON plan file.

    Attributes:
        path: Target file; parent directories are created
        title: Stored in the plan
        counts_provider: Optional callable returning per-category counts
    """

    def __init__(self, path: Path, title: str = "", counts_provider=None):
        self.path = Path(path)
        self.title = title
        self.counts_provider = counts_provider

    def save(self, chosen_ids: Sequence[int]) -> None:
        counts = self.counts_provider() if self.counts_provider else None
        plan = build_plan(chosen_ids, counts=counts, title=self.title)
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            with open(self.path, "w", encoding="utf-8") as f:
                json.dump(plan, f, indent=2, ensure_ascii=False)
        except OSError as e:
            raise SaveError(f"Failed to write test plan {self.path}: {e}", self.path) from e
        logger.info(f"Wrote test plan with {len(chosen_ids)} question(s) to {self.path}")
