"""
Module: composer.info

Purpose:
    State of the question info panel opened by an alt-click: which
    question it shows and when it must close.

Key Classes:
    - InfoRequest: Everything the panel displays for one question
    - InfoPanel: Open/close state and the outside-click rule

Dependencies:
    - dataclasses (std)
    - logging (std)
    - composer.surfaces: element id convention

Used By:
    - composer.controller
    - gui.widgets.info_popup: Renders an InfoRequest
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Optional, Tuple

from exam_assembler.core.models import AnswerOption, Catalog, Context, Item, Tag

from .surfaces import INFO_PANEL_ID, parse_element_id

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class InfoRequest:
    """
    Details shown for one question.

    Attributes:
        item: The question
        answers: Its answer options, in stored order
        context: Source text the question refers to, if any
        tags: Tags attached to the question that the catalog knows
    """

    item: Item
    answers: Tuple[AnswerOption, ...] = field(default_factory=tuple)
    context: Optional[Context] = None
    tags: Tuple[Tag, ...] = field(default_factory=tuple)

    @classmethod
    def for_item(cls, catalog: Catalog, item: Item) -> InfoRequest:
        """Collect answers, context and tags of ``item`` from ``catalog``."""
        tag_names = {tag.id: tag for tag in catalog.tags}
        return cls(
            item=item,
            answers=catalog.answers_for(item.id),
            context=catalog.get_context(item.context_id),
            tags=tuple(tag_names[t] for t in item.tags if t in tag_names),
        )


class InfoPanel:
    """
    At most one info panel is open at a time.

    Opening a panel always closes the previous one first. A click anywhere
    that is neither the panel itself nor an item element closes it.
    """

    def __init__(self, item_kind: str = "question"):
        self.item_kind = item_kind
        self.current: Optional[InfoRequest] = None

    @property
    def is_open(self) -> bool:
        return self.current is not None

    @property
    def item_id(self) -> Optional[int]:
        return self.current.item.id if self.current else None

    def open(self, request: InfoRequest) -> None:
        self.close()
        self.current = request
        logger.debug(f"Info panel opened for question {request.item.id}")

    def close(self) -> bool:
        """Close the panel. Returns True if one was open."""
        if self.current is None:
            return False
        logger.debug(f"Info panel closed for question {self.current.item.id}")
        self.current = None
        return True

    def is_inside(self, target_id: Optional[str]) -> bool:
        """True if ``target_id`` is the panel or an item element."""
        if target_id == INFO_PANEL_ID:
            return True
        parsed = parse_element_id(target_id)
        return parsed is not None and parsed[0] == self.item_kind

    def handle_outside_click(self, target_id: Optional[str]) -> bool:
        """
        Apply the outside-click rule for a click on ``target_id``.

        Returns:
            True if the panel was closed by this click
        """
        if self.is_inside(target_id):
            return False
        return self.close()
