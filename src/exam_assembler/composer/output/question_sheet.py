"""
Module: composer.output.question_sheet

Purpose:
    SaveSurface that prints the chosen questions, in test order, to an A4
    PDF: numbered question text, context source where present, and the
    answer options.

Key Classes:
    - PdfQuestionSheet: SaveSurface writing the PDF

Dependencies:
    - reportlab: PDF generation
    - exam_assembler.core.models: Catalog

Used By:
    - gui.main_window: Export PDF action
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import List, Sequence

from reportlab.lib.pagesizes import A4
from reportlab.lib.utils import simpleSplit
from reportlab.pdfgen import canvas

from exam_assembler.core.models import Catalog

from .plan_writer import SaveError

logger = logging.getLogger(__name__)

# Constants
A4_WIDTH, A4_HEIGHT = A4
MARGIN = 50
LINE_HEIGHT = 15
FONT = "Helvetica"
FONT_BOLD = "Helvetica-Bold"
FONT_SIZE = 11


class PdfQuestionSheet:
    """
    Renders chosen questions to a PDF question sheet.

    Attributes:
        path: Target PDF file
        catalog: Source of question texts and answers
        title: Heading on the first page
        include_answers: Print answer options under each question
    """

    def __init__(
        self,
        path: Path,
        catalog: Catalog,
        title: str = "Aufnahmetest",
        include_answers: bool = True,
    ):
        self.path = Path(path)
        self.catalog = catalog
        self.title = title
        self.include_answers = include_answers

    def _lines_for(self, number: int, item_id: int) -> List[tuple[str, str]]:
        """(font, text) lines of one question block."""
        item = self.catalog.get_item(item_id)
        if item is None:
            raise SaveError(f"Question {item_id} is not in the catalog", self.path)

        width = A4_WIDTH - 2 * MARGIN
        lines: List[tuple[str, str]] = []
        for i, line in enumerate(simpleSplit(f"{number}. {item.text}", FONT_BOLD, FONT_SIZE, width)):
            lines.append((FONT_BOLD, line if i == 0 else f"   {line}"))

        context = self.catalog.get_context(item.context_id)
        if context is not None:
            for line in simpleSplit(f"({context.source})", FONT, FONT_SIZE, width - 20):
                lines.append((FONT, f"   {line}"))

        if self.include_answers:
            for answer in self.catalog.answers_for(item_id):
                for line in simpleSplit(answer.label, FONT, FONT_SIZE, width - 20):
                    lines.append((FONT, f"   {line}"))
        lines.append((FONT, ""))
        return lines

    def save(self, chosen_ids: Sequence[int]) -> None:
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            c = canvas.Canvas(str(self.path), pagesize=A4)
            c.setTitle(self.title)

            y = A4_HEIGHT - MARGIN
            c.setFont(FONT_BOLD, FONT_SIZE + 5)
            c.drawString(MARGIN, y, self.title)
            y -= 2 * LINE_HEIGHT

            pages = 1
            for number, item_id in enumerate(chosen_ids, start=1):
                block = self._lines_for(number, item_id)
                # keep a question block on one page when it fits
                if y - len(block) * LINE_HEIGHT < MARGIN and y < A4_HEIGHT - MARGIN:
                    c.showPage()
                    pages += 1
                    y = A4_HEIGHT - MARGIN
                for font, text in block:
                    if y < MARGIN:
                        c.showPage()
                        pages += 1
                        y = A4_HEIGHT - MARGIN
                    c.setFont(font, FONT_SIZE)
                    c.drawString(MARGIN, y, text)
                    y -= LINE_HEIGHT

            c.showPage()
            c.save()
        except OSError as e:
            raise SaveError(f"Failed to write question sheet {self.path}: {e}", self.path) from e

        logger.info(
            f"Rendered question sheet with {len(chosen_ids)} question(s) "
            f"on {pages} page(s) to {self.path}"
        )
