"""
Unit Tests for the PDF question sheet
"""

import logging
import re

import pytest

from exam_assembler.composer.output import PdfQuestionSheet, SaveError
from exam_assembler.core.models import Catalog, Item


class TestPdfQuestionSheet:

    def test_save_writes_pdf(self, catalog, tmp_path):
        path = tmp_path / "sheet.pdf"
        PdfQuestionSheet(path, catalog).save([5, 1, 4])
        assert path.read_bytes().startswith(b"%PDF")

    def test_save_empty_test(self, catalog, tmp_path):
        path = tmp_path / "empty.pdf"
        PdfQuestionSheet(path, catalog).save([])
        assert path.read_bytes().startswith(b"%PDF")

    def test_lines_number_questions_and_list_answers(self, catalog, tmp_path):
        sheet = PdfQuestionSheet(tmp_path / "s.pdf", catalog)
        texts = [text for _font, text in sheet._lines_for(2, 1)]
        assert texts[0].startswith("2. Wer schrieb Faust?")
        assert "   (Faust I)" in texts
        assert "   a: Goethe" in texts
        assert texts[-1] == ""

    def test_answers_can_be_left_out(self, catalog, tmp_path):
        sheet = PdfQuestionSheet(tmp_path / "s.pdf", catalog, include_answers=False)
        texts = [text for _font, text in sheet._lines_for(1, 1)]
        assert "   a: Goethe" not in texts

    def test_long_test_spans_pages(self, tmp_path, caplog):
        items = tuple(Item(i, 1, "Eine lange Frage " * 20) for i in range(1, 61))
        path = tmp_path / "long.pdf"
        with caplog.at_level(logging.INFO, logger="exam_assembler"):
            PdfQuestionSheet(path, Catalog(items=items)).save([item.id for item in items])
        pages = int(re.search(r"on (\d+) page", caplog.text).group(1))
        assert pages > 1

    def test_unknown_question_raises(self, catalog, tmp_path):
        with pytest.raises(SaveError, match="not in the catalog"):
            PdfQuestionSheet(tmp_path / "s.pdf", catalog).save([999])
