"""
Module: composer.output

Purpose:
    SaveSurface implementations for the chosen question sequence.

Key Classes:
    - JsonPlanWriter: JSON test plan
    - PdfQuestionSheet: Printable A4 question sheet

Dependencies:
    - reportlab: PDF generation
"""

from .plan_writer import JsonPlanWriter, SaveError, build_plan, read_plan
from .question_sheet import PdfQuestionSheet

__all__ = [
    "JsonPlanWriter",
    "PdfQuestionSheet",
    "SaveError",
    "build_plan",
    "read_plan",
]
