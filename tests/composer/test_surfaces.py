"""
Unit Tests for element ids and the collaborator protocols
"""

import pytest

from exam_assembler.composer import (
    INFO_PANEL_ID,
    DataSource,
    RenderSurface,
    SaveSurface,
    element_id,
    parse_element_id,
)
from exam_assembler.composer.loading import JsonDataSource
from exam_assembler.composer.output import JsonPlanWriter


class TestElementIds:

    def test_element_id(self):
        assert element_id("question", 12) == "question-12"

    def test_parse_roundtrip(self):
        assert parse_element_id(element_id("question", 12)) == ("question", 12)

    def test_parse_kind_with_dash(self):
        assert parse_element_id("multi-choice-3") == ("multi-choice", 3)

    @pytest.mark.parametrize("value", [None, "", INFO_PANEL_ID, "question", "question-", "-4", "question-4a"])
    def test_parse_rejects_non_item_ids(self, value):
        assert parse_element_id(value) is None


class TestProtocols:

    def test_recording_surface_is_a_render_surface(self, surface):
        assert isinstance(surface, RenderSurface)

    def test_json_adapters_satisfy_protocols(self, tmp_path):
        assert isinstance(JsonDataSource(tmp_path / "q.json"), DataSource)
        assert isinstance(JsonPlanWriter(tmp_path / "plan.json"), SaveSurface)
