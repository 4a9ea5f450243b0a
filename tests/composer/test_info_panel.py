"""
Unit Tests for InfoRequest and InfoPanel
"""

import pytest

from exam_assembler.composer import INFO_PANEL_ID, InfoPanel, InfoRequest


@pytest.fixture
def request_for(catalog):
    def build(item_id):
        return InfoRequest.for_item(catalog, catalog.get_item(item_id))
    return build


class TestInfoRequest:

    def test_for_item_collects_reference_data(self, request_for):
        request = request_for(1)
        assert request.context.source == "Faust I"
        assert [tag.name for tag in request.tags] == ["Klassik"]
        assert [a.text for a in request.answers] == ["Goethe", "Schiller"]
        assert [a.correct for a in request.answers] == [True, False]

    def test_for_item_without_reference_data(self, request_for):
        request = request_for(2)
        assert request.context is None
        assert request.tags == ()
        assert request.answers == ()


class TestInfoPanel:

    def test_open_replaces_previous_panel(self, request_for):
        panel = InfoPanel()
        panel.open(request_for(1))
        panel.open(request_for(3))
        assert panel.item_id == 3

    def test_close_reports_whether_open(self, request_for):
        panel = InfoPanel()
        assert panel.close() is False
        panel.open(request_for(1))
        assert panel.close() is True
        assert not panel.is_open

    @pytest.mark.parametrize("target", [None, "save-button", "category-select", "question-x"])
    def test_outside_click_closes(self, request_for, target):
        panel = InfoPanel()
        panel.open(request_for(1))
        assert panel.handle_outside_click(target) is True
        assert not panel.is_open

    @pytest.mark.parametrize("target", [INFO_PANEL_ID, "question-1", "question-7"])
    def test_click_on_panel_or_item_keeps_it_open(self, request_for, target):
        panel = InfoPanel()
        panel.open(request_for(1))
        assert panel.handle_outside_click(target) is False
        assert panel.is_open

    def test_item_kind_is_configurable(self, request_for):
        panel = InfoPanel(item_kind="frage")
        panel.open(request_for(1))
        assert panel.handle_outside_click("frage-5") is False
        assert panel.handle_outside_click("question-5") is True
