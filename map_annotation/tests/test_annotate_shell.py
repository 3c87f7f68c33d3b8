"""
Tests for the line-oriented annotation session.
"""

import json
from unittest.mock import Mock

import pytest

from map_annotation.cli.annotate.shell import AnnotationShell
from map_annotation.core.factory import create_controller
from map_annotation.core.persistence import JsonDirectoryStore
from map_annotation.interfaces import MapView
from map_annotation.utils.config import default_config


@pytest.fixture
def output():
    return []


@pytest.fixture
def shell(controller, output):
    return AnnotationShell(controller, MapView(100.5, 13.7, 12), write=output.append)


class TestAnnotationShell:
    """Test suite for AnnotationShell."""

    def test_add_marker(self, shell, controller, output):
        shell.run(["add-marker", "click 100.5 13.7"])

        marker = controller.store.markers[0]
        assert (marker.longitude, marker.latitude) == (100.5, 13.7)
        assert f"Added marker {marker.id}" in output

    def test_polygon(self, shell, controller, output):
        shell.run(["click 1 1", "click 2 1", "save-polygon", "click 2 2", "save-polygon"])

        assert output[0] == "! Polygon must have at least 3 points"
        assert "Saved polygon with 3 points" in output
        assert len(controller.store.polygons) == 1

    def test_clear_polygon(self, shell, controller):
        shell.run(["click 1 1", "clear-polygon"])

        assert len(controller.draft) == 0

    def test_edit_marker(self, shell, controller, output):
        shell.run(["add-marker", "click 1 1"])
        marker_id = controller.store.markers[0].id

        shell.run(
            [
                f"select {marker_id}",
                "edit",
                'set title "Grand Palace"',
                "save-edit",
            ]
        )

        assert controller.store.get_marker(marker_id).title == "Grand Palace"
        assert output[-1].startswith("[view] Grand Palace")

    def test_set_joins_words(self, shell, controller):
        shell.run(["add-marker", "click 1 1"])
        marker_id = controller.store.markers[0].id
        shell.run([f"select {marker_id}", "edit", "set title Wat Pho", "save-edit"])

        assert controller.store.get_marker(marker_id).title == "Wat Pho"

    def test_delete(self, shell, controller):
        shell.run(["add-marker", "click 1 1"])
        marker_id = controller.store.markers[0].id
        shell.run([f"delete {marker_id}"])

        assert controller.store.markers == ()

    def test_errors_are_reported(self, shell, output):
        shell.run(["edit", "select 5", "click east north", "click 1", "set id 3", "bogus"])

        assert output[0] == "Error: No marker popup is open"
        assert output[1] == "No marker with id 5"
        assert output[2].startswith("Error:")
        assert output[3] == "Wrong arguments for click"
        assert output[4] == "Error: No marker is being edited"
        assert output[5] == "Unknown command: bogus"

    def test_errors_inside_commands_propagate(self, shell, controller, output):
        controller.clear_draft_polygon = Mock(side_effect=TypeError("broken"))

        with pytest.raises(TypeError):
            shell.execute("clear-polygon")
        assert output == []

    def test_extra_arguments_are_rejected(self, shell, controller, output):
        controller.clear_draft_polygon = Mock()
        shell.execute("clear-polygon now")

        assert output == ["Wrong arguments for clear-polygon"]
        controller.clear_draft_polygon.assert_not_called()

    def test_quit_stops(self, shell, controller):
        shell.run(["click 1 1", "quit", "click 2 2"])

        assert len(controller.draft) == 1

    def test_comments_and_blank_lines(self, shell, output):
        assert shell.execute("") is True
        assert shell.execute("# just a comment") is True
        assert output == []

    def test_status(self, shell, output):
        shell.run(["click 1 1", "status"])

        assert output[-1] == "mode=idle markers=0 polygons=0 draft=1"

    def test_persists_to_storage_folder(self, tmp_path, output):
        cfg = default_config()
        cfg.storage.path = str(tmp_path)
        controller = create_controller(cfg)
        shell = AnnotationShell(controller, MapView.from_config(cfg), write=output.append)

        shell.run(["add-marker", "click 100.5 13.7"])

        stored = json.loads((tmp_path / "markers.json").read_text(encoding="utf-8"))
        assert stored[0]["title"] == "New Location"
        assert JsonDirectoryStore(tmp_path).get("polygons") is None
