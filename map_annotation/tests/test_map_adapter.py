"""
Tests for MapViewAdapter.
"""

from unittest.mock import Mock

import pytest

from map_annotation.core.annotation import GeoPoint, NoSelection
from map_annotation.interfaces import MapView, MapViewAdapter
from map_annotation.utils.config import default_config


@pytest.fixture
def view():
    return MapView.from_config(default_config())


@pytest.fixture
def render():
    return Mock()


@pytest.fixture
def notice():
    return Mock()


@pytest.fixture
def adapter(controller, view, render, notice):
    return MapViewAdapter(controller, view, render_callback=render, notice_callback=notice)


def place_marker(adapter, lng=100.5, lat=13.7):
    adapter.controller.request_add_marker()
    return adapter.click(lng, lat)


class TestMapViewAdapter:
    """Test suite for MapViewAdapter."""

    def test_view_from_config(self, view):
        assert view.longitude == 100.523186
        assert view.latitude == 13.736717
        assert view.zoom == 12
        assert view.style == "mapbox://styles/mapbox/streets-v11"

    def test_empty_scene(self, adapter, view):
        scene = adapter.get_visualization()

        assert scene.view == view
        assert scene.mode == "idle"
        assert scene.pins == []
        assert scene.polygons == []
        assert scene.popup is None

    def test_render_on_change(self, adapter, render):
        adapter.click(1, 1)

        render.assert_called()

    def test_pins_and_overlays(self, adapter):
        marker = place_marker(adapter)
        for lng, lat in [(1, 1), (2, 1), (2, 2)]:
            adapter.click(lng, lat)
        adapter.controller.save_draft_polygon()
        adapter.click(5, 5)

        scene = adapter.get_visualization()

        assert [pin.marker_id for pin in scene.pins] == [marker.id]
        assert scene.pins[0].position == GeoPoint(100.5, 13.7)
        saved, draft = scene.polygons
        assert saved.filled and not saved.is_draft
        assert len(saved.points) == 3
        assert draft.is_draft and not draft.filled
        assert draft.points == (GeoPoint(5, 5),)

    def test_view_popup(self, adapter):
        marker = place_marker(adapter)
        assert adapter.marker_clicked(marker.id)

        scene = adapter.get_visualization()

        assert scene.pins[0].selected
        assert scene.popup.kind == "view"
        assert scene.popup.header == marker.title
        assert scene.popup.image == marker.image
        assert scene.popup.anchor == marker.position
        assert scene.popup.actions == ("edit", "delete")

    def test_edit_through_popup(self, adapter):
        marker = place_marker(adapter)
        adapter.marker_clicked(marker.id)
        adapter.popup_action("edit")

        popup = adapter.get_popup()
        assert popup.kind == "edit"
        assert popup.header == "Edit Marker Details"
        assert popup.actions == ("save", "delete")

        adapter.field_changed("title", "Temple")
        adapter.field_changed("image", "temple.png")
        assert adapter.get_popup().title == "Temple"
        adapter.popup_action("save")

        stored = adapter.controller.store.get_marker(marker.id)
        assert (stored.title, stored.image) == ("Temple", "temple.png")
        assert adapter.get_popup().kind == "view"

    @pytest.mark.parametrize("edit_first", [False, True])
    def test_delete_through_popup(self, adapter, edit_first):
        marker = place_marker(adapter)
        adapter.marker_clicked(marker.id)
        if edit_first:
            adapter.popup_action("edit")
        adapter.popup_action("delete")

        assert adapter.controller.store.markers == ()
        assert adapter.get_popup() is None

    def test_popup_closed(self, adapter):
        marker = place_marker(adapter)
        adapter.marker_clicked(marker.id)
        adapter.popup_closed()

        assert adapter.controller.selection.current == NoSelection()

    def test_action_without_popup_is_ignored(self, adapter):
        place_marker(adapter)
        adapter.popup_action("delete")

        assert len(adapter.controller.store.markers) == 1

    def test_action_not_offered_is_ignored(self, adapter):
        marker = place_marker(adapter)
        adapter.marker_clicked(marker.id)
        adapter.popup_action("save")

        assert adapter.get_popup().kind == "view"

    def test_rejected_polygon_notice(self, adapter, notice):
        adapter.click(1, 1)
        adapter.controller.save_draft_polygon()

        notice.assert_called_once_with("Polygon must have at least 3 points")

    def test_status(self, adapter):
        place_marker(adapter)
        adapter.click(1, 1)

        assert adapter.get_status() == {
            "num_markers": 1,
            "num_polygons": 0,
            "num_draft_points": 1,
        }

    def test_detach(self, adapter, render):
        adapter.detach()
        render.reset_mock()
        adapter.click(1, 1)

        render.assert_not_called()
