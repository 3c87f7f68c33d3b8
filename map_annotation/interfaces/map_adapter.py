"""
Map view adapter for the interaction controller.

Bridges the InteractionController with a map rendering toolkit: turns
annotation state into drawable primitives and toolkit callbacks into
controller commands.
"""

import logging
from dataclasses import dataclass, field
from gettext import gettext as _
from typing import Callable, Dict, List, Optional, Tuple

from ..core.annotation import (
    AnnotationEvent,
    Editing,
    EventType,
    GeoPoint,
    InteractionController,
    Marker,
    Viewing,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class MapView:
    """Initial camera of the map."""

    longitude: float
    latitude: float
    zoom: float
    style: str = ""
    access_token: str = ""

    @classmethod
    def from_config(cls, cfg):
        return cls(
            longitude=float(cfg.view.longitude),
            latitude=float(cfg.view.latitude),
            zoom=float(cfg.view.zoom),
            style=cfg.view.style,
            access_token=cfg.view.access_token,
        )


@dataclass(frozen=True)
class MarkerPin:
    """A clickable point marker."""

    marker_id: int
    position: GeoPoint
    selected: bool = False


@dataclass(frozen=True)
class PolygonOverlay:
    """A polygon ring. Saved polygons are filled, the draft is not."""

    points: Tuple[GeoPoint, ...]
    filled: bool = True
    is_draft: bool = False


@dataclass(frozen=True)
class Popup:
    """
    A popup anchored at a marker.

    ``kind`` is ``"view"`` (title and image shown, edit/delete actions)
    or ``"edit"`` (title and image inputs, save/delete actions).
    """

    kind: str
    marker_id: int
    anchor: GeoPoint
    header: str
    title: str
    image: str
    actions: Tuple[str, ...]


@dataclass
class MapScene:
    """Everything a render target needs to draw one frame."""

    view: MapView
    mode: str
    pins: List[MarkerPin] = field(default_factory=list)
    polygons: List[PolygonOverlay] = field(default_factory=list)
    popup: Optional[Popup] = None


VIEW_ACTIONS = ("edit", "delete")
EDIT_ACTIONS = ("save", "delete")


class MapViewAdapter:
    """
    Adapter connecting InteractionController to a map toolkit.

    Provides a compatibility layer that:
    - Translates toolkit callbacks (map click, pin click, popup
      buttons) into controller commands
    - Calls ``render_callback`` after every state change
    - Forwards user notices (rejected polygons) to ``notice_callback``
    - Builds the scene to draw
    """

    def __init__(
        self,
        controller: InteractionController,
        view: MapView,
        render_callback: Optional[Callable[[], None]] = None,
        notice_callback: Optional[Callable[[str], None]] = None,
    ):
        """
        Initialize adapter.

        Args:
            controller: Core interaction controller
            view: Initial camera of the map
            render_callback: Called when the scene must be redrawn
            notice_callback: Called with a message the user must acknowledge
        """
        self.controller = controller
        self.view = view
        self.render_callback = render_callback
        self.notice_callback = notice_callback

        self._setup_event_handlers()

    def _setup_event_handlers(self):
        """Setup event handlers for controller events."""
        self.controller.events.on_any(self._on_state_changed)
        self.controller.events.on(EventType.POLYGON_REJECTED, self._on_polygon_rejected)

    def _on_state_changed(self, event: AnnotationEvent):
        """Redraw on any change."""
        if self.render_callback:
            self.render_callback()

    def _on_polygon_rejected(self, event: AnnotationEvent):
        """Show the rejection notice."""
        if self.notice_callback:
            self.notice_callback(event.data["notice"])

    def detach(self):
        """Stop listening to the controller."""
        self.controller.events.off(EventType.POLYGON_REJECTED, self._on_polygon_rejected)
        for event_type in EventType:
            self.controller.events.off(event_type, self._on_state_changed)

    # Toolkit callbacks

    def click(self, lng: float, lat: float):
        """Map background clicked."""
        return self.controller.on_map_click(lng, lat)

    def marker_clicked(self, marker_id: int):
        """A pin was clicked."""
        return self.controller.select_marker(marker_id)

    def popup_closed(self):
        """The popup close button was clicked."""
        self.controller.close_popup()

    def field_changed(self, key: str, value: str):
        """An input of the edit popup changed."""
        self.controller.update_edit_field(key, value)

    def popup_action(self, action: str):
        """A button of the open popup was clicked."""
        popup = self.get_popup()
        if popup is None or action not in popup.actions:
            logger.warning("Ignoring popup action %r", action)
            return
        if action == "edit":
            self.controller.start_edit_marker()
        elif action == "save":
            self.controller.save_edit()
        elif action == "delete":
            self.controller.delete_marker(popup.marker_id)

    # Scene

    def get_popup(self) -> Optional[Popup]:
        selection = self.controller.selection.current
        if isinstance(selection, Viewing):
            return self._popup("view", selection.marker, selection.marker.title, VIEW_ACTIONS)
        if isinstance(selection, Editing):
            return self._popup("edit", selection.draft, _("Edit Marker Details"), EDIT_ACTIONS)
        return None

    @staticmethod
    def _popup(kind: str, marker: Marker, header: str, actions: Tuple[str, ...]) -> Popup:
        return Popup(
            kind=kind,
            marker_id=marker.id,
            anchor=marker.position,
            header=header,
            title=marker.title,
            image=marker.image,
            actions=actions,
        )

    def get_visualization(self) -> MapScene:
        """
        Get the scene to draw.

        Returns:
            Pins for every marker, filled overlays for saved polygons, an
            unfilled overlay for a non-empty draft and the open popup.
        """
        store = self.controller.store
        selected_id = self.controller.selection.marker_id

        pins = [
            MarkerPin(marker_id=m.id, position=m.position, selected=m.id == selected_id)
            for m in store.markers
        ]
        polygons = [PolygonOverlay(points=p.points) for p in store.polygons]
        draft_points = store.draft.points
        if draft_points:
            polygons.append(
                PolygonOverlay(points=draft_points, filled=False, is_draft=True)
            )

        return MapScene(
            view=self.view,
            mode=self.controller.mode.value,
            pins=pins,
            polygons=polygons,
            popup=self.get_popup(),
        )

    def get_status(self) -> Dict[str, int]:
        store = self.controller.store
        return {
            "num_markers": len(store.markers),
            "num_polygons": len(store.polygons),
            "num_draft_points": len(store.draft),
        }
