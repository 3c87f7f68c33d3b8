"""
Interaction controller.

Top-level state machine that decides what a map click means and routes
user commands to the store, the polygon draft and the popup selection.
UI-agnostic - map toolkits call into it and listen to its events.
"""

import logging
from enum import Enum
from gettext import gettext as _
from typing import Callable, Dict, Optional, Union

from ..errors import InsufficientPoints, InvalidSelectionTransition
from .events import AnnotationEvent, EventEmitter, EventType
from .selection import SelectionState
from .state import AnnotationSnapshot, GeoPoint, Marker, Viewing
from .store import AnnotationStore

logger = logging.getLogger(__name__)

DEFAULT_MARKER_TITLE = "New Location"
DEFAULT_MARKER_IMAGE = "https://via.placeholder.com/150"


class Mode(Enum):
    """How the next map click is interpreted."""

    IDLE = "idle"
    ADDING_MARKER = "adding_marker"


class InteractionController:
    """
    Interprets map clicks and user commands.

    In ``Mode.IDLE`` a click appends a vertex to the polygon draft; in
    ``Mode.ADDING_MARKER`` it creates a marker and returns to idle.
    Every click has an effect.
    """

    def __init__(
        self,
        store: AnnotationStore,
        selection: Optional[SelectionState] = None,
        default_title: str = DEFAULT_MARKER_TITLE,
        default_image: str = DEFAULT_MARKER_IMAGE,
    ):
        self.store = store
        self.selection = selection if selection is not None else SelectionState(store)
        self.default_title = default_title
        self.default_image = default_image

        self._mode = Mode.IDLE
        self._click_handlers: Dict[Mode, Callable[[float, float], Union[Marker, GeoPoint]]] = {
            Mode.IDLE: self._add_draft_point,
            Mode.ADDING_MARKER: self._place_marker,
        }

    @property
    def events(self) -> EventEmitter:
        return self.store.events

    @property
    def mode(self) -> Mode:
        return self._mode

    @property
    def draft(self):
        return self.store.draft

    def _set_mode(self, mode: Mode):
        if mode is self._mode:
            return
        previous, self._mode = self._mode, mode
        logger.debug("Mode %s -> %s", previous.value, mode.value)
        self.events.emit(
            AnnotationEvent(
                EventType.MODE_CHANGED, {"from": previous.value, "to": mode.value}
            )
        )

    # Map events

    def on_map_click(self, lng: float, lat: float) -> Union[Marker, GeoPoint]:
        """
        Handle a click at WGS84 ``lng``/``lat``.

        Returns:
            The created marker, or the vertex added to the draft.
        """
        return self._click_handlers[self._mode](lng, lat)

    def _place_marker(self, lng: float, lat: float) -> Marker:
        marker = self.store.add_marker(lng, lat, self.default_title, self.default_image)
        self._set_mode(Mode.IDLE)
        return marker

    def _add_draft_point(self, lng: float, lat: float) -> GeoPoint:
        return self.store.draft.add_point(lng, lat)

    # User commands

    def request_add_marker(self):
        """Make the next map click place a marker."""
        self._set_mode(Mode.ADDING_MARKER)

    def clear_draft_polygon(self):
        self.store.clear_draft()

    def save_draft_polygon(self) -> bool:
        """
        Commit the draft as a saved polygon.

        Returns:
            True if saved. False if the draft is too short; a
            ``POLYGON_REJECTED`` event carries the notice for the user and
            the draft is kept.
        """
        try:
            self.store.draft.commit()
        except InsufficientPoints as e:
            logger.info("Polygon rejected: %s", e)
            self.events.emit(
                AnnotationEvent(
                    EventType.POLYGON_REJECTED,
                    {
                        "notice": _("Polygon must have at least {n} points").format(
                            n=e.min_points
                        ),
                        "error": e.to_error_dict(),
                        "num_points": e.num_points,
                    },
                )
            )
            return False
        return True

    def select_marker(self, marker_id: int) -> bool:
        """Open the popup of a stored marker. Unknown ids are ignored."""
        marker = self.store.get_marker(marker_id)
        if marker is None:
            logger.warning("select_marker: no marker with id %s", marker_id)
            return False
        self.selection.view(marker)
        return True

    def start_edit_marker(self):
        """Start editing the marker whose popup is open."""
        current = self.selection.current
        if not isinstance(current, Viewing):
            raise InvalidSelectionTransition(_("No marker popup is open"))
        self.selection.begin_edit(current.marker)

    def update_edit_field(self, key: str, value: str):
        self.selection.update_edit_draft(**{key: value})

    def save_edit(self) -> Marker:
        return self.selection.commit_edit()

    def delete_marker(self, marker_id: int):
        self.selection.delete_and_clear(marker_id)

    def close_popup(self):
        self.selection.cancel()

    def snapshot(self) -> AnnotationSnapshot:
        """Current state, for display and debugging."""
        return AnnotationSnapshot(
            mode=self._mode.value,
            markers=list(self.store.markers),
            polygons=list(self.store.polygons),
            draft=list(self.store.draft.points),
            selection=self.selection.current,
        )
