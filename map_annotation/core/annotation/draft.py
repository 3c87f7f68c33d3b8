"""
In-progress polygon built from successive map clicks.
"""

import logging
from typing import TYPE_CHECKING, List, Tuple

from .events import AnnotationEvent, EventType
from .state import GeoPoint, Polygon

if TYPE_CHECKING:
    from .store import AnnotationStore

logger = logging.getLogger(__name__)


class DraftPolygon:
    """
    Ordered, unbounded list of vertices waiting to be committed.

    The draft is never persisted. Committing hands the vertices to the
    owning store; only a successful commit empties the draft.
    """

    def __init__(self, store: "AnnotationStore"):
        self.store = store
        self._points: List[GeoPoint] = []

    @property
    def points(self) -> Tuple[GeoPoint, ...]:
        return tuple(self._points)

    def __len__(self):
        return len(self._points)

    def add_point(self, lng: float, lat: float) -> GeoPoint:
        """Append a vertex. Duplicates are kept."""
        point = GeoPoint(float(lng), float(lat))
        self._points.append(point)

        self.store.events.emit(
            AnnotationEvent(
                EventType.DRAFT_POINT_ADDED,
                {"point": point.to_dict(), "num_points": len(self._points)},
            )
        )
        return point

    def commit(self) -> Polygon:
        """
        Save the draft as a polygon and empty it.

        Raises:
            InsufficientPoints: If the draft is too short. The draft is
                left as it was.
        """
        polygon = self.store.add_polygon(self._points)
        self._points = []
        logger.debug("Committed draft with %d point(s)", len(polygon))
        self.store.events.emit(AnnotationEvent(EventType.DRAFT_CLEARED))
        return polygon

    def clear(self):
        """Discard every vertex."""
        self._points = []
        self.store.events.emit(AnnotationEvent(EventType.DRAFT_CLEARED))
