"""
Authoritative annotation storage.

The store owns the markers, the saved polygons and the polygon draft.
Every mutation of markers or saved polygons is written through to the
persistence adapter before the mutating call returns.
"""

import dataclasses
import logging
from typing import Iterable, Iterator, List, Optional, Tuple

from ..errors import InsufficientPoints
from ..persistence import MARKERS_KEY, POLYGONS_KEY, PersistenceAdapter
from ...utils.misc import timestamp_ids
from .draft import DraftPolygon
from .events import AnnotationEvent, EventEmitter, EventType
from .state import MIN_POLYGON_POINTS, GeoPoint, Marker, Polygon

logger = logging.getLogger(__name__)


class AnnotationStore:
    """
    Owns markers and saved polygons and mirrors them into storage.

    Collections are loaded once at construction. Marker ids come from
    ``ids``; by default millisecond timestamps, kept strictly increasing
    and above every id already in storage.
    """

    def __init__(
        self,
        persistence: PersistenceAdapter,
        events: Optional[EventEmitter] = None,
        ids: Optional[Iterator[int]] = None,
    ):
        self.persistence = persistence
        self.events = events if events is not None else EventEmitter()

        self._markers: List[Marker] = []
        self._polygons: List[Polygon] = []
        self.draft = DraftPolygon(self)

        self.reload()
        if ids is None:
            ids = timestamp_ids(max((m.id for m in self._markers), default=0))
        self._ids = ids

    @property
    def markers(self) -> Tuple[Marker, ...]:
        return tuple(self._markers)

    @property
    def polygons(self) -> Tuple[Polygon, ...]:
        return tuple(self._polygons)

    def get_marker(self, marker_id: int) -> Optional[Marker]:
        for marker in self._markers:
            if marker.id == marker_id:
                return marker
        return None

    def reload(self):
        """Replace in-memory collections with what storage holds."""
        self._markers = self._decode_markers(self.persistence.load(MARKERS_KEY))
        self._polygons = self._decode_polygons(self.persistence.load(POLYGONS_KEY))
        logger.info(
            "Loaded %d marker(s) and %d polygon(s)",
            len(self._markers),
            len(self._polygons),
        )
        self.events.emit(
            AnnotationEvent(
                EventType.STORE_LOADED,
                {
                    "num_markers": len(self._markers),
                    "num_polygons": len(self._polygons),
                },
            )
        )

    # Markers

    def add_marker(self, lng: float, lat: float, title: str, image: str) -> Marker:
        """Create a marker with a fresh id. Always succeeds."""
        marker = Marker(
            id=next(self._ids),
            longitude=float(lng),
            latitude=float(lat),
            title=title,
            image=image,
        )
        self._save_markers([*self._markers, marker])

        self.events.emit(
            AnnotationEvent(EventType.MARKER_ADDED, {"marker": marker.to_dict()})
        )
        return marker

    def update_marker(self, marker_id: int, replacement: Marker) -> None:
        """
        Replace the marker with ``marker_id`` by ``replacement``.

        The stored id is kept whatever ``replacement.id`` says. Unknown ids
        are ignored.
        """
        for index, marker in enumerate(self._markers):
            if marker.id == marker_id:
                break
        else:
            logger.debug("update_marker: no marker with id %s", marker_id)
            return

        updated = dataclasses.replace(replacement, id=marker_id)
        markers = list(self._markers)
        markers[index] = updated
        self._save_markers(markers)

        self.events.emit(
            AnnotationEvent(EventType.MARKER_UPDATED, {"marker": updated.to_dict()})
        )

    def remove_marker(self, marker_id: int) -> None:
        """Delete the marker with ``marker_id``. Idempotent."""
        remaining = [m for m in self._markers if m.id != marker_id]
        if len(remaining) == len(self._markers):
            logger.debug("remove_marker: no marker with id %s", marker_id)
            return

        self._save_markers(remaining)

        self.events.emit(
            AnnotationEvent(EventType.MARKER_REMOVED, {"marker_id": marker_id})
        )

    # Polygons

    def add_polygon(self, points: Iterable[GeoPoint]) -> Polygon:
        """
        Save a polygon ring.

        Raises:
            InsufficientPoints: If fewer than ``MIN_POLYGON_POINTS`` points
                are given. Saved polygons are left untouched.
        """
        points = tuple(points)
        if len(points) < MIN_POLYGON_POINTS:
            raise InsufficientPoints(len(points), MIN_POLYGON_POINTS)

        polygon = Polygon(points=points)
        self._save_polygons([*self._polygons, polygon])

        self.events.emit(
            AnnotationEvent(
                EventType.POLYGON_SAVED,
                {"polygon": polygon.to_list(), "num_polygons": len(self._polygons)},
            )
        )
        return polygon

    def clear_draft(self) -> None:
        """Discard the polygon draft. Saved polygons and storage are untouched."""
        self.draft.clear()

    # Persistence. Storage is written before memory so a failed save changes nothing.

    def _save_markers(self, markers: List[Marker]):
        self.persistence.save(MARKERS_KEY, [m.to_dict() for m in markers])
        self._markers = markers

    def _save_polygons(self, polygons: List[Polygon]):
        self.persistence.save(POLYGONS_KEY, [p.to_list() for p in polygons])
        self._polygons = polygons

    @staticmethod
    def _decode_markers(items: list) -> List[Marker]:
        markers = []
        seen = set()
        for item in items:
            try:
                marker = Marker.from_dict(item)
            except (KeyError, TypeError, ValueError) as e:
                logger.warning("Skipping malformed stored marker %r: %s", item, e)
                continue
            if marker.id in seen:
                logger.warning("Skipping stored marker with duplicate id %s", marker.id)
                continue
            seen.add(marker.id)
            markers.append(marker)
        return markers

    @staticmethod
    def _decode_polygons(items: list) -> List[Polygon]:
        polygons = []
        for item in items:
            try:
                polygon = Polygon.from_list(item)
            except (KeyError, TypeError, ValueError) as e:
                logger.warning("Skipping malformed stored polygon %r: %s", item, e)
                continue
            if len(polygon) < MIN_POLYGON_POINTS:
                logger.warning(
                    "Skipping stored polygon with %d point(s)", len(polygon)
                )
                continue
            polygons.append(polygon)
        return polygons
