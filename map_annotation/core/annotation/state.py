"""
State management for map annotation.

Contains the value types handled by the annotation core and the
tagged selection variants.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Tuple, Union

MIN_POLYGON_POINTS = 3


@dataclass(frozen=True)
class GeoPoint:
    """A WGS84 longitude/latitude pair."""

    longitude: float
    latitude: float

    def to_dict(self):
        """Convert to dictionary for serialization."""
        return {"longitude": self.longitude, "latitude": self.latitude}

    @classmethod
    def from_dict(cls, data: dict):
        """Create from dictionary."""
        return cls(
            longitude=float(data["longitude"]),
            latitude=float(data["latitude"]),
        )


@dataclass(frozen=True)
class Marker:
    """A labeled point annotation."""

    id: int
    longitude: float
    latitude: float
    title: str
    image: str

    @property
    def position(self) -> GeoPoint:
        return GeoPoint(self.longitude, self.latitude)

    def to_dict(self):
        """Convert to dictionary for serialization."""
        return {
            "id": self.id,
            "longitude": self.longitude,
            "latitude": self.latitude,
            "title": self.title,
            "image": self.image,
        }

    @classmethod
    def from_dict(cls, data: dict):
        """Create from dictionary. Title and image must already be strings."""
        for field in ("title", "image"):
            if not isinstance(data[field], str):
                raise TypeError(
                    f"{field} must be a string, got {type(data[field]).__name__}"
                )
        return cls(
            id=int(data["id"]),
            longitude=float(data["longitude"]),
            latitude=float(data["latitude"]),
            title=data["title"],
            image=data["image"],
        )


@dataclass(frozen=True)
class Polygon:
    """
    A saved polygon ring.

    Vertex order is insertion order. Construction does not validate the
    vertex count; ``AnnotationStore.add_polygon`` is the only way a
    polygon becomes part of the saved annotations.
    """

    points: Tuple[GeoPoint, ...]

    def __len__(self):
        return len(self.points)

    def to_list(self) -> List[Dict[str, Any]]:
        """Convert to the persisted ring representation."""
        return [point.to_dict() for point in self.points]

    @classmethod
    def from_list(cls, data: list):
        """Create from the persisted ring representation."""
        return cls(points=tuple(GeoPoint.from_dict(item) for item in data))


@dataclass(frozen=True)
class NoSelection:
    """No marker popup is open."""


@dataclass(frozen=True)
class Viewing:
    """The read-only popup of a marker is open."""

    marker: Marker


@dataclass(frozen=True)
class Editing:
    """
    The edit popup of a marker is open.

    ``draft`` is a private copy of the stored marker; changes to it are
    not visible anywhere else until committed.
    """

    draft: Marker


Selection = Union[NoSelection, Viewing, Editing]


@dataclass
class AnnotationSnapshot:
    """Point-in-time view of the annotation state, for display and debugging."""

    mode: str
    markers: List[Marker] = field(default_factory=list)
    polygons: List[Polygon] = field(default_factory=list)
    draft: List[GeoPoint] = field(default_factory=list)
    selection: Selection = field(default_factory=NoSelection)

    def to_dict(self):
        """Convert to dictionary for serialization."""
        if isinstance(self.selection, Viewing):
            selection = {"kind": "viewing", "marker_id": self.selection.marker.id}
        elif isinstance(self.selection, Editing):
            selection = {"kind": "editing", "marker_id": self.selection.draft.id}
        else:
            selection = {"kind": "none"}
        return {
            "mode": self.mode,
            "markers": [m.to_dict() for m in self.markers],
            "polygons": [p.to_list() for p in self.polygons],
            "draft": [p.to_dict() for p in self.draft],
            "selection": selection,
        }
