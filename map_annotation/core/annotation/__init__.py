"""
Core annotation module - UI-agnostic map annotation logic.

This module provides the interaction state machine, the annotation
store and the popup selection, usable from any map toolkit
(web, desktop, CLI).
"""

from .controller import InteractionController, Mode
from .draft import DraftPolygon
from .events import AnnotationEvent, EventType, EventEmitter
from .selection import SelectionState
from .state import (
    MIN_POLYGON_POINTS,
    AnnotationSnapshot,
    Editing,
    GeoPoint,
    Marker,
    NoSelection,
    Polygon,
    Viewing,
)
from .store import AnnotationStore

__all__ = [
    "InteractionController",
    "Mode",
    "DraftPolygon",
    "AnnotationEvent",
    "EventType",
    "EventEmitter",
    "SelectionState",
    "MIN_POLYGON_POINTS",
    "AnnotationSnapshot",
    "Editing",
    "GeoPoint",
    "Marker",
    "NoSelection",
    "Polygon",
    "Viewing",
    "AnnotationStore",
]
