"""
Event system for the map annotation workflow.

Provides a decoupled way for the annotation core to notify map views
about state changes without depending on a specific map toolkit.
"""

import logging
from enum import Enum
from typing import Any, Callable, Dict, List, Optional
from dataclasses import dataclass

logger = logging.getLogger(__name__)


class EventType(Enum):
    """Types of events that can occur during annotation."""

    # Store events
    STORE_LOADED = "store_loaded"

    # Interaction events
    MODE_CHANGED = "mode_changed"

    # Marker events
    MARKER_ADDED = "marker_added"
    MARKER_UPDATED = "marker_updated"
    MARKER_REMOVED = "marker_removed"

    # Polygon events
    DRAFT_POINT_ADDED = "draft_point_added"
    DRAFT_CLEARED = "draft_cleared"
    POLYGON_SAVED = "polygon_saved"
    POLYGON_REJECTED = "polygon_rejected"

    # Popup events
    SELECTION_CHANGED = "selection_changed"
    EDIT_DRAFT_UPDATED = "edit_draft_updated"


@dataclass
class AnnotationEvent:
    """Event that occurs during annotation."""

    event_type: EventType
    data: Optional[Dict[str, Any]] = None

    def __post_init__(self):
        if self.data is None:
            self.data = {}


class EventEmitter:
    """
    Simple event emitter for pub/sub pattern.

    Allows components to subscribe to events without tight coupling.
    """

    def __init__(self):
        self._listeners: Dict[EventType, List[Callable]] = {}

    def on(self, event_type: EventType, callback: Callable[[AnnotationEvent], None]):
        """Subscribe to an event type."""
        if event_type not in self._listeners:
            self._listeners[event_type] = []
        self._listeners[event_type].append(callback)

    def on_any(self, callback: Callable[[AnnotationEvent], None]):
        """Subscribe to every event type."""
        for event_type in EventType:
            self.on(event_type, callback)

    def off(self, event_type: EventType, callback: Callable[[AnnotationEvent], None]):
        """Unsubscribe from an event type."""
        if event_type in self._listeners:
            self._listeners[event_type].remove(callback)

    def emit(self, event: AnnotationEvent):
        """Emit an event to all subscribers."""
        for callback in list(self._listeners.get(event.event_type, [])):
            try:
                callback(event)
            except Exception:
                # A broken listener must not abort the state change
                logger.exception(
                    "Error in listener for %s", event.event_type.value
                )

    def clear(self):
        """Clear all event listeners."""
        self._listeners.clear()
