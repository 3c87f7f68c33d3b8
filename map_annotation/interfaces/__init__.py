"""
Interfaces module - map toolkit adapters for the annotation core.
"""

from .map_adapter import MapViewAdapter, MapView, MapScene, MarkerPin, PolygonOverlay, Popup

__all__ = ["MapViewAdapter", "MapView", "MapScene", "MarkerPin", "PolygonOverlay", "Popup"]
