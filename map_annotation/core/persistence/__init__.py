"""
Persistence layer - durable storage for annotations.
"""

from .adapter import PersistenceAdapter, MARKERS_KEY, POLYGONS_KEY
from .backends import KeyValueStore, MemoryKeyValueStore, JsonDirectoryStore

__all__ = [
    "PersistenceAdapter",
    "MARKERS_KEY",
    "POLYGONS_KEY",
    "KeyValueStore",
    "MemoryKeyValueStore",
    "JsonDirectoryStore",
]
