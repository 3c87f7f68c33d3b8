"""
Persistence adapter between the annotation store and a key-value backend.

Collections are stored as JSON arrays. An empty collection is stored by
removing its key, so "absent" and "empty" mean the same thing on reload.
"""

import json
import logging
from typing import Any, List, Sequence

from ..errors import StorageParseError
from .backends import KeyValueStore

logger = logging.getLogger(__name__)

MARKERS_KEY = "markers"
POLYGONS_KEY = "polygons"


class PersistenceAdapter:
    """Loads and saves JSON array collections through a ``KeyValueStore``."""

    def __init__(self, backend: KeyValueStore):
        self.backend = backend

    def load(self, key: str) -> List[Any]:
        """
        Load the collection stored under ``key``.

        Returns:
            The stored items, or an empty list if the key is absent,
            unparseable, or does not hold a JSON array. Never raises.
        """
        try:
            raw = self.backend.get(key)
        except (OSError, UnicodeDecodeError) as e:
            logger.error("%s", StorageParseError(key, str(e)))
            return []
        if raw is None:
            return []

        try:
            items = json.loads(raw)
        except ValueError as e:
            logger.error("%s", StorageParseError(key, str(e)))
            return []

        if not isinstance(items, list):
            logger.error(
                "%s",
                StorageParseError(key, f"expected a JSON array, got {type(items).__name__}"),
            )
            return []

        logger.debug("Loaded %d item(s) from %s", len(items), key)
        return items

    def save(self, key: str, items: Sequence[Any]) -> None:
        """Write ``items`` under ``key``, or remove the key if there are none."""
        if items:
            self.backend.set(key, json.dumps(list(items)))
            logger.debug("Saved %d item(s) to %s", len(items), key)
        else:
            self.backend.remove(key)
            logger.debug("Removed empty collection %s", key)
