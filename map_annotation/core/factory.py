"""
Wires the annotation core together from configuration.
"""

import logging
from typing import Optional

from easydict import EasyDict as edict

from .annotation import AnnotationStore, InteractionController
from .persistence import (
    JsonDirectoryStore,
    KeyValueStore,
    MemoryKeyValueStore,
    PersistenceAdapter,
)

logger = logging.getLogger(__name__)


def get_backend(cfg: edict) -> KeyValueStore:
    """Create the key-value backend named by ``cfg.storage.backend``."""
    backend = cfg.storage.backend
    if backend == "memory":
        return MemoryKeyValueStore()
    if backend == "json":
        logger.info("Using annotation storage at %s", cfg.storage.path)
        return JsonDirectoryStore(cfg.storage.path)
    raise ValueError(f"Unknown storage backend: {backend!r}")


def create_controller(
    cfg: edict, backend: Optional[KeyValueStore] = None
) -> InteractionController:
    """Load the stored annotations and return a ready controller."""
    if backend is None:
        backend = get_backend(cfg)
    store = AnnotationStore(PersistenceAdapter(backend))
    return InteractionController(
        store,
        default_title=cfg.markers.default_title,
        default_image=cfg.markers.default_image,
    )
