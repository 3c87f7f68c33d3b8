"""
Test fixtures for map annotation tests.

Provides in-memory storage and ready-wired core components.
"""

import itertools

import pytest


@pytest.fixture
def backend():
    """In-memory key-value storage."""
    from map_annotation.core.persistence import MemoryKeyValueStore

    return MemoryKeyValueStore()


@pytest.fixture
def persistence(backend):
    from map_annotation.core.persistence import PersistenceAdapter

    return PersistenceAdapter(backend)


@pytest.fixture
def store(persistence):
    """Store with predictable ids 1, 2, 3, ..."""
    from map_annotation.core.annotation import AnnotationStore

    return AnnotationStore(persistence, ids=itertools.count(1))


@pytest.fixture
def controller(store):
    from map_annotation.core.annotation import InteractionController

    return InteractionController(store)


@pytest.fixture
def recorded_events(store):
    """List collecting the type of every emitted event."""
    received = []
    store.events.on_any(lambda event: received.append(event.event_type))
    return received

