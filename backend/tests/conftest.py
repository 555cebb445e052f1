#!/usr/bin/env python
"""
pytest configuration file

This file contains shared fixtures for all tests.
"""

import itertools

import fakeredis
import pytest

from projectdocs.components.documents import (
    BulkTreeImporter,
    FolderTreeService,
    ProjectService,
    Requester,
    resolve_requester,
)
from projectdocs.components.store import EntityStore, MemoryBackend, initialize

# Fixed epoch for deterministic timestamps (2024-03-01T00:00:00Z)
BASE_TIME_MS = 1709251200000


class SequentialIds:
    """Deterministic id factory: fld_1, fld_2, file_1, ..."""

    def __init__(self):
        self._counters: dict[str, itertools.count] = {}

    def __call__(self, prefix: str = "") -> str:
        counter = self._counters.setdefault(prefix, itertools.count(1))
        return f"{prefix}_{next(counter)}"


class TickingClock:
    """Clock advancing one millisecond per call."""

    def __init__(self, start: int = BASE_TIME_MS):
        self._ticks = itertools.count(start)

    def __call__(self) -> int:
        return next(self._ticks)


@pytest.fixture
def fake_redis_client():
    """
    Create a fakeredis client for unit tests.

    This provides an in-memory Redis implementation that allows
    unit tests to run without a real Redis server.
    """
    server = fakeredis.FakeServer()
    client = fakeredis.FakeRedis(server=server, decode_responses=True)
    yield client
    client.close()


@pytest.fixture
def id_factory() -> SequentialIds:
    return SequentialIds()


@pytest.fixture
def clock() -> TickingClock:
    return TickingClock()


@pytest.fixture
def store() -> EntityStore:
    """Empty in-memory entity store."""
    return EntityStore(MemoryBackend())


@pytest.fixture
def seeded_store(store: EntityStore) -> EntityStore:
    """In-memory store holding the default seed data."""
    initialize(store)
    return store


@pytest.fixture
def tree(seeded_store, id_factory, clock) -> FolderTreeService:
    return FolderTreeService(seeded_store, id_factory=id_factory, clock=clock)


@pytest.fixture
def importer(seeded_store, id_factory, clock) -> BulkTreeImporter:
    return BulkTreeImporter(seeded_store, id_factory=id_factory, clock=clock)


@pytest.fixture
def project_service(seeded_store, id_factory, clock) -> ProjectService:
    return ProjectService(seeded_store, id_factory=id_factory, clock=clock)


@pytest.fixture
def pm(seeded_store) -> Requester:
    """Maria Gonzalez, PM of proj_001."""
    return resolve_requester(seeded_store, "usr_002", "proj_001")


@pytest.fixture
def collaborator(seeded_store) -> Requester:
    """Carlos Rodriguez, collaborator of proj_001."""
    return resolve_requester(seeded_store, "usr_003", "proj_001")


@pytest.fixture
def central_office(seeded_store) -> Requester:
    """Patricia Martinez, central office (privileged, not a member)."""
    return resolve_requester(seeded_store, "usr_005", "proj_001")


@pytest.fixture
def outsider(seeded_store) -> Requester:
    """Ana Lopez, PM of proj_002 with no membership in proj_001."""
    return resolve_requester(seeded_store, "usr_004", "proj_001")
