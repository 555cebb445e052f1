"""Entity store and backend selection.

Groups one Collection per entity kind over a single backend and picks the
backend from configuration:

    memory -> MemoryBackend (NOT shared between processes)
    file   -> JsonFileBackend under settings.get_data_dir()
    redis  -> RedisBackend (safe for multi-instance)

Usage:
    from projectdocs.components.store.provider import get_entity_store

    store = get_entity_store()
    store.folders.create(folder)
    folder = store.folders.get_by_id(folder_id)
"""

import logging
from collections.abc import Iterator
from contextlib import ExitStack, contextmanager

from projectdocs.components.documents.models import (
    ActivityLogEntry,
    Area,
    Company,
    FileRecord,
    Folder,
    Position,
    Project,
    Worker,
)
from projectdocs.components.store.backends import CollectionBackend, JsonFileBackend, MemoryBackend
from projectdocs.components.store.collection import Collection
from projectdocs.settings import settings

logger = logging.getLogger(__name__)


class EntityStore:
    """All persisted collections sharing one backend."""

    def __init__(self, backend: CollectionBackend):
        self.backend = backend
        self.companies: Collection[Company] = Collection("companies", Company, backend)
        self.areas: Collection[Area] = Collection("areas", Area, backend)
        self.workers: Collection[Worker] = Collection("workers", Worker, backend)
        self.positions: Collection[Position] = Collection("positions", Position, backend)
        self.projects: Collection[Project] = Collection("projects", Project, backend)
        self.folders: Collection[Folder] = Collection("folders", Folder, backend)
        self.files: Collection[FileRecord] = Collection("files", FileRecord, backend)
        self.activity_log: Collection[ActivityLogEntry] = Collection("activity-log", ActivityLogEntry, backend)

        self.collections: dict[str, Collection] = {
            c.name: c
            for c in (
                self.companies,
                self.areas,
                self.workers,
                self.positions,
                self.projects,
                self.folders,
                self.files,
                self.activity_log,
            )
        }

    def collection(self, name: str) -> Collection:
        """Look up a collection by its persisted name."""
        try:
            return self.collections[name]
        except KeyError:
            raise KeyError(f"Unknown collection: {name}") from None

    def is_empty(self) -> bool:
        """True when every collection holds no records."""
        return all(c.count() == 0 for c in self.collections.values())

    def clear(self) -> None:
        """Remove every record from every collection."""
        for c in self.collections.values():
            c.clear()
        logger.warning("Cleared all collections")

    @contextmanager
    def transaction(self, *names: str) -> Iterator["EntityStore"]:
        """Run a block against the named collections with all-or-nothing effect.

        Locks the collections (in a fixed order), snapshots them, and writes
        the snapshots back if the block raises. Only whole-collection state is
        restored; there is no cross-process isolation.
        """
        collections = [self.collection(n) for n in sorted(set(names))]
        with ExitStack() as stack:
            for c in collections:
                stack.enter_context(c.lock)
            snapshots = {c.name: c.snapshot() for c in collections}
            try:
                yield self
            except BaseException:
                for c in collections:
                    c.restore(snapshots[c.name])
                logger.warning(f"Transaction rolled back: {', '.join(snapshots)}")
                raise


def create_backend() -> CollectionBackend:
    """Build the backend selected by settings.storage_type."""
    if settings.storage_type == "file":
        data_dir = settings.get_data_dir()
        logger.info(f"EntityStore: Using JSON file storage at {data_dir}")
        return JsonFileBackend(data_dir)
    if settings.storage_type == "redis":
        from projectdocs.components.store.redis_backend import RedisBackend

        logger.info("EntityStore: Using Redis storage (multi-instance safe)")
        return RedisBackend()
    logger.info("EntityStore: Using in-memory storage (single instance only)")
    return MemoryBackend()


# Singleton store instance
_entity_store: EntityStore | None = None


def get_entity_store() -> EntityStore:
    """Get the process-wide entity store, creating it on first use."""
    global _entity_store
    if _entity_store is None:
        _entity_store = EntityStore(create_backend())
    return _entity_store


def set_entity_store(store: EntityStore) -> None:
    """Install a specific store (for testing)."""
    global _entity_store
    _entity_store = store


def reset_entity_store() -> None:
    """Reset the store singleton (for testing)."""
    global _entity_store
    _entity_store = None
