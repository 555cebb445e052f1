"""Entity Store Module.

Generic persisted collections with CRUD and predicate queries.

Components:
- backends.py: whole-collection persistence (memory, JSON files)
- redis_backend.py: Redis persistence
- collection.py: typed Collection[T]
- provider.py: EntityStore grouping all collections, backend selection
- bootstrap.py / seed.py: default data

Usage:
    from projectdocs.components.store import get_entity_store, initialize

    store = get_entity_store()
    initialize(store)
    plans = store.folders.find(lambda f: f.name == "Plans")
"""

from projectdocs.components.store.backends import CollectionBackend, JsonFileBackend, MemoryBackend
from projectdocs.components.store.bootstrap import initialize, reset
from projectdocs.components.store.collection import Collection
from projectdocs.components.store.provider import (
    EntityStore,
    get_entity_store,
    reset_entity_store,
    set_entity_store,
)
from projectdocs.components.store.redis_backend import RedisBackend

__all__ = [
    "Collection",
    "CollectionBackend",
    "MemoryBackend",
    "JsonFileBackend",
    "RedisBackend",
    "EntityStore",
    "get_entity_store",
    "set_entity_store",
    "reset_entity_store",
    "initialize",
    "reset",
]
