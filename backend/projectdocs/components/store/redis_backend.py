"""Redis-backed collection storage.

Provides shared persistence for multi-instance deployments. Each collection
is a single JSON array stored under one key:

    projectdocs:collection:{name}

A whole-collection write is a single SET, so readers never observe a
partially written collection.
"""

import logging

from projectdocs.db.redis_cache import RedisCache, get_redis_cache
from projectdocs.db.redis_db import RedisKeyPrefix
from projectdocs.errors import StorageUnavailable

logger = logging.getLogger(__name__)


class RedisBackend:
    """Collection backend on top of RedisCache."""

    def __init__(self, cache: RedisCache | None = None):
        """Initialize with optional cache instance (for testing)."""
        self._cache = cache

    @property
    def cache(self) -> RedisCache:
        """Lazy initialization of Redis access."""
        if self._cache is None:
            self._cache = get_redis_cache()
        return self._cache

    def read(self, name: str) -> list[dict]:
        data = self.cache.get(RedisKeyPrefix.collection_key(name))
        if data is None:
            return []
        if not isinstance(data, list):
            raise StorageUnavailable(f"Redis key for collection {name} does not hold a JSON array")
        return data

    def write(self, name: str, records: list[dict]) -> None:
        self.cache.set(RedisKeyPrefix.collection_key(name), records)
        logger.debug(f"Saved collection {name}: {len(records)} records")

    def drop(self, name: str) -> None:
        self.cache.delete(RedisKeyPrefix.collection_key(name))

    def ping(self) -> bool:
        return self.cache.ping()
