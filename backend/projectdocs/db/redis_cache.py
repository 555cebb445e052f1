"""
Redis-backed JSON document access

Thin wrapper over a Redis client that stores JSON-serialised values under
namespaced keys. Used by the Redis collection backend to keep one JSON array
per collection.

Unlike a cache, a failed read is never reported as a miss: every Redis or
decoding error raises StorageUnavailable so callers cannot mistake an outage
for an empty collection.

Usage:
    from projectdocs.db.redis_cache import get_redis_cache
    from projectdocs.db.redis_db import RedisKeyPrefix

    cache = get_redis_cache()
    key = RedisKeyPrefix.collection_key("folders")

    cache.set(key, [{"id": "fld_1", "name": "Plans"}])
    records = cache.get(key)
    cache.delete(key)
"""

import json
import logging
from typing import Any

import redis

from projectdocs.db.redis_factory import create_redis_client
from projectdocs.errors import StorageUnavailable

logger = logging.getLogger(__name__)


class RedisCache:
    """
    JSON document store on top of Redis strings

    Features:
    - Lazy client creation via the Redis factory
    - JSON serialization for complex values
    - Explicit failure: Redis errors surface as StorageUnavailable
    """

    def __init__(self, client: redis.Redis | None = None):
        """
        Initialize Redis access

        Args:
            client: Optional pre-configured Redis client (for testing with fakeredis)
        """
        self._client: redis.Redis | None = client

    @property
    def client(self) -> redis.Redis:
        """Lazy initialization of the Redis client"""
        if self._client is None:
            self._client = create_redis_client()
        return self._client

    # ==================== String Operations ====================

    def get(self, key: str) -> Any | None:
        """
        Get a stored value

        Args:
            key: Redis key

        Returns:
            Deserialized value, or None if the key does not exist

        Raises:
            StorageUnavailable: If Redis cannot be read or the value is not JSON
        """
        try:
            data = self.client.get(key)
        except redis.RedisError as e:
            logger.error(f"Redis get error for key {key}: {e}")
            raise StorageUnavailable(f"Redis read failed for {key}: {e}") from e

        if data is None:
            return None
        try:
            return json.loads(data)
        except json.JSONDecodeError as e:
            logger.error(f"JSON decode error for key {key}: {e}")
            raise StorageUnavailable(f"Corrupt JSON stored under {key}") from e

    def set(self, key: str, value: Any) -> None:
        """
        Store a value

        Args:
            key: Redis key
            value: Value to store (will be JSON serialized)

        Raises:
            StorageUnavailable: If Redis cannot be written
        """
        serialized = json.dumps(value, default=str)
        try:
            self.client.set(key, serialized)
        except redis.RedisError as e:
            logger.error(f"Redis set error for key {key}: {e}")
            raise StorageUnavailable(f"Redis write failed for {key}: {e}") from e
        logger.debug(f"Redis set: {key} ({len(serialized)} bytes)")

    def delete(self, key: str) -> bool:
        """
        Delete a stored value

        Returns:
            True if the key was deleted, False if it didn't exist
        """
        try:
            result = self.client.delete(key)
        except redis.RedisError as e:
            logger.error(f"Redis delete error for key {key}: {e}")
            raise StorageUnavailable(f"Redis delete failed for {key}: {e}") from e
        if result:
            logger.debug(f"Redis deleted: {key}")
        return bool(result)

    # ==================== Utility Methods ====================

    def ping(self) -> bool:
        """Check Redis connection"""
        try:
            return bool(self.client.ping())
        except redis.RedisError as e:
            logger.error(f"Redis ping failed: {e}")
            return False

    def close(self) -> None:
        """Close Redis connection"""
        if self._client:
            self._client.close()
            self._client = None
            logger.info("RedisCache closed")


# ==================== Singleton Instance ====================

_redis_cache: RedisCache | None = None


def get_redis_cache() -> RedisCache:
    """Get singleton Redis access instance."""
    global _redis_cache
    if _redis_cache is None:
        _redis_cache = RedisCache()
    return _redis_cache


def reset_redis_cache() -> None:
    """Close and drop the singleton (for testing)."""
    global _redis_cache
    if _redis_cache is not None:
        _redis_cache.close()
    _redis_cache = None
