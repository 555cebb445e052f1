"""
Redis Key Prefix Strategy (Single DB + Key Prefix Pattern)

All persisted collections share db=0 and are isolated by key prefix.

Usage:
    from projectdocs.db.redis_db import RedisKeyPrefix

    key = RedisKeyPrefix.collection_key("folders")
    # "projectdocs:collection:folders"
"""

from enum import Enum


class RedisKeyPrefix(str, Enum):
    """Redis key prefixes.

    Every key starts with 'projectdocs:' to avoid clashing with other apps.

    Key format:
        {prefix}:{entity_type}:{entity_id}
    """

    # Whole-collection JSON documents (String)
    COLLECTION = "projectdocs:collection"

    @classmethod
    def collection_key(cls, name: str) -> str:
        """Key holding the JSON array of one collection."""
        return f"{cls.COLLECTION.value}:{name}"

