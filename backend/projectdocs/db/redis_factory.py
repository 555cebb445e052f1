"""Redis client factory for different deployment modes.

Creates either an in-process fakeredis client (local development without a
Redis server) or a real Redis client, based on settings.redis_type.
"""

import logging

import fakeredis
import redis

from projectdocs.settings import settings

logger = logging.getLogger(__name__)


def create_redis_client(db: int | None = None) -> redis.Redis:
    """Create Redis client based on settings.

    Args:
        db: Database index (default: settings.redis_index)

    Returns:
        Redis client (either fakeredis or real redis)
    """
    db = settings.redis_index if db is None else db

    if settings.redis_type == "fake":
        client = fakeredis.FakeRedis(db=db, decode_responses=True)
        logger.info(f"Using FakeRedis (in-memory): db={db}")
        return client

    redis_config = {
        "host": settings.redis_host,
        "port": settings.redis_port,
        "db": db,
        "socket_connect_timeout": settings.redis_socket_connect_timeout,
        "socket_timeout": settings.redis_socket_timeout,
        "decode_responses": True,
    }
    if settings.redis_password:
        redis_config["password"] = settings.redis_password

    client = redis.Redis(**redis_config)
    logger.info(f"Using real Redis: {settings.redis_host}:{settings.redis_port}, db={db}")
    return client
