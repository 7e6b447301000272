"""
Redis client - listing detail cache.
Fails gracefully when Redis is down: a cache miss, never an error.
"""

import json
import logging
from typing import Any

from redis.asyncio import Redis

from marketplace.config import get_settings

logger = logging.getLogger(__name__)

settings = get_settings()

LISTING_PREFIX = "listing:"

_redis: Redis | None = None


def listing_key(listing_id: int) -> str:
    return f"{LISTING_PREFIX}{listing_id}"


async def get_redis() -> Redis:
    """Shared async client; redis-py manages the connection pool."""
    global _redis
    if _redis is None:
        _redis = Redis.from_url(
            settings.redis_url,
            encoding="utf-8",
            decode_responses=True,
        )
    return _redis


async def cache_get(key: str) -> str | None:
    """Get value from cache. Returns None if miss or error."""
    try:
        client = await get_redis()
        return await client.get(key)
    except Exception as e:
        logger.debug("cache_get failed: key=%s error=%s", key, e)
        return None


async def cache_set(key: str, value: str | dict[str, Any], ttl_seconds: int = 300) -> bool:
    """Set value in cache with TTL. Dict is JSON-serialized."""
    try:
        client = await get_redis()
        if isinstance(value, dict):
            value = json.dumps(value)
        await client.setex(key, ttl_seconds, value)
        return True
    except Exception as e:
        logger.debug("cache_set failed: key=%s error=%s", key, e)
        return False


async def cache_delete(key: str) -> bool:
    """Invalidate cache key (listing edited or its stock moved)."""
    try:
        client = await get_redis()
        await client.delete(key)
        return True
    except Exception as e:
        logger.warning("cache_delete failed: key=%s error=%s", key, e)
        return False
