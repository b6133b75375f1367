"""Redis store for caching.

Handles:
- Caching with TTL policies
- JSON payload helpers

TTL policies:
- Catalog vocabulary by card id: 1 day (catalog sync runs daily)
"""

import json
import logging
from typing import Any

import redis.asyncio as redis

from dealscan.settings import get_settings

# TTL constants (in seconds)
TTL_CATALOG_VOCABULARY = 86400  # 1 day

# Key prefixes
PREFIX_CATALOG_VOCABULARY = "catalog:vocab:"

# Redis client (initialized on startup)
_redis: redis.Redis | None = None
logger = logging.getLogger("uvicorn.error")


async def init_redis() -> None:
    """Initialize Redis connection."""
    global _redis
    settings = get_settings()
    _redis = redis.from_url(
        settings.redis_url,
        encoding="utf-8",
        decode_responses=True,
        socket_connect_timeout=5,
        socket_timeout=5,
    )
    # Validate connectivity early (especially for `rediss://` in production).
    await _redis.ping()
    logger.info("Redis connected")


async def close_redis() -> None:
    """Close Redis connection."""
    global _redis
    if _redis:
        await _redis.aclose()
        _redis = None


def _get_redis() -> redis.Redis:
    """Get Redis client instance."""
    if _redis is None:
        raise RuntimeError("Redis not initialized. Call init_redis() first.")
    return _redis


# ============================================================
# Generic cache operations
# ============================================================


async def cache_get_json(key: str) -> dict[str, Any] | None:
    """Get JSON value from cache.

    Args:
        key: Cache key.

    Returns:
        Parsed JSON dict or None if not found.
    """
    value = await _get_redis().get(key)
    if value:
        return json.loads(value)
    return None


async def cache_set_json(key: str, value: dict[str, Any], ttl: int) -> None:
    """Set JSON value in cache with TTL.

    Args:
        key: Cache key.
        value: Dict to cache as JSON.
        ttl: Time-to-live in seconds.
    """
    await _get_redis().setex(key, ttl, json.dumps(value))


# ============================================================
# Catalog vocabulary cache
# ============================================================


async def get_catalog_vocabulary_cache(card_id: str) -> dict[str, Any] | None:
    """Get cached catalog vocabulary payload for a card."""
    return await cache_get_json(f"{PREFIX_CATALOG_VOCABULARY}{card_id}")


async def set_catalog_vocabulary_cache(card_id: str, payload: dict[str, Any]) -> None:
    """Cache catalog vocabulary payload for a card (TTL 1 day)."""
    await cache_set_json(f"{PREFIX_CATALOG_VOCABULARY}{card_id}", payload, TTL_CATALOG_VOCABULARY)
