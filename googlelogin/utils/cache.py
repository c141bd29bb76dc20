"""Redis cache for Google profile lookups.

The cache is optional: with no REDIS_URL configured, or Redis unreachable
at startup, every read misses and every write is a no-op.
"""

import hashlib
import json
from typing import Any

import redis.asyncio as redis

from googlelogin.config import get_settings
from googlelogin.constants import CACHE_TTL_PROFILE
from googlelogin.utils.logging import get_logger

logger = get_logger(__name__)
settings = get_settings()


class RedisCache:
    """Async Redis cache client with JSON serialization."""

    def __init__(self, url: str | None = None) -> None:
        self._url = settings.redis_url if url is None else url
        self._client: redis.Redis | None = None
        self._connected = False

    @property
    def enabled(self) -> bool:
        return bool(self._url)

    async def _get_client(self) -> redis.Redis:
        if self._client is None:
            self._client = redis.from_url(
                self._url,
                encoding="utf-8",
                decode_responses=True,
            )
        return self._client

    async def connect(self) -> bool:
        """Test Redis connection."""
        if not self.enabled:
            return False
        try:
            client = await self._get_client()
            await client.ping()
            self._connected = True
        except Exception as e:
            logger.warning(f"Redis cache unavailable: {e}")
            self._connected = False
        return self._connected

    async def ping(self) -> bool:
        client = await self._get_client()
        return await client.ping()

    async def close(self) -> None:
        if self._client:
            await self._client.aclose()
            self._client = None
            self._connected = False

    async def get(self, key: str) -> Any | None:
        """Get a cached value, or None if missing, expired or Redis is down."""
        if not self._connected:
            return None

        try:
            client = await self._get_client()
            data = await client.get(key)
            return json.loads(data) if data else None
        except Exception as e:
            logger.debug(f"Cache get error for {key}: {e}")
            return None

    async def set(self, key: str, value: Any, ttl: int = CACHE_TTL_PROFILE) -> bool:
        """Store a JSON-serializable value for ttl seconds."""
        if not self._connected:
            return False

        try:
            client = await self._get_client()
            await client.setex(key, ttl, json.dumps(value, default=str))
            return True
        except Exception as e:
            logger.debug(f"Cache set error for {key}: {e}")
            return False

    async def delete(self, key: str) -> bool:
        if not self._connected:
            return False

        try:
            client = await self._get_client()
            await client.delete(key)
            return True
        except Exception as e:
            logger.debug(f"Cache delete error for {key}: {e}")
            return False


# Global cache instance
cache = RedisCache()


def token_cache_key(namespace: str, token: str) -> str:
    """Build a cache key that never contains the raw token."""
    digest = hashlib.sha256(token.encode()).hexdigest()[:32]
    return f"{namespace}:{digest}"
