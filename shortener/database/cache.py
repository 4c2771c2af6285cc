"""Cache layer for URL shortener."""

import logging
from abc import ABC, abstractmethod
from typing import Optional

import redis.asyncio as redis
from redis.exceptions import RedisError

from ..errors import CacheUnavailableError


class CacheBase(ABC):
    """Best-effort key-value cache.

    Failures raise ``CacheUnavailableError``; callers decide whether to
    ignore them.
    """

    @abstractmethod
    async def get(self, key: str) -> Optional[str]:
        """Return the cached value, or None on a miss."""
        pass

    @abstractmethod
    async def set(self, key: str, value: str) -> None:
        """Store a value."""
        pass

    async def ping(self) -> bool:
        return True

    async def close(self) -> None:
        pass


class RedisCache(CacheBase):
    """Redis cache for URL mappings."""

    KEY_PREFIX = "url:shortener:"

    def __init__(
        self,
        redis_url: str,
        ttl_seconds: Optional[int] = 3600,
        logger: Optional[logging.Logger] = None,
    ):
        """Initialize Redis cache.

        Args:
            redis_url: Redis connection URL (e.g., redis://localhost:6379/0)
            ttl_seconds: TTL for cached items, None to keep them until evicted
            logger: Optional logger instance
        """
        self.redis_url = redis_url
        self.ttl_seconds = ttl_seconds
        self.logger = logger or logging.getLogger(__name__)
        self.client: Optional[redis.Redis] = None

    async def connect(self) -> None:
        """Connect to Redis.

        A failed ping is logged but not fatal: later calls raise
        CacheUnavailableError and readers fall back to the store.
        """
        self.client = redis.from_url(
            self.redis_url,
            encoding="utf-8",
            decode_responses=True,
        )
        if await self.ping():
            self.logger.info(f"Connected to Redis, TTL={self.ttl_seconds}s")
        else:
            self.logger.warning("Redis not reachable at startup - reads will use the store")

    def get_cache_key(self, short_code: str) -> str:
        return f"{self.KEY_PREFIX}{short_code}"

    def _require_client(self) -> redis.Redis:
        if self.client is None:
            raise CacheUnavailableError("Redis client is not connected")
        return self.client

    async def get(self, key: str) -> Optional[str]:
        client = self._require_client()
        try:
            return await client.get(self.get_cache_key(key))
        except (RedisError, OSError) as e:
            raise CacheUnavailableError(f"Cache get error: {e}") from e

    async def set(self, key: str, value: str) -> None:
        client = self._require_client()
        try:
            if self.ttl_seconds:
                await client.setex(self.get_cache_key(key), self.ttl_seconds, value)
            else:
                await client.set(self.get_cache_key(key), value)
        except (RedisError, OSError) as e:
            raise CacheUnavailableError(f"Cache set error: {e}") from e

    async def ping(self) -> bool:
        if self.client is None:
            return False
        try:
            return bool(await self.client.ping())
        except (RedisError, OSError) as e:
            self.logger.error(f"Redis ping failed: {e}")
            return False

    async def close(self) -> None:
        """Close Redis connection."""
        if self.client:
            await self.client.aclose()
            self.client = None
            self.logger.info("Redis connection closed")
