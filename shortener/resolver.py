"""Cache-aside resolution of short codes."""

import asyncio
import logging
from typing import Optional

from .database.base import DurableStoreBase
from .database.cache import CacheBase
from .common.validators import is_valid_short_code
from .common.logging_config import get_logger
from .errors import (
    CacheUnavailableError,
    NotFoundError,
    StoreUnavailableError,
    ValidationError,
)


class Resolver:
    """Map short codes to long URLs, reading the cache before the store.

    The store is the only source of truth: a cache miss, a cache error and
    a cache timeout all lead to a store read, and nothing but a store hit is
    ever written back. Absent codes are not cached.
    """

    def __init__(
        self,
        store: DurableStoreBase,
        cache: Optional[CacheBase] = None,
        logger: Optional[logging.Logger] = None,
        urls_table: str = "short_urls",
        store_timeout: Optional[float] = 5.0,
        cache_timeout: Optional[float] = 0.5,
    ):
        self.store = store
        self.cache = cache
        self.logger = logger or get_logger("resolver")
        self.urls_table = urls_table
        self.store_timeout = store_timeout
        self.cache_timeout = cache_timeout

    async def resolve(self, short_code: str) -> str:
        """Return the long URL for short_code.

        Raises:
            ValidationError: If short_code is empty
            NotFoundError: If the code does not exist in the store
            StoreUnavailableError: If the store fails after a cache miss
        """
        is_valid, error = is_valid_short_code(short_code)
        if not is_valid:
            raise ValidationError(error)

        cached_url = await self._cache_get(short_code)
        if cached_url:
            self.logger.debug(f"Cache hit for {short_code}")
            return cached_url

        self.logger.debug(f"Cache miss for {short_code}")

        try:
            record = await asyncio.wait_for(
                self.store.get(self.urls_table, short_code),
                timeout=self.store_timeout,
            )
        except asyncio.TimeoutError as e:
            self.logger.error(f"Store get timed out after {self.store_timeout}s")
            raise StoreUnavailableError("Store get timed out") from e

        if not record or not record.get("long_url"):
            self.logger.warning(f"Short code not found: {short_code}")
            raise NotFoundError(short_code)

        long_url = record["long_url"]
        await self._cache_set(short_code, long_url)

        self.logger.debug(f"Retrieved URL: {short_code} -> {long_url}")
        return long_url

    async def _cache_get(self, short_code: str) -> Optional[str]:
        if self.cache is None:
            return None
        try:
            return await asyncio.wait_for(
                self.cache.get(short_code), timeout=self.cache_timeout
            )
        except (CacheUnavailableError, asyncio.TimeoutError) as e:
            self.logger.warning(f"Cache get failed for {short_code}, treating as miss: {e}")
            return None

    async def _cache_set(self, short_code: str, long_url: str) -> None:
        if self.cache is None:
            return
        try:
            await asyncio.wait_for(
                self.cache.set(short_code, long_url), timeout=self.cache_timeout
            )
        except (CacheUnavailableError, asyncio.TimeoutError) as e:
            self.logger.warning(f"Cache set failed for {short_code}: {e}")
