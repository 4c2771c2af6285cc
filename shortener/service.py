"""Business logic service for URL shortener."""

import asyncio
import logging
from typing import Optional, Dict, Any

from .allocator import Allocator
from .resolver import Resolver
from .shortcode import ShortCodeEncoder
from .database.base import DurableStoreBase
from .database.cache import CacheBase
from .database.models import URLMapping
from .common.validators import is_valid_short_code
from .common.logging_config import get_logger
from .errors import NotFoundError, StoreUnavailableError, ValidationError


class URLShortenerService:
    """Service layer composing the allocator and resolver over shared clients."""

    def __init__(
        self,
        store: DurableStoreBase,
        cache: Optional[CacheBase] = None,
        encoder: Optional[ShortCodeEncoder] = None,
        logger: Optional[logging.Logger] = None,
        urls_table: str = "short_urls",
        counter_table: str = "url_counters",
        counter_key: str = "global",
        store_timeout: Optional[float] = 5.0,
        cache_timeout: Optional[float] = 0.5,
        warm_cache_on_create: bool = False,
    ):
        """Initialize URL shortener service.

        Args:
            store: Durable store instance
            cache: Optional cache instance
            encoder: Optional short code encoder
            logger: Optional logger
            urls_table: Table for short code -> long URL records
            counter_table: Table holding the allocation counter
            counter_key: Key of the counter record
            store_timeout: Seconds allowed per store call
            cache_timeout: Seconds allowed per cache call
            warm_cache_on_create: Write new mappings to the cache on creation
        """
        self.store = store
        self.cache = cache
        self.logger = logger or get_logger("service")
        self.urls_table = urls_table
        self.counter_table = counter_table
        self.counter_key = counter_key
        self.store_timeout = store_timeout

        self.allocator = Allocator(
            store=store,
            cache=cache,
            encoder=encoder,
            logger=self.logger,
            urls_table=urls_table,
            counter_table=counter_table,
            counter_key=counter_key,
            store_timeout=store_timeout,
            cache_timeout=cache_timeout,
            warm_cache=warm_cache_on_create,
        )
        self.resolver = Resolver(
            store=store,
            cache=cache,
            logger=self.logger,
            urls_table=urls_table,
            store_timeout=store_timeout,
            cache_timeout=cache_timeout,
        )

    @classmethod
    def from_config(
        cls,
        config,
        store: DurableStoreBase,
        cache: Optional[CacheBase] = None,
        logger: Optional[logging.Logger] = None,
    ) -> "URLShortenerService":
        """Build a service using table names and timeouts from config."""
        return cls(
            store=store,
            cache=cache,
            logger=logger,
            urls_table=config.urls_table,
            counter_table=config.counter_table,
            counter_key=config.counter_key,
            store_timeout=config.store_timeout_seconds,
            cache_timeout=config.cache_timeout_seconds,
            warm_cache_on_create=config.warm_cache_on_create,
        )

    async def create_short_url(self, long_url: str) -> URLMapping:
        """Create a new short URL."""
        return await self.allocator.create_mapping(long_url)

    async def resolve(self, short_code: str) -> str:
        """Get the long URL for a short code through the cache."""
        return await self.resolver.resolve(short_code)

    async def get_url_info(self, short_code: str) -> URLMapping:
        """Read the full mapping straight from the store.

        Raises:
            ValidationError: If short_code is empty
            NotFoundError: If the code does not exist
            StoreUnavailableError: If the store read fails or times out
        """
        is_valid, error = is_valid_short_code(short_code)
        if not is_valid:
            raise ValidationError(error)

        record = await self._store_get(self.urls_table, short_code)
        if not record:
            raise NotFoundError(short_code)
        return URLMapping.from_record(record)

    async def get_statistics(self) -> Dict[str, Any]:
        """Get service statistics.

        Returns:
            Dictionary with the current counter value and cache status
        """
        counter = await self._store_get(self.counter_table, self.counter_key)
        return {
            "codes_allocated": int((counter or {}).get(Allocator.COUNT_FIELD, 0)),
            "cache_enabled": self.cache is not None,
        }

    async def _store_get(self, table: str, key: str) -> Optional[Dict[str, Any]]:
        try:
            return await asyncio.wait_for(
                self.store.get(table, key), timeout=self.store_timeout
            )
        except asyncio.TimeoutError as e:
            self.logger.error(f"Store get on {table} timed out after {self.store_timeout}s")
            raise StoreUnavailableError(f"Store get on {table} timed out") from e

    async def health_check(self) -> Dict[str, bool]:
        """Perform health check.

        The cache is reported but does not affect overall health, since
        resolution works without it.
        """
        db_healthy = await self.store.health_check()
        cache_healthy = True
        if self.cache is not None:
            cache_healthy = await self.cache.ping()

        return {
            "database": db_healthy,
            "cache": cache_healthy,
            "overall": db_healthy,
        }

    async def close(self) -> None:
        """Close service connections."""
        await self.store.close()
        if self.cache is not None:
            await self.cache.close()
