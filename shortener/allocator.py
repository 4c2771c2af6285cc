"""Short code allocation backed by the durable store's atomic counter."""

import asyncio
import logging
from datetime import datetime, timezone
from typing import Optional

from .shortcode import ShortCodeEncoder
from .database.base import DurableStoreBase
from .database.cache import CacheBase
from .database.models import URLMapping
from .common.validators import is_valid_long_url
from .common.logging_config import get_logger
from .errors import (
    CacheUnavailableError,
    StoreConflictError,
    StoreUnavailableError,
    ValidationError,
)


class Allocator:
    """Turn long URLs into durably stored, collision-free short codes.

    Codes are the base62 encoding of a counter that only the store's atomic
    increment advances, so two calls never derive the same code. A counter
    value consumed by a failed call is simply skipped.
    """

    COUNT_FIELD = "count"

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
        warm_cache: bool = False,
    ):
        """Initialize allocator.

        Args:
            store: Durable store holding mappings and the counter
            cache: Optional cache, only written when warm_cache is set
            encoder: Optional short code encoder
            logger: Optional logger
            urls_table: Table for short code -> long URL records
            counter_table: Table holding the allocation counter
            counter_key: Key of the counter record
            store_timeout: Seconds allowed per store call (None disables)
            cache_timeout: Seconds allowed per cache call (None disables)
            warm_cache: Write new mappings to the cache after creation
        """
        self.store = store
        self.cache = cache
        self.encoder = encoder or ShortCodeEncoder()
        self.logger = logger or get_logger("allocator")
        self.urls_table = urls_table
        self.counter_table = counter_table
        self.counter_key = counter_key
        self.store_timeout = store_timeout
        self.cache_timeout = cache_timeout
        self.warm_cache = warm_cache

    async def create(self, long_url: str) -> str:
        """Create a mapping for long_url and return its short code.

        Raises:
            ValidationError: If long_url is empty
            StoreUnavailableError: On transient store failure; retrying
                yields a different, equally valid code
            StoreConflictError: If the generated code already exists
        """
        mapping = await self.create_mapping(long_url)
        return mapping.short_code

    async def create_mapping(self, long_url: str) -> URLMapping:
        """Same as create() but returns the persisted mapping."""
        is_valid, error = is_valid_long_url(long_url)
        if not is_valid:
            raise ValidationError(error)

        counter_value = await self._store_call(
            self.store.atomic_increment(
                self.counter_table, self.counter_key, self.COUNT_FIELD, 1
            ),
            "atomic_increment",
        )
        short_code = self.encoder.encode(counter_value)

        mapping = URLMapping(
            short_code=short_code,
            long_url=long_url,
            created_at=datetime.now(timezone.utc),
        )

        try:
            await self._store_call(
                self.store.put(
                    self.urls_table, short_code, mapping.to_record(), insert_only=True
                ),
                "put",
            )
        except StoreConflictError:
            self.logger.error(
                f"Short code {short_code} from counter value {counter_value} "
                f"already exists - counter is behind stored mappings"
            )
            raise

        if self.warm_cache and self.cache is not None:
            await self._warm(short_code, long_url)

        self.logger.info(f"Created short URL: {short_code} -> {long_url}")
        return mapping

    async def _store_call(self, coro, operation: str):
        try:
            return await asyncio.wait_for(coro, timeout=self.store_timeout)
        except asyncio.TimeoutError as e:
            self.logger.error(f"Store {operation} timed out after {self.store_timeout}s")
            raise StoreUnavailableError(f"Store {operation} timed out") from e

    async def _warm(self, short_code: str, long_url: str) -> None:
        try:
            await asyncio.wait_for(
                self.cache.set(short_code, long_url), timeout=self.cache_timeout
            )
        except (CacheUnavailableError, asyncio.TimeoutError) as e:
            self.logger.warning(f"Cache warm failed for {short_code}: {e}")
