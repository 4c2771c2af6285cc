"""Tests for short code allocation."""

from datetime import datetime, timezone

import pytest

from shortener.allocator import Allocator
from shortener.errors import StoreConflictError, StoreUnavailableError, ValidationError


class TestAllocator:
    """Test the allocator against the in-memory store."""

    async def test_first_codes_follow_counter(self, allocator):
        """Counter starts at 0, so the first code encodes 1."""
        assert await allocator.create("https://example.com/a") == "1"
        assert await allocator.create("https://example.com/b") == "2"

    async def test_persists_mapping(self, allocator, store):
        mapping = await allocator.create_mapping("https://example.com/a")

        record = store.tables["short_urls"][mapping.short_code]
        assert record["long_url"] == "https://example.com/a"
        assert record["short_code"] == mapping.short_code
        assert datetime.fromisoformat(record["created_at"]) == mapping.created_at
        assert mapping.created_at.tzinfo == timezone.utc

    async def test_counter_lives_in_store(self, allocator, store):
        for _ in range(3):
            await allocator.create("https://example.com/a")

        assert store.tables["url_counters"]["global"]["count"] == 3

    async def test_same_url_gets_new_code(self, allocator):
        """Creation is not deduplicated: each call allocates a fresh code."""
        first = await allocator.create("https://example.com/a")
        second = await allocator.create("https://example.com/a")
        assert first != second

    async def test_code_62_rolls_over(self, store, logger):
        store.tables["url_counters"]["global"] = {"count": 61}
        allocator = Allocator(store=store, logger=logger)

        assert await allocator.create("https://example.com/a") == "10"

    @pytest.mark.parametrize("bad", ["", "   ", None])
    async def test_empty_url_rejected_without_side_effects(self, allocator, store, bad):
        with pytest.raises(ValidationError):
            await allocator.create(bad)

        assert sum(store.calls.values()) == 0
        assert not store.tables

    async def test_conflict_is_fatal(self, store, logger):
        """A pre-existing record for the next code surfaces as a conflict."""
        store.tables["short_urls"]["1"] = {"short_code": "1", "long_url": "https://tampered.example"}
        allocator = Allocator(store=store, logger=logger)

        with pytest.raises(StoreConflictError):
            await allocator.create("https://example.com/a")

        # No silent retry, and the original record is untouched
        assert store.calls["atomic_increment"] == 1
        assert store.tables["short_urls"]["1"]["long_url"] == "https://tampered.example"

    async def test_store_timeout(self, hanging_store, logger):
        allocator = Allocator(store=hanging_store, logger=logger, store_timeout=0.01)

        with pytest.raises(StoreUnavailableError):
            await allocator.create("https://example.com/a")

    async def test_retry_after_failure_gets_fresh_code(self, store, logger):
        """A put failure wastes the counter value; the retry uses the next one."""

        class FlakyStore(type(store)):
            failed = False

            async def put(self, table, key, record, insert_only=True):
                if not self.failed:
                    self.failed = True
                    raise StoreUnavailableError("connection reset")
                await super().put(table, key, record, insert_only)

        flaky = FlakyStore(logger=logger)
        allocator = Allocator(store=flaky, logger=logger)

        with pytest.raises(StoreUnavailableError):
            await allocator.create("https://example.com/a")
        code = await allocator.create("https://example.com/a")

        assert code == "2"
        assert list(flaky.tables["short_urls"]) == ["2"]

    async def test_cache_not_written_by_default(self, store, cache, logger):
        allocator = Allocator(store=store, cache=cache, logger=logger)
        await allocator.create("https://example.com/a")

        assert cache.calls["set"] == 0

    async def test_warm_cache(self, store, cache, logger):
        allocator = Allocator(store=store, cache=cache, logger=logger, warm_cache=True)
        code = await allocator.create("https://example.com/a")

        assert cache.data[code] == "https://example.com/a"

    async def test_warm_cache_failure_ignored(self, store, failing_cache, logger):
        allocator = Allocator(store=store, cache=failing_cache, logger=logger, warm_cache=True)
        code = await allocator.create("https://example.com/a")

        assert code in store.tables["short_urls"]
