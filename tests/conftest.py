"""Pytest configuration and fixtures."""

import asyncio
from collections import Counter
from typing import Dict, Optional

import pytest
from httpx import ASGITransport, AsyncClient

from config import Config
from shortener.allocator import Allocator
from shortener.resolver import Resolver
from shortener.service import URLShortenerService
from shortener.database.cache import CacheBase
from shortener.database.memory import InMemoryStore
from shortener.errors import CacheUnavailableError
from shortener.common.logging_config import setup_logging
from web_app import create_app


class MemoryCache(CacheBase):
    """Dict-backed cache that counts calls."""

    def __init__(self):
        self.data: Dict[str, str] = {}
        self.calls: Counter = Counter()

    async def get(self, key: str) -> Optional[str]:
        self.calls["get"] += 1
        return self.data.get(key)

    async def set(self, key: str, value: str) -> None:
        self.calls["set"] += 1
        self.data[key] = value


class FailingCache(CacheBase):
    """Cache whose every call fails."""

    def __init__(self):
        self.calls: Counter = Counter()

    async def get(self, key: str) -> Optional[str]:
        self.calls["get"] += 1
        raise CacheUnavailableError("connection refused")

    async def set(self, key: str, value: str) -> None:
        self.calls["set"] += 1
        raise CacheUnavailableError("connection refused")

    async def ping(self) -> bool:
        return False


class HangingCache(MemoryCache):
    """Cache that never answers within any reasonable timeout."""

    async def get(self, key: str) -> Optional[str]:
        self.calls["get"] += 1
        await asyncio.sleep(10)
        return None

    async def set(self, key: str, value: str) -> None:
        self.calls["set"] += 1
        await asyncio.sleep(10)


class HangingStore(InMemoryStore):
    """Store whose calls never complete."""

    async def get(self, table, key):
        self.calls["get"] += 1
        await asyncio.sleep(10)

    async def atomic_increment(self, table, counter_key, field, delta=1):
        self.calls["atomic_increment"] += 1
        await asyncio.sleep(10)
        return 0


@pytest.fixture
def logger():
    """Create test logger."""
    return setup_logging(level="DEBUG")


@pytest.fixture
def store(logger):
    return InMemoryStore(logger=logger)


@pytest.fixture
def cache():
    return MemoryCache()


@pytest.fixture
def failing_cache():
    return FailingCache()


@pytest.fixture
def hanging_cache():
    return HangingCache()


@pytest.fixture
def hanging_store(logger):
    return HangingStore(logger=logger)


@pytest.fixture
def allocator(store, logger):
    return Allocator(store=store, logger=logger)


@pytest.fixture
def resolver(store, cache, logger):
    return Resolver(store=store, cache=cache, logger=logger)


@pytest.fixture
def service(store, cache, logger) -> URLShortenerService:
    """Create service instance over the in-memory store and cache."""
    return URLShortenerService(store=store, cache=cache, logger=logger)


@pytest.fixture
def config():
    return Config(base_url="http://testserver", redis_url=None)


@pytest.fixture
def app(service, config, logger):
    """Create test FastAPI app."""
    return create_app(service_instance=service, config=config, logger=logger)


@pytest.fixture
async def client(app):
    """Create test client."""
    async with AsyncClient(
        transport=ASGITransport(app=app), base_url="http://testserver"
    ) as ac:
        yield ac


@pytest.fixture
def sample_urls():
    """Sample URLs for testing."""
    return [
        "https://example.com/a",
        "https://example.com/b",
        "https://github.com/user/repo",
    ]
