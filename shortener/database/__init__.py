"""Durable store and cache layer for URL shortener."""

from .base import DurableStoreBase
from .cache import CacheBase, RedisCache
from .memory import InMemoryStore
from .models import URLMapping
from .postgres import PostgresStore

__all__ = [
    "DurableStoreBase",
    "CacheBase",
    "RedisCache",
    "InMemoryStore",
    "URLMapping",
    "PostgresStore",
]
