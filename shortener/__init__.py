"""Core business logic for URL shortener."""

from .shortcode import ShortCodeEncoder
from .allocator import Allocator
from .resolver import Resolver
from .service import URLShortenerService
from .errors import (
    ShortenerError,
    ValidationError,
    NotFoundError,
    StoreError,
    StoreConflictError,
    StoreUnavailableError,
    CacheUnavailableError,
)

__all__ = [
    "ShortCodeEncoder",
    "Allocator",
    "Resolver",
    "URLShortenerService",
    "ShortenerError",
    "ValidationError",
    "NotFoundError",
    "StoreError",
    "StoreConflictError",
    "StoreUnavailableError",
    "CacheUnavailableError",
]
