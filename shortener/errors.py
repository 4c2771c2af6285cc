"""Error types raised by the URL shortener core."""


class ShortenerError(Exception):
    """Base class for all URL shortener errors."""


class ValidationError(ShortenerError, ValueError):
    """Caller supplied invalid input. Never retried."""


class NotFoundError(ShortenerError, LookupError):
    """Short code does not exist in the durable store."""

    def __init__(self, short_code: str):
        super().__init__(f"Short code '{short_code}' not found")
        self.short_code = short_code


class StoreError(ShortenerError):
    """Base class for durable store failures."""


class StoreConflictError(StoreError):
    """Insert-only write hit an existing key."""

    def __init__(self, table: str, key: str):
        super().__init__(f"Key '{key}' already exists in table '{table}'")
        self.table = table
        self.key = key


class StoreUnavailableError(StoreError):
    """Transient durable store failure (I/O error or timeout).

    Safe to retry the whole operation. A retried create consumes a new
    counter value, so it is not idempotent.
    """


class CacheUnavailableError(ShortenerError):
    """Cache call failed. Readers treat this as a miss."""
