"""Abstract base class for durable store implementations."""

from abc import ABC, abstractmethod
from typing import Optional, Dict, Any


class DurableStoreBase(ABC):
    """Keyed record store with an atomic counter primitive.

    Implementations translate backend I/O failures to
    ``StoreUnavailableError`` and duplicate insert-only writes to
    ``StoreConflictError``.
    """

    @abstractmethod
    async def get(self, table: str, key: str) -> Optional[Dict[str, Any]]:
        """Get a record by key.

        Args:
            table: Logical table name
            key: Record key

        Returns:
            The record if found, None otherwise
        """
        pass

    @abstractmethod
    async def put(
        self,
        table: str,
        key: str,
        record: Dict[str, Any],
        insert_only: bool = True,
    ) -> None:
        """Write a record.

        Args:
            table: Logical table name
            key: Record key
            record: Record data
            insert_only: Fail instead of overwriting an existing key

        Raises:
            StoreConflictError: If insert_only is set and the key exists
        """
        pass

    @abstractmethod
    async def atomic_increment(
        self,
        table: str,
        counter_key: str,
        field: str,
        delta: int = 1,
    ) -> int:
        """Atomically add delta to a numeric field and return the new value.

        The field starts at 0 if the record or field does not exist yet.
        Concurrent callers never observe the same result.

        Args:
            table: Logical table name
            counter_key: Key of the counter record
            field: Numeric field to increment
            delta: Amount to add

        Returns:
            Post-increment value
        """
        pass

    @abstractmethod
    async def health_check(self) -> bool:
        """Check if the store is reachable.

        Returns:
            True if healthy, False otherwise
        """
        pass

    @abstractmethod
    async def close(self) -> None:
        """Release store connections."""
        pass
