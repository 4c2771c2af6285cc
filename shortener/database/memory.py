"""In-memory durable store for tests and local runs."""

import asyncio
import logging
from collections import Counter, defaultdict
from typing import Optional, Dict, Any

from .base import DurableStoreBase
from ..errors import StoreConflictError


class InMemoryStore(DurableStoreBase):
    """Dict-backed store with the same contract as the SQL store.

    Each operation yields to the event loop once before touching state, so
    concurrent callers interleave, but the read-modify-write itself never
    suspends and is therefore atomic. ``calls`` counts operations by name.
    """

    def __init__(self, logger: Optional[logging.Logger] = None):
        self.logger = logger or logging.getLogger(__name__)
        self.tables: Dict[str, Dict[str, Dict[str, Any]]] = defaultdict(dict)
        self.calls: Counter = Counter()

    async def get(self, table: str, key: str) -> Optional[Dict[str, Any]]:
        self.calls["get"] += 1
        await asyncio.sleep(0)
        record = self.tables[table].get(key)
        return dict(record) if record is not None else None

    async def put(
        self,
        table: str,
        key: str,
        record: Dict[str, Any],
        insert_only: bool = True,
    ) -> None:
        self.calls["put"] += 1
        await asyncio.sleep(0)
        rows = self.tables[table]
        if insert_only and key in rows:
            self.logger.error(f"Duplicate key {key} in {table}")
            raise StoreConflictError(table, key)
        rows[key] = dict(record)

    async def atomic_increment(
        self,
        table: str,
        counter_key: str,
        field: str,
        delta: int = 1,
    ) -> int:
        self.calls["atomic_increment"] += 1
        await asyncio.sleep(0)
        record = self.tables[table].setdefault(counter_key, {})
        record[field] = record.get(field, 0) + delta
        return record[field]

    async def health_check(self) -> bool:
        return True

    async def close(self) -> None:
        pass
