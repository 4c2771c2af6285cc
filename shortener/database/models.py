"""Data models for URL shortener."""

from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any, Dict


@dataclass(frozen=True)
class URLMapping:
    """Represents a short code -> long URL mapping in the durable store."""

    short_code: str
    long_url: str
    created_at: datetime

    def to_record(self) -> Dict[str, Any]:
        """Convert to a store record."""
        return {
            "short_code": self.short_code,
            "long_url": self.long_url,
            "created_at": self.created_at.isoformat(),
        }

    @classmethod
    def from_record(cls, data: Dict[str, Any]) -> "URLMapping":
        """Create from a store record."""
        created_at = data["created_at"]
        if not isinstance(created_at, datetime):
            created_at = datetime.fromisoformat(created_at)
        if created_at.tzinfo is None:
            created_at = created_at.replace(tzinfo=timezone.utc)
        return cls(
            short_code=data["short_code"],
            long_url=data["long_url"],
            created_at=created_at,
        )
