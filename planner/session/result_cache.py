"""Bounded FIFO cache for location lookups."""

import logging
from datetime import date, datetime
from typing import Any

from planner.config.schema import CacheConfig

logger = logging.getLogger(__name__)


def cache_key(latitude: float, longitude: float, day: date | datetime | str) -> str:
    """Key on coordinates rounded to 4 decimals (~11 m) and the calendar date."""
    if isinstance(day, datetime):
        day_str = day.date().isoformat()
    elif isinstance(day, date):
        day_str = day.isoformat()
    else:
        day_str = str(day)[:10]
    return f"{latitude:.4f}_{longitude:.4f}_{day_str}"


class ResultCache:
    """Insertion-ordered cache with a hard capacity.

    Inserting a new key while at capacity first drops the ``evict_count``
    oldest entries. Lookups never refresh an entry's position and entries
    never expire on their own.
    """

    def __init__(self, capacity: int = 50, evict_count: int = 10):
        self.capacity = capacity
        self.evict_count = evict_count
        self._entries: dict[str, Any] = {}

    @classmethod
    def from_config(cls, config: CacheConfig) -> "ResultCache":
        return cls(capacity=config.capacity, evict_count=config.evict_count)

    def __contains__(self, key: str) -> bool:
        return key in self._entries

    def __len__(self) -> int:
        return len(self._entries)

    def get(self, key: str, default: Any = None) -> Any:
        return self._entries.get(key, default)

    def put(self, key: str, value: Any) -> None:
        if key not in self._entries and len(self._entries) >= self.capacity:
            oldest = list(self._entries)[: self.evict_count]
            for old_key in oldest:
                del self._entries[old_key]
            logger.debug("Evicted %d oldest cache entries", len(oldest))
        self._entries[key] = value

    def clear(self) -> None:
        self._entries.clear()

    def keys(self) -> list[str]:
        return list(self._entries)
