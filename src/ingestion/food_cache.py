"""In-memory, time-expiring cache for provider lookups.

Cache stores: "<provider>_search:<lowercase query>" → List[FoodSearchResult]
and "<provider>_food:<food id>" → FoodSearchResult.

DESIGN DECISIONS:
- One instance per service, injected into every adapter (no module state)
- Stale entries are ignored, not deleted; the next write overwrites them
- Values are deep-copied on write and on read, so callers cannot alter
  what later hits return
- Unbounded: query cardinality is expected to stay small
- Clock is injectable so expiry is testable without sleeping
"""

import copy
import time
from dataclasses import dataclass
from typing import Any, Callable, Dict, Optional


DEFAULT_TTL_SECONDS = 60 * 60


def search_key(provider: str, query: str) -> str:
    """Cache key for a provider search."""
    return f"{provider.lower()}_search:{query.strip().lower()}"


def food_key(provider: str, food_id: str) -> str:
    """Cache key for a provider details lookup."""
    return f"{provider.lower()}_food:{food_id}"


@dataclass
class CacheEntry:
    """A cached value and the clock reading when it was written."""

    value: Any
    stored_at: float


class FoodCache:
    """Time-based cache for provider results.

    Usage:
        cache = FoodCache(ttl_seconds=3600)
        cache.set("usda_search:banana", results)
        cached = cache.get("usda_search:banana")  # None once expired
    """

    def __init__(
        self,
        ttl_seconds: float = DEFAULT_TTL_SECONDS,
        clock: Callable[[], float] = time.monotonic,
    ):
        """Initialize cache.

        Args:
            ttl_seconds: Age at which an entry stops being served
            clock: Monotonic time source in seconds
        """
        self.ttl_seconds = ttl_seconds
        self._clock = clock
        self._entries: Dict[str, CacheEntry] = {}

    def get(self, key: str) -> Optional[Any]:
        """Return the value for key if it is still fresh, else None."""
        entry = self._entries.get(key)
        if entry is None:
            return None
        if self._clock() - entry.stored_at >= self.ttl_seconds:
            return None
        return copy.deepcopy(entry.value)

    def set(self, key: str, value: Any) -> None:
        """Store value under key, replacing any previous entry."""
        self._entries[key] = CacheEntry(value=copy.deepcopy(value), stored_at=self._clock())

    def clear(self) -> None:
        self._entries.clear()

    def __contains__(self, key: str) -> bool:
        return self.get(key) is not None

    def __len__(self) -> int:
        # Includes stale entries that have not been overwritten yet
        return len(self._entries)
