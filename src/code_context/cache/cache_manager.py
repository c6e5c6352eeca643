"""In-memory cache of context snapshots."""

import time
from dataclasses import dataclass
from typing import Any, Dict, Optional


@dataclass
class CacheEntry:
    """A cached snapshot and the time it was stored."""
    data: Any
    timestamp: float


class ContextCache:
    """Capacity- and age-bounded store of project and file snapshots.

    Entries are keyed by ``"<type>:<key>"``. Once the cache holds more than
    ``max_size`` entries, the earliest inserted key is evicted; reads never
    change eviction order, and overwriting a key keeps its original position.
    Freshness is checked per read: stale entries are reported as misses but
    stay in place until evicted, overwritten, or swept by ``cleanup_expired``.
    """

    def __init__(self, max_size: int = 100, max_age: float = 300.0):
        """
        Initialize the cache.

        Args:
            max_size: Maximum number of entries kept (default: 100)
            max_age: Default freshness window for reads in seconds (default: 5 minutes)
        """
        if max_size <= 0:
            raise ValueError("max_size must be positive")
        self.max_size = max_size
        self.max_age = max_age
        self._entries: Dict[str, CacheEntry] = {}
        self.stats = {"hits": 0, "misses": 0, "evictions": 0}

    @staticmethod
    def make_key(cache_type: str, key: str) -> str:
        return f"{cache_type}:{key}"

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, cache_key: str) -> bool:
        return cache_key in self._entries

    def keys(self):
        """Raw cache keys in insertion order."""
        return list(self._entries)

    def set(self, cache_type: str, key: str, data: Any):
        """Cache data under ``<cache_type>:<key>``."""
        self._entries[self.make_key(cache_type, key)] = CacheEntry(data=data, timestamp=time.time())

        # Remove the oldest inserted entry if the cache is too large
        if len(self._entries) > self.max_size:
            oldest_key = next(iter(self._entries))
            del self._entries[oldest_key]
            self.stats["evictions"] += 1

    def get(self, cache_type: str, key: str, max_age: Optional[float] = None) -> Optional[Any]:
        """Get cached data if present and younger than ``max_age`` seconds."""
        if max_age is None:
            max_age = self.max_age

        entry = self._entries.get(self.make_key(cache_type, key))
        if entry is None or time.time() - entry.timestamp >= max_age:
            self.stats["misses"] += 1
            return None

        self.stats["hits"] += 1
        return entry.data

    def delete(self, cache_type: str, key: str) -> bool:
        """Remove an entry; returns True if it existed."""
        return self._entries.pop(self.make_key(cache_type, key), None) is not None

    def clear(self):
        """Drop all entries."""
        self._entries.clear()

    def cleanup_expired(self, max_age: Optional[float] = None) -> int:
        """Remove entries older than ``max_age`` seconds and return how many went."""
        if max_age is None:
            max_age = self.max_age

        current_time = time.time()
        to_remove = [
            cache_key for cache_key, entry in self._entries.items()
            if current_time - entry.timestamp >= max_age
        ]

        for cache_key in to_remove:
            del self._entries[cache_key]

        return len(to_remove)

    def get_stats(self) -> Dict[str, Any]:
        """Get cache statistics."""
        total_requests = self.stats["hits"] + self.stats["misses"]
        hit_rate = (self.stats["hits"] / total_requests * 100) if total_requests > 0 else 0

        return {
            "hit_rate": hit_rate,
            "total_requests": total_requests,
            "hits": self.stats["hits"],
            "misses": self.stats["misses"],
            "evictions": self.stats["evictions"],
            "entries": len(self._entries),
            "max_size": self.max_size,
        }
