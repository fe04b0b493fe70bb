"""Process-wide memoization for reference data lookups.

Entries are kept until they are invalidated explicitly; nothing expires on
its own. Reference data rarely changes, so after editing the country or state
tables call :meth:`ReferenceCache.invalidate` (or :meth:`ReferenceCache.flush`)
instead of restarting the process.
"""
import logging
import threading
from typing import Any, Callable, Dict, Optional, TypeVar

logger = logging.getLogger(__name__)

T = TypeVar('T')

_MISSING = object()


class ReferenceCache:
    """Key/value store with forever retention and explicit invalidation."""

    def __init__(self):
        self._entries: Dict[str, Any] = {}
        self._lock = threading.Lock()
        self.hits = 0
        self.misses = 0

    def remember_forever(self, key: str, callback: Callable[[], T]) -> T:
        """Return the cached value for ``key``, computing it on first access.

        The callback runs outside the lock, so two threads racing on a cold
        key may both compute it; the later write wins.
        """
        value = self._entries.get(key, _MISSING)
        if value is not _MISSING:
            self.hits += 1
            return value

        self.misses += 1
        logger.debug(f"Cache miss for {key}")
        value = callback()
        with self._lock:
            self._entries[key] = value
        return value

    def get(self, key: str, default: Optional[Any] = None) -> Any:
        return self._entries.get(key, default)

    def has(self, key: str) -> bool:
        return key in self._entries

    def put(self, key: str, value: Any) -> None:
        with self._lock:
            self._entries[key] = value

    def invalidate(self, key: str) -> bool:
        """Drop a single entry. Returns True if it was cached."""
        with self._lock:
            removed = self._entries.pop(key, _MISSING) is not _MISSING
        if removed:
            logger.debug(f"Invalidated cache entry {key}")
        return removed

    def invalidate_prefix(self, prefix: str) -> int:
        """Drop every entry whose key starts with ``prefix``."""
        with self._lock:
            keys = [key for key in self._entries if key.startswith(prefix)]
            for key in keys:
                del self._entries[key]
        logger.debug(f"Invalidated {len(keys)} cache entries under {prefix}")
        return len(keys)

    def flush(self) -> None:
        """Drop every entry and reset the counters."""
        with self._lock:
            self._entries.clear()
            self.hits = 0
            self.misses = 0

    def stats(self) -> Dict[str, int]:
        return {
            'entries': len(self._entries),
            'hits': self.hits,
            'misses': self.misses
        }

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, key: str) -> bool:
        return self.has(key)


default_cache = ReferenceCache()
