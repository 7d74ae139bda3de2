"""In-memory cache with optional TTL and LRU size limit.

Backs the parsed-template cache. Values stored here must be immutable,
since the same object is handed to every caller.
"""

import hashlib
import itertools
import logging
import threading
from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import Any

logger = logging.getLogger(__name__)


@dataclass
class CacheEntry:
    """A cached value with optional expiration."""

    value: Any
    expires_at: datetime | None
    last_accessed: int  # access tick, higher = more recent


class TTLCache:
    """Thread-safe in-memory cache with TTL and size limit.

    Features:
    - Time-based expiration (TTL, 0 = never expires)
    - Maximum size limit with LRU eviction (0 = unlimited)
    - Thread-safe operations

    Usage:
        cache = TTLCache(default_ttl_seconds=0, max_size=1024)
        cache.set("key", value)
        result = cache.get("key")  # Returns None if missing or expired
    """

    DEFAULT_MAX_SIZE = 1024

    def __init__(
        self,
        default_ttl_seconds: int = 0,
        max_size: int = DEFAULT_MAX_SIZE,
    ):
        self._cache: dict[str, CacheEntry] = {}
        self._default_ttl = timedelta(seconds=default_ttl_seconds) if default_ttl_seconds else None
        self._max_size = max_size
        self._lock = threading.Lock()
        self._hits = 0
        self._misses = 0
        self._ticks = itertools.count()

    @staticmethod
    def _is_expired(entry: CacheEntry, now: datetime) -> bool:
        return entry.expires_at is not None and now > entry.expires_at

    def get(self, key: str) -> Any | None:
        """Get value if exists and not expired."""
        with self._lock:
            entry = self._cache.get(key)
            if entry is None:
                self._misses += 1
                return None
            now = datetime.now()
            if self._is_expired(entry, now):
                del self._cache[key]
                self._misses += 1
                return None
            entry.last_accessed = next(self._ticks)
            self._hits += 1
            return entry.value

    def set(self, key: str, value: Any, ttl_seconds: int | None = None) -> None:
        """Set value with optional custom TTL.

        Concurrent writers of the same key simply overwrite each other.
        """
        ttl = timedelta(seconds=ttl_seconds) if ttl_seconds else self._default_ttl
        now = datetime.now()
        expires_at = now + ttl if ttl else None

        with self._lock:
            if self._max_size > 0 and key not in self._cache:
                self._evict_if_needed()

            self._cache[key] = CacheEntry(
                value=value,
                expires_at=expires_at,
                last_accessed=next(self._ticks),
            )

    def _evict_if_needed(self) -> None:
        """Evict entries if cache is at max size. Called with lock held."""
        if self._max_size <= 0:
            return

        now = datetime.now()
        expired_keys = [k for k, v in self._cache.items() if self._is_expired(v, now)]
        for key in expired_keys:
            del self._cache[key]

        while len(self._cache) >= self._max_size:
            if not self._cache:
                break
            lru_key = min(self._cache.keys(), key=lambda k: self._cache[k].last_accessed)
            del self._cache[lru_key]
            logger.debug("[CACHE] Evicted LRU entry %s", lru_key[:12])

    def delete(self, key: str) -> None:
        """Delete a key from cache."""
        with self._lock:
            self._cache.pop(key, None)

    def clear(self) -> None:
        """Clear all cached values."""
        with self._lock:
            self._cache.clear()
            self._hits = 0
            self._misses = 0
            self._ticks = itertools.count()

    def __contains__(self, key: str) -> bool:
        with self._lock:
            entry = self._cache.get(key)
            return entry is not None and not self._is_expired(entry, datetime.now())

    @property
    def size(self) -> int:
        """Current number of entries (including possibly expired)."""
        return len(self._cache)

    @property
    def max_size(self) -> int:
        """Maximum cache size (0 = unlimited)."""
        return self._max_size

    def stats(self) -> dict:
        """Get cache statistics."""
        now = datetime.now()
        with self._lock:
            total = len(self._cache)
            expired = sum(1 for v in self._cache.values() if self._is_expired(v, now))
            total_requests = self._hits + self._misses
            hit_rate = self._hits / total_requests if total_requests > 0 else 0
            return {
                "total_entries": total,
                "active_entries": total - expired,
                "expired_entries": expired,
                "max_size": self._max_size,
                "hits": self._hits,
                "misses": self._misses,
                "hit_rate": round(hit_rate, 3),
            }


def make_cache_key(*parts: str) -> str:
    """Create a cache key from parts."""
    return ":".join(str(p) for p in parts)


def content_key(text: str) -> str:
    """Content-addressed key for an arbitrary string."""
    return hashlib.sha256(text.encode("utf-8")).hexdigest()
