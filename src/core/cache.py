"""
Key-value cache stores for lookup tables.

All stores hold serialized strings with a time-to-live. Writes report
success as a bool; callers treat a failed write as a cache miss next time.
"""

import logging
import threading
import time
from pathlib import Path
from typing import Callable, Protocol

from core.config import CACHE_BACKEND, CACHE_MAX_VALUE_BYTES
from core.database import create_schema, get_connection

log = logging.getLogger(__name__)


class CacheStore(Protocol):
    """Protocol for cache backends."""

    def get(self, key: str) -> str | None:
        """Return the cached value, or None if absent or expired."""
        ...

    def put(self, key: str, value: str, ttl_seconds: int) -> bool:
        """Store a value for ttl_seconds. Returns False if it was not stored."""
        ...


def _too_large(value: str, max_bytes: int) -> bool:
    return len(value.encode("utf-8")) > max_bytes


class MemoryCache:
    """In-process cache with expiry, safe to share between request threads."""

    def __init__(
        self,
        max_value_bytes: int = CACHE_MAX_VALUE_BYTES,
        clock: Callable[[], float] = time.monotonic,
    ):
        self.max_value_bytes = max_value_bytes
        self._clock = clock
        self._entries: dict[str, tuple[float, str]] = {}
        self._lock = threading.Lock()

    def get(self, key: str) -> str | None:
        with self._lock:
            entry = self._entries.get(key)
            if entry is None:
                return None
            expires_at, value = entry
            if self._clock() >= expires_at:
                del self._entries[key]
                return None
            return value

    def put(self, key: str, value: str, ttl_seconds: int) -> bool:
        if _too_large(value, self.max_value_bytes):
            return False
        with self._lock:
            self._entries[key] = (self._clock() + ttl_seconds, value)
        return True

    def clear(self):
        with self._lock:
            self._entries.clear()


class SQLiteCache:
    """Cache persisted in the service SQLite database (lookup_cache table)."""

    def __init__(
        self,
        db_path: Path | None = None,
        max_value_bytes: int = CACHE_MAX_VALUE_BYTES,
        clock: Callable[[], float] = time.time,
    ):
        self.db_path = db_path
        self.max_value_bytes = max_value_bytes
        self._clock = clock
        conn = get_connection(self.db_path)
        try:
            create_schema(conn)
        finally:
            conn.close()

    def get(self, key: str) -> str | None:
        conn = get_connection(self.db_path)
        try:
            row = conn.execute(
                "SELECT value, expires_at FROM lookup_cache WHERE key = ?", (key,)
            ).fetchone()
        finally:
            conn.close()

        if row is None:
            return None
        value, expires_at = row
        if self._clock() >= expires_at:
            return None
        return value

    def put(self, key: str, value: str, ttl_seconds: int) -> bool:
        if _too_large(value, self.max_value_bytes):
            return False
        conn = get_connection(self.db_path)
        try:
            conn.execute(
                """
                INSERT INTO lookup_cache (key, value, expires_at) VALUES (?, ?, ?)
                ON CONFLICT(key) DO UPDATE SET value = excluded.value, expires_at = excluded.expires_at
                """,
                (key, value, self._clock() + ttl_seconds),
            )
            conn.commit()
        finally:
            conn.close()
        return True


class NullCache:
    """Cache that never stores anything."""

    def get(self, key: str) -> str | None:
        return None

    def put(self, key: str, value: str, ttl_seconds: int) -> bool:
        return False


_cache_store: CacheStore | None = None


def create_cache_store(backend: str) -> CacheStore:
    """Build a cache store for a backend name (memory, sqlite, none)."""
    if backend == "sqlite":
        return SQLiteCache()
    if backend == "none":
        return NullCache()
    if backend != "memory":
        log.warning("Unknown CACHE_BACKEND '%s', using in-memory cache", backend)
    return MemoryCache()


def get_cache_store() -> CacheStore:
    """Get or create the process-wide cache store (lazy initialization)."""
    global _cache_store
    if _cache_store is None:
        _cache_store = create_cache_store(CACHE_BACKEND)
    return _cache_store
