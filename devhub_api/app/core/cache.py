"""
In-memory TTL cache for upstream responses.

Entries are checked for staleness lazily: a read ignores an entry
older than the TTL, and every write is followed by a sweep that drops
all expired entries.  There is no background timer and no size bound.

A single ``threading.Lock`` guards the store.  Sync FastAPI routes run
in a threadpool, so reads and writes can race; the sweep reads the
clock while holding the lock, which means it can never evict an entry
written with a newer timestamp than the one it compares against.
"""

from __future__ import annotations

import json
import threading
import time
from typing import Any, Callable, Dict, Optional, Tuple


class TTLCache:
    """Mapping of string keys to values that expire ``ttl`` seconds after capture."""

    def __init__(self, ttl: float = 300, clock: Callable[[], float] = time.monotonic) -> None:
        self.ttl = ttl
        self._clock = clock
        self._store: Dict[str, Tuple[Any, float]] = {}
        self._lock = threading.Lock()

    @staticmethod
    def make_key(namespace: str, params: Dict[str, Any]) -> str:
        """Build a key that does not depend on the insertion order of ``params``."""
        return f"{namespace}:{json.dumps(params, sort_keys=True, separators=(',', ':'), default=str)}"

    def get(self, key: str) -> Optional[Any]:
        """Return the value stored under ``key`` if it is younger than the TTL."""
        with self._lock:
            entry = self._store.get(key)
            if entry is None:
                return None
            value, captured_at = entry
            if self._clock() - captured_at < self.ttl:
                return value
            return None

    def set(self, key: str, value: Any) -> None:
        """Store ``value`` stamped with the current time, then sweep expired entries."""
        with self._lock:
            now = self._clock()
            self._store[key] = (value, now)
            self._sweep(now)

    def purge_expired(self) -> int:
        """Drop expired entries; returns how many were removed."""
        with self._lock:
            return self._sweep(self._clock())

    def clear(self) -> None:
        with self._lock:
            self._store.clear()

    def _sweep(self, now: float) -> int:
        expired = [key for key, (_, captured_at) in self._store.items() if now - captured_at > self.ttl]
        for key in expired:
            del self._store[key]
        return len(expired)

    def __contains__(self, key: object) -> bool:
        with self._lock:
            return key in self._store

    def __len__(self) -> int:
        with self._lock:
            return len(self._store)
