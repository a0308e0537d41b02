"""
In-process storage for leaky buckets.
"""

import json
import threading
import time
from typing import Any, Callable, Dict, Optional, Tuple

from .base import StorageInterface


class MemoryStorage(StorageInterface):
    """Dict-backed storage for tests and single-process hosts.

    Values are kept JSON-encoded, so a stored record is detached from the
    caller's objects and must be JSON serializable, as it would be in Redis.
    Expired entries are dropped when they are next accessed.
    """

    def __init__(self, clock: Callable[[], float] = time.time):
        self._clock = clock
        self._entries: Dict[str, Tuple[str, Optional[float]]] = {}
        self._lock = threading.Lock()

    def store(self, key: str, value: Any, ttl: float = 0) -> None:
        payload = json.dumps(value)
        expires_at = self._clock() + ttl if ttl and ttl > 0 else None
        with self._lock:
            self._entries[key] = (payload, expires_at)

    def fetch(self, key: str) -> Optional[Any]:
        with self._lock:
            entry = self._live_entry(key)
        if entry is None:
            return None
        return json.loads(entry[0])

    def exists(self, key: str) -> bool:
        with self._lock:
            return self._live_entry(key) is not None

    def purge(self, key: str) -> None:
        with self._lock:
            self._entries.pop(key, None)

    def ttl(self, key: str) -> Optional[float]:
        """Seconds until key expires; None if absent or without expiry."""
        with self._lock:
            entry = self._live_entry(key)
        if entry is None or entry[1] is None:
            return None
        return entry[1] - self._clock()

    def _live_entry(self, key: str) -> Optional[Tuple[str, Optional[float]]]:
        entry = self._entries.get(key)
        if entry is None:
            return None
        expires_at = entry[1]
        if expires_at is not None and expires_at <= self._clock():
            del self._entries[key]
            return None
        return entry
