"""
Storage interface consumed by leaky buckets.
"""

from abc import ABC, abstractmethod
from typing import Any, Optional


class StorageInterface(ABC):
    """Key/value store with per-entry time-to-live."""

    @abstractmethod
    def store(self, key: str, value: Any, ttl: float = 0) -> None:
        """Store value under key; a ttl of zero or less means no expiry."""

    @abstractmethod
    def fetch(self, key: str) -> Optional[Any]:
        """Return the value stored under key, or None if absent."""

    @abstractmethod
    def exists(self, key: str) -> bool:
        """Check whether key is present."""

    @abstractmethod
    def purge(self, key: str) -> None:
        """Remove key; absent keys are ignored."""
