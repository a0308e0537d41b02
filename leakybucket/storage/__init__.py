"""
Storage backends for leaky buckets.

A bucket only needs the four operations of StorageInterface:
store, fetch, exists and purge. Redis is the production backend;
MemoryStorage serves tests and single-process hosts.
"""

from .base import StorageInterface
from .memory import MemoryStorage
from .redis_storage import RedisStorage

__all__ = ["StorageInterface", "MemoryStorage", "RedisStorage"]
