"""
Leaky bucket rate limiting backed by pluggable storage.

- bucket: the LeakyBucket state machine
- models: bucket state and configuration
- storage: storage interface, Redis and in-memory backends
- errors: InvalidArgumentError and StorageError
- config: settings via pydantic-settings
- logging: structured logging via structlog
- metrics: Prometheus collectors
"""

from .bucket import LeakyBucket
from .errors import InvalidArgumentError, LeakyBucketException, StorageError
from .models import BucketConfig, BucketState
from .storage import MemoryStorage, RedisStorage, StorageInterface

__version__ = "1.0.0"

__all__ = [
    "LeakyBucket",
    "BucketConfig",
    "BucketState",
    "StorageInterface",
    "MemoryStorage",
    "RedisStorage",
    "LeakyBucketException",
    "InvalidArgumentError",
    "StorageError",
    "__version__",
]
