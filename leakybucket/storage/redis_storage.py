"""
Redis storage for leaky buckets.
"""

import json
import math
from typing import Any, Optional

import redis

from ..config import get_settings
from ..logging import get_logger
from .base import StorageInterface


class RedisStorage(StorageInterface):
    """Stores bucket records as JSON strings in Redis."""

    def __init__(self, client: Optional[redis.Redis] = None, *, redis_url: Optional[str] = None):
        self.logger = get_logger("leakybucket.storage.redis")
        self._owns_client = client is None

        if client is None:
            settings = get_settings()
            client = redis.Redis.from_url(
                redis_url or settings.redis_url,
                encoding="utf-8",
                decode_responses=True,
                socket_connect_timeout=settings.redis_socket_timeout,
                socket_timeout=settings.redis_socket_timeout,
                retry_on_timeout=True,
                health_check_interval=30
            )
            self.logger.debug("Created Redis client", redis_url=redis_url or settings.redis_url)

        self.redis = client

    def store(self, key: str, value: Any, ttl: float = 0) -> None:
        payload = json.dumps(value)
        if ttl and ttl > 0:
            # Redis expiry has whole-second granularity
            self.redis.set(key, payload, ex=math.ceil(ttl))
        else:
            self.redis.set(key, payload)

    def fetch(self, key: str) -> Optional[Any]:
        payload = self.redis.get(key)
        if payload is None:
            return None
        if isinstance(payload, bytes):
            payload = payload.decode("utf-8")
        return json.loads(payload)

    def exists(self, key: str) -> bool:
        return bool(self.redis.exists(key))

    def purge(self, key: str) -> None:
        self.redis.delete(key)

    def health_check(self) -> bool:
        """Check Redis health."""
        try:
            return bool(self.redis.ping())
        except redis.RedisError as e:
            self.logger.warning("Redis health check failed", error=str(e))
            return False

    def close(self) -> None:
        """Close the client if this storage created it."""
        if self._owns_client:
            self.redis.close()
            self.logger.debug("Redis client closed")
