"""
Leaky bucket rate limiter.

A bucket accumulates drops for one key. Drops leak away continuously at a
fixed rate per second, and the bucket is full once the accumulated drops
reach its capacity. Leakage is computed lazily from the elapsed time when
``leak`` or ``is_full`` is called; nothing runs in the background.

State lives in memory between calls. It is loaded from storage when the
bucket is constructed and written back only by ``save``.
"""

import math
import time
from typing import Any, Callable, Mapping, Optional, TypeVar

from pydantic import ValidationError

from .errors import InvalidArgumentError, StorageError
from .logging import get_logger
from .metrics import BucketMetrics
from .models import BucketConfig, BucketState
from .storage.base import StorageInterface

T = TypeVar("T")


class LeakyBucket:
    """Leaky bucket for a single key, backed by a StorageInterface."""

    KEY_PREFIX = "leakybucket:v1:"
    KEY_POSTFIX = ":bucket"

    # Stored entries outlive a full drain by this factor
    TTL_FACTOR = 1.5

    def __init__(
        self,
        key: str,
        storage: StorageInterface,
        settings: Optional[Mapping[str, Any]] = None,
        *,
        clock: Callable[[], float] = time.time,
        metrics: Optional[BucketMetrics] = None,
    ):
        self.key = key
        self.storage = storage
        self.logger = get_logger("leakybucket.bucket")
        self.metrics = metrics
        self._clock = clock

        try:
            overrides = {
                name: value for name, value in (settings or {}).items()
                if name in BucketConfig.model_fields
            }
            self.config = BucketConfig(**overrides)
        except ValidationError as e:
            raise InvalidArgumentError(
                "Invalid bucket settings",
                {"key": key, "errors": e.errors(include_url=False)}
            ) from e

        self._state = self._get()

    @property
    def storage_key(self) -> str:
        """Key under which the bucket is stored."""
        return f"{self.KEY_PREFIX}{self.key}{self.KEY_POSTFIX}"

    def fill(self, drops: float = 1) -> None:
        """Add drops to the bucket, clamping at capacity."""
        if not drops > 0:
            raise InvalidArgumentError(
                'The parameter "drops" has to be a number greater than 0.',
                {"key": self.key, "drops": drops}
            )

        self._state.drops += drops
        self.touch()
        self.overflow()

        if self.metrics is not None:
            self.metrics.record_fill(drops)
        self.logger.debug("Bucket filled", key=self.key, drops=drops, used=self._state.drops)

    def spill(self, drops: float = 1) -> None:
        """Remove drops from the bucket without going below zero."""
        if not drops > 0:
            raise InvalidArgumentError(
                'The parameter "drops" has to be a number greater than 0.',
                {"key": self.key, "drops": drops}
            )

        self._state.drops = max(0.0, self._state.drops - drops)

    def leak(self) -> None:
        """Remove the drops that leaked away since the last touch."""
        now = self._clock()
        elapsed = now - self._state.time if self._state.time is not None else 0.0
        # A clock stepping backwards must not add drops
        elapsed = max(0.0, elapsed)
        leakage = elapsed * self.config.leak

        self._state.drops = max(0.0, self._state.drops - leakage)
        self._state.time = now

    def overflow(self) -> None:
        """Clamp drops to capacity."""
        if self._state.drops > self.config.capacity:
            self._state.drops = self.config.capacity

    def is_full(self) -> bool:
        """Bring the bucket up to date and report whether it is full.

        This is the check to make before admitting an action.
        """
        self.overflow()
        self.leak()

        full = math.ceil(self._state.drops) == self.config.capacity
        if full:
            if self.metrics is not None:
                self.metrics.record_full()
            self.logger.info("Bucket is full", key=self.key, capacity=self.config.capacity)
        return full

    def touch(self) -> None:
        """Set the bucket's timestamp to now."""
        self._state.time = self._clock()

    def get_capacity(self) -> float:
        return float(self.config.capacity)

    def get_capacity_used(self) -> float:
        return float(self._state.drops)

    def get_capacity_left(self) -> float:
        """Capacity not yet used.

        Leakage is not applied here; call ``leak`` or ``is_full`` first for
        a reading that is current.
        """
        return float(self.config.capacity - self._state.drops)

    def get_leak(self) -> float:
        return float(self.config.leak)

    def get_last_timestamp(self) -> Optional[float]:
        return self._state.time

    def get_ttl(self) -> float:
        """Seconds a saved bucket is kept in storage."""
        return self.config.capacity / self.config.leak * self.TTL_FACTOR

    def set_data(self, data: Any) -> None:
        """Attach caller data to the bucket."""
        self._state.data = data

    def get_data(self) -> Any:
        return self._state.data

    def get_state(self) -> BucketState:
        """Copy of the bucket's current state."""
        return self._state.model_copy(deep=True)

    def save(self) -> None:
        """Persist the bucket to storage."""
        self._storage_call("save", self.storage.store, self.storage_key, self._state.to_record(), self.get_ttl())
        self.logger.debug("Bucket saved", key=self.key, drops=self._state.drops, ttl=self.get_ttl())

    def reset(self) -> None:
        """Remove the bucket from storage.

        The in-memory state is left untouched; construct a new bucket to
        start from empty.
        """
        self._storage_call("reset", self.storage.purge, self.storage_key)
        self.logger.debug("Bucket reset", key=self.key)

    def _get(self) -> BucketState:
        record = self._storage_call("fetch", self.storage.fetch, self.storage_key)
        try:
            return BucketState.from_record(record)
        except ValidationError as e:
            self.logger.error("Stored bucket is malformed", key=self.key, error=str(e))
            raise StorageError(self.key, "fetch") from e

    def _storage_call(self, operation: str, func: Callable[..., T], *args: Any) -> T:
        try:
            if self.metrics is None:
                return func(*args)
            with self.metrics.time_storage(operation):
                return func(*args)
        except Exception as e:
            if self.metrics is not None:
                self.metrics.record_storage_error(operation)
            self.logger.error("Storage operation failed", key=self.key, operation=operation, error=str(e))
            raise StorageError(self.key, operation) from e

    def __repr__(self) -> str:
        return (
            f"LeakyBucket(key={self.key!r}, drops={self.get_capacity_used()}, "
            f"capacity={self.get_capacity()}, leak={self.get_leak()})"
        )