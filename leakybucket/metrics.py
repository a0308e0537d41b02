"""
Prometheus metrics for leaky buckets.
"""

import time
from contextlib import contextmanager
from typing import Iterator, Optional

from prometheus_client import CollectorRegistry, Counter, Histogram, REGISTRY


class BucketMetrics:
    """Counters and timings for bucket activity."""

    def __init__(self, registry: Optional[CollectorRegistry] = None):
        self.registry = registry if registry is not None else REGISTRY

        self.fills_total = Counter(
            "leakybucket_fills_total",
            "Total drops added to buckets",
            registry=self.registry
        )

        self.full_total = Counter(
            "leakybucket_full_total",
            "Total checks that found a bucket full",
            registry=self.registry
        )

        self.storage_errors_total = Counter(
            "leakybucket_storage_errors_total",
            "Total storage failures",
            ["operation"],
            registry=self.registry
        )

        self.storage_duration_seconds = Histogram(
            "leakybucket_storage_duration_seconds",
            "Storage call duration in seconds",
            ["operation"],
            registry=self.registry
        )

    def record_fill(self, drops: float) -> None:
        """Record drops added by a fill."""
        self.fills_total.inc(drops)

    def record_full(self) -> None:
        """Record a full bucket check."""
        self.full_total.inc()

    def record_storage_error(self, operation: str) -> None:
        """Record a failed storage call."""
        self.storage_errors_total.labels(operation=operation).inc()

    @contextmanager
    def time_storage(self, operation: str) -> Iterator[None]:
        """Time a storage call, including failed ones."""
        start_time = time.time()
        try:
            yield
        finally:
            self.storage_duration_seconds.labels(operation=operation).observe(time.time() - start_time)
