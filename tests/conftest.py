"""
Shared fixtures for leaky bucket tests.
"""

import pytest
import structlog
from prometheus_client import CollectorRegistry

from leakybucket.metrics import BucketMetrics
from leakybucket.storage import MemoryStorage


class FakeClock:
    """Manually advanced clock."""

    def __init__(self, now: float = 1700000000.0):
        self.now = now

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


@pytest.fixture
def clock():
    """Create a fake clock."""
    return FakeClock()


@pytest.fixture
def storage(clock):
    """Create in-memory storage sharing the fake clock."""
    return MemoryStorage(clock=clock)


@pytest.fixture
def registry():
    """Create an isolated Prometheus registry."""
    return CollectorRegistry()


@pytest.fixture
def metrics(registry):
    """Create bucket metrics on the isolated registry."""
    return BucketMetrics(registry=registry)


@pytest.fixture(autouse=True)
def unconfigured_structlog():
    """Leave structlog unconfigured between tests."""
    structlog.reset_defaults()
    yield
    structlog.reset_defaults()
