"""Shared test fixtures."""

import sys

import pytest

# Ensure src is in path
sys.path.insert(0, "src")

from dropreaper import DropRegistry, LocalHost


class FakeClock:
    """Manually advanced monotonic clock."""

    def __init__(self, start: float = 0.0):
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> float:
        self.now += seconds
        return self.now


@pytest.fixture
def clock():
    """Clock starting at t=0."""
    return FakeClock()


@pytest.fixture
def host():
    """Fresh in-memory simulation host."""
    return LocalHost()


@pytest.fixture
def make_registry(host, clock):
    """Factory for registries bound to the shared host and clock."""

    def _make(capacity: int = 5, lifetime: float = 0.0) -> DropRegistry:
        return DropRegistry(host, capacity=capacity, lifetime=lifetime, clock=clock)

    return _make
