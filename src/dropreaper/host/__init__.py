"""Simulation host backends."""

from dropreaper.host.allocator import HandleAllocator
from dropreaper.host.local import LocalHost
from dropreaper.host.protocol import ObjectHost, destroy_if_valid

__all__ = [
    "ObjectHost",
    "LocalHost",
    "HandleAllocator",
    "destroy_if_valid",
]
