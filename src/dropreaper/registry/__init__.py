"""Bounded tracking registry and its eviction policies.

Architecture Note:
    registry/ is the single shared mutable resource. Event handlers and the
    sweep controller mutate it only through DropRegistry's public methods.
"""

from dropreaper.core.limits import MAX_CAPACITY
from dropreaper.registry.models import (
    DuplicateReferenceError,
    EvictionReason,
    RegistryStats,
    TrackedObject,
)
from dropreaper.registry.registry import DropRegistry

__all__ = [
    "DropRegistry",
    "TrackedObject",
    "EvictionReason",
    "RegistryStats",
    "DuplicateReferenceError",
    "MAX_CAPACITY",
]
