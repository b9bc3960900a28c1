"""Registry models.

Types for tracked records, eviction bookkeeping and registry errors.
"""

from __future__ import annotations

from collections.abc import Hashable
from dataclasses import dataclass
from enum import Enum


@dataclass(frozen=True, slots=True)
class TrackedObject:
    """One dropped object under management.

    Attributes:
        reference: Opaque handle to the externally owned object. Re-validate
            through the host before every use.
        created_at: Monotonic timestamp in seconds recorded at insertion.
    """

    reference: Hashable
    created_at: float

    def age(self, now: float) -> float:
        """Seconds elapsed since insertion as seen from now."""
        return now - self.created_at


class EvictionReason(Enum):
    """Why a record left the registry other than by explicit removal."""

    CAPACITY = "capacity"
    """Oldest record pushed out by an insert into a full registry."""

    AGE = "age"
    """Record outlived the configured lifetime."""

    INVALID = "invalid"
    """Backing object was destroyed externally; only the record is dropped."""

    SHRINK = "shrink"
    """Capacity was lowered below the live count."""

    @property
    def destroys(self) -> bool:
        """Whether this kind of eviction destroys the backing object."""
        return self is not EvictionReason.INVALID


@dataclass(slots=True)
class RegistryStats:
    """Lifetime counters for a registry instance."""

    inserted: int = 0
    removed: int = 0
    evicted_capacity: int = 0
    evicted_age: int = 0
    evicted_shrink: int = 0
    dropped_invalid: int = 0
    resets: int = 0

    def count(self, reason: EvictionReason) -> None:
        """Increment the counter matching an eviction reason."""
        if reason is EvictionReason.CAPACITY:
            self.evicted_capacity += 1
        elif reason is EvictionReason.AGE:
            self.evicted_age += 1
        elif reason is EvictionReason.SHRINK:
            self.evicted_shrink += 1
        else:
            self.dropped_invalid += 1

    @property
    def evicted(self) -> int:
        """Total records that left through any eviction path."""
        return (
            self.evicted_capacity + self.evicted_age + self.evicted_shrink + self.dropped_invalid
        )


class DuplicateReferenceError(ValueError):
    """Raised when a reference is inserted while a record for it is still live."""
