"""DropRegistry: bounded, insertion-ordered set of tracked dropped objects.

Usage:
    host = LocalHost()
    registry = DropRegistry(host, capacity=2, lifetime=30.0)

    registry.insert(host.spawn("weapon_ak47"))
    registry.insert(host.spawn("weapon_m4a1"))
    registry.insert(host.spawn("weapon_awp"))  # ak47 evicted and destroyed

    registry.sweep(time.monotonic())  # age-based and invalid-handle eviction
"""

from __future__ import annotations

import dataclasses
import logging
import time
from collections.abc import Callable, Hashable, Iterator

from dropreaper.host.protocol import ObjectHost, destroy_if_valid
from dropreaper.registry.models import (
    DuplicateReferenceError,
    EvictionReason,
    RegistryStats,
    TrackedObject,
)

logger = logging.getLogger(__name__)


class DropRegistry:
    """Bounded registry of dropped objects with capacity and age eviction.

    Records are kept in insertion order, which is also time order because
    timestamps come from a monotonic clock. "Oldest" always means the front
    of that order, so duplicate timestamps are broken by insertion order.

    Evictions destroy the backing object when the host still reports it
    valid. Explicit removal and reset only forget records.

    The registry assumes cooperative single-threaded use: each public method
    runs to completion before the next begins, so there is no locking.

    Args:
        host: Simulation that owns the tracked objects.
        capacity: Maximum live records, 0 disables tracking.
        lifetime: Maximum record age in seconds, 0 disables age eviction.
        clock: Monotonic time source for insertion timestamps.
    """

    def __init__(
        self,
        host: ObjectHost,
        capacity: int = 0,
        lifetime: float = 0.0,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self._host = host
        self._capacity = capacity
        self._lifetime = lifetime
        self._clock = clock
        # dict preserves insertion order and keeps references unique
        self._entries: dict[Hashable, TrackedObject] = {}
        self._stats = RegistryStats()

    @property
    def capacity(self) -> int:
        return self._capacity

    @property
    def lifetime(self) -> float:
        return self._lifetime

    @property
    def enabled(self) -> bool:
        """Whether inserts are accepted (capacity above zero)."""
        return self._capacity > 0

    @property
    def stats(self) -> RegistryStats:
        """Snapshot of lifetime counters."""
        return dataclasses.replace(self._stats)

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, reference: object) -> bool:
        return reference in self._entries

    def __iter__(self) -> Iterator[TrackedObject]:
        """Iterate over a snapshot of records, oldest first."""
        return iter(list(self._entries.values()))

    def references(self) -> list[Hashable]:
        """Tracked references, oldest first."""
        return list(self._entries)

    def oldest(self) -> TrackedObject | None:
        """Oldest live record, or None if empty."""
        return next(iter(self._entries.values()), None)

    def insert(self, reference: Hashable) -> bool:
        """Start tracking a newly dropped object.

        If the registry is full, the oldest record is evicted first and its
        object destroyed if still alive.

        The caller must not report the same object twice without an
        intervening remove, eviction or reset.

        Args:
            reference: Handle of the dropped object.

        Returns:
            True if tracked, False if tracking is disabled (capacity 0).

        Raises:
            DuplicateReferenceError: If reference is already tracked.
        """
        if self._capacity <= 0:
            return False
        if reference in self._entries:
            raise DuplicateReferenceError(
                f"Reference {reference} is already tracked; report removal before reinserting"
            )

        while len(self._entries) >= self._capacity:
            self._evict_oldest(EvictionReason.CAPACITY)

        self._entries[reference] = TrackedObject(reference=reference, created_at=self._clock())
        self._stats.inserted += 1
        return True

    def remove(self, reference: Hashable) -> bool:
        """Stop tracking an object whose lifecycle ended elsewhere.

        The object is not destroyed: the caller's event (pickup, consumption)
        already accounts for it.

        Args:
            reference: Handle of the object.

        Returns:
            True if a record was removed, False if the reference was untracked.
        """
        if self._entries.pop(reference, None) is None:
            return False
        self._stats.removed += 1
        return True

    def sweep(self, now: float) -> int:
        """Evict expired records and records whose object no longer exists.

        A record expires when lifetime > 0 and now - created_at >= lifetime;
        its object is destroyed if still alive. Records with invalid handles
        are dropped without a destroy attempt.

        Host failures never escape: a record whose validity check raises is
        kept for the next sweep, and a record whose destroy raises is dropped.
        Either way the sweep moves on to the next record.

        Args:
            now: Current monotonic time in seconds.

        Returns:
            Number of records evicted.
        """
        evicted = 0
        for record in list(self._entries.values()):
            try:
                reason = self._sweep_reason(record, now)
            except Exception:
                logger.exception("Validity check failed for %s; keeping record", record.reference)
                continue
            if reason is None:
                continue
            try:
                self._evict(record, reason)
            except Exception:
                logger.exception("Destroying %s failed; dropping record", record.reference)
                del self._entries[record.reference]
                self._stats.count(reason)
            evicted += 1
        return evicted

    def _sweep_reason(self, record: TrackedObject, now: float) -> EvictionReason | None:
        if not self._host.is_valid(record.reference):
            return EvictionReason.INVALID
        if self._lifetime > 0 and record.age(now) >= self._lifetime:
            return EvictionReason.AGE
        return None

    def reset(self) -> None:
        """Forget every record without destroying anything.

        Used at round boundaries, when the simulation tears the objects down
        itself.
        """
        if self._entries:
            logger.debug("Reset dropped %d tracked records", len(self._entries))
        self._entries.clear()
        self._stats.resets += 1

    def update_config(self, capacity: int, lifetime: float) -> None:
        """Apply new bounds.

        Lowering capacity below the live count evicts the oldest excess
        records immediately. Lowering lifetime is not retroactive; the next
        sweep picks up violators.

        Args:
            capacity: New maximum live records (pre-validated, 0..31).
            lifetime: New maximum age in seconds (pre-validated, >= 0).
        """
        if (capacity, lifetime) != (self._capacity, self._lifetime):
            logger.info(
                "Registry bounds changed: capacity %d -> %d, lifetime %s -> %s",
                self._capacity,
                capacity,
                self._lifetime,
                lifetime,
            )
        self._capacity = capacity
        self._lifetime = lifetime
        while len(self._entries) > max(capacity, 0):
            self._evict_oldest(EvictionReason.SHRINK)

    def _evict_oldest(self, reason: EvictionReason) -> None:
        record = next(iter(self._entries.values()))
        self._evict(record, reason)

    def _evict(self, record: TrackedObject, reason: EvictionReason) -> None:
        """Drop a record, destroying its object first when the reason calls for it."""
        destroyed = reason.destroys and destroy_if_valid(self._host, record.reference)
        del self._entries[record.reference]
        self._stats.count(reason)
        logger.debug(
            "Evicted %s (%s, destroyed=%s)",
            record.reference,
            reason.value,
            destroyed,
        )
