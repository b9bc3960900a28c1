"""Protocols and the default backend for sweep history.

Usage:
    store = InMemoryHistoryStore(max_records=600)
    controller = SweepController(registry, history=store)

    # Later, inspect what the sweeper did
    for record in store.recent(10):
        print(record.tick, record.evicted)
"""

from __future__ import annotations

from collections import deque
from typing import Protocol, runtime_checkable

from dropreaper.tracing.models import SweepRecord


@runtime_checkable
class HistoryStore(Protocol):
    """Protocol for storing and retrieving sweep history.

    Implementations may be bounded; older records are evicted when the limit
    is reached.
    """

    def record_sweep(self, record: SweepRecord) -> None:
        """Record one sweep."""
        ...

    def get_sweep(self, tick: int) -> SweepRecord | None:
        """Get a sweep record by tick, or None if not in storage."""
        ...

    def recent(self, count: int) -> list[SweepRecord]:
        """Most recent records, oldest first."""
        ...

    def clear(self) -> None:
        """Clear all stored history."""
        ...

    @property
    def sweep_count(self) -> int:
        """Number of records currently stored."""
        ...


class InMemoryHistoryStore:
    """Bounded in-memory history backed by a deque.

    Args:
        max_records: Maximum records kept; the oldest are dropped first.
    """

    def __init__(self, max_records: int = 1000) -> None:
        if max_records <= 0:
            raise ValueError(f"max_records must be positive, got {max_records}")
        self._records: deque[SweepRecord] = deque(maxlen=max_records)

    def record_sweep(self, record: SweepRecord) -> None:
        self._records.append(record)

    def get_sweep(self, tick: int) -> SweepRecord | None:
        for record in self._records:
            if record.tick == tick:
                return record
        return None

    def recent(self, count: int) -> list[SweepRecord]:
        if count <= 0:
            return []
        return list(self._records)[-count:]

    def clear(self) -> None:
        self._records.clear()

    @property
    def sweep_count(self) -> int:
        return len(self._records)
