"""Tracing infrastructure for recording what the periodic sweeper did.

Usage:
    from dropreaper.tracing import InMemoryHistoryStore, SweepRecord

    store = InMemoryHistoryStore(max_records=100)
    store.record_sweep(SweepRecord(tick=0, timestamp=0.0, evicted=1, tracked=4))
"""

from dropreaper.tracing.models import SweepRecord
from dropreaper.tracing.protocol import HistoryStore, InMemoryHistoryStore

__all__ = [
    "HistoryStore",
    "InMemoryHistoryStore",
    "SweepRecord",
]
