"""Data models for sweep tracing.

Records are plain data so they serialize to JSON without custom encoders.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any


@dataclass(slots=True)
class SweepRecord:
    """Record of one periodic sweep.

    Attributes:
        tick: Sequence number of the sweep, starting at 0 per controller.
        timestamp: Monotonic time the sweep ran at.
        evicted: Records evicted by this sweep.
        tracked: Records still tracked after the sweep.
        metadata: Optional arbitrary annotations.

    Example:
        record = SweepRecord(tick=42, timestamp=1093.5, evicted=2, tracked=7)
    """

    tick: int
    timestamp: float
    evicted: int
    tracked: int
    metadata: dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        """Convert to JSON-serializable dictionary."""
        result: dict[str, Any] = {
            "tick": self.tick,
            "timestamp": self.timestamp,
            "evicted": self.evicted,
            "tracked": self.tracked,
        }
        if self.metadata:
            result["metadata"] = self.metadata
        return result

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> SweepRecord:
        """Create from dictionary (for deserialization)."""
        return cls(
            tick=data["tick"],
            timestamp=data["timestamp"],
            evicted=data["evicted"],
            tracked=data["tracked"],
            metadata=data.get("metadata", {}),
        )
