"""Object handle models.

Usage:
    ref = ObjectRef(index=42, generation=1)
"""

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class ObjectRef:
    """Handle to a simulation object with generation for safe index reuse.

    The simulation recycles indices once objects are destroyed. A handle taken
    before the recycle keeps its old generation and so never compares equal to
    the object that later occupies the same index.
    """

    index: int = 0
    generation: int = 0

    def __hash__(self) -> int:
        return hash((self.index, self.generation))

    def __str__(self) -> str:
        return f"#{self.index}:{self.generation}"
