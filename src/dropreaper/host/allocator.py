"""Handle allocation service.

HandleAllocator is a stateful service that manages object handle lifecycle.
"""

from __future__ import annotations

from dropreaper.core.identity import ObjectRef


class HandleAllocator:
    """Allocates object handles with generation tracking for recycling.

    Maintains a free list of released indices with incremented generations
    so indices can be reused without stale handles aliasing new objects.

    Args:
        first_index: Lowest index handed out (lower ones are reserved by the host).
    """

    def __init__(self, first_index: int = 0):
        self._next_index = first_index
        self._free_list: list[tuple[int, int]] = []  # (index, generation)
        self._generations: dict[int, int] = {}

    def allocate(self) -> ObjectRef:
        """Allocate a new handle, reusing recycled slots when available.

        Returns:
            Newly allocated ObjectRef.
        """
        if self._free_list:
            index, gen = self._free_list.pop()
            return ObjectRef(index=index, generation=gen)

        index = self._next_index
        self._next_index += 1
        self._generations[index] = 0
        return ObjectRef(index=index, generation=0)

    def release(self, ref: ObjectRef) -> None:
        """Return a handle's index for reuse with incremented generation.

        Args:
            ref: Handle to release.

        Raises:
            ValueError: If the handle is not the current generation for its index.
        """
        if not self.is_alive(ref):
            raise ValueError(f"Cannot release stale handle {ref}")

        new_gen = ref.generation + 1
        self._generations[ref.index] = new_gen
        self._free_list.append((ref.index, new_gen))

    def is_alive(self, ref: ObjectRef) -> bool:
        """Check if handle is still current (not released or recycled).

        Args:
            ref: Handle to check.

        Returns:
            True if the handle's generation matches its index's generation.
        """
        current_gen = self._generations.get(ref.index, -1)
        return current_gen == ref.generation
