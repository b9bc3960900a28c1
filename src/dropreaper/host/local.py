"""Local in-memory simulation host.

Simple dict-based object table suitable for single-process use and testing.
Stands in for the game server that actually owns dropped weapons.

Usage:
    host = LocalHost()
    weapon = host.spawn("weapon_ak47")
    host.destroy(weapon)
    assert not host.is_valid(weapon)
"""

from __future__ import annotations

from collections.abc import Hashable, Iterator

from dropreaper.core.identity import ObjectRef
from dropreaper.host.allocator import HandleAllocator

# Indices below this are map-owned slots in the games this models.
RESERVED_INDICES = 64


class LocalHost:
    """In-memory object table keyed by generational handles.

    Structure:
        _objects[ref] = kind

    Args:
        first_index: First index handed to spawned objects.
    """

    def __init__(self, first_index: int = RESERVED_INDICES):
        self._allocator = HandleAllocator(first_index=first_index)
        self._objects: dict[ObjectRef, str] = {}

    def spawn(self, kind: str = "weapon") -> ObjectRef:
        """Create a new object and return its handle.

        Args:
            kind: Class name of the object, e.g. "weapon_ak47".

        Returns:
            Newly allocated ObjectRef.
        """
        ref = self._allocator.allocate()
        self._objects[ref] = kind
        return ref

    def destroy(self, reference: Hashable) -> None:
        """Destroy an object. Unknown or stale handles are ignored.

        Args:
            reference: Handle of the object to destroy.
        """
        if reference in self._objects:
            del self._objects[reference]
            self._allocator.release(reference)  # type: ignore[arg-type]

    def is_valid(self, reference: Hashable) -> bool:
        """Check if a handle denotes a live object.

        Args:
            reference: Handle to check, possibly stale.

        Returns:
            True if the object exists and the handle is the current generation.
        """
        if not isinstance(reference, ObjectRef):
            return False
        return reference in self._objects and self._allocator.is_alive(reference)

    def kind_of(self, reference: ObjectRef) -> str | None:
        """Get an object's kind, or None if it no longer exists."""
        return self._objects.get(reference)

    def all_objects(self) -> Iterator[ObjectRef]:
        """Iterate over all live objects.

        Yields:
            ObjectRef for each live object.
        """
        for ref in list(self._objects):
            if self._allocator.is_alive(ref):
                yield ref

    def clear(self) -> None:
        """Destroy every object, as the simulation does on round restart."""
        for ref in list(self._objects):
            self.destroy(ref)

    def __len__(self) -> int:
        return len(self._objects)
