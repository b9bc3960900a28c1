"""Core primitives shared by the host, registry and scheduling layers.

Architecture Note:
    core/ holds stateless value types only. Stateful services live in
    host/, registry/ and scheduling/.
"""

from dropreaper.core.identity import ObjectRef
from dropreaper.core.limits import MAX_CAPACITY

__all__ = [
    "ObjectRef",
    "MAX_CAPACITY",
]
