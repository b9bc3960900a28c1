"""Object identity: lightweight generational handles."""

from dropreaper.core.identity.models import ObjectRef

__all__ = [
    "ObjectRef",
]
