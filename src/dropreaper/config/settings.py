"""Configuration settings using Pydantic Settings.

This is the validation boundary: values that reach DropRegistry.update_config
have already passed through CleanupSettings.

Usage:
    from dropreaper.config import CleanupSettings

    # Load from environment variables (DROPREAPER_*)
    settings = CleanupSettings()

    # Or override with explicit values
    settings = CleanupSettings(capacity=16, lifetime=45.0)
"""

from __future__ import annotations

from typing import Annotated

from pydantic import Field, TypeAdapter
from pydantic_settings import BaseSettings, SettingsConfigDict

from dropreaper.core.limits import MAX_CAPACITY

Capacity = Annotated[int, Field(ge=0, le=MAX_CAPACITY)]
Lifetime = Annotated[float, Field(ge=0.0)]

_capacity_adapter: TypeAdapter[int] = TypeAdapter(Capacity)
_lifetime_adapter: TypeAdapter[float] = TypeAdapter(Lifetime)


class CleanupSettings(BaseSettings):  # type: ignore[misc]
    """Configuration for dropped-object cleanup.

    Attributes:
        capacity: Maximum tracked objects (0-31), 0 disables tracking.
        lifetime: Seconds before a tracked object is removed, 0 disables.
        sweep_interval: Seconds between periodic sweeps.
        ignored_kinds: Object kinds never tracked (mission items and the like).

    Environment Variables:
        DROPREAPER_CAPACITY
        DROPREAPER_LIFETIME
        DROPREAPER_SWEEP_INTERVAL
        DROPREAPER_IGNORED_KINDS (JSON list)
    """

    model_config = SettingsConfigDict(
        env_prefix="DROPREAPER_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        frozen=True,
    )

    capacity: Capacity = 10
    lifetime: Lifetime = 30.0
    sweep_interval: float = Field(default=1.0, gt=0.0)
    ignored_kinds: frozenset[str] = frozenset({"weapon_c4"})

    def with_bounds(self, capacity: int, lifetime: float) -> CleanupSettings:
        """Copy with new capacity and lifetime, validated like the fields.

        Environment and .env sources are not consulted again; every other
        value is carried over from this instance.

        Raises:
            pydantic.ValidationError: If either value is out of range.
        """
        return self.model_copy(
            update={
                "capacity": _capacity_adapter.validate_python(capacity),
                "lifetime": _lifetime_adapter.validate_python(lifetime),
            }
        )
