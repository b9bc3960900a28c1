"""Configuration module using Pydantic Settings.

Provides typed, validated configuration with environment variable support.

Usage:
    from dropreaper.config import CleanupSettings

    settings = CleanupSettings(capacity=16, lifetime=45.0)
"""

from dropreaper.config.settings import CleanupSettings

__all__ = [
    "CleanupSettings",
]
