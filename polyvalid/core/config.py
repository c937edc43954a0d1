"""Validation policy settings."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class ValidationConfig:
    """Policy flags passed down to every validator.

    Attributes:
        allow_duplicate_points: Accept a ring that visits the same point at
            non-adjacent positions. Immediately repeated points are always
            collapsed and never count as duplicates.
        allow_spikes: Accept boundaries that reverse direction on themselves.

    Examples:
        >>> from polyvalid import ValidationConfig, is_valid
        >>> config = ValidationConfig(allow_spikes=False)
        >>> config.allow_duplicate_points
        True
    """

    allow_duplicate_points: bool = True
    allow_spikes: bool = True

    @classmethod
    def strict(cls) -> ValidationConfig:
        """Config rejecting both duplicate points and spikes."""
        return cls(allow_duplicate_points=False, allow_spikes=False)

    @classmethod
    def lenient(cls) -> ValidationConfig:
        """Config allowing both duplicate points and spikes."""
        return cls(allow_duplicate_points=True, allow_spikes=True)


DEFAULT_CONFIG = ValidationConfig()


def resolve_config(config: Optional[ValidationConfig]) -> ValidationConfig:
    """Return ``config`` or the default config when it is None."""
    if config is None:
        return DEFAULT_CONFIG
    if not isinstance(config, ValidationConfig):
        raise TypeError(
            f"config must be a ValidationConfig, got {type(config).__name__}"
        )
    return config


__all__ = [
    'ValidationConfig',
    'DEFAULT_CONFIG',
    'resolve_config',
]
