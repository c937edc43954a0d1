"""Core types and utilities for polyvalid.

This module provides type definitions, enums, exceptions, the validation
policy and result types used throughout the library.
"""

from .types import (
    CoordinateSystem,
    AngularUnit,
    RingOrientation,
    Side,
    Location,
    RelationKind,
    FailureKind,
    coerce_enum,
)

from .errors import (
    PolyvalidError,
    DimensionMismatchError,
    UnsupportedGeometryError,
    ConfigurationError,
)

from .config import ValidationConfig, DEFAULT_CONFIG, resolve_config
from .result import PositionRef, ValidationResult, VALID

__all__ = [
    # Enums
    'CoordinateSystem',
    'AngularUnit',
    'RingOrientation',
    'Side',
    'Location',
    'RelationKind',
    'FailureKind',
    'coerce_enum',

    # Exceptions
    'PolyvalidError',
    'DimensionMismatchError',
    'UnsupportedGeometryError',
    'ConfigurationError',

    # Policy and results
    'ValidationConfig',
    'DEFAULT_CONFIG',
    'resolve_config',
    'PositionRef',
    'ValidationResult',
    'VALID',
]
