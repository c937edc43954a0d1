"""Entry points routing a geometry to its validator."""

from typing import Callable, Dict, Optional, Type

from ..core.config import ValidationConfig, resolve_config
from ..core.errors import UnsupportedGeometryError
from ..core.result import ValidationResult
from ..geometry import (
    Box,
    Geometry,
    LinearRing,
    LineString,
    MultiLineString,
    MultiPoint,
    MultiPolygon,
    Point,
    Polygon,
    Segment,
)
from ..utils.logging import get_logger
from .linear import validate_linestring, validate_multilinestring
from .multipolygon import validate_multipolygon
from .polygon import validate_polygon
from .primitive import validate_box, validate_multipoint, validate_point, validate_segment
from .ring import validate_ring

logger = get_logger(__name__)

Validator = Callable[..., ValidationResult]

_VALIDATORS: Dict[Type, Validator] = {
    Point: validate_point,
    Segment: validate_segment,
    Box: validate_box,
    LineString: validate_linestring,
    LinearRing: validate_ring,
    Polygon: validate_polygon,
    MultiPoint: validate_multipoint,
    MultiLineString: validate_multilinestring,
    MultiPolygon: validate_multipolygon,
}


def _validator_for(geometry) -> Validator:
    validator = _VALIDATORS.get(type(geometry))
    if validator is not None:
        return validator
    for geom_type, candidate in _VALIDATORS.items():
        if isinstance(geometry, geom_type):
            return candidate

    hint = ""
    if type(geometry).__module__.startswith('shapely'):
        hint = "; convert Shapely geometries with polyvalid.io.from_shapely first"
    raise UnsupportedGeometryError(
        f"Cannot validate object of type {type(geometry).__name__}{hint}"
    )


def validate(
    geometry: Geometry,
    config: Optional[ValidationConfig] = None
) -> ValidationResult:
    """Validate a geometry.

    Args:
        geometry: Any polyvalid geometry
        config: Validation policy, default config when None

    Returns:
        ValidationResult with the first failure found, if any

    Raises:
        UnsupportedGeometryError: If ``geometry`` is not a polyvalid geometry

    Examples:
        >>> from polyvalid import Polygon, validate
        >>> poly = Polygon.from_coords([(0, 0), (1, 1), (1, 0), (0, 0)])
        >>> validate(poly).valid
        True
    """
    validator = _validator_for(geometry)
    result = validator(geometry, resolve_config(config))
    logger.debug(
        "geometry_validated",
        geom_type=geometry.geom_type,
        valid=result.valid,
        failure=result.failure.value if result.failure else None,
    )
    return result


def is_valid(geometry: Geometry, config: Optional[ValidationConfig] = None) -> bool:
    """True when ``geometry`` satisfies the validity rules."""
    return validate(geometry, config).valid


def explain_validity(geometry: Geometry, config: Optional[ValidationConfig] = None) -> str:
    """Human readable reason for the verdict.

    Examples:
        >>> from polyvalid import Box, explain_validity
        >>> explain_validity(Box((0, 0), (1, 0)))
        'Degenerate box'
    """
    return validate(geometry, config).message


__all__ = [
    'validate',
    'is_valid',
    'explain_validity',
]
