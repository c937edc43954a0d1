"""Linestring and multi-linestring validation.

A linestring needs two distinct points. Self-intersections and repeated
points are allowed; spikes are allowed unless the config rejects them. A
closed linestring (last point equal to the first) is also checked for a
spike at its closing vertex.
"""

from typing import Optional

from ..core.config import ValidationConfig, resolve_config
from ..core.result import VALID, PositionRef, ValidationResult
from ..core.types import FailureKind
from ..core.validation_utils import collapse_repeated_points, first_non_finite
from ..geometry import LineString, MultiLineString
from .ring import find_spike, is_spike


def validate_linestring(
    linestring: LineString,
    config: Optional[ValidationConfig] = None
) -> ValidationResult:
    """Validate a linestring.

    Args:
        linestring: LineString to validate
        config: Validation policy, default config when None

    Returns:
        ValidationResult

    Examples:
        >>> from polyvalid.geometry import LineString
        >>> from polyvalid.core import ValidationConfig
        >>> validate_linestring(LineString([(0, 0), (1, 2), (1, 2)])).valid
        True
        >>> strict = ValidationConfig(allow_spikes=False)
        >>> validate_linestring(LineString([(0, 0), (10, 0), (5, 0)]), strict).failure
        <FailureKind.SPIKE: 'spike'>
    """
    config = resolve_config(config)

    bad = first_non_finite(linestring.coords)
    if bad is not None:
        return ValidationResult.fail(FailureKind.INVALID_COORDINATE, PositionRef(vertex=bad))

    coords = linestring.strategy.unwrap(linestring.coords)
    collapsed, indices = collapse_repeated_points(coords)
    if len(collapsed) < 2:
        return ValidationResult.fail(FailureKind.TOO_FEW_POINTS)

    if not config.allow_spikes:
        epsilon = linestring.strategy.collinear_epsilon
        spike = find_spike(collapsed, cyclic=False, epsilon=epsilon)
        if spike is None and _is_closed(collapsed):
            # the closing vertex joins the last edge to the first one
            if is_spike(collapsed[-2], collapsed[0], collapsed[1], epsilon):
                spike = 0
        if spike is not None:
            return ValidationResult.fail(
                FailureKind.SPIKE, PositionRef(vertex=int(indices[spike]))
            )

    return VALID


def _is_closed(collapsed) -> bool:
    return len(collapsed) > 3 and (collapsed[0, :2] == collapsed[-1, :2]).all()


def validate_multilinestring(
    multilinestring: MultiLineString,
    config: Optional[ValidationConfig] = None
) -> ValidationResult:
    """Validate every member linestring.

    An empty multi-linestring is valid. The first invalid member is reported
    with its index.
    """
    config = resolve_config(config)
    for index, linestring in enumerate(multilinestring.lines):
        result = validate_linestring(linestring, config)
        if not result.valid:
            return result.at(member=index)
    return VALID


__all__ = [
    'validate_linestring',
    'validate_multilinestring',
]
