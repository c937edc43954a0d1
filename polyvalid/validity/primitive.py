"""Validation of points, segments and boxes."""

from typing import Optional

from ..core.config import ValidationConfig
from ..core.result import VALID, PositionRef, ValidationResult
from ..core.types import FailureKind
from ..core.validation_utils import first_non_finite
from ..geometry import Box, MultiPoint, Point, Segment
from ..predicates import points_equal


def validate_point(point: Point, config: Optional[ValidationConfig] = None) -> ValidationResult:
    """A point is valid when its coordinates are finite."""
    if first_non_finite(point.coords[None, :]) is not None:
        return ValidationResult.fail(FailureKind.INVALID_COORDINATE)
    return VALID


def validate_multipoint(
    multipoint: MultiPoint,
    config: Optional[ValidationConfig] = None
) -> ValidationResult:
    """A multi-point is valid when its coordinates are finite.

    Empty multi-points and repeated points are valid.
    """
    bad = first_non_finite(multipoint.coords)
    if bad is not None:
        return ValidationResult.fail(FailureKind.INVALID_COORDINATE, PositionRef(member=bad))
    return VALID


def validate_segment(
    segment: Segment,
    config: Optional[ValidationConfig] = None
) -> ValidationResult:
    """A segment is valid when its endpoints differ.

    Examples:
        >>> from polyvalid.geometry import Segment
        >>> validate_segment(Segment((0, 0), (0, 0))).failure
        <FailureKind.TOO_FEW_POINTS: 'too_few_points'>
    """
    bad = first_non_finite(segment.coords)
    if bad is not None:
        return ValidationResult.fail(FailureKind.INVALID_COORDINATE, PositionRef(vertex=bad))
    if points_equal(segment.start, segment.end):
        return ValidationResult.fail(FailureKind.TOO_FEW_POINTS)
    return VALID


def validate_box(box: Box, config: Optional[ValidationConfig] = None) -> ValidationResult:
    """A box is valid when it has a positive extent in its first two dimensions.

    Further dimensions only need ``min <= max``. A box crossing the
    antimeridian under a spherical or geographic system is read with its max
    longitude shifted by one period.

    Examples:
        >>> from polyvalid.geometry import Box
        >>> validate_box(Box((0, 0), (1, 1))).valid
        True
        >>> validate_box(Box((0, 0), (1, 0))).failure
        <FailureKind.DEGENERATE_BOX: 'degenerate_box'>
    """
    if first_non_finite(box.min_corner[None, :]) is not None:
        return ValidationResult.fail(FailureKind.INVALID_COORDINATE, PositionRef(vertex=0))
    if first_non_finite(box.max_corner[None, :]) is not None:
        return ValidationResult.fail(FailureKind.INVALID_COORDINATE, PositionRef(vertex=1))

    lo, hi = box.strategy.normalize_box(box.min_corner, box.max_corner)
    if not (lo[:2] < hi[:2]).all() or not (lo[2:] <= hi[2:]).all():
        return ValidationResult.fail(FailureKind.DEGENERATE_BOX)
    return VALID


__all__ = [
    'validate_point',
    'validate_multipoint',
    'validate_segment',
    'validate_box',
]
