"""Type definitions for polyvalid.

This module defines the enums shared across the library: coordinate system
tags, predicate outcomes, segment relation kinds and the failure taxonomy.
"""

import math
from enum import Enum
from typing import Type, TypeVar, Union

from .errors import ConfigurationError


class CoordinateSystem(Enum):
    """Coordinate system a geometry is expressed in.

    Attributes:
        CARTESIAN: Planar coordinates, every dimension linear
        SPHERICAL: Spherical-equatorial coordinates, dimension 0 is a
            periodic longitude and dimension 1 a latitude
        GEOGRAPHIC: Longitude/latitude on an ellipsoid; validity treats it
            exactly like SPHERICAL

    Examples:
        >>> from polyvalid import Box, CoordinateSystem
        >>> box = Box((170, 10), (-170, 20), coordinate_system=CoordinateSystem.GEOGRAPHIC)
    """
    CARTESIAN = 'cartesian'
    SPHERICAL = 'spherical'
    GEOGRAPHIC = 'geographic'

    @property
    def is_periodic(self) -> bool:
        """True when dimension 0 wraps around (longitude)."""
        return self is not CoordinateSystem.CARTESIAN


class AngularUnit(Enum):
    """Unit of angular coordinates under spherical or geographic systems.

    Attributes:
        DEGREE: Longitude period of 360
        RADIAN: Longitude period of 2 pi
    """
    DEGREE = 'degree'
    RADIAN = 'radian'

    @property
    def period(self) -> float:
        """Length of one full turn of longitude."""
        if self is AngularUnit.DEGREE:
            return 360.0
        return 2.0 * math.pi


class RingOrientation(Enum):
    """Declared vertex order of a ring.

    The declared order is informational: it is read and compared against the
    actual winding for diagnostics but never makes a ring invalid.
    """
    CLOCKWISE = 'clockwise'
    COUNTERCLOCKWISE = 'counterclockwise'


class Side(Enum):
    """Side of point ``c`` relative to the directed line ``a -> b``."""
    LEFT = 1
    RIGHT = -1
    COLLINEAR = 0


class Location(Enum):
    """Location of a point relative to a ring or an areal geometry."""
    INTERIOR = 'interior'
    BOUNDARY = 'boundary'
    EXTERIOR = 'exterior'


class RelationKind(Enum):
    """Classification of how two segments relate.

    Attributes:
        DISJOINT: No common point
        TOUCH_AT_POINT: Exactly one common point, which is an endpoint of at
            least one of the segments
        CROSSING: Exactly one common point, interior to both segments
        COLLINEAR_OVERLAP: Collinear segments sharing a range of positive length
        IDENTICAL: Same two endpoints, in either order
    """
    DISJOINT = 'disjoint'
    TOUCH_AT_POINT = 'touch_at_point'
    CROSSING = 'crossing'
    COLLINEAR_OVERLAP = 'collinear_overlap'
    IDENTICAL = 'identical'


class FailureKind(Enum):
    """Closed taxonomy of validity failures.

    Examples:
        >>> from polyvalid import validate, Segment
        >>> validate(Segment((0, 0), (0, 0))).failure
        <FailureKind.TOO_FEW_POINTS: 'too_few_points'>
    """
    TOO_FEW_POINTS = 'too_few_points'
    DISALLOWED_DUPLICATE = 'disallowed_duplicate'
    SPIKE = 'spike'
    SELF_INTERSECTION = 'self_intersection'
    HOLE_CROSSES_EXTERIOR = 'hole_crosses_exterior'
    HOLES_OVERLAP = 'holes_overlap'
    NESTED_HOLES = 'nested_holes'
    DISCONNECTED_INTERIOR = 'disconnected_interior'
    POLYGONS_OVERLAP = 'polygons_overlap'
    SHARED_EDGE = 'shared_edge'
    DEGENERATE_BOX = 'degenerate_box'
    NOT_CLOSED = 'not_closed'
    INVALID_COORDINATE = 'invalid_coordinate'

    @property
    def description(self) -> str:
        """Human readable description of the failure."""
        return _FAILURE_DESCRIPTIONS[self]


_FAILURE_DESCRIPTIONS = {
    FailureKind.TOO_FEW_POINTS: 'Too few distinct points',
    FailureKind.DISALLOWED_DUPLICATE: 'Repeated point',
    FailureKind.SPIKE: 'Spike',
    FailureKind.SELF_INTERSECTION: 'Self-intersection',
    FailureKind.HOLE_CROSSES_EXTERIOR: 'Hole lies outside shell',
    FailureKind.HOLES_OVERLAP: 'Holes overlap',
    FailureKind.NESTED_HOLES: 'Holes are nested',
    FailureKind.DISCONNECTED_INTERIOR: 'Interior is disconnected',
    FailureKind.POLYGONS_OVERLAP: 'Polygons overlap',
    FailureKind.SHARED_EDGE: 'Polygons share an edge',
    FailureKind.DEGENERATE_BOX: 'Degenerate box',
    FailureKind.NOT_CLOSED: 'Ring is not closed',
    FailureKind.INVALID_COORDINATE: 'Invalid coordinate',
}


E = TypeVar('E', bound=Enum)


def coerce_enum(value: Union[E, str], enum_cls: Type[E]) -> E:
    """Accept either an enum member or its string value.

    Args:
        value: Enum member or the member's value/name as a string
        enum_cls: Target enum class

    Returns:
        The matching enum member

    Raises:
        ConfigurationError: If the string matches no member

    Examples:
        >>> coerce_enum('geographic', CoordinateSystem)
        <CoordinateSystem.GEOGRAPHIC: 'geographic'>
    """
    if isinstance(value, enum_cls):
        return value
    if isinstance(value, str):
        lowered = value.lower()
        for member in enum_cls:
            if member.value == lowered or member.name.lower() == lowered:
                return member
    raise ConfigurationError(
        f"Unknown {enum_cls.__name__}: {value!r}. "
        f"Expected one of {[m.value for m in enum_cls]}"
    )


__all__ = [
    'CoordinateSystem',
    'AngularUnit',
    'RingOrientation',
    'Side',
    'Location',
    'RelationKind',
    'FailureKind',
    'coerce_enum',
]
