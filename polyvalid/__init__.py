"""Polyvalid - Simple-Feature validity checks for vector geometries.

This library validates points, segments, boxes, linestrings, rings,
polygons and multi-polygons in planar or spherical/geographic coordinates,
and reports the first validity failure it finds.
"""


# Geometry model
from .geometry import (
    Point,
    Segment,
    Box,
    LineString,
    LinearRing,
    Polygon,
    MultiPoint,
    MultiLineString,
    MultiPolygon,
)

# Validation entry points
from .validity import (
    validate,
    is_valid,
    explain_validity,
)

# Predicates and containment
from .predicates import orientation, locate_point_in_ring
from .relate import SegmentRelation, relate
from .strategies import strategy_for, within, covered_by

# Shapely adapter
from .io import from_shapely, from_wkt

# Core types, policy and results
from .core import (
    CoordinateSystem,
    AngularUnit,
    RingOrientation,
    Side,
    Location,
    RelationKind,
    FailureKind,
    ValidationConfig,
    ValidationResult,
    PositionRef,
)

# Core exceptions
from .core import (
    PolyvalidError,
    DimensionMismatchError,
    UnsupportedGeometryError,
    ConfigurationError,
)

__version__ = "0.1.0"

__all__ = [

    # Geometry model
    'Point',
    'Segment',
    'Box',
    'LineString',
    'LinearRing',
    'Polygon',
    'MultiPoint',
    'MultiLineString',
    'MultiPolygon',

    # Validation
    'validate',
    'is_valid',
    'explain_validity',

    # Predicates and containment
    'orientation',
    'locate_point_in_ring',
    'SegmentRelation',
    'relate',
    'strategy_for',
    'within',
    'covered_by',

    # Shapely adapter
    'from_shapely',
    'from_wkt',

    # Core types
    'CoordinateSystem',
    'AngularUnit',
    'RingOrientation',
    'Side',
    'Location',
    'RelationKind',
    'FailureKind',
    'ValidationConfig',
    'ValidationResult',
    'PositionRef',

    # Exceptions
    'PolyvalidError',
    'DimensionMismatchError',
    'UnsupportedGeometryError',
    'ConfigurationError',
]
