"""Validity checks for every supported geometry type."""

from .dispatch import validate, is_valid, explain_validity
from .primitive import validate_point, validate_multipoint, validate_segment, validate_box
from .linear import validate_linestring, validate_multilinestring
from .ring import validate_ring
from .polygon import validate_polygon
from .multipolygon import validate_multipolygon
from .topology import TouchGraph

__all__ = [
    # Entry points
    'validate',
    'is_valid',
    'explain_validity',

    # Per-type validators
    'validate_point',
    'validate_multipoint',
    'validate_segment',
    'validate_box',
    'validate_linestring',
    'validate_multilinestring',
    'validate_ring',
    'validate_polygon',
    'validate_multipolygon',

    # Connectivity
    'TouchGraph',
]
