"""Conversion from Shapely geometries.

Parsing text formats is left to Shapely: anything ``shapely.wkt.loads`` or
``shapely.from_geojson`` can read can be converted with :func:`from_shapely`
and validated.

Examples:
    >>> from polyvalid import is_valid
    >>> from polyvalid.io import from_wkt
    >>> is_valid(from_wkt("POLYGON((0 0,10 0,10 10,0 10,0 0),(1 1,1 10,2 10,2 1,1 1))"))
    False
"""

from typing import Union

import numpy as np
import shapely
from shapely.geometry import (
    LinearRing as ShapelyLinearRing,
    LineString as ShapelyLineString,
    MultiLineString as ShapelyMultiLineString,
    MultiPoint as ShapelyMultiPoint,
    MultiPolygon as ShapelyMultiPolygon,
    Point as ShapelyPoint,
    Polygon as ShapelyPolygon,
)
from shapely.geometry.base import BaseGeometry

from .core.errors import UnsupportedGeometryError
from .core.types import AngularUnit, CoordinateSystem, coerce_enum
from .geometry import (
    Geometry,
    LinearRing,
    LineString,
    MultiLineString,
    MultiPoint,
    MultiPolygon,
    Point,
    Polygon,
)


def _coords(geometry: BaseGeometry) -> np.ndarray:
    return np.asarray(geometry.coords, dtype=float).reshape(-1, 3 if geometry.has_z else 2)


def _polygon(polygon: ShapelyPolygon, coordinate_system, units) -> Polygon:
    if polygon.is_empty:
        shell = np.empty((0, 2))
        holes = []
    else:
        shell = _coords(polygon.exterior)
        holes = [_coords(interior) for interior in polygon.interiors]
    return Polygon.from_coords(
        shell, holes, closed=True, coordinate_system=coordinate_system, units=units
    )


def from_shapely(
    geometry: BaseGeometry,
    coordinate_system: Union[CoordinateSystem, str] = CoordinateSystem.CARTESIAN,
    units: Union[AngularUnit, str] = AngularUnit.DEGREE,
) -> Geometry:
    """Convert a Shapely geometry into the matching polyvalid geometry.

    Shapely rings are always closed, so converted rings keep ``closed=True``.
    Exterior rings are declared counter-clockwise and holes clockwise.

    Args:
        geometry: Shapely Point, LineString, LinearRing, Polygon, MultiPoint,
            MultiLineString or MultiPolygon
        coordinate_system: Coordinate system to tag the result with
        units: Angular unit for spherical or geographic systems

    Returns:
        polyvalid geometry

    Raises:
        UnsupportedGeometryError: For other Shapely types and empty points

    Examples:
        >>> from shapely.geometry import Polygon as ShapelyPolygon
        >>> poly = from_shapely(ShapelyPolygon([(0, 0), (1, 0), (1, 1)]))
        >>> poly.geom_type
        'Polygon'
    """
    coordinate_system = coerce_enum(coordinate_system, CoordinateSystem)
    units = coerce_enum(units, AngularUnit)

    if isinstance(geometry, ShapelyPoint):
        if geometry.is_empty:
            raise UnsupportedGeometryError("Cannot convert an empty Point")
        return Point(_coords(geometry)[0], coordinate_system, units)
    if isinstance(geometry, ShapelyLinearRing):
        return LinearRing(
            _coords(geometry), closed=True,
            coordinate_system=coordinate_system, units=units,
        )
    if isinstance(geometry, ShapelyLineString):
        return LineString(_coords(geometry), coordinate_system, units)
    if isinstance(geometry, ShapelyPolygon):
        return _polygon(geometry, coordinate_system, units)
    if isinstance(geometry, ShapelyMultiPoint):
        coords = shapely.get_coordinates(geometry, include_z=geometry.has_z)
        return MultiPoint(coords, coordinate_system, units)
    if isinstance(geometry, ShapelyMultiLineString):
        lines = tuple(
            LineString(_coords(line), coordinate_system, units) for line in geometry.geoms
        )
        return MultiLineString(lines, coordinate_system, units)
    if isinstance(geometry, ShapelyMultiPolygon):
        polygons = tuple(
            _polygon(polygon, coordinate_system, units) for polygon in geometry.geoms
        )
        return MultiPolygon(polygons, coordinate_system, units)

    raise UnsupportedGeometryError(f"Cannot convert {type(geometry).__name__}")


def from_wkt(
    text: str,
    coordinate_system: Union[CoordinateSystem, str] = CoordinateSystem.CARTESIAN,
    units: Union[AngularUnit, str] = AngularUnit.DEGREE,
) -> Geometry:
    """Parse WKT with Shapely and convert the result."""
    return from_shapely(shapely.from_wkt(text), coordinate_system, units)


__all__ = [
    'from_shapely',
    'from_wkt',
]
