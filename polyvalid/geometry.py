"""Immutable geometry model consumed by the validators.

Geometries hold their coordinates as read-only numpy arrays of shape
``(n, d)`` with ``d >= 2`` and carry the coordinate system they are expressed
in. They are built by the caller (directly, or from Shapely through
:func:`polyvalid.io.from_shapely`) and are only ever read by the validators.

Examples:
    >>> from polyvalid.geometry import Polygon
    >>> poly = Polygon.from_coords(
    ...     [(0, 0), (10, 0), (10, 10), (0, 10), (0, 0)],
    ...     holes=[[(2, 2), (2, 4), (4, 4), (4, 2), (2, 2)]],
    ... )
    >>> len(poly.holes)
    1
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterator, Optional, Sequence, Tuple, Union

import numpy as np

from .core.errors import ConfigurationError, DimensionMismatchError
from .core.types import AngularUnit, CoordinateSystem, RingOrientation, coerce_enum
from .strategies import ContainmentStrategy, strategy_for

CoordsLike = Union[np.ndarray, Sequence[Sequence[float]]]


def _as_coords(points: CoordsLike, owner: str) -> np.ndarray:
    """Convert a point sequence to a read-only ``(n, d)`` float array."""
    try:
        coords = np.array(points, dtype=float)
    except ValueError as e:
        raise DimensionMismatchError(
            f"{owner} coordinates have inconsistent dimensions"
        ) from e

    if coords.size == 0:
        coords = np.empty((0, 2), dtype=float)
    if coords.ndim != 2:
        raise DimensionMismatchError(
            f"{owner} coordinates must be a sequence of points, got shape {coords.shape}"
        )
    if coords.shape[1] < 2:
        raise DimensionMismatchError(
            f"{owner} points need at least 2 dimensions, got {coords.shape[1]}"
        )

    coords.flags.writeable = False
    return coords


def _as_point(point: CoordsLike, owner: str) -> np.ndarray:
    coords = np.array(point, dtype=float)
    if coords.ndim != 1 or coords.shape[0] < 2:
        raise DimensionMismatchError(
            f"{owner} must be a single point with at least 2 dimensions"
        )
    coords.flags.writeable = False
    return coords


def _init_reference(obj, coordinate_system, units) -> None:
    object.__setattr__(obj, 'coordinate_system', coerce_enum(coordinate_system, CoordinateSystem))
    object.__setattr__(obj, 'units', coerce_enum(units, AngularUnit))


class _Referenced:
    """Mixin exposing the containment strategy of a geometry."""

    coordinate_system: CoordinateSystem
    units: AngularUnit

    @property
    def strategy(self) -> ContainmentStrategy:
        return strategy_for(self.coordinate_system, self.units)


# ============================================================================
# Zero- and one-dimensional primitives
# ============================================================================

@dataclass(frozen=True, eq=False)
class Point(_Referenced):
    """A single position."""

    coords: np.ndarray
    coordinate_system: CoordinateSystem = CoordinateSystem.CARTESIAN
    units: AngularUnit = AngularUnit.DEGREE

    geom_type = 'Point'

    def __post_init__(self):
        object.__setattr__(self, 'coords', _as_point(self.coords, 'Point'))
        _init_reference(self, self.coordinate_system, self.units)

    @property
    def dimension(self) -> int:
        return int(self.coords.shape[0])


@dataclass(frozen=True, eq=False)
class Segment(_Referenced):
    """An ordered pair of points."""

    start: np.ndarray
    end: np.ndarray
    coordinate_system: CoordinateSystem = CoordinateSystem.CARTESIAN
    units: AngularUnit = AngularUnit.DEGREE

    geom_type = 'Segment'

    def __post_init__(self):
        start = _as_point(self.start, 'Segment start')
        end = _as_point(self.end, 'Segment end')
        if start.shape != end.shape:
            raise DimensionMismatchError(
                f"Segment endpoints have different dimensions: "
                f"{start.shape[0]} and {end.shape[0]}"
            )
        object.__setattr__(self, 'start', start)
        object.__setattr__(self, 'end', end)
        _init_reference(self, self.coordinate_system, self.units)

    @property
    def coords(self) -> np.ndarray:
        return np.vstack([self.start, self.end])


@dataclass(frozen=True, eq=False)
class Box(_Referenced):
    """An axis-aligned box given by its min and max corners.

    Under a spherical or geographic system a box whose max longitude is
    smaller than its min longitude crosses the antimeridian.
    """

    min_corner: np.ndarray
    max_corner: np.ndarray
    coordinate_system: CoordinateSystem = CoordinateSystem.CARTESIAN
    units: AngularUnit = AngularUnit.DEGREE

    geom_type = 'Box'

    def __post_init__(self):
        lo = _as_point(self.min_corner, 'Box min corner')
        hi = _as_point(self.max_corner, 'Box max corner')
        if lo.shape != hi.shape:
            raise DimensionMismatchError(
                f"Box corners have different dimensions: {lo.shape[0]} and {hi.shape[0]}"
            )
        object.__setattr__(self, 'min_corner', lo)
        object.__setattr__(self, 'max_corner', hi)
        _init_reference(self, self.coordinate_system, self.units)

    @property
    def dimension(self) -> int:
        return int(self.min_corner.shape[0])

    @classmethod
    def from_bounds(
        cls,
        minx: float,
        miny: float,
        maxx: float,
        maxy: float,
        coordinate_system: Union[CoordinateSystem, str] = CoordinateSystem.CARTESIAN,
        units: Union[AngularUnit, str] = AngularUnit.DEGREE,
    ) -> Box:
        """Create a 2-D box from Shapely-style bounds."""
        return cls((minx, miny), (maxx, maxy), coordinate_system, units)


@dataclass(frozen=True, eq=False)
class LineString(_Referenced):
    """An ordered sequence of points joined by straight edges."""

    coords: np.ndarray
    coordinate_system: CoordinateSystem = CoordinateSystem.CARTESIAN
    units: AngularUnit = AngularUnit.DEGREE

    geom_type = 'LineString'

    def __post_init__(self):
        object.__setattr__(self, 'coords', _as_coords(self.coords, 'LineString'))
        _init_reference(self, self.coordinate_system, self.units)

    def __len__(self) -> int:
        return len(self.coords)

    @property
    def is_empty(self) -> bool:
        return len(self.coords) == 0


@dataclass(frozen=True, eq=False)
class LinearRing(_Referenced):
    """A closed boundary given as an ordered point sequence.

    Attributes:
        coords: Points of the ring, as given by the caller
        closed: True when the last point explicitly repeats the first
        orientation: Expected vertex order, informational only
    """

    coords: np.ndarray
    closed: bool = True
    orientation: RingOrientation = RingOrientation.COUNTERCLOCKWISE
    coordinate_system: CoordinateSystem = CoordinateSystem.CARTESIAN
    units: AngularUnit = AngularUnit.DEGREE

    geom_type = 'LinearRing'

    def __post_init__(self):
        object.__setattr__(self, 'coords', _as_coords(self.coords, 'LinearRing'))
        object.__setattr__(self, 'closed', bool(self.closed))
        object.__setattr__(
            self, 'orientation', coerce_enum(self.orientation, RingOrientation)
        )
        _init_reference(self, self.coordinate_system, self.units)

    def __len__(self) -> int:
        return len(self.coords)

    @property
    def logical_coords(self) -> np.ndarray:
        """Vertex sequence without the redundant closing point."""
        if self.closed and len(self.coords) > 0:
            return self.coords[:-1]
        return self.coords

    @property
    def dimension(self) -> int:
        return int(self.coords.shape[1])

    def reversed(self) -> LinearRing:
        """The same ring with its point order reversed."""
        flipped = (
            RingOrientation.CLOCKWISE
            if self.orientation is RingOrientation.COUNTERCLOCKWISE
            else RingOrientation.COUNTERCLOCKWISE
        )
        return LinearRing(
            self.coords[::-1],
            closed=self.closed,
            orientation=flipped,
            coordinate_system=self.coordinate_system,
            units=self.units,
        )


# ============================================================================
# Areal geometries
# ============================================================================

@dataclass(frozen=True, eq=False)
class Polygon(_Referenced):
    """An exterior ring with zero or more holes."""

    exterior: LinearRing
    holes: Tuple[LinearRing, ...] = ()

    geom_type = 'Polygon'

    def __post_init__(self):
        holes = tuple(self.holes)
        for hole in holes:
            if not isinstance(hole, LinearRing):
                raise TypeError(f"Polygon holes must be LinearRing, got {type(hole).__name__}")
            if (hole.coordinate_system, hole.units) != (
                self.exterior.coordinate_system, self.exterior.units
            ):
                raise ConfigurationError(
                    "Polygon rings must share one coordinate system and unit"
                )
        _check_same_dimension([self.exterior, *holes], 'Polygon rings')
        object.__setattr__(self, 'holes', holes)

    @property
    def coordinate_system(self) -> CoordinateSystem:
        return self.exterior.coordinate_system

    @property
    def units(self) -> AngularUnit:
        return self.exterior.units

    @property
    def rings(self) -> Tuple[LinearRing, ...]:
        """Exterior first, then holes in order."""
        return (self.exterior, *self.holes)

    @classmethod
    def from_coords(
        cls,
        shell: CoordsLike,
        holes: Optional[Sequence[CoordsLike]] = None,
        *,
        closed: bool = True,
        orientation: Union[RingOrientation, str] = RingOrientation.COUNTERCLOCKWISE,
        coordinate_system: Union[CoordinateSystem, str] = CoordinateSystem.CARTESIAN,
        units: Union[AngularUnit, str] = AngularUnit.DEGREE,
    ) -> Polygon:
        """Build a polygon from raw coordinate sequences.

        Holes get the opposite declared orientation of the shell.

        Args:
            shell: Exterior ring points
            holes: Optional list of hole point sequences
            closed: Whether the rings repeat their first point at the end
            orientation: Declared orientation of the exterior ring
            coordinate_system: Coordinate system of every ring
            units: Angular unit for spherical or geographic systems

        Returns:
            Polygon
        """
        orientation = coerce_enum(orientation, RingOrientation)
        hole_orientation = (
            RingOrientation.CLOCKWISE
            if orientation is RingOrientation.COUNTERCLOCKWISE
            else RingOrientation.COUNTERCLOCKWISE
        )
        exterior = LinearRing(shell, closed, orientation, coordinate_system, units)
        interiors = tuple(
            LinearRing(hole, closed, hole_orientation, coordinate_system, units)
            for hole in (holes or ())
        )
        return cls(exterior, interiors)


# ============================================================================
# Multi geometries
# ============================================================================

@dataclass(frozen=True, eq=False)
class MultiPoint(_Referenced):
    """An unordered collection of points stored as one coordinate array."""

    coords: np.ndarray
    coordinate_system: CoordinateSystem = CoordinateSystem.CARTESIAN
    units: AngularUnit = AngularUnit.DEGREE

    geom_type = 'MultiPoint'

    def __post_init__(self):
        object.__setattr__(self, 'coords', _as_coords(self.coords, 'MultiPoint'))
        _init_reference(self, self.coordinate_system, self.units)

    def __len__(self) -> int:
        return len(self.coords)


@dataclass(frozen=True, eq=False)
class MultiLineString(_Referenced):
    """An ordered collection of linestrings.

    Members may be given as :class:`LineString` objects or as raw point
    sequences, which are wrapped using this collection's coordinate system.
    """

    lines: Tuple[LineString, ...] = ()
    coordinate_system: CoordinateSystem = CoordinateSystem.CARTESIAN
    units: AngularUnit = AngularUnit.DEGREE

    geom_type = 'MultiLineString'

    def __post_init__(self):
        _init_reference(self, self.coordinate_system, self.units)
        lines = tuple(
            line if isinstance(line, LineString)
            else LineString(line, self.coordinate_system, self.units)
            for line in self.lines
        )
        for line in lines:
            if (line.coordinate_system, line.units) != (self.coordinate_system, self.units):
                raise ConfigurationError(
                    "MultiLineString members must share its coordinate system and unit"
                )
        object.__setattr__(self, 'lines', lines)

    def __len__(self) -> int:
        return len(self.lines)

    def __iter__(self) -> Iterator[LineString]:
        return iter(self.lines)


@dataclass(frozen=True, eq=False)
class MultiPolygon(_Referenced):
    """An ordered collection of polygons.

    The coordinate system defaults to the one of the first polygon.
    """

    polygons: Tuple[Polygon, ...] = ()
    coordinate_system: Optional[CoordinateSystem] = field(default=None)
    units: Optional[AngularUnit] = field(default=None)

    geom_type = 'MultiPolygon'

    def __post_init__(self):
        polygons = tuple(self.polygons)
        for polygon in polygons:
            if not isinstance(polygon, Polygon):
                raise TypeError(
                    f"MultiPolygon members must be Polygon, got {type(polygon).__name__}"
                )

        coordinate_system = self.coordinate_system
        units = self.units
        if coordinate_system is None:
            coordinate_system = (
                polygons[0].coordinate_system if polygons else CoordinateSystem.CARTESIAN
            )
        if units is None:
            units = polygons[0].units if polygons else AngularUnit.DEGREE
        _init_reference(self, coordinate_system, units)

        for polygon in polygons:
            if (polygon.coordinate_system, polygon.units) != (self.coordinate_system, self.units):
                raise ConfigurationError(
                    "MultiPolygon members must share one coordinate system and unit"
                )
        _check_same_dimension(
            [ring for polygon in polygons for ring in polygon.rings], 'MultiPolygon rings'
        )
        object.__setattr__(self, 'polygons', polygons)

    def __len__(self) -> int:
        return len(self.polygons)

    def __iter__(self) -> Iterator[Polygon]:
        return iter(self.polygons)

    @classmethod
    def from_coords(
        cls,
        parts: Sequence[Union[CoordsLike, Tuple[CoordsLike, Sequence[CoordsLike]]]],
        *,
        closed: bool = True,
        coordinate_system: Union[CoordinateSystem, str] = CoordinateSystem.CARTESIAN,
        units: Union[AngularUnit, str] = AngularUnit.DEGREE,
    ) -> MultiPolygon:
        """Build a multi-polygon from ``(shell, holes)`` pairs.

        Args:
            parts: Each item is either ``(shell, holes)`` or ``{'shell': ..., 'holes': ...}``
            closed: Whether the rings repeat their first point at the end
            coordinate_system: Coordinate system of every ring
            units: Angular unit for spherical or geographic systems

        Returns:
            MultiPolygon
        """
        polygons = []
        for part in parts:
            if isinstance(part, dict):
                shell, holes = part['shell'], part.get('holes')
            else:
                shell, holes = part
            polygons.append(Polygon.from_coords(
                shell, holes,
                closed=closed,
                coordinate_system=coordinate_system,
                units=units,
            ))
        return cls(tuple(polygons), coordinate_system, units)


def _check_same_dimension(rings: Sequence[LinearRing], owner: str) -> None:
    dimensions = {ring.dimension for ring in rings if len(ring) > 0}
    if len(dimensions) > 1:
        raise DimensionMismatchError(
            f"{owner} have different dimensions: {sorted(dimensions)}"
        )


Geometry = Union[
    Point, Segment, Box, LineString, LinearRing, Polygon,
    MultiPoint, MultiLineString, MultiPolygon,
]


__all__ = [
    'Point',
    'Segment',
    'Box',
    'LineString',
    'LinearRing',
    'Polygon',
    'MultiPoint',
    'MultiLineString',
    'MultiPolygon',
    'Geometry',
]
