"""Per-coordinate-system containment strategies.

A strategy answers the coordinate-system dependent questions of validation:
box containment (``within`` / ``covered_by``), envelopes, and how to unwrap
periodic longitudes so the planar predicates can run on rings crossing the
antimeridian. Strategies are picked once per geometry with
:func:`strategy_for`; the set is closed.

Spherical handling treats edges as straight lines in longitude/latitude
space. Rings enclosing a pole are not supported.
"""

from typing import Optional, Tuple

import numpy as np

from .core.errors import ConfigurationError, DimensionMismatchError
from .core.types import AngularUnit, CoordinateSystem, coerce_enum

Envelope = Tuple[np.ndarray, np.ndarray]


class ContainmentStrategy:
    """Cartesian rules, applied to every dimension."""

    name = 'cartesian'
    periodic = False
    collinear_epsilon = 0.0

    def __init__(self, units: AngularUnit = AngularUnit.DEGREE):
        self.units = units

    def __repr__(self) -> str:
        return f"{type(self).__name__}(units={self.units.value!r})"

    def within_range(
        self,
        dimension: int,
        inner_min: float,
        inner_max: float,
        outer_min: float,
        outer_max: float
    ) -> bool:
        """Strict containment of one coordinate range in another."""
        return outer_min <= inner_min and inner_max <= outer_max and inner_min < inner_max

    def covered_by_range(
        self,
        dimension: int,
        inner_min: float,
        inner_max: float,
        outer_min: float,
        outer_max: float
    ) -> bool:
        """Non-strict containment of one coordinate range in another."""
        return outer_min <= inner_min and inner_max <= outer_max

    def normalize_box(self, min_corner: np.ndarray, max_corner: np.ndarray) -> Envelope:
        """Return box corners in the form the range tests expect."""
        return np.asarray(min_corner, dtype=float), np.asarray(max_corner, dtype=float)

    def within(self, inner: Envelope, outer: Envelope) -> bool:
        inner_min, inner_max = self.normalize_box(*inner)
        outer_min, outer_max = self.normalize_box(*outer)
        return all(
            self.within_range(d, inner_min[d], inner_max[d], outer_min[d], outer_max[d])
            for d in range(len(inner_min))
        )

    def covered_by(self, inner: Envelope, outer: Envelope) -> bool:
        inner_min, inner_max = self.normalize_box(*inner)
        outer_min, outer_max = self.normalize_box(*outer)
        return all(
            self.covered_by_range(d, inner_min[d], inner_max[d], outer_min[d], outer_max[d])
            for d in range(len(inner_min))
        )

    def envelope(self, coords: np.ndarray) -> Envelope:
        """Smallest box covering ``coords``."""
        return coords.min(axis=0), coords.max(axis=0)

    def unwrap(self, coords: np.ndarray, reference: Optional[float] = None) -> np.ndarray:
        """Return coordinates in a frame where edges are planar segments."""
        return coords


class CartesianStrategy(ContainmentStrategy):
    """Planar coordinates."""
    pass


class SphericalStrategy(ContainmentStrategy):
    """Spherical-equatorial and geographic coordinates.

    Dimension 0 is a periodic longitude. Latitude and any further dimension
    follow the cartesian rules.

    Examples:
        >>> strategy = SphericalStrategy(AngularUnit.DEGREE)
        >>> strategy.covered_by(
        ...     (np.array([175.0, 0.0]), np.array([-175.0, 1.0])),
        ...     (np.array([170.0, 0.0]), np.array([-170.0, 1.0])),
        ... )
        True
    """

    name = 'spherical'
    periodic = True
    collinear_epsilon = 1e-12

    @property
    def period(self) -> float:
        return self.units.period

    def _longitude_offset(self, inner_min: float, outer_min: float) -> float:
        offset = (inner_min - outer_min) % self.period
        if offset >= self.period:
            offset -= self.period
        return offset

    def within_range(self, dimension, inner_min, inner_max, outer_min, outer_max) -> bool:
        if dimension != 0:
            return super().within_range(dimension, inner_min, inner_max, outer_min, outer_max)

        inner_extent = inner_max - inner_min
        outer_extent = outer_max - outer_min
        if outer_extent < inner_extent or inner_extent == 0:
            return False
        if not outer_extent < self.period:
            return True
        offset = self._longitude_offset(inner_min, outer_min)
        return outer_min + offset + inner_extent <= outer_max

    def covered_by_range(self, dimension, inner_min, inner_max, outer_min, outer_max) -> bool:
        if dimension != 0:
            return super().covered_by_range(dimension, inner_min, inner_max, outer_min, outer_max)

        inner_extent = inner_max - inner_min
        outer_extent = outer_max - outer_min
        if outer_extent < inner_extent:
            return False
        if not outer_extent < self.period:
            return True
        offset = self._longitude_offset(inner_min, outer_min)
        return outer_min + offset + inner_extent <= outer_max

    def normalize_box(self, min_corner, max_corner) -> Envelope:
        """Read a box whose max longitude is below its min as crossing the antimeridian."""
        lo = np.array(min_corner, dtype=float)
        hi = np.array(max_corner, dtype=float)
        if hi[0] < lo[0]:
            hi[0] += self.period
        return lo, hi

    def envelope(self, coords: np.ndarray) -> Envelope:
        """Covering box of a vertex sequence following its edges.

        Longitudes are unwrapped first, so a sequence crossing the
        antimeridian gets a max longitude beyond ``period / 2`` instead of an
        interval spanning the whole globe.
        """
        unwrapped = self.unwrap(coords)
        return unwrapped.min(axis=0), unwrapped.max(axis=0)

    def unwrap(self, coords: np.ndarray, reference: Optional[float] = None) -> np.ndarray:
        """Shift longitudes by whole periods so consecutive vertices stay close.

        Vertices that need no shift keep their exact value. When
        ``reference`` is given the whole sequence is moved by whole periods so
        its first longitude is within half a period of it.
        """
        if len(coords) == 0:
            return coords

        longitudes = coords[:, 0]
        turns = np.concatenate([[0.0], np.cumsum(np.round(np.diff(longitudes) / self.period))])
        if reference is not None:
            turns += np.round((longitudes[0] - turns[0] * self.period - reference) / self.period)
        if not turns.any():
            return coords

        unwrapped = np.array(coords, dtype=float)
        unwrapped[:, 0] = longitudes - turns * self.period
        unwrapped.flags.writeable = False
        return unwrapped


_CARTESIAN = CartesianStrategy()
_SPHERICAL = {unit: SphericalStrategy(unit) for unit in AngularUnit}


def strategy_for(
    coordinate_system: CoordinateSystem = CoordinateSystem.CARTESIAN,
    units: AngularUnit = AngularUnit.DEGREE
) -> ContainmentStrategy:
    """Pick the strategy for a coordinate system.

    Args:
        coordinate_system: CoordinateSystem member or its name
        units: AngularUnit member or its name, used by periodic systems

    Returns:
        Shared strategy instance

    Raises:
        ConfigurationError: For an unknown coordinate system or unit
    """
    coordinate_system = coerce_enum(coordinate_system, CoordinateSystem)
    units = coerce_enum(units, AngularUnit)
    if coordinate_system.is_periodic:
        return _SPHERICAL[units]
    return _CARTESIAN


def _box_pair_strategy(inner, outer) -> ContainmentStrategy:
    if (inner.coordinate_system, inner.units) != (outer.coordinate_system, outer.units):
        raise ConfigurationError(
            "Boxes are expressed in different coordinate systems: "
            f"{inner.coordinate_system.value} and {outer.coordinate_system.value}"
        )
    if len(inner.min_corner) != len(outer.min_corner):
        raise DimensionMismatchError(
            f"Boxes have different dimensions: {len(inner.min_corner)} "
            f"and {len(outer.min_corner)}"
        )
    return strategy_for(inner.coordinate_system, inner.units)


def within(inner, outer) -> bool:
    """Strict containment of box ``inner`` in box ``outer``.

    Args:
        inner: Contained :class:`~polyvalid.geometry.Box`
        outer: Containing Box, same coordinate system and dimension

    Returns:
        True if every dimension range of ``inner`` is strictly contained

    Raises:
        DimensionMismatchError: If the boxes differ in dimension
        ConfigurationError: If the boxes differ in coordinate system

    Examples:
        >>> from polyvalid.geometry import Box
        >>> within(Box((1, 1), (2, 2)), Box((0, 0), (3, 3)))
        True
        >>> within(Box((1, 1), (1, 2)), Box((0, 0), (3, 3)))
        False
    """
    strategy = _box_pair_strategy(inner, outer)
    return strategy.within(
        (inner.min_corner, inner.max_corner), (outer.min_corner, outer.max_corner)
    )


def covered_by(inner, outer) -> bool:
    """Non-strict containment of box ``inner`` in box ``outer``.

    Examples:
        >>> from polyvalid.geometry import Box
        >>> box = Box((0, 0), (1, 1))
        >>> covered_by(box, box)
        True
    """
    strategy = _box_pair_strategy(inner, outer)
    return strategy.covered_by(
        (inner.min_corner, inner.max_corner), (outer.min_corner, outer.max_corner)
    )


__all__ = [
    'ContainmentStrategy',
    'CartesianStrategy',
    'SphericalStrategy',
    'strategy_for',
    'within',
    'covered_by',
]
