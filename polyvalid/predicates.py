"""Exact geometric predicates on 2-D coordinates.

All predicates read the first two dimensions of their inputs and ignore the
rest. Orientation is decided with a floating point filter and falls back to
exact rational arithmetic when the filter cannot certify the sign, so the
validators never misclassify a turn because of rounding.
"""

from fractions import Fraction
from typing import Sequence, Union

import numpy as np

from .core.types import Location, Side

PointLike = Union[np.ndarray, Sequence[float]]

# Unit roundoff and the error bound of Shewchuk's orient2d filter.
_EPSILON = np.finfo(float).eps / 2.0
_CCW_ERRBOUND = (3.0 + 16.0 * _EPSILON) * _EPSILON


def orientation(
    a: PointLike,
    b: PointLike,
    c: PointLike,
    epsilon: float = 0.0
) -> Side:
    """Side of ``c`` relative to the directed line ``a -> b``.

    The sign of the cross product of ``b - a`` and ``c - a`` is computed in
    floating point first. When its magnitude is inside the forward error bound
    the sign is recomputed exactly with :class:`fractions.Fraction`.

    Args:
        a: Start of the directed line
        b: End of the directed line
        c: Query point
        epsilon: Tolerance on the distance of the three points from a common
            line, relative to the longest pairwise distance. Turns within it
            are reported as collinear whatever the argument order. 0.0 means
            exact.

    Returns:
        Side.LEFT for a counter-clockwise turn, Side.RIGHT for a clockwise
        turn, Side.COLLINEAR otherwise

    Examples:
        >>> orientation((0, 0), (1, 0), (0, 1))
        <Side.LEFT: 1>
        >>> orientation((0, 0), (1, 1), (3, 3))
        <Side.COLLINEAR: 0>
    """
    ax, ay = float(a[0]), float(a[1])
    bx, by = float(b[0]), float(b[1])
    cx, cy = float(c[0]), float(c[1])

    if epsilon > 0.0 and _near_collinear((ax, ay), (bx, by), (cx, cy), epsilon):
        return Side.COLLINEAR

    detleft = (bx - ax) * (cy - ay)
    detright = (by - ay) * (cx - ax)
    det = detleft - detright
    magnitude = abs(detleft) + abs(detright)

    errbound = _CCW_ERRBOUND * magnitude
    if det > errbound:
        return Side.LEFT
    if -det > errbound:
        return Side.RIGHT

    exact = (
        (Fraction(bx) - Fraction(ax)) * (Fraction(cy) - Fraction(ay))
        - (Fraction(by) - Fraction(ay)) * (Fraction(cx) - Fraction(ax))
    )
    if exact > 0:
        return Side.LEFT
    if exact < 0:
        return Side.RIGHT
    return Side.COLLINEAR


def distance_squared(a: PointLike, b: PointLike) -> float:
    """Squared planar distance between two points."""
    dx = float(b[0]) - float(a[0])
    dy = float(b[1]) - float(a[1])
    return dx * dx + dy * dy


def _near_collinear(a, b, c, epsilon: float) -> bool:
    """True when the triangle height is at most ``epsilon`` times its longest side.

    Evaluated on the points in sorted order, so every permutation of the
    same three points gets the same answer.
    """
    p, q, r = sorted((a, b, c))
    twice_area = abs((q[0] - p[0]) * (r[1] - p[1]) - (q[1] - p[1]) * (r[0] - p[0]))
    longest = max(distance_squared(p, q), distance_squared(q, r), distance_squared(p, r))
    return twice_area <= epsilon * longest


def points_equal(a: PointLike, b: PointLike) -> bool:
    """Exact equality of the first two coordinates."""
    return a[0] == b[0] and a[1] == b[1]


def in_bounds(p: PointLike, a: PointLike, b: PointLike) -> bool:
    """True when ``p`` lies in the closed bounding box of ``a`` and ``b``."""
    return (
        min(a[0], b[0]) <= p[0] <= max(a[0], b[0])
        and min(a[1], b[1]) <= p[1] <= max(a[1], b[1])
    )


def point_on_segment(
    p: PointLike,
    a: PointLike,
    b: PointLike,
    epsilon: float = 0.0
) -> bool:
    """True when ``p`` lies on the closed segment ``a - b``.

    Examples:
        >>> point_on_segment((1, 1), (0, 0), (2, 2))
        True
        >>> point_on_segment((3, 3), (0, 0), (2, 2))
        False
    """
    if not in_bounds(p, a, b):
        return False
    if points_equal(a, b):
        return points_equal(p, a)
    return orientation(a, b, p, epsilon) is Side.COLLINEAR


def locate_point_in_ring(p: PointLike, ring: np.ndarray) -> Location:
    """Locate a point relative to a ring using the winding number.

    Args:
        p: Query point
        ring: Ring vertices of shape (n, d); the closing point may be present
            or omitted

    Returns:
        Location.BOUNDARY when ``p`` lies on an edge, Location.INTERIOR when
        the winding number is non-zero, Location.EXTERIOR otherwise

    Examples:
        >>> square = np.array([[0, 0], [4, 0], [4, 4], [0, 4]])
        >>> locate_point_in_ring((1, 1), square)
        <Location.INTERIOR: 'interior'>
        >>> locate_point_in_ring((4, 2), square)
        <Location.BOUNDARY: 'boundary'>
    """
    n = len(ring)
    if n == 0:
        return Location.EXTERIOR

    px, py = p[0], p[1]
    xs = ring[:, 0]
    ys = ring[:, 1]
    if px < xs.min() or px > xs.max() or py < ys.min() or py > ys.max():
        return Location.EXTERIOR

    winding = 0
    for i in range(n):
        a = ring[i]
        b = ring[(i + 1) % n]
        if point_on_segment(p, a, b):
            return Location.BOUNDARY
        if a[1] <= py:
            if b[1] > py and orientation(a, b, p) is Side.LEFT:
                winding += 1
        elif b[1] <= py and orientation(a, b, p) is Side.RIGHT:
            winding -= 1

    return Location.INTERIOR if winding != 0 else Location.EXTERIOR


def signed_area(ring: np.ndarray) -> float:
    """Shoelace area of a ring, positive for counter-clockwise rings.

    The closing point may be present or omitted.
    """
    if len(ring) < 3:
        return 0.0
    x = ring[:, 0]
    y = ring[:, 1]
    return 0.5 * float(np.sum(x * np.roll(y, -1) - np.roll(x, -1) * y))


__all__ = [
    'orientation',
    'distance_squared',
    'points_equal',
    'in_bounds',
    'point_on_segment',
    'locate_point_in_ring',
    'signed_area',
]
