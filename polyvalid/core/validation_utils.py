"""Coordinate sequence checks shared by the validators.

These helpers work on raw ``(n, d)`` coordinate arrays. Point equality is
exact and only looks at the first two dimensions, like the predicates.
"""

from typing import Dict, Optional, Tuple

import numpy as np


def first_non_finite(coords: np.ndarray) -> Optional[int]:
    """Index of the first point with a NaN or infinite coordinate.

    Examples:
        >>> first_non_finite(np.array([[0, 0], [1, np.nan]]))
        1
        >>> first_non_finite(np.array([[0, 0], [1, 1]])) is None
        True
    """
    bad = ~np.isfinite(coords).all(axis=1)
    if not bad.any():
        return None
    return int(np.argmax(bad))


def is_ring_closed(coords: np.ndarray) -> bool:
    """Check that the last point repeats the first one exactly.

    Examples:
        >>> is_ring_closed(np.array([[0, 0], [1, 0], [1, 1], [0, 0]]))
        True
        >>> is_ring_closed(np.array([[0, 0], [1, 0], [1, 1]]))
        False
    """
    if len(coords) < 2:
        return False
    return bool(np.array_equal(coords[0], coords[-1]))


def collapse_repeated_points(
    coords: np.ndarray,
    cyclic: bool = False
) -> Tuple[np.ndarray, np.ndarray]:
    """Drop immediately repeated points.

    Args:
        coords: Coordinate array (n, d)
        cyclic: Also drop trailing points equal to the first point, as the
            wraparound pair of a ring

    Returns:
        Tuple of (collapsed coordinates, original index of each kept point)

    Examples:
        >>> pts, idx = collapse_repeated_points(np.array([[0, 0], [0, 0], [1, 0], [1, 1]]))
        >>> idx
        array([0, 2, 3])
    """
    n = len(coords)
    if n == 0:
        return coords, np.arange(0)

    xy = coords[:, :2]
    keep = np.ones(n, dtype=bool)
    keep[1:] = np.any(xy[1:] != xy[:-1], axis=1)
    indices = np.flatnonzero(keep)

    if cyclic:
        while len(indices) > 1 and np.array_equal(xy[indices[-1]], xy[indices[0]]):
            indices = indices[:-1]

    return coords[indices], indices


def find_repeated_point(coords: np.ndarray) -> Optional[Tuple[int, int]]:
    """First pair of positions holding the same point.

    Args:
        coords: Coordinate array, usually already collapsed

    Returns:
        Tuple (first, second) of positions, or None when all points differ

    Examples:
        >>> find_repeated_point(np.array([[0, 0], [1, 0], [0, 0], [0, 1]]))
        (0, 2)
    """
    seen: Dict[Tuple[float, float], int] = {}
    for i, (x, y) in enumerate(coords[:, :2].tolist()):
        key = (x, y)
        if key in seen:
            return seen[key], i
        seen[key] = i
    return None


__all__ = [
    'first_non_finite',
    'is_ring_closed',
    'collapse_repeated_points',
    'find_repeated_point',
]
