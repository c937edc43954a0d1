"""Spatial indexing utilities.

Candidate edge pairs are found with a Shapely ``STRtree`` over the edge
envelopes, so the exact relation kernel only runs on pairs whose bounding
boxes touch or overlap. Pruning never changes a verdict: edges with disjoint
envelopes cannot share a point.
"""

from typing import List, Optional, Sequence, Tuple

import numpy as np
import shapely
from shapely.strtree import STRtree


def ring_edges(coords: np.ndarray, closed: bool = True) -> np.ndarray:
    """Build the edge array of a vertex sequence.

    Args:
        coords: Vertex array (n, d) without a closing point
        closed: Add the edge from the last vertex back to the first

    Returns:
        Array of shape (m, 2, 2) holding the 2-D endpoints of every edge

    Examples:
        >>> ring_edges(np.array([[0, 0], [1, 0], [1, 1]])).shape
        (3, 2, 2)
    """
    xy = np.asarray(coords, dtype=float)[:, :2]
    if len(xy) < 2:
        return np.empty((0, 2, 2), dtype=float)
    ends = np.roll(xy, -1, axis=0) if closed else xy[1:]
    starts = xy if closed else xy[:-1]
    return np.stack([starts, ends], axis=1)


def find_segment_pairs(
    edges: np.ndarray,
    other: Optional[np.ndarray] = None
) -> List[Tuple[int, int]]:
    """Find pairs of edges whose envelopes intersect.

    Uses STRtree for efficient spatial indexing (O(n log n) instead of O(n²)).

    Args:
        edges: Edge array (m, 2, 2)
        other: Optional second edge array. When omitted, pairs are taken
            within ``edges`` and each unordered pair is reported once as
            (i, j) with i < j.

    Returns:
        Sorted list of (index in edges, index in other) tuples

    Examples:
        >>> square = ring_edges(np.array([[0, 0], [2, 0], [2, 2], [0, 2]]))
        >>> find_segment_pairs(square)
        [(0, 1), (0, 3), (1, 2), (2, 3)]
    """
    if len(edges) == 0 or (other is not None and len(other) == 0):
        return []

    tree_lines = shapely.linestrings(edges)
    tree = STRtree(tree_lines)

    if other is None:
        query_idx, tree_idx = tree.query(tree_lines)
        mask = tree_idx < query_idx
        first, second = tree_idx[mask], query_idx[mask]
    else:
        query_idx, tree_idx = tree.query(shapely.linestrings(other))
        first, second = tree_idx, query_idx

    order = np.lexsort((second, first))
    return [(int(first[k]), int(second[k])) for k in order]


def find_envelope_pairs(
    envelopes: Sequence[Tuple[np.ndarray, np.ndarray]]
) -> List[Tuple[int, int]]:
    """Find pairs of 2-D envelopes that intersect.

    Args:
        envelopes: List of (min corner, max corner) pairs

    Returns:
        Sorted list of unique (i, j) tuples with i < j

    Examples:
        >>> boxes = [
        ...     (np.array([0, 0]), np.array([1, 1])),
        ...     (np.array([1, 1]), np.array([2, 2])),
        ...     (np.array([5, 5]), np.array([6, 6])),
        ... ]
        >>> find_envelope_pairs(boxes)
        [(0, 1)]
    """
    if len(envelopes) < 2:
        return []

    bounds = np.array([[lo[0], lo[1], hi[0], hi[1]] for lo, hi in envelopes], dtype=float)
    geoms = shapely.box(bounds[:, 0], bounds[:, 1], bounds[:, 2], bounds[:, 3])
    tree = STRtree(geoms)

    query_idx, tree_idx = tree.query(geoms)
    mask = tree_idx < query_idx
    first, second = tree_idx[mask], query_idx[mask]
    order = np.lexsort((second, first))
    return [(int(first[k]), int(second[k])) for k in order]


__all__ = [
    'ring_edges',
    'find_segment_pairs',
    'find_envelope_pairs',
]
