"""Segment relation kernel.

Classifies how two segments meet. Every boundary check of the validators is
reduced to calls of :func:`relate` on edge pairs.
"""

from dataclasses import dataclass
from typing import Optional, Sequence, Tuple, Union

import numpy as np

from .core.types import RelationKind, Side
from .geometry import Segment
from .predicates import in_bounds, orientation, points_equal

XY = Tuple[float, float]
SegmentLike = Union[Segment, np.ndarray, Sequence[Sequence[float]]]


@dataclass(frozen=True)
class SegmentRelation:
    """Result of relating two segments.

    Attributes:
        kind: Relation classification
        points: Contact points. One point for TOUCH_AT_POINT and CROSSING,
            the two ends of the shared range for COLLINEAR_OVERLAP and
            IDENTICAL, none for DISJOINT.
    """

    kind: RelationKind
    points: Tuple[XY, ...] = ()

    @property
    def point(self) -> Optional[XY]:
        """First contact point, None when disjoint."""
        return self.points[0] if self.points else None

    @property
    def is_disjoint(self) -> bool:
        return self.kind is RelationKind.DISJOINT

    @property
    def is_touch(self) -> bool:
        return self.kind is RelationKind.TOUCH_AT_POINT

    @property
    def is_proper(self) -> bool:
        """True for a crossing, an overlapping range or identical segments."""
        return self.kind in (
            RelationKind.CROSSING,
            RelationKind.COLLINEAR_OVERLAP,
            RelationKind.IDENTICAL,
        )


DISJOINT = SegmentRelation(RelationKind.DISJOINT)


def _endpoints(segment: SegmentLike) -> Tuple[XY, XY]:
    if isinstance(segment, Segment):
        start, end = segment.start, segment.end
    else:
        start, end = segment[0], segment[1]
    return (float(start[0]), float(start[1])), (float(end[0]), float(end[1]))


def _touch(point: XY) -> SegmentRelation:
    return SegmentRelation(RelationKind.TOUCH_AT_POINT, (point,))


def relate(s1: SegmentLike, s2: SegmentLike, epsilon: float = 0.0) -> SegmentRelation:
    """Classify the relation of two segments.

    Args:
        s1: First segment, a :class:`~polyvalid.geometry.Segment` or a pair of
            points
        s2: Second segment
        epsilon: Relative collinearity tolerance passed to
            :func:`~polyvalid.predicates.orientation`

    Returns:
        SegmentRelation

    Examples:
        >>> relate([(0, 0), (2, 2)], [(0, 2), (2, 0)]).kind
        <RelationKind.CROSSING: 'crossing'>
        >>> relate([(0, 0), (2, 0)], [(2, 0), (3, 1)]).points
        ((2.0, 0.0),)
        >>> relate([(0, 0), (2, 0)], [(1, 0), (3, 0)]).kind
        <RelationKind.COLLINEAR_OVERLAP: 'collinear_overlap'>
    """
    p1, p2 = _endpoints(s1)
    q1, q2 = _endpoints(s2)

    p_degenerate = points_equal(p1, p2)
    q_degenerate = points_equal(q1, q2)
    if p_degenerate and q_degenerate:
        return _touch(p1) if points_equal(p1, q1) else DISJOINT
    if p_degenerate:
        return _point_relation(p1, q1, q2, epsilon)
    if q_degenerate:
        return _point_relation(q1, p1, p2, epsilon)

    if (points_equal(p1, q1) and points_equal(p2, q2)) or (
        points_equal(p1, q2) and points_equal(p2, q1)
    ):
        return SegmentRelation(RelationKind.IDENTICAL, (p1, p2))

    if (
        max(p1[0], p2[0]) < min(q1[0], q2[0])
        or max(q1[0], q2[0]) < min(p1[0], p2[0])
        or max(p1[1], p2[1]) < min(q1[1], q2[1])
        or max(q1[1], q2[1]) < min(p1[1], p2[1])
    ):
        return DISJOINT

    o1 = orientation(q1, q2, p1, epsilon)
    o2 = orientation(q1, q2, p2, epsilon)
    o3 = orientation(p1, p2, q1, epsilon)
    o4 = orientation(p1, p2, q2, epsilon)

    if o1 is o2 is o3 is o4 is Side.COLLINEAR:
        return _collinear_relation(p1, p2, q1, q2)

    if (o1 is o2 and o1 is not Side.COLLINEAR) or (o3 is o4 and o3 is not Side.COLLINEAR):
        return DISJOINT

    if Side.COLLINEAR not in (o1, o2, o3, o4):
        return SegmentRelation(RelationKind.CROSSING, (_crossing_point(p1, p2, q1, q2),))

    for point, side, (a, b) in (
        (p1, o1, (q1, q2)),
        (p2, o2, (q1, q2)),
        (q1, o3, (p1, p2)),
        (q2, o4, (p1, p2)),
    ):
        if side is Side.COLLINEAR and in_bounds(point, a, b):
            return _touch(point)
    return DISJOINT


def _point_relation(p: XY, a: XY, b: XY, epsilon: float) -> SegmentRelation:
    if in_bounds(p, a, b) and orientation(a, b, p, epsilon) is Side.COLLINEAR:
        return _touch(p)
    return DISJOINT


def _collinear_relation(p1: XY, p2: XY, q1: XY, q2: XY) -> SegmentRelation:
    """Compare collinear segments as intervals on their dominant axis."""
    axis = 0 if abs(p2[0] - p1[0]) >= abs(p2[1] - p1[1]) else 1

    p_lo, p_hi = sorted((p1, p2), key=lambda pt: pt[axis])
    q_lo, q_hi = sorted((q1, q2), key=lambda pt: pt[axis])
    lo = p_lo if p_lo[axis] >= q_lo[axis] else q_lo
    hi = p_hi if p_hi[axis] <= q_hi[axis] else q_hi

    if lo[axis] > hi[axis]:
        return DISJOINT
    if lo[axis] == hi[axis]:
        return _touch(lo)
    return SegmentRelation(RelationKind.COLLINEAR_OVERLAP, (lo, hi))


def _crossing_point(p1: XY, p2: XY, q1: XY, q2: XY) -> XY:
    """Parametric intersection of the lines through two crossing segments."""
    dpx, dpy = p2[0] - p1[0], p2[1] - p1[1]
    dqx, dqy = q2[0] - q1[0], q2[1] - q1[1]
    denom = dpx * dqy - dpy * dqx
    t = ((q1[0] - p1[0]) * dqy - (q1[1] - p1[1]) * dqx) / denom
    return (p1[0] + t * dpx, p1[1] + t * dpy)


__all__ = [
    'SegmentRelation',
    'relate',
]
