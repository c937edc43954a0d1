"""Ring against ring boundary analysis.

Two prepared rings are compared edge by edge with the relation kernel. The
result tells whether their boundaries cross or share a range, lists the
isolated points where they touch, and yields sample points on each boundary
(the midpoints between consecutive contact points) that are then located
against the other ring to decide containment.
"""

from collections import defaultdict
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Sequence, Set, Tuple

from ..core.spatial_utils import find_segment_pairs
from ..core.types import Location
from ..predicates import distance_squared, locate_point_in_ring
from ..relate import XY, SegmentRelation, relate
from .ring import PreparedRing


@dataclass
class RingContact:
    """How the boundaries of two rings meet.

    Attributes:
        proper: First crossing, collinear overlap or identical edge pair as
            ``(edge of first ring, edge of second ring, relation)``
        touches: Distinct points where the boundaries touch
        splits_first: Contact points per edge of the first ring
        splits_second: Contact points per edge of the second ring
    """

    proper: Optional[Tuple[int, int, SegmentRelation]] = None
    touches: Set[XY] = field(default_factory=set)
    splits_first: Dict[int, List[XY]] = field(default_factory=lambda: defaultdict(list))
    splits_second: Dict[int, List[XY]] = field(default_factory=lambda: defaultdict(list))

    @property
    def is_proper(self) -> bool:
        return self.proper is not None


def ring_contacts(first: PreparedRing, second: PreparedRing) -> RingContact:
    """Relate every candidate edge pair of two rings.

    Stops at the first proper intersection in edge index order.
    """
    contact = RingContact()
    epsilon = max(first.epsilon, second.epsilon)
    for i, j in find_segment_pairs(first.edges, second.edges):
        relation = relate(first.edges[i], second.edges[j], epsilon)
        if relation.is_disjoint:
            continue
        if relation.is_proper:
            contact.proper = (i, j, relation)
            return contact
        point = relation.point
        contact.touches.add(point)
        contact.splits_first[i].append(point)
        contact.splits_second[j].append(point)
    return contact


def merge_splits(*splits: Dict[int, List[XY]]) -> Dict[int, List[XY]]:
    """Combine per-edge contact lists gathered against several rings."""
    merged: Dict[int, List[XY]] = defaultdict(list)
    for split in splits:
        for edge, points in split.items():
            merged[edge].extend(points)
    return merged


def boundary_samples(ring: PreparedRing, splits: Dict[int, List[XY]]) -> List[XY]:
    """Sample points on a ring boundary away from every contact point.

    Each edge is cut at its contact points and the midpoint of every piece
    is returned.

    Args:
        ring: Prepared ring
        splits: Contact points per edge index

    Returns:
        List of (x, y) sample points in edge order
    """
    samples = []
    for index, (start, end) in enumerate(ring.edges.tolist()):
        start = tuple(start)
        end = tuple(end)
        cuts = sorted(
            set(splits.get(index, ())) | {start, end},
            key=lambda pt: distance_squared(start, pt),
        )
        for a, b in zip(cuts, cuts[1:]):
            samples.append(((a[0] + b[0]) / 2.0, (a[1] + b[1]) / 2.0))
    return samples


def locate_samples(samples: Sequence[XY], ring: PreparedRing) -> Set[Location]:
    """Set of locations taken by ``samples`` relative to ``ring``."""
    return {locate_point_in_ring(point, ring.coords) for point in samples}


def locate_in_area(point: XY, exterior: PreparedRing, holes: Sequence[PreparedRing]) -> Location:
    """Locate a point relative to the area bounded by an exterior and holes.

    Examples:
        A point inside a hole is outside the area, a point on a hole ring is
        on its boundary.
    """
    location = locate_point_in_ring(point, exterior.coords)
    if location is not Location.INTERIOR:
        return location
    for hole in holes:
        in_hole = locate_point_in_ring(point, hole.coords)
        if in_hole is Location.INTERIOR:
            return Location.EXTERIOR
        if in_hole is Location.BOUNDARY:
            return Location.BOUNDARY
    return Location.INTERIOR


def envelopes_intersect(first: PreparedRing, second: PreparedRing) -> bool:
    """Planar envelope test in the shared unwrapped frame."""
    lo1, hi1 = first.envelope()
    lo2, hi2 = second.envelope()
    return bool(
        lo1[0] <= hi2[0] and lo2[0] <= hi1[0]
        and lo1[1] <= hi2[1] and lo2[1] <= hi1[1]
    )


__all__ = [
    'RingContact',
    'ring_contacts',
    'merge_splits',
    'boundary_samples',
    'locate_samples',
    'locate_in_area',
    'envelopes_intersect',
]
