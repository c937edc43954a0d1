"""Polygon validation.

The exterior and every hole are first validated as rings. The polygon is
then checked as a whole:

1. every hole lies inside the exterior, touching it at isolated points only
2. no two holes overlap and no hole lies inside another
3. the interior is connected, checked on the touch graph of the rings
"""

from dataclasses import dataclass
from typing import List, Optional, Tuple

from ..core.config import ValidationConfig, resolve_config
from ..core.result import VALID, PositionRef, ValidationResult
from ..core.types import FailureKind, Location
from ..core.validation_utils import first_non_finite
from ..geometry import Polygon
from .boundary import (
    boundary_samples,
    envelopes_intersect,
    locate_samples,
    ring_contacts,
)
from .ring import PreparedRing, check_ring
from .topology import TouchGraph


@dataclass(frozen=True)
class PreparedPolygon:
    """Prepared rings of a valid-ring polygon, all in one unwrapped frame."""

    exterior: PreparedRing
    holes: Tuple[PreparedRing, ...]

    @property
    def rings(self) -> Tuple[PreparedRing, ...]:
        return (self.exterior, *self.holes)


def polygon_reference(polygon: Polygon) -> Optional[float]:
    """Longitude that all rings of a polygon are unwrapped around."""
    coords = polygon.exterior.coords
    if len(coords) == 0 or first_non_finite(coords[:1]) is not None:
        return None
    return float(coords[0, 0])


def validate_polygon(
    polygon: Polygon,
    config: Optional[ValidationConfig] = None
) -> ValidationResult:
    """Validate a polygon.

    Args:
        polygon: Polygon to validate
        config: Validation policy, default config when None

    Returns:
        ValidationResult. Ring index 0 in the location is the exterior,
        ring k is hole k - 1.

    Examples:
        >>> from polyvalid.geometry import Polygon
        >>> shell = [(0, 0), (10, 0), (10, 10), (0, 10), (0, 0)]
        >>> validate_polygon(Polygon.from_coords(shell, [[(1, 1), (1, 10), (2, 1), (1, 1)]])).valid
        True
        >>> validate_polygon(Polygon.from_coords(shell, [[(5, 0), (0, 5), (5, 5), (5, 0)]])).failure
        <FailureKind.DISCONNECTED_INTERIOR: 'disconnected_interior'>
    """
    _, result = check_polygon(polygon, resolve_config(config))
    return result


def check_polygon(
    polygon: Polygon,
    config: ValidationConfig,
    reference: Optional[float] = None
) -> Tuple[Optional[PreparedPolygon], ValidationResult]:
    """Validate a polygon and keep its prepared rings.

    Args:
        polygon: Polygon to validate
        config: Validation policy
        reference: Longitude to unwrap around, the polygon's own first
            longitude when None

    Returns:
        Tuple of (prepared polygon or None when a ring failed, result)
    """
    if reference is None:
        reference = polygon_reference(polygon)

    exterior, result = check_ring(polygon.exterior, config, reference)
    if not result.valid:
        return None, result.at(ring=0)

    holes: List[PreparedRing] = []
    for k, hole in enumerate(polygon.holes, start=1):
        prepared_hole, result = check_ring(hole, config, reference)
        if not result.valid:
            return None, result.at(ring=k)
        holes.append(prepared_hole)

    prepared = PreparedPolygon(exterior, tuple(holes))
    return prepared, check_polygon_topology(prepared)


def check_polygon_topology(polygon: PreparedPolygon) -> ValidationResult:
    """Check hole placement and interior connectivity of valid rings."""
    graph = TouchGraph()

    for k, hole in enumerate(polygon.holes, start=1):
        result = _check_hole_in_exterior(hole, polygon.exterior, graph, k)
        if not result.valid:
            return result

    holes = polygon.holes
    for a in range(len(holes)):
        for b in range(a + 1, len(holes)):
            result = _check_hole_pair(holes[a], holes[b], graph, a + 1, b + 1)
            if not result.valid:
                return result

    if graph.has_cycle:
        return ValidationResult.fail(
            FailureKind.DISCONNECTED_INTERIOR, PositionRef(ring=graph.cycle_ring)
        )
    return VALID


def _check_hole_in_exterior(
    hole: PreparedRing,
    exterior: PreparedRing,
    graph: TouchGraph,
    k: int
) -> ValidationResult:
    failed = ValidationResult.fail(FailureKind.HOLE_CROSSES_EXTERIOR, PositionRef(ring=k))

    if not hole.strategy.covered_by(hole.envelope(), exterior.envelope()):
        return failed

    contact = ring_contacts(hole, exterior)
    if contact.is_proper:
        edge, _, _ = contact.proper
        return ValidationResult.fail(
            FailureKind.HOLE_CROSSES_EXTERIOR,
            PositionRef(ring=k, other_ring=0, vertex=hole.edge_vertex(edge)),
        )

    samples = boundary_samples(hole, contact.splits_first)
    if Location.EXTERIOR in locate_samples(samples, exterior):
        return failed

    for point in sorted(contact.touches):
        graph.add_touch(0, point)
        graph.add_touch(k, point)
    return VALID


def _check_hole_pair(
    first: PreparedRing,
    second: PreparedRing,
    graph: TouchGraph,
    i: int,
    j: int
) -> ValidationResult:
    if not envelopes_intersect(first, second):
        return VALID

    where = PositionRef(ring=i, other_ring=j)
    contact = ring_contacts(first, second)
    if contact.is_proper:
        return ValidationResult.fail(FailureKind.HOLES_OVERLAP, where)

    for inner, outer, splits in (
        (first, second, contact.splits_first),
        (second, first, contact.splits_second),
    ):
        locations = locate_samples(boundary_samples(inner, splits), outer)
        if Location.INTERIOR in locations:
            if Location.EXTERIOR in locations:
                return ValidationResult.fail(FailureKind.HOLES_OVERLAP, where)
            return ValidationResult.fail(FailureKind.NESTED_HOLES, where)

    for point in sorted(contact.touches):
        graph.add_touch(i, point)
        graph.add_touch(j, point)
    return VALID


__all__ = [
    'PreparedPolygon',
    'polygon_reference',
    'validate_polygon',
    'check_polygon',
    'check_polygon_topology',
]
