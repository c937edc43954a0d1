"""Multi-polygon validation.

Each member polygon must be valid on its own. Members may then touch at
isolated points but must not overlap or share a boundary range. A polygon
lying inside a hole of another member is valid.
"""

from collections import defaultdict
from typing import Dict, List, Optional

from ..core.config import ValidationConfig, resolve_config
from ..core.result import VALID, PositionRef, ValidationResult
from ..core.spatial_utils import find_envelope_pairs
from ..core.types import FailureKind, Location, RelationKind
from ..geometry import MultiPolygon
from ..relate import XY
from .boundary import (
    boundary_samples,
    envelopes_intersect,
    locate_in_area,
    merge_splits,
    ring_contacts,
)
from .polygon import PreparedPolygon, check_polygon, polygon_reference


def validate_multipolygon(
    multipolygon: MultiPolygon,
    config: Optional[ValidationConfig] = None
) -> ValidationResult:
    """Validate a multi-polygon.

    Args:
        multipolygon: MultiPolygon to validate
        config: Validation policy, default config when None

    Returns:
        ValidationResult. Pairwise failures carry both polygon indexes.

    Examples:
        >>> from polyvalid.geometry import MultiPolygon
        >>> touching = MultiPolygon.from_coords([
        ...     ([(0, 0), (1, 0), (1, 1), (0, 1), (0, 0)], []),
        ...     ([(1, 1), (2, 1), (2, 2), (1, 2), (1, 1)], []),
        ... ])
        >>> validate_multipolygon(touching).valid
        True
    """
    config = resolve_config(config)

    reference = None
    for polygon in multipolygon.polygons:
        reference = polygon_reference(polygon)
        if reference is not None:
            break

    prepared: List[PreparedPolygon] = []
    for i, polygon in enumerate(multipolygon.polygons):
        member, result = check_polygon(polygon, config, reference)
        if not result.valid:
            return result.at(polygon=i)
        prepared.append(member)

    envelopes = [member.exterior.envelope() for member in prepared]
    for i, j in find_envelope_pairs(envelopes):
        result = check_polygon_pair(prepared[i], prepared[j])
        if not result.valid:
            return result.at(polygon=i, other_polygon=j)
    return VALID


def check_polygon_pair(first: PreparedPolygon, second: PreparedPolygon) -> ValidationResult:
    """Check that two valid polygons meet at isolated points at most."""
    splits_first: List[Dict[int, List[XY]]] = [defaultdict(list) for _ in first.rings]
    splits_second: List[Dict[int, List[XY]]] = [defaultdict(list) for _ in second.rings]

    for a, ring_a in enumerate(first.rings):
        for b, ring_b in enumerate(second.rings):
            if not envelopes_intersect(ring_a, ring_b):
                continue
            contact = ring_contacts(ring_a, ring_b)
            if contact.is_proper:
                _, _, relation = contact.proper
                failure = (
                    FailureKind.POLYGONS_OVERLAP
                    if relation.kind is RelationKind.CROSSING
                    else FailureKind.SHARED_EDGE
                )
                return ValidationResult.fail(failure, PositionRef(ring=a, other_ring=b))
            splits_first[a] = merge_splits(splits_first[a], contact.splits_first)
            splits_second[b] = merge_splits(splits_second[b], contact.splits_second)

    result = _check_samples_outside(first, splits_first, second)
    if not result.valid:
        return result
    return _check_samples_outside(second, splits_second, first, reverse=True)


def _check_samples_outside(
    polygon: PreparedPolygon,
    splits: List[Dict[int, List[XY]]],
    other: PreparedPolygon,
    reverse: bool = False
) -> ValidationResult:
    """No boundary sample of ``polygon`` may lie in the interior of ``other``."""
    for index, ring in enumerate(polygon.rings):
        if not envelopes_intersect(ring, other.exterior):
            continue
        for point in boundary_samples(ring, splits[index]):
            if locate_in_area(point, other.exterior, other.holes) is Location.INTERIOR:
                where = PositionRef(other_ring=index) if reverse else PositionRef(ring=index)
                return ValidationResult.fail(FailureKind.POLYGONS_OVERLAP, where)
    return VALID


__all__ = [
    'validate_multipolygon',
    'check_polygon_pair',
]
