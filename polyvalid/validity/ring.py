"""Ring validation.

A ring is checked in a fixed order and the first failing step is reported:
finite coordinates, distinct point count, closure, duplicate points, spikes,
collinearity and finally self-intersection. The prepared form of a ring
(collapsed, unwrapped vertices plus their edges) is shared with the polygon
and multi-polygon validators.
"""

from dataclasses import dataclass
from typing import Optional, Tuple

import numpy as np

from ..core.config import ValidationConfig, resolve_config
from ..core.result import VALID, PositionRef, ValidationResult
from ..core.spatial_utils import find_segment_pairs, ring_edges
from ..core.types import FailureKind, RingOrientation, Side
from ..core.validation_utils import (
    collapse_repeated_points,
    find_repeated_point,
    first_non_finite,
    is_ring_closed,
)
from ..geometry import LinearRing
from ..predicates import orientation, signed_area
from ..relate import relate
from ..strategies import ContainmentStrategy
from ..utils.logging import get_logger

logger = get_logger(__name__)


@dataclass(frozen=True)
class PreparedRing:
    """Ring vertices ready for the planar predicates.

    Attributes:
        coords: Distinct consecutive vertices without a closing point, with
            longitudes unwrapped for periodic coordinate systems
        indices: Index of each vertex in the caller's point list
        edges: Edge array of shape (n, 2, 2), wraparound edge included
        strategy: Containment strategy of the ring's coordinate system
    """

    coords: np.ndarray
    indices: np.ndarray
    edges: np.ndarray
    strategy: ContainmentStrategy

    def __len__(self) -> int:
        return len(self.coords)

    @property
    def epsilon(self) -> float:
        return self.strategy.collinear_epsilon

    def vertex(self, position: int) -> int:
        """Caller index of a vertex of the prepared ring."""
        return int(self.indices[position])

    def edge_vertex(self, edge: int) -> int:
        """Caller index of the start vertex of an edge."""
        return self.vertex(edge)

    def envelope(self):
        """Planar envelope of the ring in its unwrapped frame."""
        return self.strategy.envelope(self.coords[:, :2])


def prepare_ring(
    ring: LinearRing,
    reference: Optional[float] = None
) -> PreparedRing:
    """Unwrap and collapse a ring.

    Args:
        ring: Ring to prepare
        reference: Longitude the unwrapped ring should start close to, used
            to put all rings of a polygon in one frame

    Returns:
        PreparedRing
    """
    strategy = ring.strategy
    coords = strategy.unwrap(ring.coords, reference)
    collapsed, indices = collapse_repeated_points(coords, cyclic=True)
    return PreparedRing(collapsed, indices, ring_edges(collapsed), strategy)


def validate_ring(
    ring: LinearRing,
    config: Optional[ValidationConfig] = None,
    reference: Optional[float] = None
) -> ValidationResult:
    """Validate a single ring.

    Args:
        ring: Ring to validate
        config: Validation policy, default config when None
        reference: Longitude used to unwrap periodic coordinates

    Returns:
        ValidationResult with the vertex index of the failure when known

    Examples:
        >>> from polyvalid.geometry import LinearRing
        >>> validate_ring(LinearRing([(0, 0), (1, 0), (1, 1), (0, 0)])).valid
        True
        >>> validate_ring(LinearRing([(0, 0), (1, 0), (1, 0)])).failure
        <FailureKind.TOO_FEW_POINTS: 'too_few_points'>
    """
    _, result = check_ring(ring, resolve_config(config), reference)
    return result


def check_ring(
    ring: LinearRing,
    config: ValidationConfig,
    reference: Optional[float] = None
) -> Tuple[Optional[PreparedRing], ValidationResult]:
    """Validate a ring and keep its prepared form for further checks.

    Returns:
        Tuple of (prepared ring or None when it could not be prepared,
        validation result)
    """
    bad = first_non_finite(ring.coords)
    if bad is not None:
        return None, ValidationResult.fail(
            FailureKind.INVALID_COORDINATE, PositionRef(vertex=bad)
        )

    prepared = prepare_ring(ring, reference)
    if len(prepared) < 3:
        return prepared, ValidationResult.fail(FailureKind.TOO_FEW_POINTS)

    if ring.closed and not is_ring_closed(ring.coords):
        return prepared, ValidationResult.fail(
            FailureKind.NOT_CLOSED, PositionRef(vertex=len(ring.coords) - 1)
        )

    result = check_prepared_ring(prepared, config)
    if result.valid:
        _log_winding(ring, prepared)
    return prepared, result


def check_prepared_ring(prepared: PreparedRing, config: ValidationConfig) -> ValidationResult:
    """Run the duplicate, spike, collinearity and self-intersection checks."""
    coords = prepared.coords
    n = len(coords)

    if not config.allow_duplicate_points:
        repeated = find_repeated_point(coords)
        if repeated is not None:
            return ValidationResult.fail(
                FailureKind.DISALLOWED_DUPLICATE,
                PositionRef(vertex=prepared.vertex(repeated[1])),
            )

    if not config.allow_spikes:
        spike = find_spike(coords, cyclic=True, epsilon=prepared.epsilon)
        if spike is not None:
            return ValidationResult.fail(
                FailureKind.SPIKE, PositionRef(vertex=prepared.vertex(spike))
            )

    if _all_collinear(coords, prepared.epsilon):
        return ValidationResult.fail(FailureKind.TOO_FEW_POINTS)

    edges = prepared.edges
    for i, j in find_segment_pairs(edges):
        if j == i + 1 or (i == 0 and j == n - 1):
            continue
        if not relate(edges[i], edges[j], prepared.epsilon).is_disjoint:
            return ValidationResult.fail(
                FailureKind.SELF_INTERSECTION,
                PositionRef(vertex=prepared.edge_vertex(j)),
            )

    return VALID


def find_spike(
    coords: np.ndarray,
    cyclic: bool,
    epsilon: float = 0.0
) -> Optional[int]:
    """Position of the first vertex where the boundary reverses on itself.

    A spike is a collinear turn whose outgoing direction points back along
    the incoming edge. ``coords`` must not contain immediate repeats.

    Args:
        coords: Vertex array
        cyclic: Treat the sequence as a ring, so the first and last vertex
            are checked against their wraparound neighbours
        epsilon: Relative collinearity tolerance

    Returns:
        Position in ``coords`` of the spike vertex, or None
    """
    n = len(coords)
    positions = range(n) if cyclic else range(1, n - 1)
    for i in positions:
        if is_spike(coords[i - 1], coords[i], coords[(i + 1) % n], epsilon):
            return i
    return None


def is_spike(prev, cur, nxt, epsilon: float = 0.0) -> bool:
    """True when the turn at ``cur`` sends the boundary back the way it came."""
    if orientation(prev, cur, nxt, epsilon) is not Side.COLLINEAR:
        return False
    dot = (
        (prev[0] - cur[0]) * (nxt[0] - cur[0])
        + (prev[1] - cur[1]) * (nxt[1] - cur[1])
    )
    return dot > 0


def _all_collinear(coords: np.ndarray, epsilon: float) -> bool:
    # Lexicographic extremes, independent of vertex order and start.
    order = np.lexsort((coords[:, 1], coords[:, 0]))
    a, b = coords[order[0]], coords[order[-1]]
    return all(
        orientation(a, b, c, epsilon) is Side.COLLINEAR for c in coords
    )


def _log_winding(ring: LinearRing, prepared: PreparedRing) -> None:
    area = signed_area(prepared.coords)
    if area == 0:
        return
    actual = RingOrientation.COUNTERCLOCKWISE if area > 0 else RingOrientation.CLOCKWISE
    if actual is not ring.orientation:
        logger.debug(
            "ring_winding_mismatch",
            declared=ring.orientation.value,
            actual=actual.value,
            area=area,
        )


__all__ = [
    'PreparedRing',
    'prepare_ring',
    'validate_ring',
    'check_ring',
    'check_prepared_ring',
    'find_spike',
    'is_spike',
]
