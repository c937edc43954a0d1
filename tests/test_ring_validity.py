import math

import pytest
from structlog.testing import capture_logs

from polyvalid import FailureKind, LinearRing, ValidationConfig, validate
from polyvalid.validity import validate_ring


NO_SPIKES = ValidationConfig(allow_spikes=False)
NO_DUPLICATES = ValidationConfig(allow_duplicate_points=False)

TOO_FEW_RINGS = [
    [],
    [(0, 0)],
    [(0, 0), (1, 0)],
    [(0, 0), (0, 0), (0, 0)],
    [(0, 0), (1, 0), (1, 0)],
    [(0, 0), (1, 0), (0, 0)],
    [(0, 0), (0, 0), (2, 0), (2, 0), (1, 0), (1, 0)],
]

VALID_RINGS = [
    [(0, 0), (1, 0), (1, 1)],
    [(1, 0), (1, 1), (0, 0)],
    [(0, 0), (1, 0), (1, 1), (0, 1)],
    [(1, 0), (1, 1), (0, 1), (0, 0)],
]

REPEATED_POINT_RINGS = [
    [(0, 0), (1, 0), (1, 1), (0, 0), (0, 0)],
    [(0, 0), (1, 0), (1, 0), (1, 1)],
    [(0, 0), (1, 0), (1, 0), (1, 1), (0, 0)],
]

SELF_INTERSECTING_RINGS = [
    [(0, 0), (2, 0), (2, 2), (0, 2), (1, 2)],
    [(0, 0), (2, 0), (1, 0), (2, 2)],
    [(0, 0), (1, 0), (2, 0), (1, 0), (4, 0), (4, 4)],
    [(0, 0), (2, 0), (2, 2), (1, 0)],
    [(0, 0), (5, 0), (5, 5), (4, 4), (5, 5), (0, 5)],
    [(0, 0), (5, 0), (5, 5), (4, 4), (3, 3), (5, 5), (0, 5)],
    [(0, 0), (5, 0), (5, 5), (3, -1), (0, 5)],
    [(0, 0), (5, 0), (5, 5), (5, 5), (3, -1), (0, 5), (0, 5)],
    [(0, 0), (5, 0), (5, 5), (3, 5), (3, 0), (2, 0), (2, 5), (0, 5)],
    [(0, 0), (5, 0), (5, 5), (3, 5), (3, 0), (2, 5), (0, 5)],
    [(0, 0), (5, 0), (5, 1), (1, 1), (1, 2), (2, 2), (3, 1), (4, 2), (5, 2), (5, 5), (0, 5)],
    [(0, 0), (5, 0), (5, 5), (3, 5), (3, 5), (3, 0), (3, 0),
     (2, 0), (2, 0), (2, 5), (2, 5), (0, 5)],
    [(0, 0), (5, 0), (5, 5), (0, 5), (4, 4), (2, 2), (0, 5)],
    [(0, 0), (5, 0), (5, 5), (1, 4), (4, 4), (4, 1), (0, 5)],
    [(0, 0), (5, 0), (5, 5), (4, 4), (1, 4), (1, 1), (4, 1), (4, 4), (0, 5)],
    [(0, 0), (5, 0), (5, 5), (4, 4), (4, 1), (1, 1), (1, 4), (4, 4), (0, 5)],
]

RING_CORPUS = TOO_FEW_RINGS + VALID_RINGS + REPEATED_POINT_RINGS + SELF_INTERSECTING_RINGS


def open_ring(points, **kwargs):
    return LinearRing(points, closed=False, **kwargs)


class TestRingCorpus:
    """Open rings checked with the default config."""

    @pytest.mark.parametrize("points", TOO_FEW_RINGS)
    def test_too_few_points(self, points):
        result = validate(open_ring(points))
        assert not result.valid
        assert result.failure is FailureKind.TOO_FEW_POINTS

    @pytest.mark.parametrize("points", VALID_RINGS)
    def test_valid(self, points):
        assert validate(open_ring(points)).valid

    @pytest.mark.parametrize("points", REPEATED_POINT_RINGS)
    def test_immediate_repeats_collapsed(self, points):
        """Repeated consecutive points never invalidate a ring."""
        assert validate(open_ring(points)).valid
        assert validate(open_ring(points), NO_DUPLICATES).valid

    @pytest.mark.parametrize("points", SELF_INTERSECTING_RINGS)
    def test_self_intersecting(self, points):
        """Spiky and self-touching rings fail even when spikes are allowed."""
        result = validate(open_ring(points))
        assert not result.valid
        assert result.failure in (FailureKind.SELF_INTERSECTION, FailureKind.TOO_FEW_POINTS)

    def test_collinear_spike_ring(self):
        result = validate(open_ring([(0, 0), (2, 0), (1, 0)]))
        assert result.failure is FailureKind.TOO_FEW_POINTS


class TestRingFailures:
    """Tests for individual failure kinds and their locations."""

    def test_spike_reported_when_disallowed(self):
        result = validate(open_ring([(0, 0), (2, 0), (2, 2), (0, 2), (1, 2)]), NO_SPIKES)
        assert result.failure is FailureKind.SPIKE
        assert result.location.vertex == 3

    def test_self_touch_reported_when_spikes_allowed(self):
        result = validate(open_ring([(0, 0), (2, 0), (2, 2), (0, 2), (1, 2)]))
        assert result.failure is FailureKind.SELF_INTERSECTION

    def test_crossing_location(self):
        """The later edge of the crossing pair is reported by its start vertex."""
        result = validate(open_ring([(3, 3), (3, 7), (4, 6), (2, 6)]))
        assert result.failure is FailureKind.SELF_INTERSECTION
        assert result.location.vertex == 2

    def test_disallowed_duplicate(self):
        points = [(0, 0), (5, 0), (5, 5), (0, 5), (4, 4), (2, 2), (0, 5)]
        result = validate(open_ring(points), NO_DUPLICATES)
        assert result.failure is FailureKind.DISALLOWED_DUPLICATE
        assert result.location.vertex == 6

    def test_duplicate_locations_count_original_points(self):
        """Vertex indexes refer to the caller's list, repeats included."""
        points = [(0, 0), (0, 0), (5, 0), (5, 5), (0, 5), (4, 4), (2, 2), (0, 5)]
        result = validate(open_ring(points), NO_DUPLICATES)
        assert result.location.vertex == 7

    def test_invalid_coordinate(self):
        result = validate(LinearRing([(0, 0), (1, 0), (math.nan, 1), (0, 0)]))
        assert result.failure is FailureKind.INVALID_COORDINATE
        assert result.location.vertex == 2

    def test_infinite_coordinate(self):
        result = validate(LinearRing([(0, 0), (1, 0), (1, math.inf), (0, 0)]))
        assert result.failure is FailureKind.INVALID_COORDINATE


class TestClosedRings:
    """Rings declared closed must repeat their first point."""

    @pytest.mark.parametrize("points", [
        [],
        [(0, 0)],
        [(0, 0), (0, 0)],
        [(0, 0), (1, 0)],
        [(0, 0), (1, 0), (1, 0)],
    ])
    def test_too_few_points(self, points):
        assert validate(LinearRing(points)).failure is FailureKind.TOO_FEW_POINTS

    @pytest.mark.parametrize("points", [
        [(0, 0), (1, 0), (2, 0)],
        [(0, 0), (1, 0), (1, 0), (2, 0)],
        [(0, 0), (1, 0), (2, 0), (2, 0)],
        [(0, 0), (1, 0), (1, 1), (1, 2)],
        [(0, 0), (1, 0), (1, 0), (1, 1), (1, 1), (1, 2)],
    ])
    def test_not_closed(self, points):
        result = validate(LinearRing(points))
        assert result.failure is FailureKind.NOT_CLOSED
        assert result.location.vertex == len(points) - 1

    def test_closed_triangle(self):
        assert validate(LinearRing([(0, 0), (1, 0), (1, 1), (0, 0)])).valid

    def test_closure_ignored_when_open(self):
        assert validate(LinearRing([(0, 0), (1, 0), (1, 1)], closed=False)).valid


class TestRingExtras:
    """Tests for orientation, z values and periodic coordinates."""

    def test_orientation_is_informational(self):
        ring = LinearRing([(0, 0), (0, 1), (1, 1), (0, 0)], orientation='counterclockwise')
        assert validate(ring).valid
        assert validate(ring.reversed()).valid

    def test_winding_mismatch_logged(self):
        ring = LinearRing([(0, 0), (0, 1), (1, 1), (0, 0)], orientation='counterclockwise')
        with capture_logs() as logs:
            validate_ring(ring)
        events = [entry for entry in logs if entry['event'] == 'ring_winding_mismatch']
        assert len(events) == 1
        assert events[0]['declared'] == 'counterclockwise'
        assert events[0]['actual'] == 'clockwise'

    def test_z_only_repeats_collapsed(self):
        ring = LinearRing([(0, 0, 0), (0, 0, 1), (1, 0, 0), (1, 1, 0)], closed=False)
        assert validate(ring).valid

    def test_antimeridian_ring(self):
        points = [(170, 0), (-170, 0), (-170, 10), (170, 10), (170, 0)]
        assert validate(LinearRing(points, coordinate_system='geographic')).valid

    def test_antimeridian_bowtie(self):
        points = [(170, 0), (-170, 10), (-170, 0), (170, 10), (170, 0)]
        result = validate(LinearRing(points, coordinate_system='geographic'))
        assert result.failure is FailureKind.SELF_INTERSECTION


class TestRingReversal:
    """A ring and its reversal always get the same verdict."""

    @pytest.mark.parametrize("coordinate_system", ["cartesian", "geographic"])
    @pytest.mark.parametrize("points", RING_CORPUS)
    def test_corpus(self, points, coordinate_system):
        forward = validate(open_ring(points, coordinate_system=coordinate_system))
        backward = validate(open_ring(points[::-1], coordinate_system=coordinate_system))
        assert forward.valid == backward.valid
        assert forward.failure is backward.failure

    @pytest.mark.parametrize("coordinate_system", ["cartesian", "geographic"])
    @pytest.mark.parametrize("name", ["self_touching_point", "spike"])
    def test_buffer_rings(self, buffer_rings, name, coordinate_system):
        """Near-collinear edges are classified the same in both directions."""
        points = buffer_rings[name]
        forward = validate(open_ring(points, coordinate_system=coordinate_system))
        backward = validate(open_ring(points[::-1], coordinate_system=coordinate_system))
        assert forward.valid == backward.valid
        assert forward.failure is backward.failure

    @pytest.mark.parametrize("config", [NO_SPIKES, NO_DUPLICATES])
    def test_strict_policies(self, config):
        for points in SELF_INTERSECTING_RINGS:
            forward = validate(open_ring(points), config)
            backward = validate(open_ring(points[::-1]), config)
            assert forward.failure is backward.failure
