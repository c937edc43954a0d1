import pytest

from polyvalid import (
    FailureKind,
    Polygon,
    ValidationConfig,
    explain_validity,
    is_valid,
    validate,
)


SQUARE = [(0, 0), (10, 0), (10, 10), (0, 10)]


def polygon(shell, *holes, **kwargs):
    """Polygon from open rings, the closing point left out."""
    return Polygon.from_coords(shell, list(holes), closed=False, **kwargs)


class TestPolygonRings:
    """Ring level failures inside polygons."""

    @pytest.mark.parametrize("shell,holes", [
        ([], []),
        ([(0, 0)], []),
        ([(0, 0), (1, 0)], []),
        (SQUARE, [[]]),
        (SQUARE, [[(1, 1)]]),
        (SQUARE, [[(1, 1), (2, 2)]]),
        ([(0, 0), (0, 0), (0, 0)], []),
        ([(0, 0), (1, 0), (0, 0)], []),
        (SQUARE, [[(1, 1), (1, 1), (1, 1)]]),
        (SQUARE, [[(1, 1), (2, 1), (1, 1)]]),
    ])
    def test_too_few_points(self, shell, holes):
        result = validate(polygon(shell, *holes))
        assert result.failure is FailureKind.TOO_FEW_POINTS

    def test_ring_index_of_hole(self):
        result = validate(polygon(SQUARE, [(5, 5), (6, 5), (6, 6)], [(1, 1), (2, 2)]))
        assert result.location.ring == 2

    @pytest.mark.parametrize("shell,holes", [
        ([(0, 0), (5, 0), (5, 5), (3, -1), (0, 5)], []),
        ([(100, 1300), (140, 1300), (140, 170), (100, 1700)], []),
        ([(100, 1300), (100, 1700), (140, 170), (140, 1300)], []),
        (SQUARE, [[(3, 3), (3, 7), (4, 6), (2, 6)]]),
        ([(0, 0), (5, 0), (5, 5), (0, 5)], [[(1, 1), (2, 1), (1, -1)]]),
        ([(0, 0), (5, 0), (5, 5), (3, 5), (3, 0), (2, 0), (2, 5), (0, 5)], []),
        ([(0, 0), (5, 0), (5, 5), (3, 5), (3, 0), (2, 5), (0, 5)], []),
        ([(0, 0), (5, 0), (5, 1), (1, 1), (1, 2), (2, 2), (3, 1), (4, 2), (5, 2), (5, 5), (0, 5)], []),
        ([(0, 0), (5, 0), (5, 5), (0, 5), (4, 4), (2, 2), (0, 5)], []),
        ([(0, 0), (5, 0), (5, 5), (1, 4), (4, 4), (4, 1), (0, 5)], []),
        ([(0, 0), (5, 0), (5, 5), (4, 4), (1, 4), (1, 1), (4, 1), (4, 4), (0, 5)], []),
        ([(0, 0), (5, 0), (5, 5), (4, 4), (4, 1), (1, 1), (1, 4), (4, 4), (0, 5)], []),
        ([(-10, -10), (10, -10), (10, 10), (-10, 10)],
         [[(0, 0), (5, 0), (5, 5), (3, 5), (3, 0), (2, 0), (2, 5), (0, 5)]]),
        ([(-10, -10), (10, -10), (10, 10), (-10, 10)],
         [[(0, 0), (5, 0), (5, 5), (3, 5), (3, 0), (2, 5), (0, 5)]]),
        ([(-10, -10), (10, -10), (10, 10), (-10, 10)],
         [[(0, 0), (5, 0), (5, 1), (1, 1), (1, 2), (2, 2), (3, 1), (4, 2), (5, 2), (5, 5), (0, 5)]]),
    ])
    def test_invalid(self, shell, holes):
        assert not is_valid(polygon(shell, *holes))

    def test_hole_self_intersection_message(self):
        poly = polygon(SQUARE, [(3, 3), (3, 7), (4, 6), (2, 6)])
        assert explain_validity(poly) == "Self-intersection at hole 0, vertex 2"

    def test_repeated_points_allowed(self):
        shell = [(0, 0), (0, 0), (10, 0), (10, 10), (0, 10), (0, 0)]
        hole = [(1, 1), (2, 2), (2, 2), (2, 1)]
        assert is_valid(polygon(shell, hole))


class TestHolePlacement:
    """Holes must lie inside the exterior."""

    @pytest.mark.parametrize("shell,holes", [
        (SQUARE, [[(1, 1), (1, 10), (2, 10), (2, 1)]]),
        ([(0, 0), (0, 0), (10, 0), (10, 10), (0, 10), (0, 10)],
         [[(1, 1), (1, 10), (1, 10), (2, 10), (2, 10), (2, 1)]]),
        (SQUARE, [[(5, 10), (4, 11), (6, 11)]]),
        (SQUARE, [[(20, 20), (20, 21), (21, 21), (21, 20)]]),
        (SQUARE, [[(20, 0), (25, 10), (21, 0)], [(30, 0), (25, 10), (31, 0)]]),
        ([(58, 31), (56.57, 30), (62, 33)],
         [[(35, 9), (28, 14), (31, 16)], [(23, 11), (29, 5), (26, 4)]]),
        ([(58, 31), (62, 33), (56.57, 30)],
         [[(35, 9), (31, 16), (28, 14)], [(23, 11), (26, 4), (29, 5)]]),
        ([(0, 0), (1, 0), (1, 1), (0, 1)],
         [[(-10, -10), (-10, 10), (10, 10), (10, -10)]]),
    ])
    def test_hole_outside(self, shell, holes):
        result = validate(polygon(shell, *holes))
        assert result.failure is FailureKind.HOLE_CROSSES_EXTERIOR
        assert result.location.ring == 1

    def test_hole_crossing_exterior_location(self):
        """A proper contact reports both rings and the hole vertex."""
        result = validate(polygon(SQUARE, [(1, 1), (1, 10), (2, 10), (2, 1)]))
        assert result.location.ring == 1
        assert result.location.other_ring == 0
        assert result.location.vertex == 1

    @pytest.mark.parametrize("holes", [
        [[(1, 1), (1, 10), (2, 1)]],
        [[(0, 0), (1, 4), (4, 1)]],
        [[(0, 0), (1, 9), (2, 9)], [(0, 0), (9, 2), (9, 1)]],
        [[(1, 1), (1, 9), (2, 9)], [(1, 1), (9, 2), (9, 1)]],
        [[(0, 10), (2, 1), (1, 1)], [(0, 10), (4, 1), (3, 1)],
         [(10, 10), (9, 1), (8, 1)], [(10, 10), (7, 1), (6, 1)]],
    ])
    def test_holes_touching_at_points(self, holes):
        assert validate(polygon(SQUARE, *holes)).valid

    def test_duplicated_touch_points(self):
        shell = [(0, 0), (0, 0), (10, 0), (10, 10), (0, 10), (0, 0)]
        holes = [[(0, 0), (0, 0), (1, 9), (2, 9)], [(0, 0), (0, 0), (9, 2), (9, 1)]]
        assert is_valid(polygon(shell, *holes))

    def test_hole_covering_exterior(self):
        """Same ring as exterior and hole shares every edge."""
        assert not is_valid(polygon(SQUARE, SQUARE[::-1]))


class TestHolePairs:
    """Holes must not overlap or nest."""

    @pytest.mark.parametrize("holes", [
        [[(1, 1), (1, 9), (9, 9), (9, 1)], [(2, 2), (2, 8), (8, 8), (8, 2)]],
        [[(1, 1), (1, 9), (9, 9), (9, 1)], [(2, 2), (8, 2), (8, 8), (2, 8)]],
        [[(1, 1), (1, 9), (9, 9), (9, 1)], [(2, 2), (2, 8), (8, 8), (9, 6), (8, 2)]],
        [[(1, 1), (1, 9), (9, 9), (9, 1)], [(2, 2), (8, 2), (9, 6), (8, 8), (2, 8)]],
        [[(1, 1), (9, 1), (9, 9), (1, 9)], [(2, 2), (2, 8), (8, 8), (9, 6), (8, 2)]],
        [[(1, 1), (9, 1), (9, 9), (1, 9)], [(2, 2), (8, 2), (9, 6), (8, 8), (2, 8)]],
        [[(0, 0), (1, 9), (9, 1)], [(0, 0), (4, 5), (5, 4)]],
    ])
    def test_nested(self, holes):
        result = validate(polygon(SQUARE, *holes))
        assert result.failure is FailureKind.NESTED_HOLES
        assert result.location.ring == 1
        assert result.location.other_ring == 2

    def test_nested_reverse_order(self):
        """The inner hole listed first is also detected."""
        holes = [[(2, 2), (2, 8), (8, 8), (8, 2)], [(1, 1), (1, 9), (9, 9), (9, 1)]]
        assert validate(polygon(SQUARE, *holes)).failure is FailureKind.NESTED_HOLES

    def test_shared_edge(self):
        holes = [[(1, 1), (1, 5), (5, 5), (5, 1)], [(5, 4), (5, 8), (8, 8), (8, 4)]]
        result = validate(polygon(SQUARE, *holes))
        assert result.failure is FailureKind.HOLES_OVERLAP

    def test_crossing_holes(self):
        holes = [[(1, 1), (1, 5), (5, 5), (5, 1)], [(3, 3), (3, 8), (8, 8), (8, 3)]]
        assert validate(polygon(SQUARE, *holes)).failure is FailureKind.HOLES_OVERLAP

    def test_nested_touching_at_every_vertex(self):
        holes = [[(2, 2), (8, 2), (8, 8), (2, 8)], [(5, 2), (8, 5), (5, 8), (2, 5)]]
        assert validate(polygon(SQUARE, *holes)).failure is FailureKind.NESTED_HOLES

    def test_overlap_through_touch_points(self):
        """Holes whose boundaries only touch but whose interiors overlap."""
        holes = [[(2, 2), (8, 2), (8, 8), (2, 8)], [(4, 1), (6, 1), (6, 2), (6, 4), (4, 2)]]
        assert validate(polygon(SQUARE, *holes)).failure is FailureKind.HOLES_OVERLAP


class TestInteriorConnectivity:
    """The interior of a polygon must be connected."""

    @pytest.mark.parametrize("holes", [
        [[(5, 0), (0, 5), (5, 5)]],
        [[(1, 1), (1, 9), (9, 9), (9, 8), (2, 8), (2, 1)], [(2, 5), (5, 8), (5, 5)]],
        [[(0, 10), (2, 1), (1, 1)], [(0, 10), (4, 1), (3, 1)],
         [(10, 10), (9, 1), (8, 1)], [(10, 10), (7, 1), (6, 1)],
         [(4, 1), (4, 4), (6, 4), (6, 1)]],
    ])
    def test_disconnected(self, holes):
        result = validate(polygon(SQUARE, *holes))
        assert result.failure is FailureKind.DISCONNECTED_INTERIOR

    def test_many_holes_disconnected(self):
        holes = [[(x, 18), (x, 19), (x + 1, 19), (x + 1, 18)] for x in range(1, 18, 2)]
        holes += [[(1, 1), (1, 9), (9, 9), (9, 8), (2, 8), (2, 1)], [(2, 5), (5, 8), (5, 5)]]
        poly = polygon([(0, 0), (20, 0), (20, 20), (0, 20)], *holes)
        assert validate(poly).failure is FailureKind.DISCONNECTED_INTERIOR

    def test_cycle_through_three_holes(self):
        shell = [(0, 0), (0, 10), (10, 10), (10, 0), (0, 0)]
        holes = [
            [(0, 0), (9, 1), (9, 2), (0, 0)],
            [(0, 0), (2, 9), (1, 9), (0, 0)],
            [(2, 9), (9, 2), (9, 9), (2, 9)],
        ]
        poly = Polygon.from_coords(shell, holes, orientation='clockwise')
        assert validate(poly).failure is FailureKind.DISCONNECTED_INTERIOR

    def test_hole_vertex_touching_exterior_once(self):
        assert is_valid(polygon(SQUARE, [(5, 0), (6, 5), (4, 5)]))


class TestPolygonPolicies:
    """Config and coordinate system effects on polygons."""

    def test_strict_duplicates(self):
        shell = [(0, 0), (10, 0), (10, 10), (5, 5), (0, 10), (5, 5)]
        result = validate(polygon(shell), ValidationConfig(allow_duplicate_points=False))
        assert result.failure is FailureKind.DISALLOWED_DUPLICATE
        assert result.location.ring == 0

    def test_z_values(self):
        shell = [(x, y, 1.0) for x, y in SQUARE]
        hole = [(2, 2, 0.5), (2, 4, 0.5), (4, 4, 0.5), (4, 2, 0.5)]
        assert is_valid(polygon(shell, hole))

    def test_antimeridian_polygon_with_hole(self):
        shell = [(170, 0), (-170, 0), (-170, 10), (170, 10)]
        hole = [(179, 2), (179, 4), (-179, 4), (-179, 2)]
        geographic = polygon(shell, hole, coordinate_system='geographic')
        assert is_valid(geographic)
        assert not is_valid(polygon(shell, hole))

    def test_hole_expressed_across_antimeridian(self):
        """A hole whose longitudes are given in the other half turn."""
        shell = [(170, 0), (-170, 0), (-170, 10), (170, 10)]
        hole = [(-175, 2), (-175, 4), (-172, 4), (-172, 2)]
        assert is_valid(polygon(shell, hole, coordinate_system='spherical'))

    def test_radian_polygon(self):
        shell = [(3.0, 0.0), (-3.0, 0.0), (-3.0, 0.5), (3.0, 0.5)]
        poly = polygon(shell, coordinate_system='spherical', units='radian')
        assert is_valid(poly)
