"""Unit tests for the ring crossing finder.

Tests cover:
- Proper crossings between two rings
- Vertex crossings reported exactly once
- Collinear overlaps (shared edge stretches)
- Polygon-level aggregation with bounding-box filtering
"""

import pytest

from polyop.core.crossings import find_polygon_crossings, find_ring_crossings, merge_crossings
from polyop.domain import BoundaryLocation, Crossing, Point, Polygon, Ring


def square(x: float, y: float, size: float) -> Ring:
    """Counter-clockwise axis-aligned square."""
    return Ring.from_coords([(x, y), (x + size, y), (x + size, y + size), (x, y + size)])


class TestFindRingCrossings:
    """Tests for crossings between two rings."""

    def test_overlapping_squares(self):
        """Two offset squares cross at two points."""
        crossings = find_ring_crossings(square(0, 0, 4), square(2, 2, 4))

        assert [c.point for c in crossings] == [Point(4, 2), Point(2, 4)]
        assert crossings[0].location_a == BoundaryLocation(0, 1, 0.5)
        assert crossings[0].location_b == BoundaryLocation(0, 0, 0.5)
        assert crossings[1].location_a == BoundaryLocation(0, 2, 0.5)
        assert crossings[1].location_b == BoundaryLocation(0, 3, 0.5)

    def test_ring_indices_recorded(self):
        crossings = find_ring_crossings(square(0, 0, 4), square(2, 2, 4), 3, 7)
        assert all(c.location_a.ring_index == 3 for c in crossings)
        assert all(c.location_b.ring_index == 7 for c in crossings)

    def test_disjoint_rings(self):
        assert find_ring_crossings(square(0, 0, 1), square(5, 5, 1)) == []

    def test_vertex_touching_edge_reported_once(self):
        """A vertex of B on an edge of A is found by one segment pair only."""
        triangle = Ring.from_coords([(2, 0), (1, -2), (3, -2)])
        crossings = find_ring_crossings(square(0, 0, 4), triangle)

        assert len(crossings) == 1
        assert crossings[0].point == Point(2, 0)
        assert crossings[0].location_a == BoundaryLocation(0, 0, 0.5)
        assert crossings[0].location_b == BoundaryLocation(0, 0, 0.0)

    def test_corner_to_corner(self):
        """Squares touching at one corner produce one vertex crossing."""
        crossings = find_ring_crossings(square(0, 0, 4), square(4, 4, 2))

        assert len(crossings) == 1
        assert crossings[0].point == Point(4, 4)
        assert crossings[0].location_a == BoundaryLocation(0, 2, 0.0)
        assert crossings[0].location_b == BoundaryLocation(0, 0, 0.0)

    def test_collinear_overlap(self):
        """A shared stretch of edge contributes both of its ends."""
        b = Ring.from_coords([(2, 0), (6, 0), (6, 2), (2, 2)])
        crossings = find_ring_crossings(square(0, 0, 4), b)

        assert [c.point for c in crossings] == [Point(2, 0), Point(4, 0), Point(4, 2)]
        assert [c.location_a for c in crossings] == [
            BoundaryLocation(0, 0, 0.5),
            BoundaryLocation(0, 1, 0.0),
            BoundaryLocation(0, 1, 0.5),
        ]
        assert crossings[0].location_b == BoundaryLocation(0, 0, 0.0)
        assert crossings[1].location_b == BoundaryLocation(0, 0, 0.5)

    def test_identical_rings(self):
        """Every vertex of identical rings is a crossing, once each."""
        crossings = find_ring_crossings(square(0, 0, 4), square(0, 0, 4))

        assert len(crossings) == 4
        assert all(c.location_a.is_vertex and c.location_b.is_vertex for c in crossings)

    def test_reversed_identical_rings(self):
        a = square(0, 0, 4)
        crossings = find_ring_crossings(a, a.reversed())
        assert len(crossings) == 4


class TestMergeCrossings:
    """Tests for duplicate removal."""

    def test_prefers_vertex_location(self):
        mid = Crossing(Point(1, 1), BoundaryLocation(0, 0, 0.5), BoundaryLocation(0, 0, 0.5))
        vertex = Crossing(
            Point(1, 1 + 1e-12), BoundaryLocation(0, 1, 0.0), BoundaryLocation(0, 0, 0.5)
        )
        merged = merge_crossings([mid, vertex], tolerance=1e-9)
        assert merged == [vertex]

    def test_keeps_distinct_points(self):
        first = Crossing(Point(1, 1), BoundaryLocation(0, 0, 0.5), BoundaryLocation(0, 0, 0.5))
        second = Crossing(Point(2, 1), BoundaryLocation(0, 0, 0.75), BoundaryLocation(0, 1, 0.5))
        assert merge_crossings([second, first]) == [first, second]


class TestFindPolygonCrossings:
    """Tests for polygon-level aggregation."""

    def test_crossings_across_ring_pairs(self):
        """Each ring pair contributes its own crossings."""
        a = Polygon((square(0, 0, 4), square(10, 0, 4)))
        b = Polygon((Ring.from_coords([(2, 1), (12, 1), (12, 3), (2, 3)]),))
        crossings = find_polygon_crossings(a.rings, b.rings)

        assert len(crossings) == 4
        assert [c.location_a.ring_index for c in crossings] == [0, 0, 1, 1]
        assert {c.point for c in crossings} == {
            Point(4, 1),
            Point(4, 3),
            Point(10, 1),
            Point(10, 3),
        }

    def test_no_crossings_when_nested(self):
        a = Polygon((square(0, 0, 10),))
        b = Polygon((square(2, 2, 2),))
        assert find_polygon_crossings(a.rings, b.rings) == []

    @pytest.mark.parametrize("offset", [0.5, 1.0, 1.5])
    def test_crossings_sorted_by_location_on_a(self, offset):
        crossings = find_polygon_crossings((square(0, 0, 4),), (square(offset, offset, 4),))
        locations = [c.location_a for c in crossings]
        assert locations == sorted(locations)
