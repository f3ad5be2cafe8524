"""Unit tests for containment resolution and ring nesting."""

import pytest

from polyop.core.resolver import (
    Relationship,
    RingNestingTree,
    classify_polygons,
    classify_rings,
    containment_result,
    normalize_orientation,
)
from polyop.domain import OperationKind, Polygon, Ring


def square(x: float, y: float, size: float) -> Ring:
    """Counter-clockwise axis-aligned square."""
    return Ring.from_coords([(x, y), (x + size, y), (x + size, y + size), (x, y + size)])


OUTER = Polygon((square(0, 0, 10),))
INNER = Polygon((square(4, 4, 2),))
FAR = Polygon((square(20, 20, 2),))


def frame() -> Polygon:
    """10x10 square with a clockwise 4x4 hole."""
    return Polygon((square(0, 0, 10), square(3, 3, 4).reversed()))


class TestClassifyRings:
    """Tests for ring-level classification."""

    def test_nested(self):
        assert classify_rings(square(4, 4, 2), square(0, 0, 10)) == Relationship.A_INSIDE_B
        assert classify_rings(square(0, 0, 10), square(4, 4, 2)) == Relationship.B_INSIDE_A

    def test_disjoint_boxes(self):
        assert classify_rings(square(0, 0, 1), square(5, 5, 1)) == Relationship.DISJOINT

    def test_disjoint_with_overlapping_boxes(self):
        triangle = Ring.from_coords([(0, 0), (4, 0), (0, 4)])
        assert classify_rings(triangle, square(3, 3, 1)) == Relationship.DISJOINT

    def test_orientation_ignored(self):
        inner = square(4, 4, 2).reversed()
        assert classify_rings(inner, square(0, 0, 10)) == Relationship.A_INSIDE_B


class TestClassifyPolygons:
    """Tests for polygon-level classification."""

    def test_disjoint(self):
        assert classify_polygons(OUTER, FAR) == Relationship.DISJOINT

    def test_inside(self):
        assert classify_polygons(INNER, OUTER) == Relationship.A_INSIDE_B
        assert classify_polygons(OUTER, INNER) == Relationship.B_INSIDE_A

    def test_island_in_hole_is_disjoint(self):
        """A square inside the frame's hole shares no area with the frame."""
        island = Polygon((square(4, 4, 2),))
        assert classify_polygons(frame(), island) == Relationship.DISJOINT

    def test_inside_solid_part_of_frame(self):
        island = Polygon((square(1, 1, 1),))
        assert classify_polygons(frame(), island) == Relationship.B_INSIDE_A

    def test_mixed_returns_none(self):
        """Some rings of A inside B and some outside cannot be classified as a whole."""
        a = Polygon((square(0, 0, 2), square(10, 0, 2)))
        b = Polygon((square(-1, -1, 4),))
        assert classify_polygons(a, b) is None

    def test_empty_polygon_is_disjoint(self):
        assert classify_polygons(Polygon(), OUTER) == Relationship.DISJOINT


class TestContainmentResult:
    """Tests for the result table of operations without crossings."""

    def test_disjoint(self):
        assert containment_result(OperationKind.INTERSECTION, Relationship.DISJOINT, OUTER, FAR) is None
        union = containment_result(OperationKind.UNION, Relationship.DISJOINT, OUTER, FAR)
        assert len(union) == 2
        assert containment_result(OperationKind.DIFFERENCE, Relationship.DISJOINT, OUTER, FAR) == OUTER

    def test_a_inside_b(self):
        relationship = Relationship.A_INSIDE_B
        assert containment_result(OperationKind.INTERSECTION, relationship, INNER, OUTER) == INNER
        assert containment_result(OperationKind.UNION, relationship, INNER, OUTER) == OUTER
        assert containment_result(OperationKind.DIFFERENCE, relationship, INNER, OUTER) is None

        xor = containment_result(OperationKind.XOR, relationship, INNER, OUTER)
        assert xor.area == 96.0
        assert len(xor.holes) == 1

    def test_b_inside_a(self):
        relationship = Relationship.B_INSIDE_A
        assert containment_result(OperationKind.INTERSECTION, relationship, OUTER, INNER) == INNER
        assert containment_result(OperationKind.UNION, relationship, OUTER, INNER) == OUTER

        result = containment_result(OperationKind.DIFFERENCE, relationship, OUTER, INNER)
        assert result.area == 96.0
        assert result.rings[1].is_hole

    @pytest.mark.parametrize("kind", list(OperationKind))
    def test_every_operation_has_an_entry(self, kind):
        for relationship in Relationship:
            containment_result(kind, relationship, OUTER, INNER)


class TestRingNestingTree:
    """Tests for the ring nesting tree."""

    @pytest.fixture
    def rings(self):
        """Outer square, hole, and island inside the hole."""
        return [square(0, 0, 10), square(2, 2, 6).reversed(), square(4, 4, 2)]

    def test_depths(self, rings):
        tree = RingNestingTree.build(rings)
        assert [tree.depth(i) for i in range(3)] == [0, 1, 2]

    def test_parent_is_smallest_container(self, rings):
        tree = RingNestingTree.build(rings)
        assert tree.nodes[2].parent == 1
        assert tree.nodes[0].children == [1]
        assert tree.roots() == [0]

    def test_siblings(self):
        tree = RingNestingTree.build([square(0, 0, 10), square(1, 1, 2), square(5, 5, 2)])
        assert tree.roots() == [0]
        assert sorted(tree.nodes[0].children) == [1, 2]


class TestNormalizeOrientation:
    """Tests for orientation repair."""

    def test_reorients_from_depth(self):
        polygon = Polygon((square(0, 0, 10), square(2, 2, 6), square(4, 4, 2)))
        normalized = normalize_orientation(polygon)

        assert [ring.is_hole for ring in normalized.rings] == [False, True, False]
        assert normalized.area == 68.0

    def test_correct_polygon_unchanged(self):
        assert normalize_orientation(frame()) == frame()

    def test_input_not_modified(self):
        polygon = Polygon((square(0, 0, 10), square(2, 2, 6)))
        normalize_orientation(polygon)
        assert not polygon.rings[1].is_hole
