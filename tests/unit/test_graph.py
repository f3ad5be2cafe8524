"""Unit tests for the crossing graph builder.

Tests cover:
- Node ordering along each ring
- Links between the operands' crossing nodes
- Vertex crossings merged into vertex nodes
- Fragment labels and crossing kinds
- Ambiguous coincident crossings
"""

import pytest

from polyop.core.crossings import find_polygon_crossings
from polyop.core.graph import OPERAND_A, OPERAND_B, CrossingGraph, FragmentLabel, Operand
from polyop.domain import CrossingKind, Point, Polygon, Ring
from polyop.exceptions import AmbiguousTopologyError


def square(x: float, y: float, size: float) -> Ring:
    """Counter-clockwise axis-aligned square."""
    return Ring.from_coords([(x, y), (x + size, y), (x + size, y + size), (x, y + size)])


def build(a: Polygon, b: Polygon) -> CrossingGraph:
    crossings = find_polygon_crossings(a.rings, b.rings)
    graph = CrossingGraph.build(a.rings, b.rings, crossings)
    graph.label_fragments(Operand.from_polygon(a), Operand.from_polygon(b))
    return graph


def node_at(graph: CrossingGraph, operand: int, point: Point) -> int:
    for index, node in enumerate(graph.nodes):
        if node.operand == operand and node.point == point:
            return index
    raise AssertionError(f"no node at {point}")


@pytest.fixture
def scenario() -> CrossingGraph:
    """Squares (0,0)-(4,4) and (2,2)-(6,6)."""
    return build(Polygon((square(0, 0, 4),)), Polygon((square(2, 2, 4),)))


class TestGraphStructure:
    """Tests for node ordering and links."""

    def test_node_count(self, scenario):
        assert len(scenario) == 12

    def test_ring_order(self, scenario):
        """Crossings sit between the vertices of their segment."""
        points = [scenario.nodes[i].point for i in scenario.ring_nodes(OPERAND_A, 0)]
        assert points == [
            Point(0, 0),
            Point(4, 0),
            Point(4, 2),
            Point(4, 4),
            Point(2, 4),
            Point(0, 4),
        ]

    def test_links_are_symmetric(self, scenario):
        for index, node in enumerate(scenario.nodes):
            if node.link is not None:
                partner = scenario.nodes[node.link]
                assert partner.link == index
                assert partner.point == node.point
                assert partner.operand != node.operand

    def test_prev_and_next_are_inverse(self, scenario):
        for index, node in enumerate(scenario.nodes):
            assert scenario.nodes[node.next].prev == index

    def test_crossing_node_lookup(self, scenario):
        index = scenario.crossing_node(OPERAND_B, 0)
        assert scenario.nodes[index].point == Point(4, 2)

    def test_vertex_crossing_merges_into_vertex(self):
        """A crossing at a vertex does not add a node."""
        graph = build(Polygon((square(0, 0, 4),)), Polygon((square(4, 4, 2),)))

        assert len(graph.ring_nodes(OPERAND_A, 0)) == 4
        assert len(graph.ring_nodes(OPERAND_B, 0)) == 4
        corner = node_at(graph, OPERAND_A, Point(4, 4))
        assert graph.nodes[corner].is_crossing

    def test_rings_without_crossings(self):
        a = Polygon((square(0, 0, 4), square(20, 20, 1)))
        graph = build(a, Polygon((square(2, 2, 4),)))
        assert graph.ring_has_crossings(OPERAND_A, 0)
        assert not graph.ring_has_crossings(OPERAND_A, 1)


class TestFragmentLabels:
    """Tests for fragment labelling and crossing kinds."""

    def test_inside_and_outside(self, scenario):
        labels = {
            scenario.nodes[i].point: scenario.nodes[i].label
            for i in scenario.ring_nodes(OPERAND_A, 0)
        }
        assert labels[Point(0, 0)] == FragmentLabel.OUTSIDE
        assert labels[Point(4, 2)] == FragmentLabel.INSIDE
        assert labels[Point(4, 4)] == FragmentLabel.INSIDE
        assert labels[Point(2, 4)] == FragmentLabel.OUTSIDE

    def test_crossing_kinds(self, scenario):
        a_entry = scenario.nodes[node_at(scenario, OPERAND_A, Point(4, 2))]
        a_exit = scenario.nodes[node_at(scenario, OPERAND_A, Point(2, 4))]
        b_exit = scenario.nodes[node_at(scenario, OPERAND_B, Point(4, 2))]
        b_entry = scenario.nodes[node_at(scenario, OPERAND_B, Point(2, 4))]

        assert a_entry.kind == CrossingKind.ENTRY
        assert a_exit.kind == CrossingKind.EXIT
        assert b_exit.kind == CrossingKind.EXIT
        assert b_entry.kind == CrossingKind.ENTRY

    def test_shared_same_direction(self):
        graph = build(Polygon((square(0, 0, 4),)), Polygon((square(0, 0, 4),)))
        assert all(node.label == FragmentLabel.SHARED_SAME for node in graph.nodes)
        assert all(node.kind == CrossingKind.TOUCH for node in graph.nodes)

    def test_shared_opposite_direction(self):
        """Squares sharing an edge walk it in opposite directions."""
        graph = build(Polygon((square(0, 0, 2),)), Polygon((square(2, 0, 2),)))

        shared = graph.nodes[node_at(graph, OPERAND_A, Point(2, 0))]
        assert shared.label == FragmentLabel.SHARED_OPPOSITE
        assert graph.nodes[node_at(graph, OPERAND_A, Point(2, 2))].label == FragmentLabel.OUTSIDE

    def test_complement_operand(self):
        """Against a complement, outside becomes inside."""
        a = Polygon((square(0, 0, 4),))
        b = Polygon((square(2, 2, 4),))
        b_complement = Operand.from_polygon(b, complement=True)
        crossings = find_polygon_crossings(a.rings, b_complement.rings)
        graph = CrossingGraph.build(a.rings, b_complement.rings, crossings)
        graph.label_fragments(Operand.from_polygon(a), b_complement)

        origin = graph.nodes[node_at(graph, OPERAND_A, Point(0, 0))]
        assert origin.label == FragmentLabel.INSIDE

    def test_classified_crossings(self, scenario):
        a = Polygon((square(0, 0, 4),))
        b = Polygon((square(2, 2, 4),))
        crossings = find_polygon_crossings(a.rings, b.rings)
        classified = scenario.classified_crossings(crossings)
        assert [(c.kind_a, c.kind_b) for c in classified] == [
            (CrossingKind.ENTRY, CrossingKind.EXIT),
            (CrossingKind.EXIT, CrossingKind.ENTRY),
        ]


class TestOperand:
    """Tests for effective operand membership."""

    def test_plain_membership(self):
        operand = Operand.from_polygon(Polygon((square(0, 0, 4),)))
        assert operand.contains(Point(1, 1))
        assert not operand.contains(Point(5, 5))

    def test_complement_membership(self):
        operand = Operand.from_polygon(Polygon((square(0, 0, 4),)), complement=True)
        assert not operand.contains(Point(1, 1))
        assert operand.contains(Point(5, 5))
        assert operand.rings[0].is_hole


class TestAmbiguousCrossings:
    """Tests for coincident crossings from different rings."""

    def test_two_rings_touching_one_vertex(self):
        """Two rings of B touching the same vertex of A cannot be ordered."""
        a = Polygon((square(0, 0, 4),))
        b = Polygon(
            (
                Ring.from_coords([(4, 4), (6, 4), (6, 6)]),
                Ring.from_coords([(4, 4), (5, 6), (3, 6)]),
            )
        )
        crossings = find_polygon_crossings(a.rings, b.rings)
        with pytest.raises(AmbiguousTopologyError):
            CrossingGraph.build(a.rings, b.rings, crossings)
