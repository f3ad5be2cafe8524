"""Crossing graph builder.

Interleaves the crossings of two polygons with their ring vertices. Every
ring of both operands becomes a circular linked sequence of nodes; a node
at a crossing carries a link to the node of the other operand at the same
point. The nodes live in one arena list and refer to each other by index.

After building, each edge (node -> next node) gets a FragmentLabel that
says where the edge runs relative to the other operand. Crossing kinds
follow from the labels of the edges arriving at and leaving each crossing.
"""

from collections.abc import Sequence
from dataclasses import dataclass, replace
from enum import Enum, auto

from polyop.config.settings import DEFAULT_TOLERANCE
from polyop.core.geometry import midpoint
from polyop.domain import Crossing, CrossingKind, Point, Polygon, Ring
from polyop.exceptions import AmbiguousTopologyError

OPERAND_A = 0
OPERAND_B = 1


class FragmentLabel(Enum):
    """Where a boundary edge runs relative to the other operand.

    - INSIDE / OUTSIDE: within or outside the other operand's area
    - SHARED_SAME: along the other operand's boundary, same direction
    - SHARED_OPPOSITE: along the other operand's boundary, opposite direction
    """

    INSIDE = auto()
    OUTSIDE = auto()
    SHARED_SAME = auto()
    SHARED_OPPOSITE = auto()


@dataclass(frozen=True)
class Operand:
    """One side of an operation as the graph sees it.

    An inverted operand is the complement of a polygon: its rings are
    reversed and its area is everything outside the original, so points far
    away count as inside.

    Attributes:
        rings: Rings in the orientation the traversal walks them
        inverted: Whether the operand covers the unbounded outside
    """

    rings: tuple[Ring, ...]
    inverted: bool = False

    @classmethod
    def from_polygon(cls, polygon: Polygon, complement: bool = False) -> "Operand":
        if complement:
            return cls(tuple(ring.reversed() for ring in polygon.rings), inverted=True)
        return cls(polygon.rings)

    def contains(self, point: Point) -> bool:
        """Membership by winding sum; the complement adds one turn everywhere."""
        winding = sum(ring.winding_number(point) for ring in self.rings)
        if self.inverted:
            winding += 1
        return winding > 0


@dataclass(slots=True)
class GraphNode:
    """A vertex or crossing on one ring.

    Attributes:
        point: Coordinate of the node
        operand: OPERAND_A or OPERAND_B
        ring_index: Ring the node belongs to
        next: Arena index of the following node on the same ring
        prev: Arena index of the preceding node on the same ring
        link: Arena index of the other operand's node at this crossing
        crossing_index: Index into the crossing list, for crossing nodes
        label: Label of the edge leaving this node
        kind: Crossing kind, for crossing nodes
    """

    point: Point
    operand: int
    ring_index: int
    next: int = -1
    prev: int = -1
    link: int | None = None
    crossing_index: int | None = None
    label: FragmentLabel | None = None
    kind: CrossingKind | None = None

    @property
    def is_crossing(self) -> bool:
        return self.link is not None


def _crossing_kind(incoming: FragmentLabel | None, outgoing: FragmentLabel | None) -> CrossingKind:
    arrives_inside = incoming is FragmentLabel.INSIDE
    leaves_inside = outgoing is FragmentLabel.INSIDE
    if leaves_inside and not arrives_inside:
        return CrossingKind.ENTRY
    if arrives_inside and not leaves_inside:
        return CrossingKind.EXIT
    return CrossingKind.TOUCH


class CrossingGraph:
    """Arena of linked ring nodes for two operands."""

    def __init__(self, tolerance: float = DEFAULT_TOLERANCE) -> None:
        self.tolerance = tolerance
        self.nodes: list[GraphNode] = []
        self._ring_starts: dict[tuple[int, int], int] = {}
        self._rings_with_crossings: set[tuple[int, int]] = set()
        self._crossing_nodes: dict[tuple[int, int], int] = {}

    @classmethod
    def build(
        cls,
        rings_a: Sequence[Ring],
        rings_b: Sequence[Ring],
        crossings: Sequence[Crossing],
        tolerance: float = DEFAULT_TOLERANCE,
    ) -> "CrossingGraph":
        """Build the graph for two ring sets and their crossings.

        Args:
            rings_a: Rings of operand A
            rings_b: Rings of operand B
            crossings: Crossings between them (locations index into the ring sets)
            tolerance: Distance below which points coincide

        Returns:
            Graph with every ring sequence built and crossing nodes linked

        Raises:
            AmbiguousTopologyError: If two crossings fall on the same point of a ring
        """
        graph = cls(tolerance)

        for operand, rings in ((OPERAND_A, rings_a), (OPERAND_B, rings_b)):
            per_ring: dict[int, list[int]] = {}
            for index, crossing in enumerate(crossings):
                location = crossing.location_a if operand == OPERAND_A else crossing.location_b
                per_ring.setdefault(location.ring_index, []).append(index)
            for ring_index, ring in enumerate(rings):
                graph._add_ring(operand, ring_index, ring, crossings, per_ring.get(ring_index, []))

        for index in range(len(crossings)):
            node_a = graph._crossing_nodes[(OPERAND_A, index)]
            node_b = graph._crossing_nodes[(OPERAND_B, index)]
            graph.nodes[node_a].link = node_b
            graph.nodes[node_b].link = node_a

        return graph

    def _add_ring(
        self,
        operand: int,
        ring_index: int,
        ring: Ring,
        crossings: Sequence[Crossing],
        crossing_indices: list[int],
    ) -> None:
        at_vertex: dict[int, int] = {}
        along_segment: dict[int, list[tuple[float, int]]] = {}

        for index in crossing_indices:
            crossing = crossings[index]
            location = crossing.location_a if operand == OPERAND_A else crossing.location_b
            if location.is_vertex:
                if location.segment_index in at_vertex:
                    raise AmbiguousTopologyError(
                        "graph construction",
                        f"two crossings at vertex {location.segment_index} of ring {ring_index}",
                    )
                at_vertex[location.segment_index] = index
            else:
                along_segment.setdefault(location.segment_index, []).append((location.ratio, index))

        # (point, crossing index) in boundary order
        entries: list[tuple[Point, int | None]] = []
        for segment_index, vertex in enumerate(ring.points):
            entries.append((vertex, at_vertex.get(segment_index)))
            previous: Point | None = None
            for _, index in sorted(along_segment.get(segment_index, [])):
                point = crossings[index].point
                if previous is not None and point.almost_equal(previous, self.tolerance):
                    raise AmbiguousTopologyError(
                        "graph construction",
                        f"two crossings at one point on segment {segment_index} of ring {ring_index}",
                    )
                entries.append((point, index))
                previous = point

        first = len(self.nodes)
        count = len(entries)
        for offset, (point, index) in enumerate(entries):
            node = GraphNode(
                point=point,
                operand=operand,
                ring_index=ring_index,
                next=first + (offset + 1) % count,
                prev=first + (offset - 1) % count,
                crossing_index=index,
            )
            self.nodes.append(node)
            if index is not None:
                self._crossing_nodes[(operand, index)] = first + offset

        self._ring_starts[(operand, ring_index)] = first
        if crossing_indices:
            self._rings_with_crossings.add((operand, ring_index))

    def __len__(self) -> int:
        return len(self.nodes)

    def ring_nodes(self, operand: int, ring_index: int) -> list[int]:
        """Arena indices of a ring's nodes in boundary order."""
        start = self._ring_starts[(operand, ring_index)]
        indices = [start]
        current = self.nodes[start].next
        while current != start:
            indices.append(current)
            current = self.nodes[current].next
        return indices

    def ring_has_crossings(self, operand: int, ring_index: int) -> bool:
        return (operand, ring_index) in self._rings_with_crossings

    def crossing_node(self, operand: int, crossing_index: int) -> int:
        """Arena index of the node for a crossing on one operand."""
        return self._crossing_nodes[(operand, crossing_index)]

    def label_fragments(self, operand_a: Operand, operand_b: Operand) -> None:
        """Label every edge relative to the other operand.

        An edge between two crossings whose linked nodes are neighbours on
        the other ring runs along that ring's boundary. Any other edge is
        labelled by testing its midpoint against the other operand.
        """
        nodes = self.nodes
        for node in nodes:
            following = nodes[node.next]
            label: FragmentLabel | None = None

            if node.link is not None and following.link is not None:
                if nodes[node.link].next == following.link:
                    label = FragmentLabel.SHARED_SAME
                elif nodes[following.link].next == node.link:
                    label = FragmentLabel.SHARED_OPPOSITE

            if label is None:
                other = operand_b if node.operand == OPERAND_A else operand_a
                inside = other.contains(midpoint(node.point, following.point))
                label = FragmentLabel.INSIDE if inside else FragmentLabel.OUTSIDE

            node.label = label

        for node in nodes:
            if node.link is not None:
                node.kind = _crossing_kind(nodes[node.prev].label, node.label)

    def classified_crossings(self, crossings: Sequence[Crossing]) -> list[Crossing]:
        """Copies of the crossings with kind_a and kind_b filled in from the labels."""
        classified = []
        for index, crossing in enumerate(crossings):
            node_a = self.nodes[self._crossing_nodes[(OPERAND_A, index)]]
            node_b = self.nodes[self._crossing_nodes[(OPERAND_B, index)]]
            classified.append(replace(crossing, kind_a=node_a.kind, kind_b=node_b.kind))
        return classified
