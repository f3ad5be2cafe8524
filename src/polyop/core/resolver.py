"""Resolution of operations whose boundaries never meet.

When two polygons have no crossings, the result depends only on how they
sit relative to each other:
- Disjoint: neither contains the other
- A inside B: every ring of A lies within B's area
- B inside A: every ring of B lies within A's area

Containment is decided by locating a representative vertex with the
winding number rule. This module also builds the ring nesting tree used to
re-orient rings from their nesting depth.
"""

from dataclasses import dataclass
from enum import Enum, auto

from polyop.config.settings import DEFAULT_TOLERANCE
from polyop.domain import OperationKind, Point, PointLocation, Polygon, Ring


class Relationship(Enum):
    """How two boundaries without crossings relate."""

    DISJOINT = auto()
    A_INSIDE_B = auto()
    B_INSIDE_A = auto()


def _representative_point(ring: Ring, other: Ring, tolerance: float) -> Point | None:
    for point in ring.points:
        if not other.on_boundary(point, tolerance):
            return point
    return None


def classify_rings(ring_a: Ring, ring_b: Ring, tolerance: float = DEFAULT_TOLERANCE) -> Relationship:
    """Classify two non-crossing rings as disjoint or nested.

    Orientation is ignored. A vertex of A that is not on B's boundary is
    located in B, then symmetrically.

    Args:
        ring_a: First ring
        ring_b: Second ring
        tolerance: Boundary distance tolerance

    Returns:
        The relationship between the rings
    """
    if not ring_a.bounding_box.intersects(ring_b.bounding_box, tolerance):
        return Relationship.DISJOINT

    point = _representative_point(ring_a, ring_b, tolerance)
    if point is not None and ring_b.locate(point, tolerance) is PointLocation.INSIDE:
        return Relationship.A_INSIDE_B

    point = _representative_point(ring_b, ring_a, tolerance)
    if point is not None and ring_a.locate(point, tolerance) is PointLocation.INSIDE:
        return Relationship.B_INSIDE_A

    return Relationship.DISJOINT


def _ring_inside(ring: Ring, polygon: Polygon, tolerance: float) -> bool | None:
    for point in ring.points:
        location = polygon.locate(point, tolerance)
        if location is not PointLocation.BOUNDARY:
            return location is PointLocation.INSIDE
    return None


def classify_polygons(a: Polygon, b: Polygon, tolerance: float = DEFAULT_TOLERANCE) -> Relationship | None:
    """Classify two polygons whose boundaries do not cross.

    Args:
        a: First polygon
        b: Second polygon
        tolerance: Boundary distance tolerance

    Returns:
        The relationship, or None when some rings of one polygon lie inside
        the other and some do not (the caller resolves those ring by ring)
    """
    box_a, box_b = a.bounding_box, b.bounding_box
    if box_a is None or box_b is None or not box_a.intersects(box_b, tolerance):
        return Relationship.DISJOINT

    a_in_b = [_ring_inside(ring, b, tolerance) for ring in a.rings]
    b_in_a = [_ring_inside(ring, a, tolerance) for ring in b.rings]
    if None in a_in_b or None in b_in_a:
        return None

    if not any(a_in_b) and not any(b_in_a):
        return Relationship.DISJOINT
    if all(a_in_b) and not any(b_in_a):
        return Relationship.A_INSIDE_B
    if all(b_in_a) and not any(a_in_b):
        return Relationship.B_INSIDE_A
    return None


def _as_hole(polygon: Polygon) -> list[Ring]:
    return [ring.reversed() for ring in polygon.rings]


def containment_rings(
    kind: OperationKind,
    relationship: Relationship,
    a: Polygon,
    b: Polygon,
) -> list[Ring]:
    """Output rings for an operation on polygons without crossings.

    | Relationship | Intersection | Union | Xor              | Difference       |
    |--------------|--------------|-------|------------------|------------------|
    | Disjoint     | empty        | A, B  | A, B             | A                |
    | A inside B   | A            | B     | B with A as hole | empty            |
    | B inside A   | B            | A     | A with B as hole | A with B as hole |

    Args:
        kind: Operation to resolve
        relationship: How A and B relate
        a: First operand
        b: Second operand

    Returns:
        Rings of the result (empty list for no area)
    """
    rings_a, rings_b = list(a.rings), list(b.rings)

    if relationship is Relationship.DISJOINT:
        table = {
            OperationKind.INTERSECTION: [],
            OperationKind.UNION: rings_a + rings_b,
            OperationKind.XOR: rings_a + rings_b,
            OperationKind.DIFFERENCE: rings_a,
        }
    elif relationship is Relationship.A_INSIDE_B:
        table = {
            OperationKind.INTERSECTION: rings_a,
            OperationKind.UNION: rings_b,
            OperationKind.XOR: rings_b + _as_hole(a),
            OperationKind.DIFFERENCE: [],
        }
    else:
        table = {
            OperationKind.INTERSECTION: rings_b,
            OperationKind.UNION: rings_a,
            OperationKind.XOR: rings_a + _as_hole(b),
            OperationKind.DIFFERENCE: rings_a + _as_hole(b),
        }
    return table[kind]


def containment_result(
    kind: OperationKind,
    relationship: Relationship,
    a: Polygon,
    b: Polygon,
) -> Polygon | None:
    """Result polygon for an operation on polygons without crossings, None if empty."""
    rings = containment_rings(kind, relationship, a, b)
    if not rings:
        return None
    return Polygon(tuple(rings))


@dataclass
class RingNode:
    """A node in the ring nesting tree.

    Attributes:
        index: Index of the ring in its polygon
        parent: Index of the smallest ring containing it (None at top level)
        children: Indices of rings directly inside it
        depth: Nesting depth (0 for top-level)
    """

    index: int
    parent: int | None
    children: list[int]
    depth: int


class RingNestingTree:
    """Containment tree of the rings of one polygon.

    Rings must not cross each other. Orientation is ignored while building,
    so the tree can be used to repair it.
    """

    def __init__(self, nodes: dict[int, RingNode]) -> None:
        self.nodes = nodes

    @classmethod
    def build(cls, rings: tuple[Ring, ...] | list[Ring], tolerance: float = DEFAULT_TOLERANCE) -> "RingNestingTree":
        """Build the tree by finding each ring's smallest containing ring.

        Args:
            rings: Rings of one polygon
            tolerance: Boundary distance tolerance

        Returns:
            Nesting tree with a node per ring
        """
        parent_map: dict[int, int | None] = {}
        for idx, ring in enumerate(rings):
            candidates = [
                other_idx
                for other_idx, other in enumerate(rings)
                if other_idx != idx
                and classify_rings(ring, other, tolerance) is Relationship.A_INSIDE_B
            ]
            if candidates:
                parent_map[idx] = min(candidates, key=lambda i: rings[i].area)
            else:
                parent_map[idx] = None

        def get_depth(idx: int, memo: dict[int, int]) -> int:
            if idx in memo:
                return memo[idx]
            parent = parent_map[idx]
            memo[idx] = 0 if parent is None else get_depth(parent, memo) + 1
            return memo[idx]

        depth_memo: dict[int, int] = {}
        nodes = {
            idx: RingNode(index=idx, parent=parent_map[idx], children=[], depth=get_depth(idx, depth_memo))
            for idx in range(len(rings))
        }
        for idx, node in nodes.items():
            if node.parent is not None:
                nodes[node.parent].children.append(idx)

        return cls(nodes)

    def depth(self, index: int) -> int:
        return self.nodes[index].depth

    def roots(self) -> list[int]:
        """Indices of top-level rings."""
        return [idx for idx, node in self.nodes.items() if node.parent is None]


def normalize_orientation(polygon: Polygon, tolerance: float = DEFAULT_TOLERANCE) -> Polygon:
    """Re-orient rings from their nesting depth.

    Rings at even depth become counter-clockwise (outer boundaries), rings
    at odd depth clockwise (holes).

    Args:
        polygon: Polygon whose rings do not cross each other
        tolerance: Boundary distance tolerance

    Returns:
        Polygon with the same rings, some of them reversed
    """
    tree = RingNestingTree.build(polygon.rings, tolerance)
    rings = []
    for idx, ring in enumerate(polygon.rings):
        should_be_hole = tree.depth(idx) % 2 == 1
        rings.append(ring.reversed() if ring.is_hole != should_be_hole else ring)
    return Polygon(tuple(rings))
