"""Polygon operation driver.

This module ties the engine together. For each operation it:
1. Treats a missing or empty polygon as empty area and rejects input rings
   that cross themselves
2. Rewrites inverted operands (see GeometryConfig) into an operation on the
   polygons as given, whose result is complemented if needed
3. Short-circuits operands whose bounding boxes do not overlap
4. Prepares the effective operands: a difference walks B reversed, which
   is B's complement, and an exclusive-or is two difference passes
5. Finds the crossings and, when there are none, resolves the result from
   the containment relationship
6. Builds the crossing graph, labels its fragments and walks the selected
   fragments into output rings
7. Adds the rings that no crossing touches and validates every output ring

Selection rules, in terms of the effective operands:

| Operation    | A fragments kept         | B fragments kept |
|--------------|--------------------------|------------------|
| Intersection | inside B, shared same    | inside A         |
| Union        | outside B, shared same   | outside A        |
| Difference   | inside B' (B complement) | inside A         |
|              | shared same with B'      |                  |

A walk may start at any unvisited crossing node whose outgoing fragment is
kept; there is no separate entry/exit selector. For intersection such a
node on A is an entry into B, for union and difference an exit from B, and
a node on B is the matching crossing seen from the other side. Every kept
fragment is walked exactly once whichever node starts its ring.

Inverted operands are rewritten with De Morgan's laws, for example
intersect(not A, B) = difference(B, A) and union(not A, not B) =
not intersect(A, B).
"""

import time
from collections.abc import Callable
from dataclasses import dataclass

import structlog

from polyop.config.settings import GeometryConfig
from polyop.core.crossings import find_polygon_crossings
from polyop.core.geometry import ring_self_crosses, turn_angle
from polyop.core.graph import OPERAND_A, OPERAND_B, CrossingGraph, FragmentLabel, Operand
from polyop.core.resolver import (
    Relationship,
    classify_polygons,
    containment_rings,
    normalize_orientation,
)
from polyop.domain import Crossing, OperationKind, Point, Polygon, Ring
from polyop.exceptions import (
    AmbiguousTopologyError,
    GeometryError,
    InvalidGeometryError,
    UnboundedResultError,
)
from polyop.utils.logging import OperationLogger, OperationStats


@dataclass(frozen=True)
class SelectionRule:
    """Which fragments an operation keeps from each effective operand.

    Attributes:
        keep_a: Labels of A's fragments that become output boundary
        keep_b: Labels of B's fragments that become output boundary
        complement_b: Whether B is replaced by its complement
    """

    keep_a: frozenset[FragmentLabel]
    keep_b: frozenset[FragmentLabel]
    complement_b: bool = False


SELECTION_RULES: dict[OperationKind, SelectionRule] = {
    OperationKind.INTERSECTION: SelectionRule(
        keep_a=frozenset({FragmentLabel.INSIDE, FragmentLabel.SHARED_SAME}),
        keep_b=frozenset({FragmentLabel.INSIDE}),
    ),
    OperationKind.UNION: SelectionRule(
        keep_a=frozenset({FragmentLabel.OUTSIDE, FragmentLabel.SHARED_SAME}),
        keep_b=frozenset({FragmentLabel.OUTSIDE}),
    ),
    OperationKind.DIFFERENCE: SelectionRule(
        keep_a=frozenset({FragmentLabel.INSIDE, FragmentLabel.SHARED_SAME}),
        keep_b=frozenset({FragmentLabel.INSIDE}),
        complement_b=True,
    ),
}


def _reduce_inversion(
    kind: OperationKind, invert_a: bool, invert_b: bool
) -> tuple[OperationKind, bool, bool]:
    """Rewrite an operation on complemented operands as one on the operands as given.

    Returns:
        Operation to run, whether to swap the operands, and whether to
        complement the result
    """
    if kind is OperationKind.DIFFERENCE:
        kind, invert_b = OperationKind.INTERSECTION, not invert_b
    if kind is OperationKind.XOR:
        return OperationKind.XOR, False, invert_a != invert_b
    if not invert_a and not invert_b:
        return kind, False, False
    if invert_a and invert_b:
        if kind is OperationKind.INTERSECTION:
            return OperationKind.UNION, False, True
        return OperationKind.INTERSECTION, False, True
    if kind is OperationKind.INTERSECTION:
        return OperationKind.DIFFERENCE, invert_a, False
    return OperationKind.DIFFERENCE, invert_b, True


class PolygonOperator:
    """Runs boolean operations on polygons.

    The operator holds only its configuration and an OperationLogger; every
    operation works on local state, and inputs are never modified.

    Example:
        operator = PolygonOperator(GeometryConfig(tolerance=1e-6))
        result = operator.apply(OperationKind.UNION, a, b)
    """

    def __init__(
        self,
        config: GeometryConfig | None = None,
        logger: structlog.stdlib.BoundLogger | None = None,
    ) -> None:
        self.config = config or GeometryConfig()
        self.tolerance = self.config.tolerance
        self._log = OperationLogger(logger)

    @property
    def stats(self) -> OperationStats:
        """Statistics accumulated over this operator's operations."""
        return self._log.stats

    def intersect(self, a: Polygon | None, b: Polygon | None) -> Polygon | None:
        """Area covered by both polygons."""
        return self.apply(OperationKind.INTERSECTION, a, b)

    def union(self, a: Polygon | None, b: Polygon | None) -> Polygon | None:
        """Area covered by either polygon."""
        return self.apply(OperationKind.UNION, a, b)

    def xor(self, a: Polygon | None, b: Polygon | None) -> Polygon | None:
        """Area covered by exactly one of the polygons."""
        return self.apply(OperationKind.XOR, a, b)

    def difference(self, a: Polygon | None, b: Polygon | None) -> Polygon | None:
        """Area covered by A but not by B."""
        return self.apply(OperationKind.DIFFERENCE, a, b)

    def apply(
        self,
        kind: OperationKind,
        a: Polygon | None,
        b: Polygon | None,
    ) -> Polygon | None:
        """Apply a boolean operation.

        Args:
            kind: Operation to apply
            a: First operand (None or empty means no area)
            b: Second operand (None or empty means no area)

        Returns:
            New polygon, or None when the result has no area

        Raises:
            InvalidGeometryError: If an operand is not a Polygon or has a ring
                that crosses itself
            AmbiguousTopologyError: If the crossings cannot be resolved into valid rings
            UnboundedResultError: If an inverted result would cover the whole plane
        """
        kind = OperationKind(kind)
        operation = kind.value
        started = time.perf_counter()

        a = self._prepare(a)
        b = self._prepare(b)
        self._log.log_operation_start(operation, len(a.rings) if a else 0, len(b.rings) if b else 0)

        config = self.config
        run_kind, swap, complement = kind, False, False
        if config.invert_a or config.invert_b or config.invert_result:
            run_kind, swap, complement = _reduce_inversion(kind, config.invert_a, config.invert_b)
            complement ^= config.invert_result
        first, second = (b, a) if swap else (a, b)

        try:
            rings = self._run(run_kind, first, second)
            if complement:
                if not rings:
                    raise UnboundedResultError(operation)
                rings = [ring.reversed() for ring in rings]
        except GeometryError as e:
            self._log.log_operation_error(operation, e)
            raise

        duration_ms = (time.perf_counter() - started) * 1000
        self._log.log_operation_complete(operation, len(rings), duration_ms)
        if not rings:
            return None
        return Polygon(tuple(rings))

    def crossings(self, a: Polygon | None, b: Polygon | None) -> list[Crossing]:
        """All boundary crossings of A and B, classified for both operands.

        Args:
            a: First polygon
            b: Second polygon

        Returns:
            Crossings ordered by location on A (empty if the boundaries never meet)
        """
        a = self._prepare(a)
        b = self._prepare(b)
        if a is None or b is None:
            return []

        found = find_polygon_crossings(a.rings, b.rings, self.tolerance)
        self._log.log_crossings("crossings", len(found))
        if not found:
            return []

        graph = CrossingGraph.build(a.rings, b.rings, found, self.tolerance)
        graph.label_fragments(Operand.from_polygon(a), Operand.from_polygon(b))
        return graph.classified_crossings(found)

    def _prepare(self, polygon: Polygon | None) -> Polygon | None:
        if polygon is None:
            return None
        if not isinstance(polygon, Polygon):
            raise InvalidGeometryError(f"Expected a Polygon, got {type(polygon).__name__}")
        if polygon.is_empty:
            return None
        for index, ring in enumerate(polygon.rings):
            if ring_self_crosses(ring, self.tolerance):
                raise InvalidGeometryError(f"Ring {index} crosses itself")
        if self.config.normalize_orientation:
            return normalize_orientation(polygon, self.tolerance)
        return polygon

    def _run(self, kind: OperationKind, a: Polygon | None, b: Polygon | None) -> list[Ring]:
        operation = kind.value

        if a is None or b is None:
            self._log.log_short_circuit(operation, "empty operand")
            if kind is OperationKind.INTERSECTION:
                return []
            if kind is OperationKind.DIFFERENCE:
                return list(a.rings) if a is not None else []
            present = a if a is not None else b
            return list(present.rings) if present is not None else []

        if kind is OperationKind.XOR:
            return self._run_pass(OperationKind.DIFFERENCE, a, b) + self._run_pass(
                OperationKind.DIFFERENCE, b, a
            )
        return self._run_pass(kind, a, b)

    def _run_pass(self, kind: OperationKind, a: Polygon, b: Polygon) -> list[Ring]:
        operation = kind.value
        rule = SELECTION_RULES[kind]

        box_a, box_b = a.bounding_box, b.bounding_box
        if box_a is not None and box_b is not None and not box_a.intersects(box_b, self.tolerance):
            self._log.log_short_circuit(operation, "bounding boxes disjoint")
            return containment_rings(kind, Relationship.DISJOINT, a, b)

        operand_a = Operand.from_polygon(a)
        operand_b = Operand.from_polygon(b, complement=rule.complement_b)

        crossings = find_polygon_crossings(operand_a.rings, operand_b.rings, self.tolerance)
        self._log.log_crossings(operation, len(crossings))

        if not crossings:
            relationship = classify_polygons(a, b, self.tolerance)
            if relationship is not None:
                self._log.log_short_circuit(operation, relationship.name.lower())
                return containment_rings(kind, relationship, a, b)
            return self._untouched_rings(operation, operand_a, operand_b, rule, None)

        graph = CrossingGraph.build(operand_a.rings, operand_b.rings, crossings, self.tolerance)
        graph.label_fragments(operand_a, operand_b)

        rings = self._traverse(operation, graph, rule)
        rings.extend(self._untouched_rings(operation, operand_a, operand_b, rule, graph))
        return rings

    def _untouched_rings(
        self,
        operation: str,
        operand_a: Operand,
        operand_b: Operand,
        rule: SelectionRule,
        graph: CrossingGraph | None,
    ) -> list[Ring]:
        """Keep or drop each ring that no crossing touches, by where it lies."""
        kept: list[Ring] = []
        for operand, own, other, keep in (
            (OPERAND_A, operand_a, operand_b, rule.keep_a),
            (OPERAND_B, operand_b, operand_a, rule.keep_b),
        ):
            for ring_index, ring in enumerate(own.rings):
                if graph is not None and graph.ring_has_crossings(operand, ring_index):
                    continue
                inside = other.contains(ring.points[0])
                label = FragmentLabel.INSIDE if inside else FragmentLabel.OUTSIDE
                if label in keep:
                    self._log.log_ring_emitted(operation, len(ring), ring.signed_area)
                    kept.append(ring)
        return kept

    def _traverse(self, operation: str, graph: CrossingGraph, rule: SelectionRule) -> list[Ring]:
        nodes = graph.nodes

        def keep(index: int) -> bool:
            node = nodes[index]
            selected = rule.keep_a if node.operand == OPERAND_A else rule.keep_b
            return node.label in selected

        visited = [False] * len(nodes)
        rings: list[Ring] = []

        for start, node in enumerate(nodes):
            if not node.is_crossing or visited[start] or not keep(start):
                continue
            points = self._walk(operation, graph, start, keep, visited)
            rings.append(self._emit_ring(operation, points))

        for index, node in enumerate(nodes):
            if keep(index) and not visited[index] and graph.ring_has_crossings(node.operand, node.ring_index):
                raise AmbiguousTopologyError(
                    operation, f"selected boundary at {node.point.to_tuple()} was never reached"
                )

        return rings

    def _walk(
        self,
        operation: str,
        graph: CrossingGraph,
        start: int,
        keep: Callable[[int], bool],
        visited: list[bool],
    ) -> list[Point]:
        """Follow selected fragments from a crossing until the ring closes.

        Each step moves to an unvisited node, so the walk closes or gets stuck
        within len(nodes) steps.
        """
        nodes = graph.nodes
        start_link = nodes[start].link
        points: list[Point] = []
        current = start

        while True:
            visited[current] = True
            points.append(nodes[current].point)

            following = nodes[current].next
            if following == start or following == start_link:
                return points

            candidates = [
                index
                for index in (following, nodes[following].link)
                if index is not None and keep(index) and not visited[index]
            ]
            if not candidates:
                raise AmbiguousTopologyError(
                    operation, f"traversal stuck at {nodes[following].point.to_tuple()}"
                )
            if len(candidates) == 1:
                current = candidates[0]
            else:
                current = self._leftmost(graph, current, following, candidates)

    def _leftmost(self, graph: CrossingGraph, current: int, arrival: int, candidates: list[int]) -> int:
        """Pick the continuation that turns furthest left; ties stay on the current ring."""
        nodes = graph.nodes
        previous = nodes[current].point
        at = nodes[arrival].point
        best = candidates[0]
        best_angle = turn_angle(previous, at, nodes[nodes[best].next].point)
        for index in candidates[1:]:
            angle = turn_angle(previous, at, nodes[nodes[index].next].point)
            if angle > best_angle:
                best, best_angle = index, angle
        return best

    def _emit_ring(self, operation: str, points: list[Point]) -> Ring:
        cleaned: list[Point] = []
        for point in points:
            if cleaned and point.almost_equal(cleaned[-1], self.tolerance):
                continue
            cleaned.append(point)
        while len(cleaned) > 1 and cleaned[-1].almost_equal(cleaned[0], self.tolerance):
            cleaned.pop()

        try:
            ring = Ring(tuple(cleaned))
        except InvalidGeometryError as e:
            raise AmbiguousTopologyError(operation, f"degenerate output ring: {e}") from e

        if self.config.validate_output and ring_self_crosses(ring, self.tolerance):
            raise AmbiguousTopologyError(operation, "output ring crosses itself")

        self._log.log_ring_emitted(operation, len(ring), ring.signed_area)
        return ring


def intersect(a: Polygon | None, b: Polygon | None, config: GeometryConfig | None = None) -> Polygon | None:
    """Intersection of two polygons, or None if they share no area."""
    return PolygonOperator(config).intersect(a, b)


def union(a: Polygon | None, b: Polygon | None, config: GeometryConfig | None = None) -> Polygon | None:
    """Union of two polygons, or None if both are empty."""
    return PolygonOperator(config).union(a, b)


def xor(a: Polygon | None, b: Polygon | None, config: GeometryConfig | None = None) -> Polygon | None:
    """Exclusive-or of two polygons, or None if they cover the same area."""
    return PolygonOperator(config).xor(a, b)


def difference(a: Polygon | None, b: Polygon | None, config: GeometryConfig | None = None) -> Polygon | None:
    """Area of A not covered by B, or None if B covers all of A."""
    return PolygonOperator(config).difference(a, b)


def find_point_crossings(
    a: Polygon | None,
    b: Polygon | None,
    config: GeometryConfig | None = None,
) -> list[Crossing]:
    """Points where the boundaries of A and B meet, with entry/exit classification."""
    return PolygonOperator(config).crossings(a, b)
