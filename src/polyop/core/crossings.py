"""Ring crossing finder.

Finds every point where the boundaries of two rings (or two polygons)
meet. Each crossing records its position on both boundaries as a
BoundaryLocation so the graph builder can order it among the ring
vertices.

A point at the very end of a segment (ratio 1) is skipped because the
following segment reports it at ratio 0, so a crossing at a vertex is
found exactly once.
"""

from collections.abc import Sequence

from polyop.config.settings import DEFAULT_TOLERANCE
from polyop.core.geometry import segment_intersection
from polyop.domain import BoundaryLocation, BoundingBox, Crossing, Ring


def find_ring_crossings(
    ring_a: Ring,
    ring_b: Ring,
    ring_index_a: int = 0,
    ring_index_b: int = 0,
    tolerance: float = DEFAULT_TOLERANCE,
) -> list[Crossing]:
    """Find all points where two ring boundaries meet.

    Every segment of ring A is tested against every segment of ring B whose
    bounding box overlaps it. A collinear overlap contributes the two ends of
    the shared stretch.

    Args:
        ring_a: Ring from polygon A
        ring_b: Ring from polygon B
        ring_index_a: Index of ring_a within polygon A
        ring_index_b: Index of ring_b within polygon B
        tolerance: Distance below which points coincide

    Returns:
        Crossings ordered by their location on ring A (possibly empty)
    """
    segments_b = list(ring_b.segments())
    boxes_b = [BoundingBox.of_points(segment) for segment in segments_b]

    crossings: list[Crossing] = []
    for i, (a0, a1) in enumerate(ring_a.segments()):
        box_a = BoundingBox.of_points((a0, a1))
        for j, (b0, b1) in enumerate(segments_b):
            if not box_a.intersects(boxes_b[j], tolerance):
                continue
            result = segment_intersection(a0, a1, b0, b1, tolerance)
            if result is None:
                continue
            for hit in result.points:
                # Reported again at ratio 0 by the next segment
                if hit.t >= 1.0 or hit.u >= 1.0:
                    continue
                crossings.append(
                    Crossing(
                        point=hit.point,
                        location_a=BoundaryLocation(ring_index_a, i, hit.t),
                        location_b=BoundaryLocation(ring_index_b, j, hit.u),
                    )
                )

    return merge_crossings(crossings, tolerance)


def _vertex_score(crossing: Crossing) -> int:
    return int(crossing.location_a.is_vertex) + int(crossing.location_b.is_vertex)


def merge_crossings(crossings: Sequence[Crossing], tolerance: float = DEFAULT_TOLERANCE) -> list[Crossing]:
    """Drop crossings that coincide with an earlier one.

    When two crossings are within tolerance of each other, the one lying on
    more ring vertices survives.

    Args:
        crossings: Crossings of a single ring pair
        tolerance: Distance below which points coincide

    Returns:
        Remaining crossings ordered by location on A, then on B
    """
    ordered = sorted(crossings, key=lambda c: (c.point.x, c.point.y))
    kept: list[Crossing] = []
    for crossing in ordered:
        duplicate_index = None
        for k in range(len(kept) - 1, -1, -1):
            if crossing.point.x - kept[k].point.x > tolerance:
                break
            if crossing.point.almost_equal(kept[k].point, tolerance):
                duplicate_index = k
                break
        if duplicate_index is None:
            kept.append(crossing)
        elif _vertex_score(crossing) > _vertex_score(kept[duplicate_index]):
            kept[duplicate_index] = crossing

    kept.sort(key=lambda c: (c.location_a, c.location_b))
    return kept


def find_polygon_crossings(
    rings_a: Sequence[Ring],
    rings_b: Sequence[Ring],
    tolerance: float = DEFAULT_TOLERANCE,
) -> list[Crossing]:
    """Find crossings between every ring pair whose bounding boxes overlap.

    Args:
        rings_a: Rings of polygon A
        rings_b: Rings of polygon B
        tolerance: Distance below which points coincide

    Returns:
        All crossings, ordered by location on A
    """
    crossings: list[Crossing] = []
    for i, ring_a in enumerate(rings_a):
        for j, ring_b in enumerate(rings_b):
            if not ring_a.bounding_box.intersects(ring_b.bounding_box, tolerance):
                continue
            crossings.extend(find_ring_crossings(ring_a, ring_b, i, j, tolerance))

    crossings.sort(key=lambda c: (c.location_a, c.location_b))
    return crossings
