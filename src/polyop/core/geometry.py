"""Geometric primitives used by the polygon engine.

This module provides the low-level calculations the crossing finder,
graph builder and operation driver rely on:
- Signed area calculation (shoelace formula)
- Point-in-ring location (winding number)
- Segment-segment intersection with vertex snapping and collinear overlaps
- Projection of a point onto a segment
- Self-crossing detection for output rings
- Turn angles for choosing between traversal continuations

All functions are pure and stateless.
"""

import math
from dataclasses import dataclass
from enum import Enum, auto

from polyop.config.settings import DEFAULT_TOLERANCE
from polyop.domain import BoundingBox, Point, PointLocation, Ring


def signed_area(points: list[Point]) -> float:
    """Calculate signed area of a closed point sequence using the shoelace formula.

    The sign of the area indicates winding direction:
    - Positive area: counter-clockwise winding
    - Negative area: clockwise winding

    Args:
        points: List of points forming the boundary (closing point implicit)

    Returns:
        Signed area in square units. Returns 0.0 for fewer than 3 points.

    Examples:
        >>> p1 = Point(0.0, 0.0)
        >>> p2 = Point(1.0, 0.0)
        >>> p3 = Point(1.0, 1.0)
        >>> p4 = Point(0.0, 1.0)
        >>> signed_area([p1, p2, p3, p4])  # CCW square
        1.0
        >>> signed_area([p1, p4, p3, p2])  # CW square
        -1.0
    """
    n = len(points)
    if n < 3:
        return 0.0

    area = 0.0
    for i in range(n):
        j = (i + 1) % n
        area += points[i].x * points[j].y
        area -= points[j].x * points[i].y

    return area / 2.0


def cross(origin: Point, a: Point, b: Point) -> float:
    """Z component of (a - origin) x (b - origin).

    Positive when origin -> a -> b turns left.
    """
    return (a.x - origin.x) * (b.y - origin.y) - (a.y - origin.y) * (b.x - origin.x)


def midpoint(a: Point, b: Point) -> Point:
    return Point((a.x + b.x) / 2.0, (a.y + b.y) / 2.0)


def point_in_ring(point: Point, ring: Ring, tolerance: float = DEFAULT_TOLERANCE) -> PointLocation:
    """Locate a point relative to a ring using the winding number rule.

    Orientation is ignored: a point wound around in either direction is
    inside. Points within tolerance of the ring are on its boundary.

    Args:
        point: Point to locate
        ring: Ring to test against
        tolerance: Boundary distance tolerance

    Returns:
        INSIDE, OUTSIDE or BOUNDARY
    """
    return ring.locate(point, tolerance)


def segment_parameter(point: Point, seg_start: Point, seg_end: Point) -> float:
    """Parametric position of a point's projection onto a segment, clamped to [0, 1]."""
    dx = seg_end.x - seg_start.x
    dy = seg_end.y - seg_start.y
    length_sq = dx * dx + dy * dy
    if length_sq == 0.0:
        return 0.0
    t = ((point.x - seg_start.x) * dx + (point.y - seg_start.y) * dy) / length_sq
    return max(0.0, min(1.0, t))


class SegmentIntersectionKind(Enum):
    """Result shape of a segment-segment intersection."""

    POINT = auto()
    OVERLAP = auto()


@dataclass(frozen=True, slots=True)
class IntersectionPoint:
    """An intersection point with its parameters on both segments.

    Attributes:
        point: Intersection coordinate
        t: Parameter along the first segment (exactly 0.0 or 1.0 at its ends)
        u: Parameter along the second segment (exactly 0.0 or 1.0 at its ends)
    """

    point: Point
    t: float
    u: float


@dataclass(frozen=True, slots=True)
class SegmentIntersection:
    """Intersection of two segments.

    A POINT result holds one point. An OVERLAP result holds the two ends of
    the shared collinear stretch, ordered along the first segment.
    """

    kind: SegmentIntersectionKind
    points: tuple[IntersectionPoint, ...]


def _snap_ratio(point: Point, seg_start: Point, seg_end: Point, tolerance: float) -> float:
    if point.almost_equal(seg_start, tolerance):
        return 0.0
    if point.almost_equal(seg_end, tolerance):
        return 1.0
    return segment_parameter(point, seg_start, seg_end)


def _snapped(
    point: Point, a0: Point, a1: Point, b0: Point, b1: Point, tolerance: float
) -> IntersectionPoint:
    return IntersectionPoint(
        point,
        _snap_ratio(point, a0, a1, tolerance),
        _snap_ratio(point, b0, b1, tolerance),
    )


def _endpoint_hits(
    a0: Point, a1: Point, b0: Point, b1: Point, tolerance: float
) -> list[IntersectionPoint]:
    hits: list[IntersectionPoint] = []
    for p in (a0, a1):
        if p.distance_to_segment(b0, b1) <= tolerance:
            hits.append(_snapped(p, a0, a1, b0, b1, tolerance))
    for q in (b0, b1):
        if q.distance_to_segment(a0, a1) <= tolerance:
            hits.append(_snapped(q, a0, a1, b0, b1, tolerance))

    unique: list[IntersectionPoint] = []
    for hit in hits:
        if not any(hit.point.almost_equal(kept.point, tolerance) for kept in unique):
            unique.append(hit)
    return unique


def segment_intersection(
    a0: Point,
    a1: Point,
    b0: Point,
    b1: Point,
    tolerance: float = DEFAULT_TOLERANCE,
) -> SegmentIntersection | None:
    """Intersect segment a0-a1 with segment b0-b1.

    Segment endpoints lying on the other segment (within tolerance) are
    checked first, so touches at vertices report the exact vertex and the
    parameters snap to 0.0 or 1.0. Collinear segments report the ends of
    their shared stretch.

    Args:
        a0: Start of the first segment
        a1: End of the first segment
        b0: Start of the second segment
        b1: End of the second segment
        tolerance: Distance below which points coincide

    Returns:
        SegmentIntersection, or None if the segments do not meet

    Examples:
        >>> result = segment_intersection(Point(0, 0), Point(2, 2), Point(0, 2), Point(2, 0))
        >>> result.points[0].point
        Point(x=1.0, y=1.0)
    """
    rx, ry = a1.x - a0.x, a1.y - a0.y
    sx, sy = b1.x - b0.x, b1.y - b0.y
    r_len = math.hypot(rx, ry)
    if r_len == 0.0 or (sx == 0.0 and sy == 0.0):
        return None

    dist_b0 = (rx * (b0.y - a0.y) - ry * (b0.x - a0.x)) / r_len
    dist_b1 = (rx * (b1.y - a0.y) - ry * (b1.x - a0.x)) / r_len
    collinear = abs(dist_b0) <= tolerance and abs(dist_b1) <= tolerance

    hits = _endpoint_hits(a0, a1, b0, b1, tolerance)
    if collinear:
        if not hits:
            return None
        hits.sort(key=lambda hit: hit.t)
        if len(hits) == 1:
            return SegmentIntersection(SegmentIntersectionKind.POINT, (hits[0],))
        return SegmentIntersection(SegmentIntersectionKind.OVERLAP, (hits[0], hits[-1]))

    if hits:
        return SegmentIntersection(SegmentIntersectionKind.POINT, (hits[0],))

    denom = rx * sy - ry * sx
    if denom == 0.0:
        return None

    qx, qy = b0.x - a0.x, b0.y - a0.y
    t = (qx * sy - qy * sx) / denom
    u = (qx * ry - qy * rx) / denom
    if 0.0 < t < 1.0 and 0.0 < u < 1.0:
        point = Point(a0.x + t * rx, a0.y + t * ry)
        return SegmentIntersection(
            SegmentIntersectionKind.POINT, (IntersectionPoint(point, t, u),)
        )

    return None


def ring_self_crosses(ring: Ring, tolerance: float = DEFAULT_TOLERANCE) -> bool:
    """Check whether a ring crosses or doubles back over itself.

    Non-adjacent segments meeting at a single point where at least one of
    them ends (a pinch or a touch) do not count as a crossing.

    Args:
        ring: Ring to check
        tolerance: Distance below which points coincide

    Returns:
        True if two segments properly cross or overlap
    """
    segments = list(ring.segments())
    n = len(segments)
    boxes = [BoundingBox.of_points(segment) for segment in segments]

    for i in range(n):
        a0, a1 = segments[i]
        for j in range(i + 1, n):
            if not boxes[i].intersects(boxes[j], tolerance):
                continue
            b0, b1 = segments[j]
            result = segment_intersection(a0, a1, b0, b1, tolerance)
            if result is None:
                continue
            if result.kind is SegmentIntersectionKind.OVERLAP:
                return True
            adjacent = j == i + 1 or (i == 0 and j == n - 1)
            if adjacent:
                continue
            hit = result.points[0]
            if 0.0 < hit.t < 1.0 and 0.0 < hit.u < 1.0:
                return True

    return False


def turn_angle(previous: Point, current: Point, following: Point) -> float:
    """Signed turn at current when walking previous -> current -> following.

    Returns:
        Angle in radians in (-pi, pi]; positive turns left
    """
    in_x, in_y = current.x - previous.x, current.y - previous.y
    out_x, out_y = following.x - current.x, following.y - current.y
    return math.atan2(in_x * out_y - in_y * out_x, in_x * out_x + in_y * out_y)
