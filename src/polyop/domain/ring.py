"""Core geometric types for ring representation.

This module defines the fundamental geometric types used throughout polyop:
- Point: An immutable 2D point
- BoundingBox: Axis-aligned bounding rectangle
- Ring: A simple closed ring of points (outer boundary or hole)
- WindingDirection: Enum for ring winding direction
- PointLocation: Enum for the position of a point relative to a ring
"""

import math
from collections.abc import Iterable, Iterator, Sequence
from dataclasses import dataclass, field
from enum import Enum, auto
from typing import Any

from polyop.config.settings import DEFAULT_TOLERANCE
from polyop.exceptions import InvalidGeometryError


class WindingDirection(Enum):
    """Ring winding direction.

    Counter-clockwise rings bound area, clockwise rings are holes.
    """

    CLOCKWISE = auto()
    COUNTER_CLOCKWISE = auto()


class PointLocation(Enum):
    """Position of a point relative to a ring or polygon."""

    INSIDE = auto()
    OUTSIDE = auto()
    BOUNDARY = auto()


@dataclass(frozen=True, slots=True, order=True)
class Point:
    """A point in 2D space.

    Immutable and hashable for use in sets/dicts. Points order
    lexicographically by x, then y.

    Attributes:
        x: X coordinate
        y: Y coordinate
    """

    x: float
    y: float

    def to_tuple(self) -> tuple[float, float]:
        """Convert to simple (x, y) tuple.

        Returns:
            Tuple of (x, y) coordinates
        """
        return (self.x, self.y)

    def to_dict(self) -> dict[str, Any]:
        """Serialize to dictionary.

        Returns:
            Dictionary with x and y fields
        """
        return {"x": self.x, "y": self.y}

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Point":
        """Deserialize from dictionary.

        Args:
            data: Dictionary with x and y fields

        Returns:
            Point instance
        """
        return cls(x=float(data["x"]), y=float(data["y"]))

    def distance_to(self, other: "Point") -> float:
        """Euclidean distance to another point."""
        return math.hypot(self.x - other.x, self.y - other.y)

    def almost_equal(self, other: "Point", tolerance: float = DEFAULT_TOLERANCE) -> bool:
        """Check whether two points are within tolerance of each other.

        Args:
            other: Point to compare with
            tolerance: Maximum Euclidean distance

        Returns:
            True if the points are at most tolerance apart
        """
        if self == other:
            return True
        return self.distance_to(other) <= tolerance

    def distance_to_segment(self, start: "Point", end: "Point") -> float:
        """Shortest distance from this point to the segment start-end.

        Args:
            start: Segment start point
            end: Segment end point

        Returns:
            Distance to the closest point of the segment
        """
        dx = end.x - start.x
        dy = end.y - start.y
        length_sq = dx * dx + dy * dy
        if length_sq == 0.0:
            return self.distance_to(start)

        t = ((self.x - start.x) * dx + (self.y - start.y) * dy) / length_sq
        t = max(0.0, min(1.0, t))
        return math.hypot(self.x - (start.x + t * dx), self.y - (start.y + t * dy))


@dataclass(frozen=True, slots=True)
class BoundingBox:
    """Axis-aligned bounding rectangle.

    Attributes:
        min_x: Minimum X coordinate
        min_y: Minimum Y coordinate
        max_x: Maximum X coordinate
        max_y: Maximum Y coordinate
    """

    min_x: float
    min_y: float
    max_x: float
    max_y: float

    @classmethod
    def of_points(cls, points: Iterable[Point]) -> "BoundingBox":
        """Smallest box containing all points.

        Raises:
            ValueError: If no points are given
        """
        xs: list[float] = []
        ys: list[float] = []
        for point in points:
            xs.append(point.x)
            ys.append(point.y)
        if not xs:
            raise ValueError("Bounding box of an empty point set")
        return cls(min(xs), min(ys), max(xs), max(ys))

    @property
    def width(self) -> float:
        return self.max_x - self.min_x

    @property
    def height(self) -> float:
        return self.max_y - self.min_y

    def intersects(self, other: "BoundingBox", tolerance: float = 0.0) -> bool:
        """Check whether two boxes overlap or touch (within tolerance)."""
        return not (
            self.max_x + tolerance < other.min_x
            or other.max_x + tolerance < self.min_x
            or self.max_y + tolerance < other.min_y
            or other.max_y + tolerance < self.min_y
        )

    def contains(self, other: "BoundingBox") -> bool:
        """Check whether the other box lies entirely within this one."""
        return (
            self.min_x <= other.min_x
            and self.min_y <= other.min_y
            and other.max_x <= self.max_x
            and other.max_y <= self.max_y
        )

    def contains_point(self, point: Point, tolerance: float = 0.0) -> bool:
        return (
            self.min_x - tolerance <= point.x <= self.max_x + tolerance
            and self.min_y - tolerance <= point.y <= self.max_y + tolerance
        )

    def union(self, other: "BoundingBox") -> "BoundingBox":
        """Smallest box containing both boxes."""
        return BoundingBox(
            min(self.min_x, other.min_x),
            min(self.min_y, other.min_y),
            max(self.max_x, other.max_x),
            max(self.max_y, other.max_y),
        )


def _as_point(value: Point | Sequence[float]) -> Point:
    if isinstance(value, Point):
        point = value
    else:
        x, y = value
        point = Point(float(x), float(y))
    if not (math.isfinite(point.x) and math.isfinite(point.y)):
        raise InvalidGeometryError(f"Ring point has a non-finite coordinate: {point.to_tuple()}")
    return point


@dataclass(frozen=True, slots=True)
class Ring:
    """A simple closed ring of points.

    The closing point is implicit: the last point connects back to the
    first. Construction drops consecutive duplicate points and a repeated
    closing point, then rejects rings that cannot bound area.

    Positive signed area means counter-clockwise winding (an outer
    boundary), negative means clockwise winding (a hole).

    Attributes:
        points: Ring vertices in boundary order

    Raises:
        InvalidGeometryError: If a coordinate is not finite, fewer than 3
            distinct points remain, or the ring has zero area
    """

    points: tuple[Point, ...]
    _signed_area: float = field(init=False, repr=False, compare=False)
    _bounding_box: BoundingBox = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        cleaned: list[Point] = []
        for value in self.points:
            point = _as_point(value)
            if cleaned and cleaned[-1] == point:
                continue
            cleaned.append(point)
        while len(cleaned) > 1 and cleaned[-1] == cleaned[0]:
            cleaned.pop()

        if len(cleaned) < 3:
            raise InvalidGeometryError(
                f"Ring needs at least 3 distinct points, got {len(cleaned)}"
            )

        area = 0.0
        n = len(cleaned)
        for i in range(n):
            j = (i + 1) % n
            area += cleaned[i].x * cleaned[j].y
            area -= cleaned[j].x * cleaned[i].y
        area /= 2.0

        if area == 0.0:
            raise InvalidGeometryError("Ring has zero area")

        object.__setattr__(self, "points", tuple(cleaned))
        object.__setattr__(self, "_signed_area", area)
        object.__setattr__(self, "_bounding_box", BoundingBox.of_points(cleaned))

    @classmethod
    def from_coords(cls, coords: Iterable[Sequence[float]]) -> "Ring":
        """Create a ring from (x, y) pairs."""
        return cls(tuple(_as_point(c) for c in coords))

    def __len__(self) -> int:
        return len(self.points)

    def __iter__(self) -> Iterator[Point]:
        return iter(self.points)

    def __getitem__(self, index: int) -> Point:
        return self.points[index]

    @property
    def signed_area(self) -> float:
        """Signed area from the shoelace formula (positive = counter-clockwise)."""
        return self._signed_area

    @property
    def area(self) -> float:
        return abs(self._signed_area)

    @property
    def winding(self) -> WindingDirection:
        if self._signed_area > 0:
            return WindingDirection.COUNTER_CLOCKWISE
        return WindingDirection.CLOCKWISE

    @property
    def is_hole(self) -> bool:
        """Clockwise rings are holes."""
        return self._signed_area < 0

    @property
    def bounding_box(self) -> BoundingBox:
        return self._bounding_box

    def segment(self, index: int) -> tuple[Point, Point]:
        """Segment starting at vertex index, wrapping to the first vertex."""
        return self.points[index], self.points[(index + 1) % len(self.points)]

    def segments(self) -> Iterator[tuple[Point, Point]]:
        """Iterate over the ring's segments, including the closing one."""
        n = len(self.points)
        for i in range(n):
            yield self.points[i], self.points[(i + 1) % n]

    def winding_number(self, point: Point) -> int:
        """Number of times the ring winds around a point.

        Counter-clockwise turns count positive. Points exactly on the
        boundary get an arbitrary but deterministic answer; use locate()
        when the boundary matters.

        Args:
            point: Point to test

        Returns:
            Winding number (0 means the point is outside)
        """
        wn = 0
        for start, end in self.segments():
            is_left = (end.x - start.x) * (point.y - start.y) - (point.x - start.x) * (
                end.y - start.y
            )
            if start.y <= point.y:
                if end.y > point.y and is_left > 0:
                    wn += 1
            elif end.y <= point.y and is_left < 0:
                wn -= 1
        return wn

    def on_boundary(self, point: Point, tolerance: float = DEFAULT_TOLERANCE) -> bool:
        """Check whether a point lies on the ring within tolerance."""
        if not self._bounding_box.contains_point(point, tolerance):
            return False
        return any(
            point.distance_to_segment(start, end) <= tolerance for start, end in self.segments()
        )

    def locate(self, point: Point, tolerance: float = DEFAULT_TOLERANCE) -> PointLocation:
        """Locate a point relative to the ring, ignoring orientation.

        Args:
            point: Point to locate
            tolerance: Distance within which the point counts as on the boundary

        Returns:
            BOUNDARY, INSIDE (non-zero winding) or OUTSIDE
        """
        if self.on_boundary(point, tolerance):
            return PointLocation.BOUNDARY
        if self.winding_number(point) != 0:
            return PointLocation.INSIDE
        return PointLocation.OUTSIDE

    def contains(self, point: Point, tolerance: float = DEFAULT_TOLERANCE) -> bool:
        """Check if a point is strictly inside the ring."""
        return self.locate(point, tolerance) is PointLocation.INSIDE

    def reversed(self) -> "Ring":
        """Same boundary walked in the opposite direction."""
        return Ring(tuple(reversed(self.points)))

    def significant_points(self, tolerance: float = DEFAULT_TOLERANCE) -> tuple[Point, ...]:
        """Vertices left after dropping those lying on the segment between their neighbours.

        Falls back to all vertices if dropping would leave fewer than three.
        """
        points = list(self.points)
        changed = True
        while changed and len(points) > 3:
            changed = False
            for i in range(len(points)):
                prev_point = points[i - 1]
                next_point = points[(i + 1) % len(points)]
                if points[i].distance_to_segment(prev_point, next_point) <= tolerance:
                    del points[i]
                    changed = True
                    break
        return tuple(points)

    def spatially_equal(self, other: "Ring", tolerance: float = DEFAULT_TOLERANCE) -> bool:
        """Check whether two rings trace the same boundary in the same direction.

        The start point and collinear intermediate vertices do not matter.

        Args:
            other: Ring to compare with
            tolerance: Maximum distance between matching vertices

        Returns:
            True if the rings describe the same oriented boundary
        """
        if (self._signed_area > 0) != (other.signed_area > 0):
            return False

        mine = self.significant_points(tolerance)
        theirs = other.significant_points(tolerance)
        n = len(mine)
        if n != len(theirs):
            return False

        for offset in range(n):
            if not mine[0].almost_equal(theirs[offset], tolerance):
                continue
            if all(mine[i].almost_equal(theirs[(i + offset) % n], tolerance) for i in range(n)):
                return True
        return False

    def to_coords(self) -> list[list[float]]:
        """Ring as a list of [x, y] pairs."""
        return [[p.x, p.y] for p in self.points]

    def to_dict(self) -> dict[str, Any]:
        """Serialize to dictionary.

        Returns:
            Dictionary with points and winding fields
        """
        return {
            "points": [p.to_dict() for p in self.points],
            "winding": self.winding.name,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Ring":
        """Deserialize from dictionary.

        The winding field is informational; orientation comes from the points.

        Args:
            data: Dictionary with a points field

        Returns:
            Ring instance
        """
        return cls(tuple(Point.from_dict(p) for p in data["points"]))
