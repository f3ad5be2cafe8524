"""Crossing types shared by the crossing finder and the crossing graph.

This module defines:
- BoundaryLocation: Position on a polygon boundary (ring, segment, ratio)
- CrossingKind: Whether an operand enters, exits or only touches the other
- Crossing: A point shared by the boundaries of two polygons
"""

from dataclasses import dataclass
from enum import Enum, auto
from typing import Any

from polyop.domain.ring import Point


class CrossingKind(Enum):
    """How an operand's boundary passes through a crossing.

    - ENTRY: arrives from outside the other operand and continues inside it
    - EXIT: arrives from inside the other operand and continues outside it
    - TOUCH: stays on one side, or runs along the other's boundary
    """

    ENTRY = auto()
    EXIT = auto()
    TOUCH = auto()


@dataclass(frozen=True, slots=True, order=True)
class BoundaryLocation:
    """Position on a polygon boundary.

    Orders by ring, then segment, then ratio along the segment.

    Attributes:
        ring_index: Index of the ring within its polygon
        segment_index: Index of the segment (starting at that vertex)
        ratio: Parametric position along the segment, in [0, 1)
    """

    ring_index: int
    segment_index: int
    ratio: float

    @property
    def is_vertex(self) -> bool:
        return self.ratio == 0.0


@dataclass(frozen=True, slots=True)
class Crossing:
    """A point where the boundaries of polygons A and B meet.

    Attributes:
        point: Shared coordinate
        location_a: Position on polygon A
        location_b: Position on polygon B
        kind_a: How A passes through the point with respect to B (None until classified)
        kind_b: How B passes through the point with respect to A (None until classified)
    """

    point: Point
    location_a: BoundaryLocation
    location_b: BoundaryLocation
    kind_a: CrossingKind | None = None
    kind_b: CrossingKind | None = None

    def to_dict(self) -> dict[str, Any]:
        return {
            "point": [self.point.x, self.point.y],
            "a": {
                "ring": self.location_a.ring_index,
                "segment": self.location_a.segment_index,
                "ratio": self.location_a.ratio,
                "kind": self.kind_a.name if self.kind_a else None,
            },
            "b": {
                "ring": self.location_b.ring_index,
                "segment": self.location_b.segment_index,
                "ratio": self.location_b.ratio,
                "kind": self.kind_b.name if self.kind_b else None,
            },
        }
