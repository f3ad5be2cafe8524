"""Domain models for polyop.

This module contains the value types the polygon engine works on. All
models are immutable (frozen dataclasses) and independent of the engine.

Key classes:
- Point: An immutable 2D point
- BoundingBox: Axis-aligned bounding rectangle
- Ring: A simple closed ring; outer or hole by orientation
- Polygon: A region bounded by rings
- Crossing: A point shared by the boundaries of two polygons
- OperationKind: Intersection, union, xor or difference
"""

from polyop.domain.crossing import BoundaryLocation, Crossing, CrossingKind
from polyop.domain.operation import OperationKind
from polyop.domain.polygon import Polygon
from polyop.domain.ring import BoundingBox, Point, PointLocation, Ring, WindingDirection

__all__: list[str] = [
    # Enums
    "WindingDirection",
    "PointLocation",
    "CrossingKind",
    "OperationKind",
    # Core types
    "Point",
    "BoundingBox",
    "Ring",
    "Polygon",
    "BoundaryLocation",
    "Crossing",
]
