"""polyop - Boolean operations on 2D polygons.

polyop computes the intersection, union, exclusive-or and difference of
polygons made of simple closed rings. Counter-clockwise rings bound area,
clockwise rings are holes.

Example:
    >>> from polyop import Polygon, intersect
    >>> a = Polygon.from_coords([[(0, 0), (4, 0), (4, 4), (0, 4)]])
    >>> b = Polygon.from_coords([[(2, 2), (6, 2), (6, 6), (2, 6)]])
    >>> intersect(a, b).area
    4.0
"""

from polyop.core.operations import (
    OperationKind,
    PolygonOperator,
    difference,
    find_point_crossings,
    intersect,
    union,
    xor,
)
from polyop.domain import BoundingBox, Point, Polygon, Ring

__version__ = "0.1.0"

__all__ = [
    "BoundingBox",
    "OperationKind",
    "Point",
    "Polygon",
    "PolygonOperator",
    "Ring",
    "__version__",
    "difference",
    "find_point_crossings",
    "intersect",
    "union",
    "xor",
]
