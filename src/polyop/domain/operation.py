"""Boolean operation kinds."""

from enum import Enum


class OperationKind(str, Enum):
    """Boolean operation on two polygons."""

    INTERSECTION = "intersection"
    UNION = "union"
    XOR = "xor"
    DIFFERENCE = "difference"
