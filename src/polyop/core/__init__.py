"""Core polygon engine.

This module contains the boolean-operation engine:

- Geometric primitives (area, point location, segment intersection)
- Ring crossing finder
- Crossing graph builder and fragment labelling
- Resolver for operands whose boundaries never meet
- Operation driver (intersection, union, xor, difference)

Key classes:
- PolygonOperator: Runs boolean operations with a given configuration
- CrossingGraph: Linked ring nodes of two operands
- RingNestingTree: Containment tree of a polygon's rings
"""

from polyop.core.crossings import find_polygon_crossings, find_ring_crossings
from polyop.core.graph import CrossingGraph, FragmentLabel, Operand
from polyop.core.operations import (
    PolygonOperator,
    difference,
    find_point_crossings,
    intersect,
    union,
    xor,
)
from polyop.core.resolver import (
    Relationship,
    RingNestingTree,
    classify_polygons,
    classify_rings,
    containment_result,
    normalize_orientation,
)

__all__ = [
    "CrossingGraph",
    "FragmentLabel",
    "Operand",
    "PolygonOperator",
    "Relationship",
    "RingNestingTree",
    "classify_polygons",
    "classify_rings",
    "containment_result",
    "difference",
    "find_point_crossings",
    "find_polygon_crossings",
    "find_ring_crossings",
    "intersect",
    "normalize_orientation",
    "union",
    "xor",
]
