"""Converters between JSON documents and domain models.

Two document shapes are understood:
- Ring lists: {"rings": [[[x, y], ...], ...]} (or the bare list of rings)
- GeoJSON: a Polygon or MultiPolygon geometry, or a Feature wrapping one

GeoJSON rings repeat their first point at the end; the repeated point is
dropped on reading and added on writing.
"""

from typing import Any

from polyop.core.resolver import RingNestingTree
from polyop.domain import Polygon, Ring

FORMAT_RINGS = "rings"
FORMAT_GEOJSON = "geojson"


def detect_format(data: Any) -> str:
    """Return FORMAT_GEOJSON for GeoJSON documents, FORMAT_RINGS otherwise."""
    if isinstance(data, dict) and "type" in data:
        return FORMAT_GEOJSON
    return FORMAT_RINGS


def _rings_from_coords(rings: Any) -> list[Ring]:
    if not isinstance(rings, list):
        raise ValueError("Expected a list of rings")
    return [Ring.from_coords(ring) for ring in rings]


def geojson_to_polygon(data: dict[str, Any]) -> Polygon:
    """Convert a GeoJSON geometry or feature to a Polygon.

    A MultiPolygon's parts are flattened into one polygon; orientation is
    taken from the coordinates as given.

    Args:
        data: GeoJSON Polygon, MultiPolygon or Feature

    Returns:
        Domain Polygon

    Raises:
        ValueError: If the geometry type is not supported
    """
    geometry_type = data.get("type")
    if geometry_type == "Feature":
        geometry = data.get("geometry")
        if not isinstance(geometry, dict):
            raise ValueError("Feature has no geometry")
        return geojson_to_polygon(geometry)
    if geometry_type == "Polygon":
        return Polygon(tuple(_rings_from_coords(data["coordinates"])))
    if geometry_type == "MultiPolygon":
        rings: list[Ring] = []
        for part in data["coordinates"]:
            rings.extend(_rings_from_coords(part))
        return Polygon(tuple(rings))
    raise ValueError(f"Unsupported GeoJSON type: {geometry_type!r}")


def data_to_polygon(data: Any) -> Polygon:
    """Convert a parsed JSON document to a Polygon.

    Args:
        data: Ring-list document or GeoJSON geometry

    Returns:
        Domain Polygon (empty if the document has no rings)
    """
    if detect_format(data) == FORMAT_GEOJSON:
        return geojson_to_polygon(data)
    if isinstance(data, dict):
        if "rings" not in data:
            raise ValueError("Expected a 'rings' field")
        data = data["rings"]
    return Polygon(tuple(_rings_from_coords(data)))


def _closed(ring: Ring) -> list[list[float]]:
    coords = ring.to_coords()
    coords.append(list(coords[0]))
    return coords


def polygon_to_geojson(polygon: Polygon | None) -> dict[str, Any]:
    """Convert a Polygon to a GeoJSON MultiPolygon.

    Each counter-clockwise ring starts a part; a clockwise ring joins the
    part of the ring it sits in directly.

    Args:
        polygon: Polygon to convert (None for an empty result)

    Returns:
        GeoJSON MultiPolygon geometry
    """
    if polygon is None or polygon.is_empty:
        return {"type": "MultiPolygon", "coordinates": []}

    tree = RingNestingTree.build(polygon.rings)
    parts: dict[int, list[list[list[float]]]] = {}
    orphans: list[int] = []

    for idx, ring in enumerate(polygon.rings):
        if not ring.is_hole:
            parts[idx] = [_closed(ring)]

    for idx, ring in enumerate(polygon.rings):
        if not ring.is_hole:
            continue
        parent = tree.nodes[idx].parent
        if parent is not None and parent in parts:
            parts[parent].append(_closed(ring))
        else:
            orphans.append(idx)

    coordinates = [parts[idx] for idx in sorted(parts)]
    coordinates.extend([[_closed(polygon.rings[idx])] for idx in orphans])
    return {"type": "MultiPolygon", "coordinates": coordinates}


def polygon_to_data(polygon: Polygon | None, fmt: str = FORMAT_RINGS) -> dict[str, Any]:
    """Convert a Polygon to a JSON-ready document.

    Args:
        polygon: Polygon to convert (None for an empty result)
        fmt: FORMAT_RINGS or FORMAT_GEOJSON

    Returns:
        Document ready for json.dump
    """
    if fmt == FORMAT_GEOJSON:
        return polygon_to_geojson(polygon)
    if fmt != FORMAT_RINGS:
        raise ValueError(f"Unknown output format: {fmt!r}")
    if polygon is None:
        return {"rings": []}
    return polygon.to_dict()
