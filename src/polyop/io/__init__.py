"""Polygon I/O layer for polyop.

This module handles reading and writing polygon files as JSON, either as
ring lists or as GeoJSON geometries.

Key classes:
- PolygonReader: Load polygons from files
- PolygonWriter: Save polygons to files
"""

from polyop.io.converter import (
    FORMAT_GEOJSON,
    FORMAT_RINGS,
    data_to_polygon,
    detect_format,
    polygon_to_data,
    polygon_to_geojson,
)
from polyop.io.reader import PolygonReader, read_polygon
from polyop.io.writer import PolygonWriter, write_polygon

__all__ = [
    "FORMAT_GEOJSON",
    "FORMAT_RINGS",
    "PolygonReader",
    "PolygonWriter",
    "data_to_polygon",
    "detect_format",
    "polygon_to_data",
    "polygon_to_geojson",
    "read_polygon",
    "write_polygon",
]
