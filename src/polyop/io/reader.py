"""Polygon reader for loading JSON polygon files.

This module provides the PolygonReader class for loading polygon files
and converting them into domain models.
"""

import json
from pathlib import Path

from polyop.domain import Polygon
from polyop.exceptions import InvalidGeometryError, PolygonLoadError
from polyop.io.converter import data_to_polygon, detect_format


class PolygonReader:
    """Loads polygons from ring-list or GeoJSON files.

    Example:
        reader = PolygonReader(Path("shape.json"))
        reader.load()
        print(reader.polygon.area)
    """

    def __init__(self, path: Path) -> None:
        """Initialize the polygon reader.

        Args:
            path: Path to the JSON file
        """
        self._path = path
        self._polygon: Polygon | None = None
        self._format: str | None = None

    def load(self) -> Polygon:
        """Load and validate the polygon file.

        Returns:
            The loaded polygon

        Raises:
            PolygonLoadError: If the file is missing, is not JSON, or does not
                describe valid rings
        """
        if not self._path.exists():
            raise PolygonLoadError(str(self._path), "file not found")

        try:
            with self._path.open(encoding="utf-8") as f:
                data = json.load(f)
        except (OSError, json.JSONDecodeError) as e:
            raise PolygonLoadError(str(self._path), str(e)) from e

        try:
            polygon = data_to_polygon(data)
        except (InvalidGeometryError, KeyError, TypeError, ValueError) as e:
            raise PolygonLoadError(str(self._path), str(e)) from e

        self._format = detect_format(data)
        self._polygon = polygon
        return polygon

    @property
    def format(self) -> str:
        """Return the document format ('rings' or 'geojson').

        Raises:
            RuntimeError: If the file has not been loaded yet
        """
        if self._format is None:
            raise RuntimeError("Polygon not loaded. Call load() first.")
        return self._format

    @property
    def polygon(self) -> Polygon:
        """Return the loaded polygon.

        Raises:
            RuntimeError: If the file has not been loaded yet
        """
        if self._polygon is None:
            raise RuntimeError("Polygon not loaded. Call load() first.")
        return self._polygon


def read_polygon(path: Path) -> Polygon:
    """Load a polygon file in one call."""
    return PolygonReader(path).load()
