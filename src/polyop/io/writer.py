"""Polygon writer for saving operation results."""

import json
from pathlib import Path

from polyop.domain import Polygon
from polyop.exceptions import PolygonSaveError
from polyop.io.converter import FORMAT_RINGS, polygon_to_data


class PolygonWriter:
    """Writes polygons as JSON documents.

    An empty result (None) is written as a document without rings.

    Example:
        writer = PolygonWriter(Path("result.json"), fmt="geojson")
        writer.save(result)
    """

    def __init__(self, output_path: Path, fmt: str = FORMAT_RINGS, indent: int | None = 2) -> None:
        """Initialize the polygon writer.

        Args:
            output_path: Path where the polygon will be saved
            fmt: Output format ('rings' or 'geojson')
            indent: JSON indentation (None for compact output)
        """
        self._output_path = output_path
        self._fmt = fmt
        self._indent = indent

    def save(self, polygon: Polygon | None) -> None:
        """Save the polygon to the output path.

        Raises:
            PolygonSaveError: If the document cannot be built or written
        """
        try:
            data = polygon_to_data(polygon, self._fmt)
        except ValueError as e:
            raise PolygonSaveError(str(self._output_path), str(e)) from e

        try:
            with self._output_path.open("w", encoding="utf-8") as f:
                json.dump(data, f, indent=self._indent)
                f.write("\n")
        except OSError as e:
            raise PolygonSaveError(str(self._output_path), str(e)) from e


def write_polygon(polygon: Polygon | None, path: Path, fmt: str = FORMAT_RINGS) -> None:
    """Save a polygon in one call."""
    PolygonWriter(path, fmt).save(polygon)
