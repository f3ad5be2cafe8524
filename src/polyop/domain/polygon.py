"""Polygon model built from rings.

A polygon is an ordered collection of rings with no parent/child links.
Which rings are holes follows from their orientation alone.
"""

from collections.abc import Iterable, Iterator, Sequence
from dataclasses import dataclass
from typing import Any

from polyop.config.settings import DEFAULT_TOLERANCE
from polyop.domain.ring import BoundingBox, Point, PointLocation, Ring
from polyop.exceptions import InvalidGeometryError


@dataclass(frozen=True, slots=True)
class Polygon:
    """A region bounded by one or more rings.

    A point belongs to the polygon when the winding numbers of all rings
    around it sum to a positive value, so a clockwise ring inside a
    counter-clockwise one cuts a hole.

    Attributes:
        rings: Outer boundaries and holes in any order
    """

    rings: tuple[Ring, ...] = ()

    def __post_init__(self) -> None:
        rings = tuple(self.rings)
        for ring in rings:
            if not isinstance(ring, Ring):
                raise InvalidGeometryError(f"Polygon ring must be a Ring, got {type(ring).__name__}")
        object.__setattr__(self, "rings", rings)

    @classmethod
    def from_coords(cls, rings: Iterable[Iterable[Sequence[float]]]) -> "Polygon":
        """Create a polygon from nested (x, y) coordinate lists.

        Example:
            >>> Polygon.from_coords([[(0, 0), (1, 0), (1, 1)]]).area
            0.5
        """
        return cls(tuple(Ring.from_coords(ring) for ring in rings))

    def __len__(self) -> int:
        return len(self.rings)

    def __iter__(self) -> Iterator[Ring]:
        return iter(self.rings)

    def __getitem__(self, index: int) -> Ring:
        return self.rings[index]

    @property
    def is_empty(self) -> bool:
        return not self.rings

    @property
    def outer_rings(self) -> list[Ring]:
        return [ring for ring in self.rings if not ring.is_hole]

    @property
    def holes(self) -> list[Ring]:
        return [ring for ring in self.rings if ring.is_hole]

    @property
    def bounding_box(self) -> BoundingBox | None:
        """Box around all rings, or None for an empty polygon."""
        if not self.rings:
            return None
        box = self.rings[0].bounding_box
        for ring in self.rings[1:]:
            box = box.union(ring.bounding_box)
        return box

    @property
    def area(self) -> float:
        """Net area: outer rings add, holes subtract."""
        return sum(ring.signed_area for ring in self.rings)

    def winding_number(self, point: Point) -> int:
        """Sum of the winding numbers of all rings around a point."""
        return sum(ring.winding_number(point) for ring in self.rings)

    def locate(self, point: Point, tolerance: float = DEFAULT_TOLERANCE) -> PointLocation:
        """Locate a point relative to the polygon's area.

        Args:
            point: Point to locate
            tolerance: Distance within which the point counts as on a boundary

        Returns:
            BOUNDARY if the point is on any ring, else INSIDE or OUTSIDE
        """
        if any(ring.on_boundary(point, tolerance) for ring in self.rings):
            return PointLocation.BOUNDARY
        if self.winding_number(point) > 0:
            return PointLocation.INSIDE
        return PointLocation.OUTSIDE

    def contains(self, point: Point, tolerance: float = DEFAULT_TOLERANCE) -> bool:
        """Check if a point is strictly inside the polygon."""
        return self.locate(point, tolerance) is PointLocation.INSIDE

    def inverted(self) -> "Polygon":
        """Complement of the polygon: every ring reversed."""
        return Polygon(tuple(ring.reversed() for ring in self.rings))

    def spatially_equal(self, other: "Polygon", tolerance: float = DEFAULT_TOLERANCE) -> bool:
        """Check whether both polygons consist of the same oriented rings in any order."""
        if len(self.rings) != len(other.rings):
            return False

        unmatched = list(other.rings)
        for ring in self.rings:
            for i, candidate in enumerate(unmatched):
                if ring.spatially_equal(candidate, tolerance):
                    del unmatched[i]
                    break
            else:
                return False
        return True

    def to_coords(self) -> list[list[list[float]]]:
        return [ring.to_coords() for ring in self.rings]

    def to_dict(self) -> dict[str, Any]:
        """Serialize to dictionary.

        Returns:
            Dictionary with a rings field of [x, y] coordinate lists
        """
        return {"rings": self.to_coords()}

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Polygon":
        """Deserialize from dictionary.

        Args:
            data: Dictionary with a rings field

        Returns:
            Polygon instance
        """
        return cls.from_coords(data["rings"])
