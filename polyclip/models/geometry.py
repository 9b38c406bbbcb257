"""Point, polygon and multi-polygon models."""

from enum import Enum
from typing import Iterable, Iterator

from pydantic import BaseModel, ConfigDict, Field, RootModel

from ..errors import IndexOutOfRangeError

# Type aliases
Coord = tuple[float, float]
Coords = list[Coord]


class WindingOrder(Enum):
    """Direction in which a ring's vertices are traversed."""
    CLOCKWISE = "clockwise"
    COUNTER_CLOCKWISE = "counter_clockwise"


class BooleanOperation(Enum):
    """Set operation between two polygons (DIFFERENCE is subject minus clip)."""
    UNION = "union"
    INTERSECTION = "intersection"
    DIFFERENCE = "difference"


class Point(BaseModel):
    """2D point with finite double-precision coordinates."""

    model_config = ConfigDict(frozen=True)

    x: float = Field(..., allow_inf_nan=False, description="X coordinate")
    y: float = Field(..., allow_inf_nan=False, description="Y coordinate")

    def as_tuple(self) -> Coord:
        return (self.x, self.y)


class Polygon(BaseModel):
    """Simple polygon stored as a single implicitly closed ring.

    Points are appended during construction; boolean operations and
    transforms return new polygons and leave their operands untouched.
    Point order is significant: it defines the winding and the edge
    sequence. Use ``normalized()`` for order-insensitive comparison.
    """

    points: list[Point] = Field(default_factory=list, description="Ring vertices in order")

    @classmethod
    def from_coords(cls, coords: Iterable[tuple[float, float]]) -> "Polygon":
        """Create polygon from (x, y) pairs."""
        return cls(points=[Point(x=x, y=y) for x, y in coords])

    def add_point(self, x: float, y: float) -> None:
        """Append a vertex to the ring."""
        self.points.append(Point(x=x, y=y))

    def __len__(self) -> int:
        return len(self.points)

    @property
    def point_count(self) -> int:
        return len(self.points)

    def get_point(self, index: int) -> Point:
        """Get vertex at index (0 <= index < point_count)."""
        if not 0 <= index < len(self.points):
            raise IndexOutOfRangeError(
                f"Point index {index} out of range for polygon with {len(self.points)} points"
            )
        return self.points[index]

    @property
    def coords(self) -> Coords:
        """Vertices as (x, y) tuples, without a closing repeat."""
        return [p.as_tuple() for p in self.points]

    @property
    def area(self) -> float:
        from ..geometry.metrics import polygon_area
        return polygon_area(self.coords)

    @property
    def signed_area(self) -> float:
        from ..geometry.metrics import signed_area
        return signed_area(self.coords)

    @property
    def winding_order(self) -> WindingOrder:
        """Winding order; raises InvalidGeometryError below 3 points."""
        from ..geometry.metrics import winding_order
        return winding_order(self.coords)

    @property
    def perimeter(self) -> float:
        from ..geometry.metrics import perimeter
        return perimeter(self.coords)

    @property
    def bounds(self) -> tuple[float, float, float, float]:
        from ..geometry.metrics import bounds
        return bounds(self.coords)

    @property
    def centroid(self) -> Point:
        from ..geometry.metrics import centroid
        x, y = centroid(self.coords)
        return Point(x=x, y=y)

    def reversed(self) -> "Polygon":
        """Copy with the opposite winding order."""
        return Polygon(points=list(reversed(self.points)))

    def normalized(self) -> "Polygon":
        """Copy in counter-clockwise order starting at the smallest (x, y) vertex."""
        points = list(self.points)
        if len(points) >= 3 and self.signed_area < 0:
            points.reverse()
        if points:
            start = min(range(len(points)), key=lambda i: points[i].as_tuple())
            points = points[start:] + points[:start]
        return Polygon(points=points)

    def union(self, other: "Polygon") -> "MultiPolygon":
        from ..geometry.polygon_ops import union_polygons
        return union_polygons(self, other)

    def intersection(self, other: "Polygon") -> "MultiPolygon":
        from ..geometry.polygon_ops import intersect_polygons
        return intersect_polygons(self, other)

    def difference(self, other: "Polygon") -> "MultiPolygon":
        """Region of this polygon not covered by ``other``."""
        from ..geometry.polygon_ops import subtract_polygons
        return subtract_polygons(self, other)


class MultiPolygon(RootModel[list[Polygon]]):
    """Ordered collection of independent rings returned by a boolean operation.

    May be empty. Rings are never merged or deduplicated.
    """

    root: list[Polygon] = Field(default_factory=list)

    def __iter__(self) -> Iterator[Polygon]:  # type: ignore[override]
        return iter(self.root)

    def __getitem__(self, index: int) -> Polygon:
        return self.root[index]

    def __len__(self) -> int:
        return len(self.root)

    @property
    def is_empty(self) -> bool:
        return not self.root

    @property
    def total_area(self) -> float:
        """Sum of ring areas."""
        return sum(p.area for p in self.root)
