"""Polygon-level boolean operations, shape factories and Shapely interop.

Wraps the ring-based clipping engine so callers work with Polygon and
MultiPolygon models, and converts to and from Shapely geometries.
"""

from __future__ import annotations

import logging
import math

from ..errors import InvalidGeometryError
from ..models.geometry import BooleanOperation, Coords, MultiPolygon, Polygon
from ..models.tolerance import ToleranceConfig
from .clipping import clip_rings

logger = logging.getLogger(__name__)


def polygon_from_coords(coords: Coords) -> Polygon:
    """Create Polygon from coordinate list.

    A closing point equal to the first point is dropped, so both open and
    Closed rings (last point repeating the first) are accepted.

    Args:
        coords: List of (x, y) tuples forming polygon ring

    Returns:
        Polygon
    """
    coords = list(coords)
    if len(coords) > 1 and tuple(coords[0]) == tuple(coords[-1]):
        coords = coords[:-1]
    return Polygon.from_coords(coords)


def polygon_to_coords(polygon: Polygon, closed: bool = False) -> Coords:
    """Extract coordinates from Polygon.

    Args:
        polygon: Polygon
        closed: Repeat the first point at the end

    Returns:
        List of (x, y) tuples
    """
    coords = polygon.coords
    if closed and coords:
        coords.append(coords[0])
    return coords


def clip_polygons(
    subject: Polygon,
    clip: Polygon,
    operation: BooleanOperation,
    tolerance: ToleranceConfig | None = None,
) -> MultiPolygon:
    """Apply a boolean operation between two polygons.

    Args:
        subject: First operand
        clip: Second operand
        operation: UNION, INTERSECTION or DIFFERENCE (subject - clip)
        tolerance: Optional settings overriding the process-wide tolerance

    Returns:
        MultiPolygon of new rings (may be empty)

    Raises:
        InvalidGeometryError: If either polygon has fewer than 3 points
    """
    rings = clip_rings(subject.coords, clip.coords, operation, tolerance)
    return MultiPolygon([Polygon.from_coords(ring) for ring in rings])


def union_polygons(a: Polygon, b: Polygon, tolerance: ToleranceConfig | None = None) -> MultiPolygon:
    """Compute union of two polygons.

    Disjoint inputs give two rings; touching rings are not merged.
    """
    return clip_polygons(a, b, BooleanOperation.UNION, tolerance)


def intersect_polygons(a: Polygon, b: Polygon, tolerance: ToleranceConfig | None = None) -> MultiPolygon:
    """Compute intersection of two polygons (empty when they do not overlap)."""
    return clip_polygons(a, b, BooleanOperation.INTERSECTION, tolerance)


def subtract_polygons(
    base: Polygon,
    subtract: Polygon,
    tolerance: ToleranceConfig | None = None,
) -> MultiPolygon:
    """Subtract one polygon from another.

    Args:
        base: Polygon to subtract from
        subtract: Polygon to remove

    Returns:
        Remaining rings. If ``subtract`` lies strictly inside ``base`` the
        result would need a hole; ``base`` is returned unchanged instead.
    """
    return clip_polygons(base, subtract, BooleanOperation.DIFFERENCE, tolerance)


def get_polygon_area(polygon: Polygon | MultiPolygon | None) -> float:
    """Get area of polygon in square units.

    Args:
        polygon: Polygon or MultiPolygon to measure

    Returns:
        Area in square units
    """
    if polygon is None:
        return 0.0
    if isinstance(polygon, MultiPolygon):
        return polygon.total_area
    return polygon.area


def create_rectangle(
    center_x: float,
    center_y: float,
    width: float,
    height: float,
) -> Polygon:
    """Create a counter-clockwise rectangle polygon centered at given point.

    Args:
        center_x: X coordinate of center
        center_y: Y coordinate of center
        width: Rectangle width
        height: Rectangle height

    Returns:
        Rectangle Polygon
    """
    if width <= 0 or height <= 0:
        raise ValueError(f"Rectangle dimensions must be positive, got {width} x {height}")

    half_w = width / 2
    half_h = height / 2

    return Polygon.from_coords([
        (center_x - half_w, center_y - half_h),
        (center_x + half_w, center_y - half_h),
        (center_x + half_w, center_y + half_h),
        (center_x - half_w, center_y + half_h),
    ])


def create_regular_polygon(
    sides: int,
    center_x: float,
    center_y: float,
    radius: float,
    rotation: float = 0.0,
) -> Polygon:
    """Create a regular polygon inscribed in a circle.

    Vertex i sits at angle ``rotation + 2*pi*i/sides``, so vertices run
    counter-clockwise starting on the positive x axis when rotation is 0.

    Args:
        sides: Number of vertices (>= 3)
        center_x: X coordinate of center
        center_y: Y coordinate of center
        radius: Circumradius
        rotation: Angle of the first vertex in radians

    Returns:
        Regular Polygon
    """
    if sides < 3:
        raise InvalidGeometryError(f"Regular polygon needs at least 3 sides, got {sides}")
    if radius <= 0:
        raise ValueError(f"Radius must be positive, got {radius}")

    polygon = Polygon()
    for i in range(sides):
        angle = rotation + 2 * math.pi * i / sides
        polygon.add_point(center_x + radius * math.cos(angle), center_y + radius * math.sin(angle))
    return polygon


def calculate_apothem(sides: int, circumradius: float) -> float:
    """Inradius of a regular polygon with the given circumradius."""
    return circumradius * math.cos(math.pi / sides)


def rotate_polygon(
    polygon: Polygon,
    angle: float,
    origin: tuple[float, float] = (0.0, 0.0),
) -> Polygon:
    """Rotate polygon counter-clockwise by angle (radians) about origin."""
    ox, oy = origin
    cos_a = math.cos(angle)
    sin_a = math.sin(angle)
    return Polygon.from_coords(
        (
            ox + (x - ox) * cos_a - (y - oy) * sin_a,
            oy + (x - ox) * sin_a + (y - oy) * cos_a,
        )
        for x, y in polygon.coords
    )


def scale_polygon(
    polygon: Polygon,
    factor: float,
    origin: tuple[float, float] = (0.0, 0.0),
) -> Polygon:
    """Scale polygon uniformly about origin."""
    ox, oy = origin
    return Polygon.from_coords(
        (ox + (x - ox) * factor, oy + (y - oy) * factor) for x, y in polygon.coords
    )


def to_shapely(polygon: Polygon):
    """Convert to a Shapely Polygon.

    Returns:
        shapely.geometry.Polygon
    """
    from shapely.geometry import Polygon as ShapelyPolygon

    if len(polygon) < 3:
        raise InvalidGeometryError("Shapely conversion requires at least 3 points")
    return ShapelyPolygon(polygon.coords)


def from_shapely(geometry) -> MultiPolygon:
    """Convert a Shapely Polygon or MultiPolygon to a MultiPolygon.

    Only exterior rings are kept; interior rings are dropped with a warning.

    Args:
        geometry: shapely Polygon, MultiPolygon or empty geometry

    Returns:
        MultiPolygon with one ring per polygon part
    """
    from shapely.geometry import MultiPolygon as ShapelyMultiPolygon
    from shapely.geometry import Polygon as ShapelyPolygon

    if geometry is None or geometry.is_empty:
        return MultiPolygon([])

    if isinstance(geometry, ShapelyPolygon):
        parts = [geometry]
    elif isinstance(geometry, ShapelyMultiPolygon):
        parts = list(geometry.geoms)
    else:
        raise TypeError(f"Expected Polygon or MultiPolygon, got {geometry.geom_type}")

    polygons = []
    for part in parts:
        if part.interiors:
            logger.warning(
                f"Dropping {len(part.interiors)} interior ring(s): holes are not supported"
            )
        polygons.append(polygon_from_coords(list(part.exterior.coords)))
    return MultiPolygon(polygons)
