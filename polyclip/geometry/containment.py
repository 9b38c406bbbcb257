"""Point location relative to a ring: inside, outside or on its boundary."""

from enum import Enum
from typing import Optional, Sequence

from ..models.geometry import Coord
from .intersect import distance_to_segment
from .metrics import coordinate_magnitude


class PointLocation(Enum):
    """Location of a point relative to a polygon."""
    INSIDE = "inside"
    OUTSIDE = "outside"
    BOUNDARY = "boundary"


def _resolve_tolerance(point: Coord, coords: Sequence[Coord], tolerance: Optional[float]) -> float:
    if tolerance is not None:
        return tolerance
    from ..tolerance import get_tolerance
    return get_tolerance().scaled(coordinate_magnitude([point], coords))


def find_boundary_edge(
    point: Coord,
    coords: Sequence[Coord],
    tolerance: Optional[float] = None,
) -> Optional[int]:
    """Index of the first edge (coords[i] -> coords[i + 1]) the point lies on.

    Args:
        point: Point to test
        coords: Ring vertices (implicitly closed)
        tolerance: Distance tolerance (defaults to the active setting)

    Returns:
        Edge index, or None if the point is not on the boundary
    """
    tol = _resolve_tolerance(point, coords, tolerance)
    n = len(coords)
    for i in range(n):
        if distance_to_segment(point, coords[i], coords[(i + 1) % n]) <= tol:
            return i
    return None


def ray_cast_inside(point: Coord, coords: Sequence[Coord]) -> bool:
    """Even-odd ray casting with no boundary band.

    Points exactly on an edge may land on either side.
    """
    x, y = point
    inside = False
    n = len(coords)
    for i in range(n):
        x1, y1 = coords[i]
        x2, y2 = coords[(i + 1) % n]
        # Half-open rule so a ray through a vertex is counted once
        if (y1 > y) != (y2 > y):
            x_cross = x1 + (y - y1) * (x2 - x1) / (y2 - y1)
            if x_cross > x:
                inside = not inside
    return inside


def locate_point(
    point: Coord,
    coords: Sequence[Coord],
    tolerance: Optional[float] = None,
) -> PointLocation:
    """Classify point against a ring using ray casting.

    Points within tolerance of any edge are reported as BOUNDARY, a third
    state distinct from inside and outside.

    Args:
        point: Point to test
        coords: Ring vertices (implicitly closed)
        tolerance: Distance tolerance (defaults to the active setting)

    Returns:
        PointLocation
    """
    if len(coords) < 3:
        return PointLocation.OUTSIDE

    tol = _resolve_tolerance(point, coords, tolerance)
    if find_boundary_edge(point, coords, tol) is not None:
        return PointLocation.BOUNDARY
    if ray_cast_inside(point, coords):
        return PointLocation.INSIDE
    return PointLocation.OUTSIDE


def point_in_polygon(
    point: Coord,
    coords: Sequence[Coord],
    include_boundary: bool = True,
    tolerance: Optional[float] = None,
) -> bool:
    """Quick check if a point is within a ring.

    Args:
        point: Point to test
        coords: Ring vertices
        include_boundary: Whether boundary points count as inside
        tolerance: Distance tolerance (defaults to the active setting)

    Returns:
        True if point is inside (or on the boundary, when included)
    """
    location = locate_point(point, coords, tolerance)
    if location == PointLocation.BOUNDARY:
        return include_boundary
    return location == PointLocation.INSIDE
