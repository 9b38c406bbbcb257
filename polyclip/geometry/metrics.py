"""Area, winding order and other ring measurements."""

import math
from typing import Sequence

from ..errors import InvalidGeometryError
from ..models.geometry import Coord, WindingOrder


def signed_area(coords: Sequence[Coord]) -> float:
    """Compute signed area using shoelace formula.

    Positive = counter-clockwise, negative = clockwise. Rings with fewer
    than 3 points have zero area. Coordinates are taken relative to the
    first vertex so large offsets do not swamp the products.
    """
    n = len(coords)
    if n < 3:
        return 0.0

    x0, y0 = coords[0]
    area = 0.0
    for i in range(n):
        x1, y1 = coords[i][0] - x0, coords[i][1] - y0
        x2, y2 = coords[(i + 1) % n][0] - x0, coords[(i + 1) % n][1] - y0
        area += x1 * y2 - x2 * y1

    return area / 2.0


def polygon_area(coords: Sequence[Coord]) -> float:
    """Get area of ring in square units (never negative)."""
    return abs(signed_area(coords))


def winding_order(coords: Sequence[Coord]) -> WindingOrder:
    """Classify ring direction from the sum of (x2 - x1) * (y2 + y1) over edges.

    Args:
        coords: Ring vertices

    Returns:
        CLOCKWISE for a positive sum, COUNTER_CLOCKWISE otherwise

    Raises:
        InvalidGeometryError: If ring has fewer than 3 points
    """
    n = len(coords)
    if n < 3:
        raise InvalidGeometryError(f"Polygon must have at least 3 points, got {n}")

    total = 0.0
    for i in range(n):
        x1, y1 = coords[i]
        x2, y2 = coords[(i + 1) % n]
        total += (x2 - x1) * (y2 + y1)

    return WindingOrder.CLOCKWISE if total > 0 else WindingOrder.COUNTER_CLOCKWISE


def perimeter(coords: Sequence[Coord]) -> float:
    """Length of the closed ring boundary."""
    n = len(coords)
    if n < 2:
        return 0.0
    total = 0.0
    for i in range(n):
        x1, y1 = coords[i]
        x2, y2 = coords[(i + 1) % n]
        total += math.hypot(x2 - x1, y2 - y1)
    return total


def bounds(coords: Sequence[Coord]) -> tuple[float, float, float, float]:
    """Get bounding box of ring.

    Returns:
        Tuple of (min_x, min_y, max_x, max_y), all zero for an empty ring
    """
    if not coords:
        return (0.0, 0.0, 0.0, 0.0)
    xs = [c[0] for c in coords]
    ys = [c[1] for c in coords]
    return (min(xs), min(ys), max(xs), max(ys))


def centroid(coords: Sequence[Coord]) -> Coord:
    """Area centroid of the ring.

    Falls back to the vertex mean when the ring is degenerate (zero area).
    """
    n = len(coords)
    if n == 0:
        return (0.0, 0.0)

    cx = 0.0
    cy = 0.0
    area2 = 0.0
    for i in range(n):
        x1, y1 = coords[i]
        x2, y2 = coords[(i + 1) % n]
        cross = x1 * y2 - x2 * y1
        area2 += cross
        cx += (x1 + x2) * cross
        cy += (y1 + y2) * cross

    if n < 3 or abs(area2) < 1e-12:
        return (
            sum(c[0] for c in coords) / n,
            sum(c[1] for c in coords) / n,
        )

    return (cx / (3.0 * area2), cy / (3.0 * area2))


def coordinate_magnitude(*rings: Sequence[Coord]) -> float:
    """Largest absolute coordinate across the given rings."""
    magnitude = 0.0
    for ring in rings:
        for x, y in ring:
            magnitude = max(magnitude, abs(x), abs(y))
    return magnitude
