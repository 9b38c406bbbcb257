"""Segment/segment intersection with degenerate-case handling.

Classifies the contact between two segments as no contact, a proper
crossing, a touch at an endpoint, or a collinear overlap. All comparisons
use one absolute distance tolerance; parameter-space checks divide it by
the segment length so "near an endpoint" means the same distance on both
segments.
"""

import math
from dataclasses import dataclass
from enum import Enum

from ..models.geometry import Coord
from .metrics import coordinate_magnitude


class IntersectionKind(Enum):
    """How two segments meet."""
    NONE = "none"
    CROSSING = "crossing"
    TOUCH = "touch"
    OVERLAP = "overlap"


@dataclass
class SegmentIntersection:
    """Result of intersecting segment P (p1->p2) with segment Q (q1->q2)."""

    kind: IntersectionKind
    points: tuple[Coord, ...] = ()
    first_params: tuple[float, ...] = ()   # position along P, 0..1
    second_params: tuple[float, ...] = ()  # position along Q, 0..1

    @property
    def is_crossing(self) -> bool:
        return self.kind == IntersectionKind.CROSSING

    @property
    def intersects(self) -> bool:
        return self.kind != IntersectionKind.NONE


def _cross(ax: float, ay: float, bx: float, by: float) -> float:
    return ax * by - ay * bx


def _project(point: Coord, a: Coord, b: Coord) -> float:
    """Parameter of point's projection onto line a->b (a=0, b=1)."""
    dx = b[0] - a[0]
    dy = b[1] - a[1]
    length2 = dx * dx + dy * dy
    if length2 == 0.0:
        return 0.0
    return ((point[0] - a[0]) * dx + (point[1] - a[1]) * dy) / length2


def _close(a: Coord, b: Coord, tol: float) -> bool:
    return abs(a[0] - b[0]) <= tol and abs(a[1] - b[1]) <= tol


def distance_to_segment(point: Coord, a: Coord, b: Coord) -> float:
    """Euclidean distance from point to the closed segment a-b."""
    t = min(1.0, max(0.0, _project(point, a, b)))
    px = a[0] + t * (b[0] - a[0])
    py = a[1] + t * (b[1] - a[1])
    return math.hypot(point[0] - px, point[1] - py)


def _snap(t: float, a: Coord, b: Coord, others: tuple[Coord, Coord], tol: float) -> Coord:
    """Point at parameter t on a->b, snapped to any endpoint within tolerance."""
    x = a[0] + t * (b[0] - a[0])
    y = a[1] + t * (b[1] - a[1])
    for endpoint in (a, b) + others:
        if _close((x, y), endpoint, tol):
            return endpoint
    return (x, y)


def _point_segment(point: Coord, a: Coord, b: Coord, tol: float, point_first: bool) -> SegmentIntersection:
    """Contact between a degenerate (zero-length) segment and a regular one."""
    if distance_to_segment(point, a, b) > tol:
        return SegmentIntersection(IntersectionKind.NONE)
    t = min(1.0, max(0.0, _project(point, a, b)))
    if point_first:
        return SegmentIntersection(IntersectionKind.TOUCH, (point,), (0.0,), (t,))
    return SegmentIntersection(IntersectionKind.TOUCH, (point,), (t,), (0.0,))


def _collinear(p1: Coord, p2: Coord, q1: Coord, q2: Coord, len_p: float, tol: float) -> SegmentIntersection:
    """Intersect two segments known to lie on the same line."""
    t0 = _project(q1, p1, p2)
    t1 = _project(q2, p1, p2)
    tol_t = tol / len_p

    lo = max(0.0, min(t0, t1))
    hi = min(1.0, max(t0, t1))
    if lo > hi + tol_t:
        return SegmentIntersection(IntersectionKind.NONE)

    if (hi - lo) * len_p <= tol:
        point = _snap(min(lo, hi), p1, p2, (q1, q2), tol)
        return SegmentIntersection(
            IntersectionKind.TOUCH,
            (point,),
            (_project(point, p1, p2),),
            (_project(point, q1, q2),),
        )

    start = _snap(lo, p1, p2, (q1, q2), tol)
    end = _snap(hi, p1, p2, (q1, q2), tol)
    return SegmentIntersection(
        IntersectionKind.OVERLAP,
        (start, end),
        (lo, hi),
        (_project(start, q1, q2), _project(end, q1, q2)),
    )


def intersect_segments(
    p1: Coord,
    p2: Coord,
    q1: Coord,
    q2: Coord,
    tolerance: float | None = None,
) -> SegmentIntersection:
    """Intersect segment p1->p2 with segment q1->q2.

    Args:
        p1, p2: Endpoints of the first segment
        q1, q2: Endpoints of the second segment
        tolerance: Absolute distance tolerance; derived from the active
            ToleranceConfig and the coordinate magnitude when omitted

    Returns:
        SegmentIntersection. Touch points that coincide with an endpoint
        (within tolerance) carry that endpoint's exact coordinates.
    """
    if tolerance is None:
        from ..tolerance import get_tolerance
        tolerance = get_tolerance().scaled(coordinate_magnitude((p1, p2, q1, q2)))
    tol = tolerance

    # Bounding box rejection
    if (
        max(p1[0], p2[0]) + tol < min(q1[0], q2[0])
        or max(q1[0], q2[0]) + tol < min(p1[0], p2[0])
        or max(p1[1], p2[1]) + tol < min(q1[1], q2[1])
        or max(q1[1], q2[1]) + tol < min(p1[1], p2[1])
    ):
        return SegmentIntersection(IntersectionKind.NONE)

    dpx, dpy = p2[0] - p1[0], p2[1] - p1[1]
    dqx, dqy = q2[0] - q1[0], q2[1] - q1[1]
    len_p = math.hypot(dpx, dpy)
    len_q = math.hypot(dqx, dqy)

    if len_p <= tol and len_q <= tol:
        if _close(p1, q1, tol):
            return SegmentIntersection(IntersectionKind.TOUCH, (p1,), (0.0,), (0.0,))
        return SegmentIntersection(IntersectionKind.NONE)
    if len_p <= tol:
        return _point_segment(p1, q1, q2, tol, point_first=True)
    if len_q <= tol:
        return _point_segment(q1, p1, p2, tol, point_first=False)

    denom = _cross(dpx, dpy, dqx, dqy)
    wx, wy = q1[0] - p1[0], q1[1] - p1[1]

    if abs(denom) <= tol * max(len_p, len_q):
        # Parallel: only collinear segments can meet
        offset = abs(_cross(dpx, dpy, wx, wy)) / len_p
        if offset > tol:
            return SegmentIntersection(IntersectionKind.NONE)
        return _collinear(p1, p2, q1, q2, len_p, tol)

    t = _cross(wx, wy, dqx, dqy) / denom
    u = _cross(wx, wy, dpx, dpy) / denom
    tol_t = tol / len_p
    tol_u = tol / len_q
    if t < -tol_t or t > 1.0 + tol_t or u < -tol_u or u > 1.0 + tol_u:
        return SegmentIntersection(IntersectionKind.NONE)

    t = min(1.0, max(0.0, t))
    u = min(1.0, max(0.0, u))
    p_end = t <= tol_t or t >= 1.0 - tol_t
    q_end = u <= tol_u or u >= 1.0 - tol_u

    if t <= tol_t:
        point = p1
    elif t >= 1.0 - tol_t:
        point = p2
    elif u <= tol_u:
        point = q1
    elif u >= 1.0 - tol_u:
        point = q2
    else:
        point = (p1[0] + t * dpx, p1[1] + t * dpy)

    kind = IntersectionKind.TOUCH if (p_end or q_end) else IntersectionKind.CROSSING
    return SegmentIntersection(kind, (point,), (t,), (u,))
