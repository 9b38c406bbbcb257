"""Boolean clipping engine for simple polygons (Weiler–Atherton style).

Pipeline for ``clip_rings(subject, clip, operation)``:

1. Validate both rings and bring them into counter-clockwise working order.
2. Intersect every subject edge with every clip edge. Contact points are
   merged through a node index so both rings share identical coordinates.
3. Insert the contact nodes into each ring, giving one augmented vertex
   list per operand.
4. Classify every fragment (sub-edge between consecutive augmented
   vertices) against the other polygon and label each vertex as an entry,
   exit or touch.
5. Select fragments with a decision table keyed on (operation, operand,
   fragment class) and walk them into closed rings.

When the boundaries never meet, the result follows from containment alone.
Holes cannot be represented: rings that would bound a hole are dropped
with a warning and the outer ring is kept.
"""

import logging
import math
from collections import defaultdict
from dataclasses import dataclass
from enum import Enum
from typing import Optional, Sequence

from ..errors import InvalidGeometryError
from ..models.geometry import BooleanOperation, Coord, Coords
from ..models.tolerance import ToleranceConfig
from .containment import PointLocation, find_boundary_edge, locate_point, ray_cast_inside
from .intersect import IntersectionKind, intersect_segments
from .metrics import coordinate_magnitude, signed_area

logger = logging.getLogger(__name__)


class FragmentClass(Enum):
    """Position of a ring fragment relative to the other polygon."""
    INSIDE = "inside"
    OUTSIDE = "outside"
    SHARED_SAME = "shared_same"          # on the other boundary, same direction
    SHARED_OPPOSITE = "shared_opposite"  # on the other boundary, opposite direction


class Transition(Enum):
    """Change of inside/outside state at an augmented vertex."""
    ENTRY = "entry"
    EXIT = "exit"
    TOUCH = "touch"
    NONE = "none"


@dataclass
class ClipVertex:
    """Vertex of an augmented ring."""

    point: Coord
    is_intersection: bool = False
    location: PointLocation = PointLocation.OUTSIDE  # relative to the other polygon
    transition: Transition = Transition.NONE


@dataclass
class Fragment:
    """Directed piece of a ring boundary between two augmented vertices."""

    start: Coord
    end: Coord
    is_subject: bool
    fragment_class: FragmentClass
    used: bool = False


@dataclass
class AugmentedRing:
    """Ring with contact nodes inserted; fragment i runs vertex i -> vertex i + 1."""

    vertices: list[ClipVertex]
    fragment_classes: list[FragmentClass]

    @property
    def has_intersections(self) -> bool:
        return any(v.is_intersection for v in self.vertices)

    @property
    def entries(self) -> list[ClipVertex]:
        return [v for v in self.vertices if v.transition == Transition.ENTRY]

    @property
    def exits(self) -> list[ClipVertex]:
        return [v for v in self.vertices if v.transition == Transition.EXIT]

    def fragments(self, is_subject: bool) -> list[Fragment]:
        n = len(self.vertices)
        return [
            Fragment(
                start=self.vertices[i].point,
                end=self.vertices[(i + 1) % n].point,
                is_subject=is_subject,
                fragment_class=self.fragment_classes[i],
            )
            for i in range(n)
        ]


# (operation, fragment belongs to subject) -> {kept fragment class: reverse?}
_SELECTION: dict[tuple[BooleanOperation, bool], dict[FragmentClass, bool]] = {
    (BooleanOperation.UNION, True): {
        FragmentClass.OUTSIDE: False,
        FragmentClass.SHARED_SAME: False,
    },
    (BooleanOperation.UNION, False): {
        FragmentClass.OUTSIDE: False,
    },
    (BooleanOperation.INTERSECTION, True): {
        FragmentClass.INSIDE: False,
        FragmentClass.SHARED_SAME: False,
    },
    (BooleanOperation.INTERSECTION, False): {
        FragmentClass.INSIDE: False,
    },
    (BooleanOperation.DIFFERENCE, True): {
        FragmentClass.OUTSIDE: False,
        FragmentClass.SHARED_OPPOSITE: False,
    },
    (BooleanOperation.DIFFERENCE, False): {
        FragmentClass.INSIDE: True,
    },
}


def _same_point(a: Coord, b: Coord, tol: float) -> bool:
    return abs(a[0] - b[0]) <= tol and abs(a[1] - b[1]) <= tol


class _NodeIndex:
    """Merges points closer than the tolerance into one shared coordinate.

    The first point registered in a cluster becomes its canonical value.
    """

    def __init__(self, tolerance: float):
        self._tol = tolerance
        self._nodes: list[Coord] = []

    def snap(self, point: Coord) -> Coord:
        for node in self._nodes:
            if _same_point(node, point, self._tol):
                return node
        self._nodes.append(point)
        return point


def _dedupe(ring: Sequence[Coord], tol: float) -> Coords:
    """Drop consecutive repeats, including a closing repeat of the first point."""
    out: Coords = []
    for point in ring:
        if out and _same_point(out[-1], point, tol):
            continue
        out.append(point)
    while len(out) > 1 and _same_point(out[0], out[-1], tol):
        out.pop()
    return out


def _prepare_ring(coords: Sequence[Coord], tol: float, label: str) -> Coords:
    """Validate a ring and return it deduplicated in counter-clockwise order."""
    if len(coords) < 3:
        raise InvalidGeometryError(
            f"{label} polygon must have at least 3 points, got {len(coords)}"
        )
    ring = _dedupe([(float(x), float(y)) for x, y in coords], tol)
    if len(ring) < 3:
        raise InvalidGeometryError(f"{label} polygon has fewer than 3 distinct points")
    if signed_area(ring) < 0:
        ring.reverse()
    return ring


def _edge_param(point: Coord, start: Coord, end: Coord) -> float:
    dx = end[0] - start[0]
    dy = end[1] - start[1]
    return ((point[0] - start[0]) * dx + (point[1] - start[1]) * dy) / (dx * dx + dy * dy)


def _insert_nodes(
    ring: Coords,
    splits: list[list[Coord]],
    contacts: set[Coord],
) -> list[ClipVertex]:
    """Build the augmented vertex list, ordering inserted nodes along each edge."""
    vertices: list[ClipVertex] = []
    n = len(ring)
    for i, start in enumerate(ring):
        end = ring[(i + 1) % n]
        vertices.append(ClipVertex(start, is_intersection=start in contacts))
        inner = {p for p in splits[i] if p != start and p != end}
        for node in sorted(inner, key=lambda p: _edge_param(p, start, end)):
            vertices.append(ClipVertex(node, is_intersection=True))
    return vertices


def _classify_fragment(
    start: Coord,
    end: Coord,
    other: Coords,
    contacts: set[Coord],
    tol: float,
) -> FragmentClass:
    """Classify a fragment by the location of its midpoint.

    A fragment can only run along the other boundary when both its ends
    are contact nodes, since each of them then has a counterpart in the
    other ring. A midpoint that is merely close to the other boundary is
    settled by the ray cast instead.
    """
    mid = ((start[0] + end[0]) / 2.0, (start[1] + end[1]) / 2.0)
    location = locate_point(mid, other, tol)
    if location == PointLocation.BOUNDARY and not (start in contacts and end in contacts):
        location = PointLocation.INSIDE if ray_cast_inside(mid, other) else PointLocation.OUTSIDE
    if location == PointLocation.INSIDE:
        return FragmentClass.INSIDE
    if location == PointLocation.OUTSIDE:
        return FragmentClass.OUTSIDE

    edge = find_boundary_edge(mid, other, tol)
    o1 = other[edge]
    o2 = other[(edge + 1) % len(other)]
    dot = (end[0] - start[0]) * (o2[0] - o1[0]) + (end[1] - start[1]) * (o2[1] - o1[1])
    return FragmentClass.SHARED_SAME if dot > 0 else FragmentClass.SHARED_OPPOSITE


def _transition(vertex: ClipVertex, before: FragmentClass, after: FragmentClass) -> Transition:
    inside_before = before == FragmentClass.INSIDE
    inside_after = after == FragmentClass.INSIDE
    if inside_after and not inside_before:
        return Transition.ENTRY
    if inside_before and not inside_after:
        return Transition.EXIT
    return Transition.TOUCH if vertex.is_intersection else Transition.NONE


def _classify(
    vertices: list[ClipVertex],
    other: Coords,
    contacts: set[Coord],
    tol: float,
) -> AugmentedRing:
    n = len(vertices)
    classes = [
        _classify_fragment(vertices[k].point, vertices[(k + 1) % n].point, other, contacts, tol)
        for k in range(n)
    ]
    for k, vertex in enumerate(vertices):
        if vertex.is_intersection:
            vertex.location = PointLocation.BOUNDARY
        else:
            vertex.location = locate_point(vertex.point, other, tol)
        vertex.transition = _transition(vertex, classes[k - 1], classes[k])
    return AugmentedRing(vertices=vertices, fragment_classes=classes)


def _augment(a: Coords, b: Coords, tol: float) -> tuple[AugmentedRing, AugmentedRing]:
    """Intersect all edge pairs and build both augmented rings."""
    index = _NodeIndex(tol)
    a = _dedupe([index.snap(p) for p in a], tol)
    b = _dedupe([index.snap(p) for p in b], tol)

    splits_a: list[list[Coord]] = [[] for _ in a]
    splits_b: list[list[Coord]] = [[] for _ in b]
    contacts: set[Coord] = set()

    na, nb = len(a), len(b)
    for i in range(na):
        a1, a2 = a[i], a[(i + 1) % na]
        for j in range(nb):
            hit = intersect_segments(a1, a2, b[j], b[(j + 1) % nb], tol)
            if hit.kind == IntersectionKind.NONE:
                continue
            for point in hit.points:
                node = index.snap(point)
                contacts.add(node)
                splits_a[i].append(node)
                splits_b[j].append(node)

    ring_a = _classify(_insert_nodes(a, splits_a, contacts), b, contacts, tol)
    ring_b = _classify(_insert_nodes(b, splits_b, contacts), a, contacts, tol)
    return ring_a, ring_b


def build_augmented_rings(
    subject: Sequence[Coord],
    clip: Sequence[Coord],
    tolerance: Optional[ToleranceConfig] = None,
) -> tuple[AugmentedRing, AugmentedRing]:
    """Augmented, classified vertex lists for both operands.

    Both rings are returned in counter-clockwise working order.

    Raises:
        InvalidGeometryError: If either ring has fewer than 3 points
    """
    config = tolerance or _active_tolerance()
    tol = config.scaled(coordinate_magnitude(subject, clip))
    a = _prepare_ring(subject, tol, "Subject")
    b = _prepare_ring(clip, tol, "Clip")
    return _augment(a, b, tol)


def _select_fragments(
    subject: AugmentedRing,
    clip: AugmentedRing,
    operation: BooleanOperation,
) -> list[Fragment]:
    selected: list[Fragment] = []
    for ring, is_subject in ((subject, True), (clip, False)):
        rules = _SELECTION[(operation, is_subject)]
        for fragment in ring.fragments(is_subject):
            if fragment.fragment_class not in rules:
                continue
            if rules[fragment.fragment_class]:
                fragment.start, fragment.end = fragment.end, fragment.start
            selected.append(fragment)
    return selected


def _next_fragment(current: Fragment, candidates: list[Fragment]) -> Optional[Fragment]:
    """Pick the unused outgoing fragment with the sharpest left turn."""
    dx = current.end[0] - current.start[0]
    dy = current.end[1] - current.start[1]
    best: Optional[Fragment] = None
    best_turn = -math.inf
    for fragment in candidates:
        if fragment.used:
            continue
        cx = fragment.end[0] - fragment.start[0]
        cy = fragment.end[1] - fragment.start[1]
        turn = math.atan2(dx * cy - dy * cx, dx * cx + dy * cy)
        if turn > best_turn:
            best, best_turn = fragment, turn
    return best


def _assemble_rings(fragments: list[Fragment]) -> list[Coords]:
    """Walk selected fragments into closed rings.

    A walk that runs out of fragments before returning to its start is
    closed where it stopped; cleanup drops it if it has no area.
    """
    outgoing: dict[Coord, list[Fragment]] = defaultdict(list)
    for fragment in fragments:
        outgoing[fragment.start].append(fragment)

    # Walks from unambiguous nodes first, so a pinch vertex is never a ring's seam
    starts = sorted(fragments, key=lambda f: len(outgoing[f.start]) > 1)

    rings: list[Coords] = []
    for first in starts:
        if first.used:
            continue
        first.used = True
        ring = [first.start]
        current = first
        while current.end != first.start:
            nxt = _next_fragment(current, outgoing[current.end])
            if nxt is None:
                logger.warning(
                    f"Closing open boundary walk from {first.start} at {current.end}"
                )
                ring.append(current.end)
                break
            nxt.used = True
            ring.append(nxt.start)
            current = nxt
        rings.append(ring)
    return rings


def _redundant_vertex(prev: Coord, cur: Coord, nxt: Coord, keep: set[Coord], tol: float) -> bool:
    """True when cur can be dropped without changing the ring's shape.

    Repeats and spikes always go. A collinear pass-through vertex goes
    only when the engine inserted it; input vertices in ``keep`` stay.
    """
    if _same_point(prev, cur, tol):
        return True
    bx, by = nxt[0] - prev[0], nxt[1] - prev[1]
    length = math.hypot(bx, by)
    if length <= tol:
        return True
    cross = bx * (cur[1] - prev[1]) - by * (cur[0] - prev[0])
    if abs(cross) / length > tol:
        return False
    straight = (cur[0] - prev[0]) * (nxt[0] - cur[0]) + (cur[1] - prev[1]) * (nxt[1] - cur[1]) > 0
    return not (straight and cur in keep)


def _clean_ring(ring: Coords, keep: set[Coord], tol: float) -> Coords:
    """Remove repeats, spikes and collinear inserted nodes."""
    points = list(ring)
    changed = True
    while changed and len(points) >= 3:
        changed = False
        n = len(points)
        for i in range(n):
            if _redundant_vertex(points[i - 1], points[i], points[(i + 1) % n], keep, tol):
                del points[i]
                changed = True
                break
    return points


def _finish_rings(
    rings: list[Coords],
    keep: set[Coord],
    tol: float,
    sliver_area: float,
) -> list[Coords]:
    finished: list[Coords] = []
    for ring in rings:
        ring = _clean_ring(ring, keep, tol)
        if len(ring) < 3:
            continue
        area = signed_area(ring)
        if abs(area) <= sliver_area:
            logger.debug(f"Dropping sliver ring with area {area:.3g}")
            continue
        if area < 0:
            logger.warning(
                f"Dropping hole ring with area {abs(area):.6g}: holes are not supported"
            )
            continue
        finished.append(ring)
    return finished


def _containment_fallback(
    a: Coords,
    b: Coords,
    operation: BooleanOperation,
    tol: float,
) -> list[Coords]:
    """Result when the two boundaries never meet."""
    if locate_point(b[0], a, tol) != PointLocation.OUTSIDE:
        logger.info("Clip polygon lies inside subject without boundary contact")
        if operation == BooleanOperation.UNION:
            return [a]
        if operation == BooleanOperation.INTERSECTION:
            return [b]
        logger.warning(
            "Difference would leave a hole; returning the subject's outer ring unchanged"
        )
        return [a]

    if locate_point(a[0], b, tol) != PointLocation.OUTSIDE:
        logger.info("Subject lies inside clip polygon without boundary contact")
        if operation == BooleanOperation.UNION:
            return [b]
        if operation == BooleanOperation.INTERSECTION:
            return [a]
        return []

    logger.info("Polygons are disjoint")
    if operation == BooleanOperation.UNION:
        return [a, b]
    if operation == BooleanOperation.INTERSECTION:
        return []
    return [a]


def _active_tolerance() -> ToleranceConfig:
    from ..tolerance import get_tolerance
    return get_tolerance()


def clip_rings(
    subject: Sequence[Coord],
    clip: Sequence[Coord],
    operation: BooleanOperation,
    tolerance: Optional[ToleranceConfig] = None,
) -> list[Coords]:
    """Apply a boolean operation to two simple rings.

    Args:
        subject: First operand (A)
        clip: Second operand (B); DIFFERENCE computes A - B
        operation: UNION, INTERSECTION or DIFFERENCE
        tolerance: Settings to use instead of the process-wide tolerance

    Returns:
        Zero or more result rings, each wound like the subject. Order is
        deterministic: walks start on subject fragments in ring order.

    Raises:
        InvalidGeometryError: If either ring has fewer than 3 points
    """
    config = tolerance or _active_tolerance()
    tol = config.scaled(coordinate_magnitude(subject, clip))
    a = _prepare_ring(subject, tol, "Subject")
    b = _prepare_ring(clip, tol, "Clip")
    subject_clockwise = signed_area(subject) < 0

    ring_a, ring_b = _augment(a, b, tol)

    if not (ring_a.has_intersections or ring_b.has_intersections):
        # Inputs pass through unchanged; the sliver filter is for built rings only
        rings = _containment_fallback(a, b, operation, tol)
    else:
        fragments = _select_fragments(ring_a, ring_b, operation)
        input_vertices = set(a) | set(b)
        rings = _finish_rings(
            _assemble_rings(fragments), input_vertices, tol, config.sliver_area
        )
        logger.debug(
            f"{operation.value}: {len(ring_a.vertices)} subject / {len(ring_b.vertices)} clip "
            f"augmented vertices, {len(fragments)} fragments kept, {len(rings)} rings"
        )

    if subject_clockwise:
        rings = [list(reversed(r)) for r in rings]
    return rings
