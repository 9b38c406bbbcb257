"""Geometry operations: metrics, segment intersection, containment and clipping."""

from .clipping import (
    AugmentedRing,
    ClipVertex,
    FragmentClass,
    Transition,
    build_augmented_rings,
    clip_rings,
)
from .containment import (
    PointLocation,
    find_boundary_edge,
    locate_point,
    point_in_polygon,
    ray_cast_inside,
)
from .intersect import (
    IntersectionKind,
    SegmentIntersection,
    distance_to_segment,
    intersect_segments,
)
from .metrics import (
    bounds,
    centroid,
    perimeter,
    polygon_area,
    signed_area,
    winding_order,
)
from .polygon_ops import (
    calculate_apothem,
    clip_polygons,
    create_rectangle,
    create_regular_polygon,
    from_shapely,
    get_polygon_area,
    intersect_polygons,
    polygon_from_coords,
    polygon_to_coords,
    rotate_polygon,
    scale_polygon,
    subtract_polygons,
    to_shapely,
    union_polygons,
)

__all__ = [
    # Metrics
    "signed_area",
    "polygon_area",
    "winding_order",
    "perimeter",
    "bounds",
    "centroid",
    # Segment intersection
    "intersect_segments",
    "distance_to_segment",
    "IntersectionKind",
    "SegmentIntersection",
    # Containment
    "locate_point",
    "find_boundary_edge",
    "point_in_polygon",
    "ray_cast_inside",
    "PointLocation",
    # Clipping engine
    "clip_rings",
    "build_augmented_rings",
    "AugmentedRing",
    "ClipVertex",
    "FragmentClass",
    "Transition",
    # Polygon operations
    "clip_polygons",
    "union_polygons",
    "intersect_polygons",
    "subtract_polygons",
    "get_polygon_area",
    "polygon_from_coords",
    "polygon_to_coords",
    "create_rectangle",
    "create_regular_polygon",
    "calculate_apothem",
    "rotate_polygon",
    "scale_polygon",
    "to_shapely",
    "from_shapely",
]
