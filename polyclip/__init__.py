"""polyclip - boolean operations on simple 2D polygons.

This package provides:
- Polygon / MultiPolygon models with area and winding order queries
- Segment intersection and point location with a shared tolerance policy
- A Weiler-Atherton style union / intersection / difference engine
- Shape factories and Shapely interop

Typical use:
    from polyclip import Polygon
    a = Polygon.from_coords([(0, 0), (4, 0), (4, 4), (0, 4)])
    b = Polygon.from_coords([(2, 2), (6, 2), (6, 6), (2, 6)])
    a.intersection(b).total_area  # 4.0
"""

__version__ = "0.1.0"

from .errors import GeometryError, IndexOutOfRangeError, InvalidGeometryError
from .geometry import (
    clip_polygons,
    create_rectangle,
    create_regular_polygon,
    intersect_polygons,
    subtract_polygons,
    union_polygons,
)
from .models import (
    BooleanOperation,
    MultiPolygon,
    Point,
    Polygon,
    ToleranceConfig,
    WindingOrder,
)
from .tolerance import configure_tolerance, get_tolerance

__all__ = [
    "__version__",
    # Models
    "Point",
    "Polygon",
    "MultiPolygon",
    "WindingOrder",
    "BooleanOperation",
    "ToleranceConfig",
    # Operations
    "clip_polygons",
    "union_polygons",
    "intersect_polygons",
    "subtract_polygons",
    "create_rectangle",
    "create_regular_polygon",
    # Settings
    "configure_tolerance",
    "get_tolerance",
    # Errors
    "GeometryError",
    "InvalidGeometryError",
    "IndexOutOfRangeError",
]
