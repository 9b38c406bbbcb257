"""Pydantic models for polyclip."""

from .geometry import (
    BooleanOperation,
    Coord,
    Coords,
    MultiPolygon,
    Point,
    Polygon,
    WindingOrder,
)
from .tolerance import ToleranceConfig

__all__ = [
    # Geometry
    "Point",
    "Polygon",
    "MultiPolygon",
    "WindingOrder",
    "BooleanOperation",
    "Coord",
    "Coords",
    # Settings
    "ToleranceConfig",
]
