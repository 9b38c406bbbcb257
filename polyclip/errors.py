"""Exception types raised by polyclip."""


class GeometryError(Exception):
    """Base class for geometry errors."""


class InvalidGeometryError(GeometryError, ValueError):
    """Operation requires a ring of at least 3 points."""


class IndexOutOfRangeError(GeometryError, IndexError):
    """Point index outside the polygon's point range."""
