"""Tests for point location against a ring."""

import pytest

from polyclip.geometry.containment import (
    PointLocation,
    find_boundary_edge,
    locate_point,
    point_in_polygon,
    ray_cast_inside,
)


@pytest.fixture
def square():
    return [(0.0, 0.0), (4.0, 0.0), (4.0, 4.0), (0.0, 4.0)]


@pytest.fixture
def u_shape():
    """6x4 block with a notch open to the top between x=2 and x=4."""
    return [(0, 0), (6, 0), (6, 4), (4, 4), (4, 1), (2, 1), (2, 4), (0, 4)]


class TestLocatePoint:
    """Test three-way point classification."""

    def test_inside(self, square):
        assert locate_point((2.0, 2.0), square) == PointLocation.INSIDE

    def test_outside(self, square):
        assert locate_point((5.0, 2.0), square) == PointLocation.OUTSIDE

    @pytest.mark.parametrize("point", [(4.0, 2.0), (0.0, 0.0), (2.0, 4.0), (0.0, 3.5)])
    def test_boundary(self, square, point):
        assert locate_point(point, square) == PointLocation.BOUNDARY

    def test_boundary_within_tolerance(self, square):
        assert locate_point((2.0, 4.0 + 1e-12), square) == PointLocation.BOUNDARY

    def test_explicit_tolerance(self, square):
        assert locate_point((2.0, 4.05), square, tolerance=0.1) == PointLocation.BOUNDARY
        assert locate_point((2.0, 4.05), square, tolerance=0.01) == PointLocation.OUTSIDE

    def test_concave_notch_is_outside(self, u_shape):
        assert locate_point((3.0, 3.0), u_shape) == PointLocation.OUTSIDE

    def test_concave_arm_is_inside(self, u_shape):
        assert locate_point((1.0, 3.0), u_shape) == PointLocation.INSIDE
        assert locate_point((5.0, 3.0), u_shape) == PointLocation.INSIDE

    def test_ray_through_vertex(self):
        """Horizontal ray from (1, 2) passes exactly through vertex (4, 2)."""
        diamond = [(2, 0), (4, 2), (2, 4), (0, 2)]
        assert locate_point((1.0, 2.0), diamond) == PointLocation.INSIDE

    def test_winding_does_not_matter(self, square):
        assert locate_point((1.0, 1.0), list(reversed(square))) == PointLocation.INSIDE

    def test_degenerate_ring_is_outside(self):
        assert locate_point((0.0, 0.0), [(0.0, 0.0), (1.0, 1.0)]) == PointLocation.OUTSIDE


class TestFindBoundaryEdge:
    """Test boundary edge lookup."""

    def test_edge_index(self, square):
        assert find_boundary_edge((4.0, 2.0), square) == 1
        assert find_boundary_edge((0.0, 2.0), square) == 3

    def test_interior_point(self, square):
        assert find_boundary_edge((2.0, 2.0), square) is None


class TestPointInPolygon:
    """Test boolean containment helper."""

    def test_inside(self, square):
        assert point_in_polygon((1.0, 1.0), square)

    def test_outside(self, square):
        assert not point_in_polygon((-1.0, 1.0), square)

    def test_boundary_included_by_default(self, square):
        assert point_in_polygon((4.0, 1.0), square)

    def test_boundary_excluded(self, square):
        assert not point_in_polygon((4.0, 1.0), square, include_boundary=False)


class TestRayCast:
    """Test the even-odd test without a boundary band."""

    def test_just_inside_edge(self, square):
        assert ray_cast_inside((2.0, 4.0 - 1e-12), square)

    def test_just_outside_edge(self, square):
        assert not ray_cast_inside((2.0, 4.0 + 1e-12), square)

    def test_notch_is_outside(self, u_shape):
        assert not ray_cast_inside((3.0, 2.0), u_shape)
        assert ray_cast_inside((1.0, 2.0), u_shape)

    def test_ray_through_vertex(self, u_shape):
        """A ray at vertex height crosses once, not twice."""
        assert ray_cast_inside((0.5, 1.0), u_shape)
