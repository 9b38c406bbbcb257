"""Tests for ring area, winding order and other measurements."""

import math
import pytest

from polyclip.errors import InvalidGeometryError
from polyclip.geometry.metrics import (
    bounds,
    centroid,
    perimeter,
    polygon_area,
    signed_area,
    winding_order,
)
from polyclip.geometry.polygon_ops import create_regular_polygon
from polyclip.models.geometry import Polygon, WindingOrder


SQUARE_CCW = [(0.0, 0.0), (4.0, 0.0), (4.0, 4.0), (0.0, 4.0)]
SQUARE_CW = list(reversed(SQUARE_CCW))


class TestSignedArea:
    """Test shoelace area."""

    def test_ccw_ring_is_positive(self):
        assert signed_area(SQUARE_CCW) == pytest.approx(16.0)

    def test_cw_ring_is_negative(self):
        assert signed_area(SQUARE_CW) == pytest.approx(-16.0)

    @pytest.mark.parametrize("coords", [[], [(1.0, 1.0)], [(0.0, 0.0), (3.0, 4.0)]])
    def test_fewer_than_three_points_is_zero(self, coords):
        assert signed_area(coords) == 0.0
        assert polygon_area(coords) == 0.0

    def test_reported_area_is_magnitude(self):
        assert polygon_area(SQUARE_CW) == pytest.approx(16.0)
        assert polygon_area(SQUARE_CCW) == pytest.approx(16.0)

    def test_concave_ring(self):
        """U shape: 6x4 block with a 2x3 notch."""
        u_shape = [(0, 0), (6, 0), (6, 4), (4, 4), (4, 1), (2, 1), (2, 4), (0, 4)]
        assert polygon_area(u_shape) == pytest.approx(18.0)

    def test_far_from_origin(self):
        shifted = [(x + 1e8, y - 1e8) for x, y in SQUARE_CCW]
        assert signed_area(shifted) == 16.0


class TestWindingOrder:
    """Test winding order classification."""

    def test_counter_clockwise(self):
        assert winding_order(SQUARE_CCW) == WindingOrder.COUNTER_CLOCKWISE

    def test_clockwise(self):
        assert winding_order(SQUARE_CW) == WindingOrder.CLOCKWISE

    def test_zero_sum_is_counter_clockwise(self):
        """Collinear ring has a zero sum, which is not positive."""
        assert winding_order([(0, 0), (1, 0), (2, 0)]) == WindingOrder.COUNTER_CLOCKWISE

    @pytest.mark.parametrize("coords", [[], [(0, 0)], [(0, 0), (1, 1)]])
    def test_fewer_than_three_points_raises(self, coords):
        with pytest.raises(InvalidGeometryError):
            winding_order(coords)

    def test_polygon_property_raises_for_empty_polygon(self):
        with pytest.raises(InvalidGeometryError):
            Polygon().winding_order


class TestRegularPolygonArea:
    """Area of regular n-gons against the closed-form value."""

    @pytest.mark.parametrize("sides", [3, 4, 5, 6, 8, 10, 32])
    @pytest.mark.parametrize("radius", [1.0, 2.5, 5.0])
    def test_matches_closed_form(self, sides, radius):
        polygon = create_regular_polygon(sides, 1.5, -2.0, radius)
        expected = 0.5 * sides * radius ** 2 * math.sin(2 * math.pi / sides)
        assert polygon.area == pytest.approx(expected, rel=1e-9)

    @pytest.mark.parametrize("sides", [3, 5, 8])
    def test_reversal_flips_winding_keeps_area(self, sides):
        polygon = create_regular_polygon(sides, 0.0, 0.0, 2.0)
        flipped = polygon.reversed()

        assert polygon.winding_order == WindingOrder.COUNTER_CLOCKWISE
        assert flipped.winding_order == WindingOrder.CLOCKWISE
        assert flipped.area == pytest.approx(polygon.area)
        assert flipped.area >= 0


class TestPerimeterBoundsCentroid:
    """Test supplementary measurements."""

    def test_square_perimeter(self):
        assert perimeter(SQUARE_CCW) == pytest.approx(16.0)

    def test_bounds(self):
        assert bounds([(1, 5), (-2, 3), (4, -1)]) == (-2, -1, 4, 5)

    def test_empty_bounds(self):
        assert bounds([]) == (0.0, 0.0, 0.0, 0.0)

    def test_square_centroid(self):
        cx, cy = centroid(SQUARE_CW)
        assert cx == pytest.approx(2.0)
        assert cy == pytest.approx(2.0)

    def test_l_shape_centroid(self):
        """L made of a 2x1 bar and a 1x1 block on top of its left half."""
        l_shape = [(0, 0), (2, 0), (2, 1), (1, 1), (1, 2), (0, 2)]
        cx, cy = centroid(l_shape)
        # (2 * (1, 0.5) + 1 * (0.5, 1.5)) / 3
        assert cx == pytest.approx(2.5 / 3)
        assert cy == pytest.approx(2.5 / 3)

    def test_degenerate_centroid_is_vertex_mean(self):
        cx, cy = centroid([(0, 0), (1, 0), (2, 0)])
        assert cx == pytest.approx(1.0)
        assert cy == pytest.approx(0.0)

    def test_polygon_centroid_is_point(self):
        polygon = create_regular_polygon(6, 3.0, -1.0, 2.0)
        assert polygon.centroid.x == pytest.approx(3.0)
        assert polygon.centroid.y == pytest.approx(-1.0)
