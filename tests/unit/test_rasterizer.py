"""Tests for plane rasterization."""

import pytest

from msdfatlas.core.rasterizer import fill_plane, nearest_segment, pixel_center
from msdfatlas.domain import DistanceMap, LineSegment, Point, Shape
from msdfatlas.exceptions import EmptyPlaneError, PlaneError, UnsupportedPlaneError


def _square_shape() -> Shape:
    """Clockwise (in y-down space) square from (1, 1) to (9, 9) in a 10x10 space."""
    shape = Shape(width=10, height=10)
    shape.add_path([(1, 1), (9, 1), (9, 9), (1, 9), (1, 1)])
    return shape


class TestPixelCenter:
    """Tests for pixel to shape-space mapping."""

    def test_unit_scale(self) -> None:
        assert pixel_center(0, 0, 1.0, 1.0) == Point(0.5, 0.5)
        assert pixel_center(3, 2, 1.0, 1.0) == Point(3.5, 2.5)

    def test_scaled(self) -> None:
        """Test mapping when the map is coarser than shape space."""
        assert pixel_center(1, 0, 2.0, 4.0) == Point(3.0, 2.0)


class TestNearestSegment:
    """Tests for the per-pixel segment search."""

    def test_picks_closest(self) -> None:
        """Test that the closest segment wins."""
        shape = _square_shape()
        point = Point(5, 2)
        owner = nearest_segment(point, shape.lines)
        assert owner.segment is shape.lines[0]
        assert owner.distance == 1.0

    def test_tie_break_independent_of_order(self) -> None:
        """Test that the more orthogonal segment wins a tie in either order."""
        a = LineSegment(Point(0, 0), Point(5, 0))
        b = LineSegment(Point(5, 0), Point(9, -3))
        point = Point(5, 3)
        assert nearest_segment(point, [a, b]).segment is a
        assert nearest_segment(point, [b, a]).segment is a


class TestFillPlane:
    """Tests for fill_plane."""

    def test_empty_plane(self) -> None:
        """Test that an empty plane is rejected."""
        with pytest.raises(EmptyPlaneError, match="Plane is empty"):
            fill_plane(DistanceMap(2, 2), Shape(width=2, height=2), [])

    def test_single_segment_plane(self) -> None:
        """Test that a one-segment plane is rejected as unsupported."""
        segment = LineSegment(Point(0, 0), Point(1, 1))
        with pytest.raises(UnsupportedPlaneError, match="Plane has 1 segment"):
            fill_plane(DistanceMap(2, 2), Shape(width=2, height=2), [segment])

    def test_plane_errors_share_base(self) -> None:
        """Test that plane errors can be caught together."""
        assert issubclass(EmptyPlaneError, PlaneError)
        assert issubclass(UnsupportedPlaneError, PlaneError)
        assert issubclass(UnsupportedPlaneError, NotImplementedError)

    def test_tie_break_value(self) -> None:
        """Test the stored value when two segments tie at a pixel."""
        a = LineSegment(Point(0, 0), Point(5, 0))
        b = LineSegment(Point(5, 0), Point(9, -3))
        shape = Shape(width=10, height=6)

        for plane in ([b, a], [a, b]):
            distance_map = fill_plane(DistanceMap(1, 1), shape, plane)
            assert distance_map.values == [-3.0]

    def test_square_inside_and_outside(self) -> None:
        """Test sign and magnitude across a square.

        The path runs clockwise on screen, which puts the inside on the
        negative side of every edge.
        """
        shape = _square_shape()
        distance_map = fill_plane(DistanceMap(10, 10), shape, shape.lines)

        inside = distance_map.get(4, 4)
        outside = distance_map.get(0, 4)
        assert inside == -3.5
        assert outside == 0.5

    def test_writes_perpendicular_distance(self) -> None:
        """Test that pixels past a corner store the pseudo-distance."""
        shape = _square_shape()
        distance_map = fill_plane(DistanceMap(10, 10), shape, shape.lines)
        # Pixel center (0.5, 0.5) lies diagonally outside the corner at (1, 1)
        assert abs(distance_map.get(0, 0)) == 0.5

    def test_overwrites_every_value(self) -> None:
        """Test that stale buffer contents never survive."""
        shape = _square_shape()
        distance_map = DistanceMap(10, 10, values=[99.0] * 100)
        fill_plane(distance_map, shape, shape.lines)
        assert 99.0 not in distance_map.values

    def test_resolution_follows_map(self) -> None:
        """Test that a coarser map samples shape space at scaled centers."""
        shape = _square_shape()
        distance_map = fill_plane(DistanceMap(5, 5), shape, shape.lines)
        # Pixel (2, 2) has center (5, 5), four units from every edge
        assert distance_map.get(2, 2) == -4.0
