"""Plane rasterization.

Fills a DistanceMap with the signed pseudo-distance from each pixel center
to the nearest segment of one plane. Cost is O(width * height * segments);
there is no spatial index.
"""

import logging
from collections.abc import Sequence

from msdfatlas.core.selector import SegmentDistance, is_closer, select_distance
from msdfatlas.domain import DistanceMap, Point, Segment, Shape
from msdfatlas.exceptions import EmptyPlaneError, UnsupportedPlaneError

logger = logging.getLogger(__name__)

TIE_EPSILON = 0.001


def pixel_center(i: int, j: int, scale_x: float, scale_y: float) -> Point:
    """Map pixel (i, j) to the shape-space point at its center."""
    return Point((i + 0.5) * scale_x, (j + 0.5) * scale_y)


def nearest_segment(
    point: Point,
    plane: Sequence[Segment],
    epsilon: float = TIE_EPSILON,
) -> SegmentDistance:
    """Find the segment of a plane that owns a point.

    Linear scan in plane order with a single running best, ranking by
    clamped distance and breaking near-ties by orthogonality.

    Args:
        point: Query point in shape space
        plane: Candidate segments, at least one
        epsilon: Tie tolerance

    Returns:
        Clamped measurement of the winning segment
    """
    best = select_distance(plane[0], point)
    for segment in plane[1:]:
        candidate = select_distance(segment, point)
        if is_closer(candidate, best, epsilon):
            best = candidate
    return best


def fill_plane(
    distance_map: DistanceMap,
    shape: Shape,
    plane: Sequence[Segment],
    epsilon: float = TIE_EPSILON,
) -> DistanceMap:
    """Rasterize one plane into a distance map.

    Every value in the map is overwritten. The winning segment for each
    pixel is re-measured in perpendicular mode and the signed result is
    stored.

    Args:
        distance_map: Target buffer; its size sets the output resolution
        shape: Shape whose width/height define the coordinate space
        plane: Segments to rasterize
        epsilon: Tie tolerance for candidate ranking

    Returns:
        The same distance map, filled

    Raises:
        EmptyPlaneError: If the plane has no segments
        UnsupportedPlaneError: If the plane has exactly one segment
    """
    if not plane:
        raise EmptyPlaneError()
    if len(plane) == 1:
        raise UnsupportedPlaneError(len(plane))

    width = distance_map.width
    height = distance_map.height
    scale_x = shape.width / width if width else 0.0
    scale_y = shape.height / height if height else 0.0
    logger.debug(
        "Filling plane: %d segments, %dx%d pixels", len(plane), width, height
    )

    for j in range(height):
        for i in range(width):
            point = pixel_center(i, j, scale_x, scale_y)
            owner = nearest_segment(point, plane, epsilon)
            final = select_distance(owner.segment, point, perpendicular=True)
            distance_map.set(i, j, final.signed_distance)

    return distance_map
