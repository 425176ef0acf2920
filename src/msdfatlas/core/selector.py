"""Per-segment distance selection.

Measures a query point against one segment and reports the closest point,
unsigned distance, side of the segment, and an orthogonality score used to
break ties between candidates.

Two modes:
- Clamped: the nearest parameter is clamped to [0, 1] so the closest point
  stays on the segment. Used to rank candidate segments.
- Perpendicular: the parameter is left unclamped so points beyond an
  endpoint are measured against the tangent extension (pseudo-distance).
  Used for the value finally written to the map.
"""

from dataclasses import dataclass

from msdfatlas.domain.geometry import Point, Segment


@dataclass(frozen=True, slots=True)
class SegmentDistance:
    """Distance from a query point to one segment.

    Attributes:
        segment: Segment measured against
        point: Query point
        t: Parameter of the closest point
        closest: Closest point on the segment (or its extension)
        distance: Euclidean distance, never negative
        sign: +1 or -1, the side of the directed segment the point lies on
    """

    segment: Segment
    point: Point
    t: float
    closest: Point
    distance: float
    sign: int

    @property
    def signed_distance(self) -> float:
        return self.distance * self.sign

    @property
    def orthogonality(self) -> float:
        """Magnitude of tangent x normalized (point - closest).

        Ranges over [0, 1]. Zero when the query point lies on the segment.
        """
        direction = self.point.sub(self.closest).normalized()
        return abs(self.segment.evaluate_delta(self.t).cross(direction))


def select_distance(
    segment: Segment,
    point: Point,
    perpendicular: bool = False,
) -> SegmentDistance:
    """Measure a point against a segment.

    Args:
        segment: Line or quadratic segment
        point: Query point in shape space
        perpendicular: If True, leave the nearest parameter unclamped

    Returns:
        SegmentDistance for the pair
    """
    t = segment.find_nearest_t(point)
    if not perpendicular:
        t = min(max(t, 0.0), 1.0)

    closest = segment.evaluate(t)
    distance = closest.distance_to(point)

    to_point = point.sub(closest)
    sign = 1 if segment.evaluate_delta(t).cross(to_point) > 0 else -1

    return SegmentDistance(
        segment=segment,
        point=point,
        t=t,
        closest=closest,
        distance=distance,
        sign=sign,
    )


def is_closer(
    candidate: SegmentDistance,
    best: SegmentDistance,
    epsilon: float = 0.001,
) -> bool:
    """Decide whether a candidate beats the current best.

    Distances within ``epsilon`` of each other are a tie, won by the larger
    orthogonality. Otherwise the smaller distance wins.

    Args:
        candidate: Newly measured segment
        best: Current running best
        epsilon: Tie tolerance in shape-space units

    Returns:
        True if candidate should replace best
    """
    if abs(best.distance - candidate.distance) < epsilon:
        return best.orthogonality < candidate.orthogonality
    return candidate.distance < best.distance
