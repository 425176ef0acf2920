"""Geometric primitives for distance field generation.

This module defines the value types the rasterizer works with:
- Point: An immutable 2D vector
- LineSegment: A straight edge between two points
- QuadraticSegment: A quadratic Bezier edge with one control point
- Segment: The union of the two segment variants

Both segment variants expose the same operation set (evaluate,
evaluate_delta, find_nearest_t) so callers never need to branch on the
variant.
"""

import math
from dataclasses import dataclass
from typing import Any

# Number of samples used to locate the nearest parameter on a quadratic
DEFAULT_QUADRATIC_SAMPLES = 100


@dataclass(frozen=True, slots=True)
class Point:
    """A point (or vector) in 2D shape space.

    Immutable and hashable. Every operation returns a new Point.

    Attributes:
        x: X coordinate
        y: Y coordinate
    """

    x: float
    y: float

    def add(self, other: "Point") -> "Point":
        return Point(self.x + other.x, self.y + other.y)

    def sub(self, other: "Point") -> "Point":
        return Point(self.x - other.x, self.y - other.y)

    def mul(self, other: "Point") -> "Point":
        """Component-wise multiplication."""
        return Point(self.x * other.x, self.y * other.y)

    def scale(self, factor: float) -> "Point":
        return Point(self.x * factor, self.y * factor)

    def divide(self, factor: float) -> "Point":
        return Point(self.x / factor, self.y / factor)

    def add_scaled(self, other: "Point", factor: float) -> "Point":
        """Return self + other * factor."""
        return Point(self.x + other.x * factor, self.y + other.y * factor)

    def dot(self, other: "Point") -> float:
        return self.x * other.x + self.y * other.y

    def cross(self, other: "Point") -> float:
        """2D cross product.

        Defined as ``self.y * other.x - self.x * other.y``. This orientation
        fixes the sign convention of the whole pipeline: for a segment
        heading in +x, points with larger y get a negative sign.

        Args:
            other: Right-hand operand

        Returns:
            Signed scalar cross product
        """
        return self.y * other.x - self.x * other.y

    def length(self) -> float:
        return math.hypot(self.x, self.y)

    def distance_to(self, other: "Point") -> float:
        return math.hypot(other.x - self.x, other.y - self.y)

    def normalized(self) -> "Point":
        """Return the unit vector in the same direction.

        The zero vector normalizes to itself instead of producing NaN.
        """
        length = self.length()
        if length == 0.0:
            return Point(0.0, 0.0)
        return Point(self.x / length, self.y / length)

    def to_dict(self) -> dict[str, Any]:
        return {"x": self.x, "y": self.y}

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Point":
        return cls(x=data["x"], y=data["y"])


@dataclass(frozen=True, slots=True)
class LineSegment:
    """A straight edge from p0 to p1.

    Attributes:
        p0: Start point
        p1: End point
    """

    p0: Point
    p1: Point

    @property
    def offset(self) -> Point:
        """Vector from p0 to p1."""
        return self.p1.sub(self.p0)

    def is_degenerate(self, tolerance: float = 0.0) -> bool:
        """Check if the segment has (near) zero length."""
        return self.offset.length() <= tolerance

    def evaluate(self, t: float) -> Point:
        return self.p0.add_scaled(self.offset, t)

    def evaluate_delta(self, t: float) -> Point:  # noqa: ARG002
        """Unit tangent, constant along a line."""
        return self.offset.normalized()

    def find_nearest_t(self, point: Point) -> float:
        """Project a point onto the infinite line through p0 and p1.

        Args:
            point: Query point

        Returns:
            Unclamped parameter of the orthogonal projection. A zero-length
            line has no direction and always returns 0.0.
        """
        offset = self.offset
        length_sq = offset.dot(offset)
        if length_sq == 0.0:
            return 0.0
        return point.sub(self.p0).dot(offset) / length_sq

    def to_dict(self) -> dict[str, Any]:
        return {"type": "line", "points": [self.p0.to_dict(), self.p1.to_dict()]}


@dataclass(frozen=True, slots=True)
class QuadraticSegment:
    """A quadratic Bezier edge.

    Attributes:
        p0: Start point
        p1: Control point
        p2: End point
        samples: Sampling resolution for find_nearest_t
    """

    p0: Point
    p1: Point
    p2: Point
    samples: int = DEFAULT_QUADRATIC_SAMPLES

    def evaluate(self, t: float) -> Point:
        inv_t = 1.0 - t
        return Point(
            inv_t * inv_t * self.p0.x + 2 * inv_t * t * self.p1.x + t * t * self.p2.x,
            inv_t * inv_t * self.p0.y + 2 * inv_t * t * self.p1.y + t * t * self.p2.y,
        )

    def evaluate_delta(self, t: float) -> Point:
        """Unit tangent at t.

        B'(t) = 2(1 - t)(p1 - p0) + 2t(p2 - p1). Where the derivative
        vanishes (control point on an endpoint) the chord direction is used.
        """
        derivative = (
            self.p1.sub(self.p0).scale(2 * (1 - t))
            .add(self.p2.sub(self.p1).scale(2 * t))
        )
        if derivative.x == 0.0 and derivative.y == 0.0:
            return self.p2.sub(self.p0).normalized()
        return derivative.normalized()

    def find_nearest_t(self, point: Point) -> float:
        """Find the parameter of the curve point closest to a query point.

        Dense sampling over [0, 1]; the result is always within the segment
        and is accurate to 1 / samples.

        Args:
            point: Query point

        Returns:
            Parameter in [0, 1] minimizing squared distance
        """
        best_t = 0.0
        min_dist_sq = math.inf

        for i in range(self.samples + 1):
            t = i / self.samples
            curve_point = self.evaluate(t)
            dx = curve_point.x - point.x
            dy = curve_point.y - point.y
            dist_sq = dx * dx + dy * dy
            if dist_sq < min_dist_sq:
                min_dist_sq = dist_sq
                best_t = t

        return best_t

    def to_dict(self) -> dict[str, Any]:
        return {
            "type": "quadratic",
            "points": [self.p0.to_dict(), self.p1.to_dict(), self.p2.to_dict()],
            "samples": self.samples,
        }


Segment = LineSegment | QuadraticSegment


def segment_from_dict(data: dict[str, Any]) -> Segment:
    """Deserialize a segment produced by ``to_dict``.

    Args:
        data: Dictionary with a type tag and control points

    Returns:
        LineSegment or QuadraticSegment

    Raises:
        ValueError: If the type tag is unknown
    """
    points = [Point.from_dict(p) for p in data["points"]]
    if data["type"] == "line":
        return LineSegment(points[0], points[1])
    if data["type"] == "quadratic":
        return QuadraticSegment(
            points[0],
            points[1],
            points[2],
            samples=data.get("samples", DEFAULT_QUADRATIC_SAMPLES),
        )
    raise ValueError(f"Unknown segment type: {data['type']}")
