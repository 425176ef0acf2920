"""Shape model for one glyph.

A Shape owns the ordered sequence of segments making up a glyph's contours,
plus three planes. Each plane is a list of references into that sequence
and drives one output color channel.
"""

from collections.abc import Sequence
from dataclasses import dataclass, field
from typing import Any

from msdfatlas.domain.geometry import LineSegment, Point, Segment, segment_from_dict
from msdfatlas.exceptions import DegenerateSegmentError

PLANE_COUNT = 3


@dataclass
class Shape:
    """A glyph outline as a flat list of segments.

    Attributes:
        width: Extent of the coordinate space along x (not a pixel count)
        height: Extent of the coordinate space along y (not a pixel count)
        lines: Segments in the order the outline emitted them
        planes: Three segment subsets, filled by split_planes()
    """

    width: float
    height: float
    lines: list[Segment] = field(default_factory=list)
    planes: list[list[Segment]] = field(
        default_factory=lambda: [[] for _ in range(PLANE_COUNT)]
    )

    def add_segment(self, segment: Segment) -> None:
        """Append a segment to the shape.

        Args:
            segment: Line or quadratic segment

        Raises:
            DegenerateSegmentError: If a line has zero length
        """
        if isinstance(segment, LineSegment) and segment.is_degenerate():
            raise DegenerateSegmentError(
                f"Zero-length line at ({segment.p0.x}, {segment.p0.y})"
            )
        self.lines.append(segment)

    def add_path(self, path: Sequence[tuple[float, float]]) -> None:
        """Append a polyline as consecutive line segments.

        Args:
            path: Sequence of (x, y) vertices. Close a contour by repeating
                the first vertex at the end.
        """
        for start, end in zip(path, path[1:]):
            self.add_segment(LineSegment(Point(*start), Point(*end)))

    def split_planes(self) -> list[list[Segment]]:
        """Assign segments to the three planes by position.

        Plane 0 takes even indices, plane 1 takes odd indices, and plane 2
        takes everything but the first segment. Segment 0 always belongs to
        planes 0 and 1. Calling this again rebuilds the planes from scratch.

        Returns:
            The three planes
        """
        self.planes = [
            [seg for i, seg in enumerate(self.lines) if i == 0 or i % 2 == 0],
            [seg for i, seg in enumerate(self.lines) if i == 0 or i % 2 != 0],
            list(self.lines[1:]),
        ]
        return self.planes

    def is_empty(self) -> bool:
        return len(self.lines) == 0

    def to_dict(self) -> dict[str, Any]:
        """Serialize to dictionary for IPC.

        Planes are not serialized; they are derived from the segment order.
        """
        return {
            "width": self.width,
            "height": self.height,
            "lines": [seg.to_dict() for seg in self.lines],
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Shape":
        return cls(
            width=data["width"],
            height=data["height"],
            lines=[segment_from_dict(s) for s in data["lines"]],
        )
