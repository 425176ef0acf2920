"""Shape building from glyph outlines.

Converts path commands into a Shape sized to the glyph bitmap: the outline's
bounding box is moved to the origin and surrounded by ``padding`` units on
every side.
"""

import logging

from msdfatlas.domain import (
    ClosePath,
    GlyphOutline,
    LineSegment,
    LineTo,
    MoveTo,
    Point,
    QuadraticSegment,
    QuadTo,
    Shape,
)
from msdfatlas.domain.geometry import DEFAULT_QUADRATIC_SAMPLES

logger = logging.getLogger(__name__)

DEGENERATE_TOLERANCE = 1e-4


def build_shape(
    outline: GlyphOutline,
    padding: float,
    tolerance: float = DEGENERATE_TOLERANCE,
    quadratic_samples: int = DEFAULT_QUADRATIC_SAMPLES,
) -> Shape:
    """Build a Shape from a glyph outline.

    Move-to sets the cursor and the contour start. Line-to and quad-to emit
    a segment from the cursor. Close-path emits a line back to the most
    recent move-to point. Segments whose start and end lie within
    ``tolerance`` of each other are dropped.

    Args:
        outline: Glyph outline with bounds and commands
        padding: Border added on every side, in shape units
        tolerance: Minimum start-to-end length of an emitted segment
        quadratic_samples: Sampling resolution for quadratic segments

    Returns:
        Shape with segments in command order (planes not yet split)
    """
    x1, y1, _, _ = outline.bounds
    shape = Shape(
        width=outline.width + padding * 2,
        height=outline.height + padding * 2,
    )

    def to_shape(x: float, y: float) -> Point:
        return Point(x - x1 + padding, y - y1 + padding)

    def too_short(start: Point, end: Point) -> bool:
        return start.sub(end).length() < tolerance

    cursor = Point(0.0, 0.0)
    contour_start: Point | None = None
    dropped = 0

    for command in outline.commands:
        if isinstance(command, MoveTo):
            cursor = to_shape(command.x, command.y)
            contour_start = cursor
        elif isinstance(command, LineTo):
            end = to_shape(command.x, command.y)
            if too_short(cursor, end):
                dropped += 1
            else:
                shape.add_segment(LineSegment(cursor, end))
            cursor = end
        elif isinstance(command, QuadTo):
            control = to_shape(command.x1, command.y1)
            end = to_shape(command.x, command.y)
            if too_short(cursor, end):
                dropped += 1
            else:
                shape.add_segment(
                    QuadraticSegment(cursor, control, end, samples=quadratic_samples)
                )
            cursor = end
        elif isinstance(command, ClosePath):
            if contour_start is not None:
                if too_short(cursor, contour_start):
                    dropped += 1
                else:
                    shape.add_segment(LineSegment(cursor, contour_start))
                cursor = contour_start
            contour_start = None

    if dropped:
        logger.debug(
            "Dropped %d degenerate segments from %s", dropped, outline.name
        )

    return shape
