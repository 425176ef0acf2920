"""Domain models for msdfatlas.

This module contains the value types the distance field engine works on.
All models are designed to be:

- Immutable where possible (using frozen dataclasses)
- Serializable for inter-process communication (parallel processing)
- Independent of fonttools implementation details

Key classes:
- Point: A 2D vector
- LineSegment / QuadraticSegment: The two segment variants
- Shape: A glyph's segments and their three channel planes
- DistanceMap / Uint8Image: Raster buffers
- GlyphOutline: Path commands extracted from a font
- GlyphMetrics / AtlasGlyph / FontData: Atlas metrics records
"""

from msdfatlas.domain.field import DistanceMap, Uint8Image
from msdfatlas.domain.geometry import (
    LineSegment,
    Point,
    QuadraticSegment,
    Segment,
    segment_from_dict,
)
from msdfatlas.domain.metrics import (
    AtlasGlyph,
    FontCommon,
    FontData,
    FontInfo,
    GlyphMetrics,
)
from msdfatlas.domain.outline import (
    ClosePath,
    GlyphOutline,
    LineTo,
    MoveTo,
    PathCommand,
    QuadTo,
)
from msdfatlas.domain.shape import PLANE_COUNT, Shape

__all__: list[str] = [
    # Geometry
    "Point",
    "LineSegment",
    "QuadraticSegment",
    "Segment",
    "segment_from_dict",
    # Shape and buffers
    "PLANE_COUNT",
    "Shape",
    "DistanceMap",
    "Uint8Image",
    # Outlines
    "MoveTo",
    "LineTo",
    "QuadTo",
    "ClosePath",
    "PathCommand",
    "GlyphOutline",
    # Metrics
    "GlyphMetrics",
    "AtlasGlyph",
    "FontInfo",
    "FontCommon",
    "FontData",
]
