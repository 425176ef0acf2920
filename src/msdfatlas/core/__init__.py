"""Core processing algorithms for msdfatlas.

This module contains the core algorithms for:

- Distance selection (clamped and perpendicular point-to-segment distance)
- Plane rasterization (nearest-segment search with orthogonality tie-break)
- Channel compositing (float distances to bytes)
- Shape building (path commands to segments)
- Atlas packing and text layout

All functions are designed to be:
- Stateless (safe for use in worker processes)
- Pure apart from the explicit output buffers they fill

Key functions:
- select_distance: Measure a point against one segment
- fill_plane: Rasterize one plane into a DistanceMap
- fill_rgb_distance_map: Encode a DistanceMap into an image channel
- build_shape: Build a Shape from a GlyphOutline
- generate_msdf: Render a Shape into an RGB distance field
- pack_rects: Shelf-pack glyph rectangles
- create_layout: Lay text out against an atlas

Key classes:
- AtlasProcessor: Orchestrates atlas generation for a font
- MsdfFont: Atlas metrics indexed for layout
"""

from msdfatlas.core.builder import build_shape
from msdfatlas.core.compositor import (
    encode_distance,
    fill_rgb_debug_distance_map,
    fill_rgb_distance_map,
)
from msdfatlas.core.generator import (
    generate_debug_planes,
    generate_msdf,
    render_glyph,
)
from msdfatlas.core.layout import FontLayout, LayoutRect, MsdfFont, create_layout
from msdfatlas.core.packer import PackResult, compose_atlas, pack_rects
from msdfatlas.core.processor import AtlasProcessor, process_glyph
from msdfatlas.core.rasterizer import fill_plane, nearest_segment
from msdfatlas.core.selector import SegmentDistance, is_closer, select_distance

__all__ = [
    # Processor classes
    "AtlasProcessor",
    # Layout classes
    "FontLayout",
    "LayoutRect",
    "MsdfFont",
    # Packing
    "PackResult",
    # Selector
    "SegmentDistance",
    "build_shape",
    "compose_atlas",
    "create_layout",
    "encode_distance",
    "fill_plane",
    "fill_rgb_debug_distance_map",
    "fill_rgb_distance_map",
    "generate_debug_planes",
    "generate_msdf",
    "is_closer",
    "nearest_segment",
    "pack_rects",
    "process_glyph",
    "render_glyph",
    "select_distance",
]
