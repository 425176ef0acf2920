"""Per-glyph MSDF generation.

Ties the pipeline together for one glyph: outline to shape, shape to three
planes, each plane rasterized into a shared scratch DistanceMap and
composited into its own channel of an RGB image.
"""

import logging
import math

from msdfatlas.config import ChannelMode, FieldConfig
from msdfatlas.core.builder import build_shape
from msdfatlas.core.compositor import fill_rgb_debug_distance_map, fill_rgb_distance_map
from msdfatlas.core.rasterizer import fill_plane
from msdfatlas.domain import (
    PLANE_COUNT,
    DistanceMap,
    GlyphMetrics,
    GlyphOutline,
    Shape,
    Uint8Image,
)

logger = logging.getLogger(__name__)


def bitmap_size(shape: Shape) -> tuple[int, int]:
    """Pixel dimensions for a shape: its extents rounded up."""
    return math.ceil(shape.width), math.ceil(shape.height)


def generate_msdf(
    shape: Shape,
    width: int,
    height: int,
    config: FieldConfig | None = None,
) -> Uint8Image:
    """Render a shape as a three-channel distance field.

    Args:
        shape: Shape to render; its planes are (re)split here
        width: Output width in pixels
        height: Output height in pixels
        config: Field settings (defaults if None)

    Returns:
        RGB image where channel c encodes plane c

    Raises:
        PlaneError: If any plane has fewer than two segments
    """
    config = config or FieldConfig()
    planes = shape.split_planes()

    image = Uint8Image(width, height, pitch=3)
    buffer = DistanceMap(width, height)

    for channel in range(PLANE_COUNT):
        fill_plane(buffer, shape, planes[channel], epsilon=config.tie_epsilon)
        fill_rgb_distance_map(image, buffer, channel, config.max_range)

    return image


def generate_debug_planes(
    shape: Shape,
    width: int,
    height: int,
    config: FieldConfig | None = None,
) -> list[Uint8Image]:
    """Render each plane as its own debug image.

    Args:
        shape: Shape to render
        width: Output width in pixels
        height: Output height in pixels
        config: Field settings (defaults if None)

    Returns:
        One image per plane, in plane order
    """
    config = config or FieldConfig()
    planes = shape.split_planes()
    buffer = DistanceMap(width, height)

    images = []
    for channel in range(PLANE_COUNT):
        fill_plane(buffer, shape, planes[channel], epsilon=config.tie_epsilon)
        debug = Uint8Image(width, height, pitch=3)
        fill_rgb_debug_distance_map(debug, buffer, channel)
        images.append(debug)

    return images


def glyph_metrics(outline: GlyphOutline, shape: Shape, padding: float) -> GlyphMetrics:
    """Compute layout metrics for a rendered glyph.

    Width and height are the bitmap's pixel size, which includes padding.
    """
    width, height = bitmap_size(shape)
    return GlyphMetrics(
        char=outline.char,
        width=width,
        height=height,
        xoffset=outline.bounds[0] - padding,
        yoffset=outline.bounds[1] + padding,
        xadvance=outline.advance,
    )


def render_glyph(
    outline: GlyphOutline,
    config: FieldConfig | None = None,
) -> tuple[Uint8Image, GlyphMetrics]:
    """Render one glyph outline into an MSDF bitmap.

    In debug channel mode the three per-plane debug images are combined by
    taking the debug image of plane c as channel c.

    Args:
        outline: Glyph outline in y-down pixel units
        config: Field settings (defaults if None)

    Returns:
        Tuple of (image, metrics)
    """
    config = config or FieldConfig()
    shape = build_shape(
        outline,
        padding=config.padding,
        tolerance=config.degenerate_tolerance,
        quadratic_samples=config.quadratic_samples,
    )
    width, height = bitmap_size(shape)

    logger.debug(
        "Rendering %s: %d segments, %dx%d pixels",
        outline.name,
        len(shape.lines),
        width,
        height,
    )

    if config.channel_mode == ChannelMode.DEBUG:
        planes = generate_debug_planes(shape, width, height, config)
        image = Uint8Image(width, height, pitch=3)
        for channel, debug in enumerate(planes):
            image.data[channel::3] = debug.data[channel::3]
    else:
        image = generate_msdf(shape, width, height, config)

    return image, glyph_metrics(outline, shape, config.padding)
