"""Text layout against a generated atlas.

This is the consumer side of the metrics record: it looks glyphs up by
character, normalizes their atlas rectangles to texture coordinates, and
lays a string out along a single line.
"""

from dataclasses import dataclass, field

from msdfatlas.domain import AtlasGlyph, FontData
from msdfatlas.exceptions import GlyphNotFoundError

Rect = tuple[float, float, float, float]


@dataclass
class MsdfFont:
    """An atlas's metrics indexed for lookup.

    Attributes:
        data: Metrics record
        texture: Path or URL of the atlas image
        sub_rects: Normalized (u1, v1, u2, v2) per character
    """

    data: FontData
    texture: str = ""
    sub_rects: dict[str, Rect] = field(default_factory=dict)
    _by_char: dict[str, AtlasGlyph] = field(default_factory=dict, repr=False)

    @classmethod
    def from_font_data(cls, data: FontData, texture: str = "") -> "MsdfFont":
        scale_w = data.common.scale_w
        scale_h = data.common.scale_h
        font = cls(data=data, texture=texture)
        for glyph in data.chars:
            font._by_char[glyph.char] = glyph
            font.sub_rects[glyph.char] = (
                glyph.x / scale_w,
                glyph.y / scale_h,
                (glyph.x + glyph.metrics.width) / scale_w,
                (glyph.y + glyph.metrics.height) / scale_h,
            )
        return font

    def get_glyph(self, char: str) -> AtlasGlyph:
        """Look up a glyph.

        Raises:
            GlyphNotFoundError: If the atlas has no glyph for char
        """
        try:
            return self._by_char[char]
        except KeyError:
            raise GlyphNotFoundError(char) from None

    def __contains__(self, char: str) -> bool:
        return char in self._by_char


@dataclass
class LayoutRect:
    """Placement of one character.

    Attributes:
        glyph: Atlas glyph
        rect: Inked area (x, y, width, height), padding removed
        texture_rect: Full bitmap area (x, y, width, height)
    """

    glyph: AtlasGlyph
    rect: Rect
    texture_rect: Rect


@dataclass
class FontLayout:
    """A laid-out line of text.

    Attributes:
        font: Font used
        rects: One entry per character
        extents: Bounding box (x, y, width, height) of all inked rects
    """

    font: MsdfFont
    rects: list[LayoutRect]
    extents: Rect


def create_layout(font: MsdfFont, text: str) -> FontLayout:
    """Lay a string out on one line.

    Vertical placement measures from a fixed top line at
    lineHeight + size - base; each glyph sits height + yoffset above it.

    Args:
        font: Indexed atlas
        text: Characters to place

    Returns:
        FontLayout with per-character rectangles and extents

    Raises:
        GlyphNotFoundError: If a character is missing from the atlas
    """
    common = font.data.common
    info = font.data.info
    top = common.line_height + info.size - common.base
    padding = info.padding[0]

    x1 = y1 = x2 = y2 = 0.0
    cursor = 0.0
    rects: list[LayoutRect] = []

    for char in text:
        glyph = font.get_glyph(char)
        metrics = glyph.metrics
        x = cursor + metrics.xoffset + padding
        y = top - metrics.height - metrics.yoffset
        texture_rect = (x - padding, y - padding, metrics.width, metrics.height)
        rect = (x, y, metrics.width - padding * 2, metrics.height - padding * 2)
        rects.append(LayoutRect(glyph=glyph, rect=rect, texture_rect=texture_rect))

        x1 = min(x1, rect[0])
        y1 = min(y1, rect[1])
        x2 = max(x2, rect[0] + rect[2])
        y2 = max(y2, rect[1] + rect[3])
        cursor += metrics.xadvance

    return FontLayout(font=font, rects=rects, extents=(x1, y1, x2 - x1, y2 - y1))
