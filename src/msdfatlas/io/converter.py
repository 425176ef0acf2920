"""Converters between fonttools drawing and domain outlines.

Glyphs are drawn through a TransformPen that scales font units to pixels
and flips the y axis, so outlines arrive in y-down coordinates with the
baseline at y = font_size.
"""

from typing import Any

from fontTools.pens.basePen import BasePen
from fontTools.pens.boundsPen import BoundsPen
from fontTools.pens.transformPen import TransformPen

from msdfatlas.domain import ClosePath, GlyphOutline, LineTo, MoveTo, PathCommand, QuadTo
from msdfatlas.exceptions import UnsupportedOutlineError


class OutlinePen(BasePen):
    """Pen that records drawing as domain path commands.

    BasePen decomposes TrueType quadratic runs with implied on-curve points
    (including all-off-curve contours) into single quadratics before they
    reach ``_qCurveToOne``. Components are drawn in place from ``glyph_set``.
    Cubic curves are rejected.
    """

    def __init__(self, glyph_name: str = "", glyph_set: Any = None) -> None:
        super().__init__(glyphSet=glyph_set)
        self.glyph_name = glyph_name
        self.commands: list[PathCommand] = []

    def _moveTo(self, pt: tuple[float, float]) -> None:
        self.commands.append(MoveTo(*pt))

    def _lineTo(self, pt: tuple[float, float]) -> None:
        self.commands.append(LineTo(*pt))

    def _qCurveToOne(self, pt1: tuple[float, float], pt2: tuple[float, float]) -> None:
        self.commands.append(QuadTo(pt1[0], pt1[1], pt2[0], pt2[1]))

    def _curveToOne(
        self,
        pt1: tuple[float, float],
        pt2: tuple[float, float],
        pt3: tuple[float, float],
    ) -> None:
        raise UnsupportedOutlineError(self.glyph_name, "curveTo")

    def _closePath(self) -> None:
        self.commands.append(ClosePath())

    def _endPath(self) -> None:
        # Open contours carry no implicit closing edge
        pass


def glyph_transform(font_size: float, units_per_em: int) -> tuple[float, ...]:
    """Affine transform from font units to y-down pixels.

    Args:
        font_size: Target em size in pixels
        units_per_em: Font's design units per em

    Returns:
        (xx, xy, yx, yy, dx, dy) transform tuple for TransformPen
    """
    scale = font_size / units_per_em
    return (scale, 0, 0, -scale, 0, font_size)


def fonttools_glyph_to_outline(
    char: str,
    name: str,
    fonttools_glyph: Any,
    font_size: float,
    units_per_em: int,
    glyph_set: Any = None,
) -> GlyphOutline:
    """Convert a fonttools glyph to a domain GlyphOutline.

    Args:
        char: Character the glyph renders
        name: Glyph name
        fonttools_glyph: Glyph object from a GlyphSet
        font_size: Target em size in pixels
        units_per_em: Font's design units per em
        glyph_set: GlyphSet that composite components resolve against

    Returns:
        GlyphOutline with scaled, flipped commands. A glyph without contours
        has no commands and zero bounds.

    Raises:
        UnsupportedOutlineError: If the glyph uses cubic curves
    """
    transform = glyph_transform(font_size, units_per_em)

    pen = OutlinePen(name, glyph_set)
    fonttools_glyph.draw(TransformPen(pen, transform))

    bounds_pen = BoundsPen(glyph_set)
    fonttools_glyph.draw(TransformPen(bounds_pen, transform))
    bounds = bounds_pen.bounds or (0.0, 0.0, 0.0, 0.0)

    return GlyphOutline(
        char=char,
        name=name,
        commands=pen.commands,
        bounds=(float(bounds[0]), float(bounds[1]), float(bounds[2]), float(bounds[3])),
        advance=fonttools_glyph.width * font_size / units_per_em,
    )
