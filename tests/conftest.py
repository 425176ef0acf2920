"""Shared fixtures: a small TrueType font built in code."""

from pathlib import Path

import pytest
from fontTools.fontBuilder import FontBuilder
from fontTools.pens.ttGlyphPen import TTGlyphPen

UPM = 1000


def _rect(pen: TTGlyphPen, x0: int, y0: int, x1: int, y1: int, clockwise: bool = True) -> None:
    if clockwise:
        points = [(x0, y0), (x0, y1), (x1, y1), (x1, y0)]
    else:
        points = [(x0, y0), (x1, y0), (x1, y1), (x0, y1)]
    pen.moveTo(points[0])
    for point in points[1:]:
        pen.lineTo(point)
    pen.closePath()


def _build_glyphs() -> dict:
    glyphs = {}

    pen = TTGlyphPen(None)
    _rect(pen, 50, 0, 450, 700)
    glyphs[".notdef"] = pen.glyph()

    glyphs["space"] = TTGlyphPen(None).glyph()

    # Solid block
    pen = TTGlyphPen(None)
    _rect(pen, 0, 0, 600, 700)
    glyphs["H"] = pen.glyph()

    # Block with a hole
    pen = TTGlyphPen(None)
    _rect(pen, 0, 0, 600, 700)
    _rect(pen, 150, 150, 450, 550, clockwise=False)
    glyphs["O"] = pen.glyph()

    # Triangle
    pen = TTGlyphPen(None)
    pen.moveTo((0, 0))
    pen.lineTo((300, 700))
    pen.lineTo((600, 0))
    pen.closePath()
    glyphs["A"] = pen.glyph()

    # Round glyph made of quadratics only
    pen = TTGlyphPen(None)
    pen.moveTo((300, 0))
    pen.qCurveTo((0, 0), (0, 300))
    pen.qCurveTo((0, 600), (300, 600))
    pen.qCurveTo((600, 600), (600, 300))
    pen.qCurveTo((600, 0), (300, 0))
    pen.closePath()
    glyphs["o"] = pen.glyph()

    # Two-point sliver: yields two segments, too few for every plane
    pen = TTGlyphPen(None)
    pen.moveTo((0, 300))
    pen.lineTo((500, 400))
    pen.closePath()
    glyphs["hyphen"] = pen.glyph()

    pen = TTGlyphPen(None)
    _rect(pen, 100, 400, 200, 700)
    glyphs["quotesingle"] = pen.glyph()

    # Composite: two quotesingle components
    pen = TTGlyphPen(glyphs)
    pen.addComponent("quotesingle", (1, 0, 0, 1, 0, 0))
    pen.addComponent("quotesingle", (1, 0, 0, 1, 250, 0))
    glyphs["quotedbl"] = pen.glyph()

    return glyphs


def build_test_font(path: Path) -> Path:
    """Write a TrueType font covering ' ', 'H', 'O', 'A', 'o', '-', "'" and '"'."""
    glyphs = _build_glyphs()
    glyph_order = list(glyphs)

    fb = FontBuilder(UPM, isTTF=True)
    fb.setupGlyphOrder(glyph_order)
    fb.setupCharacterMap(
        {
            ord(" "): "space",
            ord("H"): "H",
            ord("O"): "O",
            ord("A"): "A",
            ord("o"): "o",
            ord("-"): "hyphen",
            ord("'"): "quotesingle",
            ord('"'): "quotedbl",
        }
    )
    fb.setupGlyf(glyphs)

    glyph_table = fb.font["glyf"]
    advances = {name: 700 for name in glyph_order}
    advances["space"] = 250
    fb.setupHorizontalMetrics(
        {name: (advances[name], getattr(glyph_table[name], "xMin", 0)) for name in glyph_order}
    )
    fb.setupHorizontalHeader(ascent=800, descent=-200)
    fb.setupNameTable({"familyName": "Test Block", "styleName": "Regular"})
    fb.setupOS2(
        sTypoAscender=800,
        sTypoDescender=-200,
        sTypoLineGap=100,
        usWinAscent=800,
        usWinDescent=200,
    )
    fb.setupPost()
    fb.save(str(path))
    return path


@pytest.fixture
def test_font_path(tmp_path: Path) -> Path:
    """Path to a freshly built test font."""
    return build_test_font(tmp_path / "TestBlock-Regular.ttf")
