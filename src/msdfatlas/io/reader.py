"""Font reader for extracting glyph outlines.

This module provides the FontReader class for loading font files and
extracting per-character outlines into domain models.
"""

from collections.abc import Iterator
from pathlib import Path

from fontTools.ttLib import TTFont

from msdfatlas.domain import GlyphOutline
from msdfatlas.io.converter import fonttools_glyph_to_outline


class FontReader:
    """Loads TTF fonts and extracts glyph outlines.

    Example:
        with FontReader(Path("font.ttf")) as reader:
            outline = reader.get_outline("A", font_size=64)
    """

    def __init__(self, font_path: Path) -> None:
        """Initialize the font reader.

        Args:
            font_path: Path to the TTF font file
        """
        self._font_path = font_path
        self._font: TTFont | None = None

    def load(self) -> None:
        """Load the font file.

        Raises:
            FileNotFoundError: If font file does not exist
            Exception: If font file is invalid or cannot be loaded
        """
        if not self._font_path.exists():
            raise FileNotFoundError(f"Font file not found: {self._font_path}")

        self._font = TTFont(str(self._font_path))

    def _require_font(self) -> TTFont:
        if self._font is None:
            raise RuntimeError("Font not loaded. Call load() first.")
        return self._font

    @property
    def format(self) -> str:
        """Return font format ('TrueType' or 'OpenType')."""
        font = self._require_font()
        if "CFF " in font or "CFF2" in font:
            return "OpenType"
        return "TrueType"

    @property
    def family_name(self) -> str:
        """Return the font family name, or the file stem if unnamed."""
        font = self._require_font()
        if "name" in font:
            name = font["name"].getDebugName(1)
            if name:
                return name
        return self._font_path.stem

    @property
    def units_per_em(self) -> int:
        """Return font's units per em."""
        return self._require_font()["head"].unitsPerEm  # type: ignore[attr-defined]

    @property
    def glyph_count(self) -> int:
        """Return total number of glyphs in the font."""
        return self._require_font()["maxp"].numGlyphs

    def vertical_metrics(self) -> tuple[int, int, int]:
        """Return (ascender, descender, line_gap) in font units.

        Prefers the OS/2 typographic metrics and falls back to hhea.
        """
        font = self._require_font()
        if "OS/2" in font:
            os2 = font["OS/2"]
            return os2.sTypoAscender, os2.sTypoDescender, os2.sTypoLineGap
        hhea = font["hhea"]
        return hhea.ascent, hhea.descent, hhea.lineGap

    def glyph_name_for(self, char: str) -> str | None:
        """Map a character to its glyph name via the best cmap."""
        cmap = self._require_font().getBestCmap() or {}
        return cmap.get(ord(char))

    def get_outline(self, char: str, font_size: float) -> GlyphOutline | None:
        """Extract the outline of the glyph for a character.

        Args:
            char: Single character
            font_size: Target em size in pixels

        Returns:
            GlyphOutline, or None if the character is unmapped or maps to
            .notdef

        Raises:
            RuntimeError: If font has not been loaded yet
            UnsupportedOutlineError: If the glyph uses cubic curves
        """
        font = self._require_font()
        name = self.glyph_name_for(char)
        if name is None or name == font.getGlyphOrder()[0]:
            return None

        glyph_set = font.getGlyphSet()
        return fonttools_glyph_to_outline(
            char=char,
            name=name,
            fonttools_glyph=glyph_set[name],
            font_size=font_size,
            units_per_em=self.units_per_em,
            glyph_set=glyph_set,
        )

    def iter_outlines(self, charset: str, font_size: float) -> Iterator[GlyphOutline]:
        """Yield outlines for each mapped character of a charset, in order.

        Unmapped characters are skipped silently.
        """
        for char in charset:
            outline = self.get_outline(char, font_size)
            if outline is not None:
                yield outline

    def close(self) -> None:
        """Close the font file and free resources."""
        if self._font is not None:
            self._font.close()
            self._font = None

    def __enter__(self) -> "FontReader":
        """Context manager entry."""
        self.load()
        return self

    def __exit__(self, _exc_type: object, _exc_val: object, _exc_tb: object) -> None:
        """Context manager exit."""
        self.close()
