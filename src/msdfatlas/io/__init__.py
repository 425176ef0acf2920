"""Font and atlas I/O layer for msdfatlas.

This module handles reading glyph outlines with fonttools and writing the
generated atlas. It provides a clean abstraction layer between fonttools,
Pillow and the domain models.

Key responsibilities:
- Load TTF fonts and extract scaled, y-down glyph outlines
- Write the atlas PNG and JSON metrics
- Encode debug TGA images

Key classes:
- FontReader: Load fonts and extract outlines
- AtlasWriter: Save atlas image and metrics
"""

from msdfatlas.io.reader import FontReader
from msdfatlas.io.tga import encode_tga, write_tga
from msdfatlas.io.writer import AtlasWriter, load_font_data

__all__ = [
    "AtlasWriter",
    "FontReader",
    "encode_tga",
    "load_font_data",
    "write_tga",
]
