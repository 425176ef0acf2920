"""msdfatlas - Build multi-channel signed distance field font atlases.

msdfatlas is a CLI tool that reads glyph outlines from a TrueType font,
rasterizes each glyph into a multi-channel signed distance field (MSDF) and
packs the results into a single atlas image with a JSON metrics file for
text layout.

Example:
    $ msdfatlas Roboto-Regular.ttf

This will create Roboto-Regular.png and Roboto-Regular.json next to the font.
"""

__version__ = "0.1.0"
__author__ = "msdfatlas contributors"

__all__ = ["__author__", "__version__"]
