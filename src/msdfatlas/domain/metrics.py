"""Atlas metrics records.

These are the records a text-layout consumer reads next to the atlas image.
The JSON shape follows the BMFont-style layout (``chars``, ``info``,
``common``) with camelCase keys.
"""

from dataclasses import dataclass, field
from typing import Any


@dataclass
class GlyphMetrics:
    """Layout metrics for one glyph, before atlas placement.

    Attributes:
        char: Character this glyph renders
        width: Bitmap width including padding
        height: Bitmap height including padding
        xoffset: Horizontal offset of the bitmap from the pen position
        yoffset: Vertical offset of the bitmap from the pen position
        xadvance: Pen advance after this glyph
    """

    char: str
    width: float
    height: float
    xoffset: float
    yoffset: float
    xadvance: float

    def to_dict(self) -> dict[str, Any]:
        return {
            "char": self.char,
            "width": self.width,
            "height": self.height,
            "xoffset": self.xoffset,
            "yoffset": self.yoffset,
            "xadvance": self.xadvance,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "GlyphMetrics":
        return cls(
            char=data["char"],
            width=data["width"],
            height=data["height"],
            xoffset=data["xoffset"],
            yoffset=data["yoffset"],
            xadvance=data["xadvance"],
        )


@dataclass
class AtlasGlyph:
    """A glyph's metrics plus its placement in the atlas.

    Attributes:
        id: Unicode code point
        metrics: Layout metrics
        x: Left edge in the atlas, in pixels
        y: Top edge in the atlas, in pixels
    """

    id: int
    metrics: GlyphMetrics
    x: int
    y: int

    @property
    def char(self) -> str:
        return self.metrics.char

    def to_dict(self) -> dict[str, Any]:
        return {"id": self.id, "x": self.x, "y": self.y, **self.metrics.to_dict()}

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "AtlasGlyph":
        return cls(
            id=data.get("id", ord(data["char"])),
            metrics=GlyphMetrics.from_dict(data),
            x=data["x"],
            y=data["y"],
        )


@dataclass
class FontInfo:
    """Generation parameters recorded alongside the atlas."""

    size: float
    padding: tuple[int, int, int, int]
    face: str = ""
    distance_range: float = 1.0

    def to_dict(self) -> dict[str, Any]:
        return {
            "face": self.face,
            "size": self.size,
            "bold": 0,
            "italic": 0,
            "unicode": 1,
            "stretchH": 100,
            "smooth": 1,
            "aa": 1,
            "padding": list(self.padding),
            "spacing": 0,
            "outline": 0,
            "distanceRange": self.distance_range,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "FontInfo":
        padding = list(data["padding"])
        # Two-value padding is (vertical, horizontal)
        if len(padding) == 2:
            padding = [padding[0], padding[1], padding[0], padding[1]]
        return cls(
            size=data["size"],
            padding=(padding[0], padding[1], padding[2], padding[3]),
            face=data.get("face", ""),
            distance_range=data.get("distanceRange", 1.0),
        )


@dataclass
class FontCommon:
    """Atlas-wide layout values.

    Attributes:
        line_height: Distance between baselines
        base: Distance from the top of a line to the baseline
        scale_w: Atlas width in pixels
        scale_h: Atlas height in pixels
    """

    line_height: float
    base: float
    scale_w: int
    scale_h: int

    def to_dict(self) -> dict[str, Any]:
        return {
            "lineHeight": self.line_height,
            "base": self.base,
            "scaleW": self.scale_w,
            "scaleH": self.scale_h,
            "pages": 1,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "FontCommon":
        return cls(
            line_height=data["lineHeight"],
            base=data["base"],
            scale_w=data["scaleW"],
            scale_h=data["scaleH"],
        )


@dataclass
class FontData:
    """Complete metrics record for an atlas."""

    info: FontInfo
    common: FontCommon
    chars: list[AtlasGlyph] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        return {
            "chars": [g.to_dict() for g in self.chars],
            "info": self.info.to_dict(),
            "common": self.common.to_dict(),
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "FontData":
        return cls(
            info=FontInfo.from_dict(data["info"]),
            common=FontCommon.from_dict(data["common"]),
            chars=[AtlasGlyph.from_dict(c) for c in data["chars"]],
        )
