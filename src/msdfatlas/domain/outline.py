"""Glyph outlines as drawing commands.

An outline is what the font reader hands to the shape builder: a bounding
box, an advance width and an ordered list of path commands. Coordinates are
already scaled to the target font size and flipped to y-down.
"""

from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True, slots=True)
class MoveTo:
    """Start a new contour at (x, y)."""

    x: float
    y: float


@dataclass(frozen=True, slots=True)
class LineTo:
    """Straight edge from the cursor to (x, y)."""

    x: float
    y: float


@dataclass(frozen=True, slots=True)
class QuadTo:
    """Quadratic edge from the cursor through control (x1, y1) to (x, y)."""

    x1: float
    y1: float
    x: float
    y: float


@dataclass(frozen=True, slots=True)
class ClosePath:
    """Close the current contour back to its move-to point."""


PathCommand = MoveTo | LineTo | QuadTo | ClosePath


def command_to_dict(command: PathCommand) -> dict[str, Any]:
    """Serialize a path command using single-letter SVG-style tags."""
    if isinstance(command, MoveTo):
        return {"type": "M", "x": command.x, "y": command.y}
    if isinstance(command, LineTo):
        return {"type": "L", "x": command.x, "y": command.y}
    if isinstance(command, QuadTo):
        return {"type": "Q", "x1": command.x1, "y1": command.y1, "x": command.x, "y": command.y}
    return {"type": "Z"}


def command_from_dict(data: dict[str, Any]) -> PathCommand:
    """Deserialize a path command.

    Raises:
        ValueError: If the type tag is unknown
    """
    kind = data["type"]
    if kind == "M":
        return MoveTo(data["x"], data["y"])
    if kind == "L":
        return LineTo(data["x"], data["y"])
    if kind == "Q":
        return QuadTo(data["x1"], data["y1"], data["x"], data["y"])
    if kind == "Z":
        return ClosePath()
    raise ValueError(f"Unknown path command: {kind}")


@dataclass
class GlyphOutline:
    """A glyph's outline ready for shape building.

    Attributes:
        char: Character this glyph renders
        name: Glyph name in the font
        commands: Drawing commands in y-down coordinates
        bounds: Tight bounding box (x1, y1, x2, y2) of the commands
        advance: Horizontal advance in the same units
    """

    char: str
    name: str
    commands: list[PathCommand]
    bounds: tuple[float, float, float, float]
    advance: float

    @property
    def width(self) -> float:
        return self.bounds[2] - self.bounds[0]

    @property
    def height(self) -> float:
        return self.bounds[3] - self.bounds[1]

    def is_empty(self) -> bool:
        return len(self.commands) == 0

    def to_dict(self) -> dict[str, Any]:
        """Serialize to dictionary for IPC."""
        return {
            "char": self.char,
            "name": self.name,
            "commands": [command_to_dict(c) for c in self.commands],
            "bounds": list(self.bounds),
            "advance": self.advance,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "GlyphOutline":
        x1, y1, x2, y2 = data["bounds"]
        return cls(
            char=data["char"],
            name=data["name"],
            commands=[command_from_dict(c) for c in data["commands"]],
            bounds=(x1, y1, x2, y2),
            advance=data["advance"],
        )
