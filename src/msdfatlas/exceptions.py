"""Exception hierarchy for msdfatlas."""


class MsdfAtlasError(Exception):
    """Base exception for all msdfatlas errors."""

    pass


class FontError(MsdfAtlasError):
    """Errors related to font loading or atlas saving."""

    pass


class FontLoadError(FontError):
    """Error loading a font file."""

    def __init__(self, path: str, reason: str) -> None:
        self.path = path
        self.reason = reason
        super().__init__(f"Failed to load font '{path}': {reason}")


class FontSaveError(FontError):
    """Error writing atlas output files."""

    def __init__(self, path: str, reason: str) -> None:
        self.path = path
        self.reason = reason
        super().__init__(f"Failed to save '{path}': {reason}")


class GlyphError(MsdfAtlasError):
    """Errors related to glyph processing."""

    pass


class GlyphNotFoundError(GlyphError):
    """Requested glyph not found in font or atlas."""

    def __init__(self, char: str) -> None:
        self.char = char
        super().__init__(f"Glyph for {char!r} not found")


class GlyphProcessingError(GlyphError):
    """Error processing a specific glyph."""

    def __init__(self, glyph_name: str, reason: str) -> None:
        self.glyph_name = glyph_name
        self.reason = reason
        super().__init__(f"Error processing glyph '{glyph_name}': {reason}")


class UnsupportedOutlineError(GlyphError):
    """Glyph outline uses a drawing command the engine cannot represent."""

    def __init__(self, glyph_name: str, command: str) -> None:
        self.glyph_name = glyph_name
        self.command = command
        super().__init__(f"Glyph '{glyph_name}' uses unsupported command '{command}'")


class GeometryError(MsdfAtlasError):
    """Errors in geometric calculations."""

    pass


class DegenerateSegmentError(GeometryError):
    """Segment has no extent and cannot produce a distance."""

    def __init__(self, message: str) -> None:
        super().__init__(message)


class PlaneError(MsdfAtlasError):
    """Plane configuration cannot be rasterized."""

    pass


class EmptyPlaneError(PlaneError):
    """Plane has no segments."""

    def __init__(self) -> None:
        super().__init__("Plane is empty")


class UnsupportedPlaneError(PlaneError, NotImplementedError):
    """Plane has a single segment, which the rasterizer does not handle."""

    def __init__(self, segment_count: int) -> None:
        self.segment_count = segment_count
        super().__init__(f"Plane has {segment_count} segment. Not implemented yet")


class AtlasError(MsdfAtlasError):
    """Errors related to atlas assembly."""

    pass


class PackingError(AtlasError):
    """Glyph rectangles could not be packed."""

    def __init__(self, reason: str) -> None:
        self.reason = reason
        super().__init__(f"Packing failed: {reason}")


class ProcessingCancelledError(MsdfAtlasError):
    """Processing was cancelled by user."""

    def __init__(self, processed_count: int, pending_count: int) -> None:
        self.processed_count = processed_count
        self.pending_count = pending_count
        super().__init__(
            f"Processing cancelled: {processed_count} completed, {pending_count} pending"
        )
