"""Configuration settings for msdfatlas."""

from enum import Enum
from pathlib import Path

from pydantic import BaseModel, Field, field_validator

DEFAULT_CHARSET = "".join(chr(c) for c in range(32, 127))


class ChannelMode(str, Enum):
    """How distance maps are written into image channels."""

    MSDF = "msdf"
    DEBUG = "debug"


class FieldConfig(BaseModel):
    """Configuration for distance field generation.

    Distances are in shape-space units, which are pixels of the output
    bitmap because glyph outlines are scaled to the font size before
    shape building.
    """

    max_range: float = Field(
        default=1.0,
        gt=0.0,
        le=64.0,
        description="Distance mapped to the ends of the byte range",
    )
    padding: int = Field(
        default=10,
        ge=0,
        le=128,
        description="Empty border around each glyph bitmap",
    )
    quadratic_samples: int = Field(
        default=100,
        ge=2,
        le=10000,
        description="Samples used to find the nearest point on a quadratic",
    )
    tie_epsilon: float = Field(
        default=0.001,
        ge=0.0,
        le=1.0,
        description="Distances closer than this are ranked by orthogonality",
    )
    degenerate_tolerance: float = Field(
        default=1e-4,
        ge=0.0,
        le=1.0,
        description="Segments whose endpoints are closer than this are dropped",
    )
    channel_mode: ChannelMode = Field(
        default=ChannelMode.MSDF,
        description="Production encoding or per-plane debug images",
    )


class AtlasConfig(BaseModel):
    """Configuration for atlas assembly."""

    font_size: float = Field(
        default=100.0,
        gt=0.0,
        le=1000.0,
        description="Font size in pixels (em square height)",
    )
    charset: str = Field(
        default=DEFAULT_CHARSET,
        min_length=1,
        description="Characters to include in the atlas",
    )
    spacing: int = Field(
        default=0,
        ge=0,
        le=64,
        description="Gap between packed glyph bitmaps",
    )
    max_width: int = Field(
        default=1024,
        ge=16,
        le=16384,
        description="Maximum atlas width in pixels",
    )

    @field_validator("charset")
    @classmethod
    def _dedupe_charset(cls, value: str) -> str:
        return "".join(dict.fromkeys(value))


class ProcessingConfig(BaseModel):
    """Configuration for batch processing."""

    max_workers: int | None = Field(
        default=None,
        description="Max worker processes (None = auto)",
    )


class LoggingConfig(BaseModel):
    """Logging configuration."""

    log_file: Path | None = Field(
        default=None,
        description="Path to log file",
    )
    log_level: str = Field(
        default="WARNING",
        description="Console log level",
    )
    file_log_level: str = Field(
        default="DEBUG",
        description="File log level (more verbose)",
    )


class MsdfAtlasSettings(BaseModel):
    """Main application settings."""

    distance_field: FieldConfig = Field(default_factory=FieldConfig)
    atlas: AtlasConfig = Field(default_factory=AtlasConfig)
    processing: ProcessingConfig = Field(default_factory=ProcessingConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)


def get_default_settings() -> MsdfAtlasSettings:
    """Get default application settings."""
    return MsdfAtlasSettings()
