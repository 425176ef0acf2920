"""Configuration management for msdfatlas.

This module provides configuration management using Pydantic models.
Configuration can be provided via CLI arguments or defaults.

Key classes:
- FieldConfig: Distance field generation settings
- AtlasConfig: Atlas assembly settings
- ProcessingConfig: Batch processing settings
- LoggingConfig: Logging settings
- MsdfAtlasSettings: Main application settings
"""

from msdfatlas.config.settings import (
    DEFAULT_CHARSET,
    AtlasConfig,
    ChannelMode,
    FieldConfig,
    LoggingConfig,
    MsdfAtlasSettings,
    ProcessingConfig,
    get_default_settings,
)

__all__ = [
    "DEFAULT_CHARSET",
    "AtlasConfig",
    "ChannelMode",
    "FieldConfig",
    "LoggingConfig",
    "MsdfAtlasSettings",
    "ProcessingConfig",
    "get_default_settings",
]
