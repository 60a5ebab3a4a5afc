"""Configuration management for gerberkit.

This module provides configuration management using Pydantic models.
Configuration can be provided via CLI arguments or defaults.

Key classes:
- TessellationConfig: Curve flattening settings
- PolarityConfig: Glyph polarity rasterization settings
- OutputConfig: Design output settings
- LoggingConfig: Logging settings
- GerberSettings: Main application settings
"""

from gerberkit.config.settings import (
    GerberSettings,
    LoggingConfig,
    OutputConfig,
    PolarityConfig,
    TessellationConfig,
    get_default_settings,
)

__all__ = [
    "GerberSettings",
    "LoggingConfig",
    "OutputConfig",
    "PolarityConfig",
    "TessellationConfig",
    "get_default_settings",
]
