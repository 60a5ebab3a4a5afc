"""Configuration settings for gerberkit."""

from pathlib import Path

from pydantic import BaseModel, Field


class TessellationConfig(BaseModel):
    """Configuration for flattening glyph curves into line segments.

    The resolution is given in millimeters of rendered output and converted
    to font units for each text primitive.
    """

    resolution_mm: float = Field(
        default=0.1,
        gt=0.0,
        le=10.0,
        description="Target chord length for curve flattening (mm)",
    )
    min_steps: int = Field(
        default=4,
        ge=1,
        le=100,
        description="Minimum number of segments per curve",
    )
    max_steps: int = Field(
        default=100,
        ge=1,
        le=10000,
        description="Maximum number of segments per curve",
    )


class PolarityConfig(BaseModel):
    """Configuration for the raster-based polarity precomputation."""

    canvas_size: int = Field(
        default=2048,
        ge=64,
        le=16384,
        description="Longest canvas side in pixels",
    )
    margin: int = Field(
        default=4,
        ge=0,
        le=256,
        description="Blank border around the glyph in pixels",
    )
    cross_check: bool = Field(
        default=True,
        description="Compare raster result against point-in-polygon nesting",
    )


class OutputConfig(BaseModel):
    """Configuration for design output."""

    output_dir: Path | None = Field(
        default=None,
        description="Directory for Gerber files (None = current directory)",
    )
    max_workers: int | None = Field(
        default=None,
        description="Max worker threads for bounding-box computation (None = auto)",
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


class GerberSettings(BaseModel):
    """Main application settings."""

    tessellation: TessellationConfig = Field(default_factory=TessellationConfig)
    polarity: PolarityConfig = Field(default_factory=PolarityConfig)
    output: OutputConfig = Field(default_factory=OutputConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)


def get_default_settings() -> GerberSettings:
    """Get default application settings."""
    return GerberSettings()
