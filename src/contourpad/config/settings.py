"""Configuration settings for ContourPad."""

from enum import Enum
from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


class MeshMode(str, Enum):
    """Kind of mesh produced by extrusion."""

    STRIP = "strip"
    SOLID = "solid"


class ScanConfig(BaseModel):
    """Configuration for the radial silhouette scan.

    Scan time grows roughly with (180 / grid_step) * (diagonal / grid_step) *
    diagonal, so very small steps on large canvases get slow quickly.
    """

    model_config = ConfigDict(frozen=True)

    grid_step: int = Field(
        default=5,
        ge=1,
        le=45,
        description="Angular step in degrees, also the spacing between scan lines in pixels",
    )
    probe_radius: int = Field(
        default=2,
        ge=0,
        le=10,
        description="Manhattan radius of the disk probed at each sample",
    )
    white_threshold: int = Field(
        default=250,
        ge=0,
        le=255,
        description="Channel value above which R, G and B count as background white",
    )


class SimplifyConfig(BaseModel):
    """Configuration for outline simplification."""

    model_config = ConfigDict(frozen=True)

    tolerance: float = Field(
        default=2.0,
        gt=0.0,
        le=100.0,
        description="Maximum perpendicular deviation in pixels when dropping points",
    )


class CrossSectionConfig(BaseModel):
    """Configuration for cross-section resampling."""

    model_config = ConfigDict(frozen=True)

    tolerance: float = Field(
        default=10.0,
        gt=0.0,
        le=200.0,
        description="Largest x difference at which two curve samples are paired directly",
    )


class ThicknessConfig(BaseModel):
    """Configuration for the thickness profile."""

    model_config = ConfigDict(frozen=True)

    function: str = Field(
        default="fish",
        description="Thickness profile name (fish|ellipse|spindle|leaf)",
    )
    max_thickness: float = Field(
        default=20.0,
        gt=0.0,
        le=500.0,
        description="Peak extrusion depth in pixels",
    )
    min_thickness: float = Field(
        default=2.0,
        ge=0.0,
        le=500.0,
        description="Smallest extrusion depth in pixels",
    )
    close_distance: float = Field(
        default=5.0,
        ge=0.0,
        le=100.0,
        description="Center curve endpoints closer than this are joined",
    )

    @model_validator(mode="after")
    def _check_range(self) -> "ThicknessConfig":
        if self.min_thickness > self.max_thickness:
            raise ValueError(
                f"min_thickness ({self.min_thickness}) exceeds max_thickness ({self.max_thickness})"
            )
        return self


class CanvasConfig(BaseModel):
    """Configuration for importing images onto the canvas."""

    model_config = ConfigDict(frozen=True)

    width: int = Field(default=800, ge=16, le=8192, description="Canvas width in pixels")
    height: int = Field(default=600, ge=16, le=8192, description="Canvas height in pixels")
    max_file_bytes: int = Field(
        default=10 * 1024 * 1024,
        ge=1,
        description="Largest image file accepted for import",
    )


class MeshConfig(BaseModel):
    """Configuration for mesh generation."""

    model_config = ConfigDict(frozen=True)

    mode: MeshMode = Field(
        default=MeshMode.STRIP,
        description="Build the thickness strip or a closed solid slab",
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
    quiet: bool = Field(
        default=False,
        description="Suppress console log output except errors",
    )

    @field_validator("log_level", "file_log_level")
    @classmethod
    def _check_level(cls, value: str) -> str:
        level = value.upper()
        if level not in LOG_LEVELS:
            raise ValueError(f"Unknown log level {value!r} (use one of {', '.join(LOG_LEVELS)})")
        return level


class ContourPadSettings(BaseModel):
    """Main application settings."""

    scan: ScanConfig = Field(default_factory=ScanConfig)
    simplify: SimplifyConfig = Field(default_factory=SimplifyConfig)
    cross_section: CrossSectionConfig = Field(default_factory=CrossSectionConfig)
    thickness: ThicknessConfig = Field(default_factory=ThicknessConfig)
    canvas: CanvasConfig = Field(default_factory=CanvasConfig)
    mesh: MeshConfig = Field(default_factory=MeshConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)


def get_default_settings() -> ContourPadSettings:
    """Get default application settings."""
    return ContourPadSettings()
