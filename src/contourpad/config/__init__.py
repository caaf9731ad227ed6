"""Configuration management for contourpad.

This module provides configuration management using Pydantic models.
Configuration can be provided via CLI arguments or defaults.

Key classes:
- ScanConfig: Radial silhouette scan settings
- SimplifyConfig: Outline simplification settings
- CrossSectionConfig: Cross-section resampling settings
- ThicknessConfig: Thickness profile settings
- CanvasConfig: Image import settings
- MeshConfig: Mesh generation settings
- LoggingConfig: Logging settings
- ContourPadSettings: Main application settings
"""

from contourpad.config.settings import (
    CanvasConfig,
    ContourPadSettings,
    CrossSectionConfig,
    LoggingConfig,
    MeshConfig,
    MeshMode,
    ScanConfig,
    SimplifyConfig,
    ThicknessConfig,
    get_default_settings,
)

__all__ = [
    "CanvasConfig",
    "ContourPadSettings",
    "CrossSectionConfig",
    "LoggingConfig",
    "MeshConfig",
    "MeshMode",
    "ScanConfig",
    "SimplifyConfig",
    "ThicknessConfig",
    "get_default_settings",
]
