"""Configuration management for planarize.

This module provides configuration management using Pydantic models.
Configuration can be provided via CLI arguments or defaults.

Key classes:
- PlaneFitConfig: Plane estimation thresholds and sampling settings
- FrameConfig: Local frame axis selection
- BoundaryConfig: Projection tolerance and winding normalization
- LoggingConfig: Logging settings
- PlanarizeSettings: Main application settings
"""

from planarize.config.settings import (
    BoundaryConfig,
    FrameConfig,
    LoggingConfig,
    PlanarizeSettings,
    PlaneFitConfig,
    get_default_settings,
)

__all__ = [
    "BoundaryConfig",
    "FrameConfig",
    "LoggingConfig",
    "PlanarizeSettings",
    "PlaneFitConfig",
    "get_default_settings",
]
