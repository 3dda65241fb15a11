"""Configuration settings for planarize."""

import math
from pathlib import Path

from pydantic import BaseModel, Field


class PlaneFitConfig(BaseModel):
    """Configuration for robust plane estimation.

    Distances are in the mesh's length units, angles in radians.
    """

    distance_threshold: float = Field(
        default=0.01,
        gt=0.0,
        description="Maximum point-to-plane distance for a point to count as an inlier",
    )
    angle_tolerance: float = Field(
        default=0.5,
        gt=0.0,
        le=math.pi / 2,
        description="Maximum angle between fitted and expected normal (radians)",
    )
    min_inlier_fraction: float = Field(
        default=0.90,
        ge=0.0,
        le=1.0,
        description="Minimum fraction of points that must be inliers of the fitted plane",
    )
    max_iterations: int = Field(
        default=1000,
        ge=1,
        le=100_000,
        description="Maximum number of RANSAC samples",
    )
    confidence: float = Field(
        default=0.99,
        gt=0.0,
        lt=1.0,
        description="Target probability of drawing an all-inlier sample (adaptive stop)",
    )
    refine: bool = Field(
        default=True,
        description="Refine the best candidate with a least-squares fit over its inliers",
    )
    random_seed: int | None = Field(
        default=None,
        description="Seed for candidate sampling (None = nondeterministic)",
    )

    @property
    def cos_angle_tolerance(self) -> float:
        """Cosine of the angle tolerance, used for normal alignment checks."""
        return math.cos(self.angle_tolerance)


class FrameConfig(BaseModel):
    """Configuration for local plane frame construction."""

    axis_threshold: float = Field(
        default=0.8,
        gt=0.0,
        lt=1.0,
        description="Use world X for the in-plane axis while |normal . X| is below this",
    )


class BoundaryConfig(BaseModel):
    """Configuration for boundary projection and classification."""

    projection_tolerance: float = Field(
        default=1e-3,
        gt=0.0,
        description="Maximum local z of a projected boundary point",
    )
    enforce_winding: bool = Field(
        default=False,
        description="Reverse boundaries so the outer one is CCW and holes are CW",
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


class PlanarizeSettings(BaseModel):
    """Main application settings."""

    plane: PlaneFitConfig = Field(default_factory=PlaneFitConfig)
    frame: FrameConfig = Field(default_factory=FrameConfig)
    boundary: BoundaryConfig = Field(default_factory=BoundaryConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)


def get_default_settings() -> PlanarizeSettings:
    """Get default application settings."""
    return PlanarizeSettings()
