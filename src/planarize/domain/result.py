"""Import results.

This module defines what one mesh import hands back to the caller:
- BoundaryHierarchy: Which boundary is the outer one and which are holes
- ImportResult: Plane, local frame and the projected boundaries
"""

from dataclasses import dataclass, field
from typing import Any

from planarize.domain.geometry import LocalFrame, Plane
from planarize.domain.polygon import PolygonBoundary
from planarize.utils.logging import ImportStats


@dataclass
class BoundaryHierarchy:
    """Classification of projected boundaries into outer and holes.

    Attributes:
        outer: Index of the outer boundary (None when there are no boundaries)
        holes: Indices of hole boundaries
        containment: Maps hole index to the index of the outer boundary
            containing it
        stray: Hole indices whose boundary is not inside the outer boundary
    """

    outer: int | None
    holes: list[int] = field(default_factory=list)
    containment: dict[int, int] = field(default_factory=dict)
    stray: list[int] = field(default_factory=list)

    def has_holes(self) -> bool:
        """Check if this hierarchy contains any holes."""
        return len(self.holes) > 0

    def to_dict(self) -> dict[str, Any]:
        """Serialize to dictionary."""
        return {
            "outer": self.outer,
            "holes": list(self.holes),
            "containment": {str(k): v for k, v in self.containment.items()},
            "stray": list(self.stray),
        }


@dataclass
class ImportResult:
    """Result of importing one planar mesh patch.

    Callers need both the boundaries and the frame: paths planned on the
    boundaries are reprojected to world coordinates with ``frame.lift``.

    Attributes:
        plane: Fitted, oriented plane
        frame: Local plane frame (local -> world)
        boundaries: Projected boundaries in extraction order
        hierarchy: Outer/hole classification of ``boundaries``
        inlier_fraction: Fraction of points supporting the plane fit
        stats: Progress and timing recorded during the import
    """

    plane: Plane
    frame: LocalFrame
    boundaries: list[PolygonBoundary]
    hierarchy: BoundaryHierarchy
    inlier_fraction: float = 1.0
    stats: ImportStats | None = None

    @property
    def outer(self) -> PolygonBoundary | None:
        """The outer boundary, if any."""
        if self.hierarchy.outer is None:
            return None
        return self.boundaries[self.hierarchy.outer]

    @property
    def holes(self) -> list[PolygonBoundary]:
        """Hole boundaries in extraction order."""
        return [self.boundaries[i] for i in self.hierarchy.holes]

    def to_dict(self) -> dict[str, Any]:
        """Serialize to dictionary.

        Returns:
            Dictionary representation of the result
        """
        return {
            "plane": self.plane.to_dict(),
            "frame": self.frame.to_dict(),
            "inlier_fraction": self.inlier_fraction,
            "boundaries": [b.to_dict() for b in self.boundaries],
            "hierarchy": self.hierarchy.to_dict(),
        }
