"""Projection of boundary loops into local plane coordinates."""

import numpy as np
import structlog

from planarize.core.boundary import BoundaryLoop
from planarize.core.halfedge import HalfEdgeMesh
from planarize.domain import LocalFrame, Plane, PolygonBoundary, PolygonPoint
from planarize.exceptions import FrameMismatchError

logger = structlog.get_logger(__name__)

DEFAULT_PROJECTION_TOLERANCE = 1e-3


class BoundaryProjector:
    """Flattens boundary loops into 2D polygons in a plane's local frame.

    Each loop vertex is projected orthogonally onto the plane and then mapped
    through the inverse frame transform. The local z of every result must be
    negligible; anything else means the frame was not built from this plane.
    """

    def __init__(self, tolerance: float = DEFAULT_PROJECTION_TOLERANCE) -> None:
        self.tolerance = tolerance

    def project(
        self,
        loop: BoundaryLoop,
        mesh: HalfEdgeMesh,
        plane: Plane,
        frame: LocalFrame,
    ) -> PolygonBoundary:
        """Project one boundary loop.

        Args:
            loop: Boundary loop of ``mesh``
            mesh: Mesh providing vertex positions
            plane: Plane to project onto
            frame: Local frame of ``plane``

        Returns:
            Boundary points in loop order

        Raises:
            FrameMismatchError: If a projected point is off the frame's XY plane
        """
        if len(loop) == 0:
            return PolygonBoundary(points=[])

        on_plane = plane.project(mesh.origin_positions(loop))
        local = frame.to_local(on_plane)

        max_offset = float(np.max(np.abs(local[:, 2])))
        if max_offset > self.tolerance:
            logger.error(
                "Projected boundary left the frame plane",
                max_offset=max_offset,
                tolerance=self.tolerance,
            )
            raise FrameMismatchError(max_offset, self.tolerance)

        return PolygonBoundary(
            points=[PolygonPoint(float(x), float(y)) for x, y in local[:, :2]]
        )

    def project_all(
        self,
        loops: list[BoundaryLoop],
        mesh: HalfEdgeMesh,
        plane: Plane,
        frame: LocalFrame,
    ) -> list[PolygonBoundary]:
        """Project several loops, preserving their order."""
        return [self.project(loop, mesh, plane, frame) for loop in loops]
