"""Mesh import orchestration.

This module turns one roughly planar triangle mesh into 2D polygon boundaries
expressed in a local frame of its fitted plane. The pipeline is linear:

    START -> PLANE_FIT -> FRAME_BUILD -> MESH_BUILD -> BOUNDARY_WALK -> PROJECT -> DONE

Any stage may end the import in FAILED, in which case the original exception
propagates and no partial result is returned.

Key components:
- ImportStage: Pipeline stage names
- MeshImporter: Composes plane fitting, frame construction, boundary
  extraction, projection and classification
"""

import time
from collections.abc import Sequence
from enum import Enum

import numpy as np
import structlog
from numpy.typing import ArrayLike

from planarize.config import PlanarizeSettings, get_default_settings
from planarize.core.analyzer import BoundaryAnalyzer, normalize_winding
from planarize.core.boundary import BoundaryExtractor
from planarize.core.frame import LocalFrameBuilder
from planarize.core.geometry import centroid
from planarize.core.halfedge import HalfEdgeMesh
from planarize.core.plane import PlaneEstimator
from planarize.core.projector import BoundaryProjector
from planarize.domain import ImportResult, PatchMesh
from planarize.exceptions import DegenerateInput
from planarize.utils import ImportLogger

logger = structlog.get_logger(__name__)


class ImportStage(str, Enum):
    """Stages of a mesh import, in execution order."""

    START = "start"
    PLANE_FIT = "plane_fit"
    FRAME_BUILD = "frame_build"
    MESH_BUILD = "mesh_build"
    BOUNDARY_WALK = "boundary_walk"
    PROJECT = "project"
    DONE = "done"
    FAILED = "failed"


class MeshImporter:
    """Extracts planar boundary polygons from a triangle mesh patch.

    The importer holds only configuration and stateless components; each
    call builds its own plane, frame, half-edge mesh and boundaries, so a
    single instance can be shared between threads.

    Example:
        importer = MeshImporter(PlanarizeSettings())
        result = importer.import_mesh(mesh)
        outer = result.outer
        world = result.frame.lift(outer.to_list())
    """

    def __init__(self, settings: PlanarizeSettings | None = None) -> None:
        """Initialize the importer.

        Args:
            settings: Planarize settings (defaults if None)
        """
        self.settings = settings or get_default_settings()
        self.estimator = PlaneEstimator(self.settings.plane)
        self.frame_builder = LocalFrameBuilder(self.settings.frame)
        self.extractor = BoundaryExtractor()
        self.projector = BoundaryProjector(self.settings.boundary.projection_tolerance)
        self.analyzer = BoundaryAnalyzer()

    def import_mesh(
        self,
        mesh: PatchMesh,
        expected_normal: ArrayLike | None = None,
        source: str = "<memory>",
    ) -> ImportResult:
        """Fit the patch plane and return its boundaries in the local frame.

        Args:
            mesh: Vertex positions, polygons and per-point normals
            expected_normal: Prior for the plane normal. Defaults to the
                normal of the first point.
            source: Label used in log records (e.g. the input file name)

        Returns:
            ImportResult with plane, frame and classified boundaries

        Raises:
            FitRejected: If the points do not support a plane close to the
                expected normal
            NonTriangularFace: If a polygon is not a triangle
            DegenerateInput: If the mesh has too few points or faces, or no
                normal prior is available
            MeshError: For other connectivity problems
        """
        tracker = ImportLogger(logger, source=source)
        tracker.log_start(mesh.point_count, mesh.face_count, time.time())
        stage = ImportStage.START

        try:
            stage = ImportStage.PLANE_FIT
            tracker.log_stage(stage.value)
            points = mesh.point_array()
            prior = self._expected_normal(mesh, expected_normal)
            fit = self.estimator.estimate(points, prior)
            plane = fit.plane
            tracker.log_plane_fit(
                normal=plane.normal.tolist(),
                offset=plane.offset,
                inlier_fraction=fit.inlier_fraction,
                flipped=fit.flipped,
            )

            stage = ImportStage.FRAME_BUILD
            tracker.log_stage(stage.value)
            frame = self.frame_builder.build(plane, centroid(points))

            stage = ImportStage.MESH_BUILD
            tracker.log_stage(stage.value)
            half_edge_mesh = HalfEdgeMesh.build(points, mesh.polygons)

            stage = ImportStage.BOUNDARY_WALK
            tracker.log_stage(stage.value)
            loops = self.extractor.extract(half_edge_mesh)

            stage = ImportStage.PROJECT
            tracker.log_stage(stage.value)
            boundaries = self.projector.project_all(loops, half_edge_mesh, plane, frame)
            hierarchy = self.analyzer.analyze(boundaries)
            if self.settings.boundary.enforce_winding:
                boundaries = normalize_winding(boundaries, hierarchy)
            tracker.log_boundaries(
                loop_count=len(boundaries),
                hole_count=len(hierarchy.holes),
                stray_count=len(hierarchy.stray),
            )
        except Exception as e:
            tracker.log_failure(stage.value, e, time.time())
            raise

        tracker.log_complete(time.time())
        return ImportResult(
            plane=plane,
            frame=frame,
            boundaries=boundaries,
            hierarchy=hierarchy,
            inlier_fraction=fit.inlier_fraction,
            stats=tracker.stats,
        )

    def import_arrays(
        self,
        vertices: ArrayLike,
        faces: Sequence[Sequence[int]],
        normals: ArrayLike | None = None,
        expected_normal: ArrayLike | None = None,
    ) -> ImportResult:
        """Convenience wrapper taking plain vertex, face and normal arrays."""
        verts = np.asarray(vertices, dtype=float).reshape(-1, 3)
        mesh = PatchMesh(
            points=[tuple(v) for v in verts.tolist()],
            polygons=[tuple(int(i) for i in face) for face in faces],
            normals=(
                [tuple(n) for n in np.asarray(normals, dtype=float).reshape(-1, 3).tolist()]
                if normals is not None
                else []
            ),
        )
        return self.import_mesh(mesh, expected_normal=expected_normal)

    @staticmethod
    def _expected_normal(mesh: PatchMesh, expected_normal: ArrayLike | None) -> np.ndarray:
        """Pick the plane normal prior: explicit argument, else first point normal."""
        if expected_normal is not None:
            return np.asarray(expected_normal, dtype=float).reshape(3)
        if not mesh.normals:
            raise DegenerateInput("Mesh has no point normals and no expected normal was given")
        return np.asarray(mesh.normals[0], dtype=float).reshape(3)
