"""Core processing algorithms for planarize.

This module contains the core algorithms for:

- Plane estimation (RANSAC under a normal prior, least-squares refinement)
- Local frame construction (orthonormal frame anchored on the plane)
- Half-edge mesh construction (triangle connectivity, boundary detection)
- Boundary extraction (ordered loops of boundary half-edges)
- Boundary projection (3D loops to 2D polygons in the local frame)
- Boundary analysis (outer boundary versus holes)

All services are designed to be:
- Stateless apart from configuration (safe to share between threads)
- Free of I/O

Key classes:
- PlaneEstimator: Fits a plane to noisy points
- LocalFrameBuilder: Builds the local plane frame
- HalfEdgeMesh: Indexed triangle mesh with half-edge adjacency
- BoundaryExtractor: Walks boundary loops
- BoundaryProjector: Flattens loops into the local frame
- BoundaryAnalyzer: Classifies outer boundary and holes
- MeshImporter: Runs the whole pipeline
"""

from planarize.core.analyzer import BoundaryAnalyzer, normalize_winding
from planarize.core.boundary import BoundaryExtractor, BoundaryLoop
from planarize.core.frame import LocalFrameBuilder, build_local_frame
from planarize.core.geometry import point_in_polygon, signed_area
from planarize.core.halfedge import HalfEdgeMesh, VertexIndexMap
from planarize.core.importer import ImportStage, MeshImporter
from planarize.core.plane import PlaneEstimator, PlaneFit
from planarize.core.projector import BoundaryProjector

__all__ = [
    # Plane
    "PlaneEstimator",
    "PlaneFit",
    # Frame
    "LocalFrameBuilder",
    "build_local_frame",
    # Mesh
    "HalfEdgeMesh",
    "VertexIndexMap",
    # Boundary walk
    "BoundaryExtractor",
    "BoundaryLoop",
    # Projection
    "BoundaryProjector",
    # Analyzer
    "BoundaryAnalyzer",
    "normalize_winding",
    # Orchestration
    "ImportStage",
    "MeshImporter",
    # Geometry functions
    "point_in_polygon",
    "signed_area",
]
