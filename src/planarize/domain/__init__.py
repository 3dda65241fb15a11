"""Domain models for planarize.

This module contains the value types exchanged between the pipeline stages:
raw mesh input, fitted planes and frames, projected polygon boundaries and
the final import result. All models are:

- Immutable where possible (using frozen dataclasses)
- Serializable to plain dictionaries (for JSON output)
- Independent of the half-edge connectivity used internally

Key classes:
- PatchMesh: Raw polygon mesh with per-point normals
- Plane: Oriented plane in Hessian normal form
- LocalFrame: Rigid local-plane-to-world transform
- PolygonBoundary: A boundary loop in local plane coordinates
- ImportResult: Plane, frame and classified boundaries of one import
"""

from planarize.domain.geometry import LocalFrame, Plane
from planarize.domain.mesh import PatchMesh, PointWithNormal
from planarize.domain.polygon import PolygonBoundary, PolygonPoint, WindingDirection
from planarize.domain.result import BoundaryHierarchy, ImportResult

__all__: list[str] = [
    # Enums
    "WindingDirection",
    # Core types
    "PointWithNormal",
    "PatchMesh",
    "Plane",
    "LocalFrame",
    "PolygonPoint",
    "PolygonBoundary",
    "BoundaryHierarchy",
    "ImportResult",
]
