"""Raw mesh input for the importer.

This module defines the mesh as it arrives from a scanner or segmentation
step, before any validation:
- PointWithNormal: A vertex position with its estimated surface normal
- PatchMesh: Vertex positions, per-vertex normals and polygon index lists
"""

from collections.abc import Sequence
from dataclasses import dataclass, field
from typing import Any

import numpy as np


@dataclass(frozen=True, slots=True)
class PointWithNormal:
    """A 3D point with an associated normal estimate.

    Attributes:
        position: (x, y, z) coordinates
        normal: (nx, ny, nz) estimated unit normal
    """

    position: tuple[float, float, float]
    normal: tuple[float, float, float]

    def to_dict(self) -> dict[str, Any]:
        """Serialize to dictionary."""
        return {"position": list(self.position), "normal": list(self.normal)}

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "PointWithNormal":
        """Deserialize from dictionary."""
        return cls(
            position=tuple(float(v) for v in data["position"]),  # type: ignore[arg-type]
            normal=tuple(float(v) for v in data["normal"]),  # type: ignore[arg-type]
        )


@dataclass
class PatchMesh:
    """A polygon mesh describing one roughly planar surface patch.

    Polygons are kept as given; faces that are not triangles are rejected
    later by the half-edge mesh builder.

    Attributes:
        points: Vertex positions
        polygons: Vertex index lists, one per face
        normals: Per-vertex normal estimates (may be empty)
    """

    points: list[tuple[float, float, float]]
    polygons: list[tuple[int, ...]]
    normals: list[tuple[float, float, float]] = field(default_factory=list)

    @classmethod
    def from_points(
        cls,
        points: Sequence[PointWithNormal],
        polygons: Sequence[Sequence[int]],
    ) -> "PatchMesh":
        """Build a mesh from points that carry their own normals."""
        return cls(
            points=[p.position for p in points],
            polygons=[tuple(poly) for poly in polygons],
            normals=[p.normal for p in points],
        )

    @property
    def point_count(self) -> int:
        """Number of vertex positions."""
        return len(self.points)

    @property
    def face_count(self) -> int:
        """Number of polygons."""
        return len(self.polygons)

    def has_normals(self) -> bool:
        """Check whether every point carries a normal estimate."""
        return len(self.normals) > 0 and len(self.normals) == len(self.points)

    def point_array(self) -> np.ndarray:
        """Vertex positions as an (N, 3) float array."""
        return np.asarray(self.points, dtype=float).reshape(-1, 3)

    def points_with_normals(self) -> list[PointWithNormal]:
        """Pair each point with its normal.

        Raises:
            ValueError: If the mesh does not carry one normal per point
        """
        if not self.has_normals():
            raise ValueError("Mesh does not carry one normal per point")
        return [
            PointWithNormal(position=p, normal=n)
            for p, n in zip(self.points, self.normals, strict=True)
        ]

    def to_dict(self) -> dict[str, Any]:
        """Serialize to dictionary.

        Returns:
            Dictionary with points, normals and polygons lists
        """
        return {
            "points": [list(p) for p in self.points],
            "normals": [list(n) for n in self.normals],
            "polygons": [list(poly) for poly in self.polygons],
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "PatchMesh":
        """Deserialize from dictionary.

        Args:
            data: Dictionary representation of a mesh

        Returns:
            PatchMesh instance
        """
        return cls(
            points=[tuple(float(v) for v in p) for p in data["points"]],  # type: ignore[misc]
            polygons=[tuple(int(i) for i in poly) for poly in data["polygons"]],
            normals=[tuple(float(v) for v in n) for n in data.get("normals", [])],  # type: ignore[misc]
        )
