"""Plane and rigid frame value types.

This module defines the 3D geometric values shared by the pipeline:
- Plane: Oriented plane in Hessian normal form
- LocalFrame: Rigid transform from local plane coordinates to world coordinates
"""

from dataclasses import dataclass
from typing import Any

import numpy as np
from numpy.typing import ArrayLike

from planarize.exceptions import DegenerateInput

# Normals shorter than this are treated as zero
_MIN_NORMAL_LENGTH = 1e-12


@dataclass(frozen=True, eq=False)
class Plane:
    """An oriented plane ``normal . x + offset = 0``.

    The normal is normalized on construction; the offset is rescaled with it
    so the plane equation keeps describing the same set of points.

    Attributes:
        normal: Unit normal vector, shape (3,)
        offset: Signed offset of the plane from the origin along ``-normal``
    """

    normal: np.ndarray
    offset: float

    def __post_init__(self) -> None:
        normal = np.asarray(self.normal, dtype=float).reshape(3)
        length = float(np.linalg.norm(normal))
        if length < _MIN_NORMAL_LENGTH:
            raise DegenerateInput("Plane normal must be non-zero")
        object.__setattr__(self, "normal", normal / length)
        object.__setattr__(self, "offset", float(self.offset) / length)

    @classmethod
    def from_point_normal(cls, point: ArrayLike, normal: ArrayLike) -> "Plane":
        """Create the plane through ``point`` perpendicular to ``normal``."""
        n = np.asarray(normal, dtype=float).reshape(3)
        length = float(np.linalg.norm(n))
        if length < _MIN_NORMAL_LENGTH:
            raise DegenerateInput("Plane normal must be non-zero")
        n = n / length
        return cls(normal=n, offset=-float(np.dot(n, np.asarray(point, dtype=float))))

    def coefficients(self) -> np.ndarray:
        """Return ``(a, b, c, d)`` with ``a*x + b*y + c*z + d = 0``."""
        return np.append(self.normal, self.offset)

    def signed_distance(self, points: ArrayLike) -> np.ndarray | float:
        """Signed distance of one point (3,) or many points (N, 3) to the plane.

        Positive on the side the normal points to.
        """
        pts = np.asarray(points, dtype=float)
        distance = pts @ self.normal + self.offset
        if pts.ndim == 1:
            return float(distance)
        return distance

    def project(self, points: ArrayLike) -> np.ndarray:
        """Orthogonally project one point (3,) or many points (N, 3) onto the plane."""
        pts = np.asarray(points, dtype=float)
        distance = pts @ self.normal + self.offset
        return pts - np.multiply.outer(distance, self.normal)

    def flipped(self) -> "Plane":
        """Return the same plane with normal and offset negated together."""
        return Plane(normal=-self.normal, offset=-self.offset)

    def to_dict(self) -> dict[str, Any]:
        """Serialize to dictionary.

        Returns:
            Dictionary with normal and offset fields
        """
        return {"normal": self.normal.tolist(), "offset": self.offset}

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Plane":
        """Deserialize from dictionary."""
        return cls(normal=np.asarray(data["normal"], dtype=float), offset=data["offset"])


@dataclass(frozen=True, eq=False)
class LocalFrame:
    """Rigid transform mapping local plane coordinates to world coordinates.

    ``world = rotation @ local + translation``. The rotation columns are the
    local x, y and z axes expressed in world coordinates; the z axis is the
    plane normal and the translation is the frame origin on the plane.

    Attributes:
        rotation: 3x3 orthonormal rotation matrix
        translation: Frame origin in world coordinates, shape (3,)
    """

    rotation: np.ndarray
    translation: np.ndarray

    def __post_init__(self) -> None:
        object.__setattr__(self, "rotation", np.asarray(self.rotation, dtype=float).reshape(3, 3))
        object.__setattr__(self, "translation", np.asarray(self.translation, dtype=float).reshape(3))

    @classmethod
    def identity(cls) -> "LocalFrame":
        """Frame coinciding with the world frame."""
        return cls(rotation=np.eye(3), translation=np.zeros(3))

    @property
    def x_axis(self) -> np.ndarray:
        """Local x axis in world coordinates."""
        return self.rotation[:, 0]

    @property
    def y_axis(self) -> np.ndarray:
        """Local y axis in world coordinates."""
        return self.rotation[:, 1]

    @property
    def z_axis(self) -> np.ndarray:
        """Local z axis (plane normal) in world coordinates."""
        return self.rotation[:, 2]

    @property
    def origin(self) -> np.ndarray:
        """Frame origin in world coordinates."""
        return self.translation

    def to_world(self, points: ArrayLike) -> np.ndarray:
        """Map local points (3,) or (N, 3) to world coordinates."""
        pts = np.asarray(points, dtype=float)
        return pts @ self.rotation.T + self.translation

    def to_local(self, points: ArrayLike) -> np.ndarray:
        """Map world points (3,) or (N, 3) to local coordinates (inverse transform)."""
        pts = np.asarray(points, dtype=float)
        return (pts - self.translation) @ self.rotation

    def lift(self, points_2d: ArrayLike) -> np.ndarray:
        """Map local plane points (2,) or (N, 2) back to world coordinates.

        Used to reproject 2D path points planned on the polygon boundaries.
        """
        pts = np.asarray(points_2d, dtype=float)
        padded = np.concatenate([pts, np.zeros(pts.shape[:-1] + (1,))], axis=-1)
        return self.to_world(padded)

    def matrix(self) -> np.ndarray:
        """Return the 4x4 homogeneous transform."""
        mat = np.eye(4)
        mat[:3, :3] = self.rotation
        mat[:3, 3] = self.translation
        return mat

    def to_dict(self) -> dict[str, Any]:
        """Serialize to dictionary.

        Returns:
            Dictionary with row-major rotation and translation
        """
        return {
            "rotation": self.rotation.tolist(),
            "translation": self.translation.tolist(),
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "LocalFrame":
        """Deserialize from dictionary."""
        return cls(
            rotation=np.asarray(data["rotation"], dtype=float),
            translation=np.asarray(data["translation"], dtype=float),
        )
