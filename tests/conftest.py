"""Shared mesh fixtures.

The annulus is a 4x4 vertex grid on z=0 with the centre cell removed: a
3x3 square outer boundary around a 1x1 square hole. Its triangles wind
counter-clockwise about +z.
"""

import numpy as np
import pytest

from planarize.domain import PatchMesh


def _rotation_about(axis, angle):
    """Rotation matrix about ``axis`` by ``angle`` radians (Rodrigues)."""
    k = np.asarray(axis, dtype=float)
    k = k / np.linalg.norm(k)
    skew = np.array(
        [
            [0.0, -k[2], k[1]],
            [k[2], 0.0, -k[0]],
            [-k[1], k[0], 0.0],
        ]
    )
    return np.eye(3) + np.sin(angle) * skew + (1.0 - np.cos(angle)) * (skew @ skew)


def _annulus_faces(reverse=False):
    faces = []
    for j in range(3):
        for i in range(3):
            if (i, j) == (1, 1):
                continue
            a = i + 4 * j
            b = a + 1
            c = a + 5
            d = a + 4
            if reverse:
                faces.extend([(a, c, b), (a, d, c)])
            else:
                faces.extend([(a, b, c), (a, c, d)])
    return faces


@pytest.fixture
def rotation_about():
    """Factory for rotation matrices."""
    return _rotation_about


@pytest.fixture
def make_annulus():
    """Factory for annulus meshes, optionally reversed, moved and noisy.

    Keyword Args:
        reverse: Wind the triangles clockwise about +z
        rotation: 3x3 rotation applied to points and normals
        translation: Offset applied after rotation
        noise: Standard deviation of noise along the local normal
        seed: Seed for the noise
    """

    def _make(reverse=False, rotation=None, translation=(0.0, 0.0, 0.0), noise=0.0, seed=0):
        rng = np.random.default_rng(seed)
        points = np.array([(float(i), float(j), 0.0) for j in range(4) for i in range(4)])
        if noise:
            points[:, 2] += rng.normal(0.0, noise, size=len(points))
        normals = np.tile([0.0, 0.0, 1.0], (len(points), 1))
        rot = np.eye(3) if rotation is None else np.asarray(rotation, dtype=float)
        points = points @ rot.T + np.asarray(translation, dtype=float)
        normals = normals @ rot.T
        return PatchMesh(
            points=[tuple(p) for p in points.tolist()],
            polygons=_annulus_faces(reverse=reverse),
            normals=[tuple(n) for n in normals.tolist()],
        )

    return _make


@pytest.fixture
def annulus_mesh(make_annulus):
    """Flat annulus on z=0 with counter-clockwise triangles."""
    return make_annulus()


@pytest.fixture
def tetrahedron():
    """Closed, consistently oriented tetrahedron as (vertices, faces)."""
    vertices = np.array(
        [
            [0.0, 0.0, 0.0],
            [1.0, 0.0, 0.0],
            [0.0, 1.0, 0.0],
            [0.0, 0.0, 1.0],
        ]
    )
    faces = [(0, 2, 1), (0, 1, 3), (0, 3, 2), (1, 2, 3)]
    return vertices, faces


@pytest.fixture
def bow_tie():
    """Two triangles touching at vertex 0 as (vertices, faces)."""
    vertices = np.array(
        [
            [0.0, 0.0, 0.0],
            [1.0, 0.0, 0.0],
            [1.0, 1.0, 0.0],
            [-1.0, 0.0, 0.0],
            [-1.0, -1.0, 0.0],
        ]
    )
    faces = [(0, 1, 2), (0, 3, 4)]
    return vertices, faces


@pytest.fixture
def single_triangle():
    """One counter-clockwise triangle on z=0 as (vertices, faces)."""
    vertices = np.array(
        [
            [0.0, 0.0, 0.0],
            [1.0, 0.0, 0.0],
            [0.0, 1.0, 0.0],
        ]
    )
    return vertices, [(0, 1, 2)]


@pytest.fixture
def plane_grid():
    """10x10 grid of points on z=0 as an (100, 3) array."""
    xs, ys = np.meshgrid(np.arange(10.0), np.arange(10.0))
    return np.column_stack([xs.ravel(), ys.ravel(), np.zeros(xs.size)])
