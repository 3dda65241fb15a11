"""Geometric helpers shared by the pipeline stages.

This module provides small, pure utilities for:
- Vector normalization and in-plane direction projection (3D)
- Signed area calculation (shoelace formula, 2D)
- Point-in-polygon testing (ray casting algorithm, 2D)
- Centroid computation

All functions are pure and stateless.
"""

import numpy as np
from numpy.typing import ArrayLike

from planarize.domain import PolygonPoint

UNIT_X = np.array([1.0, 0.0, 0.0])
UNIT_Y = np.array([0.0, 1.0, 0.0])

# Vectors shorter than this cannot be normalized
EPSILON = 1e-12


def normalize(vector: ArrayLike) -> np.ndarray:
    """Return ``vector`` scaled to unit length.

    Args:
        vector: Any non-zero 3D vector

    Returns:
        Unit vector with the same direction

    Raises:
        ValueError: If the vector has (near) zero length
    """
    v = np.asarray(vector, dtype=float)
    length = float(np.linalg.norm(v))
    if length < EPSILON:
        raise ValueError("Cannot normalize a zero-length vector")
    return v / length


def project_direction(direction: ArrayLike, normal: ArrayLike) -> np.ndarray:
    """Remove the component of ``direction`` along the unit ``normal``.

    The result lies in the plane perpendicular to ``normal`` and is not
    normalized.
    """
    d = np.asarray(direction, dtype=float)
    n = np.asarray(normal, dtype=float)
    return d - np.dot(n, d) * n


def centroid(points: ArrayLike) -> np.ndarray:
    """Arithmetic mean of an (N, 3) point array.

    Raises:
        ValueError: If ``points`` is empty
    """
    pts = np.asarray(points, dtype=float).reshape(-1, 3)
    if len(pts) == 0:
        raise ValueError("Cannot compute the centroid of an empty point set")
    return pts.mean(axis=0)


def signed_area(points: list[PolygonPoint]) -> float:
    """Calculate signed area of a polygon using the shoelace formula.

    The sign of the area indicates winding direction:
    - Positive area: counter-clockwise winding
    - Negative area: clockwise winding

    Args:
        points: List of points forming the polygon boundary

    Returns:
        Signed area in square units. Returns 0.0 for degenerate polygons.

    Examples:
        >>> p1 = PolygonPoint(0.0, 0.0)
        >>> p2 = PolygonPoint(1.0, 0.0)
        >>> p3 = PolygonPoint(1.0, 1.0)
        >>> p4 = PolygonPoint(0.0, 1.0)
        >>> signed_area([p1, p2, p3, p4])  # CCW square
        1.0
        >>> signed_area([p1, p4, p3, p2])  # CW square
        -1.0
    """
    n = len(points)
    if n < 3:
        return 0.0

    area = 0.0
    for i in range(n):
        j = (i + 1) % n
        area += points[i].x * points[j].y
        area -= points[j].x * points[i].y

    return area / 2.0


def point_in_polygon(point: PolygonPoint, polygon: list[PolygonPoint]) -> bool:
    """Determine if a point is inside a polygon using ray casting algorithm.

    Casts a horizontal ray from the point to the right and counts intersections
    with polygon edges. Odd number of intersections = inside, even = outside.

    Args:
        point: The point to test
        polygon: List of points forming the polygon boundary

    Returns:
        True if point is inside polygon, False otherwise
    """
    n = len(polygon)
    if n < 3:
        return False

    inside = False
    x, y = point.x, point.y
    j = n - 1

    for i in range(n):
        xi, yi = polygon[i].x, polygon[i].y
        xj, yj = polygon[j].x, polygon[j].y

        # Check if ray from point intersects edge (j, i)
        if ((yi > y) != (yj > y)) and (x < (xj - xi) * (y - yi) / (yj - yi) + xi):
            inside = not inside

        j = i

    return inside
