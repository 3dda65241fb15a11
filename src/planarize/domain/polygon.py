"""2D polygon types for boundaries expressed in the local plane frame.

This module defines:
- PolygonPoint: A 2D point in local plane coordinates
- PolygonBoundary: A closed boundary loop projected into the plane
- WindingDirection: Enum for boundary winding direction
"""

from dataclasses import dataclass, field
from enum import Enum, auto
from typing import Any


class WindingDirection(Enum):
    """Boundary winding direction, viewed from the plane normal.

    With faces wound counter-clockwise about the normal:
    - The outer boundary winds counter-clockwise
    - Hole boundaries wind clockwise
    """

    CLOCKWISE = auto()
    COUNTER_CLOCKWISE = auto()


@dataclass(frozen=True, slots=True)
class PolygonPoint:
    """A point in local plane coordinates.

    Immutable and hashable for use in sets/dicts.

    Attributes:
        x: Coordinate along the frame's x axis
        y: Coordinate along the frame's y axis
    """

    x: float
    y: float

    def to_tuple(self) -> tuple[float, float]:
        """Convert to simple (x, y) tuple."""
        return (self.x, self.y)


@dataclass
class PolygonBoundary:
    """One mesh boundary loop flattened into the local plane.

    The point order is the order of the boundary walk; the closing edge from
    the last point back to the first is implicit.

    Attributes:
        points: Ordered boundary points
    """

    points: list[PolygonPoint]
    _cached_area: float | None = field(default=None, repr=False, init=False, compare=False)
    _cached_bbox: tuple[float, float, float, float] | None = field(
        default=None, repr=False, init=False, compare=False
    )

    def __len__(self) -> int:
        return len(self.points)

    def signed_area(self) -> float:
        """Calculate signed area using shoelace formula.

        The sign of the area indicates winding direction:
        - Positive area: counter-clockwise winding
        - Negative area: clockwise winding

        Result is cached for efficiency.

        Returns:
            Signed area of the boundary
        """
        if self._cached_area is not None:
            return self._cached_area

        n = len(self.points)
        if n < 3:
            self._cached_area = 0.0
            return 0.0

        area = 0.0
        for i in range(n):
            j = (i + 1) % n
            area += self.points[i].x * self.points[j].y
            area -= self.points[j].x * self.points[i].y

        self._cached_area = area / 2.0
        return self._cached_area

    @property
    def winding(self) -> WindingDirection | None:
        """Winding direction, or None for a degenerate (zero-area) boundary."""
        area = self.signed_area()
        if area > 0:
            return WindingDirection.COUNTER_CLOCKWISE
        if area < 0:
            return WindingDirection.CLOCKWISE
        return None

    def bounding_box(self) -> tuple[float, float, float, float]:
        """Calculate bounding box of the boundary.

        Returns:
            Tuple of (min_x, min_y, max_x, max_y)
        """
        if self._cached_bbox is not None:
            return self._cached_bbox

        if not self.points:
            self._cached_bbox = (0.0, 0.0, 0.0, 0.0)
            return self._cached_bbox

        xs = [p.x for p in self.points]
        ys = [p.y for p in self.points]

        self._cached_bbox = (min(xs), min(ys), max(xs), max(ys))
        return self._cached_bbox

    def contains_point(self, x: float, y: float) -> bool:
        """Check if point is inside the boundary using ray casting.

        Args:
            x: X coordinate of point to test
            y: Y coordinate of point to test

        Returns:
            True if point is inside, False otherwise
        """
        n = len(self.points)
        if n < 3:
            return False

        inside = False
        j = n - 1

        for i in range(n):
            xi, yi = self.points[i].x, self.points[i].y
            xj, yj = self.points[j].x, self.points[j].y

            if ((yi > y) != (yj > y)) and (x < (xj - xi) * (y - yi) / (yj - yi) + xi):
                inside = not inside

            j = i

        return inside

    def reversed(self) -> "PolygonBoundary":
        """Return a copy with opposite winding, starting at the same point."""
        if not self.points:
            return PolygonBoundary(points=[])
        return PolygonBoundary(points=[self.points[0], *reversed(self.points[1:])])

    def to_list(self) -> list[tuple[float, float]]:
        """Points as a list of (x, y) tuples."""
        return [p.to_tuple() for p in self.points]

    def to_dict(self) -> dict[str, Any]:
        """Serialize to dictionary.

        Returns:
            Dictionary with points, signed area and winding
        """
        winding = self.winding
        return {
            "points": [list(p.to_tuple()) for p in self.points],
            "signed_area": self.signed_area(),
            "winding": winding.name.lower() if winding else None,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "PolygonBoundary":
        """Deserialize from dictionary.

        Derived fields (area, winding) are recomputed from the points.
        """
        return cls(points=[PolygonPoint(float(x), float(y)) for x, y in data["points"]])
