"""Boundary analysis: outer boundary versus holes.

The boundary with the largest absolute signed area is the outer boundary;
every other non-degenerate boundary is a hole. A hole counts as contained
when its first point lies inside the outer boundary. Winding is left as the
connectivity walk produced it unless :func:`normalize_winding` is applied.
"""

from planarize.core.geometry import point_in_polygon
from planarize.domain import BoundaryHierarchy, PolygonBoundary, WindingDirection


class BoundaryAnalyzer:
    """Classifies projected boundaries into one outer boundary and holes.

    The analyzer is stateless.
    """

    def analyze(self, boundaries: list[PolygonBoundary]) -> BoundaryHierarchy:
        """Determine which boundary is outer and which are holes.

        Args:
            boundaries: Projected boundaries of one mesh

        Returns:
            BoundaryHierarchy indexing into ``boundaries``
        """
        if not boundaries:
            return BoundaryHierarchy(outer=None)

        areas = [b.signed_area() for b in boundaries]
        outer = max(range(len(boundaries)), key=lambda i: abs(areas[i]))

        holes: list[int] = []
        containment: dict[int, int] = {}
        stray: list[int] = []

        outer_points = boundaries[outer].points
        for idx, boundary in enumerate(boundaries):
            if idx == outer:
                continue
            # Degenerate boundaries have no winding
            if boundary.winding is None:
                continue
            holes.append(idx)
            if point_in_polygon(boundary.points[0], outer_points):
                containment[idx] = outer
            else:
                stray.append(idx)

        return BoundaryHierarchy(
            outer=outer,
            holes=holes,
            containment=containment,
            stray=stray,
        )


def normalize_winding(
    boundaries: list[PolygonBoundary],
    hierarchy: BoundaryHierarchy,
) -> list[PolygonBoundary]:
    """Reorder boundaries so the outer one is CCW and holes are CW.

    Boundaries that already have the wanted direction, and degenerate ones,
    are returned unchanged.

    Args:
        boundaries: Projected boundaries
        hierarchy: Classification of ``boundaries``

    Returns:
        New list with the same boundaries in the same order, reversed where
        needed
    """
    normalized: list[PolygonBoundary] = []
    for idx, boundary in enumerate(boundaries):
        if idx == hierarchy.outer:
            wanted = WindingDirection.COUNTER_CLOCKWISE
        elif idx in hierarchy.holes:
            wanted = WindingDirection.CLOCKWISE
        else:
            normalized.append(boundary)
            continue

        if boundary.winding is not None and boundary.winding != wanted:
            normalized.append(boundary.reversed())
        else:
            normalized.append(boundary)
    return normalized
