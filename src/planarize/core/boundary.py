"""Boundary loop extraction from a half-edge mesh.

Each boundary loop is found by starting at an unvisited boundary half-edge
and repeatedly stepping to the boundary half-edge that leaves the current
half-edge's destination vertex, until the walk returns to its start.

The outgoing boundary half-edge is located by rotating around the
destination vertex through the faces: begin with the next half-edge of the
current face and, while it has a twin, continue with the next half-edge of
the twin's face. At a vertex where two boundary loops touch, this stays in
the fan of faces of the current loop.

A loop keeps the direction of the faces it borders. For faces wound
counter-clockwise about the plane normal, the outer boundary comes out
counter-clockwise and holes clockwise.
"""

from collections.abc import Iterator
from dataclasses import dataclass

import structlog

from planarize.core.halfedge import HalfEdgeMesh
from planarize.exceptions import BoundaryWalkError

logger = structlog.get_logger(__name__)


@dataclass(frozen=True)
class BoundaryLoop:
    """An ordered cycle of boundary half-edges.

    Attributes:
        half_edges: Half-edge indices in walk order; the last one ends where
            the first one starts
    """

    half_edges: tuple[int, ...]

    def __len__(self) -> int:
        return len(self.half_edges)

    def __iter__(self) -> Iterator[int]:
        return iter(self.half_edges)

    def vertices(self, mesh: HalfEdgeMesh) -> list[int]:
        """Internal indices of the loop's vertices, in walk order."""
        return [mesh.origin(he) for he in self.half_edges]

    def raw_vertices(self, mesh: HalfEdgeMesh) -> list[int]:
        """Raw input vertex indices of the loop's vertices, in walk order."""
        return [mesh.index_map.to_raw(v) for v in self.vertices(mesh)]


class BoundaryExtractor:
    """Extracts every boundary loop (outer silhouette and holes) of a mesh.

    The extractor is stateless. A closed mesh has no boundary and yields an
    empty list.
    """

    def extract(self, mesh: HalfEdgeMesh) -> list[BoundaryLoop]:
        """Extract all boundary loops.

        Args:
            mesh: The half-edge mesh to walk

        Returns:
            Loops in order of their lowest-numbered half-edge

        Raises:
            BoundaryWalkError: If a walk cannot be closed
        """
        loops: list[BoundaryLoop] = []
        visited: set[int] = set()

        for start in mesh.boundary_half_edges():
            if start in visited:
                continue
            loop = self._walk(mesh, start, visited)
            loops.append(BoundaryLoop(half_edges=tuple(loop)))

        logger.debug(
            "Boundary loops extracted",
            loops=len(loops),
            lengths=[len(loop) for loop in loops],
        )
        return loops

    def _walk(self, mesh: HalfEdgeMesh, start: int, visited: set[int]) -> list[int]:
        """Follow boundary half-edges from ``start`` until the loop closes."""
        loop: list[int] = []
        current = start
        while True:
            visited.add(current)
            loop.append(current)

            current = self._next_boundary(mesh, current)
            if current == start:
                return loop
            if current in visited:
                raise BoundaryWalkError(
                    f"Boundary walk from half-edge {start} re-entered half-edge {current}"
                )

    @staticmethod
    def _next_boundary(mesh: HalfEdgeMesh, half_edge: int) -> int:
        """Boundary half-edge leaving the destination of ``half_edge``."""
        first = mesh.next_half_edge(half_edge)
        candidate = first
        while True:
            twin = mesh.twin(candidate)
            if twin is None:
                return candidate
            candidate = mesh.next_half_edge(twin)
            if candidate == first:
                raise BoundaryWalkError(
                    f"No boundary half-edge leaves vertex {mesh.destination(half_edge)}"
                )
