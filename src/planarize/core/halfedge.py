"""Indexed triangle mesh with half-edge adjacency.

Half-edges live in parallel integer lists (origin, twin, next, face) and are
referenced by position, never by object identity. Each face contributes three
consecutive half-edges. A half-edge without a twin lies on the mesh boundary.

Raw vertex indices from the input are mapped to dense internal indices in
first-seen order, so vertices that no face references take no part in the
connectivity.
"""

from collections.abc import Iterable, Sequence

import numpy as np
import structlog
from numpy.typing import ArrayLike

from planarize.exceptions import (
    DegenerateInput,
    NonManifoldEdge,
    NonTriangularFace,
    VertexIndexError,
)

logger = structlog.get_logger(__name__)


class VertexIndexMap:
    """Bidirectional map between raw vertex indices and internal indices.

    Internal indices are dense and assigned in first-seen order.

    Example:
        index_map = VertexIndexMap()
        index_map.add(7)   # -> 0
        index_map.add(3)   # -> 1
        index_map.add(7)   # -> 0
        index_map.to_raw(1)  # -> 3
    """

    def __init__(self) -> None:
        self._to_internal: dict[int, int] = {}
        self._to_raw: list[int] = []

    def add(self, raw: int) -> int:
        """Return the internal index of ``raw``, assigning one on first use."""
        internal = self._to_internal.get(raw)
        if internal is None:
            internal = len(self._to_raw)
            self._to_internal[raw] = internal
            self._to_raw.append(raw)
        return internal

    def to_internal(self, raw: int) -> int:
        """Internal index of a raw vertex index.

        Raises:
            KeyError: If ``raw`` was never added
        """
        return self._to_internal[raw]

    def to_raw(self, internal: int) -> int:
        """Raw vertex index of an internal index."""
        return self._to_raw[internal]

    @property
    def raw_indices(self) -> list[int]:
        """Raw indices in internal order."""
        return list(self._to_raw)

    def __contains__(self, raw: object) -> bool:
        return raw in self._to_internal

    def __len__(self) -> int:
        return len(self._to_raw)


def _validate_faces(faces: Sequence[Sequence[int]], vertex_count: int) -> list[tuple[int, int, int]]:
    """Check every face before any connectivity is built.

    Raises:
        DegenerateInput: If there are no faces or a face repeats a vertex
        NonTriangularFace: If a face does not have exactly three indices
        VertexIndexError: If a face index is outside the vertex array
    """
    if len(faces) == 0:
        raise DegenerateInput("Mesh has no faces")

    triangles: list[tuple[int, int, int]] = []
    for face_index, face in enumerate(faces):
        if len(face) != 3:
            raise NonTriangularFace(face_index, len(face))
        a, b, c = (int(v) for v in face)
        for raw in (a, b, c):
            if raw < 0 or raw >= vertex_count:
                raise VertexIndexError(face_index, raw, vertex_count)
        if a == b or b == c or a == c:
            raise DegenerateInput(f"Face {face_index} repeats a vertex index: {(a, b, c)}")
        triangles.append((a, b, c))
    return triangles


class HalfEdgeMesh:
    """Triangle mesh with half-edge adjacency.

    Use :meth:`build` to construct one from a vertex array and faces.

    Non-manifold input is rejected rather than guessed at: inserting a
    directed edge that already exists raises ``NonManifoldEdge``. That covers
    edges shared by more than two faces as well as neighbouring faces with
    inconsistent orientation.
    """

    def __init__(
        self,
        vertices: np.ndarray,
        index_map: VertexIndexMap,
        origins: list[int],
        twins: list[int | None],
        nexts: list[int],
        faces: list[int],
    ) -> None:
        self._vertices = vertices
        self._index_map = index_map
        self._origins = origins
        self._twins = twins
        self._nexts = nexts
        self._faces = faces

    @classmethod
    def build(cls, vertices: ArrayLike, faces: Sequence[Sequence[int]]) -> "HalfEdgeMesh":
        """Build the half-edge structure for a triangle mesh.

        All faces are validated before any half-edge is created, so a failed
        build leaves nothing behind.

        Args:
            vertices: (N, 3) raw vertex positions
            faces: Raw vertex index triples

        Returns:
            The constructed mesh

        Raises:
            NonTriangularFace: If a face does not have exactly three indices
            VertexIndexError: If a face references a missing vertex
            NonManifoldEdge: If a directed edge is used by two faces
            DegenerateInput: If there are no faces or a face repeats a vertex
        """
        verts = np.asarray(vertices, dtype=float).reshape(-1, 3)
        triangles = _validate_faces(faces, len(verts))

        index_map = VertexIndexMap()
        origins: list[int] = []
        twins: list[int | None] = []
        nexts: list[int] = []
        face_of: list[int] = []
        edge_lookup: dict[tuple[int, int], int] = {}

        for face_index, raw_face in enumerate(triangles):
            tri = [index_map.add(raw) for raw in raw_face]
            base = len(origins)
            for k in range(3):
                a = tri[k]
                b = tri[(k + 1) % 3]
                if (a, b) in edge_lookup:
                    raise NonManifoldEdge(raw_face[k], raw_face[(k + 1) % 3])

                half_edge = base + k
                edge_lookup[(a, b)] = half_edge
                origins.append(a)
                nexts.append(base + (k + 1) % 3)
                face_of.append(face_index)

                opposite = edge_lookup.get((b, a))
                twins.append(opposite)
                if opposite is not None:
                    twins[opposite] = half_edge

        mesh = cls(verts, index_map, origins, twins, nexts, face_of)
        logger.debug(
            "Half-edge mesh built",
            vertices=mesh.vertex_count,
            faces=mesh.face_count,
            half_edges=mesh.half_edge_count,
            boundary_half_edges=len(mesh.boundary_half_edges()),
        )
        return mesh

    @property
    def index_map(self) -> VertexIndexMap:
        """Raw/internal vertex index map."""
        return self._index_map

    @property
    def vertex_count(self) -> int:
        """Number of vertices referenced by at least one face."""
        return len(self._index_map)

    @property
    def face_count(self) -> int:
        """Number of triangles."""
        return len(self._origins) // 3

    @property
    def half_edge_count(self) -> int:
        """Number of half-edges (three per face)."""
        return len(self._origins)

    def origin(self, half_edge: int) -> int:
        """Internal index of the vertex a half-edge starts at."""
        return self._origins[half_edge]

    def destination(self, half_edge: int) -> int:
        """Internal index of the vertex a half-edge ends at."""
        return self._origins[self._nexts[half_edge]]

    def twin(self, half_edge: int) -> int | None:
        """Opposite half-edge in the neighbouring face, or None on the boundary."""
        return self._twins[half_edge]

    def next_half_edge(self, half_edge: int) -> int:
        """Next half-edge around the same face."""
        return self._nexts[half_edge]

    def face(self, half_edge: int) -> int:
        """Index of the face owning a half-edge."""
        return self._faces[half_edge]

    def is_boundary(self, half_edge: int) -> bool:
        """Check if a half-edge has no twin."""
        return self._twins[half_edge] is None

    def boundary_half_edges(self) -> list[int]:
        """All boundary half-edges in ascending order."""
        return [he for he, twin in enumerate(self._twins) if twin is None]

    def vertex_position(self, vertex: int) -> np.ndarray:
        """Position of an internal vertex."""
        return self._vertices[self._index_map.to_raw(vertex)]

    def origin_positions(self, half_edges: Iterable[int]) -> np.ndarray:
        """Positions of the origin vertices of ``half_edges`` as an (M, 3) array."""
        raw = [self._index_map.to_raw(self._origins[he]) for he in half_edges]
        return self._vertices[np.asarray(raw, dtype=int)].reshape(-1, 3)
