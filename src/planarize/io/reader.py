"""Mesh reader for loading surface patches.

This module provides the MeshReader class for loading mesh files into the
PatchMesh domain model. Two formats are supported:

- Wavefront OBJ: ``v``, ``vn`` and ``f`` records. Faces keep their vertex
  count so that non-triangular faces reach the importer unchanged.
- JSON: the dictionary layout produced by ``PatchMesh.to_dict()``.
"""

import json
from pathlib import Path

from planarize.domain import PatchMesh
from planarize.exceptions import MeshLoadError

SUPPORTED_SUFFIXES = {".obj": "OBJ", ".json": "JSON"}


def _resolve_index(token: str, count: int) -> int:
    """Convert a 1-based (or negative, relative) OBJ index to a 0-based index."""
    value = int(token)
    if value > 0:
        return value - 1
    if value < 0:
        return count + value
    raise ValueError("OBJ indices start at 1")


def parse_obj(text: str) -> PatchMesh:
    """Parse Wavefront OBJ text into a PatchMesh.

    Normals are attached to vertices through the ``v//vn`` references of the
    faces. If faces carry no normal references but the file has exactly one
    ``vn`` per ``v``, normals are paired by position.

    Args:
        text: OBJ file contents

    Returns:
        PatchMesh with points, polygons and (possibly empty) normals

    Raises:
        ValueError: If a record cannot be parsed
    """
    points: list[tuple[float, float, float]] = []
    normals: list[tuple[float, float, float]] = []
    polygons: list[tuple[int, ...]] = []
    vertex_normals: dict[int, int] = {}

    for line_no, raw_line in enumerate(text.splitlines(), start=1):
        line = raw_line.split("#", 1)[0].strip()
        if not line:
            continue
        keyword, *fields = line.split()
        try:
            if keyword == "v":
                x, y, z = (float(v) for v in fields[:3])
                points.append((x, y, z))
            elif keyword == "vn":
                nx, ny, nz = (float(v) for v in fields[:3])
                normals.append((nx, ny, nz))
            elif keyword == "f":
                face: list[int] = []
                for token in fields:
                    parts = token.split("/")
                    vertex = _resolve_index(parts[0], len(points))
                    face.append(vertex)
                    if len(parts) >= 3 and parts[2]:
                        vertex_normals[vertex] = _resolve_index(parts[2], len(normals))
                polygons.append(tuple(face))
        except ValueError as e:
            raise ValueError(f"line {line_no}: {e}") from e

    for vertex, normal_index in vertex_normals.items():
        if not 0 <= normal_index < len(normals):
            raise ValueError(f"vertex {vertex + 1} references missing normal {normal_index + 1}")

    point_normals: list[tuple[float, float, float]] = []
    if vertex_normals and len(vertex_normals) == len(points):
        point_normals = [normals[vertex_normals[i]] for i in range(len(points))]
    elif not vertex_normals and normals and len(normals) == len(points):
        point_normals = list(normals)

    return PatchMesh(points=points, polygons=polygons, normals=point_normals)


class MeshReader:
    """Loads OBJ or JSON mesh files into PatchMesh models.

    Example:
        reader = MeshReader(Path("patch.obj"))
        mesh = reader.load()
        print(mesh.point_count, mesh.face_count)
    """

    def __init__(self, mesh_path: Path) -> None:
        """Initialize the mesh reader.

        Args:
            mesh_path: Path to the OBJ or JSON mesh file
        """
        self._mesh_path = mesh_path

    @property
    def format(self) -> str:
        """Return mesh format ('OBJ' or 'JSON') based on the file suffix.

        Raises:
            MeshLoadError: If the suffix is not supported
        """
        suffix = self._mesh_path.suffix.lower()
        if suffix not in SUPPORTED_SUFFIXES:
            raise MeshLoadError(
                str(self._mesh_path),
                f"unsupported format '{suffix}' (expected .obj or .json)",
            )
        return SUPPORTED_SUFFIXES[suffix]

    def load(self) -> PatchMesh:
        """Load the mesh file.

        Returns:
            The parsed mesh

        Raises:
            FileNotFoundError: If the mesh file does not exist
            MeshLoadError: If the file cannot be read or parsed
        """
        if not self._mesh_path.exists():
            raise FileNotFoundError(f"Mesh file not found: {self._mesh_path}")

        mesh_format = self.format
        try:
            text = self._mesh_path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as e:
            raise MeshLoadError(str(self._mesh_path), str(e)) from e

        try:
            if mesh_format == "OBJ":
                return parse_obj(text)
            return PatchMesh.from_dict(json.loads(text))
        except (ValueError, KeyError, TypeError) as e:
            raise MeshLoadError(str(self._mesh_path), str(e)) from e
