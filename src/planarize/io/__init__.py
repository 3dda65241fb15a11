"""Mesh and result I/O for planarize.

This module handles reading mesh files and writing import results. It keeps
file formats out of the core pipeline, which only sees domain models.

Key responsibilities:
- Load OBJ and JSON meshes into PatchMesh models
- Save ImportResult models as JSON
- Output naming convention ({stem}-boundaries.json)

Key classes:
- MeshReader: Load mesh files
- ResultWriter: Save import results
"""

from planarize.io.reader import MeshReader, parse_obj
from planarize.io.writer import ResultWriter

__all__ = [
    "MeshReader",
    "ResultWriter",
    "parse_obj",
]
