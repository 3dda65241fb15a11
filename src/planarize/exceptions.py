"""Exception hierarchy for planarize."""


class PlanarizeError(Exception):
    """Base exception for all planarize errors."""

    pass


class FitRejected(PlanarizeError):
    """Plane estimation failed or produced an unusable plane.

    Raised when too few points support the fitted plane, or when the fitted
    normal points away from the expected normal. Signals that the input patch
    is not plane-like enough to be flattened.
    """

    def __init__(self, reason: str, inlier_fraction: float | None = None) -> None:
        self.reason = reason
        self.inlier_fraction = inlier_fraction
        super().__init__(f"Plane fit rejected: {reason}")


class DegenerateInput(PlanarizeError):
    """Input has fewer elements than fitting or mesh construction needs."""

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)


class DegeneratePointCloud(FitRejected, DegenerateInput):
    """Point set cannot define a plane (too few, coincident or collinear)."""

    def __init__(self, reason: str) -> None:
        # Cooperative MRO: FitRejected sets reason, DegenerateInput sets message.
        super().__init__(reason)


class MeshError(PlanarizeError):
    """Errors related to mesh connectivity."""

    pass


class NonTriangularFace(MeshError):
    """A face does not reference exactly three vertices."""

    def __init__(self, face_index: int, vertex_count: int) -> None:
        self.face_index = face_index
        self.vertex_count = vertex_count
        super().__init__(
            f"Face {face_index} has {vertex_count} vertices, only triangle meshes are supported"
        )


class VertexIndexError(MeshError):
    """A face references a vertex index outside the vertex array."""

    def __init__(self, face_index: int, vertex_index: int, vertex_count: int) -> None:
        self.face_index = face_index
        self.vertex_index = vertex_index
        self.vertex_count = vertex_count
        super().__init__(
            f"Face {face_index} references vertex {vertex_index}, "
            f"but the mesh has {vertex_count} vertices"
        )


class NonManifoldEdge(MeshError):
    """A directed edge was inserted twice.

    Happens when an edge is shared by more than two faces, or when two
    neighbouring faces have opposite orientation.
    """

    def __init__(self, origin: int, destination: int) -> None:
        self.origin = origin
        self.destination = destination
        super().__init__(
            f"Directed edge {origin} -> {destination} is used by more than one face"
        )


class BoundaryWalkError(MeshError):
    """Boundary traversal could not close a loop."""

    def __init__(self, message: str) -> None:
        super().__init__(message)


class FrameMismatchError(PlanarizeError):
    """Projected boundary points do not lie in the local frame's XY plane."""

    def __init__(self, max_offset: float, tolerance: float) -> None:
        self.max_offset = max_offset
        self.tolerance = tolerance
        super().__init__(
            f"Projected point is {max_offset:.6g} off the frame plane (tolerance {tolerance:g})"
        )


class MeshFileError(PlanarizeError):
    """Errors related to reading or writing mesh and result files."""

    pass


class MeshLoadError(MeshFileError):
    """Error loading a mesh file."""

    def __init__(self, path: str, reason: str) -> None:
        self.path = path
        self.reason = reason
        super().__init__(f"Failed to load mesh '{path}': {reason}")


class ResultSaveError(MeshFileError):
    """Error saving an import result."""

    def __init__(self, path: str, reason: str) -> None:
        self.path = path
        self.reason = reason
        super().__init__(f"Failed to save result '{path}': {reason}")
