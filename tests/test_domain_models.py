"""Tests for domain models to verify they work correctly."""

import numpy as np
import pytest

from planarize.domain import (
    BoundaryHierarchy,
    ImportResult,
    LocalFrame,
    PatchMesh,
    Plane,
    PointWithNormal,
    PolygonBoundary,
    PolygonPoint,
    WindingDirection,
)
from planarize.exceptions import DegenerateInput


def _square(reverse: bool = False) -> PolygonBoundary:
    points = [PolygonPoint(0, 0), PolygonPoint(2, 0), PolygonPoint(2, 2), PolygonPoint(0, 2)]
    if reverse:
        points = list(reversed(points))
    return PolygonBoundary(points=points)


class TestPlane:
    """Tests for Plane class."""

    def test_normal_is_normalized(self) -> None:
        """Normal and offset are scaled together to unit length."""
        plane = Plane(normal=np.array([0.0, 0.0, 2.0]), offset=-4.0)
        np.testing.assert_allclose(plane.normal, [0.0, 0.0, 1.0])
        assert plane.offset == pytest.approx(-2.0)

    def test_zero_normal_rejected(self) -> None:
        """A zero normal cannot define a plane."""
        with pytest.raises(DegenerateInput):
            Plane(normal=np.zeros(3), offset=1.0)

    def test_from_point_normal(self) -> None:
        """Plane through a point contains that point."""
        plane = Plane.from_point_normal((1.0, 2.0, 3.0), (0.0, 0.0, 5.0))
        np.testing.assert_allclose(plane.coefficients(), [0.0, 0.0, 1.0, -3.0])
        assert plane.signed_distance((1.0, 2.0, 3.0)) == pytest.approx(0.0)

    def test_signed_distance(self) -> None:
        """Distance is positive on the normal side."""
        plane = Plane(normal=np.array([0.0, 0.0, 1.0]), offset=-1.0)
        assert plane.signed_distance((0.0, 0.0, 3.0)) == pytest.approx(2.0)
        assert plane.signed_distance((5.0, 5.0, 0.0)) == pytest.approx(-1.0)
        many = plane.signed_distance(np.array([[0.0, 0.0, 3.0], [0.0, 0.0, 1.0]]))
        np.testing.assert_allclose(many, [2.0, 0.0])

    def test_project_single_and_many(self) -> None:
        """Projection drops the normal component."""
        plane = Plane(normal=np.array([0.0, 0.0, 1.0]), offset=-1.0)
        np.testing.assert_allclose(plane.project((3.0, 4.0, 7.0)), [3.0, 4.0, 1.0])
        projected = plane.project(np.array([[0.0, 0.0, 0.0], [1.0, 1.0, 5.0]]))
        np.testing.assert_allclose(projected, [[0.0, 0.0, 1.0], [1.0, 1.0, 1.0]])

    def test_flipped_describes_same_plane(self) -> None:
        """Flipping negates normal and offset together."""
        plane = Plane(normal=np.array([0.0, 0.0, 1.0]), offset=-1.0)
        flipped = plane.flipped()
        np.testing.assert_allclose(flipped.normal, [0.0, 0.0, -1.0])
        assert flipped.offset == pytest.approx(1.0)
        assert flipped.signed_distance((0.0, 0.0, 1.0)) == pytest.approx(0.0)

    def test_serialization(self) -> None:
        """Test plane serialization and deserialization."""
        plane = Plane(normal=np.array([0.0, 1.0, 0.0]), offset=0.5)
        restored = Plane.from_dict(plane.to_dict())
        np.testing.assert_allclose(restored.normal, plane.normal)
        assert restored.offset == plane.offset

    def test_plane_immutable(self) -> None:
        """Test that plane is immutable."""
        plane = Plane(normal=np.array([0.0, 0.0, 1.0]), offset=0.0)
        with pytest.raises(AttributeError):
            plane.offset = 1.0  # type: ignore


class TestLocalFrame:
    """Tests for LocalFrame class."""

    def test_identity(self) -> None:
        """Identity frame leaves points unchanged."""
        frame = LocalFrame.identity()
        np.testing.assert_allclose(frame.to_world((1.0, 2.0, 3.0)), [1.0, 2.0, 3.0])
        np.testing.assert_allclose(frame.matrix(), np.eye(4))

    def test_world_local_inverse(self) -> None:
        """to_local undoes to_world."""
        rotation = np.array(
            [
                [0.0, -1.0, 0.0],
                [1.0, 0.0, 0.0],
                [0.0, 0.0, 1.0],
            ]
        )
        frame = LocalFrame(rotation=rotation, translation=np.array([1.0, 2.0, 3.0]))
        local = np.array([[1.0, 0.0, 0.0], [0.5, -2.0, 0.0]])
        world = frame.to_world(local)
        np.testing.assert_allclose(world[0], [1.0, 3.0, 3.0])
        np.testing.assert_allclose(frame.to_local(world), local, atol=1e-12)

    def test_axes(self) -> None:
        """Axes are the rotation columns."""
        rotation = np.array(
            [
                [0.0, -1.0, 0.0],
                [1.0, 0.0, 0.0],
                [0.0, 0.0, 1.0],
            ]
        )
        frame = LocalFrame(rotation=rotation, translation=np.zeros(3))
        np.testing.assert_allclose(frame.x_axis, [0.0, 1.0, 0.0])
        np.testing.assert_allclose(frame.y_axis, [-1.0, 0.0, 0.0])
        np.testing.assert_allclose(frame.z_axis, [0.0, 0.0, 1.0])

    def test_lift(self) -> None:
        """2D plane points map to world points on the frame plane."""
        frame = LocalFrame(rotation=np.eye(3), translation=np.array([0.0, 0.0, 2.0]))
        np.testing.assert_allclose(frame.lift((1.0, 1.0)), [1.0, 1.0, 2.0])
        lifted = frame.lift([(0.0, 0.0), (3.0, 4.0)])
        np.testing.assert_allclose(lifted, [[0.0, 0.0, 2.0], [3.0, 4.0, 2.0]])

    def test_matrix(self) -> None:
        """Homogeneous matrix carries rotation and translation."""
        frame = LocalFrame(rotation=np.eye(3), translation=np.array([1.0, 2.0, 3.0]))
        mat = frame.matrix()
        np.testing.assert_allclose(mat[:3, 3], [1.0, 2.0, 3.0])
        np.testing.assert_allclose(mat[3], [0.0, 0.0, 0.0, 1.0])

    def test_serialization(self) -> None:
        """Test frame serialization and deserialization."""
        frame = LocalFrame(rotation=np.eye(3), translation=np.array([1.0, 2.0, 3.0]))
        restored = LocalFrame.from_dict(frame.to_dict())
        np.testing.assert_allclose(restored.rotation, frame.rotation)
        np.testing.assert_allclose(restored.translation, frame.translation)


class TestPatchMesh:
    """Tests for PatchMesh and PointWithNormal."""

    def test_from_points(self) -> None:
        """Points carry their normals into the mesh."""
        points = [
            PointWithNormal((0.0, 0.0, 0.0), (0.0, 0.0, 1.0)),
            PointWithNormal((1.0, 0.0, 0.0), (0.0, 0.0, 1.0)),
            PointWithNormal((0.0, 1.0, 0.0), (0.0, 0.0, 1.0)),
        ]
        mesh = PatchMesh.from_points(points, [[0, 1, 2]])
        assert mesh.point_count == 3
        assert mesh.face_count == 1
        assert mesh.has_normals()
        assert mesh.polygons == [(0, 1, 2)]
        assert mesh.points_with_normals() == points

    def test_point_array_shape(self) -> None:
        """Points convert to an (N, 3) array."""
        mesh = PatchMesh(points=[(0.0, 0.0, 0.0), (1.0, 2.0, 3.0)], polygons=[])
        assert mesh.point_array().shape == (2, 3)
        assert not mesh.has_normals()

    def test_points_with_normals_requires_normals(self) -> None:
        """Pairing fails without one normal per point."""
        mesh = PatchMesh(points=[(0.0, 0.0, 0.0)], polygons=[])
        with pytest.raises(ValueError):
            mesh.points_with_normals()

    def test_serialization(self) -> None:
        """Test mesh serialization and deserialization."""
        mesh = PatchMesh(
            points=[(0.0, 0.0, 0.0), (1.0, 0.0, 0.0), (0.0, 1.0, 0.0)],
            polygons=[(0, 1, 2)],
            normals=[(0.0, 0.0, 1.0)] * 3,
        )
        restored = PatchMesh.from_dict(mesh.to_dict())
        assert restored == mesh


class TestPolygonBoundary:
    """Tests for PolygonBoundary class."""

    def test_signed_area_ccw(self) -> None:
        """Counter-clockwise square has positive area."""
        boundary = _square()
        assert boundary.signed_area() == pytest.approx(4.0)
        assert boundary.winding == WindingDirection.COUNTER_CLOCKWISE

    def test_signed_area_cw(self) -> None:
        """Clockwise square has negative area."""
        boundary = _square(reverse=True)
        assert boundary.signed_area() == pytest.approx(-4.0)
        assert boundary.winding == WindingDirection.CLOCKWISE

    def test_degenerate_has_no_winding(self) -> None:
        """Boundaries with fewer than three points have zero area."""
        boundary = PolygonBoundary(points=[PolygonPoint(0, 0), PolygonPoint(1, 1)])
        assert boundary.signed_area() == 0.0
        assert boundary.winding is None

    def test_bounding_box(self) -> None:
        """Test bounding box calculation."""
        assert _square().bounding_box() == (0, 0, 2, 2)

    def test_contains_point(self) -> None:
        """Ray casting detects inside and outside points."""
        boundary = _square()
        assert boundary.contains_point(1.0, 1.0)
        assert not boundary.contains_point(3.0, 1.0)

    def test_reversed_keeps_first_point(self) -> None:
        """Reversing flips winding and keeps the starting point."""
        boundary = _square()
        reversed_boundary = boundary.reversed()
        assert reversed_boundary.points[0] == boundary.points[0]
        assert reversed_boundary.signed_area() == pytest.approx(-4.0)
        assert len(reversed_boundary) == 4

    def test_serialization(self) -> None:
        """Derived fields are written and recomputed on load."""
        boundary = _square()
        data = boundary.to_dict()
        assert data["winding"] == "counter_clockwise"
        assert data["signed_area"] == pytest.approx(4.0)
        restored = PolygonBoundary.from_dict(data)
        assert restored.to_list() == boundary.to_list()

    def test_point_immutable(self) -> None:
        """Test that polygon points are immutable."""
        p = PolygonPoint(1.0, 2.0)
        with pytest.raises(AttributeError):
            p.x = 3.0  # type: ignore


class TestImportResult:
    """Tests for ImportResult and BoundaryHierarchy."""

    def test_outer_and_holes(self) -> None:
        """Accessors follow the hierarchy indices."""
        outer = _square()
        hole = PolygonBoundary(
            points=[PolygonPoint(0.5, 0.5), PolygonPoint(0.5, 1.5), PolygonPoint(1.5, 1.5)]
        )
        result = ImportResult(
            plane=Plane(normal=np.array([0.0, 0.0, 1.0]), offset=0.0),
            frame=LocalFrame.identity(),
            boundaries=[hole, outer],
            hierarchy=BoundaryHierarchy(outer=1, holes=[0], containment={0: 1}),
        )
        assert result.outer is outer
        assert result.holes == [hole]
        assert result.hierarchy.has_holes()

    def test_empty_result(self) -> None:
        """A result without boundaries has no outer boundary."""
        result = ImportResult(
            plane=Plane(normal=np.array([0.0, 0.0, 1.0]), offset=0.0),
            frame=LocalFrame.identity(),
            boundaries=[],
            hierarchy=BoundaryHierarchy(outer=None),
        )
        assert result.outer is None
        assert result.holes == []

    def test_to_dict(self) -> None:
        """Serialized result contains plane, frame and boundaries."""
        result = ImportResult(
            plane=Plane(normal=np.array([0.0, 0.0, 1.0]), offset=0.0),
            frame=LocalFrame.identity(),
            boundaries=[_square()],
            hierarchy=BoundaryHierarchy(outer=0),
            inlier_fraction=0.95,
        )
        data = result.to_dict()
        assert data["plane"]["normal"] == [0.0, 0.0, 1.0]
        assert data["frame"]["translation"] == [0.0, 0.0, 0.0]
        assert len(data["boundaries"]) == 1
        assert data["hierarchy"]["outer"] == 0
        assert data["inlier_fraction"] == 0.95
