"""Unit tests for the mesh import pipeline.

Tests cover:
- Full import of an annulus (outer boundary plus one hole)
- Choice of the normal prior
- Failure propagation for non-planar and malformed input
"""

import numpy as np
import pytest

from planarize.config import BoundaryConfig, PlanarizeSettings, PlaneFitConfig
from planarize.core.importer import ImportStage, MeshImporter
from planarize.domain import PatchMesh, WindingDirection
from planarize.exceptions import DegenerateInput, FitRejected, NonTriangularFace
from planarize.utils import ImportLogger


@pytest.fixture
def importer():
    """Importer with deterministic sampling."""
    return MeshImporter(PlanarizeSettings(plane=PlaneFitConfig(random_seed=0)))


class TestMeshImporter:
    """Tests for MeshImporter.import_mesh."""

    def test_annulus(self, importer, annulus_mesh):
        """Annulus yields one outer boundary and one hole."""
        result = importer.import_mesh(annulus_mesh)

        assert len(result.boundaries) == 2
        assert result.outer is not None
        assert len(result.outer) == 12
        assert len(result.holes) == 1
        assert len(result.holes[0]) == 4
        assert result.hierarchy.containment == {result.hierarchy.holes[0]: result.hierarchy.outer}
        assert result.inlier_fraction == pytest.approx(1.0)

    def test_annulus_plane_and_frame(self, importer, annulus_mesh):
        """Plane is z=0 and the frame is centred on the point centroid."""
        result = importer.import_mesh(annulus_mesh)

        np.testing.assert_allclose(result.plane.normal, [0.0, 0.0, 1.0], atol=1e-9)
        assert result.plane.offset == pytest.approx(0.0, abs=1e-9)
        np.testing.assert_allclose(result.frame.origin, [1.5, 1.5, 0.0], atol=1e-9)
        np.testing.assert_allclose(result.frame.rotation, np.eye(3), atol=1e-9)

    def test_annulus_winding_follows_faces(self, importer, annulus_mesh):
        """Counter-clockwise faces give a CCW outer boundary and a CW hole."""
        result = importer.import_mesh(annulus_mesh)

        assert result.outer.signed_area() == pytest.approx(9.0)
        assert result.outer.winding == WindingDirection.COUNTER_CLOCKWISE
        assert result.holes[0].signed_area() == pytest.approx(-1.0)
        assert result.holes[0].winding == WindingDirection.CLOCKWISE

    def test_hole_coordinates(self, importer, annulus_mesh):
        """The hole is the unit square around the frame origin."""
        result = importer.import_mesh(annulus_mesh)
        xs = sorted({round(p.x, 9) for p in result.holes[0].points})
        ys = sorted({round(p.y, 9) for p in result.holes[0].points})
        assert xs == [-0.5, 0.5]
        assert ys == [-0.5, 0.5]

    def test_explicit_expected_normal(self, importer, annulus_mesh):
        """An explicit prior overrides the point normals."""
        result = importer.import_mesh(annulus_mesh, expected_normal=(0.0, 0.0, -1.0))

        np.testing.assert_allclose(result.plane.normal, [0.0, 0.0, -1.0], atol=1e-9)
        # Viewed from below, the face winding appears clockwise
        assert result.outer.signed_area() == pytest.approx(-9.0)

    def test_prior_from_first_point_normal(self, importer, annulus_mesh):
        """Without an explicit prior the first point's normal is used."""
        annulus_mesh.normals[0] = (0.0, 0.0, -1.0)
        result = importer.import_mesh(annulus_mesh)
        np.testing.assert_allclose(result.plane.normal, [0.0, 0.0, -1.0], atol=1e-9)

    def test_no_prior_available(self, importer, annulus_mesh):
        """Meshes without normals need an explicit prior."""
        annulus_mesh.normals = []
        with pytest.raises(DegenerateInput):
            importer.import_mesh(annulus_mesh)

    def test_enforce_winding(self, make_annulus):
        """Clockwise faces are normalized when requested."""
        mesh = make_annulus(reverse=True)

        plain = MeshImporter(PlanarizeSettings(plane=PlaneFitConfig(random_seed=0)))
        result = plain.import_mesh(mesh)
        assert result.outer.winding == WindingDirection.CLOCKWISE
        assert result.holes[0].winding == WindingDirection.COUNTER_CLOCKWISE

        enforcing = MeshImporter(
            PlanarizeSettings(
                plane=PlaneFitConfig(random_seed=0),
                boundary=BoundaryConfig(enforce_winding=True),
            )
        )
        result = enforcing.import_mesh(mesh)
        assert result.outer.winding == WindingDirection.COUNTER_CLOCKWISE
        assert result.holes[0].winding == WindingDirection.CLOCKWISE

    def test_stats_recorded(self, importer, annulus_mesh):
        """The result carries the statistics of its import."""
        result = importer.import_mesh(annulus_mesh)
        stats = result.stats

        assert stats is not None
        assert stats.succeeded
        assert stats.point_count == annulus_mesh.point_count
        assert stats.face_count == annulus_mesh.face_count
        assert stats.inlier_fraction == pytest.approx(1.0)
        assert stats.loop_count == 2
        assert stats.hole_count == 1
        assert stats.errors == []
        assert stats.duration_seconds >= 0.0

    def test_import_arrays(self, importer, single_triangle):
        """Plain arrays are accepted."""
        vertices, faces = single_triangle
        result = importer.import_arrays(vertices, faces, expected_normal=(0.0, 0.0, 1.0))

        assert len(result.boundaries) == 1
        assert result.outer.signed_area() == pytest.approx(0.5)
        assert result.hierarchy.holes == []

    def test_import_arrays_with_normals(self, importer, single_triangle):
        """Normals passed as arrays provide the prior."""
        vertices, faces = single_triangle
        normals = np.tile([0.0, 0.0, 1.0], (3, 1))
        result = importer.import_arrays(vertices, faces, normals=normals)
        np.testing.assert_allclose(result.plane.normal, [0.0, 0.0, 1.0], atol=1e-9)


class TestMeshImporterFailures:
    """Tests for failing imports."""

    def test_non_planar_rejected(self, importer, tetrahedron):
        """A closed solid is not a planar patch."""
        vertices, faces = tetrahedron
        with pytest.raises(FitRejected):
            importer.import_arrays(vertices, faces, expected_normal=(0.0, 0.0, 1.0))

    def test_quad_face_rejected(self, importer):
        """Quads fail after a successful plane fit."""
        mesh = PatchMesh(
            points=[(0.0, 0.0, 0.0), (1.0, 0.0, 0.0), (1.0, 1.0, 0.0), (0.0, 1.0, 0.0)],
            polygons=[(0, 1, 2, 3)],
            normals=[(0.0, 0.0, 1.0)] * 4,
        )
        with pytest.raises(NonTriangularFace):
            importer.import_mesh(mesh)

    def test_too_few_points(self, importer):
        """Fewer than three points cannot be imported."""
        mesh = PatchMesh(
            points=[(0.0, 0.0, 0.0), (1.0, 0.0, 0.0)],
            polygons=[],
            normals=[(0.0, 0.0, 1.0)] * 2,
        )
        with pytest.raises(DegenerateInput):
            importer.import_mesh(mesh)

    def test_no_faces(self, importer):
        """A planar point cloud without faces has no boundary to extract."""
        mesh = PatchMesh(
            points=[(0.0, 0.0, 0.0), (1.0, 0.0, 0.0), (0.0, 1.0, 0.0)],
            polygons=[],
            normals=[(0.0, 0.0, 1.0)] * 3,
        )
        with pytest.raises(DegenerateInput):
            importer.import_mesh(mesh)

    def test_unexpected_error_recorded(self, importer, annulus_mesh, monkeypatch):
        """Errors outside the planarize hierarchy are logged as failures and re-raised."""
        trackers = []

        class RecordingLogger(ImportLogger):
            def __init__(self, *args, **kwargs):
                super().__init__(*args, **kwargs)
                trackers.append(self)

        def explode(mesh):
            raise RuntimeError("walk exploded")

        monkeypatch.setattr("planarize.core.importer.ImportLogger", RecordingLogger)
        monkeypatch.setattr(importer.extractor, "extract", explode)

        with pytest.raises(RuntimeError, match="walk exploded"):
            importer.import_mesh(annulus_mesh)

        stats = trackers[0].stats
        assert stats.stage == "failed"
        assert not stats.succeeded
        assert stats.errors == [("boundary_walk", "walk exploded")]
        assert stats.inlier_fraction == pytest.approx(1.0)


class TestImportStage:
    """Tests for ImportStage."""

    def test_stage_values(self):
        """Stages serialize to lowercase names."""
        assert ImportStage.PLANE_FIT.value == "plane_fit"
        assert ImportStage("done") is ImportStage.DONE
