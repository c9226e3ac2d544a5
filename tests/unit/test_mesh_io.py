"""Test mesh I/O functionality."""

import subprocess
from pathlib import Path

import numpy as np
import pytest


# Fixture for test data directory
@pytest.fixture
def fixtures_dir():
    """Get path to test fixtures directory."""
    return Path(__file__).parent.parent / "fixtures"


@pytest.fixture
def square_msh(fixtures_dir):
    """Get path to square.msh test file."""
    return fixtures_dir / "square.msh"


class TestMeshLoad:
    """Test mesh loading functionality."""

    def test_load_msh(self, square_msh):
        """Test loading the square plate."""
        import mshkit as mk

        mesh = mk.mesh.load(str(square_msh))

        assert mesh.n_nodes == 5
        assert mesh.n_elements == 10
        assert mesh.is_valid()

    def test_load_from_path_object(self, square_msh):
        """Test loading from pathlib.Path object."""
        import mshkit as mk

        mesh = mk.mesh.load(square_msh)

        assert mesh.n_physical_names == 7

    def test_load_nonexistent_file(self):
        """Test loading a file that doesn't exist."""
        import mshkit as mk

        with pytest.raises(FileNotFoundError):
            mk.mesh.load("nonexistent_file.msh")

    def test_load_malformed_file(self, tmp_path):
        """Test that malformed content raises FormatError."""
        import mshkit as mk

        bad = tmp_path / "bad.msh"
        bad.write_text("$Nodes\n1\n1 0 0\n$EndNodes\n")

        with pytest.raises(mk.FormatError):
            mk.mesh.load(bad)

    def test_mesh_bounds(self, square_msh):
        """Test that loaded mesh has correct bounds."""
        import mshkit as mk

        mesh = mk.mesh.load(square_msh)
        bounds = mesh.bounds

        assert np.allclose(bounds[0], [0.0, 0.0, 0.0])
        assert np.allclose(bounds[1], [5.0, 10.0, 0.0])


class TestMeshSave:
    """Test mesh saving functionality."""

    def test_save_msh(self, tmp_path, square_msh):
        """Test saving writes the encoded text."""
        import mshkit as mk

        mesh = mk.mesh.load(square_msh)
        output_file = tmp_path / "output.msh"
        mk.mesh.save(mesh, str(output_file))

        assert output_file.exists()
        assert output_file.read_text() == mk.encode(mesh)

    def test_roundtrip_preserves_data(self, tmp_path, square_msh):
        """Test that save/load roundtrip preserves mesh data."""
        import mshkit as mk

        mesh1 = mk.mesh.load(square_msh)
        output_file = tmp_path / "roundtrip.msh"
        mk.mesh.save(mesh1, output_file)
        mesh2 = mk.mesh.load(output_file)

        assert mesh2 == mesh1


class TestFromGeometry:
    """Test the generator interface."""

    @pytest.fixture
    def fixed_generator(self, square_msh):
        """Generator that always returns the square plate."""
        from mshkit import MeshGenerator

        class FixedGenerator(MeshGenerator):
            def __init__(self, text):
                self.text = text
                self.calls = []

            def generate(self, geometry):
                self.calls.append(geometry)
                return self.text

        return FixedGenerator(square_msh.read_text())

    def test_from_geometry(self, fixed_generator):
        """Test that generator output is decoded."""
        import mshkit as mk

        mesh = mk.from_geometry('Point(1) = {0, 0, 0, 1};', fixed_generator)

        assert mesh.n_nodes == 5
        assert fixed_generator.calls == ['Point(1) = {0, 0, 0, 1};']

    def test_generator_failure_propagates(self):
        """Test that generator errors reach the caller unchanged."""
        import mshkit as mk

        error = subprocess.CalledProcessError(1, ["gmsh", "-3", "m.geo"])

        class FailingGenerator(mk.MeshGenerator):
            def generate(self, geometry):
                raise error

        with pytest.raises(subprocess.CalledProcessError) as excinfo:
            mk.from_geometry("fail", FailingGenerator())

        assert excinfo.value is error

    def test_generator_bad_output(self):
        """Test that unusable generator output raises FormatError."""
        import mshkit as mk

        class NoiseGenerator(mk.MeshGenerator):
            def generate(self, geometry):
                return "$Elements\n1\nfail\n$EndElements\n"

        with pytest.raises(mk.FormatError):
            mk.from_geometry("fail", NoiseGenerator())

    def test_generator_is_abstract(self):
        """Test that the base class cannot be instantiated."""
        import mshkit as mk

        with pytest.raises(TypeError):
            mk.MeshGenerator()


class TestTrimesh:
    """Test conversion to and from trimesh."""

    def test_from_trimesh_box(self):
        """Test converting a trimesh box."""
        import trimesh

        import mshkit as mk

        box = trimesh.creation.box()
        mesh = mk.mesh.from_trimesh(box, physical_tag=3, entity_tag=1)

        assert mesh.n_nodes == 8
        assert mesh.n_elements == 12
        assert [node.id for node in mesh.nodes] == list(range(1, 9))
        assert all(el.kind == mk.ElementType.TRIANGLE for el in mesh.elements)
        assert mesh.elements[0].tags == [3, 1]
        assert mesh.is_valid()

    def test_trimesh_roundtrip(self):
        """Test that vertices and faces survive both conversions."""
        import trimesh

        import mshkit as mk

        box = trimesh.creation.box()
        back = mk.mesh.to_trimesh(mk.mesh.from_trimesh(box))

        assert np.allclose(back.vertices, box.vertices)
        assert np.array_equal(back.faces, box.faces)

    def test_to_trimesh_skips_points_and_lines(self, square_msh):
        """Test that only surface elements become faces."""
        import mshkit as mk

        tm = mk.mesh.to_trimesh(mk.mesh.load(square_msh))

        assert len(tm.vertices) == 5
        assert len(tm.faces) == 4
        assert np.isclose(tm.area, 50.0)

    def test_to_trimesh_splits_quadrangles(self):
        """Test that a quadrangle becomes two triangles."""
        import mshkit as mk
        from mshkit import Element, ElementType, Mesh, Node

        mesh = Mesh(
            nodes=[
                Node(1, (0.0, 0.0, 0.0)),
                Node(2, (1.0, 0.0, 0.0)),
                Node(3, (1.0, 1.0, 0.0)),
                Node(4, (0.0, 1.0, 0.0)),
            ],
            elements=[Element(1, ElementType.QUADRANGLE, [], [1, 2, 3, 4])],
        )

        tm = mk.mesh.to_trimesh(mesh)

        assert tm.faces.tolist() == [[0, 1, 2], [0, 2, 3]]
        assert np.isclose(tm.area, 1.0)

    def test_to_trimesh_missing_node(self):
        """Test that a dangling reference raises UnknownIdError."""
        import mshkit as mk
        from mshkit import Element, ElementType, Mesh, Node

        mesh = Mesh(
            nodes=[Node(1, (0.0, 0.0, 0.0)), Node(2, (1.0, 0.0, 0.0))],
            elements=[Element(1, ElementType.TRIANGLE, [], [1, 2, 3])],
        )

        with pytest.raises(mk.UnknownIdError):
            mk.mesh.to_trimesh(mesh)
