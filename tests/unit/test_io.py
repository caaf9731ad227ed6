"""Unit tests for the image and mesh I/O layer.

Tests for ImageReader, point conversion, MeshWriter and geometry export.
"""

import json
from pathlib import Path

import numpy as np
import pytest
import trimesh
from PIL import Image

from contourpad.config import CanvasConfig, ContourPadSettings, ScanConfig
from contourpad.core import ContourPipeline
from contourpad.core.extruder import build_mesh
from contourpad.core.sampler import occupancy_mask
from contourpad.core.thickness import compute_thickness
from contourpad.domain import CrossSection, Mesh, Point
from contourpad.exceptions import ImageLoadError, ImageTooLargeError, MeshExportError
from contourpad.io import (
    ImageReader,
    MeshWriter,
    PointFormat,
    convert_points,
    fit_to_canvas,
    parse_points,
    validate_points,
    write_geometry_json,
)


@pytest.fixture
def drawing_png(tmp_path):
    """Write a 200x100 PNG with a black block in its middle."""
    image = Image.new("RGB", (200, 100), (255, 255, 255))
    for x in range(50, 150):
        for y in range(25, 75):
            image.putpixel((x, y), (0, 0, 0))
    path = tmp_path / "drawing.png"
    image.save(path)
    return path


@pytest.fixture
def strip_mesh():
    """Build a small strip mesh."""
    sections = [CrossSection(Point(x, 40), Point(x, 60)) for x in (10, 30, 50, 70)]
    return build_mesh(sections, compute_thickness(sections), (100, 100))


class TestImageReader:
    """Tests for ImageReader class."""

    def test_init(self):
        """Test ImageReader initialization."""
        reader = ImageReader(Path("drawing.png"))
        assert reader._image_path == Path("drawing.png")
        assert reader._canvas == CanvasConfig()

    def test_load_nonexistent_file(self):
        """Test loading a nonexistent file raises FileNotFoundError."""
        with pytest.raises(FileNotFoundError):
            ImageReader(Path("nonexistent.png")).load()

    def test_original_size_before_load(self):
        """Test accessing original_size before loading raises RuntimeError."""
        with pytest.raises(RuntimeError, match="Image not loaded"):
            _ = ImageReader(Path("drawing.png")).original_size

    def test_too_large(self, drawing_png):
        """Test files over the size limit are rejected before decoding."""
        reader = ImageReader(drawing_png, canvas=CanvasConfig(max_file_bytes=10))
        with pytest.raises(ImageTooLargeError) as exc_info:
            reader.load()
        assert exc_info.value.limit_bytes == 10

    def test_not_an_image(self, tmp_path):
        """Test undecodable files raise ImageLoadError."""
        path = tmp_path / "notes.png"
        path.write_text("definitely not a PNG")
        with pytest.raises(ImageLoadError) as exc_info:
            ImageReader(path).load()
        assert exc_info.value.path == str(path)

    def test_fit_to_canvas(self, drawing_png):
        """Test the image is scaled to fit and centred on the canvas."""
        reader = ImageReader(drawing_png, canvas=CanvasConfig(width=400, height=300))
        bitmap = reader.load()

        assert bitmap.size == (400, 300)
        assert reader.original_size == (200, 100)
        # scaled 2x to 400x200, centred with 50px bands above and below
        mask = occupancy_mask(bitmap)
        assert not mask[:50].any()
        assert not mask[250:].any()
        assert mask[150, 200]
        assert not mask[150, 50]

    def test_no_fit(self, drawing_png):
        """Test the image keeps its own size when fitting is off."""
        bitmap = ImageReader(drawing_png, fit=False).load()
        assert bitmap.size == (200, 100)
        assert bitmap.pixel(100, 50) == (0, 0, 0, 255)
        assert bitmap.pixel(10, 10) == (255, 255, 255, 255)

    def test_transparency_becomes_white(self, tmp_path):
        """Test transparent areas end up as opaque background."""
        image = Image.new("RGBA", (20, 20), (0, 0, 0, 0))
        image.putpixel((10, 10), (255, 0, 0, 255))
        path = tmp_path / "sprite.png"
        image.save(path)

        bitmap = ImageReader(path, fit=False).load()

        assert bitmap.pixel(0, 0) == (255, 255, 255, 255)
        assert bitmap.pixel(10, 10) == (255, 0, 0, 255)

    def test_bitmap_read_only(self, drawing_png):
        """Test loaded bitmaps cannot be modified."""
        bitmap = ImageReader(drawing_png, fit=False).load()
        assert not bitmap.pixels.flags.writeable


class TestFitToCanvas:
    """Tests for fit_to_canvas."""

    def test_tall_image(self):
        """Test a tall image is pillarboxed."""
        image = Image.new("L", (50, 200), 0)
        canvas = fit_to_canvas(image, 200, 100)

        assert canvas.size == (200, 100)
        assert canvas.mode == "RGBA"
        pixels = np.asarray(canvas)
        # scaled to 25x100 at x offset 87
        assert tuple(pixels[50, 10]) == (255, 255, 255, 255)
        assert tuple(pixels[50, 100]) == (0, 0, 0, 255)


class TestPoints:
    """Tests for point format conversion."""

    POINTS = [Point(1, 2), Point(3.5, -4)]

    def test_object_format(self):
        """Test conversion to dictionaries."""
        assert convert_points(self.POINTS, "object") == [{"x": 1, "y": 2}, {"x": 3.5, "y": -4}]

    def test_string_format(self):
        """Test conversion to "x,y" strings."""
        assert convert_points(self.POINTS, PointFormat.STRING) == ["1,2", "3.5,-4"]

    def test_array_format(self):
        """Test conversion to pairs."""
        assert convert_points(self.POINTS, "array") == [[1, 2], [3.5, -4]]

    @pytest.mark.parametrize("fmt", list(PointFormat))
    def test_parse_inverts_convert(self, fmt):
        """Test parsing restores the points."""
        assert parse_points(convert_points(self.POINTS, fmt), fmt) == self.POINTS

    def test_unknown_format(self):
        """Test an unknown format name raises ValueError."""
        with pytest.raises(ValueError):
            convert_points(self.POINTS, "svg")

    @pytest.mark.parametrize(
        "data, fmt",
        [
            ([{"x": 1}], "object"),
            (["1;2"], "string"),
            ([[1, 2, 3]], "array"),
            ([], "object"),
            ("1,2", "string"),
            (None, "array"),
        ],
    )
    def test_validate_rejects(self, data, fmt):
        """Test malformed point lists are rejected."""
        assert not validate_points(data, fmt)

    def test_validate_accepts(self):
        """Test well-formed point lists are accepted."""
        assert validate_points([{"x": 0, "y": 0}])
        assert validate_points(["10,-2.5"], "string")
        assert validate_points([(1, 2)], "array")


class TestMeshWriter:
    """Tests for MeshWriter class."""

    def test_get_mesh_path(self):
        """Test default mesh path generation."""
        assert MeshWriter.get_mesh_path(Path("/tmp/fish.png")) == Path("/tmp/fish-mesh.stl")
        assert MeshWriter.get_mesh_path(Path("fish.jpg"), "obj") == Path("fish-mesh.obj")

    def test_file_type(self, strip_mesh):
        """Test the format follows the suffix."""
        assert MeshWriter(strip_mesh, Path("out.STL")).file_type == "stl"

    def test_to_trimesh(self, strip_mesh):
        """Test conversion keeps every vertex and face."""
        tm = MeshWriter(strip_mesh, Path("out.stl")).to_trimesh()
        assert len(tm.vertices) == strip_mesh.vertex_count
        assert len(tm.faces) == strip_mesh.triangle_count

    @pytest.mark.parametrize("suffix", ["stl", "obj", "ply"])
    def test_save(self, tmp_path, strip_mesh, suffix):
        """Test the mesh round-trips through trimesh."""
        path = tmp_path / f"strip.{suffix}"
        MeshWriter(strip_mesh, path).save()

        assert path.exists()
        loaded = trimesh.load(path, force="mesh")
        assert len(loaded.faces) == strip_mesh.triangle_count

    def test_empty_mesh(self, tmp_path):
        """Test exporting an empty mesh raises MeshExportError."""
        with pytest.raises(MeshExportError, match="no vertices"):
            MeshWriter(Mesh(), tmp_path / "empty.stl").save()

    def test_unsupported_format(self, tmp_path, strip_mesh):
        """Test unknown suffixes raise MeshExportError."""
        with pytest.raises(MeshExportError, match="unsupported format"):
            MeshWriter(strip_mesh, tmp_path / "strip.dwg").save()

    def test_unwritable_path(self, tmp_path, strip_mesh):
        """Test a missing directory raises MeshExportError."""
        with pytest.raises(MeshExportError):
            MeshWriter(strip_mesh, tmp_path / "missing" / "strip.stl").save()


class TestWriteGeometryJson:
    """Tests for write_geometry_json."""

    def test_payload(self, tmp_path, make_rectangle):
        """Test every pipeline output is written in the chosen format."""
        bitmap = make_rectangle(120, 90, 30, 30, 90, 60)
        settings = ContourPadSettings(scan=ScanConfig(grid_step=15))
        result = ContourPipeline(settings, configure=False).run(bitmap)

        path = tmp_path / "trace.json"
        write_geometry_json(result, path, "string")
        payload = json.loads(path.read_text())

        assert payload["format"] == "string"
        assert len(payload["boundary_points"]) == len(result.boundary_points)
        assert payload["path"]["is_closed"] == result.path.is_closed
        assert payload["path"]["points"][0] == result.path[0].to_key()
        assert len(payload["split"]["first"]) == len(result.split.first)
        assert len(payload["cross_sections"]) == len(result.cross_sections)
        assert all(len(pair) == 2 for pair in payload["cross_sections"])
        assert payload["thickness"]["function"] == "fish"
        assert len(payload["thickness"]["bounds"]) == 4
