"""Unit tests for mesh extrusion."""

import numpy as np
import pytest

from contourpad.core.extruder import (
    build_mesh,
    build_solid_mesh,
    quad_normal,
    to_3d,
    upper_lower,
)
from contourpad.core.thickness import compute_thickness
from contourpad.domain import CrossSection, Point

CANVAS = (100, 100)


def _lens(count: int) -> list[CrossSection]:
    """Cross-sections of a lens shape with distinct midpoints."""
    sections = []
    for i in range(count):
        x = 10.0 + 80.0 * i / (count - 1)
        half = 30.0 * (1.0 - ((x - 50.0) / 40.0) ** 2)
        sections.append(CrossSection(Point(x, 50.0 - half), Point(x, 50.0 + half)))
    return sections


class TestToThreeD:
    """Tests for to_3d."""

    def test_centre_maps_to_origin(self):
        """Test the canvas centre becomes the origin."""
        assert to_3d(Point(50, 50), 0.0, CANVAS) == (0.0, 0.0, 0.0)

    def test_y_flipped(self):
        """Test bitmap y (down) becomes 3D y (up)."""
        x, y, z = to_3d(Point(10, 20), 3.0, (100, 80))
        assert (x, y, z) == (-40.0, 20.0, 3.0)


class TestQuadNormal:
    """Tests for quad_normal."""

    def test_unit_normal(self):
        """Test a square in the xy plane has a z normal."""
        normal = quad_normal([(0, 0, 0), (1, 0, 0), (1, 1, 0), (0, 1, 0)])
        assert normal is not None
        assert np.allclose(normal, (0.0, 0.0, 1.0))

    def test_degenerate(self):
        """Test a zero-area quad has no normal."""
        assert quad_normal([(1, 1, 1)] * 4) is None


class TestBuildMesh:
    """Tests for the strip mesh."""

    @pytest.mark.parametrize("count", [2, 3, 10, 25])
    def test_buffer_sizes(self, count):
        """Test n sections produce 4(n-1) vertices and 6(n-1) indices."""
        sections = _lens(count)
        mesh = build_mesh(sections, compute_thickness(sections), CANVAS)

        assert mesh.vertices.shape == (4 * (count - 1), 3)
        assert mesh.normals.shape == (4 * (count - 1), 3)
        assert mesh.indices.shape == (6 * (count - 1),)
        assert mesh.vertices.dtype == np.float32
        assert mesh.indices.dtype == np.uint32

    def test_indices_in_range(self):
        """Test every index refers to an existing vertex."""
        sections = _lens(12)
        mesh = build_mesh(sections, compute_thickness(sections), CANVAS)
        assert int(mesh.indices.max()) < mesh.vertex_count

    def test_quad_triangulation(self):
        """Test each quad is split into (0, 1, 2) and (0, 2, 3)."""
        sections = _lens(3)
        mesh = build_mesh(sections, compute_thickness(sections), CANVAS)
        assert mesh.indices.tolist() == [0, 1, 2, 0, 2, 3, 4, 5, 6, 4, 6, 7]

    def test_depth_offsets(self):
        """Test quad corners sit at +/- half the thickness."""
        sections = _lens(5)
        thickness = compute_thickness(sections, function="ellipse", min_thickness=1.0)
        mesh = build_mesh(sections, thickness, CANVAS)

        mid = sections[1].midpoint
        expected = thickness.thickness_at(mid) / 2.0
        # second quad starts at section 1
        assert mesh.vertices[4][2] == pytest.approx(expected)
        assert mesh.vertices[5][2] == pytest.approx(-expected)
        assert mesh.vertices[4][0] == pytest.approx(mid.x - 50.0)
        assert mesh.vertices[4][1] == pytest.approx(50.0 - mid.y)

    def test_flat_unit_normals(self):
        """Test each quad shares one unit normal across its corners."""
        sections = _lens(6)
        mesh = build_mesh(sections, compute_thickness(sections), CANVAS)

        lengths = np.linalg.norm(mesh.normals, axis=1)
        assert np.allclose(lengths, 1.0, atol=1e-6)
        for q in range(mesh.vertex_count // 4):
            quad = mesh.normals[4 * q : 4 * q + 4]
            assert np.allclose(quad, quad[0])

    def test_horizontal_strip_normal(self):
        """Test a strip along x has a normal perpendicular to x and z."""
        sections = [CrossSection(Point(x, 40), Point(x, 60)) for x in (10, 30, 50)]
        mesh = build_mesh(sections, compute_thickness(sections), CANVAS)
        assert np.allclose(np.abs(mesh.normals), (0.0, 1.0, 0.0), atol=1e-6)

    def test_degenerate_quad_skipped(self):
        """Test neighbours with the same midpoint emit no quad."""
        sections = _lens(4)
        sections.insert(2, sections[1])
        mesh = build_mesh(sections, compute_thickness(sections), CANVAS)
        assert mesh.vertex_count == 4 * 3

    def test_single_section(self):
        """Test one section gives an empty mesh."""
        sections = _lens(2)[:1]
        mesh = build_mesh(sections, compute_thickness(sections), CANVAS)
        assert mesh.is_empty()
        assert mesh.triangle_count == 0

    def test_does_not_modify_sections(self):
        """Test extrusion leaves its inputs untouched."""
        sections = _lens(5)
        before = list(sections)
        build_mesh(sections, compute_thickness(sections), CANVAS)
        assert sections == before


class TestBuildSolidMesh:
    """Tests for the solid slab mesh."""

    @pytest.mark.parametrize("count", [3, 7])
    def test_buffer_sizes(self, count):
        """Test each section pair contributes four quads."""
        sections = _lens(count)
        mesh = build_solid_mesh(sections, compute_thickness(sections), CANVAS)

        assert mesh.vertex_count == 16 * (count - 1)
        assert mesh.indices.shape == (24 * (count - 1),)

    def test_face_orientation(self):
        """Test front, back and wall normals point outwards."""
        sections = [
            CrossSection(Point(10, 10), Point(10, 30)),
            CrossSection(Point(20, 10), Point(20, 30)),
        ]
        mesh = build_solid_mesh(sections, compute_thickness(sections), CANVAS)

        front, back, upper, lower = (mesh.normals[4 * q] for q in range(4))
        assert np.allclose(front, (0.0, 0.0, 1.0))
        assert np.allclose(back, (0.0, 0.0, -1.0))
        assert np.allclose(upper, (0.0, 1.0, 0.0))
        assert np.allclose(lower, (0.0, -1.0, 0.0))

    def test_bounds_follow_outline(self):
        """Test the slab spans the outline in x and y."""
        sections = _lens(9)
        mesh = build_solid_mesh(sections, compute_thickness(sections), CANVAS)
        lo, hi = mesh.bounds()

        assert lo[0] == pytest.approx(-40.0)
        assert hi[0] == pytest.approx(40.0)
        assert hi[1] == pytest.approx(30.0)
        assert lo[1] == pytest.approx(-30.0)

    def test_flipped_sections_wind_outwards(self):
        """Test swapping top and bottom of every section gives the same slab."""
        sections = _lens(7)
        flipped = [CrossSection(s.bottom, s.top) for s in sections]

        mesh = build_solid_mesh(sections, compute_thickness(sections), CANVAS)
        flipped_mesh = build_solid_mesh(flipped, compute_thickness(flipped), CANVAS)

        assert np.array_equal(flipped_mesh.vertices, mesh.vertices)
        assert np.array_equal(flipped_mesh.indices, mesh.indices)
        front, back = flipped_mesh.normals[0], flipped_mesh.normals[4]
        assert front[2] > 0
        assert back[2] < 0


class TestUpperLower:
    """Tests for upper_lower."""

    def test_keeps_ordered_section(self):
        """Test a section whose top is above its bottom is unchanged."""
        section = CrossSection(Point(5, 10), Point(5, 30))
        assert upper_lower(section) == (Point(5, 10), Point(5, 30))

    def test_swaps_inverted_section(self):
        """Test a section whose top lies below its bottom is swapped."""
        section = CrossSection(Point(5, 30), Point(5, 10))
        assert upper_lower(section) == (Point(5, 10), Point(5, 30))
