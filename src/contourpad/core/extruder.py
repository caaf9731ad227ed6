"""Mesh extrusion of thickness-annotated cross-sections.

Two mesh shapes are produced:

- build_mesh: a strip along the silhouette's center curve. Every pair of
  adjacent cross-sections becomes one quad whose corners sit at the two
  midpoints, offset to +/- thickness / 2 in z.
- build_solid_mesh: a closed slab. Each pair contributes a front and a back
  face spanning top to bottom, plus an upper and a lower wall.

2D points are centred on the canvas midpoint and their y axis is flipped to point
up, matching the usual 3D convention. Quads carry one flat normal on all
four vertices and are split into two triangles. Quads with zero area are
skipped.
"""

import logging
from collections.abc import Sequence

import numpy as np

from contourpad.core.thickness import ThicknessData
from contourpad.domain import CrossSection, Mesh, Point

logger = logging.getLogger(__name__)

_AREA_EPSILON = 1e-9

Vec3 = tuple[float, float, float]


def to_3d(point: Point, z: float, canvas_size: tuple[int, int]) -> Vec3:
    """Project a canvas point into 3D space.

    Args:
        point: Point in bitmap coordinates
        z: Depth coordinate
        canvas_size: Canvas (width, height)

    Returns:
        (x, y, z) centred on the canvas midpoint with y pointing up
    """
    width, height = canvas_size
    return (point.x - width / 2.0, height / 2.0 - point.y, z)


def quad_normal(quad: Sequence[Vec3]) -> np.ndarray | None:
    """Unit normal of a planar quad, or None if it has no area.

    Uses the cross product of the two diagonals, which points the same way
    as the cross product of the first corner's edges but stays defined when
    two corners coincide.
    """
    v0, v1, v2, v3 = (np.asarray(v, dtype=np.float64) for v in quad)
    normal = np.cross(v2 - v0, v3 - v1)
    length = float(np.linalg.norm(normal))
    if length < _AREA_EPSILON:
        return None
    return normal / length


class _MeshBuilder:
    """Accumulates flat-shaded quads into mesh buffers."""

    def __init__(self) -> None:
        self.vertices: list[Vec3] = []
        self.normals: list[np.ndarray] = []
        self.indices: list[int] = []
        self.skipped = 0

    def add_quad(self, quad: Sequence[Vec3]) -> bool:
        normal = quad_normal(quad)
        if normal is None:
            self.skipped += 1
            return False

        base = len(self.vertices)
        self.vertices.extend(quad)
        self.normals.extend([normal] * 4)
        self.indices.extend([base, base + 1, base + 2, base, base + 2, base + 3])
        return True

    def build(self) -> Mesh:
        if not self.vertices:
            return Mesh()
        return Mesh(
            vertices=np.asarray(self.vertices, dtype=np.float32),
            normals=np.asarray(self.normals, dtype=np.float32),
            indices=np.asarray(self.indices, dtype=np.uint32),
        )


def build_mesh(
    cross_sections: Sequence[CrossSection],
    thickness: ThicknessData,
    canvas_size: tuple[int, int],
) -> Mesh:
    """Extrude cross-sections into a thickness strip.

    For n cross-sections without degenerate neighbours this emits 4(n-1)
    vertices and 6(n-1) indices.

    Args:
        cross_sections: Cross-sections from left to right
        thickness: Thickness evaluation data
        canvas_size: Canvas (width, height) used to centre the mesh

    Returns:
        Strip mesh
    """
    builder = _MeshBuilder()

    for a, b in zip(cross_sections, cross_sections[1:]):
        mid_a = a.midpoint
        mid_b = b.midpoint
        half_a = thickness.thickness_at(mid_a) / 2.0
        half_b = thickness.thickness_at(mid_b) / 2.0

        builder.add_quad(
            (
                to_3d(mid_a, half_a, canvas_size),
                to_3d(mid_a, -half_a, canvas_size),
                to_3d(mid_b, -half_b, canvas_size),
                to_3d(mid_b, half_b, canvas_size),
            )
        )

    mesh = builder.build()
    logger.debug(
        "Built strip mesh: %d vertices, %d triangles, %d degenerate quads skipped",
        mesh.vertex_count,
        mesh.triangle_count,
        builder.skipped,
    )
    return mesh


def upper_lower(section: CrossSection) -> tuple[Point, Point]:
    """Return a cross-section's points ordered (upper, lower) in bitmap space.

    Which split curve runs along the top depends on the direction the outline
    was walked, so the order of ``top`` and ``bottom`` is not fixed.
    """
    if section.top.y > section.bottom.y:
        return section.bottom, section.top
    return section.top, section.bottom


def build_solid_mesh(
    cross_sections: Sequence[CrossSection],
    thickness: ThicknessData,
    canvas_size: tuple[int, int],
) -> Mesh:
    """Extrude cross-sections into a closed slab.

    Each adjacent pair yields four quads (front, back, upper wall, lower
    wall), i.e. up to 16 vertices and 24 indices. Faces wind outwards
    whichever split curve the cross-sections took their top point from.

    Args:
        cross_sections: Cross-sections from left to right
        thickness: Thickness evaluation data
        canvas_size: Canvas (width, height) used to centre the mesh

    Returns:
        Solid mesh
    """
    builder = _MeshBuilder()

    for a, b in zip(cross_sections, cross_sections[1:]):
        half_a = thickness.thickness_at(a.midpoint) / 2.0
        half_b = thickness.thickness_at(b.midpoint) / 2.0
        a_top, a_bottom = upper_lower(a)
        b_top, b_bottom = upper_lower(b)

        a_top_front = to_3d(a_top, half_a, canvas_size)
        a_top_back = to_3d(a_top, -half_a, canvas_size)
        a_bottom_front = to_3d(a_bottom, half_a, canvas_size)
        a_bottom_back = to_3d(a_bottom, -half_a, canvas_size)
        b_top_front = to_3d(b_top, half_b, canvas_size)
        b_top_back = to_3d(b_top, -half_b, canvas_size)
        b_bottom_front = to_3d(b_bottom, half_b, canvas_size)
        b_bottom_back = to_3d(b_bottom, -half_b, canvas_size)

        # front
        builder.add_quad((a_top_front, a_bottom_front, b_bottom_front, b_top_front))
        # back
        builder.add_quad((a_top_back, b_top_back, b_bottom_back, a_bottom_back))
        # upper wall
        builder.add_quad((a_top_front, b_top_front, b_top_back, a_top_back))
        # lower wall
        builder.add_quad((a_bottom_back, b_bottom_back, b_bottom_front, a_bottom_front))

    mesh = builder.build()
    logger.debug(
        "Built solid mesh: %d vertices, %d triangles, %d degenerate quads skipped",
        mesh.vertex_count,
        mesh.triangle_count,
        builder.skipped,
    )
    return mesh
