"""Triangle mesh buffers produced by extrusion."""

from dataclasses import dataclass, field

import numpy as np


def _empty_vec3() -> np.ndarray:
    return np.zeros((0, 3), dtype=np.float32)


@dataclass
class Mesh:
    """Flat vertex, normal and index buffers.

    Rebuilt from scratch on every pipeline run; never updated in place.

    Attributes:
        vertices: float32 array of shape (N, 3)
        normals: float32 array of shape (N, 3), one normal per vertex
        indices: uint32 array of shape (M,), three entries per triangle
    """

    vertices: np.ndarray = field(default_factory=_empty_vec3)
    normals: np.ndarray = field(default_factory=_empty_vec3)
    indices: np.ndarray = field(default_factory=lambda: np.zeros(0, dtype=np.uint32))

    @property
    def vertex_count(self) -> int:
        return int(self.vertices.shape[0])

    @property
    def triangle_count(self) -> int:
        return int(self.indices.shape[0] // 3)

    @property
    def faces(self) -> np.ndarray:
        """Triangle indices reshaped to (M/3, 3)."""
        return self.indices.reshape(-1, 3)

    def is_empty(self) -> bool:
        return self.vertex_count == 0

    def bounds(self) -> tuple[np.ndarray, np.ndarray]:
        """Return (min_corner, max_corner) of the vertex cloud.

        Raises:
            ValueError: If the mesh has no vertices
        """
        if self.is_empty():
            raise ValueError("Empty mesh has no bounds")
        return self.vertices.min(axis=0), self.vertices.max(axis=0)
