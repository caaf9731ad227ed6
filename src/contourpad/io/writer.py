"""Writers for meshes and traced geometry.

This module provides MeshWriter, which exports meshes through trimesh, and
write_geometry_json, which dumps the 2D outputs of a pipeline run for
drawing collaborators.
"""

import json
from pathlib import Path
from typing import TYPE_CHECKING

import trimesh

from contourpad.domain import Mesh
from contourpad.exceptions import MeshExportError
from contourpad.io.points import PointFormat, convert_points

if TYPE_CHECKING:
    from contourpad.core.pipeline import PipelineResult

SUPPORTED_FORMATS = ("stl", "obj", "ply", "glb")


class MeshWriter:
    """Writes meshes to disk.

    Example:
        writer = MeshWriter(mesh, Path("drawing.stl"))
        writer.save()
    """

    def __init__(self, mesh: Mesh, output_path: Path) -> None:
        """Initialize the mesh writer.

        Args:
            mesh: Mesh to export
            output_path: Destination file; the suffix picks the format
        """
        self._mesh = mesh
        self._output_path = output_path

    @property
    def file_type(self) -> str:
        return self._output_path.suffix.lower().lstrip(".")

    def to_trimesh(self) -> trimesh.Trimesh:
        """Convert to a trimesh object without merging or reordering vertices."""
        return trimesh.Trimesh(
            vertices=self._mesh.vertices,
            faces=self._mesh.faces,
            vertex_normals=self._mesh.normals,
            process=False,
        )

    def save(self) -> None:
        """Export the mesh.

        Raises:
            MeshExportError: If the mesh is empty, the format is unsupported,
                or the file cannot be written
        """
        path = str(self._output_path)
        if self._mesh.is_empty():
            raise MeshExportError(path, "mesh has no vertices")
        if self.file_type not in SUPPORTED_FORMATS:
            raise MeshExportError(
                path,
                f"unsupported format '{self.file_type}' (use one of {', '.join(SUPPORTED_FORMATS)})",
            )

        try:
            self.to_trimesh().export(path, file_type=self.file_type)
        except (OSError, ValueError) as e:
            raise MeshExportError(path, str(e)) from e

    @staticmethod
    def get_mesh_path(input_path: Path, file_type: str = "stl") -> Path:
        """Generate the default mesh path for an input image.

        Converts: drawing.png -> drawing-mesh.stl

        Args:
            input_path: Source image path
            file_type: Mesh format extension

        Returns:
            Path next to the input with a -mesh suffix
        """
        return input_path.parent / f"{input_path.stem}-mesh.{file_type}"


def write_geometry_json(
    result: "PipelineResult",
    output_path: Path,
    fmt: PointFormat | str = PointFormat.OBJECT,
) -> None:
    """Dump boundary points, outline and cross-sections as JSON.

    Args:
        result: Pipeline run to export
        output_path: Destination JSON file
        fmt: Point format used for every point list

    Raises:
        OSError: If the file cannot be written
    """
    payload = {
        "format": PointFormat(fmt).value,
        "boundary_points": convert_points(result.boundary_points, fmt),
        "path": {
            "points": convert_points(result.path.points, fmt),
            "is_closed": result.path.is_closed,
        },
        "split": {
            "first": convert_points(result.split.first, fmt),
            "second": convert_points(result.split.second, fmt),
        },
        "cross_sections": [
            convert_points([section.top, section.bottom], fmt)
            for section in result.cross_sections
        ],
        "thickness": {
            "function": result.thickness.function.value,
            "max_thickness": result.thickness.max_thickness,
            "min_thickness": result.thickness.min_thickness,
            "bounds": list(result.thickness.bounds.to_tuple()),
        },
    }
    output_path.write_text(json.dumps(payload, indent=2), encoding="utf-8")
