"""Image and mesh I/O layer for contourpad.

This module handles reading artwork into canvas bitmaps using Pillow and
writing meshes using trimesh. It provides a clean abstraction layer between
those libraries and the domain models.

Key responsibilities:
- Load raster images and letterbox them onto the canvas
- Convert point sequences between object, string and array formats
- Export meshes (STL, OBJ, PLY, GLB) and traced geometry (JSON)

Key classes:
- ImageReader: Load images as bitmaps
- MeshWriter: Save meshes
"""

from contourpad.io.points import (
    PointFormat,
    convert_points,
    parse_points,
    validate_points,
)
from contourpad.io.reader import ImageReader, fit_to_canvas
from contourpad.io.writer import MeshWriter, write_geometry_json

__all__ = [
    "ImageReader",
    "MeshWriter",
    "PointFormat",
    "convert_points",
    "fit_to_canvas",
    "parse_points",
    "validate_points",
    "write_geometry_json",
]
