"""Domain models for contourpad.

This module contains the value types passed between pipeline stages.
All models are designed to be:

- Immutable where possible (using frozen dataclasses)
- Created fresh per pipeline run, with no identity across runs
- Independent of how the canvas was populated (drawn or imported)

Key classes:
- Point: A 2D point in bitmap space
- BoundingBox: Axis-aligned extent of a point set
- OrderedPath: A traced outline with an explicit closure flag
- SplitResult: The two boundary curves of a silhouette
- CrossSection: A top/bottom point pair at one x position
- Bitmap: Read-only RGBA canvas
- Mesh: Vertex, normal and index buffers
"""

from contourpad.domain.bitmap import Bitmap
from contourpad.domain.geometry import (
    BoundingBox,
    CrossSection,
    OrderedPath,
    Point,
    SplitResult,
    as_points,
)
from contourpad.domain.mesh import Mesh

__all__: list[str] = [
    # Geometry
    "Point",
    "BoundingBox",
    "OrderedPath",
    "SplitResult",
    "CrossSection",
    "as_points",
    # Raster and mesh buffers
    "Bitmap",
    "Mesh",
]
