"""Core processing algorithms for contourpad.

This module contains the core algorithms for:

- Pixel occupancy sampling
- Radial silhouette scanning (boundary point detection)
- Path ordering and Ramer-Douglas-Peucker simplification
- Contour splitting and cross-section resampling
- Thickness profiles and mesh extrusion

All stage functions are:
- Stateless (configuration is passed explicitly on every call)
- Pure (inputs, including the bitmap, are never modified)
- Synchronous (each stage returns before the next begins)

Key functions:
- is_occupied: Occupancy predicate for one pixel
- detect_boundary_points: Multi-angle silhouette scan
- sort_to_path: Greedy nearest-neighbour ordering
- simplify: Ramer-Douglas-Peucker reduction
- sparsify: Ordering, simplification and closure detection
- split_at_rightmost: Split an outline into two curves at its rightmost point
- generate_cross_sections: Pair curves into cross-sections
- compute_thickness: Prepare thickness evaluation
- build_mesh: Extrude a thickness strip

Key classes:
- RadialScanner: Configured boundary point detector
- ContourPipeline: Runs every stage from bitmap to mesh
"""

from contourpad.core.extruder import build_mesh, build_solid_mesh
from contourpad.core.pipeline import ContourPipeline, PipelineResult
from contourpad.core.resampler import generate_cross_sections, interpolate_y
from contourpad.core.sampler import (
    dilate_manhattan,
    is_occupied,
    occupancy_mask,
    probe_disk,
)
from contourpad.core.scanner import (
    RadialScanner,
    ScanResult,
    ScanStats,
    detect_boundary_points,
)
from contourpad.core.simplifier import (
    perpendicular_distance,
    simplify,
    sort_to_path,
    sparsify,
)
from contourpad.core.splitter import rightmost_index, split_at_rightmost
from contourpad.core.thickness import (
    ThicknessData,
    ThicknessFunctionKind,
    compute_thickness,
    resolve_thickness_function,
    thickness_function,
)

__all__ = [
    # Pipeline
    "ContourPipeline",
    "PipelineResult",
    # Scanner
    "RadialScanner",
    "ScanResult",
    "ScanStats",
    "detect_boundary_points",
    # Sampler
    "dilate_manhattan",
    "is_occupied",
    "occupancy_mask",
    "probe_disk",
    # Simplifier
    "perpendicular_distance",
    "simplify",
    "sort_to_path",
    "sparsify",
    # Splitting and resampling
    "generate_cross_sections",
    "interpolate_y",
    "rightmost_index",
    "split_at_rightmost",
    # Thickness
    "ThicknessData",
    "ThicknessFunctionKind",
    "compute_thickness",
    "resolve_thickness_function",
    "thickness_function",
    # Extrusion
    "build_mesh",
    "build_solid_mesh",
]
