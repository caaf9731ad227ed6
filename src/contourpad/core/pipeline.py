"""Pipeline orchestration from bitmap to mesh.

This module chains the stages of the contour pipeline:

    bitmap -> boundary points -> ordered/simplified path -> split curves
           -> cross-sections -> thickness data -> mesh

Every run recomputes everything from the given bitmap snapshot; nothing is
cached between runs and the bitmap is never modified.

Key components:
- PipelineResult: All intermediate and final outputs of one run
- ContourPipeline: Runs the stages with timing and structured logging
"""

import time
from collections.abc import Callable
from dataclasses import dataclass, field
from typing import TypeVar

import structlog

from contourpad.config import ContourPadSettings, MeshMode
from contourpad.core.extruder import build_mesh, build_solid_mesh
from contourpad.core.resampler import generate_cross_sections
from contourpad.core.scanner import ProgressCallback, RadialScanner, ScanStats
from contourpad.core.simplifier import sparsify
from contourpad.core.splitter import split_at_rightmost
from contourpad.core.thickness import ThicknessData, compute_thickness
from contourpad.domain import Bitmap, CrossSection, Mesh, OrderedPath, Point, SplitResult
from contourpad.exceptions import EmptySilhouetteError
from contourpad.utils import PipelineLogger, PipelineStats, configure_logging

T = TypeVar("T")


@dataclass
class PipelineResult:
    """Outputs of every pipeline stage for one bitmap.

    Attributes:
        boundary_points: Unordered points found by the radial scan
        path: Ordered, simplified outline
        split: The two boundary curves meeting at the rightmost point
        cross_sections: Paired cross-sections from left to right
        thickness: Thickness evaluation data
        mesh: Extruded mesh
        scan_stats: Timing details of the scan
        stats: Counts and per-stage timings
    """

    boundary_points: list[Point]
    path: OrderedPath
    split: SplitResult
    cross_sections: list[CrossSection]
    thickness: ThicknessData
    mesh: Mesh
    scan_stats: ScanStats = field(default_factory=ScanStats)
    stats: PipelineStats = field(default_factory=PipelineStats)


class ContourPipeline:
    """Runs the full contour-to-mesh pipeline.

    Stateless between runs apart from its configuration and logger, so one
    instance can process any number of bitmaps.

    Example:
        settings = ContourPadSettings()
        pipeline = ContourPipeline(settings)
        result = pipeline.run(bitmap)
        print(result.mesh.vertex_count)
    """

    def __init__(self, config: ContourPadSettings, configure: bool = True) -> None:
        """Initialize the pipeline with configuration.

        Args:
            config: ContourPad settings for every stage
            configure: Set up logging handlers from ``config.logging``
        """
        self.config = config
        if configure:
            self.logger = configure_logging(
                log_file=config.logging.log_file,
                console_level=config.logging.log_level,
                file_level=config.logging.file_log_level,
                quiet=config.logging.quiet,
            )
        else:
            self.logger = structlog.get_logger("contourpad")
        self.pipeline_logger = PipelineLogger(self.logger)
        self.scanner = RadialScanner(config.scan)

    def _timed(self, stage: str, func: Callable[[], T], **counts: Callable[[T], int]) -> T:
        start = time.perf_counter()
        result = func()
        duration_ms = (time.perf_counter() - start) * 1000
        self.pipeline_logger.log_stage_complete(
            stage,
            duration_ms,
            **{name: counter(result) for name, counter in counts.items()},
        )
        return result

    def run(
        self,
        bitmap: Bitmap,
        progress_callback: ProgressCallback | None = None,
    ) -> PipelineResult:
        """Process a bitmap into a mesh.

        Args:
            bitmap: Canvas snapshot to trace
            progress_callback: Optional callback(current, total, angle) for
                scan progress

        Returns:
            PipelineResult with every intermediate output

        Raises:
            EmptySilhouetteError: If the canvas holds no ink
        """
        stats = self.pipeline_logger.reset()
        stats.start_time = time.time()
        self.pipeline_logger.log_run_start(bitmap.width, bitmap.height)

        try:
            scan = self._timed(
                "scan",
                lambda: self.scanner.detect(bitmap, progress_callback=progress_callback),
                points=len,
            )
            for timing in scan.stats.angle_timings:
                self.pipeline_logger.log_scan_angle(
                    timing.angle, timing.new_points, timing.duration_ms
                )
            if not scan.points:
                raise EmptySilhouetteError(bitmap.width, bitmap.height)
            stats.boundary_points = len(scan.points)

            path = self._timed(
                "simplify",
                lambda: sparsify(scan.points, self.config.simplify.tolerance),
                points=len,
            )
            stats.path_points = len(path)
            stats.path_closed = path.is_closed

            split = self._timed("split", lambda: split_at_rightmost(path))

            cross_sections = self._timed(
                "resample",
                lambda: generate_cross_sections(
                    split.first,
                    split.second,
                    self.config.cross_section.tolerance,
                ),
                sections=len,
            )
            stats.cross_sections = len(cross_sections)

            thickness_config = self.config.thickness
            thickness = self._timed(
                "thickness",
                lambda: compute_thickness(
                    cross_sections,
                    function=thickness_config.function,
                    max_thickness=thickness_config.max_thickness,
                    min_thickness=thickness_config.min_thickness,
                    close_distance=thickness_config.close_distance,
                ),
            )
            if thickness.used_fallback:
                self.pipeline_logger.log_thickness_fallback(
                    thickness.requested_function,
                    thickness.function.value,
                )

            extrude = build_solid_mesh if self.config.mesh.mode is MeshMode.SOLID else build_mesh
            mesh = self._timed(
                "extrude",
                lambda: extrude(cross_sections, thickness, bitmap.size),
                vertices=lambda m: m.vertex_count,
            )
            stats.vertices = mesh.vertex_count
            stats.triangles = mesh.triangle_count

        except Exception as e:
            self.pipeline_logger.log_run_error(e)
            raise

        stats.end_time = time.time()
        self.pipeline_logger.log_run_complete()

        return PipelineResult(
            boundary_points=scan.points,
            path=path,
            split=split,
            cross_sections=cross_sections,
            thickness=thickness,
            mesh=mesh,
            scan_stats=scan.stats,
            stats=stats,
        )
