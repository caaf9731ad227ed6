"""Radial silhouette scanning.

The scanner sweeps families of parallel scan lines across the canvas, one
family per angle in [0, 180). Along each line it samples at unit steps and
records the first and the last sample whose Manhattan-disk probe touches an
occupied pixel. Taken over all angles these hits bound the occupied region
from every direction, approximating its outer silhouette without any
gradient-based edge detection.

Cost is dominated by the nested angle x scan line x sample loops, roughly
(180 / step) * (diagonal / step) * diagonal probes. Each angle's scan lines
are evaluated as numpy arrays against a pre-dilated occupancy mask, a bounded
chunk of lines at a time.
"""

import logging
import math
import time
from collections.abc import Callable
from dataclasses import dataclass, field

import numpy as np

from contourpad.config import ScanConfig
from contourpad.core.sampler import (
    DEFAULT_WHITE_THRESHOLD,
    dilate_manhattan,
    occupancy_mask,
)
from contourpad.domain import Bitmap, Point

logger = logging.getLogger(__name__)

ProgressCallback = Callable[[int, int, float], None]

# Upper bound on samples held in memory at once while scanning one angle
_MAX_SAMPLES_PER_CHUNK = 1 << 20


@dataclass
class AngleTiming:
    """Timing record for one scan angle.

    Attributes:
        angle: Scan direction in degrees
        duration_ms: Time spent on this angle
        new_points: Boundary points first found at this angle
        scan_lines: Number of scan lines cast
    """

    angle: float
    duration_ms: float
    new_points: int
    scan_lines: int


@dataclass
class ScanStats:
    """Performance statistics for one detection run."""

    angle_timings: list[AngleTiming] = field(default_factory=list)
    total_time_ms: float = 0.0
    point_count: int = 0

    @property
    def scan_lines(self) -> int:
        return sum(t.scan_lines for t in self.angle_timings)

    @property
    def slowest_angle(self) -> AngleTiming | None:
        if not self.angle_timings:
            return None
        return max(self.angle_timings, key=lambda t: t.duration_ms)

    @property
    def fastest_angle(self) -> AngleTiming | None:
        if not self.angle_timings:
            return None
        return min(self.angle_timings, key=lambda t: t.duration_ms)

    @property
    def points_per_second(self) -> float:
        if self.total_time_ms <= 0:
            return 0.0
        return self.point_count / self.total_time_ms * 1000.0


@dataclass
class ScanResult:
    """Boundary points found by a scan, in discovery order."""

    points: list[Point]
    stats: ScanStats

    def __len__(self) -> int:
        return len(self.points)


def _round_half_up(values: np.ndarray) -> np.ndarray:
    return np.floor(values + 0.5).astype(np.int64)


def scan_angle(
    probe: np.ndarray,
    width: int,
    height: int,
    angle_degrees: float,
    grid_step: float,
    radius: int,
) -> tuple[list[tuple[int, int]], int]:
    """Cast one family of parallel scan lines.

    Args:
        probe: Dilated occupancy mask from ``dilate_manhattan``
        width: Canvas width
        height: Canvas height
        angle_degrees: Direction of the scan lines
        grid_step: Spacing between scan lines in pixels
        radius: Probe radius the mask was dilated with

    Returns:
        Tuple of (hits, scan_line_count). Hits hold the first and last probe
        hit of every line that touched ink, in line order; a line whose first
        and last hit coincide contributes one entry.
    """
    radians = math.radians(angle_degrees)
    dir_x, dir_y = math.cos(radians), math.sin(radians)
    perp_x, perp_y = -dir_y, dir_x

    corners = ((0, 0), (width, 0), (width, height), (0, height))
    projections = [x * perp_x + y * perp_y for x, y in corners]
    margin = grid_step * 2
    min_proj = min(projections) - margin
    max_proj = max(projections) + margin

    line_count = int(math.floor((max_proj - min_proj) / grid_step)) + 1
    offsets = min_proj + grid_step * np.arange(line_count)

    scan_range = math.hypot(width, height)
    dists = -scan_range + np.arange(int(math.floor(2 * scan_range)) + 1)

    found: list[tuple[int, int]] = []
    chunk = max(1, _MAX_SAMPLES_PER_CHUNK // len(dists))
    for begin in range(0, line_count, chunk):
        found.extend(
            _scan_lines(probe, offsets[begin : begin + chunk], dists, dir_x, dir_y, radius)
        )

    return found, line_count


def _scan_lines(
    probe: np.ndarray,
    offsets: np.ndarray,
    dists: np.ndarray,
    dir_x: float,
    dir_y: float,
    radius: int,
) -> list[tuple[int, int]]:
    perp_x, perp_y = -dir_y, dir_x
    cx = _round_half_up(offsets[:, None] * perp_x + dists[None, :] * dir_x)
    cy = _round_half_up(offsets[:, None] * perp_y + dists[None, :] * dir_y)

    cols = cx + radius
    rows = cy + radius
    valid = (cols >= 0) & (cols < probe.shape[1]) & (rows >= 0) & (rows < probe.shape[0])

    hits = np.zeros(cx.shape, dtype=bool)
    hits[valid] = probe[rows[valid], cols[valid]]

    first = hits.argmax(axis=1)
    last = hits.shape[1] - 1 - hits[:, ::-1].argmax(axis=1)

    found: list[tuple[int, int]] = []
    for line in np.flatnonzero(hits.any(axis=1)):
        first_hit = (int(cx[line, first[line]]), int(cy[line, first[line]]))
        last_hit = (int(cx[line, last[line]]), int(cy[line, last[line]]))
        found.append(first_hit)
        if last_hit != first_hit:
            found.append(last_hit)

    return found


def detect_boundary_points(
    bitmap: Bitmap,
    grid_step: float = 5,
    probe_radius: int = 2,
    white_threshold: int = DEFAULT_WHITE_THRESHOLD,
    progress_callback: ProgressCallback | None = None,
) -> ScanResult:
    """Scan a bitmap from every direction and collect its boundary points.

    Deterministic for a given bitmap and parameters. A canvas without ink
    yields an empty result.

    Args:
        bitmap: Canvas to scan (never modified)
        grid_step: Angular step in degrees and scan-line spacing in pixels
        probe_radius: Manhattan radius of the disk probed at each sample
        white_threshold: Background threshold for the occupancy predicate
        progress_callback: Optional callback(current, total, angle) per angle

    Returns:
        ScanResult with unique integer boundary points in discovery order

    Raises:
        ValueError: If grid_step is not positive
    """
    if grid_step <= 0:
        raise ValueError(f"grid_step must be positive, got {grid_step}")

    start = time.perf_counter()
    stats = ScanStats()
    unique: dict[tuple[int, int], None] = {}

    width, height = bitmap.size
    if width == 0 or height == 0:
        return ScanResult(points=[], stats=stats)

    probe = dilate_manhattan(occupancy_mask(bitmap, white_threshold), probe_radius)
    total_angles = math.ceil(180 / grid_step)

    angle = 0.0
    count = 0
    while angle < 180:
        angle_start = time.perf_counter()
        before = len(unique)

        hits, line_count = scan_angle(probe, width, height, angle, grid_step, probe_radius)
        for hit in hits:
            unique.setdefault(hit, None)

        duration_ms = (time.perf_counter() - angle_start) * 1000
        stats.angle_timings.append(
            AngleTiming(
                angle=angle,
                duration_ms=duration_ms,
                new_points=len(unique) - before,
                scan_lines=line_count,
            )
        )
        count += 1
        if progress_callback is not None:
            progress_callback(count, total_angles, angle)

        angle += grid_step

    stats.total_time_ms = (time.perf_counter() - start) * 1000
    stats.point_count = len(unique)

    logger.debug(
        "Radial scan finished: %d angles, %d scan lines, %d points in %.1fms",
        count,
        stats.scan_lines,
        stats.point_count,
        stats.total_time_ms,
    )

    return ScanResult(
        points=[Point(float(x), float(y)) for x, y in unique],
        stats=stats,
    )


class RadialScanner:
    """Detects silhouette boundary points with a multi-angle scan.

    The scanner holds only its immutable configuration, so one instance can
    serve any number of independent bitmaps.

    Example:
        scanner = RadialScanner(ScanConfig(grid_step=10))
        result = scanner.detect(bitmap)
        print(len(result.points))
    """

    def __init__(self, config: ScanConfig | None = None) -> None:
        self.config = config or ScanConfig()

    def detect(
        self,
        bitmap: Bitmap,
        progress_callback: ProgressCallback | None = None,
    ) -> ScanResult:
        """Detect boundary points of the bitmap's silhouette.

        Args:
            bitmap: Canvas to scan
            progress_callback: Optional callback(current, total, angle)

        Returns:
            ScanResult with points and timing statistics
        """
        return detect_boundary_points(
            bitmap,
            grid_step=self.config.grid_step,
            probe_radius=self.config.probe_radius,
            white_threshold=self.config.white_threshold,
            progress_callback=progress_callback,
        )
