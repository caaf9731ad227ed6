"""Path ordering and simplification.

Turns the scanner's unordered boundary points into a single outline:

- sort_to_path: greedy nearest-neighbour ordering starting from the leftmost
  point (ties broken by smallest y)
- simplify: Ramer-Douglas-Peucker reduction against a pixel tolerance
- sparsify: ordering, simplification and closure detection in one call

The nearest-neighbour ordering is a heuristic. It can zig-zag where several
points are almost equally close and gives no guarantee of minimal length.
"""

import logging
import math
from collections.abc import Sequence

import numpy as np

from contourpad.domain import OrderedPath, Point
from contourpad.exceptions import EmptyPathError

logger = logging.getLogger(__name__)


def perpendicular_distance(point: Point, line_start: Point, line_end: Point) -> float:
    """Distance from a point to the line through two other points.

    A degenerate line (start == end) gives 0 for every point.

    Args:
        point: The point to measure
        line_start: First point on the line
        line_end: Second point on the line

    Returns:
        Perpendicular distance in pixels

    Examples:
        >>> perpendicular_distance(Point(1.0, 1.0), Point(0.0, 0.0), Point(2.0, 0.0))
        1.0
        >>> perpendicular_distance(Point(5.0, 5.0), Point(1.0, 1.0), Point(1.0, 1.0))
        0.0
    """
    dx = line_end.x - line_start.x
    dy = line_end.y - line_start.y
    length = math.hypot(dx, dy)
    if length == 0.0:
        return 0.0

    cross = dy * point.x - dx * point.y + line_end.x * line_start.y - line_end.y * line_start.x
    return abs(cross) / length


def sort_to_path(points: Sequence[Point]) -> list[Point]:
    """Order points into a path by repeatedly hopping to the nearest one.

    Starts from the point with the smallest x, breaking ties by smallest y.
    Among equally near candidates the one earliest in the input wins, so the
    result is deterministic for a given input order. Cost is O(n^2).

    Args:
        points: Unordered points

    Returns:
        The same points in path order (empty for empty input)
    """
    n = len(points)
    if n == 0:
        return []

    coords = np.array([(p.x, p.y) for p in points], dtype=np.float64)
    remaining = np.ones(n, dtype=bool)

    current = min(range(n), key=lambda i: (points[i].x, points[i].y))
    order = [current]
    remaining[current] = False

    for _ in range(n - 1):
        deltas = coords - coords[current]
        dist_sq = np.einsum("ij,ij->i", deltas, deltas)
        dist_sq[~remaining] = np.inf
        current = int(np.argmin(dist_sq))
        order.append(current)
        remaining[current] = False

    return [points[i] for i in order]


def simplify(points: Sequence[Point], tolerance: float) -> list[Point]:
    """Simplify a path with the Ramer-Douglas-Peucker algorithm.

    The point farthest from the chord between a sub-path's endpoints is kept
    and both halves are processed again if its distance exceeds
    ``tolerance``; otherwise the sub-path collapses to its endpoints. Paths of
    two points or fewer are returned unchanged. Sub-paths are processed from
    an explicit stack, which gives the same output as the recursive form
    without its depth limit.

    Args:
        points: Ordered path
        tolerance: Maximum allowed perpendicular deviation in pixels

    Returns:
        Simplified path, always keeping the first and last point
    """
    n = len(points)
    if n <= 2:
        return list(points)

    keep = [False] * n
    keep[0] = keep[n - 1] = True
    stack = [(0, n - 1)]

    while stack:
        first, last = stack.pop()
        if last - first < 2:
            continue

        max_dist = 0.0
        max_index = first
        for i in range(first + 1, last):
            dist = perpendicular_distance(points[i], points[first], points[last])
            if dist > max_dist:
                max_dist = dist
                max_index = i

        if max_dist > tolerance:
            keep[max_index] = True
            stack.append((max_index, last))
            stack.append((first, max_index))

    return [p for p, kept in zip(points, keep) if kept]


def sparsify(points: Sequence[Point], tolerance: float) -> OrderedPath:
    """Order, simplify and close a set of boundary points.

    After simplification, a result of three or more points whose first and
    last points lie within ``tolerance`` of each other is treated as a closed
    loop: the last point is dropped and the path is flagged closed. Results
    of one or two points are never closed, even when their ends lie within
    ``tolerance``; dropping a point there would leave nothing to split.

    Args:
        points: Unordered boundary points
        tolerance: Simplification tolerance in pixels

    Returns:
        OrderedPath with an explicit closure flag

    Raises:
        EmptyPathError: If no points are given
    """
    if not points:
        raise EmptyPathError("sparsify path")

    ordered = sort_to_path(points)
    simplified = simplify(ordered, tolerance)

    is_closed = False
    if len(simplified) > 2 and simplified[0].distance_to(simplified[-1]) <= tolerance:
        simplified = simplified[:-1]
        is_closed = True

    logger.debug(
        "Sparsified %d points to %d (closed=%s)",
        len(points),
        len(simplified),
        is_closed,
    )

    return OrderedPath(points=simplified, is_closed=is_closed)
