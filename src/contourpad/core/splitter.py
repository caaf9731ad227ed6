"""Contour splitting into two boundary curves.

A silhouette outline that starts at its leftmost point is cut at its
rightmost point. The part before the cut becomes the first curve; the part
after it, walked backwards and prefixed with the start point, becomes the
second. Both curves then run left to right between the same two extremes.

This models roughly horizontal, single-lobed shapes. Outlines with several
local x-maxima (stars, deep concavities) produce curves that cross or fold
back on themselves.
"""

import logging
from collections.abc import Sequence

from contourpad.domain import OrderedPath, Point, SplitResult, as_points
from contourpad.exceptions import EmptyPathError

logger = logging.getLogger(__name__)


def rightmost_index(points: Sequence[Point]) -> int:
    """Index of the point with the largest x (first occurrence on ties).

    Raises:
        EmptyPathError: If no points are given
    """
    if not points:
        raise EmptyPathError("find rightmost point")

    max_index = 0
    for i, point in enumerate(points):
        if point.x > points[max_index].x:
            max_index = i
    return max_index


def split_at_rightmost(path: Sequence[Point] | OrderedPath) -> SplitResult:
    """Split a path into two curves meeting at its rightmost point.

    Args:
        path: Ordered outline, normally starting at its leftmost point

    Returns:
        SplitResult where ``first`` is path[0..max] and ``second`` is
        [path[0]] followed by path[max..] reversed

    Raises:
        EmptyPathError: If the path is empty
    """
    points = as_points(path)
    max_index = rightmost_index(points)

    first = points[: max_index + 1]
    second = [first[0], *reversed(points[max_index:])]

    logger.debug(
        "Split %d points at index %d: %d forward, %d backward",
        len(points),
        max_index,
        len(first),
        len(second),
    )

    return SplitResult(first=first, second=second, max_index=max_index)
