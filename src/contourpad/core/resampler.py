"""Cross-section resampling of split boundary curves.

The two split curves are walked in lock-step from left to right.
Samples whose x positions agree within a tolerance are paired directly.
Otherwise the curve that lags behind keeps its real sample and the other
curve is linearly interpolated at that x. Synthetic end caps at the shared
leftmost point and at the rightmost ends make the sequence span the whole
silhouette.
"""

import logging
from collections.abc import Sequence

from contourpad.domain import CrossSection, Point
from contourpad.exceptions import EmptyPathError

logger = logging.getLogger(__name__)


def interpolate_y(start: Point, end: Point, x: float) -> float:
    """Linearly interpolate the y of segment start-end at a given x.

    The parameter is clamped to the segment, and a vertical segment (equal x)
    yields the end point's y instead of dividing by zero.

    Examples:
        >>> interpolate_y(Point(0.0, 0.0), Point(10.0, 20.0), 5.0)
        10.0
        >>> interpolate_y(Point(3.0, 0.0), Point(3.0, 8.0), 3.0)
        8.0
    """
    dx = end.x - start.x
    if dx == 0:
        return end.y

    t = (x - start.x) / dx
    t = max(0.0, min(1.0, t))
    return start.y + t * (end.y - start.y)


def generate_cross_sections(
    first: Sequence[Point],
    second: Sequence[Point],
    tolerance: float,
) -> list[CrossSection]:
    """Pair up two boundary curves into cross-sections.

    Args:
        first: First curve from the contour split, supplies ``top`` points
        second: Second curve from the contour split, supplies ``bottom`` points
        tolerance: Largest x difference paired without interpolation

    Returns:
        Cross-sections from left to right, including the two end caps

    Raises:
        EmptyPathError: If either curve is empty
    """
    if not first or not second:
        raise EmptyPathError("generate cross-sections")

    sections = [CrossSection(top=first[0], bottom=second[0])]

    i = 1
    j = 1
    while i < len(first) - 1 and j < len(second) - 1:
        top = first[i]
        bottom = second[j]

        if abs(top.x - bottom.x) < tolerance:
            sections.append(CrossSection(top=top, bottom=bottom))
            i += 1
            j += 1
        elif top.x < bottom.x:
            y = interpolate_y(second[j - 1], bottom, top.x)
            sections.append(CrossSection(top=top, bottom=Point(top.x, y)))
            i += 1
        else:
            y = interpolate_y(first[i - 1], top, bottom.x)
            sections.append(CrossSection(top=Point(bottom.x, y), bottom=bottom))
            j += 1

    sections.append(CrossSection(top=first[-1], bottom=second[-1]))

    logger.debug(
        "Generated %d cross-sections from %d and %d curve points",
        len(sections),
        len(first),
        len(second),
    )

    return sections
