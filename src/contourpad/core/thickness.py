"""Thickness profiles for extrusion.

A thickness function maps a normalised horizontal position t in [0, 1] and a
peak depth to an extrusion depth in [0, peak]. The profiles are:

- fish: quick ramp up, flat body, tapering tail
- ellipse: m * sin(pi * t)
- spindle: m * sin(pi * smoothstep(t))
- leaf: m * sqrt(t * (1 - t^2)), asymmetric with its bulge right of centre

The set is closed: ThicknessFunctionKind names every profile and
thickness_function dispatches on it. Unknown names resolve to fish with a
logged warning.
"""

import logging
import math
from collections.abc import Sequence
from dataclasses import dataclass
from enum import Enum

from contourpad.domain import BoundingBox, CrossSection, Point
from contourpad.exceptions import EmptyPathError

logger = logging.getLogger(__name__)

DEFAULT_CLOSE_DISTANCE = 5.0


class ThicknessFunctionKind(str, Enum):
    """Available thickness profiles."""

    FISH = "fish"
    ELLIPSE = "ellipse"
    SPINDLE = "spindle"
    LEAF = "leaf"


DEFAULT_FUNCTION = ThicknessFunctionKind.FISH


def fish(t: float, max_thickness: float) -> float:
    """Piecewise-linear fish body profile.

    Ramps 0 -> 0.6m over [0, 0.1], 0.6m -> m over [0.1, 0.3], holds m over
    [0.3, 0.7], drops m -> 0.3m over [0.7, 0.9] and 0.3m -> 0.1m over [0.9, 1].
    """
    m = max_thickness
    if t < 0.1:
        return m * 0.6 * (t / 0.1)
    if t < 0.3:
        return m * (0.6 + 0.4 * (t - 0.1) / 0.2)
    if t <= 0.7:
        return m
    if t < 0.9:
        return m * (1.0 - 0.7 * (t - 0.7) / 0.2)
    return m * (0.3 - 0.2 * (t - 0.9) / 0.1)


def ellipse(t: float, max_thickness: float) -> float:
    """Half-sine profile, zero at both ends."""
    return max_thickness * math.sin(math.pi * t)


def smoothstep(t: float) -> float:
    """Cubic Hermite easing 3t^2 - 2t^3."""
    return t * t * (3.0 - 2.0 * t)


def spindle(t: float, max_thickness: float) -> float:
    """Half-sine profile eased by smoothstep, with blunter ends."""
    return max_thickness * math.sin(math.pi * smoothstep(t))


def leaf(t: float, max_thickness: float) -> float:
    """Leaf profile m * sqrt(t * (1 - t^2)).

    The radicand is clamped at zero, which only matters where rounding pushes
    it below zero near t = 1.
    """
    radicand = t * (1.0 - t * t)
    return max_thickness * math.sqrt(max(0.0, radicand))


def thickness_function(kind: ThicknessFunctionKind, t: float, max_thickness: float) -> float:
    """Evaluate a thickness profile.

    ``t`` is clamped to [0, 1] and the result to [0, max_thickness].

    Args:
        kind: Profile to evaluate
        t: Normalised horizontal position
        max_thickness: Peak depth

    Returns:
        Extrusion depth at t
    """
    t = max(0.0, min(1.0, t))
    if kind is ThicknessFunctionKind.FISH:
        value = fish(t, max_thickness)
    elif kind is ThicknessFunctionKind.ELLIPSE:
        value = ellipse(t, max_thickness)
    elif kind is ThicknessFunctionKind.SPINDLE:
        value = spindle(t, max_thickness)
    elif kind is ThicknessFunctionKind.LEAF:
        value = leaf(t, max_thickness)
    else:
        raise ValueError(f"Unhandled thickness function: {kind!r}")
    return max(0.0, min(max_thickness, value))


def resolve_thickness_function(
    name: str | ThicknessFunctionKind,
) -> tuple[ThicknessFunctionKind, bool]:
    """Look up a thickness profile by name.

    Args:
        name: Profile name (case-insensitive) or kind

    Returns:
        Tuple of (kind, used_fallback). Unknown names give (FISH, True).
    """
    if isinstance(name, ThicknessFunctionKind):
        return name, False

    try:
        return ThicknessFunctionKind(name.strip().lower()), False
    except ValueError:
        logger.warning(
            "Unknown thickness function %r, falling back to %s",
            name,
            DEFAULT_FUNCTION.value,
        )
        return DEFAULT_FUNCTION, True


@dataclass(frozen=True)
class ThicknessData:
    """Everything needed to evaluate thickness along a silhouette.

    Attributes:
        contour: Center curve through the cross-section midpoints
        bounds: Bounding box of the center curve
        function: Resolved thickness profile
        max_thickness: Peak depth
        min_thickness: Smallest depth returned by thickness_at
        is_closed: True if the center curve was closed into a loop
        requested_function: Profile name as given by the caller
        used_fallback: True if the requested name was unknown
    """

    contour: list[Point]
    bounds: BoundingBox
    function: ThicknessFunctionKind
    max_thickness: float
    min_thickness: float
    is_closed: bool = False
    requested_function: str = DEFAULT_FUNCTION.value
    used_fallback: bool = False

    def normalized_position(self, point: Point) -> float:
        """Horizontal position of a point within the bounds, in [0, 1].

        A zero-width silhouette places every point at its centre (0.5).
        """
        if self.bounds.width <= 0:
            return 0.5
        t = (point.x - self.bounds.min_x) / self.bounds.width
        return max(0.0, min(1.0, t))

    def thickness_at(self, point: Point) -> float:
        """Extrusion depth at a point, clamped to [min, max] thickness."""
        value = thickness_function(
            self.function,
            self.normalized_position(point),
            self.max_thickness,
        )
        return max(self.min_thickness, min(self.max_thickness, value))


def compute_thickness(
    cross_sections: Sequence[CrossSection],
    function: str | ThicknessFunctionKind = DEFAULT_FUNCTION,
    max_thickness: float = 20.0,
    min_thickness: float = 2.0,
    close_distance: float = DEFAULT_CLOSE_DISTANCE,
) -> ThicknessData:
    """Prepare thickness evaluation for a cross-section sequence.

    Reduces each cross-section to its midpoint, closes the resulting center
    curve when its ends lie within ``close_distance`` of each other, and
    records the curve's bounds. Depths are evaluated later, per point, with
    ThicknessData.thickness_at.

    Args:
        cross_sections: Cross-sections from left to right
        function: Profile name or kind
        max_thickness: Peak depth
        min_thickness: Smallest depth
        close_distance: Endpoint distance below which the curve is closed

    Returns:
        ThicknessData bundle

    Raises:
        EmptyPathError: If no cross-sections are given
        ValueError: If min_thickness exceeds max_thickness
    """
    if not cross_sections:
        raise EmptyPathError("compute thickness")
    if min_thickness > max_thickness:
        raise ValueError(
            f"min_thickness ({min_thickness}) exceeds max_thickness ({max_thickness})"
        )

    kind, used_fallback = resolve_thickness_function(function)
    requested = function.value if isinstance(function, ThicknessFunctionKind) else function

    center = [section.midpoint for section in cross_sections]
    is_closed = False
    if len(center) > 2 and center[0].distance_to(center[-1]) <= close_distance:
        center.append(center[0])
        is_closed = True

    return ThicknessData(
        contour=center,
        bounds=BoundingBox.from_points(center),
        function=kind,
        max_thickness=max_thickness,
        min_thickness=min_thickness,
        is_closed=is_closed,
        requested_function=requested,
        used_fallback=used_fallback,
    )
