"""Core geometric types for silhouette representation.

This module defines the plane geometry passed between pipeline stages:
- Point: An immutable 2D point in bitmap space (origin top-left, y down)
- BoundingBox: Axis-aligned extent of a point set
- OrderedPath: A traced outline with an explicit closure flag
- SplitResult: The two boundary curves of a silhouette
- CrossSection: A top/bottom point pair at roughly the same x
"""

import math
from collections.abc import Iterable, Sequence
from dataclasses import dataclass, field
from typing import Any


@dataclass(frozen=True, slots=True)
class Point:
    """A point in 2D bitmap space.

    Immutable and hashable for use in sets/dicts.

    Attributes:
        x: X coordinate in pixels
        y: Y coordinate in pixels (grows downwards)
    """

    x: float
    y: float

    def to_tuple(self) -> tuple[float, float]:
        """Convert to simple (x, y) tuple."""
        return (self.x, self.y)

    def to_key(self) -> str:
        """Return the "x,y" string key used for deduplication and export."""
        return f"{_format_coord(self.x)},{_format_coord(self.y)}"

    def distance_to(self, other: "Point") -> float:
        """Euclidean distance to another point."""
        return math.hypot(other.x - self.x, other.y - self.y)

    def to_dict(self) -> dict[str, Any]:
        """Serialize to dictionary."""
        return {"x": self.x, "y": self.y}

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Point":
        """Deserialize from dictionary.

        Args:
            data: Dictionary with x and y fields

        Returns:
            Point instance
        """
        return cls(x=float(data["x"]), y=float(data["y"]))


def _format_coord(value: float) -> str:
    if float(value).is_integer():
        return str(int(value))
    return repr(float(value))


@dataclass(frozen=True, slots=True)
class BoundingBox:
    """Axis-aligned bounding box.

    Attributes:
        min_x: Smallest x coordinate
        min_y: Smallest y coordinate
        max_x: Largest x coordinate
        max_y: Largest y coordinate
    """

    min_x: float
    min_y: float
    max_x: float
    max_y: float

    @property
    def width(self) -> float:
        return self.max_x - self.min_x

    @property
    def height(self) -> float:
        return self.max_y - self.min_y

    def to_tuple(self) -> tuple[float, float, float, float]:
        """Return (min_x, min_y, max_x, max_y)."""
        return (self.min_x, self.min_y, self.max_x, self.max_y)

    @classmethod
    def from_points(cls, points: Iterable[Point]) -> "BoundingBox":
        """Compute the bounding box of a point set.

        Args:
            points: Points to enclose

        Returns:
            Smallest box containing every point

        Raises:
            ValueError: If no points are given
        """
        pts = list(points)
        if not pts:
            raise ValueError("Cannot compute bounding box of an empty point set")

        xs = [p.x for p in pts]
        ys = [p.y for p in pts]
        return cls(min(xs), min(ys), max(xs), max(ys))


@dataclass
class OrderedPath:
    """An ordered outline produced by path simplification.

    Closure is decided once, when the path is sparsified, and carried along
    so later stages never have to guess it from endpoint distances.

    Attributes:
        points: Points in traversal order
        is_closed: True if the last point connects back to the first
    """

    points: list[Point]
    is_closed: bool = False

    def __len__(self) -> int:
        return len(self.points)

    def __iter__(self):
        return iter(self.points)

    def __getitem__(self, index):
        return self.points[index]

    def is_empty(self) -> bool:
        return not self.points

    def bounding_box(self) -> BoundingBox:
        """Bounding box of the path's points."""
        return BoundingBox.from_points(self.points)

    def to_dict(self) -> dict[str, Any]:
        return {
            "points": [p.to_dict() for p in self.points],
            "is_closed": self.is_closed,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "OrderedPath":
        return cls(
            points=[Point.from_dict(p) for p in data["points"]],
            is_closed=bool(data.get("is_closed", False)),
        )


@dataclass
class SplitResult:
    """A silhouette outline split at its rightmost point.

    Both curves start at the leftmost point of the path. ``first`` follows the
    path forward up to and including the rightmost point; ``second`` walks the
    rest of the path backwards, so it also ends at the rightmost point. Which
    of the two runs along the top of the shape depends on the direction the
    outline was walked.

    Attributes:
        first: Forward curve, path[0..max_index]
        second: Backward curve, [path[0]] + reversed(path[max_index..])
        max_index: Index of the rightmost point in the original path
    """

    first: list[Point]
    second: list[Point]
    max_index: int = field(default=0)

    def reconstruct(self) -> list[Point]:
        """Rebuild the original path from the two curves.

        The rightmost point is shared by both curves, so it is emitted once.

        Returns:
            The path the split was computed from
        """
        tail = list(reversed(self.second[1:]))
        return list(self.first) + tail[1:]


@dataclass(frozen=True, slots=True)
class CrossSection:
    """A pair of boundary points spanning the silhouette at one x position.

    ``top`` is not necessarily above ``bottom`` on the canvas.

    Attributes:
        top: Point on the first split curve
        bottom: Point on the second split curve
    """

    top: Point
    bottom: Point

    @property
    def midpoint(self) -> Point:
        """Point halfway between top and bottom."""
        return Point((self.top.x + self.bottom.x) / 2.0, (self.top.y + self.bottom.y) / 2.0)

    @property
    def span(self) -> float:
        """Distance between the two boundary points."""
        return self.top.distance_to(self.bottom)

    def to_dict(self) -> dict[str, Any]:
        return {"top": self.top.to_dict(), "bottom": self.bottom.to_dict()}


def as_points(points: Sequence[Point] | OrderedPath) -> list[Point]:
    """Return a plain list of points from a path or sequence."""
    if isinstance(points, OrderedPath):
        return list(points.points)
    return list(points)
