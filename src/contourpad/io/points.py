"""Point format conversion.

Point sequences travel to drawing and export collaborators in one of three
shapes:

- object: [{"x": 1, "y": 2}, ...]
- string: ["1,2", ...]
- array:  [[1, 2], ...]
"""

import re
from collections.abc import Sequence
from enum import Enum
from typing import Any

from contourpad.domain import Point

_STRING_POINT = re.compile(r"^-?\d+(\.\d+)?,-?\d+(\.\d+)?$")


class PointFormat(str, Enum):
    """Serialized point representation."""

    OBJECT = "object"
    STRING = "string"
    ARRAY = "array"


def convert_points(points: Sequence[Point], fmt: PointFormat | str) -> list[Any]:
    """Serialize points into the given format.

    Args:
        points: Points to convert
        fmt: Target format

    Returns:
        List of dicts, "x,y" strings or [x, y] pairs
    """
    fmt = PointFormat(fmt)
    if fmt is PointFormat.STRING:
        return [p.to_key() for p in points]
    if fmt is PointFormat.ARRAY:
        return [[p.x, p.y] for p in points]
    return [p.to_dict() for p in points]


def parse_points(data: Sequence[Any], fmt: PointFormat | str) -> list[Point]:
    """Parse serialized points back into Point objects.

    Raises:
        ValueError: If an entry does not match the format
    """
    fmt = PointFormat(fmt)
    points: list[Point] = []
    for entry in data:
        if fmt is PointFormat.STRING:
            if not isinstance(entry, str) or not _STRING_POINT.match(entry):
                raise ValueError(f"Invalid string point: {entry!r}")
            x, y = entry.split(",")
            points.append(Point(float(x), float(y)))
        elif fmt is PointFormat.ARRAY:
            if not isinstance(entry, (list, tuple)) or len(entry) != 2:
                raise ValueError(f"Invalid array point: {entry!r}")
            points.append(Point(float(entry[0]), float(entry[1])))
        else:
            if not isinstance(entry, dict) or "x" not in entry or "y" not in entry:
                raise ValueError(f"Invalid object point: {entry!r}")
            points.append(Point.from_dict(entry))
    return points


def validate_points(data: Any, fmt: PointFormat | str = PointFormat.OBJECT) -> bool:
    """Check that data is a non-empty point list in the given format."""
    if not isinstance(data, (list, tuple)) or not data:
        return False
    try:
        parse_points(data, fmt)
    except (ValueError, TypeError):
        return False
    return True
