"""Pixel occupancy queries.

A pixel is occupied when it is not transparent and not (approximately) pure
white. This predicate is the only link between raw pixels and the rest of the
pipeline. The scalar functions mirror the vectorised ones exactly; the scanner
uses the vectorised forms for speed.
"""

import numpy as np

from contourpad.domain import Bitmap

DEFAULT_WHITE_THRESHOLD = 250


def is_occupied(
    bitmap: Bitmap,
    x: int,
    y: int,
    white_threshold: int = DEFAULT_WHITE_THRESHOLD,
) -> bool:
    """Check whether pixel (x, y) holds ink.

    Args:
        bitmap: Canvas to sample
        x: Pixel column
        y: Pixel row
        white_threshold: R, G and B all above this count as background

    Returns:
        False outside the canvas, otherwise True iff alpha is non-zero and the
        pixel is not near-white

    Examples:
        >>> canvas = Bitmap.blank(4, 4)
        >>> is_occupied(canvas, 1, 1)
        False
        >>> is_occupied(canvas, -1, 0)
        False
    """
    if not bitmap.in_bounds(x, y):
        return False

    r, g, b, a = bitmap.pixel(x, y)
    return a > 0 and not (r > white_threshold and g > white_threshold and b > white_threshold)


def probe_disk(
    bitmap: Bitmap,
    cx: int,
    cy: int,
    radius: int,
    white_threshold: int = DEFAULT_WHITE_THRESHOLD,
) -> bool:
    """Check whether any pixel in a small disk around (cx, cy) is occupied.

    Disk membership uses the Manhattan approximation |dx| + |dy| <= radius.
    The centre itself may lie outside the canvas.
    """
    for dx in range(-radius, radius + 1):
        for dy in range(-radius, radius + 1):
            if abs(dx) + abs(dy) > radius:
                continue
            if is_occupied(bitmap, cx + dx, cy + dy, white_threshold):
                return True
    return False


def occupancy_mask(
    bitmap: Bitmap,
    white_threshold: int = DEFAULT_WHITE_THRESHOLD,
) -> np.ndarray:
    """Evaluate the occupancy predicate for every pixel.

    Returns:
        Boolean array of shape (height, width)
    """
    rgb = bitmap.pixels[..., :3]
    alpha = bitmap.pixels[..., 3]
    near_white = np.all(rgb > white_threshold, axis=-1)
    return (alpha > 0) & ~near_white


def dilate_manhattan(mask: np.ndarray, radius: int) -> np.ndarray:
    """Dilate a mask by a Manhattan disk, extending past the canvas edge.

    The result is padded by ``radius`` on every side, so entry
    ``[cy + radius, cx + radius]`` answers ``probe_disk`` for centres with
    ``-radius <= cx < width + radius`` (and likewise for y). Centres further
    out cannot reach any pixel.

    Args:
        mask: Boolean array of shape (height, width)
        radius: Manhattan radius of the probe

    Returns:
        Boolean array of shape (height + 2r, width + 2r)
    """
    height, width = mask.shape
    padded = np.pad(mask, 2 * radius, mode="constant", constant_values=False)
    out_h = height + 2 * radius
    out_w = width + 2 * radius
    dilated = np.zeros((out_h, out_w), dtype=bool)

    for dy in range(-radius, radius + 1):
        reach = radius - abs(dy)
        for dx in range(-reach, reach + 1):
            row = radius + dy
            col = radius + dx
            dilated |= padded[row : row + out_h, col : col + out_w]

    return dilated
