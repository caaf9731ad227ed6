"""Raster canvas representation.

A Bitmap wraps an RGBA pixel buffer owned by the caller. The pipeline only
ever reads from it; the buffer is copied and marked read-only on creation.
"""

from collections.abc import Callable
from dataclasses import dataclass

import numpy as np

WHITE = (255, 255, 255, 255)
INK = (0, 0, 0, 255)


@dataclass(frozen=True)
class Bitmap:
    """Read-only RGBA canvas.

    Attributes:
        pixels: uint8 array of shape (height, width, 4)
    """

    pixels: np.ndarray

    def __post_init__(self) -> None:
        if self.pixels.ndim != 3 or self.pixels.shape[2] != 4:
            raise ValueError(
                f"Expected RGBA array of shape (height, width, 4), got {self.pixels.shape}"
            )

    @property
    def width(self) -> int:
        return int(self.pixels.shape[1])

    @property
    def height(self) -> int:
        return int(self.pixels.shape[0])

    @property
    def size(self) -> tuple[int, int]:
        """Canvas size as (width, height)."""
        return (self.width, self.height)

    def in_bounds(self, x: int, y: int) -> bool:
        return 0 <= x < self.width and 0 <= y < self.height

    def pixel(self, x: int, y: int) -> tuple[int, int, int, int]:
        """Return the RGBA value at (x, y).

        Raises:
            IndexError: If the coordinate lies outside the canvas
        """
        if not self.in_bounds(x, y):
            raise IndexError(f"Pixel ({x}, {y}) outside {self.width}x{self.height} canvas")
        r, g, b, a = self.pixels[y, x]
        return (int(r), int(g), int(b), int(a))

    @classmethod
    def from_rgba(cls, pixels: np.ndarray) -> "Bitmap":
        """Create a bitmap from an RGBA array, copying it."""
        data = np.array(pixels, dtype=np.uint8, copy=True)
        data.setflags(write=False)
        return cls(pixels=data)

    @classmethod
    def blank(cls, width: int, height: int) -> "Bitmap":
        """Create an all-white opaque canvas."""
        data = np.empty((height, width, 4), dtype=np.uint8)
        data[...] = WHITE
        data.setflags(write=False)
        return cls(pixels=data)

    @classmethod
    def from_mask(cls, mask: np.ndarray) -> "Bitmap":
        """Create a bitmap with black ink wherever ``mask`` is true.

        Args:
            mask: Boolean array of shape (height, width)
        """
        mask = np.asarray(mask, dtype=bool)
        data = np.empty(mask.shape + (4,), dtype=np.uint8)
        data[...] = WHITE
        data[mask] = INK
        data.setflags(write=False)
        return cls(pixels=data)

    @classmethod
    def from_predicate(
        cls,
        width: int,
        height: int,
        occupied: Callable[[int, int], bool],
    ) -> "Bitmap":
        """Create a bitmap from an occupancy oracle.

        Args:
            width: Canvas width in pixels
            height: Canvas height in pixels
            occupied: Callable returning True if pixel (x, y) holds ink

        Returns:
            Bitmap with black ink on every occupied pixel
        """
        mask = np.zeros((height, width), dtype=bool)
        for y in range(height):
            for x in range(width):
                if occupied(x, y):
                    mask[y, x] = True
        return cls.from_mask(mask)
