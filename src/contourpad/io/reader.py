"""Image reader for importing artwork onto the canvas.

This module provides the ImageReader class, which loads a raster image with
Pillow and places it on a white canvas the way the drawing pad does: scaled
to fit while keeping its aspect ratio, and centred.
"""

from pathlib import Path

import numpy as np
from PIL import Image, UnidentifiedImageError

from contourpad.config import CanvasConfig
from contourpad.domain import Bitmap
from contourpad.exceptions import ImageLoadError, ImageTooLargeError

BACKGROUND = (255, 255, 255, 255)


def fit_to_canvas(image: Image.Image, width: int, height: int) -> Image.Image:
    """Letterbox an image onto a white canvas.

    Args:
        image: Source image in any mode
        width: Canvas width
        height: Canvas height

    Returns:
        Opaque RGBA image of the canvas size with the source centred on it
    """
    source = image.convert("RGBA")
    scale = min(width / source.width, height / source.height)
    scaled_w = max(1, round(source.width * scale))
    scaled_h = max(1, round(source.height * scale))
    scaled = source.resize((scaled_w, scaled_h), Image.Resampling.LANCZOS)

    canvas = Image.new("RGBA", (width, height), BACKGROUND)
    offset = ((width - scaled_w) // 2, (height - scaled_h) // 2)
    canvas.alpha_composite(scaled, dest=offset)
    return canvas


class ImageReader:
    """Loads image files into canvas bitmaps.

    Example:
        reader = ImageReader(Path("drawing.png"))
        bitmap = reader.load()
        print(bitmap.size, reader.original_size)
    """

    def __init__(
        self,
        image_path: Path,
        canvas: CanvasConfig | None = None,
        fit: bool = True,
    ) -> None:
        """Initialize the image reader.

        Args:
            image_path: Path to the image file
            canvas: Canvas size and import limits
            fit: Letterbox onto the configured canvas; if False the image is
                used at its own size
        """
        self._image_path = image_path
        self._canvas = canvas or CanvasConfig()
        self._fit = fit
        self._original_size: tuple[int, int] | None = None

    @property
    def original_size(self) -> tuple[int, int]:
        """Size of the source image as (width, height).

        Raises:
            RuntimeError: If the image has not been loaded yet
        """
        if self._original_size is None:
            raise RuntimeError("Image not loaded. Call load() first.")
        return self._original_size

    def load(self) -> Bitmap:
        """Load the image and convert it to a bitmap.

        Returns:
            Bitmap of the canvas (or image) size

        Raises:
            FileNotFoundError: If the image file does not exist
            ImageTooLargeError: If the file exceeds the configured limit
            ImageLoadError: If Pillow cannot decode the file
        """
        if not self._image_path.exists():
            raise FileNotFoundError(f"Image file not found: {self._image_path}")

        size_bytes = self._image_path.stat().st_size
        if size_bytes > self._canvas.max_file_bytes:
            raise ImageTooLargeError(
                str(self._image_path), size_bytes, self._canvas.max_file_bytes
            )

        try:
            with Image.open(self._image_path) as image:
                image.load()
                self._original_size = image.size
                if self._fit:
                    prepared = fit_to_canvas(image, self._canvas.width, self._canvas.height)
                else:
                    prepared = Image.new("RGBA", image.size, BACKGROUND)
                    prepared.alpha_composite(image.convert("RGBA"))
        except (UnidentifiedImageError, OSError) as e:
            raise ImageLoadError(str(self._image_path), str(e)) from e

        return Bitmap.from_rgba(np.asarray(prepared, dtype=np.uint8))
