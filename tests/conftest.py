"""Shared fixtures for contourpad tests."""

import logging

import numpy as np
import pytest

from contourpad.domain import Bitmap


def _rectangle_bitmap(width: int, height: int, x0: int, y0: int, x1: int, y1: int) -> Bitmap:
    mask = np.zeros((height, width), dtype=bool)
    mask[y0 : y1 + 1, x0 : x1 + 1] = True
    return Bitmap.from_mask(mask)


def _ellipse_bitmap(
    width: int, height: int, cx: float, cy: float, rx: float, ry: float
) -> Bitmap:
    ys, xs = np.mgrid[0:height, 0:width]
    mask = ((xs - cx) / rx) ** 2 + ((ys - cy) / ry) ** 2 <= 1.0
    return Bitmap.from_mask(mask)


@pytest.fixture(autouse=True)
def _drop_logging_handlers():
    """Remove handlers installed by configure_logging after each test."""
    yield
    root = logging.getLogger()
    for handler in list(root.handlers):
        if getattr(handler, "_contourpad_handler", False):
            root.removeHandler(handler)
            handler.close()


@pytest.fixture
def make_rectangle():
    """Factory for canvases with one filled rectangle (corners inclusive)."""
    return _rectangle_bitmap


@pytest.fixture
def make_ellipse():
    """Factory for canvases with one filled ellipse."""
    return _ellipse_bitmap


@pytest.fixture
def blank_canvas():
    """Create an empty 400x300 canvas."""
    return Bitmap.blank(400, 300)


@pytest.fixture
def rectangle_canvas():
    """Create a 400x300 canvas with ink filling (100,100)-(300,200)."""
    return _rectangle_bitmap(400, 300, 100, 100, 300, 200)


@pytest.fixture
def ellipse_canvas():
    """Create a 200x150 canvas holding a wide ellipse."""
    return _ellipse_bitmap(200, 150, 100.0, 75.0, 70.0, 35.0)
