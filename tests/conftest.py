import numpy as np
import pytest
from PIL import Image

from ramp_convert.processing.curves import PixelFormat, SourceImage


@pytest.fixture
def make_source():
    """Returns a factory building a BGRA8 SourceImage from an (h, w, 4) B-G-R-A array."""
    def factory(bgra, srgb=False, pixel_format=PixelFormat.BGRA8, name="ramp"):
        arr = np.asarray(bgra, dtype=np.uint8)
        height, width = arr.shape[:2]
        return SourceImage(width, height, pixel_format, srgb, arr.tobytes(), name=name)
    return factory


@pytest.fixture
def two_by_one_source(make_source):
    """2x1 texture: a pure blue pixel followed by a pure green one (B, G, R, A byte order)."""
    return make_source([[[255, 0, 0, 255], [0, 255, 0, 255]]])


@pytest.fixture
def gradient_rgba():
    """Returns a 3-row, 8-column uint8 RGBA gradient (red rises left to right, alpha falls per row)."""
    img = np.zeros((3, 8, 4), dtype=np.uint8)
    img[:, :, 0] = np.linspace(0, 255, 8).astype(np.uint8)
    img[:, :, 1] = 64
    img[:, :, 2] = 200
    img[:, :, 3] = np.array([255, 128, 0], dtype=np.uint8)[:, None]
    return img


@pytest.fixture
def ramp_png(tmp_path, gradient_rgba):
    """Writes the gradient to a PNG file and returns its path."""
    path = tmp_path / "Ramp.png"
    Image.fromarray(gradient_rgba).save(path)
    return str(path)
