# Texture import using Pillow
import os

import cv2
import numpy as np
from PIL import Image, ImageOps, UnidentifiedImageError

from ..config import settings
from ..processing.curves import PixelFormat, SourceImage
from ..utils.logger import get_logger

logger = get_logger(__name__)

SUPPORTED_FORMATS_FILTER = settings.SUPPORTED_FORMATS_FILTER

# Pillow modes holding 8 bits per channel; all of them are expanded to BGRA8
EIGHT_BIT_MODES = {"1", "L", "LA", "La", "P", "PA", "RGB", "RGBA", "RGBa", "RGBX", "CMYK", "YCbCr", "LAB", "HSV"}

# Pillow modes kept in their native layout (the ramp converter skips these)
NATIVE_MODES = {
    "I;16": (PixelFormat.G16, np.uint16),
    "I;16L": (PixelFormat.G16, np.uint16),
    "I;16B": (PixelFormat.G16, np.uint16),
    "I;16N": (PixelFormat.G16, np.uint16),
    "F": (PixelFormat.R32F, np.float32),
}


def is_texture_file(file_path):
    """True if the path has one of the supported texture extensions."""
    if not isinstance(file_path, str) or not file_path:
        return False
    return os.path.splitext(file_path)[1].lower() in settings.SUPPORTED_TEXTURE_EXTENSIONS


def _is_linear_png(img):
    # A PNG gAMA chunk of 1.0 marks linear data
    gamma = img.info.get("gamma")
    return gamma is not None and abs(float(gamma) - 1.0) < 1e-3


def image_to_source(img, name=None, srgb=None):
    """Converts an opened Pillow image into a SourceImage.

    Args:
        img (PIL.Image.Image): The decoded image.
        name (str): Identity recorded on the SourceImage (usually the file path).
        srgb (bool): Overrides the sRGB flag. Defaults to CONVERSION_DEFAULTS['assume_srgb'],
                     or False for linear PNGs and non 8-bit data.

    Returns:
        SourceImage: BGRA8 for 8-bit modes, G16/R32F for high bit depth grayscale,
                     UNKNOWN for anything else.
    """
    width, height = img.size

    if img.mode in EIGHT_BIT_MODES:
        if srgb is None:
            srgb = bool(settings.CONVERSION_DEFAULTS.get("assume_srgb", True)) and not _is_linear_png(img)
        rgba = np.asarray(img.convert("RGBA"), dtype=np.uint8)
        bgra = cv2.cvtColor(rgba, cv2.COLOR_RGBA2BGRA)
        return SourceImage(width, height, PixelFormat.BGRA8, srgb, bgra.tobytes(), name=name)

    pixel_format, dtype = NATIVE_MODES.get(img.mode, (PixelFormat.UNKNOWN, None))
    data = np.asarray(img, dtype=dtype).tobytes() if dtype is not None else img.tobytes()
    logger.info("Texture '%s' uses mode '%s'; keeping it as %s.", name, img.mode, pixel_format.value)
    return SourceImage(width, height, pixel_format, bool(srgb), data, name=name)


def load_texture(file_path, srgb=None):
    """Loads a texture file into a SourceImage.

    Handles EXIF orientation automatically.

    Args:
        file_path (str): The path to the texture file.
        srgb (bool): Optional override of the sRGB flag.

    Returns:
        SourceImage, or None if the file is missing or cannot be decoded.
    """
    if not isinstance(file_path, str) or not file_path:
        logger.error("Invalid file path provided.")
        return None

    if not os.path.isfile(file_path):
        logger.error("File not found at '%s'", file_path)
        return None

    try:
        with Image.open(file_path) as img:
            oriented = ImageOps.exif_transpose(img)
            source = image_to_source(oriented, name=file_path, srgb=srgb)
        logger.info("Loaded texture '%s' (%dx%d, %s, sRGB=%s)",
                    file_path, source.width, source.height, source.pixel_format.value, source.srgb)
        return source
    except UnidentifiedImageError:
        logger.error("Pillow could not identify image file format or file is corrupted: '%s'", file_path)
        return None
    except OSError as e:
        logger.error("Error loading texture '%s' with Pillow: %s", file_path, e)
        return None
