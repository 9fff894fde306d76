# Ramp texture to curve conversion
import numpy as np

from ..config import settings
from ..utils.color import decode_linear_bytes, decode_srgb_bytes
from ..utils.errors import ConfigurationError
from ..utils.logger import get_logger
from .curves import CHANNEL_ORDER, CurveSet, LinearColor, PixelFormat, SourceImage, format_name

logger = get_logger(__name__)


def keyframe_times(width):
    """Evenly spaced key times over [0, 1]; a single column maps to time 0."""
    if width <= 0:
        return np.zeros(0, dtype=np.float64)
    if width == 1:
        return np.zeros(1, dtype=np.float64)
    return np.arange(width, dtype=np.float64) / float(width - 1)


def decode_pixels(rgba_u8, srgb):
    """
    Converts an (..., 4) uint8 array in R, G, B, A order to linear floats.

    sRGB decoding applies to the colour channels only; alpha is always
    scaled linearly.
    """
    linear = decode_linear_bytes(rgba_u8)
    if srgb:
        linear[..., :3] = decode_srgb_bytes(rgba_u8[..., :3])
    return linear


class RampToCurveConverter:
    """Turns every row of a ramp texture into an RGBA CurveSet with one key per column.

    Unsupported pixel formats and empty textures are skipped: the converter
    returns no curves instead of raising, so a host can feed it a whole
    selection without pre-filtering.
    """

    def __init__(self, supported_format=None):
        if supported_format is None:
            supported_format = settings.CONVERSION_DEFAULTS.get("supported_format", "BGRA8")
        self.supported_format = PixelFormat(supported_format)
        if self.supported_format not in CHANNEL_ORDER:
            raise ConfigurationError(
                f"Pixel format '{self.supported_format.value}' cannot be converted to curves.",
                setting_name="supported_format",
            )

    def can_convert(self, source: SourceImage) -> bool:
        """Checks format, dimensions and buffer size before any per-pixel work."""
        if source is None:
            return False
        label = source.name or "<unnamed>"
        if source.pixel_format != self.supported_format:
            logger.info("Skipping '%s': pixel format %s is not %s.",
                        label, format_name(source.pixel_format), self.supported_format.value)
            return False
        if source.is_empty:
            logger.info("Skipping '%s': texture is empty (%dx%d, %d bytes).",
                        label, source.width, source.height, len(source.data or b""))
            return False
        if len(source.data) < source.expected_size:
            logger.warning("Skipping '%s': buffer holds %d bytes, %dx%d %s needs %d.",
                           label, len(source.data), source.width, source.height,
                           format_name(source.pixel_format), source.expected_size)
            return False
        return True

    def decode_rows(self, source: SourceImage) -> np.ndarray:
        """Returns a (height, width, 4) float64 array of linear R, G, B, A values."""
        pixels = np.frombuffer(source.data, dtype=np.uint8, count=source.expected_size)
        pixels = pixels.reshape(source.height, source.width, 4)
        # Reorder buffer channels to R, G, B, A
        rgba = pixels[..., list(CHANNEL_ORDER[source.pixel_format])]
        return decode_pixels(rgba, source.srgb)

    def _build_curve_set(self, row_colors, times) -> CurveSet:
        curve_set = CurveSet()
        # Columns are visited left to right, so each curve's times increase monotonically
        for time, color in zip(times.tolist(), row_colors.tolist()):
            curve_set.add_key(time, LinearColor(*color))
        return curve_set

    def iter_curves(self, source: SourceImage):
        """Lazily yields one CurveSet per texture row, top to bottom."""
        if not self.can_convert(source):
            return
        colors = self.decode_rows(source)
        times = keyframe_times(source.width)
        for y in range(source.height):
            yield self._build_curve_set(colors[y], times)

    def convert(self, source: SourceImage):
        """Converts the whole texture. Returns a list of CurveSets, empty when the texture is skipped."""
        curve_sets = list(self.iter_curves(source))
        if curve_sets:
            logger.debug("Converted '%s' into %d curve sets of %d keys.",
                         source.name or "<unnamed>", len(curve_sets), source.width)
        return curve_sets

    def convert_row(self, source: SourceImage, y: int):
        """Converts a single row. Returns None when the texture is skipped or ``y`` is out of range."""
        if not self.can_convert(source) or not 0 <= y < source.height:
            return None
        row_bytes = source.width * 4
        row_source = SourceImage(
            width=source.width,
            height=1,
            pixel_format=source.pixel_format,
            srgb=source.srgb,
            data=bytes(source.data[y * row_bytes:(y + 1) * row_bytes]),
            name=source.name,
        )
        return self._build_curve_set(self.decode_rows(row_source)[0], keyframe_times(source.width))
