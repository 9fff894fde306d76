# Processing package initialization
from .curves import (
    CHANNEL_NAMES, CHANNEL_ORDER, PixelFormat, SourceImage,
    Pixel, LinearColor, Keyframe, ChannelCurve, CurveSet
)
from .converter import RampToCurveConverter, keyframe_times, decode_pixels
from .assets import CurveAsset, base_names_for, name_curve_assets
