"""sRGB <-> linear transfer functions.

Formulae follow the sRGB specification (IEC 61966-2-1), including the
linear toe segment near black, and operate on Python floats or NumPy arrays.
"""
import numpy as np

# Breakpoints of the piecewise sRGB curve
SRGB_DECODE_THRESHOLD = 0.04045
SRGB_ENCODE_THRESHOLD = 0.0031308


def srgb_to_linear(value):
    """Decodes gamma-encoded sRGB values in [0, 1] to linear light."""
    arr = np.clip(np.asarray(value, dtype=np.float64), 0.0, 1.0)
    linear = np.where(
        arr <= SRGB_DECODE_THRESHOLD,
        arr / 12.92,
        np.power((arr + 0.055) / 1.055, 2.4),
    )
    if np.ndim(value) == 0:
        return float(linear)
    return linear


def linear_to_srgb(value):
    """Encodes linear light values in [0, 1] with the sRGB transfer curve."""
    arr = np.clip(np.asarray(value, dtype=np.float64), 0.0, 1.0)
    srgb = np.where(
        arr <= SRGB_ENCODE_THRESHOLD,
        arr * 12.92,
        1.055 * np.power(arr, 1.0 / 2.4) - 0.055,
    )
    if np.ndim(value) == 0:
        return float(srgb)
    return srgb


# 8-bit decode table, index = encoded byte value
SRGB_TO_LINEAR_LUT = srgb_to_linear(np.arange(256, dtype=np.float64) / 255.0)


def decode_srgb_bytes(values):
    """Maps uint8 sRGB-encoded channel values to linear floats via the lookup table."""
    return SRGB_TO_LINEAR_LUT[np.asarray(values, dtype=np.uint8)]


def decode_linear_bytes(values):
    """Maps uint8 channel values to floats by plain division by 255."""
    return np.asarray(values, dtype=np.uint8).astype(np.float64) / 255.0
