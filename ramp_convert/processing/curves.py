# Texture and curve data model
"""
Data types shared by the ramp converter and the host-side layers.

A ``SourceImage`` is a read-only view of one decoded texture. The converter
turns each of its rows into a ``CurveSet``: four ``ChannelCurve`` objects
(R, G, B, A) holding one ``Keyframe`` per pixel column.
"""

import bisect
from dataclasses import dataclass
from enum import Enum
from typing import Dict, Iterator, List, NamedTuple, Optional, Tuple

from ..utils.color import srgb_to_linear

CHANNEL_NAMES = ("R", "G", "B", "A")


class PixelFormat(Enum):
    """Source pixel layouts a texture may be decoded into."""
    BGRA8 = "BGRA8"
    RGBA8 = "RGBA8"
    G8 = "G8"
    G16 = "G16"
    RGBA16 = "RGBA16"
    RGBA16F = "RGBA16F"
    R32F = "R32F"
    UNKNOWN = "UNKNOWN"

    @property
    def bytes_per_pixel(self) -> int:
        return BYTES_PER_PIXEL[self]


BYTES_PER_PIXEL = {
    PixelFormat.BGRA8: 4,
    PixelFormat.RGBA8: 4,
    PixelFormat.G8: 1,
    PixelFormat.G16: 2,
    PixelFormat.RGBA16: 8,
    PixelFormat.RGBA16F: 8,
    PixelFormat.R32F: 4,
    PixelFormat.UNKNOWN: 0,
}


def format_name(pixel_format) -> str:
    """Display name of a pixel format, tolerating values that are not PixelFormat members."""
    return getattr(pixel_format, "value", str(pixel_format))


# Buffer index of R, G, B and A inside one pixel, for the 4-channel 8-bit layouts
CHANNEL_ORDER: Dict[PixelFormat, Tuple[int, int, int, int]] = {
    PixelFormat.BGRA8: (2, 1, 0, 3),
    PixelFormat.RGBA8: (0, 1, 2, 3),
}


@dataclass(frozen=True)
class SourceImage:
    """One decoded texture, as handed over by the host."""
    width: int
    height: int
    pixel_format: PixelFormat
    srgb: bool
    data: bytes
    name: Optional[str] = None

    @property
    def is_empty(self) -> bool:
        return self.width <= 0 or self.height <= 0 or not self.data

    @property
    def expected_size(self) -> int:
        return max(self.width, 0) * max(self.height, 0) * BYTES_PER_PIXEL.get(self.pixel_format, 0)


class Pixel(NamedTuple):
    r: int
    g: int
    b: int
    a: int

    @classmethod
    def from_bytes(cls, raw, pixel_format: PixelFormat = PixelFormat.BGRA8) -> "Pixel":
        """Reads four channel bytes laid out in ``pixel_format`` order."""
        ri, gi, bi, ai = CHANNEL_ORDER[pixel_format]
        return cls(raw[ri], raw[gi], raw[bi], raw[ai])


class LinearColor(NamedTuple):
    r: float
    g: float
    b: float
    a: float

    @classmethod
    def from_pixel(cls, pixel: Pixel, srgb: bool) -> "LinearColor":
        """
        Converts an 8-bit pixel to linear floats.

        With ``srgb`` the colour channels are gamma-decoded and alpha stays
        linear; otherwise every channel is divided by 255.
        """
        if srgb:
            return cls(
                srgb_to_linear(pixel.r / 255.0),
                srgb_to_linear(pixel.g / 255.0),
                srgb_to_linear(pixel.b / 255.0),
                pixel.a / 255.0,
            )
        return cls(pixel.r / 255.0, pixel.g / 255.0, pixel.b / 255.0, pixel.a / 255.0)


class Keyframe(NamedTuple):
    time: float
    value: float


class ChannelCurve:
    """A scalar curve: keyframes kept sorted by time."""

    def __init__(self, name: str = "", keys=None):
        self.name = name
        self._keys: List[Keyframe] = []
        for time, value in keys or ():
            self.add_key(time, value)

    def add_key(self, time: float, value: float) -> Keyframe:
        key = Keyframe(float(time), float(value))
        # Keys normally arrive in column order, so appending is the common path
        if not self._keys or key.time > self._keys[-1].time:
            self._keys.append(key)
            return key
        index = bisect.bisect_left(self.times, key.time)
        if index < len(self._keys) and self._keys[index].time == key.time:
            self._keys[index] = key
        else:
            self._keys.insert(index, key)
        return key

    @property
    def keys(self) -> List[Keyframe]:
        return list(self._keys)

    @property
    def times(self) -> List[float]:
        return [k.time for k in self._keys]

    @property
    def values(self) -> List[float]:
        return [k.value for k in self._keys]

    def __len__(self) -> int:
        return len(self._keys)

    def __iter__(self) -> Iterator[Keyframe]:
        return iter(self._keys)

    def __eq__(self, other) -> bool:
        if not isinstance(other, ChannelCurve):
            return NotImplemented
        return self.name == other.name and self._keys == other._keys

    def __repr__(self) -> str:
        return f"ChannelCurve({self.name!r}, keys={len(self._keys)})"


class CurveSet:
    """Four synchronized channel curves (R, G, B, A) built from one texture row."""

    def __init__(self):
        self._curves = tuple(ChannelCurve(name) for name in CHANNEL_NAMES)

    def add_key(self, time: float, color: LinearColor) -> None:
        for curve, value in zip(self._curves, color):
            curve.add_key(time, value)

    @property
    def curves(self) -> Tuple[ChannelCurve, ChannelCurve, ChannelCurve, ChannelCurve]:
        return self._curves

    @property
    def red(self) -> ChannelCurve:
        return self._curves[0]

    @property
    def green(self) -> ChannelCurve:
        return self._curves[1]

    @property
    def blue(self) -> ChannelCurve:
        return self._curves[2]

    @property
    def alpha(self) -> ChannelCurve:
        return self._curves[3]

    def channel(self, name: str) -> ChannelCurve:
        try:
            return self._curves[CHANNEL_NAMES.index(name.upper())]
        except ValueError:
            raise KeyError(f"Unknown channel '{name}'. Expected one of {CHANNEL_NAMES}.") from None

    @property
    def num_keys(self) -> int:
        return len(self._curves[0])

    def to_dict(self) -> Dict[str, List[List[float]]]:
        """Channel name -> [[time, value], ...], for serialization."""
        return {curve.name: [[k.time, k.value] for k in curve] for curve in self._curves}

    @classmethod
    def from_dict(cls, data: Dict[str, List[List[float]]]) -> "CurveSet":
        curve_set = cls()
        for curve in curve_set._curves:
            for time, value in data.get(curve.name, ()):
                curve.add_key(time, value)
        return curve_set

    def __eq__(self, other) -> bool:
        if not isinstance(other, CurveSet):
            return NotImplemented
        return self._curves == other._curves

    def __repr__(self) -> str:
        return f"CurveSet(keys={self.num_keys})"
