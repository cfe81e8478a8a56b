# pencel_map/core_types.py
from __future__ import annotations

"""
Core type aliases, small value objects, and lightweight helpers.
"""

from dataclasses import dataclass
from typing import List, Sequence, Tuple, Union

import numpy as np
from numpy.typing import NDArray

from .errors import InvalidParameterError

# Basic aliases

RGBTuple = Tuple[int, int, int]
HexStr = str
ARGB32 = int  # 0xAARRGGBB, alpha ignored

PixelBuffer = NDArray[np.uint8]  # flat (W*H*3,) row-major RGB24
U8Image = NDArray[np.uint8]  # (H, W, 3)
Lab = NDArray[np.float32]  # (..., 3) CIE Lab

Colour = Union[ARGB32, Sequence[int]]

# Value objects


@dataclass(frozen=True)
class PencilInfo:
    """Palette entry: a pencil name with its heavy and light trace colours."""

    name: str
    heavy: ARGB32
    light: ARGB32

    @property
    def heavy_rgb(self) -> RGBTuple:
        return unpack_argb(self.heavy)

    @property
    def light_rgb(self) -> RGBTuple:
        return unpack_argb(self.light)

    def tone(self, heavy: bool) -> ARGB32:
        return self.heavy if heavy else self.light


@dataclass(frozen=True)
class MatchResult:
    """Closest palette tone for one pixel."""

    index: int
    heavy: bool
    distance: float

    def colour(self, palette: Sequence[PencilInfo]) -> ARGB32:
        return palette[self.index].tone(self.heavy)


Palette = List[PencilInfo]

# Small helpers


def pack_argb(r: int, g: int, b: int, a: int = 0xFF) -> ARGB32:
    """Pack channels into 0xAARRGGBB."""
    return ((a & 0xFF) << 24) | ((r & 0xFF) << 16) | ((g & 0xFF) << 8) | (b & 0xFF)


def unpack_argb(value: ARGB32) -> RGBTuple:
    """Unpack 0xAARRGGBB into an RGB tuple, dropping alpha."""
    v = int(value)
    return ((v >> 16) & 0xFF, (v >> 8) & 0xFF, v & 0xFF)


def rgb_to_hex(rgb: RGBTuple) -> HexStr:
    """RGB tuple to lowercase hex string '#rrggbb'."""
    return f"#{rgb[0]:02x}{rgb[1]:02x}{rgb[2]:02x}"


def parse_hex_colour(text: str) -> ARGB32:
    """
    Parse 'rrggbb', '#rrggbb', '0xrrggbb' or 'aarrggbb' into a packed ARGB value.
    Six-digit values get an opaque alpha. Raises ValueError on anything else.
    """
    s = text.strip().lower()
    if s.startswith("#"):
        s = s[1:]
    elif s.startswith("0x"):
        s = s[2:]
    if len(s) not in (6, 8) or any(c not in "0123456789abcdef" for c in s):
        raise ValueError(f"invalid colour value: {text!r}")
    n = int(s, 16)
    if len(s) == 6:
        n |= 0xFF000000
    return n


def coerce_to_rgb_tuple(value: Union[Colour, NDArray[np.generic]]) -> RGBTuple:
    """
    Coerce a packed int, a 3-length sequence or an array row to an RGB tuple.
    Channels outside 0..255 raise InvalidParameterError.
    """
    if isinstance(value, (int, np.integer)):
        return unpack_argb(int(value))
    if isinstance(value, np.ndarray):
        if value.size < 3:
            raise InvalidParameterError("array too small for RGB")
        flat = value.reshape(-1)
        rgb = (int(flat[0]), int(flat[1]), int(flat[2]))
    else:
        if len(value) < 3:
            raise InvalidParameterError("sequence too small for RGB")
        rgb = (int(value[0]), int(value[1]), int(value[2]))
    if any(c < 0 or c > 255 for c in rgb):
        raise InvalidParameterError(f"RGB channels must be in 0..255, got {rgb}")
    return rgb


def assert_u8_image_rgb(image: np.ndarray) -> U8Image:
    """Validate a uint8 (H,W,3) image and return it typed as U8Image."""
    if image.dtype != np.uint8 or image.ndim != 3 or image.shape[-1] != 3:
        raise TypeError("expected uint8 (H,W,3) image")
    return image  # type: ignore[return-value]


__all__ = [
    # aliases / types
    "RGBTuple",
    "HexStr",
    "ARGB32",
    "PixelBuffer",
    "U8Image",
    "Lab",
    "Colour",
    "Palette",
    # value objects
    "PencilInfo",
    "MatchResult",
    # helpers
    "pack_argb",
    "unpack_argb",
    "rgb_to_hex",
    "parse_hex_colour",
    "coerce_to_rgb_tuple",
    "assert_u8_image_rgb",
]
