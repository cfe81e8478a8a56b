"""
pencel_map package.

Purpose:
  Pixelize an image into a grid of pencil swatches. See pencel.py for CLI.

Public API:
  resample_image24 : separable bilinear resize of flat RGB24 buffers.
  best_match       : closest heavy/light tone of a pencil palette for one colour.
  match_pixels     : best_match over a whole buffer, row-major.
  pencilize        : resize + match in one call, returns a PencilGrid.
  core_types       : shared aliases and value objects (PencilInfo, MatchResult).
  kernels          : kernel identifiers and sampling strategies.
  metrics          : colour distance metrics.
  palette_data     : palette loaders and the built-in palette.
  errors           : exception types.

Quick start:
  from pencel_map import build_palette, pencilize
  grid = pencilize(buf, w, h, build_palette(), width=32, height=32)
"""

__version__ = "0.2.0"

# Re-export namespaces for convenience.
from . import core_types
from . import errors
from . import kernels
from . import metrics
from . import palette_data
from . import utils

from .core_types import MatchResult, PencilInfo, pack_argb, unpack_argb  # noqa: E402,F401
from .errors import (  # noqa: E402,F401
    EmptyPaletteError,
    ImageDecodeError,
    ImageWriteError,
    InvalidParameterError,
    PaletteFormatError,
    PencelError,
    UnsupportedKernelError,
)
from .kernels import KernelType, kernel_from_name  # noqa: E402,F401
from .resample import resample_image24, resample_rgb  # noqa: E402,F401
from .matcher import best_match, match_image, match_pixels  # noqa: E402,F401
from .palette_data import build_palette, load_palette, parse_palette  # noqa: E402,F401
from .pipeline import PencilGrid, pencilize, pencilize_file  # noqa: E402,F401

__all__ = [
    "__version__",
    "core_types",
    "errors",
    "kernels",
    "metrics",
    "palette_data",
    "utils",
    "MatchResult",
    "PencilInfo",
    "pack_argb",
    "unpack_argb",
    "PencelError",
    "InvalidParameterError",
    "UnsupportedKernelError",
    "EmptyPaletteError",
    "PaletteFormatError",
    "ImageDecodeError",
    "ImageWriteError",
    "KernelType",
    "kernel_from_name",
    "resample_image24",
    "resample_rgb",
    "best_match",
    "match_pixels",
    "match_image",
    "build_palette",
    "load_palette",
    "parse_palette",
    "PencilGrid",
    "pencilize",
    "pencilize_file",
]
