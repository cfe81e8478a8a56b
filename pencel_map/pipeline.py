# pencel_map/pipeline.py
from __future__ import annotations

"""
Source buffer -> resized buffer -> per-pixel pencil matches.
"""

from dataclasses import dataclass
from pathlib import Path
from typing import List, Sequence

import numpy as np

from .constants import DEFAULT_GRID_HEIGHT, DEFAULT_GRID_WIDTH, DEFAULT_METRIC
from .core_types import ARGB32, MatchResult, PencilInfo, PixelBuffer, U8Image
from .errors import EmptyPaletteError
from .image_io import decode_image_file
from .kernels import KernelType
from .matcher import match_pixels, matches_to_image
from .metrics import get_metric
from .resample import BufferLike, resample_image24


@dataclass(frozen=True)
class PencilGrid:
    """Resized pixels and their pencil matches, both row-major."""

    width: int
    height: int
    pixels: PixelBuffer
    matches: List[MatchResult]

    def match_at(self, col: int, row: int) -> MatchResult:
        return self.matches[row * self.width + col]

    def colours(self, palette: Sequence[PencilInfo]) -> List[ARGB32]:
        return [m.colour(palette) for m in self.matches]

    def to_image(self, palette: Sequence[PencilInfo]) -> U8Image:
        return matches_to_image(self.matches, self.width, self.height, palette)

    def resized_image(self) -> U8Image:
        return np.asarray(self.pixels).reshape(self.height, self.width, 3)


def pencilize(
    src: BufferLike,
    src_w: int,
    src_h: int,
    palette: Sequence[PencilInfo],
    width: int = DEFAULT_GRID_WIDTH,
    height: int = DEFAULT_GRID_HEIGHT,
    kernel: KernelType = KernelType.BILINEAR,
    metric: str = DEFAULT_METRIC,
    workers: int = 1,
) -> PencilGrid:
    """
    Resize src to width x height and match every pixel against palette.
    Palette and metric are checked before any resampling work.
    """
    if not palette:
        raise EmptyPaletteError("palette has no entries")
    get_metric(metric)
    resized = resample_image24(src, src_w, src_h, width, height, kernel, workers)
    matches = match_pixels(resized, width, height, palette, metric, workers)
    return PencilGrid(width=int(width), height=int(height), pixels=resized, matches=matches)


def pencilize_file(
    path: Path,
    palette: Sequence[PencilInfo],
    width: int = DEFAULT_GRID_WIDTH,
    height: int = DEFAULT_GRID_HEIGHT,
    kernel: KernelType = KernelType.BILINEAR,
    metric: str = DEFAULT_METRIC,
    workers: int = 1,
) -> PencilGrid:
    """Decode path then run pencilize()."""
    buf, src_w, src_h = decode_image_file(path)
    return pencilize(buf, src_w, src_h, palette, width, height, kernel, metric, workers)


__all__ = ["PencilGrid", "pencilize", "pencilize_file"]
