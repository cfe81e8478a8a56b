# pencel_map/matcher.py
from __future__ import annotations

"""
Nearest pencil tone search.

Each palette entry contributes two candidates, heavy then light, so the search
space is the flattened list [(0, heavy), (0, light), (1, heavy), ...]. A
candidate only replaces the running best when it is strictly closer, so the
first candidate reaching the minimum wins every tie.

Exports:
  candidate_table(palette) -> (cand_rgb[2P,3], keys)
  best_match(colour, palette, metric) -> MatchResult
  match_pixels(pixels, width, height, palette, metric, workers) -> list[MatchResult]
  match_image(image, palette, metric, workers) -> list[MatchResult]
  matches_to_image(matches, width, height, palette) -> U8Image
"""

import math
from typing import List, Sequence, Tuple

import numpy as np

from .constants import DEFAULT_METRIC
from .core_types import (
    Colour,
    MatchResult,
    PencilInfo,
    U8Image,
    assert_u8_image_rgb,
    coerce_to_rgb_tuple,
    unpack_argb,
)
from .errors import EmptyPaletteError, InvalidParameterError
from .metrics import DistanceMatrix, get_metric
from .resample import BufferLike, as_pixel_buffer
from .utils import run_row_bands

# Unique colours scored per distance-matrix block.
_CHUNK = 4096


def candidate_table(
    palette: Sequence[PencilInfo],
) -> Tuple[np.ndarray, List[Tuple[int, bool]]]:
    """
    Flatten the palette into scan order.

    Returns:
      cand_rgb: uint8 [2P,3], heavy and light tones interleaved per entry
      keys: [(entry index, heavy flag), ...] aligned with cand_rgb rows
    """
    if not palette:
        raise EmptyPaletteError("palette has no entries")
    rows: List[Tuple[int, int, int]] = []
    keys: List[Tuple[int, bool]] = []
    for i, info in enumerate(palette):
        rows.append(unpack_argb(info.heavy))
        keys.append((i, True))
        rows.append(unpack_argb(info.light))
        keys.append((i, False))
    return np.array(rows, dtype=np.uint8), keys


def best_match(
    colour: Colour, palette: Sequence[PencilInfo], metric: str = DEFAULT_METRIC
) -> MatchResult:
    """Closest heavy or light tone to colour; first candidate wins ties."""
    fn = get_metric(metric)
    cand_rgb, keys = candidate_table(palette)
    pixel = np.array([coerce_to_rgb_tuple(colour)], dtype=np.uint8)
    distances = fn(pixel, cand_rgb)[0]

    result = MatchResult(index=0, heavy=True, distance=math.inf)
    for (index, heavy), dist in zip(keys, distances.tolist()):
        if dist < result.distance:
            result = MatchResult(index=index, heavy=heavy, distance=float(dist))
    return result


def _nearest_rows(
    colours: np.ndarray, cand_rgb: np.ndarray, fn: DistanceMatrix
) -> Tuple[np.ndarray, np.ndarray]:
    """Per colour row: index of the first minimal candidate and its distance."""
    n = colours.shape[0]
    best_idx = np.empty((n,), dtype=np.int64)
    best_dist = np.empty((n,), dtype=np.float64)
    for start in range(0, n, _CHUNK):
        block = fn(colours[start : start + _CHUNK], cand_rgb)
        # argmin returns the first occurrence, matching the strict-less scan
        idx = np.argmin(block, axis=1)
        best_idx[start : start + block.shape[0]] = idx
        best_dist[start : start + block.shape[0]] = block[np.arange(block.shape[0]), idx]
    return best_idx, best_dist


def match_pixels(
    pixels: BufferLike,
    width: int,
    height: int,
    palette: Sequence[PencilInfo],
    metric: str = DEFAULT_METRIC,
    workers: int = 1,
) -> List[MatchResult]:
    """
    Match every pixel of a flat RGB24 buffer, returned in row-major order.

    Distances are computed once per unique colour; workers > 1 splits the
    unique colours into bands scored on a thread pool.
    """
    if int(width) <= 0 or int(height) <= 0:
        raise InvalidParameterError(f"invalid grid size {width}x{height}")
    fn = get_metric(metric)
    cand_rgb, keys = candidate_table(palette)
    buf = as_pixel_buffer(pixels, width, height)

    uniques, inverse = np.unique(buf.reshape(-1, 3), axis=0, return_inverse=True)
    inverse = np.asarray(inverse).reshape(-1)

    bands = run_row_bands(
        uniques.shape[0],
        workers,
        lambda s, e: _nearest_rows(uniques[s:e], cand_rgb, fn),
    )
    best_idx = np.concatenate([b[0] for b in bands])
    best_dist = np.concatenate([b[1] for b in bands])

    per_unique: List[MatchResult] = []
    for j, dist in zip(best_idx.tolist(), best_dist.tolist()):
        index, heavy = keys[j]
        per_unique.append(MatchResult(index=index, heavy=heavy, distance=float(dist)))
    return [per_unique[k] for k in inverse.tolist()]


def match_image(
    image: U8Image,
    palette: Sequence[PencilInfo],
    metric: str = DEFAULT_METRIC,
    workers: int = 1,
) -> List[MatchResult]:
    """(H,W,3) convenience wrapper around match_pixels."""
    img = assert_u8_image_rgb(np.asarray(image))
    return match_pixels(img, img.shape[1], img.shape[0], palette, metric, workers)


def matches_to_image(
    matches: Sequence[MatchResult],
    width: int,
    height: int,
    palette: Sequence[PencilInfo],
) -> U8Image:
    """Chosen tone of every match as an (H,W,3) image."""
    if len(matches) != int(width) * int(height):
        raise InvalidParameterError(
            f"{len(matches)} matches do not fill a {width}x{height} grid"
        )
    rgb = [unpack_argb(m.colour(palette)) for m in matches]
    return np.array(rgb, dtype=np.uint8).reshape(int(height), int(width), 3)


__all__ = [
    "candidate_table",
    "best_match",
    "match_pixels",
    "match_image",
    "matches_to_image",
]
