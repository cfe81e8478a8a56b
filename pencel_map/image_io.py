# pencel_map/image_io.py
from __future__ import annotations

"""
Image I/O helpers: decode to flat RGB24 buffers and save swatch grids as PNG.
"""

from pathlib import Path
from typing import Sequence, Tuple

import numpy as np
from PIL import Image, ImageOps, UnidentifiedImageError

from .constants import DEFAULT_CELL_PX
from .core_types import MatchResult, PencilInfo, PixelBuffer, U8Image
from .errors import ImageDecodeError, ImageWriteError, InvalidParameterError
from .matcher import matches_to_image


def decode_image_file(path: Path) -> Tuple[PixelBuffer, int, int]:
    """
    Decode any Pillow-readable image into (flat RGB24 buffer, width, height).
    EXIF orientation is applied and alpha is dropped.
    """
    try:
        with Image.open(path) as im0:
            im = ImageOps.exif_transpose(im0)
            rgb = np.array(im.convert("RGB"), dtype=np.uint8)
    except FileNotFoundError as e:
        raise ImageDecodeError(f"decoder error: file not found: {path}") from e
    except (UnidentifiedImageError, OSError) as e:
        raise ImageDecodeError(f"decoder error: {e}") from e
    height, width = int(rgb.shape[0]), int(rgb.shape[1])
    if width == 0 or height == 0:
        raise ImageDecodeError(f"decoder error: empty image {path}")
    return np.ascontiguousarray(rgb).reshape(-1), width, height


def save_rgb_png(path: Path, rgb: U8Image, cell: int = 1) -> Path:
    """Save an (H,W,3) image, each pixel upscaled to cell x cell."""
    if path.suffix.lower() != ".png":
        path = path.with_suffix(".png")
    if cell < 1:
        raise InvalidParameterError(f"cell size must be >= 1, got {cell}")
    im = Image.fromarray(np.ascontiguousarray(rgb, dtype=np.uint8))
    if cell > 1:
        im = im.resize((im.width * cell, im.height * cell), Image.Resampling.NEAREST)
    try:
        im.save(path)
    except OSError as e:
        raise ImageWriteError(f"cannot write {path}: {e}") from e
    return path


def save_grid_png(
    path: Path,
    matches: Sequence[MatchResult],
    width: int,
    height: int,
    palette: Sequence[PencilInfo],
    cell: int = DEFAULT_CELL_PX,
) -> Path:
    """Render matched pencil tones to a PNG with cell x cell swatches."""
    return save_rgb_png(path, matches_to_image(matches, width, height, palette), cell)


__all__ = ["decode_image_file", "save_rgb_png", "save_grid_png"]
