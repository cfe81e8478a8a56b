# pencel_map/resample.py
from __future__ import annotations

"""
Separable two-pass resampling of RGB24 pixel buffers.

A horizontal pass maps every source row to the destination width into an
intermediate (dst_w x src_h) buffer; a vertical pass then maps that buffer to
the destination height. The intermediate buffer is local to one call.

Exports:
  as_pixel_buffer(src, width, height) -> PixelBuffer
  resample_image24(src, src_w, src_h, dst_w, dst_h, kernel, workers) -> PixelBuffer
  resample_rgb(image, dst_w, dst_h, kernel, workers) -> U8Image
"""

from typing import Union

import numpy as np

from .core_types import PixelBuffer, U8Image, assert_u8_image_rgb
from .errors import InvalidParameterError
from .kernels import KernelDirection, KernelType, get_sampler
from .utils import run_row_bands

BufferLike = Union[bytes, bytearray, memoryview, np.ndarray]


def as_pixel_buffer(src: BufferLike | None, width: int, height: int) -> PixelBuffer:
    """
    View src as a flat uint8 RGB24 buffer of width*height*3 bytes.
    Accepts bytes-like objects, flat arrays and (H,W,3) arrays. Never copies
    unless the array is non-contiguous, and never writes.
    """
    if src is None:
        raise InvalidParameterError("source buffer is missing")
    if isinstance(src, (bytes, bytearray, memoryview)):
        arr = np.frombuffer(src, dtype=np.uint8)
    else:
        arr = np.asarray(src)
        if arr.dtype != np.uint8:
            raise InvalidParameterError(f"expected uint8 pixels, got {arr.dtype}")
        arr = arr.reshape(-1)
    expected = int(width) * int(height) * 3
    if arr.size != expected:
        raise InvalidParameterError(
            f"buffer holds {arr.size} bytes, expected {expected} for {width}x{height} RGB24"
        )
    return arr


def _axis_coords(src_size: int, dst_size: int) -> np.ndarray:
    # i * (src-1) / (dst-1) lands exactly on src-1 for the last index
    idx = np.arange(dst_size, dtype=np.float64)
    if dst_size == 1:
        return idx
    return (idx * (src_size - 1)) / (dst_size - 1)


def resample_image24(
    src: BufferLike | None,
    src_w: int,
    src_h: int,
    dst_w: int,
    dst_h: int,
    kernel: KernelType = KernelType.BILINEAR,
    workers: int = 1,
) -> PixelBuffer:
    """
    Resize a flat RGB24 buffer from src_w x src_h to dst_w x dst_h.

    Raises:
      InvalidParameterError  : zero size, missing or mis-sized buffer, UNKNOWN kernel
      UnsupportedKernelError : kernel declared but without a sampling strategy
    Returns:
      new flat uint8 buffer of dst_w*dst_h*3 bytes
    """
    dims = (("src_w", src_w), ("src_h", src_h), ("dst_w", dst_w), ("dst_h", dst_h))
    for name, value in dims:
        if value is None or int(value) <= 0:
            raise InvalidParameterError(f"{name} must be a positive integer, got {value!r}")
    src_w, src_h, dst_w, dst_h = int(src_w), int(src_h), int(dst_w), int(dst_h)

    sampler = get_sampler(kernel)
    buf = as_pixel_buffer(src, src_w, src_h)

    if src_w == dst_w and src_h == dst_h:
        return buf.copy()

    image = buf.reshape(src_h, src_w, 3)
    fx = _axis_coords(src_w, dst_w)
    fy = _axis_coords(src_h, dst_h)

    h_bands = run_row_bands(
        src_h,
        workers,
        lambda s, e: sampler(image[s:e], fx, KernelDirection.HORIZONTAL),
    )
    intermediate = np.concatenate(h_bands, axis=0)

    v_bands = run_row_bands(
        dst_h,
        workers,
        lambda s, e: sampler(intermediate, fy[s:e], KernelDirection.VERTICAL),
    )
    dst = np.concatenate(v_bands, axis=0)
    return np.ascontiguousarray(dst, dtype=np.uint8).reshape(-1)


def resample_rgb(
    image: U8Image,
    dst_w: int,
    dst_h: int,
    kernel: KernelType = KernelType.BILINEAR,
    workers: int = 1,
) -> U8Image:
    """(H,W,3) convenience wrapper around resample_image24."""
    img = assert_u8_image_rgb(np.asarray(image))
    h, w = int(img.shape[0]), int(img.shape[1])
    flat = resample_image24(img, w, h, dst_w, dst_h, kernel, workers)
    return flat.reshape(int(dst_h), int(dst_w), 3)


__all__ = [
    "as_pixel_buffer",
    "resample_image24",
    "resample_rgb",
]
