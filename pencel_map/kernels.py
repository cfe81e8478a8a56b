# pencel_map/kernels.py
from __future__ import annotations

"""
Resampling kernels.

Every declared kernel identifier lives in KernelType. Sampling strategies are
bound to identifiers in SAMPLERS; an identifier without an entry there is
recognised but unsupported, and get_sampler() raises UnsupportedKernelError
for it. Adding a kernel means adding its tag and its strategy together.

Exports:
  KernelType, KernelDirection
  Sampler : (image[H,W,3] u8, coords[N] f64, direction) -> u8 image
  SAMPLERS
  get_sampler(kernel) -> Sampler
  kernel_from_name(name) -> KernelType
  supported_kernels() -> list[KernelType]
"""

from enum import Enum
from typing import Callable, Dict, List

import numpy as np

from .core_types import U8Image
from .errors import InvalidParameterError, UnsupportedKernelError


class KernelDirection(Enum):
    HORIZONTAL = "horizontal"
    VERTICAL = "vertical"

    @property
    def axis(self) -> int:
        """Array axis of an (H, W, 3) image that this direction walks."""
        return 1 if self is KernelDirection.HORIZONTAL else 0


class KernelType(Enum):
    UNKNOWN = "unknown"
    NEAREST = "nearest"
    AVERAGE = "average"
    BILINEAR = "bilinear"
    BICUBIC = "bicubic"
    MITCHELL = "mitchell"
    CARDINAL = "cardinal"
    BSPLINE = "bspline"
    LANCZOS = "lanczos"
    LANCZOS2 = "lanczos2"
    LANCZOS3 = "lanczos3"
    LANCZOS4 = "lanczos4"
    LANCZOS5 = "lanczos5"
    CATMULL = "catmull"
    GAUSSIAN = "gaussian"


Sampler = Callable[[U8Image, np.ndarray, KernelDirection], U8Image]


def sample_bilinear(
    image: U8Image, coords: np.ndarray, direction: KernelDirection
) -> U8Image:
    """
    Sample image at continuous coordinates along one axis.

    For each f in coords the two neighbours floor(f) and floor(f)+1 are clamped
    independently to the axis range and mixed by the fractional part. Channels
    are truncated toward zero. The other axis is passed through untouched.

    Args:
      image     : uint8 [H,W,3]
      coords    : float64 [N], non-negative
      direction : HORIZONTAL samples columns, VERTICAL samples rows
    Returns:
      uint8 [H,N,3] (horizontal) or [N,W,3] (vertical)
    """
    axis = direction.axis
    size = image.shape[axis]
    f = np.asarray(coords, dtype=np.float64)
    base = np.floor(f)
    delta = f - base
    sample = base.astype(np.int64)
    idx0 = np.clip(sample, 0, size - 1)
    idx1 = np.clip(sample + 1, 0, size - 1)

    p0 = np.take(image, idx0, axis=axis).astype(np.float64)
    p1 = np.take(image, idx1, axis=axis).astype(np.float64)

    shape = [1, 1, 1]
    shape[axis] = -1
    d = delta.reshape(shape)

    # p0 + (p1 - p0) * d keeps equal neighbours exact
    mixed = p0 + (p1 - p0) * d
    return np.clip(np.trunc(mixed), 0.0, 255.0).astype(np.uint8)


SAMPLERS: Dict[KernelType, Sampler] = {
    KernelType.BILINEAR: sample_bilinear,
}


def get_sampler(kernel: KernelType) -> Sampler:
    """Strategy for kernel; UNKNOWN is invalid, other unbound tags unsupported."""
    if not isinstance(kernel, KernelType) or kernel is KernelType.UNKNOWN:
        raise InvalidParameterError(f"invalid kernel type: {kernel!r}")
    sampler = SAMPLERS.get(kernel)
    if sampler is None:
        raise UnsupportedKernelError(kernel.value)
    return sampler


def kernel_from_name(name: str) -> KernelType:
    """Parse a case-insensitive kernel name such as 'bilinear' or 'Lanczos3'."""
    key = name.strip().lower().replace("-", "").replace("_", "")
    if key == "catmullrom":
        return KernelType.CATMULL
    for kernel in KernelType:
        if kernel.value == key and kernel is not KernelType.UNKNOWN:
            return kernel
    raise InvalidParameterError(f"unknown kernel name: {name!r}")


def supported_kernels() -> List[KernelType]:
    return [k for k in KernelType if k in SAMPLERS]


__all__ = [
    "KernelType",
    "KernelDirection",
    "Sampler",
    "SAMPLERS",
    "sample_bilinear",
    "get_sampler",
    "kernel_from_name",
    "supported_kernels",
]
