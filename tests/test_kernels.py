import numpy as np
import pytest

from pencel_map.errors import InvalidParameterError, UnsupportedKernelError
from pencel_map.kernels import (
    KernelDirection,
    KernelType,
    get_sampler,
    kernel_from_name,
    sample_bilinear,
    supported_kernels,
)


def test_only_bilinear_has_a_sampler():
    assert supported_kernels() == [KernelType.BILINEAR]
    assert get_sampler(KernelType.BILINEAR) is sample_bilinear


def test_get_sampler_distinguishes_invalid_from_unsupported():
    with pytest.raises(InvalidParameterError):
        get_sampler(KernelType.UNKNOWN)
    with pytest.raises(InvalidParameterError):
        get_sampler("bilinear")
    with pytest.raises(UnsupportedKernelError) as info:
        get_sampler(KernelType.GAUSSIAN)
    assert info.value.kernel == "gaussian"


@pytest.mark.parametrize(
    "name,expected",
    [
        ("bilinear", KernelType.BILINEAR),
        ("Lanczos3", KernelType.LANCZOS3),
        ("b-spline", KernelType.BSPLINE),
        ("catmull-rom", KernelType.CATMULL),
        ("  NEAREST ", KernelType.NEAREST),
    ],
)
def test_kernel_from_name(name, expected):
    assert kernel_from_name(name) is expected


def test_kernel_from_name_rejects_unknown_names():
    with pytest.raises(InvalidParameterError):
        kernel_from_name("sinc")
    with pytest.raises(InvalidParameterError):
        kernel_from_name("unknown")


def test_vertical_sampling_clamps_last_row():
    image = np.array([[[0, 0, 0]], [[100, 50, 10]]], dtype=np.uint8)  # 2 rows, 1 col
    out = sample_bilinear(image, np.array([0.0, 0.5, 1.0, 1.5]), KernelDirection.VERTICAL)
    assert out.shape == (4, 1, 3)
    assert out[:, 0, 0].tolist() == [0, 50, 100, 100]
    assert out[1, 0].tolist() == [50, 25, 5]


def test_horizontal_sampling_keeps_rows():
    image = np.array([[[0, 0, 0], [10, 20, 30]], [[40, 40, 40], [0, 0, 0]]], dtype=np.uint8)
    out = sample_bilinear(image, np.array([0.25]), KernelDirection.HORIZONTAL)
    assert out.shape == (2, 1, 3)
    assert out[0, 0].tolist() == [2, 5, 7]
    assert out[1, 0].tolist() == [30, 30, 30]
