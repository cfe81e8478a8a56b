import numpy as np
import pytest
from PIL import Image

from pencel_map.core_types import PencilInfo
from pencel_map.errors import EmptyPaletteError, InvalidParameterError, UnsupportedKernelError
from pencel_map.kernels import KernelType
from pencel_map.pipeline import pencilize, pencilize_file

PALETTE = [
    PencilInfo("Red", 0xFF0000, 0xFF8080),
    PencilInfo("Green", 0x00FF00, 0x80FF80),
    PencilInfo("Blue", 0x0000FF, 0x8080FF),
    PencilInfo("White", 0xFFFFFF, 0xEEEEEE),
]


def _quadrants() -> np.ndarray:
    img = np.zeros((4, 4, 3), dtype=np.uint8)
    img[:2, :2] = (255, 0, 0)
    img[:2, 2:] = (0, 255, 0)
    img[2:, :2] = (0, 0, 255)
    img[2:, 2:] = (255, 255, 255)
    return img


def test_pencilize_scan_order():
    img = _quadrants()
    grid = pencilize(img.reshape(-1), 4, 4, PALETTE, width=2, height=2)
    assert (grid.width, grid.height) == (2, 2)
    assert grid.pixels.size == 2 * 2 * 3
    assert [m.index for m in grid.matches] == [0, 1, 2, 3]
    assert grid.match_at(1, 0).index == 1
    assert grid.match_at(0, 1).index == 2
    assert grid.colours(PALETTE) == [0xFF0000, 0x00FF00, 0x0000FF, 0xFFFFFF]
    assert grid.to_image(PALETTE).shape == (2, 2, 3)
    assert grid.resized_image()[1, 1].tolist() == [255, 255, 255]


def test_pencilize_fails_fast():
    img = _quadrants().reshape(-1)
    with pytest.raises(EmptyPaletteError):
        pencilize(img, 4, 4, [], width=2, height=2)
    with pytest.raises(InvalidParameterError):
        pencilize(img, 4, 4, PALETTE, metric="nope")
    with pytest.raises(UnsupportedKernelError):
        pencilize(img, 4, 4, PALETTE, kernel=KernelType.BICUBIC)
    with pytest.raises(InvalidParameterError):
        pencilize(img, 4, 4, PALETTE, width=0, height=2)


def test_pencilize_file(tmp_path):
    path = tmp_path / "quad.png"
    Image.fromarray(_quadrants()).save(path)
    grid = pencilize_file(path, PALETTE, width=2, height=2)
    assert [(m.index, m.heavy) for m in grid.matches] == [
        (0, True),
        (1, True),
        (2, True),
        (3, True),
    ]
