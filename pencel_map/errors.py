# pencel_map/errors.py
from __future__ import annotations

"""
Exception types raised by the resampler, matcher and their collaborators.
"""


class PencelError(Exception):
    pass


class InvalidParameterError(PencelError, ValueError):
    """Zero dimension, missing or mis-sized buffer, or unknown kernel/metric."""


class UnsupportedKernelError(PencelError):
    """Kernel is a recognised identifier without a sampling strategy."""

    def __init__(self, kernel: object) -> None:
        super().__init__(f"kernel type not implemented: {kernel}")
        self.kernel = kernel


class EmptyPaletteError(PencelError, ValueError):
    pass


class PaletteFormatError(PencelError, ValueError):
    def __init__(self, message: str, line_no: int | None = None) -> None:
        text = f"line {line_no}: {message}" if line_no is not None else message
        super().__init__(text)
        self.line_no = line_no


class ImageDecodeError(PencelError):
    pass


class ImageWriteError(PencelError):
    pass


__all__ = [
    "PencelError",
    "InvalidParameterError",
    "UnsupportedKernelError",
    "EmptyPaletteError",
    "PaletteFormatError",
    "ImageDecodeError",
    "ImageWriteError",
]
