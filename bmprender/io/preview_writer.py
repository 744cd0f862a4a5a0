"""Grayscale preview of a quantized bitmap."""

import numpy as np
from pathlib import Path
from PIL import Image

from ..constants import PREVIEW_SUFFIX

# Above this depth v * 255 overflows uint64
_MAX_NUMPY_DEPTH = 56


def to_display(values: np.ndarray, color_depth: int, invert: bool = False) -> np.ndarray:
    """
    Scale quantized intensities to 8-bit gray.

    Args:
        values: (height, width) quantized intensities
        color_depth: Bits per pixel the values were quantized to
        invert: Undo the encoder's inversion so the preview matches the source

    Returns:
        uint8 array
    """
    top = (1 << color_depth) - 1
    if color_depth <= _MAX_NUMPY_DEPTH:
        wide = np.asarray(values, dtype=np.uint64)
        scaled = (wide * np.uint64(255) // np.uint64(top)).astype(np.uint8)
    else:
        scaled = (np.asarray(values).astype(object) * 255 // top).astype(np.uint8)

    if invert:
        scaled = 255 - scaled
    return scaled


def write_preview(values: np.ndarray, color_depth: int, dest: str,
                  invert: bool = False) -> Path:
    """
    Write <dest>_preview.bmp showing the bitmap as the display will.

    Args:
        values: (height, width) quantized intensities, e.g. from BitmapDecoder
        color_depth: Bits per pixel
        dest: Output path without extension
        invert: Whether the bitmap was encoded inverted

    Returns:
        Path of the written preview
    """
    path = Path(dest + PREVIEW_SUFFIX)
    Image.fromarray(to_display(values, color_depth, invert)).save(path, format='BMP')
    return path
