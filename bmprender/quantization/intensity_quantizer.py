"""Grayscale intensity quantization for 16-bit RGBA samples."""

import numpy as np

from ..constants import CHANNEL_MAX

# Above this depth c * mask overflows uint64
_MAX_NUMPY_DEPTH = 48


def remap(value, from_min, from_max, to_min, to_max):
    """
    Linearly remap value from [from_min, from_max] to [to_min, to_max].

    Integer inputs are truncated at each step; the multiplication is done
    before the division so that results are bit-exact.
    """
    return to_min + (value - from_min) * (to_max - to_min) // (from_max - from_min)


def field_mask(color_depth: int) -> int:
    """Return the all-ones mask for a color_depth-bit field."""
    return (1 << color_depth) - 1


def quantize_intensity(r: int, g: int, b: int, color_depth: int,
                       invert: bool = False) -> int:
    """
    Quantize one sample to an unsigned color_depth-bit intensity.

    Args:
        r, g, b: Channel values in [0, 65535]
        color_depth: Bits per pixel
        invert: Negate the intensity before remapping

    Returns:
        Integer in [0, 2^color_depth - 1]
    """
    c = (int(r) + int(g) + int(b)) // 3
    if invert:
        c = CHANNEL_MAX - c

    mask = field_mask(color_depth)
    return remap(c, 0, CHANNEL_MAX, 0, mask) & mask


def quantize_samples(samples: np.ndarray, color_depth: int,
                     invert: bool = False) -> np.ndarray:
    """
    Quantize a whole sample grid.

    Same arithmetic as quantize_intensity, applied to every pixel at once.

    Args:
        samples: (height, width, 4) array of 16-bit RGBA samples
        color_depth: Bits per pixel
        invert: Negate intensities before remapping

    Returns:
        (height, width) array of quantized values. dtype is uint64, or
        object (Python ints) for depths too wide for uint64 arithmetic.
    """
    if samples.ndim != 3 or samples.shape[2] < 3:
        raise ValueError(f"Expected (height, width, 4) samples, got shape {samples.shape}")

    rgb = samples[:, :, :3].astype(np.uint64)
    c = rgb.sum(axis=2) // np.uint64(3)
    if invert:
        c = np.uint64(CHANNEL_MAX) - c

    mask = field_mask(color_depth)
    if color_depth <= _MAX_NUMPY_DEPTH:
        zero, top, umask = np.uint64(0), np.uint64(CHANNEL_MAX), np.uint64(mask)
        return remap(c, zero, top, zero, umask) & umask

    c = c.astype(object)
    return remap(c, 0, CHANNEL_MAX, 0, mask) & mask
