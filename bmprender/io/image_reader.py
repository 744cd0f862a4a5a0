"""Raster image reader supporting PNG and BMP formats."""

import numpy as np
from pathlib import Path
from PIL import Image, UnidentifiedImageError

from ..constants import CHANNEL_EXPAND, CHANNEL_MAX, SUPPORTED_EXTENSIONS
from ..errors import ImageInputError

# Pillow modes holding 16-bit (or wider) single-channel data
_WIDE_GRAY_MODES = ('I;16', 'I;16L', 'I;16B', 'I')


def read_image(path: str) -> np.ndarray:
    """
    Read a raster image as 16-bit RGBA samples.

    8-bit channels are expanded to 16 bits (v * 0x101) and color channels
    are premultiplied by alpha, so transparent pixels read as black.

    16-bit grayscale PNGs keep their full precision. Pillow decodes 16-bit
    RGB/RGBA PNGs to 8 bits per channel, so only the high byte of each
    channel survives there (v16 >> 8) * 0x101; above depth 8 such sources
    quantize slightly differently from a full 16-bit decode.

    Args:
        path: Path to the image file (.png or .bmp)

    Returns:
        (height, width, 4) uint32 array, channels in [0, 65535]

    Raises:
        ImageInputError: If the file is missing, unsupported or undecodable
    """
    path = Path(path)
    suffix = path.suffix.lower()

    if suffix not in SUPPORTED_EXTENSIONS:
        raise ImageInputError(f"Unsupported file format: {suffix or '(none)'} ({path})")

    if not path.is_file():
        raise ImageInputError(f"Input file not found: {path}")

    try:
        with Image.open(path) as img:
            img.load()
            return _to_samples(img)
    except (OSError, UnidentifiedImageError) as e:
        raise ImageInputError(f"Cannot decode image {path}: {e}") from e


def _to_samples(img: Image.Image) -> np.ndarray:
    """Convert a decoded Pillow image to premultiplied 16-bit RGBA."""
    if img.mode in _WIDE_GRAY_MODES:
        gray = np.clip(np.asarray(img, dtype=np.int64), 0, CHANNEL_MAX).astype(np.uint32)
        alpha = np.full(gray.shape, CHANNEL_MAX, dtype=np.uint32)
        return np.stack([gray, gray, gray, alpha], axis=2)

    rgba = np.asarray(img.convert('RGBA'), dtype=np.uint32) * CHANNEL_EXPAND
    alpha = rgba[:, :, 3:4]
    rgba[:, :, :3] = rgba[:, :, :3] * alpha // CHANNEL_MAX
    return rgba


def get_image_info(path: str) -> dict:
    """
    Get information about a raster image file.

    Returns:
        Dictionary with 'width', 'height', 'mode', 'format'
    """
    path = Path(path)
    try:
        with Image.open(path) as img:
            return {
                'width': img.width,
                'height': img.height,
                'mode': img.mode,
                'format': img.format,
            }
    except (OSError, UnidentifiedImageError) as e:
        raise ImageInputError(f"Cannot read image info from {path}: {e}") from e
