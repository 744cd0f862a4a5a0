"""Memory usage metrics for packed bitmaps."""

from ..constants import DESCRIPTOR_SIZE, POINTER_SIZE


def dimension_field_size(width: int, height: int) -> int:
    """
    Bytes used by each of the descriptor's width and height fields.

    Returns:
        1 when both dimensions fit in 8 bits, otherwise 2

    Raises:
        ValueError: If a dimension does not fit in 16 bits
    """
    largest = max(width, height)
    if largest <= 0xFF:
        return 1
    if largest <= 0xFFFF:
        return 2
    raise ValueError(f"Bitmap dimensions {width}x{height} exceed 65535 pixels")


def calculate_descriptor_size(width: int, height: int) -> int:
    """Size of the descriptor record: map pointer plus two dimension fields."""
    field = dimension_field_size(width, height)
    if field == 1:
        return DESCRIPTOR_SIZE
    return POINTER_SIZE + 2 * field


def calculate_memory_usage(bitmap) -> dict:
    """
    Calculate the firmware memory taken by a packed bitmap.

    Args:
        bitmap: EncodedBitmap

    Returns:
        Dictionary with 'bitmap', 'descriptor' and 'total' byte counts
    """
    bitmap_bytes = len(bitmap.data)
    descriptor_bytes = calculate_descriptor_size(bitmap.width, bitmap.height)
    return {
        'bitmap': bitmap_bytes,
        'descriptor': descriptor_bytes,
        'total': bitmap_bytes + descriptor_bytes,
    }


def calculate_bpp(byte_count: int, image_shape: tuple) -> float:
    """
    Calculate storage Bits Per Pixel.

    Includes padding bits of partially filled blocks.

    Args:
        byte_count: Size of packed data in bytes
        image_shape: Tuple of (height, width)

    Returns:
        BPP value
    """
    num_pixels = image_shape[0] * image_shape[1]
    if num_pixels == 0:
        return 0.0
    return (byte_count * 8) / num_pixels


def calculate_block_efficiency(config) -> float:
    """
    Fraction of stored block bits that carry pixel data.

    A block stores bytes_per_block * 8 bits but only mem_block_bits of them
    hold fields, and a trailing slot may be cut short at bit 0.
    """
    used = min(config.pixels_per_block * config.color_depth, config.mem_block_bits)
    return used / (config.bytes_per_block * 8)
