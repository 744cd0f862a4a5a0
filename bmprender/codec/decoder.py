"""Bitmap Decoder - Unpacks memory blocks back into quantized pixels."""

import numpy as np

from .config import ScanDirection
from .encoder import EncodedBitmap, calculate_output_size
from ..io.block_buffer import BlockReader


def extract_field(register, slot: int, config):
    """
    Inverse of place_field: read slot's value back out of a register.

    register may be an int or a uint64 array.
    """
    shift = config.mem_block_bits - (slot + 1) * config.color_depth
    mask = (1 << config.color_depth) - 1

    # Partial slot: only the top (depth + shift) bits were stored
    kept = (1 << (config.color_depth + shift)) - 1 if shift < 0 else 0
    amount = abs(shift)
    if isinstance(register, np.ndarray):
        mask, kept, amount = np.uint64(mask), np.uint64(kept), np.uint64(amount)

    if shift >= 0:
        return (register >> amount) & mask
    return ((register & kept) << amount) & mask


class BitmapDecoder:
    """
    Decoder for firmware bitmaps.

    Pipeline (reverse of encoder):
    1. Verify buffer size against the size law
    2. Read all blocks
    3. Extract each slot's field
    4. Rearrange scan lines into an image grid
    """

    def decode(self, bitmap: EncodedBitmap) -> np.ndarray:
        """
        Decode a packed bitmap.

        Args:
            bitmap: Output of BitmapEncoder.encode

        Returns:
            (height, width) uint64 array of quantized intensities

        Raises:
            ValueError: If the data length does not match the dimensions
        """
        config = bitmap.config.validate()
        width, height = bitmap.width, bitmap.height

        expected = calculate_output_size(width, height, config)
        if len(bitmap.data) != expected:
            raise ValueError(f"Data size mismatch. Expected {expected}, got {len(bitmap.data)}")

        if config.scan_direction is ScanDirection.ROW_MAJOR:
            n_lines, line_length = height, width
        else:
            n_lines, line_length = width, height

        per_block = config.pixels_per_block
        blocks_per_line = -(-line_length // per_block)

        reader = BlockReader(bitmap.data, config.bytes_per_block)
        registers = reader.read_blocks(n_lines * blocks_per_line)

        slots = np.zeros((n_lines * blocks_per_line, per_block), dtype=np.uint64)
        for slot in range(per_block):
            slots[:, slot] = extract_field(registers, slot, config)

        lines = slots.reshape(n_lines, blocks_per_line * per_block)[:, :line_length]

        if config.scan_direction is ScanDirection.ROW_MAJOR:
            return np.ascontiguousarray(lines)
        return np.ascontiguousarray(lines.T)
