"""Bitmap Encoder - Packs quantized pixels into memory blocks."""

import numpy as np
from typing import NamedTuple

from .config import EncodingConfig, ScanDirection
from ..io.block_buffer import BlockWriter
from ..quantization import quantize_samples


class EncodedBitmap(NamedTuple):
    """Packed bitmap: source dimensions plus the flushed blocks in scan order."""
    width: int
    height: int
    data: bytes
    config: EncodingConfig


def calculate_output_size(width: int, height: int, config: EncodingConfig) -> int:
    """
    Number of bytes an encode of a width x height image produces.

    ROW_MAJOR:    bytes_per_block * height * ceil(width / pixels_per_block)
    COLUMN_MAJOR: bytes_per_block * width * ceil(height / pixels_per_block)
    """
    if config.scan_direction is ScanDirection.ROW_MAJOR:
        lines, line_length = height, width
    else:
        lines, line_length = width, height

    blocks_per_line = -(-line_length // config.pixels_per_block)
    return config.bytes_per_block * lines * blocks_per_line


def place_field(value, slot: int, config: EncodingConfig):
    """
    Position a quantized value inside a block register.

    Slot 0 takes the most significant color_depth bits of the block, later
    slots move toward bit 0. A slot that runs past bit 0 keeps only the
    high-order bits of its value. value may be an int or a uint64 array.
    """
    shift = config.mem_block_bits - (slot + 1) * config.color_depth
    amount, block_mask = abs(shift), (1 << config.mem_block_bits) - 1
    if isinstance(value, np.ndarray):
        amount, block_mask = np.uint64(amount), np.uint64(block_mask)

    if shift >= 0:
        field = value << amount
    else:
        field = value >> amount
    return field & block_mask


def split_into_slots(lines: np.ndarray, per_block: int) -> np.ndarray:
    """
    Group scan lines into blocks of per_block pixels.

    Lines are zero-padded to a whole number of blocks.

    Args:
        lines: (n_lines, line_length) array
        per_block: Pixels per memory block

    Returns:
        (n_lines, blocks_per_line, per_block) uint64 array
    """
    n_lines, length = lines.shape
    blocks_per_line = -(-length // per_block)

    padded = np.zeros((n_lines, blocks_per_line * per_block), dtype=np.uint64)
    padded[:, :length] = lines
    return padded.reshape(n_lines, blocks_per_line, per_block)


class BitmapEncoder:
    """
    Encoder for firmware bitmaps.

    Pipeline:
    1. Validate configuration
    2. Quantize every sample to color_depth bits
    3. Arrange pixels into scan lines (rows or columns)
    4. Pack each line into memory blocks
    5. Flush blocks little-endian into a pre-sized buffer
    """

    def encode(self, samples: np.ndarray, config: EncodingConfig) -> EncodedBitmap:
        """
        Encode an image.

        Args:
            samples: (height, width, 4) array of 16-bit RGBA samples
            config: Encoding parameters

        Returns:
            EncodedBitmap with the packed bytes

        Raises:
            ConfigurationError: If the parameters cannot be packed
            BufferBoundsError: If packing disagrees with the size law
        """
        config = config.validate()

        if samples.ndim != 3:
            raise ValueError(f"Expected (height, width, 4) samples, got {samples.ndim}D array")

        height, width = samples.shape[:2]

        # Step 1: Quantize
        quantized = quantize_samples(samples, config.color_depth, config.invert)

        # Step 2: Scan lines, one per row or column
        if config.scan_direction is ScanDirection.ROW_MAJOR:
            lines = quantized
        else:
            lines = quantized.T

        # Step 3 & 4: Pack into blocks
        registers = self._pack_lines(lines, config)

        # Step 5: Flush
        writer = BlockWriter(calculate_output_size(width, height, config),
                             config.bytes_per_block)
        writer.write_blocks(registers.ravel())

        return EncodedBitmap(width=width, height=height,
                             data=writer.getvalue(), config=config)

    def _pack_lines(self, lines: np.ndarray, config: EncodingConfig) -> np.ndarray:
        """Pack all scan lines; slots past the end of a line stay zero."""
        slots = split_into_slots(lines, config.pixels_per_block)

        registers = np.zeros(slots.shape[:2], dtype=np.uint64)
        for slot in range(config.pixels_per_block):
            registers |= place_field(slots[:, :, slot], slot, config)
        return registers
