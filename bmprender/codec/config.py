"""Encoding parameters for the block packer."""

import operator
from enum import Enum
from typing import NamedTuple

from ..constants import DEFAULT_COLOR_DEPTH, DEFAULT_MEM_BLOCK_BITS, MAX_BLOCK_BITS
from ..errors import ConfigurationError


class ScanDirection(Enum):
    """Order in which pixels are grouped into memory blocks."""
    ROW_MAJOR = 'horizontal'
    COLUMN_MAJOR = 'vertical'


_DIRECTION_NAMES = {
    'hor': ScanDirection.ROW_MAJOR,
    'horizontal': ScanDirection.ROW_MAJOR,
    'row': ScanDirection.ROW_MAJOR,
    'ver': ScanDirection.COLUMN_MAJOR,
    'vertical': ScanDirection.COLUMN_MAJOR,
    'column': ScanDirection.COLUMN_MAJOR,
}


def parse_scan_direction(name: str) -> ScanDirection:
    """Map a command line direction name to a ScanDirection."""
    try:
        return _DIRECTION_NAMES[name.strip().lower()]
    except KeyError:
        raise ConfigurationError(
            f"Unknown memory direction: {name!r} "
            f"(expected one of {', '.join(sorted(_DIRECTION_NAMES))})"
        ) from None


class EncodingConfig(NamedTuple):
    """
    Immutable parameter set for one encode.

    Attributes:
        color_depth: Bits per pixel (1-64)
        mem_block_bits: Bits per memory block (color_depth-64)
        scan_direction: ROW_MAJOR or COLUMN_MAJOR
        invert: Negate intensities before quantization
    """
    color_depth: int = DEFAULT_COLOR_DEPTH
    mem_block_bits: int = DEFAULT_MEM_BLOCK_BITS
    scan_direction: ScanDirection = ScanDirection.ROW_MAJOR
    invert: bool = False

    @property
    def pixels_per_block(self) -> int:
        return -(-self.mem_block_bits // self.color_depth)

    @property
    def bytes_per_block(self) -> int:
        return -(-self.mem_block_bits // 8)

    def validate(self) -> 'EncodingConfig':
        """
        Check the parameters can be packed.

        Integer-like values (e.g. numpy integers) are converted to int.

        Returns:
            The config with plain int fields, so calls can be chained

        Raises:
            ConfigurationError: On non-integer, degenerate or overflowing parameters
        """
        if not isinstance(self.scan_direction, ScanDirection):
            raise ConfigurationError(f"Invalid scan direction: {self.scan_direction!r}")

        try:
            color_depth = operator.index(self.color_depth)
            mem_block_bits = operator.index(self.mem_block_bits)
        except TypeError:
            raise ConfigurationError(
                f"Color depth and memory block size must be integers, got "
                f"{self.color_depth!r} and {self.mem_block_bits!r}") from None

        if not 1 <= color_depth <= MAX_BLOCK_BITS:
            raise ConfigurationError(
                f"Color depth must be in range [1, {MAX_BLOCK_BITS}], got {color_depth}")

        if not 1 <= mem_block_bits <= MAX_BLOCK_BITS:
            raise ConfigurationError(
                f"Memory block size must be in range [1, {MAX_BLOCK_BITS}], "
                f"got {mem_block_bits}")

        if color_depth > mem_block_bits:
            raise ConfigurationError(
                f"Color depth ({color_depth} bits) does not fit in a "
                f"{mem_block_bits}-bit memory block")

        return self._replace(color_depth=color_depth, mem_block_bits=mem_block_bits,
                             invert=bool(self.invert))
