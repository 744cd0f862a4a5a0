"""Fixed-size block buffer for packed bitmap data."""

import numpy as np

from ..errors import BufferBoundsError


class BlockWriter:
    """Block-level writer into a pre-sized byte buffer."""

    def __init__(self, size: int, bytes_per_block: int):
        """
        Initialize block writer.

        Args:
            size: Exact number of bytes the finished buffer holds
            bytes_per_block: Bytes emitted per memory block
        """
        if bytes_per_block <= 0:
            raise ValueError(f"Block width must be positive, got {bytes_per_block} bytes")

        self.buffer = bytearray(size)
        self.bytes_per_block = bytes_per_block
        self.byte_ptr = 0

    def write_block(self, register: int) -> None:
        """Write a block register as little-endian bytes."""
        end = self.byte_ptr + self.bytes_per_block
        if end > len(self.buffer):
            raise BufferBoundsError(
                f"Block write at byte {self.byte_ptr} overruns "
                f"{len(self.buffer)}-byte buffer")

        mask = (1 << (8 * self.bytes_per_block)) - 1
        self.buffer[self.byte_ptr:end] = (register & mask).to_bytes(self.bytes_per_block, 'little')
        self.byte_ptr = end

    def write_blocks(self, registers: np.ndarray) -> None:
        """Write a run of block registers (uint64 array, blocks of at most 8 bytes)."""
        count = len(registers)
        end = self.byte_ptr + count * self.bytes_per_block
        if end > len(self.buffer):
            raise BufferBoundsError(
                f"Writing {count} blocks at byte {self.byte_ptr} overruns "
                f"{len(self.buffer)}-byte buffer")

        raw = np.asarray(registers, dtype=np.uint64).astype('<u8').view(np.uint8)
        self.buffer[self.byte_ptr:end] = raw.reshape(count, 8)[:, :self.bytes_per_block].tobytes()
        self.byte_ptr = end

    def bytes_remaining(self) -> int:
        """Return number of unwritten bytes."""
        return len(self.buffer) - self.byte_ptr

    def getvalue(self) -> bytes:
        """
        Return the finished buffer.

        Raises:
            BufferBoundsError: If fewer blocks were written than the buffer holds
        """
        if self.byte_ptr != len(self.buffer):
            raise BufferBoundsError(
                f"Buffer incomplete: {self.byte_ptr} of {len(self.buffer)} bytes written")
        return bytes(self.buffer)


class BlockReader:
    """Block-level reader for packed bitmap data."""

    def __init__(self, data: bytes, bytes_per_block: int):
        """
        Initialize block reader.

        Args:
            data: Packed bytes to read from
            bytes_per_block: Bytes per memory block
        """
        if bytes_per_block <= 0:
            raise ValueError(f"Block width must be positive, got {bytes_per_block} bytes")

        self.data = data
        self.bytes_per_block = bytes_per_block
        self.byte_ptr = 0

    def read_block(self) -> int:
        """Read one little-endian block register."""
        end = self.byte_ptr + self.bytes_per_block
        if end > len(self.data):
            raise EOFError("End of block buffer")

        register = int.from_bytes(self.data[self.byte_ptr:end], 'little')
        self.byte_ptr = end
        return register

    def read_blocks(self, count: int) -> np.ndarray:
        """Read count little-endian block registers as a uint64 array."""
        end = self.byte_ptr + count * self.bytes_per_block
        if end > len(self.data):
            raise EOFError("End of block buffer")
        if count == 0:
            return np.zeros(0, dtype=np.uint64)

        raw = np.zeros((count, 8), dtype=np.uint8)
        raw[:, :self.bytes_per_block] = np.frombuffer(
            self.data, dtype=np.uint8, count=end - self.byte_ptr, offset=self.byte_ptr
        ).reshape(count, self.bytes_per_block)
        self.byte_ptr = end
        return raw.view('<u8').reshape(count).astype(np.uint64)

    def blocks_remaining(self) -> int:
        """Return number of full blocks remaining."""
        return (len(self.data) - self.byte_ptr) // self.bytes_per_block
