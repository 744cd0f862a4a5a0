"""I/O modules for Bitmap Renderer."""

from .image_reader import read_image, get_image_info
from .block_buffer import BlockWriter, BlockReader
from .header_writer import sanitize_output_path, format_byte_array, render_header, write_header
from .preview_writer import to_display, write_preview

__all__ = [
    'read_image',
    'get_image_info',
    'BlockWriter',
    'BlockReader',
    'sanitize_output_path',
    'format_byte_array',
    'render_header',
    'write_header',
    'to_display',
    'write_preview',
]
