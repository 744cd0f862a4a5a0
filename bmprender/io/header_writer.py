"""C header writer for packed bitmaps."""

import re
from pathlib import Path
from typing import Tuple

from ..constants import BYTES_PER_LINE, HEADER_SUFFIX
from ..metrics import calculate_memory_usage, dimension_field_size

_STRUCTS = {
    1: ('__bitmap_t', 'unsigned char'),
    2: ('__bitmap16_t', 'unsigned short'),
}


def sanitize_output_path(dest: str) -> Tuple[str, str]:
    """
    Clean an output path and derive the C identifier for the bitmap.

    Quotes are stripped, backslashes become forward slashes, and every
    non-alphanumeric character of the base name becomes an underscore.

    Args:
        dest: Output path without extension

    Returns:
        Tuple of (cleaned path, identifier)

    Raises:
        ValueError: If no base name remains
    """
    dest = dest.replace("'", '').replace('"', '').replace('\\', '/')

    base = dest[dest.rfind('/') + 1:]
    if not base:
        raise ValueError(f"Output path has no file name: {dest!r}")

    name = re.sub(r'[^0-9A-Za-z]', '_', base)
    if name[0].isdigit():
        name = '_' + name

    return dest, name


def format_byte_array(data: bytes, per_line: int = BYTES_PER_LINE) -> str:
    """Format bytes as tab-indented 0xNN, lines of per_line bytes."""
    lines = []
    for i in range(0, len(data), per_line):
        chunk = data[i:i + per_line]
        lines.append('\t' + ''.join(f'0x{b:02X},' for b in chunk) + '\n')
    return ''.join(lines)


def render_header(bitmap, name: str) -> str:
    """
    Render the header text for a bitmap.

    Args:
        bitmap: EncodedBitmap
        name: C identifier from sanitize_output_path

    Returns:
        Complete header file contents
    """
    guard = f'__BITMAP_{name.upper()}_H'
    usage = calculate_memory_usage(bitmap)
    struct_name, field_type = _STRUCTS[dimension_field_size(bitmap.width, bitmap.height)]
    struct_guard = f'{struct_name.upper()}_DEFINED'

    parts = [
        f'#ifndef {guard}\n',
        f'#define {guard}\n\n',
        f'//\t{name} bitmap\n'
        f'//\n'
        f'//\tMemory usage\n'
        f'//\t\tBitmap: {usage["bitmap"]}\n'
        f'//\t\tDescriptor: {usage["descriptor"]}\n'
        f'//\n'
        f'//\t\tTotal: {usage["total"]}\n'
        f'//\n\n',
        f'#ifndef {struct_guard}\n'
        f'#define {struct_guard}\n'
        f'typedef struct {{\n'
        f'\tconst unsigned char *map;\n'
        f'\t{field_type} w;\n'
        f'\t{field_type} h;\n'
        f'}} {struct_name};\n'
        f'#endif\n\n',
        f'const unsigned char __{name}_map[] = {{\n',
        format_byte_array(bitmap.data),
        '};\n\n',
        f'const {struct_name} {name}_bmp = {{\n'
        f'\t.map = __{name}_map,\n'
        f'\t.w = {bitmap.width},\n'
        f'\t.h = {bitmap.height},\n'
        f'}};\n\n',
        f'#endif // {guard}\n',
    ]
    return ''.join(parts)


def write_header(bitmap, dest: str) -> Path:
    """
    Write <dest>_bmp.h for a bitmap.

    Args:
        bitmap: EncodedBitmap
        dest: Output path without extension

    Returns:
        Path of the written header
    """
    dest, name = sanitize_output_path(dest)
    text = render_header(bitmap, name)

    path = Path(dest + HEADER_SUFFIX)
    with open(path, 'w', newline='\n') as f:
        f.write(text)
    return path
