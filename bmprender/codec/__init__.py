"""Codec modules for Bitmap Renderer."""

from .config import EncodingConfig, ScanDirection, parse_scan_direction
from .encoder import BitmapEncoder, EncodedBitmap, calculate_output_size, place_field
from .decoder import BitmapDecoder, extract_field

__all__ = [
    'EncodingConfig',
    'ScanDirection',
    'parse_scan_direction',
    'BitmapEncoder',
    'EncodedBitmap',
    'calculate_output_size',
    'place_field',
    'BitmapDecoder',
    'extract_field',
]
