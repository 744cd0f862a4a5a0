"""Memory metrics for Bitmap Renderer."""

from .memory import (
    dimension_field_size,
    calculate_descriptor_size,
    calculate_memory_usage,
    calculate_bpp,
    calculate_block_efficiency,
)

__all__ = [
    'dimension_field_size',
    'calculate_descriptor_size',
    'calculate_memory_usage',
    'calculate_bpp',
    'calculate_block_efficiency',
]
