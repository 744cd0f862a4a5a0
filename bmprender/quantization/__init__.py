"""Quantization modules for Bitmap Renderer."""

from .intensity_quantizer import remap, field_mask, quantize_intensity, quantize_samples

__all__ = [
    'remap',
    'field_mask',
    'quantize_intensity',
    'quantize_samples',
]
