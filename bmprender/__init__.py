"""Bitmap renderer: pack raster images into firmware byte arrays."""
