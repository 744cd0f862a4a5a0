"""Exceptions raised by Bitmap Renderer."""


class BitmapRendererError(Exception):
    """Base class for all renderer errors."""


class ConfigurationError(BitmapRendererError, ValueError):
    """Encoding parameters are degenerate or cannot be packed."""


class ImageInputError(BitmapRendererError, ValueError):
    """Source image is missing, unreadable or in an unsupported format."""


class BufferBoundsError(BitmapRendererError, IndexError):
    """A block write would fall outside the pre-sized output buffer."""
