"""Constants for Bitmap Renderer."""

# Samples use the 16-bit expanded channel range
CHANNEL_MAX = 0xFFFF

# 8-bit channel -> 16-bit channel expansion factor (0xAB -> 0xABAB)
CHANNEL_EXPAND = 0x101

# Defaults of the command line tool
DEFAULT_COLOR_DEPTH = 4
DEFAULT_MEM_BLOCK_BITS = 8

# Widest memory block register
MAX_BLOCK_BITS = 64

# Descriptor: 4-byte map pointer + two 8-bit dimensions
POINTER_SIZE = 4
DESCRIPTOR_SIZE = 6

# Bytes per line in the generated array literal
BYTES_PER_LINE = 32

HEADER_SUFFIX = '_bmp.h'
PREVIEW_SUFFIX = '_preview.bmp'

SUPPORTED_EXTENSIONS = ('.png', '.bmp')
