#!/usr/bin/env python3
"""
Bitmap Renderer CLI

Usage:
    python render.py [options] -o <output path> <path to image>

Example:
    python render.py -d 1 -mb 8 -md vertical -o build/logo assets/logo.png
"""

import argparse
import sys
import os
import time

# Add project root to path
sys.path.insert(0, os.path.dirname(os.path.abspath(__file__)))

from bmprender.constants import DEFAULT_COLOR_DEPTH, DEFAULT_MEM_BLOCK_BITS
from bmprender.errors import BitmapRendererError
from bmprender.io import read_image, write_header, write_preview, sanitize_output_path
from bmprender.codec import BitmapEncoder, BitmapDecoder, EncodingConfig, parse_scan_direction
from bmprender.metrics import calculate_memory_usage, calculate_bpp, calculate_block_efficiency


def build_parser():
    parser = argparse.ArgumentParser(
        prog='bitmap-renderer',
        description='Bitmap renderer - Pack images into C byte arrays for firmware',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Produces <output>_bmp.h with the bitmap and a structure describing it,
and <output>_preview.bmp when --preview is given.

Examples:
  # 4-bit grayscale, two pixels per byte, rows
  python render.py -o build/logo assets/logo.png

  # 1-bit pages for an SSD1306-style display
  python render.py -d 1 -mb 8 -md vertical -o build/icon icon.bmp

  # Inverted 2-bit, 16-bit memory blocks, with preview
  python render.py -d 2 -mb 16 --invert --preview -o build/splash splash.png
        """
    )

    parser.add_argument('source',
                        help='Input image path (.png or .bmp)')
    parser.add_argument('--output', '-o', required=True,
                        help='Path to output files (without file extension)')

    parser.add_argument('--color-depth', '-d', type=int, default=DEFAULT_COLOR_DEPTH,
                        help=f'Bits per pixel (default: {DEFAULT_COLOR_DEPTH})')
    parser.add_argument('--mem-block', '-mb', type=int, default=DEFAULT_MEM_BLOCK_BITS,
                        help=f'Bits per graphic memory block (default: {DEFAULT_MEM_BLOCK_BITS})')
    parser.add_argument('--mem-dir', '-md', default='horizontal',
                        help='Pixel direction in graphic memory: horizontal or vertical '
                             '(default: horizontal)')
    parser.add_argument('--invert', '-i', action='store_true',
                        help='Invert the image')
    parser.add_argument('--preview', '-p', action='store_true',
                        help='Also write <output>_preview.bmp')
    parser.add_argument('--verbose', '-v', action='store_true',
                        help='Verbose output')
    return parser


def main(argv=None):
    args = build_parser().parse_args(argv)

    try:
        config = EncodingConfig(
            color_depth=args.color_depth,
            mem_block_bits=args.mem_block,
            scan_direction=parse_scan_direction(args.mem_dir),
            invert=args.invert,
        ).validate()
        dest, name = sanitize_output_path(args.output)

        if args.verbose:
            print(f"Reading input: {args.source}")

        start_time = time.time()

        samples = read_image(args.source)
        height, width = samples.shape[:2]

        if args.verbose:
            print(f"  Size: {width}x{height}")
            print(f"Encoding: depth={config.color_depth} bits, "
                  f"block={config.mem_block_bits} bits, "
                  f"direction={config.scan_direction.value}, invert={config.invert}")

        encoder = BitmapEncoder()
        bitmap = encoder.encode(samples, config)

        values = BitmapDecoder().decode(bitmap) if args.preview else None

        header_path = write_header(bitmap, dest)

        preview_path = None
        if values is not None:
            try:
                preview_path = write_preview(values, config.color_depth, dest,
                                             invert=config.invert)
            except (OSError, ValueError):
                # No partial output: drop the header written above
                header_path.unlink()
                raise

        elapsed = time.time() - start_time
        usage = calculate_memory_usage(bitmap)

        if args.verbose:
            print(f"\nResults:")
            print(f"  Pixels per block: {config.pixels_per_block}")
            print(f"  Bytes per block:  {config.bytes_per_block}")
            print(f"  Block efficiency: {calculate_block_efficiency(config):.1%}")
            print(f"  Bits per pixel:   {calculate_bpp(usage['bitmap'], (height, width)):.3f}")
            print(f"  Bitmap:     {usage['bitmap']:,} bytes")
            print(f"  Descriptor: {usage['descriptor']:,} bytes")
            print(f"  Total:      {usage['total']:,} bytes")
            print(f"  Encoding time: {elapsed:.2f}s")
            print(f"\nOutput written to: {header_path}")
            if preview_path is not None:
                print(f"Preview written to: {preview_path}")
        else:
            print(f"Rendered: {args.source} -> {header_path} "
                  f"({name}, {width}x{height}, {usage['total']} bytes)")

    except (BitmapRendererError, ValueError, OSError) as e:
        print(f"Error: {e}", file=sys.stderr)
        print(f"  source={args.source} output={args.output} depth={args.color_depth} "
              f"block={args.mem_block} direction={args.mem_dir}", file=sys.stderr)
        return 1

    return 0


if __name__ == '__main__':
    sys.exit(main())
