"""Checkpoint 3: Block Packing Verification."""

import sys
import os
import time

# Add parent directory to path
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

import numpy as np
import pytest
from bmprender.codec import (
    BitmapEncoder, EncodingConfig, ScanDirection,
    calculate_output_size, place_field, parse_scan_direction
)
from bmprender.errors import ConfigurationError

ROW = ScanDirection.ROW_MAJOR
COLUMN = ScanDirection.COLUMN_MAJOR


def make_gray_samples(gray8):
    """Build opaque (h, w, 4) 16-bit samples from an 8-bit grayscale grid."""
    gray = np.asarray(gray8, dtype=np.uint32) * 0x101
    alpha = np.full(gray.shape, 0xFFFF, dtype=np.uint32)
    return np.stack([gray, gray, gray, alpha], axis=2)


def encode(gray8, **kwargs):
    return BitmapEncoder().encode(make_gray_samples(gray8), EncodingConfig(**kwargs))


def test_reference_scenarios():
    """Test the reference white/black images."""
    print("=" * 60)
    print("Test 1: Reference Scenarios")
    print("=" * 60)

    bitmap = encode([[255, 255]])
    assert (bitmap.width, bitmap.height) == (2, 1)
    assert bitmap.data == b'\xff'
    print("   ✓ 2x1 white, depth 4 -> 0xFF")

    bitmap = encode([[255, 255]], invert=True)
    assert bitmap.data == b'\x00'
    print("   ✓ 2x1 white inverted -> 0x00")

    bitmap = encode([[0]], color_depth=8, mem_block_bits=8)
    assert bitmap.data == b'\x00'
    assert len(bitmap.data) == 1
    print("   ✓ 1x1 black, depth 8 -> 0x00")

    print("✅ Reference scenario test passed")


def test_first_pixel_in_high_bits():
    """Test pixels fill a block from the most significant bits down."""
    print("\n" + "=" * 60)
    print("Test 2: Field Order")
    print("=" * 60)

    assert encode([[255, 0]]).data == b'\xf0'
    assert encode([[0, 255]]).data == b'\x0f'
    print("   ✓ depth 4: first pixel in high nibble")

    # 0x55 -> 1, 0xAA -> 2 at depth 2: fields 11 00 01 10
    assert encode([[255, 0, 0x55, 0xAA]], color_depth=2).data == bytes([0xC6])
    print("   ✓ depth 2: four fields 0b11000110")

    assert place_field(1, 0, EncodingConfig(color_depth=1)) == 0x80
    assert place_field(1, 7, EncodingConfig(color_depth=1)) == 0x01
    column = np.array([1, 0, 1], dtype=np.uint64)
    assert place_field(column, 0, EncodingConfig(color_depth=1)).tolist() == [0x80, 0, 0x80]
    print("✅ Field order test passed")


def test_multi_byte_blocks():
    """Test blocks wider than a byte are emitted little-endian."""
    print("\n" + "=" * 60)
    print("Test 3: Multi-byte Blocks")
    print("=" * 60)

    bitmap = encode([[255, 0, 0, 0]], color_depth=4, mem_block_bits=16)
    assert bitmap.data == bytes([0x00, 0xF0])
    print("   ✓ 16-bit block 0xF000 -> 00 F0")

    bitmap = encode([[255, 255, 255]], color_depth=4, mem_block_bits=12)
    assert bitmap.data == bytes([0xFF, 0x0F])
    print("   ✓ 12-bit block 0xFFF -> FF 0F")

    bitmap = encode([[255, 0]], color_depth=64, mem_block_bits=64)
    assert bitmap.data == b'\xff' * 8 + b'\x00' * 8
    print("   ✓ 64-bit depth, one pixel per block")

    print("✅ Multi-byte block test passed")


def test_partial_trailing_slot():
    """Test a slot that runs past bit 0 keeps its high-order bits."""
    print("\n" + "=" * 60)
    print("Test 4: Partial Trailing Slot")
    print("=" * 60)

    # depth 3 in 8-bit blocks: shifts 5, 2, -1
    config = EncodingConfig(color_depth=3, mem_block_bits=8)
    assert config.pixels_per_block == 3
    assert encode([[255, 255, 255]], color_depth=3).data == b'\xff'

    # 0x80 -> 3 at depth 3: 111 011 01(1 dropped)
    assert encode([[255, 0x80, 0x80]], color_depth=3).data == bytes([0xED])
    print("   ✓ depth 3: 0xE0 | 0x0C | 0x01 = 0xED")
    print("✅ Partial slot test passed")


def test_short_last_block():
    """Test missing pixels of the last block pack as zero."""
    print("\n" + "=" * 60)
    print("Test 5: Short Last Block")
    print("=" * 60)

    bitmap = encode([[255, 255, 255]])
    assert bitmap.data == bytes([0xFF, 0xF0])
    print("   ✓ width 3 at 2 px/block -> FF F0")

    bitmap = encode([[255, 255, 255]], invert=True)
    assert bitmap.data == bytes([0x00, 0x00])
    print("   ✓ padding stays zero when inverted")

    bitmap = encode([[255]] * 3, color_depth=1, scan_direction=COLUMN)
    assert bitmap.data == bytes([0xE0])
    print("   ✓ column of 3 at 8 px/block -> E0")
    print("✅ Short last block test passed")


def test_scan_direction():
    """Test row-major and column-major ordering."""
    print("\n" + "=" * 60)
    print("Test 6: Scan Direction")
    print("=" * 60)

    image = [[255, 255],
             [0, 0]]

    assert encode(image, scan_direction=ROW).data == bytes([0xFF, 0x00])
    assert encode(image, scan_direction=COLUMN).data == bytes([0xF0, 0xF0])
    print("   ✓ rows vs columns")

    # Vertical 1-bit page: top pixel lands in bit 7
    column = [[255]] + [[0]] * 7
    assert encode(column, color_depth=1, scan_direction=COLUMN).data == bytes([0x80])
    print("   ✓ 1-bit vertical page")

    # Column-major of an image equals row-major of its transpose
    np.random.seed(11)
    gray = np.random.randint(0, 256, (5, 9))
    a = encode(gray, color_depth=2, mem_block_bits=16, scan_direction=COLUMN)
    b = encode(gray.T, color_depth=2, mem_block_bits=16, scan_direction=ROW)
    assert a.data == b.data
    assert (a.width, a.height) == (9, 5)
    print("   ✓ column-major == row-major of transpose")

    print("✅ Scan direction test passed")


def test_size_law():
    """Test output length against the size law."""
    print("\n" + "=" * 60)
    print("Test 7: Output Size Law")
    print("=" * 60)

    np.random.seed(5)
    shapes = [(1, 1), (3, 7), (8, 8), (17, 5), (2, 33)]
    configs = [(1, 8), (2, 8), (3, 8), (4, 12), (5, 16), (8, 24), (16, 64)]

    for h, w in shapes:
        gray = np.random.randint(0, 256, (h, w))
        for depth, block in configs:
            ppb = -(-block // depth)
            bpb = -(-block // 8)
            for direction, lines, length in ((ROW, h, w), (COLUMN, w, h)):
                config = EncodingConfig(depth, block, direction)
                expected = bpb * lines * -(-length // ppb)
                bitmap = encode(gray, color_depth=depth, mem_block_bits=block,
                                scan_direction=direction)
                assert len(bitmap.data) == expected
                assert calculate_output_size(w, h, config) == expected
        print(f"   ✓ {w}x{h}")

    print("✅ Size law test passed")


def test_determinism():
    """Test encoding is repeatable."""
    print("\n" + "=" * 60)
    print("Test 8: Determinism")
    print("=" * 60)

    np.random.seed(9)
    samples = make_gray_samples(np.random.randint(0, 256, (20, 30)))
    config = EncodingConfig(color_depth=3, mem_block_bits=16, scan_direction=COLUMN)

    first = BitmapEncoder().encode(samples, config)
    second = BitmapEncoder().encode(samples.copy(), config)
    assert first.data == second.data
    print("✅ Determinism test passed")


def test_configuration_errors():
    """Test invalid parameters are rejected before encoding."""
    print("\n" + "=" * 60)
    print("Test 9: Configuration Errors")
    print("=" * 60)

    samples = make_gray_samples([[255, 255]])
    bad_configs = [
        EncodingConfig(color_depth=0),
        EncodingConfig(mem_block_bits=0),
        EncodingConfig(color_depth=9, mem_block_bits=8),
        EncodingConfig(color_depth=65, mem_block_bits=65),
        EncodingConfig(color_depth=4, mem_block_bits=72),
        EncodingConfig(scan_direction='diagonal'),
    ]
    for config in bad_configs:
        with pytest.raises(ConfigurationError):
            BitmapEncoder().encode(samples, config)
        print(f"   ✓ rejected {tuple(config)}")

    with pytest.raises(ValueError):
        EncodingConfig(color_depth=9, mem_block_bits=8).validate()

    assert parse_scan_direction('hor') is ROW
    assert parse_scan_direction('Vertical') is COLUMN
    with pytest.raises(ConfigurationError):
        parse_scan_direction('diagonal')

    print("✅ Configuration error test passed")


def test_large_image_speed():
    """Test a few-thousand-pixel image encodes well under a second."""
    print("\n" + "=" * 60)
    print("Test 10: Large Image Encode Time")
    print("=" * 60)

    np.random.seed(13)
    samples = make_gray_samples(np.random.randint(0, 256, (2000, 2000)))

    for depth, direction in ((1, ROW), (4, COLUMN)):
        config = EncodingConfig(color_depth=depth, mem_block_bits=8, scan_direction=direction)
        start = time.time()
        bitmap = BitmapEncoder().encode(samples, config)
        elapsed = time.time() - start

        print(f"   depth={depth} {direction.value}: {elapsed:.3f}s")
        assert len(bitmap.data) == calculate_output_size(2000, 2000, config)
        assert elapsed < 1.0, f"encode took {elapsed:.2f}s"

    print("✅ Large image test passed")


def test_integer_like_parameters():
    """Test numpy integers are accepted and floats rejected."""
    print("\n" + "=" * 60)
    print("Test 11: Parameter Types")
    print("=" * 60)

    config = EncodingConfig(color_depth=np.int64(64), mem_block_bits=np.int64(64)).validate()
    assert type(config.color_depth) is int and type(config.mem_block_bits) is int
    bitmap = encode([[255]], color_depth=np.int64(64), mem_block_bits=np.int64(64))
    assert bitmap.data == b'\xff' * 8
    assert type(bitmap.config.color_depth) is int
    print("   ✓ numpy integers converted")

    for config in (EncodingConfig(color_depth=4.0), EncodingConfig(mem_block_bits=8.0),
                   EncodingConfig(color_depth='4')):
        with pytest.raises(ConfigurationError):
            config.validate()
    print("   ✓ non-integers rejected")
    print("✅ Parameter type test passed")


def main():
    """Run all Checkpoint 3 tests."""
    print("\n" + "=" * 60)
    print("CHECKPOINT 3: BLOCK PACKING VERIFICATION")
    print("=" * 60 + "\n")

    tests = [
        ("Reference Scenarios", test_reference_scenarios),
        ("Field Order", test_first_pixel_in_high_bits),
        ("Multi-byte Blocks", test_multi_byte_blocks),
        ("Partial Trailing Slot", test_partial_trailing_slot),
        ("Short Last Block", test_short_last_block),
        ("Scan Direction", test_scan_direction),
        ("Size Law", test_size_law),
        ("Determinism", test_determinism),
        ("Configuration Errors", test_configuration_errors),
        ("Large Image Encode Time", test_large_image_speed),
        ("Parameter Types", test_integer_like_parameters),
    ]

    results = []
    for name, test in tests:
        try:
            test()
            results.append((name, True))
        except Exception as e:
            print(f"❌ {name} failed: {e}")
            results.append((name, False))

    # Summary
    print("\n" + "=" * 60)
    print("CHECKPOINT 3 SUMMARY")
    print("=" * 60)

    all_passed = True
    for name, passed in results:
        status = "✅ PASS" if passed else "❌ FAIL"
        print(f"   {name}: {status}")
        if not passed:
            all_passed = False

    print("=" * 60 + "\n")
    return 0 if all_passed else 1


if __name__ == "__main__":
    sys.exit(main())
