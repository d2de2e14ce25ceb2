"""Tests for emojico.pixels: row flip, R/B swap, inverse, invalid input."""

import pytest

from emojico.errors import InvalidFormat
from emojico.pixels import from_bitmap, to_bitmap


class TestToBitmap:
    """Test to_bitmap row order and channel order."""

    def test_swaps_red_and_blue(self):
        out = to_bitmap(bytes([1, 2, 3, 4]), 1, 1)
        assert out == bytes([3, 2, 1, 4])

    def test_reverses_rows(self):
        # 1x2: top pixel red, bottom pixel blue
        top = bytes([255, 0, 0, 255])
        bottom = bytes([0, 0, 255, 128])
        out = to_bitmap(top + bottom, 1, 2)
        # bottom row first, each pixel BGRA
        assert out == bytes([255, 0, 0, 128]) + bytes([0, 0, 255, 255])

    def test_keeps_column_order(self):
        row = bytes([10, 0, 0, 1, 20, 0, 0, 2])
        out = to_bitmap(row, 2, 1)
        assert out == bytes([0, 0, 10, 1, 0, 0, 20, 2])

    def test_same_length(self):
        data = bytes(range(256)) * 3
        assert len(to_bitmap(data, 8, 24)) == len(data)

    def test_empty(self):
        assert to_bitmap(b'', 0, 0) == b''
        assert to_bitmap(b'', 5, 0) == b''

    def test_length_mismatch_raises(self):
        with pytest.raises(InvalidFormat):
            to_bitmap(bytes(15), 2, 2)

    def test_three_channels_rejected(self):
        with pytest.raises(InvalidFormat):
            to_bitmap(bytes(12), 2, 2, bytes_per_pixel=3)


class TestFromBitmap:
    """Test from_bitmap undoes to_bitmap."""

    def test_involution(self):
        data = bytes((i * 7) % 256 for i in range(5 * 3 * 4))
        assert from_bitmap(to_bitmap(data, 5, 3), 5, 3) == data

    def test_involution_single_row(self):
        data = bytes(range(32))
        assert to_bitmap(from_bitmap(data, 8, 1), 8, 1) == data

    def test_rejects_bad_length(self):
        with pytest.raises(InvalidFormat):
            from_bitmap(bytes(3), 1, 1)
