"""Tests for binary utilities."""

import pytest

from rocksmith_toolkit.utils.binary import BinaryReader, UnexpectedEndOfData


class TestBinaryReader:
    """Tests for BinaryReader class."""

    def test_read_short_big_endian(self):
        reader = BinaryReader(b"\x12\x34")
        assert reader.read_short() == 0x1234

    def test_read_int_big_endian(self):
        reader = BinaryReader(b"\x12\x34\x56\x78")
        assert reader.read_int() == 0x12345678

    def test_read_u40(self):
        """Test 40-bit integer reading (PSARC format)."""
        reader = BinaryReader(b"\x12\x34\x56\x78\x9A")
        assert reader.read_u40() == 0x123456789A

    def test_read_u40_max_value(self):
        reader = BinaryReader(b"\xFF\xFF\xFF\xFF\xFF")
        assert reader.read_u40() == 0xFFFFFFFFFF

    def test_read_number_accumulates_bytes(self):
        reader = BinaryReader(b"\x01\x00\x00")
        assert reader.read_number(3) == 65536

    def test_read_string(self):
        reader = BinaryReader(b"PSARzlib")
        assert reader.read_string(4) == "PSAR"
        assert reader.read_string(4) == "zlib"
        assert reader.tell() == 8

    def test_read_from_bytearray(self):
        reader = BinaryReader(bytearray(b"\x00\x2A"))
        assert reader.read_short() == 42

    def test_skip(self):
        reader = BinaryReader(b"\x00\x01\x02\x03\x04\x05")
        reader.skip(4)
        assert reader.read_short() == 0x0405

    def test_negative_read_rejected(self):
        reader = BinaryReader(b"abcdef")
        with pytest.raises(ValueError):
            reader.read_bytes(-3)
        assert reader.tell() == 0

    def test_remaining(self):
        reader = BinaryReader(b"\x00\x01\x02\x03\x04\x05")
        assert reader.remaining() == 6
        reader.read_int()
        assert reader.remaining() == 2

    def test_eof_error(self):
        reader = BinaryReader(b"\x00\x01")
        with pytest.raises(UnexpectedEndOfData):
            reader.read_bytes(10)

    def test_read_number_past_end(self):
        reader = BinaryReader(b"\x00\x01\x02")
        with pytest.raises(UnexpectedEndOfData):
            reader.read_int()

    def test_unexpected_end_is_eof_error(self):
        reader = BinaryReader(b"")
        with pytest.raises(EOFError):
            reader.read_short()


class TestTryRead:
    """Tests for the non-raising reads used to scan to end of buffer."""

    def test_try_read_short(self):
        reader = BinaryReader(b"\x00\x10")
        assert reader.try_read_short() == 16
        assert reader.try_read_short() is None

    def test_partial_value_leaves_position(self):
        reader = BinaryReader(b"\x00\x10\xFF")
        reader.read_short()
        assert reader.try_read_short() is None
        assert reader.tell() == 2
        assert reader.remaining() == 1

    def test_try_read_number(self):
        reader = BinaryReader(b"\x00\x00\x00\x00\x07")
        assert reader.try_read_number(5) == 7
        assert reader.try_read_number(1) is None
