"""Binary reading utilities for big-endian PSARC data."""

from io import BytesIO
from typing import BinaryIO, Optional, Union


class UnexpectedEndOfData(EOFError):
    """Raised when a read needs more bytes than remain in the buffer."""


class BinaryReader:
    """Sequential big-endian reader over an in-memory buffer or stream."""

    def __init__(self, data: Union[bytes, bytearray, memoryview, BinaryIO]):
        if isinstance(data, (bytes, bytearray, memoryview)):
            self._stream = BytesIO(bytes(data))
        else:
            self._stream = data

    def tell(self) -> int:
        return self._stream.tell()

    def read_bytes(self, size: int) -> bytes:
        if size < 0:
            raise ValueError(f"Negative read size: {size}")
        data = self._stream.read(size)
        if len(data) < size:
            raise UnexpectedEndOfData(f"Expected {size} bytes, got {len(data)}")
        return data

    def read_string(self, length: int, encoding: str = "utf-8") -> str:
        """Decode the next ``length`` bytes as text."""
        return self.read_bytes(length).decode(encoding, errors="replace")

    def read_number(self, length: int) -> int:
        """Read a ``length``-byte unsigned integer, big-endian."""
        return int.from_bytes(self.read_bytes(length), byteorder="big", signed=False)

    def try_read_number(self, length: int) -> Optional[int]:
        """Read a big-endian unsigned integer, or None if too few bytes remain.

        The position is left unchanged when None is returned.
        """
        if self.remaining() < length:
            return None
        return self.read_number(length)

    def read_u16(self) -> int:
        return self.read_number(2)

    def read_u32(self) -> int:
        return self.read_number(4)

    def read_u40(self) -> int:
        """Read a 40-bit (5-byte) unsigned integer, big-endian.

        PSARC uses 40-bit integers for file sizes and offsets to handle
        large archives while keeping the TOC compact.
        """
        return self.read_number(5)

    # Names used by the PSARC layout tables
    read_short = read_u16
    read_int = read_u32

    def try_read_short(self) -> Optional[int]:
        return self.try_read_number(2)

    def skip(self, count: int) -> None:
        """Skip forward by count bytes."""
        self._stream.seek(count, 1)

    def remaining(self) -> int:
        """Return number of bytes remaining in stream."""
        current = self.tell()
        self._stream.seek(0, 2)  # Seek to end
        end = self.tell()
        self._stream.seek(current)
        return max(end - current, 0)
