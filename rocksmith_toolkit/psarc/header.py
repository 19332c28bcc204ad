"""PSARC header and TOC structures."""

from dataclasses import dataclass
from typing import List

from ..utils.binary import BinaryReader
from .errors import (
    InvalidMagic,
    InvalidTOCLength,
    UnsupportedArchiveFlags,
    UnsupportedBlockSize,
    UnsupportedCompression,
)

# PSARC magic bytes
PSARC_MAGIC = b"PSAR"
COMPRESSION_ZLIB = b"zlib"

# Only this layout is supported
BLOCK_SIZE = 65536
ARCHIVE_FLAGS = 4

HEADER_SIZE = 32
ENTRY_SIZE = 30  # 16 name + 4 offset + 5 size + 5 file offset


@dataclass(frozen=True)
class Version:
    major: int
    minor: int

    def __str__(self) -> str:
        return f"{self.major}.{self.minor}"


@dataclass(frozen=True)
class TOCInfo:
    """TOC geometry declared by the header."""

    length: int  # Total TOC size including the 32-byte header
    entry_size: int  # Informational only
    num_entries: int


@dataclass
class PSARCHeader:
    """PSARC archive header (32 bytes)."""

    version: Version
    toc: TOCInfo
    block_size: int
    archive_flags: int

    @classmethod
    def read(cls, reader: BinaryReader) -> "PSARCHeader":
        """Read and validate the header, leaving the reader at the encrypted TOC."""
        magic = reader.read_bytes(4)
        if magic != PSARC_MAGIC:
            raise InvalidMagic(f"Invalid PSARC magic: {magic!r}, expected {PSARC_MAGIC!r}")

        version = Version(major=reader.read_short(), minor=reader.read_short())

        compression = reader.read_bytes(4)
        if compression != COMPRESSION_ZLIB:
            raise UnsupportedCompression(
                f"Unsupported compression: {compression!r}, expected {COMPRESSION_ZLIB!r}"
            )

        toc = TOCInfo(
            length=reader.read_int(),
            entry_size=reader.read_int(),
            num_entries=reader.read_int(),
        )

        block_size = reader.read_int()
        if block_size != BLOCK_SIZE:
            raise UnsupportedBlockSize(f"Unsupported block size: {block_size}, expected {BLOCK_SIZE}")

        archive_flags = reader.read_int()
        if archive_flags != ARCHIVE_FLAGS:
            raise UnsupportedArchiveFlags(
                f"Unsupported archive flags: {archive_flags}, expected {ARCHIVE_FLAGS}"
            )

        min_length = HEADER_SIZE + toc.num_entries * ENTRY_SIZE
        if toc.length < min_length:
            raise InvalidTOCLength(
                f"TOC length {toc.length} cannot hold {toc.num_entries} entries, need at least {min_length}"
            )

        return cls(version=version, toc=toc, block_size=block_size, archive_flags=archive_flags)


@dataclass
class BlockDescriptor:
    """PSARC table of contents entry (30 bytes)."""

    name: bytes  # 16 bytes, usually an MD5 digest of the path or zeroes
    offset: int  # 4 bytes: Index into the chunk-size table
    size: int  # 5 bytes (40-bit): Decompressed file size
    file_offset: int  # 5 bytes (40-bit): Absolute offset of the first chunk

    # Resolved after reading the listing
    filename: str = ""

    @classmethod
    def read(cls, reader: BinaryReader) -> "BlockDescriptor":
        return cls(
            name=reader.read_bytes(16),
            offset=reader.read_int(),
            size=reader.read_u40(),
            file_offset=reader.read_u40(),
        )


@dataclass
class PSARCListing:
    """Path listing stored as the archive's first logical file."""

    filenames: List[str]

    @classmethod
    def from_data(cls, data: bytes) -> "PSARCListing":
        """Parse the listing from raw data (newline-separated paths)."""
        text = data.decode("utf-8", errors="replace")
        return cls(filenames=text.split("\n"))
