"""PSARC archive reader and extractor."""

import logging
import re
import zlib
from pathlib import Path, PurePosixPath
from typing import Iterator, List, Optional, Tuple, Union

from ..utils.binary import BinaryReader
from .crypto import decrypt_toc
from .errors import BlockSizeOverflow, MissingManifest, TruncatedBlock
from .header import BLOCK_SIZE, HEADER_SIZE, BlockDescriptor, PSARCHeader, PSARCListing

logger = logging.getLogger(__name__)

HSAN_PATTERN = re.compile(r"^manifests/.*\.hsan$")
SONG_MANIFEST_PATTERN = re.compile(r"^manifests/songs.*\.json$")

LISTING_NAME = "/manifest"


def decode_chunk(data: bytes) -> Tuple[bytes, bool]:
    """Decode one physical chunk.

    Returns ``(payload, compressed)``. Chunks that are not a valid zlib
    stream are stored literally and come back unchanged.
    """
    try:
        return zlib.decompress(data), True
    except zlib.error:
        return data, False


class PSARCReader:
    """Reader for PSARC archives held entirely in memory."""

    def __init__(self, data: Union[bytes, bytearray]):
        self._data = bytes(data)
        self._header: Optional[PSARCHeader] = None
        self._entries: List[BlockDescriptor] = []
        self._block_sizes: List[int] = []
        self._files: List[str] = []

        reader = BinaryReader(self._data)
        self._header = PSARCHeader.read(reader)
        logger.debug(
            "PSARC v%s, TOC length %d, %d entries",
            self._header.version,
            self._header.toc.length,
            self._header.toc.num_entries,
        )
        self._read_toc(reader)
        self._read_listing()

    @classmethod
    def from_file(cls, path: Union[str, Path]) -> "PSARCReader":
        """Load a whole archive from disk."""
        return cls(Path(path).read_bytes())

    @property
    def header(self) -> PSARCHeader:
        return self._header

    @property
    def entries(self) -> List[BlockDescriptor]:
        return self._entries

    @property
    def block_sizes(self) -> List[int]:
        return self._block_sizes

    @property
    def files(self) -> List[str]:
        """Paths from the listing, in descriptor order starting at entry 1."""
        return self._files

    def _read_toc(self, reader: BinaryReader) -> None:
        """Decrypt the TOC and read the descriptors and chunk-size table."""
        toc_info = self._header.toc
        encrypted = reader.read_bytes(toc_info.length - HEADER_SIZE)
        toc = BinaryReader(decrypt_toc(encrypted, toc_info.length))

        for _ in range(toc_info.num_entries):
            self._entries.append(BlockDescriptor.read(toc))

        # The chunk-size table runs to the end of the TOC
        while True:
            size = toc.try_read_short()
            if size is None:
                break
            self._block_sizes.append(size or BLOCK_SIZE)

        logger.debug("Read %d descriptors, %d chunks", len(self._entries), len(self._block_sizes))

    def _read_listing(self) -> None:
        """Read the listing (first entry) to get filenames."""
        if not self._entries:
            return

        listing = PSARCListing.from_data(self.read_block(self._entries[0]))
        self._files = listing.filenames

        # Assign filenames to entries (the listing itself has no name)
        self._entries[0].filename = LISTING_NAME
        for i, filename in enumerate(self._files):
            if i + 1 < len(self._entries):
                self._entries[i + 1].filename = filename

    def read_block(self, block: BlockDescriptor) -> bytes:
        """Reassemble one logical file from consecutive chunks."""
        result = bytearray()
        offset = block.file_offset

        for index in range(block.offset, len(self._block_sizes)):
            if len(result) == block.size:
                break

            chunk_size = self._block_sizes[index]
            chunk = self._data[offset : offset + chunk_size]
            if len(chunk) < chunk_size:
                raise TruncatedBlock(
                    f"Chunk {index} at offset {offset} needs {chunk_size} bytes, "
                    f"archive has {len(chunk)}"
                )

            payload, compressed = decode_chunk(chunk)
            logger.debug(
                "Chunk %d: %d bytes %s", index, chunk_size, "inflated" if compressed else "stored"
            )
            result.extend(payload)

            if len(result) > block.size:
                raise BlockSizeOverflow(
                    f"Block at chunk {block.offset} produced {len(result)} bytes, "
                    f"expected {block.size}"
                )

            offset += chunk_size

        if len(result) != block.size:
            raise TruncatedBlock(
                f"Chunk table exhausted after {len(result)} of {block.size} bytes"
            )

        return bytes(result)

    def extract_file(self, entry: BlockDescriptor) -> bytes:
        """Extract a single file from the archive."""
        return self.read_block(entry)

    def _find(self, pattern: "re.Pattern[str]") -> List[Tuple[int, str]]:
        """Return ``(descriptor index, path)`` for every listed path matching pattern."""
        return [(i + 1, path) for i, path in enumerate(self._files) if pattern.match(path)]

    def get_manifest(self) -> bytes:
        """Return the raw ``.hsan`` manifest."""
        matches = self._find(HSAN_PATTERN)
        if not matches:
            raise MissingManifest("No manifests/*.hsan file in archive")
        index, path = matches[0]
        logger.debug("Manifest %s is entry %d", path, index)
        return self.read_block(self._entries[index])

    def song_manifests(self) -> Iterator[Tuple[str, bytes]]:
        """Yield ``(path, data)`` for every per-arrangement song manifest."""
        matches = self._find(SONG_MANIFEST_PATTERN)
        if not matches:
            raise MissingManifest("No manifests/songs*.json files in archive")
        for index, path in matches:
            yield path, self.read_block(self._entries[index])

    def extract_all(self, output_dir: Path) -> Iterator[Tuple[str, Path]]:
        """Extract all listed files to the output directory.

        Yields (filename, output_path) for each extracted file.
        """
        output_dir = Path(output_dir)
        output_dir.mkdir(parents=True, exist_ok=True)

        for i, entry in enumerate(self._entries):
            # Skip listing
            if entry.filename == LISTING_NAME:
                continue

            filename = entry.filename.lstrip("/")
            if not filename:
                filename = f"unknown_{i}"
            if ".." in PurePosixPath(filename).parts:
                raise ValueError(f"Refusing to extract outside output directory: {entry.filename}")

            output_path = output_dir / filename
            output_path.parent.mkdir(parents=True, exist_ok=True)
            output_path.write_bytes(self.read_block(entry))

            yield entry.filename, output_path

    def list_files(self) -> List[str]:
        """List all filenames in the archive."""
        return [e.filename for e in self._entries if e.filename != LISTING_NAME]

    def get_entry_by_name(self, filename: str) -> Optional[BlockDescriptor]:
        """Find an entry by filename."""
        filename = filename.lstrip("/")
        for entry in self._entries:
            if entry.filename.lstrip("/") == filename:
                return entry
        return None
