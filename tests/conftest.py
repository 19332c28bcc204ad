"""Shared fixtures: build small PSARC archives in memory."""

import json
import struct
import zlib
from typing import Dict, List, Optional, Sequence

import pytest

from rocksmith_toolkit.psarc.crypto import encrypt_toc
from rocksmith_toolkit.psarc.header import BLOCK_SIZE, ENTRY_SIZE, HEADER_SIZE


def _split(data: bytes) -> List[bytes]:
    if not data:
        return []
    return [data[i : i + BLOCK_SIZE] for i in range(0, len(data), BLOCK_SIZE)]


def build_psarc(
    files: Dict[str, bytes],
    compress: bool = True,
    listing: Optional[bytes] = None,
    declared_sizes: Optional[Sequence[int]] = None,
    header_fields: Optional[Dict[str, object]] = None,
) -> bytes:
    """Build a PSARC archive holding ``files`` after an auto-generated listing.

    Chunks are zlib-compressed when ``compress`` is true, otherwise stored
    literally. ``declared_sizes`` overrides the descriptor sizes.
    """
    if listing is None:
        listing = "\n".join(files).encode("utf-8")
    contents = [listing] + list(files.values())

    chunk_sizes: List[int] = []
    chunks: List[bytes] = []
    layout = []  # (first chunk index, size, relative offset)
    position = 0
    for data in contents:
        layout.append((len(chunk_sizes), len(data), position))
        for piece in _split(data):
            stored = zlib.compress(piece) if compress else piece
            chunk_sizes.append(0 if len(stored) == BLOCK_SIZE else len(stored))
            chunks.append(stored)
            position += len(stored)

    toc_length = HEADER_SIZE + len(contents) * ENTRY_SIZE + len(chunk_sizes) * 2

    toc = bytearray()
    for i, (first_chunk, size, offset) in enumerate(layout):
        if declared_sizes is not None:
            size = declared_sizes[i]
        toc += b"\x00" * 16
        toc += struct.pack(">I", first_chunk)
        toc += size.to_bytes(5, "big")
        toc += (toc_length + offset).to_bytes(5, "big")
    for chunk_size in chunk_sizes:
        toc += struct.pack(">H", chunk_size)

    fields = {
        "magic": b"PSAR",
        "major": 1,
        "minor": 4,
        "compression": b"zlib",
        "entry_size": ENTRY_SIZE,
        "block_size": BLOCK_SIZE,
        "flags": 4,
    }
    fields.update(header_fields or {})

    header = struct.pack(
        ">4sHH4sIIIII",
        fields["magic"],
        fields["major"],
        fields["minor"],
        fields["compression"],
        toc_length,
        fields["entry_size"],
        len(contents),
        fields["block_size"],
        fields["flags"],
    )
    return header + encrypt_toc(bytes(toc)) + b"".join(chunks)


def song_manifest(key: str, song_key: str, arrangement: str = "Lead", **properties) -> bytes:
    """Build a per-arrangement song manifest document."""
    doc = {
        "Entries": {
            key: {
                "Attributes": {
                    "ArrangementName": arrangement,
                    "SongKey": song_key,
                    "ArrangementProperties": properties,
                }
            }
        }
    }
    return json.dumps(doc).encode("utf-8")


@pytest.fixture
def make_psarc():
    return build_psarc


@pytest.fixture
def make_song_manifest():
    return song_manifest
