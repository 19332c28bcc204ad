"""PSARC archive decoding."""

from .errors import (
    BlockSizeOverflow,
    DecryptionFailed,
    FormatViolation,
    MissingManifest,
    PSARCError,
    TruncatedBlock,
)
from .header import BlockDescriptor, PSARCHeader
from .reader import PSARCReader

__all__ = [
    "PSARCReader",
    "PSARCHeader",
    "BlockDescriptor",
    "PSARCError",
    "FormatViolation",
    "DecryptionFailed",
    "BlockSizeOverflow",
    "TruncatedBlock",
    "MissingManifest",
]
