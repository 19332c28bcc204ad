"""Exceptions raised while decoding PSARC archives."""

from ..utils.binary import UnexpectedEndOfData


class PSARCError(Exception):
    """Base class for PSARC decoding failures."""


class FormatViolation(PSARCError):
    """A fixed header field does not hold the required value."""


class InvalidMagic(FormatViolation):
    pass


class UnsupportedCompression(FormatViolation):
    pass


class UnsupportedBlockSize(FormatViolation):
    pass


class UnsupportedArchiveFlags(FormatViolation):
    pass


class InvalidTOCLength(FormatViolation):
    """The declared TOC is too short for its own header and entries."""


class DecryptionFailed(PSARCError):
    """The TOC cipher rejected its input."""


class BlockSizeOverflow(PSARCError):
    """Reconstructed data grew past the descriptor's declared size."""


class TruncatedBlock(PSARCError):
    """The chunk-size table ran out before a block was complete."""


class MissingManifest(PSARCError):
    """No listed path matched the requested manifest pattern."""


__all__ = [
    "PSARCError",
    "FormatViolation",
    "InvalidMagic",
    "UnsupportedCompression",
    "UnsupportedBlockSize",
    "UnsupportedArchiveFlags",
    "InvalidTOCLength",
    "DecryptionFailed",
    "BlockSizeOverflow",
    "TruncatedBlock",
    "MissingManifest",
    "UnexpectedEndOfData",
]
