"""AES-256-CFB cipher for the PSARC table of contents.

The TOC is encrypted with a fixed key and IV using CFB mode with a full
128-bit feedback segment. The cipher is deterministic, so encrypting a
decrypted TOC reproduces the stored ciphertext.
"""

from Crypto.Cipher import AES

from .errors import DecryptionFailed

ARC_KEY = bytes.fromhex("C53DB23870A1A2F71CAE64061FDD0E1157309DC85204D4C5BFDF25090DF2572C")
ARC_IV = bytes.fromhex("E915AA018FEF71FC508132E4BB4CEB42")

SEGMENT_BITS = 128


def _new_cipher():
    return AES.new(ARC_KEY, AES.MODE_CFB, iv=ARC_IV, segment_size=SEGMENT_BITS)


def pad_block(data: bytes, block: int = AES.block_size) -> bytes:
    """Zero-pad data to a multiple of the cipher block size."""
    remainder = len(data) % block
    if remainder:
        return data + b"\x00" * (block - remainder)
    return data


def decrypt_toc(ciphertext: bytes, toc_length: int) -> bytes:
    """Decrypt the TOC region and truncate to the declared TOC length."""
    try:
        plaintext = _new_cipher().decrypt(pad_block(ciphertext))
    except ValueError as e:
        raise DecryptionFailed(f"TOC decryption failed: {e}") from e
    return plaintext[:toc_length]


def encrypt_toc(plaintext: bytes) -> bytes:
    """Encrypt a plaintext TOC, returning ciphertext of the same length."""
    return _new_cipher().encrypt(pad_block(plaintext))[: len(plaintext)]
