"""
Hashing Utilities
Digest function, digest codec and the pairwise combination rule.

This module provides:
- SHA-256 hashing for raw bytes (the single fixed digest function)
- Lowercase base16 encoding/decoding of 32-byte digests
- Concatenation hashing used for Merkle parent nodes

Security/Determinism Notes:
- Always hash raw bytes exactly as given
- Decoding is strict: no whitespace stripping, no uppercase, no 0x prefix
- All operations are deterministic
"""
from __future__ import annotations

import hashlib
import re

from core.schemas.errors import InvalidDigestEncodingException


# Size of every digest handled by the system
DIGEST_SIZE: int = 32

# Length of the textual (lowercase hex) form of a digest
DIGEST_HEX_LENGTH: int = DIGEST_SIZE * 2

_DIGEST_HEX_RE = re.compile(r"[0-9a-f]{%d}" % DIGEST_HEX_LENGTH)


def sha256(data: bytes) -> bytes:
    """
    Compute SHA-256 hash of raw bytes.

    Args:
        data: Raw bytes to hash

    Returns:
        32-byte SHA-256 digest

    Example:
        >>> sha256(b"hello").hex()
        '2cf24dba5fb0a30e26e83b2ac5b9e29e1b161e5c1fa7425e73043362938b9824'
    """
    return hashlib.sha256(data).digest()


def hash_concat(left: bytes, right: bytes) -> bytes:
    """
    Hash the concatenation of two digests.

    This is the Merkle combination rule:
    parent = sha256(left + right)

    Args:
        left: Left child digest (32 bytes)
        right: Right child digest (32 bytes)

    Returns:
        32-byte SHA-256 digest of the concatenation
    """
    return hashlib.sha256(left + right).digest()


def decode_digest(text: str) -> bytes:
    """
    Decode the 64-character lowercase hex form of a digest.

    Args:
        text: Exactly 64 characters from [0-9a-f]

    Returns:
        32 raw bytes

    Raises:
        InvalidDigestEncodingException: If the text is not a str, has the
            wrong length, or contains anything but lowercase hex digits

    Example:
        >>> decode_digest("00" * 32) == bytes(32)
        True
    """
    if not isinstance(text, str) or _DIGEST_HEX_RE.fullmatch(text) is None:
        raise InvalidDigestEncodingException(content=text)
    return bytes.fromhex(text)


def encode_digest(digest: bytes) -> str:
    """
    Encode a digest as 64 lowercase hex characters.

    Inverse of decode_digest() for every valid digest.

    Args:
        digest: 32 raw bytes

    Returns:
        Lowercase hex string of length 64

    Raises:
        ValueError: If digest is not exactly 32 bytes
    """
    if len(digest) != DIGEST_SIZE:
        raise ValueError(
            f"Digest must be {DIGEST_SIZE} bytes, got {len(digest)}"
        )
    return bytes(digest).hex()


__all__ = [
    "DIGEST_SIZE",
    "DIGEST_HEX_LENGTH",
    "sha256",
    "hash_concat",
    "decode_digest",
    "encode_digest",
]
