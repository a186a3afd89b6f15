"""
Core cryptographic utilities.

Provides the fixed digest function (SHA-256), the digest codec and the
concatenation hash used to combine Merkle siblings.
"""
from .hashing import (
    DIGEST_SIZE,
    DIGEST_HEX_LENGTH,
    sha256,
    hash_concat,
    decode_digest,
    encode_digest,
)

__all__ = [
    "DIGEST_SIZE",
    "DIGEST_HEX_LENGTH",
    "sha256",
    "hash_concat",
    "decode_digest",
    "encode_digest",
]
