"""
Base factories shared by all test modules.

Leaves are sha256(b"leaf<i>") so that every test sees the same,
distinct, well-formed digests.
"""
from __future__ import annotations

from pathlib import Path
from typing import Sequence

from core.crypto.hashing import sha256


def make_leaf(i: int) -> bytes:
    """Deterministic 32-byte leaf number i."""
    return sha256(f"leaf{i}".encode())


def make_leaves(count: int) -> list[bytes]:
    """The first `count` deterministic leaves."""
    return [make_leaf(i) for i in range(count)]


def make_leaf_lines(leaves: Sequence[bytes], newline: str = "\n") -> list[str]:
    """Leaves as text lines, each terminated with newline."""
    return [leaf.hex() + newline for leaf in leaves]


def write_leaf_file(
    path: Path,
    leaves: Sequence[bytes],
    trailing_newline: bool = True,
) -> Path:
    """Write leaves to path, one hex digest per line."""
    text = "\n".join(leaf.hex() for leaf in leaves)
    if trailing_newline and leaves:
        text += "\n"
    path.write_text(text, encoding="ascii")
    return path
