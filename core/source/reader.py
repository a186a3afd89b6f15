"""
Leaf Source
Reads leaf digests from text, one 64-character lowercase hex digest per line.

Decoding is lazy: digests are produced as lines are read, so a depth-walk
over a file never holds more than one line in memory. The first malformed
line aborts iteration with its 1-based line number.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Iterable, Iterator

from core.crypto.hashing import decode_digest
from core.schemas.errors import (
    InvalidDigestEncodingException,
    SourceUnavailableException,
)


logger = logging.getLogger(__name__)


# Default read buffer for leaf files
DEFAULT_BUFFER_SIZE = 64 * 1024


def _strip_terminator(line: str) -> str:
    if line.endswith("\r\n"):
        return line[:-2]
    if line.endswith("\n"):
        return line[:-1]
    return line


def iter_leaves(lines: Iterable[str]) -> Iterator[bytes]:
    """
    Decode an iterable of text lines into leaf digests.

    Only the line terminator is removed; any other whitespace makes the
    line invalid.

    Args:
        lines: Text lines, with or without trailing newlines

    Yields:
        32-byte digests in line order

    Raises:
        InvalidDigestEncodingException: For the first line that is not a
            valid digest, with `line` set to its 1-based index
    """
    for number, raw in enumerate(lines, start=1):
        text = _strip_terminator(raw)
        try:
            yield decode_digest(text)
        except InvalidDigestEncodingException as e:
            raise e.with_line(number) from None


class LeafFileReader:
    """
    Iterable over the leaf digests stored in a text file.

    The file is opened when iteration starts and closed when it ends,
    so a reader can be iterated more than once.

    Example:
        >>> reader = LeafFileReader("leaves.txt")
        >>> root = RootComputer(WalkMode.DEPTH_WALK).compute(reader)
    """

    def __init__(
        self,
        path: str | Path,
        buffer_size: int = DEFAULT_BUFFER_SIZE,
        encoding: str = "ascii",
    ) -> None:
        if buffer_size < 1:
            raise ValueError(f"buffer_size must be positive, got {buffer_size}")
        self.path = Path(path)
        self.buffer_size = buffer_size
        self.encoding = encoding

    @classmethod
    def with_buffer_size(cls, buffer_size: int, path: str | Path) -> "LeafFileReader":
        """Create a reader with an explicit read buffer size."""
        return cls(path, buffer_size=buffer_size)

    def __iter__(self) -> Iterator[bytes]:
        logger.debug(f"Reading leaves from {self.path} (buffer {self.buffer_size} bytes)")
        try:
            f = open(
                self.path,
                "r",
                encoding=self.encoding,
                # Undecodable bytes become backslash escapes and fail digest decoding
                errors="backslashreplace",
                newline="",
                buffering=self.buffer_size,
            )
        except OSError as e:
            raise SourceUnavailableException(
                f"Cannot open leaf source {self.path}: {e}",
                path=str(self.path),
            ) from e

        with f:
            try:
                yield from iter_leaves(f)
            except OSError as e:
                raise SourceUnavailableException(
                    f"Cannot read leaf source {self.path}: {e}",
                    path=str(self.path),
                ) from e

    def __repr__(self) -> str:
        return f"LeafFileReader(path={str(self.path)!r}, buffer_size={self.buffer_size})"


__all__ = [
    "DEFAULT_BUFFER_SIZE",
    "iter_leaves",
    "LeafFileReader",
]
