"""
Leaf sources: decoding hex text lines into leaf digests.
"""
from .reader import (
    DEFAULT_BUFFER_SIZE,
    iter_leaves,
    LeafFileReader,
)

__all__ = [
    "DEFAULT_BUFFER_SIZE",
    "iter_leaves",
    "LeafFileReader",
]
