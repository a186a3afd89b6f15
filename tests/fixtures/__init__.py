"""
Test fixtures package.

This package provides factory functions for leaf digests and leaf files.

Usage:
    from tests.fixtures import make_leaves, write_leaf_file

    def test_something(tmp_path):
        leaves = make_leaves(5)
        path = write_leaf_file(tmp_path / "leaves.txt", leaves)
"""

from .common import (
    make_leaf,
    make_leaves,
    make_leaf_lines,
    write_leaf_file,
)

__all__ = [
    "make_leaf",
    "make_leaves",
    "make_leaf_lines",
    "write_leaf_file",
]
