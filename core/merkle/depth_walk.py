"""
Depth-Walk Merkle Root
Streaming root computation with O(log n) auxiliary memory.

The tree is folded left to right with an explicit stack of
(level, digest) entries:

lvl3           abcdefef
              /       |
lvl2       abcd    efef
          /   |   /   |
lvl1     ab  cd  ef
        / | / | / |
lvl0    a b c d e f

Each incoming leaf is pushed at level 0 and merged with its left
neighbour whenever both top entries share a level. Once the source is
exhausted the stack holds one entry per complete subtree, highest level
at the bottom. Finalization lifts the top entry with self-combination
(its missing right sibling is itself) until it reaches the level of the
entry below, then merges the two.

Pros: single pass over the source, the leaves are never materialized.
Cons: strictly sequential, every step depends on all previous leaves.
"""
from __future__ import annotations

import logging
from typing import Iterable, NamedTuple

from core.merkle.merkle_tree import merkle_parent, merkle_parent_self
from core.schemas.errors import EmptyInputException


logger = logging.getLogger(__name__)


class StackEntry(NamedTuple):
    """A subtree summary: its height above the leaves and its digest."""
    level: int
    digest: bytes


def _fold(leaves: Iterable[bytes]) -> tuple[bytes, int, int]:
    """Run the stack fold, returning (root, leaf_count, max_stack_size)."""
    stack: list[StackEntry] = []
    leaf_count = 0
    max_stack_size = 0

    for leaf in leaves:
        leaf_count += 1
        stack.append(StackEntry(0, leaf))
        if len(stack) > max_stack_size:
            max_stack_size = len(stack)

        # Merge equal-level neighbours; the earlier entry is the left operand
        while len(stack) > 1 and stack[-1].level == stack[-2].level:
            right = stack.pop()
            left = stack.pop()
            stack.append(StackEntry(left.level + 1, merkle_parent(left.digest, right.digest)))

    if not stack:
        raise EmptyInputException()

    # Levels are strictly decreasing towards the top of the stack here
    while len(stack) > 1:
        top = stack.pop()
        below = stack.pop()
        level, digest = top
        while level < below.level:
            digest = merkle_parent_self(digest)
            level += 1
        stack.append(StackEntry(below.level + 1, merkle_parent(below.digest, digest)))

    return stack[0].digest, leaf_count, max_stack_size


def depth_walk_root(leaves: Iterable[bytes]) -> bytes:
    """
    Compute the Merkle root of a single-pass leaf sequence.

    The iterable is consumed exactly once, in order. A single leaf is
    returned unchanged.

    Args:
        leaves: Ordered 32-byte leaf digests

    Returns:
        32-byte Merkle root

    Raises:
        EmptyInputException: If leaves yields nothing
    """
    root, _, _ = _fold(leaves)
    return root


class DepthWalkEngine:
    """
    Depth-walk engine.

    Keeps statistics about its most recent run, which is how the stack
    bound is observed in tests.

    Example:
        >>> engine = DepthWalkEngine()
        >>> root = engine.compute(iter(leaves))
        >>> engine.max_stack_size <= max_stack_bound(len(leaves))
        True
    """

    name = "depth-walk"

    def __init__(self) -> None:
        self.leaf_count = 0
        self.max_stack_size = 0

    def compute(self, leaves: Iterable[bytes]) -> bytes:
        root, self.leaf_count, self.max_stack_size = _fold(leaves)
        logger.debug(
            f"depth-walk folded {self.leaf_count} leaves "
            f"(peak stack size {self.max_stack_size})"
        )
        return root


__all__ = [
    "StackEntry",
    "DepthWalkEngine",
    "depth_walk_root",
]
