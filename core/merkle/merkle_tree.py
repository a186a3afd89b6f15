"""
Merkle Tree Reference Definition
Combination rule, odd-node duplication rule and the plain layer-by-layer root.

Canonical Commitment Rules (Hard Contracts):
1. Leaves are 32-byte digests supplied by the caller, in order
2. Parent hashing: parent = sha256(left + right)
3. Padding rule: an unmatched node at any layer is combined with itself
4. Single leaf: root = leaf (no hashing)
5. Empty leaves: rejected with EmptyInputException

build_merkle_root() is the direct, sequential statement of these rules.
The depth-walk and width-walk engines must agree with it for every input.

Determinism Notes:
- No randomness or non-deterministic ordering
- This module never sorts leaves - it trusts input order
"""
from __future__ import annotations

from typing import Sequence

from core.crypto.hashing import hash_concat
from core.schemas.errors import EmptyInputException


def merkle_parent(left: bytes, right: bytes) -> bytes:
    """
    Compute the parent hash of two child nodes.

    Parent hash is deterministic: sha256(left + right)

    Args:
        left: Left child hash
        right: Right child hash

    Returns:
        Parent hash (32 bytes)
    """
    return hash_concat(left, right)


def merkle_parent_self(node: bytes) -> bytes:
    """
    Compute the parent of a node that has no sibling.

    The node stands in for its own missing sibling:
    merkle_parent_self(d) == merkle_parent(d, d)
    """
    return hash_concat(node, node)


def build_merkle_root(leaves: Sequence[bytes]) -> bytes:
    """
    Build a Merkle root from a sequence of leaf hashes.

    Algorithm:
    1. If empty: raise EmptyInputException
    2. If single leaf: return the leaf itself
    3. Otherwise, iteratively build levels:
       - Pair adjacent nodes and compute parent hashes
       - If odd number of nodes, the last one is paired with itself
       - Repeat until single root remains

    Example: [a, b, c] -> [parent(a,b), parent(c,c)] -> root

    Args:
        leaves: Sequence of 32-byte leaf hashes. Order matters and is preserved.

    Returns:
        32-byte Merkle root

    Raises:
        EmptyInputException: If leaves is empty
    """
    if len(leaves) == 0:
        raise EmptyInputException()

    current_level: list[bytes] = list(leaves)

    while len(current_level) > 1:
        next_level: list[bytes] = []
        for i in range(0, len(current_level), 2):
            if i + 1 < len(current_level):
                next_level.append(merkle_parent(current_level[i], current_level[i + 1]))
            else:
                next_level.append(merkle_parent_self(current_level[i]))
        current_level = next_level

    return current_level[0]


def compute_tree_depth(num_leaves: int) -> int:
    """
    Compute the depth of a Merkle tree with given number of leaves.

    Depth is the number of levels from leaves to root (inclusive).
    A single leaf has depth 1, two leaves have depth 2, etc.

    Args:
        num_leaves: Number of leaves in the tree

    Returns:
        Tree depth (0 for empty tree)
    """
    if num_leaves == 0:
        return 0

    depth = 1
    n = num_leaves
    while n > 1:
        n = (n + 1) // 2
        depth += 1

    return depth


def max_stack_bound(num_leaves: int) -> int:
    """
    Upper bound on depth-walk stack entries for num_leaves leaves.

    Equals ceil(log2(n)) + 1, i.e. the tree depth.
    """
    return compute_tree_depth(num_leaves)


__all__ = [
    "merkle_parent",
    "merkle_parent_self",
    "build_merkle_root",
    "compute_tree_depth",
    "max_stack_bound",
]
