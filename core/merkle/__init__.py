"""
Merkle Root Computation

Deterministic Merkle roots over ordered 32-byte leaf digests.

This module provides:
- merkle_parent / merkle_parent_self: the combination and duplication rules
- build_merkle_root: plain layer-by-layer reference definition
- depth_walk_root / DepthWalkEngine: streaming stack fold, O(log n) memory
- width_walk_root / WidthWalkEngine: layer fold with thread-parallel pairs
- RootComputer / WalkMode: facade selecting one of the two engines

Canonical Commitment Rules:
1. Parent hashing: sha256(left + right)
2. Padding: an unmatched node at any layer is combined with itself
3. Single leaf: root = leaf
4. Empty tree: EmptyInputException

Usage:
    from core.merkle import RootComputer, WalkMode
    from core.source import LeafFileReader

    computer = RootComputer(WalkMode.DEPTH_WALK)
    root = computer.compute(LeafFileReader("leaves.txt"))
"""
from .merkle_tree import (
    merkle_parent,
    merkle_parent_self,
    build_merkle_root,
    compute_tree_depth,
    max_stack_bound,
)

from .depth_walk import (
    StackEntry,
    DepthWalkEngine,
    depth_walk_root,
)

from .width_walk import (
    DEFAULT_MIN_PARALLEL_PAIRS,
    WidthWalkEngine,
    width_walk_root,
)

from .root import (
    WalkMode,
    RootComputer,
    compute_root,
)


__all__ = [
    # Combination rules
    "merkle_parent",
    "merkle_parent_self",
    # Reference definition
    "build_merkle_root",
    "compute_tree_depth",
    "max_stack_bound",
    # Engines
    "StackEntry",
    "DepthWalkEngine",
    "depth_walk_root",
    "DEFAULT_MIN_PARALLEL_PAIRS",
    "WidthWalkEngine",
    "width_walk_root",
    # Facade
    "WalkMode",
    "RootComputer",
    "compute_root",
]
