"""
Width-Walk Merkle Root
Layer-by-layer root computation with data parallelism inside each layer.

lvl3           abcdefef
              /       |
lvl2       abcd    efef
          /   |   /   |
lvl1     ab  cd  ef
        / | / | / |
lvl0    a b c d e f

The whole leaf layer is materialized and repeatedly collapsed into a
layer half its size. Every parent in the next layer depends only on two
nodes of the current layer, so the pairs are split into contiguous
spans and hashed on a thread pool. All spans of a layer are collected
before the next layer starts.

Pros: independent work within a layer, suits multicore machines.
Cons: O(n) memory, one allocation per layer.
"""
from __future__ import annotations

import logging
import os
from concurrent.futures import Executor, ThreadPoolExecutor
from itertools import chain
from typing import Optional, Sequence

from core.merkle.merkle_tree import merkle_parent, merkle_parent_self
from core.schemas.errors import EmptyInputException


logger = logging.getLogger(__name__)


# Layers with fewer pairs than this are hashed on the calling thread
DEFAULT_MIN_PARALLEL_PAIRS = 1024


def default_max_workers() -> int:
    """Worker count used when none is configured."""
    return min(32, (os.cpu_count() or 1) + 4)


def _combine_span(layer: Sequence[bytes], start: int, stop: int) -> list[bytes]:
    """Parents for pair indices [start, stop) of layer."""
    size = len(layer)
    parents: list[bytes] = []
    for i in range(start, stop):
        left = 2 * i
        if left + 1 < size:
            parents.append(merkle_parent(layer[left], layer[left + 1]))
        else:
            parents.append(merkle_parent_self(layer[left]))
    return parents


def _spans(pairs: int, parts: int) -> list[tuple[int, int]]:
    """Split range(pairs) into at most `parts` contiguous, near-equal spans."""
    parts = max(1, min(parts, pairs))
    step, extra = divmod(pairs, parts)
    spans = []
    start = 0
    for k in range(parts):
        stop = start + step + (1 if k < extra else 0)
        spans.append((start, stop))
        start = stop
    return spans


def _next_layer(
    layer: Sequence[bytes],
    pool: Optional[Executor],
    workers: int,
    min_parallel_pairs: int,
) -> list[bytes]:
    pairs = (len(layer) + 1) // 2
    if pool is None or pairs < min_parallel_pairs:
        return _combine_span(layer, 0, pairs)

    spans = _spans(pairs, workers)
    # map() yields in submission order; draining it is the layer barrier
    results = pool.map(lambda span: _combine_span(layer, span[0], span[1]), spans)
    return list(chain.from_iterable(results))


def _reduce(
    leaves: Sequence[bytes],
    max_workers: Optional[int],
    min_parallel_pairs: int,
) -> tuple[bytes, int]:
    """Collapse layers until one node is left, returning (root, layers)."""
    if len(leaves) == 0:
        raise EmptyInputException()

    layer: Sequence[bytes] = leaves
    layers = 0
    workers = max_workers if max_workers is not None else default_max_workers()
    if workers < 1:
        raise ValueError(f"max_workers must be at least 1, got {workers}")

    # Every later layer is smaller, so no layer would reach the pool
    first_pairs = (len(layer) + 1) // 2
    if workers == 1 or first_pairs < min_parallel_pairs:
        while len(layer) > 1:
            layer = _next_layer(layer, None, workers, min_parallel_pairs)
            layers += 1
        return layer[0], layers

    with ThreadPoolExecutor(max_workers=workers, thread_name_prefix="width-walk") as pool:
        while len(layer) > 1:
            layer = _next_layer(layer, pool, workers, min_parallel_pairs)
            layers += 1
    return layer[0], layers


def width_walk_root(
    leaves: Sequence[bytes],
    max_workers: Optional[int] = None,
    min_parallel_pairs: int = DEFAULT_MIN_PARALLEL_PAIRS,
) -> bytes:
    """
    Compute the Merkle root of a fully materialized leaf collection.

    Args:
        leaves: Ordered 32-byte leaf digests
        max_workers: Thread pool size (default: default_max_workers())
        min_parallel_pairs: Smallest layer (in pairs) hashed on the pool

    Returns:
        32-byte Merkle root

    Raises:
        EmptyInputException: If leaves is empty
        ValueError: If max_workers is less than 1
    """
    root, _ = _reduce(leaves, max_workers, min_parallel_pairs)
    return root


class WidthWalkEngine:
    """Width-walk engine with fixed pool settings."""

    name = "width-walk"

    def __init__(
        self,
        max_workers: Optional[int] = None,
        min_parallel_pairs: int = DEFAULT_MIN_PARALLEL_PAIRS,
    ) -> None:
        self.max_workers = max_workers
        self.min_parallel_pairs = min_parallel_pairs
        self.layers_reduced = 0

    def compute(self, leaves: Sequence[bytes]) -> bytes:
        root, self.layers_reduced = _reduce(
            leaves, self.max_workers, self.min_parallel_pairs
        )
        logger.debug(
            f"width-walk reduced {len(leaves)} leaves in {self.layers_reduced} layers"
        )
        return root


__all__ = [
    "DEFAULT_MIN_PARALLEL_PAIRS",
    "WidthWalkEngine",
    "default_max_workers",
    "width_walk_root",
]
