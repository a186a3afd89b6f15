"""
Root Computer
Facade choosing a traversal strategy and handling the trivial inputs.

Both engines share the same edge-case handling here:
- zero leaves raises EmptyInputException
- one leaf is returned as the root without touching an engine
"""
from __future__ import annotations

import logging
from enum import Enum
from itertools import chain
from typing import TYPE_CHECKING, Iterable, Optional

from core.merkle.depth_walk import DepthWalkEngine
from core.merkle.width_walk import DEFAULT_MIN_PARALLEL_PAIRS, WidthWalkEngine
from core.schemas.errors import EmptyInputException
from core.schemas.result import RootResult
from core.source.reader import iter_leaves

if TYPE_CHECKING:
    from core.config.runtime import RuntimeConfig


logger = logging.getLogger(__name__)


class WalkMode(str, Enum):
    """Traversal strategy used to compute a root."""
    DEPTH_WALK = "depth-walk"
    WIDTH_WALK = "width-walk"

    @classmethod
    def parse(cls, value: "str | WalkMode") -> "WalkMode":
        """
        Convert a mode name to a WalkMode.

        Raises:
            ValueError: If value names no known mode
        """
        if isinstance(value, cls):
            return value
        try:
            return cls(value)
        except ValueError:
            allowed = ", ".join(m.value for m in cls)
            raise ValueError(f"Unknown walk mode {value!r} (expected one of: {allowed})") from None


class RootComputer:
    """
    Computes Merkle roots with a fixed traversal strategy.

    Example:
        >>> computer = RootComputer(WalkMode.WIDTH_WALK, max_workers=4)
        >>> root = computer.compute(leaves)
        >>> computer.compute_result(leaves).leaf_count == len(leaves)
        True
    """

    def __init__(
        self,
        mode: "WalkMode | str" = WalkMode.DEPTH_WALK,
        max_workers: Optional[int] = None,
        min_parallel_pairs: int = DEFAULT_MIN_PARALLEL_PAIRS,
    ) -> None:
        self.mode = WalkMode.parse(mode)
        self.max_workers = max_workers
        self.min_parallel_pairs = min_parallel_pairs

    @classmethod
    def from_config(cls, config: "RuntimeConfig") -> "RootComputer":
        """Build a computer from the engine section of a runtime config."""
        return cls(
            mode=config.engine.mode,
            max_workers=config.engine.max_workers,
            min_parallel_pairs=config.engine.min_parallel_pairs,
        )

    def _compute(self, leaves: Iterable[bytes]) -> tuple[bytes, int]:
        """Return (root, leaf_count) for leaves."""
        source = iter(leaves)
        first = next(source, None)
        if first is None:
            raise EmptyInputException()

        second = next(source, None)
        if second is None:
            return first, 1

        logger.info(f"Computing Merkle root with {self.mode.value}")

        if self.mode is WalkMode.DEPTH_WALK:
            depth_engine = DepthWalkEngine()
            root = depth_engine.compute(chain((first, second), source))
            return root, depth_engine.leaf_count

        layer = [first, second]
        layer.extend(source)
        width_engine = WidthWalkEngine(self.max_workers, self.min_parallel_pairs)
        return width_engine.compute(layer), len(layer)

    def compute(self, leaves: Iterable[bytes]) -> bytes:
        """
        Compute the root of an ordered leaf sequence.

        Depth-walk consumes the sequence lazily; width-walk materializes it.

        Args:
            leaves: Ordered 32-byte leaf digests (any iterable)

        Returns:
            32-byte Merkle root

        Raises:
            EmptyInputException: If leaves yields nothing
        """
        root, _ = self._compute(leaves)
        return root

    def compute_result(self, leaves: Iterable[bytes]) -> RootResult:
        """Compute the root and report it with the mode and leaf count."""
        root, leaf_count = self._compute(leaves)
        return RootResult.from_digest(root, mode=self.mode.value, leaf_count=leaf_count)

    def compute_lines(self, lines: Iterable[str]) -> bytes:
        """
        Decode hex lines and compute their root.

        Raises:
            InvalidDigestEncodingException: With the 1-based line number of the
                first malformed line; no root is produced
            EmptyInputException: If there are no lines
        """
        return self.compute(iter_leaves(lines))


def compute_root(
    leaves: Iterable[bytes],
    mode: "WalkMode | str" = WalkMode.DEPTH_WALK,
) -> bytes:
    """Compute the Merkle root of leaves with the given traversal strategy."""
    return RootComputer(mode).compute(leaves)


__all__ = [
    "WalkMode",
    "RootComputer",
    "compute_root",
]
