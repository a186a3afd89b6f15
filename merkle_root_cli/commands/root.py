"""
CLI Root Command

Compute the Merkle root of a leaf file (one lowercase hex digest per line).

Usage:
    merkle-root root leaves.txt [--mode depth-walk|width-walk] [--workers N]
                                [--json | --raw] [--debug]
"""

from __future__ import annotations

import json
import logging
import sys
from argparse import Namespace
from pathlib import Path

from core.config.runtime import RuntimeConfig
from core.merkle.root import RootComputer, WalkMode
from core.schemas.errors import (
    EmptyInputException,
    InvalidDigestEncodingException,
    MerkleRootException,
    SourceUnavailableException,
)
from core.source.reader import LeafFileReader
from merkle_root_cli import EXIT_INVALID_INPUT, EXIT_RUNTIME_ERROR, EXIT_SUCCESS


logger = logging.getLogger(__name__)


def build_computer(args: Namespace, config: RuntimeConfig) -> RootComputer:
    """Create a RootComputer from config, with command-line overrides applied."""
    mode = WalkMode.parse(args.mode or config.engine.mode)
    max_workers = args.workers if args.workers is not None else config.engine.max_workers
    return RootComputer(
        mode=mode,
        max_workers=max_workers,
        min_parallel_pairs=config.engine.min_parallel_pairs,
    )


def report_error(error: MerkleRootException, output_json: bool) -> None:
    """Print a failure to stderr, or as a JSON error document to stdout."""
    if output_json:
        print(json.dumps({"error": error.to_error_model().model_dump()}, indent=2))
    else:
        print(f"Error: {error.message}", file=sys.stderr)


def root_cmd(args: Namespace) -> int:
    """
    Execute the root command.

    Args:
        args: Parsed command-line arguments

    Returns:
        Exit code
    """
    config: RuntimeConfig = getattr(args, "runtime_config", None) or RuntimeConfig()
    path = Path(args.file)
    output_json = args.json
    debug = args.debug

    reader = LeafFileReader(
        path,
        buffer_size=config.source.buffer_size,
        encoding=config.source.encoding,
    )
    computer = build_computer(args, config)
    logger.info(f"Computing root of {path} with {computer.mode.value}")

    try:
        result = computer.compute_result(reader)
    except (EmptyInputException, InvalidDigestEncodingException) as e:
        if debug:
            raise
        report_error(e, output_json)
        return EXIT_INVALID_INPUT
    except SourceUnavailableException as e:
        if debug:
            raise
        report_error(e, output_json)
        return EXIT_RUNTIME_ERROR

    if output_json:
        print(json.dumps(result.model_dump(), indent=2))
    elif args.raw:
        sys.stdout.buffer.write(bytes.fromhex(result.root))
        sys.stdout.buffer.flush()
    else:
        print(result.root)

    logger.info(f"Root computed over {result.leaf_count} leaves")
    return EXIT_SUCCESS
