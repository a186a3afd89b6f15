"""
CLI Main Entry Point

Parses command-line arguments and dispatches to subcommands.

Usage:
    python -m merkle_root_cli root <file> [--mode MODE] [--workers N] [--json | --raw] [--debug]
    python -m merkle_root_cli config --init [--path PATH]
    python -m merkle_root_cli config --show

Environment Variables:
    MERKLE_ROOT_MODE                Walk mode: depth-walk, width-walk (default: depth-walk)
    MERKLE_ROOT_MAX_WORKERS         Width-walk thread pool size
    MERKLE_ROOT_MIN_PARALLEL_PAIRS  Smallest layer hashed on the pool (default: 1024)
    MERKLE_ROOT_BUFFER_SIZE         Leaf file read buffer in bytes
    MERKLE_ROOT_LOG_LEVEL           Log level (default: INFO)
    MERKLE_ROOT_LOG_FILE            Optional log file
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
import traceback
from pathlib import Path
from typing import Sequence

from core.config.runtime import get_default_config_template
from core.merkle.root import WalkMode
from merkle_root_cli import EXIT_RUNTIME_ERROR, EXIT_SUCCESS, __version__
from merkle_root_cli.commands import root
from merkle_root_cli.config import load_config


def setup_logging(level: str = "INFO", log_file: str | None = None) -> None:
    """Configure logging for the CLI."""
    log_level = getattr(logging, level.upper(), logging.INFO)

    handlers: list[logging.Handler] = [logging.StreamHandler(sys.stderr)]

    if log_file:
        handlers.append(logging.FileHandler(log_file))

    logging.basicConfig(
        level=log_level,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
        handlers=handlers,
    )


def _positive_int(value: str) -> int:
    number = int(value)
    if number < 1:
        raise argparse.ArgumentTypeError(f"must be a positive integer, got {value}")
    return number


def create_parser() -> argparse.ArgumentParser:
    """Create the argument parser with all subcommands."""
    parser = argparse.ArgumentParser(
        prog="merkle-root",
        description="Compute the Merkle root of a list of SHA-256 digests.",
    )
    parser.add_argument(
        "--version", action="version", version=f"%(prog)s {__version__}"
    )
    parser.add_argument(
        "--config", "-c",
        type=Path,
        default=None,
        help="Path to YAML configuration file (default: ./merkle-root.yaml or ~/.config/merkle-root/config.yaml)",
    )
    parser.add_argument(
        "--log-level",
        type=str,
        default=None,
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Log level (overrides config)",
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # --- root command ---
    root_parser = subparsers.add_parser(
        "root",
        help="Compute the Merkle root of a leaf file",
        description="Read one 64-character lowercase hex digest per line and print the Merkle root.",
    )
    root_parser.add_argument(
        "file",
        type=str,
        help="Path to the leaf file",
    )
    root_parser.add_argument(
        "--mode", "-m",
        type=str,
        choices=[m.value for m in WalkMode],
        default=None,
        help="Traversal strategy (default: from config or depth-walk)",
    )
    root_parser.add_argument(
        "--workers", "-w",
        type=_positive_int,
        default=None,
        help="Thread pool size for width-walk (default: from config)",
    )
    output_group = root_parser.add_mutually_exclusive_group()
    output_group.add_argument(
        "--json",
        action="store_true",
        default=False,
        help="Output machine-readable JSON result",
    )
    output_group.add_argument(
        "--raw",
        action="store_true",
        default=False,
        help="Write the 32 raw root bytes to stdout",
    )
    root_parser.add_argument(
        "--debug",
        action="store_true",
        default=False,
        help="Show tracebacks instead of short error messages",
    )
    root_parser.set_defaults(func=root.root_cmd)

    # --- config command ---
    config_parser = subparsers.add_parser(
        "config",
        help="Manage configuration",
        description="Initialize or display configuration.",
    )
    config_parser.add_argument(
        "--init",
        action="store_true",
        default=False,
        help="Create a template configuration file",
    )
    config_parser.add_argument(
        "--show",
        action="store_true",
        default=False,
        help="Show current configuration",
    )
    config_parser.add_argument(
        "--path",
        type=str,
        default="merkle-root.yaml",
        help="Path for config file (default: merkle-root.yaml)",
    )
    config_parser.set_defaults(func=config_cmd)

    return parser


def config_cmd(args: argparse.Namespace) -> int:
    """Handle config command."""
    if args.init:
        config_path = Path(args.path)
        if config_path.exists():
            print(f"Error: Config file already exists: {config_path}", file=sys.stderr)
            return EXIT_RUNTIME_ERROR

        config_path.write_text(get_default_config_template())
        print(f"Created configuration file: {config_path}")
        print("You can also use environment variables (MERKLE_ROOT_* prefix).")
        return EXIT_SUCCESS

    if args.show:
        print(json.dumps(args.runtime_config.to_dict(), indent=2))
        return EXIT_SUCCESS

    print("Usage: merkle-root config [--init|--show]")
    print("  --init  Create a template configuration file")
    print("  --show  Show current configuration")
    return EXIT_SUCCESS


def main(argv: Sequence[str] | None = None) -> int:
    """
    Main entry point for the CLI.

    Args:
        argv: Command-line arguments (defaults to sys.argv[1:])

    Returns:
        Exit code (0=success, 1=runtime error, 2=invalid input)
    """
    parser = create_parser()
    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        return EXIT_RUNTIME_ERROR

    # Load configuration
    try:
        config = load_config(args.config)
    except Exception as e:
        print(f"Error loading configuration: {e}", file=sys.stderr)
        return EXIT_RUNTIME_ERROR

    # Setup logging
    log_level = args.log_level or config.logging.level
    setup_logging(level=log_level, log_file=config.logging.file)

    # Attach config to args for commands to use
    args.runtime_config = config

    try:
        return args.func(args)
    except KeyboardInterrupt:
        print("\nInterrupted.", file=sys.stderr)
        return EXIT_RUNTIME_ERROR
    except Exception as e:
        if getattr(args, "debug", False):
            traceback.print_exc()
        else:
            print(f"Error: {e}", file=sys.stderr)
        return EXIT_RUNTIME_ERROR


if __name__ == "__main__":
    sys.exit(main())
