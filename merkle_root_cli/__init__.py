"""
Merkle Root CLI

Command-line interface for computing Merkle roots of digest lists.

Usage:
    python -m merkle_root_cli root leaves.txt
    python -m merkle_root_cli root leaves.txt --mode width-walk --workers 8 --json
    python -m merkle_root_cli config --init
"""

__version__ = "0.1.0"

# Exit codes
EXIT_SUCCESS = 0
EXIT_RUNTIME_ERROR = 1
EXIT_INVALID_INPUT = 2
