"""
CLI Commands
"""

from . import root

__all__ = ["root"]
