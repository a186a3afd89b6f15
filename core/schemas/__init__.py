"""
Schemas

Purpose: Export the error taxonomy and structured result models.
"""

from .errors import (
    ErrorCodes,
    MerkleRootError,
    MerkleRootException,
    EmptyInputException,
    InvalidDigestEncodingException,
    SourceUnavailableException,
)

from .result import RootResult

__all__ = [
    # Errors
    "ErrorCodes",
    "MerkleRootError",
    "MerkleRootException",
    "EmptyInputException",
    "InvalidDigestEncodingException",
    "SourceUnavailableException",
    # Results
    "RootResult",
]
