"""
Error taxonomy for Merkle root computation.

Defines both Pydantic models for structured error reporting
and Python exceptions for control flow.

Every error is terminal: a failed computation never yields a partial
or best-effort root, and nothing here is retryable.
"""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field


# =============================================================================
# Error Codes (Machine-Readable Constants)
# =============================================================================

class ErrorCodes:
    """Stable machine-readable error codes."""

    EMPTY_INPUT = "EMPTY_INPUT"
    INVALID_DIGEST_ENCODING = "INVALID_DIGEST_ENCODING"
    SOURCE_UNAVAILABLE = "SOURCE_UNAVAILABLE"


# =============================================================================
# Pydantic Error Models (Structured Communication)
# =============================================================================

class MerkleRootError(BaseModel):
    """
    Structured error model.

    Used by the CLI to report failures as JSON without losing the
    context (line number, offending content) carried by the exception.
    """

    model_config = ConfigDict(
        extra="forbid",
        frozen=False,
        validate_assignment=True,
    )

    code: str = Field(
        ...,
        description="Stable machine-readable error code",
        examples=[ErrorCodes.INVALID_DIGEST_ENCODING],
    )
    message: str = Field(
        ...,
        description="Human-readable error message",
    )
    details: dict[str, Any] = Field(
        default_factory=dict,
        description="Additional structured details about the error",
    )
    retryable: bool = Field(
        default=False,
        description="Whether the operation can be retried",
    )

    def to_exception(self) -> "MerkleRootException":
        """Convert this error model to a raisable exception."""
        return MerkleRootException(
            code=self.code,
            message=self.message,
            details=self.details,
            retryable=self.retryable,
        )


# =============================================================================
# Python Exceptions (Control Flow)
# =============================================================================

class MerkleRootException(Exception):
    """
    Base exception for all Merkle root computation errors.

    Carries structured error information and can be converted
    to a MerkleRootError model.
    """

    def __init__(
        self,
        message: str,
        code: str = "MERKLE_ROOT_ERROR",
        details: dict[str, Any] | None = None,
        retryable: bool = False,
    ) -> None:
        super().__init__(message)
        self.code = code
        self.message = message
        self.details = details or {}
        self.retryable = retryable

    def to_error_model(self) -> MerkleRootError:
        """Convert this exception to a MerkleRootError model."""
        return MerkleRootError(
            code=self.code,
            message=self.message,
            details=self.details,
            retryable=self.retryable,
        )

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(code={self.code!r}, message={self.message!r})"


class EmptyInputException(MerkleRootException):
    """Raised when a root is requested over zero leaves."""

    def __init__(
        self,
        message: str = "Cannot compute a Merkle root over zero leaves",
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(
            message=message,
            code=ErrorCodes.EMPTY_INPUT,
            details=details,
            retryable=False,
        )


class InvalidDigestEncodingException(MerkleRootException):
    """
    Raised when text is not a 64-character lowercase hex digest.

    The line number is 1-based and is only known once the failure is
    reported through a leaf source; bare decode calls leave it unset.
    """

    def __init__(
        self,
        content: Any,
        line: int | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        full_details = details or {}
        full_details["content"] = content if isinstance(content, str) else repr(content)
        if line is not None:
            full_details["line"] = line
        self.content = content
        self.line = line

        where = f" on line {line}" if line is not None else ""
        super().__init__(
            message=(
                f"Invalid digest encoding{where}: {content!r} "
                f"(expected 64 lowercase hex characters)"
            ),
            code=ErrorCodes.INVALID_DIGEST_ENCODING,
            details=full_details,
            retryable=False,
        )

    def with_line(self, line: int) -> "InvalidDigestEncodingException":
        """Return a copy of this error bound to a 1-based line number."""
        return InvalidDigestEncodingException(content=self.content, line=line)


class SourceUnavailableException(MerkleRootException):
    """Raised when the leaf source cannot be opened or read."""

    def __init__(
        self,
        message: str,
        path: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        full_details = details or {}
        if path:
            full_details["path"] = path
        self.path = path
        super().__init__(
            message=message,
            code=ErrorCodes.SOURCE_UNAVAILABLE,
            details=full_details,
            retryable=False,
        )
