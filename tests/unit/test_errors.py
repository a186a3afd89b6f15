"""
Error Taxonomy Unit Tests
Tests for core/schemas/errors.py and core/schemas/result.py
"""
import pytest
from pydantic import ValidationError

from core.schemas.errors import (
    EmptyInputException,
    ErrorCodes,
    InvalidDigestEncodingException,
    MerkleRootError,
    MerkleRootException,
    SourceUnavailableException,
)
from core.schemas.result import RootResult


class TestExceptions:
    """Exception hierarchy and structured details."""

    def test_all_derive_from_base(self):
        for exc in (
            EmptyInputException(),
            InvalidDigestEncodingException(content="x"),
            SourceUnavailableException("gone"),
        ):
            assert isinstance(exc, MerkleRootException)
            assert exc.retryable is False

    def test_empty_input_code(self):
        assert EmptyInputException().code == ErrorCodes.EMPTY_INPUT

    def test_invalid_encoding_with_line(self):
        error = InvalidDigestEncodingException(content="abc").with_line(7)

        assert error.line == 7
        assert error.content == "abc"
        assert error.details == {"content": "abc", "line": 7}

    def test_invalid_encoding_non_str_content(self):
        error = InvalidDigestEncodingException(content=b"abc")

        assert error.details["content"] == "b'abc'"

    def test_source_unavailable_path(self):
        error = SourceUnavailableException("cannot open", path="/tmp/x")

        assert error.code == ErrorCodes.SOURCE_UNAVAILABLE
        assert error.details == {"path": "/tmp/x"}

    def test_repr(self):
        assert repr(EmptyInputException()).startswith("EmptyInputException(code='EMPTY_INPUT'")


class TestErrorModel:
    """Conversion between exceptions and MerkleRootError."""

    def test_to_error_model(self):
        model = InvalidDigestEncodingException(content="zz", line=3).to_error_model()

        assert isinstance(model, MerkleRootError)
        assert model.code == ErrorCodes.INVALID_DIGEST_ENCODING
        assert model.details == {"content": "zz", "line": 3}
        assert model.retryable is False

    def test_model_round_trip(self):
        model = MerkleRootError(code=ErrorCodes.EMPTY_INPUT, message="nothing")

        exc = model.to_exception()

        assert isinstance(exc, MerkleRootException)
        assert exc.to_error_model() == model

    def test_extra_fields_forbidden(self):
        with pytest.raises(ValidationError):
            MerkleRootError(code="X", message="m", unexpected=True)


class TestRootResult:
    """Tests for the RootResult model."""

    def test_from_digest(self):
        result = RootResult.from_digest(bytes(range(32)), mode="depth-walk", leaf_count=3)

        assert result.root == bytes(range(32)).hex()
        assert result.model_dump() == {
            "root": bytes(range(32)).hex(),
            "mode": "depth-walk",
            "leaf_count": 3,
        }

    @pytest.mark.parametrize("root", ["AB" * 32, "a" * 63, "g" * 64])
    def test_invalid_root_rejected(self, root):
        with pytest.raises(ValidationError):
            RootResult(root=root, mode="depth-walk", leaf_count=1)

    def test_zero_leaves_rejected(self):
        with pytest.raises(ValidationError):
            RootResult(root="a" * 64, mode="width-walk", leaf_count=0)
