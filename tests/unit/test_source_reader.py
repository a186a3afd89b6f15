"""
Leaf Source Unit Tests
Tests for core/source/reader.py
"""
import pytest

from core.schemas.errors import (
    ErrorCodes,
    InvalidDigestEncodingException,
    SourceUnavailableException,
)
from core.source.reader import DEFAULT_BUFFER_SIZE, LeafFileReader, iter_leaves
from fixtures import make_leaf_lines, make_leaves, write_leaf_file


class TestIterLeaves:
    """Tests for decoding text lines."""

    def test_decodes_lines_in_order(self):
        leaves = make_leaves(4)

        assert list(iter_leaves(make_leaf_lines(leaves))) == leaves

    def test_lines_without_terminator(self):
        leaves = make_leaves(3)

        assert list(iter_leaves([leaf.hex() for leaf in leaves])) == leaves

    def test_crlf_terminators(self):
        leaves = make_leaves(3)

        assert list(iter_leaves(make_leaf_lines(leaves, newline="\r\n"))) == leaves

    def test_error_reports_one_based_line_and_content(self):
        lines = make_leaf_lines(make_leaves(3))
        lines.insert(1, "not a digest\n")

        with pytest.raises(InvalidDigestEncodingException) as exc_info:
            list(iter_leaves(lines))

        error = exc_info.value
        assert error.line == 2
        assert error.content == "not a digest"
        assert error.details == {"line": 2, "content": "not a digest"}
        assert "line 2" in str(error)

    def test_first_line_error(self):
        with pytest.raises(InvalidDigestEncodingException) as exc_info:
            list(iter_leaves(["a" * 63 + "\n"]))

        assert exc_info.value.line == 1

    def test_blank_line_rejected(self):
        lines = make_leaf_lines(make_leaves(2)) + ["\n"]

        with pytest.raises(InvalidDigestEncodingException) as exc_info:
            list(iter_leaves(lines))

        assert exc_info.value.line == 3

    def test_surrounding_whitespace_rejected(self):
        line = " " + make_leaves(1)[0].hex() + "\n"

        with pytest.raises(InvalidDigestEncodingException):
            list(iter_leaves([line]))

    def test_lazy_decoding(self):
        """Valid leaves before a bad line are produced before the failure."""
        leaves = make_leaves(2)
        lines = make_leaf_lines(leaves) + ["zz\n"]
        it = iter_leaves(lines)

        assert next(it) == leaves[0]
        assert next(it) == leaves[1]
        with pytest.raises(InvalidDigestEncodingException):
            next(it)


class TestLeafFileReader:
    """Tests for reading leaves from a file."""

    def test_reads_file(self, leaf_file, leaves):
        assert list(LeafFileReader(leaf_file)) == leaves

    def test_reads_file_without_trailing_newline(self, tmp_path):
        leaves = make_leaves(5)
        path = write_leaf_file(tmp_path / "leaves.txt", leaves, trailing_newline=False)

        assert list(LeafFileReader(path)) == leaves

    def test_reiterable(self, leaf_file, leaves):
        reader = LeafFileReader(leaf_file)

        assert list(reader) == list(reader) == leaves

    def test_empty_file_yields_nothing(self, tmp_path):
        path = tmp_path / "empty.txt"
        path.write_text("")

        assert list(LeafFileReader(path)) == []

    def test_small_buffer(self, leaf_file, leaves):
        reader = LeafFileReader.with_buffer_size(16, leaf_file)

        assert reader.buffer_size == 16
        assert list(reader) == leaves

    def test_default_buffer_size(self, leaf_file):
        assert LeafFileReader(leaf_file).buffer_size == DEFAULT_BUFFER_SIZE

    def test_invalid_buffer_size(self, leaf_file):
        with pytest.raises(ValueError, match="buffer_size"):
            LeafFileReader(leaf_file, buffer_size=0)

    def test_missing_file_is_source_unavailable(self, tmp_path):
        path = tmp_path / "missing.txt"

        with pytest.raises(SourceUnavailableException) as exc_info:
            list(LeafFileReader(path))

        assert exc_info.value.code == ErrorCodes.SOURCE_UNAVAILABLE
        assert exc_info.value.path == str(path)
        assert isinstance(exc_info.value.__cause__, OSError)

    def test_directory_is_source_unavailable(self, tmp_path):
        with pytest.raises(SourceUnavailableException):
            list(LeafFileReader(tmp_path))

    def test_non_ascii_line_reports_line(self, tmp_path):
        lines = [leaf.hex() for leaf in make_leaves(3)]
        path = tmp_path / "accented.txt"
        path.write_bytes(
            (lines[0] + "\n").encode("ascii")
            + "é".encode("utf-8") + (lines[1][1:] + "\n").encode("ascii")
            + (lines[2] + "\n").encode("ascii")
        )

        with pytest.raises(InvalidDigestEncodingException) as exc_info:
            list(LeafFileReader(path))

        assert exc_info.value.line == 2
        assert exc_info.value.content == "\\xc3\\xa9" + lines[1][1:]

    def test_binary_content_is_invalid_encoding(self, tmp_path):
        path = tmp_path / "binary.txt"
        path.write_bytes(b"\xff\xfe\x00garbage\n")

        with pytest.raises(InvalidDigestEncodingException) as exc_info:
            list(LeafFileReader(path))

        assert exc_info.value.line == 1
        assert exc_info.value.content == "\\xff\\xfe\x00garbage"

    def test_bad_line_in_file_reports_line(self, tmp_path):
        leaves = make_leaves(4)
        lines = [leaf.hex() for leaf in leaves]
        lines[2] = lines[2][:-1]
        path = tmp_path / "bad.txt"
        path.write_text("\n".join(lines) + "\n")

        with pytest.raises(InvalidDigestEncodingException) as exc_info:
            list(LeafFileReader(path))

        assert exc_info.value.line == 3
        assert exc_info.value.content == lines[2]
