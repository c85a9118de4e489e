"""Tests for the line/token reader."""
import pytest

from lut3d.exceptions import InvalidDataError
from lut3d.reader import LUTReader, skip_line


class TestSkipLine:
    """Tests for blank and comment detection."""

    @pytest.mark.parametrize("line", ["", "   ", "\t", "# comment", "   # indented"])
    def test_skipped(self, line):
        assert skip_line(line)

    @pytest.mark.parametrize("line", ["0 0 0", "  LUT_3D_SIZE 2", "TITLE \"#1\""])
    def test_kept(self, line):
        assert not skip_line(line)


class TestLines:
    """Tests for line reading."""

    def test_line_terminators(self):
        """Test LF, CRLF and CR all end a line."""
        reader = LUTReader("a\r\nb\rc\nd")

        assert [reader.read_line() for _ in range(4)] == ["a", "b", "c", "d"]
        assert reader.line_number == 4
        assert reader.read_line() is None
        assert reader.eof

    def test_trailing_newline(self):
        """Test a final newline does not produce an extra empty line."""
        reader = LUTReader("a\n")
        assert list(reader) == ["a"]

    def test_next_meaningful_line(self):
        """Test comments and blank lines are skipped."""
        reader = LUTReader("# header\n\n   \n1 2 3\n")

        assert reader.next_meaningful_line() == "1 2 3"
        assert reader.line_number == 4

    def test_unexpected_end(self):
        """Test running out of lines raises with a line number."""
        reader = LUTReader("# only a comment\n", format_tag="cube")

        with pytest.raises(InvalidDataError, match="Unexpected end of input") as exc_info:
            reader.next_meaningful_line()

        assert exc_info.value.details["format"] == "cube"
        assert exc_info.value.details["line_number"] == 1


class TestTokens:
    """Tests for token reading."""

    def test_next_word_crosses_lines(self):
        """Test tokens are read across line boundaries."""
        reader = LUTReader("1 2\n\n  3\r\n4")

        assert [reader.next_word() for _ in range(4)] == ["1", "2", "3", "4"]
        assert reader.line_number == 4

    def test_line_after_last_token(self):
        """Test a line read after a token starts on the following line."""
        reader = LUTReader("0.5 1.5\nnext line\n")

        assert reader.next_float() == 0.5
        assert reader.next_float() == 1.5
        assert reader.read_line() == "next line"

    def test_next_word_at_end(self):
        """Test token reads past the end raise."""
        reader = LUTReader("1 \n\n")
        reader.next_word()

        with pytest.raises(InvalidDataError, match="Unexpected end of input"):
            reader.next_word()

    def test_floats(self):
        """Test only the first values are parsed."""
        reader = LUTReader("")
        assert reader.floats("0.25 1e-1 -2 extra", 3) == [0.25, 0.1, -2.0]

    def test_ints(self):
        reader = LUTReader("")
        assert reader.ints("17 17 17", 3) == [17, 17, 17]

    def test_too_few_values(self):
        """Test short lines are rejected."""
        reader = LUTReader("0.1 0.2\n")
        line = reader.read_line()

        with pytest.raises(InvalidDataError, match="Expected 3 values, found 2") as exc_info:
            reader.floats(line, 3)

        assert exc_info.value.details["line"] == "0.1 0.2"

    def test_invalid_number(self):
        """Test unparsable tokens name the line and keep the cause."""
        reader = LUTReader("# c\n0.1 abc 0.3\n")
        reader.next_meaningful_line()

        with pytest.raises(InvalidDataError) as exc_info:
            reader.floats(reader.line, 3)

        assert "abc" in exc_info.value.message
        assert exc_info.value.details["line_number"] == 2
        assert isinstance(exc_info.value.cause, ValueError)

    def test_invalid_integer(self):
        """Test fractional values are not integers."""
        reader = LUTReader("")
        with pytest.raises(InvalidDataError):
            reader.ints("1 2.5 3", 3)
