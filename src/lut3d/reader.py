"""Line and token reader over in-memory LUT text.

All parsers walk their input through :class:`LUTReader`, which keeps track of
the current line number so errors can point at the offending line.
"""

from typing import Iterator, List, Optional

from .exceptions import InvalidDataError


def skip_line(line: str) -> bool:
    """True for blank lines and lines whose first non-space character is '#'."""
    stripped = line.lstrip()
    return not stripped or stripped.startswith("#")


class LUTReader:
    """Sequential reader over LUT text.

    Lines may end in ``\\n``, ``\\r\\n`` or ``\\r``. ``line_number`` is the
    1-based number of the line the most recent line or token came from
    (0 before any read).
    """

    def __init__(self, text: str, format_tag: Optional[str] = None) -> None:
        self.text = text
        self.format_tag = format_tag
        self.pos = 0
        self.line_number = 0
        self.line = ""
        # line terminators consumed so far
        self._row = 0

    @property
    def eof(self) -> bool:
        return self.pos >= len(self.text)

    def error(self, message: str, line: Optional[str] = None) -> InvalidDataError:
        """Build an InvalidDataError pointing at the current line."""
        return InvalidDataError(
            message,
            line_number=self.line_number,
            line=self.line if line is None else line,
            format_tag=self.format_tag,
        )

    def _skip_terminator(self, pos: int) -> int:
        """Consume one line terminator at ``pos`` if present."""
        text = self.text
        if pos < len(text) and text[pos] == "\r":
            pos += 1
            if pos < len(text) and text[pos] == "\n":
                pos += 1
            self._row += 1
        elif pos < len(text) and text[pos] == "\n":
            pos += 1
            self._row += 1
        return pos

    def read_line(self) -> Optional[str]:
        """Return the next raw line without its terminator, or None at EOF."""
        if self.eof:
            return None
        text = self.text
        end = self.pos
        while end < len(text) and text[end] not in "\r\n":
            end += 1
        self.line = text[self.pos:end]
        self.line_number = self._row + 1
        self.pos = self._skip_terminator(end)
        return self.line

    def next_line(self) -> str:
        """Return the next raw line, raising at end of input."""
        line = self.read_line()
        if line is None:
            raise self.error("Unexpected end of input", line="")
        return line

    def next_meaningful_line(self) -> str:
        """Return the next line that is neither blank nor a comment."""
        while True:
            line = self.next_line()
            if not skip_line(line):
                return line

    def __iter__(self) -> Iterator[str]:
        while True:
            line = self.read_line()
            if line is None:
                return
            yield line

    def next_word(self) -> str:
        """Return the next whitespace-delimited token, crossing lines as needed.

        The whitespace that ends the token is consumed, so a token at the end
        of a line leaves the reader at the start of the next one.
        """
        text = self.text
        pos = self.pos
        while pos < len(text) and text[pos].isspace():
            if text[pos] in "\r\n":
                pos = self._skip_terminator(pos)
            else:
                pos += 1
        if pos >= len(text):
            self.pos = pos
            raise self.error("Unexpected end of input", line="")

        start = pos
        while pos < len(text) and not text[pos].isspace():
            pos += 1
        self.line = text[start:pos]
        self.line_number = self._row + 1

        if pos < len(text):
            pos = self._skip_terminator(pos) if text[pos] in "\r\n" else pos + 1
        self.pos = pos
        return self.line

    def next_float(self) -> float:
        return parse_float(self.next_word(), self)

    def floats(self, line: str, count: int) -> List[float]:
        """Parse the first ``count`` tokens of ``line`` as floats."""
        return [parse_float(token, self, line) for token in self._tokens(line, count)]

    def ints(self, line: str, count: int) -> List[int]:
        """Parse the first ``count`` tokens of ``line`` as integers."""
        return [parse_int(token, self, line) for token in self._tokens(line, count)]

    def _tokens(self, line: str, count: int) -> List[str]:
        tokens = line.split()
        if len(tokens) < count:
            raise self.error(f"Expected {count} values, found {len(tokens)}", line)
        return tokens[:count]


def parse_float(token: str, reader: LUTReader, line: Optional[str] = None) -> float:
    try:
        return float(token)
    except ValueError as e:
        raise InvalidDataError(
            f"Invalid number '{token}'",
            line_number=reader.line_number,
            line=line if line is not None else token,
            format_tag=reader.format_tag,
            cause=e,
        )


def parse_int(token: str, reader: LUTReader, line: Optional[str] = None) -> int:
    try:
        return int(token)
    except ValueError as e:
        raise InvalidDataError(
            f"Invalid integer '{token}'",
            line_number=reader.line_number,
            line=line if line is not None else token,
            format_tag=reader.format_tag,
            cause=e,
        )
