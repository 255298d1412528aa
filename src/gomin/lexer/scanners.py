"""Scanner mixins for Go literals and comments.

Each mixin starts at the current position (which must hold the opening
character) and returns the raw text it consumed. Position and line
bookkeeping stays on the host Lexer.

Required Host Attributes:
    - _source: str
    - _source_len: int
    - _pos: int
    - _error(message, offset) -> ParseError
    - _mark_newline(offset) -> None

"""

from __future__ import annotations

from gomin.tokens import TokenType

_DECIMAL = frozenset("0123456789_")
_HEX = frozenset("0123456789abcdefABCDEF_")


class NumberScannerMixin:
    """Scan integer, floating-point and imaginary literals."""

    _source: str
    _source_len: int
    _pos: int

    def _scan_digits(self, allowed: frozenset[str]) -> None:
        source = self._source
        pos = self._pos
        while pos < self._source_len and source[pos] in allowed:
            pos += 1
        self._pos = pos

    def _scan_number(self) -> tuple[TokenType, str]:
        """Scan a number literal.

        Accepts decimal, hexadecimal (``0x``), octal (``0o`` and legacy
        ``017``) and binary (``0b``) integers, decimal and hexadecimal
        floats, and the imaginary suffix ``i``. Validation of digit ranges
        is left to the Go toolchain; only token boundaries matter here.
        """
        source = self._source
        start = self._pos
        kind = TokenType.INT
        digits = _DECIMAL
        hexadecimal = False

        if source[start] != ".":
            if source[start] == "0" and self._peek_char(1) in ("x", "X"):
                self._pos += 2
                digits = _HEX
                hexadecimal = True
            elif source[start] == "0" and self._peek_char(1) in ("b", "B", "o", "O"):
                self._pos += 2
            self._scan_digits(digits)

        if self._peek_char(0) == ".":
            kind = TokenType.FLOAT
            self._pos += 1
            self._scan_digits(digits)

        exponent = ("p", "P") if hexadecimal else ("e", "E")
        if self._peek_char(0) in exponent:
            kind = TokenType.FLOAT
            self._pos += 1
            if self._peek_char(0) in ("+", "-"):
                self._pos += 1
            self._scan_digits(_DECIMAL)

        if self._peek_char(0) == "i":
            kind = TokenType.IMAG
            self._pos += 1

        return kind, source[start : self._pos]

    def _peek_char(self, offset: int) -> str:
        pos = self._pos + offset
        if pos < self._source_len:
            return self._source[pos]
        return ""


class StringScannerMixin:
    """Scan interpreted strings, raw strings and rune literals."""

    _source: str
    _source_len: int
    _pos: int

    def _scan_quoted(self, quote: str, what: str) -> str:
        """Scan a ``"..."`` or ``'...'`` literal honouring backslash escapes."""
        source = self._source
        start = self._pos
        pos = start + 1
        while True:
            if pos >= self._source_len or source[pos] == "\n":
                raise self._error(f"{what} literal not terminated", start)
            ch = source[pos]
            if ch == "\\":
                pos += 2
                continue
            pos += 1
            if ch == quote:
                break
        self._pos = pos
        return source[start:pos]

    def _scan_raw_string(self) -> str:
        """Scan a back-quoted raw string, which may span lines."""
        source = self._source
        start = self._pos
        end = source.find("`", start + 1)
        if end == -1:
            raise self._error("raw string literal not terminated", start)
        newline = source.find("\n", start, end)
        while newline != -1:
            self._mark_newline(newline)
            newline = source.find("\n", newline + 1, end)
        self._pos = end + 1
        return source[start : end + 1]


class CommentScannerMixin:
    """Skip line and block comments."""

    _source: str
    _source_len: int
    _pos: int

    def _skip_line_comment(self) -> None:
        """Advance to the newline ending a ``//`` comment (newline not consumed)."""
        end = self._source.find("\n", self._pos)
        self._pos = end if end != -1 else self._source_len

    def _skip_block_comment(self) -> bool:
        """Advance past a ``/* */`` comment.

        Returns:
            True if the comment spans a line break.
        """
        start = self._pos
        end = self._source.find("*/", start + 2)
        if end == -1:
            raise self._error("comment not terminated", start)
        spans_lines = False
        newline = self._source.find("\n", start, end)
        while newline != -1:
            spans_lines = True
            self._mark_newline(newline)
            newline = self._source.find("\n", newline + 1, end)
        self._pos = end + 2
        return spans_lines
