"""Go lexer with automatic semicolon insertion.

Produces the token stream the parser consumes. Comments and whitespace are
dropped; line ends that terminate a statement become SEMICOLON tokens with
value ``"\\n"`` as described in the Go specification.

Thread Safety:
Lexer instances are single-use. Create one per source string.
All state is instance-local; no shared mutable state.

"""

from __future__ import annotations

from collections.abc import Iterator

from gomin.errors import ParseError
from gomin.lexer.operators import BLOCK_COMMENT, LINE_COMMENT, match_operator
from gomin.lexer.scanners import (
    CommentScannerMixin,
    NumberScannerMixin,
    StringScannerMixin,
)
from gomin.tokens import KEYWORDS, OPERATORS, Token, TokenType

# Tokens after which a line end inserts a semicolon.
_SEMI_TRIGGERS = frozenset(
    {
        TokenType.IDENT,
        TokenType.INT,
        TokenType.FLOAT,
        TokenType.IMAG,
        TokenType.CHAR,
        TokenType.STRING,
        TokenType.BREAK,
        TokenType.CONTINUE,
        TokenType.FALLTHROUGH,
        TokenType.RETURN,
        TokenType.INC,
        TokenType.DEC,
        TokenType.RPAREN,
        TokenType.RBRACK,
        TokenType.RBRACE,
    }
)


class Lexer(
    NumberScannerMixin,
    StringScannerMixin,
    CommentScannerMixin,
):
    """Go tokenizer.

    Usage:
            >>> lexer = Lexer("x := a<-b\\n")
            >>> [t.value for t in lexer.tokenize()]
            ['x', ':=', 'a', '<-', 'b', '\\n', '']

    Thread Safety:
        Lexer instances are single-use. Create one per source string.

    """

    __slots__ = (
        "_source",
        "_source_len",
        "_pos",
        "_lineno",
        "_line_start",
        "_source_file",
        "_insert_semi",
    )

    def __init__(self, source: str, source_file: str | None = None) -> None:
        """Initialize lexer with source text.

        Args:
            source: Go source text
            source_file: Optional source file path for error messages
        """
        self._source = source
        self._source_len = len(source)
        self._pos = 0
        self._lineno = 1
        self._line_start = 0
        self._source_file = source_file
        self._insert_semi = False

    def tokenize(self) -> Iterator[Token]:
        """Tokenize source into token stream.

        Yields:
            Token objects one at a time, ending with EOF.

        Raises:
            ParseError: On an illegal character or unterminated literal/comment.
        """
        while True:
            token = self._next_token()
            yield token
            if token.type is TokenType.EOF:
                return

    # =========================================================================
    # Position helpers
    # =========================================================================

    def _mark_newline(self, offset: int) -> None:
        """Record that ``offset`` holds a newline character."""
        self._lineno += 1
        self._line_start = offset + 1

    def _error(self, message: str, offset: int) -> ParseError:
        lineno = self._source.count("\n", 0, offset) + 1
        col = offset - (self._source.rfind("\n", 0, offset) + 1) + 1
        return ParseError(message, lineno, col, self._source_file)

    def _make_token(self, type_: TokenType, value: str, start: int, lineno: int, col: int) -> Token:
        return Token(
            type=type_,
            value=value,
            lineno=lineno,
            col=col,
            offset=start,
            end_offset=self._pos,
            source_file=self._source_file,
        )

    def _inserted_semicolon(self) -> Token:
        self._insert_semi = False
        col = self._pos - self._line_start + 1
        return Token(
            type=TokenType.SEMICOLON,
            value="\n",
            lineno=self._lineno,
            col=col,
            offset=self._pos,
            end_offset=self._pos,
            source_file=self._source_file,
        )

    # =========================================================================
    # Scanning
    # =========================================================================

    def _next_token(self) -> Token:
        source = self._source
        while True:
            # Skip horizontal whitespace
            while self._pos < self._source_len and source[self._pos] in " \t\r":
                self._pos += 1

            if self._pos >= self._source_len:
                if self._insert_semi:
                    return self._inserted_semicolon()
                return self._make_token(
                    TokenType.EOF, "", self._pos, self._lineno, self._pos - self._line_start + 1
                )

            ch = source[self._pos]
            if ch == "\n":
                if self._insert_semi:
                    token = self._inserted_semicolon()
                    self._pos += 1
                    self._mark_newline(self._pos - 1)
                    return token
                self._pos += 1
                self._mark_newline(self._pos - 1)
                continue

            if source.startswith(LINE_COMMENT, self._pos):
                if self._insert_semi:
                    return self._inserted_semicolon()
                self._skip_line_comment()
                continue

            if source.startswith(BLOCK_COMMENT, self._pos):
                start_lineno = self._lineno
                start_col = self._pos - self._line_start + 1
                start = self._pos
                if self._skip_block_comment() and self._insert_semi:
                    self._insert_semi = False
                    return Token(
                        type=TokenType.SEMICOLON,
                        value="\n",
                        lineno=start_lineno,
                        col=start_col,
                        offset=start,
                        end_offset=start,
                        source_file=self._source_file,
                    )
                continue

            return self._scan_token(ch)

    def _scan_token(self, ch: str) -> Token:
        start = self._pos
        lineno = self._lineno
        col = start - self._line_start + 1

        if ch.isalpha() or ch == "_":
            value = self._scan_identifier()
            type_ = KEYWORDS.get(value, TokenType.IDENT)
        elif ch.isdigit() or (ch == "." and self._peek_char(1).isdigit()):
            type_, value = self._scan_number()
        elif ch == '"':
            type_, value = TokenType.STRING, self._scan_quoted('"', "string")
        elif ch == "`":
            type_, value = TokenType.STRING, self._scan_raw_string()
        elif ch == "'":
            type_, value = TokenType.CHAR, self._scan_quoted("'", "rune")
        else:
            value = match_operator(self._source, start)
            if not value:
                raise self._error(f"illegal character {ch!r}", start)
            self._pos += len(value)
            type_ = OPERATORS[value]

        self._insert_semi = type_ in _SEMI_TRIGGERS
        return self._make_token(type_, value, start, lineno, col)

    def _scan_identifier(self) -> str:
        source = self._source
        start = self._pos
        pos = start + 1
        while pos < self._source_len and (source[pos].isalnum() or source[pos] == "_"):
            pos += 1
        self._pos = pos
        return source[start:pos]
