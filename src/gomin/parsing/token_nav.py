"""Token navigation utilities for the Go parser.

Provides mixin for token stream navigation, expectation checks, error
construction and the nesting guard.
"""

from __future__ import annotations

from collections.abc import Iterator
from contextlib import contextmanager
from typing import TYPE_CHECKING

from gomin.errors import ParseError
from gomin.tokens import Token, TokenType

if TYPE_CHECKING:
    from collections.abc import Sequence


class TokenNavigationMixin:
    """Mixin providing token stream navigation methods.

    Required Host Attributes:
        - _tokens: Sequence[Token] (always ends with EOF)
        - _tokens_len: int
        - _pos: int
        - _current: Token
        - _source_file: str | None
        - _depth: int
        - _max_depth: int

    """

    _tokens: Sequence[Token]
    _tokens_len: int
    _pos: int
    _current: Token
    _source_file: str | None
    _depth: int
    _max_depth: int

    @property
    def _tok(self) -> TokenType:
        """Type of the current token."""
        return self._current.type

    def _advance(self) -> Token:
        """Consume the current token and return it. Stays on EOF."""
        token = self._current
        if self._pos < self._tokens_len - 1:
            self._pos += 1
            self._current = self._tokens[self._pos]
        return token

    def _got(self, type_: TokenType) -> bool:
        """Consume the current token if it has the given type."""
        if self._current.type is type_:
            self._advance()
            return True
        return False

    def _expect(self, type_: TokenType) -> Token:
        """Consume a token of the given type or raise ParseError."""
        if self._current.type is not type_:
            raise self._error_expected(f"'{type_.spelling}'")
        return self._advance()

    def _expect_semi(self) -> None:
        """Consume a statement terminator.

        A semicolon may be omitted before a closing ")" or "}".
        """
        if self._current.type in (TokenType.RPAREN, TokenType.RBRACE, TokenType.EOF):
            return
        if self._current.type is TokenType.SEMICOLON:
            self._advance()
            return
        raise self._error_expected("';'")

    # =========================================================================
    # Errors
    # =========================================================================

    def _error(self, message: str, token: Token | None = None) -> ParseError:
        token = token or self._current
        return ParseError(message, token.lineno, token.col, self._source_file)

    def _error_expected(self, what: str) -> ParseError:
        return self._error(f"expected {what}, found {self._describe(self._current)}")

    @staticmethod
    def _describe(token: Token) -> str:
        if token.type is TokenType.SEMICOLON and token.value == "\n":
            return "newline"
        if token.type is TokenType.EOF:
            return "EOF"
        if token.type.is_literal:
            return token.value
        return f"'{token.type.spelling}'"

    # =========================================================================
    # Nesting guard
    # =========================================================================

    @contextmanager
    def _nested(self) -> Iterator[None]:
        """Track recursion depth against the configured limit."""
        self._depth += 1
        if self._depth > self._max_depth:
            raise self._error("exceeded maximum nesting depth")
        try:
            yield
        finally:
            self._depth -= 1
