"""Recursive descent parser producing a typed Go syntax tree.

Consumes the token stream from Lexer and builds typed AST nodes.
Produces immutable (frozen) dataclass nodes for thread-safety.

Architecture:
The parser uses a mixin-based design for separation of concerns:
- `TokenNavigationMixin`: Token stream traversal, expectations, errors
- `TypeParsingMixin`: Types, signatures, parameter lists
- `ExpressionParsingMixin`: Operands, primary, unary and binary expressions
- `StatementParsingMixin`: Simple and compound statements
- `DeclarationParsingMixin`: Import, const, var, type and func declarations

Thread Safety:
- Parser produces immutable AST (frozen dataclasses)
- Configuration is read from ContextVar (thread-local)
- Safe to share AST across threads

"""

from __future__ import annotations

from gomin.config import get_config
from gomin.lexer import Lexer
from gomin.nodes import Decl, Expr, File, Stmt
from gomin.parsing import (
    DeclarationParsingMixin,
    ExpressionParsingMixin,
    StatementParsingMixin,
    TokenNavigationMixin,
    TypeParsingMixin,
)
from gomin.tokens import Token, TokenType
from gomin.utils.logger import get_logger

logger = get_logger(__name__)


class Parser(
    TokenNavigationMixin,
    TypeParsingMixin,
    ExpressionParsingMixin,
    StatementParsingMixin,
    DeclarationParsingMixin,
):
    """Recursive descent parser for Go source files.

    Usage:
            >>> parser = Parser("package p; func f() {}")
            >>> tree = parser.parse()
            >>> tree.package.name
            'p'

    Thread Safety:
        Parser instances are single-use and not thread-safe. Create one per
        parse operation. Configuration is read from ContextVar (thread-local).
        The resulting AST is immutable and thread-safe.

    """

    __slots__ = (
        "_source",
        "_source_file",
        "_tokens",
        "_tokens_len",
        "_pos",
        "_current",
        # < 0 inside an if/for/switch header, >= 0 elsewhere
        "_expr_lev",
        "_depth",
        "_max_depth",
    )

    def __init__(self, source: str, source_file: str | None = None) -> None:
        """Initialize parser with source text.

        Args:
            source: Go source text
            source_file: Optional source file path for error messages

        """
        self._source = source
        self._source_file = source_file
        self._tokens: list[Token] = []
        self._tokens_len = 0
        self._pos = 0
        self._expr_lev = 0
        self._depth = 0
        self._max_depth = get_config().max_nesting_depth

    def _start(self) -> None:
        lexer = Lexer(self._source, self._source_file)
        self._tokens = list(lexer.tokenize())
        self._tokens_len = len(self._tokens)
        self._pos = 0
        self._current = self._tokens[0]
        self._expr_lev = 0
        self._depth = 0

    def _finish(self) -> None:
        """Require that the whole input has been consumed."""
        self._got(TokenType.SEMICOLON)
        if self._tok is not TokenType.EOF:
            raise self._error_expected("EOF")

    def parse(self) -> File:
        """Parse a complete source file.

        Returns:
            File node

        Raises:
            ParseError: On the first lexical or syntax error
        """
        self._start()
        logger.debug("Parsing %s (%d tokens)", self._source_file or "<string>", self._tokens_len)

        start = self._expect(TokenType.PACKAGE)
        package = self._parse_ident()
        self._expect_semi()

        decls: list[Decl] = []
        while self._tok is TokenType.IMPORT:
            decls.append(self._parse_gen_decl(TokenType.IMPORT))
        while self._tok is not TokenType.EOF:
            decls.append(self._parse_decl())

        logger.debug("Parsed package %s: %d declarations", package.name, len(decls))
        return File(package, tuple(decls), location=start.location)

    def parse_expr(self) -> Expr:
        """Parse source consisting of a single expression (or type)."""
        self._start()
        expr = self._parse_expr()
        self._finish()
        return expr

    def parse_stmt(self) -> Stmt:
        """Parse source consisting of a single statement."""
        self._start()
        stmt = self._parse_stmt()
        self._finish()
        return stmt

    def parse_decl(self) -> Decl:
        """Parse source consisting of a single top-level declaration."""
        self._start()
        decl = self._parse_decl()
        self._finish()
        return decl
