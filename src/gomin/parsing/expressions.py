"""Expression parsing for the Go parser.

Binary expressions use precedence climbing over the five Go precedence
levels; all binary operators are left-associative. Unary operators bind
tighter than any binary operator, and primary-expression suffixes
(selectors, indexes, slices, type assertions, calls, composite literal
bodies) bind tighter still.

Composite literals and blocks both open with ``{``. Inside the header of an
``if``, ``for`` or ``switch`` statement (``_expr_lev < 0``) a ``{`` after a
bare type name starts the statement body, not a literal; any enclosing
parentheses, brackets or call arguments lift that restriction.
"""

from __future__ import annotations

from gomin.nodes import (
    ArrayType,
    BasicLit,
    BinaryExpr,
    CallExpr,
    ChanType,
    CompositeLit,
    Expr,
    FuncLit,
    Ident,
    IndexExpr,
    KeyValueExpr,
    MapType,
    ParenExpr,
    SelectorExpr,
    SliceExpr,
    StarExpr,
    StructType,
    TypeAssertExpr,
    UnaryExpr,
)
from gomin.tokens import BASIC_LITERALS, TokenType

_PREFIX_OPERATORS = frozenset(
    {
        TokenType.ADD,
        TokenType.SUB,
        TokenType.NOT,
        TokenType.XOR,
        TokenType.AND,
        TokenType.TILDE,
    }
)


def unparen(x: Expr) -> Expr:
    while isinstance(x, ParenExpr):
        x = x.x
    return x


class ExpressionParsingMixin:
    """Mixin for parsing Go expressions.

    Required Host Attributes:
        - _current: Token
        - _expr_lev: int

    Required Host Methods:
        - _advance(), _got(), _expect(), _error(), _error_expected()
        - _nested() -> context manager
        - _try_identifier_or_type() -> Expr | None
        - _parse_type() -> Expr
        - _parse_signature(location, func_keyword=...) -> FuncType
        - _receive_chan(ChanType) -> ChanType
        - _parse_body() -> BlockStmt

    """

    def _parse_ident(self) -> Ident:
        token = self._current
        if token.type is not TokenType.IDENT:
            raise self._error_expected("identifier")
        self._advance()
        return Ident(token.value, location=token.location)

    def _parse_ident_list(self) -> list[Ident]:
        idents = [self._parse_ident()]
        while self._got(TokenType.COMMA):
            idents.append(self._parse_ident())
        return idents

    def _parse_expr(self) -> Expr:
        return self._parse_binary_expr(None, 1)

    def _parse_expr_list(self) -> list[Expr]:
        exprs = [self._parse_expr()]
        while self._got(TokenType.COMMA):
            exprs.append(self._parse_expr())
        return exprs

    def _parse_binary_expr(self, x: Expr | None, min_prec: int) -> Expr:
        """Precedence climbing: parse operators binding at least ``min_prec``."""
        if x is None:
            x = self._parse_unary_expr()
        while True:
            op = self._tok
            prec = op.precedence
            if prec < min_prec:
                return x
            self._advance()
            y = self._parse_binary_expr(None, prec + 1)
            x = BinaryExpr(x, op, y, location=x.location)

    def _parse_unary_expr(self) -> Expr:
        with self._nested():
            token = self._current
            if token.type in _PREFIX_OPERATORS:
                self._advance()
                x = self._parse_unary_expr()
                return UnaryExpr(token.type, x, location=token.location)

            if token.type is TokenType.ARROW:
                self._advance()
                x = self._parse_unary_expr()
                if isinstance(x, ChanType):
                    # <-chan T
                    return self._receive_chan(x)
                return UnaryExpr(TokenType.ARROW, x, location=token.location)

            if token.type is TokenType.MUL:
                self._advance()
                return StarExpr(self._parse_unary_expr(), location=token.location)

            return self._parse_primary_expr(None)

    def _parse_operand(self) -> Expr:
        token = self._current
        match token.type:
            case TokenType.IDENT:
                return self._parse_ident()
            case tok if tok in BASIC_LITERALS:
                self._advance()
                return BasicLit(tok, token.value, location=token.location)
            case TokenType.LPAREN:
                self._advance()
                self._expr_lev += 1
                x = self._parse_expr()
                self._expr_lev -= 1
                self._expect(TokenType.RPAREN)
                return ParenExpr(x, location=token.location)
            case TokenType.FUNC:
                return self._parse_func_type_or_lit()

        typ = self._try_identifier_or_type()
        if typ is not None:
            return typ
        raise self._error_expected("operand")

    def _parse_func_type_or_lit(self) -> Expr:
        func = self._expect(TokenType.FUNC)
        typ = self._parse_signature(func.location, func_keyword=True)
        if self._tok is not TokenType.LBRACE:
            return typ
        self._expr_lev += 1
        body = self._parse_body()
        self._expr_lev -= 1
        return FuncLit(typ, body, location=func.location)

    def _parse_primary_expr(self, x: Expr | None) -> Expr:
        if x is None:
            x = self._parse_operand()
        while True:
            match self._tok:
                case TokenType.PERIOD:
                    self._advance()
                    if self._tok is TokenType.IDENT:
                        x = SelectorExpr(x, self._parse_ident(), location=x.location)
                    elif self._got(TokenType.LPAREN):
                        typ = None
                        if not self._got(TokenType.TYPE):
                            typ = self._parse_type()
                        self._expect(TokenType.RPAREN)
                        x = TypeAssertExpr(x, typ, location=x.location)
                    else:
                        raise self._error_expected("selector or type assertion")
                case TokenType.LBRACK:
                    x = self._parse_index_or_slice(x)
                case TokenType.LPAREN:
                    x = self._parse_call(x)
                case TokenType.LBRACE:
                    if not self._is_literal_type(x):
                        return x
                    x = self._parse_literal_value(x)
                case _:
                    return x

    def _is_literal_type(self, x: Expr) -> bool:
        """Decide whether a ``{`` after ``x`` opens a composite literal."""
        t = unparen(x)
        match t:
            case Ident() | SelectorExpr() | IndexExpr():
                if self._expr_lev < 0:
                    return False
            case ArrayType() | StructType() | MapType():
                pass
            case _:
                return False
        if t is not x:
            raise self._error("cannot parenthesize type in composite literal")
        return True

    def _parse_index_or_slice(self, x: Expr) -> Expr:
        self._expect(TokenType.LBRACK)
        if self._tok is TokenType.RBRACK:
            raise self._error_expected("operand")

        self._expr_lev += 1
        index: list[Expr | None] = [None, None, None]
        if self._tok is not TokenType.COLON:
            index[0] = self._parse_expr()
        colons = 0
        while self._tok is TokenType.COLON and colons < 2:
            colons += 1
            self._advance()
            if self._tok not in (TokenType.COLON, TokenType.RBRACK, TokenType.EOF):
                index[colons] = self._parse_expr()

        if colons == 0 and self._tok is TokenType.COMMA:
            # instantiation with several type arguments
            assert index[0] is not None
            args: list[Expr] = [index[0]]
            while self._got(TokenType.COMMA):
                if self._tok is TokenType.RBRACK:
                    break
                args.append(self._parse_type())
            self._expr_lev -= 1
            self._expect(TokenType.RBRACK)
            return IndexExpr(x, tuple(args), location=x.location)

        self._expr_lev -= 1
        self._expect(TokenType.RBRACK)

        if colons == 0:
            assert index[0] is not None
            return IndexExpr(x, (index[0],), location=x.location)
        if colons == 2 and (index[1] is None or index[2] is None):
            raise self._error("middle and final index required in 3-index slice")
        return SliceExpr(x, index[0], index[1], index[2], location=x.location)

    def _parse_call(self, fun: Expr) -> CallExpr:
        self._expect(TokenType.LPAREN)
        self._expr_lev += 1
        args: list[Expr] = []
        ellipsis = False
        while self._tok is not TokenType.RPAREN and self._tok is not TokenType.EOF:
            args.append(self._parse_expr())
            if self._got(TokenType.ELLIPSIS):
                ellipsis = True
            if not self._got(TokenType.COMMA):
                break
            if ellipsis:
                break
        self._expr_lev -= 1
        self._expect(TokenType.RPAREN)
        return CallExpr(fun, tuple(args), ellipsis, location=fun.location)

    def _parse_literal_value(self, typ: Expr | None) -> CompositeLit:
        lbrace = self._expect(TokenType.LBRACE)
        self._expr_lev += 1
        elts: list[Expr] = []
        while self._tok is not TokenType.RBRACE and self._tok is not TokenType.EOF:
            elts.append(self._parse_element())
            if not self._got(TokenType.COMMA):
                break
        self._expr_lev -= 1
        self._expect(TokenType.RBRACE)
        location = typ.location if typ is not None else lbrace.location
        return CompositeLit(typ, tuple(elts), location=location)

    def _parse_element(self) -> Expr:
        x = self._parse_element_value()
        if self._got(TokenType.COLON):
            value = self._parse_element_value()
            x = KeyValueExpr(x, value, location=x.location)
        return x

    def _parse_element_value(self) -> Expr:
        if self._tok is TokenType.LBRACE:
            return self._parse_literal_value(None)
        return self._parse_expr()
