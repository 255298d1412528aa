"""Statement parsing for the Go parser.

Every ``_parse_*_stmt`` method consumes the statement's terminating
semicolon, so statement lists are parsed by repeatedly calling
``_parse_stmt`` until a closing brace or clause keyword.
"""

from __future__ import annotations

from enum import Enum, auto

from gomin.nodes import (
    AssignStmt,
    BlockStmt,
    BranchStmt,
    CallExpr,
    CaseClause,
    CommClause,
    DeclStmt,
    DeferStmt,
    EmptyStmt,
    Expr,
    ExprStmt,
    ForStmt,
    GoStmt,
    Ident,
    IfStmt,
    IncDecStmt,
    LabeledStmt,
    RangeStmt,
    ReturnStmt,
    SelectStmt,
    SendStmt,
    Stmt,
    SwitchStmt,
    TypeAssertExpr,
    TypeSwitchStmt,
    UnaryExpr,
)
from gomin.parsing.expressions import unparen
from gomin.tokens import ASSIGN_OPERATORS, TokenType


class _Mode(Enum):
    """What ``_parse_simple_stmt`` accepts besides a plain simple statement."""

    BASIC = auto()
    LABEL_OK = auto()
    RANGE_OK = auto()


# Tokens that can start a simple statement.
_SIMPLE_STMT_START = frozenset(
    {
        TokenType.IDENT,
        TokenType.INT,
        TokenType.FLOAT,
        TokenType.IMAG,
        TokenType.CHAR,
        TokenType.STRING,
        TokenType.FUNC,
        TokenType.LPAREN,
        TokenType.LBRACK,
        TokenType.STRUCT,
        TokenType.MAP,
        TokenType.CHAN,
        TokenType.INTERFACE,
        TokenType.ADD,
        TokenType.SUB,
        TokenType.MUL,
        TokenType.AND,
        TokenType.XOR,
        TokenType.ARROW,
        TokenType.NOT,
        TokenType.TILDE,
    }
)

_BRANCH_KEYWORDS = frozenset(
    {TokenType.BREAK, TokenType.CONTINUE, TokenType.GOTO, TokenType.FALLTHROUGH}
)


class StatementParsingMixin:
    """Mixin for parsing Go statements.

    Required Host Attributes:
        - _current: Token
        - _expr_lev: int

    Required Host Methods:
        - _advance(), _got(), _expect(), _expect_semi(), _error(), _error_expected()
        - _nested() -> context manager
        - _parse_expr(), _parse_expr_list(), _parse_ident(), _parse_type()
        - _parse_gen_decl(keyword) -> GenDecl

    """

    def _parse_body(self) -> BlockStmt:
        return self._parse_block_stmt()

    def _parse_block_stmt(self) -> BlockStmt:
        lbrace = self._expect(TokenType.LBRACE)
        stmts = self._parse_stmt_list()
        self._expect(TokenType.RBRACE)
        return BlockStmt(tuple(stmts), location=lbrace.location)

    def _parse_stmt_list(self) -> list[Stmt]:
        stmts: list[Stmt] = []
        while self._tok not in (
            TokenType.CASE,
            TokenType.DEFAULT,
            TokenType.RBRACE,
            TokenType.EOF,
        ):
            stmts.append(self._parse_stmt())
        return stmts

    def _parse_stmt(self) -> Stmt:
        with self._nested():
            token = self._current
            match token.type:
                case TokenType.CONST | TokenType.TYPE | TokenType.VAR:
                    decl = self._parse_gen_decl(token.type)
                    return DeclStmt(decl, location=token.location)
                case tok if tok in _SIMPLE_STMT_START:
                    stmt = self._parse_simple_stmt(_Mode.LABEL_OK)
                    if not isinstance(stmt, LabeledStmt):
                        self._expect_semi()
                    return stmt
                case TokenType.GO:
                    self._advance()
                    call = self._parse_call_expr("go")
                    self._expect_semi()
                    return GoStmt(call, location=token.location)
                case TokenType.DEFER:
                    self._advance()
                    call = self._parse_call_expr("defer")
                    self._expect_semi()
                    return DeferStmt(call, location=token.location)
                case TokenType.RETURN:
                    self._advance()
                    results: list[Expr] = []
                    if self._tok not in (TokenType.SEMICOLON, TokenType.RBRACE):
                        results = self._parse_expr_list()
                    self._expect_semi()
                    return ReturnStmt(tuple(results), location=token.location)
                case tok if tok in _BRANCH_KEYWORDS:
                    self._advance()
                    label = None
                    if tok is not TokenType.FALLTHROUGH and self._tok is TokenType.IDENT:
                        label = self._parse_ident()
                    self._expect_semi()
                    return BranchStmt(tok, label, location=token.location)
                case TokenType.LBRACE:
                    block = self._parse_block_stmt()
                    self._expect_semi()
                    return block
                case TokenType.IF:
                    return self._parse_if_stmt()
                case TokenType.SWITCH:
                    return self._parse_switch_stmt()
                case TokenType.SELECT:
                    return self._parse_select_stmt()
                case TokenType.FOR:
                    return self._parse_for_stmt()
                case TokenType.SEMICOLON:
                    self._advance()
                    return EmptyStmt(implicit=token.value == "\n", location=token.location)
                case TokenType.RBRACE:
                    # a label directly before the closing brace
                    return EmptyStmt(implicit=True, location=token.location)
            raise self._error_expected("statement")

    def _parse_simple_stmt(self, mode: _Mode = _Mode.BASIC) -> Stmt:
        """Parse a simple statement without its terminator.

        In RANGE_OK mode a ``range`` clause comes back as an AssignStmt whose
        single right-hand side is ``UnaryExpr(RANGE, x)``; only the ``for``
        statement parser asks for it and unpacks it into a RangeStmt.
        """
        start = self._current
        lhs = self._parse_expr_list()

        if self._tok in ASSIGN_OPERATORS:
            tok = self._advance().type
            if (
                mode is _Mode.RANGE_OK
                and self._tok is TokenType.RANGE
                and tok in (TokenType.ASSIGN, TokenType.DEFINE)
            ):
                range_tok = self._advance()
                x = self._parse_expr()
                rhs: list[Expr] = [UnaryExpr(TokenType.RANGE, x, location=range_tok.location)]
            else:
                rhs = self._parse_expr_list()
            return AssignStmt(tuple(lhs), tok, tuple(rhs), location=start.location)

        if len(lhs) > 1:
            raise self._error_expected("1 expression")
        x = lhs[0]

        match self._tok:
            case TokenType.COLON if mode is _Mode.LABEL_OK and isinstance(x, Ident):
                self._advance()
                return LabeledStmt(x, self._parse_stmt(), location=start.location)
            case TokenType.ARROW:
                self._advance()
                value = self._parse_expr()
                return SendStmt(x, value, location=start.location)
            case TokenType.INC | TokenType.DEC:
                tok = self._advance().type
                return IncDecStmt(x, tok, location=start.location)
        return ExprStmt(x, location=start.location)

    def _parse_call_expr(self, keyword: str) -> CallExpr:
        x = self._parse_expr()
        if unparen(x) is not x:
            raise self._error(f"expression in {keyword} must not be parenthesized")
        if not isinstance(x, CallExpr):
            raise self._error(f"expression in {keyword} must be function call")
        return x

    def _make_expr(self, stmt: Stmt | None, want: str) -> Expr | None:
        if stmt is None:
            return None
        if isinstance(stmt, ExprStmt):
            return stmt.x
        raise self._error(f"expected {want}, found simple statement")

    # =========================================================================
    # Control flow
    # =========================================================================

    def _parse_if_stmt(self) -> IfStmt:
        start = self._expect(TokenType.IF)
        init, cond = self._parse_if_header()
        body = self._parse_block_stmt()

        else_: Stmt | None = None
        if self._got(TokenType.ELSE):
            if self._tok is TokenType.IF:
                else_ = self._parse_if_stmt()
            elif self._tok is TokenType.LBRACE:
                else_ = self._parse_block_stmt()
                self._expect_semi()
            else:
                raise self._error_expected("if statement or block")
        else:
            self._expect_semi()
        return IfStmt(init, cond, body, else_, location=start.location)

    def _parse_if_header(self) -> tuple[Stmt | None, Expr]:
        if self._tok is TokenType.LBRACE:
            raise self._error("missing condition in if statement")

        prev_lev = self._expr_lev
        self._expr_lev = -1

        init: Stmt | None = None
        cond: Expr | None = None
        if self._tok is not TokenType.SEMICOLON:
            if self._tok is TokenType.VAR:
                raise self._error("var declaration not allowed in if initializer")
            init = self._parse_simple_stmt()

        if self._tok is TokenType.SEMICOLON:
            semi = self._advance()
            if semi.value == "\n":
                raise self._error("unexpected newline, expected { after if clause", semi)
            if self._tok is not TokenType.LBRACE:
                cond = self._make_expr(self._parse_simple_stmt(), "boolean expression")
        else:
            cond = self._make_expr(init, "boolean expression")
            init = None

        self._expr_lev = prev_lev
        if cond is None:
            raise self._error("missing condition in if statement")
        return init, cond

    def _parse_switch_stmt(self) -> Stmt:
        start = self._expect(TokenType.SWITCH)
        init: Stmt | None = None
        tag: Stmt | None = None
        if self._tok is not TokenType.LBRACE:
            prev_lev = self._expr_lev
            self._expr_lev = -1
            if self._tok is not TokenType.SEMICOLON:
                tag = self._parse_simple_stmt()
            if self._got(TokenType.SEMICOLON):
                init, tag = tag, None
                if self._tok is not TokenType.LBRACE:
                    tag = self._parse_simple_stmt()
            self._expr_lev = prev_lev

        type_switch = _is_type_switch_guard(tag)
        lbrace = self._expect(TokenType.LBRACE)
        clauses: list[Stmt] = []
        while self._tok in (TokenType.CASE, TokenType.DEFAULT):
            clauses.append(self._parse_case_clause(type_switch))
        self._expect(TokenType.RBRACE)
        self._expect_semi()
        body = BlockStmt(tuple(clauses), location=lbrace.location)

        if type_switch:
            assert tag is not None
            return TypeSwitchStmt(init, tag, body, location=start.location)
        return SwitchStmt(init, self._make_expr(tag, "switch expression"), body, location=start.location)

    def _parse_case_clause(self, type_switch: bool) -> CaseClause:
        start = self._current
        values: list[Expr] = []
        if self._got(TokenType.CASE):
            if type_switch:
                values.append(self._parse_type())
                while self._got(TokenType.COMMA):
                    values.append(self._parse_type())
            else:
                values = self._parse_expr_list()
        else:
            self._expect(TokenType.DEFAULT)
        self._expect(TokenType.COLON)
        body = self._parse_stmt_list()
        return CaseClause(tuple(values), tuple(body), location=start.location)

    def _parse_select_stmt(self) -> SelectStmt:
        start = self._expect(TokenType.SELECT)
        lbrace = self._expect(TokenType.LBRACE)
        clauses: list[Stmt] = []
        while self._tok in (TokenType.CASE, TokenType.DEFAULT):
            clauses.append(self._parse_comm_clause())
        self._expect(TokenType.RBRACE)
        self._expect_semi()
        return SelectStmt(BlockStmt(tuple(clauses), location=lbrace.location), location=start.location)

    def _parse_comm_clause(self) -> CommClause:
        start = self._current
        comm: Stmt | None = None
        if self._got(TokenType.CASE):
            comm_start = self._current
            lhs = self._parse_expr_list()
            if self._tok is TokenType.ARROW:
                if len(lhs) > 1:
                    raise self._error_expected("1 expression")
                self._advance()
                value = self._parse_expr()
                comm = SendStmt(lhs[0], value, location=comm_start.location)
            elif self._tok in (TokenType.ASSIGN, TokenType.DEFINE):
                if len(lhs) > 2:
                    raise self._error_expected("at most 2 expressions")
                tok = self._advance().type
                rhs = self._parse_expr()
                comm = AssignStmt(tuple(lhs), tok, (rhs,), location=comm_start.location)
            else:
                if len(lhs) > 1:
                    raise self._error_expected("1 expression")
                comm = ExprStmt(lhs[0], location=comm_start.location)
        else:
            self._expect(TokenType.DEFAULT)
        self._expect(TokenType.COLON)
        body = self._parse_stmt_list()
        return CommClause(comm, tuple(body), location=start.location)

    def _parse_for_stmt(self) -> Stmt:
        start = self._expect(TokenType.FOR)
        init: Stmt | None = None
        cond: Stmt | None = None
        post: Stmt | None = None
        is_range = False

        if self._tok is not TokenType.LBRACE:
            prev_lev = self._expr_lev
            self._expr_lev = -1
            if self._tok is not TokenType.SEMICOLON:
                if self._tok is TokenType.RANGE:
                    # for range x
                    range_tok = self._advance()
                    x = self._parse_expr()
                    rng = UnaryExpr(TokenType.RANGE, x, location=range_tok.location)
                    cond = AssignStmt((), TokenType.ASSIGN, (rng,), location=range_tok.location)
                else:
                    cond = self._parse_simple_stmt(_Mode.RANGE_OK)
                is_range = _is_range_clause(cond)
            if not is_range and self._tok is TokenType.SEMICOLON:
                self._advance()
                init, cond = cond, None
                if self._tok is not TokenType.SEMICOLON:
                    cond = self._parse_simple_stmt()
                if self._tok is not TokenType.SEMICOLON:
                    raise self._error_expected("';'")
                self._advance()
                if self._tok is not TokenType.LBRACE:
                    post = self._parse_simple_stmt()
            self._expr_lev = prev_lev

        body = self._parse_block_stmt()
        self._expect_semi()

        if is_range:
            assert isinstance(cond, AssignStmt)
            rng = cond.rhs[0]
            assert isinstance(rng, UnaryExpr)
            if len(cond.lhs) > 2:
                raise self._error("range clause permits at most two iteration variables", start)
            key = cond.lhs[0] if cond.lhs else None
            value = cond.lhs[1] if len(cond.lhs) > 1 else None
            tok = cond.tok if cond.lhs else None
            return RangeStmt(key, value, tok, rng.x, body, location=start.location)

        return ForStmt(
            init,
            self._make_expr(cond, "boolean or range expression"),
            post,
            body,
            location=start.location,
        )


def _is_range_clause(stmt: Stmt | None) -> bool:
    match stmt:
        case AssignStmt(rhs=(UnaryExpr(op=TokenType.RANGE),)):
            return True
    return False


def _is_type_switch_guard(stmt: Stmt | None) -> bool:
    match stmt:
        case ExprStmt(x=TypeAssertExpr(type=None)):
            return True
        case AssignStmt(lhs=(Ident(),), tok=TokenType.DEFINE, rhs=(TypeAssertExpr(type=None),)):
            return True
    return False
