"""Declaration parsing for the Go parser.

Handles the package clause, import/const/var/type declarations (single and
parenthesized forms) and function and method declarations.
"""

from __future__ import annotations

from gomin.nodes import (
    BasicLit,
    Decl,
    Expr,
    FuncDecl,
    FuncType,
    GenDecl,
    Ident,
    ImportSpec,
    Spec,
    TypeSpec,
    ValueSpec,
)
from gomin.parsing.types import extract_type_param
from gomin.tokens import TokenType


class DeclarationParsingMixin:
    """Mixin for parsing Go declarations.

    Required Host Attributes:
        - _current: Token
        - _expr_lev: int

    Required Host Methods:
        - _advance(), _got(), _expect(), _expect_semi(), _error(), _error_expected()
        - _parse_ident(), _parse_ident_list(), _parse_expr(), _parse_expr_list()
        - _parse_type(), _try_identifier_or_type(), _parse_parameters(), _parse_result()
        - _parse_type_parameters(), _parse_parameter_list(), _parse_array_type()
        - _parse_primary_expr(), _parse_binary_expr(), _parse_body()

    """

    def _parse_decl(self) -> Decl:
        match self._tok:
            case TokenType.CONST | TokenType.TYPE | TokenType.VAR | TokenType.IMPORT:
                return self._parse_gen_decl(self._tok)
            case TokenType.FUNC:
                return self._parse_func_decl()
        raise self._error_expected("declaration")

    def _parse_gen_decl(self, keyword: TokenType) -> GenDecl:
        start = self._expect(keyword)
        specs: list[Spec] = []
        if self._got(TokenType.LPAREN):
            while self._tok is not TokenType.RPAREN and self._tok is not TokenType.EOF:
                specs.append(self._parse_spec(keyword))
            self._expect(TokenType.RPAREN)
            self._expect_semi()
            return GenDecl(keyword, tuple(specs), grouped=True, location=start.location)

        specs.append(self._parse_spec(keyword))
        return GenDecl(keyword, tuple(specs), location=start.location)

    def _parse_spec(self, keyword: TokenType) -> Spec:
        match keyword:
            case TokenType.IMPORT:
                return self._parse_import_spec()
            case TokenType.TYPE:
                return self._parse_type_spec()
        return self._parse_value_spec(keyword)

    def _parse_import_spec(self) -> ImportSpec:
        start = self._current
        name: Ident | None = None
        if self._tok is TokenType.IDENT:
            name = self._parse_ident()
        elif self._tok is TokenType.PERIOD:
            name = Ident(".", location=self._advance().location)

        if self._tok is not TokenType.STRING:
            raise self._error_expected("import path")
        token = self._advance()
        path = BasicLit(TokenType.STRING, token.value, location=token.location)
        self._expect_semi()
        return ImportSpec(name, path, location=start.location)

    def _parse_value_spec(self, keyword: TokenType) -> ValueSpec:
        start = self._current
        names = self._parse_ident_list()
        typ: Expr | None = None
        values: list[Expr] = []

        if keyword is TokenType.CONST:
            if self._tok not in (TokenType.EOF, TokenType.SEMICOLON, TokenType.RPAREN):
                typ = self._try_identifier_or_type()
                if self._got(TokenType.ASSIGN):
                    values = self._parse_expr_list()
        else:
            if self._tok is not TokenType.ASSIGN:
                typ = self._parse_type()
            if self._got(TokenType.ASSIGN):
                values = self._parse_expr_list()

        self._expect_semi()
        return ValueSpec(tuple(names), typ, tuple(values), location=start.location)

    def _parse_type_spec(self) -> TypeSpec:
        name = self._parse_ident()
        spec: TypeSpec

        if self._tok is TokenType.LBRACK:
            lbrack = self._advance()
            if self._tok is TokenType.IDENT:
                # array length or start of a type parameter list
                x: Expr = self._parse_ident()
                if self._tok is not TokenType.LBRACK:
                    self._expr_lev += 1
                    lhs = self._parse_primary_expr(x)
                    x = self._parse_binary_expr(lhs, 1)
                    self._expr_lev -= 1
                pname, ptype = extract_type_param(x, self._tok is TokenType.COMMA)
                if pname is not None and (ptype is not None or self._tok is not TokenType.RBRACK):
                    type_params = self._parse_parameter_list(
                        TokenType.RBRACK,
                        type_params=True,
                        name0=pname,
                        typ0=ptype,
                        location=lbrack.location,
                    )
                    self._expect(TokenType.RBRACK)
                    assign = self._got(TokenType.ASSIGN)
                    typ = self._parse_type()
                    spec = TypeSpec(name, typ, type_params, assign, location=name.location)
                else:
                    typ = self._parse_array_type(lbrack.location, x)
                    spec = TypeSpec(name, typ, location=name.location)
            else:
                typ = self._parse_array_type(lbrack.location, None)
                spec = TypeSpec(name, typ, location=name.location)
        else:
            assign = self._got(TokenType.ASSIGN)
            typ = self._parse_type()
            spec = TypeSpec(name, typ, assign=assign, location=name.location)

        self._expect_semi()
        return spec

    def _parse_func_decl(self) -> FuncDecl:
        start = self._expect(TokenType.FUNC)
        recv = None
        if self._tok is TokenType.LPAREN:
            recv = self._parse_parameters()
        name = self._parse_ident()

        type_params = None
        if self._tok is TokenType.LBRACK:
            type_params = self._parse_type_parameters()
        params = self._parse_parameters()
        results = self._parse_result()
        typ = FuncType(params, results, type_params, True, location=start.location)

        body = None
        if self._tok is TokenType.LBRACE:
            self._expr_lev += 1
            body = self._parse_body()
            self._expr_lev -= 1
        self._expect_semi()
        return FuncDecl(recv, name, typ, body, location=start.location)
