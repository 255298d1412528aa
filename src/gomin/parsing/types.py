"""Type parsing for the Go parser.

Handles type names and instantiations, composite type literals, function
signatures, parameter lists (including type parameter lists with union
and ``~`` constraint elements), struct fields and interface elements.
"""

from __future__ import annotations

from dataclasses import replace
from typing import TYPE_CHECKING

from gomin.nodes import (
    ArrayType,
    BasicLit,
    BinaryExpr,
    CallExpr,
    ChanDir,
    ChanType,
    Ellipsis,
    Expr,
    Field,
    FieldList,
    FuncType,
    Ident,
    IndexExpr,
    InterfaceType,
    MapType,
    ParenExpr,
    SelectorExpr,
    StarExpr,
    StructType,
    UnaryExpr,
)
from gomin.tokens import TokenType

if TYPE_CHECKING:
    from gomin.location import SourceLocation


# Tokens after a parameter name that start its type.
_PARAM_TYPE_START = frozenset(
    {
        TokenType.IDENT,
        TokenType.MUL,
        TokenType.ARROW,
        TokenType.FUNC,
        TokenType.CHAN,
        TokenType.MAP,
        TokenType.STRUCT,
        TokenType.INTERFACE,
        TokenType.LPAREN,
    }
)

_ParamEntry = tuple[Ident | None, Expr | None]


class TypeParsingMixin:
    """Mixin for parsing Go types.

    Required Host Attributes:
        - _current: Token
        - _expr_lev: int

    Required Host Methods:
        - _advance(), _got(), _expect(), _expect_semi(), _error(), _error_expected()
        - _nested() -> context manager
        - _parse_ident() -> Ident
        - _parse_expr() -> Expr

    """

    def _parse_type(self) -> Expr:
        typ = self._try_identifier_or_type()
        if typ is None:
            raise self._error_expected("type")
        return typ

    def _try_identifier_or_type(self) -> Expr | None:
        """Parse a type if the current token can start one, else return None."""
        with self._nested():
            match self._tok:
                case TokenType.IDENT:
                    typ = self._parse_type_name()
                    if self._tok is TokenType.LBRACK:
                        typ = self._parse_type_instance(typ)
                    return typ
                case TokenType.LBRACK:
                    lbrack = self._advance()
                    return self._parse_array_type(lbrack.location, None)
                case TokenType.STRUCT:
                    return self._parse_struct_type()
                case TokenType.MUL:
                    star = self._advance()
                    return StarExpr(self._parse_type(), location=star.location)
                case TokenType.FUNC:
                    func = self._advance()
                    return self._parse_signature(func.location, func_keyword=True)
                case TokenType.INTERFACE:
                    return self._parse_interface_type()
                case TokenType.MAP:
                    return self._parse_map_type()
                case TokenType.CHAN | TokenType.ARROW:
                    return self._parse_chan_type()
                case TokenType.LPAREN:
                    lparen = self._advance()
                    typ = self._parse_type()
                    self._expect(TokenType.RPAREN)
                    return ParenExpr(typ, location=lparen.location)
        return None

    def _parse_type_name(self, ident: Ident | None = None) -> Expr:
        """``T`` or the qualified ``pkg.T``."""
        if ident is None:
            ident = self._parse_ident()
        if self._tok is TokenType.PERIOD:
            self._advance()
            sel = self._parse_ident()
            return SelectorExpr(ident, sel, location=ident.location)
        return ident

    def _parse_type_instance(self, typ: Expr) -> IndexExpr:
        """``T[A, B]`` generic instantiation."""
        self._expect(TokenType.LBRACK)
        args = [self._parse_type()]
        while self._got(TokenType.COMMA):
            if self._tok is TokenType.RBRACK:
                break
            args.append(self._parse_type())
        self._expect(TokenType.RBRACK)
        return IndexExpr(typ, tuple(args), location=typ.location)

    def _parse_array_type(self, location: SourceLocation, length: Expr | None) -> ArrayType:
        """Parse the rest of ``[len]T`` or ``[]T`` after the opening bracket.

        ``length`` is passed in when the caller already parsed it.
        """
        if length is None:
            self._expr_lev += 1
            if self._tok is TokenType.ELLIPSIS:
                length = Ellipsis(location=self._advance().location)
            elif self._tok is not TokenType.RBRACK:
                length = self._parse_expr()
            self._expr_lev -= 1
        self._expect(TokenType.RBRACK)
        elt = self._parse_type()
        return ArrayType(length, elt, location=location)

    def _parse_map_type(self) -> MapType:
        start = self._expect(TokenType.MAP)
        self._expect(TokenType.LBRACK)
        key = self._parse_type()
        self._expect(TokenType.RBRACK)
        value = self._parse_type()
        return MapType(key, value, location=start.location)

    def _parse_chan_type(self) -> ChanType:
        start = self._current
        if self._got(TokenType.CHAN):
            direction = ChanDir.SEND if self._got(TokenType.ARROW) else ChanDir.BOTH
        else:
            self._expect(TokenType.ARROW)
            self._expect(TokenType.CHAN)
            direction = ChanDir.RECV
        value = self._parse_type()
        return ChanType(direction, value, location=start.location)

    def _receive_chan(self, typ: ChanType) -> ChanType:
        """Reinterpret ``<-`` applied to a channel type as a receive-only channel.

        ``<-chan<- T`` reads as ``<-chan (<-chan T)``.
        """
        if typ.dir is ChanDir.RECV:
            raise self._error("expected 'chan'")
        value = typ.value
        if typ.dir is ChanDir.SEND:
            if not isinstance(value, ChanType):
                raise self._error_expected("channel type")
            value = self._receive_chan(value)
        return replace(typ, dir=ChanDir.RECV, value=value)

    # =========================================================================
    # Signatures and parameters
    # =========================================================================

    def _parse_signature(
        self,
        location: SourceLocation,
        *,
        func_keyword: bool,
        type_params: FieldList | None = None,
    ) -> FuncType:
        """Parse ``(params) results`` into a FuncType."""
        params = self._parse_parameters()
        results = self._parse_result()
        return FuncType(
            params,
            results,
            type_params,
            func_keyword,
            location=location,
        )

    def _parse_parameters(self) -> FieldList:
        lparen = self._expect(TokenType.LPAREN)
        params = self._parse_parameter_list(TokenType.RPAREN, location=lparen.location)
        self._expect(TokenType.RPAREN)
        return params

    def _parse_type_parameters(self) -> FieldList:
        lbrack = self._expect(TokenType.LBRACK)
        params = self._parse_parameter_list(
            TokenType.RBRACK, type_params=True, location=lbrack.location
        )
        if not params.fields:
            raise self._error("empty type parameter list")
        self._expect(TokenType.RBRACK)
        return params

    def _parse_result(self) -> FieldList | None:
        if self._tok is TokenType.LPAREN:
            return self._parse_parameters()
        typ = self._try_identifier_or_type()
        if typ is None:
            return None
        return FieldList((Field((), typ, location=typ.location),), location=typ.location)

    def _parse_parameter_list(
        self,
        closing: TokenType,
        *,
        type_params: bool = False,
        name0: Ident | None = None,
        typ0: Expr | None = None,
        location: SourceLocation | None = None,
    ) -> FieldList:
        """Parse parameter declarations up to (not including) ``closing``.

        Each entry is parsed as ``[name] [type]``; afterwards the list is
        either all types or all names, with a lone name taking the type of
        the next typed entry (``a, b int``).

        ``name0``/``typ0`` supply an entry the caller already consumed while
        disambiguating a generic type declaration.
        """
        entries: list[_ParamEntry] = []
        if name0 is not None:
            if typ0 is not None:
                if type_params and self._tok is TokenType.OR:
                    typ0 = self._parse_union(typ0)
                entries.append((name0, typ0))
            else:
                entries.append(self._parse_param_decl(type_params, name0))
            more = self._got(TokenType.COMMA)
        else:
            more = True

        while more and self._tok is not closing and self._tok is not TokenType.EOF:
            entries.append(self._parse_param_decl(type_params))
            more = self._got(TokenType.COMMA)

        fields: list[Field] = []
        named = any(name is not None and typ is not None for name, typ in entries)
        if not named:
            for name, typ in entries:
                typ = typ if typ is not None else name
                assert typ is not None
                fields.append(Field((), typ, location=typ.location))
        else:
            names: list[Ident] = []
            for name, typ in entries:
                if name is None:
                    raise self._error("mixed named and unnamed parameters")
                names.append(name)
                if typ is not None:
                    fields.append(Field(tuple(names), typ, location=names[0].location))
                    names = []
            if names:
                raise self._error("missing parameter type")

        return FieldList(tuple(fields), location=location or self._current.location)

    def _parse_param_decl(self, type_params: bool, name: Ident | None = None) -> _ParamEntry:
        typ: Expr | None = None
        if name is not None or self._tok is TokenType.IDENT:
            if name is None:
                name = self._parse_ident()
            match self._tok:
                case tok if tok in _PARAM_TYPE_START:
                    typ = self._parse_type()
                case TokenType.LBRACK:
                    name, typ = self._parse_array_field_or_type_instance(name)
                case TokenType.ELLIPSIS:
                    return name, self._parse_dots_type()
                case TokenType.PERIOD:
                    typ = self._parse_type_name(name)
                    if self._tok is TokenType.LBRACK:
                        typ = self._parse_type_instance(typ)
                    name = None
                case TokenType.TILDE if type_params:
                    typ = self._parse_constraint_term()
                case TokenType.OR if type_params:
                    typ, name = name, None
        elif self._tok is TokenType.ELLIPSIS:
            return None, self._parse_dots_type()
        elif self._tok is TokenType.TILDE and type_params:
            typ = self._parse_constraint_term()
        else:
            typ = self._parse_type()

        if type_params and typ is not None and self._tok is TokenType.OR:
            typ = self._parse_union(typ)
        return name, typ

    def _parse_dots_type(self) -> Ellipsis:
        dots = self._expect(TokenType.ELLIPSIS)
        return Ellipsis(self._parse_type(), location=dots.location)

    def _parse_array_field_or_type_instance(self, name: Ident) -> tuple[Ident | None, Expr]:
        """After ``name [``: a named array/slice field or a generic instance.

        Returns ``(name, ArrayType)`` for ``name []E`` and ``name [N]E``, and
        ``(None, IndexExpr)`` for ``name[A, B]``.
        """
        lbrack = self._expect(TokenType.LBRACK)
        args: list[Expr] = []
        if self._tok is not TokenType.RBRACK:
            self._expr_lev += 1
            if self._tok is TokenType.ELLIPSIS:
                args.append(Ellipsis(location=self._advance().location))
            else:
                args.append(self._parse_expr())
            while self._got(TokenType.COMMA):
                if self._tok is TokenType.RBRACK:
                    break
                args.append(self._parse_type())
            self._expr_lev -= 1
        self._expect(TokenType.RBRACK)

        if not args:
            return name, ArrayType(None, self._parse_type(), location=lbrack.location)
        if len(args) == 1:
            elt = self._try_identifier_or_type()
            if elt is not None:
                return name, ArrayType(args[0], elt, location=lbrack.location)
        return None, IndexExpr(name, tuple(args), location=name.location)

    # =========================================================================
    # Constraints
    # =========================================================================

    def _parse_constraint_term(self) -> Expr:
        """``T`` or ``~T``."""
        if self._tok is TokenType.TILDE:
            tilde = self._advance()
            return UnaryExpr(TokenType.TILDE, self._parse_type(), location=tilde.location)
        return self._parse_type()

    def _parse_union(self, first: Expr) -> Expr:
        """Continue ``first | term | ...`` into a left-nested BinaryExpr chain."""
        x = first
        while self._got(TokenType.OR):
            y = self._parse_constraint_term()
            x = BinaryExpr(x, TokenType.OR, y, location=x.location)
        return x

    # =========================================================================
    # Struct and interface types
    # =========================================================================

    def _parse_struct_type(self) -> StructType:
        start = self._expect(TokenType.STRUCT)
        lbrace = self._expect(TokenType.LBRACE)
        fields: list[Field] = []
        while self._tok in (TokenType.IDENT, TokenType.MUL, TokenType.LPAREN):
            fields.append(self._parse_field_decl())
        self._expect(TokenType.RBRACE)
        return StructType(FieldList(tuple(fields), location=lbrace.location), location=start.location)

    def _parse_field_decl(self) -> Field:
        start = self._current
        names: tuple[Ident, ...] = ()
        typ: Expr

        if self._tok is TokenType.IDENT:
            name = self._parse_ident()
            if self._tok in (
                TokenType.PERIOD,
                TokenType.STRING,
                TokenType.SEMICOLON,
                TokenType.RBRACE,
            ):
                # embedded type
                typ = self._parse_type_name(name)
                if self._tok is TokenType.LBRACK:
                    typ = self._parse_type_instance(typ)
            else:
                ident_list = [name]
                while self._got(TokenType.COMMA):
                    ident_list.append(self._parse_ident())
                if len(ident_list) == 1 and self._tok is TokenType.LBRACK:
                    field_name, typ = self._parse_array_field_or_type_instance(name)
                    if field_name is not None:
                        names = (field_name,)
                else:
                    names = tuple(ident_list)
                    typ = self._parse_type()
        elif self._tok is TokenType.MUL:
            star = self._advance()
            embedded = self._parse_type_name()
            if self._tok is TokenType.LBRACK:
                embedded = self._parse_type_instance(embedded)
            typ = StarExpr(embedded, location=star.location)
        else:
            raise self._error("cannot parenthesize embedded type")

        tag = None
        if self._tok is TokenType.STRING:
            token = self._advance()
            tag = BasicLit(TokenType.STRING, token.value, location=token.location)
        self._expect_semi()
        return Field(names, typ, tag, location=start.location)

    def _parse_interface_type(self) -> InterfaceType:
        start = self._expect(TokenType.INTERFACE)
        lbrace = self._expect(TokenType.LBRACE)
        methods: list[Field] = []
        while self._tok is not TokenType.RBRACE and self._tok is not TokenType.EOF:
            methods.append(self._parse_interface_elem())
            self._expect_semi()
        self._expect(TokenType.RBRACE)
        return InterfaceType(
            FieldList(tuple(methods), location=lbrace.location), location=start.location
        )

    def _parse_interface_elem(self) -> Field:
        if self._tok is TokenType.IDENT:
            name = self._parse_ident()
            if self._tok is TokenType.LPAREN:
                method = self._parse_signature(name.location, func_keyword=False)
                return Field((name,), method, location=name.location)
            typ = self._parse_type_name(name)
            if self._tok is TokenType.LBRACK:
                typ = self._parse_type_instance(typ)
        else:
            typ = self._parse_constraint_term()
        typ = self._parse_union(typ)
        return Field((), typ, location=typ.location)


def is_type_elem(x: Expr) -> bool:
    """Report whether ``x`` can only be a type element, not a value expression."""
    match x:
        case ArrayType() | StructType() | FuncType() | InterfaceType() | MapType() | ChanType():
            return True
        case BinaryExpr(x=left, y=right):
            return is_type_elem(left) or is_type_elem(right)
        case UnaryExpr(op=op):
            return op is TokenType.TILDE
        case ParenExpr(x=inner):
            return is_type_elem(inner)
    return False


def extract_type_param(x: Expr, force: bool) -> tuple[Ident | None, Expr | None]:
    """Split ``x`` into a leading type parameter name and its constraint.

    Used for ``type T[...]`` where ``[P *C]`` and ``[N * M]int`` only differ
    in what follows. ``force`` is set when a comma follows, which favours the
    type parameter reading.
    """
    match x:
        case Ident():
            return x, None
        case BinaryExpr(x=Ident() as name, op=TokenType.MUL, y=right) if force or is_type_elem(
            right
        ):
            return name, StarExpr(right, location=x.location)
        case BinaryExpr(x=left, op=TokenType.OR):
            name, lhs = extract_type_param(left, force or is_type_elem(x.y))
            if name is not None and lhs is not None:
                return name, replace(x, x=lhs)
        case CallExpr(fun=Ident() as name, args=(arg,), ellipsis=False) if force or is_type_elem(
            arg
        ):
            return name, ParenExpr(arg, location=arg.location)
    return None, None
