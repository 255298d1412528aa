"""Typed AST nodes for Go source.

All AST nodes are frozen dataclasses with slots for:
- Immutability: Safe sharing across threads
- Memory efficiency: __slots__ reduces memory footprint
- Pattern matching: match statements dispatch on the closed node set

Every node carries a keyword-only ``location`` that is excluded from
equality, so ``a == b`` compares structure only. This is the equivalence
used when checking that a minified program re-parses to the same tree.

Node Hierarchy:
Node (base)
├── File (unit)
├── Decl (declarations)
│   ├── FuncDecl
│   └── GenDecl
├── Spec (declaration specs)
│   ├── ImportSpec
│   ├── ValueSpec
│   └── TypeSpec
├── Expr (expressions)
│   ├── Ident, BasicLit, Ellipsis, ParenExpr, SelectorExpr, IndexExpr,
│   │   SliceExpr, TypeAssertExpr, CallExpr, StarExpr, UnaryExpr,
│   │   BinaryExpr, KeyValueExpr, CompositeLit, FuncLit
│   └── TypeExpr (type expressions)
│       └── ArrayType, MapType, ChanType, FuncType, StructType, InterfaceType
├── Field, FieldList (parameter, result, struct and interface members)
└── Stmt (statements)
    └── DeclStmt, EmptyStmt, LabeledStmt, ExprStmt, SendStmt, IncDecStmt,
        AssignStmt, GoStmt, DeferStmt, ReturnStmt, BranchStmt, BlockStmt,
        IfStmt, CaseClause, SwitchStmt, TypeSwitchStmt, CommClause,
        SelectStmt, ForStmt, RangeStmt

Thread Safety:
All nodes are frozen (immutable) and safe to share across threads.

"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Flag
from typing import ClassVar

from gomin.location import SourceLocation
from gomin.tokens import TokenType

_NOWHERE = SourceLocation.unknown()


# =============================================================================
# Base Nodes
# =============================================================================


@dataclass(frozen=True, slots=True)
class Node:
    """Base class for all AST nodes.

    ``category`` names the syntactic family of the node for diagnostics.

    """

    category: ClassVar[str] = "node"

    location: SourceLocation = field(default=_NOWHERE, kw_only=True, compare=False, repr=False)


@dataclass(frozen=True, slots=True)
class Expr(Node):
    """Base class for expressions."""

    category: ClassVar[str] = "expression"


@dataclass(frozen=True, slots=True)
class TypeExpr(Expr):
    """Base class for type literals (array, map, chan, func, struct, interface).

    Type names (``int``, ``pkg.T``, ``List[T]``) are ordinary expressions.

    """

    category: ClassVar[str] = "type"


@dataclass(frozen=True, slots=True)
class Stmt(Node):
    """Base class for statements."""

    category: ClassVar[str] = "statement"


@dataclass(frozen=True, slots=True)
class Decl(Node):
    """Base class for top-level and local declarations."""

    category: ClassVar[str] = "declaration"


@dataclass(frozen=True, slots=True)
class Spec(Node):
    """Base class for the specs of a GenDecl."""

    category: ClassVar[str] = "declaration"


class ChanDir(Flag):
    """Channel direction. Bidirectional channels have both bits set."""

    SEND = 1
    RECV = 2
    BOTH = SEND | RECV


# =============================================================================
# Expressions
# =============================================================================


@dataclass(frozen=True, slots=True)
class Ident(Expr):
    """Identifier, including the blank identifier ``_``."""

    name: str


@dataclass(frozen=True, slots=True)
class BasicLit(Expr):
    """Basic literal kept in its exact source spelling.

    ``kind`` is one of INT, FLOAT, IMAG, CHAR, STRING.

    """

    kind: TokenType
    value: str


@dataclass(frozen=True, slots=True)
class Ellipsis(Expr):
    """``...`` in a variadic parameter type or ``[...]T`` array length."""

    elt: Expr | None = None


@dataclass(frozen=True, slots=True)
class ParenExpr(Expr):
    x: Expr


@dataclass(frozen=True, slots=True)
class SelectorExpr(Expr):
    """``x.sel``"""

    x: Expr
    sel: Ident


@dataclass(frozen=True, slots=True)
class IndexExpr(Expr):
    """``x[i]`` or a generic instantiation ``x[A, B]``."""

    x: Expr
    indices: tuple[Expr, ...]


@dataclass(frozen=True, slots=True)
class SliceExpr(Expr):
    """``x[low:high]`` or ``x[low:high:max]``; absent bounds are None."""

    x: Expr
    low: Expr | None = None
    high: Expr | None = None
    max: Expr | None = None


@dataclass(frozen=True, slots=True)
class TypeAssertExpr(Expr):
    """``x.(T)``; ``type`` is None for the ``x.(type)`` switch guard."""

    x: Expr
    type: Expr | None = None


@dataclass(frozen=True, slots=True)
class CallExpr(Expr):
    """Function call or conversion. ``ellipsis`` marks ``f(xs...)``."""

    fun: Expr
    args: tuple[Expr, ...] = ()
    ellipsis: bool = False


@dataclass(frozen=True, slots=True)
class StarExpr(Expr):
    """Pointer type ``*T`` or dereference ``*p``."""

    x: Expr


@dataclass(frozen=True, slots=True)
class UnaryExpr(Expr):
    """Unary operation; ``op`` is one of + - ! ^ & <- ~."""

    op: TokenType
    x: Expr


@dataclass(frozen=True, slots=True)
class BinaryExpr(Expr):
    x: Expr
    op: TokenType
    y: Expr


@dataclass(frozen=True, slots=True)
class KeyValueExpr(Expr):
    """``key: value`` inside a composite literal."""

    key: Expr
    value: Expr


@dataclass(frozen=True, slots=True)
class CompositeLit(Expr):
    """``T{elts}``; ``type`` is None for elided inner literal types."""

    type: Expr | None
    elts: tuple[Expr, ...] = ()


@dataclass(frozen=True, slots=True)
class FuncLit(Expr):
    type: FuncType
    body: BlockStmt


# =============================================================================
# Types
# =============================================================================


@dataclass(frozen=True, slots=True)
class Field(Node):
    """One parameter group, result, struct field, interface element or type parameter.

    ``names`` is empty for anonymous parameters, embedded fields and
    interface type elements.

    """

    category: ClassVar[str] = "type"

    names: tuple[Ident, ...]
    type: Expr
    tag: BasicLit | None = None


@dataclass(frozen=True, slots=True)
class FieldList(Node):
    category: ClassVar[str] = "type"

    fields: tuple[Field, ...] = ()


@dataclass(frozen=True, slots=True)
class ArrayType(TypeExpr):
    """``[len]elt``; ``len`` is None for slices and Ellipsis for ``[...]T``."""

    len: Expr | None
    elt: Expr


@dataclass(frozen=True, slots=True)
class MapType(TypeExpr):
    key: Expr
    value: Expr


@dataclass(frozen=True, slots=True)
class ChanType(TypeExpr):
    dir: ChanDir
    value: Expr


@dataclass(frozen=True, slots=True)
class FuncType(TypeExpr):
    """Function signature.

    ``func_keyword`` records whether the signature was spelled with a leading
    ``func`` (function types, literals and declarations) or without one
    (interface methods).

    """

    params: FieldList
    results: FieldList | None = None
    type_params: FieldList | None = None
    func_keyword: bool = True


@dataclass(frozen=True, slots=True)
class StructType(TypeExpr):
    fields: FieldList


@dataclass(frozen=True, slots=True)
class InterfaceType(TypeExpr):
    """Interface; methods are named Fields, embedded elements unnamed ones."""

    methods: FieldList


# =============================================================================
# Statements
# =============================================================================


@dataclass(frozen=True, slots=True)
class DeclStmt(Stmt):
    """Local ``const``, ``type`` or ``var`` declaration."""

    decl: GenDecl


@dataclass(frozen=True, slots=True)
class EmptyStmt(Stmt):
    """Empty statement; ``implicit`` when no ``;`` appears in the source."""

    implicit: bool = False


@dataclass(frozen=True, slots=True)
class LabeledStmt(Stmt):
    label: Ident
    stmt: Stmt


@dataclass(frozen=True, slots=True)
class ExprStmt(Stmt):
    x: Expr


@dataclass(frozen=True, slots=True)
class SendStmt(Stmt):
    chan: Expr
    value: Expr


@dataclass(frozen=True, slots=True)
class IncDecStmt(Stmt):
    x: Expr
    tok: TokenType


@dataclass(frozen=True, slots=True)
class AssignStmt(Stmt):
    """Assignment or short variable declaration (``tok`` is ``:=``)."""

    lhs: tuple[Expr, ...]
    tok: TokenType
    rhs: tuple[Expr, ...]


@dataclass(frozen=True, slots=True)
class GoStmt(Stmt):
    call: CallExpr


@dataclass(frozen=True, slots=True)
class DeferStmt(Stmt):
    call: CallExpr


@dataclass(frozen=True, slots=True)
class ReturnStmt(Stmt):
    results: tuple[Expr, ...] = ()


@dataclass(frozen=True, slots=True)
class BranchStmt(Stmt):
    """``break``, ``continue``, ``goto`` or ``fallthrough``."""

    tok: TokenType
    label: Ident | None = None


@dataclass(frozen=True, slots=True)
class BlockStmt(Stmt):
    stmts: tuple[Stmt, ...] = ()


@dataclass(frozen=True, slots=True)
class IfStmt(Stmt):
    """``if init; cond {body} else ...``; ``else_`` is a BlockStmt or IfStmt."""

    init: Stmt | None
    cond: Expr
    body: BlockStmt
    else_: Stmt | None = None


@dataclass(frozen=True, slots=True)
class CaseClause(Stmt):
    """Case of an expression or type switch; empty ``values`` means ``default``."""

    values: tuple[Expr, ...]
    body: tuple[Stmt, ...] = ()

    @property
    def is_default(self) -> bool:
        return not self.values


@dataclass(frozen=True, slots=True)
class SwitchStmt(Stmt):
    init: Stmt | None
    tag: Expr | None
    body: BlockStmt


@dataclass(frozen=True, slots=True)
class TypeSwitchStmt(Stmt):
    """``switch init; x := y.(type) {...}``; ``assign`` is an AssignStmt or ExprStmt."""

    init: Stmt | None
    assign: Stmt
    body: BlockStmt


@dataclass(frozen=True, slots=True)
class CommClause(Stmt):
    """Case of a select statement; ``comm`` is None for ``default``."""

    comm: Stmt | None
    body: tuple[Stmt, ...] = ()


@dataclass(frozen=True, slots=True)
class SelectStmt(Stmt):
    body: BlockStmt


@dataclass(frozen=True, slots=True)
class ForStmt(Stmt):
    init: Stmt | None
    cond: Expr | None
    post: Stmt | None
    body: BlockStmt


@dataclass(frozen=True, slots=True)
class RangeStmt(Stmt):
    """``for key, value := range x``; ``tok`` is None when no variables are bound."""

    key: Expr | None
    value: Expr | None
    tok: TokenType | None
    x: Expr
    body: BlockStmt


# =============================================================================
# Declarations
# =============================================================================


@dataclass(frozen=True, slots=True)
class ImportSpec(Spec):
    name: Ident | None
    path: BasicLit


@dataclass(frozen=True, slots=True)
class ValueSpec(Spec):
    """One line of a ``const`` or ``var`` declaration."""

    names: tuple[Ident, ...]
    type: Expr | None = None
    values: tuple[Expr, ...] = ()


@dataclass(frozen=True, slots=True)
class TypeSpec(Spec):
    """``Name[P C] T`` or, when ``assign``, the alias ``Name = T``."""

    name: Ident
    type: Expr
    type_params: FieldList | None = None
    assign: bool = False


@dataclass(frozen=True, slots=True)
class GenDecl(Decl):
    """``import``, ``const``, ``type`` or ``var`` declaration.

    ``grouped`` records the parenthesized ``var ( ... )`` form.

    """

    tok: TokenType
    specs: tuple[Spec, ...]
    grouped: bool = False


@dataclass(frozen=True, slots=True)
class FuncDecl(Decl):
    """Function or method declaration; ``body`` is None for external functions."""

    recv: FieldList | None
    name: Ident
    type: FuncType
    body: BlockStmt | None = None


# =============================================================================
# Unit
# =============================================================================


@dataclass(frozen=True, slots=True)
class File(Node):
    """A Go source file: package clause followed by declarations."""

    category: ClassVar[str] = "unit"

    package: Ident
    decls: tuple[Decl, ...] = ()

    @property
    def imports(self) -> tuple[ImportSpec, ...]:
        """All import specs, in source order."""
        return tuple(
            spec
            for decl in self.decls
            if isinstance(decl, GenDecl) and decl.tok is TokenType.IMPORT
            for spec in decl.specs
            if isinstance(spec, ImportSpec)
        )
