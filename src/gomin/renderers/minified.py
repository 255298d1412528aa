"""Minified Go renderer.

Writes a syntax tree back as Go source with the least whitespace that still
re-lexes to the same tokens: fixed punctuation only, ``;`` between
statements and declarations, single spaces only where a keyword or name
would otherwise run into the next token, and the adjacency spaces from
``gomin.renderers.adjacency``.

The sink is passed to every private method as ``out``; the renderer keeps no
per-call state.

Thread Safety:
MinifiedRenderer holds no mutable state. Multiple threads can safely share a
single instance and call emit()/render() concurrently with distinct sinks.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from typing import NoReturn

from gomin.errors import UnsupportedConstructError
from gomin.nodes import (
    ArrayType,
    AssignStmt,
    BasicLit,
    BinaryExpr,
    BlockStmt,
    BranchStmt,
    CallExpr,
    CaseClause,
    ChanDir,
    ChanType,
    CommClause,
    CompositeLit,
    Decl,
    DeclStmt,
    DeferStmt,
    Ellipsis,
    EmptyStmt,
    Expr,
    ExprStmt,
    Field,
    FieldList,
    File,
    ForStmt,
    FuncDecl,
    FuncLit,
    FuncType,
    GenDecl,
    GoStmt,
    Ident,
    IfStmt,
    ImportSpec,
    IncDecStmt,
    IndexExpr,
    InterfaceType,
    KeyValueExpr,
    LabeledStmt,
    MapType,
    Node,
    ParenExpr,
    RangeStmt,
    ReturnStmt,
    SelectorExpr,
    SelectStmt,
    SendStmt,
    SliceExpr,
    Spec,
    StarExpr,
    Stmt,
    StructType,
    SwitchStmt,
    TypeAssertExpr,
    TypeSpec,
    TypeSwitchStmt,
    UnaryExpr,
    ValueSpec,
)
from gomin.parsing.types import is_type_elem
from gomin.renderers.adjacency import needs_separator
from gomin.renderers.protocol import Writer
from gomin.stringbuilder import StringBuilder
from gomin.tokens import TokenType

logger = logging.getLogger(__name__)

_CHAN_PREFIX = {
    ChanDir.BOTH: "chan ",
    ChanDir.SEND: "chan<- ",
    ChanDir.RECV: "<-chan ",
}


class MinifiedRenderer:
    """Render syntax trees as minified Go source.

    Usage:
        >>> from gomin import parse
        >>> tree = parse("package p\\n\\nfunc f(x int) int {\\n\\treturn x < -1\\n}\\n")
        >>> MinifiedRenderer().render(tree)
        'package p;func f(x int)int{return x< -1}'

    Thread Safety:
        Stateless; safe to share across threads.
    """

    __slots__ = ()

    def emit(self, node: Node, sink: Writer) -> None:
        """Write the minified rendering of ``node`` to ``sink``.

        Args:
            node: Any syntax tree node (File, Decl, Spec, Stmt, Expr, Field, FieldList)
            sink: Object with a ``write(str)`` method

        Raises:
            UnsupportedConstructError: For a node shape the renderer does not
                know. Text written before the offending node stays in the sink.
        """
        logger.debug("Emitting %s", type(node).__name__)
        self._emit_node(node, sink)

    def render(self, node: Node) -> str:
        """Render ``node`` to a minified string."""
        sb = StringBuilder()
        self.emit(node, sb)
        return sb.build()

    # =========================================================================
    # Dispatch
    # =========================================================================

    def _emit_node(self, node: Node, out: Writer) -> None:
        match node:
            case File():
                self._emit_file(node, out)
            case Decl():
                self._emit_decl(node, out)
            case Spec():
                self._emit_spec(node, out)
            case Stmt():
                self._emit_stmt(node, out)
            case Expr():
                self._emit_expr(node, out)
            case Field():
                self._emit_field(node, out)
            case FieldList():
                self._emit_field_list(node, ",", out)
            case _:
                self._unsupported("emit", node)

    def _unsupported(self, where: str, node: object) -> NoReturn:
        category = getattr(node, "category", "node")
        node_type = type(node).__name__
        location = getattr(node, "location", None)
        logger.debug("Unsupported %s %s in %s", category, node_type, where)
        raise UnsupportedConstructError(category, node_type, location, where)

    # =========================================================================
    # Files and declarations
    # =========================================================================

    def _emit_file(self, file: File, out: Writer) -> None:
        out.write("package ")
        out.write(file.package.name)
        out.write(";")
        for i, decl in enumerate(file.decls):
            if i:
                out.write(";")
            self._emit_decl(decl, out)

    def _emit_decl(self, decl: Decl, out: Writer) -> None:
        match decl:
            case FuncDecl():
                self._emit_func_decl(decl, out)
            case GenDecl():
                self._emit_gen_decl(decl, out)
            case _:
                self._unsupported("decl", decl)

    def _emit_func_decl(self, decl: FuncDecl, out: Writer) -> None:
        if decl.recv is not None:
            out.write("func(")
            self._emit_field_list(decl.recv, ",", out)
            out.write(")")
        else:
            out.write("func ")
        out.write(decl.name.name)
        self._emit_signature(decl.type, out)
        if decl.body is not None:
            self._emit_block(decl.body, out)

    def _emit_gen_decl(self, decl: GenDecl, out: Writer) -> None:
        out.write(decl.tok.spelling)
        if not decl.grouped and len(decl.specs) == 1:
            out.write(" ")
            self._emit_spec(decl.specs[0], out)
            return
        out.write("(")
        for i, spec in enumerate(decl.specs):
            if i:
                out.write(";")
            self._emit_spec(spec, out)
        out.write(")")

    def _emit_spec(self, spec: Spec, out: Writer) -> None:
        match spec:
            case ImportSpec(name=name, path=path):
                if name is not None:
                    out.write(name.name)
                out.write(path.value)
            case ValueSpec(names=names, type=typ, values=values):
                self._emit_idents(names, out)
                if typ is not None:
                    out.write(" ")
                    self._emit_expr(typ, out)
                if values:
                    out.write("=")
                    if needs_separator("=", values[0]):
                        out.write(" ")
                    self._emit_expr_list(values, out)
            case TypeSpec(name=name, type=typ, type_params=type_params, assign=assign):
                out.write(name.name)
                if type_params is not None:
                    out.write("[")
                    self._emit_field_list(type_params, ",", out)
                    if _reads_as_array_length(type_params):
                        out.write(",")
                    out.write("]")
                if assign:
                    out.write("=")
                elif type_params is None:
                    out.write(" ")
                self._emit_expr(typ, out)
            case _:
                self._unsupported("spec", spec)

    # =========================================================================
    # Statements
    # =========================================================================

    def _emit_stmt(self, stmt: Stmt, out: Writer) -> None:
        match stmt:
            case ExprStmt(x=x):
                self._emit_expr(x, out)
            case AssignStmt(lhs=lhs, tok=tok, rhs=rhs):
                self._emit_expr_list(lhs, out)
                op = tok.spelling
                out.write(op)
                if rhs and needs_separator(op, rhs[0]):
                    out.write(" ")
                self._emit_expr_list(rhs, out)
            case IncDecStmt(x=x, tok=tok):
                self._emit_expr(x, out)
                out.write(tok.spelling)
            case SendStmt(chan=chan, value=value):
                self._emit_expr(chan, out)
                out.write("<-")
                if needs_separator("<-", value):
                    out.write(" ")
                self._emit_expr(value, out)
            case BlockStmt():
                self._emit_block(stmt, out)
            case IfStmt():
                self._emit_if(stmt, out)
            case ForStmt():
                self._emit_for(stmt, out)
            case RangeStmt():
                self._emit_range(stmt, out)
            case SwitchStmt(init=init, tag=tag, body=body):
                if init is None and tag is None:
                    out.write("switch")
                else:
                    out.write("switch ")
                    if init is not None:
                        self._emit_stmt(init, out)
                        out.write(";")
                    if tag is not None:
                        self._emit_expr(tag, out)
                self._emit_block(body, out)
            case TypeSwitchStmt(init=init, assign=assign, body=body):
                out.write("switch ")
                if init is not None:
                    self._emit_stmt(init, out)
                    out.write(";")
                self._emit_stmt(assign, out)
                self._emit_block(body, out)
            case SelectStmt(body=body):
                out.write("select")
                self._emit_block(body, out)
            case CaseClause(values=values, body=body):
                if values:
                    out.write("case ")
                    self._emit_expr_list(values, out)
                    out.write(":")
                else:
                    out.write("default:")
                self._emit_stmt_list(body, out)
            case CommClause(comm=comm, body=body):
                if comm is None:
                    out.write("default:")
                else:
                    out.write("case ")
                    self._emit_stmt(comm, out)
                    out.write(":")
                self._emit_stmt_list(body, out)
            case ReturnStmt(results=results):
                out.write("return")
                if results:
                    out.write(" ")
                    self._emit_expr_list(results, out)
            case BranchStmt(tok=tok, label=label):
                out.write(tok.spelling)
                if label is not None:
                    out.write(" ")
                    out.write(label.name)
            case GoStmt(call=call):
                out.write("go ")
                self._emit_expr(call, out)
            case DeferStmt(call=call):
                out.write("defer ")
                self._emit_expr(call, out)
            case LabeledStmt(label=label, stmt=inner):
                out.write(label.name)
                out.write(":")
                self._emit_stmt(inner, out)
            case DeclStmt(decl=decl):
                self._emit_decl(decl, out)
            case EmptyStmt(implicit=implicit):
                if not implicit:
                    out.write(";")
            case _:
                self._unsupported("stmt", stmt)

    def _emit_block(self, block: BlockStmt, out: Writer) -> None:
        out.write("{")
        self._emit_stmt_list(block.stmts, out)
        out.write("}")

    def _emit_stmt_list(self, stmts: Sequence[Stmt], out: Writer) -> None:
        previous: Stmt | None = None
        for stmt in stmts:
            if previous is not None and not _is_self_terminated(previous):
                out.write(";")
            self._emit_stmt(stmt, out)
            previous = stmt

    def _emit_if(self, stmt: IfStmt, out: Writer) -> None:
        out.write("if ")
        if stmt.init is not None:
            self._emit_stmt(stmt.init, out)
            out.write(";")
        self._emit_expr(stmt.cond, out)
        self._emit_block(stmt.body, out)
        match stmt.else_:
            case None:
                pass
            case IfStmt() as else_if:
                out.write("else ")
                self._emit_if(else_if, out)
            case BlockStmt() as block:
                out.write("else")
                self._emit_block(block, out)
            case other:
                self._unsupported("else", other)

    def _emit_for(self, stmt: ForStmt, out: Writer) -> None:
        if stmt.init is None and stmt.post is None:
            if stmt.cond is None:
                out.write("for")
            else:
                out.write("for ")
                self._emit_expr(stmt.cond, out)
        else:
            out.write("for ")
            if stmt.init is not None:
                self._emit_stmt(stmt.init, out)
            out.write(";")
            if stmt.cond is not None:
                self._emit_expr(stmt.cond, out)
            out.write(";")
            if stmt.post is not None:
                self._emit_stmt(stmt.post, out)
        self._emit_block(stmt.body, out)

    def _emit_range(self, stmt: RangeStmt, out: Writer) -> None:
        if stmt.key is None:
            out.write("for range ")
        else:
            out.write("for ")
            self._emit_expr(stmt.key, out)
            if stmt.value is not None:
                out.write(",")
                self._emit_expr(stmt.value, out)
            out.write((stmt.tok or TokenType.DEFINE).spelling)
            out.write("range ")
        self._emit_expr(stmt.x, out)
        self._emit_block(stmt.body, out)

    # =========================================================================
    # Expressions
    # =========================================================================

    def _emit_expr(self, expr: Expr, out: Writer) -> None:
        match expr:
            case Ident(name=name):
                out.write(name)
            case BasicLit(value=value):
                out.write(value)
            case BinaryExpr():
                self._emit_binary(expr, out)
            case UnaryExpr(op=op, x=x):
                spelling = op.spelling
                out.write(spelling)
                if needs_separator(spelling, x):
                    out.write(" ")
                self._emit_expr(x, out)
            case StarExpr(x=x):
                out.write("*")
                if needs_separator("*", x):
                    out.write(" ")
                self._emit_expr(x, out)
            case ParenExpr(x=x):
                out.write("(")
                self._emit_expr(x, out)
                out.write(")")
            case SelectorExpr(x=x, sel=sel):
                self._emit_expr(x, out)
                out.write(".")
                out.write(sel.name)
            case IndexExpr(x=x, indices=indices):
                self._emit_expr(x, out)
                out.write("[")
                self._emit_expr_list(indices, out)
                out.write("]")
            case SliceExpr(x=x, low=low, high=high, max=max_):
                self._emit_expr(x, out)
                out.write("[")
                if low is not None:
                    self._emit_expr(low, out)
                out.write(":")
                if high is not None:
                    self._emit_expr(high, out)
                if max_ is not None:
                    out.write(":")
                    self._emit_expr(max_, out)
                out.write("]")
            case TypeAssertExpr(x=x, type=typ):
                self._emit_expr(x, out)
                out.write(".(")
                if typ is None:
                    out.write("type")
                else:
                    self._emit_expr(typ, out)
                out.write(")")
            case CallExpr(fun=fun, args=args, ellipsis=ellipsis):
                self._emit_expr(fun, out)
                out.write("(")
                self._emit_expr_list(args, out)
                if ellipsis:
                    out.write("...")
                out.write(")")
            case CompositeLit(type=typ, elts=elts):
                if typ is not None:
                    self._emit_expr(typ, out)
                out.write("{")
                self._emit_expr_list(elts, out)
                out.write("}")
            case KeyValueExpr(key=key, value=value):
                self._emit_expr(key, out)
                out.write(":")
                self._emit_expr(value, out)
            case FuncLit(type=typ, body=body):
                out.write("func")
                self._emit_signature(typ, out)
                self._emit_block(body, out)
            case Ellipsis(elt=elt):
                out.write("...")
                if elt is not None:
                    self._emit_expr(elt, out)
            case ArrayType(len=length, elt=elt):
                out.write("[")
                if length is not None:
                    self._emit_expr(length, out)
                out.write("]")
                self._emit_expr(elt, out)
            case MapType(key=key, value=value):
                out.write("map[")
                self._emit_expr(key, out)
                out.write("]")
                self._emit_expr(value, out)
            case ChanType(dir=direction, value=value):
                out.write(_CHAN_PREFIX[direction])
                self._emit_expr(value, out)
            case FuncType():
                if expr.func_keyword:
                    out.write("func")
                self._emit_signature(expr, out)
            case StructType(fields=fields):
                out.write("struct{")
                self._emit_field_list(fields, ";", out)
                out.write("}")
            case InterfaceType(methods=methods):
                out.write("interface{")
                for i, method in enumerate(methods.fields):
                    if i:
                        out.write(";")
                    self._emit_interface_elem(method, out)
                out.write("}")
            case _:
                self._unsupported("expr", expr)

    def _emit_binary(self, expr: BinaryExpr, out: Writer) -> None:
        # Left-nested chains (a+b+c+...) are walked iteratively.
        spine: list[BinaryExpr] = [expr]
        while isinstance(spine[-1].x, BinaryExpr):
            spine.append(spine[-1].x)
        self._emit_expr(spine[-1].x, out)
        for node in reversed(spine):
            op = node.op.spelling
            out.write(op)
            if needs_separator(op, node.y):
                out.write(" ")
            self._emit_expr(node.y, out)

    def _emit_expr_list(self, exprs: Sequence[Expr], out: Writer) -> None:
        for i, expr in enumerate(exprs):
            if i:
                out.write(",")
            self._emit_expr(expr, out)

    def _emit_idents(self, idents: Sequence[Ident], out: Writer) -> None:
        for i, ident in enumerate(idents):
            if i:
                out.write(",")
            out.write(ident.name)

    # =========================================================================
    # Signatures and fields
    # =========================================================================

    def _emit_signature(self, typ: FuncType, out: Writer) -> None:
        if typ.type_params is not None:
            out.write("[")
            self._emit_field_list(typ.type_params, ",", out)
            out.write("]")
        out.write("(")
        self._emit_field_list(typ.params, ",", out)
        out.write(")")
        results = typ.results
        if results is None:
            return
        fields = results.fields
        if len(fields) == 1 and not fields[0].names:
            self._emit_expr(fields[0].type, out)
            return
        out.write("(")
        self._emit_field_list(results, ",", out)
        out.write(")")

    def _emit_field_list(self, fields: FieldList, sep: str, out: Writer) -> None:
        for i, field in enumerate(fields.fields):
            if i:
                out.write(sep)
            self._emit_field(field, out)

    def _emit_field(self, field: Field, out: Writer) -> None:
        if field.names:
            self._emit_idents(field.names, out)
            out.write(" ")
        self._emit_expr(field.type, out)
        if field.tag is not None:
            out.write(field.tag.value)

    def _emit_interface_elem(self, field: Field, out: Writer) -> None:
        match field:
            case Field(names=(name,), type=FuncType() as method):
                out.write(name.name)
                self._emit_signature(method, out)
            case Field(names=()):
                self._emit_expr(field.type, out)
            case _:
                self._unsupported("interface", field)


def _is_self_terminated(stmt: Stmt) -> bool:
    """Report whether ``stmt`` needs no ``;`` before the statement after it.

    A clause with no body is followed directly by the next clause, and an
    explicit empty statement is its own terminator.
    """
    match stmt:
        case CaseClause(body=()) | CommClause(body=()):
            return True
        case EmptyStmt(implicit=False):
            return True
        case LabeledStmt(stmt=inner):
            return _is_self_terminated(inner)
    return False


def _reads_as_array_length(type_params: FieldList) -> bool:
    """Report whether ``[P *C]`` would re-parse as an array length ``P*C``
    or ``[P (C)]`` as the call ``P(C)``.

    A trailing comma keeps such a lone type parameter a parameter.
    """
    match type_params.fields:
        case (Field(names=(_,), type=constraint),):
            return _combines_with_name(constraint)
    return False


def _combines_with_name(x: Expr) -> bool:
    match x:
        case StarExpr(x=inner):
            return not is_type_elem(inner)
        case ParenExpr(x=inner):
            return not is_type_elem(inner)
        case BinaryExpr(x=left, y=right):
            return _combines_with_name(left) and not is_type_elem(right)
    return False
