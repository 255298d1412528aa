"""Tests for the recursive descent Go parser."""

import pytest

from gomin import (
    MinifyConfig,
    ParseError,
    config_context,
    parse,
    parse_decl,
    parse_expr,
    parse_stmt,
)
from gomin.nodes import (
    ArrayType,
    AssignStmt,
    BasicLit,
    BinaryExpr,
    BlockStmt,
    CallExpr,
    CaseClause,
    ChanDir,
    ChanType,
    CommClause,
    CompositeLit,
    EmptyStmt,
    ExprStmt,
    Field,
    FieldList,
    File,
    ForStmt,
    FuncDecl,
    GenDecl,
    Ident,
    IfStmt,
    IndexExpr,
    InterfaceType,
    LabeledStmt,
    ParenExpr,
    RangeStmt,
    SelectStmt,
    SendStmt,
    StarExpr,
    SwitchStmt,
    TypeAssertExpr,
    TypeSpec,
    TypeSwitchStmt,
    UnaryExpr,
    ValueSpec,
)
from gomin.tokens import TokenType

a, b, c, x, y = (Ident(n) for n in "abcxy")


def lit(value: str) -> BasicLit:
    return BasicLit(TokenType.INT, value)


class TestFile:
    def test_package_and_decls(self) -> None:
        tree = parse('package main\n\nimport "fmt"\n\nfunc main() {\n\tfmt.Println(1)\n}\n')
        assert isinstance(tree, File)
        assert tree.package == Ident("main")
        assert len(tree.decls) == 2
        assert isinstance(tree.decls[1], FuncDecl)

    def test_imports_property(self) -> None:
        tree = parse('package p\nimport (\n\t"a"\n\tb "c"\n)\nimport . "d"\n')
        assert [spec.path.value for spec in tree.imports] == ['"a"', '"c"', '"d"']
        assert tree.imports[2].name == Ident(".")

    def test_locations_are_recorded(self) -> None:
        tree = parse("package p\n\nvar x = 1\n", source_file="x.go")
        decl = tree.decls[0]
        assert decl.location.lineno == 3
        assert decl.location.col_offset == 1
        assert decl.location.source_file == "x.go"

    def test_equality_ignores_locations(self) -> None:
        assert parse("package p;var x=1") == parse("package p\n\n\nvar   x = 1\n")


class TestExpressions:
    def test_multiplicative_binds_tighter(self) -> None:
        assert parse_expr("a + b * c") == BinaryExpr(
            a, TokenType.ADD, BinaryExpr(b, TokenType.MUL, c)
        )

    def test_left_associative(self) -> None:
        assert parse_expr("a - b - c") == BinaryExpr(
            BinaryExpr(a, TokenType.SUB, b), TokenType.SUB, c
        )

    def test_logical_operators(self) -> None:
        tree = parse_expr("a || b && c")
        assert tree.op is TokenType.LOR
        assert tree.y == BinaryExpr(b, TokenType.LAND, c)

    def test_comparison_below_additive(self) -> None:
        tree = parse_expr("a < b + c")
        assert tree.op is TokenType.LSS

    def test_unary_binds_tighter_than_binary(self) -> None:
        assert parse_expr("-a * b") == BinaryExpr(
            UnaryExpr(TokenType.SUB, a), TokenType.MUL, b
        )

    def test_parentheses_are_kept(self) -> None:
        assert parse_expr("(a + b) * c") == BinaryExpr(
            ParenExpr(BinaryExpr(a, TokenType.ADD, b)), TokenType.MUL, c
        )

    def test_receive_and_receive_only_channel(self) -> None:
        assert parse_expr("<-x") == UnaryExpr(TokenType.ARROW, x)
        assert parse_expr("<-chan int") == ChanType(ChanDir.RECV, Ident("int"))
        assert parse_expr("<-chan <-chan int") == ChanType(
            ChanDir.RECV, ChanType(ChanDir.RECV, Ident("int"))
        )

    def test_receive_only_send_channel_is_rejected(self) -> None:
        with pytest.raises(ParseError, match="expected channel type"):
            parse_expr("<-chan<- int")

    def test_dereference_and_pointer(self) -> None:
        assert parse_expr("*p") == StarExpr(Ident("p"))

    def test_type_switch_guard(self) -> None:
        assert parse_expr("x.(type)") == TypeAssertExpr(x, None)

    def test_composite_literal(self) -> None:
        tree = parse_expr("[]int{1, 2,}")
        assert tree == CompositeLit(ArrayType(None, Ident("int")), (lit("1"), lit("2")))

    def test_elided_inner_literal(self) -> None:
        tree = parse_expr("[][]int{{1}, {2}}")
        assert tree.elts[0] == CompositeLit(None, (lit("1"),))

    def test_generic_instantiation(self) -> None:
        tree = parse_expr("Map[int, string](xs)")
        assert isinstance(tree, CallExpr)
        assert tree.fun == IndexExpr(Ident("Map"), (Ident("int"), Ident("string")))

    def test_variadic_call(self) -> None:
        tree = parse_expr("f(a, b...)")
        assert tree == CallExpr(Ident("f"), (a, b), ellipsis=True)

    def test_conversion_to_slice(self) -> None:
        tree = parse_expr("[]byte(s)")
        assert tree == CallExpr(ArrayType(None, Ident("byte")), (Ident("s"),))

    def test_three_index_slice_requires_bounds(self) -> None:
        with pytest.raises(ParseError, match="middle and final index required"):
            parse_expr("s[a::c]")


class TestStatements:
    def test_simple_statements(self) -> None:
        assert parse_stmt("x := 1") == AssignStmt((x,), TokenType.DEFINE, (lit("1"),))
        assert parse_stmt("ch <- v") == SendStmt(Ident("ch"), Ident("v"))
        assert parse_stmt("f()") == ExprStmt(CallExpr(Ident("f")))

    def test_labeled_statement(self) -> None:
        tree = parse_stmt("outer: for {}")
        assert isinstance(tree, LabeledStmt)
        assert tree.label == Ident("outer")
        assert isinstance(tree.stmt, ForStmt)

    def test_label_before_closing_brace(self) -> None:
        tree = parse_stmt("{ done: }")
        assert tree == BlockStmt((LabeledStmt(Ident("done"), EmptyStmt(implicit=True)),))

    def test_explicit_empty_statement(self) -> None:
        assert parse_stmt("{ ; }") == BlockStmt((EmptyStmt(),))

    def test_brace_after_condition_opens_body(self) -> None:
        tree = parse_stmt("if x == y {}")
        assert isinstance(tree, IfStmt)
        assert tree.cond == BinaryExpr(x, TokenType.EQL, y)
        assert tree.body == BlockStmt()

    def test_parenthesized_literal_in_if_condition(self) -> None:
        tree = parse_stmt("if p == (T{}) {}")
        assert tree.cond.y == ParenExpr(CompositeLit(Ident("T")))

    def test_literal_type_allowed_in_range(self) -> None:
        tree = parse_stmt("for _, v := range []int{1, 2} {}")
        assert isinstance(tree, RangeStmt)
        assert tree.key == Ident("_")
        assert tree.value == Ident("v")
        assert tree.tok is TokenType.DEFINE
        assert isinstance(tree.x, CompositeLit)

    def test_range_without_variables(self) -> None:
        tree = parse_stmt("for range ch {}")
        assert tree == RangeStmt(None, None, None, Ident("ch"), BlockStmt())

    def test_range_with_three_variables_is_rejected(self) -> None:
        with pytest.raises(ParseError, match="at most two iteration variables"):
            parse_stmt("for a, b, c := range x {}")

    def test_for_clauses(self) -> None:
        tree = parse_stmt("for i := 0; i < n; i++ {}")
        assert isinstance(tree, ForStmt)
        assert isinstance(tree.init, AssignStmt)
        assert tree.cond == BinaryExpr(Ident("i"), TokenType.LSS, Ident("n"))
        assert tree.post is not None

    def test_for_with_empty_clauses(self) -> None:
        assert parse_stmt("for ;; {}") == ForStmt(None, None, None, BlockStmt())

    def test_if_else_chain(self) -> None:
        tree = parse_stmt("if a {} else if b {} else {}")
        assert isinstance(tree.else_, IfStmt)
        assert tree.else_.else_ == BlockStmt()

    def test_if_with_init(self) -> None:
        tree = parse_stmt("if v, ok := m[k]; ok {}")
        assert isinstance(tree.init, AssignStmt)
        assert tree.cond == Ident("ok")

    def test_switch_forms(self) -> None:
        tree = parse_stmt("switch x := f(); x {\ncase 1, 2:\ndefault:\n}")
        assert isinstance(tree, SwitchStmt)
        assert tree.tag == x
        first, default = tree.body.stmts
        assert first == CaseClause((lit("1"), lit("2")))
        assert default.is_default

    def test_type_switch(self) -> None:
        tree = parse_stmt("switch v := x.(type) {\ncase int, []string:\n}")
        assert isinstance(tree, TypeSwitchStmt)
        clause = tree.body.stmts[0]
        assert clause.values == (Ident("int"), ArrayType(None, Ident("string")))

    def test_select(self) -> None:
        tree = parse_stmt("select {\ncase v, ok := <-ch:\ncase out <- 1:\ndefault:\n}")
        assert isinstance(tree, SelectStmt)
        recv, send, default = tree.body.stmts
        assert isinstance(recv.comm, AssignStmt)
        assert isinstance(send.comm, SendStmt)
        assert default == CommClause(None)

    def test_go_requires_call(self) -> None:
        with pytest.raises(ParseError, match="must be function call"):
            parse_stmt("go x")


class TestDeclarations:
    def test_grouped_flag(self) -> None:
        assert parse_decl("var (x = 1)").grouped is True
        assert parse_decl("var x = 1").grouped is False

    def test_const_iota_group(self) -> None:
        decl = parse_decl("const (\n\tA = iota\n\tB\n\tC\n)")
        assert isinstance(decl, GenDecl)
        assert decl.specs[1] == ValueSpec((Ident("B"),))

    def test_type_alias(self) -> None:
        assert parse_decl("type A = B").specs[0] == TypeSpec(Ident("A"), Ident("B"), assign=True)

    def test_array_type_declaration(self) -> None:
        spec = parse_decl("type A [N]int").specs[0]
        assert spec.type_params is None
        assert spec.type == ArrayType(Ident("N"), Ident("int"))

    def test_array_length_product(self) -> None:
        spec = parse_decl("type A [N * M]int").specs[0]
        assert spec.type_params is None
        assert spec.type.len == BinaryExpr(Ident("N"), TokenType.MUL, Ident("M"))

    def test_generic_type(self) -> None:
        spec = parse_decl("type List[T any] struct{ next *List[T] }").specs[0]
        assert spec.type_params == FieldList((Field((Ident("T"),), Ident("any")),))

    def test_generic_pointer_constraint_needs_comma(self) -> None:
        spec = parse_decl("type P[T *C,] int").specs[0]
        assert spec.type_params == FieldList((Field((Ident("T"),), StarExpr(Ident("C"))),))

    def test_union_constraint(self) -> None:
        spec = parse_decl("type Number interface{ ~int | ~float64 }").specs[0]
        assert isinstance(spec.type, InterfaceType)
        elem = spec.type.methods.fields[0]
        assert elem.type.op is TokenType.OR

    def test_generic_function(self) -> None:
        decl = parse_decl("func Map[S ~[]E, E any](s S) S { return s }")
        params = decl.type.type_params.fields
        assert params[0].type == UnaryExpr(TokenType.TILDE, ArrayType(None, Ident("E")))
        assert params[1].names == (Ident("E"),)

    def test_method_with_generic_receiver(self) -> None:
        decl = parse_decl("func (s *Stack[T]) Push(v T) {}")
        recv = decl.recv.fields[0]
        assert recv.type == StarExpr(IndexExpr(Ident("Stack"), (Ident("T"),)))

    def test_external_function(self) -> None:
        assert parse_decl("func now() int64").body is None

    def test_grouped_parameters(self) -> None:
        decl = parse_decl("func f(a, b int, c string) {}")
        fields = decl.type.params.fields
        assert [len(f.names) for f in fields] == [2, 1]

    def test_mixed_named_and_unnamed_parameters(self) -> None:
        with pytest.raises(ParseError, match="mixed named and unnamed parameters"):
            parse_decl("func f(a int, *T) {}")


class TestParseErrors:
    def test_missing_package_clause(self) -> None:
        with pytest.raises(ParseError) as exc_info:
            parse("func f() {}")
        err = exc_info.value
        assert err.message == "expected 'package', found 'func'"
        assert (err.lineno, err.col_offset) == (1, 1)

    def test_missing_operand_position(self) -> None:
        with pytest.raises(ParseError) as exc_info:
            parse("package p\nfunc f() { x := }", source_file="bad.go")
        err = exc_info.value
        assert err.message == "expected operand, found '}'"
        assert str(err) == "bad.go:2:17 expected operand, found '}'"

    def test_unexpected_eof(self) -> None:
        with pytest.raises(ParseError, match="expected '}', found EOF"):
            parse("package p\nfunc f() {\n")

    def test_newline_reported_by_name(self) -> None:
        with pytest.raises(ParseError, match="found newline"):
            parse("package p\nvar x = f(a\n)\n")

    def test_trailing_tokens_rejected(self) -> None:
        with pytest.raises(ParseError, match="expected EOF"):
            parse_expr("a b")

    def test_if_without_condition(self) -> None:
        with pytest.raises(ParseError, match="missing condition"):
            parse_stmt("if {}")


class TestNestingGuard:
    def test_deep_nesting_raises_parse_error(self) -> None:
        source = "(" * 200 + "x" + ")" * 200
        with pytest.raises(ParseError, match="exceeded maximum nesting depth"):
            parse_expr(source)

    def test_nesting_within_limit(self) -> None:
        source = "(" * 40 + "x" + ")" * 40
        assert isinstance(parse_expr(source), ParenExpr)

    def test_limit_comes_from_config(self) -> None:
        with config_context(MinifyConfig(max_nesting_depth=5)):
            with pytest.raises(ParseError, match="exceeded maximum nesting depth"):
                parse_expr("!" * 10 + "x")
        assert parse_expr("!" * 10 + "x") is not None

    def test_deeply_nested_blocks(self) -> None:
        source = "package p\nfunc f() " + "{" * 150 + "}" * 150
        with pytest.raises(ParseError, match="exceeded maximum nesting depth"):
            parse(source)
