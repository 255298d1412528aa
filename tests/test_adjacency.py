"""Tests for operator adjacency: where a space is required between tokens."""

import pytest

from gomin import parse_expr, parse_stmt, render
from gomin.nodes import (
    ArrayType,
    BinaryExpr,
    CallExpr,
    ChanDir,
    ChanType,
    Ident,
    IndexExpr,
    KeyValueExpr,
    SelectorExpr,
    StarExpr,
    UnaryExpr,
)
from gomin.renderers.adjacency import (
    leading_operator,
    leftmost_expr,
    needs_separator,
    tokens_fuse,
)
from gomin.tokens import TokenType


class TestLeftmostExpr:
    def test_follows_binary_left_spine(self) -> None:
        tree = parse_expr("-35 * Second + 1")
        assert leftmost_expr(tree) == UnaryExpr(TokenType.SUB, parse_expr("35"))

    def test_follows_postfix_operands(self) -> None:
        neg = UnaryExpr(TokenType.SUB, Ident("x"))
        tree = SelectorExpr(IndexExpr(CallExpr(neg), (Ident("i"),)), Ident("y"))
        assert leftmost_expr(tree) is neg

    def test_follows_literal_type(self) -> None:
        tree = parse_expr("[]int{1}[0]")
        assert leftmost_expr(tree) == ArrayType(None, Ident("int"))

    def test_follows_key(self) -> None:
        key = UnaryExpr(TokenType.SUB, Ident("k"))
        assert leftmost_expr(KeyValueExpr(key, Ident("v"))) is key

    def test_stops_at_parentheses(self) -> None:
        tree = parse_expr("(-x) * y")
        assert leftmost_expr(tree) == parse_expr("(-x)")

    def test_plain_identifier(self) -> None:
        assert leftmost_expr(Ident("x")) == Ident("x")


class TestLeadingOperator:
    @pytest.mark.parametrize(
        ("source", "expected"),
        [
            ("-x", "-"),
            ("+x", "+"),
            ("!x", "!"),
            ("^x", "^"),
            ("&x", "&"),
            ("<-ch", "<-"),
            ("*p", "*"),
            ("<-chan int", "<-"),
            ("-a[0] + b", "-"),
            ("*p.field", "*"),
            ("x", None),
            ("(-x)", None),
            ("f(-x)", None),
            ("chan int", None),
            ("chan<- int", None),
            ("1", None),
        ],
    )
    def test_leading_operator(self, source: str, expected: str | None) -> None:
        assert leading_operator(parse_expr(source)) == expected

    def test_tilde_constraint(self) -> None:
        assert leading_operator(UnaryExpr(TokenType.TILDE, Ident("int"))) == "~"

    def test_receive_only_channel_node(self) -> None:
        assert leading_operator(ChanType(ChanDir.RECV, Ident("int"))) == "<-"


class TestTokensFuse:
    @pytest.mark.parametrize(
        ("left", "right"),
        [
            ("<", "-"),
            ("-", "-"),
            ("+", "+"),
            ("&", "^"),
            ("&", "&"),
            ("<", "<-"),
            ("/", "*"),
            ("|", "|"),
            ("<", "<"),
        ],
    )
    def test_fusing_pairs(self, left: str, right: str) -> None:
        assert tokens_fuse(left, right)

    @pytest.mark.parametrize(
        ("left", "right"),
        [
            ("==", "-"),
            ("-", "+"),
            ("!", "!"),
            ("*", "*"),
            ("<-", "<-"),
            ("|", "~"),
            ("&&", "&"),
            (":=", "<-"),
            ("<<", "-"),
            ("&^", "^"),
            ("=", "-"),
            ("-=", "-"),
        ],
    )
    def test_safe_pairs(self, left: str, right: str) -> None:
        assert not tokens_fuse(left, right)


class TestNeedsSeparator:
    def test_minus_operand(self) -> None:
        assert needs_separator("<", parse_expr("-y"))
        assert needs_separator("-", parse_expr("-1"))
        assert not needs_separator("<", parse_expr("y"))
        assert not needs_separator("-", parse_expr("1"))

    def test_through_left_spine(self) -> None:
        assert needs_separator("<", parse_expr("-35*Second"))

    def test_pointer_after_division(self) -> None:
        assert needs_separator("/", StarExpr(Ident("p")))


class TestRenderedHazards:
    @pytest.mark.parametrize(
        ("source", "expected"),
        [
            ("x < -y", "x< -y"),
            ("x - -1", "x- -1"),
            ("x < y", "x<y"),
            ("x - 1", "x-1"),
            ("d < -35*Second", "d< -35*Second"),
            ("a + +b", "a+ +b"),
            ("a & ^b", "a& ^b"),
            ("a & &b", "a& &b"),
            ("a < <-ch", "a< <-ch"),
            ("a / *p", "a/ *p"),
            ("- -x", "- -x"),
            ("+ +x", "+ +x"),
            ("& &x", "& &x"),
            ("a * *p", "a**p"),
            ("a - (-b)", "a-(-b)"),
            ("a == -1", "a==-1"),
            ("a &^ ^b", "a&^^b"),
            ("x < -y.z", "x< -y.z"),
            ("a - -b[0]", "a- -b[0]"),
            ("a || !b", "a||!b"),
            ("a && &b == nil", "a&&&b==nil"),
            ("<-<-ch", "<-<-ch"),
            ("x < <-chan int(nil)", "x< <-chan int(nil)"),
        ],
    )
    def test_expression(self, source: str, expected: str) -> None:
        tree = parse_expr(source)
        text = render(tree)
        assert text == expected
        assert parse_expr(text) == tree

    @pytest.mark.parametrize(
        ("source", "expected"),
        [
            ("x = -1", "x=-1"),
            ("x -= -1", "x-=-1"),
            ("x := <-ch", "x:=<-ch"),
            ("x &= ^y", "x&=^y"),
            ("ch <- *p", "ch<-*p"),
            ("ch <- -1", "ch<--1"),
            ("ch <- <-in", "ch<-<-in"),
            ("var d = -1", "var d=-1"),
        ],
    )
    def test_statement(self, source: str, expected: str) -> None:
        tree = parse_stmt(source)
        text = render(tree)
        assert text == expected
        assert parse_stmt(text) == tree

    def test_binary_left_operand_gets_no_space(self) -> None:
        tree = BinaryExpr(UnaryExpr(TokenType.SUB, Ident("x")), TokenType.LSS, Ident("y"))
        assert render(tree) == "-x<y"
