"""Tests for automatic semicolon insertion.

A line end becomes a SEMICOLON token (value "\\n") only after an
identifier, a basic literal, one of break/continue/fallthrough/return,
or one of ++ -- ) ] }.
"""

import pytest

from gomin.lexer import Lexer
from gomin.tokens import TokenType

IDENT = TokenType.IDENT
SEMI = TokenType.SEMICOLON
EOF = TokenType.EOF


def types(source: str) -> list[TokenType]:
    return [t.type for t in Lexer(source).tokenize()]


class TestInsertion:
    """Line ends after statement-ending tokens."""

    @pytest.mark.parametrize(
        "source",
        [
            "x\n",
            "42\n",
            "1.5\n",
            "2i\n",
            "'a'\n",
            '"s"\n',
            "`raw`\n",
            "break\n",
            "continue\n",
            "fallthrough\n",
            "return\n",
            "x++\n",
            "x--\n",
            "f()\n",
            "a[0]\n",
            "{}\n",
        ],
    )
    def test_inserted_after_trigger(self, source: str) -> None:
        tokens = list(Lexer(source).tokenize())
        assert tokens[-2].type is SEMI
        assert tokens[-2].value == "\n"
        assert tokens[-1].type is EOF

    @pytest.mark.parametrize("source", ["a +\n", "f(\n", "x :=\n", "if\n", "{\n", "a,\n"])
    def test_not_inserted_after_other_tokens(self, source: str) -> None:
        assert SEMI not in types(source)

    def test_inserted_at_eof(self) -> None:
        assert types("x") == [IDENT, SEMI, EOF]

    def test_continuation_lines_stay_joined(self) -> None:
        assert types("f(\n1)") == [
            IDENT,
            TokenType.LPAREN,
            TokenType.INT,
            TokenType.RPAREN,
            SEMI,
            EOF,
        ]

    def test_explicit_semicolon_keeps_its_spelling(self) -> None:
        tokens = list(Lexer("a; b").tokenize())
        assert tokens[1].type is SEMI
        assert tokens[1].value == ";"

    def test_blank_lines_produce_one_semicolon(self) -> None:
        assert types("x\n\n\ny\n") == [IDENT, SEMI, IDENT, SEMI, EOF]

    def test_empty_source(self) -> None:
        assert types("") == [EOF]


class TestComments:
    """Comments vanish, but may still end a line."""

    def test_line_comment_ends_line(self) -> None:
        assert types("x // note\ny") == [IDENT, SEMI, IDENT, SEMI, EOF]

    def test_line_comment_at_eof(self) -> None:
        assert types("x // note") == [IDENT, SEMI, EOF]

    def test_single_line_block_comment_is_transparent(self) -> None:
        assert types("x /* note */ y") == [IDENT, IDENT, SEMI, EOF]

    def test_block_comment_spanning_lines_ends_line(self) -> None:
        assert types("x /* a\nb */ y") == [IDENT, SEMI, IDENT, SEMI, EOF]

    def test_block_comment_before_newline(self) -> None:
        assert types("x /* note */\ny") == [IDENT, SEMI, IDENT, SEMI, EOF]

    def test_comment_only_source(self) -> None:
        assert types("// nothing here\n/* or here */") == [EOF]

    def test_comment_after_non_trigger(self) -> None:
        assert types("a + // more\nb") == [IDENT, TokenType.ADD, IDENT, SEMI, EOF]
