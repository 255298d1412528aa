"""Token adjacency checks for whitespace-free rendering.

Without whitespace, an operator written immediately before an operand that
itself starts with an operator can be re-lexed as a different token:
``x < -y`` printed as ``x<-y`` reads back as ``x <- y``. The renderer asks
``needs_separator`` at every such site and writes one space when it says so.

Fusion is decided by the lexer's own maximal-munch matcher, so the set of
hazardous pairs is exactly what the tokenizer would merge, including comment
openers (``x/ *p``).
"""

from __future__ import annotations

from functools import lru_cache

from gomin.lexer.operators import match_operator
from gomin.nodes import (
    BinaryExpr,
    CallExpr,
    ChanDir,
    ChanType,
    CompositeLit,
    Expr,
    IndexExpr,
    KeyValueExpr,
    SelectorExpr,
    SliceExpr,
    StarExpr,
    TypeAssertExpr,
    UnaryExpr,
)


def leftmost_expr(expr: Expr) -> Expr:
    """Return the sub-expression whose rendering comes first in ``expr``.

    Follows the left operand of binary operations and the operand of
    postfix forms (selectors, indexes, slices, calls, assertions, typed
    composite literals).

    Example:
        >>> from gomin import parse_expr
        >>> leftmost_expr(parse_expr("-35*Second"))
        UnaryExpr(op=<TokenType.SUB: '-'>, x=BasicLit(kind=<TokenType.INT: 'INT'>, value='35'))
    """
    while True:
        match expr:
            case (
                BinaryExpr(x=inner)
                | SelectorExpr(x=inner)
                | IndexExpr(x=inner)
                | SliceExpr(x=inner)
                | TypeAssertExpr(x=inner)
                | CallExpr(fun=inner)
                | KeyValueExpr(key=inner)
            ):
                expr = inner
            case CompositeLit(type=Expr() as inner):
                expr = inner
            case _:
                return expr


def leading_operator(expr: Expr) -> str | None:
    """Spelling of the operator token ``expr``'s rendering starts with, if any."""
    match leftmost_expr(expr):
        case UnaryExpr(op=op):
            return op.spelling
        case StarExpr():
            return "*"
        case ChanType(dir=ChanDir.RECV):
            return "<-"
    return None


@lru_cache(maxsize=256)
def tokens_fuse(left: str, right: str) -> bool:
    """Report whether ``left`` written directly before ``right`` re-lexes differently."""
    return match_operator(left + right) != left


def needs_separator(op: str, operand: Expr) -> bool:
    """Report whether a space is required between ``op`` and ``operand``.

    Example:
        >>> from gomin import parse_expr
        >>> needs_separator("<", parse_expr("-y"))
        True
        >>> needs_separator("<", parse_expr("y"))
        False
    """
    leading = leading_operator(operand)
    return leading is not None and tokens_fuse(op, leading)
