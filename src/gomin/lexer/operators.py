"""Maximal-munch matching of Go operators and delimiters.

The lexer uses ``match_operator`` to split punctuation runs into tokens.
The renderer consults the same function to decide whether two operator
tokens written back to back would be re-lexed as something else, so the
hazard set always matches the tokenizer exactly.

"""

from __future__ import annotations

from gomin.tokens import OPERATORS

LINE_COMMENT = "//"
BLOCK_COMMENT = "/*"

# Longest spelling first per length bucket; Go punctuation is at most 3 chars.
_BY_LENGTH: tuple[frozenset[str], ...] = tuple(
    frozenset(s for s in OPERATORS if len(s) == n) for n in (3, 2, 1)
)


def match_operator(text: str, pos: int = 0) -> str:
    """Return the punctuation token the lexer would read at ``text[pos]``.

    Comment openers (``//`` and ``/*``) are reported as such since the lexer
    gives them priority over the ``/`` operator.

    Returns:
        The matched spelling, or "" when no operator starts at ``pos``.

    Example:
        >>> match_operator("<-x")
        '<-'
        >>> match_operator("&^=", 0)
        '&^='
    """
    if text.startswith(LINE_COMMENT, pos) or text.startswith(BLOCK_COMMENT, pos):
        return text[pos : pos + 2]
    for n, spellings in zip((3, 2, 1), _BY_LENGTH):
        candidate = text[pos : pos + n]
        if len(candidate) == n and candidate in spellings:
            return candidate
    return ""
