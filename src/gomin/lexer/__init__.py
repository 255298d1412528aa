"""Go lexer for gomin.

Architecture:
lexer/
├── __init__.py          # Re-exports Lexer, match_operator
├── core.py              # Lexer class (scanning loop + semicolon insertion)
├── operators.py         # Maximal-munch punctuation matcher
└── scanners.py          # Number, string and comment scanner mixins

Usage:
    >>> from gomin.lexer import Lexer
    >>> for token in Lexer("x++").tokenize():
    ...     print(token)
Token(IDENT, 'x', 1:1)
Token(INC, '++', 1:2)
Token(SEMICOLON, '\\n', 1:4)
Token(EOF, '', 1:4)

"""

from gomin.lexer.core import Lexer
from gomin.lexer.operators import match_operator

__all__ = ["Lexer", "match_operator"]
