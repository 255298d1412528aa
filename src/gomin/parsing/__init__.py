"""Parsing subsystem for the gomin Go parser.

Provides mixin classes for modular parsing functionality:
- `TokenNavigationMixin`: Token stream traversal
- `TypeParsingMixin`: Types, signatures and parameter lists
- `ExpressionParsingMixin`: Expressions and composite literals
- `StatementParsingMixin`: Statements and control clauses
- `DeclarationParsingMixin`: Package-level and local declarations

Architecture:
The parser uses a mixin-based design for separation of concerns. Each
mixin handles one aspect of the Go grammar and calls into the others
through the shared host instance.

Example:
    >>> from gomin.parsing import (
    ...     TokenNavigationMixin,
    ...     ExpressionParsingMixin,
    ... )
    >>> class ExprParser(TokenNavigationMixin, ExpressionParsingMixin):
    ...     pass

"""

from gomin.parsing.declarations import DeclarationParsingMixin
from gomin.parsing.expressions import ExpressionParsingMixin
from gomin.parsing.statements import StatementParsingMixin
from gomin.parsing.token_nav import TokenNavigationMixin
from gomin.parsing.types import TypeParsingMixin

__all__ = [
    "TokenNavigationMixin",
    "TypeParsingMixin",
    "ExpressionParsingMixin",
    "StatementParsingMixin",
    "DeclarationParsingMixin",
]
