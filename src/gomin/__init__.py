"""
gomin — Go source minifier

Parses Go source into a typed syntax tree and writes it back with the least
whitespace that still reads as the same program. The interesting part is
operator adjacency: ``x < -y`` must become ``x< -y``, not ``x<-y``.

Quick Start:
    >>> from gomin import minify
    >>> minify("package p\\n\\nvar d = x - -1\\n")
    'package p;var d=x- -1'

    >>> from gomin import parse_expr, render
    >>> render(parse_expr("a < -b"))
    'a< -b'

Zero runtime dependencies.
"""

from gomin.config import (
    MinifyConfig,
    config_context,
    get_config,
    reset_config,
    set_config,
)
from gomin.errors import GominError, ParseError, UnsupportedConstructError
from gomin.lexer import Lexer
from gomin.location import SourceLocation
from gomin.nodes import Decl, Expr, File, Node, Stmt
from gomin.parser import Parser
from gomin.renderers.minified import MinifiedRenderer
from gomin.renderers.protocol import NodeRenderer, Writer
from gomin.serialization import from_dict, from_json, to_dict, to_json
from gomin.tokens import Token, TokenType

__version__ = "0.1.0"

_renderer = MinifiedRenderer()


def parse(source: str, *, source_file: str | None = None) -> File:
    """Parse Go source into a typed syntax tree.

    Args:
        source: Go source text of one file
        source_file: Optional source file path for error messages

    Returns:
        File syntax tree root

    Raises:
        ParseError: On the first lexical or syntax error

    """
    return Parser(source, source_file).parse()


def parse_expr(source: str) -> Expr:
    """Parse a single Go expression (types are expressions too)."""
    return Parser(source).parse_expr()


def parse_stmt(source: str) -> Stmt:
    """Parse a single Go statement."""
    return Parser(source).parse_stmt()


def parse_decl(source: str) -> Decl:
    """Parse a single top-level Go declaration."""
    return Parser(source).parse_decl()


def emit(node: Node, sink: Writer) -> None:
    """Write the minified rendering of ``node`` to ``sink``.

    Raises:
        UnsupportedConstructError: For an unrecognized node shape. Text
            written before it stays in the sink.

    """
    _renderer.emit(node, sink)


def render(node: Node) -> str:
    """Render ``node`` as minified Go source."""
    return _renderer.render(node)


def minify(source: str, *, source_file: str | None = None) -> str:
    """Parse Go source and return its minified form.

    Appends a newline when ``MinifyConfig.final_newline`` is set.

    Example:
        >>> minify("package main\\n\\nfunc main() {\\n}\\n")
        'package main;func main(){}'

    """
    text = render(parse(source, source_file=source_file))
    if get_config().final_newline:
        text += "\n"
    return text


__all__ = [
    # Main API
    "parse",
    "parse_expr",
    "parse_stmt",
    "parse_decl",
    "emit",
    "render",
    "minify",
    # Configuration
    "MinifyConfig",
    "get_config",
    "set_config",
    "reset_config",
    "config_context",
    # Core classes
    "Lexer",
    "Parser",
    "MinifiedRenderer",
    "NodeRenderer",
    "Writer",
    "Token",
    "TokenType",
    "SourceLocation",
    # Nodes
    "Node",
    "File",
    "Decl",
    "Stmt",
    "Expr",
    # Errors
    "GominError",
    "ParseError",
    "UnsupportedConstructError",
    # Serialization
    "to_dict",
    "from_dict",
    "to_json",
    "from_json",
    "__version__",
]
