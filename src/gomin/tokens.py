"""Token and TokenType definitions for the Go lexer.

The lexer produces a stream of Token objects that the parser consumes.
Each Token has a type, value, and source location.

Operator, delimiter and keyword members of TokenType carry their canonical
spelling as the enum value, so ``TokenType.SHL.spelling == "<<"``. AST nodes
store these members as operator tags and the renderer writes the spelling back.

Thread Safety:
Token is frozen (immutable) and safe to share across threads.
TokenType is an enum (inherently immutable).

"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from gomin.location import SourceLocation


class TokenType(Enum):
    """Token types produced by the lexer.

    Organized by category:
    - Special (EOF)
    - Literals (identifiers and basic literals)
    - Operators and delimiters
    - Keywords

    """

    # Special
    EOF = "EOF"

    # Literals
    IDENT = "IDENT"
    INT = "INT"
    FLOAT = "FLOAT"
    IMAG = "IMAG"
    CHAR = "CHAR"
    STRING = "STRING"

    # Operators
    ADD = "+"
    SUB = "-"
    MUL = "*"
    QUO = "/"
    REM = "%"

    AND = "&"
    OR = "|"
    XOR = "^"
    SHL = "<<"
    SHR = ">>"
    AND_NOT = "&^"

    ADD_ASSIGN = "+="
    SUB_ASSIGN = "-="
    MUL_ASSIGN = "*="
    QUO_ASSIGN = "/="
    REM_ASSIGN = "%="

    AND_ASSIGN = "&="
    OR_ASSIGN = "|="
    XOR_ASSIGN = "^="
    SHL_ASSIGN = "<<="
    SHR_ASSIGN = ">>="
    AND_NOT_ASSIGN = "&^="

    LAND = "&&"
    LOR = "||"
    ARROW = "<-"
    INC = "++"
    DEC = "--"

    EQL = "=="
    LSS = "<"
    GTR = ">"
    ASSIGN = "="
    NOT = "!"

    NEQ = "!="
    LEQ = "<="
    GEQ = ">="
    DEFINE = ":="
    ELLIPSIS = "..."

    # Delimiters
    LPAREN = "("
    LBRACK = "["
    LBRACE = "{"
    COMMA = ","
    PERIOD = "."

    RPAREN = ")"
    RBRACK = "]"
    RBRACE = "}"
    SEMICOLON = ";"
    COLON = ":"
    TILDE = "~"

    # Keywords
    BREAK = "break"
    CASE = "case"
    CHAN = "chan"
    CONST = "const"
    CONTINUE = "continue"

    DEFAULT = "default"
    DEFER = "defer"
    ELSE = "else"
    FALLTHROUGH = "fallthrough"
    FOR = "for"

    FUNC = "func"
    GO = "go"
    GOTO = "goto"
    IF = "if"
    IMPORT = "import"

    INTERFACE = "interface"
    MAP = "map"
    PACKAGE = "package"
    RANGE = "range"
    RETURN = "return"

    SELECT = "select"
    STRUCT = "struct"
    SWITCH = "switch"
    TYPE = "type"
    VAR = "var"

    @property
    def spelling(self) -> str:
        """Canonical source spelling (operators, delimiters, keywords)."""
        return self.value

    @property
    def is_literal(self) -> bool:
        """Identifier or basic literal."""
        return self in _LITERALS

    @property
    def precedence(self) -> int:
        """Binary operator precedence (0 for non-binary tokens)."""
        return _BINARY_PRECEDENCE.get(self, 0)


_LITERALS = frozenset(
    {
        TokenType.IDENT,
        TokenType.INT,
        TokenType.FLOAT,
        TokenType.IMAG,
        TokenType.CHAR,
        TokenType.STRING,
    }
)

BASIC_LITERALS = _LITERALS - {TokenType.IDENT}

KEYWORDS: dict[str, TokenType] = {
    tt.value: tt for tt in TokenType if tt.value.isalpha() and tt.value.islower()
}

OPERATORS: dict[str, TokenType] = {
    tt.value: tt for tt in TokenType if not tt.value.isalpha()
}

_BINARY_PRECEDENCE: dict[TokenType, int] = {
    TokenType.LOR: 1,
    TokenType.LAND: 2,
    TokenType.EQL: 3,
    TokenType.NEQ: 3,
    TokenType.LSS: 3,
    TokenType.LEQ: 3,
    TokenType.GTR: 3,
    TokenType.GEQ: 3,
    TokenType.ADD: 4,
    TokenType.SUB: 4,
    TokenType.OR: 4,
    TokenType.XOR: 4,
    TokenType.MUL: 5,
    TokenType.QUO: 5,
    TokenType.REM: 5,
    TokenType.SHL: 5,
    TokenType.SHR: 5,
    TokenType.AND: 5,
    TokenType.AND_NOT: 5,
}

ASSIGN_OPERATORS = frozenset(
    {
        TokenType.ASSIGN,
        TokenType.DEFINE,
        TokenType.ADD_ASSIGN,
        TokenType.SUB_ASSIGN,
        TokenType.MUL_ASSIGN,
        TokenType.QUO_ASSIGN,
        TokenType.REM_ASSIGN,
        TokenType.AND_ASSIGN,
        TokenType.OR_ASSIGN,
        TokenType.XOR_ASSIGN,
        TokenType.SHL_ASSIGN,
        TokenType.SHR_ASSIGN,
        TokenType.AND_NOT_ASSIGN,
    }
)


@dataclass(frozen=True, slots=True)
class Token:
    """A token produced by the lexer.

    Attributes:
        type: The token type (from TokenType enum)
        value: The raw string value from source. Semicolons inserted by the
            lexer at a line end carry ``"\\n"``; explicit ones carry ``";"``.
        lineno: Start line number (1-indexed)
        col: Start column offset (1-indexed)
        offset: Absolute start position in source
        end_offset: Absolute end position in source
        source_file: Optional source file path

    Performance:
        SourceLocation is created lazily on first access to `.location`.

    """

    type: TokenType
    value: str
    lineno: int
    col: int
    offset: int
    end_offset: int
    source_file: str | None = None
    # Cache field - excluded from repr and comparison
    _location_cache: SourceLocation | None = field(
        default=None, repr=False, compare=False, hash=False
    )

    @property
    def location(self) -> SourceLocation:
        """Get source location (lazily created and cached)."""
        if self._location_cache is not None:
            return self._location_cache

        # Import here to avoid circular import at module load
        from gomin.location import SourceLocation

        loc = SourceLocation(
            lineno=self.lineno,
            col_offset=self.col,
            offset=self.offset,
            end_offset=self.end_offset,
            source_file=self.source_file,
        )
        # Safe mutation of frozen dataclass cache field (idempotent write)
        object.__setattr__(self, "_location_cache", loc)
        return loc

    def __repr__(self) -> str:
        """Compact repr for debugging."""
        val = self.value
        if len(val) > 20:
            val = val[:17] + "..."
        return f"Token({self.type.name}, {val!r}, {self.lineno}:{self.col})"
