"""Exception classes for gomin.

Provides standardized exceptions for error handling throughout gomin.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from gomin.location import SourceLocation


class GominError(Exception):
    """Base exception for all gomin errors.

    Subclass this for specific error categories.
    """

    pass


class ParseError(GominError):
    """Error while lexing or parsing Go source.

    Raised on the first syntax error; the parser does not recover.
    """

    def __init__(
        self,
        message: str,
        lineno: int | None = None,
        col_offset: int | None = None,
        source_file: str | None = None,
    ) -> None:
        """Initialize parse error with optional location.

        Args:
            message: Error description
            lineno: Line number where error occurred (1-indexed)
            col_offset: Column offset where error occurred (1-indexed)
            source_file: Path to source file (optional)
        """
        self.message = message
        self.lineno = lineno
        self.col_offset = col_offset
        self.source_file = source_file

        location = ""
        if source_file:
            location = f"{source_file}:"
        if lineno is not None:
            location += f"{lineno}:"
            if col_offset is not None:
                location += f"{col_offset}:"
        if location:
            location = location.rstrip(":") + " "

        super().__init__(f"{location}{message}")


class UnsupportedConstructError(GominError):
    """Error when the renderer meets a node shape it does not recognize.

    Fatal: rendering stops immediately. Output already written to the
    sink is left there and should be discarded by the caller.
    """

    def __init__(
        self,
        category: str,
        node_type: str,
        location: SourceLocation | None = None,
        where: str = "",
    ) -> None:
        """Initialize unsupported construct error.

        Args:
            category: Node category (e.g., "expression", "statement")
            node_type: Python class name of the offending node
            location: Source location of the node, if known
            where: Dispatch site that rejected the node
        """
        self.category = category
        self.node_type = node_type
        self.location = location
        self.where = where

        position = str(location) if location is not None and location.is_known else "<?>"
        site = f"{where}: " if where else ""
        super().__init__(f"{position}: {site}unhandled {category} {node_type}")
