"""StringBuilder for O(n) string accumulation.

Appends to a list, joins once at the end: O(n) total vs O(n²) for
repeated string concatenation. Implements ``write`` so it can be handed to
the renderer as an in-memory sink.

Thread Safety:
StringBuilder instances are local to each render() call.
No shared mutable state.

"""

from __future__ import annotations


class StringBuilder:
    """Efficient string accumulator with the file-object ``write`` signature.

    Usage:
            >>> sb = StringBuilder()
            >>> sb.write("func")
            4
            >>> _ = sb.write("()")
            >>> sb.build()
            'func()'

    """

    __slots__ = ("_parts",)

    def __init__(self) -> None:
        """Initialize empty StringBuilder."""
        self._parts: list[str] = []

    def write(self, s: str) -> int:
        """Append ``s`` (empty strings are skipped).

        Returns:
            Number of characters written
        """
        if s:
            self._parts.append(s)
        return len(s)

    def build(self) -> str:
        """Join all parts into final string."""
        return "".join(self._parts)
