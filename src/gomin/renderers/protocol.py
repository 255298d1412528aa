"""Writer and NodeRenderer protocols — stable interfaces for renderers.

Any object with ``write(str)`` can receive rendered output: an open text
file, ``sys.stdout``, ``io.StringIO`` or gomin's own ``StringBuilder``.

Any renderer that implements ``emit(node, sink)`` and ``render(node) -> str``
conforms to ``NodeRenderer``. The built-in ``MinifiedRenderer`` is the
reference implementation.

Example:
    from gomin.renderers.protocol import NodeRenderer

    def minify_to(renderer: NodeRenderer, tree: File, out: Writer) -> None:
        renderer.emit(tree, out)

"""

from typing import Protocol

from gomin.nodes import Node


class Writer(Protocol):
    """Text sink. The return value of ``write`` is ignored."""

    def write(self, s: str, /) -> object: ...


class NodeRenderer(Protocol):
    """Protocol for syntax tree renderers."""

    def emit(self, node: Node, sink: Writer) -> None:
        """Write the rendering of ``node`` to ``sink``.

        Args:
            node: Any syntax tree node.
            sink: Destination for the rendered text.

        """
        ...

    def render(self, node: Node) -> str:
        """Render ``node`` to a string."""
        ...
