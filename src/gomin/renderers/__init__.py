"""gomin renderers.

Renderers convert typed syntax tree nodes back into Go source text.

Available Renderers:
- MinifiedRenderer: Renders the tree as whitespace-minimal Go source

Thread Safety:
Renderers hold no per-call state; the output sink is passed explicitly.
Safe for concurrent use from multiple threads.

"""

from gomin.renderers.minified import MinifiedRenderer
from gomin.renderers.protocol import NodeRenderer, Writer

__all__ = ["MinifiedRenderer", "NodeRenderer", "Writer"]
