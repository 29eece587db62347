"""VSL front-end: tokenizer, parser, and syntax tree dumper."""

from __future__ import annotations

__version__ = "0.1.0"


def dump(source: str, indent: str = "  ") -> str:
    """Parse VSL source and return the tree dump of every top-level construct."""
    from vsl.debug import render_ast
    from vsl.parser import parse

    return "".join(render_ast(node, indent) for node in parse(source))
