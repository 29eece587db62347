"""Indented tree and token dumps for inspecting parse results."""

from __future__ import annotations

import io
import sys
from collections.abc import Iterable
from typing import TextIO

from vsl.ast import Binary, Call, Expr, Function, Number, Prototype, Variable
from vsl.tokens import Token, TokenType


def dump_ast(node: Function | Expr, *, file: TextIO = sys.stdout, indent: str = "  ") -> None:
    """Print *node* one line per node, pre-order, indented by tree depth."""
    if isinstance(node, Function):
        _dump_function(node, 0, file, indent)
    else:
        _dump_expr(node, 0, file, indent)


def render_ast(node: Function | Expr, indent: str = "  ") -> str:
    """Return the dump_ast() rendering of *node* as a string."""
    buf = io.StringIO()
    dump_ast(node, file=buf, indent=indent)
    return buf.getvalue()


def format_number(value: float) -> str:
    return f"{value:g}"


def _dump_function(node: Function, depth: int, f: TextIO, indent: str) -> None:
    if node.is_anonymous:
        _dump_expr(node.body, depth, f, indent)
        return
    f.write(f"{indent * depth}FUNC\n")
    _dump_prototype(node.proto, depth + 1, f, indent)
    f.write(f"{indent * (depth + 1)}Body\n")
    _dump_expr(node.body, depth + 2, f, indent)


def _dump_prototype(proto: Prototype, depth: int, f: TextIO, indent: str) -> None:
    f.write(f"{indent * depth}Prototype\n")
    f.write(f"{indent * (depth + 1)}{proto.name}\n")
    for param in proto.params:
        f.write(f"{indent * (depth + 1)}{param}\n")


def _dump_expr(node: Expr, depth: int, f: TextIO, indent: str) -> None:
    prefix = indent * depth
    if isinstance(node, Number):
        f.write(f"{prefix}{format_number(node.value)}\n")
    elif isinstance(node, Variable):
        f.write(f"{prefix}{node.name}\n")
    elif isinstance(node, Binary):
        f.write(f"{prefix}{node.op}\n")
        _dump_expr(node.left, depth + 1, f, indent)
        _dump_expr(node.right, depth + 1, f, indent)
    elif isinstance(node, Call):
        f.write(f"{prefix}{node.callee}()\n")
        for arg in node.args:
            _dump_expr(arg, depth + 1, f, indent)
    else:
        raise TypeError(f"cannot dump {type(node).__name__}")


def dump_tokens(tokens: Iterable[Token], *, file: TextIO = sys.stdout) -> None:
    """Print one token per line: type name, then its text or value."""
    for tok in tokens:
        if tok.type == TokenType.NUMBER:
            file.write(f"{tok.type.name} {format_number(tok.number)}\n")
        elif tok.type == TokenType.EOF:
            file.write(f"{tok.type.name}\n")
        else:
            file.write(f"{tok.type.name} {tok.value!r}\n")
