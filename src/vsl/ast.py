"""AST node types for parsed VSL programs.

Spans are excluded from equality, so trees built by hand in tests compare
equal to parsed ones.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from vsl.tokens import Span


@dataclass(frozen=True, slots=True)
class Number:
    """Numeric literal like ``1.0``."""

    value: float
    span: Span | None = field(default=None, compare=False)


@dataclass(frozen=True, slots=True)
class Variable:
    """Reference to a variable, like ``a``."""

    name: str
    span: Span | None = field(default=None, compare=False)


@dataclass(frozen=True, slots=True)
class Binary:
    """Binary operator application."""

    op: str
    left: Expr
    right: Expr
    span: Span | None = field(default=None, compare=False)


@dataclass(frozen=True, slots=True)
class Call:
    """Function call with zero or more arguments."""

    callee: str
    args: tuple[Expr, ...] = ()
    span: Span | None = field(default=None, compare=False)


@dataclass(frozen=True, slots=True)
class Prototype:
    """Function name and parameter names, without a body."""

    name: str
    params: tuple[str, ...] = ()
    span: Span | None = field(default=None, compare=False)


@dataclass(frozen=True, slots=True)
class Function:
    """Function definition; top-level expressions use an anonymous prototype."""

    proto: Prototype
    body: Expr
    span: Span | None = field(default=None, compare=False)

    @property
    def is_anonymous(self) -> bool:
        return self.proto.name == ""


Expr = Number | Variable | Binary | Call
