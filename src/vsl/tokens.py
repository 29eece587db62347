"""Token types, data structures, and character classification helpers."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, auto


class TokenType(Enum):
    # Commands
    FUNC = auto()  # FUNC
    PRINT = auto()  # PRINT
    RETURN = auto()  # RETURN
    CONTINUE = auto()  # CONTINUE

    # Control flow (reserved, no grammar yet)
    IF = auto()  # IF
    THEN = auto()  # THEN
    ELSE = auto()  # ELSE
    FI = auto()  # FI
    WHILE = auto()  # WHILE
    DO = auto()  # DO
    DONE = auto()  # DONE

    # User-defined operators (reserved)
    BINARY = auto()  # binary
    UNARY = auto()  # unary

    # Variables (reserved)
    VAR = auto()  # VAR
    ASSIGN = auto()  # :=

    # Primary
    IDENTIFIER = auto()  # [A-Za-z][A-Za-z0-9]*
    NUMBER = auto()  # [0-9.]+

    CHAR = auto()  # any other single character, value is the character
    EOF = auto()


KEYWORDS: dict[str, TokenType] = {
    "FUNC": TokenType.FUNC,
    "PRINT": TokenType.PRINT,
    "RETURN": TokenType.RETURN,
    "CONTINUE": TokenType.CONTINUE,
    "IF": TokenType.IF,
    "THEN": TokenType.THEN,
    "ELSE": TokenType.ELSE,
    "FI": TokenType.FI,
    "WHILE": TokenType.WHILE,
    "DO": TokenType.DO,
    "DONE": TokenType.DONE,
    "binary": TokenType.BINARY,
    "unary": TokenType.UNARY,
    "VAR": TokenType.VAR,
}


@dataclass(frozen=True, slots=True)
class Position:
    """Source position, 1-based line and column, 0-based character offset."""

    line: int
    column: int
    offset: int


@dataclass(frozen=True, slots=True)
class Span:
    """Source range from start to end position."""

    start: Position
    end: Position


@dataclass(frozen=True, slots=True)
class Token:
    """A single lexer token.

    ``value`` is the source text of the token (the character itself for
    ``CHAR``). ``number`` is only set for ``NUMBER`` tokens.
    """

    type: TokenType
    value: str
    span: Span
    number: float | None = None

    def is_char(self, ch: str) -> bool:
        """Return True if this is the single-character token *ch*."""
        return self.type == TokenType.CHAR and self.value == ch


# C isspace() in the default locale
_WHITESPACE = frozenset(" \t\n\r\v\f")


def is_space(ch: str) -> bool:
    return ch in _WHITESPACE


def is_alpha(ch: str) -> bool:
    """Return True if ch is an ASCII letter."""
    return ch.isascii() and ch.isalpha()


def is_digit(ch: str) -> bool:
    """Return True if ch is an ASCII decimal digit."""
    return ch != "" and ch in "0123456789"


def is_alnum(ch: str) -> bool:
    return is_alpha(ch) or is_digit(ch)
