"""VSL lexer — pulls characters from a source and produces tokens on demand."""

from __future__ import annotations

import io
import re
from typing import TextIO

from vsl.tokens import (
    KEYWORDS,
    Position,
    Span,
    Token,
    TokenType,
    is_alnum,
    is_alpha,
    is_digit,
    is_space,
)

# Longest prefix strtod() would accept from a run of digits and dots
_DECIMAL_PREFIX = re.compile(r"[0-9]*(?:\.[0-9]*)?")


class Lexer:
    """Tokenize VSL source one token at a time.

    The source may be a string or any text stream; characters are read one at
    a time, so an interactive stream is only consumed as far as the parser has
    asked for tokens. One character of lookahead is held between calls.
    """

    def __init__(self, source: str | TextIO) -> None:
        self._stream = io.StringIO(source) if isinstance(source, str) else source
        self._consumed: list[str] = []
        self._line = 1
        self._col = 1
        self._offset = 0
        # Lookahead: read from the stream but not yet part of a token.
        # Starts as a blank so the first call reads the real first character.
        self._ch = " "
        self._ch_pos = Position(1, 1, 0)

    @property
    def text(self) -> str:
        """All source text read so far."""
        return "".join(self._consumed)

    # ------------------------------------------------------------------
    # Character input
    # ------------------------------------------------------------------

    def _read(self) -> None:
        """Replace the lookahead with the next character ("" at end of input)."""
        self._ch_pos = Position(self._line, self._col, self._offset)
        ch = self._stream.read(1)
        if ch:
            # "\n", "\r" and "\r\n" each end one line
            prev = self._consumed[-1] if self._consumed else ""
            self._consumed.append(ch)
            self._offset += 1
            if ch == "\r" or (ch == "\n" and prev != "\r"):
                self._line += 1
                self._col = 1
            elif ch != "\n":
                self._col += 1
        self._ch = ch

    def _emit(self, tt: TokenType, value: str, start: Position, number: float | None = None) -> Token:
        return Token(tt, value, Span(start, self._ch_pos), number)

    # ------------------------------------------------------------------
    # Tokens
    # ------------------------------------------------------------------

    def next_token(self) -> Token:
        """Return the next token, or an EOF token once the input is exhausted."""
        while True:
            while is_space(self._ch):
                self._read()

            start = self._ch_pos
            ch = self._ch

            if is_alpha(ch):
                return self._lex_word(start)

            if is_digit(ch) or ch == ".":
                return self._lex_number(start)

            if ch == "/":
                self._skip_comment()
                continue

            # Don't eat the end of input, later calls keep returning EOF
            if ch == "":
                return self._emit(TokenType.EOF, "", start)

            self._read()
            if ch == ":" and self._ch == "=":
                self._read()
                return self._emit(TokenType.ASSIGN, ":=", start)
            return self._emit(TokenType.CHAR, ch, start)

    def _lex_word(self, start: Position) -> Token:
        chars = [self._ch]
        self._read()
        while is_alnum(self._ch):
            chars.append(self._ch)
            self._read()
        text = "".join(chars)
        return self._emit(KEYWORDS.get(text, TokenType.IDENTIFIER), text, start)

    def _lex_number(self, start: Position) -> Token:
        chars = []
        while is_digit(self._ch) or self._ch == ".":
            chars.append(self._ch)
            self._read()
        text = "".join(chars)
        return self._emit(TokenType.NUMBER, text, start, _to_float(text))

    def _skip_comment(self) -> None:
        """Discard a '/' comment up to the end of the line."""
        self._read()
        while self._ch not in ("", "\n", "\r"):
            self._read()


def _to_float(text: str) -> float:
    """Convert a digit/dot run the way C strtod() does: "1.2.3" is 1.2, "." is 0."""
    prefix = _DECIMAL_PREFIX.match(text).group()
    if prefix in ("", "."):
        return 0.0
    return float(prefix)


def tokenize(source: str | TextIO) -> list[Token]:
    """Convenience function: tokenize a whole source, including the final EOF."""
    lexer = Lexer(source)
    tokens = [lexer.next_token()]
    while tokens[-1].type != TokenType.EOF:
        tokens.append(lexer.next_token())
    return tokens
