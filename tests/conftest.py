"""Shared test fixtures and helpers."""

from __future__ import annotations

import pytest

from vsl.lexer import tokenize
from vsl.parser import parse_expression
from vsl.tokens import Token, TokenType


@pytest.fixture
def lex():
    """Return a helper that tokenizes source and returns tokens (excluding EOF)."""

    def _lex(source: str) -> list[Token]:
        tokens = tokenize(source)
        # Strip trailing EOF for convenience
        return [t for t in tokens if t.type != TokenType.EOF]

    return _lex


@pytest.fixture
def parse_expr():
    """Return a helper that parses a single expression."""

    def _parse(source: str):
        return parse_expression(source)

    return _parse


@pytest.fixture
def vsl_file(tmp_path):
    """Return a helper that writes VSL source to a file and returns its path."""

    def _write(source: str, name: str = "prog.vsl"):
        path = tmp_path / name
        path.write_text(source, encoding="utf-8")
        return path

    return _write
