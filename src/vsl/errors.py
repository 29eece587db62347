"""Error types with formatted source context."""

from __future__ import annotations

import re

from vsl.tokens import Span

# Same line breaks the lexer counts; \f and \v are plain whitespace
_LINE_BREAK = re.compile(r"\r\n|\r|\n")


def source_line(source: str, line: int) -> str:
    """Return 1-based *line* of *source* without its line break, or "" past the end."""
    lines = _LINE_BREAK.split(source)
    if 1 <= line <= len(lines):
        return lines[line - 1]
    return ""


class ParseError(Exception):
    """Syntax error raised by the parser, with span and source context."""

    def __init__(self, message: str, span: Span, source: str) -> None:
        self.message = message
        self.span = span
        self.source = source
        super().__init__(self.format())

    def format(self, filename: str = "<stdin>") -> str:
        """Render the error with a file locator and the offending line underlined."""
        start, end = self.span.start, self.span.end
        text = source_line(self.source, start.line)

        if end.line == start.line:
            width = end.column - start.column
        else:
            width = len(text) - start.column + 1

        number = str(start.line)
        margin = " " * len(number)
        marker = " " * (start.column - 1) + "^" * max(1, width)

        return "\n".join(
            [
                f"error: {self.message}",
                f"{margin} --> {filename}:{start.line}:{start.column}",
                f"{margin} |",
                f"{number} | {text}",
                f"{margin} | {marker}",
            ]
        )
