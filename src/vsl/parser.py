"""VSL parser — recursive descent with precedence climbing for binary operators."""

from __future__ import annotations

from collections.abc import Iterator, Mapping
from contextlib import contextmanager
from dataclasses import dataclass
from types import MappingProxyType
from typing import Literal, TextIO

from vsl.ast import Binary, Call, Expr, Function, Number, Prototype, Variable
from vsl.errors import ParseError
from vsl.lexer import Lexer
from vsl.tokens import Span, Token, TokenType

# Binary operator precedence, higher binds tighter. Characters missing from the
# table (or mapped to a non-positive value) are not binary operators.
BINOP_PRECEDENCE: Mapping[str, int] = MappingProxyType(
    {
        "<": 10,
        "+": 20,
        "-": 20,
        "*": 40,
    }
)

# Parentheses and call argument lists deeper than this are rejected, so deep
# input fails with a ParseError long before the interpreter's recursion limit.
MAX_NESTING = 100


@dataclass(frozen=True, slots=True)
class Parsed:
    """A top-level construct that parsed successfully."""

    kind: Literal["definition", "expression"]
    node: Function


@dataclass(frozen=True, slots=True)
class Failed:
    """A top-level construct abandoned because of a syntax error."""

    error: ParseError


ParseResult = Parsed | Failed


class Parser:
    """Pull-based parser over a Lexer with one token of lookahead.

    A parser owns its lexer; the pair forms one parsing session and must not
    be shared.
    """

    def __init__(
        self,
        lexer: Lexer,
        *,
        precedence: Mapping[str, int] = BINOP_PRECEDENCE,
        lenient_params: bool = False,
    ) -> None:
        self._lexer = lexer
        self._precedence = precedence
        self._lenient_params = lenient_params
        self._tok: Token | None = None
        self._depth = 0

    # ------------------------------------------------------------------
    # Navigation
    # ------------------------------------------------------------------

    @property
    def current(self) -> Token:
        """The token being looked at. The first access reads from the lexer."""
        if self._tok is None:
            self._tok = self._lexer.next_token()
        return self._tok

    def _advance(self) -> Token:
        self._tok = self._lexer.next_token()
        return self._tok

    def _error(self, message: str, tok: Token | None = None) -> ParseError:
        if tok is None:
            tok = self.current
        return ParseError(message, tok.span, self._lexer.text)

    @contextmanager
    def _nested(self) -> Iterator[None]:
        """Track one level of '(' nesting around a sub-expression."""
        if self._depth >= MAX_NESTING:
            raise self._error("expression nested too deeply")
        self._depth += 1
        try:
            yield
        finally:
            self._depth -= 1

    def _token_precedence(self) -> int:
        """Precedence of the pending binary operator, or -1 if it is not one."""
        tok = self.current
        if tok.type != TokenType.CHAR:
            return -1
        prec = self._precedence.get(tok.value, 0)
        if prec <= 0:
            return -1
        return prec

    # ------------------------------------------------------------------
    # Expressions
    # ------------------------------------------------------------------

    def parse_primary(self) -> Expr:
        """primary ::= identifierexpr | numberexpr | parenexpr"""
        tok = self.current
        if tok.type == TokenType.IDENTIFIER:
            return self._parse_identifier_expr()
        if tok.type == TokenType.NUMBER:
            self._advance()
            return Number(tok.number, tok.span)
        if tok.is_char("("):
            return self._parse_paren_expr()
        raise self._error("unknown token when expecting an expression")

    def _parse_identifier_expr(self) -> Variable | Call:
        """identifierexpr ::= identifier | identifier '(' (expression (',' expression)*)? ')'"""
        name_tok = self.current
        self._advance()

        if not self.current.is_char("("):
            return Variable(name_tok.value, name_tok.span)

        args: list[Expr] = []
        with self._nested():
            self._advance()  # eat (
            if not self.current.is_char(")"):
                while True:
                    args.append(self.parse_expression())
                    if self.current.is_char(")"):
                        break
                    if not self.current.is_char(","):
                        raise self._error("expected ')' or ',' in argument list")
                    self._advance()

        end = self.current.span.end
        self._advance()  # eat )
        return Call(name_tok.value, tuple(args), Span(name_tok.span.start, end))

    def _parse_paren_expr(self) -> Expr:
        """parenexpr ::= '(' expression ')'"""
        with self._nested():
            self._advance()  # eat (
            expr = self.parse_expression()
        if not self.current.is_char(")"):
            raise self._error("expected ')'")
        self._advance()
        return expr

    def parse_binary_rhs(self, min_prec: int, lhs: Expr) -> Expr:
        """binoprhs ::= (binop primary)*

        Folds operators binding at least as tightly as *min_prec* into *lhs*.
        """
        while True:
            prec = self._token_precedence()
            if prec < min_prec:
                return lhs

            op = self.current.value
            self._advance()
            rhs = self.parse_primary()

            # A tighter operator after rhs takes rhs as its left operand
            if prec < self._token_precedence():
                rhs = self.parse_binary_rhs(prec + 1, rhs)

            lhs = Binary(op, lhs, rhs, Span(lhs.span.start, rhs.span.end))

    def parse_expression(self) -> Expr:
        """expression ::= primary binoprhs"""
        lhs = self.parse_primary()
        return self.parse_binary_rhs(0, lhs)

    # ------------------------------------------------------------------
    # Declarations
    # ------------------------------------------------------------------

    def parse_prototype(self) -> Prototype:
        """prototype ::= identifier '(' (identifier (',' identifier)*)? ')'"""
        name_tok = self.current
        if name_tok.type != TokenType.IDENTIFIER:
            raise self._error("expected function name in prototype")
        self._advance()

        if not self.current.is_char("("):
            raise self._error("expected '(' in prototype")
        self._advance()

        if self._lenient_params:
            params = self._parse_params_lenient()
        else:
            params = self._parse_params()

        if not self.current.is_char(")"):
            raise self._error("expected ')' in prototype")
        end = self.current.span.end
        self._advance()
        return Prototype(name_tok.value, tuple(params), Span(name_tok.span.start, end))

    def _parse_params(self) -> list[str]:
        params: list[str] = []
        if self.current.type != TokenType.IDENTIFIER:
            return params
        params.append(self.current.value)
        self._advance()
        while self.current.is_char(","):
            self._advance()
            if self.current.type != TokenType.IDENTIFIER:
                raise self._error("expected parameter name after ','")
            params.append(self.current.value)
            self._advance()
        return params

    def _parse_params_lenient(self) -> list[str]:
        # Identifiers and commas in any order: "(a,,b)" and "(a b)" both give [a, b]
        params: list[str] = []
        while self.current.type == TokenType.IDENTIFIER or self.current.is_char(","):
            if self.current.type == TokenType.IDENTIFIER:
                params.append(self.current.value)
            self._advance()
        return params

    def parse_definition(self) -> Function:
        """definition ::= 'FUNC' prototype '{' expression '}'"""
        if self.current.type != TokenType.FUNC:
            raise self._error("expected 'FUNC'")
        start = self.current.span.start
        self._advance()

        proto = self.parse_prototype()

        if not self.current.is_char("{"):
            raise self._error("expected '{' in function body")
        self._advance()

        body = self.parse_expression()

        if not self.current.is_char("}"):
            raise self._error("expected '}' in function body")
        end = self.current.span.end
        self._advance()
        return Function(proto, body, Span(start, end))

    def parse_top_level_expr(self) -> Function:
        """toplevelexpr ::= expression, wrapped in an anonymous function"""
        body = self.parse_expression()
        return Function(Prototype("", (), body.span), body, body.span)

    def parse_single_expression(self) -> Expr:
        """Parse one expression that must span the rest of the input."""
        expr = self.parse_expression()
        if self.current.type != TokenType.EOF:
            raise self._error("unexpected token after expression")
        return expr

    # ------------------------------------------------------------------
    # Top level
    # ------------------------------------------------------------------

    def next_item(self) -> ParseResult | None:
        """Parse the next top-level construct, or return None at end of input.

        top ::= definition | expression | ';'

        A construct with a syntax error is discarded whole, and one token is
        skipped before the next call resumes.
        """
        while self.current.is_char(";"):
            self._advance()

        tok = self.current
        if tok.type == TokenType.EOF:
            return None

        try:
            if tok.type == TokenType.FUNC:
                return Parsed("definition", self.parse_definition())
            return Parsed("expression", self.parse_top_level_expr())
        except ParseError as exc:
            self._advance()
            return Failed(exc)

    def items(self) -> Iterator[ParseResult]:
        while True:
            item = self.next_item()
            if item is None:
                return
            yield item


def parse_items(source: str | TextIO, *, lenient_params: bool = False) -> list[ParseResult]:
    """Parse every top-level construct, recovering after syntax errors."""
    parser = Parser(Lexer(source), lenient_params=lenient_params)
    return list(parser.items())


def parse(source: str | TextIO, *, lenient_params: bool = False) -> list[Function]:
    """Convenience function: parse a whole program, raising the first ParseError."""
    parser = Parser(Lexer(source), lenient_params=lenient_params)
    functions: list[Function] = []
    for item in parser.items():
        if isinstance(item, Failed):
            raise item.error
        functions.append(item.node)
    return functions


def parse_expression(source: str | TextIO) -> Expr:
    """Convenience function: parse source consisting of a single expression."""
    return Parser(Lexer(source)).parse_single_expression()
