"""Tests for the tree and token dumps."""

from __future__ import annotations

import io

import vsl
from vsl.ast import Binary, Call, Number, Variable
from vsl.debug import dump_ast, dump_tokens, render_ast
from vsl.lexer import tokenize
from vsl.parser import parse


def depths(text: str, indent: str = "  ") -> list[tuple[int, str]]:
    """Split a dump into (depth, label) pairs."""
    result = []
    for line in text.splitlines():
        label = line.lstrip(indent[0]) if indent else line
        result.append(((len(line) - len(label)) // len(indent), label))
    return result


class TestExpressionDump:
    def test_binary(self):
        text = render_ast(Binary("+", Number(1.0), Number(2.0)))
        assert text == "+\n  1\n  2\n"
        assert depths(text) == [(0, "+"), (1, "1"), (1, "2")]

    def test_unbalanced_tree_uses_structural_depth(self, parse_expr):
        text = render_ast(parse_expr("1+2*3-4"))
        assert depths(text) == [
            (0, "-"),
            (1, "+"),
            (2, "1"),
            (2, "*"),
            (3, "2"),
            (3, "3"),
            (1, "4"),
        ]

    def test_left_deep_tree(self, parse_expr):
        text = render_ast(parse_expr("a-b-c-d"))
        assert depths(text) == [
            (0, "-"),
            (1, "-"),
            (2, "-"),
            (3, "a"),
            (3, "b"),
            (2, "c"),
            (1, "d"),
        ]

    def test_leaves(self):
        assert render_ast(Variable("x")) == "x\n"
        assert render_ast(Number(3.14)) == "3.14\n"
        assert render_ast(Number(2.0)) == "2\n"

    def test_call(self):
        text = render_ast(Call("f", (Number(1.0), Variable("x"))))
        assert text == "f()\n  1\n  x\n"

    def test_call_inside_binary(self, parse_expr):
        assert render_ast(parse_expr("g() * 2")) == "*\n  g()\n  2\n"

    def test_custom_indent(self):
        assert render_ast(Binary("<", Variable("a"), Variable("b")), "..") == "<\n..a\n..b\n"


class TestFunctionDump:
    def test_definition(self):
        (func,) = parse("FUNC add(a,b){a+b}")
        assert render_ast(func) == (
            "FUNC\n"
            "  Prototype\n"
            "    add\n"
            "    a\n"
            "    b\n"
            "  Body\n"
            "    +\n"
            "      a\n"
            "      b\n"
        )

    def test_anonymous_function_dumps_body_only(self):
        (func,) = parse("1+2")
        assert render_ast(func) == "+\n  1\n  2\n"

    def test_dump_to_file(self):
        (func,) = parse("FUNC one(){1}")
        buf = io.StringIO()
        dump_ast(func, file=buf, indent="\t")
        assert buf.getvalue() == "FUNC\n\tPrototype\n\t\tone\n\tBody\n\t\t1\n"


class TestTokenDump:
    def test_token_lines(self):
        buf = io.StringIO()
        dump_tokens(tokenize("FUNC x 1.5 +"), file=buf)
        assert buf.getvalue() == (
            "FUNC 'FUNC'\n"
            "IDENTIFIER 'x'\n"
            "NUMBER 1.5\n"
            "CHAR '+'\n"
            "EOF\n"
        )


class TestPackageDump:
    def test_dump_all_constructs(self):
        assert vsl.dump("1+2; 3") == "+\n  1\n  2\n3\n"
