"""Test function definitions, prototypes, and top-level parsing."""

from __future__ import annotations

import pytest

from vsl.ast import Binary, Call, Function, Number, Prototype, Variable
from vsl.errors import ParseError
from vsl.parser import parse


def parse_one(source: str, **kwargs) -> Function:
    nodes = parse(source, **kwargs)
    assert len(nodes) == 1, f"Expected one construct, got {len(nodes)}"
    return nodes[0]


class TestDefinitions:
    def test_add(self):
        func = parse_one("FUNC add(a,b){a+b}")
        assert func == Function(
            Prototype("add", ("a", "b")),
            Binary("+", Variable("a"), Variable("b")),
        )
        assert not func.is_anonymous

    def test_no_params(self):
        func = parse_one("FUNC one() { 1 }")
        assert func.proto == Prototype("one", ())
        assert func.body == Number(1.0)

    def test_body_with_call(self):
        func = parse_one("FUNC f(x) { g(x, 1) * 2 }")
        assert func.body == Binary(
            "*", Call("g", (Variable("x"), Number(1.0))), Number(2.0)
        )

    def test_duplicate_params_accepted(self):
        assert parse_one("FUNC f(a,a){a}").proto.params == ("a", "a")

    def test_multiline(self):
        func = parse_one("FUNC f(a,\n       b)\n{\n  a < b  / compare\n}\n")
        assert func.proto.params == ("a", "b")
        assert func.body == Binary("<", Variable("a"), Variable("b"))

    def test_span(self):
        func = parse_one("FUNC f(){1}")
        assert func.span.start.column == 1
        assert func.span.end.column == 12


class TestStrictParams:
    def test_double_comma(self):
        with pytest.raises(ParseError, match="expected parameter name after ','"):
            parse("FUNC f(a,,b){a}")

    def test_trailing_comma(self):
        with pytest.raises(ParseError, match="expected parameter name after ','"):
            parse("FUNC f(a,){a}")

    def test_missing_comma(self):
        with pytest.raises(ParseError, match="expected '\\)' in prototype"):
            parse("FUNC f(a b){a}")

    def test_leading_comma(self):
        with pytest.raises(ParseError, match="expected '\\)' in prototype"):
            parse("FUNC f(,a){a}")


class TestLenientParams:
    def test_double_comma(self):
        func = parse_one("FUNC f(a,,b){a}", lenient_params=True)
        assert func.proto.params == ("a", "b")

    def test_missing_comma(self):
        func = parse_one("FUNC f(a b){a}", lenient_params=True)
        assert func.proto.params == ("a", "b")

    def test_stray_commas(self):
        func = parse_one("FUNC f(,a,){a}", lenient_params=True)
        assert func.proto.params == ("a",)

    def test_still_needs_close_paren(self):
        with pytest.raises(ParseError, match="expected '\\)' in prototype"):
            parse("FUNC f(a 1){a}", lenient_params=True)


class TestDefinitionErrors:
    def test_missing_name(self):
        with pytest.raises(ParseError, match="expected function name in prototype"):
            parse("FUNC (a){a}")

    def test_keyword_as_name(self):
        with pytest.raises(ParseError, match="expected function name in prototype"):
            parse("FUNC IF(a){a}")

    def test_missing_open_paren(self):
        with pytest.raises(ParseError, match="expected '\\(' in prototype"):
            parse("FUNC f a){a}")

    def test_missing_open_brace(self):
        with pytest.raises(ParseError, match="expected '\\{' in function body"):
            parse("FUNC f(a) a")

    def test_missing_close_brace(self):
        with pytest.raises(ParseError, match="expected '\\}' in function body"):
            parse("FUNC f(a){a")

    def test_two_expressions_in_body(self):
        with pytest.raises(ParseError, match="expected '\\}' in function body"):
            parse("FUNC f(a){a b}")

    def test_empty_body(self):
        with pytest.raises(ParseError, match="unknown token when expecting an expression"):
            parse("FUNC f(a){}")


class TestTopLevel:
    def test_expression_is_wrapped(self):
        func = parse_one("1+2")
        assert func.is_anonymous
        assert func.proto == Prototype("", ())
        assert func.body == Binary("+", Number(1.0), Number(2.0))

    def test_sequence(self):
        nodes = parse("FUNC f(x){x}; f(2); 3")
        assert len(nodes) == 3
        assert nodes[0].proto.name == "f"
        assert nodes[1].body == Call("f", (Number(2.0),))
        assert nodes[2].body == Number(3.0)

    def test_semicolons_only(self):
        assert parse(";;;") == []

    def test_empty(self):
        assert parse("") == []

    def test_adjacent_expressions_without_separator(self):
        nodes = parse("1 2")
        assert [node.body for node in nodes] == [Number(1.0), Number(2.0)]

    def test_reserved_keyword_has_no_grammar(self):
        with pytest.raises(ParseError, match="unknown token when expecting an expression"):
            parse("VAR x")
