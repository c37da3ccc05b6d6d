"""Tests for the bundled example grammars."""

from __future__ import annotations

import sys

import pytest

from pegcomb import ParseFailure, parse
from pegcomb.examples import (
    ARITH_LEXER, NUMBER, arithmetic, evaluate, evaluate_tokens, nested_parens,
    number_triplet,
)


class TestArithmetic:
    @pytest.mark.parametrize("text,value", [
        ("1 + 2 * (3 - 1)", 5),
        ("2 - 3 - 4", -5),
        ("-3 * -2", 6),
        ("10 / 4", 2.5),
        ("1.5 * 2", 3.0),
        ("((7))", 7),
        ("  8 ", 8),
    ])
    def test_text_and_tokens_agree(self, text, value):
        assert evaluate(text) == value
        assert evaluate_tokens(text) == value

    def test_incomplete_expression(self):
        with pytest.raises(ParseFailure) as ei:
            evaluate("1 +")
        assert ei.value.position == 3

    def test_missing_operand_lists_every_start(self):
        with pytest.raises(ParseFailure) as ei:
            evaluate("1 + x")
        err = ei.value
        assert err.position == 4
        # unary minus, number and "(" can all start an operand
        assert len(err.alternatives) == 3
        assert "-" in err.alternatives[0].pattern
        assert err.alternatives[1].pattern == NUMBER
        assert err.alternatives[2].pattern == r"\("

    def test_incomplete_expression_over_tokens(self):
        with pytest.raises(ParseFailure) as ei:
            evaluate_tokens("1 +")
        assert ei.value.position == 2

    def test_trailing_garbage(self):
        with pytest.raises(ParseFailure):
            evaluate("1 2")

    def test_division_by_zero_propagates(self):
        with pytest.raises(ZeroDivisionError):
            evaluate("1 / 0")

    def test_rules(self):
        g = arithmetic()
        assert g.start == "calc"
        assert sorted(g.names) == ["calc", "expr", "factor", "term", "unary"]
        assert g.parse("2 * 3 rest", start="term").unconsumed_input == " rest"

    def test_deep_parentheses(self):
        depth = sys.getrecursionlimit() * 2
        assert evaluate("(" * depth + "1" + ")" * depth) == 1

    def test_lexer_tokens(self):
        assert [t.type for t in ARITH_LEXER.tokenize("1+(2)")] == ["NUMBER", "+", "(", "NUMBER", ")"]


class TestNestedParens:
    def test_depth(self):
        g = nested_parens()
        assert g.parse("((()))").result == 3
        assert g.parse("()()").unconsumed_input == "()"

    def test_unbalanced(self):
        with pytest.raises(ParseFailure) as ei:
            nested_parens().parse("(()")
        assert ei.value.position == 3
        assert ei.value.expected == ")"

    def test_deeper_than_recursion_limit(self):
        depth = sys.getrecursionlimit() * 3
        res = nested_parens().parse("(" * depth + ")" * depth)
        assert res.result == depth
        assert res.complete


class TestNumberTriplet:
    def test_value(self):
        assert parse(number_triplet(), "1 2 3").result == [1, " ", 2, " ", 3]

    def test_digits_are_taken_greedily(self):
        # ws may match nothing, but the first number already took every digit
        with pytest.raises(ParseFailure):
            parse(number_triplet(), "123")
