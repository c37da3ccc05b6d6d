"""Tests for the parse entry point and its error reporting."""

from __future__ import annotations

import sys
import threading

import pytest

from pegcomb import (
    Grammar, ParseFailure, ParseSuccess, choice, literal, optional, parse, plus,
    sequence, star, token, transform,
)
from pegcomb.examples import number_triplet


class TestParse:
    def test_number_triplet(self):
        res = parse(number_triplet(), "3 44 2theremaininginput")
        assert isinstance(res, ParseSuccess)
        assert res.result == [3, " ", 44, " ", 2]
        assert res.unconsumed_input == "theremaininginput"
        assert res.position == len("3 44 2")
        assert not res.complete

    def test_number_triplet_missing_third_number(self):
        with pytest.raises(ParseFailure) as ei:
            parse(number_triplet(), "3 44")
        err = ei.value
        assert err.result.pattern == r"\d+"
        assert err.expected.pattern == r"\d+"
        # after "3", " ", "44" and the (empty) second whitespace run
        assert err.unconsumed_input == ""
        assert err.position == 4
        # the sequence itself rewinds to where it started
        assert err.rewound_input == "3 44"

    def test_missing_number_after_whitespace(self):
        with pytest.raises(ParseFailure) as ei:
            parse(number_triplet(), "3 44 x")
        assert ei.value.unconsumed_input == "x"
        assert (ei.value.line, ei.value.col) == (1, 6)

    def test_star_on_non_digits(self, digits):
        res = parse(star(digits), "abc")
        assert res.result == []
        assert res.unconsumed_input == "abc"

    def test_plus_on_non_digits(self, digits):
        with pytest.raises(ParseFailure) as ei:
            parse(plus(digits), "abc")
        assert ei.value.unconsumed_input == "abc"
        assert ei.value.rewound_input == "abc"

    def test_failure_is_a_syntax_error(self, digits):
        with pytest.raises(SyntaxError):
            parse(digits, "x")

    def test_message_has_location_and_caret(self):
        p = sequence(token(r"[a-z]+\n"), token(r"\d+"))
        with pytest.raises(ParseFailure) as ei:
            parse(p, "abc\n  9")
        err = ei.value
        assert (err.line, err.col) == (2, 1)
        msg = str(err)
        assert "2:1" in msg
        assert r"/\d+/" in msg
        assert msg.endswith("  9\n^")

    def test_token_stream_failure_reports_index(self):
        p = sequence(literal(("a",)), literal(("b",)))
        with pytest.raises(ParseFailure) as ei:
            parse(p, ("a", "c"))
        assert ei.value.position == 1
        assert ei.value.line is None
        assert "index 1" in str(ei.value)

    def test_custom_continuations(self, number):
        assert parse(number, "12x", lambda v, r: v * 2, lambda v, r: "failed") == 24
        assert parse(number, "x", lambda v, r: v, lambda v, r: ("failed", r)) == ("failed", "x")

    def test_custom_continuations_must_come_in_pairs(self, number):
        with pytest.raises(TypeError):
            parse(number, "1", lambda v, r: v)

    def test_transform_exceptions_propagate(self, digits):
        def boom(_v):
            raise ValueError("bad value")
        with pytest.raises(ValueError):
            parse(transform(digits, boom), "1")

    def test_choice_reports_last_alternative(self):
        with pytest.raises(ParseFailure) as ei:
            parse(choice(literal("a"), literal("b")), "c")
        assert ei.value.result == "b"

    def test_lists_every_alternative_at_the_failure_point(self):
        with pytest.raises(ParseFailure) as ei:
            parse(choice(literal("a"), literal("b")), "c")
        err = ei.value
        assert err.expected == "a"
        assert err.alternatives == ["a", "b"]
        assert "expected 'a' or 'b'" in str(err)

    def test_alternatives_are_deduplicated(self):
        xy = sequence(literal("x"), literal("y"))
        p = choice(xy, sequence(literal("x"), literal("y"), literal("z")))
        with pytest.raises(ParseFailure) as ei:
            parse(p, "xq")
        assert ei.value.position == 1
        assert ei.value.alternatives == ["y"]

    def test_shallower_failures_are_not_alternatives(self):
        p = choice(sequence(literal("a"), literal("b")), literal("c"))
        with pytest.raises(ParseFailure) as ei:
            parse(p, "ax")
        assert ei.value.position == 1
        assert ei.value.alternatives == ["b"]


class TestRoundTrip:
    def test_sequel_on_unconsumed_input(self, number, ws):
        head = sequence(number, ws, number)
        tail = sequence(ws, number, ws, number)
        text = "1 2 3 4 rest"
        first = parse(head, text)
        second = parse(tail, first.unconsumed_input)
        combined = parse(sequence(number, ws, number, ws, number, ws, number), text)
        assert first.result + second.result == combined.result
        assert second.unconsumed_input == combined.unconsumed_input == " rest"


class TestStackAndThreads:
    def test_deep_right_recursion(self):
        g = Grammar()
        # list <- "a" list?
        g.list = transform(sequence(literal("a"), optional(g.list, 0)), lambda v: v[1] + 1)
        depth = sys.getrecursionlimit() * 5
        assert parse(g.list, "a" * depth).result == depth

    def test_same_parser_from_many_threads(self, number, ws):
        p = star(transform(sequence(number, ws), lambda v: v[0]))
        results = {}

        def work(i):
            text = " ".join(str(i + k) for k in range(200)) + " end"
            results[i] = parse(p, text).result

        threads = [threading.Thread(target=work, args=(i,)) for i in range(8)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()
        for i in range(8):
            assert results[i] == list(range(i, i + 200))
