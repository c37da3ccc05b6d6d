# pegcomb/combinators.py
"""Structural combinators.

None of these look at the input; they only decide which parser runs next and
which continuation gets called. Backtracking is nothing more than a failure
continuation that hands the *entry* input back to the caller, which is why a
failure never reports partial consumption.
"""

from __future__ import annotations
from typing import Any, Callable, List

from .errors import GrammarError
from .trace import current_context, record_failure, traced
from .trampoline import Parser, bounce


def _at_least_two(kind: str, parsers) -> tuple:
    if len(parsers) < 2:
        raise GrammarError(f"{kind} needs at least two parsers, got {len(parsers)}")
    return tuple(parsers)


# ---- sequence ----

def sequence(*parsers: Parser) -> Parser:
    """All parsers in order; the value is a flat list of their values.

    On the first failure the whole sequence fails with that parser's payload
    and the input the sequence was started on.
    """
    ps = _at_least_two("sequence", parsers)
    n = len(ps)

    def parse_sequence(input, succeed, fail):
        results: List[Any] = []

        def on_failure(value, _rest):
            return bounce(fail, value, input)

        def on_success(value, rest):
            results.append(value)
            if len(results) == n:
                return bounce(succeed, results, rest)
            return bounce(ps[len(results)], rest, on_success, on_failure)

        return bounce(ps[0], input, on_success, on_failure)

    return traced("sequence", parse_sequence)


# ---- ordered choice ----

def choice(*alternatives: Parser) -> Parser:
    """First alternative that succeeds wins; each is tried on the same input.

    If all fail, the payload is the last alternative's.
    """
    alts = _at_least_two("choice", alternatives)
    last = len(alts) - 1

    def parse_choice(input, succeed, fail):
        def attempt(i):
            def on_failure(value, _rest):
                if i == last:
                    return bounce(fail, value, input)
                return attempt(i + 1)
            return bounce(alts[i], input, succeed, on_failure)

        return attempt(0)

    return traced("choice", parse_choice)


# ---- repetition ----

def _repeat(p: Parser, at_least_one: bool) -> Parser:
    def parse_repeat(input, succeed, fail):
        results: List[Any] = []

        def attempt(rest):
            def stop(_value, _rest):
                return bounce(succeed, results, rest)
            return bounce(p, rest, more, stop)

        def more(value, rest):
            results.append(value)
            return attempt(rest)

        if at_least_one:
            return bounce(p, input, more, lambda value, _rest: bounce(fail, value, input))
        return attempt(input)

    return parse_repeat


def star(p: Parser) -> Parser:
    """Zero or more ``p``; never fails.

    A ``p`` that succeeds without consuming input loops forever.
    """
    return traced("star", _repeat(p, at_least_one=False))


def plus(p: Parser) -> Parser:
    """One or more ``p``; fails only when the first attempt fails."""
    return traced("plus", _repeat(p, at_least_one=True))


def optional(p: Parser, absent: Any = None) -> Parser:
    """``p`` or nothing; on failure succeeds with ``absent`` and the same input."""
    def parse_optional(input, succeed, fail):
        return bounce(p, input, succeed, lambda _value, _rest: bounce(succeed, absent, input))

    return traced("optional", parse_optional)


# ---- lookahead ----

def and_predicate(p: Parser) -> Parser:
    """Succeeds or fails like ``p`` but never consumes input."""
    def parse_and(input, succeed, fail):
        return bounce(
            p, input,
            lambda value, _rest: bounce(succeed, value, input),
            lambda value, _rest: bounce(fail, value, input),
        )

    return traced("and_predicate", parse_and)


def not_predicate(p: Parser) -> Parser:
    """Inverts ``p`` without consuming input.

    If ``p`` matches, fails with what it matched; if ``p`` fails, succeeds with
    ``p``'s failure payload.
    """
    def parse_not(input, succeed, fail):
        ctx = current_context()
        # failures inside p are what we want; keep them out of the diagnostics
        saved = ctx.save_failure() if ctx is not None else None

        def on_match(value, _rest):
            record_failure(value, input)
            return bounce(fail, value, input)

        def on_miss(value, _rest):
            if saved is not None:
                ctx.restore_failure(saved)
            return bounce(succeed, value, input)

        return bounce(p, input, on_match, on_miss)

    return traced("not_predicate", parse_not)


# ---- result transform ----

def transform(p: Parser, f: Callable[[Any], Any]) -> Parser:
    """Apply ``f`` to the value of a successful ``p``. Failures pass through."""
    def parse_transform(input, succeed, fail):
        return bounce(p, input, lambda value, rest: bounce(succeed, f(value), rest), fail)

    return traced(f"transform({getattr(f, '__name__', 'f')})", parse_transform)
