# pegcomb/terminals.py
"""Terminal parsers: the only parsers that look at raw input.

They stop the recursive descent. `token` matches a regular expression
anchored at the start of the slice; the others compare elements directly
and therefore work on any sliceable sequence (str, bytes, tuples of tokens).
Writing another terminal only requires following the same contract: call
``succeed(value, rest)`` or ``fail(expected, input)`` through `bounce`.
"""

from __future__ import annotations
import regex as re
from typing import Any, Callable, Union

from .errors import GrammarError, describe
from .trace import record_failure, traced
from .trampoline import Parser, bounce

_FLAG_MAP = {
    'i': re.IGNORECASE,
    'm': re.MULTILINE,
    's': re.DOTALL,
    'x': re.VERBOSE,
    'A': re.ASCII,
}


def _compile(pattern: Union[str, bytes, Any], flags: str):
    if hasattr(pattern, "match"):
        if flags:
            raise GrammarError(f"flags {flags!r} given for an already compiled pattern {describe(pattern)}")
        return pattern
    f = 0
    for ch in flags:
        if ch not in _FLAG_MAP:
            raise GrammarError(f"unknown regex flag {ch!r} (expected one of {''.join(_FLAG_MAP)})")
        f |= _FLAG_MAP[ch]
    return re.compile(pattern, f)


def token(pattern, flags: str = "") -> Parser:
    """Parser matching ``pattern`` at the start of the input.

    The match need not cover the whole input. On success the matched text is
    the value; on failure the compiled pattern is the payload, so error
    messages can say what was expected.
    """
    rx = _compile(pattern, flags)

    def parse_token(input, succeed, fail):
        m = rx.match(input)
        if m is None:
            record_failure(rx, input)
            return bounce(fail, rx, input)
        return bounce(succeed, m.group(0), input[m.end():])

    return traced(f"token({describe(rx)})", parse_token)


def literal(text) -> Parser:
    """Input must start with ``text`` (same sequence type as the input)."""
    n = len(text)

    def parse_literal(input, succeed, fail):
        if input[:n] == text:
            return bounce(succeed, input[:n], input[n:])
        record_failure(text, input)
        return bounce(fail, text, input)

    return traced(f"literal({text!r})", parse_literal)


def satisfy(predicate: Callable[[Any], bool], expected: Any) -> Parser:
    """One element for which ``predicate`` holds; ``expected`` is the failure payload."""
    def parse_satisfy(input, succeed, fail):
        if len(input) and predicate(input[0]):
            return bounce(succeed, input[0], input[1:])
        record_failure(expected, input)
        return bounce(fail, expected, input)

    return traced(f"satisfy({expected!r})", parse_satisfy)


def item(value: Any) -> Parser:
    return satisfy(lambda x: x == value, value)


def any_item() -> Parser:
    """Any single element; fails only at end of input."""
    return satisfy(lambda _x: True, "<any>")


def end_of_input() -> Parser:
    def parse_eoi(input, succeed, fail):
        if len(input) == 0:
            return bounce(succeed, None, input)
        record_failure("<end of input>", input)
        return bounce(fail, "<end of input>", input)

    return traced("end_of_input", parse_eoi)


def succeed_with(value: Any = None) -> Parser:
    """Always succeeds with ``value``, consuming nothing."""
    def parse_succeed(input, succeed, fail):
        return bounce(succeed, value, input)

    return traced("succeed_with", parse_succeed)


def fail_with(value: Any) -> Parser:
    """Always fails with ``value``."""
    def parse_fail(input, succeed, fail):
        record_failure(value, input)
        return bounce(fail, value, input)

    return traced("fail_with", parse_fail)
