"""Shared test helpers for the pegcomb test suite."""

from __future__ import annotations

from typing import Any, Sequence, Tuple

from pegcomb import parse


def outcome(parser, input: Sequence) -> Tuple[str, Any, Sequence]:
    """Run parser with terminal continuations; return ('ok'|'fail', value, rest)."""
    return parse(
        parser,
        input,
        lambda value, rest: ("ok", value, rest),
        lambda value, rest: ("fail", value, rest),
    )


def is_suffix(rest: Sequence, input: Sequence) -> bool:
    """rest is a positional suffix of input."""
    return len(rest) <= len(input) and input[len(input) - len(rest):] == rest
