# pegcomb/runtime.py
"""Top-level entry point.

`parse` wires default continuations around a parser and drives the
trampoline. It is the only place where a failure turns into an exception.
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import Any, Optional, Sequence

from .errors import ParseFailure
from .trace import ParseContext, Tracer, activate
from .trampoline import Continuation, Parser, run


@dataclass(frozen=True)
class ParseSuccess:
    """Value of a successful parse and the input it did not consume."""
    result: Any
    unconsumed_input: Sequence
    position: int = 0  # offset of unconsumed_input in the original input

    @property
    def complete(self) -> bool:
        return len(self.unconsumed_input) == 0


def parse(parser: Parser,
          input: Sequence,
          succeed: Optional[Continuation] = None,
          fail: Optional[Continuation] = None,
          *,
          tracer: Optional[Tracer] = None) -> Any:
    """Run ``parser`` on ``input`` to completion.

    Parameters
    ----------
    parser : Parser
        Any parser built from this package (or following its protocol).
    input : Sequence
        str, bytes, or any sliceable sequence the terminals understand.
    succeed, fail : Continuation, optional
        Custom final continuations. Both or neither; when given, whatever they
        return is returned from `parse`.
    tracer : callable, optional
        Receives a `TraceEvent` on every combinator entry and exit of this parse.

    Returns
    -------
    ParseSuccess
        With the default continuations. Raises `ParseFailure` otherwise.

    Notes
    -----
    `ParseFailure.unconsumed_input` points at the deepest failure seen during
    the parse, while `rewound_input` is what the failure continuation got
    (the entry input of the failing parser).
    """
    if (succeed is None) != (fail is None):
        raise TypeError("parse(): succeed and fail must be given together")

    ctx = ParseContext(source=input, tracer=tracer)

    if succeed is None:
        def succeed(value, rest):
            return ParseSuccess(value, rest, ctx.position(rest))

        def fail(value, rest):
            deep = ctx.farthest_rest
            if deep is None or len(deep) > len(rest):
                raise ParseFailure(value, rest, source=input, expected=value, rewound_input=rest)
            raise ParseFailure(value, deep, source=input,
                               expected=ctx.farthest_value, rewound_input=rest,
                               alternatives=ctx.farthest_alternatives)

    with activate(ctx):
        return run(parser, input, succeed, fail)
