# pegcomb/trampoline.py
"""Continuation protocol and trampoline driver.

Every parser has the shape ``parser(input, succeed, fail) -> Step``:

- ``succeed(value, rest) -> Step`` is called when the parser matched;
  ``rest`` is what remains of the input.
- ``fail(value, rest) -> Step`` is called when it did not; ``rest`` is always
  the input the parser was given (failures never consume input).

A Step is either a final answer (anything that is not a `Bounce`) or a
`Bounce`, a deferred call the driver has to run next. Combinators never call
a sub-parser or a continuation directly; they return ``bounce(fn, *args)``
instead, so the Python stack stays flat no matter how deeply the grammar
recurses. The pending work lives in the closures of the continuation chain.
"""

from __future__ import annotations
from typing import Any, Callable, Sequence

Step = Any
Continuation = Callable[[Any, Sequence], Step]
Parser = Callable[[Sequence, Continuation, Continuation], Step]


class Bounce:
    """A deferred call ``fn(*args)`` waiting to be run by `trampoline`."""
    __slots__ = ("fn", "args")

    def __init__(self, fn: Callable[..., Step], args: tuple):
        self.fn = fn
        self.args = args

    def __call__(self) -> Step:
        return self.fn(*self.args)

    def __repr__(self) -> str:
        name = getattr(self.fn, "__qualname__", repr(self.fn))
        return f"Bounce({name})"


def bounce(fn: Callable[..., Step], *args: Any) -> Bounce:
    """Use instead of calling ``fn`` directly; the trampoline makes the call."""
    return Bounce(fn, args)


def trampoline(step: Step) -> Any:
    """Run deferred steps until a final answer comes out.

    Plain loop, so nesting depth costs heap (the closures kept alive by the
    continuation chain) and never native stack.
    """
    while isinstance(step, Bounce):
        step = step.fn(*step.args)
    return step


def run(parser: Parser, input: Sequence, succeed: Continuation, fail: Continuation) -> Any:
    """Invoke ``parser`` on ``input`` and drive it to a final answer."""
    return trampoline(bounce(parser, input, succeed, fail))
