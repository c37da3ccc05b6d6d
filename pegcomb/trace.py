# pegcomb/trace.py
"""Per-parse context: tracing hook and farthest-failure bookkeeping.

Parsers themselves are stateless. Everything that belongs to one run of
`pegcomb.parse` (the original input, the optional tracer, the deepest failure
seen so far) lives in a `ParseContext` held by a ContextVar, so parses running
in other threads or nested inside a transform never see each other's state.
"""

from __future__ import annotations
import sys
from contextlib import contextmanager
from contextvars import ContextVar
from dataclasses import dataclass, field
from typing import Any, Callable, Iterator, List, Optional, Sequence, TextIO, Tuple

from .trampoline import Parser, Step, bounce


@dataclass(frozen=True)
class TraceEvent:
    kind: str        # 'enter' | 'succeed' | 'fail'
    name: str        # combinator or rule label
    depth: int       # nesting depth at which `name` was entered (0-based)
    position: int    # offset into the original input
    value: Any = None

Tracer = Callable[[TraceEvent], None]


@dataclass
class ParseContext:
    source: Sequence
    tracer: Optional[Tracer] = None
    depth: int = 0
    farthest_value: Any = None
    farthest_rest: Optional[Sequence] = None
    farthest_alternatives: List[Any] = field(default_factory=list)

    def position(self, rest: Sequence) -> int:
        # `rest` is always a suffix of `source`
        return len(self.source) - len(rest)

    def note_failure(self, value: Any, rest: Sequence) -> None:
        """Remember a failure made at the farthest position reached so far.

        `farthest_value` is the first payload recorded at the farthest position;
        `farthest_alternatives` holds every distinct payload recorded there, in
        the order the grammar tried them.
        """
        if self.farthest_rest is None or len(rest) < len(self.farthest_rest):
            self.farthest_value = value
            self.farthest_rest = rest
            self.farthest_alternatives = [value]
        elif len(rest) == len(self.farthest_rest) and value not in self.farthest_alternatives:
            self.farthest_alternatives.append(value)

    def save_failure(self) -> Tuple[Any, Optional[Sequence], List[Any]]:
        return self.farthest_value, self.farthest_rest, list(self.farthest_alternatives)

    def restore_failure(self, saved: Tuple[Any, Optional[Sequence], List[Any]]) -> None:
        self.farthest_value, self.farthest_rest, self.farthest_alternatives = saved

    def _emit(self, kind: str, name: str, depth: int, rest: Sequence, value: Any) -> None:
        self.tracer(TraceEvent(kind, name, depth, self.position(rest), value))  # type: ignore[misc]

    def enter(self, name: str, parser: Parser, input: Sequence, succeed, fail) -> Step:
        """Run ``parser`` with continuations that report its exit to the tracer."""
        depth = self.depth
        self._emit("enter", name, depth, input, None)
        self.depth = depth + 1

        def on_success(value, rest):
            self.depth = depth
            self._emit("succeed", name, depth, rest, value)
            return bounce(succeed, value, rest)

        def on_failure(value, rest):
            self.depth = depth
            self._emit("fail", name, depth, rest, value)
            return bounce(fail, value, rest)

        return bounce(parser, input, on_success, on_failure)


_current: ContextVar[Optional[ParseContext]] = ContextVar("pegcomb_parse_context", default=None)


def current_context() -> Optional[ParseContext]:
    return _current.get()


@contextmanager
def activate(ctx: ParseContext) -> Iterator[ParseContext]:
    token = _current.set(ctx)
    try:
        yield ctx
    finally:
        _current.reset(token)


def record_failure(value: Any, rest: Sequence) -> None:
    """Called by terminals and predicates at the point where they fail."""
    ctx = _current.get()
    if ctx is not None:
        ctx.note_failure(value, rest)


def traced(name: str, parser: Parser) -> Parser:
    """Wrap ``parser`` so an installed tracer sees its entry and exit.

    Without a tracer the wrapper only costs one context lookup.
    """
    def run(input, succeed, fail):
        ctx = _current.get()
        if ctx is None or ctx.tracer is None:
            return parser(input, succeed, fail)
        return ctx.enter(name, parser, input, succeed, fail)

    run.label = name  # type: ignore[attr-defined]
    return run


# ------------------------------
# Tracers
# ------------------------------

def _short(value: Any, limit: int = 40) -> str:
    text = repr(value)
    if len(text) > limit:
        text = text[:limit - 3] + "..."
    return text


class StderrTracer:
    """Print one indented ``[TRACE]`` line per event (stderr by default)."""
    def __init__(self, stream: Optional[TextIO] = None, indent: str = "  "):
        self.stream = stream
        self.indent = indent

    def __call__(self, ev: TraceEvent) -> None:
        pad = self.indent * ev.depth
        if ev.kind == "enter":
            line = f"[TRACE] {pad}> {ev.name} @{ev.position}"
        elif ev.kind == "succeed":
            line = f"[TRACE] {pad}< {ev.name} ok @{ev.position} {_short(ev.value)}"
        else:
            line = f"[TRACE] {pad}< {ev.name} FAIL @{ev.position} {_short(ev.value)}"
        print(line, file=self.stream or sys.stderr)


@dataclass
class RecordingTracer:
    """Collect events in memory."""
    events: List[TraceEvent] = field(default_factory=list)

    def __call__(self, ev: TraceEvent) -> None:
        self.events.append(ev)

    def names(self, kind: str = "enter") -> List[str]:
        return [e.name for e in self.events if e.kind == kind]
