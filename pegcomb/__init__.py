# pegcomb/__init__.py
"""PEG parser combinators on a trampoline.

This package provides:
- terminal parsers (`token` and friends) and structural combinators
  (`sequence`, `choice`, `star`, `plus`, `optional`, lookahead predicates,
  `transform`)
- a continuation protocol driven by a trampoline, so recursive grammars of
  any depth run in constant Python stack
- lazily resolved named rules (`Rule`, `Grammar`) for mutual recursion
- `parse`, the top-level entry point

No memoization and no left-recursion handling (plain PEG restrictions).

    >>> from pegcomb import parse, sequence, token, transform
    >>> num = transform(token(r"\\d+"), int)
    >>> parse(sequence(num, token(r"\\s*"), num), "3 44rest").result
    [3, ' ', 44]
"""

from .trampoline import Bounce, bounce, trampoline, run
from .errors import ParseFailure, GrammarError
from .terminals import (
    token, literal, satisfy, item, any_item, end_of_input, succeed_with, fail_with,
)
from .combinators import (
    sequence, choice, star, plus, optional, and_predicate, not_predicate, transform,
)
from .grammar import Rule, Grammar, lazy
from .runtime import parse, ParseSuccess
from .trace import TraceEvent, StderrTracer, RecordingTracer, traced

__all__ = [
    "Bounce", "bounce", "trampoline", "run",
    "ParseFailure", "GrammarError",
    "token", "literal", "satisfy", "item", "any_item", "end_of_input",
    "succeed_with", "fail_with",
    "sequence", "choice", "star", "plus", "optional",
    "and_predicate", "not_predicate", "transform",
    "Rule", "Grammar", "lazy",
    "parse", "ParseSuccess",
    "TraceEvent", "StderrTracer", "RecordingTracer", "traced",
]
