# pegcomb/grammar.py
"""Named rules for mutually recursive grammars.

A `Rule` is a parser that stands in for another parser which may not exist
yet when the rule is referenced. It is resolved on first invocation and the
result is cached, so definitions like

    g = Grammar()
    g.expr = choice(sequence(g.term, token(r"\\+"), g.expr), g.term)
    g.term = ...

never expand eagerly.
"""

from __future__ import annotations
import threading
from typing import Callable, Dict, List, Optional, Sequence

from .errors import GrammarError
from .runtime import parse
from .trace import traced
from .trampoline import Parser


class Rule:
    """Lazily resolved reference to a parser, labelled with a rule name."""

    def __init__(self, name: str, thunk: Optional[Callable[[], Parser]] = None):
        self.name = name
        self._thunk = thunk
        self._parser: Optional[Parser] = None
        self._lock = threading.RLock()

    @property
    def defined(self) -> bool:
        return self._parser is not None or self._thunk is not None

    @property
    def resolved(self) -> bool:
        return self._parser is not None

    def define(self, parser: Parser) -> "Rule":
        with self._lock:
            if self.defined:
                raise GrammarError(f"PEG: rule '{self.name}' is already defined")
            if not callable(parser):
                raise GrammarError(f"PEG: rule '{self.name}' must be bound to a parser, got {parser!r}")
            self._parser = traced(self.name, parser)
        return self

    def resolve(self) -> Parser:
        p = self._parser
        if p is not None:
            return p
        with self._lock:
            if self._parser is None:
                if self._thunk is None:
                    raise GrammarError(f"PEG: undefined rule '{self.name}'")
                target = self._thunk()
                if not callable(target):
                    raise GrammarError(f"PEG: rule '{self.name}' resolved to a non-parser {target!r}")
                self._parser = traced(self.name, target)
                self._thunk = None
            return self._parser

    def __call__(self, input, succeed, fail):
        return self.resolve()(input, succeed, fail)

    def __repr__(self) -> str:
        state = "resolved" if self.resolved else ("pending" if self.defined else "undefined")
        return f"Rule({self.name!r}, {state})"


def lazy(thunk: Callable[[], Parser], name: Optional[str] = None) -> Rule:
    """Parser built by ``thunk()`` the first time it runs."""
    return Rule(name or getattr(thunk, "__name__", "<lazy>"), thunk)


class Grammar:
    """
    Grammar
    =======
    A namespace of `Rule`s. Referencing a name creates a forward reference;
    defining it binds the reference. The first defined rule is the start rule
    unless one is given.

    - ``g.rule(name)`` / ``g[name]`` / ``g.name``: the rule (created on demand)
    - names such as ``start`` or ``parse`` are only reachable as ``g[name]``
    - ``g.define(name, parser)`` / ``g[name] = p`` / ``g.name = p``: bind it
    - ``g.check()``: every referenced rule is defined
    - ``g.parse(input, start=None)``: parse from the start rule
    """

    def __init__(self, start: Optional[str] = None):
        self._rules: Dict[str, Rule] = {}
        self._start = start

    # ---- rule table ----
    def rule(self, name: str) -> Rule:
        r = self._rules.get(name)
        if r is None:
            r = self._rules[name] = Rule(name)
        return r

    def define(self, name: str, parser: Parser) -> Rule:
        r = self.rule(name).define(parser)
        if self._start is None:
            self._start = name
        return r

    def __getitem__(self, name: str) -> Rule:
        return self.rule(name)

    def __setitem__(self, name: str, parser: Parser) -> None:
        self.define(name, parser)

    def __getattr__(self, name: str) -> Rule:
        # only reached for names not found normally
        if name.startswith("_"):
            raise AttributeError(name)
        return self.rule(name)

    def __setattr__(self, name: str, value) -> None:
        if name.startswith("_"):
            object.__setattr__(self, name, value)
        elif hasattr(type(self), name):
            # g.start, g.parse etc. read back as Grammar members, never as the rule
            raise GrammarError(
                f"PEG: rule name '{name}' shadows a Grammar attribute; use g[{name!r}] instead"
            )
        else:
            self.define(name, value)

    def __contains__(self, name: str) -> bool:
        r = self._rules.get(name)
        return r is not None and r.defined

    @property
    def names(self) -> List[str]:
        return [n for n, r in self._rules.items() if r.defined]

    @property
    def start(self) -> str:
        if self._start is None:
            raise GrammarError("PEG: empty grammar (no rule defined)")
        return self._start

    def undefined(self) -> List[str]:
        return sorted(n for n, r in self._rules.items() if not r.defined)

    def check(self) -> None:
        missing = self.undefined()
        if missing:
            raise GrammarError("PEG: undefined rule(s): " + ", ".join(f"'{n}'" for n in missing))
        if self._start is not None and self._start not in self:
            raise GrammarError(f"PEG: start rule '{self._start}' is not defined")

    # ---- invocation ----
    def parse(self, input: Sequence, start: Optional[str] = None, *args, **kw):
        self.check()
        return parse(self.rule(start or self.start), input, *args, **kw)
