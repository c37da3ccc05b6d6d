# pegcomb/errors.py
"""Errors raised at the boundary between the engine and its caller.

Inside the engine failure is an ordinary continuation call; only `parse`
turns a final failure into `ParseFailure`. Both classes derive from
SyntaxError so callers can catch grammar and input problems in one place.
"""

from __future__ import annotations
from typing import Any, Optional, Sequence, Tuple


class GrammarError(SyntaxError):
    """The grammar itself is malformed (bad arity, undefined or redefined rule)."""


# ---------- diagnostics helpers ----------

def _line_bounds(src: str, pos: int) -> Tuple[int, int]:
    """[start, end) of the line containing pos."""
    start = src.rfind("\n", 0, pos)
    start = 0 if start < 0 else start + 1
    end = src.find("\n", pos)
    end = len(src) if end < 0 else end
    return start, end


def line_col(src: str, pos: int) -> Tuple[int, int]:
    """1-based (line, col) of the absolute offset pos."""
    start, _ = _line_bounds(src, pos)
    return src.count("\n", 0, pos) + 1, (pos - start) + 1


def caret_snippet(src: str, pos: int) -> str:
    """Source line holding pos, with a caret under it."""
    start, end = _line_bounds(src, pos)
    line = src[start:end]
    caret = " " * (pos - start) + "^"
    return f"{line}\n{caret}"


def describe(value: Any) -> str:
    """Human readable form of a failure payload."""
    pat = getattr(value, "pattern", None)
    if pat is not None:
        if isinstance(pat, bytes):
            pat = pat.decode("latin-1")
        return f"/{pat}/"
    return repr(value)


class ParseFailure(SyntaxError):
    """Top-level parse failed.

    - `result`: payload handed to the top-level failure continuation
    - `unconsumed_input`: input left at the deepest failure point
    - `expected`: first payload recorded at that deepest point
    - `alternatives`: every distinct payload recorded there, in the order the
      grammar tried them (``[expected]`` when nothing else failed there)
    - `rewound_input`: input reported to the failure continuation
      (the entry input of the failing parser)
    - `position`: offset of `unconsumed_input` in the original input,
      `line`/`col` only for text input
    """

    def __init__(self,
            result: Any,
            unconsumed_input: Sequence,
            source: Optional[Sequence] = None,
            expected: Any = None,
            rewound_input: Optional[Sequence] = None,
            alternatives: Optional[Sequence[Any]] = None):
        self.result = result
        self.unconsumed_input = unconsumed_input
        self.expected = result if expected is None else expected
        self.alternatives = list(alternatives) if alternatives else [self.expected]
        self.rewound_input = unconsumed_input if rewound_input is None else rewound_input
        self.source = source
        self.position: Optional[int] = None
        self.line: Optional[int] = None
        self.col: Optional[int] = None
        if source is not None:
            self.position = len(source) - len(unconsumed_input)
            if isinstance(source, str):
                self.line, self.col = line_col(source, self.position)
        super().__init__(self._message())

    def _message(self) -> str:
        what = " or ".join(describe(v) for v in self.alternatives)
        if self.line is not None:
            return (f"Parse failed at {self.line}:{self.col}: expected {what}\n"
                    + caret_snippet(self.source, self.position))  # type: ignore[arg-type]
        if self.position is not None:
            return f"Parse failed at index {self.position}: expected {what}"
        return f"Parse failed with result: {describe(self.result)}"
