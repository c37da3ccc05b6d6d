# pegcomb/lex/__init__.py
"""Regex tokenizer and terminal parsers over token streams.

Combinators do not care what the input elements are, so a grammar can run
over a tuple of `LexTok` instead of raw text. The tokenizer turns text into
such a tuple; `kind` and `keyword` are the matching terminals.

Matching order at each position:
  1) skip ``ignore`` patterns as far as possible
  2) keywords (literal strings), longest first; word-like keywords must end
     on an identifier boundary
  3) regex tokens, longest match; ties go to the first declared
  4) nothing matched -> SyntaxError with a caret snippet

API
---
- `LexTok(type, text, line, col, pos)`: one token; `type` is the token name
  for regex tokens and the literal itself for keywords
- `Lexer(tokens, ignore=(), keywords=())` with `tokenize(text)`
- `kind(type)`, `keyword(text)`: terminal parsers over token tuples
"""

from __future__ import annotations
import regex as re
from dataclasses import dataclass
from typing import Iterable, List, Pattern, Sequence, Tuple, Union

from ..errors import caret_snippet
from ..trace import record_failure, traced
from ..trampoline import Parser, bounce

_RE_XID_CONT = re.compile(r"\p{XID_Continue}")


def _is_ident_continue(ch: str) -> bool:
    return bool(_RE_XID_CONT.fullmatch(ch))


def _is_word_keyword(s: str) -> bool:
    return any(_is_ident_continue(c) for c in s)


# --------- Public datatypes ---------

@dataclass(frozen=True)
class LexTok:
    type: str   # token name, or the keyword literal itself
    text: str   # source lexeme
    line: int   # 1-based
    col: int    # 1-based
    pos: int = 0  # absolute offset


PatternLike = Union[str, Pattern[str]]


def _compile(p: PatternLike) -> Pattern[str]:
    return p if hasattr(p, "match") else re.compile(p)  # type: ignore[return-value]


class Lexer:
    """Table driven tokenizer (keywords => regex tokens)."""
    def __init__(self,
            tokens: Iterable[Tuple[str, PatternLike]],
            ignore: Iterable[PatternLike] = (),
            keywords: Iterable[str] = ()):
        self._tokens: List[Tuple[str, Pattern[str]]] = [(name, _compile(p)) for name, p in tokens]
        self._ignores: List[Pattern[str]] = [_compile(p) for p in ignore]
        # dedupe keeping first occurrence, then longest first (stable for equal length)
        seen = set()
        kws = []
        for kw in keywords:
            if kw and kw not in seen:
                seen.add(kw)
                kws.append(kw)
        kws.sort(key=len, reverse=True)
        self._keywords = kws

    # ---- scanning helpers ----
    def _skip_ignored(self, text: str, i: int) -> int:
        progressed = True
        while progressed and i < len(text):
            progressed = False
            for rx in self._ignores:
                m = rx.match(text, i)
                if m and m.end() > i:
                    i = m.end()
                    progressed = True
        return i

    def _match_keyword(self, text: str, i: int):
        for kw in self._keywords:
            if not text.startswith(kw, i):
                continue
            end = i + len(kw)
            if _is_word_keyword(kw) and end < len(text) and _is_ident_continue(text[end]):
                continue
            return kw, kw
        return None

    def _match_token(self, text: str, i: int):
        best = None
        for name, rx in self._tokens:
            m = rx.match(text, i)
            if m is None or m.end() == i:
                continue
            if best is None or m.end() > i + len(best[1]):
                best = (name, m.group(0))
        return best

    def tokenize(self, text: str) -> Tuple[LexTok, ...]:
        toks: List[LexTok] = []
        line = col = 1
        i = 0
        n = len(text)
        while i < n:
            j = self._skip_ignored(text, i)
            if j != i:
                line, col = _advance(text[i:j], line, col)
                i = j
                continue

            hit = self._match_keyword(text, i) or self._match_token(text, i)
            if hit is None:
                raise SyntaxError(
                    f"Unexpected char {text[i]!r} at {line}:{col}\n" + caret_snippet(text, i)
                )
            kind_name, lexeme = hit
            toks.append(LexTok(kind_name, lexeme, line, col, i))
            line, col = _advance(lexeme, line, col)
            i += len(lexeme)
        return tuple(toks)


def _advance(lexeme: str, line: int, col: int) -> Tuple[int, int]:
    nl = lexeme.count("\n")
    if nl:
        return line + nl, len(lexeme) - lexeme.rfind("\n")
    return line, col + len(lexeme)


# --------- Terminals over token streams ---------

def _tok_matcher(label: str, expected: str) -> Parser:
    def parse_tok(input: Sequence[LexTok], succeed, fail):
        if len(input) and input[0].type == expected:
            return bounce(succeed, input[0], input[1:])
        record_failure(expected, input)
        return bounce(fail, expected, input)

    return traced(label, parse_tok)


def kind(type_name: str) -> Parser:
    """Next token has ``type == type_name``; the value is the `LexTok`."""
    return _tok_matcher(f"kind({type_name})", type_name)


def keyword(text: str) -> Parser:
    """Next token is the keyword ``text``."""
    return _tok_matcher(f"keyword({text!r})", text)
