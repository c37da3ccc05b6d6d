# pegcomb/examples.py
"""Small grammars built with pegcomb.

- `number_triplet()`: three whitespace separated integers
- `arithmetic()`: + - * / with parentheses and unary minus, over text
- `token_arithmetic()`: the same grammar over a `LexTok` stream
- `nested_parens()`: balanced parentheses, value is the nesting depth
"""

from __future__ import annotations
import operator
import regex as re
from typing import Any, Callable, List, Union

from .combinators import choice, optional, sequence, star, transform
from .grammar import Grammar
from .lex import Lexer, keyword, kind
from .terminals import end_of_input, literal, token
from .trampoline import Parser

DIGITS = r"\d+"
NUMBER = r"\d+(?:\.\d+)?"

_OPS = {
    "+": operator.add,
    "-": operator.sub,
    "*": operator.mul,
    "/": operator.truediv,
}


def _number(text: str) -> Union[int, float]:
    return float(text) if "." in text else int(text)


def _second(v: List[Any]) -> Any:
    return v[1]


def _fold(v: List[Any]) -> Any:
    """[first, [[op, rhs], ...]] -> left-associative result."""
    acc, rest = v
    for op, rhs in rest:
        acc = _OPS[op](acc, rhs)
    return acc


# ---- number triplet ----

def number_triplet() -> Parser:
    """``number ws number ws number``; numbers become ints, ``ws`` is ``\\s*``."""
    number = transform(token(DIGITS), int)
    ws = token(r"\s*")
    return sequence(number, ws, number, ws, number)


# ---- arithmetic ----

def _build_arith(num: Parser, op: Callable[[str], Parser], lpar: Parser, rpar: Parser, end: Parser) -> Grammar:
    #   calc   <- expr END
    #   expr   <- term (("+" / "-") term)*
    #   term   <- unary (("*" / "/") unary)*
    #   unary  <- "-" unary / factor
    #   factor <- NUMBER / "(" expr ")"
    g = Grammar()
    g.calc = transform(sequence(g.expr, end), lambda v: v[0])
    g.expr = transform(sequence(g.term, star(sequence(op("+-"), g.term))), _fold)
    g.term = transform(sequence(g.unary, star(sequence(op("*/"), g.unary))), _fold)
    g.unary = choice(transform(sequence(op("-"), g.unary), lambda v: -v[1]), g.factor)
    g.factor = choice(num, transform(sequence(lpar, g.expr, rpar), _second))
    return g


def _lexeme(pattern: str) -> Parser:
    """``pattern`` preceded by optional whitespace; the value is the match."""
    return transform(sequence(token(r"\s*"), token(pattern)), _second)


def arithmetic() -> Grammar:
    return _build_arith(
        num=transform(_lexeme(NUMBER), _number),
        op=lambda ops: _lexeme("[" + re.escape(ops) + "]"),
        lpar=_lexeme(r"\("),
        rpar=_lexeme(r"\)"),
        end=sequence(token(r"\s*"), end_of_input()),
    )


ARITH_LEXER = Lexer(
    tokens=[("NUMBER", NUMBER)],
    ignore=[r"\s+"],
    keywords=list("+-*/()"),
)


def _token_op(ops: str) -> Parser:
    kws = [keyword(c) for c in ops]
    alt = kws[0] if len(kws) == 1 else choice(*kws)
    return transform(alt, lambda t: t.text)


def token_arithmetic() -> Grammar:
    """Arithmetic over ``ARITH_LEXER.tokenize(text)``."""
    return _build_arith(
        num=transform(kind("NUMBER"), lambda t: _number(t.text)),
        op=_token_op,
        lpar=keyword("("),
        rpar=keyword(")"),
        end=end_of_input(),
    )


def evaluate(text: str, **kw) -> Union[int, float]:
    return arithmetic().parse(text, **kw).result


def evaluate_tokens(text: str, **kw) -> Union[int, float]:
    return token_arithmetic().parse(ARITH_LEXER.tokenize(text), **kw).result


# ---- nested parentheses ----

def nested_parens() -> Grammar:
    """``parens <- "(" parens? ")"``; the value is the nesting depth."""
    g = Grammar()
    g.parens = transform(
        sequence(literal("("), optional(g.parens, 0), literal(")")),
        lambda v: v[1] + 1,
    )
    return g
