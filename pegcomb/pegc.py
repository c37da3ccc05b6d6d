# pegcomb/pegc.py
"""pegc – run the bundled example grammars

Usage:
    $ python -m pegcomb.pegc calc --text "1 + 2 * (3 - 1)"
    $ python -m pegcomb.pegc calc --tokens --input expr.txt -D
    $ python -m pegcomb.pegc triplet --text "3 44 2rest"
    $ python -m pegcomb.pegc parens --text "((()))"

With -D/--debug every combinator entry/exit is printed to stderr.
"""

from __future__ import annotations
import argparse
import sys
from typing import Optional

from .errors import ParseFailure
from .examples import ARITH_LEXER, arithmetic, nested_parens, number_triplet, token_arithmetic
from .runtime import parse
from .trace import StderrTracer

# ------------------------------
# helpers
# ------------------------------

def _eprint(*args, **kw) -> None:
    print(*args, file=sys.stderr, **kw)


def _read_text(args) -> str:
    if args.text is not None:
        return args.text
    with open(args.input, "r", encoding="utf-8") as f:
        return f.read().replace("\r\n", "\n").replace("\r", "\n")


def _run(args, build):
    """Common error handling for all subcommands."""
    tracer = StderrTracer() if args.debug else None
    try:
        text = _read_text(args)
        if args.debug: _eprint(f"[DEBUG] input ready | chars={len(text)}")
        res = build(text, tracer)
    except ParseFailure as e:
        _eprint("[PARSE ERROR]")
        _eprint(str(e))
        return 2
    except SyntaxError as e:
        _eprint("[SYNTAX ERROR]")
        _eprint(str(e))
        return 2
    except Exception as e:
        _eprint("[ERROR]", type(e).__name__, str(e))
        return 2
    print(res)
    return 0

# ------------------------------
# commands
# ------------------------------

def cmd_calc(args) -> int:
    def build(text, tracer):
        if args.tokens:
            toks = ARITH_LEXER.tokenize(text)
            if args.debug: _eprint(f"[DEBUG] tokens={len(toks)}")
            return token_arithmetic().parse(toks, tracer=tracer).result
        return arithmetic().parse(text, tracer=tracer).result
    return _run(args, build)


def cmd_triplet(args) -> int:
    def build(text, tracer):
        res = parse(number_triplet(), text, tracer=tracer)
        return f"{res.result!r} unconsumed={res.unconsumed_input!r}"
    return _run(args, build)


def cmd_parens(args) -> int:
    def build(text, tracer):
        res = nested_parens().parse(text, tracer=tracer)
        return f"depth={res.result} unconsumed={res.unconsumed_input!r}"
    return _run(args, build)

# ------------------------------
# entry point
# ------------------------------

def _add_input_args(p: argparse.ArgumentParser) -> None:
    src_group = p.add_mutually_exclusive_group(required=True)
    src_group.add_argument("--text", help="input text given directly")
    src_group.add_argument("--input", help="path of a file holding the input text")
    p.add_argument("-D", "--debug", action="store_true", help="trace every combinator to stderr")


def main(argv: Optional[list[str]] = None) -> int:
    ap = argparse.ArgumentParser(prog="pegc", description="pegcomb example grammar runner")
    sub = ap.add_subparsers(dest="cmd", required=True)

    p_calc = sub.add_parser("calc", help="evaluate an arithmetic expression")
    _add_input_args(p_calc)
    p_calc.add_argument("--tokens", action="store_true", help="tokenize first and parse the token stream")
    p_calc.set_defaults(func=cmd_calc)

    p_trip = sub.add_parser("triplet", help="parse three whitespace separated integers")
    _add_input_args(p_trip)
    p_trip.set_defaults(func=cmd_triplet)

    p_par = sub.add_parser("parens", help="measure the nesting depth of balanced parentheses")
    _add_input_args(p_par)
    p_par.set_defaults(func=cmd_parens)

    args = ap.parse_args(argv)
    return int(args.func(args))

if __name__ == "__main__":
    sys.exit(main())
