"""
  Lisp Reader, Lexer and Parser

- Streaming, lazy parsing over a regex tokenizer
- Emits Eta value trees:

    - () -> nil (a Pair with both fields absent)
    - lists -> chains of Pair ending in an absent cdr
    - integers ([+-]digits) -> Integer (wrapped to 32 bits)
    - decimals / exponents -> Float (rounded to 32 bits)
    - everything else -> Atom
    - 'x -> (quote x)
"""

from __future__ import annotations

import re
from typing import Iterator, Optional

from eta import SExpression
from eta.errors import EtaSyntaxError
from eta.types.values import Atom, Float, Integer, Pair, make_list


TOKEN_RE = re.compile(
    r"\s*("
    r"(?P<comment>;[^\n]*)"  # single-line comment
    r"|(?P<quote>')"  # '
    r"|(?P<lparen>\()"  # (
    r"|(?P<rparen>\))"  # )
    r"|(?P<symbol>[^\s()';]+)"  # fallback: symbols and numbers
    r")",
    re.DOTALL,
)

INTEGER_RE = re.compile(r"[+-]?\d+")
FLOAT_RE = re.compile(r"[+-]?(?:\d+\.\d*|\.\d+|\d+(?=[eE]))(?:[eE][+-]?\d+)?")

QUOTE = "quote"


def lex(source: str) -> Iterator[tuple[str, str]]:
    """Token generator: yields (token_type, token_value) tuples. Comments are dropped."""
    pos = 0
    n = len(source)
    while pos < n:
        m = TOKEN_RE.match(source, pos)
        if not m:
            # Only trailing whitespace is left
            break
        pos = m.end()
        for nm in TOKEN_RE.groupindex:
            if m.group(nm):
                if nm != "comment":
                    yield nm, m.group(nm)
                break


def read_atom(token: str) -> SExpression:
    if INTEGER_RE.fullmatch(token):
        return Integer(int(token))
    if FLOAT_RE.fullmatch(token):
        return Float(float(token))
    return Atom(token)


class TokenStream:
    def __init__(self, token_iter: Iterator[tuple[str, str]]):
        self.tokens = iter(token_iter)
        self.buffer: list[tuple[str, str]] = []

    def peek(self) -> tuple[Optional[str], Optional[str]]:
        if not self.buffer:
            try:
                self.buffer.append(next(self.tokens))
            except StopIteration:
                return None, None
        return self.buffer[0]

    def advance(self) -> tuple[Optional[str], Optional[str]]:
        if self.buffer:
            return self.buffer.pop(0)
        return next(self.tokens, (None, None))

    def parse_expr(self) -> Optional[SExpression]:
        tok_type, tok_val = self.peek()
        if tok_type is None:
            return None

        if tok_type == "symbol":
            self.advance()
            return read_atom(tok_val)

        # Quote shorthand
        if tok_type == "quote":
            self.advance()
            if self.peek()[0] in (None, "rparen"):
                raise EtaSyntaxError("Expected an expression after quote", "parse")
            expr = self.parse_expr()
            return make_list([Atom(QUOTE), expr])

        if tok_type == "lparen":
            self.advance()
            items = []
            while True:
                next_type = self.peek()[0]
                if next_type == "rparen":
                    self.advance()
                    break
                if next_type is None:
                    raise EtaSyntaxError("Unmatched '('", "parse")
                items.append(self.parse_expr())
            if not items:
                return Pair.nil()
            return make_list(items)

        if tok_type == "rparen":
            raise EtaSyntaxError("Unexpected ')'", "parse")

        raise EtaSyntaxError(f"Unknown token: {tok_type} {tok_val}", "parse")

    def parse_all(self) -> Iterator[SExpression]:
        while True:
            tok_type, _ = self.peek()
            if tok_type is None:
                break
            yield self.parse_expr()


def parse_expression(text: str) -> Optional[SExpression]:
    """Parse the first expression in `text`; None when there is nothing to read."""
    return TokenStream(lex(text)).parse_expr()


def parse_all(text: str) -> Iterator[SExpression]:
    """Lazily parse every expression in `text`."""
    return TokenStream(lex(text)).parse_all()


# -------------------------------
# Parenthesis balance
# -------------------------------
def net_balance(text: str) -> int:
    """Open parentheses minus closing ones, ignoring comments."""
    balance = 0
    for tok_type, _ in lex(text):
        if tok_type == "lparen":
            balance += 1
        elif tok_type == "rparen":
            balance -= 1
    return balance


def is_valid(text: str) -> bool:
    """False if a ')' ever closes more than has been opened."""
    depth = 0
    for tok_type, _ in lex(text):
        if tok_type == "lparen":
            depth += 1
        elif tok_type == "rparen":
            depth -= 1
            if depth < 0:
                return False
    return True


def is_balanced(text: str) -> bool:
    return is_valid(text) and net_balance(text) == 0
