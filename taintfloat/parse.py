"""Expression parser: recursive descent, one method per grammar production.

    expr   = term (("+" | "-") term)*
    term   = unary (("*" | "/" | "%") unary)*
    unary  = ("-" | "+") unary | power
    power  = atom ("^" unary)?
    atom   = NUMBER | IDENT | IDENT "(" args ")" | "(" expr ")"
"""

from __future__ import annotations

from dataclasses import dataclass

from .tokens import TK_EOF, TK_IDENT, TK_NUMBER, Token, tokenize


# ============================================================
# NODES
# ============================================================


@dataclass
class Expr:
    """Base for all expression nodes; col is 1-indexed."""

    col: int


@dataclass
class Number(Expr):
    value: float


@dataclass
class Name(Expr):
    """A bare identifier: a constant such as inf, nan, pi."""

    name: str


@dataclass
class Unary(Expr):
    op: str
    operand: Expr


@dataclass
class Binary(Expr):
    op: str
    left: Expr
    right: Expr


@dataclass
class Call(Expr):
    name: str
    args: list[Expr]


# ============================================================
# PARSER
# ============================================================


class ParseError(Exception):
    """Parse error with location info."""

    def __init__(self, msg: str, col: int):
        self.msg: str = msg
        self.col: int = col
        super().__init__(msg + " at col " + str(col))


class Parser:
    """Recursive descent parser for calculator expressions."""

    def __init__(self, tokens: list[Token]):
        self.tokens: list[Token] = tokens
        self.pos: int = 0

    # ── Helpers ──────────────────────────────────────────────

    def current(self) -> Token:
        return self.tokens[self.pos]

    def advance(self) -> Token:
        tok = self.tokens[self.pos]
        if tok.type != TK_EOF:
            self.pos += 1
        return tok

    def at(self, value: str) -> bool:
        tok = self.current()
        return tok.type != TK_NUMBER and tok.type != TK_IDENT and tok.value == value

    def expect(self, value: str) -> Token:
        if not self.at(value):
            raise self.error("expected '" + value + "', got " + self._describe())
        return self.advance()

    def error(self, msg: str) -> ParseError:
        return ParseError(msg, self.current().col)

    def _describe(self) -> str:
        tok = self.current()
        if tok.type == TK_EOF:
            return "end of input"
        return "'" + tok.value + "'"

    # ── Productions ──────────────────────────────────────────

    def parse(self) -> Expr:
        expr = self.parse_expr()
        if self.current().type != TK_EOF:
            raise self.error("unexpected " + self._describe())
        return expr

    def parse_expr(self) -> Expr:
        left = self.parse_term()
        while self.at("+") or self.at("-"):
            tok = self.advance()
            right = self.parse_term()
            left = Binary(tok.col, tok.value, left, right)
        return left

    def parse_term(self) -> Expr:
        left = self.parse_unary()
        while self.at("*") or self.at("/") or self.at("%"):
            tok = self.advance()
            right = self.parse_unary()
            left = Binary(tok.col, tok.value, left, right)
        return left

    def parse_unary(self) -> Expr:
        if self.at("-") or self.at("+"):
            tok = self.advance()
            return Unary(tok.col, tok.value, self.parse_unary())
        return self.parse_power()

    def parse_power(self) -> Expr:
        base = self.parse_atom()
        if self.at("^"):
            tok = self.advance()
            # Right-associative: 2^3^2 == 2^(3^2); the exponent may be signed.
            return Binary(tok.col, "^", base, self.parse_unary())
        return base

    def parse_atom(self) -> Expr:
        tok = self.current()
        if tok.type == TK_NUMBER:
            self.advance()
            return Number(tok.col, float(tok.value))
        if tok.type == TK_IDENT:
            self.advance()
            if not self.at("("):
                return Name(tok.col, tok.value)
            self.advance()
            args: list[Expr] = []
            if not self.at(")"):
                args.append(self.parse_expr())
                while self.at(","):
                    self.advance()
                    args.append(self.parse_expr())
            self.expect(")")
            return Call(tok.col, tok.value, args)
        if self.at("("):
            self.advance()
            inner = self.parse_expr()
            self.expect(")")
            return inner
        raise self.error("expected expression, got " + self._describe())


def parse(source: str) -> Expr:
    """Tokenize and parse an expression."""
    return Parser(tokenize(source)).parse()
