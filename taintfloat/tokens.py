"""Expression tokenizer: lexes a calculator expression into a flat token list."""

from __future__ import annotations


# Token type constants
TK_NUMBER = "NUMBER"
TK_IDENT = "IDENT"
TK_OP = "OP"
TK_EOF = "EOF"

SINGLE_OPS: set[str] = {
    "+",
    "-",
    "*",
    "/",
    "%",
    "^",
    "(",
    ")",
    ",",
}


class TokenizeError(Exception):
    """Error during tokenization."""

    def __init__(self, msg: str, col: int):
        self.msg: str = msg
        self.col: int = col
        super().__init__(msg + " at col " + str(col))


class Token:
    """A token with type, value, and column."""

    def __init__(self, type_: str, value: str, col: int):
        self.type: str = type_
        self.value: str = value
        self.col: int = col

    def __repr__(self) -> str:
        return "Token(" + self.type + ", " + repr(self.value) + ", " + str(self.col) + ")"


def _is_digit(c: str) -> bool:
    return c >= "0" and c <= "9"


def _is_alpha(c: str) -> bool:
    return (c >= "a" and c <= "z") or (c >= "A" and c <= "Z") or c == "_"


def _is_alnum(c: str) -> bool:
    return _is_alpha(c) or _is_digit(c)


def tokenize(source: str) -> list[Token]:
    """Tokenize an expression into a list ending with TK_EOF."""
    tokens: list[Token] = []
    pos = 0
    length = len(source)

    while pos < length:
        c = source[pos]

        # Whitespace
        if c == " " or c == "\t" or c == "\r" or c == "\n":
            pos += 1
            continue

        start = pos

        # Number: 12, 1.5, .5, 1e-3
        if _is_digit(c) or (c == "." and pos + 1 < length and _is_digit(source[pos + 1])):
            while pos < length and _is_digit(source[pos]):
                pos += 1
            if pos < length and source[pos] == ".":
                pos += 1
                while pos < length and _is_digit(source[pos]):
                    pos += 1
            if pos < length and (source[pos] == "e" or source[pos] == "E"):
                pos += 1
                if pos < length and (source[pos] == "+" or source[pos] == "-"):
                    pos += 1
                if pos >= length or not _is_digit(source[pos]):
                    raise TokenizeError("invalid float exponent", start + 1)
                while pos < length and _is_digit(source[pos]):
                    pos += 1
            tokens.append(Token(TK_NUMBER, source[start:pos], start + 1))
            continue

        # Identifier: function or constant name
        if _is_alpha(c):
            while pos < length and _is_alnum(source[pos]):
                pos += 1
            tokens.append(Token(TK_IDENT, source[start:pos], start + 1))
            continue

        # "**" is accepted as a spelling of "^"
        if c == "*" and pos + 1 < length and source[pos + 1] == "*":
            tokens.append(Token(TK_OP, "^", start + 1))
            pos += 2
            continue

        if c in SINGLE_OPS:
            tokens.append(Token(TK_OP, c, start + 1))
            pos += 1
            continue

        raise TokenizeError("unexpected character: " + repr(c), start + 1)

    tokens.append(Token(TK_EOF, "", length + 1))
    return tokens
