"""
Tokenizer for the exprcalc expression language.

Converts an expression string into a sequence of typed tokens.
"""

from __future__ import annotations

import re
from enum import StrEnum, auto

from exprcalc.core.errors import (
    InvalidCharacterError,
    MalformedNumberError,
    UnknownIdentifierError,
    make_context,
)


class TokenKind(StrEnum):
    """Token types for the expression language."""

    # Literals
    NUMBER = auto()

    # Operators
    PLUS = auto()
    MINUS = auto()
    STAR = auto()
    SLASH = auto()

    # Punctuation
    LPAREN = auto()
    RPAREN = auto()
    COMMA = auto()

    # Function keywords
    COS = auto()
    ACOS = auto()
    SIN = auto()
    ASIN = auto()
    TAN = auto()
    ATAN = auto()
    SQRT = auto()
    POW = auto()


class Token:
    """A single token from the expression tokenizer."""

    __slots__ = ("kind", "value", "pos", "end")

    kind: TokenKind
    value: float | str
    pos: int
    end: int  # offset just past the token text

    def __init__(
        self, kind: TokenKind, value: float | str, pos: int, end: int | None = None
    ) -> None:
        object.__setattr__(self, "kind", kind)
        object.__setattr__(self, "value", value)
        object.__setattr__(self, "pos", pos)
        object.__setattr__(self, "end", pos + 1 if end is None else end)

    def __setattr__(self, name: str, value: object) -> None:
        raise AttributeError(f"Token is immutable, cannot set {name!r}")

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Token):
            return NotImplemented
        return self.kind == other.kind and self.value == other.value

    def __hash__(self) -> int:
        return hash((self.kind, self.value))

    def __repr__(self) -> str:
        return f"Token({self.kind}, {self.value!r}, pos={self.pos})"


_KEYWORDS: dict[str, TokenKind] = {
    "cos": TokenKind.COS,
    "acos": TokenKind.ACOS,
    "sin": TokenKind.SIN,
    "asin": TokenKind.ASIN,
    "tan": TokenKind.TAN,
    "atan": TokenKind.ATAN,
    "sqrt": TokenKind.SQRT,
    "pow": TokenKind.POW,
}

_SINGLE_CHARS: dict[str, TokenKind] = {
    "+": TokenKind.PLUS,
    "-": TokenKind.MINUS,
    "*": TokenKind.STAR,
    "/": TokenKind.SLASH,
    "(": TokenKind.LPAREN,
    ")": TokenKind.RPAREN,
    ",": TokenKind.COMMA,
}

# Greedy: digits and dots, validated by float() afterwards
_NUMBER_RE = re.compile(r"[0-9][0-9.]*")
# Identifier: lowercase ASCII letters only
_IDENT_RE = re.compile(r"[a-z]+")
# Strict numeral shape: at most one decimal point
_VALID_NUMBER_RE = re.compile(r"[0-9]+(\.[0-9]*)?")


def tokenize(source: str) -> list[Token]:
    """Tokenize an expression string into a list of tokens.

    Raises:
        InvalidCharacterError: For a character that cannot start a token.
        UnknownIdentifierError: For a word that is not a function name.
        MalformedNumberError: For a numeral with more than one decimal point.
    """
    tokens: list[Token] = []
    i = 0
    n = len(source)

    while i < n:
        c = source[i]

        if c == " ":
            i += 1
            continue

        # Numbers
        if "0" <= c <= "9":
            m = _NUMBER_RE.match(source, i)
            assert m is not None
            tokens.append(_read_number(m.group(0), source, i))
            i = m.end()
            continue

        # Function keywords
        if "a" <= c <= "z":
            m = _IDENT_RE.match(source, i)
            assert m is not None
            word = m.group(0)
            kind = _KEYWORDS.get(word)
            if kind is None:
                raise UnknownIdentifierError(word, make_context(i, source))
            tokens.append(Token(kind, word, i, m.end()))
            i = m.end()
            continue

        # Single-character operators and punctuation
        if c in _SINGLE_CHARS:
            tokens.append(Token(_SINGLE_CHARS[c], c, i))
            i += 1
            continue

        raise InvalidCharacterError(c, make_context(i, source))

    return tokens


def _read_number(text: str, source: str, start: int) -> Token:
    """Convert a matched numeral into a NUMBER token."""
    if not _VALID_NUMBER_RE.fullmatch(text):
        raise MalformedNumberError(text, make_context(start, source))
    return Token(TokenKind.NUMBER, float(text), start, start + len(text))
