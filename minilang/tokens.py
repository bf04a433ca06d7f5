"""minilang/tokens.py – Token kinds, the token record and the lexical table.

The pattern table is the single source of truth for the lexer: an ordered,
immutable tuple of ``(kind, regex)`` pairs tried in sequence at the cursor.
Order encodes priority:

* ``<=``, ``>=`` and ``==`` come before ``<``, ``>`` and ``=``;
* identifiers are matched as whole words and mapped to keyword kinds via
  :data:`KEYWORDS` afterwards, so ``ifx`` is a single identifier.

Entries whose kind is ``None`` (whitespace and ``//`` comments) are
consumed but never materialized as tokens.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from enum import Enum, auto
from typing import Final, Mapping, Optional, Pattern, Tuple


class TokenKind(Enum):
    """The closed set of token kinds."""

    # Keywords
    LET = auto()
    PRINT = auto()
    IF = auto()
    ELSE = auto()
    WHILE = auto()

    # Identifiers and literals
    IDENTIFIER = auto()
    NUMBER = auto()
    STRING = auto()

    # Arithmetic
    PLUS = auto()       # +
    MINUS = auto()      # -
    MULTIPLY = auto()   # *
    DIVIDE = auto()     # /

    # Assignment and comparison
    ASSIGN = auto()     # =
    EQ = auto()         # ==
    LT = auto()         # <
    GT = auto()         # >
    LE = auto()         # <=
    GE = auto()         # >=

    # Punctuation
    LPAREN = auto()
    RPAREN = auto()
    LBRACE = auto()
    RBRACE = auto()
    SEMICOLON = auto()
    COMMA = auto()


@dataclass(frozen=True, slots=True)
class Token:
    """A single token: its kind, the exact matched text and where it starts."""

    kind: TokenKind
    lexeme: str
    line: int
    column: int

    def __repr__(self) -> str:
        return f"Token({self.kind.name}, {self.lexeme!r}, line={self.line}, col={self.column})"


#: Case-sensitive keyword lexemes.  Applied after an identifier match.
KEYWORDS: Final[Mapping[str, TokenKind]] = {
    "let": TokenKind.LET,
    "print": TokenKind.PRINT,
    "if": TokenKind.IF,
    "else": TokenKind.ELSE,
    "while": TokenKind.WHILE,
}


def _table(*entries: Tuple[Optional[TokenKind], str]) -> Tuple[Tuple[Optional[TokenKind], Pattern[str]], ...]:
    return tuple((kind, re.compile(pattern)) for kind, pattern in entries)


#: Ordered lexical table.  ``None`` marks skipped input.
TOKEN_PATTERNS: Final = _table(
    (None, r"\s+"),                       # whitespace
    (None, r"//[^\n]*"),                  # line comment
    (TokenKind.NUMBER, r"[0-9]+(?:\.[0-9]+)?"),
    (TokenKind.STRING, r'"[^"\n]*"'),
    (TokenKind.IDENTIFIER, r"[A-Za-z_][A-Za-z0-9_]*"),
    (TokenKind.LE, r"<="),
    (TokenKind.GE, r">="),
    (TokenKind.EQ, r"=="),
    (TokenKind.ASSIGN, r"="),
    (TokenKind.PLUS, r"\+"),
    (TokenKind.MINUS, r"-"),
    (TokenKind.MULTIPLY, r"\*"),
    (TokenKind.DIVIDE, r"/"),
    (TokenKind.LT, r"<"),
    (TokenKind.GT, r">"),
    (TokenKind.LPAREN, r"\("),
    (TokenKind.RPAREN, r"\)"),
    (TokenKind.LBRACE, r"\{"),
    (TokenKind.RBRACE, r"\}"),
    (TokenKind.SEMICOLON, r";"),
    (TokenKind.COMMA, r","),
)


__all__ = ["TokenKind", "Token", "KEYWORDS", "TOKEN_PATTERNS"]
