"""minilang/lexer.py – source text → token list.

At every cursor position the ordered :data:`~minilang.tokens.TOKEN_PATTERNS`
table is tried and the first matching entry wins.  The whole list is
materialized before it is returned; on an unrecognized character a
:class:`~minilang.errors.LexError` is raised and no partial list escapes.
"""

from __future__ import annotations

import logging
from typing import List

from minilang.errors import LexError, SourceSpan
from minilang.tokens import KEYWORDS, TOKEN_PATTERNS, Token, TokenKind

logger = logging.getLogger(__name__)


class Lexer:
    """Single-use scanner over one source string."""

    def __init__(self, source: str, filename: str = "") -> None:
        self.source = source
        self.filename = filename
        self.pos = 0
        self.line = 1
        self.column = 1

    def tokenize(self) -> List[Token]:
        tokens: List[Token] = []
        while self.pos < len(self.source):
            kind, lexeme = self._match()
            if kind is not None:
                if kind is TokenKind.IDENTIFIER:
                    kind = KEYWORDS.get(lexeme, kind)
                tokens.append(Token(kind, lexeme, self.line, self.column))
            self._advance(lexeme)
        logger.debug("Tokenized %d characters into %d tokens", len(self.source), len(tokens))
        return tokens

    def _match(self):
        for kind, pattern in TOKEN_PATTERNS:
            m = pattern.match(self.source, self.pos)
            if m is not None and m.end() > self.pos:
                return kind, m.group()
        raise LexError(
            self.source[self.pos],
            span=SourceSpan(file=self.filename, line=self.line, column=self.column),
        ).with_source(self.source)

    def _advance(self, text: str) -> None:
        for ch in text:
            if ch == "\n":
                self.line += 1
                self.column = 1
            else:
                self.column += 1
        self.pos += len(text)


def tokenize(source: str, filename: str = "") -> List[Token]:
    """Convert *source* into its full token list.

    Raises:
        LexError: no token pattern matches at some position.
    """
    return Lexer(source, filename).tokenize()


__all__ = ["Lexer", "tokenize"]
