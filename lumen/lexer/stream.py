"""
Pull-based token sources.

The parser never sees source text; it pulls one token at a time from a
TokenSource. Sources keep returning EOF once their input is exhausted.
"""

from abc import ABC, abstractmethod
from typing import List, Sequence

from .tokens import Span, Token, TokenType


class TokenSource(ABC):
    """Anything the parser can pull tokens from."""

    @abstractmethod
    def next_token(self) -> Token:
        """Return the next token, or EOF (repeatedly) at end of input."""
        pass


class TokenStream(TokenSource):
    """TokenSource over an already-built list of tokens."""

    def __init__(self, tokens: Sequence[Token]):
        self.tokens: List[Token] = list(tokens)
        self.position = 0
        self._eof = self._find_or_make_eof()

    def _find_or_make_eof(self) -> Token:
        if self.tokens and self.tokens[-1].type == TokenType.EOF:
            return self.tokens[-1]
        if self.tokens:
            last = self.tokens[-1].span
            span = Span(last.line, last.column + last.length, last.end, 0, last.filename)
        else:
            span = Span(1, 1, 0, 0)
        return Token(TokenType.EOF, "", None, span)

    def next_token(self) -> Token:
        if self.position >= len(self.tokens):
            return self._eof
        token = self.tokens[self.position]
        self.position += 1
        return token
