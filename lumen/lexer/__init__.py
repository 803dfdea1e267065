"""
Lumen Lexer Package

Implements the lexical analyzer (tokenizer) for the Lumen scripting language
and the pull-based token source contract the parser consumes.

Key Features:
- On-demand scanning: the parser pulls one token at a time
- Idempotent end of stream (EOF is returned on every call past the end)
- Span tracking (line, column, offset, length) for every token
"""

from .tokens import Token, TokenType, Span, KEYWORDS, OPERATORS, symbol_for
from .stream import TokenSource, TokenStream
from .lexer import Lexer, tokenize_string, tokenize_file
from .errors import Diagnostic, LexerError

__all__ = [
    "Lexer",
    "Token",
    "TokenType",
    "Span",
    "TokenSource",
    "TokenStream",
    "KEYWORDS",
    "OPERATORS",
    "symbol_for",
    "tokenize_string",
    "tokenize_file",
    "Diagnostic",
    "LexerError",
]
