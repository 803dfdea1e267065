"""
Lumen Lexer - turns source text into tokens on demand.

The parser pulls tokens one at a time through `next_token`, so the lexer
only ever scans as far as the parser has asked. `tokenize` drains a fresh
scan into a list for tests and tooling.
"""

import logging
import re
import string
from typing import List

from .tokens import Token, TokenType, Span, KEYWORDS, OPERATORS
from .stream import TokenSource
from .errors import (
    create_invalid_character_error, create_unterminated_string_error,
    create_unterminated_comment_error, create_invalid_escape_error
)

logger = logging.getLogger(__name__)

DIGITS = frozenset(string.digits)
IDENTIFIER_START = frozenset(string.ascii_letters + '_')

ESCAPE_SEQUENCES = {
    'n': '\n',
    't': '\t',
    'r': '\r',
    '\\': '\\',
    '"': '"',
}

# Longest operators first so '==' wins over '='
_OPERATOR_LENGTHS = sorted({len(op) for op in OPERATORS}, reverse=True)


class Lexer(TokenSource):
    """
    Lumen lexical analyzer.

    Converts source code text into a stream of tokens with spans. Errors
    are raised as LexerError at the first invalid input.
    """

    def __init__(self, source: str, filename: str = "<unknown>"):
        """
        Initialize the lexer with source code.

        Args:
            source: Source code string
            filename: Name of source file for error reporting
        """
        self.source = source
        self.filename = filename
        self.pos = 0
        self.line = 1
        self.column = 1

        # Precompile regex patterns for efficiency
        self._compile_patterns()

    def _compile_patterns(self):
        """Compile regex patterns used by the lexer."""
        self.number_pattern = re.compile(r'\d+(?:\.\d+)?')
        self.identifier_pattern = re.compile(r'[A-Za-z_][A-Za-z0-9_]*')

    def reset(self):
        """Rewind to the start of the source."""
        self.pos = 0
        self.line = 1
        self.column = 1

    def tokenize(self) -> List[Token]:
        """
        Tokenize the entire source code.

        Returns:
            List of tokens ending with a single EOF token
        """
        self.reset()
        tokens = []
        while True:
            token = self.next_token()
            tokens.append(token)
            if token.type == TokenType.EOF:
                break

        logger.debug("tokenized %s: %d tokens", self.filename, len(tokens))
        return tokens

    def next_token(self) -> Token:
        """Scan and return the next token, or EOF once input is exhausted."""
        self._skip_whitespace_and_comments()

        start_pos = self.pos
        start_line = self.line
        start_column = self.column

        if self.pos >= len(self.source):
            return Token(TokenType.EOF, "", None, self._span(start_line, start_column, start_pos))

        current_char = self.source[self.pos]

        # Numbers
        if current_char in DIGITS:
            return self._tokenize_number(start_line, start_column, start_pos)

        # Identifiers and keywords
        if current_char in IDENTIFIER_START:
            return self._tokenize_identifier_or_keyword(start_line, start_column, start_pos)

        # String literals
        if current_char == '"':
            return self._tokenize_string(start_line, start_column, start_pos)

        # Operators and punctuation (multi-character first)
        for op_len in _OPERATOR_LENGTHS:
            potential_op = self.source[self.pos:self.pos + op_len]
            if potential_op in OPERATORS:
                self._advance_by(op_len)
                return Token(
                    OPERATORS[potential_op],
                    potential_op,
                    None,
                    self._span(start_line, start_column, start_pos)
                )

        raise create_invalid_character_error(
            current_char,
            Span(start_line, start_column, start_pos, 1, self.filename)
        )

    def _span(self, line: int, column: int, offset: int) -> Span:
        """Span from a recorded start up to the current position."""
        return Span(line, column, offset, self.pos - offset, self.filename)

    def _tokenize_number(self, line: int, column: int, offset: int) -> Token:
        """Tokenize a number literal; all numbers are floats."""
        match = self.number_pattern.match(self.source, self.pos)
        lexeme = match.group(0)
        self._advance_by(len(lexeme))
        return Token(TokenType.NUMBER, lexeme, float(lexeme), self._span(line, column, offset))

    def _tokenize_identifier_or_keyword(self, line: int, column: int, offset: int) -> Token:
        """Tokenize an identifier or keyword."""
        match = self.identifier_pattern.match(self.source, self.pos)
        lexeme = match.group(0)
        self._advance_by(len(lexeme))

        token_type = KEYWORDS.get(lexeme, TokenType.IDENTIFIER)
        value = lexeme if token_type == TokenType.IDENTIFIER else None

        # Handle boolean literals
        if token_type in (TokenType.TRUE, TokenType.FALSE):
            value = token_type == TokenType.TRUE

        return Token(token_type, lexeme, value, self._span(line, column, offset))

    def _tokenize_string(self, line: int, column: int, offset: int) -> Token:
        """Tokenize a double-quoted string literal. Strings may span lines."""
        self._advance()  # Skip opening quote
        chars = []

        while self.pos < len(self.source) and self.source[self.pos] != '"':
            if self.source[self.pos] == '\\':
                chars.append(self._handle_escape_sequence())
            else:
                chars.append(self.source[self.pos])
                self._advance()

        if self.pos >= len(self.source):
            raise create_unterminated_string_error(self._span(line, column, offset))

        self._advance()  # Skip closing quote
        lexeme = self.source[offset:self.pos]
        return Token(TokenType.STRING, lexeme, "".join(chars), self._span(line, column, offset))

    def _handle_escape_sequence(self) -> str:
        """Consume a backslash escape and return the character it stands for."""
        start_line, start_column, start_pos = self.line, self.column, self.pos
        self._advance()  # Skip backslash

        if self.pos >= len(self.source):
            raise create_unterminated_string_error(self._span(start_line, start_column, start_pos))

        escape_char = self.source[self.pos]
        self._advance()

        if escape_char not in ESCAPE_SEQUENCES:
            raise create_invalid_escape_error(
                "\\" + escape_char,
                self._span(start_line, start_column, start_pos)
            )
        return ESCAPE_SEQUENCES[escape_char]

    def _skip_whitespace_and_comments(self):
        """Skip whitespace and comments."""
        while self.pos < len(self.source):
            # Skip whitespace, newlines included
            if self.source[self.pos].isspace():
                self._advance()
                continue

            # Skip line comments //
            if self.source.startswith('//', self.pos):
                while self.pos < len(self.source) and self.source[self.pos] != '\n':
                    self._advance()
                continue

            # Skip block comments /* */
            if self.source.startswith('/*', self.pos):
                start_line, start_column, start_pos = self.line, self.column, self.pos
                self._advance_by(2)
                while self.pos < len(self.source) and not self.source.startswith('*/', self.pos):
                    self._advance()
                if self.pos >= len(self.source):
                    raise create_unterminated_comment_error(
                        self._span(start_line, start_column, start_pos)
                    )
                self._advance_by(2)  # Skip closing */
                continue

            break

    def _advance(self):
        """Advance position by one character, updating line/column."""
        if self.pos < len(self.source):
            if self.source[self.pos] == '\n':
                self.line += 1
                self.column = 1
            else:
                self.column += 1
            self.pos += 1

    def _advance_by(self, count: int):
        """Advance position by multiple characters."""
        for _ in range(count):
            self._advance()


def tokenize_string(source: str, filename: str = "<string>") -> List[Token]:
    """
    Convenience function to tokenize a source string.

    Args:
        source: Source code string
        filename: Filename for error reporting

    Returns:
        List of tokens

    Raises:
        LexerError: If lexing fails
    """
    return Lexer(source, filename).tokenize()


def tokenize_file(filepath: str) -> List[Token]:
    """
    Convenience function to tokenize a source file.

    Raises:
        LexerError: If lexing fails
        IOError: If file cannot be read
    """
    with open(filepath, 'r', encoding='utf-8') as f:
        source = f.read()

    return tokenize_string(source, filepath)
