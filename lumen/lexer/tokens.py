"""
Token definitions for the Lumen lexer.

This module defines all token types supported by Lumen, including:
- Keywords (declarations, control flow, class support)
- Operators (arithmetic, bitwise, logical, comparison, assignment)
- Literals (numbers, strings, booleans)
- Identifiers
- Punctuation and delimiters
"""

from enum import Enum, auto
from dataclasses import dataclass
from typing import Any, Dict


class TokenType(Enum):
    """
    Enumeration of all token types in Lumen.

    Organized by category for clarity and maintainability.
    """

    # ========================================================================
    # Special Tokens
    # ========================================================================
    EOF = auto()                    # End of input

    # ========================================================================
    # Literals
    # ========================================================================
    NUMBER = auto()                 # 42, 3.14
    STRING = auto()                 # "hello"
    TRUE = auto()                   # true
    FALSE = auto()                  # false

    # ========================================================================
    # Identifiers and Keywords
    # ========================================================================
    IDENTIFIER = auto()             # variable_name

    # Declaration keywords
    LET = auto()                    # let
    CONST = auto()                  # const
    CLASS = auto()                  # class
    FN = auto()                     # fn, function

    # Statement keywords
    PRINT = auto()                  # print
    IF = auto()                     # if
    ELSE = auto()                   # else
    WHILE = auto()                  # while
    FOR = auto()                    # for
    RETURN = auto()                 # return
    BREAK = auto()                  # break
    CONTINUE = auto()               # continue

    # Class keywords
    THIS = auto()                   # this
    SUPER = auto()                  # super

    # ========================================================================
    # Operators
    # ========================================================================

    # Logical operators
    LOGICAL_OR = auto()             # ||, or
    LOGICAL_AND = auto()            # &&, and
    LOGICAL_NOT = auto()            # !, not

    # Arithmetic operators
    PLUS = auto()                   # +
    MINUS = auto()                  # -
    MULTIPLY = auto()               # *
    DIVIDE = auto()                 # /
    MODULO = auto()                 # %

    # Bitwise operators
    BIT_OR = auto()                 # |
    BIT_AND = auto()                # &
    BIT_XOR = auto()                # ^

    # Comparison operators
    EQUAL = auto()                  # ==
    NOT_EQUAL = auto()              # !=
    LESS_THAN = auto()              # <
    LESS_EQUAL = auto()             # <=
    GREATER_THAN = auto()           # >
    GREATER_EQUAL = auto()          # >=

    # Assignment operators
    ASSIGN = auto()                 # =
    PLUS_ASSIGN = auto()            # +=
    MINUS_ASSIGN = auto()           # -=
    MODULO_ASSIGN = auto()          # %=
    DIVIDE_ASSIGN = auto()          # /=
    AND_ASSIGN = auto()             # &=
    OR_ASSIGN = auto()              # |=
    MULTIPLY_ASSIGN = auto()        # *=
    XOR_ASSIGN = auto()             # ^=

    # ========================================================================
    # Punctuation and Delimiters
    # ========================================================================
    LEFT_PAREN = auto()             # (
    RIGHT_PAREN = auto()            # )
    LEFT_BRACE = auto()             # {
    RIGHT_BRACE = auto()            # }
    COMMA = auto()                  # ,
    DOT = auto()                    # .
    SEMICOLON = auto()              # ;


@dataclass(frozen=True)
class Span:
    """
    Represents a region of the source code.

    Attached to every token, AST node and diagnostic. Spans are never
    mutated; covering spans are built with `to`.
    """
    line: int
    column: int
    offset: int  # Character offset of the first character
    length: int
    filename: str = "<unknown>"

    @property
    def end(self) -> int:
        """Offset one past the last covered character."""
        return self.offset + self.length

    def to(self, other: "Span") -> "Span":
        """Return a span starting at this span and ending where `other` ends."""
        end = max(self.end, other.end)
        return Span(self.line, self.column, self.offset, end - self.offset, self.filename)

    def __str__(self) -> str:
        return f"{self.filename}:{self.line}:{self.column}"


@dataclass(frozen=True)
class Token:
    """
    Represents a lexical token in the Lumen language.

    Contains the token type, lexeme (raw text), semantic value,
    and span for error reporting.
    """
    type: TokenType
    lexeme: str                     # Raw text from source
    value: Any                      # Parsed/semantic value (e.g., float for NUMBER)
    span: Span

    def __str__(self) -> str:
        if self.value is not None and self.value != self.lexeme:
            return f"{self.type.name}({self.lexeme!r} -> {self.value!r})"
        return f"{self.type.name}({self.lexeme!r})"

    @property
    def is_literal(self) -> bool:
        """Check if this token is a literal value."""
        return self.type in {
            TokenType.NUMBER, TokenType.STRING, TokenType.TRUE, TokenType.FALSE
        }

    @property
    def is_keyword(self) -> bool:
        """Check if this token is a keyword."""
        return self.type in KEYWORD_TYPES

    @property
    def is_identifier(self) -> bool:
        """Check if this token is an identifier."""
        return self.type == TokenType.IDENTIFIER


# Lookup tables used by the lexer for keyword/operator recognition

KEYWORDS: Dict[str, TokenType] = {
    # Declarations
    "let": TokenType.LET,
    "const": TokenType.CONST,
    "class": TokenType.CLASS,
    "fn": TokenType.FN,
    "function": TokenType.FN,  # function is alias for fn

    # Statements
    "print": TokenType.PRINT,
    "if": TokenType.IF,
    "else": TokenType.ELSE,
    "while": TokenType.WHILE,
    "for": TokenType.FOR,
    "return": TokenType.RETURN,
    "break": TokenType.BREAK,
    "continue": TokenType.CONTINUE,

    # Classes
    "this": TokenType.THIS,
    "super": TokenType.SUPER,

    # Literals
    "true": TokenType.TRUE,
    "false": TokenType.FALSE,

    # Word forms of logical operators
    "or": TokenType.LOGICAL_OR,
    "and": TokenType.LOGICAL_AND,
    "not": TokenType.LOGICAL_NOT,
}

KEYWORD_TYPES = frozenset(
    token_type for token_type in KEYWORDS.values()
    if token_type not in (TokenType.LOGICAL_OR, TokenType.LOGICAL_AND, TokenType.LOGICAL_NOT)
)

OPERATORS: Dict[str, TokenType] = {
    # Logical
    "||": TokenType.LOGICAL_OR,
    "&&": TokenType.LOGICAL_AND,
    "!": TokenType.LOGICAL_NOT,

    # Arithmetic
    "+": TokenType.PLUS,
    "-": TokenType.MINUS,
    "*": TokenType.MULTIPLY,
    "/": TokenType.DIVIDE,
    "%": TokenType.MODULO,

    # Bitwise
    "|": TokenType.BIT_OR,
    "&": TokenType.BIT_AND,
    "^": TokenType.BIT_XOR,

    # Comparison
    "==": TokenType.EQUAL,
    "!=": TokenType.NOT_EQUAL,
    "<": TokenType.LESS_THAN,
    "<=": TokenType.LESS_EQUAL,
    ">": TokenType.GREATER_THAN,
    ">=": TokenType.GREATER_EQUAL,

    # Assignment
    "=": TokenType.ASSIGN,
    "+=": TokenType.PLUS_ASSIGN,
    "-=": TokenType.MINUS_ASSIGN,
    "%=": TokenType.MODULO_ASSIGN,
    "/=": TokenType.DIVIDE_ASSIGN,
    "&=": TokenType.AND_ASSIGN,
    "|=": TokenType.OR_ASSIGN,
    "*=": TokenType.MULTIPLY_ASSIGN,
    "^=": TokenType.XOR_ASSIGN,

    # Punctuation
    "(": TokenType.LEFT_PAREN,
    ")": TokenType.RIGHT_PAREN,
    "{": TokenType.LEFT_BRACE,
    "}": TokenType.RIGHT_BRACE,
    ",": TokenType.COMMA,
    ".": TokenType.DOT,
    ";": TokenType.SEMICOLON,
}

# Canonical spelling for each operator type (first entry in OPERATORS wins)
SYMBOLS: Dict[TokenType, str] = {}
for _lexeme, _token_type in OPERATORS.items():
    SYMBOLS.setdefault(_token_type, _lexeme)
del _lexeme, _token_type


def symbol_for(token_type: TokenType) -> str:
    """Return the canonical source spelling of a token type."""
    if token_type in SYMBOLS:
        return SYMBOLS[token_type]
    for keyword, keyword_type in KEYWORDS.items():
        if keyword_type == token_type:
            return keyword
    return token_type.name
