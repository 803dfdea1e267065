"""
Error handling for the Lumen parser.

The parser stops at the first error. Each ParseError carries its kind, a
message and the span where it was detected, wrapped in a Diagnostic for
display.
"""

from enum import Enum
from typing import Optional, List

from ..lexer.tokens import Token, TokenType, Span, symbol_for
from ..lexer.errors import Diagnostic


class ParseErrorKind(Enum):
    """Categories of parse errors; values are the diagnostic codes."""
    MALFORMED_SYNTAX = "P001"
    EXPECTED_IDENTIFIER = "P002"
    INVALID_ASSIGNMENT_TARGET = "P003"
    SELF_INHERITING_CLASS = "P004"


class ParseError(Exception):
    """
    Exception raised when the parser encounters a syntax error.

    Contains detailed diagnostic information for error reporting.
    """

    def __init__(
        self,
        kind: ParseErrorKind,
        message: str,
        span: Span,
        token: Optional[Token] = None,
        help_text: Optional[str] = None,
        suggestions: Optional[List[str]] = None
    ):
        super().__init__(message)
        self.kind = kind
        self.message = message
        self.span = span
        self.token = token
        self.diagnostic = Diagnostic(
            message=message,
            location=span,
            severity="error",
            code=kind.value,
            help_text=help_text,
            suggestions=suggestions
        )

    def __str__(self) -> str:
        return str(self.diagnostic)


_TOKEN_SUGGESTIONS = {
    TokenType.SEMICOLON: ["Add a semicolon ';' to end the statement"],
    TokenType.RIGHT_PAREN: ["Add a closing parenthesis ')'"],
    TokenType.RIGHT_BRACE: ["Add a closing brace '}'"],
    TokenType.LEFT_BRACE: ["Add an opening brace '{' to start a block"],
    TokenType.LEFT_PAREN: ["Add an opening parenthesis '('"],
}


def describe_token(token: Token) -> str:
    """How a token is named in error messages."""
    if token.type == TokenType.EOF:
        return "end of input"
    return f"'{token.lexeme}'"


# Helper functions for creating common parser errors

def create_unexpected_token_error(expected: TokenType, found: Token) -> ParseError:
    """Create an error for a token other than the one the grammar requires."""
    expected_str = f"'{symbol_for(expected)}'"
    found_str = describe_token(found)

    return ParseError(
        ParseErrorKind.MALFORMED_SYNTAX,
        f"Expected {expected_str}, found {found_str}",
        found.span,
        token=found,
        help_text=f"The parser expected to see {expected_str} at this position, but found {found_str} instead.",
        suggestions=_TOKEN_SUGGESTIONS.get(expected, [])
    )


def create_expected_identifier_error(found: Token, what: str = "identifier") -> ParseError:
    """Create an error for a missing name."""
    return ParseError(
        ParseErrorKind.EXPECTED_IDENTIFIER,
        f"Expected {what}, found {describe_token(found)}",
        found.span,
        token=found,
        help_text="Names must start with a letter or '_' and must not be keywords."
    )


def create_expected_expression_error(found: Token) -> ParseError:
    """Create an error for a token that cannot start an expression."""
    found_str = describe_token(found)
    return ParseError(
        ParseErrorKind.MALFORMED_SYNTAX,
        "Expected expression",
        found.span,
        token=found,
        help_text=f"{found_str[0].upper()}{found_str[1:]} cannot start an expression.",
        suggestions=["Check the expression syntax", "Ensure all operators have operands"]
    )


def create_invalid_assignment_error(operator: Token) -> ParseError:
    """Create an error for assigning to something that is not a variable or field."""
    return ParseError(
        ParseErrorKind.INVALID_ASSIGNMENT_TARGET,
        "Invalid assignment target",
        operator.span,
        token=operator,
        help_text=f"Only variables and fields can appear on the left of '{operator.lexeme}'."
    )


def create_self_inheritance_error(superclass: Token) -> ParseError:
    """Create an error for a class naming itself as its superclass."""
    return ParseError(
        ParseErrorKind.SELF_INHERITING_CLASS,
        "A class cannot inherit from itself",
        superclass.span,
        token=superclass,
        suggestions=["Remove the '<' clause or name a different class"]
    )


def create_nesting_error(found: Token) -> ParseError:
    """Create an error for input nested deeper than the parser's recursion allows."""
    return ParseError(
        ParseErrorKind.MALFORMED_SYNTAX,
        "Expression nested too deeply",
        found.span,
        token=found,
        help_text="Parentheses and blocks nest beyond what the parser can handle.",
        suggestions=["Split the expression using intermediate variables"]
    )
