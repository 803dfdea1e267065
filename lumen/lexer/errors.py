"""
Error handling for the Lumen lexer.

Provides error reporting with source location information and
IDE-friendly diagnostics. The Diagnostic type is shared with the parser.
"""

from typing import Optional, List
from dataclasses import dataclass
from .tokens import Span


@dataclass
class Diagnostic:
    """Base class for diagnostics (errors, warnings, info)."""
    message: str
    location: Span
    severity: str  # "error", "warning", "info", "hint"
    code: Optional[str] = None
    help_text: Optional[str] = None
    suggestions: Optional[List[str]] = None

    def __str__(self) -> str:
        severity_prefix = self.severity.upper()
        result = f"{severity_prefix}: {self.message}\n"
        result += f"  --> {self.location}\n"

        if self.help_text:
            result += f"  help: {self.help_text}\n"

        if self.suggestions:
            result += "  suggestions:\n"
            for suggestion in self.suggestions:
                result += f"    - {suggestion}\n"

        return result


class LexerError(Exception):
    """
    Exception raised when the lexer encounters a fatal error.

    Contains detailed diagnostic information for error reporting.
    """

    def __init__(
        self,
        message: str,
        location: Span,
        code: Optional[str] = None,
        help_text: Optional[str] = None,
        suggestions: Optional[List[str]] = None
    ):
        super().__init__(message)
        self.message = message
        self.span = location
        self.diagnostic = Diagnostic(
            message=message,
            location=location,
            severity="error",
            code=code,
            help_text=help_text,
            suggestions=suggestions
        )

    def __str__(self) -> str:
        return str(self.diagnostic)


# ASCII spellings that people reach for from other languages
_OPERATOR_HINTS = {
    "~": ["Use '^' for bitwise xor", "Use '!' for logical not"],
    "?": ["Use 'if (...) ... else ...' instead of a conditional expression"],
    "[": ["Indexing is not supported; use a method call instead"],
    "]": ["Indexing is not supported; use a method call instead"],
    ":": ["Type annotations are not supported"],
}


# Helper functions for creating common errors

def create_invalid_character_error(char: str, location: Span) -> LexerError:
    """Create an error for an invalid character."""
    suggestions = _OPERATOR_HINTS.get(char, [])

    if char.isprintable():
        help_text = f"The character '{char}' is not valid in Lumen source code."
    else:
        help_text = f"Non-printable character (Unicode: U+{ord(char):04X}) is not allowed."

    return LexerError(
        message=f"Invalid character: '{char}'",
        location=location,
        code="L001",
        help_text=help_text,
        suggestions=suggestions
    )


def create_unterminated_string_error(location: Span) -> LexerError:
    """Create an error for an unterminated string literal."""
    return LexerError(
        message="Unterminated string literal",
        location=location,
        code="L002",
        help_text="String literals must be closed with a matching '\"' quote.",
        suggestions=["Add a closing '\"' quote", "Check for unescaped quotes in the string"]
    )


def create_unterminated_comment_error(location: Span) -> LexerError:
    """Create an error for a block comment that never closes."""
    return LexerError(
        message="Unterminated block comment",
        location=location,
        code="L003",
        help_text="Block comments opened with '/*' must be closed with '*/'.",
        suggestions=["Add a closing '*/'"]
    )


def create_invalid_escape_error(sequence: str, location: Span) -> LexerError:
    """Create an error for an unknown escape sequence inside a string."""
    return LexerError(
        message=f"Invalid escape sequence: '{sequence}'",
        location=location,
        code="L004",
        help_text="Supported escapes are \\n, \\t, \\r, \\\" and \\\\.",
        suggestions=["Use '\\\\' for a literal backslash"]
    )
