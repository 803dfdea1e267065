"""
Lumen Front End Package

The syntactic front end of the Lumen scripting language: a lexer that
produces tokens on demand and a parser that turns them into an immutable
AST for a tree-walking evaluator to consume.

Architecture:
    lumen/
    ├── lexer/           # Tokens, spans and token sources
    └── parser/          # AST nodes, visitors, parser and diagnostics
"""

__version__ = "0.1.0"
__license__ = "MIT"

# Core exports
from .lexer import Lexer, LexerError
from .parser import Parser, ParseError, parse_string, parse_file

__all__ = [
    # Core classes
    "Lexer",
    "Parser",
    "LexerError",
    "ParseError",
    "parse_string",
    "parse_file",

    # Version info
    "__version__",
    "__license__",
]
