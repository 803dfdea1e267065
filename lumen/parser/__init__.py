"""
Lumen Parser Package

Implements a recursive-descent parser for the Lumen scripting language.
Produces immutable Abstract Syntax Trees with source spans on every node.

Key Features:
- Precedence climbing over a single operator precedence table
- Two-token lookahead, no backtracking
- Assignment targets checked while parsing
- Stops at the first error with a span-accurate diagnostic
"""

from .ast_nodes import *
from .parser import Parser, Precedence, parse_string, parse_file
from .printer import AstPrinter, render
from .errors import ParseError, ParseErrorKind

__all__ = [
    # Core parser
    "Parser", "Precedence", "parse_string", "parse_file",

    # AST nodes
    "Program", "Expr", "Stmt", "ExprKind", "StmtKind",
    "Literal", "Variable", "Grouping", "Unary", "Binary", "Logical",
    "Assign", "Set", "Get", "Call", "Super",
    "ExpressionStmt", "PrintStmt", "BlockStmt", "LetStmt", "IfStmt",
    "WhileStmt", "ForStmt", "FunctionStmt", "ReturnStmt", "ClassStmt",
    "BreakStmt", "ContinueStmt",

    # Visitors
    "ExprVisitor", "StmtVisitor", "AstPrinter", "render",

    # Error handling
    "ParseError", "ParseErrorKind",
]
