"""
Lumen recursive-descent parser.

Statements are parsed by recursive descent. Binary operators are parsed by
precedence climbing over the Precedence table: each level parses the next
higher level, then folds left while the current token belongs to it.
Assignment sits on top and rewrites its left-hand side into a target.

The parser holds exactly two tokens (previous and current), never
backtracks, and stops at the first error.
"""

import logging
from enum import IntEnum
from typing import Callable, Dict, List, Optional, Sequence, Tuple, Union

from ..lexer.tokens import Token, TokenType
from ..lexer.stream import TokenSource, TokenStream
from .ast_nodes import (
    Expr, Stmt, Program,
    Literal, Variable, Grouping, Unary, Binary, Logical, Assign, Set, Get, Call, Super,
    ExpressionStmt, PrintStmt, BlockStmt, LetStmt, IfStmt, WhileStmt, ForStmt,
    FunctionStmt, ReturnStmt, ClassStmt, BreakStmt, ContinueStmt,
)
from .errors import (
    ParseError, create_unexpected_token_error, create_expected_identifier_error,
    create_expected_expression_error, create_invalid_assignment_error,
    create_self_inheritance_error, create_nesting_error,
)

logger = logging.getLogger(__name__)


class Precedence(IntEnum):
    """Operator precedence levels, lowest first."""
    NONE = 0
    ASSIGNMENT = 1      # =, +=, -=, etc.
    OR = 2              # ||, or
    AND = 3             # &&, and
    EQUALITY = 4        # ==, !=
    COMPARISON = 5      # <, >, <=, >=
    TERM = 6            # +, -, |, &, ^
    FACTOR = 7          # *, /
    UNARY = 8           # !, -, +
    CALL = 9            # function calls, field access
    PRIMARY = 10        # literals, identifiers, parentheses


ASSIGNMENT_OPERATORS = frozenset({
    TokenType.ASSIGN,
    TokenType.PLUS_ASSIGN,
    TokenType.MINUS_ASSIGN,
    TokenType.MODULO_ASSIGN,
    TokenType.DIVIDE_ASSIGN,
    TokenType.AND_ASSIGN,
    TokenType.OR_ASSIGN,
    TokenType.MULTIPLY_ASSIGN,
    TokenType.XOR_ASSIGN,
})

UNARY_OPERATORS = frozenset({
    TokenType.MINUS,
    TokenType.PLUS,
    TokenType.LOGICAL_NOT,
})

# Binary operator precedence table
PRECEDENCES: Dict[TokenType, Precedence] = {
    # Logical OR
    TokenType.LOGICAL_OR: Precedence.OR,

    # Logical AND
    TokenType.LOGICAL_AND: Precedence.AND,

    # Equality
    TokenType.EQUAL: Precedence.EQUALITY,
    TokenType.NOT_EQUAL: Precedence.EQUALITY,

    # Comparison
    TokenType.LESS_THAN: Precedence.COMPARISON,
    TokenType.LESS_EQUAL: Precedence.COMPARISON,
    TokenType.GREATER_THAN: Precedence.COMPARISON,
    TokenType.GREATER_EQUAL: Precedence.COMPARISON,

    # Addition/Subtraction and bitwise
    TokenType.PLUS: Precedence.TERM,
    TokenType.MINUS: Precedence.TERM,
    TokenType.BIT_OR: Precedence.TERM,
    TokenType.BIT_AND: Precedence.TERM,
    TokenType.BIT_XOR: Precedence.TERM,

    # Multiplication/Division
    TokenType.MULTIPLY: Precedence.FACTOR,
    TokenType.DIVIDE: Precedence.FACTOR,
}

# Levels folded into Logical nodes; the rest build Binary nodes
LOGICAL_LEVELS = frozenset({
    Precedence.OR,
    Precedence.AND,
    Precedence.EQUALITY,
    Precedence.COMPARISON,
})

# The tightest binary level; anything above it is unary
HIGHEST_BINARY = Precedence.FACTOR


def get_precedence(token_type: TokenType) -> Precedence:
    """Get the binary precedence of a token type (NONE if not an operator)."""
    return PRECEDENCES.get(token_type, Precedence.NONE)


class Parser:
    """
    Lumen parser.

    Pulls tokens from a TokenSource and builds a Program. A parser
    instance is single-use: create a new one for each token stream.
    """

    def __init__(self, source: Union[TokenSource, Sequence[Token]]):
        """
        Initialize the parser.

        Args:
            source: A TokenSource (such as a Lexer) or a list of tokens
        """
        if not isinstance(source, TokenSource):
            source = TokenStream(source)
        self.source = source
        self.current: Token = source.next_token()
        self.previous: Token = self.current

        self._statement_parsers: Dict[TokenType, Callable[[], Stmt]] = {
            TokenType.PRINT: self._parse_print_statement,
            TokenType.IF: self._parse_if_statement,
            TokenType.WHILE: self._parse_while_statement,
            TokenType.FOR: self._parse_for_statement,
            TokenType.RETURN: self._parse_return_statement,
            TokenType.BREAK: self._parse_break_statement,
            TokenType.CONTINUE: self._parse_continue_statement,
            TokenType.LEFT_BRACE: self._parse_block_statement,
        }

    def parse_program(self) -> Program:
        """
        Parse the whole token stream into a Program.

        Returns:
            Program holding every top-level statement in source order

        Raises:
            ParseError: At the first syntax error, or when input nests deeper
                than the recursion limit; no partial program is built
        """
        first = self.current
        statements: List[Stmt] = []

        logger.debug("parse started at %s", first.span)
        try:
            while not self._check(TokenType.EOF):
                statements.append(self._parse_declaration())
        except ParseError as e:
            logger.debug("parse failed: %s at %s", e.message, e.span)
            raise
        except RecursionError:
            logger.debug("parse failed: nesting too deep at %s", self.current.span)
            raise create_nesting_error(self.current) from None

        span = first.span.to(self.previous.span) if statements else first.span
        logger.debug("parse finished: %d top-level statements", len(statements))
        return Program(tuple(statements), span)

    # ------------------------------------------------------------------
    # Declarations
    # ------------------------------------------------------------------

    def _parse_declaration(self) -> Stmt:
        """Parse a declaration, falling through to a statement."""
        if self._check(TokenType.LET) or self._check(TokenType.CONST):
            return self._parse_let_declaration()
        if self._check(TokenType.CLASS):
            return self._parse_class_declaration()
        if self._check(TokenType.FN):
            start_token = self._advance()
            return self._parse_function(start_token)
        return self._parse_statement()

    def _parse_let_declaration(self) -> LetStmt:
        """Parse `let name [= expr];` or `const name [= expr];`."""
        start_token = self._advance()
        is_const = start_token.type == TokenType.CONST

        name_token = self._consume_identifier("variable name")

        initializer = None
        if self._match(TokenType.ASSIGN):
            initializer = self._parse_expression()

        end_token = self._consume(TokenType.SEMICOLON)
        return LetStmt(
            name=name_token.lexeme,
            initializer=initializer,
            is_const=is_const,
            span=start_token.span.to(end_token.span),
        )

    def _parse_class_declaration(self) -> ClassStmt:
        """Parse `class Name [< Super] { methods }`."""
        start_token = self._advance()
        name_token = self._consume_identifier("class name")

        superclass = None
        if self._match(TokenType.LESS_THAN):
            superclass_token = self._consume_identifier("superclass name")
            if superclass_token.lexeme == name_token.lexeme:
                raise create_self_inheritance_error(superclass_token)
            superclass = superclass_token.lexeme

        self._consume(TokenType.LEFT_BRACE)
        methods = []
        while not self._check(TokenType.RIGHT_BRACE) and not self._check(TokenType.EOF):
            methods.append(self._parse_function(self.current))
        end_token = self._consume(TokenType.RIGHT_BRACE)

        return ClassStmt(
            name=name_token.lexeme,
            superclass=superclass,
            methods=tuple(methods),
            span=start_token.span.to(end_token.span),
        )

    def _parse_function(self, start_token: Token) -> FunctionStmt:
        """Parse `name(params) { body }`; the `fn` keyword is already consumed."""
        name_token = self._consume_identifier("function name")

        self._consume(TokenType.LEFT_PAREN)
        params = []
        if not self._check(TokenType.RIGHT_PAREN):
            params.append(self._consume_identifier("parameter name").lexeme)
            while self._match(TokenType.COMMA):
                params.append(self._consume_identifier("parameter name").lexeme)
        self._consume(TokenType.RIGHT_PAREN)

        body = self._parse_block_statement()
        return FunctionStmt(
            name=name_token.lexeme,
            params=tuple(params),
            body=body,
            span=start_token.span.to(body.span),
        )

    # ------------------------------------------------------------------
    # Statements
    # ------------------------------------------------------------------

    def _parse_statement(self) -> Stmt:
        """Parse a statement, dispatching on the current token."""
        statement_parser = self._statement_parsers.get(self.current.type)
        if statement_parser is not None:
            return statement_parser()
        return self._parse_expression_statement()

    def _parse_expression_statement(self) -> ExpressionStmt:
        expression = self._parse_expression()
        end_token = self._consume(TokenType.SEMICOLON)
        return ExpressionStmt(expression, expression.span.to(end_token.span))

    def _parse_print_statement(self) -> PrintStmt:
        start_token = self._advance()
        expression = self._parse_expression()
        end_token = self._consume(TokenType.SEMICOLON)
        return PrintStmt(expression, start_token.span.to(end_token.span))

    def _parse_return_statement(self) -> ReturnStmt:
        """Parse `return [expr];`."""
        start_token = self._advance()

        value = None
        if not self._check(TokenType.SEMICOLON):
            value = self._parse_expression()

        end_token = self._consume(TokenType.SEMICOLON)
        return ReturnStmt(value, start_token.span.to(end_token.span))

    def _parse_break_statement(self) -> BreakStmt:
        start_token = self._advance()
        end_token = self._consume(TokenType.SEMICOLON)
        return BreakStmt(start_token.span.to(end_token.span))

    def _parse_continue_statement(self) -> ContinueStmt:
        start_token = self._advance()
        end_token = self._consume(TokenType.SEMICOLON)
        return ContinueStmt(start_token.span.to(end_token.span))

    def _parse_if_statement(self) -> IfStmt:
        """Parse `if (cond) stmt [else stmt]`."""
        start_token = self._advance()

        self._consume(TokenType.LEFT_PAREN)
        condition = self._parse_expression()
        self._consume(TokenType.RIGHT_PAREN)

        then_branch = self._parse_statement()

        else_branch = None
        if self._match(TokenType.ELSE):
            else_branch = self._parse_statement()

        end_span = (else_branch or then_branch).span
        return IfStmt(condition, then_branch, else_branch, start_token.span.to(end_span))

    def _parse_while_statement(self) -> WhileStmt:
        """Parse `while (cond) stmt`."""
        start_token = self._advance()

        self._consume(TokenType.LEFT_PAREN)
        condition = self._parse_expression()
        self._consume(TokenType.RIGHT_PAREN)

        body = self._parse_statement()
        return WhileStmt(condition, body, start_token.span.to(body.span))

    def _parse_for_statement(self) -> ForStmt:
        """Parse `for (init; cond; incr) stmt`; every clause is optional."""
        start_token = self._advance()
        self._consume(TokenType.LEFT_PAREN)

        initializer: Optional[Stmt]
        if self._match(TokenType.SEMICOLON):
            initializer = None
        elif self._check(TokenType.LET) or self._check(TokenType.CONST):
            initializer = self._parse_let_declaration()
        else:
            initializer = self._parse_expression_statement()

        condition = None
        if not self._check(TokenType.SEMICOLON):
            condition = self._parse_expression()
        self._consume(TokenType.SEMICOLON)

        increment = None
        if not self._check(TokenType.RIGHT_PAREN):
            increment = self._parse_expression()
        self._consume(TokenType.RIGHT_PAREN)

        body = self._parse_statement()
        return ForStmt(
            initializer=initializer,
            condition=condition,
            increment=increment,
            body=body,
            span=start_token.span.to(body.span),
        )

    def _parse_block_statement(self) -> BlockStmt:
        """Parse `{ declarations }`."""
        start_token = self._consume(TokenType.LEFT_BRACE)
        statements = []

        while not self._check(TokenType.RIGHT_BRACE) and not self._check(TokenType.EOF):
            statements.append(self._parse_declaration())

        end_token = self._consume(TokenType.RIGHT_BRACE)
        return BlockStmt(tuple(statements), start_token.span.to(end_token.span))

    # ------------------------------------------------------------------
    # Expressions
    # ------------------------------------------------------------------

    def _parse_expression(self) -> Expr:
        return self._parse_assignment()

    def _parse_assignment(self) -> Expr:
        """
        Parse an assignment or a plain expression.

        Both sides are parsed at OR level, so `a = b = c` needs parentheses.
        The left side is rewritten: Variable becomes Assign, Get becomes Set.
        """
        left = self._parse_precedence(Precedence.OR)

        if self.current.type not in ASSIGNMENT_OPERATORS:
            return left

        operator_token = self._advance()
        value = self._parse_precedence(Precedence.OR)
        span = left.span.to(value.span)

        if isinstance(left, Variable):
            return Assign(left.name, value, span, operator_token.type)
        if isinstance(left, Get):
            return Set(left.object, left.name, value, span, operator_token.type)

        raise create_invalid_assignment_error(operator_token)

    def _parse_precedence(self, precedence: Precedence) -> Expr:
        """Parse a left-associative chain of operators at this level."""
        if precedence > HIGHEST_BINARY:
            return self._parse_unary()

        next_level = Precedence(precedence + 1)
        node = Logical if precedence in LOGICAL_LEVELS else Binary

        left = self._parse_precedence(next_level)
        while get_precedence(self.current.type) == precedence:
            operator_token = self._advance()
            right = self._parse_precedence(next_level)
            left = node(left, operator_token.type, right, left.span.to(right.span))
        return left

    def _parse_unary(self) -> Expr:
        """Parse prefix operators; right-associative by recursion."""
        if self.current.type in UNARY_OPERATORS:
            operator_token = self._advance()
            operand = self._parse_unary()
            return Unary(operator_token.type, operand, operator_token.span.to(operand.span))
        return self._parse_call()

    def _parse_call(self) -> Expr:
        """Parse a primary followed by any chain of calls and field accesses."""
        expr = self._parse_primary()

        while True:
            if self._match(TokenType.LEFT_PAREN):
                arguments = self._parse_arguments()
                end_token = self._consume(TokenType.RIGHT_PAREN)
                expr = Call(expr, arguments, expr.span.to(end_token.span))
            elif self._match(TokenType.DOT):
                name_token = self._consume_identifier("property name after '.'")
                expr = Get(expr, name_token.lexeme, expr.span.to(name_token.span))
            else:
                break

        return expr

    def _parse_arguments(self) -> Tuple[Expr, ...]:
        """Parse a comma-separated argument list; `(` is already consumed."""
        arguments = []
        if not self._check(TokenType.RIGHT_PAREN):
            arguments.append(self._parse_expression())
            while self._match(TokenType.COMMA):
                arguments.append(self._parse_expression())
        return tuple(arguments)

    def _parse_primary(self) -> Expr:
        """Parse literals, names, `this`, `super.name` and groupings."""
        token = self.current

        if token.type in (TokenType.TRUE, TokenType.FALSE, TokenType.NUMBER, TokenType.STRING):
            self._advance()
            return Literal(token.value, token.span)

        if token.type == TokenType.IDENTIFIER:
            self._advance()
            return Variable(token.lexeme, token.span)

        if token.type == TokenType.THIS:
            self._advance()
            return Variable("this", token.span)

        if token.type == TokenType.SUPER:
            self._advance()
            self._consume(TokenType.DOT)
            method_token = self._consume_identifier("superclass method name")
            return Super(method_token.lexeme, token.span.to(method_token.span))

        if token.type == TokenType.LEFT_PAREN:
            self._advance()
            expression = self._parse_expression()
            end_token = self._consume(TokenType.RIGHT_PAREN)
            return Grouping(expression, token.span.to(end_token.span))

        raise create_expected_expression_error(token)

    # ------------------------------------------------------------------
    # Utility methods
    # ------------------------------------------------------------------

    def _advance(self) -> Token:
        """Consume the current token, pull the next one and return the consumed token."""
        self.previous = self.current
        if self.current.type != TokenType.EOF:
            self.current = self.source.next_token()
        return self.previous

    def _check(self, token_type: TokenType) -> bool:
        """Check if current token matches type without consuming."""
        return self.current.type == token_type

    def _match(self, token_type: TokenType) -> bool:
        """Check if current token matches type and consume if so."""
        if self._check(token_type):
            self._advance()
            return True
        return False

    def _consume(self, token_type: TokenType) -> Token:
        """Consume token of expected type or raise error."""
        if self._check(token_type):
            return self._advance()
        raise create_unexpected_token_error(token_type, self.current)

    def _consume_identifier(self, what: str) -> Token:
        """Consume an identifier or raise an expected-identifier error."""
        if self._check(TokenType.IDENTIFIER):
            return self._advance()
        raise create_expected_identifier_error(self.current, what)


def parse_string(source: str, filename: str = "<string>") -> Program:
    """
    Convenience function to parse a source string.

    Args:
        source: Source code string
        filename: Filename for error reporting

    Returns:
        Program AST

    Raises:
        LexerError: If the source contains invalid tokens
        ParseError: If parsing fails
    """
    from ..lexer import Lexer

    return Parser(Lexer(source, filename)).parse_program()


def parse_file(filepath: str) -> Program:
    """
    Convenience function to parse a source file.

    Raises:
        LexerError: If the source contains invalid tokens
        ParseError: If parsing fails
        IOError: If file cannot be read
    """
    with open(filepath, 'r', encoding='utf-8') as f:
        source = f.read()

    return parse_string(source, filepath)
