"""
Abstract Syntax Tree node definitions for Lumen.

Expressions and statements are two tagged unions: every variant is an
immutable dataclass carrying its `kind` tag and the span it was parsed
from. Children are owned by exactly one parent and sequences are tuples,
so a tree is never modified after the parser returns it.

Consumers walk the tree through ExprVisitor and StmtVisitor. Every visit
method is abstract, so a consumer that forgets a variant cannot be
instantiated.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from enum import Enum
from typing import Any, ClassVar, Optional, Tuple, Union

from ..lexer.tokens import Span, TokenType


class ExprKind(Enum):
    """Tags of the expression union."""
    LITERAL = "Literal"
    VARIABLE = "Variable"
    GROUPING = "Grouping"
    UNARY = "Unary"
    BINARY = "Binary"
    LOGICAL = "Logical"
    ASSIGN = "Assign"
    SET = "Set"
    GET = "Get"
    CALL = "Call"
    SUPER = "Super"


class StmtKind(Enum):
    """Tags of the statement union."""
    EXPRESSION = "Expression"
    PRINT = "Print"
    BLOCK = "Block"
    LET = "Let"
    IF = "If"
    WHILE = "While"
    FOR = "For"
    FUNCTION = "Function"
    RETURN = "Return"
    CLASS = "Class"
    BREAK = "Break"
    CONTINUE = "Continue"


LiteralValue = Union[bool, float, str]


# ============================================================================
# Visitor contracts
# ============================================================================

class ExprVisitor(ABC):
    """
    Consumer of expression nodes, one method per variant.

    Methods return the value the expression produces and raise to
    signal failure.
    """

    def visit_expr(self, expr: "Expr") -> Any:
        """Dispatch to the method for this expression's variant."""
        return expr.accept(self)

    @abstractmethod
    def visit_literal_expr(self, expr: "Literal") -> Any: ...

    @abstractmethod
    def visit_variable_expr(self, expr: "Variable") -> Any: ...

    @abstractmethod
    def visit_grouping_expr(self, expr: "Grouping") -> Any: ...

    @abstractmethod
    def visit_unary_expr(self, expr: "Unary") -> Any: ...

    @abstractmethod
    def visit_binary_expr(self, expr: "Binary") -> Any: ...

    @abstractmethod
    def visit_logical_expr(self, expr: "Logical") -> Any: ...

    @abstractmethod
    def visit_assign_expr(self, expr: "Assign") -> Any: ...

    @abstractmethod
    def visit_set_expr(self, expr: "Set") -> Any: ...

    @abstractmethod
    def visit_get_expr(self, expr: "Get") -> Any: ...

    @abstractmethod
    def visit_call_expr(self, expr: "Call") -> Any: ...

    @abstractmethod
    def visit_super_expr(self, expr: "Super") -> Any: ...


class StmtVisitor(ABC):
    """
    Consumer of statement nodes, one method per variant.

    Methods return None and raise to signal failure.
    """

    def visit_stmt(self, stmt: "Stmt") -> None:
        """Dispatch to the method for this statement's variant."""
        return stmt.accept(self)

    @abstractmethod
    def visit_expression_stmt(self, stmt: "ExpressionStmt") -> None: ...

    @abstractmethod
    def visit_print_stmt(self, stmt: "PrintStmt") -> None: ...

    @abstractmethod
    def visit_block_stmt(self, stmt: "BlockStmt") -> None: ...

    @abstractmethod
    def visit_let_stmt(self, stmt: "LetStmt") -> None: ...

    @abstractmethod
    def visit_if_stmt(self, stmt: "IfStmt") -> None: ...

    @abstractmethod
    def visit_while_stmt(self, stmt: "WhileStmt") -> None: ...

    @abstractmethod
    def visit_for_stmt(self, stmt: "ForStmt") -> None: ...

    @abstractmethod
    def visit_function_stmt(self, stmt: "FunctionStmt") -> None: ...

    @abstractmethod
    def visit_return_stmt(self, stmt: "ReturnStmt") -> None: ...

    @abstractmethod
    def visit_class_stmt(self, stmt: "ClassStmt") -> None: ...

    @abstractmethod
    def visit_break_stmt(self, stmt: "BreakStmt") -> None: ...

    @abstractmethod
    def visit_continue_stmt(self, stmt: "ContinueStmt") -> None: ...


# ============================================================================
# Expressions
# ============================================================================

class Expr(ABC):
    """Base class for expressions."""
    kind: ClassVar[ExprKind]
    span: Span

    @abstractmethod
    def accept(self, visitor: ExprVisitor) -> Any:
        """Accept a visitor (visitor pattern)."""
        pass


@dataclass(frozen=True)
class Literal(Expr):
    """
    Boolean, number or string literal.

    Equality also compares the value's type: `true` and `1` are different
    literals even though `True == 1.0` in Python.
    """
    kind: ClassVar[ExprKind] = ExprKind.LITERAL
    value: LiteralValue
    span: Span

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Literal):
            return NotImplemented
        return (
            type(self.value) is type(other.value)
            and self.value == other.value
            and self.span == other.span
        )

    def __hash__(self) -> int:
        return hash((type(self.value), self.value, self.span))

    def accept(self, visitor: ExprVisitor) -> Any:
        return visitor.visit_literal_expr(self)


@dataclass(frozen=True)
class Variable(Expr):
    """Reference to a named variable (`this` included)."""
    kind: ClassVar[ExprKind] = ExprKind.VARIABLE
    name: str
    span: Span

    def accept(self, visitor: ExprVisitor) -> Any:
        return visitor.visit_variable_expr(self)


@dataclass(frozen=True)
class Grouping(Expr):
    """Parenthesized expression."""
    kind: ClassVar[ExprKind] = ExprKind.GROUPING
    expression: Expr
    span: Span

    def accept(self, visitor: ExprVisitor) -> Any:
        return visitor.visit_grouping_expr(self)


@dataclass(frozen=True)
class Unary(Expr):
    """Prefix operator applied to one operand."""
    kind: ClassVar[ExprKind] = ExprKind.UNARY
    operator: TokenType
    operand: Expr
    span: Span

    def accept(self, visitor: ExprVisitor) -> Any:
        return visitor.visit_unary_expr(self)


@dataclass(frozen=True)
class Binary(Expr):
    """Arithmetic or bitwise operation."""
    kind: ClassVar[ExprKind] = ExprKind.BINARY
    left: Expr
    operator: TokenType
    right: Expr
    span: Span

    def accept(self, visitor: ExprVisitor) -> Any:
        return visitor.visit_binary_expr(self)


@dataclass(frozen=True)
class Logical(Expr):
    """Logical, equality or comparison operation."""
    kind: ClassVar[ExprKind] = ExprKind.LOGICAL
    left: Expr
    operator: TokenType
    right: Expr
    span: Span

    def accept(self, visitor: ExprVisitor) -> Any:
        return visitor.visit_logical_expr(self)


@dataclass(frozen=True)
class Assign(Expr):
    """
    Assignment to a variable.

    `operator` is the assignment-family token that produced the node. A
    compound operator such as `+=` is kept as written; expanding it into
    `name = name + value` is up to the consumer.
    """
    kind: ClassVar[ExprKind] = ExprKind.ASSIGN
    name: str
    value: Expr
    span: Span
    operator: TokenType = TokenType.ASSIGN

    def accept(self, visitor: ExprVisitor) -> Any:
        return visitor.visit_assign_expr(self)


@dataclass(frozen=True)
class Set(Expr):
    """Assignment to a field; same `operator` rules as Assign."""
    kind: ClassVar[ExprKind] = ExprKind.SET
    object: Expr
    name: str
    value: Expr
    span: Span
    operator: TokenType = TokenType.ASSIGN

    def accept(self, visitor: ExprVisitor) -> Any:
        return visitor.visit_set_expr(self)


@dataclass(frozen=True)
class Get(Expr):
    """Field or method access."""
    kind: ClassVar[ExprKind] = ExprKind.GET
    object: Expr
    name: str
    span: Span

    def accept(self, visitor: ExprVisitor) -> Any:
        return visitor.visit_get_expr(self)


@dataclass(frozen=True)
class Call(Expr):
    """Call of a callee with zero or more arguments."""
    kind: ClassVar[ExprKind] = ExprKind.CALL
    callee: Expr
    arguments: Tuple[Expr, ...]
    span: Span

    def accept(self, visitor: ExprVisitor) -> Any:
        return visitor.visit_call_expr(self)


@dataclass(frozen=True)
class Super(Expr):
    """`super.method` lookup."""
    kind: ClassVar[ExprKind] = ExprKind.SUPER
    method: str
    span: Span

    def accept(self, visitor: ExprVisitor) -> Any:
        return visitor.visit_super_expr(self)


# ============================================================================
# Statements
# ============================================================================

class Stmt(ABC):
    """Base class for statements."""
    kind: ClassVar[StmtKind]
    span: Span

    @abstractmethod
    def accept(self, visitor: StmtVisitor) -> None:
        """Accept a visitor (visitor pattern)."""
        pass


@dataclass(frozen=True)
class ExpressionStmt(Stmt):
    """Expression evaluated for its effect."""
    kind: ClassVar[StmtKind] = StmtKind.EXPRESSION
    expression: Expr
    span: Span

    def accept(self, visitor: StmtVisitor) -> None:
        return visitor.visit_expression_stmt(self)


@dataclass(frozen=True)
class PrintStmt(Stmt):
    kind: ClassVar[StmtKind] = StmtKind.PRINT
    expression: Expr
    span: Span

    def accept(self, visitor: StmtVisitor) -> None:
        return visitor.visit_print_stmt(self)


@dataclass(frozen=True)
class BlockStmt(Stmt):
    """Brace-delimited sequence of declarations."""
    kind: ClassVar[StmtKind] = StmtKind.BLOCK
    statements: Tuple[Stmt, ...]
    span: Span

    def accept(self, visitor: StmtVisitor) -> None:
        return visitor.visit_block_stmt(self)


@dataclass(frozen=True)
class LetStmt(Stmt):
    """
    `let` or `const` declaration.

    Constness is recorded here and enforced by the evaluator.
    """
    kind: ClassVar[StmtKind] = StmtKind.LET
    name: str
    initializer: Optional[Expr]
    is_const: bool
    span: Span

    def accept(self, visitor: StmtVisitor) -> None:
        return visitor.visit_let_stmt(self)


@dataclass(frozen=True)
class IfStmt(Stmt):
    kind: ClassVar[StmtKind] = StmtKind.IF
    condition: Expr
    then_branch: Stmt
    else_branch: Optional[Stmt]
    span: Span

    def accept(self, visitor: StmtVisitor) -> None:
        return visitor.visit_if_stmt(self)


@dataclass(frozen=True)
class WhileStmt(Stmt):
    kind: ClassVar[StmtKind] = StmtKind.WHILE
    condition: Expr
    body: Stmt
    span: Span

    def accept(self, visitor: StmtVisitor) -> None:
        return visitor.visit_while_stmt(self)


@dataclass(frozen=True)
class ForStmt(Stmt):
    """
    C-style for loop.

    Kept as its own node rather than desugared into a while loop; any
    desugaring happens in the consumer.
    """
    kind: ClassVar[StmtKind] = StmtKind.FOR
    initializer: Optional[Stmt]
    condition: Optional[Expr]
    increment: Optional[Expr]
    body: Stmt
    span: Span

    def accept(self, visitor: StmtVisitor) -> None:
        return visitor.visit_for_stmt(self)


@dataclass(frozen=True)
class FunctionStmt(Stmt):
    """Function declaration, also used for class methods."""
    kind: ClassVar[StmtKind] = StmtKind.FUNCTION
    name: str
    params: Tuple[str, ...]
    body: BlockStmt
    span: Span

    def accept(self, visitor: StmtVisitor) -> None:
        return visitor.visit_function_stmt(self)


@dataclass(frozen=True)
class ReturnStmt(Stmt):
    kind: ClassVar[StmtKind] = StmtKind.RETURN
    value: Optional[Expr]
    span: Span

    def accept(self, visitor: StmtVisitor) -> None:
        return visitor.visit_return_stmt(self)


@dataclass(frozen=True)
class ClassStmt(Stmt):
    """Class declaration with an optional superclass name."""
    kind: ClassVar[StmtKind] = StmtKind.CLASS
    name: str
    superclass: Optional[str]
    methods: Tuple[FunctionStmt, ...]
    span: Span

    def accept(self, visitor: StmtVisitor) -> None:
        return visitor.visit_class_stmt(self)


@dataclass(frozen=True)
class BreakStmt(Stmt):
    kind: ClassVar[StmtKind] = StmtKind.BREAK
    span: Span

    def accept(self, visitor: StmtVisitor) -> None:
        return visitor.visit_break_stmt(self)


@dataclass(frozen=True)
class ContinueStmt(Stmt):
    kind: ClassVar[StmtKind] = StmtKind.CONTINUE
    span: Span

    def accept(self, visitor: StmtVisitor) -> None:
        return visitor.visit_continue_stmt(self)


# ============================================================================
# Top level
# ============================================================================

@dataclass(frozen=True)
class Program:
    """Root node: the ordered top-level statements of one parse."""
    statements: Tuple[Stmt, ...]
    span: Span

    def __len__(self) -> int:
        return len(self.statements)

    def __iter__(self):
        return iter(self.statements)
