"""
Parenthesized prefix rendering of Lumen ASTs.

Used for debugging and for asserting parse shapes in tests, e.g.
`-(1 / (2 * 32));` renders as `((- (/ 1 (* 2 32))))`.
"""

from typing import Optional, Union

from ..lexer.tokens import symbol_for
from .ast_nodes import (
    Expr, Stmt, Program, ExprVisitor, StmtVisitor,
    Literal, Variable, Grouping, Unary, Binary, Logical, Assign, Set, Get, Call, Super,
    ExpressionStmt, PrintStmt, BlockStmt, LetStmt, IfStmt, WhileStmt, ForStmt,
    FunctionStmt, ReturnStmt, ClassStmt, BreakStmt, ContinueStmt,
)


class AstPrinter(ExprVisitor, StmtVisitor):
    """Renders every node variant; statements are rendered via `self.output`."""

    def __init__(self):
        self.output = ""

    def render(self, node: Union[Program, Stmt, Expr]) -> str:
        """Render a program, statement or expression."""
        if isinstance(node, Program):
            return "(" + "".join(self._stmt(stmt) for stmt in node.statements) + ")"
        if isinstance(node, Stmt):
            return self._stmt(node)
        return self._expr(node)

    def _expr(self, expr: Expr) -> str:
        return expr.accept(self)

    def _stmt(self, stmt: Stmt) -> str:
        stmt.accept(self)
        return self.output

    def _optional(self, expr: Optional[Expr]) -> str:
        return "nil" if expr is None else self._expr(expr)

    def _parenthesize(self, head: str, *parts: str) -> str:
        return "(" + " ".join((head,) + parts) + ")"

    # Expressions

    def visit_literal_expr(self, expr: Literal) -> str:
        value = expr.value
        if isinstance(value, bool):
            return "true" if value else "false"
        if isinstance(value, float):
            return str(int(value)) if value.is_integer() else repr(value)
        return '"' + value.replace("\\", "\\\\").replace('"', '\\"') + '"'

    def visit_variable_expr(self, expr: Variable) -> str:
        return expr.name

    def visit_grouping_expr(self, expr: Grouping) -> str:
        return self._expr(expr.expression)

    def visit_unary_expr(self, expr: Unary) -> str:
        return self._parenthesize(symbol_for(expr.operator), self._expr(expr.operand))

    def visit_binary_expr(self, expr: Binary) -> str:
        return self._parenthesize(
            symbol_for(expr.operator), self._expr(expr.left), self._expr(expr.right)
        )

    def visit_logical_expr(self, expr: Logical) -> str:
        return self._parenthesize(
            symbol_for(expr.operator), self._expr(expr.left), self._expr(expr.right)
        )

    def visit_assign_expr(self, expr: Assign) -> str:
        return self._parenthesize(symbol_for(expr.operator), expr.name, self._expr(expr.value))

    def visit_set_expr(self, expr: Set) -> str:
        target = self._parenthesize(".", self._expr(expr.object), expr.name)
        return self._parenthesize(symbol_for(expr.operator), target, self._expr(expr.value))

    def visit_get_expr(self, expr: Get) -> str:
        return self._parenthesize(".", self._expr(expr.object), expr.name)

    def visit_call_expr(self, expr: Call) -> str:
        arguments = [self._expr(argument) for argument in expr.arguments]
        return self._parenthesize("call", self._expr(expr.callee), *arguments)

    def visit_super_expr(self, expr: Super) -> str:
        return self._parenthesize("super", expr.method)

    # Statements

    def visit_expression_stmt(self, stmt: ExpressionStmt) -> None:
        self.output = self._expr(stmt.expression)

    def visit_print_stmt(self, stmt: PrintStmt) -> None:
        self.output = self._parenthesize("print", self._expr(stmt.expression))

    def visit_block_stmt(self, stmt: BlockStmt) -> None:
        self.output = "(" + "".join(self._stmt(inner) for inner in stmt.statements) + ")"

    def visit_let_stmt(self, stmt: LetStmt) -> None:
        keyword = "const" if stmt.is_const else "let"
        if stmt.initializer is None:
            self.output = self._parenthesize(keyword, stmt.name)
        else:
            self.output = self._parenthesize(keyword, stmt.name, self._expr(stmt.initializer))

    def visit_if_stmt(self, stmt: IfStmt) -> None:
        parts = [self._expr(stmt.condition), "then", self._stmt(stmt.then_branch)]
        if stmt.else_branch is not None:
            parts += ["else", self._stmt(stmt.else_branch)]
        self.output = self._parenthesize("if", *parts)

    def visit_while_stmt(self, stmt: WhileStmt) -> None:
        condition = self._expr(stmt.condition)
        self.output = self._parenthesize("while", condition, self._stmt(stmt.body))

    def visit_for_stmt(self, stmt: ForStmt) -> None:
        initializer = "nil" if stmt.initializer is None else self._stmt(stmt.initializer)
        condition = self._optional(stmt.condition)
        increment = self._optional(stmt.increment)
        self.output = self._parenthesize(
            "for", initializer, condition, increment, self._stmt(stmt.body)
        )

    def visit_function_stmt(self, stmt: FunctionStmt) -> None:
        params = "(" + " ".join(stmt.params) + ")"
        self.output = self._parenthesize("fn", stmt.name, params, self._stmt(stmt.body))

    def visit_return_stmt(self, stmt: ReturnStmt) -> None:
        if stmt.value is None:
            self.output = "(return)"
        else:
            self.output = self._parenthesize("return", self._expr(stmt.value))

    def visit_class_stmt(self, stmt: ClassStmt) -> None:
        head = [stmt.name]
        if stmt.superclass is not None:
            head += ["<", stmt.superclass]
        methods = [self._stmt(method) for method in stmt.methods]
        self.output = self._parenthesize("class", *head, *methods)

    def visit_break_stmt(self, stmt: BreakStmt) -> None:
        self.output = "(break)"

    def visit_continue_stmt(self, stmt: ContinueStmt) -> None:
        self.output = "(continue)"


def render(node: Union[Program, Stmt, Expr]) -> str:
    """Render a node with a fresh AstPrinter."""
    return AstPrinter().render(node)
