"""
Test suite for Lumen AST nodes and visitor contracts.
"""

import dataclasses
import unittest
import sys
import os

# Add the project root to the Python path
project_root = os.path.abspath(os.path.join(os.path.dirname(__file__), '..'))
sys.path.insert(0, project_root)

from lumen.lexer import Span, TokenType
from lumen.parser import (
    ExprKind, ExprVisitor, StmtKind, StmtVisitor, parse_string,
    Literal, Variable, Binary, Call,
)


class Calculator(ExprVisitor):
    """Evaluates constant arithmetic; other variants are unsupported."""

    def visit_literal_expr(self, expr):
        return expr.value

    def visit_variable_expr(self, expr):
        raise NameError(expr.name)

    def visit_grouping_expr(self, expr):
        return self.visit_expr(expr.expression)

    def visit_unary_expr(self, expr):
        operand = self.visit_expr(expr.operand)
        if expr.operator == TokenType.MINUS:
            return -operand
        if expr.operator == TokenType.LOGICAL_NOT:
            return not operand
        return operand

    def visit_binary_expr(self, expr):
        left = self.visit_expr(expr.left)
        right = self.visit_expr(expr.right)
        return {
            TokenType.PLUS: lambda: left + right,
            TokenType.MINUS: lambda: left - right,
            TokenType.MULTIPLY: lambda: left * right,
            TokenType.DIVIDE: lambda: left / right,
        }[expr.operator]()

    def visit_logical_expr(self, expr):
        left = self.visit_expr(expr.left)
        right = self.visit_expr(expr.right)
        return {
            TokenType.LESS_THAN: lambda: left < right,
            TokenType.EQUAL: lambda: left == right,
        }[expr.operator]()

    def visit_assign_expr(self, expr):
        raise NotImplementedError

    def visit_set_expr(self, expr):
        raise NotImplementedError

    def visit_get_expr(self, expr):
        raise NotImplementedError

    def visit_call_expr(self, expr):
        raise NotImplementedError

    def visit_super_expr(self, expr):
        raise NotImplementedError


class StatementCounter(StmtVisitor):
    """Counts statements by kind, descending into nested bodies."""

    def __init__(self):
        self.counts = {}

    def _count(self, stmt):
        self.counts[stmt.kind] = self.counts.get(stmt.kind, 0) + 1

    def visit_expression_stmt(self, stmt):
        self._count(stmt)

    def visit_print_stmt(self, stmt):
        self._count(stmt)

    def visit_block_stmt(self, stmt):
        self._count(stmt)
        for inner in stmt.statements:
            self.visit_stmt(inner)

    def visit_let_stmt(self, stmt):
        self._count(stmt)

    def visit_if_stmt(self, stmt):
        self._count(stmt)
        self.visit_stmt(stmt.then_branch)
        if stmt.else_branch is not None:
            self.visit_stmt(stmt.else_branch)

    def visit_while_stmt(self, stmt):
        self._count(stmt)
        self.visit_stmt(stmt.body)

    def visit_for_stmt(self, stmt):
        self._count(stmt)
        self.visit_stmt(stmt.body)

    def visit_function_stmt(self, stmt):
        self._count(stmt)
        self.visit_stmt(stmt.body)

    def visit_return_stmt(self, stmt):
        self._count(stmt)

    def visit_class_stmt(self, stmt):
        self._count(stmt)
        for method in stmt.methods:
            self.visit_stmt(method)

    def visit_break_stmt(self, stmt):
        self._count(stmt)

    def visit_continue_stmt(self, stmt):
        self._count(stmt)


class TestVisitors(unittest.TestCase):
    """Test cases for the visitor contracts."""

    def _expression(self, code):
        return parse_string(code).statements[0].expression

    def test_expression_visitor_evaluates(self):
        calculator = Calculator()
        self.assertEqual(calculator.visit_expr(self._expression("-(1 + 2) * 4;")), -12.0)
        self.assertEqual(calculator.visit_expr(self._expression("1 < 2 == true;")), True)

    def test_visitor_errors_propagate(self):
        with self.assertRaises(NameError):
            Calculator().visit_expr(self._expression("1 + missing;"))

    def test_statement_visitor_walks_program(self):
        program = parse_string("""
        fn loop(n) {
            while (n > 0) {
                if (n == 3) break; else n -= 1;
            }
            return n;
        }
        print loop(5);
        """)
        counter = StatementCounter()
        for statement in program:
            counter.visit_stmt(statement)

        self.assertEqual(counter.counts[StmtKind.FUNCTION], 1)
        self.assertEqual(counter.counts[StmtKind.BLOCK], 2)
        self.assertEqual(counter.counts[StmtKind.WHILE], 1)
        self.assertEqual(counter.counts[StmtKind.IF], 1)
        self.assertEqual(counter.counts[StmtKind.BREAK], 1)
        self.assertEqual(counter.counts[StmtKind.EXPRESSION], 1)
        self.assertEqual(counter.counts[StmtKind.RETURN], 1)
        self.assertEqual(counter.counts[StmtKind.PRINT], 1)

    def test_incomplete_expression_visitor_cannot_be_created(self):
        class OnlyLiterals(ExprVisitor):
            def visit_literal_expr(self, expr):
                return expr.value

        with self.assertRaises(TypeError):
            OnlyLiterals()

    def test_incomplete_statement_visitor_cannot_be_created(self):
        class OnlyPrints(StmtVisitor):
            def visit_print_stmt(self, stmt):
                pass

        with self.assertRaises(TypeError):
            OnlyPrints()


class TestNodes(unittest.TestCase):
    """Test cases for node tags, equality and immutability."""

    def setUp(self):
        self.span = Span(1, 1, 0, 1)

    def test_kind_tags(self):
        expr = parse_string("f(1);").statements[0].expression
        self.assertIsInstance(expr, Call)
        self.assertEqual(expr.kind, ExprKind.CALL)
        self.assertEqual(Literal(1.0, self.span).kind, ExprKind.LITERAL)
        self.assertEqual(parse_string("let a;").statements[0].kind, StmtKind.LET)

    def test_literal_equality_checks_value_type(self):
        self.assertNotEqual(Literal(True, self.span), Literal(1.0, self.span))
        self.assertNotEqual(Literal(False, self.span), Literal(0.0, self.span))
        self.assertEqual(Literal(2.0, self.span), Literal(2.0, self.span))
        self.assertEqual(hash(Literal("a", self.span)), hash(Literal("a", self.span)))
        self.assertEqual(len({Literal(True, self.span), Literal(1.0, self.span)}), 2)

    def test_nodes_are_immutable(self):
        node = Variable("x", self.span)
        with self.assertRaises(dataclasses.FrozenInstanceError):
            node.name = "y"

    def test_structural_equality(self):
        left = Binary(Literal(1.0, self.span), TokenType.PLUS, Variable("x", self.span), self.span)
        right = Binary(Literal(1.0, self.span), TokenType.PLUS, Variable("x", self.span), self.span)
        self.assertEqual(left, right)
        self.assertEqual(hash(left), hash(right))

    def test_children_are_tuples(self):
        program = parse_string("{ f(1, 2); }")
        block = program.statements[0]
        self.assertIsInstance(program.statements, tuple)
        self.assertIsInstance(block.statements, tuple)
        self.assertIsInstance(block.statements[0].expression.arguments, tuple)


if __name__ == '__main__':
    unittest.main()
