"""Interpreter: walks statement and expression trees against a scope chain."""

from __future__ import annotations

import math
import sys
from typing import IO

from .diagnostics import ErrorReporter
from .environment import Environment
from .errors import LoxRuntimeError, LoxTypeError
from .nodes import (
    Assign,
    Binary,
    Expr,
    Expression,
    Grouping,
    Literal,
    Print,
    Stmt,
    Unary,
    Var,
    Variable,
)
from .tokens import Token, TokenType
from .values import Nil, Value, VBool, VNumber, VString, is_equal, is_truthy, stringify


MAX_DEPTH = 200


class Interpreter:
    """Executes parsed statements.

    Usage::

        interp = Interpreter()
        interp.interpret(Parser(scan("var a = 1; print a + 2;")).parse().statements)
        # prints "3"

    Globals persist across ``interpret`` calls on the same instance.
    """

    def __init__(
        self,
        out: IO[str] | None = None,
        reporter: ErrorReporter | None = None,
    ) -> None:
        self.environment = Environment()
        self.out = out
        self.reporter = reporter if reporter is not None else ErrorReporter()
        self._depth = 0

    # -- Entry point ----------------------------------------------------

    def interpret(self, statements: list[Stmt]) -> None:
        """Run *statements* in order, stopping at the first runtime error.

        The error is reported, not raised.
        """
        try:
            for statement in statements:
                self.execute(statement)
        except LoxRuntimeError as err:
            self.reporter.runtime_error(err)
        finally:
            self._depth = 0

    # -- Statements -----------------------------------------------------

    def execute(self, stmt: Stmt) -> None:
        if isinstance(stmt, Expression):
            self.evaluate(stmt.expression)
        elif isinstance(stmt, Print):
            value = self.evaluate(stmt.expression)
            print(stringify(value), file=self.out if self.out is not None else sys.stdout)
        elif isinstance(stmt, Var):
            value: Value = Nil
            if stmt.initializer is not None:
                value = self.evaluate(stmt.initializer)
            self.environment.define(stmt.name.lexeme, value)
        else:
            raise TypeError(f"unknown statement node: {type(stmt).__name__}")

    # -- Expressions ----------------------------------------------------

    def evaluate(self, expr: Expr) -> Value:
        if isinstance(expr, Literal):
            return expr.value
        if isinstance(expr, Grouping):
            return self.evaluate(expr.expression)
        if isinstance(expr, Unary):
            return self._eval_unary(expr)
        if isinstance(expr, Binary):
            return self._eval_binary(expr)
        if isinstance(expr, Variable):
            return self.environment.get(expr.name)
        if isinstance(expr, Assign):
            value = self.evaluate(expr.value)
            self.environment.assign(expr.name, value)
            return value
        raise TypeError(f"unknown expression node: {type(expr).__name__}")

    def _eval_unary(self, expr: Unary) -> Value:
        right = self.evaluate(expr.right)
        op = expr.operator.type

        if op == TokenType.BANG:
            return VBool(not is_truthy(right))
        if op == TokenType.MINUS:
            return VNumber(-_number_operand(expr.operator, right))

        raise TypeError(f"unknown unary operator: {expr.operator.lexeme}")

    def _eval_binary(self, expr: Binary) -> Value:
        """Fold a left-leaning chain such as ``1 + 2 - 3`` without recursing
        down its left spine; only right operands nest."""
        spine: list[Binary] = []
        node: Expr = expr
        while isinstance(node, Binary):
            spine.append(node)
            node = node.left

        # Left is fully evaluated before right, innermost operator first
        left = self._eval_operand(node, expr.operator)
        for binary in reversed(spine):
            right = self._eval_operand(binary.right, binary.operator)
            left = _apply_binary(binary.operator, left, right)
        return left

    def _eval_operand(self, expr: Expr, operator: Token) -> Value:
        if self._depth >= MAX_DEPTH:
            raise LoxRuntimeError(operator, "Expression too deeply nested.")
        self._depth += 1
        try:
            return self.evaluate(expr)
        finally:
            self._depth -= 1


# ---------------------------------------------------------------------------
# Operators
# ---------------------------------------------------------------------------

def _apply_binary(operator: Token, left: Value, right: Value) -> Value:
    op = operator.type

    if op == TokenType.EQUAL_EQUAL:
        return VBool(is_equal(left, right))
    if op == TokenType.BANG_EQUAL:
        return VBool(not is_equal(left, right))

    if op == TokenType.PLUS:
        if isinstance(left, VNumber) and isinstance(right, VNumber):
            return VNumber(left.value + right.value)
        if isinstance(left, VString) and isinstance(right, VString):
            return VString(left.value + right.value)
        raise LoxTypeError(operator, "Operands must be two numbers or two strings.")

    a, b = _number_operands(operator, left, right)
    if op == TokenType.MINUS:
        return VNumber(a - b)
    if op == TokenType.STAR:
        return VNumber(a * b)
    if op == TokenType.SLASH:
        return VNumber(_divide(a, b))
    if op == TokenType.GREATER:
        return VBool(a > b)
    if op == TokenType.GREATER_EQUAL:
        return VBool(a >= b)
    if op == TokenType.LESS:
        return VBool(a < b)
    if op == TokenType.LESS_EQUAL:
        return VBool(a <= b)

    raise TypeError(f"unknown binary operator: {operator.lexeme}")


def _number_operand(operator: Token, operand: Value) -> float:
    if isinstance(operand, VNumber):
        return operand.value
    raise LoxTypeError(operator, "Operand must be a number.")


def _number_operands(operator: Token, left: Value, right: Value) -> tuple[float, float]:
    if isinstance(left, VNumber) and isinstance(right, VNumber):
        return left.value, right.value
    raise LoxTypeError(operator, "Operands must be numbers.")


def _divide(a: float, b: float) -> float:
    """IEEE division: x/0 is +-inf, 0/0 is nan."""
    if b == 0.0:
        if a == 0.0 or math.isnan(a):
            return float("nan")
        # Sign follows both operands, including a signed zero divisor
        negative = (a < 0) != (math.copysign(1.0, b) < 0)
        return float("-inf") if negative else float("inf")
    return a / b
