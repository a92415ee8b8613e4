"""Parenthesised rendering of syntax trees, for inspection and tests."""

from __future__ import annotations

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
from .values import VString


def format_expr(expr: Expr) -> str:
    """Render *expr* Lisp-style, e.g. ``(* (- 123) (group 45.67))``."""
    if isinstance(expr, Literal):
        if isinstance(expr.value, VString):
            return f'"{expr.value}"'
        return str(expr.value)
    if isinstance(expr, Grouping):
        return _paren("group", expr.expression)
    if isinstance(expr, Unary):
        return _paren(expr.operator.lexeme, expr.right)
    if isinstance(expr, Binary):
        return _paren(expr.operator.lexeme, expr.left, expr.right)
    if isinstance(expr, Variable):
        return expr.name.lexeme
    if isinstance(expr, Assign):
        return f"(= {expr.name.lexeme} {format_expr(expr.value)})"
    raise TypeError(f"unknown expression node: {type(expr).__name__}")


def format_stmt(stmt: Stmt) -> str:
    if isinstance(stmt, Expression):
        return _paren(";", stmt.expression)
    if isinstance(stmt, Print):
        return _paren("print", stmt.expression)
    if isinstance(stmt, Var):
        if stmt.initializer is None:
            return f"(var {stmt.name.lexeme})"
        return f"(var {stmt.name.lexeme} {format_expr(stmt.initializer)})"
    raise TypeError(f"unknown statement node: {type(stmt).__name__}")


def _paren(name: str, *exprs: Expr) -> str:
    return "(" + " ".join([name, *(format_expr(e) for e in exprs)]) + ")"
