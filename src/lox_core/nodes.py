"""Syntax tree node types produced by the parser."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Union

from .tokens import Token
from .values import Value


# ---------------------------------------------------------------------------
# Expressions
# ---------------------------------------------------------------------------

@dataclass(slots=True)
class Literal:
    value: Value


@dataclass(slots=True)
class Grouping:
    expression: Expr


@dataclass(slots=True)
class Unary:
    operator: Token  # BANG | MINUS
    right: Expr


@dataclass(slots=True)
class Binary:
    left: Expr
    operator: Token
    right: Expr


@dataclass(slots=True)
class Variable:
    name: Token


@dataclass(slots=True)
class Assign:
    name: Token
    value: Expr


Expr = Union[Literal, Grouping, Unary, Binary, Variable, Assign]


# ---------------------------------------------------------------------------
# Statements
# ---------------------------------------------------------------------------

@dataclass(slots=True)
class Expression:
    expression: Expr


@dataclass(slots=True)
class Print:
    expression: Expr


@dataclass(slots=True)
class Var:
    name: Token
    initializer: Expr | None = None


Stmt = Union[Expression, Print, Var]
