"""Tests for lox_core.printer."""

import pytest

from lox_core.nodes import Binary, Grouping, Literal, Unary, Var
from lox_core.printer import format_expr, format_stmt
from lox_core.tokens import Token, TokenType
from lox_core.values import Nil, VNumber, VString


def op(type_: TokenType, lexeme: str) -> Token:
    return Token(type_, lexeme, None, 1)


def test_classic_example():
    expr = Binary(
        Unary(op(TokenType.MINUS, "-"), Literal(VNumber(123))),
        op(TokenType.STAR, "*"),
        Grouping(Literal(VNumber(45.67))),
    )
    assert format_expr(expr) == "(* (- 123) (group 45.67))"


def test_string_literal_is_quoted():
    assert format_expr(Literal(VString("hi"))) == '"hi"'


def test_nil_literal():
    assert format_expr(Literal(Nil)) == "nil"


def test_var_without_initializer():
    assert format_stmt(Var(op(TokenType.IDENTIFIER, "a"))) == "(var a)"


def test_unknown_node():
    with pytest.raises(TypeError):
        format_expr(object())
    with pytest.raises(TypeError):
        format_stmt(object())
