"""Recursive-descent parser: token list -> statement trees.

One method per precedence level, lowest first::

    declaration -> "var" IDENTIFIER ( "=" expression )? ";" | statement
    statement   -> "print" expression ";" | expression ";"
    expression  -> assignment
    assignment  -> equality ( "=" assignment )?
    equality    -> comparison ( ( "!=" | "==" ) comparison )*
    comparison  -> term ( ( ">" | ">=" | "<" | "<=" ) term )*
    term        -> factor ( ( "-" | "+" ) factor )*
    factor      -> unary ( ( "/" | "*" ) unary )*
    unary       -> ( "!" | "-" ) unary | primary
    primary     -> NUMBER | STRING | "true" | "false" | "nil"
                 | IDENTIFIER | "(" expression ")"
"""

from __future__ import annotations

from contextlib import contextmanager
from dataclasses import dataclass, field
from typing import Iterator

from .diagnostics import Diagnostic, ErrorReporter, Phase, location
from .errors import ParseError
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
from .values import FALSE, TRUE, Nil, from_literal


MAX_NESTING = 64

# Tokens that start a statement; synchronize() stops in front of them.
_STATEMENT_STARTS = frozenset({
    TokenType.CLASS,
    TokenType.FUN,
    TokenType.VAR,
    TokenType.FOR,
    TokenType.IF,
    TokenType.WHILE,
    TokenType.PRINT,
    TokenType.RETURN,
})


@dataclass
class ParseResult:
    """Statements that parsed cleanly, plus every diagnostic reported."""

    statements: list[Stmt] = field(default_factory=list)
    diagnostics: list[Diagnostic] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.diagnostics


class Parser:
    def __init__(self, tokens: list[Token], reporter: ErrorReporter | None = None) -> None:
        if not tokens or tokens[-1].type != TokenType.EOF:
            line = tokens[-1].line if tokens else 1
            tokens = [*tokens, Token(TokenType.EOF, "", None, line)]
        self.tokens = tokens
        self.reporter = reporter
        self._current = 0
        self._nesting = 0
        self._diagnostics: list[Diagnostic] = []

    def parse(self) -> ParseResult:
        """Parse every declaration up to EOF.

        A declaration that fails to parse is left out of ``statements``;
        its diagnostic is in ``diagnostics``.
        """
        statements: list[Stmt] = []
        while not self._is_at_end():
            stmt = self._declaration()
            if stmt is not None:
                statements.append(stmt)
        return ParseResult(statements, self._diagnostics)

    # -- Statements -----------------------------------------------------

    def _declaration(self) -> Stmt | None:
        try:
            if self._match(TokenType.VAR):
                return self._var_declaration()
            return self._statement()
        except ParseError as err:
            self._report(err)
            self._synchronize()
            return None

    def _var_declaration(self) -> Stmt:
        name = self._consume(TokenType.IDENTIFIER, "Expect variable name.")
        initializer: Expr | None = None
        if self._match(TokenType.EQUAL):
            initializer = self._expression()
        self._consume(TokenType.SEMICOLON, "Expect ';' after variable declaration.")
        return Var(name, initializer)

    def _statement(self) -> Stmt:
        if self._match(TokenType.PRINT):
            value = self._expression()
            self._consume(TokenType.SEMICOLON, "Expect ';' after value.")
            return Print(value)
        expr = self._expression()
        self._consume(TokenType.SEMICOLON, "Expect ';' after expression.")
        return Expression(expr)

    # -- Expressions ----------------------------------------------------

    def _expression(self) -> Expr:
        return self._assignment()

    def _assignment(self) -> Expr:
        with self._nested():
            expr = self._equality()

            if self._match(TokenType.EQUAL):
                equals = self._previous()
                value = self._assignment()

                if isinstance(expr, Variable):
                    return Assign(expr.name, value)

                # Cursor is still in a sane place: report, don't synchronize
                self._report(ParseError(equals, "Invalid assignment target."))

            return expr

    def _equality(self) -> Expr:
        expr = self._comparison()
        while self._match(TokenType.BANG_EQUAL, TokenType.EQUAL_EQUAL):
            operator = self._previous()
            right = self._comparison()
            expr = Binary(expr, operator, right)
        return expr

    def _comparison(self) -> Expr:
        expr = self._term()
        while self._match(
            TokenType.GREATER,
            TokenType.GREATER_EQUAL,
            TokenType.LESS,
            TokenType.LESS_EQUAL,
        ):
            operator = self._previous()
            right = self._term()
            expr = Binary(expr, operator, right)
        return expr

    def _term(self) -> Expr:
        expr = self._factor()
        while self._match(TokenType.MINUS, TokenType.PLUS):
            operator = self._previous()
            right = self._factor()
            expr = Binary(expr, operator, right)
        return expr

    def _factor(self) -> Expr:
        expr = self._unary()
        while self._match(TokenType.SLASH, TokenType.STAR):
            operator = self._previous()
            right = self._unary()
            expr = Binary(expr, operator, right)
        return expr

    def _unary(self) -> Expr:
        if self._match(TokenType.BANG, TokenType.MINUS):
            operator = self._previous()
            with self._nested():
                right = self._unary()
            return Unary(operator, right)
        return self._primary()

    def _primary(self) -> Expr:
        if self._match(TokenType.FALSE):
            return Literal(FALSE)
        if self._match(TokenType.TRUE):
            return Literal(TRUE)
        if self._match(TokenType.NIL):
            return Literal(Nil)

        if self._match(TokenType.NUMBER, TokenType.STRING):
            return Literal(from_literal(self._previous().literal))

        if self._match(TokenType.IDENTIFIER):
            return Variable(self._previous())

        if self._match(TokenType.LEFT_PAREN):
            expr = self._expression()
            self._consume(TokenType.RIGHT_PAREN, "Expect ')' after expression.")
            return Grouping(expr)

        raise ParseError(self._peek(), "Expect expression.")

    # -- Cursor helpers -------------------------------------------------

    def _match(self, *types: TokenType) -> bool:
        for type_ in types:
            if self._check(type_):
                self._advance()
                return True
        return False

    def _consume(self, type_: TokenType, message: str) -> Token:
        if self._check(type_):
            return self._advance()
        raise ParseError(self._peek(), message)

    def _check(self, type_: TokenType) -> bool:
        if self._is_at_end():
            return False
        return self._peek().type == type_

    def _advance(self) -> Token:
        if not self._is_at_end():
            self._current += 1
        return self._previous()

    def _is_at_end(self) -> bool:
        return self._peek().type == TokenType.EOF

    def _peek(self) -> Token:
        return self.tokens[self._current]

    def _previous(self) -> Token:
        return self.tokens[self._current - 1]

    @contextmanager
    def _nested(self) -> Iterator[None]:
        if self._nesting >= MAX_NESTING:
            raise ParseError(self._peek(), "Expression nesting too deep.")
        self._nesting += 1
        try:
            yield
        finally:
            self._nesting -= 1

    # -- Error recovery -------------------------------------------------

    def _report(self, err: ParseError) -> None:
        diagnostic = Diagnostic(Phase.Parse, err.line, err.message, location(err.token))
        self._diagnostics.append(diagnostic)
        if self.reporter is not None:
            self.reporter.report(diagnostic)

    def _synchronize(self) -> None:
        """Discard tokens until the start of the next statement."""
        self._advance()
        while not self._is_at_end():
            if self._previous().type == TokenType.SEMICOLON:
                return
            if self._peek().type in _STATEMENT_STARTS:
                return
            self._advance()


def parse(tokens: list[Token], reporter: ErrorReporter | None = None) -> ParseResult:
    """Parse *tokens* (terminated by EOF) into statements."""
    return Parser(tokens, reporter).parse()
