"""Exception hierarchy for Lox Core.

Scan and parse errors are recovered from locally (the scanner skips the
offending character, the parser synchronizes to the next statement).
Runtime errors abort the current run and are reported once.
"""

from __future__ import annotations

from .tokens import Token


class LoxError(Exception):
    """Base class for every error raised by Lox Core."""


class ScanError(LoxError):
    def __init__(self, line: int, message: str) -> None:
        super().__init__(message)
        self.line = line
        self.message = message


class ParseError(LoxError):
    def __init__(self, token: Token, message: str) -> None:
        super().__init__(message)
        self.token = token
        self.message = message

    @property
    def line(self) -> int:
        return self.token.line


class LoxRuntimeError(LoxError):
    """A well-formed tree broke a semantic rule during evaluation."""

    def __init__(self, token: Token, message: str) -> None:
        super().__init__(message)
        self.token = token
        self.message = message

    @property
    def line(self) -> int:
        return self.token.line


class UndefinedVariable(LoxRuntimeError):
    def __init__(self, name: Token) -> None:
        super().__init__(name, f"Undefined variable '{name.lexeme}'.")


class LoxTypeError(LoxRuntimeError):
    """An operator received operands of the wrong kind."""
