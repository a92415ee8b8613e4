"""Error reporting channel shared by the scanner, parser and interpreter."""

from __future__ import annotations

import sys
from dataclasses import dataclass, field
from enum import Enum, auto
from typing import IO

from .errors import LoxRuntimeError, ParseError
from .tokens import Token, TokenType


class Phase(Enum):
    Scan = auto()
    Parse = auto()
    Runtime = auto()


@dataclass(frozen=True, slots=True)
class Diagnostic:
    phase: Phase
    line: int
    message: str
    where: str = ""  # " at end" / " at 'x'" / ""

    def __str__(self) -> str:
        if self.phase is Phase.Runtime:
            return f"{self.message}\n[line {self.line}]"
        return f"[line {self.line}] Error{self.where}: {self.message}"


def location(token: Token) -> str:
    """Describe where *token* sits for a parse diagnostic."""
    if token.type == TokenType.EOF:
        return " at end"
    return f" at '{token.lexeme}'"


@dataclass
class ErrorReporter:
    """Collects diagnostics and echoes them to *stream* (stderr by default).

    ``stream=None`` keeps diagnostics in memory only.
    """

    stream: IO[str] | None = field(default_factory=lambda: sys.stderr)
    diagnostics: list[Diagnostic] = field(default_factory=list)

    @property
    def had_error(self) -> bool:
        """True when a scan or parse diagnostic was reported."""
        return any(d.phase is not Phase.Runtime for d in self.diagnostics)

    @property
    def had_runtime_error(self) -> bool:
        return any(d.phase is Phase.Runtime for d in self.diagnostics)

    def parse_error(self, error: ParseError) -> Diagnostic:
        return self.report(
            Diagnostic(Phase.Parse, error.line, error.message, location(error.token))
        )

    def runtime_error(self, error: LoxRuntimeError) -> Diagnostic:
        return self.report(Diagnostic(Phase.Runtime, error.line, error.message))

    def report(self, diagnostic: Diagnostic) -> Diagnostic:
        self.diagnostics.append(diagnostic)
        if self.stream is not None:
            print(diagnostic, file=self.stream)
        return diagnostic

    def reset(self) -> None:
        self.diagnostics.clear()
