"""Scanner: turns Lox source text into a flat token list."""

from __future__ import annotations

from .diagnostics import Diagnostic, ErrorReporter, Phase
from .errors import ScanError
from .tokens import KEYWORDS, Token, TokenType


_SINGLE: dict[str, TokenType] = {
    "(": TokenType.LEFT_PAREN,
    ")": TokenType.RIGHT_PAREN,
    "{": TokenType.LEFT_BRACE,
    "}": TokenType.RIGHT_BRACE,
    ",": TokenType.COMMA,
    ".": TokenType.DOT,
    "-": TokenType.MINUS,
    "+": TokenType.PLUS,
    ";": TokenType.SEMICOLON,
    "*": TokenType.STAR,
}

# char -> (type when followed by "=", type otherwise)
_WITH_EQUAL: dict[str, tuple[TokenType, TokenType]] = {
    "!": (TokenType.BANG_EQUAL, TokenType.BANG),
    "=": (TokenType.EQUAL_EQUAL, TokenType.EQUAL),
    "<": (TokenType.LESS_EQUAL, TokenType.LESS),
    ">": (TokenType.GREATER_EQUAL, TokenType.GREATER),
}


def _is_alpha(c: str) -> bool:
    return ("a" <= c <= "z") or ("A" <= c <= "Z") or c == "_"


def _is_digit(c: str) -> bool:
    return "0" <= c <= "9"


class Scanner:
    """Single-pass scanner over *source*.

    Errors do not stop scanning: each one is recorded in ``diagnostics``
    (and forwarded to *reporter*) and the offending character is skipped.
    """

    def __init__(self, source: str, reporter: ErrorReporter | None = None) -> None:
        self.source = source
        self.reporter = reporter
        self.tokens: list[Token] = []
        self.diagnostics: list[Diagnostic] = []
        self._start = 0
        self._current = 0
        self._line = 1

    def scan_tokens(self) -> list[Token]:
        while not self._is_at_end():
            self._start = self._current
            try:
                self._scan_token()
            except ScanError as err:
                self._report(err)
        self.tokens.append(Token(TokenType.EOF, "", None, self._line))
        return self.tokens

    # -- Per-token dispatch ---------------------------------------------

    def _scan_token(self) -> None:
        c = self._advance()

        if c in _SINGLE:
            self._add_token(_SINGLE[c])
        elif c in _WITH_EQUAL:
            two, one = _WITH_EQUAL[c]
            self._add_token(two if self._match("=") else one)
        elif c == "/":
            if self._match("/"):
                # Comment runs to end of line
                while self._peek() != "\n" and not self._is_at_end():
                    self._advance()
            else:
                self._add_token(TokenType.SLASH)
        elif c in (" ", "\r", "\t"):
            pass
        elif c == "\n":
            self._line += 1
        elif c == '"':
            self._string()
        elif _is_digit(c):
            self._number()
        elif _is_alpha(c):
            self._identifier()
        else:
            raise ScanError(self._line, "Unexpected character.")

    def _string(self) -> None:
        while self._peek() != '"' and not self._is_at_end():
            if self._peek() == "\n":
                self._line += 1
            self._advance()

        if self._is_at_end():
            raise ScanError(self._line, "Unterminated string.")

        self._advance()  # closing "
        self._add_token(TokenType.STRING, self.source[self._start + 1:self._current - 1])

    def _number(self) -> None:
        while _is_digit(self._peek()):
            self._advance()

        # Fractional part needs at least one digit after the dot
        if self._peek() == "." and _is_digit(self._peek_next()):
            self._advance()
            while _is_digit(self._peek()):
                self._advance()

        self._add_token(TokenType.NUMBER, float(self.source[self._start:self._current]))

    def _identifier(self) -> None:
        while _is_alpha(self._peek()) or _is_digit(self._peek()):
            self._advance()
        text = self.source[self._start:self._current]
        self._add_token(KEYWORDS.get(text, TokenType.IDENTIFIER))

    # -- Cursor helpers -------------------------------------------------

    def _is_at_end(self) -> bool:
        return self._current >= len(self.source)

    def _advance(self) -> str:
        c = self.source[self._current]
        self._current += 1
        return c

    def _match(self, expected: str) -> bool:
        if self._is_at_end() or self.source[self._current] != expected:
            return False
        self._current += 1
        return True

    def _peek(self) -> str:
        if self._is_at_end():
            return "\0"
        return self.source[self._current]

    def _peek_next(self) -> str:
        if self._current + 1 >= len(self.source):
            return "\0"
        return self.source[self._current + 1]

    def _add_token(self, type_: TokenType, literal: float | str | None = None) -> None:
        text = self.source[self._start:self._current]
        self.tokens.append(Token(type_, text, literal, self._line))

    def _report(self, err: ScanError) -> None:
        diagnostic = Diagnostic(Phase.Scan, err.line, err.message)
        self.diagnostics.append(diagnostic)
        if self.reporter is not None:
            self.reporter.report(diagnostic)


def scan(source: str, reporter: ErrorReporter | None = None) -> list[Token]:
    """Scan *source* and return its tokens, terminated by an EOF token."""
    return Scanner(source, reporter).scan_tokens()
