"""LoxRepl — incremental session for interactive use, plus the ``lox`` CLI.

``lox script.lox`` runs a file; ``lox`` with no argument starts a prompt.
"""

from __future__ import annotations

import argparse
import sys
from typing import IO

from .diagnostics import Diagnostic, ErrorReporter
from .interpreter import Interpreter
from .parser import ParseResult, parse
from .printer import format_stmt
from .scanner import scan
from .values import Value, VString


# Exit codes (sysexits.h)
EX_OK = 0
EX_DATAERR = 65
EX_NOINPUT = 66
EX_SOFTWARE = 70


def run_source(source: str, interpreter: Interpreter) -> ParseResult:
    """Scan, parse and, if both were clean, execute *source*.

    Nothing runs when any scan or parse diagnostic was reported; errors are
    delivered through ``interpreter.reporter``.
    """
    reporter = interpreter.reporter
    before = len(reporter.diagnostics)
    result = parse(scan(source, reporter), reporter)
    if len(reporter.diagnostics) == before:
        interpreter.interpret(result.statements)
    return result


def run_file(path: str, out: IO[str] | None = None, err: IO[str] | None = None) -> int:
    """Execute the script at *path* and return a process exit code."""
    err_stream = err if err is not None else sys.stderr
    try:
        with open(path, encoding="utf-8") as fh:
            source = fh.read()
    except OSError as exc:
        print(f"Error reading '{path}': {exc}", file=err_stream)
        return EX_NOINPUT

    reporter = ErrorReporter(err_stream)
    run_source(source, Interpreter(out, reporter))
    if reporter.had_error:
        return EX_DATAERR
    if reporter.had_runtime_error:
        return EX_SOFTWARE
    return EX_OK


# ---------------------------------------------------------------------------
# LoxRepl class (programmatic / interactive use)
# ---------------------------------------------------------------------------

class LoxRepl:
    """Stateful session that keeps global variables across calls.

    Usage::

        repl = LoxRepl()
        repl.eval('var greeting = "hi";')
        repl.eval("print greeting;")     # prints "hi"

        repl.globals    # all defined variables
        repl.reset()    # clear state
    """

    def __init__(self, out: IO[str] | None = None, err: IO[str] | None = None) -> None:
        self.out = out
        self.reporter = ErrorReporter(err if err is not None else sys.stderr)
        self.interpreter = Interpreter(out, self.reporter)

    def eval(self, text: str) -> list[Diagnostic]:
        """Run *text* and return the diagnostics it produced (empty = ok).

        Errors never carry over from a previous call.
        """
        self.reporter.reset()
        run_source(text, self.interpreter)
        return list(self.reporter.diagnostics)

    def reset(self) -> None:
        """Drop every global variable."""
        self.interpreter = Interpreter(self.out, self.reporter)

    @property
    def globals(self) -> dict[str, Value]:
        return self.interpreter.environment.bindings()


# ---------------------------------------------------------------------------
# CLI helpers
# ---------------------------------------------------------------------------

def _fmt_inline(value: Value) -> str:
    """Format a value for the :vars listing (strings quoted)."""
    if isinstance(value, VString):
        return f'"{value.value}"'
    return str(value)


def _show_vars(repl: LoxRepl, dest: IO[str]) -> None:
    entries = repl.globals
    if not entries:
        print("  (no variables defined)", file=dest)
        return
    width = max(len(k) for k in entries)
    for name, value in entries.items():
        print(f"  {name:<{width}} = {_fmt_inline(value)}", file=dest)


def _show_ast(repl: LoxRepl, source: str, dest: IO[str]) -> None:
    """Print the parsed trees of *source* without executing it."""
    repl.reporter.reset()
    result = parse(scan(source, repl.reporter), repl.reporter)
    for stmt in result.statements:
        print(format_stmt(stmt), file=dest)


def _process_line(repl: LoxRepl, line: str, dest: IO[str]) -> bool:
    """Process one input line.  Returns False when the session should end."""
    line = line.strip()
    if not line:
        return True

    # ── Exit ──────────────────────────────────────────────────────────────
    if line in (":q", ":quit"):
        return False

    # ── Control commands ──────────────────────────────────────────────────
    if line == ":vars":
        _show_vars(repl, dest)
        return True

    if line == ":reset":
        repl.reset()
        return True

    if line.startswith(":ast "):
        _show_ast(repl, line[5:].strip(), dest)
        return True

    # ── Batch file ────────────────────────────────────────────────────────
    if line.startswith("?<< "):
        filepath = line[4:].strip()
        try:
            with open(filepath, encoding="utf-8") as fh:
                source = fh.read()
        except OSError as exc:
            print(f"Error reading '{filepath}': {exc}", file=sys.stderr)
            return True
        repl.eval(source)
        return True

    # ── Regular Lox input ─────────────────────────────────────────────────
    repl.eval(line)
    return True


def _prompt(repl: LoxRepl) -> None:
    dest: IO[str] = repl.out if repl.out is not None else sys.stdout
    print("Lox REPL  (:q to quit  |  :vars  :reset  |  :ast <source>  |  ?<< <file>)", file=dest)

    while True:
        try:
            line = input("> ")
        except EOFError:
            print(file=dest)
            break
        except KeyboardInterrupt:
            print(file=dest)
            continue

        if not _process_line(repl, line, dest):
            break


# ---------------------------------------------------------------------------
# CLI entry point
# ---------------------------------------------------------------------------

def main(argv: list[str] | None = None) -> int:
    """``lox [script]`` / ``python -m lox_core.repl [script]``."""
    parser = argparse.ArgumentParser(prog="lox", description="Run Lox source code.")
    parser.add_argument("script", nargs="?", help="script to run; omit for a prompt")
    args = parser.parse_args(argv)

    if args.script:
        return run_file(args.script)

    _prompt(LoxRepl())
    return EX_OK


if __name__ == "__main__":
    sys.exit(main())
