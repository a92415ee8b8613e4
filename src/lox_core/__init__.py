"""Lox Core — recursive-descent parser and tree-walking interpreter for Lox."""

from .diagnostics import Diagnostic, ErrorReporter, Phase
from .environment import Environment
from .errors import (
    LoxError,
    LoxRuntimeError,
    LoxTypeError,
    ParseError,
    ScanError,
    UndefinedVariable,
)
from .interpreter import Interpreter
from .parser import ParseResult, Parser, parse
from .printer import format_expr, format_stmt
from .repl import LoxRepl, run_file, run_source
from .scanner import Scanner, scan
from .tokens import Token, TokenType
from .values import Nil, Value, VBool, VNumber, VString, is_equal, is_truthy, stringify

__all__ = [
    "scan",
    "parse",
    "Scanner",
    "Parser",
    "ParseResult",
    "Interpreter",
    "Environment",
    "Token",
    "TokenType",
    "Value",
    "VNumber",
    "VString",
    "VBool",
    "Nil",
    "is_truthy",
    "is_equal",
    "stringify",
    "format_expr",
    "format_stmt",
    "Diagnostic",
    "ErrorReporter",
    "Phase",
    "LoxError",
    "ScanError",
    "ParseError",
    "LoxRuntimeError",
    "UndefinedVariable",
    "LoxTypeError",
    "LoxRepl",
    "run_source",
    "run_file",
]
