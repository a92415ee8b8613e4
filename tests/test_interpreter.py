"""Tests for lox_core.interpreter."""

import io

import pytest

from lox_core.diagnostics import ErrorReporter, Phase
from lox_core.interpreter import MAX_DEPTH, Interpreter
from lox_core.nodes import Binary, Literal, Print, Unary
from lox_core.parser import parse
from lox_core.scanner import scan
from lox_core.tokens import Token, TokenType
from lox_core.values import Nil, VBool, VNumber, VString


def run(source: str, interp: Interpreter | None = None):
    """Run *source*; return (stdout text, reporter, interpreter)."""
    if interp is None:
        interp = Interpreter(io.StringIO(), ErrorReporter(None))
    result = parse(scan(source))
    assert result.ok, result.diagnostics
    interp.interpret(result.statements)
    return interp.out.getvalue(), interp.reporter, interp


def output(source: str) -> list[str]:
    out, reporter, _ = run(source)
    assert not reporter.diagnostics, reporter.diagnostics
    return out.splitlines()


def runtime_error(source: str):
    out, reporter, _ = run(source)
    (diag,) = reporter.diagnostics
    assert diag.phase is Phase.Runtime
    return out, diag


class TestArithmetic:
    def test_precedence(self):
        assert output("print 1 + 2 * 3;") == ["7"]

    def test_grouping(self):
        assert output("print (1 + 2) * 3;") == ["9"]

    def test_subtraction_and_division(self):
        assert output("print 10 - 4 / 8;") == ["9.5"]

    def test_negation(self):
        assert output("print -(3 - 5);") == ["2"]

    def test_float_repr(self):
        assert output("print 0.1 + 0.2;") == ["0.30000000000000004"]

    def test_division_by_zero_is_ieee(self):
        assert output("print 1 / 0; print -1 / 0; print 0 / 0;") == [
            "Infinity", "-Infinity", "NaN",
        ]


class TestPlus:
    def test_numbers(self):
        assert output("print 1 + 2;") == ["3"]

    def test_strings(self):
        assert output('print "a" + "b";') == ["ab"]

    def test_mixed_is_error(self):
        out, diag = runtime_error('print 1 + "a";')
        assert out == ""
        assert diag.message == "Operands must be two numbers or two strings."

    def test_no_bool_coercion(self):
        _, diag = runtime_error("print true + 1;")
        assert diag.message == "Operands must be two numbers or two strings."


class TestTypeErrors:
    def test_negate_string(self):
        _, diag = runtime_error('print -"a";')
        assert diag.message == "Operand must be a number."

    @pytest.mark.parametrize("op", ["-", "*", "/", ">", ">=", "<", "<="])
    def test_numeric_operators_reject_strings(self, op):
        _, diag = runtime_error(f'print 1 {op} "a";')
        assert diag.message == "Operands must be numbers."

    def test_nil_operand(self):
        _, diag = runtime_error("print nil * 2;")
        assert diag.message == "Operands must be numbers."


class TestComparison:
    def test_numbers(self):
        assert output("print 1 < 2; print 2 <= 2; print 1 > 2; print 2 >= 3;") == [
            "true", "true", "false", "false",
        ]


class TestEquality:
    def test_nil_equals_nil(self):
        assert output("print nil == nil;") == ["true"]

    def test_number_string(self):
        assert output('print 1 == "1";') == ["false"]

    def test_integral_spellings(self):
        assert output("print 1 == 1.0;") == ["true"]

    def test_nil_false(self):
        assert output("print nil == false; print nil != false;") == ["false", "true"]

    def test_strings(self):
        assert output('print "a" == "a"; print "a" != "b";') == ["true", "true"]

    def test_nan_equals_itself_regardless_of_origin(self):
        assert output("var n = 0/0; print n == n; print 0/0 == 0/0; print 0/0 != 0/0;") == [
            "true", "true", "false",
        ]

    def test_signed_zeros_differ(self):
        assert output("print 0 == -0; print -0 == -0;") == ["false", "true"]


class TestTruthiness:
    def test_not(self):
        assert output('print !nil; print !false; print !0; print !""; print !"x";') == [
            "true", "true", "false", "false", "false",
        ]

    def test_double_not(self):
        assert output("print !!nil;") == ["false"]


class TestVariables:
    def test_uninitialized_is_nil(self):
        assert output("var a; print a;") == ["nil"]

    def test_redeclaration(self):
        assert output('var a = "before"; print a; var a = "after"; print a;') == [
            "before", "after",
        ]

    def test_assignment_is_an_expression(self):
        out, reporter, interp = run("var a = 1; print a = 2;")
        assert out == "2\n"
        assert interp.environment.bindings()["a"] == VNumber(2)

    def test_chained_assignment(self):
        assert output("var a; var b; a = b = 3; print a; print b;") == ["3", "3"]

    def test_initializer_sees_earlier_globals(self):
        assert output("var a = 2; var b = a * a; print b;") == ["4"]

    def test_left_operand_evaluated_first(self):
        assert output("var a = 1; print (a = 2) + a;") == ["4"]

    def test_undefined_read(self):
        _, diag = runtime_error("print x;")
        assert diag.message == "Undefined variable 'x'."

    def test_undefined_assign_does_not_create(self):
        _, reporter, interp = run("x = 1;")
        assert reporter.diagnostics[0].message == "Undefined variable 'x'."
        assert not interp.environment.is_defined("x")


class TestFailFast:
    def test_stops_at_first_error(self):
        out, diag = runtime_error('print 1;\n\nprint 1 + "1";\nprint 2;')
        assert out == "1\n"
        assert diag.line == 3

    def test_later_declarations_do_not_run(self):
        _, _, interp = run("var a = -nil; var b = 1;")
        assert not interp.environment.is_defined("a")
        assert not interp.environment.is_defined("b")

    def test_interpret_does_not_raise(self):
        interp = Interpreter(io.StringIO(), ErrorReporter(None))
        interp.interpret(parse(scan("print y;")).statements)
        assert interp.reporter.had_runtime_error

    def test_globals_persist_between_runs(self):
        interp = Interpreter(io.StringIO(), ErrorReporter(None))
        run("var a = 40;", interp)
        out, _, _ = run("print a + 2;", interp)
        assert out == "42\n"


def right_nested_sum(depth: int) -> Print:
    """``1 + (1 + (1 + ...))`` built directly, deeper than the parser allows."""
    plus = Token(TokenType.PLUS, "+", None, 1)
    expr = Literal(VNumber(1))
    for _ in range(depth):
        expr = Binary(Literal(VNumber(1)), plus, expr)
    return Print(expr)


class TestDepthGuard:
    def test_long_flat_chain(self):
        assert output("print " + " + ".join(["1"] * 1000) + ";") == ["1000"]

    def test_flat_chain_mixed_operators(self):
        assert output("print " + " - ".join(["1"] * 600) + " * 2;") == ["-599"]

    def test_flat_chain_error_at_inner_operator(self):
        out, diag = runtime_error('print 1 + 2 + "x" + 4;')
        assert out == ""
        assert diag.message == "Operands must be two numbers or two strings."

    def test_right_nesting_within_limit(self):
        interp = Interpreter(io.StringIO(), ErrorReporter(None))
        interp.interpret([right_nested_sum(MAX_DEPTH // 2)])
        assert interp.out.getvalue() == f"{MAX_DEPTH // 2 + 1}\n"

    def test_right_nesting_over_limit(self):
        interp = Interpreter(io.StringIO(), ErrorReporter(None))
        interp.interpret([right_nested_sum(MAX_DEPTH + 10)])
        assert interp.out.getvalue() == ""
        (diag,) = interp.reporter.diagnostics
        assert diag.message == "Expression too deeply nested."

    def test_depth_resets_after_error(self):
        interp = Interpreter(io.StringIO(), ErrorReporter(None))
        interp.interpret([right_nested_sum(MAX_DEPTH + 10)])
        out, _, _ = run("print 1 + 1;", interp)
        assert out == "2\n"


class TestDirectEvaluation:
    def test_literal(self):
        assert Interpreter().evaluate(Literal(VString("x"))) == VString("x")

    def test_binary_node(self):
        plus = Token(TokenType.PLUS, "+", None, 1)
        expr = Binary(Literal(VNumber(2)), plus, Literal(VNumber(3)))
        assert Interpreter().evaluate(expr) == VNumber(5)

    def test_bang_returns_bool(self):
        bang = Token(TokenType.BANG, "!", None, 1)
        assert Interpreter().evaluate(Unary(bang, Literal(Nil))) == VBool(True)

    def test_unknown_expression_node(self):
        with pytest.raises(TypeError):
            Interpreter().evaluate(object())

    def test_unknown_statement_node(self):
        with pytest.raises(TypeError):
            Interpreter().execute(object())

    def test_print_defaults_to_stdout(self, capsys):
        Interpreter().execute(Print(Literal(VNumber(3.5))))
        assert capsys.readouterr().out == "3.5\n"
