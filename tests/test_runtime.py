"""Runtime and value tests."""

import io
import math

import pytest

from bagel.ast import Grouping, Literal
from bagel.environment import Environment
from bagel.errors import ArityMismatch, NotCallable, OperandError, RuntimeFault
from bagel.parse import parse
from bagel.runtime import Runtime
from bagel.tokens import scan
from bagel.values import (
    FALSE,
    NIL,
    TRUE,
    VNative,
    VNumber,
    VString,
    format_number,
    is_truthy,
    values_equal,
)


def execute(source: str, env: Environment | None = None) -> str:
    tokens, _ = scan(source)
    stmts, errors = parse(tokens)
    assert errors == []
    out = io.StringIO()
    Runtime(out).execute(stmts, env if env is not None else Environment())
    return out.getvalue()


@pytest.mark.parametrize(
    "x,want",
    [
        (3.0, "3"),
        (-2.0, "-2"),
        (2.5, "2.5"),
        (0.1, "0.1"),
        (1e-7, "0.0000001"),
        (1.5e-10, "0.00000000015"),
        (1e21, "1000000000000000000000"),
        (math.inf, "inf"),
        (-math.inf, "-inf"),
        (math.nan, "nan"),
    ],
)
def test_format_number(x, want):
    assert format_number(x) == want


def test_truthiness():
    assert not is_truthy(NIL)
    assert not is_truthy(FALSE)
    assert is_truthy(TRUE)
    assert is_truthy(VNumber(0.0))
    assert is_truthy(VString(""))


def test_values_equal_across_kinds():
    assert values_equal(NIL, NIL)
    assert not values_equal(NIL, FALSE)
    assert not values_equal(VNumber(1.0), VString("1"))
    assert values_equal(VString("a"), VString("a"))
    assert not values_equal(VNumber(math.nan), VNumber(math.nan))


def test_natives_compare_by_identity():
    a = VNative("f", 0, lambda args: NIL)
    b = VNative("f", 0, lambda args: NIL)
    assert values_equal(a, a)
    assert not values_equal(a, b)


def test_print_rendering():
    out = execute('print 1; print 1.5; print nil; print true; print "raw";')
    assert out == "1\n1.5\nnil\ntrue\nraw\n"


def test_execute_defines_into_given_env():
    env = Environment()
    execute("var a = 2; fun f() {}", env)
    assert env.get("a") == VNumber(2.0)
    assert env.get("f").to_string() == "<fn f>"


def test_block_scope_is_discarded():
    env = Environment()
    execute("{ var inner = 1; }", env)
    assert "inner" not in env.values


def test_native_call():
    env = Environment()
    env.define("twice", VNative("twice", 1, lambda args: VNumber(args[0].value * 2)))
    assert execute("print twice(21);", env) == "42\n"


def test_operand_error_carries_line():
    with pytest.raises(OperandError) as exc:
        execute('var a = 1;\nprint a - "b";')
    assert exc.value.line == 2
    assert exc.value.msg == "operands must be numbers"


def test_arity_mismatch():
    with pytest.raises(ArityMismatch) as exc:
        execute("fun f(a) {}\nf(1, 2);")
    assert exc.value.expected == 1
    assert exc.value.got == 2
    assert exc.value.line == 2


def test_call_non_callable():
    with pytest.raises(NotCallable):
        execute("var x = 1; x();")


def test_callee_is_evaluated_before_arguments():
    with pytest.raises(RuntimeFault) as exc:
        execute("missing(alsoMissing);")
    assert exc.value.msg == "undefined variable 'missing'"


def test_runtime_error_stops_execution():
    out = io.StringIO()
    tokens, _ = scan('print "a"; print -nil; print "b";')
    stmts, _ = parse(tokens)
    with pytest.raises(OperandError):
        Runtime(out).execute(stmts, Environment())
    assert out.getvalue() == "a\n"


def test_deep_recursion_is_a_runtime_fault():
    with pytest.raises(RuntimeFault) as exc:
        execute("fun f(n) { return f(n + 1); } f(0);")
    assert exc.value.msg == "stack overflow"


def test_deep_expression_is_a_runtime_fault():
    expr = Literal(1, 1.0)
    for _ in range(50000):
        expr = Grouping(1, expr)
    with pytest.raises(RuntimeFault) as exc:
        Runtime(io.StringIO()).evaluate(expr, Environment())
    assert exc.value.msg == "stack overflow"
    assert exc.value.line == 1
