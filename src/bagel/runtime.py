"""Bagel runtime — tree-walking evaluation of a parsed program.

Statement executors return a completion: None for normal completion, or a
`_Return` carrying the value of a `return` statement. Every executor that runs
nested statements hands a `_Return` straight back to its caller, so it unwinds
through blocks and loops until the enclosing function call consumes it.
Runtime errors, by contrast, are Python exceptions (`RuntimeFault`) that abort
the whole run.
"""

from __future__ import annotations

from dataclasses import dataclass
import math
import sys
from typing import Protocol

from .ast import (
    Assign,
    Binary,
    BlockStmt,
    Call,
    Expr,
    ExpressionStmt,
    FunctionStmt,
    Grouping,
    IfStmt,
    Literal,
    Logical,
    PrintStmt,
    ReturnStmt,
    Stmt,
    Unary,
    Variable,
    VarStmt,
    WhileStmt,
)
from .environment import Environment
from .errors import ArityMismatch, NotCallable, OperandError, RuntimeFault
from .values import (
    FALSE,
    NIL,
    TRUE,
    Value,
    VCallable,
    VFunction,
    VNumber,
    VString,
    from_literal,
    is_truthy,
    values_equal,
)


class Output(Protocol):
    """Sink for print statements."""

    def write(self, text: str) -> object: ...


# ============================================================
# Completions
# ============================================================


@dataclass(frozen=True)
class _Return:
    value: Value


Completion = _Return | None


# ============================================================
# Runtime
# ============================================================


class Runtime:
    def __init__(self, out: Output | None = None):
        self.out: Output = out if out is not None else sys.stdout

    # ---- Running -----------------------------------------------------------

    def execute(self, stmts: list[Stmt], env: Environment) -> None:
        """Run top-level statements in env. Raises RuntimeFault on error."""
        for st in stmts:
            try:
                done = self._exec_stmt(st, env)
            except RecursionError:
                raise RuntimeFault("stack overflow", st.line) from None
            if done is not None:
                raise RuntimeFault("can't return from top-level code", st.line)

    def evaluate(self, expr: Expr, env: Environment) -> Value:
        try:
            return self._eval_expr(expr, env)
        except RecursionError:
            raise RuntimeFault("stack overflow", expr.line) from None

    # ---- Functions ---------------------------------------------------------

    def call_function(self, fn: VFunction, args: list[Value]) -> Value:
        # Scope hangs off the defining environment, not the caller's.
        env = Environment(fn.closure)
        for name, arg in zip(fn.declaration.params, args):
            env.define(name, arg)
        done = self._exec_block(fn.declaration.body, env)
        if done is None:
            return NIL
        return done.value

    # ---- Statements --------------------------------------------------------

    def _exec_block(self, stmts: tuple[Stmt, ...], env: Environment) -> Completion:
        for st in stmts:
            done = self._exec_stmt(st, env)
            if done is not None:
                return done
        return None

    def _exec_stmt(self, st: Stmt, env: Environment) -> Completion:
        if isinstance(st, ExpressionStmt):
            self._eval_expr(st.expr, env)
            return None

        if isinstance(st, PrintStmt):
            val = self._eval_expr(st.expr, env)
            self.out.write(val.to_string() + "\n")
            return None

        if isinstance(st, VarStmt):
            val = NIL
            if st.initializer is not None:
                val = self._eval_expr(st.initializer, env)
            env.define(st.name, val)
            return None

        if isinstance(st, BlockStmt):
            return self._exec_block(st.statements, Environment(env))

        if isinstance(st, IfStmt):
            if is_truthy(self._eval_expr(st.condition, env)):
                return self._exec_stmt(st.then_branch, env)
            if st.else_branch is not None:
                return self._exec_stmt(st.else_branch, env)
            return None

        if isinstance(st, WhileStmt):
            while is_truthy(self._eval_expr(st.condition, env)):
                done = self._exec_stmt(st.body, env)
                if done is not None:
                    return done
            return None

        if isinstance(st, FunctionStmt):
            env.define(st.name, VFunction(st, env))
            return None

        if isinstance(st, ReturnStmt):
            val = NIL
            if st.value is not None:
                val = self._eval_expr(st.value, env)
            return _Return(val)

        raise RuntimeFault("unsupported statement", st.line)

    # ---- Expressions -------------------------------------------------------

    def _eval_expr(self, expr: Expr, env: Environment) -> Value:
        if isinstance(expr, Literal):
            return from_literal(expr.value)

        if isinstance(expr, Variable):
            return env.get(expr.name, line=expr.line)

        if isinstance(expr, Assign):
            val = self._eval_expr(expr.value, env)
            env.assign(expr.name, val, line=expr.line)
            return val

        if isinstance(expr, Grouping):
            return self._eval_expr(expr.inner, env)

        if isinstance(expr, Logical):
            left = self._eval_expr(expr.left, env)
            if expr.op == "or":
                if is_truthy(left):
                    return left
            elif not is_truthy(left):
                return left
            return self._eval_expr(expr.right, env)

        if isinstance(expr, Unary):
            operand = self._eval_expr(expr.operand, env)
            if expr.op == "!":
                return FALSE if is_truthy(operand) else TRUE
            if expr.op == "-":
                if not isinstance(operand, VNumber):
                    raise OperandError("operand must be a number", expr.line)
                return VNumber(-operand.value)
            raise RuntimeFault(f"unknown unary operator '{expr.op}'", expr.line)

        if isinstance(expr, Binary):
            left = self._eval_expr(expr.left, env)
            right = self._eval_expr(expr.right, env)
            return self._eval_binary(expr.op, left, right, line=expr.line)

        if isinstance(expr, Call):
            return self._eval_call(expr, env)

        raise RuntimeFault("unsupported expression", expr.line)

    def _eval_call(self, call: Call, env: Environment) -> Value:
        callee = self._eval_expr(call.callee, env)
        args = [self._eval_expr(a, env) for a in call.args]
        if not isinstance(callee, VCallable):
            raise NotCallable("can only call functions", call.line)
        if len(args) != callee.arity():
            raise ArityMismatch(callee.arity(), len(args), call.line)
        try:
            return callee.call(self, args)
        except RecursionError:
            raise RuntimeFault("stack overflow", call.line) from None

    def _eval_binary(self, op: str, left: Value, right: Value, *, line: int) -> Value:
        if op == "==":
            return TRUE if values_equal(left, right) else FALSE
        if op == "!=":
            return FALSE if values_equal(left, right) else TRUE

        if op == "+":
            if isinstance(left, VNumber) and isinstance(right, VNumber):
                return VNumber(left.value + right.value)
            if isinstance(left, VString) and isinstance(right, VString):
                return VString(left.value + right.value)
            raise OperandError("operands must be two numbers or two strings", line)

        if not isinstance(left, VNumber) or not isinstance(right, VNumber):
            raise OperandError("operands must be numbers", line)
        a = left.value
        b = right.value

        if op == "-":
            return VNumber(a - b)
        if op == "*":
            return VNumber(a * b)
        if op == "/":
            return VNumber(_divide(a, b))
        if op in ("<", "<=", ">", ">="):
            return TRUE if _cmp(op, a, b) else FALSE

        raise RuntimeFault(f"unknown operator '{op}'", line)


def _divide(a: float, b: float) -> float:
    """IEEE-754 division: x/0 is a signed infinity, 0/0 is nan."""
    if b == 0.0:
        if a == 0.0 or math.isnan(a):
            return math.nan
        return math.copysign(math.inf, a) * math.copysign(1.0, b)
    return a / b


def _cmp(op: str, a: float, b: float) -> bool:
    if op == "<":
        return a < b
    if op == "<=":
        return a <= b
    if op == ">":
        return a > b
    if op == ">=":
        return a >= b
    raise AssertionError(op)
