"""Bagel runtime diagnostics."""

from __future__ import annotations


class BagelError(Exception):
    """Base error for Bagel evaluation."""

    def __init__(self, msg: str, line: int | None = None):
        if line is None:
            super().__init__(msg)
        else:
            super().__init__(f"{msg} at line {line}")
        self.msg = msg
        self.line = line


class RuntimeFault(BagelError):
    """Runtime error: halts the current run, never recovered locally."""


class UndefinedVariable(RuntimeFault):
    """Read or assignment of a name no enclosing scope defines."""

    def __init__(self, name: str, line: int | None = None):
        super().__init__(f"undefined variable '{name}'", line)
        self.name = name


class ArityMismatch(RuntimeFault):
    """Call with the wrong number of arguments."""

    def __init__(self, expected: int, got: int, line: int | None = None):
        super().__init__(f"expected {expected} arguments but got {got}", line)
        self.expected = expected
        self.got = got


class OperandError(RuntimeFault):
    """Operator applied to operands of the wrong kind."""


class NotCallable(RuntimeFault):
    """Call target is not a function."""
