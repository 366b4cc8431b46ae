"""Bagel runtime values — a closed set of tagged variants."""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal
import math
from typing import TYPE_CHECKING, Callable

from .ast import FunctionStmt

if TYPE_CHECKING:
    from .environment import Environment
    from .runtime import Runtime


class Value:
    """A runtime value."""

    def to_string(self) -> str:
        raise NotImplementedError


@dataclass(frozen=True)
class VNil(Value):
    def to_string(self) -> str:
        return "nil"


@dataclass(frozen=True)
class VBool(Value):
    value: bool

    def to_string(self) -> str:
        return "true" if self.value else "false"


@dataclass(frozen=True, eq=False)
class VNumber(Value):
    value: float

    def to_string(self) -> str:
        return format_number(self.value)

    def __eq__(self, other: object) -> bool:
        # IEEE comparison: nan is unequal to itself.
        return isinstance(other, VNumber) and self.value == other.value

    def __hash__(self) -> int:
        return hash(self.value)


@dataclass(frozen=True)
class VString(Value):
    value: str

    def to_string(self) -> str:
        return self.value


class VCallable(Value):
    """Anything that can be called: user functions and natives."""

    def arity(self) -> int:
        raise NotImplementedError

    def call(self, runtime: Runtime, args: list[Value]) -> Value:
        raise NotImplementedError


# Functions compare by identity, so eq stays off.
@dataclass(eq=False)
class VFunction(VCallable):
    declaration: FunctionStmt
    closure: Environment

    def to_string(self) -> str:
        return f"<fn {self.declaration.name}>"

    def arity(self) -> int:
        return len(self.declaration.params)

    def call(self, runtime: Runtime, args: list[Value]) -> Value:
        return runtime.call_function(self, args)


@dataclass(eq=False)
class VNative(VCallable):
    name: str
    params: int
    fn: Callable[[list[Value]], Value]

    def to_string(self) -> str:
        return "<native fn>"

    def arity(self) -> int:
        return self.params

    def call(self, runtime: Runtime, args: list[Value]) -> Value:
        return self.fn(args)


NIL = VNil()
TRUE = VBool(True)
FALSE = VBool(False)


def from_literal(value: float | str | bool | None) -> Value:
    """Convert a parse-time literal to its runtime value."""
    if value is None:
        return NIL
    if isinstance(value, bool):
        return TRUE if value else FALSE
    if isinstance(value, float):
        return VNumber(value)
    return VString(value)


def is_truthy(v: Value) -> bool:
    if isinstance(v, VNil):
        return False
    if isinstance(v, VBool):
        return v.value
    return True


def values_equal(a: Value, b: Value) -> bool:
    """Equality across all value kinds; never raises."""
    if isinstance(a, VNil) and isinstance(b, VNil):
        return True
    if isinstance(a, VBool) and isinstance(b, VBool):
        return a.value == b.value
    if isinstance(a, VNumber) and isinstance(b, VNumber):
        return a.value == b.value
    if isinstance(a, VString) and isinstance(b, VString):
        return a.value == b.value
    if isinstance(a, VCallable) and isinstance(b, VCallable):
        return a is b
    return False


def format_number(x: float) -> str:
    """Integral numbers print without a fractional part; others as decimals."""
    if math.isnan(x):
        return "nan"
    if math.isinf(x):
        return "inf" if x > 0 else "-inf"
    if x.is_integer():
        return str(int(x))
    # Shortest round-trip digits, written positionally (no exponent).
    return format(Decimal(repr(x)), "f")
