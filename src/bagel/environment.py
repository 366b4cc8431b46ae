"""Bagel environments — lexical scopes linked to their enclosing scope.

An environment is shared by reference: the call frame running in it and every
function value that captured it see the same slots, so an assignment made
through one holder is observed by all of them. Reclamation is left to the
host: reference counting frees ordinary chains, and the function/scope cycle
created by a self-referencing function is collected by the cycle GC.
"""

from __future__ import annotations

from .errors import UndefinedVariable
from .values import Value


class Environment:
    def __init__(self, enclosing: Environment | None = None) -> None:
        self.values: dict[str, Value] = {}
        self.enclosing = enclosing

    def define(self, name: str, value: Value) -> None:
        """Bind name in this scope, overwriting any binding already here."""
        self.values[name] = value

    def _resolve(self, name: str) -> Environment | None:
        env: Environment | None = self
        while env is not None:
            if name in env.values:
                return env
            env = env.enclosing
        return None

    def get(self, name: str, *, line: int | None = None) -> Value:
        env = self._resolve(name)
        if env is None:
            raise UndefinedVariable(name, line)
        return env.values[name]

    def assign(self, name: str, value: Value, *, line: int | None = None) -> None:
        """Mutate the nearest existing binding; never creates one."""
        env = self._resolve(name)
        if env is None:
            raise UndefinedVariable(name, line)
        env.values[name] = value
