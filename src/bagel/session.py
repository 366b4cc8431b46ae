"""Session control for Bagel: scan, parse and run source chunks against one
persistent global environment.

A script runs as a single chunk. The interactive shell feeds one chunk per
complete input; globals defined by earlier chunks stay visible to later ones,
even after a chunk fails.
"""

from __future__ import annotations

from dataclasses import dataclass, field
import logging
from typing import Iterable

from .environment import Environment
from .errors import RuntimeFault
from .natives import default_natives
from .parse import parse, parse_expression
from .runtime import Output, Runtime
from .tokens import scan
from .values import Value, VNative

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Diagnostic:
    line: int
    message: str

    def __str__(self) -> str:
        return f"line {self.line}: {self.message}"


@dataclass(frozen=True)
class Ok:
    """Chunk ran to completion. value is set when an expression was echoed."""

    value: Value | None = None


@dataclass(frozen=True)
class LexOrParseFailure:
    errors: list[Diagnostic] = field(default_factory=list)


@dataclass(frozen=True)
class RuntimeFailure:
    error: Diagnostic


ExecutionResult = Ok | LexOrParseFailure | RuntimeFailure


class Session:
    """Governs one Bagel program run (or one interactive session)."""

    def __init__(
        self,
        out: Output | None = None,
        natives: Iterable[VNative] | None = None,
    ):
        self.globals = Environment()
        self.runtime = Runtime(out)
        for native in default_natives() if natives is None else natives:
            self.define_native(native)

    @property
    def out(self) -> Output:
        return self.runtime.out

    def define_native(self, native: VNative) -> None:
        self.globals.define(native.name, native)

    def run(self, source: str) -> ExecutionResult:
        """Scan, parse and execute source. Nothing runs if any phase failed."""
        tokens, scan_errors = scan(source)
        stmts, parse_errors = parse(tokens)
        logger.debug(
            "scanned %d tokens, parsed %d statements", len(tokens), len(stmts)
        )
        if scan_errors or parse_errors:
            diags = [Diagnostic(e.line, e.msg) for e in scan_errors]
            diags += [Diagnostic(e.line, e.msg) for e in parse_errors]
            diags.sort(key=lambda d: d.line)
            logger.debug("rejected chunk with %d errors", len(diags))
            return LexOrParseFailure(diags)
        try:
            self.runtime.execute(stmts, self.globals)
        except RuntimeFault as e:
            logger.debug("runtime fault: %s", e)
            return RuntimeFailure(Diagnostic(e.line or 0, e.msg))
        return Ok()

    def run_interactive(self, source: str) -> ExecutionResult:
        """Like run, but a chunk that is one bare expression is evaluated and
        its value echoed to the output sink.
        """
        tokens, scan_errors = scan(source)
        if not scan_errors:
            expr, errors = parse_expression(tokens)
            if expr is not None and not errors:
                try:
                    value = self.runtime.evaluate(expr, self.globals)
                except RuntimeFault as e:
                    return RuntimeFailure(Diagnostic(e.line or 0, e.msg))
                self.out.write(value.to_string() + "\n")
                return Ok(value)
        return self.run(source)


def run(source: str, out: Output | None = None) -> ExecutionResult:
    """Run source in a fresh session."""
    return Session(out).run(source)
