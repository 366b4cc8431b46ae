"""Bagel interpreter — public API."""

from __future__ import annotations

from .parse import ParseError as ParseError, parse, parse_expression
from .session import (
    Diagnostic as Diagnostic,
    ExecutionResult as ExecutionResult,
    LexOrParseFailure as LexOrParseFailure,
    Ok as Ok,
    RuntimeFailure as RuntimeFailure,
    Session as Session,
    run as run,
)
from .tokens import ScanError as ScanError, scan

__all__ = [
    "Diagnostic",
    "ExecutionResult",
    "LexOrParseFailure",
    "Ok",
    "ParseError",
    "RuntimeFailure",
    "ScanError",
    "Session",
    "parse",
    "parse_expression",
    "run",
    "scan",
]
