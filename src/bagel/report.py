"""Rendering of failed runs for humans: one line per diagnostic with the
offending source line echoed beneath it.
"""

from __future__ import annotations

from typing import TextIO

from termcolor import colored

from .session import Diagnostic, ExecutionResult, LexOrParseFailure, RuntimeFailure

ERROR = "red"


def source_line(source: str, line: int) -> str | None:
    lines = source.split("\n")
    if line < 1 or line > len(lines):
        return None
    return lines[line - 1].rstrip("\r")


def format_diagnostic(
    diag: Diagnostic, source: str, path: str, *, color: bool = True
) -> str:
    """Format as `bagel: <path>:<line>: error: <message>` plus source echo."""
    no_color = None if color else True
    text = "bagel: " + colored(f"{path}:{diag.line}: ", attrs=["bold"], no_color=no_color)
    text += colored("error: ", ERROR, attrs=["bold"], no_color=no_color)
    text += diag.message
    echo = source_line(source, diag.line)
    if echo is not None and echo.strip() != "":
        text += "\n    " + echo.strip()
    return text


def diagnostics(result: ExecutionResult) -> list[Diagnostic]:
    if isinstance(result, LexOrParseFailure):
        return list(result.errors)
    if isinstance(result, RuntimeFailure):
        return [result.error]
    return []


def report(
    result: ExecutionResult,
    source: str,
    path: str,
    stream: TextIO,
    *,
    color: bool = True,
) -> None:
    """Write every diagnostic of a failed result to stream."""
    for diag in diagnostics(result):
        print(format_diagnostic(diag, source, path, color=color), file=stream)
