"""Bagel CLI — run .bgl scripts or start the interactive shell."""

from __future__ import annotations

import logging
import sys

from .report import report
from .session import LexOrParseFailure, Ok, RuntimeFailure, Session
from .shell import Shell

# sysexits.h values
EX_DATAERR = 65
EX_SOFTWARE = 70

# Deep Bagel recursion runs on the host stack.
RECURSION_LIMIT = 10000

USAGE: str = """\
bagel [OPTIONS] [FILE]

Run a Bagel program, or start an interactive shell when FILE is omitted.

Options:
  --no-color   Disable colored diagnostics
  --verbose    Log interpreter phases to stderr
  --help       Show this help message
"""


def main(argv: list[str] | None = None) -> int:
    args = argv if argv is not None else sys.argv[1:]
    filepath: str = ""
    color = True
    verbose = False
    i = 0
    while i < len(args):
        arg = args[i]
        if arg == "--help" or arg == "-h":
            print(USAGE, end="")
            return 0
        elif arg == "--no-color":
            color = False
            i += 1
        elif arg == "--verbose":
            verbose = True
            i += 1
        elif arg.startswith("-"):
            print("bagel: unknown flag '" + arg + "'", file=sys.stderr)
            return 2
        elif filepath == "":
            filepath = arg
            i += 1
        else:
            print("bagel: unexpected argument '" + arg + "'", file=sys.stderr)
            return 2

    logging.basicConfig(
        stream=sys.stderr,
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(name)s: %(levelname)s: %(message)s",
    )
    if sys.getrecursionlimit() < RECURSION_LIMIT:
        sys.setrecursionlimit(RECURSION_LIMIT)

    if filepath == "":
        Shell(Session(), color=color).cmdloop()
        return 0

    try:
        with open(filepath, "rb") as f:
            raw = f.read()
    except FileNotFoundError:
        print("bagel: " + filepath + ": No such file or directory", file=sys.stderr)
        return 1
    except OSError as e:
        print("bagel: " + filepath + ": " + str(e), file=sys.stderr)
        return 1
    try:
        source = raw.decode("utf-8")
    except ValueError:
        print("bagel: " + filepath + ": invalid utf-8", file=sys.stderr)
        return 1

    result = Session().run(source)
    sys.stdout.flush()
    if isinstance(result, Ok):
        return 0
    report(result, source, filepath, sys.stderr, color=color)
    if isinstance(result, LexOrParseFailure):
        return EX_DATAERR
    if isinstance(result, RuntimeFailure):
        return EX_SOFTWARE
    raise AssertionError(result)


if __name__ == "__main__":
    sys.exit(main())
