"""Bagel scanner — lexes source into a flat token list."""

from __future__ import annotations

from dataclasses import dataclass

# Token kinds for literal-bearing tokens. Reserved words and punctuation use
# their own text as kind.
TK_NUMBER = "NUMBER"
TK_STRING = "STRING"
TK_IDENT = "IDENT"
TK_EOF = "EOF"

KEYWORDS: set[str] = {
    "and",
    "else",
    "false",
    "for",
    "fun",
    "if",
    "nil",
    "or",
    "print",
    "return",
    "true",
    "var",
    "while",
}

# Operators that may be followed by '=' to form a two-character operator.
EQ_PREFIXED: set[str] = {"!", "=", "<", ">"}

SINGLE_OPS: set[str] = {
    "(",
    ")",
    "{",
    "}",
    ",",
    ".",
    ";",
    "-",
    "+",
    "*",
    "/",
}


class ScanError(Exception):
    """Lexical error: unexpected character or unterminated string."""

    def __init__(self, msg: str, line: int, col: int):
        self.msg: str = msg
        self.line: int = line
        self.col: int = col
        super().__init__(msg + " at line " + str(line) + " col " + str(col))


@dataclass(frozen=True)
class Token:
    """A token with kind, source text, position and literal value."""

    kind: str
    lexeme: str
    line: int
    col: int
    literal: float | str | None = None

    def __repr__(self) -> str:
        return (
            "Token("
            + self.kind
            + ", "
            + repr(self.lexeme)
            + ", "
            + str(self.line)
            + ", "
            + str(self.col)
            + ")"
        )


def _is_digit(c: str) -> bool:
    return c >= "0" and c <= "9"


def _is_alpha(c: str) -> bool:
    return (c >= "a" and c <= "z") or (c >= "A" and c <= "Z") or c == "_"


def _is_alnum(c: str) -> bool:
    return _is_alpha(c) or _is_digit(c)


def scan(source: str) -> tuple[list[Token], list[ScanError]]:
    """Scan Bagel source into a token list ending with TK_EOF.

    Errors do not stop the pass: each bad character or unterminated string is
    recorded and scanning resumes after it.
    """
    tokens: list[Token] = []
    errors: list[ScanError] = []
    pos = 0
    line = 1
    col = 1
    length = len(source)

    while pos < length:
        c = source[pos]

        # Newlines
        if c == "\n":
            pos += 1
            line += 1
            col = 1
            continue

        # Whitespace
        if c == " " or c == "\t" or c == "\r":
            pos += 1
            col += 1
            continue

        # Line comment: //
        if c == "/" and pos + 1 < length and source[pos + 1] == "/":
            while pos < length and source[pos] != "\n":
                pos += 1
            continue

        start_pos = pos
        start_line = line
        start_col = col

        # String literal: "..." (may span lines, no escapes)
        if c == '"':
            pos += 1
            col += 1
            while pos < length and source[pos] != '"':
                if source[pos] == "\n":
                    line += 1
                    col = 1
                else:
                    col += 1
                pos += 1
            if pos >= length:
                errors.append(
                    ScanError("unterminated string", start_line, start_col)
                )
                break
            pos += 1  # skip closing "
            col += 1
            raw = source[start_pos:pos]
            tokens.append(Token(TK_STRING, raw, start_line, start_col, raw[1:-1]))
            continue

        # Number: digits, optionally '.' followed by digits
        if _is_digit(c):
            while pos < length and _is_digit(source[pos]):
                pos += 1
                col += 1
            if (
                pos + 1 < length
                and source[pos] == "."
                and _is_digit(source[pos + 1])
            ):
                pos += 1
                col += 1
                while pos < length and _is_digit(source[pos]):
                    pos += 1
                    col += 1
            raw = source[start_pos:pos]
            tokens.append(Token(TK_NUMBER, raw, start_line, start_col, float(raw)))
            continue

        # Identifier or keyword
        if _is_alpha(c):
            while pos < length and _is_alnum(source[pos]):
                pos += 1
                col += 1
            word = source[start_pos:pos]
            if word in KEYWORDS:
                tokens.append(Token(word, word, start_line, start_col))
            else:
                tokens.append(Token(TK_IDENT, word, start_line, start_col))
            continue

        # One- or two-character operators: ! != = == < <= > >=
        if c in EQ_PREFIXED:
            if pos + 1 < length and source[pos + 1] == "=":
                op = c + "="
            else:
                op = c
            tokens.append(Token(op, op, start_line, start_col))
            pos += len(op)
            col += len(op)
            continue

        if c in SINGLE_OPS:
            tokens.append(Token(c, c, start_line, start_col))
            pos += 1
            col += 1
            continue

        errors.append(ScanError("unexpected character '" + c + "'", line, col))
        pos += 1
        col += 1

    tokens.append(Token(TK_EOF, "", line, col))
    return tokens, errors
