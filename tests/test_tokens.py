"""Scanner tests."""

from bagel.tokens import TK_EOF, TK_IDENT, TK_NUMBER, TK_STRING, scan


def kinds(source: str) -> list[str]:
    tokens, errors = scan(source)
    assert errors == []
    return [t.kind for t in tokens]


def test_empty_source_is_just_eof():
    tokens, errors = scan("")
    assert errors == []
    assert len(tokens) == 1
    assert tokens[0].kind == TK_EOF


def test_operators_prefer_two_characters():
    assert kinds("! != = == < <= > >=") == [
        "!", "!=", "=", "==", "<", "<=", ">", ">=", TK_EOF,
    ]


def test_keywords_and_identifiers():
    assert kinds("var varName fun _x1 nil") == [
        "var", TK_IDENT, "fun", TK_IDENT, "nil", TK_EOF,
    ]


def test_number_literals():
    tokens, _ = scan("12 3.25")
    assert tokens[0].kind == TK_NUMBER
    assert tokens[0].literal == 12.0
    assert tokens[1].literal == 3.25


def test_trailing_dot_is_not_part_of_number():
    tokens, _ = scan("1.")
    assert [t.kind for t in tokens] == [TK_NUMBER, ".", TK_EOF]
    assert tokens[0].lexeme == "1"


def test_string_literal_strips_quotes():
    tokens, _ = scan('"hi there"')
    assert tokens[0].kind == TK_STRING
    assert tokens[0].literal == "hi there"
    assert tokens[0].lexeme == '"hi there"'


def test_multiline_string_advances_line():
    tokens, _ = scan('"a\nb" x')
    assert tokens[0].literal == "a\nb"
    assert tokens[0].line == 1
    assert tokens[1].line == 2


def test_comment_runs_to_end_of_line():
    assert kinds("1 // 2 3\n4") == [TK_NUMBER, TK_NUMBER, TK_EOF]


def test_line_and_column_tracking():
    tokens, _ = scan("var a\n  = 1;")
    eq = tokens[2]
    assert eq.kind == "="
    assert (eq.line, eq.col) == (2, 3)


def test_unexpected_character_is_recorded_and_skipped():
    tokens, errors = scan("1 @ 2")
    assert [t.kind for t in tokens] == [TK_NUMBER, TK_NUMBER, TK_EOF]
    assert len(errors) == 1
    assert errors[0].msg == "unexpected character '@'"
    assert errors[0].line == 1


def test_every_bad_character_is_reported():
    _, errors = scan("@\n#")
    assert [(e.line, e.msg) for e in errors] == [
        (1, "unexpected character '@'"),
        (2, "unexpected character '#'"),
    ]


def test_unterminated_string_reports_start_line():
    tokens, errors = scan('x\n"abc\ndef')
    assert [t.kind for t in tokens] == [TK_IDENT, TK_EOF]
    assert len(errors) == 1
    assert errors[0].msg == "unterminated string"
    assert errors[0].line == 2


def test_token_repr():
    tokens, _ = scan("x")
    assert repr(tokens[0]) == "Token(IDENT, 'x', 1, 1)"
