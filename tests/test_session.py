"""Driver tests: result variants and state carried between chunks."""

from bagel import run
from bagel.session import (
    Diagnostic,
    LexOrParseFailure,
    Ok,
    RuntimeFailure,
    Session,
)
from bagel.values import VNative, VNumber


def test_ok(session, out):
    assert session.run("print 1 + 1;") == Ok()
    assert out.getvalue() == "2\n"


def test_lex_or_parse_failure_collects_all_errors_in_line_order(session, out):
    result = session.run('print "a";\nvar = 1;\nprint @;')
    assert isinstance(result, LexOrParseFailure)
    assert [d.line for d in result.errors] == [2, 3, 3]
    assert result.errors[1] == Diagnostic(3, "unexpected character '@'")
    assert out.getvalue() == ""


def test_runtime_failure(session, out):
    result = session.run('print "a";\nprint nil + 1;')
    assert result == RuntimeFailure(
        Diagnostic(2, "operands must be two numbers or two strings")
    )
    assert out.getvalue() == "a\n"


def test_diagnostic_str():
    assert str(Diagnostic(7, "boom")) == "line 7: boom"


def test_globals_persist_between_chunks(session, out):
    session.run("var a = 1;")
    session.run("fun inc() { a = a + 1; }")
    session.run("inc(); print a;")
    assert out.getvalue() == "2\n"


def test_globals_survive_a_runtime_failure(session, out):
    session.run("var a = 1;")
    assert isinstance(session.run("a = 2; nil();"), RuntimeFailure)
    session.run("print a;")
    assert out.getvalue() == "2\n"


def test_failed_parse_defines_nothing(session):
    session.run("var a = 1; var = 2;")
    assert isinstance(session.run("print a;"), RuntimeFailure)


def test_run_interactive_echoes_expression(session, out):
    result = session.run_interactive("1 + 2")
    assert result == Ok(VNumber(3.0))
    assert out.getvalue() == "3\n"


def test_run_interactive_runs_statements(session, out):
    assert session.run_interactive("var a = 4;") == Ok()
    session.run_interactive("a * 2")
    assert out.getvalue() == "8\n"


def test_run_interactive_expression_runtime_error(session):
    result = session.run_interactive("missing")
    assert result == RuntimeFailure(Diagnostic(1, "undefined variable 'missing'"))


def test_run_interactive_reports_statement_errors(session):
    result = session.run_interactive("print ;")
    assert isinstance(result, LexOrParseFailure)
    assert result.errors[0].message == "expected expression, got ';'"


def test_custom_natives(out):
    answer = VNative("answer", 0, lambda args: VNumber(42.0))
    sess = Session(out, natives=[answer])
    sess.run("print answer();")
    assert out.getvalue() == "42\n"
    assert isinstance(sess.run("clock();"), RuntimeFailure)


def test_module_level_run(out):
    assert run("print 3;", out) == Ok()
    assert out.getvalue() == "3\n"


def test_deep_nesting_comes_back_as_a_result(session):
    source = "!" * 50000 + "true"
    result = session.run_interactive(source)
    assert result == LexOrParseFailure(
        [Diagnostic(1, "expression nested too deeply")]
    )
