"""Bagel parser — recursive descent, one method per grammar production.

Syntax errors are collected rather than raised to the caller: after each
error the parser synchronizes on the next statement boundary and keeps going,
so one pass reports every independent mistake.
"""

from __future__ import annotations

from .ast import (
    Assign,
    Binary,
    BlockStmt,
    Call,
    Expr,
    ExpressionStmt,
    FunctionStmt,
    Grouping,
    IfStmt,
    Literal,
    Logical,
    PrintStmt,
    ReturnStmt,
    Stmt,
    Unary,
    Variable,
    VarStmt,
    WhileStmt,
)
from .tokens import TK_EOF, TK_IDENT, TK_NUMBER, TK_STRING, Token

MAX_ARGS = 255

NESTED_TOO_DEEPLY = "expression nested too deeply"

EQUALITY_OPS: set[str] = {"==", "!="}
COMPARE_OPS: set[str] = {"<", "<=", ">", ">="}

# Tokens that begin a statement; the parser resumes here after an error.
SYNC_KINDS: set[str] = {"var", "fun", "for", "if", "while", "print", "return"}


class ParseError(Exception):
    """Parse error with location info."""

    def __init__(self, msg: str, line: int, col: int):
        self.msg: str = msg
        self.line: int = line
        self.col: int = col
        super().__init__(msg + " at line " + str(line) + " col " + str(col))


def _describe(tok: Token) -> str:
    if tok.kind == TK_EOF:
        return "end of input"
    return "'" + tok.lexeme + "'"


class Parser:
    """Recursive descent parser for Bagel."""

    def __init__(self, tokens: list[Token]):
        self.tokens: list[Token] = tokens
        self.pos: int = 0
        self.errors: list[ParseError] = []
        self._fn_depth: int = 0

    # ── Helpers ──────────────────────────────────────────────

    def current(self) -> Token:
        return self.tokens[self.pos]

    def previous(self) -> Token:
        return self.tokens[self.pos - 1]

    def advance(self) -> Token:
        tok = self.tokens[self.pos]
        if tok.kind != TK_EOF:
            self.pos += 1
        return tok

    def at(self, kind: str) -> bool:
        return self.current().kind == kind

    def at_end(self) -> bool:
        return self.current().kind == TK_EOF

    def match(self, *kinds: str) -> bool:
        if self.current().kind in kinds:
            self.advance()
            return True
        return False

    def expect(self, kind: str, what: str) -> Token:
        tok = self.current()
        if tok.kind != kind:
            raise self.error("expected " + what + ", got " + _describe(tok))
        return self.advance()

    def expect_ident(self, what: str) -> Token:
        return self.expect(TK_IDENT, what)

    def error(self, msg: str, tok: Token | None = None) -> ParseError:
        if tok is None:
            tok = self.current()
        return ParseError(msg, tok.line, tok.col)

    def report(self, msg: str, tok: Token) -> None:
        """Record an error that does not derail the current production."""
        self.errors.append(self.error(msg, tok))

    def synchronize(self) -> None:
        """Discard tokens until a likely statement boundary."""
        while not self.at_end():
            if self.advance().kind == ";":
                return
            if self.current().kind in SYNC_KINDS:
                return

    # ── Top Level ────────────────────────────────────────────

    def parse_program(self) -> list[Stmt]:
        stmts: list[Stmt] = []
        while not self.at_end():
            stmt = self.parse_declaration()
            if stmt is not None:
                stmts.append(stmt)
        return stmts

    def parse_lone_expression(self) -> Expr | None:
        """Parse a single expression spanning the whole input, or None."""
        try:
            expr = self.parse_expr()
        except ParseError as e:
            self.errors.append(e)
            return None
        if not self.at_end():
            self.errors.append(
                self.error("expected end of input, got " + _describe(self.current()))
            )
            return None
        return expr

    def parse_declaration(self) -> Stmt | None:
        """Declaration = FunDecl | VarDecl | Statement"""
        try:
            if self.match("fun"):
                return self.parse_function()
            if self.match("var"):
                return self.parse_var_decl()
            return self.parse_stmt()
        except ParseError as e:
            self.errors.append(e)
            self.synchronize()
            return None

    def parse_function(self) -> FunctionStmt:
        """FunDecl = 'fun' IDENT '(' Params? ')' Block"""
        line = self.previous().line
        name = self.expect_ident("function name").lexeme
        self.expect("(", "'(' after function name")
        params: list[str] = []
        if not self.at(")"):
            while True:
                if len(params) >= MAX_ARGS:
                    self.report(
                        "can't have more than " + str(MAX_ARGS) + " parameters",
                        self.current(),
                    )
                params.append(self.expect_ident("parameter name").lexeme)
                if not self.match(","):
                    break
        self.expect(")", "')' after parameters")
        self.expect("{", "'{' before function body")
        self._fn_depth += 1
        try:
            body = self.parse_block()
        finally:
            self._fn_depth -= 1
        return FunctionStmt(line, name, tuple(params), tuple(body))

    def parse_var_decl(self) -> VarStmt:
        """VarDecl = 'var' IDENT ( '=' Expr )? ';'"""
        line = self.previous().line
        name = self.expect_ident("variable name").lexeme
        initializer: Expr | None = None
        if self.match("="):
            initializer = self.parse_expr()
        self.expect(";", "';' after variable declaration")
        return VarStmt(line, name, initializer)

    # ── Statements ───────────────────────────────────────────

    def parse_stmt(self) -> Stmt:
        if self.match("print"):
            return self.parse_print_stmt()
        if self.match("if"):
            return self.parse_if_stmt()
        if self.match("while"):
            return self.parse_while_stmt()
        if self.match("for"):
            return self.parse_for_stmt()
        if self.match("return"):
            return self.parse_return_stmt()
        if self.match("{"):
            line = self.previous().line
            return BlockStmt(line, tuple(self.parse_block()))
        return self.parse_expr_stmt()

    def parse_block(self) -> list[Stmt]:
        """Block = '{' Declaration* '}'; opening brace already consumed."""
        stmts: list[Stmt] = []
        while not self.at("}") and not self.at_end():
            stmt = self.parse_declaration()
            if stmt is not None:
                stmts.append(stmt)
        self.expect("}", "'}' after block")
        return stmts

    def parse_print_stmt(self) -> PrintStmt:
        line = self.previous().line
        expr = self.parse_expr()
        self.expect(";", "';' after value")
        return PrintStmt(line, expr)

    def parse_if_stmt(self) -> IfStmt:
        """If = 'if' '(' Expr ')' Stmt ( 'else' Stmt )?"""
        line = self.previous().line
        self.expect("(", "'(' after 'if'")
        cond = self.parse_expr()
        self.expect(")", "')' after if condition")
        then_branch = self.parse_stmt()
        else_branch: Stmt | None = None
        if self.match("else"):
            else_branch = self.parse_stmt()
        return IfStmt(line, cond, then_branch, else_branch)

    def parse_while_stmt(self) -> WhileStmt:
        line = self.previous().line
        self.expect("(", "'(' after 'while'")
        cond = self.parse_expr()
        self.expect(")", "')' after condition")
        body = self.parse_stmt()
        return WhileStmt(line, cond, body)

    def parse_for_stmt(self) -> Stmt:
        """For = 'for' '(' Init Cond? ';' Incr? ')' Stmt, desugared to while."""
        line = self.previous().line
        self.expect("(", "'(' after 'for'")
        init: Stmt | None
        if self.match(";"):
            init = None
        elif self.match("var"):
            init = self.parse_var_decl()
        else:
            init = self.parse_expr_stmt()
        cond: Expr | None = None
        if not self.at(";"):
            cond = self.parse_expr()
        self.expect(";", "';' after loop condition")
        incr: Expr | None = None
        if not self.at(")"):
            incr = self.parse_expr()
        self.expect(")", "')' after for clauses")
        body = self.parse_stmt()

        if incr is not None:
            body = BlockStmt(line, (body, ExpressionStmt(incr.line, incr)))
        if cond is None:
            cond = Literal(line, True)
        loop: Stmt = WhileStmt(line, cond, body)
        if init is not None:
            loop = BlockStmt(line, (init, loop))
        return loop

    def parse_return_stmt(self) -> ReturnStmt:
        keyword = self.previous()
        if self._fn_depth == 0:
            self.report("can't return from top-level code", keyword)
        value: Expr | None = None
        if not self.at(";"):
            value = self.parse_expr()
        self.expect(";", "';' after return value")
        return ReturnStmt(keyword.line, value)

    def parse_expr_stmt(self) -> ExpressionStmt:
        expr = self.parse_expr()
        self.expect(";", "';' after expression")
        return ExpressionStmt(expr.line, expr)

    # ── Expressions ──────────────────────────────────────────

    def parse_expr(self) -> Expr:
        return self.parse_assignment()

    def parse_assignment(self) -> Expr:
        """Assignment = IDENT '=' Assignment | Or"""
        expr = self.parse_or()
        if self.at("="):
            equals = self.advance()
            value = self.parse_assignment()
            if isinstance(expr, Variable):
                return Assign(expr.line, expr.name, value)
            self.report("invalid assignment target", equals)
        return expr

    def parse_or(self) -> Expr:
        """Or = And ( 'or' And )*"""
        left = self.parse_and()
        while self.at("or"):
            self.advance()
            right = self.parse_and()
            left = Logical(left.line, "or", left, right)
        return left

    def parse_and(self) -> Expr:
        """And = Equality ( 'and' Equality )*"""
        left = self.parse_equality()
        while self.at("and"):
            self.advance()
            right = self.parse_equality()
            left = Logical(left.line, "and", left, right)
        return left

    def parse_equality(self) -> Expr:
        """Equality = Compare ( ( '==' | '!=' ) Compare )*"""
        left = self.parse_compare()
        while self.current().kind in EQUALITY_OPS:
            op = self.advance().kind
            right = self.parse_compare()
            left = Binary(left.line, op, left, right)
        return left

    def parse_compare(self) -> Expr:
        """Compare = Sum ( CompOp Sum )*"""
        left = self.parse_sum()
        while self.current().kind in COMPARE_OPS:
            op = self.advance().kind
            right = self.parse_sum()
            left = Binary(left.line, op, left, right)
        return left

    def parse_sum(self) -> Expr:
        """Sum = Product ( ( '+' | '-' ) Product )*"""
        left = self.parse_product()
        while self.at("+") or self.at("-"):
            op = self.advance().kind
            right = self.parse_product()
            left = Binary(left.line, op, left, right)
        return left

    def parse_product(self) -> Expr:
        """Product = Unary ( ( '*' | '/' ) Unary )*"""
        left = self.parse_unary()
        while self.at("*") or self.at("/"):
            op = self.advance().kind
            right = self.parse_unary()
            left = Binary(left.line, op, left, right)
        return left

    def parse_unary(self) -> Expr:
        """Unary = ( '-' | '!' ) Unary | Call"""
        if self.at("-") or self.at("!"):
            tok = self.advance()
            operand = self.parse_unary()
            return Unary(tok.line, tok.kind, operand)
        return self.parse_call()

    def parse_call(self) -> Expr:
        """Call = Primary ( '(' ArgList? ')' )*"""
        expr = self.parse_primary()
        while self.match("("):
            args = self.parse_arg_list()
            paren = self.expect(")", "')' after arguments")
            expr = Call(paren.line, expr, tuple(args))
        return expr

    def parse_arg_list(self) -> list[Expr]:
        """ArgList = Expr ( ',' Expr )*"""
        args: list[Expr] = []
        if self.at(")"):
            return args
        while True:
            if len(args) >= MAX_ARGS:
                self.report(
                    "can't have more than " + str(MAX_ARGS) + " arguments",
                    self.current(),
                )
            args.append(self.parse_expr())
            if not self.match(","):
                break
        return args

    def parse_primary(self) -> Expr:
        """Parse a primary expression."""
        tok = self.current()

        if tok.kind == TK_NUMBER or tok.kind == TK_STRING:
            self.advance()
            return Literal(tok.line, tok.literal)
        if tok.kind == "true":
            self.advance()
            return Literal(tok.line, True)
        if tok.kind == "false":
            self.advance()
            return Literal(tok.line, False)
        if tok.kind == "nil":
            self.advance()
            return Literal(tok.line, None)
        if tok.kind == TK_IDENT:
            self.advance()
            return Variable(tok.line, tok.lexeme)
        if tok.kind == "(":
            self.advance()
            inner = self.parse_expr()
            self.expect(")", "')' after expression")
            return Grouping(tok.line, inner)

        raise self.error("expected expression, got " + _describe(tok))


def parse(tokens: list[Token]) -> tuple[list[Stmt], list[ParseError]]:
    """Parse a token list into statements plus any syntax errors.

    A non-empty error list means the statements are partial and must not be
    executed.
    """
    parser = Parser(tokens)
    try:
        stmts = parser.parse_program()
    except RecursionError:
        parser.errors.append(parser.error(NESTED_TOO_DEEPLY))
        return [], parser.errors
    return stmts, parser.errors


def parse_expression(tokens: list[Token]) -> tuple[Expr | None, list[ParseError]]:
    """Parse tokens as one bare expression (no trailing ';')."""
    parser = Parser(tokens)
    try:
        expr = parser.parse_lone_expression()
    except RecursionError:
        parser.errors.append(parser.error(NESTED_TOO_DEEPLY))
        return None, parser.errors
    return expr, parser.errors
