"""Bagel AST — parse-time node definitions.

Nodes are frozen: the runtime walks the tree but never mutates it.
"""

from __future__ import annotations

from dataclasses import dataclass


# ============================================================
# EXPRESSIONS
# ============================================================


@dataclass(frozen=True)
class Expr:
    """Base for all expressions."""

    line: int


@dataclass(frozen=True)
class Literal(Expr):
    """Number, string, true/false or nil literal."""

    value: float | str | bool | None


@dataclass(frozen=True)
class Variable(Expr):
    """Reference to a named binding."""

    name: str


@dataclass(frozen=True)
class Assign(Expr):
    """name = value, yielding the assigned value."""

    name: str
    value: Expr


@dataclass(frozen=True)
class Binary(Expr):
    """Arithmetic, comparison or equality operator."""

    op: str
    left: Expr
    right: Expr


@dataclass(frozen=True)
class Logical(Expr):
    """Short-circuiting 'and' / 'or'."""

    op: str
    left: Expr
    right: Expr


@dataclass(frozen=True)
class Unary(Expr):
    """'-' or '!' applied to one operand."""

    op: str
    operand: Expr


@dataclass(frozen=True)
class Grouping(Expr):
    """Parenthesized expression."""

    inner: Expr


@dataclass(frozen=True)
class Call(Expr):
    """callee(args...)."""

    callee: Expr
    args: tuple[Expr, ...]


# ============================================================
# STATEMENTS
# ============================================================


@dataclass(frozen=True)
class Stmt:
    """Base for all statements."""

    line: int


@dataclass(frozen=True)
class ExpressionStmt(Stmt):
    """Bare expression as statement."""

    expr: Expr


@dataclass(frozen=True)
class PrintStmt(Stmt):
    """print expr;"""

    expr: Expr


@dataclass(frozen=True)
class VarStmt(Stmt):
    """var name (= initializer)?;"""

    name: str
    initializer: Expr | None


@dataclass(frozen=True)
class BlockStmt(Stmt):
    """{ ... } runs in its own scope."""

    statements: tuple[Stmt, ...]


@dataclass(frozen=True)
class IfStmt(Stmt):
    """if (cond) then_branch else else_branch."""

    condition: Expr
    then_branch: Stmt
    else_branch: Stmt | None


@dataclass(frozen=True)
class WhileStmt(Stmt):
    """while (cond) body. Also the target of for-loop desugaring."""

    condition: Expr
    body: Stmt


@dataclass(frozen=True)
class FunctionStmt(Stmt):
    """fun name(params) { body }."""

    name: str
    params: tuple[str, ...]
    body: tuple[Stmt, ...]


@dataclass(frozen=True)
class ReturnStmt(Stmt):
    """return expr?;"""

    value: Expr | None
