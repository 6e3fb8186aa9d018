"""
Imperative statements: the bodies of functions, lifecycle hooks, watchers,
event handlers and backend handlers.
"""

from __future__ import annotations

from typing import Annotated, Literal

from pydantic import BaseModel, ConfigDict, Field

from .base import SourceLocation
from .expressions import Expr
from .type_exprs import TypeExpr


class ExprStmt(BaseModel):
    kind: Literal["expr_stmt"] = "expr_stmt"
    expression: Expr
    loc: SourceLocation

    model_config = ConfigDict(frozen=True)


class ReturnStmt(BaseModel):
    kind: Literal["return"] = "return"
    value: Expr | None = None
    loc: SourceLocation

    model_config = ConfigDict(frozen=True)


class ElifClause(BaseModel):
    """An ``elif cond:`` arm of an if statement."""

    condition: Expr
    body: list[Statement] = Field(default_factory=list)

    model_config = ConfigDict(frozen=True)


class IfStmt(BaseModel):
    kind: Literal["if_stmt"] = "if_stmt"
    condition: Expr
    body: list[Statement] = Field(default_factory=list)
    elifs: list[ElifClause] = Field(default_factory=list)
    else_body: list[Statement] | None = None
    loc: SourceLocation

    model_config = ConfigDict(frozen=True)


class ForStmt(BaseModel):
    kind: Literal["for_stmt"] = "for_stmt"
    item: str
    index: str | None = None
    iterable: Expr
    body: list[Statement] = Field(default_factory=list)
    loc: SourceLocation

    model_config = ConfigDict(frozen=True)


class VarDecl(BaseModel):
    """Local variable: ``let total: int = 0``."""

    kind: Literal["var_decl"] = "var_decl"
    name: str
    value_type: TypeExpr | None = None
    value: Expr
    loc: SourceLocation

    model_config = ConfigDict(frozen=True)


class AssignmentStmt(BaseModel):
    kind: Literal["assignment_stmt"] = "assignment_stmt"
    target: Expr
    operator: str
    value: Expr
    loc: SourceLocation

    model_config = ConfigDict(frozen=True)


Statement = Annotated[
    ExprStmt | ReturnStmt | IfStmt | ForStmt | VarDecl | AssignmentStmt,
    Field(discriminator="kind"),
]

# Rebuild models for recursive forward references
ElifClause.model_rebuild()
IfStmt.model_rebuild()
ForStmt.model_rebuild()
