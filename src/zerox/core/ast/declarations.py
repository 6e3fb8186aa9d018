"""
Body-level declarations: reactive state, functions, lifecycle hooks, styles,
JS interop and the data layer (models, data sources, forms, realtime).
"""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field

from .base import Node, register_node
from .expressions import Expr
from .statements import Statement
from .type_exprs import TypeExpr

# =============================================================================
# Reactive declarations
# =============================================================================


@register_node("body", "ui")
class Comment(Node):
    """A ``// ...`` line kept in a body or UI block."""

    type: Literal["Comment"] = "Comment"
    text: str


@register_node("body")
class StateDecl(Node):
    """Mutable reactive variable: ``state count: int = 0``."""

    type: Literal["StateDecl"] = "StateDecl"
    name: str
    value_type: TypeExpr
    initial: Expr


@register_node("body")
class DerivedDecl(Node):
    """Computed value: ``derived doubled = count * 2``."""

    type: Literal["DerivedDecl"] = "DerivedDecl"
    name: str
    expression: Expr


@register_node("body")
class PropDecl(Node):
    type: Literal["PropDecl"] = "PropDecl"
    name: str
    value_type: TypeExpr
    default_value: Expr | None = None


@register_node("body")
class TypeDecl(Node):
    type: Literal["TypeDecl"] = "TypeDecl"
    name: str
    definition: TypeExpr


@register_node("body")
class StoreDecl(Node):
    """Shared state visible to every page: ``store cart: list[Item] = []``."""

    type: Literal["StoreDecl"] = "StoreDecl"
    name: str
    value_type: TypeExpr
    initial: Expr


@register_node("body")
class ApiDecl(Node):
    """HTTP endpoint binding: ``api getUsers = GET "/api/users"``."""

    type: Literal["ApiDecl"] = "ApiDecl"
    name: str
    method: Literal["GET", "POST", "PUT", "DELETE", "PATCH"]
    url: str


# =============================================================================
# Functions and lifecycle
# =============================================================================


class Param(BaseModel):
    name: str
    param_type: TypeExpr | None = None
    default_value: Expr | None = None

    model_config = ConfigDict(frozen=True)


@register_node("body")
class FnDecl(Node):
    """
    Function declaration.

    ``requires:`` and ``ensures:`` lines at the start of the body are
    recorded as contracts rather than statements.
    """

    type: Literal["FnDecl"] = "FnDecl"
    name: str
    params: list[Param] = Field(default_factory=list)
    body: list[Statement] = Field(default_factory=list)
    is_async: bool = False
    requires: list[Expr] = Field(default_factory=list)
    ensures: list[Expr] = Field(default_factory=list)


@register_node("body")
class OnMount(Node):
    type: Literal["OnMount"] = "OnMount"
    body: list[Statement] = Field(default_factory=list)


@register_node("body")
class OnDestroy(Node):
    type: Literal["OnDestroy"] = "OnDestroy"
    body: list[Statement] = Field(default_factory=list)


@register_node("body")
class WatchBlock(Node):
    type: Literal["WatchBlock"] = "WatchBlock"
    variable: str
    body: list[Statement] = Field(default_factory=list)


@register_node("body")
class CheckDecl(Node):
    """Runtime invariant: ``check count >= 0 "count must not be negative"``."""

    type: Literal["CheckDecl"] = "CheckDecl"
    condition: Expr
    message: str


# =============================================================================
# Styles and interop
# =============================================================================


class StyleProperty(BaseModel):
    name: str
    value: Expr
    responsive: str | None = Field(default=None, description="Breakpoint such as '@mobile'")

    model_config = ConfigDict(frozen=True)


@register_node("body")
class StyleDecl(Node):
    type: Literal["StyleDecl"] = "StyleDecl"
    name: str
    properties: list[StyleProperty] = Field(default_factory=list)


@register_node("body")
class JsImport(Node):
    """``js import { format } from "date-fns"`` or a default import."""

    type: Literal["JsImport"] = "JsImport"
    specifiers: list[str] = Field(default_factory=list)
    source: str
    is_default: bool = False


@register_node("body")
class UseImport(Node):
    type: Literal["UseImport"] = "UseImport"
    name: str
    source: str


@register_node("body")
class JsBlock(Node):
    """Raw ``js { ... }`` block; token values joined by single spaces."""

    type: Literal["JsBlock"] = "JsBlock"
    code: str


# =============================================================================
# Data layer
# =============================================================================


class ModelField(BaseModel):
    name: str
    field_type: TypeExpr
    default_value: Expr | None = None

    model_config = ConfigDict(frozen=True)


class ModelRule(BaseModel):
    """A ``validate:`` entry: condition plus the message shown when it fails."""

    condition: Expr
    message: str

    model_config = ConfigDict(frozen=True)


class ModelPermission(BaseModel):
    action: str
    role: str

    model_config = ConfigDict(frozen=True)


@register_node("top")
class Model(Node):
    type: Literal["Model"] = "Model"
    name: str
    fields: list[ModelField] = Field(default_factory=list)
    rules: list[ModelRule] = Field(default_factory=list)
    permissions: list[ModelPermission] = Field(default_factory=list)
    search: list[str] = Field(default_factory=list)
    sort: list[str] = Field(default_factory=list)
    filter: list[str] = Field(default_factory=list)


@register_node("body")
class DataDecl(Node):
    """Query-backed data source with optional loading/error/empty states."""

    type: Literal["DataDecl"] = "DataDecl"
    name: str
    query: Expr
    loading: Expr | None = None
    error: str | None = None
    empty: str | None = None


class FormValidation(BaseModel):
    rule: Literal["required", "min", "max", "format", "pattern"]
    value: Expr | None = None
    message: str

    model_config = ConfigDict(frozen=True)


class FormField(BaseModel):
    name: str
    field_type: TypeExpr
    label: str
    validations: list[FormValidation] = Field(default_factory=list)
    props: dict[str, Expr] = Field(default_factory=dict)

    model_config = ConfigDict(frozen=True)


class FormSubmit(BaseModel):
    label: str
    action: Expr
    success: Expr | None = None
    error: Expr | None = None

    model_config = ConfigDict(frozen=True)


@register_node("body")
class FormDecl(Node):
    type: Literal["FormDecl"] = "FormDecl"
    name: str
    fields: list[FormField] = Field(default_factory=list)
    submit: FormSubmit | None = None


class RealtimeHandler(BaseModel):
    event: str
    body: list[Statement] = Field(default_factory=list)

    model_config = ConfigDict(frozen=True)


@register_node("body")
class RealtimeDecl(Node):
    """``realtime messages = subscribe("chat"):`` with ``on event:`` handlers."""

    type: Literal["RealtimeDecl"] = "RealtimeDecl"
    name: str
    channel: Expr
    handlers: list[RealtimeHandler] = Field(default_factory=list)


@register_node("body")
class Emit(Node):
    type: Literal["Emit"] = "Emit"
    channel: Expr
    data: Expr
    props: dict[str, Expr] = Field(default_factory=dict)


# =============================================================================
# Resilience helpers without UI content
# =============================================================================


@register_node("body")
class Retry(Node):
    type: Literal["Retry"] = "Retry"
    max_retries: Expr
    delay: Expr | None = None
    backoff: str = "exponential"
    action: Expr


@register_node("body")
class Log(Node):
    type: Literal["Log"] = "Log"
    level: str = "info"
    message: Expr
    data: Expr | None = None
