"""
Top-level application constructs outside pages and components.

Auth, routing, roles and automation describe the app; the remaining groups
declare deployment infrastructure, backend handlers, tests and
internationalisation. None of them can be nested in a page body.
"""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field

from .base import Node, register_node
from .expressions import Expr
from .statements import Statement

Props = dict[str, Expr]

# =============================================================================
# App-level declarations
# =============================================================================


class AuthGuard(BaseModel):
    """``guard: admin -> redirect("/login")``."""

    role: str
    redirect: str | None = None

    model_config = ConfigDict(frozen=True)


@register_node("top")
class AuthDecl(Node):
    type: Literal["AuthDecl"] = "AuthDecl"
    provider: str = "custom"
    login_fields: list[str] = Field(default_factory=list)
    signup_fields: list[str] = Field(default_factory=list)
    logout: bool = False
    guards: list[AuthGuard] = Field(default_factory=list)


@register_node("top")
class RouteDecl(Node):
    type: Literal["RouteDecl"] = "RouteDecl"
    path: str
    target: str = ""
    guard: str | None = None


class Role(BaseModel):
    name: str
    can: list[str] = Field(default_factory=list)

    model_config = ConfigDict(frozen=True)


@register_node("top")
class RoleDecl(Node):
    type: Literal["RoleDecl"] = "RoleDecl"
    roles: list[Role] = Field(default_factory=list)


class AutomationTrigger(BaseModel):
    event: str
    actions: list[Expr] = Field(default_factory=list)

    model_config = ConfigDict(frozen=True)


class AutomationSchedule(BaseModel):
    cron: str = "* * * * *"
    actions: list[Expr] = Field(default_factory=list)

    model_config = ConfigDict(frozen=True)


@register_node("top")
class Automation(Node):
    type: Literal["Automation"] = "Automation"
    triggers: list[AutomationTrigger] = Field(default_factory=list)
    schedules: list[AutomationSchedule] = Field(default_factory=list)


@register_node("top")
class Dev(Node):
    type: Literal["Dev"] = "Dev"
    props: Props = Field(default_factory=dict)


# =============================================================================
# Infrastructure
# =============================================================================


@register_node("top")
class Deploy(Node):
    type: Literal["Deploy"] = "Deploy"
    provider: str
    props: Props = Field(default_factory=dict)


class EnvVar(BaseModel):
    name: str
    value: Expr
    secret: bool = False

    model_config = ConfigDict(frozen=True)


@register_node("top")
class Env(Node):
    type: Literal["Env"] = "Env"
    env_type: str = "all"
    variables: list[EnvVar] = Field(default_factory=list)


@register_node("top")
class Docker(Node):
    type: Literal["Docker"] = "Docker"
    base_image: str = "node:20-alpine"
    props: Props = Field(default_factory=dict)


class CiStep(BaseModel):
    name: str
    command: Expr

    model_config = ConfigDict(frozen=True)


@register_node("top")
class Ci(Node):
    type: Literal["Ci"] = "Ci"
    provider: str = "github"
    triggers: list[str] = Field(default_factory=list)
    steps: list[CiStep] = Field(default_factory=list)


@register_node("top")
class Domain(Node):
    type: Literal["Domain"] = "Domain"
    domain: str
    props: Props = Field(default_factory=dict)


@register_node("top")
class Cdn(Node):
    type: Literal["Cdn"] = "Cdn"
    provider: str = "cloudflare"
    props: Props = Field(default_factory=dict)


@register_node("top")
class Monitor(Node):
    type: Literal["Monitor"] = "Monitor"
    provider: str = "sentry"
    props: Props = Field(default_factory=dict)


@register_node("top")
class Backup(Node):
    type: Literal["Backup"] = "Backup"
    strategy: str = "daily"
    props: Props = Field(default_factory=dict)


# =============================================================================
# Backend
# =============================================================================


@register_node("top")
class Endpoint(Node):
    """``endpoint POST "/api/todos" middleware auth:`` followed by the handler."""

    type: Literal["Endpoint"] = "Endpoint"
    method: str = "GET"
    path: str = "/"
    middleware: list[str] = Field(default_factory=list)
    handler: list[Statement] = Field(default_factory=list)


@register_node("top")
class Middleware(Node):
    type: Literal["Middleware"] = "Middleware"
    name: str
    handler: list[Statement] = Field(default_factory=list)


@register_node("top")
class Queue(Node):
    type: Literal["Queue"] = "Queue"
    name: str
    handler: list[Statement] = Field(default_factory=list)


@register_node("top")
class Cron(Node):
    type: Literal["Cron"] = "Cron"
    name: str
    schedule: str = "0 * * * *"
    handler: list[Statement] = Field(default_factory=list)


@register_node("top")
class Cache(Node):
    type: Literal["Cache"] = "Cache"
    name: str
    strategy: str = "memory"
    ttl: Expr | None = None
    props: Props = Field(default_factory=dict)


@register_node("top")
class Migrate(Node):
    """Migration with ``up:`` and ``down:`` blocks; bare statements count as ``up``."""

    type: Literal["Migrate"] = "Migrate"
    name: str
    up: list[Statement] = Field(default_factory=list)
    down: list[Statement] = Field(default_factory=list)


@register_node("top")
class Seed(Node):
    type: Literal["Seed"] = "Seed"
    model: str
    count: Expr | None = None
    data: Expr


@register_node("top")
class Webhook(Node):
    type: Literal["Webhook"] = "Webhook"
    name: str
    path: str
    handler: list[Statement] = Field(default_factory=list)


@register_node("top")
class Storage(Node):
    type: Literal["Storage"] = "Storage"
    name: str
    provider: str = "s3"
    props: Props = Field(default_factory=dict)


# =============================================================================
# Testing
# =============================================================================


@register_node("top")
class Test(Node):
    type: Literal["Test"] = "Test"
    name: str = "unnamed"
    test_type: str = "unit"
    body: list[Statement] = Field(default_factory=list)


class E2eStep(BaseModel):
    """One browser step: ``fill "#email" = "a@b.c"`` or ``click "#submit"``."""

    action: str
    target: Expr
    value: Expr | None = None

    model_config = ConfigDict(frozen=True)


@register_node("top")
class E2e(Node):
    type: Literal["E2e"] = "E2e"
    name: str = "unnamed"
    steps: list[E2eStep] = Field(default_factory=list)


class MockResponse(BaseModel):
    method: str = "GET"
    path: str = "/"
    response: Expr

    model_config = ConfigDict(frozen=True)


@register_node("top")
class Mock(Node):
    type: Literal["Mock"] = "Mock"
    target: str
    responses: list[MockResponse] = Field(default_factory=list)


@register_node("top")
class Fixture(Node):
    type: Literal["Fixture"] = "Fixture"
    name: str
    data: Expr


# =============================================================================
# Internationalisation
# =============================================================================


class TranslationEntry(BaseModel):
    key: str
    value: str

    model_config = ConfigDict(frozen=True)


class Translation(BaseModel):
    locale: str
    entries: list[TranslationEntry] = Field(default_factory=list)

    model_config = ConfigDict(frozen=True)


@register_node("top")
class I18n(Node):
    type: Literal["I18n"] = "I18n"
    default_locale: str = "ko"
    locales: list[str] = Field(default_factory=list)
    translations: list[Translation] = Field(default_factory=list)


@register_node("top")
class Locale(Node):
    type: Literal["Locale"] = "Locale"
    props: Props = Field(default_factory=dict)


@register_node("top")
class Rtl(Node):
    type: Literal["Rtl"] = "Rtl"
    enabled: bool = True
    props: Props = Field(default_factory=dict)
