"""
UI nodes: everything that can appear inside a layout block.

Covers the core elements (layout, text, button, input, ...), control flow
(if/for/show/hide), dashboard widgets (table, chart, stat) and the higher
level UI patterns (crud, modal, hero, pricing, ...). Error, loading and
offline boundaries live here too because their fallbacks are UI blocks,
though they are only allowed directly in a page or component body.
"""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field

from .base import Node, family_members, node_union, register_node
from .declarations import Comment  # noqa: F401  (part of the UI family)
from .expressions import Expr
from .statements import Statement

Props = dict[str, Expr]

# =============================================================================
# Core elements
# =============================================================================


@register_node("ui")
class Layout(Node):
    """Flex/grid container: ``layout row gap=4 .toolbar:``."""

    type: Literal["Layout"] = "Layout"
    direction: Literal["row", "col", "grid", "stack"] = "col"
    props: Props = Field(default_factory=dict)
    style_class: str | None = Field(default=None, description="Style classes without the leading '.'")
    children: list[UINode] = Field(default_factory=list)


@register_node("ui")
class Text(Node):
    type: Literal["Text"] = "Text"
    content: Expr
    props: Props = Field(default_factory=dict)


@register_node("ui")
class Button(Node):
    """``button "Add" -> count += 1``; the action is a null literal when absent."""

    type: Literal["Button"] = "Button"
    label: Expr
    action: Expr
    props: Props = Field(default_factory=dict)


@register_node("ui")
class Input(Node):
    type: Literal["Input"] = "Input"
    binding: str
    props: Props = Field(default_factory=dict)


@register_node("ui")
class Image(Node):
    type: Literal["Image"] = "Image"
    src: Expr
    props: Props = Field(default_factory=dict)


@register_node("ui")
class Link(Node):
    type: Literal["Link"] = "Link"
    label: Expr
    href: Expr
    props: Props = Field(default_factory=dict)


@register_node("ui")
class Toggle(Node):
    type: Literal["Toggle"] = "Toggle"
    binding: str = Field(description="Dotted path such as 'item.done'")
    props: Props = Field(default_factory=dict)


@register_node("ui")
class Select(Node):
    type: Literal["Select"] = "Select"
    binding: str
    options: Expr
    props: Props = Field(default_factory=dict)


@register_node("ui")
class ComponentCall(Node):
    """
    Component instantiation.

    Named arguments keep their name; positional ones are stored as
    ``_arg0``, ``_arg1``, ... in call order.
    """

    type: Literal["ComponentCall"] = "ComponentCall"
    name: str
    args: Props = Field(default_factory=dict)


# =============================================================================
# Control flow
# =============================================================================


class ElifBranch(BaseModel):
    condition: Expr
    body: list[UINode] = Field(default_factory=list)

    model_config = ConfigDict(frozen=True)


@register_node("ui")
class IfBlock(Node):
    type: Literal["IfBlock"] = "IfBlock"
    condition: Expr
    body: list[UINode] = Field(default_factory=list)
    elifs: list[ElifBranch] = Field(default_factory=list)
    else_body: list[UINode] | None = None


@register_node("ui")
class ForBlock(Node):
    type: Literal["ForBlock"] = "ForBlock"
    item: str
    index: str | None = None
    iterable: Expr
    body: list[UINode] = Field(default_factory=list)


@register_node("ui")
class ShowBlock(Node):
    type: Literal["ShowBlock"] = "ShowBlock"
    condition: Expr
    body: list[UINode] = Field(default_factory=list)


@register_node("ui")
class HideBlock(Node):
    type: Literal["HideBlock"] = "HideBlock"
    condition: Expr
    body: list[UINode] = Field(default_factory=list)


# =============================================================================
# Data display
# =============================================================================


class TableColumn(BaseModel):
    """
    A table column.

    ``kind`` is "field" for data columns, "select" for the row checkbox
    column and "actions" for the per-row action buttons.
    """

    kind: Literal["field", "select", "actions"] = "field"
    field: str | None = None
    label: str | None = None
    sortable: bool = False
    searchable: bool = False
    filterable: bool = False
    format: str | None = None
    actions: list[str] = Field(default_factory=list)

    model_config = ConfigDict(frozen=True)


@register_node("ui")
class Table(Node):
    type: Literal["Table"] = "Table"
    data_source: str
    columns: list[TableColumn] = Field(default_factory=list)
    features: Props = Field(default_factory=dict)


@register_node("ui")
class Chart(Node):
    type: Literal["Chart"] = "Chart"
    chart_type: str = "bar"
    name: str
    props: Props = Field(default_factory=dict)


@register_node("ui")
class Stat(Node):
    type: Literal["Stat"] = "Stat"
    label: str
    value: Expr
    change: Expr | None = None
    icon: str | None = None
    props: Props = Field(default_factory=dict)


@register_node("ui")
class StatsGrid(Node):
    type: Literal["StatsGrid"] = "StatsGrid"
    cols: int = 4
    stats: list[Stat] = Field(default_factory=list)


class NavLink(BaseModel):
    label: str
    href: str = "#"
    icon: str | None = None

    model_config = ConfigDict(frozen=True)


@register_node("ui")
class Nav(Node):
    type: Literal["Nav"] = "Nav"
    items: list[NavLink] = Field(default_factory=list)
    props: Props = Field(default_factory=dict)


@register_node("ui")
class Upload(Node):
    type: Literal["Upload"] = "Upload"
    name: str
    accept: str | None = None
    max_size: float | None = None
    preview: bool = False
    action: Expr | None = None


@register_node("ui")
class Modal(Node):
    type: Literal["Modal"] = "Modal"
    name: str
    title: str
    trigger: str | None = None
    body: list[UINode] = Field(default_factory=list)


@register_node("ui")
class Toast(Node):
    type: Literal["Toast"] = "Toast"
    message: Expr
    toast_type: str = "info"
    duration: float | None = None


# =============================================================================
# UI patterns
# =============================================================================


@register_node("ui")
class Crud(Node):
    type: Literal["Crud"] = "Crud"
    model: str
    props: Props = Field(default_factory=dict)
    body: list[UINode] = Field(default_factory=list)


@register_node("ui")
class List(Node):
    type: Literal["List"] = "List"
    list_type: str = "grid"
    data_source: Expr
    props: Props = Field(default_factory=dict)
    body: list[UINode] = Field(default_factory=list)


@register_node("ui")
class Drawer(Node):
    type: Literal["Drawer"] = "Drawer"
    name: str
    props: Props = Field(default_factory=dict)
    body: list[UINode] = Field(default_factory=list)


@register_node("ui")
class Command(Node):
    """Command palette opened by ``shortcut``."""

    type: Literal["Command"] = "Command"
    shortcut: str = "ctrl+k"
    props: Props = Field(default_factory=dict)


@register_node("ui")
class Confirm(Node):
    type: Literal["Confirm"] = "Confirm"
    message: str
    description: str | None = None
    confirm_label: str = "Confirm"
    cancel_label: str = "Cancel"
    danger: bool = False
    props: Props = Field(default_factory=dict)


@register_node("ui")
class Pay(Node):
    type: Literal["Pay"] = "Pay"
    pay_type: str = "checkout"
    provider: str = "stripe"
    props: Props = Field(default_factory=dict)
    body: list[UINode] = Field(default_factory=list)


@register_node("ui")
class Cart(Node):
    type: Literal["Cart"] = "Cart"
    props: Props = Field(default_factory=dict)


@register_node("ui")
class Media(Node):
    type: Literal["Media"] = "Media"
    media_type: str = "gallery"
    src: Expr
    props: Props = Field(default_factory=dict)


@register_node("ui")
class Notification(Node):
    type: Literal["Notification"] = "Notification"
    notification_type: str = "center"
    props: Props = Field(default_factory=dict)


@register_node("ui")
class Search(Node):
    type: Literal["Search"] = "Search"
    search_type: str = "global"
    target: str = ""
    props: Props = Field(default_factory=dict)
    body: list[UINode] = Field(default_factory=list)


@register_node("ui")
class Filter(Node):
    type: Literal["Filter"] = "Filter"
    target: str
    props: Props = Field(default_factory=dict)


@register_node("ui")
class Social(Node):
    type: Literal["Social"] = "Social"
    social_type: str = "like"
    target: Expr
    props: Props = Field(default_factory=dict)
    body: list[UINode] = Field(default_factory=list)


@register_node("ui")
class Profile(Node):
    type: Literal["Profile"] = "Profile"
    user: Expr
    props: Props = Field(default_factory=dict)
    body: list[UINode] = Field(default_factory=list)


@register_node("ui")
class Hero(Node):
    type: Literal["Hero"] = "Hero"
    props: Props = Field(default_factory=dict)
    body: list[UINode] = Field(default_factory=list)


@register_node("ui")
class Features(Node):
    type: Literal["Features"] = "Features"
    props: Props = Field(default_factory=dict)


@register_node("ui")
class Pricing(Node):
    type: Literal["Pricing"] = "Pricing"
    props: Props = Field(default_factory=dict)


@register_node("ui")
class Faq(Node):
    type: Literal["Faq"] = "Faq"
    props: Props = Field(default_factory=dict)


@register_node("ui")
class Testimonial(Node):
    type: Literal["Testimonial"] = "Testimonial"
    props: Props = Field(default_factory=dict)


@register_node("ui")
class Footer(Node):
    type: Literal["Footer"] = "Footer"
    props: Props = Field(default_factory=dict)


@register_node("ui")
class Admin(Node):
    type: Literal["Admin"] = "Admin"
    admin_type: str = "dashboard"
    props: Props = Field(default_factory=dict)
    body: list[UINode] = Field(default_factory=list)


@register_node("ui")
class Seo(Node):
    type: Literal["Seo"] = "Seo"
    props: Props = Field(default_factory=dict)


@register_node("ui")
class A11y(Node):
    type: Literal["A11y"] = "A11y"
    props: Props = Field(default_factory=dict)


@register_node("ui")
class Animate(Node):
    type: Literal["Animate"] = "Animate"
    animation_type: str = "enter"
    props: Props = Field(default_factory=dict)
    body: list[UINode] = Field(default_factory=list)


@register_node("ui")
class Gesture(Node):
    type: Literal["Gesture"] = "Gesture"
    gesture_type: str = "drag"
    target: Expr
    action: Expr


@register_node("ui")
class Ai(Node):
    type: Literal["Ai"] = "Ai"
    ai_type: str = "chat"
    props: Props = Field(default_factory=dict)
    body: list[UINode] = Field(default_factory=list)


@register_node("ui")
class Breadcrumb(Node):
    type: Literal["Breadcrumb"] = "Breadcrumb"
    props: Props = Field(default_factory=dict)


@register_node("ui")
class Responsive(Node):
    """Breakpoint-scoped content: ``mobile hide:`` or ``responsive tablet:``."""

    type: Literal["Responsive"] = "Responsive"
    breakpoint: str
    action: Literal["show", "hide"] = "show"
    body: list[UINode] = Field(default_factory=list)


# =============================================================================
# Boundaries (body level only)
# =============================================================================


@register_node("body")
class ErrorBoundary(Node):
    type: Literal["ErrorBoundary"] = "ErrorBoundary"
    error_type: str = "boundary"
    handler: list[Statement] = Field(default_factory=list)
    fallback: list[UINode] = Field(default_factory=list)
    props: Props = Field(default_factory=dict)


@register_node("body")
class Loading(Node):
    type: Literal["Loading"] = "Loading"
    loading_type: str = "spinner"
    body: list[UINode] = Field(default_factory=list)


@register_node("body")
class Offline(Node):
    type: Literal["Offline"] = "Offline"
    strategy: str = "cache-first"
    fallback: list[UINode] = Field(default_factory=list)


UINode = node_union("ui")

# Rebuild models for recursive forward references
ElifBranch.model_rebuild()
for _model in family_members("ui"):
    _model.model_rebuild()
ErrorBoundary.model_rebuild()
Loading.model_rebuild()
Offline.model_rebuild()
