"""
Containers and the closed node unions.

Importing this module guarantees every node module has registered its
classes, so the unions built here cover the whole language.
"""

from __future__ import annotations

from typing import Literal

from pydantic import Field

from . import declarations, infra, ui  # noqa: F401  (registers node classes)
from .base import Node, node_union, register_node


@register_node("top")
class Page(Node):
    type: Literal["Page"] = "Page"
    name: str
    body: list[BodyNode] = Field(default_factory=list)


@register_node("top")
class Component(Node):
    type: Literal["Component"] = "Component"
    name: str
    body: list[BodyNode] = Field(default_factory=list)


@register_node("top")
class App(Node):
    type: Literal["App"] = "App"
    name: str
    body: list[BodyNode] = Field(default_factory=list)


# Anything allowed directly inside a page, component or app body
BodyNode = node_union("body", "ui")

# Anything allowed at file level
TopLevelNode = node_union("top")

CONTAINER_TYPES = (Page, Component, App)

# Rebuild models for recursive forward references
Page.model_rebuild()
Component.model_rebuild()
App.model_rebuild()
