"""
Base models for the 0x AST.

Every declaration, UI element and top-level construct is a frozen pydantic
model deriving from ``Node``. Concrete node classes register themselves with
``register_node`` under one or more families; the families are turned into
discriminated unions (keyed on the ``type`` field) by ``node_union``, so a new
construct only has to be defined and registered once.
"""

from __future__ import annotations

from collections.abc import Callable
from typing import Annotated, Any, TypeVar, Union

from pydantic import BaseModel, ConfigDict, Field


class SourceLocation(BaseModel):
    """Position of a construct in the source text.

    Attributes:
        line: 1-indexed line number
        column: 1-indexed column number
    """

    line: int = Field(ge=1)
    column: int = Field(ge=1)

    model_config = ConfigDict(frozen=True)

    def __str__(self) -> str:
        return f"{self.line}:{self.column}"


class Node(BaseModel):
    """Base class for every AST node carrying a ``type`` discriminator."""

    loc: SourceLocation = Field(description="Where the construct starts")

    model_config = ConfigDict(frozen=True)


# Node class name -> class. The class name doubles as the ``type`` value.
NODE_TYPES: dict[str, type[Node]] = {}

# Family name -> node classes in registration order.
NODE_FAMILIES: dict[str, list[type[Node]]] = {}

N = TypeVar("N", bound=type[Node])


def register_node(*families: str) -> Callable[[N], N]:
    """
    Class decorator adding a node class to the registry.

    Args:
        families: Union families the node belongs to ("top", "body", "ui")

    Raises:
        ValueError: If a node with the same name is already registered
    """

    def decorator(cls: N) -> N:
        name = cls.__name__
        if name in NODE_TYPES:
            raise ValueError(f"Node type '{name}' is already registered")
        NODE_TYPES[name] = cls
        for family in families:
            NODE_FAMILIES.setdefault(family, []).append(cls)
        return cls

    return decorator


def family_members(*families: str) -> list[type[Node]]:
    """Return the registered classes of ``families``; a class listed twice appears once."""
    members: dict[type[Node], None] = {}
    for family in families:
        for cls in NODE_FAMILIES.get(family, ()):
            members[cls] = None
    return list(members)


def node_union(*families: str) -> Any:
    """Build a union over ``families`` discriminated by the ``type`` field."""
    return Annotated[Union[tuple(family_members(*families))], Field(discriminator="type")]  # noqa: UP007
