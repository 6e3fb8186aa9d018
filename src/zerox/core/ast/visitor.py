"""
Generic traversal over AST models.

Children are discovered from each model's fields (nested models, and lists,
tuples or dicts of them), so no per-node visitor methods are needed and a
new node kind is traversed as soon as it is defined.
"""

from __future__ import annotations

from collections.abc import Callable, Iterable, Iterator
from types import MappingProxyType
from typing import Any

from pydantic import BaseModel


def _models_in(value: Any) -> Iterator[BaseModel]:
    if isinstance(value, BaseModel):
        yield value
    elif isinstance(value, (list, tuple)):
        for item in value:
            yield from _models_in(item)
    elif isinstance(value, dict):
        for item in value.values():
            yield from _models_in(item)


def iter_children(model: BaseModel) -> Iterator[BaseModel]:
    """Yield the direct child models of ``model`` in field order."""
    for name in type(model).model_fields:
        if name == "loc":
            continue
        yield from _models_in(getattr(model, name))


def walk(root: BaseModel | Iterable[BaseModel]) -> Iterator[BaseModel]:
    """
    Yield ``root`` and every model below it, pre-order.

    ``root`` may be a single model or a sequence of them (a parsed program,
    a container body).
    """
    for model in _models_in(root if isinstance(root, BaseModel) else list(root)):
        yield model
        for child in iter_children(model):
            yield from walk(child)


# Node class name -> names the node reads
_NAME_SOURCES: MappingProxyType[str, Callable[[Any], Iterable[str]]] = MappingProxyType(
    {
        "Identifier": lambda node: (node.name,),
        "WatchBlock": lambda node: (node.variable,),
        "Input": lambda node: (node.binding,),
        "Select": lambda node: (node.binding,),
        # Only the root segment of ``item.done`` refers to a declaration
        "Toggle": lambda node: (node.binding.split(".", 1)[0],),
    }
)


def iter_identifiers(root: BaseModel | Iterable[BaseModel]) -> Iterator[str]:
    """
    Yield every name referenced under ``root``.

    Covers identifier expressions (including the roots of member access and
    names inside template strings), watched variables, and input, select and
    toggle bindings.
    """
    for model in walk(root):
        extract = _NAME_SOURCES.get(type(model).__name__)
        if extract is None:
            continue
        for name in extract(model):
            if name:
                yield name
