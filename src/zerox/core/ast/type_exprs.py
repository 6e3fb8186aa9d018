"""
Type expressions used by state, prop, store, param and model field declarations.

    int | float | str | bool | date | time | datetime    primitive
    list[T]    map[K, V]    set[T]    { name: T, ... }   containers
    "a" | "b"                                            string union (type decls)
    T?                                                   nullable
    Todo                                                 named type
"""

from __future__ import annotations

from typing import Annotated, Literal

from pydantic import BaseModel, ConfigDict, Field

from .base import SourceLocation

PRIMITIVE_TYPES = frozenset({"int", "float", "str", "bool", "date", "time", "datetime"})


class PrimitiveType(BaseModel):
    """A built-in scalar type. ``any`` is used for a bare ``list``."""

    kind: Literal["primitive"] = "primitive"
    name: str
    loc: SourceLocation

    model_config = ConfigDict(frozen=True)

    def __str__(self) -> str:
        return self.name


class ListType(BaseModel):
    kind: Literal["list"] = "list"
    item_type: TypeExpr
    loc: SourceLocation

    model_config = ConfigDict(frozen=True)

    def __str__(self) -> str:
        return f"list[{self.item_type}]"


class MapType(BaseModel):
    kind: Literal["map"] = "map"
    key_type: TypeExpr
    value_type: TypeExpr
    loc: SourceLocation

    model_config = ConfigDict(frozen=True)

    def __str__(self) -> str:
        return f"map[{self.key_type}, {self.value_type}]"


class SetType(BaseModel):
    kind: Literal["set"] = "set"
    item_type: TypeExpr
    loc: SourceLocation

    model_config = ConfigDict(frozen=True)

    def __str__(self) -> str:
        return f"set[{self.item_type}]"


class ObjectTypeField(BaseModel):
    """One ``name: T`` entry of an object type."""

    name: str
    field_type: TypeExpr

    model_config = ConfigDict(frozen=True)


class ObjectType(BaseModel):
    kind: Literal["object"] = "object"
    fields: list[ObjectTypeField] = Field(default_factory=list)
    loc: SourceLocation

    model_config = ConfigDict(frozen=True)

    def __str__(self) -> str:
        inner = ", ".join(f"{f.name}: {f.field_type}" for f in self.fields)
        return "{" + inner + "}"


class UnionType(BaseModel):
    """A union of string literals, as in ``type Filter = "all" | "done"``."""

    kind: Literal["union"] = "union"
    members: list[str]
    loc: SourceLocation

    model_config = ConfigDict(frozen=True)

    def __str__(self) -> str:
        return " | ".join(f'"{m}"' for m in self.members)


class NullableType(BaseModel):
    kind: Literal["nullable"] = "nullable"
    inner: TypeExpr
    loc: SourceLocation

    model_config = ConfigDict(frozen=True)

    def __str__(self) -> str:
        return f"{self.inner}?"


class NamedType(BaseModel):
    """Reference to a user-declared type or model."""

    kind: Literal["named"] = "named"
    name: str
    loc: SourceLocation

    model_config = ConfigDict(frozen=True)

    def __str__(self) -> str:
        return self.name


TypeExpr = Annotated[
    PrimitiveType | ListType | MapType | SetType | ObjectType | UnionType | NullableType | NamedType,
    Field(discriminator="kind"),
]

# Rebuild models for recursive forward references
ListType.model_rebuild()
MapType.model_rebuild()
SetType.model_rebuild()
ObjectTypeField.model_rebuild()
ObjectType.model_rebuild()
NullableType.model_rebuild()
