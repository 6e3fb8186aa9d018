"""
Expression nodes for the 0x DSL.

Expressions appear in declarations (``derived total = price * qty``), UI
content and props (``text "Hi {user.name}" size=lg``), actions
(``button "+" -> count += 1``) and statements. Each variant carries a
``kind`` discriminator and the location of its first token.

Supports:
- Literals: numbers, strings, booleans, null
- Templates: "Total: {price * qty}"
- Member/index access and calls: user.name, items[0], fetch(url, method: "POST")
- Unary/binary/ternary operators: !done, a + b, ok ? "yes" : "no"
- Arrow functions: item => item.done, (a, b) => a + b
- Assignment: count += 1 (right-associative)
- await, old(x), braced {expr} props
"""

from __future__ import annotations

from typing import Annotated, Literal

from pydantic import BaseModel, ConfigDict, Field

from .base import SourceLocation

ASSIGNMENT_OPERATORS = ("=", "+=", "-=", "*=", "/=")


class NumberLiteral(BaseModel):
    kind: Literal["number"] = "number"
    value: float
    loc: SourceLocation

    model_config = ConfigDict(frozen=True)

    def __str__(self) -> str:
        return f"{self.value:g}"


class StringLiteral(BaseModel):
    kind: Literal["string"] = "string"
    value: str
    loc: SourceLocation

    model_config = ConfigDict(frozen=True)

    def __str__(self) -> str:
        return f'"{self.value}"'


class BooleanLiteral(BaseModel):
    kind: Literal["boolean"] = "boolean"
    value: bool
    loc: SourceLocation

    model_config = ConfigDict(frozen=True)

    def __str__(self) -> str:
        return "true" if self.value else "false"


class NullLiteral(BaseModel):
    kind: Literal["null"] = "null"
    loc: SourceLocation

    model_config = ConfigDict(frozen=True)

    def __str__(self) -> str:
        return "null"


class Identifier(BaseModel):
    """A bare name: a state, derived, prop, function or loop variable."""

    kind: Literal["identifier"] = "identifier"
    name: str
    loc: SourceLocation

    model_config = ConfigDict(frozen=True)

    def __str__(self) -> str:
        return self.name


class MemberExpr(BaseModel):
    """Property access: ``target.attribute``."""

    kind: Literal["member"] = "member"
    target: Expr
    attribute: str
    loc: SourceLocation

    model_config = ConfigDict(frozen=True)

    def __str__(self) -> str:
        return f"{self.target}.{self.attribute}"


class IndexExpr(BaseModel):
    kind: Literal["index"] = "index"
    target: Expr
    index: Expr
    loc: SourceLocation

    model_config = ConfigDict(frozen=True)

    def __str__(self) -> str:
        return f"{self.target}[{self.index}]"


class CallExpr(BaseModel):
    """
    Function call.

    Named arguments (``fetch(url, method: "POST")``) are gathered into a
    single trailing ObjectExpr argument.
    """

    kind: Literal["call"] = "call"
    callee: Expr
    args: list[Expr] = Field(default_factory=list)
    loc: SourceLocation

    model_config = ConfigDict(frozen=True)

    def __str__(self) -> str:
        return f"{self.callee}({', '.join(str(a) for a in self.args)})"


class BinaryExpr(BaseModel):
    kind: Literal["binary"] = "binary"
    operator: str
    left: Expr
    right: Expr
    loc: SourceLocation

    model_config = ConfigDict(frozen=True)

    def __str__(self) -> str:
        return f"({self.left} {self.operator} {self.right})"


class UnaryExpr(BaseModel):
    kind: Literal["unary"] = "unary"
    operator: str
    operand: Expr
    loc: SourceLocation

    model_config = ConfigDict(frozen=True)

    def __str__(self) -> str:
        return f"{self.operator}{self.operand}"


class TernaryExpr(BaseModel):
    kind: Literal["ternary"] = "ternary"
    condition: Expr
    consequent: Expr
    alternate: Expr
    loc: SourceLocation

    model_config = ConfigDict(frozen=True)

    def __str__(self) -> str:
        return f"({self.condition} ? {self.consequent} : {self.alternate})"


class ArrowFunction(BaseModel):
    kind: Literal["arrow"] = "arrow"
    params: list[str] = Field(default_factory=list)
    body: Expr
    loc: SourceLocation

    model_config = ConfigDict(frozen=True)

    def __str__(self) -> str:
        return f"({', '.join(self.params)}) => {self.body}"


class ArrayExpr(BaseModel):
    kind: Literal["array"] = "array"
    elements: list[Expr] = Field(default_factory=list)
    loc: SourceLocation

    model_config = ConfigDict(frozen=True)

    def __str__(self) -> str:
        return f"[{', '.join(str(e) for e in self.elements)}]"


class ObjectProperty(BaseModel):
    """One ``key: value`` entry of an object literal."""

    key: str
    value: Expr

    model_config = ConfigDict(frozen=True)


class ObjectExpr(BaseModel):
    """Object literal. ``{name}`` is shorthand for ``{name: name}``."""

    kind: Literal["object_expr"] = "object_expr"
    properties: list[ObjectProperty] = Field(default_factory=list)
    loc: SourceLocation

    model_config = ConfigDict(frozen=True)

    def __str__(self) -> str:
        inner = ", ".join(f"{p.key}: {p.value}" for p in self.properties)
        return "{" + inner + "}"


class TemplateExpr(BaseModel):
    """
    String with ``{expr}`` interpolations.

    Literal text segments are StringLiteral parts; each interpolation is the
    parsed expression.
    """

    kind: Literal["template"] = "template"
    parts: list[Expr] = Field(default_factory=list)
    loc: SourceLocation

    model_config = ConfigDict(frozen=True)

    def __str__(self) -> str:
        rendered = []
        for part in self.parts:
            if isinstance(part, StringLiteral):
                rendered.append(part.value)
            else:
                rendered.append("{" + str(part) + "}")
        return '"' + "".join(rendered) + '"'


class AssignmentExpr(BaseModel):
    kind: Literal["assignment"] = "assignment"
    target: Expr
    operator: str
    value: Expr
    loc: SourceLocation

    model_config = ConfigDict(frozen=True)

    def __str__(self) -> str:
        return f"{self.target} {self.operator} {self.value}"


class AwaitExpr(BaseModel):
    kind: Literal["await"] = "await"
    argument: Expr
    loc: SourceLocation

    model_config = ConfigDict(frozen=True)

    def __str__(self) -> str:
        return f"await {self.argument}"


class OldExpr(BaseModel):
    """Pre-state value of an expression, used in ``ensures`` contracts."""

    kind: Literal["old"] = "old"
    argument: Expr
    loc: SourceLocation

    model_config = ConfigDict(frozen=True)

    def __str__(self) -> str:
        return f"old({self.argument})"


class BracedExpr(BaseModel):
    """A ``{expr}`` prop value, evaluated rather than taken literally."""

    kind: Literal["braced"] = "braced"
    expression: Expr
    loc: SourceLocation

    model_config = ConfigDict(frozen=True)

    def __str__(self) -> str:
        return "{" + str(self.expression) + "}"


# ---------------------------------------------------------------------------
# Union type
# ---------------------------------------------------------------------------

Expr = Annotated[
    NumberLiteral
    | StringLiteral
    | BooleanLiteral
    | NullLiteral
    | Identifier
    | MemberExpr
    | IndexExpr
    | CallExpr
    | BinaryExpr
    | UnaryExpr
    | TernaryExpr
    | ArrowFunction
    | ArrayExpr
    | ObjectExpr
    | TemplateExpr
    | AssignmentExpr
    | AwaitExpr
    | OldExpr
    | BracedExpr,
    Field(discriminator="kind"),
]

# Rebuild models for recursive forward references
MemberExpr.model_rebuild()
IndexExpr.model_rebuild()
CallExpr.model_rebuild()
BinaryExpr.model_rebuild()
UnaryExpr.model_rebuild()
TernaryExpr.model_rebuild()
ArrowFunction.model_rebuild()
ArrayExpr.model_rebuild()
ObjectProperty.model_rebuild()
ObjectExpr.model_rebuild()
TemplateExpr.model_rebuild()
AssignmentExpr.model_rebuild()
AwaitExpr.model_rebuild()
OldExpr.model_rebuild()
BracedExpr.model_rebuild()
