"""
Semantic validation for parsed 0x programs.

Runs over each page, component and app body independently and reports:

1. Duplicate declarations across state, derived, prop and fn (error)
2. Circular dependencies between derived values (error)
3. State that nothing reads (warning)

Validation never raises. Findings are collected into a ValidationResult so a
caller can report all of them at once.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from dataclasses import dataclass, field
from types import MappingProxyType

from . import ast

logger = logging.getLogger(__name__)

# Declaration kinds that share one namespace inside a container
DECLARATION_KINDS: MappingProxyType[type, str] = MappingProxyType(
    {
        ast.StateDecl: "state",
        ast.DerivedDecl: "derived",
        ast.PropDecl: "prop",
        ast.FnDecl: "fn",
    }
)


@dataclass(frozen=True)
class Diagnostic:
    """A single validator finding at a 1-indexed source position."""

    message: str
    line: int
    column: int

    @classmethod
    def at(cls, node: ast.Node, message: str) -> Diagnostic:
        return cls(message=message, line=node.loc.line, column=node.loc.column)

    def __str__(self) -> str:
        return f"Line {self.line}, Col {self.column}: {self.message}"


@dataclass
class ValidationResult:
    """Result of validating a program."""

    errors: list[Diagnostic] = field(default_factory=list)
    warnings: list[Diagnostic] = field(default_factory=list)

    @property
    def valid(self) -> bool:
        """True when there are no blocking errors; warnings are allowed."""
        return not self.errors

    def extend(self, errors: Iterable[Diagnostic], warnings: Iterable[Diagnostic]) -> None:
        self.errors.extend(errors)
        self.warnings.extend(warnings)


def validate(nodes: Iterable[ast.Node]) -> ValidationResult:
    """
    Validate every container in a parsed program.

    Args:
        nodes: Top-level nodes returned by ``parse``

    Returns:
        ValidationResult with errors and warnings in source order per container
    """
    result = ValidationResult()
    for node in nodes:
        if isinstance(node, ast.CONTAINER_TYPES):
            result.extend(*validate_container(node))

    logger.debug(
        "Validation finished with %d errors and %d warnings",
        len(result.errors),
        len(result.warnings),
    )
    return result


def validate_container(
    container: ast.Page | ast.Component | ast.App,
) -> tuple[list[Diagnostic], list[Diagnostic]]:
    """
    Validate one page, component or app body.

    Returns:
        Tuple of (errors, warnings)
    """
    errors = check_duplicate_declarations(container.body)
    errors.extend(check_circular_derived(container.body))
    warnings = check_unused_state(container.body)
    return errors, warnings


def check_duplicate_declarations(body: list[ast.BodyNode]) -> list[Diagnostic]:
    """
    Report every repeated name after its first declaration.

    State, derived, prop and fn share one namespace, so a ``fn`` named like a
    ``state`` collides too.
    """
    errors = []
    seen: dict[str, tuple[str, int]] = {}

    for node in body:
        kind = DECLARATION_KINDS.get(type(node))
        if kind is None:
            continue
        previous = seen.get(node.name)
        if previous is None:
            seen[node.name] = (kind, node.loc.line)
            continue
        previous_kind, previous_line = previous
        errors.append(
            Diagnostic.at(
                node,
                f"Duplicate declaration '{node.name}' ({kind}), "
                f"previously declared as {previous_kind} at line {previous_line}",
            )
        )

    return errors


def derived_dependencies(derived: list[ast.DerivedDecl]) -> dict[str, set[str]]:
    """Map each derived name to the other derived names its expression reads."""
    names = {decl.name for decl in derived}
    graph: dict[str, set[str]] = {}
    for decl in derived:
        deps = {name for name in ast.iter_identifiers(decl.expression) if name in names}
        graph.setdefault(decl.name, set()).update(deps)
    return graph


def check_circular_derived(body: list[ast.BodyNode]) -> list[Diagnostic]:
    """
    Report derived values that depend on themselves, directly or transitively.

    Depth-first search from each unvisited derived; one error is reported per
    search root that reaches a back edge.
    """
    derived = [node for node in body if isinstance(node, ast.DerivedDecl)]
    graph = derived_dependencies(derived)
    first_decl: dict[str, ast.DerivedDecl] = {}
    for decl in derived:
        first_decl.setdefault(decl.name, decl)

    visited: set[str] = set()
    on_stack: set[str] = set()

    def has_cycle(name: str) -> bool:
        visited.add(name)
        on_stack.add(name)
        for dep in sorted(graph.get(name, ())):
            if dep not in visited:
                if has_cycle(dep):
                    return True
            elif dep in on_stack:
                return True
        on_stack.discard(name)
        return False

    errors = []
    for name, decl in first_decl.items():
        if name in visited:
            continue
        if has_cycle(name):
            errors.append(Diagnostic.at(decl, f"Circular dependency detected in derived '{name}'"))
        on_stack.clear()

    return errors


def check_unused_state(body: list[ast.BodyNode]) -> list[Diagnostic]:
    """Warn about state that no other node in the container reads."""
    states = [node for node in body if isinstance(node, ast.StateDecl)]
    if not states:
        return []

    used = set(ast.iter_identifiers(node for node in body if not isinstance(node, ast.StateDecl)))
    return [
        Diagnostic.at(state, f"State '{state.name}' is declared but never used")
        for state in states
        if state.name not in used
    ]
