"""Shared pytest fixtures for zerox tests."""

import textwrap
from collections.abc import Callable
from pathlib import Path

import pytest

from zerox.core import ast
from zerox.core.parser import parse


@pytest.fixture
def fixtures_dir() -> Path:
    """Return path to fixtures directory."""
    return Path(__file__).parent / "fixtures"


@pytest.fixture
def todo_source(fixtures_dir: Path) -> str:
    """Return the text of the sample todo app."""
    return (fixtures_dir / "todo_app.ai").read_text(encoding="utf-8")


@pytest.fixture
def parse_body() -> Callable[[str], list[ast.BodyNode]]:
    """
    Return a helper that parses lines as the body of ``page Test``.

    The lines are dedented and indented by two spaces, so body nodes start
    on line 2 at column 3.
    """

    def _parse(source: str) -> list[ast.BodyNode]:
        body = textwrap.indent(textwrap.dedent(source).strip("\n"), "  ")
        (page,) = parse(f"page Test:\n{body}\n")
        return page.body

    return _parse


@pytest.fixture
def parse_one(parse_body: Callable[[str], list[ast.BodyNode]]) -> Callable[[str], ast.BodyNode]:
    """Return a helper that parses a single body construct."""

    def _parse(source: str) -> ast.BodyNode:
        (node,) = parse_body(source)
        return node

    return _parse
