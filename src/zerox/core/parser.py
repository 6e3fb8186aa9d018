from dataclasses import dataclass, field
from pathlib import Path

from . import ast
from .dsl_parser_impl import parse


@dataclass
class ParsedModule:
    """One parsed source file."""

    name: str
    file: Path
    source: str
    nodes: list[ast.TopLevelNode] = field(default_factory=list)


def parse_modules(files: list[Path], strict_indentation: bool = False) -> list[ParsedModule]:
    """
    Parse source files into ParsedModule structures.

    Files are parsed independently; names used across files are not resolved.

    Args:
        files: List of source file paths to parse
        strict_indentation: Reject dedents to a level that was never opened

    Returns:
        List of ParsedModule objects, in the order of ``files``

    Raises:
        LexError: If a file cannot be tokenized
        ParseError: On the first syntax error in a file
    """
    modules: list[ParsedModule] = []
    for f in files:
        text = f.read_text(encoding="utf-8")
        nodes = parse(text, f, strict_indentation=strict_indentation)
        modules.append(ParsedModule(name=f.stem, file=f, source=text, nodes=nodes))
    return modules


__all__ = ["ParsedModule", "parse", "parse_modules"]
