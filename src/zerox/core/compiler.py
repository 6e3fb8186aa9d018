"""
Front-end facade: tokenize, parse and validate in one call.

``compile_source`` fails closed: any validator error raises CompileError, so
callers never see a program that has blocking findings. ``check_source``
never raises and reports every finding as an editor diagnostic with 0-based
positions.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Literal

from pydantic import BaseModel, ConfigDict

from . import ast
from .dsl_parser_impl import parse
from .errors import CompileError, LexError, ParseError
from .manifest import CompilerConfig
from .validator import Diagnostic, ValidationResult, validate

logger = logging.getLogger(__name__)

DIAGNOSTIC_SOURCE = "0x"

Severity = Literal["error", "warning"]


class EditorDiagnostic(BaseModel):
    """A diagnostic in editor coordinates: 0-based line and character."""

    model_config = ConfigDict(frozen=True)

    severity: Severity
    line: int
    character: int
    end_character: int
    message: str
    source: str = DIAGNOSTIC_SOURCE


def compile_source(
    source: str, config: CompilerConfig | None = None, file: Path | None = None
) -> list[ast.TopLevelNode]:
    """
    Parse and validate source text.

    Args:
        source: DSL source text
        config: Compiler switches (defaults when omitted)
        file: Optional source file path (for error reporting)

    Returns:
        The validated top-level nodes

    Raises:
        LexError: If the text cannot be tokenized
        ParseError: On the first syntax error
        CompileError: If validation reports errors, or warnings when
            ``fail_on_warnings`` is set
    """
    config = config or CompilerConfig()
    nodes = parse(source, file, strict_indentation=config.strict_indentation)
    result = validate(nodes)

    for warning in result.warnings:
        logger.warning("%s", warning)

    blocking = list(result.errors)
    if config.fail_on_warnings:
        blocking.extend(result.warnings)
    if blocking:
        lines = "\n".join(str(d) for d in blocking)
        raise CompileError(f"Validation errors:\n{lines}", blocking)

    return nodes


def check_source(
    source: str, config: CompilerConfig | None = None, file: Path | None = None
) -> list[EditorDiagnostic]:
    """
    Collect diagnostics for source text without raising.

    A lexical or syntax error becomes a single error diagnostic; otherwise
    validator errors come first, then warnings.
    """
    config = config or CompilerConfig()
    lines = source.split("\n")
    try:
        nodes = parse(source, file, strict_indentation=config.strict_indentation)
    except (LexError, ParseError) as e:
        logger.debug("Check stopped at syntax error: %s", e.message)
        return [_editor_diagnostic("error", e.line, e.column, e.message, lines)]

    result = validate(nodes)
    return diagnostics_from_result(result, lines)


def diagnostics_from_result(result: ValidationResult, lines: list[str]) -> list[EditorDiagnostic]:
    def convert(severity: Severity, diagnostic: Diagnostic) -> EditorDiagnostic:
        return _editor_diagnostic(
            severity, diagnostic.line, diagnostic.column, diagnostic.message, lines
        )

    return [convert("error", d) for d in result.errors] + [
        convert("warning", d) for d in result.warnings
    ]


def _editor_diagnostic(
    severity: Severity, line: int, column: int, message: str, lines: list[str]
) -> EditorDiagnostic:
    character = max(column - 1, 0)
    return EditorDiagnostic(
        severity=severity,
        line=max(line - 1, 0),
        character=character,
        end_character=_word_end(lines, line, character),
        message=message,
    )


def _word_end(lines: list[str], line: int, character: int) -> int:
    """End of the word starting at ``character``; at least one character wide."""
    if not 1 <= line <= len(lines):
        return character + 1
    text = lines[line - 1]
    end = character
    while end < len(text) and (text[end].isalnum() or text[end] == "_"):
        end += 1
    return max(end, character + 1)
