"""
Error types for 0x DSL lexing, parsing, compilation and configuration.
"""

from dataclasses import dataclass
from pathlib import Path
from typing import Optional


class ZeroxError(Exception):
    """Base exception for all 0x errors."""

    def __init__(self, message: str, context: Optional["ErrorContext"] = None):
        self.message = message
        self.context = context
        super().__init__(self._format_message())

    def _format_message(self) -> str:
        """Format error message with context if available."""
        if not self.context:
            return self.message
        if self.context.file is None and not self.context.snippet:
            return f"{self.context.format()}: {self.message}"
        return f"{self.context.format()}\n{self.message}"

    @property
    def line(self) -> int:
        """1-indexed line of the error, or 1 when no location is known."""
        return self.context.line if self.context else 1

    @property
    def column(self) -> int:
        """1-indexed column of the error, or 1 when no location is known."""
        return self.context.column if self.context else 1


class LexError(ZeroxError):
    """
    Raised when source text cannot be tokenized.

    Examples:
    - Unterminated string literal
    - Inconsistent indentation (strict mode only)
    """

    pass


class ParseError(ZeroxError):
    """
    Raised when the token stream cannot be parsed.

    Examples:
    - Unexpected token for the current production
    - Unknown keyword, optionally with a "Did you mean" suggestion
    - Unexpected indentation
    - Block that closes before a required token
    """

    pass


class CompileError(ZeroxError):
    """
    Raised by the compiler facade when validation reports errors.

    Warnings never raise; only blocking findings do.
    """

    def __init__(self, message: str, diagnostics: list | None = None):
        self.diagnostics = list(diagnostics or [])
        super().__init__(message)


class ConfigError(ZeroxError):
    """
    Raised when a zerox.toml manifest is malformed.

    Examples:
    - Invalid TOML syntax
    - Wrong value type for a known key
    """

    pass


@dataclass
class ErrorContext:
    """
    Context information for an error, including source location.

    Attributes:
        line: Line number (1-indexed)
        column: Column number (1-indexed)
        file: Optional path to the source file
        snippet: Optional code snippet showing the error location
    """

    line: int
    column: int
    file: Path | None = None
    snippet: str | None = None

    def format(self) -> str:
        """
        Format error context as a human-readable string.

        Returns:
            "file.ai:10:5" when the file is known, otherwise "Line 10, Col 5"
        """
        if self.file is not None:
            location = f"{self.file}:{self.line}:{self.column}"
        else:
            location = f"Line {self.line}, Col {self.column}"

        if self.snippet:
            return f"{location}\n{self._format_snippet()}"
        return location

    def _format_snippet(self) -> str:
        """Format code snippet with line numbers and error marker."""
        if not self.snippet:
            return ""

        lines = self.snippet.split("\n")
        formatted = []

        # Snippet shows up to 2 lines before the error line
        start_line = max(1, self.line - 2)

        for i, line in enumerate(lines):
            line_num = start_line + i
            prefix = f"{line_num:4d} | "
            formatted.append(prefix + line)

            if line_num == self.line:
                marker_pos = len(prefix) + self.column - 1
                formatted.append(" " * marker_pos + "^^^")

        return "\n".join(formatted)


def extract_snippet(source: str, line: int, context_lines: int = 2) -> str:
    """
    Cut the lines around ``line`` out of ``source`` for an ErrorContext.

    The snippet starts ``context_lines`` lines before the error line so that
    ErrorContext._format_snippet numbers it correctly.
    """
    lines = source.split("\n")
    start = max(1, line - context_lines)
    end = min(len(lines), line + context_lines)
    return "\n".join(lines[start - 1 : end])


def make_lex_error(
    message: str,
    line: int,
    column: int,
    file: Path | None = None,
    snippet: str | None = None,
) -> LexError:
    """
    Helper to create a LexError with context.

    Args:
        message: Error description
        line: Line number (1-indexed)
        column: Column number (1-indexed)
        file: Optional source file path
        snippet: Optional code snippet

    Returns:
        LexError with context attached
    """
    context = ErrorContext(line=line, column=column, file=file, snippet=snippet)
    return LexError(message, context)


def make_parse_error(
    message: str,
    line: int,
    column: int,
    file: Path | None = None,
    snippet: str | None = None,
) -> ParseError:
    """
    Helper to create a ParseError with context.

    Args:
        message: Error description
        line: Line number (1-indexed)
        column: Column number (1-indexed)
        file: Optional source file path
        snippet: Optional code snippet

    Returns:
        ParseError with context attached
    """
    context = ErrorContext(line=line, column=column, file=file, snippet=snippet)
    return ParseError(message, context)
