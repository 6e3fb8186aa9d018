"""
zerox - Compiler front end for the 0x UI DSL.

Tokenizes, parses and validates 0x sources into a typed, immutable syntax
tree that code generators and editor tooling consume.
"""

from __future__ import annotations

from importlib.metadata import PackageNotFoundError
from importlib.metadata import version as _metadata_version

from .core import ast
from .core.compiler import EditorDiagnostic, check_source, compile_source
from .core.errors import CompileError, ConfigError, LexError, ParseError, ZeroxError
from .core.lexer import Token, TokenType, tokenize
from .core.parser import parse
from .core.validator import Diagnostic, ValidationResult, validate


def get_version() -> str:
    """Get zerox version from installed metadata."""
    try:
        return _metadata_version("zerox")
    except PackageNotFoundError:
        return "0.1.0"


__version__ = get_version()

__all__ = [
    "__version__",
    "get_version",
    "ast",
    "tokenize",
    "parse",
    "validate",
    "compile_source",
    "check_source",
    "Token",
    "TokenType",
    "Diagnostic",
    "ValidationResult",
    "EditorDiagnostic",
    "ZeroxError",
    "LexError",
    "ParseError",
    "CompileError",
    "ConfigError",
]
