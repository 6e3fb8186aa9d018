"""Core zerox functionality: lexer, parser, AST, validator, compiler facade, project manifest."""

from . import ast
from .compiler import EditorDiagnostic, check_source, compile_source
from .errors import (
    CompileError,
    ConfigError,
    ErrorContext,
    LexError,
    ParseError,
    ZeroxError,
)
from .fileset import discover_source_files
from .lexer import Token, TokenType, tokenize
from .manifest import CompilerConfig, ProjectManifest, load_manifest
from .parser import ParsedModule, parse, parse_modules
from .suggestions import format_suggestion, levenshtein, suggest_keyword
from .validator import Diagnostic, ValidationResult, validate

__all__ = [
    "ast",
    "ZeroxError",
    "LexError",
    "ParseError",
    "CompileError",
    "ConfigError",
    "ErrorContext",
    "Token",
    "TokenType",
    "tokenize",
    "parse",
    "parse_modules",
    "ParsedModule",
    "validate",
    "Diagnostic",
    "ValidationResult",
    "compile_source",
    "check_source",
    "EditorDiagnostic",
    "CompilerConfig",
    "ProjectManifest",
    "load_manifest",
    "discover_source_files",
    "levenshtein",
    "suggest_keyword",
    "format_suggestion",
]
