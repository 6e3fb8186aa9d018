"""
0x DSL Parser Package.

This package provides a modular recursive descent parser for the 0x DSL.
The parser is built using mixins to separate parsing logic by construct type,
making it easier to maintain and extend.

The main exports are:
- Parser: The complete parser class
- parse: Convenience function to tokenize and parse source text

Usage:
    from zerox.core.dsl_parser_impl import parse

    nodes = parse(text, file)
"""

import logging
from pathlib import Path

from .. import ast
from ..lexer import tokenize
from .backend import BackendParserMixin
from .base import BaseParser
from .containers import ContainerParserMixin
from .control_flow import ControlFlowParserMixin
from .data import DataParserMixin
from .declarations import DeclarationParserMixin
from .dispatch import BODY_PARSERS, TOP_LEVEL_PARSERS, UI_PARSERS
from .expressions import STRUCTURAL_KEYWORDS, ExpressionParserMixin
from .features import FeatureParserMixin
from .i18n import I18nParserMixin
from .infra import InfraParserMixin
from .patterns import PatternParserMixin
from .resilience import ResilienceParserMixin
from .statements import StatementParserMixin
from .test import TestParserMixin
from .types import TypeParserMixin
from .ui import UIParserMixin

logger = logging.getLogger(__name__)


class Parser(
    BaseParser,
    ExpressionParserMixin,
    TypeParserMixin,
    StatementParserMixin,
    ControlFlowParserMixin,
    ContainerParserMixin,
    DeclarationParserMixin,
    UIParserMixin,
    DataParserMixin,
    FeatureParserMixin,
    PatternParserMixin,
    InfraParserMixin,
    BackendParserMixin,
    TestParserMixin,
    ResilienceParserMixin,
    I18nParserMixin,
):
    """
    Complete 0x DSL Parser.

    This class composes all parser mixins to provide full DSL parsing capability.
    Each mixin provides parsing for a specific construct type:

    - ExpressionParserMixin: Expressions, template strings, assignments
    - TypeParserMixin: Type annotations and type declarations
    - StatementParserMixin: Statements in function bodies and handlers
    - ControlFlowParserMixin: if/elif/else, for, show and hide
    - ContainerParserMixin: Pages, components, apps and keyword dispatch
    - DeclarationParserMixin: State, functions, hooks, styles and imports
    - UIParserMixin: Layout and the basic UI elements
    - DataParserMixin: Models, data sources, forms, tables, realtime
    - FeatureParserMixin: Auth, routing, roles, automation, dashboard widgets
    - PatternParserMixin: Higher-level UI patterns (crud, hero, pay, ...)
    - InfraParserMixin: Deployment and infrastructure blocks
    - BackendParserMixin: Endpoints, jobs, caching, migrations, storage
    - TestParserMixin: Unit, e2e, mock and fixture declarations
    - ResilienceParserMixin: Error boundaries, loading, offline, retry, log
    - I18nParserMixin: Translations, locale and rtl
    """

    def parse(self) -> list[ast.TopLevelNode]:
        """
        Parse the entire token stream.

        Returns:
            Top-level nodes in source order
        """
        return self.parse_program()


def parse(
    text: str, file: Path | None = None, strict_indentation: bool = False
) -> list[ast.TopLevelNode]:
    """
    Tokenize and parse DSL source text.

    Args:
        text: DSL source text
        file: Optional source file path (for error reporting)
        strict_indentation: Reject dedents to a level that was never opened

    Returns:
        Top-level nodes in source order

    Raises:
        LexError: If the text cannot be tokenized
        ParseError: On the first syntax error
    """
    tokens = tokenize(text, file, strict_indentation=strict_indentation)
    parser = Parser(tokens, file, source=text)
    nodes = parser.parse()
    logger.debug("Parsed %d top-level nodes from %s", len(nodes), file or "<string>")
    return nodes


__all__ = [
    "Parser",
    "parse",
    "BaseParser",
    "BODY_PARSERS",
    "STRUCTURAL_KEYWORDS",
    "TOP_LEVEL_PARSERS",
    "UI_PARSERS",
    "BackendParserMixin",
    "ContainerParserMixin",
    "ControlFlowParserMixin",
    "DataParserMixin",
    "DeclarationParserMixin",
    "ExpressionParserMixin",
    "FeatureParserMixin",
    "I18nParserMixin",
    "InfraParserMixin",
    "PatternParserMixin",
    "ResilienceParserMixin",
    "StatementParserMixin",
    "TestParserMixin",
    "TypeParserMixin",
    "UIParserMixin",
]
