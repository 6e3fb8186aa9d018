"""
Internationalisation parsing.

DSL Syntax:

    i18n ko:
      ko:
        greeting = "안녕하세요"
        nav.home = "홈"
      en:
        greeting = "Hello"
        nav.home = home

    locale:
      dateFormat: "YYYY-MM-DD"

    rtl true:
      direction: auto
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from .. import ast
from ..lexer import TokenType


class I18nParserMixin:
    """Parser mixin for i18n, locale and rtl blocks."""

    if TYPE_CHECKING:
        advance: Any
        loc: Any
        match: Any
        match_keyword: Any
        match_punct: Any
        expect_keyword: Any
        expect_punct: Any
        expect_op: Any
        expect_name: Any
        parse_dotted_name: Any
        parse_name_or_string: Any
        parse_props_block: Any
        parse_optional_props_block: Any
        block_lines: Any

    def parse_i18n(self) -> ast.I18n:
        """Parse ``i18n [default]:`` and one translation block per locale."""
        loc = self.loc()
        self.expect_keyword("i18n")
        default_locale = "ko"
        if self.match(TokenType.STRING, TokenType.IDENTIFIER, TokenType.KEYWORD):
            default_locale = self.parse_name_or_string()
        self.expect_punct(":")

        locales = []
        translations = []
        for _ in self.block_lines():
            locale = self.expect_name()
            locales.append(locale)
            entries = []
            if self.match_punct(":"):
                self.advance()
                for _ in self.block_lines():
                    key = self.parse_dotted_name()
                    self.expect_op("=")
                    value = self.parse_name_or_string()
                    entries.append(ast.TranslationEntry(key=key, value=value))
            translations.append(ast.Translation(locale=locale, entries=entries))

        return ast.I18n(
            default_locale=default_locale, locales=locales, translations=translations, loc=loc
        )

    def parse_locale(self) -> ast.Locale:
        loc = self.loc()
        self.expect_keyword("locale")
        self.expect_punct(":")
        return ast.Locale(props=self.parse_props_block(), loc=loc)

    def parse_rtl(self) -> ast.Rtl:
        loc = self.loc()
        self.expect_keyword("rtl")
        enabled = True
        if self.match_keyword("true", "false"):
            enabled = self.advance().value == "true"
        return ast.Rtl(enabled=enabled, props=self.parse_optional_props_block(), loc=loc)
