"""
Container and block parsing for the 0x DSL.

DSL Syntax:

    page Home:
      state count: int = 0

      layout col gap=4:
        text "Count: {count}"
        button "+" -> count += 1

    component Card:
      prop title: str

    app Shop:
      ...

Every construct is found through the keyword dispatch tables; bodies accept
declarations and UI elements, layout blocks accept UI elements only.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from .. import ast
from ..lexer import TokenType
from .dispatch import BODY_PARSERS, TOP_LEVEL_PARSERS, UI_PARSERS

# Suggestion candidates for an unknown word inside a body
BODY_CANDIDATES = (*BODY_PARSERS, *UI_PARSERS)


class ContainerParserMixin:
    """Parser mixin for pages, components, apps and their blocks."""

    if TYPE_CHECKING:
        advance: Any
        loc: Any
        token_loc: Any
        current_token: Any
        match: Any
        error: Any
        unknown_keyword: Any
        expect_keyword: Any
        expect_punct: Any
        expect_name: Any
        block_lines: Any

    def parse_program(self) -> list[ast.TopLevelNode]:
        """Parse a whole file into its top-level nodes."""
        nodes = []
        while not self.match(TokenType.EOF):
            if self.match(TokenType.NEWLINE, TokenType.COMMENT, TokenType.DEDENT):
                self.advance()
                continue
            if self.match(TokenType.INDENT):
                raise self.error("Unexpected indentation")
            nodes.append(self.parse_top_level())
        return nodes

    def parse_top_level(self) -> ast.TopLevelNode:
        token = self.current_token()
        method = TOP_LEVEL_PARSERS.get(token.value) if token.type == TokenType.KEYWORD else None
        if method is None:
            raise self.unknown_keyword(
                f"Expected top-level keyword, got '{token.value}'", TOP_LEVEL_PARSERS
            )
        return getattr(self, method)()

    def _parse_container(self, keyword: str) -> tuple[str, list[ast.BodyNode]]:
        self.expect_keyword(keyword)
        name = self.expect_name()
        self.expect_punct(":")
        return name, self.parse_block()

    def parse_page(self) -> ast.Page:
        loc = self.loc()
        name, body = self._parse_container("page")
        return ast.Page(name=name, body=body, loc=loc)

    def parse_component(self) -> ast.Component:
        loc = self.loc()
        name, body = self._parse_container("component")
        return ast.Component(name=name, body=body, loc=loc)

    def parse_app(self) -> ast.App:
        loc = self.loc()
        name, body = self._parse_container("app")
        return ast.App(name=name, body=body, loc=loc)

    # -------------------------------------------------------------------------
    # Blocks
    # -------------------------------------------------------------------------

    def _comment(self) -> ast.Comment:
        token = self.advance()
        return ast.Comment(text=token.value, loc=self.token_loc(token))

    def parse_block(self) -> list[ast.BodyNode]:
        """Parse the indented body of a page, component or app."""
        items: list[ast.BodyNode] = []
        for token in self.block_lines(include_comments=True):
            if token.type == TokenType.COMMENT:
                items.append(self._comment())
            else:
                items.append(self.parse_body_item())
        return items

    def parse_ui_block(self) -> list[ast.UINode]:
        """Parse an indented block of UI elements."""
        items: list[ast.UINode] = []
        for token in self.block_lines(include_comments=True):
            if token.type == TokenType.COMMENT:
                items.append(self._comment())
            else:
                items.append(self.parse_ui_element())
        return items

    def parse_body_item(self) -> ast.BodyNode:
        token = self.current_token()
        if token.type == TokenType.KEYWORD:
            method = BODY_PARSERS.get(token.value) or UI_PARSERS.get(token.value)
            if method is not None:
                return getattr(self, method)()
        raise self.unknown_keyword(f"Unexpected token '{token.value}'", BODY_CANDIDATES)

    def parse_ui_element(self) -> ast.UINode:
        token = self.current_token()
        if token.type == TokenType.KEYWORD:
            method = UI_PARSERS.get(token.value)
            if method is not None:
                return getattr(self, method)()
        raise self.unknown_keyword(f"Expected UI element, got '{token.value}'", UI_PARSERS)
