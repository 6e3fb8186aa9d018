"""
Control flow parsing shared by UI blocks and statements.

DSL Syntax:

    if todos.length == 0:
      text "Nothing to do"
    elif filter == "done":
      text "All done"
    else:
      for todo, i in todos:
        text todo.title

    show isOpen:
      text "Visible"

The header grammar is the same everywhere; only the block parser differs
(UI elements in layouts, statements in function bodies).
"""

from __future__ import annotations

from collections.abc import Callable
from typing import TYPE_CHECKING, Any

from .. import ast

if TYPE_CHECKING:
    IfChain = tuple[ast.Expr, list, list[tuple[ast.Expr, list]], list | None]


class ControlFlowParserMixin:
    """Parser mixin for if/elif/else, for, show and hide."""

    if TYPE_CHECKING:
        advance: Any
        loc: Any
        match_punct: Any
        expect_keyword: Any
        expect_punct: Any
        expect_name: Any
        skip_newlines_before: Any
        parse_expression: Any
        parse_ui_block: Any

    def parse_if_chain(self, parse_body: Callable[[], list]) -> IfChain:
        """
        Parse ``if cond: ... [elif cond: ...]* [else: ...]``.

        Returns:
            (condition, body, [(elif condition, elif body), ...], else body or None)
        """
        self.expect_keyword("if")
        condition = self.parse_expression()
        self.expect_punct(":")
        body = parse_body()

        elifs = []
        while self.skip_newlines_before("elif"):
            self.advance()
            elif_condition = self.parse_expression()
            self.expect_punct(":")
            elifs.append((elif_condition, parse_body()))

        else_body = None
        if self.skip_newlines_before("else"):
            self.advance()
            self.expect_punct(":")
            else_body = parse_body()

        return condition, body, elifs, else_body

    def parse_for_header(self) -> tuple[str, str | None, ast.Expr]:
        """Parse ``for item[, index] in iterable:`` up to and including the colon."""
        self.expect_keyword("for")
        item = self.expect_name()
        index = None
        if self.match_punct(","):
            self.advance()
            index = self.expect_name()
        self.expect_keyword("in")
        iterable = self.parse_expression()
        self.expect_punct(":")
        return item, index, iterable

    # -------------------------------------------------------------------------
    # UI forms
    # -------------------------------------------------------------------------

    def parse_if_block(self) -> ast.IfBlock:
        loc = self.loc()
        condition, body, elifs, else_body = self.parse_if_chain(self.parse_ui_block)
        return ast.IfBlock(
            condition=condition,
            body=body,
            elifs=[ast.ElifBranch(condition=c, body=b) for c, b in elifs],
            else_body=else_body,
            loc=loc,
        )

    def parse_for_block(self) -> ast.ForBlock:
        loc = self.loc()
        item, index, iterable = self.parse_for_header()
        return ast.ForBlock(
            item=item, index=index, iterable=iterable, body=self.parse_ui_block(), loc=loc
        )

    def parse_show_block(self) -> ast.ShowBlock:
        loc = self.loc()
        self.expect_keyword("show")
        condition = self.parse_expression()
        self.expect_punct(":")
        return ast.ShowBlock(condition=condition, body=self.parse_ui_block(), loc=loc)

    def parse_hide_block(self) -> ast.HideBlock:
        loc = self.loc()
        self.expect_keyword("hide")
        condition = self.parse_expression()
        self.expect_punct(":")
        return ast.HideBlock(condition=condition, body=self.parse_ui_block(), loc=loc)
