"""
Error handling and resilience parsing.

DSL Syntax:

    error boundary:
      fallback:
        text "Something went wrong"
      on error:
        reportError(error)
      reportTo = "sentry"

    loading skeleton:
      text "Loading..."

    offline cache-first:
      text "You are offline"

    retry 3 exponential:
      delay: 1000
      action: fetchData()

    log warn "Slow response", elapsed
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from .. import ast
from ..lexer import TokenType

ERROR_TYPES = ("boundary", "global", "fallback")
LOADING_TYPES = ("skeleton", "spinner", "shimmer", "global")
BACKOFF_STRATEGIES = ("linear", "exponential")
LOG_LEVELS = ("debug", "info", "warn", "error")


class ResilienceParserMixin:
    """Parser mixin for error boundaries, loading and offline states, retry and log."""

    if TYPE_CHECKING:
        advance: Any
        loc: Any
        peek_token: Any
        match: Any
        match_keyword: Any
        match_punct: Any
        match_word: Any
        match_op: Any
        error: Any
        unexpected: Any
        expect_keyword: Any
        expect_punct: Any
        expect_name: Any
        parse_variant: Any
        parse_assignment: Any
        block_lines: Any
        parse_expression: Any
        parse_statement_suite: Any
        parse_ui_block: Any

    def parse_error_boundary(self) -> ast.ErrorBoundary:
        """
        Parse ``error [kind]:``.

        The block holds a ``fallback:`` UI block, ``on event:`` handlers and
        ``name = value`` settings.
        """
        loc = self.loc()
        self.expect_keyword("error")
        error_type = self.parse_variant(ERROR_TYPES, "boundary")
        self.expect_punct(":")

        handler: list[ast.Statement] = []
        fallback: list[ast.UINode] = []
        props: dict[str, ast.Expr] = {}
        for _ in self.block_lines():
            following = self.peek_token()
            if (
                self.match_word("fallback")
                and following.type == TokenType.PUNCTUATION
                and following.value == ":"
            ):
                self.advance()
                self.advance()
                fallback.extend(self.parse_ui_block())
            elif self.match_keyword("on"):
                self.advance()
                self.expect_name()
                self.expect_punct(":")
                handler.extend(self.parse_statement_suite())
            elif following.type == TokenType.OPERATOR and following.value == "=":
                key = self.expect_name()
                self.advance()
                props[key] = self.parse_expression()
            else:
                raise self.unexpected("'fallback:', 'on' or a setting")

        return ast.ErrorBoundary(
            error_type=error_type, handler=handler, fallback=fallback, props=props, loc=loc
        )

    def parse_loading(self) -> ast.Loading:
        loc = self.loc()
        self.expect_keyword("loading")
        loading_type = self.parse_variant(LOADING_TYPES, "spinner")
        self.expect_punct(":")
        return ast.Loading(loading_type=loading_type, body=self.parse_ui_block(), loc=loc)

    def parse_offline(self) -> ast.Offline:
        """Parse ``offline [strategy]:`` and its fallback UI."""
        loc = self.loc()
        self.expect_keyword("offline")
        strategy = "cache-first"
        if self.match(TokenType.STRING):
            strategy = self.advance().value
        elif self.match(TokenType.IDENTIFIER, TokenType.KEYWORD):
            strategy = self._parse_hyphenated_name()
        self.expect_punct(":")
        return ast.Offline(strategy=strategy, fallback=self.parse_ui_block(), loc=loc)

    def _parse_hyphenated_name(self) -> str:
        """Parse ``network-first`` style names, which lex as words joined by '-'."""
        name = self.expect_name()
        while self.match_op("-") and self.peek_token().type in (
            TokenType.IDENTIFIER,
            TokenType.KEYWORD,
        ):
            self.advance()
            name += "-" + self.expect_name()
        return name

    def parse_retry(self) -> ast.Retry:
        """Parse ``retry max [backoff]:`` with ``delay`` and ``action`` settings."""
        loc = self.loc()
        self.expect_keyword("retry")
        max_retries = self.parse_expression()
        backoff = self.parse_variant(BACKOFF_STRATEGIES, "exponential")
        self.expect_punct(":")

        delay = None
        action: ast.Expr = ast.NullLiteral(loc=loc)
        for token in self.block_lines():
            key = self.expect_name()
            self.expect_punct(":")
            if key == "delay":
                delay = self.parse_expression()
            elif key == "action":
                action = self.parse_assignment()
            else:
                raise self.error(f"Unknown retry option '{key}'", token)

        return ast.Retry(
            max_retries=max_retries, delay=delay, backoff=backoff, action=action, loc=loc
        )

    def parse_log(self) -> ast.Log:
        """Parse ``log [level] message [, data]``."""
        loc = self.loc()
        self.expect_keyword("log")
        level = self.parse_variant(LOG_LEVELS, "info")
        message = self.parse_expression()
        data = None
        if self.match_punct(","):
            self.advance()
            data = self.parse_expression()
        return ast.Log(level=level, message=message, data=data, loc=loc)
