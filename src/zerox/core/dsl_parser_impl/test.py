"""
Test declaration parsing.

DSL Syntax:

    test unit "adds a todo":
      addTodo("Buy milk")
      expect(todos.length == 1)

    e2e "signup flow":
      visit "/signup"
      fill "#email" = "a@b.c"
      click "#submit"

    mock api:
      GET "/users" => [{id: 1, name: "Kim"}]
      post "/users" => {ok: true}

    fixture users: [{name: "Kim"}, {name: "Lee"}]
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from .. import ast
from ..lexer import TokenType

TEST_TYPES = ("unit", "integration", "component")


class TestParserMixin:
    """Parser mixin for test, e2e, mock and fixture blocks."""

    if TYPE_CHECKING:
        advance: Any
        loc: Any
        match: Any
        match_op: Any
        expect_keyword: Any
        expect_punct: Any
        expect_op: Any
        expect_name: Any
        parse_variant: Any
        parse_http_method: Any
        parse_trailing_expression: Any
        block_lines: Any
        parse_expression: Any
        parse_statement_block: Any

    def _parse_test_name(self) -> str:
        if self.match(TokenType.STRING, TokenType.IDENTIFIER):
            return self.advance().value
        return "unnamed"

    def parse_test(self) -> ast.Test:
        loc = self.loc()
        self.expect_keyword("test")
        test_type = self.parse_variant(TEST_TYPES, "unit")
        name = self._parse_test_name()
        self.expect_punct(":")
        return ast.Test(name=name, test_type=test_type, body=self.parse_statement_block(), loc=loc)

    def parse_e2e(self) -> ast.E2e:
        """Parse an ``e2e`` block of ``action target [= value]`` steps."""
        loc = self.loc()
        self.expect_keyword("e2e")
        name = self._parse_test_name()
        self.expect_punct(":")

        steps = []
        for _ in self.block_lines():
            action = self.expect_name()
            target = self.parse_expression()
            value = None
            if self.match_op("="):
                self.advance()
                value = self.parse_expression()
            steps.append(ast.E2eStep(action=action, target=target, value=value))

        return ast.E2e(name=name, steps=steps, loc=loc)

    def parse_mock(self) -> ast.Mock:
        """Parse ``mock target:`` with ``[METHOD] ["path"] => response`` lines."""
        loc = self.loc()
        self.expect_keyword("mock")
        target = self.expect_name()
        self.expect_punct(":")

        responses = []
        for _ in self.block_lines():
            method = self.parse_http_method("GET")
            path = "/"
            if self.match(TokenType.STRING):
                path = self.advance().value
            self.expect_op("=>")
            responses.append(
                ast.MockResponse(method=method, path=path, response=self.parse_expression())
            )

        return ast.Mock(target=target, responses=responses, loc=loc)

    def parse_fixture(self) -> ast.Fixture:
        loc = self.loc()
        self.expect_keyword("fixture")
        name = self.expect_name()
        self.expect_punct(":")
        return ast.Fixture(name=name, data=self.parse_trailing_expression(), loc=loc)
