"""
Statement parsing for function bodies, handlers and lifecycle hooks.

DSL Syntax:

    fn addTodo():
      let title: str = input.trim()
      if title == "": return
      todos.push({title, done: false})
      input = ""
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from .. import ast
from ..lexer import TokenType


class StatementParserMixin:
    """Parser mixin for statements and statement blocks."""

    if TYPE_CHECKING:
        advance: Any
        loc: Any
        match: Any
        match_keyword: Any
        match_punct: Any
        expect_name: Any
        expect_op: Any
        at_line_end: Any
        block_lines: Any
        parse_expression: Any
        parse_assignment: Any
        parse_type_expr: Any
        parse_if_chain: Any
        parse_for_header: Any

    def parse_statement_block(self) -> list[ast.Statement]:
        """Parse an indented block of statements; comments are dropped."""
        return [self.parse_statement() for _ in self.block_lines()]

    def parse_statement_suite(self) -> list[ast.Statement]:
        """Parse the statements after a ``:``, either an indented block or the rest of the line."""
        if self.match(TokenType.NEWLINE, TokenType.EOF):
            return self.parse_statement_block()
        return [self.parse_statement()]

    def parse_statement(self) -> ast.Statement:
        loc = self.loc()

        if self.match_keyword("return"):
            self.advance()
            if self.at_line_end():
                return ast.ReturnStmt(value=None, loc=loc)
            return ast.ReturnStmt(value=self.parse_expression(), loc=loc)

        if self.match_keyword("if"):
            condition, body, elifs, else_body = self.parse_if_chain(self.parse_statement_suite)
            return ast.IfStmt(
                condition=condition,
                body=body,
                elifs=[ast.ElifClause(condition=c, body=b) for c, b in elifs],
                else_body=else_body,
                loc=loc,
            )

        if self.match_keyword("for"):
            item, index, iterable = self.parse_for_header()
            return ast.ForStmt(
                item=item,
                index=index,
                iterable=iterable,
                body=self.parse_statement_suite(),
                loc=loc,
            )

        if self.match_keyword("let"):
            self.advance()
            name = self.expect_name()
            value_type = None
            if self.match_punct(":"):
                self.advance()
                value_type = self.parse_type_expr()
            self.expect_op("=")
            return ast.VarDecl(
                name=name, value_type=value_type, value=self.parse_expression(), loc=loc
            )

        expr = self.parse_assignment()
        if isinstance(expr, ast.AssignmentExpr):
            return ast.AssignmentStmt(
                target=expr.target, operator=expr.operator, value=expr.value, loc=loc
            )
        return ast.ExprStmt(expression=expr, loc=loc)
