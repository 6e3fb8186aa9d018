"""
Core UI element parsing.

DSL Syntax:

    layout row gap=4 center .toolbar:
      text "Hello {user.name}" size=lg bold
      button "Save" variant=primary -> save()
      input query placeholder="Search..."
      image user.avatar size=48
      link "Docs" href="/docs"
      toggle todo.done
      select country options=countries
      component Card(title="Hi", user)
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from .. import ast
from ..lexer import TokenType

LAYOUT_DIRECTIONS = ("row", "col", "grid", "stack")


class UIParserMixin:
    """Parser mixin for layout and the basic UI elements."""

    if TYPE_CHECKING:
        advance: Any
        loc: Any
        match: Any
        match_keyword: Any
        match_punct: Any
        match_op: Any
        unexpected: Any
        expect_keyword: Any
        expect_punct: Any
        expect_name: Any
        parse_dotted_name: Any
        parse_prop_entry: Any
        parse_inline_props: Any
        parse_expression: Any
        parse_assignment: Any
        parse_atomic: Any
        parse_ui_block: Any
        peek_token: Any

    def parse_layout(self) -> ast.Layout:
        """
        Parse ``layout [direction] props .classes {dynamic}:`` and its children.

        Several style classes are joined with a space; a braced expression
        is kept under the ``_dynamic`` prop.
        """
        loc = self.loc()
        self.expect_keyword("layout")
        direction = "col"
        if self.match_keyword(*LAYOUT_DIRECTIONS):
            direction = self.advance().value

        props: dict[str, ast.Expr] = {}
        classes: list[str] = []
        while not self.match_punct(":"):
            if self.match(TokenType.STYLE_CLASS):
                classes.append(self.advance().value[1:])
            elif self.match_punct("{"):
                props["_dynamic"] = self.parse_atomic()
            elif not self.parse_prop_entry(props):
                raise self.unexpected("':'")
        self.expect_punct(":")

        return ast.Layout(
            direction=direction,
            props=props,
            style_class=" ".join(classes) or None,
            children=self.parse_ui_block(),
            loc=loc,
        )

    def parse_text(self) -> ast.Text:
        loc = self.loc()
        self.expect_keyword("text")
        content = self.parse_expression()
        return ast.Text(content=content, props=self.parse_inline_props(), loc=loc)

    def parse_button(self) -> ast.Button:
        """Parse ``button label props [-> action]``."""
        loc = self.loc()
        self.expect_keyword("button")
        label = self.parse_atomic()
        props = self.parse_inline_props()
        if self.match_op("->"):
            self.advance()
            action = self.parse_assignment()
        else:
            action = ast.NullLiteral(loc=loc)
        return ast.Button(label=label, action=action, props=props, loc=loc)

    def parse_input(self) -> ast.Input:
        loc = self.loc()
        self.expect_keyword("input")
        binding = self.expect_name()
        return ast.Input(binding=binding, props=self.parse_inline_props(), loc=loc)

    def parse_image(self) -> ast.Image:
        loc = self.loc()
        self.expect_keyword("image")
        src = self.parse_atomic()
        return ast.Image(src=src, props=self.parse_inline_props(), loc=loc)

    def parse_link(self) -> ast.Link:
        loc = self.loc()
        self.expect_keyword("link")
        label = self.parse_atomic()
        props = self.parse_inline_props()
        href = props.pop("href", None) or ast.StringLiteral(value="#", loc=loc)
        return ast.Link(label=label, href=href, props=props, loc=loc)

    def parse_toggle(self) -> ast.Toggle:
        loc = self.loc()
        self.expect_keyword("toggle")
        binding = self.parse_dotted_name()
        return ast.Toggle(binding=binding, props=self.parse_inline_props(), loc=loc)

    def parse_select(self) -> ast.Select:
        loc = self.loc()
        self.expect_keyword("select")
        binding = self.expect_name()
        props = self.parse_inline_props()
        options = props.pop("options", None) or ast.ArrayExpr(elements=[], loc=loc)
        return ast.Select(binding=binding, options=options, props=props, loc=loc)

    def parse_component_call(self) -> ast.ComponentCall:
        """
        Parse ``component Name(key=value, positional, ...)``.

        Positional arguments are stored as ``_arg0``, ``_arg1``, ...
        """
        loc = self.loc()
        self.expect_keyword("component")
        name = self.expect_name()

        args: dict[str, ast.Expr] = {}
        if self.match_punct("("):
            self.advance()
            position = 0
            while not self.match_punct(")"):
                following = self.peek_token()
                if (
                    self.match(TokenType.IDENTIFIER, TokenType.KEYWORD)
                    and following.type == TokenType.OPERATOR
                    and following.value == "="
                ):
                    key = self.advance().value
                    self.advance()
                    args[key] = self.parse_atomic()
                else:
                    args[f"_arg{position}"] = self.parse_expression()
                    position += 1
                if self.match_punct(","):
                    self.advance()
                elif not self.match_punct(")"):
                    raise self.unexpected("',' or ')'")
            self.expect_punct(")")

        return ast.ComponentCall(name=name, args=args, loc=loc)
