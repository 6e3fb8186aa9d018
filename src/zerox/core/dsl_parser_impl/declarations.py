"""
Declaration parsing for page and component bodies.

DSL Syntax:

    state todos: list[Todo] = []
    derived remaining = todos.filter(t => !t.done).length
    prop title: str = "Untitled"
    store cart: list[Item] = []
    type Priority = "low" | "medium" | "high"
    api getUsers = GET "/api/users"

    async fn save(todo: Todo):
      requires: todo.title != ""
      await api.post("/todos", todo)

    on mount:
      load()

    watch query:
      search(query)

    check count >= 0 "Count must not be negative"

    style card:
      padding: 16
      @mobile: padding: 8

    js import { format } from "date-fns"
    use Button from "./button"
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from .. import ast
from ..lexer import TokenType


class DeclarationParserMixin:
    """Parser mixin for state, functions, hooks, styles and imports."""

    if TYPE_CHECKING:
        advance: Any
        loc: Any
        current_token: Any
        match: Any
        match_keyword: Any
        match_punct: Any
        match_op: Any
        error: Any
        unexpected: Any
        expect: Any
        expect_keyword: Any
        expect_punct: Any
        expect_op: Any
        expect_name: Any
        expect_string: Any
        block_lines: Any
        parse_expression: Any
        parse_type_expr: Any
        parse_type_definition: Any
        parse_statement: Any
        parse_statement_suite: Any

    def parse_state(self) -> ast.StateDecl:
        """Parse ``state name: T = expr``."""
        loc = self.loc()
        self.expect_keyword("state")
        name = self.expect_name()
        self.expect_punct(":")
        value_type = self.parse_type_expr()
        self.expect_op("=")
        initial = self.parse_expression()
        return ast.StateDecl(name=name, value_type=value_type, initial=initial, loc=loc)

    def parse_derived(self) -> ast.DerivedDecl:
        loc = self.loc()
        self.expect_keyword("derived")
        name = self.expect_name()
        self.expect_op("=")
        return ast.DerivedDecl(name=name, expression=self.parse_expression(), loc=loc)

    def parse_prop(self) -> ast.PropDecl:
        loc = self.loc()
        self.expect_keyword("prop")
        name = self.expect_name()
        self.expect_punct(":")
        value_type = self.parse_type_expr()
        default_value = None
        if self.match_op("="):
            self.advance()
            default_value = self.parse_expression()
        return ast.PropDecl(name=name, value_type=value_type, default_value=default_value, loc=loc)

    def parse_type_decl(self) -> ast.TypeDecl:
        loc = self.loc()
        self.expect_keyword("type")
        name = self.expect_name()
        self.expect_op("=")
        return ast.TypeDecl(name=name, definition=self.parse_type_definition(), loc=loc)

    def parse_store(self) -> ast.StoreDecl:
        loc = self.loc()
        self.expect_keyword("store")
        name = self.expect_name()
        self.expect_punct(":")
        value_type = self.parse_type_expr()
        self.expect_op("=")
        initial = self.parse_expression()
        return ast.StoreDecl(name=name, value_type=value_type, initial=initial, loc=loc)

    def parse_api(self) -> ast.ApiDecl:
        """Parse ``api name = METHOD "url"``."""
        loc = self.loc()
        self.expect_keyword("api")
        name = self.expect_name()
        self.expect_op("=")
        method = self.expect(TokenType.HTTP_METHOD).value
        url = self.expect_string()
        return ast.ApiDecl(name=name, method=method, url=url, loc=loc)

    # -------------------------------------------------------------------------
    # Functions and hooks
    # -------------------------------------------------------------------------

    def parse_fn(self, is_async: bool = False, loc: ast.SourceLocation | None = None) -> ast.FnDecl:
        """
        Parse ``fn name(params):`` and its body.

        ``requires:`` and ``ensures:`` lines in the body are collected as
        contracts instead of statements.
        """
        loc = loc or self.loc()
        self.expect_keyword("fn")
        name = self.expect_name()
        params = self._parse_params()
        self.expect_punct(":")

        body: list[ast.Statement] = []
        requires: list[ast.Expr] = []
        ensures: list[ast.Expr] = []
        for _ in self.block_lines():
            if self.match_keyword("requires", "ensures"):
                contracts = requires if self.advance().value == "requires" else ensures
                self.expect_punct(":")
                contracts.append(self.parse_expression())
            else:
                body.append(self.parse_statement())

        return ast.FnDecl(
            name=name,
            params=params,
            body=body,
            is_async=is_async,
            requires=requires,
            ensures=ensures,
            loc=loc,
        )

    def parse_async_fn(self) -> ast.FnDecl:
        loc = self.loc()
        self.expect_keyword("async")
        return self.parse_fn(is_async=True, loc=loc)

    def _parse_params(self) -> list[ast.Param]:
        """Parse ``(name[: T][= default], ...)``."""
        self.expect_punct("(")
        params = []
        while not self.match_punct(")"):
            name = self.expect_name()
            param_type = None
            default_value = None
            if self.match_punct(":"):
                self.advance()
                param_type = self.parse_type_expr()
            if self.match_op("="):
                self.advance()
                default_value = self.parse_expression()
            params.append(
                ast.Param(name=name, param_type=param_type, default_value=default_value)
            )
            if self.match_punct(","):
                self.advance()
            elif not self.match_punct(")"):
                raise self.unexpected("',' or ')'")
        self.expect_punct(")")
        return params

    def parse_on(self) -> ast.OnMount | ast.OnDestroy:
        loc = self.loc()
        self.expect_keyword("on")
        if self.match_keyword("mount", "destroy"):
            hook = self.advance().value
        else:
            raise self.error(
                f"Expected 'mount' or 'destroy' after 'on', got '{self.current_token().value}'"
            )
        self.expect_punct(":")
        body = self.parse_statement_suite()
        if hook == "mount":
            return ast.OnMount(body=body, loc=loc)
        return ast.OnDestroy(body=body, loc=loc)

    def parse_watch(self) -> ast.WatchBlock:
        loc = self.loc()
        self.expect_keyword("watch")
        variable = self.expect_name()
        self.expect_punct(":")
        return ast.WatchBlock(variable=variable, body=self.parse_statement_suite(), loc=loc)

    def parse_check(self) -> ast.CheckDecl:
        """Parse ``check condition "message"``."""
        loc = self.loc()
        self.expect_keyword("check")
        condition = self.parse_expression()
        message = self.expect_string()
        return ast.CheckDecl(condition=condition, message=message, loc=loc)

    # -------------------------------------------------------------------------
    # Styles and imports
    # -------------------------------------------------------------------------

    def parse_style(self) -> ast.StyleDecl:
        loc = self.loc()
        self.expect_keyword("style")
        name = self.expect_name()
        self.expect_punct(":")

        properties = []
        for _ in self.block_lines():
            responsive = None
            if self.match(TokenType.AT_KEYWORD):
                responsive = "@" + self.advance().value
                self.expect_punct(":")
            prop_name = self.expect_name()
            self.expect_punct(":")
            properties.append(
                ast.StyleProperty(
                    name=prop_name, value=self.parse_expression(), responsive=responsive
                )
            )
        return ast.StyleDecl(name=name, properties=properties, loc=loc)

    def parse_js(self) -> ast.JsImport | ast.JsBlock:
        """Parse ``js import ... from "module"`` or an inline ``js { ... }`` block."""
        loc = self.loc()
        self.expect_keyword("js")

        if self.match_keyword("import"):
            self.advance()
            if self.match_punct("{"):
                self.advance()
                specifiers = []
                while not self.match_punct("}"):
                    specifiers.append(self.expect_name())
                    if self.match_punct(","):
                        self.advance()
                self.expect_punct("}")
                is_default = False
            else:
                specifiers = [self.expect_name()]
                is_default = True
            self.expect_keyword("from")
            source = self.expect_string()
            return ast.JsImport(specifiers=specifiers, source=source, is_default=is_default, loc=loc)

        if self.match_punct("{"):
            return ast.JsBlock(code=self._read_js_code(), loc=loc)

        raise self.error("Expected 'import' or '{' after 'js'")

    def _read_js_code(self) -> str:
        """
        Collect the tokens of a ``{ ... }`` block back into source text.

        Tokens on a line are joined by single spaces; lines by newlines.
        """
        self.expect_punct("{")
        depth = 1
        lines: list[list[str]] = [[]]
        while True:
            token = self.current_token()
            if token.type == TokenType.EOF:
                raise self.unexpected("'}' to close the js block")
            self.advance()

            if token.type == TokenType.PUNCTUATION and token.value == "{":
                depth += 1
            elif token.type == TokenType.PUNCTUATION and token.value == "}":
                depth -= 1
                if depth == 0:
                    break

            if token.type == TokenType.NEWLINE:
                lines.append([])
            elif token.type == TokenType.STRING:
                lines[-1].append(f'"{token.value}"')
            elif token.type == TokenType.COMMENT:
                lines[-1].append(f"// {token.value}")
            elif token.type not in (TokenType.INDENT, TokenType.DEDENT):
                lines[-1].append(token.value)

        text_lines = [" ".join(words) for words in lines]
        return "\n".join(line for line in text_lines if line).strip()

    def parse_use(self) -> ast.UseImport:
        """Parse ``use Name from "source"``."""
        loc = self.loc()
        self.expect_keyword("use")
        name = self.expect_name()
        self.expect_keyword("from")
        return ast.UseImport(name=name, source=self.expect_string(), loc=loc)
