"""
Backend handler parsing.

DSL Syntax:

    endpoint POST "/api/todos" middleware auth:
      let todo = db.todos.create(body)
      return todo

    middleware auth:
      if !request.user: return unauthorized()

    queue emails:
      send(job.to, job.body)

    cron cleanup "0 3 * * *":
      db.sessions.deleteExpired()

    cache products redis:
      ttl: 3600

    migrate addPriority:
      up:
        db.addColumn("todos", "priority")
      down:
        db.dropColumn("todos", "priority")

    seed User 10: {name: faker.name(), email: faker.email()}

    webhook stripe "/hooks/stripe":
      handlePayment(body)

    storage uploads r2:
      bucket: "user-files"
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from .. import ast
from ..lexer import HTTP_METHODS, TokenType

CACHE_STRATEGIES = ("memory", "redis", "cdn")
STORAGE_PROVIDERS = ("s3", "r2", "gcs", "local")


class BackendParserMixin:
    """Parser mixin for endpoints, middleware, jobs, caching, migrations and storage."""

    if TYPE_CHECKING:
        advance: Any
        loc: Any
        token_loc: Any
        current_token: Any
        peek_token: Any
        match: Any
        match_word: Any
        expect: Any
        expect_keyword: Any
        expect_punct: Any
        expect_name: Any
        parse_variant: Any
        parse_optional_props_block: Any
        parse_props_block: Any
        block_lines: Any
        skip_newlines: Any
        parse_expression: Any
        parse_statement: Any
        parse_statement_block: Any

    def parse_http_method(self, default: str) -> str:
        """Parse an optional HTTP method; lowercase ``get``/``post``/... are accepted too."""
        if self.match(TokenType.HTTP_METHOD):
            return self.advance().value
        token = self.current_token()
        if token.type == TokenType.IDENTIFIER and token.value.upper() in HTTP_METHODS:
            self.advance()
            return token.value.upper()
        return default

    def parse_endpoint(self) -> ast.Endpoint:
        """Parse ``endpoint [METHOD] [path] (middleware|guard name)* :`` and its handler."""
        loc = self.loc()
        self.expect_keyword("endpoint")
        method = self.parse_http_method("GET")

        path = "/"
        if self.match(TokenType.STRING):
            path = self.advance().value
        elif self.match(TokenType.IDENTIFIER):
            path = "/" + self.advance().value

        middleware = []
        while self.match_word("middleware", "guard"):
            self.advance()
            middleware.append(self.expect_name())

        self.expect_punct(":")
        return ast.Endpoint(
            method=method,
            path=path,
            middleware=middleware,
            handler=self.parse_statement_block(),
            loc=loc,
        )

    def parse_middleware(self) -> ast.Middleware:
        loc = self.loc()
        self.expect_keyword("middleware")
        name = self.expect_name()
        self.expect_punct(":")
        return ast.Middleware(name=name, handler=self.parse_statement_block(), loc=loc)

    def parse_queue(self) -> ast.Queue:
        loc = self.loc()
        self.expect_keyword("queue")
        name = self.expect_name()
        self.expect_punct(":")
        return ast.Queue(name=name, handler=self.parse_statement_block(), loc=loc)

    def parse_cron(self) -> ast.Cron:
        loc = self.loc()
        self.expect_keyword("cron")
        name = self.expect_name()
        schedule = "0 * * * *"
        if self.match(TokenType.STRING):
            schedule = self.advance().value
        self.expect_punct(":")
        return ast.Cron(name=name, schedule=schedule, handler=self.parse_statement_block(), loc=loc)

    def parse_cache(self) -> ast.Cache:
        loc = self.loc()
        self.expect_keyword("cache")
        name = self.expect_name()
        strategy = self.parse_variant(CACHE_STRATEGIES, "memory")
        props = self.parse_optional_props_block()
        ttl = props.pop("ttl", None)
        return ast.Cache(name=name, strategy=strategy, ttl=ttl, props=props, loc=loc)

    def parse_migrate(self) -> ast.Migrate:
        """Parse ``migrate name:`` with ``up:``/``down:`` blocks; bare statements go to ``up``."""
        loc = self.loc()
        self.expect_keyword("migrate")
        name = self.expect_name()
        self.expect_punct(":")

        up: list[ast.Statement] = []
        down: list[ast.Statement] = []
        for _ in self.block_lines():
            following = self.peek_token()
            if (
                self.match_word("up", "down")
                and following.type == TokenType.PUNCTUATION
                and following.value == ":"
            ):
                target = up if self.advance().value == "up" else down
                self.advance()
                target.extend(self.parse_statement_block())
            else:
                up.append(self.parse_statement())

        return ast.Migrate(name=name, up=up, down=down, loc=loc)

    def parse_seed(self) -> ast.Seed:
        """Parse ``seed Model [count]:`` followed by the data expression, inline or indented."""
        loc = self.loc()
        self.expect_keyword("seed")
        model = self.expect_name()
        count = None
        if self.match(TokenType.NUMBER):
            token = self.advance()
            count = ast.NumberLiteral(value=float(token.value), loc=self.token_loc(token))
        self.expect_punct(":")
        return ast.Seed(model=model, count=count, data=self.parse_trailing_expression(), loc=loc)

    def parse_trailing_expression(self) -> ast.Expr:
        """Parse an expression after ``:``, either on the same line or alone in an indented block."""
        if not self.match(TokenType.NEWLINE):
            return self.parse_expression()
        self.skip_newlines()
        self.expect(TokenType.INDENT)
        self.skip_newlines()
        expr = self.parse_expression()
        self.skip_newlines()
        self.expect(TokenType.DEDENT)
        return expr

    def parse_webhook(self) -> ast.Webhook:
        loc = self.loc()
        self.expect_keyword("webhook")
        name = self.expect_name()
        path = f"/webhooks/{name}"
        if self.match(TokenType.STRING):
            path = self.advance().value
        self.expect_punct(":")
        return ast.Webhook(name=name, path=path, handler=self.parse_statement_block(), loc=loc)

    def parse_storage(self) -> ast.Storage:
        loc = self.loc()
        self.expect_keyword("storage")
        name = self.expect_name()
        provider = self.parse_variant(STORAGE_PROVIDERS, "s3")
        self.expect_punct(":")
        return ast.Storage(name=name, provider=provider, props=self.parse_props_block(), loc=loc)
