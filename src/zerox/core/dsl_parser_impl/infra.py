"""
Deployment and infrastructure parsing.

DSL Syntax:

    deploy vercel:
      region: "icn1"

    env production:
      API_URL = "https://api.example.com"
      secret STRIPE_KEY = "sk_live_..."

    docker "node:20-alpine":
      port: 3000

    ci github:
      on push
      build = "npm run build"

    domain "example.com":
      ssl: true

    cdn cloudflare:
      cache: "1d"
    monitor sentry:
      dsn: "..."
    backup daily:
      retain: 30
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from .. import ast
from ..lexer import TokenType


class InfraParserMixin:
    """Parser mixin for deploy, env, docker, ci, domain, cdn, monitor and backup."""

    if TYPE_CHECKING:
        advance: Any
        loc: Any
        peek_token: Any
        match: Any
        match_word: Any
        expect_keyword: Any
        expect_punct: Any
        expect_op: Any
        expect_name: Any
        parse_name_or_string: Any
        parse_props_block: Any
        parse_optional_props_block: Any
        block_lines: Any
        parse_expression: Any

    def _parse_optional_word(self, default: str) -> str:
        if self.match(TokenType.IDENTIFIER, TokenType.KEYWORD):
            return self.advance().value
        return default

    def parse_deploy(self) -> ast.Deploy:
        loc = self.loc()
        self.expect_keyword("deploy")
        provider = self.expect_name()
        return ast.Deploy(provider=provider, props=self.parse_optional_props_block(), loc=loc)

    def parse_env(self) -> ast.Env:
        """Parse ``env [type]:`` and its ``[secret] NAME = value`` lines."""
        loc = self.loc()
        self.expect_keyword("env")
        env_type = self._parse_optional_word("all")
        self.expect_punct(":")

        variables = []
        for _ in self.block_lines():
            following = self.peek_token()
            secret = self.match_word("secret") and following.type in (
                TokenType.IDENTIFIER,
                TokenType.KEYWORD,
            )
            if secret:
                self.advance()
            name = self.expect_name()
            self.expect_op("=")
            variables.append(ast.EnvVar(name=name, value=self.parse_expression(), secret=secret))

        return ast.Env(env_type=env_type, variables=variables, loc=loc)

    def parse_docker(self) -> ast.Docker:
        loc = self.loc()
        self.expect_keyword("docker")
        base_image = "node:20-alpine"
        if self.match(TokenType.STRING, TokenType.IDENTIFIER):
            base_image = self.advance().value
        return ast.Docker(base_image=base_image, props=self.parse_optional_props_block(), loc=loc)

    def parse_ci(self) -> ast.Ci:
        """Parse ``ci [provider]:`` with ``on|trigger event`` and ``step = command`` lines."""
        loc = self.loc()
        self.expect_keyword("ci")
        provider = self._parse_optional_word("github")
        self.expect_punct(":")

        triggers = []
        steps = []
        for _ in self.block_lines():
            if self.match_word("on", "trigger"):
                self.advance()
                triggers.append(self.expect_name())
            else:
                name = self.expect_name()
                self.expect_op("=")
                steps.append(ast.CiStep(name=name, command=self.parse_expression()))

        return ast.Ci(provider=provider, triggers=triggers, steps=steps, loc=loc)

    def parse_domain(self) -> ast.Domain:
        loc = self.loc()
        self.expect_keyword("domain")
        domain = self.parse_name_or_string()
        self.expect_punct(":")
        return ast.Domain(domain=domain, props=self.parse_props_block(), loc=loc)

    def parse_cdn(self) -> ast.Cdn:
        loc = self.loc()
        self.expect_keyword("cdn")
        provider = self._parse_optional_word("cloudflare")
        self.expect_punct(":")
        return ast.Cdn(provider=provider, props=self.parse_props_block(), loc=loc)

    def parse_monitor(self) -> ast.Monitor:
        loc = self.loc()
        self.expect_keyword("monitor")
        provider = self._parse_optional_word("sentry")
        self.expect_punct(":")
        return ast.Monitor(provider=provider, props=self.parse_props_block(), loc=loc)

    def parse_backup(self) -> ast.Backup:
        loc = self.loc()
        self.expect_keyword("backup")
        strategy = self._parse_optional_word("daily")
        self.expect_punct(":")
        return ast.Backup(strategy=strategy, props=self.parse_props_block(), loc=loc)
