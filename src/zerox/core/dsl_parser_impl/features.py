"""
App feature parsing: auth, dashboards, routing, navigation and overlays.

DSL Syntax:

    auth provider="supabase":
      login: email, password
      signup: email, password, name
      logout
      guard: admin -> redirect("/login")

    route "/admin":
      page Dashboard
      guard: admin

    roles:
      admin:
        can: read, write, delete
      viewer

    automation:
      trigger "user.signup"
        sendWelcome(event.user)
      schedule "0 9 * * 1"
        sendReport()

    dev:
      port: 3000

    chart line revenue:
      data: monthly
    stats 3:
      stat "Users" value=userCount change=12 icon="users"
    nav sticky:
      link "Home" href="/" icon="home"
    upload avatar:
      accept: "image/*"
      maxSize: 5
      preview
    modal editTodo title="Edit" trigger="Open":
      input title
    toast "Saved" type=success duration=3000
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from .. import ast
from ..lexer import TokenType

CHART_TYPES = ("bar", "line", "pie", "doughnut", "area", "radar", "scatter")


class FeatureParserMixin:
    """Parser mixin for app-level features and dashboard widgets."""

    if TYPE_CHECKING:
        advance: Any
        loc: Any
        match: Any
        match_keyword: Any
        match_punct: Any
        match_op: Any
        error: Any
        unexpected: Any
        expect: Any
        expect_keyword: Any
        expect_punct: Any
        expect_name: Any
        expect_string: Any
        parse_name_or_string: Any
        parse_name_list: Any
        parse_variant: Any
        parse_inline_props: Any
        parse_props_block: Any
        pop_string: Any
        pop_word: Any
        pop_number: Any
        block_lines: Any
        parse_expression: Any
        parse_assignment: Any
        parse_ui_block: Any

    # -------------------------------------------------------------------------
    # App-level declarations
    # -------------------------------------------------------------------------

    def parse_auth(self) -> ast.AuthDecl:
        loc = self.loc()
        self.expect_keyword("auth")
        props = self.parse_inline_props()
        provider = self.pop_string(props, "provider") or "custom"
        self.expect_punct(":")

        login_fields: list[str] = []
        signup_fields: list[str] = []
        logout = False
        guards: list[ast.AuthGuard] = []
        for token in self.block_lines():
            if self.match_keyword("logout"):
                self.advance()
                logout = True
                continue

            key = self.expect_name()
            self.expect_punct(":")
            if key == "login":
                login_fields = self.parse_name_list()
            elif key == "signup":
                signup_fields = self.parse_name_list()
            elif key == "guard":
                guards.append(self._parse_auth_guard())
            else:
                raise self.error(f"Unknown auth option '{key}'", token)

        return ast.AuthDecl(
            provider=provider,
            login_fields=login_fields,
            signup_fields=signup_fields,
            logout=logout,
            guards=guards,
            loc=loc,
        )

    def _parse_auth_guard(self) -> ast.AuthGuard:
        """Parse ``role [-> redirect("/path") | -> "/path"]``."""
        role = self.expect_name()
        redirect = None
        if self.match_op("->"):
            self.advance()
            if self.match_keyword("redirect"):
                self.advance()
                self.expect_punct("(")
                redirect = self.expect_string()
                self.expect_punct(")")
            else:
                redirect = self.expect_string()
        return ast.AuthGuard(role=role, redirect=redirect)

    def parse_route(self) -> ast.RouteDecl:
        loc = self.loc()
        self.expect_keyword("route")
        path = self.expect_string()
        self.expect_punct(":")

        target = ""
        guard = None
        for _ in self.block_lines():
            if self.match_keyword("page"):
                self.advance()
                target = self.expect_name()
            elif self.match_keyword("guard"):
                self.advance()
                self.expect_punct(":")
                guard = self.expect_name()
            else:
                raise self.unexpected("'page' or 'guard'")

        return ast.RouteDecl(path=path, target=target, guard=guard, loc=loc)

    def parse_roles(self) -> ast.RoleDecl:
        loc = self.loc()
        self.expect_keyword("roles")
        self.expect_punct(":")

        roles = []
        for _ in self.block_lines():
            name = self.expect_name()
            can: list[str] = []
            if self.match_punct(":"):
                self.advance()
                for _ in self.block_lines():
                    self.expect_keyword("can")
                    self.expect_punct(":")
                    can.extend(self.parse_name_list())
            roles.append(ast.Role(name=name, can=can))

        return ast.RoleDecl(roles=roles, loc=loc)

    def parse_automation(self) -> ast.Automation:
        loc = self.loc()
        self.expect_keyword("automation")
        self.expect_punct(":")

        triggers = []
        schedules = []
        for _ in self.block_lines():
            if self.match_keyword("trigger"):
                self.advance()
                event = self.parse_name_or_string()
                triggers.append(
                    ast.AutomationTrigger(event=event, actions=self._parse_automation_actions())
                )
            elif self.match_keyword("schedule"):
                self.advance()
                cron = self.expect_string()
                schedules.append(
                    ast.AutomationSchedule(cron=cron, actions=self._parse_automation_actions())
                )
            else:
                raise self.unexpected("'trigger' or 'schedule'")

        return ast.Automation(triggers=triggers, schedules=schedules, loc=loc)

    def _parse_automation_actions(self) -> list[ast.Expr]:
        if self.match_punct(":"):
            self.advance()
        return [self.parse_expression() for _ in self.block_lines()]

    def parse_dev(self) -> ast.Dev:
        loc = self.loc()
        self.expect_keyword("dev")
        self.expect_punct(":")
        return ast.Dev(props=self.parse_props_block(), loc=loc)

    # -------------------------------------------------------------------------
    # Dashboard widgets
    # -------------------------------------------------------------------------

    def parse_chart(self) -> ast.Chart:
        """Parse ``chart [type] name:`` and its props block."""
        loc = self.loc()
        self.expect_keyword("chart")
        chart_type = self.parse_variant(CHART_TYPES, "bar")
        name = self.expect_name()
        self.expect_punct(":")
        return ast.Chart(chart_type=chart_type, name=name, props=self.parse_props_block(), loc=loc)

    def parse_stat(self) -> ast.Stat:
        loc = self.loc()
        self.expect_keyword("stat")
        label = self.expect_string()
        props = self.parse_inline_props()
        value = props.pop("value", None) or ast.NumberLiteral(value=0, loc=loc)
        change = props.pop("change", None)
        icon = self.pop_string(props, "icon")
        return ast.Stat(label=label, value=value, change=change, icon=icon, props=props, loc=loc)

    def parse_stats_grid(self) -> ast.StatsGrid:
        """Parse ``stats [cols][:]`` followed by a block of ``stat`` lines."""
        loc = self.loc()
        self.expect_keyword("stats")
        cols = 4
        if self.match(TokenType.NUMBER):
            cols = int(float(self.advance().value))
        if self.match_punct(":"):
            self.advance()

        stats = []
        for _ in self.block_lines():
            if not self.match_keyword("stat"):
                raise self.unexpected("'stat'")
            stats.append(self.parse_stat())
        return ast.StatsGrid(cols=cols, stats=stats, loc=loc)

    # -------------------------------------------------------------------------
    # Navigation and overlays
    # -------------------------------------------------------------------------

    def parse_nav(self) -> ast.Nav:
        loc = self.loc()
        self.expect_keyword("nav")
        props = self.parse_inline_props()
        self.expect_punct(":")

        items = []
        for _ in self.block_lines():
            self.expect_keyword("link")
            label = self.expect_string()
            link_props = self.parse_inline_props()
            items.append(
                ast.NavLink(
                    label=label,
                    href=self.pop_string(link_props, "href") or "#",
                    icon=self.pop_string(link_props, "icon"),
                )
            )
        return ast.Nav(items=items, props=props, loc=loc)

    def parse_upload(self) -> ast.Upload:
        loc = self.loc()
        self.expect_keyword("upload")
        name = self.expect_name()

        accept = None
        max_size = None
        preview = False
        action = None
        if self.match_punct(":"):
            self.advance()
            for token in self.block_lines():
                key = self.expect_name()
                if key == "preview":
                    # ``preview`` alone, or ``preview: true|false``
                    preview = True
                    if self.match_punct(":"):
                        self.advance()
                        preview = self.expect(TokenType.KEYWORD).value == "true"
                    continue

                self.expect_punct(":")
                if key == "accept":
                    accept = self.expect_string()
                elif key == "maxSize":
                    max_size = float(self.expect(TokenType.NUMBER).value)
                elif key == "action":
                    action = self.parse_assignment()
                else:
                    raise self.error(f"Unknown upload option '{key}'", token)

        return ast.Upload(
            name=name, accept=accept, max_size=max_size, preview=preview, action=action, loc=loc
        )

    def parse_modal(self) -> ast.Modal:
        loc = self.loc()
        self.expect_keyword("modal")
        name = self.expect_name()
        props = self.parse_inline_props()
        title = self.pop_string(props, "title") or name
        trigger = self.pop_string(props, "trigger")
        self.expect_punct(":")
        return ast.Modal(name=name, title=title, trigger=trigger, body=self.parse_ui_block(), loc=loc)

    def parse_toast(self) -> ast.Toast:
        """Parse ``toast message type=kind duration=ms``."""
        loc = self.loc()
        self.expect_keyword("toast")
        message = self.parse_expression()
        props = self.parse_inline_props()
        return ast.Toast(
            message=message,
            toast_type=self.pop_word(props, "type") or "info",
            duration=self.pop_number(props, "duration"),
            loc=loc,
        )
