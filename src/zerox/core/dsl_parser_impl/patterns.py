"""
UI pattern parsing: higher-level building blocks that expand to whole widgets.

DSL Syntax:

    crud Todo paginate=20
    list kanban tasks group=status:
      text item.title
    drawer settings side=right:
      toggle darkMode
    command "ctrl+k"
    confirm "Delete this item?" danger confirm="Delete"
    pay checkout provider="stripe" price=plan.price
    media video intro.url autoplay
    search global products:
      text result.name
    social like post.id
    hero:
      text "Build faster"
    pricing:
      plans: tiers
    animate enter fade=300:
      text "Hello"
    gesture swipe card -> dismiss()
    ai .chat model="gpt":
      text "Ask me anything"
    mobile hide:
      breadcrumb
    responsive tablet show:
      text "Tablet only"

Patterns that take a body use ``props [: block]``; those without one use an
optional ``: props block``.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from .. import ast
from ..lexer import TokenType

LIST_TYPES = ("grid", "timeline", "kanban", "tree", "virtual")
PAY_TYPES = ("checkout", "pricing", "portal", "buyButton")
MEDIA_TYPES = ("gallery", "video", "audio", "carousel")
NOTIFICATION_TYPES = ("center", "push", "email")
SEARCH_TYPES = ("global", "inline")
SOCIAL_TYPES = ("like", "bookmark", "comments", "follow", "share", "feed")
ADMIN_TYPES = ("dashboard", "cms")
ANIMATION_TYPES = ("enter", "exit", "scroll", "count", "type", "confetti")
GESTURE_TYPES = ("drag", "pinch", "longPress", "doubleTap", "swipe")
AI_TYPES = ("generate", "chat", "search", "vision", "recommend", "translate", "summarize")
BREAKPOINT_KEYWORDS = ("mobile", "desktop", "tablet")


class PatternParserMixin:
    """Parser mixin for UI patterns."""

    if TYPE_CHECKING:
        advance: Any
        loc: Any
        peek_token: Any
        match: Any
        match_keyword: Any
        match_punct: Any
        match_op: Any
        expect_keyword: Any
        expect_name: Any
        expect_string: Any
        parse_variant: Any
        parse_inline_props: Any
        parse_optional_props_block: Any
        pop_string: Any
        parse_expression: Any
        parse_assignment: Any
        parse_ui_block: Any

    def _parse_props_and_body(self) -> tuple[dict[str, ast.Expr], list[ast.UINode]]:
        """Parse ``props [: <UI block>]``."""
        props = self.parse_inline_props()
        body: list[ast.UINode] = []
        if self.match_punct(":"):
            self.advance()
            body = self.parse_ui_block()
        return props, body

    # -------------------------------------------------------------------------
    # Data views
    # -------------------------------------------------------------------------

    def parse_crud(self) -> ast.Crud:
        loc = self.loc()
        self.expect_keyword("crud")
        model = self.expect_name()
        props, body = self._parse_props_and_body()
        return ast.Crud(model=model, props=props, body=body, loc=loc)

    def parse_list(self) -> ast.List:
        loc = self.loc()
        self.expect_keyword("list")
        list_type = self.parse_variant(LIST_TYPES, "grid")
        data_source = self.parse_expression()
        props, body = self._parse_props_and_body()
        return ast.List(list_type=list_type, data_source=data_source, props=props, body=body, loc=loc)

    def parse_drawer(self) -> ast.Drawer:
        loc = self.loc()
        self.expect_keyword("drawer")
        name = self.expect_name()
        props, body = self._parse_props_and_body()
        return ast.Drawer(name=name, props=props, body=body, loc=loc)

    def parse_command(self) -> ast.Command:
        loc = self.loc()
        self.expect_keyword("command")
        shortcut = "ctrl+k"
        if self.match(TokenType.STRING):
            shortcut = self.advance().value
        return ast.Command(shortcut=shortcut, props=self.parse_optional_props_block(), loc=loc)

    def parse_confirm(self) -> ast.Confirm:
        """Parse ``confirm "message" [danger] [confirm="..."] [cancel="..."] [description="..."]``."""
        loc = self.loc()
        self.expect_keyword("confirm")
        message = self.expect_string()
        props = self.parse_inline_props()

        danger = props.pop("danger", None)
        return ast.Confirm(
            message=message,
            description=self.pop_string(props, "description"),
            confirm_label=self.pop_string(props, "confirm") or "Confirm",
            cancel_label=self.pop_string(props, "cancel") or "Cancel",
            danger=isinstance(danger, ast.BooleanLiteral) and danger.value,
            props=props,
            loc=loc,
        )

    # -------------------------------------------------------------------------
    # Commerce, media, social
    # -------------------------------------------------------------------------

    def parse_pay(self) -> ast.Pay:
        loc = self.loc()
        self.expect_keyword("pay")
        pay_type = self.parse_variant(PAY_TYPES, "checkout")
        props, body = self._parse_props_and_body()
        provider = self.pop_string(props, "provider") or "stripe"
        return ast.Pay(pay_type=pay_type, provider=provider, props=props, body=body, loc=loc)

    def parse_cart(self) -> ast.Cart:
        loc = self.loc()
        self.expect_keyword("cart")
        return ast.Cart(props=self.parse_optional_props_block(), loc=loc)

    def parse_media(self) -> ast.Media:
        """Parse ``media|gallery [kind] src props``."""
        loc = self.loc()
        self.advance()
        media_type = self.parse_variant(MEDIA_TYPES, "gallery")
        src = self.parse_expression()
        return ast.Media(media_type=media_type, src=src, props=self.parse_inline_props(), loc=loc)

    def parse_notification(self) -> ast.Notification:
        loc = self.loc()
        self.expect_keyword("notification")
        notification_type = self.parse_variant(NOTIFICATION_TYPES, "center")
        return ast.Notification(
            notification_type=notification_type,
            props=self.parse_optional_props_block(),
            loc=loc,
        )

    def parse_search(self) -> ast.Search:
        loc = self.loc()
        self.expect_keyword("search")
        search_type = self.parse_variant(SEARCH_TYPES, "global")

        # A word followed by '=' is the first prop, not the target
        target = ""
        following = self.peek_token()
        if self.match(TokenType.IDENTIFIER, TokenType.KEYWORD) and not (
            following.type == TokenType.OPERATOR and following.value == "="
        ):
            target = self.advance().value

        props, body = self._parse_props_and_body()
        return ast.Search(search_type=search_type, target=target, props=props, body=body, loc=loc)

    def parse_filter(self) -> ast.Filter:
        loc = self.loc()
        self.expect_keyword("filter")
        target = self.expect_name()
        return ast.Filter(target=target, props=self.parse_optional_props_block(), loc=loc)

    def parse_social(self) -> ast.Social:
        loc = self.loc()
        self.expect_keyword("social")
        social_type = self.parse_variant(SOCIAL_TYPES, "like")
        target = self.parse_expression()
        props, body = self._parse_props_and_body()
        return ast.Social(social_type=social_type, target=target, props=props, body=body, loc=loc)

    def parse_profile(self) -> ast.Profile:
        loc = self.loc()
        self.expect_keyword("profile")
        user = self.parse_expression()
        props, body = self._parse_props_and_body()
        return ast.Profile(user=user, props=props, body=body, loc=loc)

    # -------------------------------------------------------------------------
    # Landing page sections
    # -------------------------------------------------------------------------

    def parse_hero(self) -> ast.Hero:
        loc = self.loc()
        self.expect_keyword("hero")
        props, body = self._parse_props_and_body()
        return ast.Hero(props=props, body=body, loc=loc)

    def parse_features(self) -> ast.Features:
        loc = self.loc()
        self.expect_keyword("features")
        return ast.Features(props=self.parse_optional_props_block(), loc=loc)

    def parse_pricing(self) -> ast.Pricing:
        loc = self.loc()
        self.expect_keyword("pricing")
        return ast.Pricing(props=self.parse_optional_props_block(), loc=loc)

    def parse_faq(self) -> ast.Faq:
        loc = self.loc()
        self.expect_keyword("faq")
        return ast.Faq(props=self.parse_optional_props_block(), loc=loc)

    def parse_testimonials(self) -> ast.Testimonial:
        loc = self.loc()
        self.expect_keyword("testimonials")
        return ast.Testimonial(props=self.parse_optional_props_block(), loc=loc)

    def parse_footer(self) -> ast.Footer:
        loc = self.loc()
        self.expect_keyword("footer")
        return ast.Footer(props=self.parse_optional_props_block(), loc=loc)

    # -------------------------------------------------------------------------
    # Admin, meta, motion
    # -------------------------------------------------------------------------

    def parse_admin(self) -> ast.Admin:
        loc = self.loc()
        self.expect_keyword("admin")
        admin_type = self.parse_variant(ADMIN_TYPES, "dashboard")
        props, body = self._parse_props_and_body()
        return ast.Admin(admin_type=admin_type, props=props, body=body, loc=loc)

    def parse_seo(self) -> ast.Seo:
        loc = self.loc()
        self.expect_keyword("seo")
        return ast.Seo(props=self.parse_optional_props_block(), loc=loc)

    def parse_a11y(self) -> ast.A11y:
        loc = self.loc()
        self.expect_keyword("a11y")
        return ast.A11y(props=self.parse_optional_props_block(), loc=loc)

    def parse_animate(self) -> ast.Animate:
        loc = self.loc()
        self.expect_keyword("animate")
        animation_type = self.parse_variant(ANIMATION_TYPES, "enter")
        props, body = self._parse_props_and_body()
        return ast.Animate(animation_type=animation_type, props=props, body=body, loc=loc)

    def parse_gesture(self) -> ast.Gesture:
        """Parse ``gesture [kind] target [-> action]``."""
        loc = self.loc()
        self.expect_keyword("gesture")
        gesture_type = self.parse_variant(GESTURE_TYPES, "drag")
        target = self.parse_expression()
        if self.match_op("->"):
            self.advance()
            action = self.parse_assignment()
        else:
            action = ast.NullLiteral(loc=loc)
        return ast.Gesture(gesture_type=gesture_type, target=target, action=action, loc=loc)

    def parse_ai(self) -> ast.Ai:
        """Parse ``ai [.kind | kind] props [: block]``."""
        loc = self.loc()
        self.expect_keyword("ai")
        ai_type = "chat"
        if self.match(TokenType.STYLE_CLASS):
            ai_type = self.advance().value[1:]
        elif self.match_punct("."):
            self.advance()
            ai_type = self.expect_name()
        else:
            ai_type = self.parse_variant(AI_TYPES, ai_type)
        props, body = self._parse_props_and_body()
        return ast.Ai(ai_type=ai_type, props=props, body=body, loc=loc)

    def parse_breadcrumb(self) -> ast.Breadcrumb:
        loc = self.loc()
        self.expect_keyword("breadcrumb")
        return ast.Breadcrumb(props=self.parse_inline_props(), loc=loc)

    def parse_responsive(self) -> ast.Responsive:
        """
        Parse ``responsive <breakpoint> [show|hide] [: block]``.

        ``mobile``, ``desktop`` and ``tablet`` are shorthands for the
        matching breakpoint.
        """
        loc = self.loc()
        if self.match_keyword(*BREAKPOINT_KEYWORDS):
            breakpoint = self.advance().value
        else:
            self.expect_keyword("responsive")
            breakpoint = self.expect_name()

        action = self.parse_variant(("show", "hide"), "show")
        body: list[ast.UINode] = []
        if self.match_punct(":"):
            self.advance()
            body = self.parse_ui_block()
        return ast.Responsive(breakpoint=breakpoint, action=action, body=body, loc=loc)
