"""
Expression parser mixin for the 0x DSL.

Precedence, loosest first:

    a => b                      arrow function
    c ? a : b                   ternary
    ||   &&   == !=   > < >= <=   + -   * / %
    !x   -x   await x   old(x)  unary
    a.b   a[i]   f(x, y)   f(key: v)   postfix

Assignments (``= += -= *= /=``) are only parsed where a statement or an
action is expected. Strings containing ``{expr}`` segments become template
expressions.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from .. import ast
from ..errors import LexError
from ..lexer import Token, TokenType, tokenize

# Keywords that always start a construct and so never act as identifiers
STRUCTURAL_KEYWORDS = frozenset(
    {
        "page", "component", "app", "state", "derived", "prop", "type", "fn",
        "async", "layout", "if", "elif", "else", "for", "show", "hide", "on",
        "watch", "check", "requires", "ensures", "store", "use", "js",
        "import", "from", "return", "let",
        "model", "form", "field", "table", "column", "submit", "validate",
        "permission",
        "auth", "guard", "role", "chart", "stat", "realtime", "route", "nav",
        "upload", "modal",
        "deploy", "env", "docker", "ci", "domain", "cdn", "monitor", "backup",
        "endpoint", "middleware", "queue", "cron", "cache", "migrate",
        "webhook", "storage",
        "test", "e2e", "mock", "fixture", "i18n", "locale", "rtl",
    }
)  # fmt: skip

# Binary operators grouped by precedence, loosest first
BINARY_PRECEDENCE = (
    ("||",),
    ("&&",),
    ("==", "!="),
    (">", "<", ">=", "<="),
    ("+", "-"),
    ("*", "/", "%"),
)

ASSIGNMENT_OPERATORS = ("=", "+=", "-=", "*=", "/=")


class ExpressionParserMixin:
    """Parser mixin for expressions."""

    if TYPE_CHECKING:
        file: Any
        source: Any
        current_token: Any
        peek_token: Any
        advance: Any
        match: Any
        match_keyword: Any
        match_punct: Any
        match_op: Any
        expect_punct: Any
        expect_name: Any
        token_loc: Any
        loc: Any
        error: Any
        unexpected: Any
        skip_newlines: Any

    def parse_expression(self) -> ast.Expr:
        """Parse a full expression, including a trailing arrow function."""
        expr = self.parse_ternary()
        if self.match_op("=>"):
            self.advance()
            params = self._arrow_params(expr)
            body = self.parse_expression()
            return ast.ArrowFunction(params=params, body=body, loc=expr.loc)
        return expr

    def _arrow_params(self, expr: ast.Expr) -> list[str]:
        if isinstance(expr, ast.Identifier):
            return [expr.name]
        if isinstance(expr, ast.ArrayExpr) and all(
            isinstance(element, ast.Identifier) for element in expr.elements
        ):
            return [element.name for element in expr.elements]
        raise self.error("Invalid arrow function parameters")

    def parse_assignment(self) -> ast.Expr:
        """Parse ``target op value`` (right-associative) or a plain expression."""
        target = self.parse_expression()
        if self.match_op(*ASSIGNMENT_OPERATORS):
            operator = self.advance().value
            value = self.parse_assignment()
            return ast.AssignmentExpr(target=target, operator=operator, value=value, loc=target.loc)
        return target

    def parse_ternary(self) -> ast.Expr:
        condition = self.parse_binary()
        if not self.match_punct("?"):
            return condition
        self.advance()
        consequent = self.parse_expression()
        self.expect_punct(":")
        alternate = self.parse_expression()
        return ast.TernaryExpr(
            condition=condition, consequent=consequent, alternate=alternate, loc=condition.loc
        )

    def parse_binary(self, level: int = 0) -> ast.Expr:
        """Parse left-associative binary operators from ``level`` upwards."""
        if level == len(BINARY_PRECEDENCE):
            return self.parse_unary()

        left = self.parse_binary(level + 1)
        while self.match_op(*BINARY_PRECEDENCE[level]):
            operator = self.advance().value
            right = self.parse_binary(level + 1)
            left = ast.BinaryExpr(operator=operator, left=left, right=right, loc=left.loc)
        return left

    def parse_unary(self) -> ast.Expr:
        loc = self.loc()

        if self.match_op("!", "-"):
            operator = self.advance().value
            return ast.UnaryExpr(operator=operator, operand=self.parse_unary(), loc=loc)

        if self.match_keyword("await"):
            self.advance()
            return ast.AwaitExpr(argument=self.parse_unary(), loc=loc)

        if self.match_keyword("old"):
            self.advance()
            self.expect_punct("(")
            argument = self.parse_expression()
            self.expect_punct(")")
            return ast.OldExpr(argument=argument, loc=loc)

        return self.parse_postfix()

    def parse_postfix(self) -> ast.Expr:
        expr = self.parse_primary()

        while True:
            if self.match_punct("."):
                self.advance()
                attribute = self.expect_name()
                expr = ast.MemberExpr(target=expr, attribute=attribute, loc=expr.loc)
            elif self.match_punct("["):
                self.advance()
                index = self.parse_expression()
                self.expect_punct("]")
                expr = ast.IndexExpr(target=expr, index=index, loc=expr.loc)
            elif self.match_punct("("):
                self.advance()
                expr = ast.CallExpr(callee=expr, args=self._parse_call_args(), loc=expr.loc)
            else:
                return expr

    def _parse_call_args(self) -> list[ast.Expr]:
        """
        Parse call arguments after ``(`` up to and including ``)``.

        ``key: value`` arguments are gathered into a single trailing object,
        so ``fetch(url, method: "POST")`` passes ``{method: "POST"}`` last.
        """
        args: list[ast.Expr] = []
        while not self.match_punct(")"):
            if self._at_property_key():
                args.append(self._parse_named_args())
                break
            args.append(self.parse_expression())
            if self.match_punct(","):
                self.advance()
            elif not self.match_punct(")"):
                raise self.unexpected("',' or ')'")
        self.expect_punct(")")
        return args

    def _at_property_key(self) -> bool:
        following = self.peek_token()
        return (
            self.match(TokenType.IDENTIFIER, TokenType.KEYWORD)
            and following.type == TokenType.PUNCTUATION
            and following.value == ":"
        )

    def _parse_named_args(self) -> ast.ObjectExpr:
        loc = self.loc()
        properties = []
        while not self.match_punct(")"):
            key = self.expect_name()
            self.expect_punct(":")
            properties.append(ast.ObjectProperty(key=key, value=self.parse_expression()))
            if self.match_punct(","):
                self.advance()
            elif not self.match_punct(")"):
                raise self.unexpected("',' or ')'")
        return ast.ObjectExpr(properties=properties, loc=loc)

    def parse_primary(self) -> ast.Expr:
        token = self.current_token()
        loc = self.token_loc(token)

        if token.type == TokenType.NUMBER:
            self.advance()
            return ast.NumberLiteral(value=float(token.value), loc=loc)

        if token.type == TokenType.STRING:
            self.advance()
            return self.parse_string_value(token)

        if token.type == TokenType.COLOR:
            self.advance()
            return ast.StringLiteral(value=token.value, loc=loc)

        if token.type == TokenType.KEYWORD and token.value in ("true", "false"):
            self.advance()
            return ast.BooleanLiteral(value=token.value == "true", loc=loc)

        if token.type == TokenType.KEYWORD and token.value == "null":
            self.advance()
            return ast.NullLiteral(loc=loc)

        if self._at_identifier():
            self.advance()
            return ast.Identifier(name=token.value, loc=loc)

        if self.match_punct("("):
            return self._parse_parenthesized()

        if self.match_punct("["):
            return self.parse_array()

        if self.match_punct("{"):
            return self.parse_object()

        raise self.unexpected("expression")

    def _at_identifier(self) -> bool:
        token = self.current_token()
        if token.type == TokenType.IDENTIFIER:
            return True
        return token.type == TokenType.KEYWORD and token.value not in STRUCTURAL_KEYWORDS

    def _parse_parenthesized(self) -> ast.Expr:
        """Parse ``(e)``, the empty tuple ``()`` or a tuple ``(a, b)``."""
        loc = self.loc()
        self.expect_punct("(")
        if self.match_punct(")"):
            self.advance()
            return ast.ArrayExpr(elements=[], loc=loc)

        first = self.parse_expression()
        if not self.match_punct(","):
            self.expect_punct(")")
            return first

        elements = [first]
        while self.match_punct(","):
            self.advance()
            if self.match_punct(")"):
                break
            elements.append(self.parse_expression())
        self.expect_punct(")")
        return ast.ArrayExpr(elements=elements, loc=loc)

    def parse_array(self) -> ast.ArrayExpr:
        loc = self.loc()
        self.expect_punct("[")
        elements: list[ast.Expr] = []
        while not self.match_punct("]"):
            elements.append(self.parse_expression())
            if self.match_punct(","):
                self.advance()
            elif not self.match_punct("]"):
                raise self.unexpected("',' or ']'")
        self.expect_punct("]")
        return ast.ArrayExpr(elements=elements, loc=loc)

    def parse_object(self) -> ast.ObjectExpr:
        """Parse ``{key: value, shorthand}``; keys may be names or strings."""
        loc = self.loc()
        self.expect_punct("{")
        properties = []
        self.skip_newlines()
        while not self.match_punct("}"):
            key_token = self.current_token()
            if key_token.type == TokenType.STRING:
                key = self.advance().value
            else:
                key = self.expect_name()

            if self.match_punct(":"):
                self.advance()
                value = self.parse_expression()
            else:
                value = ast.Identifier(name=key, loc=self.token_loc(key_token))
            properties.append(ast.ObjectProperty(key=key, value=value))

            self.skip_newlines()
            if self.match_punct(","):
                self.advance()
                self.skip_newlines()
            elif not self.match_punct("}"):
                raise self.unexpected("',' or '}'")
        self.expect_punct("}")
        return ast.ObjectExpr(properties=properties, loc=loc)

    def parse_atomic(self) -> ast.Expr:
        """
        Parse a prop value or a button label.

        Names may be dotted but are never called, so ``size=lg`` or
        ``value=user.name`` stop before whatever follows on the line.
        ``{expr}`` wraps an arbitrary expression.
        """
        token = self.current_token()
        loc = self.token_loc(token)

        if token.type == TokenType.STRING:
            self.advance()
            return self.parse_string_value(token)

        if token.type == TokenType.NUMBER:
            self.advance()
            return ast.NumberLiteral(value=float(token.value), loc=loc)

        if token.type == TokenType.COLOR:
            self.advance()
            return ast.StringLiteral(value=token.value, loc=loc)

        if token.type == TokenType.KEYWORD and token.value in ("true", "false"):
            self.advance()
            return ast.BooleanLiteral(value=token.value == "true", loc=loc)

        if self._at_identifier():
            self.advance()
            expr: ast.Expr = ast.Identifier(name=token.value, loc=loc)
            while self.match_punct("."):
                self.advance()
                expr = ast.MemberExpr(target=expr, attribute=self.expect_name(), loc=loc)
            return expr

        if self.match_punct("["):
            return self.parse_array()

        if self.match_punct("{"):
            self.advance()
            inner = self.parse_expression()
            self.expect_punct("}")
            return ast.BracedExpr(expression=inner, loc=loc)

        return self.parse_expression()

    # -------------------------------------------------------------------------
    # Template strings
    # -------------------------------------------------------------------------

    def parse_string_value(self, token: Token) -> ast.Expr:
        """
        Turn a STRING token into a string literal or a template.

        Each ``{...}`` segment is parsed as an expression. Empty braces and
        an unmatched ``{`` are kept as literal text.
        """
        text = token.value
        loc = self.token_loc(token)
        if "{" not in text or "}" not in text:
            return ast.StringLiteral(value=text, loc=loc)

        parts: list[ast.Expr] = []
        literal = ""
        pos = 0
        while pos < len(text):
            if text[pos] != "{":
                literal += text[pos]
                pos += 1
                continue

            end = self._matching_brace(text, pos)
            segment = text[pos + 1 : end] if end is not None else ""
            if end is None or not segment.strip():
                literal += text[pos] if end is None else text[pos : end + 1]
                pos += 1 if end is None else end + 1
                continue

            if literal:
                parts.append(ast.StringLiteral(value=literal, loc=loc))
                literal = ""
            parts.append(self._parse_template_segment(segment, token, pos + 1))
            pos = end + 1

        if literal:
            parts.append(ast.StringLiteral(value=literal, loc=loc))

        if all(isinstance(part, ast.StringLiteral) for part in parts):
            return ast.StringLiteral(value=text, loc=loc)
        return ast.TemplateExpr(parts=parts, loc=loc)

    @staticmethod
    def _matching_brace(text: str, start: int) -> int | None:
        depth = 0
        for index in range(start, len(text)):
            if text[index] == "{":
                depth += 1
            elif text[index] == "}":
                depth -= 1
                if depth == 0:
                    return index
        return None

    def _parse_template_segment(self, segment: str, token: Token, offset: int) -> ast.Expr:
        """Parse one ``{...}`` segment, reporting positions inside the string."""
        stripped = segment.lstrip()
        # Token column of the opening quote, plus one for the quote itself
        base_column = token.column + 1 + offset + (len(segment) - len(stripped))

        try:
            inner_tokens = tokenize(stripped.rstrip())
        except LexError as exc:
            raise self.error(
                f"Invalid template expression: {exc.message}",
                Token(token.type, token.value, token.line, base_column + exc.column - 1),
            ) from exc

        remapped = [
            Token(t.type, t.value, token.line, base_column + t.column - 1) for t in inner_tokens
        ]
        sub_parser = type(self)(remapped, self.file, self.source)
        expr = sub_parser.parse_expression()
        if not sub_parser.match(TokenType.NEWLINE, TokenType.EOF):
            raise sub_parser.unexpected("'}' to close the template expression")
        return expr
