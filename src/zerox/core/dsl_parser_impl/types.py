"""
Type parsing for the 0x DSL.

Handles the type annotations of state, prop, store, param and model field
declarations, and the right-hand side of ``type`` declarations.
"""

from typing import TYPE_CHECKING, Any

from .. import ast
from ..lexer import TokenType


class TypeParserMixin:
    """
    Mixin providing type expression parsing.

    Note: This mixin expects to be combined with BaseParser via multiple inheritance.
    """

    if TYPE_CHECKING:
        advance: Any
        match: Any
        match_keyword: Any
        match_punct: Any
        match_op: Any
        expect_punct: Any
        expect_name: Any
        expect_string: Any
        loc: Any

    def parse_type_expr(self) -> ast.TypeExpr:
        """
        Parse a type annotation.

        Examples:
            int
            list[Todo]
            map[str, int]
            { id: int, title: str }
            User?
        """
        loc = self.loc()
        type_expr: ast.TypeExpr

        # list[T]; a bare ``list`` holds anything
        if self.match_keyword("list"):
            self.advance()
            if self.match_punct("["):
                self.advance()
                item_type = self.parse_type_expr()
                self.expect_punct("]")
            else:
                item_type = ast.PrimitiveType(name="any", loc=loc)
            type_expr = ast.ListType(item_type=item_type, loc=loc)

        # map[K, V]
        elif self.match_keyword("map"):
            self.advance()
            self.expect_punct("[")
            key_type = self.parse_type_expr()
            self.expect_punct(",")
            value_type = self.parse_type_expr()
            self.expect_punct("]")
            type_expr = ast.MapType(key_type=key_type, value_type=value_type, loc=loc)

        # set[T]
        elif self.match_keyword("set"):
            self.advance()
            self.expect_punct("[")
            item_type = self.parse_type_expr()
            self.expect_punct("]")
            type_expr = ast.SetType(item_type=item_type, loc=loc)

        elif self.match_punct("{"):
            type_expr = self.parse_object_type()

        else:
            name = self.expect_name()
            if name in ast.PRIMITIVE_TYPES:
                type_expr = ast.PrimitiveType(name=name, loc=loc)
            else:
                type_expr = ast.NamedType(name=name, loc=loc)

        if self.match_punct("?"):
            self.advance()
            type_expr = ast.NullableType(inner=type_expr, loc=loc)
        return type_expr

    def parse_object_type(self) -> ast.ObjectType:
        """Parse ``{ name: T, ... }``."""
        loc = self.loc()
        self.expect_punct("{")
        fields = []
        while not self.match_punct("}"):
            name = self.expect_name()
            self.expect_punct(":")
            fields.append(ast.ObjectTypeField(name=name, field_type=self.parse_type_expr()))
            if self.match_punct(","):
                self.advance()
        self.expect_punct("}")
        return ast.ObjectType(fields=fields, loc=loc)

    def parse_type_definition(self) -> ast.TypeExpr:
        """
        Parse the right-hand side of ``type Name = ...``.

        A leading string starts a string union: ``"low" | "medium" | "high"``.
        """
        if not self.match(TokenType.STRING):
            return self.parse_type_expr()

        loc = self.loc()
        members = [self.expect_string()]
        while self.match_op("|"):
            self.advance()
            members.append(self.expect_string())
        return ast.UnionType(members=members, loc=loc)
