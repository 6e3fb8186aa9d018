"""
Base parser class for the 0x DSL.

Provides token navigation, matching, error generation and the small
block/prop helpers shared by all parser mixins.
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator
from pathlib import Path
from typing import TYPE_CHECKING, Any

from ..ast import BooleanLiteral, Identifier, NumberLiteral, SourceLocation, StringLiteral
from ..errors import ParseError, extract_snippet, make_parse_error
from ..lexer import Token, TokenType
from ..suggestions import format_suggestion

if TYPE_CHECKING:
    from ..ast import Expr

# Tokens that end the current logical line
LINE_END_TYPES = (TokenType.NEWLINE, TokenType.EOF, TokenType.DEDENT)

# Tokens usable as names: keywords double as identifiers in name positions
NAME_TYPES = (TokenType.IDENTIFIER, TokenType.KEYWORD)


class BaseParser:
    """
    Base parser class with token manipulation utilities.

    This class provides the foundation for recursive descent parsing,
    including token navigation, matching, and error generation.
    """

    if TYPE_CHECKING:
        parse_expression: Any
        parse_atomic: Any

    def __init__(self, tokens: list[Token], file: Path | None = None, source: str | None = None):
        """
        Initialize parser.

        Args:
            tokens: List of tokens from lexer
            file: Optional source file path (for error reporting)
            source: Optional source text, used for error snippets
        """
        self.tokens = tokens
        self.file = file
        self.source = source
        self.pos = 0

    # -------------------------------------------------------------------------
    # Token navigation
    # -------------------------------------------------------------------------

    def current_token(self) -> Token:
        """Get current token."""
        if self.pos >= len(self.tokens):
            return self.tokens[-1]  # Return EOF
        return self.tokens[self.pos]

    def peek_token(self, offset: int = 1) -> Token:
        """Peek ahead at token."""
        pos = self.pos + offset
        if pos >= len(self.tokens):
            return self.tokens[-1]  # Return EOF
        return self.tokens[pos]

    def advance(self) -> Token:
        """Consume and return current token."""
        token = self.current_token()
        if token.type != TokenType.EOF:
            self.pos += 1
        return token

    def match(self, *token_types: TokenType) -> bool:
        """Check if current token matches any of the given types."""
        return self.current_token().type in token_types

    def match_value(self, token_type: TokenType, *values: str) -> bool:
        """Check the current token's type and, when given, its value."""
        token = self.current_token()
        return token.type == token_type and (not values or token.value in values)

    def match_keyword(self, *words: str) -> bool:
        return self.match_value(TokenType.KEYWORD, *words)

    def match_punct(self, *chars: str) -> bool:
        return self.match_value(TokenType.PUNCTUATION, *chars)

    def match_op(self, *ops: str) -> bool:
        return self.match_value(TokenType.OPERATOR, *ops)

    def match_word(self, *words: str) -> bool:
        """Match an identifier or keyword with one of the given values."""
        token = self.current_token()
        return token.type in NAME_TYPES and token.value in words

    def at_line_end(self) -> bool:
        return self.match(*LINE_END_TYPES)

    def skip_newlines(self) -> None:
        """Skip any NEWLINE tokens."""
        while self.match(TokenType.NEWLINE):
            self.advance()

    def skip_newlines_before(self, word: str) -> bool:
        """
        Skip blank lines when the next code token is the keyword ``word``.

        Used for ``elif``/``else`` arms that follow a single-line suite.
        """
        offset = 0
        while self.peek_token(offset).type == TokenType.NEWLINE:
            offset += 1
        following = self.peek_token(offset)
        if following.type == TokenType.KEYWORD and following.value == word:
            self.skip_newlines()
            return True
        return False

    # -------------------------------------------------------------------------
    # Locations and errors
    # -------------------------------------------------------------------------

    @staticmethod
    def token_loc(token: Token) -> SourceLocation:
        return SourceLocation(line=token.line, column=token.column)

    def loc(self) -> SourceLocation:
        """Location of the current token."""
        return self.token_loc(self.current_token())

    def error(self, message: str, token: Token | None = None) -> ParseError:
        """Build a ParseError at ``token`` (default: the current token)."""
        token = token or self.current_token()
        snippet = None
        if self.file is not None and self.source is not None:
            snippet = extract_snippet(self.source, token.line)
        return make_parse_error(message, token.line, token.column, file=self.file, snippet=snippet)

    def unexpected(self, expected: str) -> ParseError:
        """
        Report the current token as not matching ``expected``.

        Stray indentation, a block or line that ends early and unknown
        characters each get their own wording.
        """
        token = self.current_token()
        if token.type == TokenType.INDENT:
            return self.error("Unexpected indentation")
        if token.type in (TokenType.DEDENT, TokenType.EOF):
            return self.error(f"Unexpected end of block: expected {expected}")
        if token.type == TokenType.NEWLINE:
            return self.error(f"Unexpected end of line: expected {expected}")
        if token.type == TokenType.ERROR:
            return self.error(f"Unexpected character '{token.value}'")
        return self.error(f"Expected {expected}, got {token.type.value} '{token.value}'")

    def unknown_keyword(self, message: str, candidates: Iterable[str]) -> ParseError:
        """
        Report a word that no construct starts with, adding a suggestion.

        Suggestions are only offered for word tokens; other tokens fall back
        to the generic messages of ``unexpected``.
        """
        token = self.current_token()
        if token.type not in NAME_TYPES:
            if token.type in (TokenType.INDENT, TokenType.ERROR):
                return self.unexpected("a declaration")
            return self.error(message)
        suggestion = format_suggestion(token.value, candidates)
        if suggestion:
            message = f"{message}. {suggestion}"
        return self.error(message)

    # -------------------------------------------------------------------------
    # Expectations
    # -------------------------------------------------------------------------

    def expect(self, token_type: TokenType, value: str | None = None) -> Token:
        """
        Expect a specific token type (and value) and consume it.

        Raises:
            ParseError: If token doesn't match
        """
        token = self.current_token()
        if token.type != token_type or (value is not None and token.value != value):
            expected = token_type.value if value is None else f"{token_type.value} '{value}'"
            raise self.unexpected(expected)
        return self.advance()

    def expect_keyword(self, word: str) -> Token:
        return self.expect(TokenType.KEYWORD, word)

    def expect_punct(self, char: str) -> Token:
        return self.expect(TokenType.PUNCTUATION, char)

    def expect_op(self, op: str) -> Token:
        return self.expect(TokenType.OPERATOR, op)

    def expect_string(self) -> str:
        return self.expect(TokenType.STRING).value

    def expect_name(self) -> str:
        """Expect an identifier, accepting keywords used as names."""
        if self.match(*NAME_TYPES):
            return self.advance().value
        raise self.unexpected("name")

    def parse_dotted_name(self) -> str:
        """Parse ``a`` or ``a.b.c``."""
        parts = [self.expect_name()]
        while self.match_punct("."):
            self.advance()
            parts.append(self.expect_name())
        return ".".join(parts)

    def parse_name_or_string(self) -> str:
        if self.match(TokenType.STRING):
            return self.advance().value
        return self.expect_name()

    def parse_variant(self, options: Iterable[str], default: str) -> str:
        """Consume an optional sub-kind word such as ``bar`` in ``chart bar sales:``."""
        if self.match_word(*options):
            return self.advance().value
        return default

    def parse_name_list(self) -> list[str]:
        """Parse ``a, b, c`` up to the end of the line."""
        names = []
        while not self.at_line_end():
            names.append(self.expect_name())
            if self.match_punct(","):
                self.advance()
        return names

    # -------------------------------------------------------------------------
    # Blocks
    # -------------------------------------------------------------------------

    def block_lines(self, include_comments: bool = False) -> Iterator[Token]:
        """
        Iterate over the lines of an indented block.

        Yields the first token of every line; the caller parses the line
        before asking for the next one. Comment lines are skipped unless
        ``include_comments`` is set. Nothing is yielded when no block
        follows.

        Raises:
            ParseError: On indentation that no construct opened
        """
        self.skip_newlines()
        if not self.match(TokenType.INDENT):
            return
        self.advance()

        while True:
            self.skip_newlines()
            if self.match(TokenType.DEDENT):
                self.advance()
                return
            if self.match(TokenType.EOF):
                return
            if self.match(TokenType.INDENT):
                raise self.error("Unexpected indentation")
            if self.match(TokenType.COMMENT) and not include_comments:
                self.advance()
                continue
            yield self.current_token()

    # -------------------------------------------------------------------------
    # Props
    # -------------------------------------------------------------------------

    def parse_prop_entry(self, props: dict[str, Expr]) -> bool:
        """
        Parse one ``name``, ``name=value`` or ``@name=value`` prop into ``props``.

        A bare name is a ``true`` flag. Stray colors are skipped.

        Returns:
            False when the current token cannot start a prop
        """
        token = self.current_token()
        if token.type in NAME_TYPES:
            self.advance()
            props[token.value] = self._parse_prop_value(token)
            return True
        if token.type == TokenType.AT_KEYWORD:
            self.advance()
            props["@" + token.value] = self._parse_prop_value(token)
            return True
        if token.type == TokenType.COLOR:
            self.advance()
            return True
        return False

    def _parse_prop_value(self, name_token: Token) -> Expr:
        if self.match_op("="):
            self.advance()
            return self.parse_atomic()
        return BooleanLiteral(value=True, loc=self.token_loc(name_token))

    def parse_inline_props(self) -> dict[str, Expr]:
        """Parse props up to the first token that cannot start one."""
        props: dict[str, Expr] = {}
        while self.parse_prop_entry(props):
            pass
        return props

    def parse_props_block(self) -> dict[str, Expr]:
        """Parse an indented block of ``key: expression`` lines."""
        props: dict[str, Expr] = {}
        for _ in self.block_lines():
            key = self.expect_name()
            self.expect_punct(":")
            props[key] = self.parse_expression()
        return props

    def parse_optional_props_block(self) -> dict[str, Expr]:
        """Parse ``: <props block>`` if a colon follows, else no props."""
        if not self.match_punct(":"):
            return {}
        self.advance()
        return self.parse_props_block()

    @staticmethod
    def pop_string(props: dict[str, Expr], key: str) -> str | None:
        """Remove ``key`` from ``props`` and return it if it is a plain string."""
        value = props.get(key)
        if isinstance(value, StringLiteral):
            del props[key]
            return value.value
        return None

    @staticmethod
    def pop_word(props: dict[str, Expr], key: str) -> str | None:
        """Remove ``key`` from ``props`` and return it if it is a string or a bare name."""
        value = props.get(key)
        if isinstance(value, StringLiteral):
            del props[key]
            return value.value
        if isinstance(value, Identifier):
            del props[key]
            return value.name
        return None

    @staticmethod
    def pop_number(props: dict[str, Expr], key: str) -> float | None:
        value = props.get(key)
        if isinstance(value, NumberLiteral):
            del props[key]
            return value.value
        return None
