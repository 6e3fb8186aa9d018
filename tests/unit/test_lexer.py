"""Tests for the 0x lexer."""

from pathlib import Path

import pytest

from zerox.core.errors import LexError
from zerox.core.lexer import Token, TokenType, tokenize


def types(text: str) -> list[TokenType]:
    return [t.type for t in tokenize(text)]


def values(text: str, token_type: TokenType) -> list[str]:
    return [t.value for t in tokenize(text) if t.type == token_type]


class TestTokenStream:
    """Tests for the overall shape of the token stream."""

    def test_simple_page(self) -> None:
        """A page with one child produces the expected stream and positions."""
        tokens = tokenize('page Home:\n  text "Hi"')

        assert [t.type for t in tokens] == [
            TokenType.KEYWORD,
            TokenType.IDENTIFIER,
            TokenType.PUNCTUATION,
            TokenType.NEWLINE,
            TokenType.INDENT,
            TokenType.KEYWORD,
            TokenType.STRING,
            TokenType.NEWLINE,
            TokenType.DEDENT,
            TokenType.EOF,
        ]
        assert tokens[0] == Token(TokenType.KEYWORD, "page", 1, 1)
        assert tokens[1] == Token(TokenType.IDENTIFIER, "Home", 1, 6)
        assert (tokens[3].line, tokens[3].column) == (1, 11)
        assert tokens[6] == Token(TokenType.STRING, "Hi", 2, 8)
        assert (tokens[7].line, tokens[7].column) == (2, 12)
        assert (tokens[8].line, tokens[8].column) == (2, 1)
        assert (tokens[-1].line, tokens[-1].column) == (3, 1)

    def test_empty_source(self) -> None:
        """Empty text is a single blank line followed by EOF."""
        assert types("") == [TokenType.NEWLINE, TokenType.EOF]

    def test_stream_always_ends_with_eof(self) -> None:
        tokens = tokenize("state x: int = 0\n")
        assert tokens[-1].type == TokenType.EOF
        assert sum(1 for t in tokens if t.type == TokenType.EOF) == 1

    def test_blank_lines_emit_newline_at_column_one(self) -> None:
        """Blank and whitespace-only lines never change indentation."""
        tokens = tokenize("a\n\n   \nb")
        newlines = [(t.line, t.column) for t in tokens if t.type == TokenType.NEWLINE]

        assert newlines == [(1, 2), (2, 1), (3, 1), (4, 2)]
        assert TokenType.INDENT not in [t.type for t in tokens]

    def test_crlf_line_endings(self) -> None:
        """A trailing carriage return is not part of the line."""
        assert tokenize("page A:\r\n  cart\r\n") == tokenize("page A:\n  cart\n")

    def test_tokenize_is_deterministic(self) -> None:
        source = 'page A:\n  state n: int = 0\n  text "{n}"\n'
        assert tokenize(source) == tokenize(source)

    def test_repr(self) -> None:
        token = Token(TokenType.IDENTIFIER, "count", 3, 5)
        assert repr(token) == "Token(IDENTIFIER, 'count', 3:5)"


class TestIndentation:
    """Tests for INDENT/DEDENT generation."""

    def test_nested_blocks_dedent_at_eof(self) -> None:
        """Open levels are closed by DEDENTs on the last line before EOF."""
        tokens = tokenize("a:\n  b:\n    c")
        tail = tokens[-3:]

        assert [t.type for t in tail] == [TokenType.DEDENT, TokenType.DEDENT, TokenType.EOF]
        assert [(t.line, t.column) for t in tail] == [(3, 1), (3, 1), (4, 1)]

    def test_multiple_dedents_on_one_line(self) -> None:
        tokens = tokenize("a:\n  b:\n    c\nd")
        line_four = [t.type for t in tokens if t.line == 4]

        assert line_four == [
            TokenType.DEDENT,
            TokenType.DEDENT,
            TokenType.IDENTIFIER,
            TokenType.NEWLINE,
        ]

    def test_indent_and_dedent_balance(self) -> None:
        source = "page A:\n  layout col:\n    text 1\n    layout row:\n      text 2\n  text 3\n"
        tokens = tokenize(source)

        indents = sum(1 for t in tokens if t.type == TokenType.INDENT)
        dedents = sum(1 for t in tokens if t.type == TokenType.DEDENT)
        assert indents == dedents == 3

    def test_tab_counts_as_two_spaces(self) -> None:
        """A tab-indented line and a two-space line sit at the same level."""
        tokens = tokenize("a:\n\tb\n  c")
        assert sum(1 for t in tokens if t.type == TokenType.INDENT) == 1
        assert sum(1 for t in tokens if t.type == TokenType.DEDENT) == 1

    def test_comment_lines_take_part_in_indentation(self) -> None:
        tokens = tokenize("a:\n  // note\nb")
        assert [t.type for t in tokens[3:6]] == [
            TokenType.INDENT,
            TokenType.COMMENT,
            TokenType.NEWLINE,
        ]

    def test_lenient_dedent_to_unopened_level(self) -> None:
        """Without strict mode a dedent between levels is accepted."""
        tokens = tokenize("a:\n    b\n  c")
        assert [t.type for t in tokens if t.line == 3] == [
            TokenType.DEDENT,
            TokenType.IDENTIFIER,
            TokenType.NEWLINE,
        ]

    def test_strict_dedent_to_unopened_level(self) -> None:
        with pytest.raises(LexError) as exc_info:
            tokenize("a:\n    b\n  c", strict_indentation=True)

        error = exc_info.value
        assert error.message == "Inconsistent indentation (expected 0 spaces, got 2)"
        assert (error.line, error.column) == (3, 1)


class TestLiterals:
    """Tests for numbers, strings, colors and words."""

    def test_keywords_and_identifiers(self) -> None:
        tokens = tokenize("state count")
        assert tokens[0].type == TokenType.KEYWORD
        assert tokens[1].type == TokenType.IDENTIFIER

    def test_integer_and_decimal(self) -> None:
        assert values("1 3.14 42", TokenType.NUMBER) == ["1", "3.14", "42"]

    def test_trailing_dot_is_not_part_of_number(self) -> None:
        assert types("1.")[:2] == [TokenType.NUMBER, TokenType.PUNCTUATION]

    def test_digits_followed_by_letters_form_identifier(self) -> None:
        """Size tokens such as ``2xl`` are single identifiers."""
        assert values("size=2xl", TokenType.IDENTIFIER) == ["size", "2xl"]

    def test_string_escapes(self) -> None:
        assert values(r'"a\"b\n\tc\\d"', TokenType.STRING) == ['a"b\n\tc\\d']

    def test_single_quoted_string(self) -> None:
        assert values("'it'", TokenType.STRING) == ["it"]

    def test_unterminated_string(self) -> None:
        with pytest.raises(LexError) as exc_info:
            tokenize('text "abc')

        error = exc_info.value
        assert error.message == "Unterminated string literal"
        assert (error.line, error.column) == (1, 6)
        assert str(error) == "Line 1, Col 6: Unterminated string literal"

    def test_unterminated_string_with_file_shows_snippet(self) -> None:
        with pytest.raises(LexError) as exc_info:
            tokenize('page A:\n  text "abc', file=Path("app.ai"))

        rendered = str(exc_info.value)
        assert rendered.startswith("app.ai:2:8")
        assert '   2 |   text "abc' in rendered
        assert "^^^" in rendered

    def test_color_literal(self) -> None:
        assert values("color=#f0f0f0 bg=#333", TokenType.COLOR) == ["#f0f0f0", "#333"]

    def test_hash_without_hex_digits_is_error_token(self) -> None:
        tokens = tokenize("#zz")
        assert tokens[0] == Token(TokenType.ERROR, "#", 1, 1)
        assert tokens[1] == Token(TokenType.IDENTIFIER, "zz", 1, 2)

    def test_unknown_character_is_error_token(self) -> None:
        assert values("a $ b", TokenType.ERROR) == ["$"]

    def test_http_methods_are_uppercase_only(self) -> None:
        tokens = tokenize("GET post DELETE")
        assert [t.type for t in tokens[:3]] == [
            TokenType.HTTP_METHOD,
            TokenType.IDENTIFIER,
            TokenType.HTTP_METHOD,
        ]

    def test_at_keyword(self) -> None:
        assert values("@mobile: padding", TokenType.AT_KEYWORD) == ["mobile"]

    def test_comment_text_is_stripped(self) -> None:
        tokens = tokenize("text 1 //  trailing note ")
        assert tokens[2] == Token(TokenType.COMMENT, "trailing note", 1, 8)


class TestUnicode:
    """Tests for non-ASCII identifiers and strings."""

    def test_hangul_identifier(self) -> None:
        tokens = tokenize('state 이름: str = "홍길동"')
        assert tokens[1] == Token(TokenType.IDENTIFIER, "이름", 1, 7)
        assert values('state 이름: str = "홍길동"', TokenType.STRING) == ["홍길동"]

    def test_latin_and_cyrillic_identifiers(self) -> None:
        assert values("café привет", TokenType.IDENTIFIER) == ["café", "привет"]

    def test_kana_and_cjk_identifiers(self) -> None:
        assert values("カート 价格", TokenType.IDENTIFIER) == ["カート", "价格"]


class TestOperatorsAndPunctuation:
    """Tests for operators, punctuation and style classes."""

    def test_double_operators_win(self) -> None:
        ops = values("a += 1 -> b => c == d != e >= f <= g && h || i", TokenType.OPERATOR)
        assert ops == ["+=", "->", "=>", "==", "!=", ">=", "<=", "&&", "||"]

    def test_single_operators(self) -> None:
        assert values("a + b - c * d / e % f = g > h < i ! j | k", TokenType.OPERATOR) == [
            "+", "-", "*", "/", "%", "=", ">", "<", "!", "|",
        ]  # fmt: skip

    def test_punctuation(self) -> None:
        assert values("f(a, b)[0].y{x} ?:", TokenType.PUNCTUATION) == [
            "(", ",", ")", "[", "]", ".", "{", "}", "?", ":",
        ]  # fmt: skip

    def test_style_class_after_space(self) -> None:
        tokens = tokenize("layout row .card-lg .shadow:")
        assert values("layout row .card-lg .shadow:", TokenType.STYLE_CLASS) == [
            ".card-lg",
            ".shadow",
        ]
        assert tokens[2].column == 12

    def test_member_access_is_not_style_class(self) -> None:
        """A dot after a word, call or index is member access."""
        for source in ("item.title", "load().data", "rows[0].name"):
            assert TokenType.STYLE_CLASS not in types(source)

    def test_style_class_at_start_of_line(self) -> None:
        assert values(".card", TokenType.STYLE_CLASS) == [".card"]
