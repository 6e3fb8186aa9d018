"""
Lexer/Tokenizer for the 0x DSL.

Converts raw DSL text into a stream of tokens with source location tracking.
Handles indentation-based blocks (Python-style) with INDENT/DEDENT tokens.
The source is processed one physical line at a time: every line ends with a
NEWLINE token and indentation is compared against a stack of open levels.
"""

import logging
import re
from dataclasses import dataclass
from enum import Enum
from pathlib import Path

from .errors import LexError, extract_snippet, make_lex_error

logger = logging.getLogger(__name__)


class TokenType(Enum):
    """Token types in the 0x DSL."""

    KEYWORD = "KEYWORD"
    IDENTIFIER = "IDENTIFIER"
    NUMBER = "NUMBER"
    STRING = "STRING"
    OPERATOR = "OPERATOR"
    PUNCTUATION = "PUNCTUATION"
    COLOR = "COLOR"
    HTTP_METHOD = "HTTP_METHOD"
    AT_KEYWORD = "AT_KEYWORD"
    STYLE_CLASS = "STYLE_CLASS"
    COMMENT = "COMMENT"

    # Indentation
    INDENT = "INDENT"
    DEDENT = "DEDENT"
    NEWLINE = "NEWLINE"
    EOF = "EOF"

    # Unrecognized character, left for the parser to reject
    ERROR = "ERROR"


KEYWORDS = frozenset(
    {
        # Containers and declarations
        "app", "page", "component", "state", "derived", "prop", "type",
        "fn", "async", "let", "store", "api", "use", "js", "style", "import",
        "from", "return", "await", "old",
        # Lifecycle and contracts
        "on", "mount", "destroy", "watch", "check", "requires", "ensures",
        # UI elements
        "layout", "text", "button", "input", "image", "link", "toggle",
        "select", "row", "col", "grid", "stack", "center", "middle",
        "between", "end",
        # Control flow
        "if", "elif", "else", "for", "in", "show", "hide",
        # Literals
        "true", "false", "null",
        # Types
        "list", "map", "set",
        # Data and forms
        "model", "data", "query", "form", "field", "table", "column",
        "submit", "validate", "permission",
        # Auth and roles
        "auth", "login", "signup", "logout", "guard", "role", "roles", "can",
        "cannot",
        # Dashboards, realtime, routing
        "chart", "stat", "stats", "realtime", "subscribe", "route", "nav",
        "redirect",
        # Interaction patterns
        "upload", "preview", "toast", "notify", "modal", "confirm", "crud",
        "drawer", "command", "breadcrumb", "admin",
        # Landing and commerce
        "hero", "features", "pricing", "faq", "testimonials", "footer",
        "search", "filter", "social", "profile", "pay", "cart", "media",
        "gallery", "notification",
        # Motion, meta, automation
        "animate", "gesture", "transition", "seo", "a11y", "ai",
        "automation", "trigger", "schedule", "dev", "mock", "seed", "emit",
        "responsive", "mobile", "desktop", "tablet",
        # Deployment and infrastructure
        "deploy", "env", "docker", "ci", "domain", "cdn", "monitor", "backup",
        "endpoint", "middleware", "queue", "cron", "cache", "migrate",
        "webhook", "storage",
        # Testing
        "test", "e2e", "fixture", "snapshot",
        # Resilience and i18n
        "error", "loading", "offline", "retry", "log", "i18n", "locale", "rtl",
    }
)  # fmt: skip

HTTP_METHODS = frozenset({"GET", "POST", "PUT", "DELETE", "PATCH"})

DOUBLE_OPERATORS = frozenset(
    {"+=", "-=", "*=", "/=", "->", "=>", "==", "!=", ">=", "<=", "&&", "||"}
)

SINGLE_OPERATORS = frozenset({"+", "-", "*", "/", "%", "=", ">", "<", "!", "|"})

PUNCTUATION = frozenset({":", ",", ".", "(", ")", "[", "]", "{", "}", "?"})

# Letters outside ASCII accepted in identifiers: Latin-1 supplement and
# Latin extended, Greek, Cyrillic (+ supplement), Hangul Jamo, Hiragana,
# Katakana, Hangul compatibility Jamo, Hangul syllables, CJK ideographs.
_UNICODE_LETTERS = (
    "\u00c0-\u024f\u0370-\u03ff\u0400-\u04ff\u0500-\u052f\u1100-\u11ff"
    "\u3040-\u309f\u30a0-\u30ff\u3130-\u318f\uac00-\ud7af\u4e00-\u9fff"
)
IDENTIFIER_START = re.compile(f"[a-zA-Z_{_UNICODE_LETTERS}]")
IDENTIFIER_PART = re.compile(f"[a-zA-Z0-9_{_UNICODE_LETTERS}]")

_HEX_DIGITS = frozenset("0123456789abcdefABCDEF")
_STYLE_CLASS_PART = re.compile(r"[a-zA-Z0-9_-]")
_WORD_CHAR = re.compile(r"[a-zA-Z0-9_]")
_ASCII_LETTER = re.compile(r"[a-zA-Z_]")


@dataclass
class Token:
    """A single token with source location."""

    type: TokenType
    value: str
    line: int
    column: int

    def __repr__(self) -> str:
        return f"Token({self.type.name}, {self.value!r}, {self.line}:{self.column})"


class Lexer:
    """
    Lexer for the 0x DSL.

    Converts source text into a stream of tokens with indentation tracking.
    """

    def __init__(self, text: str, file: Path | None = None, strict_indentation: bool = False):
        """
        Initialize lexer.

        Args:
            text: Source text to tokenize
            file: Optional source file path (for error reporting)
            strict_indentation: Reject dedents to a level that was never opened
        """
        self.text = text
        self.file = file
        self.strict_indentation = strict_indentation
        self.line = 1
        self.content = ""
        self.pos = 0
        self.tokens: list[Token] = []
        self.indent_stack = [0]  # Stack of indentation levels

    def current_char(self) -> str | None:
        """Get current character on the line or None at end of line."""
        if self.pos >= len(self.content):
            return None
        return self.content[self.pos]

    def peek_char(self, offset: int = 1) -> str | None:
        """Peek ahead at character on the current line."""
        pos = self.pos + offset
        if pos >= len(self.content):
            return None
        return self.content[pos]

    def emit(self, token_type: TokenType, value: str, column: int) -> None:
        self.tokens.append(Token(token_type, value, self.line, column))

    def error(self, message: str, column: int) -> LexError:
        """Build a LexError at the current line, with a snippet when the file is known."""
        snippet = extract_snippet(self.text, self.line) if self.file is not None else None
        return make_lex_error(message, self.line, column, file=self.file, snippet=snippet)

    def read_string(self) -> str:
        """Read a quoted string starting at the current quote character."""
        start_col = self.pos + 1
        quote = self.content[self.pos]
        self.pos += 1

        chars = []
        while self.pos < len(self.content):
            current = self.content[self.pos]
            if current == "\\" and self.pos + 1 < len(self.content):
                escape_char = self.content[self.pos + 1]
                if escape_char == "n":
                    chars.append("\n")
                elif escape_char == "t":
                    chars.append("\t")
                else:
                    # \\, the matching quote and anything else pass through
                    chars.append(escape_char)
                self.pos += 2
            elif current == quote:
                self.pos += 1
                return "".join(chars)
            else:
                chars.append(current)
                self.pos += 1

        raise self.error("Unterminated string literal", start_col)

    def read_number(self) -> tuple[str, bool]:
        """
        Read a number (integer or decimal).

        Returns:
            Tuple of (value, is_identifier). Digits directly followed by a
            letter form a single identifier such as ``2xl``.
        """
        start = self.pos
        while (ch := self.current_char()) is not None and ch.isdigit() and ch.isascii():
            self.pos += 1

        current = self.current_char()
        if current is not None and _ASCII_LETTER.match(current):
            while (ch := self.current_char()) is not None and _WORD_CHAR.match(ch):
                self.pos += 1
            return self.content[start : self.pos], True

        next_char = self.peek_char()
        if current == "." and next_char is not None and next_char in "0123456789":
            self.pos += 1
            while (ch := self.current_char()) is not None and ch in "0123456789":
                self.pos += 1

        return self.content[start : self.pos], False

    def read_identifier(self) -> str:
        """Read an identifier or keyword."""
        start = self.pos
        while (ch := self.current_char()) is not None and IDENTIFIER_PART.match(ch):
            self.pos += 1
        return self.content[start : self.pos]

    def handle_indentation(self, indent_level: int) -> None:
        """Generate INDENT/DEDENT tokens based on indentation level."""
        current_indent = self.indent_stack[-1]

        if indent_level > current_indent:
            self.indent_stack.append(indent_level)
            self.emit(TokenType.INDENT, "", 1)

        elif indent_level < current_indent:
            while len(self.indent_stack) > 1 and self.indent_stack[-1] > indent_level:
                self.indent_stack.pop()
                self.emit(TokenType.DEDENT, "", 1)

            if self.strict_indentation and self.indent_stack[-1] != indent_level:
                raise self.error(
                    f"Inconsistent indentation (expected {self.indent_stack[-1]} spaces, "
                    f"got {indent_level})",
                    1,
                )

    def tokenize(self) -> list[Token]:
        """
        Tokenize the entire source text.

        Returns:
            List of tokens, ending with EOF
        """
        lines = self.text.split("\n")

        for index, raw_line in enumerate(lines):
            self.line = index + 1
            self.content = raw_line[:-1] if raw_line.endswith("\r") else raw_line
            self.pos = 0

            if self.content.strip() == "":
                self.emit(TokenType.NEWLINE, "\n", 1)
                continue

            self.tokenize_line()

        last_line = len(lines)
        while len(self.indent_stack) > 1:
            self.indent_stack.pop()
            self.tokens.append(Token(TokenType.DEDENT, "", last_line, 1))

        self.tokens.append(Token(TokenType.EOF, "", last_line + 1, 1))
        logger.debug("Tokenized %d lines into %d tokens", last_line, len(self.tokens))
        return self.tokens

    def tokenize_line(self) -> None:
        """Emit indentation and body tokens for one non-blank line."""
        indent = 0
        for ch in self.content:
            if ch == " ":
                indent += 1
            elif ch == "\t":
                indent += 2
            else:
                break
        self.handle_indentation(indent)

        self.pos = len(self.content) - len(self.content.lstrip(" \t"))

        while (ch := self.current_char()) is not None:
            column = self.pos + 1

            if ch in (" ", "\t"):
                self.pos += 1
                continue

            # Comment (rest of line)
            if ch == "/" and self.peek_char() == "/":
                self.emit(TokenType.COMMENT, self.content[self.pos + 2 :].strip(), column)
                break

            # Color literal (#333, #f0f0f0)
            if ch == "#":
                end = self.pos + 1
                while end < len(self.content) and self.content[end] in _HEX_DIGITS:
                    end += 1
                if end > self.pos + 1:
                    self.emit(TokenType.COLOR, self.content[self.pos : end], column)
                    self.pos = end
                    continue

            # Style class (.card) when not following a word, call or index
            if ch == "." and (nxt := self.peek_char()) is not None and _ASCII_LETTER.match(nxt):
                prev = self.content[self.pos - 1] if self.pos > 0 else " "
                if not (_WORD_CHAR.match(prev) or prev in ")]"):
                    end = self.pos + 1
                    while end < len(self.content) and _STYLE_CLASS_PART.match(self.content[end]):
                        end += 1
                    self.emit(TokenType.STYLE_CLASS, self.content[self.pos : end], column)
                    self.pos = end
                    continue

            # @keyword (@mobile, @click)
            if ch == "@":
                self.pos += 1
                start = self.pos
                while (c := self.current_char()) is not None and _WORD_CHAR.match(c):
                    self.pos += 1
                self.emit(TokenType.AT_KEYWORD, self.content[start : self.pos], column)
                continue

            if ch in ('"', "'"):
                self.emit(TokenType.STRING, self.read_string(), column)
                continue

            if ch in "0123456789":
                value, is_identifier = self.read_number()
                token_type = TokenType.IDENTIFIER if is_identifier else TokenType.NUMBER
                self.emit(token_type, value, column)
                continue

            two_char = self.content[self.pos : self.pos + 2]
            if two_char in DOUBLE_OPERATORS:
                self.emit(TokenType.OPERATOR, two_char, column)
                self.pos += 2
                continue

            if ch in SINGLE_OPERATORS:
                self.emit(TokenType.OPERATOR, ch, column)
                self.pos += 1
                continue

            if ch in PUNCTUATION:
                self.emit(TokenType.PUNCTUATION, ch, column)
                self.pos += 1
                continue

            if IDENTIFIER_START.match(ch):
                word = self.read_identifier()
                if word in HTTP_METHODS:
                    self.emit(TokenType.HTTP_METHOD, word, column)
                elif word in KEYWORDS:
                    self.emit(TokenType.KEYWORD, word, column)
                else:
                    self.emit(TokenType.IDENTIFIER, word, column)
                continue

            self.emit(TokenType.ERROR, ch, column)
            self.pos += 1

        self.emit(TokenType.NEWLINE, "\n", len(self.content) + 1)


def tokenize(text: str, file: Path | None = None, strict_indentation: bool = False) -> list[Token]:
    """
    Convenience function to tokenize DSL text.

    Args:
        text: DSL source text
        file: Optional source file path
        strict_indentation: Reject dedents to a level that was never opened

    Returns:
        List of tokens
    """
    lexer = Lexer(text, file, strict_indentation=strict_indentation)
    return lexer.tokenize()
