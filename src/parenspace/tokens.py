"""Token types, data structures, and character classification helpers."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, auto


class TokenType(Enum):
    PUNCTUATOR = auto()  # ( ) { } [ ] ; , . and operators
    STRING = auto()  # '...' or "..." (value keeps the quotes)
    TEMPLATE = auto()  # `...`
    REGEX = auto()  # /.../flags
    NUMERIC = auto()  # 42, 0x1f, 1.5e3
    IDENTIFIER = auto()  # names and keywords

    # Comments are part of the stream
    LINE_COMMENT = auto()  # // ... (value excludes the slashes)
    BLOCK_COMMENT = auto()  # /* ... */ (value excludes the delimiters)


@dataclass(frozen=True, slots=True)
class Position:
    """Source position, 1-based line and column, 0-based character offset."""

    line: int
    column: int
    offset: int


@dataclass(frozen=True, slots=True)
class Span:
    """Source range from start to end position."""

    start: Position
    end: Position


@dataclass(frozen=True, slots=True)
class Token:
    """A single token with its value and original source text."""

    type: TokenType
    value: str
    raw: str
    span: Span

    @property
    def start_offset(self) -> int:
        return self.span.start.offset

    @property
    def end_offset(self) -> int:
        return self.span.end.offset

    def is_punctuator(self, value: str) -> bool:
        """Return True if this is the punctuator *value*."""
        return self.type == TokenType.PUNCTUATOR and self.value == value


# Longest first so that the lexer can take the first prefix match.
PUNCTUATORS: tuple[str, ...] = tuple(
    sorted(
        [
            ">>>=", "...", "===", "!==", "**=", "<<=", ">>=", ">>>", "&&=", "||=", "??=",
            "=>", "==", "!=", "<=", ">=", "&&", "||", "??", "?.", "++", "--", "+=", "-=",
            "*=", "/=", "%=", "&=", "|=", "^=", "<<", ">>", "**",
            "{", "}", "(", ")", "[", "]", ";", ",", "<", ">", "+", "-", "*", "/", "%",
            "&", "|", "^", "!", "~", "?", ":", "=", ".", "@", "#",
        ],
        key=len,
        reverse=True,
    )
)


def is_ident_start(ch: str) -> bool:
    """Return True if ch can begin an identifier."""
    return ch.isalpha() or ch in "_$"


def is_ident_char(ch: str) -> bool:
    """Return True if ch is a valid identifier character."""
    return ch.isalnum() or ch in "_$"


def is_hex_digit(ch: str) -> bool:
    """Return True if ch is a hexadecimal digit."""
    return ch != "" and ch in "0123456789abcdefABCDEF"


# Keywords after which a slash starts a regular expression, not a division
REGEX_PREFIX_KEYWORDS = frozenset(
    [
        "return", "typeof", "instanceof", "in", "of", "new", "delete", "void",
        "throw", "case", "do", "else", "yield", "await",
    ]
)
