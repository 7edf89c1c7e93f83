"""Lexer for JavaScript-like source — produces a comment-inclusive token stream."""

from __future__ import annotations

from parenspace.errors import LexError
from parenspace.tokens import (
    PUNCTUATORS,
    REGEX_PREFIX_KEYWORDS,
    Position,
    Span,
    Token,
    TokenType,
    is_hex_digit,
    is_ident_char,
    is_ident_start,
)


class Lexer:
    """Tokenize source text into a list of Token objects.

    Whitespace is not emitted but is tracked for positions. A ``/`` starts a
    regular expression literal wherever a division could not appear, judged
    from the previous non-comment token.
    """

    def __init__(self, source: str, filename: str = "input.js") -> None:
        self._source = source
        self._filename = filename
        self._pos = 0
        self._line = 1
        self._col = 1
        self._tokens: list[Token] = []

    def tokenize(self) -> list[Token]:
        """Tokenize the full source and return the token list."""
        while self._pos < len(self._source):
            self._lex_one()
        return self._tokens

    # ------------------------------------------------------------------
    # Position helpers
    # ------------------------------------------------------------------

    def _current_pos(self) -> Position:
        return Position(self._line, self._col, self._pos)

    def _peek(self, offset: int = 0) -> str:
        idx = self._pos + offset
        if idx < len(self._source):
            return self._source[idx]
        return ""

    def _at_end(self) -> bool:
        return self._pos >= len(self._source)

    def _advance(self) -> str:
        ch = self._source[self._pos]
        self._pos += 1
        # \r\n counts as one line break, on the \n
        if ch == "\n" or (ch == "\r" and self._peek() != "\n"):
            self._line += 1
            self._col = 1
        else:
            self._col += 1
        return ch

    def _emit(self, tt: TokenType, value: str, start: Position) -> Token:
        end = self._current_pos()
        raw = self._source[start.offset : end.offset]
        tok = Token(tt, value, raw, Span(start, end))
        self._tokens.append(tok)
        return tok

    def _error(self, message: str, pos: Position | None = None) -> LexError:
        if pos is None:
            pos = self._current_pos()
        return LexError(message, pos, self._source)

    # ------------------------------------------------------------------
    # Dispatch
    # ------------------------------------------------------------------

    def _lex_one(self) -> None:
        ch = self._peek()

        if ch == "\0":
            raise self._error("NUL character in source")

        if ch.isspace():
            self._advance()
            return

        if ch == "/" and self._peek(1) == "/":
            self._lex_line_comment()
            return

        if ch == "/" and self._peek(1) == "*":
            self._lex_block_comment()
            return

        if ch in "'\"":
            self._lex_string(ch)
            return

        if ch == "`":
            self._lex_template()
            return

        if ch.isdigit() or (ch == "." and self._peek(1).isdigit()):
            self._lex_number()
            return

        if is_ident_start(ch):
            self._lex_identifier()
            return

        if ch == "/" and self._regex_allowed():
            self._lex_regex()
            return

        self._lex_punctuator()

    # ------------------------------------------------------------------
    # Comments
    # ------------------------------------------------------------------

    def _lex_line_comment(self) -> None:
        start = self._current_pos()
        self._advance()
        self._advance()
        chars = []
        while not self._at_end() and self._peek() not in ("\n", "\r"):
            chars.append(self._advance())
        self._emit(TokenType.LINE_COMMENT, "".join(chars), start)

    def _lex_block_comment(self) -> None:
        start = self._current_pos()
        self._advance()
        self._advance()
        chars = []
        while not self._at_end():
            if self._peek() == "*" and self._peek(1) == "/":
                self._advance()
                self._advance()
                self._emit(TokenType.BLOCK_COMMENT, "".join(chars), start)
                return
            chars.append(self._advance())
        raise self._error("unterminated block comment", start)

    # ------------------------------------------------------------------
    # Strings and templates
    # ------------------------------------------------------------------

    def _lex_string(self, quote: str) -> None:
        start = self._current_pos()
        self._advance()  # opening quote
        while not self._at_end():
            ch = self._peek()
            if ch == "\\":
                self._advance()
                if self._at_end():
                    break
                # A line continuation may end in \r\n
                if self._advance() == "\r" and self._peek() == "\n":
                    self._advance()
                continue
            if ch in ("\n", "\r"):
                raise self._error("unterminated string literal", start)
            self._advance()
            if ch == quote:
                raw = self._source[start.offset : self._pos]
                self._emit(TokenType.STRING, raw, start)
                return
        raise self._error("unterminated string literal", start)

    def _lex_template(self) -> None:
        start = self._current_pos()
        self._advance()  # opening backtick
        while not self._at_end():
            ch = self._advance()
            if ch == "\\":
                if not self._at_end():
                    self._advance()
                continue
            if ch == "`":
                raw = self._source[start.offset : self._pos]
                self._emit(TokenType.TEMPLATE, raw, start)
                return
        raise self._error("unterminated template literal", start)

    # ------------------------------------------------------------------
    # Regular expressions
    # ------------------------------------------------------------------

    def _regex_allowed(self) -> bool:
        """Whether a ``/`` here begins a regex rather than a division."""
        prev = None
        for tok in reversed(self._tokens):
            if tok.type not in (TokenType.LINE_COMMENT, TokenType.BLOCK_COMMENT):
                prev = tok
                break
        if prev is None:
            return True
        if prev.type == TokenType.IDENTIFIER:
            return prev.value in REGEX_PREFIX_KEYWORDS
        if prev.type == TokenType.PUNCTUATOR:
            return prev.value not in (")", "]", "}")
        # Numbers, strings, templates and regexes end an operand
        return False

    def _lex_regex(self) -> None:
        start = self._current_pos()
        self._advance()  # opening slash
        in_class = False
        while True:
            ch = self._peek()
            if ch in ("", "\n", "\r"):
                raise self._error("unterminated regular expression", start)
            self._advance()
            if ch == "\\":
                if self._peek() in ("", "\n", "\r"):
                    raise self._error("unterminated regular expression", start)
                self._advance()
            elif ch == "[":
                in_class = True
            elif ch == "]":
                in_class = False
            elif ch == "/" and not in_class:
                break
        while not self._at_end() and is_ident_char(self._peek()):
            self._advance()
        raw = self._source[start.offset : self._pos]
        self._emit(TokenType.REGEX, raw, start)

    # ------------------------------------------------------------------
    # Numbers, identifiers, punctuators
    # ------------------------------------------------------------------

    def _lex_number(self) -> None:
        start = self._current_pos()
        if self._peek() == "0" and self._peek(1) in ("x", "X", "o", "O", "b", "B"):
            self._advance()
            self._advance()
            while is_hex_digit(self._peek()) or self._peek() == "_":
                self._advance()
        else:
            while self._peek().isdigit() or self._peek() in ("_", "."):
                self._advance()
            if self._peek() in ("e", "E"):
                self._advance()
                if self._peek() in ("+", "-"):
                    self._advance()
                while self._peek().isdigit():
                    self._advance()
        if self._peek() == "n":  # BigInt suffix
            self._advance()
        raw = self._source[start.offset : self._pos]
        self._emit(TokenType.NUMERIC, raw, start)

    def _lex_identifier(self) -> None:
        start = self._current_pos()
        chars = []
        while not self._at_end() and is_ident_char(self._peek()):
            chars.append(self._advance())
        self._emit(TokenType.IDENTIFIER, "".join(chars), start)

    def _lex_punctuator(self) -> None:
        start = self._current_pos()
        for punct in PUNCTUATORS:
            if self._source.startswith(punct, self._pos):
                for _ in punct:
                    self._advance()
                self._emit(TokenType.PUNCTUATOR, punct, start)
                return
        # Anything unknown is a one-character punctuator
        ch = self._advance()
        self._emit(TokenType.PUNCTUATOR, ch, start)


def tokenize(source: str, filename: str = "input.js") -> list[Token]:
    """Convenience function: tokenize source text and return token list."""
    return Lexer(source, filename).tokenize()
