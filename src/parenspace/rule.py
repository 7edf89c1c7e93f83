"""Paren spacing rule — checks whitespace just inside ( and ) punctuators.

The rule works on a comment-inclusive token stream and its source text. For
every paren it decides whether a space is missing, whether an existing space
must go, or whether an exception category exempts it. With the ``(STRING)``
exception, a lone string literal between parens must never be padded,
whatever the mode.
"""

from __future__ import annotations

import re
from collections.abc import Callable, Sequence
from dataclasses import dataclass

from parenspace.diagnostics import Diagnostic, Fix, MessageKind
from parenspace.options import RuleOptions
from parenspace.tokens import Token, TokenType

Reporter = Callable[[Diagnostic], None]

_WHITESPACE = re.compile(r"\s")


@dataclass(frozen=True, slots=True)
class SourceCode:
    """Source text together with its token stream."""

    text: str
    tokens: Sequence[Token]

    def is_space_between(self, left: Token, right: Token) -> bool:
        gap = self.text[left.end_offset : right.start_offset]
        return _WHITESPACE.search(gap) is not None

    def before(self, index: int) -> Token | None:
        """Token preceding *index*, or None at the start of the stream."""
        if index <= 0:
            return None
        return self.tokens[index - 1]

    def after(self, index: int) -> Token | None:
        """Token following *index*, or None at the end of the stream."""
        if index + 1 >= len(self.tokens):
            return None
        return self.tokens[index + 1]


def is_same_line(left: Token, right: Token) -> bool:
    return left.span.end.line == right.span.start.line


def _is_exception(token: Token, values: frozenset[str]) -> bool:
    return token.type == TokenType.PUNCTUATOR and token.value in values


# ----------------------------------------------------------------------
# Adjacency predicates
# ----------------------------------------------------------------------


def _excepted(left: Token, right: Token, opts: RuleOptions, opener: bool) -> bool:
    """Whether the token inside the paren is an exception for that side."""
    if opener:
        return _is_exception(right, opts.openers)
    return _is_exception(left, opts.closers)


def _needs_space(
    src: SourceCode, left: Token, right: Token, opts: RuleOptions, opener: bool
) -> bool:
    if src.is_space_between(left, right):
        return False
    excepted = _excepted(left, right, opts, opener)
    if opts.always:
        # An empty pair never needs a space
        if opener and right.is_punctuator(")"):
            return False
        return not excepted
    return excepted


def _rejects_space(
    src: SourceCode, left: Token, right: Token, opts: RuleOptions, opener: bool
) -> bool:
    if not is_same_line(left, right):
        return False
    if not src.is_space_between(left, right):
        return False
    excepted = _excepted(left, right, opts, opener)
    if opts.always:
        return excepted
    return not excepted


def opener_needs_space(src: SourceCode, paren: Token, nxt: Token, opts: RuleOptions) -> bool:
    return _needs_space(src, paren, nxt, opts, opener=True)


def closer_needs_space(src: SourceCode, prev: Token, paren: Token, opts: RuleOptions) -> bool:
    # The opener side owns an empty pair
    if prev.is_punctuator("("):
        return False
    return _needs_space(src, prev, paren, opts, opener=False)


def opener_rejects_space(src: SourceCode, paren: Token, nxt: Token, opts: RuleOptions) -> bool:
    # A line comment must stay separated from its paren
    if nxt.type == TokenType.LINE_COMMENT:
        return False
    return _rejects_space(src, paren, nxt, opts, opener=True)


def closer_rejects_space(src: SourceCode, prev: Token, paren: Token, opts: RuleOptions) -> bool:
    if prev.is_punctuator("("):
        return False
    return _rejects_space(src, prev, paren, opts, opener=False)


# ----------------------------------------------------------------------
# String in parens
# ----------------------------------------------------------------------


def is_string_in_parens(src: SourceCode, index: int) -> bool:
    """True if tokens[index:index + 3] are exactly ``(``, a string, ``)``."""
    if index + 2 >= len(src.tokens):
        return False
    open_tok, string_tok, close_tok = src.tokens[index : index + 3]
    return (
        open_tok.is_punctuator("(")
        and string_tok.type == TokenType.STRING
        and close_tok.is_punctuator(")")
    )


def check_string_in_parens(
    src: SourceCode, open_tok: Token, string_tok: Token, close_tok: Token
) -> list[Diagnostic]:
    """Report whitespace on either side of a lone parenthesized string."""
    found: list[Diagnostic] = []
    if src.is_space_between(open_tok, string_tok):
        found.append(
            Diagnostic(
                MessageKind.UNNECESSARY_STRING_SPACE,
                string_tok.span.start.line,
                string_tok.span.start.column,
                Fix.remove(open_tok.end_offset, string_tok.start_offset),
            )
        )
    if src.is_space_between(string_tok, close_tok):
        found.append(
            Diagnostic(
                MessageKind.UNNECESSARY_STRING_SPACE,
                close_tok.span.start.line,
                close_tok.span.start.column,
                Fix.remove(string_tok.end_offset, close_tok.start_offset),
            )
        )
    return found


# ----------------------------------------------------------------------
# Scan
# ----------------------------------------------------------------------


def _check_opener(src: SourceCode, index: int, opts: RuleOptions) -> Diagnostic | None:
    paren = src.tokens[index]
    nxt = src.after(index)
    if nxt is None:
        return None
    line, column = paren.span.start.line, paren.span.start.column
    if opener_needs_space(src, paren, nxt, opts):
        return Diagnostic(MessageKind.MISSING_SPACE, line, column, Fix.insert(paren.end_offset))
    if opener_rejects_space(src, paren, nxt, opts):
        return Diagnostic(
            MessageKind.REJECTED_SPACE,
            line,
            column,
            Fix.remove(paren.end_offset, nxt.start_offset),
        )
    return None


def _check_closer(src: SourceCode, index: int, opts: RuleOptions) -> Diagnostic | None:
    paren = src.tokens[index]
    prev = src.before(index)
    if prev is None:
        return None
    line, column = paren.span.start.line, paren.span.start.column
    if closer_needs_space(src, prev, paren, opts):
        return Diagnostic(MessageKind.MISSING_SPACE, line, column, Fix.insert(paren.start_offset))
    if closer_rejects_space(src, prev, paren, opts):
        return Diagnostic(
            MessageKind.REJECTED_SPACE,
            line,
            column,
            Fix.remove(prev.end_offset, paren.start_offset),
        )
    return None


def check(
    source: SourceCode, options: RuleOptions, report: Reporter | None = None
) -> list[Diagnostic]:
    """Scan the token stream once and return diagnostics in source order.

    When *report* is given, each diagnostic is also passed to it as soon as
    it is found.
    """
    found: list[Diagnostic] = []

    def emit(diag: Diagnostic | None) -> None:
        if diag is None:
            return
        found.append(diag)
        if report is not None:
            report(diag)

    tokens = source.tokens
    i = 0
    while i < len(tokens):
        token = tokens[i]

        if options.exceptions.paren_string and is_string_in_parens(source, i):
            for diag in check_string_in_parens(source, *tokens[i : i + 3]):
                emit(diag)
            i += 3
            continue

        if token.is_punctuator("("):
            emit(_check_opener(source, i, options))
        elif token.is_punctuator(")"):
            emit(_check_closer(source, i, options))
        i += 1

    return found
