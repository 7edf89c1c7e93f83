"""Shared test fixtures and helpers."""

from __future__ import annotations

from typing import Any

import pytest

from parenspace.diagnostics import Diagnostic, MessageKind
from parenspace.fixer import apply_fixes
from parenspace.lexer import tokenize
from parenspace.options import RuleOptions
from parenspace.rule import SourceCode, check
from parenspace.tokens import Token, TokenType

MISSING = MessageKind.MISSING_SPACE
REJECTED = MessageKind.REJECTED_SPACE
STRING = MessageKind.UNNECESSARY_STRING_SPACE


@pytest.fixture
def lex():
    """Return a helper that tokenizes source."""

    def _lex(source: str) -> list[Token]:
        return tokenize(source)

    return _lex


def lint_source(source: str, *options: Any) -> list[Diagnostic]:
    """Check source with host-style options, e.g. ``lint_source(code, "always")``."""
    code = SourceCode(source, tokenize(source))
    return check(code, RuleOptions.from_options(list(options)))


def fixed(source: str, *options: Any) -> str:
    """Apply a single pass of fixes and return the resulting text."""
    return apply_fixes(source, lint_source(source, *options)).output


def assert_types(tokens: list[Token], expected: list[TokenType]) -> None:
    """Assert that the token types match the expected list."""
    actual = [t.type for t in tokens]
    assert actual == expected, f"Expected {expected}, got {actual}"


def assert_values(tokens: list[Token], expected: list[str]) -> None:
    """Assert that the token values match the expected list."""
    actual = [t.value for t in tokens]
    assert actual == expected, f"Expected {expected}, got {actual}"


def assert_kinds(diags: list[Diagnostic], expected: list[MessageKind]) -> None:
    """Assert that the diagnostic kinds match the expected list, in order."""
    actual = [d.kind for d in diags]
    assert actual == expected, f"Expected {expected}, got {actual}"


def assert_locations(diags: list[Diagnostic], expected: list[tuple[int, int]]) -> None:
    """Assert (line, column) of each diagnostic."""
    actual = [(d.line, d.column) for d in diags]
    assert actual == expected, f"Expected {expected}, got {actual}"
