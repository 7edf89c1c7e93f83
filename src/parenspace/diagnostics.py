"""Diagnostics reported by the rule, with their fixes."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from parenspace.errors import render_snippet


class MessageKind(Enum):
    MISSING_SPACE = "missing-space"
    REJECTED_SPACE = "rejected-space"
    UNNECESSARY_STRING_SPACE = "unnecessary-string-space"


MESSAGES: dict[MessageKind, str] = {
    MessageKind.MISSING_SPACE: "There must be a space inside this paren.",
    MessageKind.REJECTED_SPACE: "There should be no spaces inside this paren.",
    MessageKind.UNNECESSARY_STRING_SPACE: (
        "There must be no space inside this paren with STRING expression."
    ),
}


@dataclass(frozen=True, slots=True)
class Fix:
    """Replace the character range [start, end) with text."""

    start: int
    end: int
    text: str

    @classmethod
    def insert(cls, offset: int, text: str = " ") -> Fix:
        return cls(offset, offset, text)

    @classmethod
    def remove(cls, start: int, end: int) -> Fix:
        return cls(start, end, "")


@dataclass(frozen=True, slots=True)
class Diagnostic:
    """One problem found by the rule, located at a 1-based line and column."""

    kind: MessageKind
    line: int
    column: int
    fix: Fix

    @property
    def message(self) -> str:
        return MESSAGES[self.kind]


def format_diagnostic(diag: Diagnostic, filename: str = "input.js") -> str:
    """One-line ``file:line:col: message`` form used by the CLI."""
    return f"{filename}:{diag.line}:{diag.column}: {diag.message}"


def format_diagnostic_context(diag: Diagnostic, source: str, filename: str = "input.js") -> str:
    """Multi-line form with the source line and a caret under the location."""
    return render_snippet(
        diag.message, source, diag.line, diag.column, filename, prefix="warning"
    )
