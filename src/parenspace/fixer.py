"""Apply rule fixes to source text."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass, field

from parenspace.diagnostics import Diagnostic
from parenspace.lexer import tokenize
from parenspace.options import RuleOptions
from parenspace.rule import SourceCode, check

MAX_PASSES = 10


@dataclass(frozen=True, slots=True)
class FixResult:
    """Outcome of applying fixes to a source text."""

    output: str
    applied: list[Diagnostic] = field(default_factory=list)
    remaining: list[Diagnostic] = field(default_factory=list)

    @property
    def fixed(self) -> bool:
        return bool(self.applied)


def apply_fixes(text: str, diagnostics: Sequence[Diagnostic]) -> FixResult:
    """Apply each diagnostic's fix once, in offset order.

    A fix that starts at or before the end of the last applied fix overlaps
    it and is kept in ``remaining`` for a later pass.
    """
    ordered = sorted(diagnostics, key=lambda d: (d.fix.start, d.fix.end))
    parts: list[str] = []
    applied: list[Diagnostic] = []
    remaining: list[Diagnostic] = []
    last_end = -1

    for diag in ordered:
        fix = diag.fix
        if fix.start <= last_end or fix.start > fix.end:
            remaining.append(diag)
            continue
        parts.append(text[max(0, last_end) : fix.start])
        parts.append(fix.text)
        last_end = fix.end
        applied.append(diag)

    parts.append(text[max(0, last_end) :])
    return FixResult("".join(parts), applied, remaining)


def fix_source(
    text: str,
    options: RuleOptions,
    filename: str = "input.js",
    max_passes: int = MAX_PASSES,
) -> FixResult:
    """Check and fix repeatedly until nothing more applies.

    Returns the final text, every diagnostic fixed along the way, and the
    diagnostics still present in the final text.
    """
    applied: list[Diagnostic] = []
    output = text
    for _ in range(max_passes):
        found = check(SourceCode(output, tokenize(output, filename)), options)
        result = apply_fixes(output, found)
        if not result.fixed:
            break
        applied.extend(result.applied)
        output = result.output

    remaining = check(SourceCode(output, tokenize(output, filename)), options)
    return FixResult(output, applied, remaining)
