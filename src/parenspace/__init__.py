"""Paren spacing lint rule with fixes."""

from __future__ import annotations

from collections.abc import Sequence
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from parenspace.diagnostics import Diagnostic

__version__ = "0.1.0"


def lint(
    source: str,
    options: Sequence[Any] = (),
    filename: str = "input.js",
) -> list[Diagnostic]:
    """Tokenize source and check paren spacing with host-style options."""
    from parenspace.lexer import tokenize
    from parenspace.options import RuleOptions, validate_options
    from parenspace.rule import SourceCode, check

    validate_options(options)
    code = SourceCode(source, tokenize(source, filename))
    return check(code, RuleOptions.from_options(options))


def fix(
    source: str,
    options: Sequence[Any] = (),
    filename: str = "input.js",
) -> str:
    """Return source with every paren spacing problem fixed."""
    from parenspace.fixer import fix_source
    from parenspace.options import RuleOptions, validate_options

    validate_options(options)
    return fix_source(source, RuleOptions.from_options(options), filename).output
