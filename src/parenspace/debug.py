"""--debug token stream dump to stderr."""

from __future__ import annotations

import sys
from collections.abc import Sequence
from typing import TextIO

from parenspace.options import RuleOptions
from parenspace.tokens import Token


def dump_tokens(tokens: Sequence[Token], *, file: TextIO | None = None) -> None:
    """Print one line per token to *file* (default: the current sys.stderr)."""
    f = file if file is not None else sys.stderr
    for i, tok in enumerate(tokens):
        start = tok.span.start
        f.write(f"{i:>5} {start.line}:{start.column} {tok.type.name} {tok.value!r}\n")


def dump_options(options: RuleOptions, *, file: TextIO | None = None) -> None:
    f = file if file is not None else sys.stderr
    f.write(f"mode={options.mode.value}")
    f.write(f" openers={sorted(options.openers)} closers={sorted(options.closers)}")
    f.write(f" paren_string={options.exceptions.paren_string}\n")
