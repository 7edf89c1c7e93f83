"""Error types with formatted source context."""

from __future__ import annotations

from parenspace.tokens import Position


def render_snippet(
    message: str,
    source: str,
    line: int,
    column: int,
    filename: str,
    *,
    prefix: str = "error",
    width: int = 1,
) -> str:
    """Render a message with a gutter, the source line and carets under *column*."""
    lines = source.splitlines(keepends=True)
    line_idx = line - 1

    # Build the source line (strip trailing newline for display)
    if 0 <= line_idx < len(lines):
        source_line = lines[line_idx].rstrip("\n").rstrip("\r")
    else:
        source_line = ""

    pad = " " * (column - 1)
    carets = "^" * max(1, width)

    line_num = str(line)
    gutter_width = len(line_num) + 1

    blank_gutter = " " * gutter_width + "|"
    line_gutter = f"{line_num:>{gutter_width - 1}} |"

    return (
        f"{prefix}: {message}\n"
        f"{' ' * gutter_width}--> {filename}:{line}:{column}\n"
        f"{blank_gutter}\n"
        f"{line_gutter} {source_line}\n"
        f"{blank_gutter} {pad}{carets}"
    )


class LexError(Exception):
    """Raised on the first lexing error, with position and source context."""

    def __init__(self, message: str, position: Position, source: str) -> None:
        self.message = message
        self.position = position
        self.source = source
        super().__init__(self.format())

    def format(self, filename: str = "input.js") -> str:
        return render_snippet(
            self.message, self.source, self.position.line, self.position.column, filename
        )


class ConfigError(Exception):
    """Raised when rule options do not match the option schema."""

    def __init__(self, message: str, path: str = "options") -> None:
        self.message = message
        self.path = path
        super().__init__(self.format())

    def format(self) -> str:
        return f"error: invalid configuration at {self.path}: {self.message}"
