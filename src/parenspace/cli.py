"""Command-line interface for parenspace."""

from __future__ import annotations

import argparse
import sys
import tomllib
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from parenspace.errors import ConfigError, LexError
from parenspace.options import EXCEPTION_NAMES, RuleOptions, validate_options


@dataclass(frozen=True, slots=True)
class CliOptions:
    """Parsed CLI options."""

    files: list[Path]
    rule_options: RuleOptions
    fix: bool
    context: bool
    debug: bool


def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser (separate function for testability)."""
    p = argparse.ArgumentParser(
        prog="parenspace",
        description="Check and fix spacing inside parentheses",
    )
    p.add_argument("files", nargs="+", help="Source files to check")
    p.add_argument(
        "-m",
        "--mode",
        choices=["always", "never"],
        default=None,
        help="Require (always) or forbid (never) spaces inside parens (default: never)",
    )
    p.add_argument(
        "-x",
        "--except",
        dest="exceptions",
        action="append",
        default=[],
        metavar="CATEGORY",
        help=f"Exception category, one of {', '.join(EXCEPTION_NAMES)} (repeatable)",
    )
    p.add_argument(
        "--config",
        metavar="FILE",
        help="Config file (default: auto-discover parenspace.toml)",
    )
    p.add_argument("--fix", action="store_true", help="Rewrite files with fixes applied")
    p.add_argument(
        "--context", action="store_true", help="Show the source line for each problem"
    )
    p.add_argument("--debug", action="store_true", help="Dump tokens and options to stderr")
    return p


def load_config(config_path: Path | None, input_dir: Path) -> dict[str, Any]:
    """Load a TOML config file, returning an empty dict on missing/absent file."""
    path = config_path if config_path is not None else input_dir / "parenspace.toml"

    if not path.is_file():
        return {}

    with open(path, "rb") as f:
        return tomllib.load(f)


def resolve_options(args: argparse.Namespace) -> CliOptions:
    """Merge config file and CLI args into CliOptions.

    Precedence: config file < CLI flags. Raises ConfigError when the merged
    rule options are invalid.
    """
    files = [Path(f) for f in args.files]
    input_dir = files[0].parent
    if not input_dir.parts:
        input_dir = Path(".")

    config_path = Path(args.config) if args.config else None
    try:
        config = load_config(config_path, input_dir)
    except tomllib.TOMLDecodeError as exc:
        raise ConfigError(str(exc), str(config_path or input_dir / "parenspace.toml")) from exc

    # Mode: config < CLI
    mode = config.get("mode", "never")
    if args.mode is not None:
        mode = args.mode

    # Exceptions: CLI replaces config when given
    exceptions = config.get("exceptions", [])
    if args.exceptions:
        exceptions = list(args.exceptions)

    raw_options: list[Any] = [mode, {"exceptions": exceptions}]
    validate_options(raw_options)

    return CliOptions(
        files=files,
        rule_options=RuleOptions.from_options(raw_options),
        fix=args.fix,
        context=args.context,
        debug=args.debug,
    )


def check_file(path: Path, options: CliOptions) -> int:
    """Check (and optionally fix) one file, print its problems, return their count."""
    from parenspace.debug import dump_tokens
    from parenspace.diagnostics import format_diagnostic, format_diagnostic_context
    from parenspace.fixer import fix_source
    from parenspace.lexer import tokenize
    from parenspace.rule import SourceCode, check

    source = path.read_text(encoding="utf-8")
    tokens = tokenize(source, str(path))

    if options.debug:
        dump_tokens(tokens)

    if options.fix:
        result = fix_source(source, options.rule_options, str(path))
        if result.output != source:
            path.write_text(result.output, encoding="utf-8")
            print(f"Fixed {len(result.applied)} problem(s) in {path}", file=sys.stderr)
        source, diagnostics = result.output, result.remaining
    else:
        diagnostics = check(SourceCode(source, tokens), options.rule_options)

    for diag in diagnostics:
        if options.context:
            print(format_diagnostic_context(diag, source, str(path)))
        else:
            print(format_diagnostic(diag, str(path)))
    return len(diagnostics)


def main(argv: list[str] | None = None) -> int:
    """CLI entry point. Returns exit code (0/1/2). Does not call sys.exit()."""
    parser = build_parser()
    args = parser.parse_args(argv)

    try:
        options = resolve_options(args)
    except ConfigError as exc:
        print(str(exc), file=sys.stderr)
        return 2

    if options.debug:
        from parenspace.debug import dump_options

        dump_options(options.rule_options)

    problems = 0
    failed = False
    for path in options.files:
        try:
            problems += check_file(path, options)
        except LexError as exc:
            print(exc.format(str(path)), file=sys.stderr)
            failed = True
        except OSError as exc:
            print(f"error: {path}: {exc.strerror or exc}", file=sys.stderr)
            failed = True

    if failed:
        return 2
    return 1 if problems else 0
