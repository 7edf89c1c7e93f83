"""Tests for the CLI module: arg parsing, exit codes, output, --fix."""

from __future__ import annotations

from pathlib import Path

import pytest

from parenspace.cli import build_parser, check_file, main, resolve_options
from parenspace.options import Mode

# ---------------------------------------------------------------------------
# Arg parsing via build_parser
# ---------------------------------------------------------------------------


class TestArgParsing:
    def test_files_only(self) -> None:
        ns = build_parser().parse_args(["a.js", "b.js"])
        assert ns.files == ["a.js", "b.js"]
        assert ns.mode is None
        assert ns.exceptions == []
        assert not ns.fix

    def test_mode_flag(self) -> None:
        ns = build_parser().parse_args(["a.js", "--mode", "always"])
        assert ns.mode == "always"

    def test_invalid_mode_rejected(self) -> None:
        with pytest.raises(SystemExit):
            build_parser().parse_args(["a.js", "--mode", "sometimes"])

    def test_except_flags(self) -> None:
        ns = build_parser().parse_args(["a.js", "-x", "{}", "--except", "empty"])
        assert ns.exceptions == ["{}", "empty"]

    def test_requires_a_file(self) -> None:
        with pytest.raises(SystemExit):
            build_parser().parse_args([])


# ---------------------------------------------------------------------------
# End-to-end through main()
# ---------------------------------------------------------------------------


class TestMain:
    def test_clean_file_exits_zero(self, tmp_path: Path, capsys) -> None:
        src = tmp_path / "a.js"
        src.write_text("foo(a);\n")
        assert main([str(src)]) == 0
        assert capsys.readouterr().out == ""

    def test_problems_exit_one(self, tmp_path: Path, capsys) -> None:
        src = tmp_path / "a.js"
        src.write_text("foo( a );\n")
        assert main([str(src)]) == 1
        out = capsys.readouterr().out.splitlines()
        assert out == [
            f"{src}:1:4: There should be no spaces inside this paren.",
            f"{src}:1:8: There should be no spaces inside this paren.",
        ]

    def test_mode_and_exceptions_from_flags(self, tmp_path: Path, capsys) -> None:
        src = tmp_path / "a.js"
        src.write_text("foo({a: 1});\n")
        assert main([str(src), "--mode", "always", "-x", "{}"]) == 0
        assert main([str(src), "--mode", "always"]) == 1

    def test_invalid_exception_exits_two(self, tmp_path: Path, capsys) -> None:
        src = tmp_path / "a.js"
        src.write_text("foo(a);\n")
        assert main([str(src), "-x", "<>"]) == 2
        assert "invalid configuration" in capsys.readouterr().err

    def test_lex_error_exits_two(self, tmp_path: Path, capsys) -> None:
        src = tmp_path / "a.js"
        src.write_text("foo('a);\n")
        assert main([str(src)]) == 2
        err = capsys.readouterr().err
        assert "unterminated string" in err
        assert f"{src}:1:5" in err

    def test_missing_file_exits_two(self, tmp_path: Path, capsys) -> None:
        assert main([str(tmp_path / "nope.js")]) == 2
        assert "error:" in capsys.readouterr().err

    def test_fix_rewrites_file(self, tmp_path: Path, capsys) -> None:
        src = tmp_path / "a.js"
        src.write_text("foo( a ); bar( 'x' );\n")
        assert main([str(src), "--fix", "-x", "(STRING)"]) == 0
        assert src.read_text() == "foo(a); bar('x');\n"
        captured = capsys.readouterr()
        assert captured.out == ""
        assert "Fixed 4 problem(s)" in captured.err

    def test_context_output(self, tmp_path: Path, capsys) -> None:
        src = tmp_path / "a.js"
        src.write_text("foo(a);\n")
        assert main([str(src), "--mode", "always", "--context"]) == 1
        out = capsys.readouterr().out
        assert out.startswith("warning: There must be a space inside this paren.")
        assert "1 | foo(a);" in out

    def test_debug_dumps_tokens(self, tmp_path: Path, capsys) -> None:
        src = tmp_path / "a.js"
        src.write_text("f(a)")
        main([str(src), "--debug"])
        err = capsys.readouterr().err
        assert "mode=never" in err
        assert "PUNCTUATOR '('" in err
        assert "IDENTIFIER 'a'" in err

    def test_multiple_files(self, tmp_path: Path, capsys) -> None:
        good = tmp_path / "good.js"
        good.write_text("f(a)")
        bad = tmp_path / "bad.js"
        bad.write_text("f( a)")
        assert main([str(good), str(bad)]) == 1
        out = capsys.readouterr().out
        assert str(bad) in out
        assert str(good) not in out


class TestCheckFile:
    def test_returns_problem_count(self, tmp_path: Path, capsys) -> None:
        src = tmp_path / "a.js"
        src.write_text("f( a )\ng( b )\n")
        ns = build_parser().parse_args([str(src)])
        opts = resolve_options(ns)
        assert opts.rule_options.mode is Mode.NEVER
        assert check_file(src, opts) == 4
