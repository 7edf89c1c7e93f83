"""Tests for the --debug dumps."""

from __future__ import annotations

import io
import sys

from parenspace.debug import dump_options, dump_tokens
from parenspace.lexer import tokenize
from parenspace.options import RuleOptions


class TestDumpTokens:
    def test_writes_to_current_stderr(self, monkeypatch) -> None:
        replaced = io.StringIO()
        monkeypatch.setattr(sys, "stderr", replaced)
        dump_tokens(tokenize("f(a)"))
        out = replaced.getvalue()
        assert "PUNCTUATOR '('" in out
        assert "IDENTIFIER 'a'" in out

    def test_captured_by_capsys(self, capsys) -> None:
        dump_tokens(tokenize("(b)"))
        err = capsys.readouterr().err
        assert "    1 1:2 IDENTIFIER 'b'" in err

    def test_explicit_file(self, capsys) -> None:
        buf = io.StringIO()
        dump_tokens(tokenize("x"), file=buf)
        assert buf.getvalue() == "    0 1:1 IDENTIFIER 'x'\n"
        assert capsys.readouterr().err == ""


class TestDumpOptions:
    def test_writes_to_current_stderr(self, monkeypatch) -> None:
        replaced = io.StringIO()
        monkeypatch.setattr(sys, "stderr", replaced)
        dump_options(RuleOptions())
        assert replaced.getvalue().startswith("mode=never")

    def test_explicit_file(self) -> None:
        buf = io.StringIO()
        dump_options(RuleOptions.from_options(["always", {"exceptions": ["{}"]}]), file=buf)
        assert "mode=always" in buf.getvalue()
        assert "openers=['{']" in buf.getvalue()
