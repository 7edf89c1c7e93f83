"""Minimal LSP server for parenspace — diagnostics and quick fixes."""

from __future__ import annotations

import argparse
import re
import sys
from typing import Any

from lsprotocol.types import (
    TEXT_DOCUMENT_CODE_ACTION,
    TEXT_DOCUMENT_DID_CHANGE,
    TEXT_DOCUMENT_DID_OPEN,
    CodeAction,
    CodeActionKind,
    CodeActionOptions,
    CodeActionParams,
    Diagnostic,
    DiagnosticSeverity,
    DidChangeTextDocumentParams,
    DidOpenTextDocumentParams,
    Position,
    PublishDiagnosticsParams,
    Range,
    TextDocumentSyncKind,
    TextEdit,
    WorkspaceEdit,
)
from pygls.lsp.server import LanguageServer

from parenspace.errors import ConfigError, LexError
from parenspace.lexer import tokenize
from parenspace.options import EXCEPTION_NAMES, RuleOptions, validate_options
from parenspace.rule import SourceCode, check

SOURCE = "parenspace"

_LINE_BREAK = re.compile(r"\r\n|\r|\n")


class ParenSpaceServer(LanguageServer):
    """Language server holding the rule options it was started with."""

    def __init__(self, *args: Any, **kwargs: Any) -> None:
        super().__init__(*args, **kwargs)
        self.rule_options = RuleOptions()


server = ParenSpaceServer(
    "parenspace-lsp", "0.1.0", text_document_sync_kind=TextDocumentSyncKind.Full
)


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(
        prog="parenspace-lsp",
        description="Language server for parenthesis spacing (stdio)",
    )
    p.add_argument("-m", "--mode", choices=["always", "never"], default="never")
    p.add_argument(
        "-x",
        "--except",
        dest="exceptions",
        action="append",
        default=[],
        metavar="CATEGORY",
        help=f"Exception category, one of {', '.join(EXCEPTION_NAMES)} (repeatable)",
    )
    return p


def options_from_args(args: argparse.Namespace) -> RuleOptions:
    """Validate the command-line rule options and build RuleOptions."""
    raw: list[Any] = [args.mode, {"exceptions": list(args.exceptions)}]
    validate_options(raw)
    return RuleOptions.from_options(raw)


def offset_to_position(source: str, offset: int) -> Position:
    """Convert a character offset to a 0-based LSP position."""
    line = 0
    line_start = 0
    for m in _LINE_BREAK.finditer(source, 0, offset):
        line += 1
        line_start = m.end()
    return Position(line=line, character=offset - line_start)


def _validate(ls: LanguageServer, uri: str, options: RuleOptions | None = None) -> None:
    """Check the document and publish diagnostics."""
    if options is None:
        options = RuleOptions()
    doc = ls.workspace.get_text_document(uri)
    source = doc.source
    filename = uri.rsplit("/", 1)[-1] if "/" in uri else uri
    diagnostics: list[Diagnostic] = []

    try:
        tokens = tokenize(source, filename)
    except LexError as exc:
        line = exc.position.line - 1
        col = exc.position.column - 1
        diagnostics.append(
            Diagnostic(
                range=Range(
                    start=Position(line=line, character=col),
                    end=Position(line=line, character=col + 1),
                ),
                message=exc.message,
                severity=DiagnosticSeverity.Error,
                source=SOURCE,
            )
        )
    else:
        for found in check(SourceCode(source, tokens), options):
            line = found.line - 1
            col = found.column - 1
            edit_start = offset_to_position(source, found.fix.start)
            edit_end = offset_to_position(source, found.fix.end)
            diagnostics.append(
                Diagnostic(
                    range=Range(
                        start=Position(line=line, character=col),
                        end=Position(line=line, character=col + 1),
                    ),
                    message=found.message,
                    severity=DiagnosticSeverity.Warning,
                    code=found.kind.value,
                    source=SOURCE,
                    data={
                        "start": {"line": edit_start.line, "character": edit_start.character},
                        "end": {"line": edit_end.line, "character": edit_end.character},
                        "newText": found.fix.text,
                    },
                )
            )

    ls.text_document_publish_diagnostics(
        PublishDiagnosticsParams(uri=uri, diagnostics=diagnostics)
    )


def _code_actions(uri: str, diagnostics: list[Diagnostic]) -> list[CodeAction]:
    """One quick fix per parenspace diagnostic that carries a fix."""
    actions: list[CodeAction] = []
    for diag in diagnostics:
        if diag.source != SOURCE or not isinstance(diag.data, dict):
            continue
        data = diag.data
        edit = TextEdit(
            range=Range(
                start=Position(**data["start"]),
                end=Position(**data["end"]),
            ),
            new_text=data["newText"],
        )
        actions.append(
            CodeAction(
                title=f"Fix: {diag.message}",
                kind=CodeActionKind.QuickFix,
                diagnostics=[diag],
                edit=WorkspaceEdit(changes={uri: [edit]}),
            )
        )
    return actions


@server.feature(TEXT_DOCUMENT_DID_OPEN)
def did_open(ls: ParenSpaceServer, params: DidOpenTextDocumentParams) -> None:
    _validate(ls, params.text_document.uri, ls.rule_options)


@server.feature(TEXT_DOCUMENT_DID_CHANGE)
def did_change(ls: ParenSpaceServer, params: DidChangeTextDocumentParams) -> None:
    _validate(ls, params.text_document.uri, ls.rule_options)


@server.feature(
    TEXT_DOCUMENT_CODE_ACTION,
    CodeActionOptions(code_action_kinds=[CodeActionKind.QuickFix]),
)
def code_action(ls: ParenSpaceServer, params: CodeActionParams) -> list[CodeAction]:
    return _code_actions(params.text_document.uri, list(params.context.diagnostics))


def main(argv: list[str] | None = None) -> int:
    """Start the server on stdio. Returns 2 on invalid options."""
    args = build_parser().parse_args(argv)
    try:
        server.rule_options = options_from_args(args)
    except ConfigError as exc:
        # stdout carries the protocol
        print(str(exc), file=sys.stderr)
        return 2
    server.start_io()
    return 0
