"""Minimal LSP server for pl0check — diagnostics only."""

from __future__ import annotations

from lsprotocol.types import (
    TEXT_DOCUMENT_DID_CHANGE,
    TEXT_DOCUMENT_DID_OPEN,
    Diagnostic,
    DiagnosticSeverity,
    DidChangeTextDocumentParams,
    DidOpenTextDocumentParams,
    Position,
    PublishDiagnosticsParams,
    Range,
    TextDocumentSyncKind,
)
from pygls.lsp.server import LanguageServer

from pl0check import __version__
from pl0check.checker import check
from pl0check.errors import Severity
from pl0check.lines import LineIndex

server = LanguageServer(
    "pl0check-lsp", __version__, text_document_sync_kind=TextDocumentSyncKind.Full
)

_SEVERITIES = {
    Severity.ERROR: DiagnosticSeverity.Error,
    Severity.WARNING: DiagnosticSeverity.Warning,
}


def _validate(ls: LanguageServer, uri: str) -> None:
    """Run the checker and publish every recorded diagnostic."""
    doc = ls.workspace.get_text_document(uri)
    source = doc.source
    index = LineIndex(source)
    diagnostics: list[Diagnostic] = []

    for d in check(source).diagnostics.sorted():
        line, col = index.line_col(d.offset)
        diagnostics.append(
            Diagnostic(
                range=Range(
                    start=Position(line=line - 1, character=col - 1),
                    end=Position(line=line - 1, character=col),
                ),
                message=d.message,
                severity=_SEVERITIES[d.severity],
                source="pl0check",
            )
        )

    ls.text_document_publish_diagnostics(
        PublishDiagnosticsParams(uri=uri, diagnostics=diagnostics)
    )


@server.feature(TEXT_DOCUMENT_DID_OPEN)
def did_open(ls: LanguageServer, params: DidOpenTextDocumentParams) -> None:
    _validate(ls, params.text_document.uri)


@server.feature(TEXT_DOCUMENT_DID_CHANGE)
def did_change(ls: LanguageServer, params: DidChangeTextDocumentParams) -> None:
    _validate(ls, params.text_document.uri)


def main() -> None:
    server.start_io()
