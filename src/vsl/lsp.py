"""Minimal LSP server for VSL — syntax diagnostics only."""

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

from vsl import __version__
from vsl.errors import ParseError
from vsl.parser import Failed, parse_items

server = LanguageServer("vsl-lsp", __version__, text_document_sync_kind=TextDocumentSyncKind.Full)


def _to_diagnostic(exc: ParseError) -> Diagnostic:
    start_line = exc.span.start.line - 1
    start_col = exc.span.start.column - 1
    end_line = exc.span.end.line - 1
    end_col = exc.span.end.column - 1
    # Zero-width spans (end of input) still get one character highlighted
    if (end_line, end_col) <= (start_line, start_col):
        end_line, end_col = start_line, start_col + 1
    return Diagnostic(
        range=Range(
            start=Position(line=start_line, character=start_col),
            end=Position(line=end_line, character=end_col),
        ),
        message=exc.message,
        severity=DiagnosticSeverity.Error,
        source="vsl",
    )


def _validate(ls: LanguageServer, uri: str) -> None:
    """Parse the document with error recovery and publish every syntax error."""
    doc = ls.workspace.get_text_document(uri)
    diagnostics = [
        _to_diagnostic(item.error)
        for item in parse_items(doc.source)
        if isinstance(item, Failed)
    ]
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
