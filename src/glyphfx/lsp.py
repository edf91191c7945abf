"""Minimal LSP server for glyphfx markup — diagnostics only."""

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

from glyphfx.effects import builtin_registry
from glyphfx.engine import apply
from glyphfx.errors import EffectError, GlyphFxError, MarkupError
from glyphfx.font import MonospaceFont
from glyphfx.parser import parse
from glyphfx.tokens import Span

server = LanguageServer("glyphfx-lsp", "0.1.0", text_document_sync_kind=TextDocumentSyncKind.Full)

_FONT = MonospaceFont()


def _range(span: Span | None) -> Range:
    if span is None:
        return Range(start=Position(line=0, character=0), end=Position(line=0, character=0))
    return Range(
        start=Position(line=span.start.line - 1, character=span.start.column - 1),
        end=Position(line=span.end.line - 1, character=span.end.column - 1),
    )


def _diagnostic(exc: GlyphFxError, severity: DiagnosticSeverity) -> Diagnostic:
    return Diagnostic(
        range=_range(exc.span),
        message=exc.message,
        severity=severity,
        source="glyphfx",
    )


def _validate(ls: LanguageServer, uri: str) -> None:
    """Parse and apply the document against the built-in effects, publish diagnostics."""
    doc = ls.workspace.get_text_document(uri)
    source = doc.source
    filename = uri.rsplit("/", 1)[-1] if "/" in uri else uri
    diagnostics: list[Diagnostic] = []

    try:
        tokens = parse(source, filename)
    except MarkupError as exc:
        diagnostics.append(_diagnostic(exc, DiagnosticSeverity.Error))
    else:
        try:
            apply(tokens, builtin_registry(), _FONT, source=source)
        except EffectError as exc:
            diagnostics.append(_diagnostic(exc, DiagnosticSeverity.Warning))

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
