"""Minimal LSP server for vibecss: unknown-class diagnostics and CSS hover."""

from __future__ import annotations

import os
import re
from pathlib import Path

from lsprotocol.types import (
    TEXT_DOCUMENT_DID_CHANGE,
    TEXT_DOCUMENT_DID_OPEN,
    TEXT_DOCUMENT_HOVER,
    Diagnostic,
    DiagnosticSeverity,
    DidChangeTextDocumentParams,
    DidOpenTextDocumentParams,
    Hover,
    HoverParams,
    MarkupContent,
    MarkupKind,
    Position,
    PublishDiagnosticsParams,
    Range,
    TextDocumentSyncKind,
)
from pygls.lsp.server import LanguageServer

from vibecss import __version__
from vibecss.cli import load_config
from vibecss.emitter import render_scoped
from vibecss.scanner import ClassScanner, clean_token
from vibecss.variants import resolve

server = LanguageServer("vibecss-lsp", __version__, text_document_sync_kind=TextDocumentSyncKind.Full)

# A class token is delimited by whitespace or attribute quotes
_WORD = re.compile(r"""[^\s"']+""")


def _options(ls: LanguageServer) -> tuple[str, bool]:
    """Prefix settings from the workspace's vibecss.toml, if any."""
    prefix, allow_unprefixed = "vibe", False
    root = ls.workspace.root_path
    if root:
        config = load_config(None, Path(root))
        if isinstance(config.get("prefix"), str):
            prefix = config["prefix"]
        if isinstance(config.get("allow_unprefixed"), bool):
            allow_unprefixed = config["allow_unprefixed"]
    return prefix, allow_unprefixed


def _extension(uri: str) -> str:
    filename = uri.rsplit("/", 1)[-1] if "/" in uri else uri
    return os.path.splitext(filename)[1] or ".razor"


def _occurrences(source: str, token: str) -> list[Range]:
    pattern = re.compile(r"""(?<![^\s"'])""" + re.escape(token) + r"""(?![^\s"'])""")
    ranges: list[Range] = []
    for line_no, line in enumerate(source.splitlines()):
        for m in pattern.finditer(line):
            ranges.append(
                Range(
                    start=Position(line=line_no, character=m.start()),
                    end=Position(line=line_no, character=m.end()),
                )
            )
    return ranges


def _validate(ls: LanguageServer, uri: str) -> None:
    """Scan the document and publish a warning for every unknown class."""
    doc = ls.workspace.get_text_document(uri)
    source = doc.source
    prefix, allow_unprefixed = _options(ls)
    scanner = ClassScanner(prefix, allow_unprefixed)
    diagnostics: list[Diagnostic] = []

    for token in scanner.scan_content(source, _extension(uri)):
        if resolve(token, prefix, allow_unprefixed) is not None:
            continue
        for rng in _occurrences(source, token):
            diagnostics.append(
                Diagnostic(
                    range=rng,
                    message=f"unknown utility class: {token}",
                    severity=DiagnosticSeverity.Warning,
                    source="vibecss",
                )
            )

    ls.text_document_publish_diagnostics(
        PublishDiagnosticsParams(uri=uri, diagnostics=diagnostics)
    )


def _hover(ls: LanguageServer, params: HoverParams) -> Hover | None:
    """Show the generated CSS for the class under the cursor."""
    doc = ls.workspace.get_text_document(params.text_document.uri)
    lines = doc.source.splitlines()
    pos = params.position
    if pos.line >= len(lines):
        return None

    line = lines[pos.line]
    for m in _WORD.finditer(line):
        if m.start() <= pos.character < m.end():
            break
    else:
        return None

    token = clean_token(m.group())
    prefix, allow_unprefixed = _options(ls)
    rule = resolve(token, prefix, allow_unprefixed)
    if rule is None or rule.is_empty:
        return None

    return Hover(
        contents=MarkupContent(
            kind=MarkupKind.Markdown,
            value=f"```css\n{render_scoped(rule)}\n```",
        ),
        range=Range(
            start=Position(line=pos.line, character=m.start()),
            end=Position(line=pos.line, character=m.end()),
        ),
    )


@server.feature(TEXT_DOCUMENT_DID_OPEN)
def did_open(ls: LanguageServer, params: DidOpenTextDocumentParams) -> None:
    _validate(ls, params.text_document.uri)


@server.feature(TEXT_DOCUMENT_DID_CHANGE)
def did_change(ls: LanguageServer, params: DidChangeTextDocumentParams) -> None:
    _validate(ls, params.text_document.uri)


@server.feature(TEXT_DOCUMENT_HOVER)
def hover(ls: LanguageServer, params: HoverParams) -> Hover | None:
    return _hover(ls, params)


def main() -> None:
    server.start_io()
