from __future__ import annotations

"""
A minimal pygls-based Language Server for Monkey.

Features:
- Text synchronization and document store
- Diagnostics: parser errors, located at the offending token
- Hover: builtin signatures and top-level `let` bindings
- Completion: keywords, builtins, top-level `let` bindings
- Document Symbols: from the indexer

Note: buffers are parsed, never evaluated.
"""

import logging
from dataclasses import dataclass
from typing import Dict, List, Optional

from pygls.server import LanguageServer
from lsprotocol.types import (
    DidOpenTextDocumentParams,
    DidChangeTextDocumentParams,
    DidCloseTextDocumentParams,
    Diagnostic,
    DiagnosticSeverity,
    Position,
    Range,
    Hover,
    MarkupContent,
    MarkupKind,
    CompletionItem,
    CompletionItemKind,
    CompletionList,
    CompletionParams,
    HoverParams,
    DocumentSymbolParams,
    DocumentSymbol,
    SymbolKind,
)

from monkey.config import get_log_level
from monkey_lsp.indexer import build_index, BUILTIN_SIGNATURES, KEYWORDS, DocumentIndex

logger = logging.getLogger(__name__)

SOURCE = "monkey-ls"


@dataclass
class DocumentState:
    text: str
    index: DocumentIndex


class MonkeyLanguageServer(LanguageServer):
    CMD_NAME = "monkey-ls"

    def __init__(self):
        super().__init__(self.CMD_NAME, "v0.1")
        self.documents: Dict[str, DocumentState] = {}


ls = MonkeyLanguageServer()


# --- Text sync ---
@ls.feature("textDocument/didOpen")
def did_open(params: DidOpenTextDocumentParams):
    uri = params.text_document.uri
    _update_document(uri, params.text_document.text or "")


@ls.feature("textDocument/didChange")
def did_change(params: DidChangeTextDocumentParams):
    uri = params.text_document.uri
    # pygls has already applied the (possibly incremental) changes
    text = ls.workspace.get_text_document(uri).source
    _update_document(uri, text)


@ls.feature("textDocument/didClose")
def did_close(params: DidCloseTextDocumentParams):
    uri = params.text_document.uri
    ls.documents.pop(uri, None)
    ls.publish_diagnostics(uri, [])


def _update_document(uri: str, text: str) -> None:
    idx = build_index(text)
    ls.documents[uri] = DocumentState(text=text, index=idx)
    logger.debug("indexed %s: %d symbol(s), %d diagnostic(s)", uri, len(idx.symbols), len(idx.diagnostics))
    ls.publish_diagnostics(uri, build_diagnostics(idx))


# --- Diagnostics ---
def _mk_range(line: int, col: int, length: int = 1) -> Range:
    return Range(start=Position(line=line, character=col), end=Position(line=line, character=col + length))


def build_diagnostics(idx: DocumentIndex) -> List[Diagnostic]:
    return [
        Diagnostic(
            range=_mk_range(d.line, d.col),
            message=d.message,
            severity=DiagnosticSeverity.Error,
            source=SOURCE,
        )
        for d in idx.diagnostics
    ]


# --- Hover ---
def hover_text(word: str, idx: DocumentIndex) -> Optional[str]:
    # a `let` binding shadows a builtin of the same name
    if word in idx.symbols:
        sdef = idx.symbols[word]
        return f"{word} — {sdef.kind} (defined at {sdef.line+1}:{sdef.col+1})"
    return BUILTIN_SIGNATURES.get(word)


@ls.feature("textDocument/hover")
def on_hover(params: HoverParams) -> Optional[Hover]:
    state = ls.documents.get(params.text_document.uri)
    if not state:
        return None
    word = extract_word_at(state.text, params.position.line, params.position.character)
    if not word:
        return None
    contents = hover_text(word, state.index)
    if contents is None:
        return None
    return Hover(contents=MarkupContent(kind=MarkupKind.PlainText, value=contents))


# --- Completion ---
def completion_items(idx: DocumentIndex) -> List[CompletionItem]:
    items: List[CompletionItem] = [CompletionItem(label=kw, kind=CompletionItemKind.Keyword) for kw in KEYWORDS]
    for name, sig in BUILTIN_SIGNATURES.items():
        items.append(CompletionItem(label=name, kind=CompletionItemKind.Function, detail=sig))
    for name, sdef in idx.symbols.items():
        kind = CompletionItemKind.Function if sdef.kind == "function" else CompletionItemKind.Variable
        items.append(CompletionItem(label=name, kind=kind))
    return items


@ls.feature("textDocument/completion")
def on_completion(params: CompletionParams) -> CompletionList:
    state = ls.documents.get(params.text_document.uri)
    if not state:
        return CompletionList(is_incomplete=False, items=[])
    return CompletionList(is_incomplete=False, items=completion_items(state.index))


# --- Document Symbols ---
@ls.feature("textDocument/documentSymbol")
def on_document_symbols(params: DocumentSymbolParams) -> Optional[List[DocumentSymbol]]:
    state = ls.documents.get(params.text_document.uri)
    if not state:
        return None
    symbols: List[DocumentSymbol] = []
    for name, sdef in state.index.symbols.items():
        rng = _mk_range(sdef.line, sdef.col, len(name))
        symbols.append(
            DocumentSymbol(
                name=name,
                kind=SymbolKind.Function if sdef.kind == "function" else SymbolKind.Variable,
                range=rng,
                selection_range=rng,
            )
        )
    return symbols


# --- Helpers ---
def _is_word_char(ch: str) -> bool:
    return ch.isalpha() or ch == "_"


def extract_word_at(text: str, line: int, character: int) -> Optional[str]:
    """Identifier under the cursor, or None."""
    lines = text.splitlines()
    if line >= len(lines):
        return None
    line_text = lines[line]
    start = min(character, len(line_text))
    while start > 0 and _is_word_char(line_text[start - 1]):
        start -= 1
    end = min(character, len(line_text))
    while end < len(line_text) and _is_word_char(line_text[end]):
        end += 1
    word = line_text[start:end]
    return word or None


def main() -> None:
    logging.basicConfig(level=get_log_level())
    # Run the language server over stdio
    ls.start_io()


if __name__ == "__main__":
    main()
