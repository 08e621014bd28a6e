from __future__ import annotations

"""
A minimal pygls-based Language Server for Wisp.

Features:
- Text synchronization and document store
- Diagnostics: reader errors, unmatched parens, unterminated strings
- Hover: builtin signatures and locally defined names
- Completion: builtins and local names
- Signature Help: for builtins and local defuns
- Document Symbols: from indexer

Note: We avoid evaluating the buffer. We build a static index per document.
"""

import logging
from typing import Dict, Optional, List
from dataclasses import dataclass

from pygls.server import LanguageServer
from lsprotocol.types import (
    TEXT_DOCUMENT_COMPLETION,
    TEXT_DOCUMENT_DID_CHANGE,
    TEXT_DOCUMENT_DID_CLOSE,
    TEXT_DOCUMENT_DID_OPEN,
    TEXT_DOCUMENT_DOCUMENT_SYMBOL,
    TEXT_DOCUMENT_HOVER,
    TEXT_DOCUMENT_SIGNATURE_HELP,
    CompletionOptions,
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
    SignatureHelp,
    SignatureHelpOptions,
    SignatureInformation,
    ParameterInformation,
    SignatureHelpParams,
)

from wisp_lsp.indexer import build_index, BUILTIN_SIGNATURES, DocumentIndex, SymbolDef

SOURCE = "wisp-ls"


@dataclass
class DocumentState:
    text: str
    index: DocumentIndex


class WispLanguageServer(LanguageServer):
    CMD_NAME = "wisp-ls"

    def __init__(self):
        super().__init__(self.CMD_NAME, "v0.1")
        self._logger = logging.getLogger("WispLanguageServer")
        self.documents: Dict[str, DocumentState] = {}

    def update(self, uri: str, text: str) -> DocumentState:
        state = DocumentState(text=text, index=build_index(text))
        self.documents[uri] = state
        self._logger.debug("indexed %s: %d symbols", uri, len(state.index.symbols))
        return state


ls = WispLanguageServer()


# --- Text sync ---
@ls.feature(TEXT_DOCUMENT_DID_OPEN)
def did_open(params: DidOpenTextDocumentParams):
    uri = params.text_document.uri
    state = ls.update(uri, params.text_document.text or "")
    ls.publish_diagnostics(uri, collect_diagnostics(state.index))


@ls.feature(TEXT_DOCUMENT_DID_CHANGE)
def did_change(params: DidChangeTextDocumentParams):
    uri = params.text_document.uri
    if params.content_changes:
        text = params.content_changes[-1].text
    else:
        text = ls.documents[uri].text if uri in ls.documents else ""
    state = ls.update(uri, text)
    ls.publish_diagnostics(uri, collect_diagnostics(state.index))


@ls.feature(TEXT_DOCUMENT_DID_CLOSE)
def did_close(params: DidCloseTextDocumentParams):
    uri = params.text_document.uri
    if uri in ls.documents:
        del ls.documents[uri]
    ls.publish_diagnostics(uri, [])


# --- Diagnostics ---
def _mk_range(line: int, col: int, length: int = 1) -> Range:
    return Range(start=Position(line=line, character=col), end=Position(line=line, character=col + length))


def collect_diagnostics(idx: DocumentIndex) -> List[Diagnostic]:
    diags: List[Diagnostic] = []

    if idx.malformed_at is not None:
        line, col = idx.malformed_at
        diags.append(
            Diagnostic(
                range=_mk_range(line, col),
                message="Malformed program: the reader cannot parse from here",
                severity=DiagnosticSeverity.Error,
                source=SOURCE,
            )
        )

    if idx.paren_balance != 0:
        diags.append(
            Diagnostic(
                range=_mk_range(0, 0),
                message="Unmatched parentheses detected",
                severity=DiagnosticSeverity.Warning,
                source=SOURCE,
            )
        )

    if idx.has_unmatched_quote:
        diags.append(
            Diagnostic(
                range=_mk_range(0, 0),
                message="Unterminated string detected",
                severity=DiagnosticSeverity.Warning,
                source=SOURCE,
            )
        )

    return diags


# --- Hover ---
def describe(word: str, idx: DocumentIndex) -> Optional[str]:
    if word in BUILTIN_SIGNATURES:
        return BUILTIN_SIGNATURES[word]
    sdef = idx.symbols.get(word)
    if sdef is None:
        return None
    if sdef.kind == 'function':
        signature = "(" + " ".join([word, *sdef.params]) + ")"
        return f"{signature} — function (defined at {sdef.line+1}:{sdef.col+1})"
    return f"{word} — {sdef.kind} (defined at {sdef.line+1}:{sdef.col+1})"


@ls.feature(TEXT_DOCUMENT_HOVER)
def on_hover(params: HoverParams) -> Optional[Hover]:
    state = ls.documents.get(params.text_document.uri)
    if not state:
        return None

    word = extract_word_at(state.text, params.position.line, params.position.character)
    if not word:
        return None

    contents = describe(word, state.index)
    if contents is None:
        return None
    return Hover(contents=MarkupContent(kind=MarkupKind.PlainText, value=contents))


# --- Completion ---
def completion_items(idx: DocumentIndex) -> List[CompletionItem]:
    items: List[CompletionItem] = []
    for name, sig in BUILTIN_SIGNATURES.items():
        items.append(CompletionItem(label=name, kind=CompletionItemKind.Function, detail=sig))
    for name, sdef in idx.symbols.items():
        kind = CompletionItemKind.Function if sdef.kind == 'function' else CompletionItemKind.Variable
        items.append(CompletionItem(label=name, kind=kind))
    return items


@ls.feature(TEXT_DOCUMENT_COMPLETION, CompletionOptions(trigger_characters=["("]))
def on_completion(params: CompletionParams) -> CompletionList:
    state = ls.documents.get(params.text_document.uri)
    if not state:
        return CompletionList(is_incomplete=False, items=[])
    return CompletionList(is_incomplete=False, items=completion_items(state.index))


# --- Signature Help ---
def signature_label(callee: str, idx: DocumentIndex) -> Optional[str]:
    if callee in BUILTIN_SIGNATURES:
        return BUILTIN_SIGNATURES[callee]
    sdef = idx.symbols.get(callee)
    if sdef is not None and sdef.kind == 'function':
        return f"({' '.join([callee, *sdef.params])})"
    return None


@ls.feature(TEXT_DOCUMENT_SIGNATURE_HELP, SignatureHelpOptions(trigger_characters=["(", " "]))
def on_signature_help(params: SignatureHelpParams) -> Optional[SignatureHelp]:
    state = ls.documents.get(params.text_document.uri)
    if not state:
        return None

    line_text = get_line_prefix(state.text, params.position.line, params.position.character)
    callee = extract_callee_name(line_text)
    if not callee:
        return None

    label = signature_label(callee, state.index)
    if not label:
        return None

    # Parameters are the tokens after the name, inside the parentheses
    params_list = label.strip("()").split()[1:]
    parameters = [ParameterInformation(label=p) for p in params_list]

    return SignatureHelp(
        signatures=[SignatureInformation(label=label, parameters=parameters)],
        active_signature=0,
        active_parameter=0,
    )


# --- Document Symbols ---
def _symbol(name: str, sdef: SymbolDef) -> DocumentSymbol:
    rng = Range(
        start=Position(line=sdef.line, character=sdef.col),
        end=Position(line=sdef.line, character=sdef.col + len(name)),
    )
    return DocumentSymbol(
        name=name,
        kind=SymbolKind.Function if sdef.kind == 'function' else SymbolKind.Variable,
        range=rng,
        selection_range=rng,
    )


@ls.feature(TEXT_DOCUMENT_DOCUMENT_SYMBOL)
def on_document_symbols(params: DocumentSymbolParams) -> Optional[List[DocumentSymbol]]:
    state = ls.documents.get(params.text_document.uri)
    if not state:
        return None
    return [_symbol(name, sdef) for name, sdef in state.index.symbols.items()]


# --- Helpers ---

def get_line_prefix(text: str, line: int, character: int) -> str:
    # Return the text from start of line up to the cursor
    lines = text.splitlines(True)
    if line >= len(lines):
        return ""
    return lines[line][:character]


def extract_word_at(text: str, line: int, character: int) -> Optional[str]:
    lines = text.splitlines(True)
    if line >= len(lines):
        return None
    line_text = lines[line]
    # expand to word boundaries (anything but whitespace, parens and quotes)
    start = character
    while start > 0 and line_text[start - 1] not in " \t()'\"\n\r":
        start -= 1
    end = character
    while end < len(line_text) and line_text[end] not in " \t()'\"\n\r":
        end += 1
    word = line_text[start:end]
    return word or None


def extract_callee_name(prefix: str) -> Optional[str]:
    # find last '(' and take following token
    lp = prefix.rfind('(')
    if lp == -1:
        return None
    tail = prefix[lp + 1:].strip()
    if not tail:
        return None
    return tail.split()[0].rstrip(')') or None


def main():
    # Run the language server over stdio
    ls.start_io()


if __name__ == "__main__":
    main()
