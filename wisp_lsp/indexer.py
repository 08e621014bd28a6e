from __future__ import annotations

"""
Lightweight indexer for Wisp files without evaluating code.

We scan for definitions and build an index for:
- (define name ...) -> "var"
- (defun name (params...) body) -> "function", with its parameter names

The scanner is tolerant: it tokenizes with a regex so partial buffers never
crash it. Separately, the real reader is run once to report the first
malformed-program error, if any.
"""

from dataclasses import dataclass, field
from typing import List, Dict, Optional, Tuple
import re

from wisp.errors import MalformedProgram
from wisp.reader.parser import parse

# Simple token patterns for scanning
TOKEN_REGEX = re.compile(
    r"\s+|;.*$|\(|\)|'|\"(?:\\.|[^\"\\])*\"?|[^\s()'\"]+",
    re.MULTILINE,
)


@dataclass
class SymbolDef:
    name: str
    kind: str  # "var" | "function"
    line: int
    col: int
    params: List[str] = field(default_factory=list)


@dataclass
class DocumentIndex:
    symbols: Dict[str, SymbolDef] = field(default_factory=dict)
    paren_balance: int = 0
    has_unmatched_quote: bool = False
    # (line, col) of the text the reader could not parse, if any
    malformed_at: Optional[Tuple[int, int]] = None


def _iter_tokens(text: str):
    for m in TOKEN_REGEX.finditer(text):
        tok = m.group(0)
        if not tok or tok.isspace() or tok.startswith(';'):
            continue
        yield tok, m.start(), m.end()


def _position_from_offset(text: str, offset: int) -> Tuple[int, int]:
    # Return (line, col), 0-based
    line = text.count("\n", 0, offset)
    last_nl = text.rfind("\n", 0, offset)
    col = offset if last_nl == -1 else offset - last_nl - 1
    return line, col


def _collect_params(tokens: list, start: int) -> List[str]:
    # tokens[start] is expected to be '(' opening a parameter list
    params: List[str] = []
    if start >= len(tokens) or tokens[start][0] != '(':
        return params
    j = start + 1
    while j < len(tokens) and tokens[j][0] != ')':
        if tokens[j][0] not in ('(', "'"):
            params.append(tokens[j][0])
        j += 1
    return params


def build_index(text: str) -> DocumentIndex:
    idx = DocumentIndex()
    tokens = list(_iter_tokens(text))

    i = 0
    while i < len(tokens):
        tok, start, end = tokens[i]
        if tok == '(':
            idx.paren_balance += 1
            head = tokens[i + 1][0] if i + 1 < len(tokens) else None
            if head in ("define", "defun") and i + 2 < len(tokens):
                name, s, _ = tokens[i + 2]
                if name not in ('(', ')') and not name.startswith('"'):
                    line, col = _position_from_offset(text, s)
                    if head == "define":
                        idx.symbols[name] = SymbolDef(name=name, kind='var', line=line, col=col)
                    else:
                        idx.symbols[name] = SymbolDef(
                            name=name, kind='function', line=line, col=col,
                            params=_collect_params(tokens, i + 3),
                        )
        elif tok == ')':
            idx.paren_balance -= 1
        i += 1

    # simple unmatched quote detection: count unescaped quotes outside comments
    in_string = False
    esc = False
    in_comment = False
    for ch in text:
        if in_comment:
            in_comment = ch != '\n'
            continue
        if esc:
            esc = False
            continue
        if in_string and ch == '\\':
            esc = True
        elif ch == '"':
            in_string = not in_string
        elif ch == ';' and not in_string:
            in_comment = True
    idx.has_unmatched_quote = in_string

    try:
        parse(text)
    except MalformedProgram as e:
        rest = e.value if isinstance(e.value, str) else ""
        idx.malformed_at = _position_from_offset(text, max(len(text) - len(rest), 0))

    return idx


# Builtin signatures for quick hover/signature help without eval
BUILTIN_SIGNATURES: Dict[str, str] = {
    "do": "(do expr ...)",
    "if": "(if cond then else)",
    "scope": "(scope expr ...)",
    "quote": "(quote expr ...)",
    "defun": "(defun name params body)",
    "define": "(define name value)",
    "lambda": "(lambda params body)",
    "for": "(for var xs body ...)",
    "while": "(while cond body ...)",
    "eval": "(eval x)",
    "type": "(type x)",
    "parse": "(parse src)",
    "=": "(= a b)",
    "!=": "(!= a b)",
    ">": "(> a b)",
    "<": "(< a b)",
    ">=": "(>= a b)",
    "<=": "(<= a b)",
    "+": "(+ a b ...)",
    "-": "(- a b)",
    "*": "(* a b ...)",
    "/": "(/ a b)",
    "%": "(% a b)",
    "list": "(list x ...)",
    "push": "(push xs x ...)",
    "pop": "(pop xs)",
    "head": "(head xs)",
    "tail": "(tail xs)",
    "first": "(first xs)",
    "last": "(last xs)",
    "index": "(index xs i)",
    "insert": "(insert xs i x)",
    "remove": "(remove xs i)",
    "len": "(len xs)",
    "range": "(range low high)",
    "map": "(map f xs)",
    "filter": "(filter f xs)",
    "reduce": "(reduce f init xs)",
    "debug": "(debug x)",
    "display": "(display x)",
    "int": "(int x)",
    "float": "(float x)",
    "exit": "(exit code)",
    "quit": "(quit code)",
    "print": "(print x ...)",
    "input": "(input prompt)",
    "include": "(include path)",
    "read-file": "(read-file path)",
    "write-file": "(write-file path contents)",
    "random": "(random low high)",
    "endl": "endl",
}
