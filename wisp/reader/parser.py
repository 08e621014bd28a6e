"""
  Lisp Reader

- Single pass, recursive descent over the source text with a cursor.
- Emits Wisp values directly; code is data:

    - integers      -> int       (optional leading '-', digits; 64-bit, wrapping)
    - floats        -> float     (as above, with exactly one '.')
    - strings       -> str       ("..." with \\ \" \n \t escapes)
    - @             -> Unit
    - 'expr         -> Quote(expr)
    - ( ... )       -> list
    - anything else -> Atom      (a run of letters and punctuation)

  Comments start with ';' and run to the end of the line.
"""

from __future__ import annotations

import string
from typing import Iterator

from wisp import SExpression
from wisp.errors import MalformedProgram
from wisp.types.atom import Atom
from wisp.types.quote import Quote
from wisp.types.unit import Unit
from wisp.types.value import wrap_int

_DELIMITERS = frozenset('()"\'')
_DIGITS = frozenset(string.digits)
_PUNCTUATION = frozenset(string.punctuation)

UNESCAPES: dict[str, str] = {
    "\\": "\\",
    '"': '"',
    "n": "\n",
    "t": "\t",
}


def is_symbol_char(ch: str) -> bool:
    """Letters and punctuation, except the characters with reader meaning."""
    return (ch.isalpha() or ch in _PUNCTUATION) and ch not in _DELIMITERS


class Reader:
    def __init__(self, source: str):
        self.source = source
        self.pos = 0

    def at_end(self) -> bool:
        return self.pos >= len(self.source)

    def peek(self, offset: int = 0) -> str:
        i = self.pos + offset
        return self.source[i] if i < len(self.source) else ""

    def skip_whitespace_and_comments(self) -> None:
        # Loop so that runs of comment lines collapse.
        while not self.at_end():
            ch = self.source[self.pos]
            if ch.isspace():
                self.pos += 1
            elif ch == ";":
                end = self.source.find("\n", self.pos)
                self.pos = len(self.source) if end == -1 else end
            else:
                break

    def _malformed(self) -> MalformedProgram:
        return MalformedProgram(self.source[self.pos:])

    def parse_expr(self) -> SExpression:
        self.skip_whitespace_and_comments()
        if self.at_end():
            raise self._malformed()

        ch = self.peek()

        if ch == "'":
            self.pos += 1
            return Quote(self.parse_expr())

        if ch == "(":
            return self._parse_list()

        if ch in _DIGITS or (ch == "-" and self.peek(1) in _DIGITS):
            return self._parse_number()

        if ch == '"':
            return self._parse_string()

        if ch == "@":
            self.pos += 1
            return Unit

        if is_symbol_char(ch):
            start = self.pos
            while not self.at_end() and is_symbol_char(self.source[self.pos]):
                self.pos += 1
            return Atom(self.source[start:self.pos])

        # A stray ')' or a character with no meaning to the reader.
        raise self._malformed()

    def _parse_list(self) -> list[SExpression]:
        start = self.pos
        self.pos += 1  # consume '('
        items: list[SExpression] = []
        while True:
            self.skip_whitespace_and_comments()
            if self.at_end():
                raise MalformedProgram(self.source[start:])
            if self.peek() == ")":
                self.pos += 1
                return items
            items.append(self.parse_expr())

    def _parse_number(self) -> int | float:
        start = self.pos
        if self.peek() == "-":
            self.pos += 1
        seen_dot = False
        while not self.at_end():
            ch = self.source[self.pos]
            if ch in _DIGITS:
                self.pos += 1
            elif ch == ".":
                if seen_dot:
                    raise MalformedProgram(self.source[start:])
                seen_dot = True
                self.pos += 1
            else:
                break
        text = self.source[start:self.pos]
        if seen_dot:
            return float(text)
        try:
            return wrap_int(int(text))
        except ValueError:
            # More digits than int() will convert.
            raise MalformedProgram(self.source[start:])

    def _parse_string(self) -> str:
        start = self.pos
        self.pos += 1  # consume opening quote
        chars: list[str] = []
        while True:
            if self.at_end():
                raise MalformedProgram(self.source[start:])
            ch = self.source[self.pos]
            if ch == '"':
                self.pos += 1
                return "".join(chars)
            if ch == "\\":
                nxt = self.peek(1)
                if not nxt:
                    raise MalformedProgram(self.source[start:])
                # Unknown escapes are kept verbatim.
                chars.append(UNESCAPES.get(nxt, "\\" + nxt))
                self.pos += 2
                continue
            chars.append(ch)
            self.pos += 1

    def parse_all(self) -> Iterator[SExpression]:
        while True:
            self.skip_whitespace_and_comments()
            if self.at_end():
                break
            yield self.parse_expr()


def parse(source: str) -> list[SExpression]:
    """Read every top-level form in `source`, in order."""
    return list(Reader(source).parse_all())
