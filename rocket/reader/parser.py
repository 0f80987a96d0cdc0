"""
  Rocket Reader, Lexer and Parser

- Streaming, lazy lexing with line/column tracking
- Emits plain Python values instead of a node class:

    - lists   -> Form (tuple subclass carrying its Position)
    - symbols -> Symbol (directive names keep their leading ':')
    - strings -> str
    - numbers -> Number (keeps the literal text)

Two entry points:

    parse(source)      the whole text is a sequence of expressions
    parse_text(text)   literal text with embedded `(:...)` expressions; text
                       between expressions is kept verbatim as str segments
"""

from __future__ import annotations

import re
from typing import Iterator, NamedTuple, Optional

from rocket import Expr
from rocket.errors import RocketSyntaxError
from rocket.types.form import Form, Position
from rocket.types.number import Number
from rocket.types.symbol import Symbol


TOKEN_RE = re.compile(
    r"(?P<ws>\s+)"
    r"|(?P<lparen>\()"  # (
    r"|(?P<rparen>\))"  # )
    r'|(?P<string>"(?:\\.|[^\\"])*")'  # double-quoted strings
    r'|(?P<open_string>")'  # a quote that never closes
    r'|(?P<symbol>[^\s()"]+)',  # everything else: symbols and numbers
    re.DOTALL,
)

NUMBER_RE = re.compile(r"[-+]?\d+(?:\.\d+)?")

ESCAPES: dict[str, str] = {
    '"': '"',
    "\\": "\\",
    "n": "\n",
}

ESCAPE_RE = re.compile(r"\\(.)", re.DOTALL)

DIRECTIVE_START = "(:"


class Token(NamedTuple):
    kind: str
    value: str
    position: Position
    end: int


def lex(source: str, start: int = 0, path: Optional[str] = None) -> Iterator[Token]:
    """Token generator: yields Tokens from `source[start:]`, skipping whitespace."""
    pos = start
    n = len(source)
    line = source.count("\n", 0, start) + 1
    line_start = source.rfind("\n", 0, start) + 1

    while pos < n:
        m = TOKEN_RE.match(source, pos)
        kind = m.lastgroup
        text = m.group()
        position = Position(path, line, pos - line_start + 1)

        if kind == "open_string":
            raise RocketSyntaxError("Unterminated string", position)
        if kind != "ws":
            yield Token(kind, text, position, m.end())

        newlines = text.count("\n")
        if newlines:
            line += newlines
            line_start = pos + text.rfind("\n") + 1
        pos = m.end()


def unescape(literal: str) -> str:
    """Strip the quotes from a string token and resolve its escapes."""
    body = literal[1:-1]
    return ESCAPE_RE.sub(lambda m: ESCAPES.get(m.group(1), m.group(0)), body)


def read_atom(text: str, position: Optional[Position] = None) -> Expr:
    # Numbers
    if NUMBER_RE.fullmatch(text):
        return Number(text)
    return Symbol(text, position)


class TokenStream:
    def __init__(self, token_iter: Iterator[Token]):
        self.tokens = iter(token_iter)
        self.buffer: list[Token] = []
        # offset just past the last consumed token
        self.offset = 0

    def peek(self) -> Optional[Token]:
        if not self.buffer:
            try:
                self.buffer.append(next(self.tokens))
            except StopIteration:
                return None
        return self.buffer[0]

    def advance(self) -> Optional[Token]:
        tok = self.buffer.pop(0) if self.buffer else next(self.tokens, None)
        if tok is not None:
            self.offset = tok.end
        return tok

    def parse_atom(self, tok: Token) -> Expr:
        if tok.kind == "symbol":
            return read_atom(tok.value, tok.position)

        # String
        if tok.kind == "string":
            return unescape(tok.value)

        if tok.kind == "rparen":
            raise RocketSyntaxError("Unmatched ')'", tok.position)

        raise RocketSyntaxError(f"Unknown token: {tok.kind} {tok.value!r}", tok.position)

    def parse_list(self, opening: Token) -> Form:
        """Read up to the matching ')'.

        Open lists live on an explicit stack, so nesting depth is not bound by
        the Python call stack.
        """
        stack: list[tuple[Token, list[Expr]]] = [(opening, [])]
        while True:
            tok = self.advance()
            if tok is None:
                raise RocketSyntaxError("Unmatched '('", stack[-1][0].position)
            if tok.kind == "lparen":
                stack.append((tok, []))
                continue
            if tok.kind != "rparen":
                stack[-1][1].append(self.parse_atom(tok))
                continue

            start, items = stack.pop()
            form = Form(items, start.position)
            if not stack:
                return form
            stack[-1][1].append(form)

    def parse_expr(self) -> Expr:
        tok = self.advance()
        if tok is None:
            raise RocketSyntaxError("Unexpected end of input")

        # List
        if tok.kind == "lparen":
            return self.parse_list(tok)
        return self.parse_atom(tok)

    def parse_all(self) -> Iterator[Expr]:
        while self.peek() is not None:
            yield self.parse_expr()


def parse(source: str, path: Optional[str] = None) -> tuple[Expr, ...]:
    """Parse a whole document into its top-level expressions."""
    return tuple(TokenStream(lex(source, path=path)).parse_all())


def parse_text(text: str, path: Optional[str] = None) -> tuple[Expr, ...]:
    """Parse literal text with embedded directive expressions."""
    segments: list[Expr] = []
    pos = 0
    while True:
        idx = text.find(DIRECTIVE_START, pos)
        if idx < 0:
            if pos < len(text):
                segments.append(text[pos:])
            return tuple(segments)
        if idx > pos:
            segments.append(text[pos:idx])
        stream = TokenStream(lex(text, idx, path))
        segments.append(stream.parse_expr())
        pos = stream.offset
