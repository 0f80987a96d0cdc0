from __future__ import annotations

from typing import Iterable, NamedTuple, Optional


class Position(NamedTuple):
    path: Optional[str]
    line: int
    column: int

    def __str__(self):
        return f"{self.path or '<string>'}:{self.line}:{self.column}"


class Form(tuple):
    """A parenthesised list of expressions.

    Forms are tuples so a parsed tree cannot be mutated by the evaluator. The
    source position rides along as an attribute and takes no part in equality,
    so `Form([...]) == (Symbol(":x"),)` compares contents only.
    """

    def __new__(cls, items: Iterable = (), position: Optional[Position] = None):
        self = super().__new__(cls, items)
        self.position = position
        return self

    @property
    def head(self):
        return self[0] if self else None

    @property
    def tail(self) -> tuple:
        return tuple(self[1:])

    def __repr__(self):
        return f"Form({list(self)!r})"
