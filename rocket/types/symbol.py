from __future__ import annotations
import sys
from typing import Optional

from rocket.types.form import Position


class Symbol:
    __slots__ = ("id", "position")

    def __init__(self, name: str, position: Optional[Position] = None):
        # Intern to ensure fast equality/hash and reduce memory
        self.id = sys.intern(name)
        # Source location; ignored by equality
        self.position = position

    @property
    def name(self) -> str:
        """Directive/binding name: the symbol text without one leading ':'."""
        return self.id[1:] if self.id.startswith(":") and len(self.id) > 1 else self.id

    def __eq__(self, other: Symbol) -> bool:
        return isinstance(other, Symbol) and self.id == other.id

    def __hash__(self) -> int:
        return hash(self.id)

    def __repr__(self):
        return f"Symbol({self.id!r})"

    def __str__(self):
        return self.id
