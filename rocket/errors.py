from __future__ import annotations

from typing import Optional

from rocket.types.form import Position


class RocketError(Exception):
    """ Base class for all Rocket errors"""

    def __init__(self, message: str, position: Optional[Position] = None):
        super().__init__(message)
        self.message = message
        self.position = position
        # include/import call sites the error escaped through, innermost first
        self.trace: list[Position] = []

    def locate(self, position: Optional[Position]) -> None:
        """Attach `position` unless a more precise one is already known."""
        if self.position is None and position is not None:
            self.position = position

    def add_frame(self, position: Optional[Position]) -> None:
        if position is not None:
            self.trace.append(position)

    @property
    def chain(self) -> list[Position]:
        frames = [self.position] if self.position is not None else []
        return frames + self.trace

    def __str__(self):
        lines = [self.message]
        lines.extend(f"  --> {p}" for p in self.chain)
        return "\n".join(lines)


class RocketSyntaxError(RocketError):
    """ Raised when source text cannot be parsed"""


class RocketUnknownDirective(RocketError):
    """ Raised when a list head names neither a built-in nor a user definition"""


class RocketUnboundName(RocketError):
    """ Raised when a name is looked up that no enclosing scope binds"""


class RocketArityError(RocketError):
    """ Raised when a directive receives the wrong number of arguments"""


class RocketTypeError(RocketError):
    """ Raised when a directive argument has the wrong shape"""


class RocketNoMatchingTemplate(RocketError):
    """ Raised when no template of a given name matches the call arguments"""


class RocketCircularImport(RocketError):
    """ Raised when a document includes or imports itself, directly or not"""

    def __init__(self, chain: list[str], position: Optional[Position] = None):
        super().__init__("Circular import: " + " -> ".join(chain), position)
        self.paths = chain


class RocketFileError(RocketError):
    """ Raised when the loader cannot provide a document"""


class RocketRecursionLimit(RocketError):
    """ Raised when macro/template expansion nests deeper than allowed"""


class RocketStructureError(RocketError):
    """ Raised when a heading skips a section level"""
