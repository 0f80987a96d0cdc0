"""Values a scope can bind a name to."""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import Optional, Union

from rocket import Expr


@dataclass(frozen=True)
class Value:
    """Already evaluated text (let bindings, template captures, eager defines)."""
    text: str


@dataclass(frozen=True)
class Macro:
    """Unevaluated body of a zero-argument `define`."""
    body: Expr


@dataclass(frozen=True)
class LiteralSlot:
    token: str

    def match(self, arg: str) -> Optional[list[tuple[Optional[str], str]]]:
        return [] if arg == self.token else None


@dataclass(frozen=True)
class CaptureSlot:
    pattern: re.Pattern

    def match(self, arg: str) -> Optional[list[tuple[Optional[str], str]]]:
        """Full-match `arg`; return (group name or None, text) per capture."""
        m = self.pattern.fullmatch(arg)
        if m is None:
            return None
        if not self.pattern.groups:
            return [(None, m.group(0))]
        names = {index: name for name, index in self.pattern.groupindex.items()}
        return [
            (names.get(i), m.group(i) or "")
            for i in range(1, self.pattern.groups + 1)
        ]


Slot = Union[LiteralSlot, CaptureSlot]


@dataclass(frozen=True)
class TemplateDef:
    name: str
    slots: tuple[Slot, ...]
    body: Expr


@dataclass(frozen=True)
class TemplateGroup:
    """All templates visible under one name, most recently defined first."""
    templates: tuple[TemplateDef, ...] = field(default_factory=tuple)

    def extended(self, template: TemplateDef) -> TemplateGroup:
        return TemplateGroup((template,) + self.templates)


Binding = Union[Value, Macro, TemplateGroup]
