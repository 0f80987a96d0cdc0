"""Pattern matching for user templates.

A template is defined as

    (:define-template name slot... body)

where each slot is either a literal atom, which must equal the argument
exactly, or a capture slot `(re "PATTERN")`, which must match the whole
argument. Captured groups become bindings for the body: named groups under
their own name, unnamed groups under `1`, `2`, ... counted across all capture
slots in slot order. A capture slot without groups captures its whole match.
"""

from __future__ import annotations

import re
from typing import Optional, Sequence

from rocket import Expr
from rocket.errors import RocketNoMatchingTemplate, RocketSyntaxError, RocketTypeError
from rocket.types.binding import CaptureSlot, LiteralSlot, Slot, TemplateDef, TemplateGroup
from rocket.types.form import Form
from rocket.types.symbol import Symbol

CAPTURE_HEADS = ("re", ":re")


def atom_text(expr: Expr) -> str:
    if isinstance(expr, Symbol):
        return expr.id
    return str(expr)


def compile_slot(expr: Expr) -> Slot:
    """Turn one unevaluated slot expression into a matcher."""
    if not isinstance(expr, Form):
        return LiteralSlot(atom_text(expr))

    if len(expr) != 2 or not (isinstance(expr[0], Symbol) and expr[0].id in CAPTURE_HEADS):
        raise RocketTypeError(f"Template slot must be an atom or (re \"PATTERN\"), got {expr!r}", expr.position)
    pattern = atom_text(expr[1])
    try:
        return CaptureSlot(re.compile(pattern))
    except re.error as ex:
        raise RocketSyntaxError(f"Invalid template pattern {pattern!r}: {ex}", expr.position) from None


def match_template(template: TemplateDef, args: Sequence[str]) -> Optional[dict[str, str]]:
    """Return the captured bindings if every slot matches, else None."""
    if len(args) != len(template.slots):
        return None

    captures: dict[str, str] = {}
    positional = 0
    for slot, arg in zip(template.slots, args):
        groups = slot.match(arg)
        if groups is None:
            return None
        for name, text in groups:
            if name is None:
                positional += 1
                name = str(positional)
            captures[name] = text
    return captures


def resolve(group: TemplateGroup, name: str, args: Sequence[str]) -> tuple[TemplateDef, dict[str, str]]:
    """Try templates most recently defined first; the first match wins."""
    for template in group.templates:
        captures = match_template(template, args)
        if captures is not None:
            return template, captures
    raise RocketNoMatchingTemplate(
        f"No template {name!r} matches arguments {list(args)!r}"
    )
