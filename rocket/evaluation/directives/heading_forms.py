"""Heading directives h1 ... h6.

Each heading opens a `<section>` one level below the current one, or closes
sections to get back to its own level. The first heading of a document also
becomes its `title` metadata unless one was configured already.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from rocket import Expr, Handler
from rocket.errors import RocketArityError, RocketStructureError
from rocket.evaluation.directives.formatting_forms import escape_html
from rocket.types.environment import Environment

if TYPE_CHECKING:
    from rocket.evaluation.evaluator import Evaluator


def title_to_id(title: str) -> str:
    """Anchor id for a heading: `A Title!` -> `a-title33`."""
    parts = []
    for ch in title:
        if ch.isalnum():
            parts.append(ch.lower())
        elif ch in "-_":
            parts.append(ch)
        elif ch == " ":
            parts.append("-")
        else:
            parts.append(str(ord(ch)))
    return "".join(parts)


def open_section(evaluator: Evaluator, level: int) -> str:
    """Markup that moves the section nesting to `level`."""
    current = evaluator.section_level
    if level > current + 1:
        raise RocketStructureError(f"h{level} cannot follow a level {current} heading")
    evaluator.section_level = level
    if level == current + 1:
        return "<section>"
    return "</section>" * (current - level)


def close_sections(evaluator: Evaluator) -> str:
    """Close every open section; called once at the end of a compile."""
    closing = "</section>" * evaluator.section_level
    evaluator.section_level = 0
    return closing


def heading(level: int) -> Handler:
    """(hN title) or (hN id title)"""

    def heading_form(
        tail: tuple[Expr, ...],
        env: Environment,
        evaluator: Evaluator,
    ) -> str:
        if len(tail) == 1:
            title = evaluator.evaluate(tail[0], env)
            anchor = title_to_id(title)
        elif len(tail) == 2:
            anchor = evaluator.evaluate(tail[0], env)
            title = evaluator.evaluate(tail[1], env)
        else:
            raise RocketArityError(f"h{level} takes a title and an optional id")

        evaluator.metadata.setdefault("title", title)
        prefix = open_section(evaluator, level)
        return f'{prefix}<h{level} id="{escape_html(anchor)}">{title}</h{level}>'

    return heading_form


HEADINGS = {f"h{level}": heading(level) for level in range(1, 7)}
