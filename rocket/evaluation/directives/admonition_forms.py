from __future__ import annotations

from typing import TYPE_CHECKING

from rocket import Expr, Handler
from rocket.errors import RocketArityError
from rocket.types.environment import Environment

if TYPE_CHECKING:
    from rocket.evaluation.evaluator import Evaluator

ADMONITION = (
    '<div class="admonition admonition-{kind}">'
    '<span class="admonition-title admonition-title-{kind}">'
    "{title}</span>"
    "{body}</div>\n"
)


def admonition(kind: str, default_title: str) -> Handler:
    """Build the handler for `(kind title? body)`."""

    def admonition_form(
        tail: tuple[Expr, ...],
        env: Environment,
        evaluator: Evaluator,
    ) -> str:
        if len(tail) == 1:
            title = default_title
            body = evaluator.evaluate(tail[0], env)
        elif len(tail) == 2:
            title = evaluator.evaluate(tail[0], env)
            body = evaluator.evaluate(tail[1], env)
        else:
            raise RocketArityError(f"{kind} takes a body and an optional title")
        return ADMONITION.format(kind=kind, title=title, body=body)

    return admonition_form


note_form = admonition("note", "Note")
warning_form = admonition("warning", "Warning")
