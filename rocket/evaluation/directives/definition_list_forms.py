from __future__ import annotations

from typing import TYPE_CHECKING, Iterator

from rocket import Expr
from rocket.errors import RocketTypeError
from rocket.evaluation.directives.formatting_forms import escape_html
from rocket.types.environment import Environment
from rocket.types.form import Form

if TYPE_CHECKING:
    from rocket.evaluation.evaluator import Evaluator


def _entries(
    directive: str,
    tail: tuple[Expr, ...],
    env: Environment,
    evaluator: Evaluator,
    sep: str,
) -> Iterator[tuple[str, str]]:
    """Yield (term, definition) per entry list, in input order."""
    for node in tail:
        if not isinstance(node, Form) or not node:
            raise RocketTypeError(f"{directive} entries must be non-empty lists, got {node!r}")
        term = evaluator.evaluate(node[0], env)
        yield term, evaluator.evaluate_all(node[1:], env, sep)


def definition_list_form(
    tail: tuple[Expr, ...],
    env: Environment,
    evaluator: Evaluator,
) -> str:
    """(definition-list (term body...) ...)"""
    items = "".join(
        f"<dt>{term}</dt><dd>{body}</dd>"
        for term, body in _entries("definition-list", tail, env, evaluator, "")
    )
    return f"<dl>{items}</dl>"


def glossary_form(
    tail: tuple[Expr, ...],
    env: Environment,
    evaluator: Evaluator,
) -> str:
    """(glossary (term body...) ...): terms get `term-<term>` anchors."""
    items = "".join(
        f'<dt id="term-{escape_html(term)}">{term}</dt><dd>{body}</dd>'
        for term, body in _entries("glossary", tail, env, evaluator, " ")
    )
    return f'<dl class="glossary">{items}</dl>'
