"""HTML formatting directives: strong, em, link, ul, ol and steps."""

from __future__ import annotations

from typing import TYPE_CHECKING

from rocket import Expr, Handler
from rocket.errors import RocketArityError, RocketTypeError
from rocket.types.binding import Macro
from rocket.types.environment import Environment
from rocket.types.form import Form
from rocket.types.symbol import Symbol

if TYPE_CHECKING:
    from rocket.evaluation.evaluator import Evaluator

HTML_ESCAPES = {
    '"': "&#34;",
    "'": "&#39;",
    "<": "&lt;",
    ">": "&gt;",
    "&": "&amp;",
}


def escape_html(text: str) -> str:
    return "".join(HTML_ESCAPES.get(ch, ch) for ch in text)


def marker(tag: str) -> Handler:
    """(tag words...): arguments joined with a space inside <tag>."""

    def marker_form(
        tail: tuple[Expr, ...],
        env: Environment,
        evaluator: Evaluator,
    ) -> str:
        return f"<{tag}>{evaluator.evaluate_all(tail, env, ' ')}</{tag}>"

    return marker_form


def html_list(tag: str) -> Handler:
    def list_form(
        tail: tuple[Expr, ...],
        env: Environment,
        evaluator: Evaluator,
    ) -> str:
        items = "".join(f"<li>{evaluator.evaluate(node, env)}</li>" for node in tail)
        return f"<{tag}>{items}</{tag}>"

    return list_form


def link_form(
    tail: tuple[Expr, ...],
    env: Environment,
    evaluator: Evaluator,
) -> str:
    """(link href body...): the body defaults to the href itself."""
    if not tail:
        raise RocketArityError("link requires an href")
    href = escape_html(evaluator.evaluate(tail[0], env))
    body = evaluator.evaluate_all(tail[1:], env, " ")
    return f'<a href="{href}">{body or href}</a>'


def _step(node: Expr, env: Environment) -> Form:
    # A bare name refers to a step list stored with (define name (label title body))
    if isinstance(node, Symbol):
        binding = env.lookup(node.name)
        if isinstance(binding, Macro):
            node = binding.body
    if not isinstance(node, Form) or len(node) != 3:
        raise RocketTypeError(f"steps entries must be (label title body) lists, got {node!r}")
    return node


def steps_form(
    tail: tuple[Expr, ...],
    env: Environment,
    evaluator: Evaluator,
) -> str:
    parts = ['<div class="steps">']
    for number, node in enumerate(tail, 1):
        _, title_expr, body_expr = _step(node, env)
        title = evaluator.evaluate(title_expr, env)
        body = evaluator.evaluate(body_expr, env)
        parts.append(
            '<div class="steps__step">'
            '<div class="steps__bullet">'
            f'<div class="steps__stepnumber">{number}</div></div>'
            f"<h4>{title}</h4><div>{body}</div></div>"
        )
    parts.append("</div>")
    return "".join(parts)


strong_form = marker("strong")
em_form = marker("em")
ul_form = html_list("ul")
ol_form = html_list("ol")
