"""Special forms: define and define-template.

Both store their body unevaluated in the current scope; the body runs again
at every call site.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from rocket import Expr
from rocket.errors import RocketArityError
from rocket.evaluation.template_matcher import compile_slot
from rocket.types.binding import Macro, TemplateDef, TemplateGroup, Value
from rocket.types.environment import Environment

if TYPE_CHECKING:
    from rocket.evaluation.evaluator import Evaluator


def define_form(
    tail: tuple[Expr, ...],
    env: Environment,
    evaluator: Evaluator,
) -> str:
    """
    (define name body)
    (define evaluate name body)   evaluates body once, now
    """
    if len(tail) == 3:
        if evaluator.evaluate(tail[0], env) != "evaluate":
            raise RocketArityError("define with 3 arguments must be (define evaluate name body)")
        name = evaluator.name_of(tail[1], env)
        env.define(name, Value(evaluator.evaluate(tail[2], env)))
        return ""

    if len(tail) != 2:
        raise RocketArityError("define requires exactly 2 arguments")

    name_expr, body = tail
    env.define(evaluator.name_of(name_expr, env), Macro(body))
    return ""


def define_template_form(
    tail: tuple[Expr, ...],
    env: Environment,
    evaluator: Evaluator,
) -> str:
    """
    (define-template name slot... body)
    A later template of the same name is tried before earlier ones.
    """
    if len(tail) < 2:
        raise RocketArityError("define-template requires a name and a body")

    name = evaluator.name_of(tail[0], env)
    template = TemplateDef(name, tuple(compile_slot(s) for s in tail[1:-1]), tail[-1])

    existing = env.get(name)
    group = existing if isinstance(existing, TemplateGroup) else TemplateGroup()
    env.define(name, group.extended(template))
    return ""
