from __future__ import annotations

from typing import TYPE_CHECKING

from rocket import Expr
from rocket.errors import RocketArityError, RocketTypeError
from rocket.types.binding import Value
from rocket.types.environment import Environment
from rocket.types.form import Form

if TYPE_CHECKING:
    from rocket.evaluation.evaluator import Evaluator


def let_form(
    tail: tuple[Expr, ...],
    env: Environment,
    evaluator: Evaluator,
) -> str:
    """
    (let (name value name value ...) body...)
    Bindings are sequential: each value already sees the names bound before it.
    """
    if not tail:
        raise RocketArityError("let requires a binding list")

    bindings = tail[0]
    if not isinstance(bindings, Form):
        raise RocketTypeError(f"let bindings must be a list, got {bindings!r}")
    if len(bindings) % 2 != 0:
        raise RocketArityError("let bindings must be name/value pairs", bindings.position)

    with env.child() as scope:
        for name_expr, value_expr in zip(bindings[::2], bindings[1::2]):
            name = evaluator.name_of(name_expr, scope)
            scope.define(name, Value(evaluator.evaluate(value_expr, scope)))
        return evaluator.evaluate_all(tail[1:], scope)
