from __future__ import annotations

from typing import TYPE_CHECKING

from rocket import Expr
from rocket.errors import RocketArityError
from rocket.types.environment import Environment

if TYPE_CHECKING:
    from rocket.evaluation.evaluator import Evaluator


def theme_config_form(
    tail: tuple[Expr, ...],
    env: Environment,
    evaluator: Evaluator,
) -> str:
    """
    (theme-config key value key value ...)
    Writes document metadata; a repeated key keeps its last value.
    """
    if len(tail) % 2 != 0:
        raise RocketArityError("theme-config requires key/value pairs")

    for key_expr, value_expr in zip(tail[::2], tail[1::2]):
        key = evaluator.evaluate(key_expr, env)
        evaluator.metadata[key] = evaluator.evaluate(value_expr, env)
    return ""
