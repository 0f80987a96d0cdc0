"""Special forms: if, not, = and !=.

Truth is textual: the empty string is false, anything else is true, and the
predicates produce "true" or "".
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from rocket import Expr
from rocket.errors import RocketArityError
from rocket.types.environment import Environment

if TYPE_CHECKING:
    from rocket.evaluation.evaluator import Evaluator

TRUE = "true"
FALSE = ""


def if_form(
    tail: tuple[Expr, ...],
    env: Environment,
    evaluator: Evaluator,
) -> str:
    """(if condition then else?): only the chosen branch is evaluated."""
    if len(tail) not in (2, 3):
        raise RocketArityError("if requires a condition, a then-expression and an optional else-expression")

    if evaluator.evaluate(tail[0], env):
        return evaluator.evaluate(tail[1], env)
    elif len(tail) > 2:
        return evaluator.evaluate(tail[2], env)
    return FALSE


def not_form(
    tail: tuple[Expr, ...],
    env: Environment,
    evaluator: Evaluator,
) -> str:
    if len(tail) != 1:
        raise RocketArityError("not requires exactly 1 argument")
    return FALSE if evaluator.evaluate(tail[0], env) else TRUE


def equals_form(
    tail: tuple[Expr, ...],
    env: Environment,
    evaluator: Evaluator,
) -> str:
    if len(tail) < 2:
        raise RocketArityError("= requires at least 2 arguments")
    first = evaluator.evaluate(tail[0], env)
    # Stops at the first mismatch, like `all`
    same = all(evaluator.evaluate(other, env) == first for other in tail[1:])
    return TRUE if same else FALSE


def not_equals_form(
    tail: tuple[Expr, ...],
    env: Environment,
    evaluator: Evaluator,
) -> str:
    return FALSE if equals_form(tail, env, evaluator) else TRUE
