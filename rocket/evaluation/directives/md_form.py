from __future__ import annotations

from typing import TYPE_CHECKING

from rocket import Expr
from rocket.errors import RocketArityError
from rocket.types.environment import Environment

if TYPE_CHECKING:
    from rocket.evaluation.evaluator import Evaluator


def md_form(
    tail: tuple[Expr, ...],
    env: Environment,
    evaluator: Evaluator,
) -> str:
    """(md text): hand the evaluated text to the Markdown renderer."""
    if len(tail) != 1:
        raise RocketArityError("md requires exactly 1 argument")
    return evaluator.markdown(evaluator.evaluate(tail[0], env))
