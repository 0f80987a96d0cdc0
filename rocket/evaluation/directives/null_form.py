from __future__ import annotations

from typing import TYPE_CHECKING

from rocket import Expr
from rocket.types.environment import Environment

if TYPE_CHECKING:
    from rocket.evaluation.evaluator import Evaluator


def null_form(
    tail: tuple[Expr, ...],
    env: Environment,
    evaluator: Evaluator,
) -> str:
    """
    (null anything...)
    Arguments are not evaluated.
    """
    return ""
