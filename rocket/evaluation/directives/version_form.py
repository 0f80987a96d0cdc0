from __future__ import annotations

from typing import TYPE_CHECKING

from rocket import Expr
from rocket.errors import RocketArityError
from rocket.types.binding import Value
from rocket.types.environment import Environment

if TYPE_CHECKING:
    from rocket.evaluation.evaluator import Evaluator


def version_form(
    tail: tuple[Expr, ...],
    env: Environment,
    evaluator: Evaluator,
) -> str:
    """
    (version)         -> full version, e.g. 3.4.0
    (version "x.y")   -> as many leading components as the format has, e.g. 3.4
    (version "")      -> empty
    """
    full = evaluator.version()
    if not tail:
        return full
    if len(tail) > 1:
        raise RocketArityError("version takes at most 1 argument")

    with env.child() as scope:
        scope.define("version", Value(full))
        fmt = evaluator.evaluate(tail[0], scope)

    if not fmt:
        return ""
    n_components = fmt.count(".") + 1
    return ".".join(full.split(".")[:n_components])
