"""Special forms: include and import.

Both resolve their path against the directory of the document making the
call and evaluate the target in a fresh child of the root scope.

- include splices the produced text; the target's definitions are dropped.
- import drops the text and merges the target's top-level definitions into
  the caller's current scope; imported templates join the caller's
  same-named templates instead of replacing them.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from rocket import Expr
from rocket.errors import RocketArityError
from rocket.types.binding import Binding, TemplateGroup
from rocket.types.environment import Environment

if TYPE_CHECKING:
    from rocket.evaluation.evaluator import Evaluator

log = logging.getLogger(__name__)


def _target(directive: str, tail: tuple[Expr, ...], env: Environment, evaluator: Evaluator) -> str:
    if len(tail) != 1:
        raise RocketArityError(f"{directive} requires exactly 1 argument")
    return evaluator.resolver.resolve(evaluator.evaluate(tail[0], env))


def include_form(
    tail: tuple[Expr, ...],
    env: Environment,
    evaluator: Evaluator,
) -> str:
    target = _target("include", tail, env, evaluator)
    log.debug("Including %s", target)
    with evaluator.resolver.entering(target, evaluator.call_site):
        exprs = evaluator.resolver.parse(target)
        with env.root.child() as scope:
            return evaluator.evaluate_all(exprs, scope)


def _merged(name: str, imported: Binding, env: Environment) -> Binding:
    """Binding that `import` stores for `name` in the caller's scope.

    Templates the imported document added go in front of the templates the
    caller already sees under that name; any other binding replaces it.
    """
    current = env.get(name)
    if not (isinstance(imported, TemplateGroup) and isinstance(current, TemplateGroup)):
        return imported

    # the imported group was built on top of whatever the root scope held
    inherited = env.root.get(name)
    added = imported.templates
    if isinstance(inherited, TemplateGroup) and inherited.templates:
        cut = len(added) - len(inherited.templates)
        if cut >= 0 and added[cut:] == inherited.templates:
            added = added[:cut]
    return TemplateGroup(added + current.templates)


def import_form(
    tail: tuple[Expr, ...],
    env: Environment,
    evaluator: Evaluator,
) -> str:
    target = _target("import", tail, env, evaluator)
    log.debug("Importing %s", target)
    with evaluator.resolver.entering(target, evaluator.call_site):
        exprs = evaluator.resolver.parse(target)
        with env.root.child() as scope:
            evaluator.evaluate_all(exprs, scope)
            env.update({name: _merged(name, b, env) for name, b in scope.vars.items()})
    return ""
