"""Core evaluator for Rocket documents.

Every expression evaluates to a string. A list is a directive call: its head
names a built-in handler or, failing that, a user binding found through the
scope chain. User macros and templates are re-evaluated at every call site,
and text they produce that still contains directive syntax is parsed again
and evaluated in the same scope. A depth counter bounds that re-entrancy.
"""

from __future__ import annotations

from contextlib import contextmanager
from typing import Callable, Iterable, Iterator, Optional

from rocket import Expr
from rocket.config import get_max_depth, get_version
from rocket.errors import (
    RocketArityError,
    RocketError,
    RocketRecursionLimit,
    RocketUnknownDirective,
)
from rocket.evaluation import template_matcher
from rocket.evaluation.directives import DIRECTIVES
from rocket.modules.resolver import Resolver
from rocket.reader.parser import DIRECTIVE_START, parse_text
from rocket.types.binding import Binding, Macro, TemplateGroup, Value
from rocket.types.environment import Environment
from rocket.types.form import Form, Position
from rocket.types.symbol import Symbol


def passthrough(text: str) -> str:
    return text


class Evaluator:
    """
    Tree-walking evaluator for one compile run.

    Owns the per-run state. `metadata` is written by `theme-config` and the
    headings; `section_level` counts open heading sections; `depth` counts
    nested expansions.
    """

    def __init__(
        self,
        resolver: Resolver,
        markdown: Callable[[str], str] | None = None,
        version: Callable[[], str] | None = None,
        max_depth: int | None = None,
    ):
        self.resolver = resolver
        self.markdown = markdown or passthrough
        self.version = version or get_version
        self.max_depth = max_depth if max_depth is not None else get_max_depth()
        self.metadata: dict[str, str] = {}
        self.depth = 0
        self.section_level = 0
        # position of the directive call whose handler is running
        self.call_site: Optional[Position] = None

    def evaluate(self, expr: Expr, env: Environment) -> str:
        if isinstance(expr, Form):
            return self.evaluate_form(expr, env)
        if isinstance(expr, Symbol):
            return expr.id
        # --- Atoms render as their text ---
        return str(expr)

    def evaluate_all(self, exprs: Iterable[Expr], env: Environment, sep: str = "") -> str:
        """Evaluate left to right and join the results."""
        return sep.join([self.evaluate(e, env) for e in exprs])

    def name_of(self, expr: Expr, env: Environment) -> str:
        """Name used for dispatch and definitions: symbols drop one leading ':'."""
        if isinstance(expr, Symbol):
            return expr.name
        return self.evaluate(expr, env)

    def evaluate_form(self, form: Form, env: Environment) -> str:
        if not form:
            return ""
        try:
            name = self.name_of(form[0], env)

            # --- Built-in directives first ---
            handler = DIRECTIVES.get(name)
            if handler is not None:
                previous, self.call_site = self.call_site, form.position
                try:
                    return handler(form.tail, env, self)
                finally:
                    self.call_site = previous

            # --- Then user definitions in scope ---
            binding = env.get(name)
            if binding is None:
                raise RocketUnknownDirective(f"Unknown directive {name}")
            return self.invoke(name, binding, form.tail, env)
        except RocketError as err:
            err.locate(form.position)
            raise
        except RecursionError:
            # Nested built-ins use stack without counting towards max_depth
            raise RocketRecursionLimit(
                "Expression nested too deeply to evaluate", form.position
            ) from None

    def invoke(self, name: str, binding: Binding, args: tuple[Expr, ...], env: Environment) -> str:
        match binding:
            case Value(text=text):
                self._no_arguments(name, args)
                return text
            case Macro(body=body):
                self._no_arguments(name, args)
                with self.nested():
                    # Re-evaluated in the caller's scope on every call
                    return self.reenter(self.evaluate(body, env), env)
            case TemplateGroup():
                values = [self.evaluate(arg, env) for arg in args]
                template, captures = template_matcher.resolve(binding, name, values)
                with self.nested(), env.child() as scope:
                    scope.update({k: Value(v) for k, v in captures.items()})
                    return self.reenter(self.evaluate(template.body, scope), scope)
        raise TypeError(f"Cannot invoke binding {binding!r}")

    def reenter(self, text: str, env: Environment) -> str:
        """Evaluate directive syntax that a macro or template produced as text."""
        if DIRECTIVE_START not in text:
            return text
        with self.nested():
            exprs = parse_text(text, self.resolver.current)
            return self.reenter(self.evaluate_all(exprs, env), env)

    @contextmanager
    def nested(self) -> Iterator[int]:
        if self.depth >= self.max_depth:
            raise RocketRecursionLimit(
                f"Macro expansion nested deeper than {self.max_depth} levels"
            )
        self.depth += 1
        try:
            yield self.depth
        finally:
            self.depth -= 1

    @staticmethod
    def _no_arguments(name: str, args: tuple[Expr, ...]) -> None:
        if args:
            raise RocketArityError(f"{name} takes no arguments, got {len(args)}")
