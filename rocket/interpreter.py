from __future__ import annotations

import logging
from contextlib import nullcontext
from dataclasses import dataclass, field
from pathlib import Path
from typing import Callable, Iterable, Optional

from rocket import Expr
from rocket.config import get_include_roots
from rocket.errors import RocketError
from rocket.evaluation.directives.heading_forms import close_sections
from rocket.evaluation.evaluator import Evaluator
from rocket.modules.loaders import FileSystemLoader, Loader
from rocket.modules.resolver import Resolver
from rocket.reader.parser import parse
from rocket.types.environment import Environment

log = logging.getLogger(__name__)


@dataclass
class CompiledDocument:
    text: str
    metadata: dict[str, str] = field(default_factory=dict)


class Interpreter:
    """
    Compiles Rocket documents to text.

    Holds the collaborators (Markdown renderer, document loader, version
    provider). Each compile run gets its own Evaluator, Resolver and root
    scope, so nothing carries over from one document to the next.
    """

    def __init__(
        self,
        markdown: Callable[[str], str] | None = None,
        loader: Loader | None = None,
        version: Callable[[], str] | None = None,
        *,
        max_depth: int | None = None,
        search_roots: Iterable[Path] | None = None,
    ):
        self.markdown = markdown
        self.loader: Loader = loader if loader is not None else FileSystemLoader()
        self.version = version
        self.max_depth = max_depth
        self.search_roots = list(search_roots) if search_roots is not None else get_include_roots()

    def new_evaluator(self) -> Evaluator:
        resolver = Resolver(self.loader, self.search_roots)
        return Evaluator(resolver, self.markdown, self.version, self.max_depth)

    def compile(self, source: str, path: Optional[str] = None) -> CompiledDocument:
        """Compile `source`; `path` anchors relative includes and cycle checks."""
        evaluator = self.new_evaluator()
        canonical = self.loader.canonical(path) if path is not None else None
        try:
            exprs = parse(source, canonical)
        except RocketError as err:
            log.error("Failed to parse %s\n%s", canonical or "<string>", err)
            raise
        return self._run(evaluator, exprs, canonical)

    def compile_file(self, path: str) -> CompiledDocument:
        evaluator = self.new_evaluator()
        canonical = self.loader.canonical(path)
        try:
            exprs = evaluator.resolver.parse(canonical)
        except RocketError as err:
            log.error("Failed to load %s\n%s", canonical, err)
            raise
        return self._run(evaluator, exprs, canonical)

    def eval(self, code: str) -> str:
        """Compile a snippet and return only its text."""
        return self.compile(code).text

    def _run(self, evaluator: Evaluator, exprs: tuple[Expr, ...], canonical: Optional[str]) -> CompiledDocument:
        entering = evaluator.resolver.entering(canonical) if canonical is not None else nullcontext()
        try:
            with entering, Environment() as root:
                text = evaluator.evaluate_all(exprs, root) + close_sections(evaluator)
        except RocketError as err:
            log.error("Failed to compile %s\n%s", canonical or "<string>", err)
            raise
        return CompiledDocument(text, dict(evaluator.metadata))
