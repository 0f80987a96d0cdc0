"""Include/import resolution.

The resolver turns a path written in a document into a canonical path,
parses each distinct document at most once per compile run, and keeps the
stack of documents currently being evaluated so that cycles are reported
instead of recursing forever.
"""

from __future__ import annotations

import logging
from contextlib import contextmanager
from pathlib import Path
from typing import Iterable, Iterator, Optional

from rocket import Expr
from rocket.errors import RocketCircularImport, RocketError, RocketFileError
from rocket.modules.loaders import Loader
from rocket.reader.parser import parse
from rocket.types.form import Position

log = logging.getLogger(__name__)


class Resolver:
    def __init__(self, loader: Loader, search_roots: Iterable[Path] = ()):
        self.loader = loader
        self.search_roots = [str(root) for root in search_roots]
        self._cache: dict[str, tuple[Expr, ...]] = {}
        self._stack: list[str] = []

    @property
    def current(self) -> Optional[str]:
        """Canonical path of the document being evaluated, if it has one."""
        return self._stack[-1] if self._stack else None

    def resolve(self, path: str) -> str:
        """Resolve `path` relative to the current document's directory.

        Falls back to the configured search roots when the document has no
        sibling of that name.
        """
        directory = self.loader.dirname(self.current) if self.current else None
        candidate = self.loader.canonical(path, directory)
        if self.loader.exists(candidate):
            return candidate
        for root in self.search_roots:
            alternative = self.loader.canonical(path, root)
            if self.loader.exists(alternative):
                log.debug("Resolved %s through search root %s", path, root)
                return alternative
        return candidate

    def parse(self, canonical: str) -> tuple[Expr, ...]:
        """Return the cached AST for `canonical`, loading it on first use."""
        cached = self._cache.get(canonical)
        if cached is not None:
            log.debug("Parsed-file cache hit for %s", canonical)
            return cached

        log.debug("Loading %s", canonical)
        try:
            data = self.loader.load(canonical)
        except OSError as ex:
            raise RocketFileError(f"Cannot load '{canonical}': {ex}") from ex
        try:
            source = data.decode("utf-8")
        except UnicodeDecodeError as ex:
            raise RocketFileError(f"'{canonical}' is not valid UTF-8: {ex}") from ex

        exprs = parse(source, canonical)
        self._cache[canonical] = exprs
        return exprs

    @contextmanager
    def entering(self, canonical: str, position: Optional[Position] = None) -> Iterator[str]:
        """Mark `canonical` as in progress for the duration of the block.

        Errors escaping the block gain `position` (the include/import call
        site) in their position chain.
        """
        if canonical in self._stack:
            chain = self._stack[self._stack.index(canonical):] + [canonical]
            raise RocketCircularImport(chain, position)

        self._stack.append(canonical)
        try:
            yield canonical
        except RocketError as err:
            if err.position is None:
                err.locate(position)
            else:
                err.add_frame(position)
            raise
        finally:
            self._stack.pop()
