"""Lexical scopes for Rocket.

An Environment stores the definition table of one scope (name -> Binding)
and links to its enclosing scope through `outer`. Scopes only point outward,
so a chain never forms a reference cycle. Child scopes are used as context
managers: leaving the `with` block discards the scope's table whether the
evaluation inside succeeded or failed.
"""

from __future__ import annotations

from io import StringIO
from typing import Mapping, Optional

from rocket.errors import RocketUnboundName
from rocket.types.binding import Binding


class Environment:
    """Hierarchical mapping from names to Bindings."""

    __slots__ = ("vars", "outer")

    def __init__(self, outer: Optional[Environment] = None):
        self.vars: dict[str, Binding] = {}
        self.outer: Environment | None = outer

    def child(self) -> Environment:
        """Create a new scope whose parent is this one."""
        return Environment(outer=self)

    @property
    def root(self) -> Environment:
        env = self
        while env.outer is not None:
            env = env.outer
        return env

    def define(self, name: str, binding: Binding) -> None:
        """Bind `name` in this scope, replacing any existing binding here."""
        self.vars[name] = binding

    def find(self, name: str) -> Optional[Environment]:
        """Find the nearest environment in the chain that binds `name`."""
        env: Optional[Environment] = self
        while env is not None:
            if name in env.vars:
                return env
            env = env.outer
        return None

    def get(self, name: str) -> Optional[Binding]:
        env = self.find(name)
        return env.vars[name] if env is not None else None

    def lookup(self, name: str) -> Binding:
        """Look up the binding for `name`, innermost scope first.

        Raises RocketUnboundName if no scope in the chain binds it.
        """
        env = self.find(name)
        if env is None:
            raise RocketUnboundName(f"Cannot lookup unbound name {name}")
        return env.vars[name]

    def update(self, mapping: Mapping[str, Binding]) -> None:
        """Bulk-define a mapping of name -> binding in the current frame."""
        for k, v in mapping.items():
            self.vars[k] = v

    def discard(self) -> None:
        self.vars.clear()

    def __enter__(self) -> Environment:
        return self

    def __exit__(self, *exc) -> None:
        self.discard()

    def _write_vars(self, buffer: StringIO) -> None:
        """Write this frame's bindings into the buffer in a compact form."""
        buffer.write("{")
        buffer.write(", ".join(f"{k}: {v!r}" for k, v in self.vars.items()))
        buffer.write("}")

    def __str__(self) -> str:
        """Human-readable single-frame view with an indicator for parent."""
        with StringIO() as buffer:
            self._write_vars(buffer)
            if self.outer is not None:
                buffer.write(" -> ...")
            return buffer.getvalue()

    def __repr__(self) -> str:
        """Detailed chain representation for debugging purposes."""
        chain = []
        env: Optional[Environment] = self
        while env is not None:
            with StringIO() as env_buf:
                env._write_vars(env_buf)
                chain.append(env_buf.getvalue())
            env = env.outer
        return "<Environment chain: " + " -> ".join(chain) + ">"
