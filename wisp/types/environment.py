"""Runtime environment for Wisp.

The Environment stores bindings of names to evaluated Lisp values and supports
nested scopes via an `outer` link. The `outer` link is only ever read: writes
always land in the local frame.

Builtins are not stored here. They live in the process-wide table
`wisp.builtin.BUILTINS` and are resolved by exact name *before* any binding,
so user code cannot shadow `+`, `if`, `define` and friends.
"""

from __future__ import annotations

from io import StringIO
from typing import Mapping, Optional

from wisp import LispValue
from wisp.errors import AtomNotDefined
from wisp.types.atom import Atom


def reserved() -> Mapping[str, LispValue]:
    """Return the builtin name table."""
    # Imported lazily: the table pulls in the evaluator, which imports this module.
    from wisp.builtin import BUILTINS
    return BUILTINS


def is_reserved(name: str) -> bool:
    return name in reserved()


class Environment:
    """Hierarchical mapping from names to Lisp values."""

    __slots__ = ("vars", "outer")

    def __init__(
        self,
        outer: Optional[Environment] = None,
        bindings: Optional[Mapping[str, LispValue]] = None,
    ):
        self.vars: dict[str, LispValue] = dict(bindings) if bindings else {}
        self.outer: Environment | None = outer

    def get(self, name: str) -> LispValue:
        """Look up the value bound to `name`.

        Order of resolution:
        1) Builtin table (special forms, builtins, constants)
        2) This frame
        3) Each outer frame in turn
        Raises AtomNotDefined if not found.
        """
        table = reserved()
        if name in table:
            return table[name]
        env: Optional[Environment] = self
        while env is not None:
            if name in env.vars:
                return env.vars[name]
            env = env.outer
        raise AtomNotDefined(Atom(name), self.snapshot())

    def has(self, name: str) -> bool:
        """Same walk as `get`, answering whether it would succeed."""
        if is_reserved(name):
            return True
        env: Optional[Environment] = self
        while env is not None:
            if name in env.vars:
                return True
            env = env.outer
        return False

    def set(self, name: str, value: LispValue) -> None:
        """Bind `name` to `value` in this frame."""
        self.vars[name] = value

    def combine(self, other: Environment) -> None:
        """Copy in the other frame's bindings; names already bound here keep their values."""
        for name, value in other.vars.items():
            self.vars.setdefault(name, value)

    def child(self) -> Environment:
        """A fresh, empty frame whose lookups fall through to this one."""
        return Environment(outer=self)

    def snapshot(self) -> dict[str, LispValue]:
        """A copy of this frame's bindings, used in error reports."""
        return dict(self.vars)

    def __str__(self) -> str:
        """Human-readable single-frame view, the form used in error reports."""
        from wisp.types.value import render_scope
        return render_scope(self.vars)

    def __repr__(self) -> str:
        """Detailed chain representation for debugging purposes."""
        with StringIO() as buffer:
            buffer.write("<Environment chain: ")
            env = self
            chain = []
            while env is not None:
                chain.append(str(env))
                env = env.outer
            buffer.write(" -> ".join(chain))
            buffer.write(">")
            return buffer.getvalue()
