"""Lambda representation and free-variable capture for Wisp.

A Lambda does not keep a live reference to the scope it was created in.
Instead, the body is scanned for atoms at creation time and the bindings they
resolve to are copied into `captured`. Later rebinding in the defining scope is
therefore invisible to the closure.
"""

from __future__ import annotations

from typing import Iterator, Mapping, Optional

from wisp import SExpression, LispValue
from wisp.errors import InvalidLambda, arity_error
from wisp.types.atom import Atom
from wisp.types.environment import Environment, is_reserved
from wisp.types.quote import Quote


def used_atoms(expr: SExpression) -> Iterator[str]:
    """Yield the name of every atom occurring anywhere in `expr`."""
    match expr:
        case Atom():
            yield expr.name
        case Quote():
            yield from used_atoms(expr.inner)
        case list():
            for item in expr:
                yield from used_atoms(item)


class Lambda:
    """A first-class lambda with parameters, a body, and captured bindings."""

    __slots__ = ("params", "body", "captured")

    def __init__(
        self,
        params: list[Atom],
        body: SExpression,
        captured: Optional[Mapping[str, LispValue]] = None,
    ):
        for p in params:
            if not isinstance(p, Atom):
                raise InvalidLambda(p)
        self.params: list[Atom] = list(params)
        self.body: SExpression = body
        self.captured: dict[str, LispValue] = dict(captured) if captured else {}

    @classmethod
    def capture(cls, params: list[Atom], body: SExpression, env: Environment) -> Lambda:
        """Create a lambda, copying the bindings its body refers to out of `env`."""
        captured: dict[str, LispValue] = {}
        for name in used_atoms(body):
            if name in captured or is_reserved(name):
                continue
            if env.has(name):
                captured[name] = env.get(name)
        return cls(params, body, captured)

    def bind(self, args: list[LispValue], caller_env: Environment) -> Environment:
        """
        Bind argument values to this lambda's parameters and return the
        environment the body runs in: the captured bindings, parented to the
        caller's environment.
        """
        if len(args) != len(self.params):
            raise arity_error(len(self.params), len(args))(list(args), caller_env.snapshot())
        env = Environment(outer=caller_env, bindings=self.captured)
        for param, arg in zip(self.params, args):
            env.set(param.name, arg)
        return env

    def __eq__(self, other: object) -> bool:
        from wisp.types.value import equals
        return (
            isinstance(other, Lambda)
            and self.params == other.params
            and equals(self.body, other.body)
        )

    def __hash__(self) -> int:
        return hash(tuple(self.params))

    def __repr__(self) -> str:
        """Return the Lisp-style representation of the lambda."""
        from wisp.types.value import debug
        return debug(self)
