from __future__ import annotations

from dataclasses import dataclass

from wisp import NativeFn


@dataclass(frozen=True, eq=False)
class Builtin:
    """A named native operation.

    `special` marks special forms: the evaluator hands them their argument
    forms unevaluated together with the caller's environment.
    """

    name: str
    fn: NativeFn
    special: bool = False

    def __eq__(self, other: object) -> bool:
        return isinstance(other, Builtin) and self.fn is other.fn

    def __hash__(self) -> int:
        return hash((self.name, id(self.fn)))

    def __call__(self, args, env):
        return self.fn(args, env)

    def __repr__(self) -> str:
        return f"<{self.name} at {id(self.fn):#x}>"
