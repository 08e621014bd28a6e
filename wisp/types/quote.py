from __future__ import annotations

from wisp import LispValue


class Quote:
    """A form whose single child is returned unevaluated."""

    __slots__ = ("inner",)

    def __init__(self, inner: LispValue):
        self.inner = inner

    def __eq__(self, other: object) -> bool:
        # Structural equality (Int/Float promotion) lives in value.equals
        from wisp.types.value import equals
        return isinstance(other, Quote) and equals(self.inner, other.inner)

    def __hash__(self) -> int:
        return hash(("quote", repr(self.inner)))

    def __repr__(self) -> str:
        return f"Quote({self.inner!r})"
