from __future__ import annotations


class UnitType:
    """The canonical "no value". Absorbs every binary arithmetic operation."""

    _instance: UnitType | None = None

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self): return "@"

    # Unit is equal only to Unit
    def __eq__(self, other):
        return isinstance(other, UnitType)

    def __hash__(self):
        return hash(UnitType)


Unit = UnitType()
