from wisp.types.atom import Atom
from wisp.types.unit import Unit, UnitType
from wisp.types.quote import Quote
from wisp.types.builtin import Builtin
from wisp.types.environment import Environment
from wisp.types.lambda_fn import Lambda

__all__ = [
    "Atom",
    "Unit",
    "UnitType",
    "Quote",
    "Builtin",
    "Environment",
    "Lambda",
]
