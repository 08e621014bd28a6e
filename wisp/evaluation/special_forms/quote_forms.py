from wisp import SExpression, LispValue
from wisp.types.environment import Environment


def quote_form(tail: list[SExpression], env: Environment) -> LispValue:
    """(quote a b c) => (a b c), nothing evaluated."""
    return list(tail)
