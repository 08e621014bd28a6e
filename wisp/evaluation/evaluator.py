"""Core evaluator for the Wisp interpreter.

A direct tree walk over values using the Python call stack. There is no
trampoline, so deeply recursive Wisp programs are bounded by Python's
recursion limit and surface as RecursionError.
"""

from __future__ import annotations

from wisp import SExpression, LispValue
from wisp.errors import EvalEmptyList
from wisp.evaluation.apply import apply
from wisp.types.atom import Atom
from wisp.types.builtin import Builtin
from wisp.types.environment import Environment
from wisp.types.quote import Quote
from wisp.types.unit import Unit


def evaluate(expr: SExpression, env: Environment) -> LispValue:
    """Evaluate one form in `env`."""
    match expr:
        case Quote():
            return expr.inner

        case Atom():
            return env.get(expr.name)

        case []:
            raise EvalEmptyList(expr, env.snapshot())

        case [head, *tail_args]:
            fn = evaluate(head, env)
            # Special forms decide for themselves what to evaluate.
            if isinstance(fn, Builtin) and fn.special:
                return apply(fn, tail_args, env)
            args = [evaluate(arg, env) for arg in tail_args]
            return apply(fn, args, env)

    # --- Everything else evaluates to itself ---
    return expr


def evaluate_all(exprs: list[SExpression], env: Environment) -> LispValue:
    """Evaluate forms in order in `env`, returning the last result (Unit if none)."""
    result: LispValue = Unit
    for e in exprs:
        result = evaluate(e, env)
    return result
