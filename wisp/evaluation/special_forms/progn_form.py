from wisp import SExpression, LispValue
from wisp.evaluation.evaluator import evaluate_all
from wisp.types.environment import Environment


def do_form(tail: list[SExpression], env: Environment) -> LispValue:
    """(do expr...) -- evaluate in the current scope, return the last value."""
    return evaluate_all(tail, env)


def scope_form(tail: list[SExpression], env: Environment) -> LispValue:
    """(scope expr...) -- like `do`, but bindings made inside stay inside."""
    return evaluate_all(tail, env.child())
