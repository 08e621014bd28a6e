from wisp import SExpression, LispValue
from wisp.errors import InvalidArgument
from wisp.evaluation.arity import expect_at_least
from wisp.evaluation.evaluator import evaluate, evaluate_all
from wisp.types.atom import Atom
from wisp.types.environment import Environment
from wisp.types.unit import Unit
from wisp.types.value import as_bool, as_list


def for_form(tail: list[SExpression], env: Environment) -> LispValue:
    """
    (for var list body...)

    Binds `var` in the current scope to each element in turn and evaluates the
    body. Returns the last value of the final iteration, or Unit for an empty list.
    """
    expect_at_least("for", tail, env, 2)

    var, list_expr, *body = tail
    if not isinstance(var, Atom):
        raise InvalidArgument(var, env.snapshot())

    result: LispValue = Unit
    for item in as_list(evaluate(list_expr, env)):
        env.set(var.name, item)
        result = evaluate_all(body, env)
    return result


def while_form(tail: list[SExpression], env: Environment) -> LispValue:
    """
    (while condition body...)

    Re-evaluates the condition before every pass. Returns the last body value
    of the last pass, or Unit if the condition was never truthy.
    """
    expect_at_least("while", tail, env, 1)

    cond, *body = tail
    result: LispValue = Unit
    while as_bool(evaluate(cond, env)):
        result = evaluate_all(body, env)
    return result
