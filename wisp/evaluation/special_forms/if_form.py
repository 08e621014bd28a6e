from wisp import SExpression, LispValue
from wisp.evaluation.arity import expect_exactly
from wisp.evaluation.evaluator import evaluate
from wisp.types.environment import Environment
from wisp.types.value import as_bool


def if_form(tail: list[SExpression], env: Environment) -> LispValue:
    """(if condition then else) -- both branches are required."""
    expect_exactly("if", tail, env, 3)

    cond, then_expr, else_expr = tail
    if as_bool(evaluate(cond, env)):
        return evaluate(then_expr, env)
    return evaluate(else_expr, env)
