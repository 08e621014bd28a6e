from wisp import SExpression, LispValue
from wisp.errors import InvalidLambda
from wisp.evaluation.arity import expect_exactly
from wisp.evaluation.evaluator import evaluate
from wisp.types.environment import Environment, reserved
from wisp.types.lambda_fn import Lambda
from wisp.types.value import display


def define_form(tail: list[SExpression], env: Environment) -> LispValue:
    """
    (define name value)
    The name is taken literally; only the value is evaluated. Returns the value.
    """
    expect_exactly("define", tail, env, 2)

    name, val_expr = tail
    value = evaluate(val_expr, env)
    env.set(display(name), value)
    return value


def defun_form(tail: list[SExpression], env: Environment) -> LispValue:
    """(defun name (params...) body) -- bind a new lambda to `name` and return it."""
    expect_exactly("defun", tail, env, 3)

    name, params, body = tail
    if not isinstance(params, list):
        raise InvalidLambda(reserved()["defun"], env.snapshot())

    fn = Lambda.capture(params, body, env)
    env.set(display(name), fn)
    return fn
