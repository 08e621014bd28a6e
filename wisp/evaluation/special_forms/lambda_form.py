from wisp import SExpression, LispValue
from wisp.errors import InvalidLambda
from wisp.evaluation.arity import expect_exactly
from wisp.types.environment import Environment, reserved
from wisp.types.lambda_fn import Lambda


def lambda_form(tail: list[SExpression], env: Environment) -> LispValue:
    # (lambda (params...) body): the body is a single expression; use `do`
    # to sequence several.
    expect_exactly("lambda", tail, env, 2)

    params, body = tail
    if not isinstance(params, list):
        raise InvalidLambda(reserved()["lambda"], env.snapshot())

    return Lambda.capture(params, body, env)
