"""Application engine for Wisp.

This module centralizes function application semantics for the interpreter:
- Lambdas bind their parameters over the captured bindings, parented to the
  caller's environment, and evaluate their body there.
- Builtins are invoked with the argument list and the caller's environment.
  Special forms receive their arguments unevaluated, which is how `define`
  and friends reach into the caller's scope.

Errors raised by value-level operations inside a builtin do not know which
scope they happened in; they are stamped with the caller's scope on the way
out and re-raised unchanged otherwise.
"""

from __future__ import annotations

from wisp import LispValue
from wisp.errors import CallNonFunction, WispError
from wisp.types.builtin import Builtin
from wisp.types.environment import Environment
from wisp.types.lambda_fn import Lambda


def apply_lambda(fn: Lambda, args: list[LispValue], env: Environment) -> LispValue:
    """Apply a Lisp Lambda value to already-evaluated arguments.

    Arity must match exactly; a mismatch raises TooFewArgs or TooManyArgs.
    """
    # Imported here: the evaluator imports this module.
    from wisp.evaluation.evaluator import evaluate

    new_env = fn.bind(args, env)
    return evaluate(fn.body, new_env)


def apply_builtin(fn: Builtin, args: list[LispValue], env: Environment) -> LispValue:
    try:
        return fn(args, env)
    except WispError as err:
        if err.scope is None:
            err.scope = env.snapshot()
        raise


def apply(head: LispValue, args: list[LispValue], env: Environment) -> LispValue:
    """Apply either a Lambda or a Builtin.

    - For Lambda, defer to apply_lambda.
    - For Builtin, invoke with the argument list and the caller's env.
    - Otherwise, raise CallNonFunction.
    """
    if isinstance(head, Lambda):
        return apply_lambda(head, args, env)
    elif isinstance(head, Builtin):
        return apply_builtin(head, args, env)
    else:
        raise CallNonFunction(head, env.snapshot())
