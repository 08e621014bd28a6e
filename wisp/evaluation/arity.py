"""Argument-count checks shared by special forms and builtins.

A failed check reports the builtin itself as the offending expression, along
with the scope of the call.
"""

from __future__ import annotations

from wisp import LispValue
from wisp.errors import TooFewArgs, TooManyArgs, arity_error
from wisp.types.environment import Environment, reserved


def _builtin(name: str) -> LispValue:
    return reserved()[name]


def expect_exactly(name: str, args: list, env: Environment, count: int) -> None:
    if len(args) != count:
        raise arity_error(count, len(args))(_builtin(name), env.snapshot())


def expect_at_least(name: str, args: list, env: Environment, count: int) -> None:
    if len(args) < count:
        raise TooFewArgs(_builtin(name), env.snapshot())


def expect_at_most(name: str, args: list, env: Environment, count: int) -> None:
    if len(args) > count:
        raise TooManyArgs(_builtin(name), env.snapshot())
