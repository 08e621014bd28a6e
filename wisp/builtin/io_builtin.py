"""I/O builtins: console, files, `include`, process exit and random numbers.

These block the (single) thread of evaluation until they complete.
"""
from __future__ import annotations

import logging
import random as _random
import sys
from typing import Callable

from wisp import LispValue
from wisp.config import get_random_seed, resolve_include
from wisp.errors import InvalidArgument, MismatchedTypes
from wisp.evaluation.arity import expect_at_least, expect_at_most, expect_exactly
from wisp.evaluation.evaluator import evaluate_all
from wisp.reader.parser import parse
from wisp.types.environment import Environment
from wisp.types import value as v

_logger = logging.getLogger("WispIO")

# Seeded once per process; WISP_RANDOM_SEED makes runs reproducible.
_rng = _random.Random(get_random_seed())


def _read_text(path: LispValue, env: Environment) -> str:
    filename = v.as_string(path)
    try:
        with open(filename, "r", encoding="utf-8") as f:
            return f.read()
    except OSError as e:
        _logger.debug("could not read %s: %s", filename, e)
        raise InvalidArgument(path, env.snapshot()) from e


def print_values(args: list[LispValue], env: Environment) -> LispValue:
    """(print a b ...) writes the display form of each argument, space separated."""
    expect_at_least("print", args, env, 1)
    print(" ".join(v.display(arg) for arg in args))
    return args[-1]


def read_input(args: list[LispValue], env: Environment) -> str:
    """(input [prompt]) => the next line of standard input, without its newline."""
    expect_at_most("input", args, env, 1)
    prompt = v.display(args[0]) if args else ""
    try:
        return input(prompt)
    except EOFError:
        return ""


def exit_process(args: list[LispValue], env: Environment) -> LispValue:
    """(exit [code]) terminates the process."""
    expect_at_most("exit", args, env, 1)
    code = v.as_int(args[0]) if args else 0
    sys.exit(code)


def read_file(args: list[LispValue], env: Environment) -> str:
    expect_exactly("read-file", args, env, 1)
    return _read_text(args[0], env)


def write_file(args: list[LispValue], env: Environment) -> int:
    """(write-file path contents) => 1 on success, 0 on failure."""
    expect_exactly("write-file", args, env, 2)
    filename, contents = v.as_string(args[0]), v.as_string(args[1])
    try:
        with open(filename, "w", encoding="utf-8") as f:
            f.write(contents)
    except OSError as e:
        _logger.debug("could not write %s: %s", filename, e)
        return 0
    return 1


def include(args: list[LispValue], env: Environment) -> LispValue:
    """
    (include path)

    Runs the file in a fresh environment, then copies its bindings into the
    caller's scope without replacing names the caller already bound. Returns
    the value of the file's last form.
    """
    expect_exactly("include", args, env, 1)
    path = resolve_include(v.as_string(args[0]))
    _logger.debug("including %s", path)
    source = _read_text(str(path), env)

    file_env = Environment()
    result = evaluate_all(parse(source), file_env)
    env.combine(file_env)
    return result


def random_number(args: list[LispValue], env: Environment) -> LispValue:
    """
    (random)           => float in [0, 1)
    (random low high)  => int in [low, high) for two ints, else a float
    """
    if not args:
        return _rng.random()
    expect_exactly("random", args, env, 2)
    low, high = args
    for bound in (low, high):
        if not v.is_number(bound):
            raise MismatchedTypes(bound, env.snapshot())
    if not v.less(low, high):
        raise InvalidArgument(high, env.snapshot())
    if isinstance(low, int) and isinstance(high, int):
        return _rng.randrange(low, high)
    return _rng.uniform(float(low), float(high))


IO_BUILTINS: dict[str, Callable[[list[LispValue], Environment], LispValue]] = {
    "exit": exit_process,
    "quit": exit_process,
    "print": print_values,
    "input": read_input,
    "include": include,
    "read-file": read_file,
    "write-file": write_file,
    "random": random_number,
}
