"""Built-in functions for the Wisp runtime environment.

This module defines the core arithmetic, comparison, list processing,
higher-order, casting and introspection builtins. All of them receive their
arguments already evaluated.
"""
from __future__ import annotations

from functools import reduce as fold
from typing import Callable

from wisp import LispValue
from wisp.errors import IndexOutOfRange, InvalidArgument, MismatchedTypes
from wisp.evaluation.apply import apply
from wisp.evaluation.arity import expect_at_least, expect_exactly
from wisp.evaluation.evaluator import evaluate
from wisp.reader.parser import parse
from wisp.types.environment import Environment
from wisp.types import value as v


# -------------------------------
# Meta
# -------------------------------
def eval_value(args: list[LispValue], env: Environment) -> LispValue:
    """(eval x) evaluates the already-evaluated argument once more."""
    expect_exactly("eval", args, env, 1)
    return evaluate(args[0], env)


def get_type_name(args: list[LispValue], env: Environment) -> str:
    expect_exactly("type", args, env, 1)
    return v.type_name(args[0])


def parse_string(args: list[LispValue], env: Environment) -> list[LispValue]:
    """(parse "src") => list of the top-level forms in src."""
    expect_exactly("parse", args, env, 1)
    if not isinstance(args[0], str):
        raise InvalidArgument(args[0], env.snapshot())
    return parse(args[0])


# -------------------------------
# Comparison
# -------------------------------
def _comparison(name: str, op: Callable[[LispValue, LispValue], bool]):
    def compare(args: list[LispValue], env: Environment) -> int:
        expect_exactly(name, args, env, 2)
        return int(op(args[0], args[1]))

    compare.__name__ = compare.__qualname__ = f"compare_{op.__name__}"
    return compare


# -------------------------------
# Arithmetic
# -------------------------------
def _variadic(name: str, op: Callable[[LispValue, LispValue], LispValue]):
    """Left fold over two or more operands."""
    def arith(args: list[LispValue], env: Environment) -> LispValue:
        expect_at_least(name, args, env, 2)
        return fold(op, args)

    arith.__name__ = arith.__qualname__ = op.__name__
    return arith


def _binary(name: str, op: Callable[[LispValue, LispValue], LispValue]):
    def arith(args: list[LispValue], env: Environment) -> LispValue:
        expect_exactly(name, args, env, 2)
        return op(args[0], args[1])

    arith.__name__ = arith.__qualname__ = op.__name__
    return arith


# -------------------------------
# Lists
# -------------------------------
def make_list(args: list[LispValue], env: Environment) -> list[LispValue]:
    return list(args)


def push(args: list[LispValue], env: Environment) -> list[LispValue]:
    """(push xs a b ...) => xs with a, b, ... appended."""
    expect_at_least("push", args, env, 1)
    return v.push(args[0], *args[1:])


def pop(args: list[LispValue], env: Environment) -> LispValue:
    """(pop xs) => the last element of xs."""
    expect_exactly("pop", args, env, 1)
    _, last = v.pop(args[0])
    return last


def last(args: list[LispValue], env: Environment) -> LispValue:
    expect_exactly("last", args, env, 1)
    _, item = v.pop(args[0])
    return item


def head(args: list[LispValue], env: Environment) -> LispValue:
    expect_exactly("head", args, env, 1)
    return v.head(args[0])


def first(args: list[LispValue], env: Environment) -> LispValue:
    expect_exactly("first", args, env, 1)
    return v.head(args[0])


def tail(args: list[LispValue], env: Environment) -> list[LispValue]:
    expect_exactly("tail", args, env, 1)
    return v.tail(args[0])


def _position(index: LispValue, env: Environment) -> int:
    if not isinstance(index, int) or isinstance(index, bool):
        raise MismatchedTypes(index, env.snapshot())
    return index


def index(args: list[LispValue], env: Environment) -> LispValue:
    """(index xs i) => the i-th element of xs, counting from 0."""
    expect_exactly("index", args, env, 2)
    items = v.as_list(args[0])
    i = _position(args[1], env)
    if not 0 <= i < len(items):
        raise IndexOutOfRange(args[1], env.snapshot())
    return items[i]


def insert(args: list[LispValue], env: Environment) -> list[LispValue]:
    """(insert xs i x) => a copy of xs with x placed at position i (0..len)."""
    expect_exactly("insert", args, env, 3)
    items = v.as_list(args[0])
    i = _position(args[1], env)
    if not 0 <= i <= len(items):
        raise IndexOutOfRange(args[1], env.snapshot())
    return [*items[:i], args[2], *items[i:]]


def remove(args: list[LispValue], env: Environment) -> list[LispValue]:
    """(remove xs i) => a copy of xs without its i-th element."""
    expect_exactly("remove", args, env, 2)
    items = v.as_list(args[0])
    i = _position(args[1], env)
    if not 0 <= i < len(items):
        raise IndexOutOfRange(args[1], env.snapshot())
    return [*items[:i], *items[i + 1:]]


def length(args: list[LispValue], env: Environment) -> int:
    expect_exactly("len", args, env, 1)
    return len(v.as_list(args[0]))


def make_range(args: list[LispValue], env: Environment) -> list[LispValue]:
    """(range low high) => (low low+1 ... high-1), stepping by the integer 1."""
    expect_exactly("range", args, env, 2)
    low, high = args
    for bound in (low, high):
        if not v.is_number(bound):
            raise MismatchedTypes(bound, env.snapshot())

    result: list[LispValue] = []
    if v.greater_eq(low, high):
        return result
    while v.less(low, high):
        result.append(low)
        low = v.add(low, 1)
    return result


# -------------------------------
# Higher order
# -------------------------------
def map_list(args: list[LispValue], env: Environment) -> list[LispValue]:
    """(map f xs) => (f x) for each x, in order."""
    expect_exactly("map", args, env, 2)
    fn, items = args[0], v.as_list(args[1])
    return [apply(fn, [item], env) for item in items]


def filter_list(args: list[LispValue], env: Environment) -> list[LispValue]:
    """(filter f xs) => the elements x of xs for which (f x) is truthy."""
    expect_exactly("filter", args, env, 2)
    fn, items = args[0], v.as_list(args[1])
    return [item for item in items if v.as_bool(apply(fn, [item], env))]


def reduce_list(args: list[LispValue], env: Environment) -> LispValue:
    """(reduce f init xs) folds left: (f (f init x0) x1) ..."""
    expect_exactly("reduce", args, env, 3)
    fn, acc, items = args[0], args[1], v.as_list(args[2])
    for item in items:
        acc = apply(fn, [acc, item], env)
    return acc


# -------------------------------
# Formatting and casting
# -------------------------------
def display(args: list[LispValue], env: Environment) -> str:
    expect_exactly("display", args, env, 1)
    return v.display(args[0])


def debug(args: list[LispValue], env: Environment) -> str:
    expect_exactly("debug", args, env, 1)
    return v.debug(args[0])


def cast_to_int(args: list[LispValue], env: Environment) -> int:
    expect_exactly("int", args, env, 1)
    return v.as_int(args[0])


def cast_to_float(args: list[LispValue], env: Environment) -> float:
    expect_exactly("float", args, env, 1)
    return v.as_float(args[0])


CORE_BUILTINS: dict[str, Callable[[list[LispValue], Environment], LispValue]] = {
    # Meta operations
    "eval": eval_value,
    "type": get_type_name,
    "parse": parse_string,
    # Comparison operations
    "=": _comparison("=", v.equals),
    "!=": _comparison("!=", v.not_equals),
    ">": _comparison(">", v.greater),
    "<": _comparison("<", v.less),
    ">=": _comparison(">=", v.greater_eq),
    "<=": _comparison("<=", v.less_eq),
    # Arithmetic operations
    "+": _variadic("+", v.add),
    "-": _binary("-", v.sub),
    "*": _variadic("*", v.mul),
    "/": _binary("/", v.div),
    "%": _binary("%", v.mod),
    # List operations
    "list": make_list,
    "push": push,
    "pop": pop,
    "head": head,
    "tail": tail,
    "first": first,
    "last": last,
    "index": index,
    "insert": insert,
    "remove": remove,
    "len": length,
    "range": make_range,
    # Functional operations
    "map": map_list,
    "filter": filter_list,
    "reduce": reduce_list,
    # Formatting operations
    "debug": debug,
    "display": display,
    # Casting operations
    "int": cast_to_int,
    "float": cast_to_float,
}
