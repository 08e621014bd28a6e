"""Value semantics for Wisp.

Every runtime datum is one of a closed set of variants:

    Unit      -> wisp.types.unit.Unit
    Int       -> int
    Float     -> float
    String    -> str
    Atom      -> wisp.types.atom.Atom
    Quote     -> wisp.types.quote.Quote
    List      -> list
    Lambda    -> wisp.types.lambda_fn.Lambda
    Builtin   -> wisp.types.builtin.Builtin

Lists are never mutated in place; every operation that "changes" a list
returns a new one, which gives values copy semantics.

Numeric promotion: Int op Int -> Int, any Float operand promotes both sides.
Ints are 64-bit: results outside the signed 64-bit range wrap around.
Unit on either side of an arithmetic operator yields Unit.
"""

from __future__ import annotations

import math
from decimal import Decimal
from io import StringIO
from typing import Mapping

from wisp import LispValue
from wisp.errors import (
    BadCast,
    IndexOutOfRange,
    InternalError,
    InvalidArgument,
    InvalidBinOp,
    InvalidOrder,
    MismatchedTypes,
)
from wisp.types.atom import Atom
from wisp.types.builtin import Builtin
from wisp.types.lambda_fn import Lambda
from wisp.types.quote import Quote
from wisp.types.unit import Unit, UnitType

STRING_TYPE = "string"
INT_TYPE = "int"
FLOAT_TYPE = "float"
UNIT_TYPE = "unit"
FUNCTION_TYPE = "function"
ATOM_TYPE = "atom"
QUOTE_TYPE = "quote"
LIST_TYPE = "list"

_ESCAPES = {"\\": "\\\\", '"': '\\"', "\n": "\\n", "\t": "\\t"}

INT_MIN = -(2 ** 63)
INT_MAX = 2 ** 63 - 1


def wrap_int(n: int) -> int:
    """Reduce `n` to the signed 64-bit range, two's complement style."""
    return (n - INT_MIN) % 2 ** 64 + INT_MIN


# -------------------------------
# Predicates and casts
# -------------------------------
def is_number(value: LispValue) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def as_bool(value: LispValue) -> bool:
    """Truthy iff not equal to integer 0 (so 0.0 is false too)."""
    return not equals(value, 0)


def as_int(value: LispValue) -> int:
    """Integer value of a number; floats truncate toward zero."""
    if isinstance(value, float):
        if math.isnan(value) or math.isinf(value):
            raise BadCast(value)
        return wrap_int(int(value))
    if is_number(value):
        return value
    raise BadCast(value)


def as_float(value: LispValue) -> float:
    if is_number(value):
        return float(value)
    raise BadCast(value)


def as_string(value: LispValue) -> str:
    if not isinstance(value, str):
        raise BadCast(value)
    return value


def as_atom(value: LispValue) -> str:
    if not isinstance(value, Atom):
        raise BadCast(value)
    return value.name


def as_list(value: LispValue) -> list[LispValue]:
    if not isinstance(value, list):
        raise BadCast(value)
    return value


# -------------------------------
# List operations (non-destructive)
# -------------------------------
def push(lst: LispValue, *items: LispValue) -> list[LispValue]:
    """Return a copy of `lst` with `items` appended."""
    if not isinstance(lst, list):
        raise MismatchedTypes(lst)
    return [*lst, *items]


def pop(lst: LispValue) -> tuple[list[LispValue], LispValue]:
    """Split `lst` into (everything but the last element, the last element)."""
    if not isinstance(lst, list):
        raise MismatchedTypes(lst)
    if not lst:
        raise IndexOutOfRange(lst)
    return lst[:-1], lst[-1]


def head(lst: LispValue) -> LispValue:
    items = as_list(lst)
    if not items:
        raise IndexOutOfRange(lst)
    return items[0]


def tail(lst: LispValue) -> list[LispValue]:
    return as_list(lst)[1:]


# -------------------------------
# Equality and ordering
# -------------------------------
def equals(a: LispValue, b: LispValue) -> bool:
    """Structural equality; Int and Float compare numerically, other kinds never mix."""
    if is_number(a) and is_number(b):
        return a == b
    if type(a) is not type(b):
        return False
    match a:
        case list():
            return len(a) == len(b) and all(equals(x, y) for x, y in zip(a, b))
        case Quote():
            return equals(a.inner, b.inner)
        case _:
            return a == b


def not_equals(a: LispValue, b: LispValue) -> bool:
    return not equals(a, b)


def less(a: LispValue, b: LispValue) -> bool:
    if not is_number(b):
        raise InvalidBinOp(a)
    if not is_number(a):
        raise InvalidOrder(a)
    if isinstance(a, float) or isinstance(b, float):
        return float(a) < float(b)
    return a < b


def less_eq(a: LispValue, b: LispValue) -> bool:
    return equals(a, b) or less(a, b)


def greater(a: LispValue, b: LispValue) -> bool:
    return not less_eq(a, b)


def greater_eq(a: LispValue, b: LispValue) -> bool:
    return not less(a, b)


# -------------------------------
# Arithmetic
# -------------------------------
def _numeric_operands(a: LispValue, b: LispValue) -> tuple[LispValue, LispValue]:
    """Validate both operands are numbers and apply Float promotion."""
    if not is_number(b) or not is_number(a):
        raise InvalidBinOp(a)
    if isinstance(a, float) or isinstance(b, float):
        return float(a), float(b)
    return a, b


def _trunc_div(a: int, b: int) -> int:
    q = abs(a) // abs(b)
    return q if (a >= 0) == (b >= 0) else -q


def _wrap_if_int(result: LispValue) -> LispValue:
    return wrap_int(result) if isinstance(result, int) else result


def add(a: LispValue, b: LispValue) -> LispValue:
    if isinstance(a, UnitType) or isinstance(b, UnitType):
        return Unit
    if is_number(a) != is_number(b):
        raise InvalidBinOp(a)
    if is_number(a):
        x, y = _numeric_operands(a, b)
        return _wrap_if_int(x + y)
    if isinstance(a, str) and isinstance(b, str):
        return a + b
    if isinstance(a, list) and isinstance(b, list):
        return [*a, *b]
    raise InvalidBinOp(a)


def sub(a: LispValue, b: LispValue) -> LispValue:
    if isinstance(a, UnitType) or isinstance(b, UnitType):
        return Unit
    x, y = _numeric_operands(a, b)
    return _wrap_if_int(x - y)


def mul(a: LispValue, b: LispValue) -> LispValue:
    if isinstance(a, UnitType) or isinstance(b, UnitType):
        return Unit
    x, y = _numeric_operands(a, b)
    return _wrap_if_int(x * y)


def div(a: LispValue, b: LispValue) -> LispValue:
    """Integer division truncates toward zero; float division follows IEEE 754."""
    if isinstance(a, UnitType) or isinstance(b, UnitType):
        return Unit
    x, y = _numeric_operands(a, b)
    if isinstance(x, float):
        if y == 0.0:
            if x == 0.0 or math.isnan(x):
                return math.nan
            return math.copysign(math.inf, x) * math.copysign(1.0, y)
        return x / y
    if y == 0:
        raise InvalidArgument(b)
    return wrap_int(_trunc_div(x, y))


def mod(a: LispValue, b: LispValue) -> LispValue:
    """Remainder with the sign of the dividend, like C's % and fmod."""
    if isinstance(a, UnitType) or isinstance(b, UnitType):
        return Unit
    x, y = _numeric_operands(a, b)
    if isinstance(x, float):
        if y == 0.0 or math.isinf(x) or math.isnan(x) or math.isnan(y):
            return math.nan
        return math.fmod(x, y)
    if y == 0:
        raise InvalidArgument(b)
    return wrap_int(x - y * _trunc_div(x, y))


# -------------------------------
# Introspection and rendering
# -------------------------------
def type_name(value: LispValue) -> str:
    match value:
        case Quote():
            return QUOTE_TYPE
        case Atom():
            return ATOM_TYPE
        case bool():
            raise InternalError(value)
        case int():
            return INT_TYPE
        case float():
            return FLOAT_TYPE
        case list():
            return LIST_TYPE
        case str():
            return STRING_TYPE
        case Lambda() | Builtin():
            # Both are callable, so they share a type name.
            return FUNCTION_TYPE
        case UnitType():
            return UNIT_TYPE
        case _:
            raise InternalError(value)


def _format_float(value: float) -> str:
    """
    Shortest decimal text that reads back as the same number.

    Whole floats that fit an Int drop their fraction, so 3.0 renders `3`.
    The reader has no exponent syntax, so large and tiny magnitudes are
    written out in full. Whole floats outside the Int range keep `.0` and
    -0.0 keeps its sign so both still read back as floats.
    """
    if math.isnan(value) or math.isinf(value):
        return repr(value)
    if value == 0.0:
        return "-0.0" if math.copysign(1.0, value) < 0 else "0"
    if value.is_integer() and INT_MIN <= value <= INT_MAX:
        return str(int(value))
    text = format(Decimal(repr(value)), "f")
    if "." not in text:
        text += ".0"
    return text


def _join(items: list[LispValue]) -> str:
    return " ".join(debug(item) for item in items)


def display(value: LispValue) -> str:
    """User-facing rendering: strings appear without quotes or escapes."""
    if isinstance(value, str):
        return value
    return debug(value)


def debug(value: LispValue) -> str:
    """Rendering that the reader can read back for every literal value."""
    match value:
        case Quote():
            return "'" + debug(value.inner)
        case Atom():
            return value.name
        case bool():
            raise InternalError(value)
        case int():
            return str(value)
        case float():
            return _format_float(value)
        case str():
            return '"' + "".join(_ESCAPES.get(ch, ch) for ch in value) + '"'
        case Lambda():
            return f"(lambda ({_join(value.params)}) {debug(value.body)})"
        case list():
            return f"({_join(value)})"
        case Builtin():
            return repr(value)
        case UnitType():
            return "@"
        case _:
            raise InternalError(value)


def render_scope(bindings: Mapping[str, LispValue]) -> str:
    """Render a frame's bindings as `{ 'name' : value, ... }`, sorted by name."""
    with StringIO() as buffer:
        buffer.write("{ ")
        for name in sorted(bindings):
            buffer.write(f"'{name}' : {debug(bindings[name])}, ")
        buffer.write("}")
        return buffer.getvalue()
