# Core type aliases for Wisp's data model.
# We use plain Python types (int, float, str, list) plus a handful of small
# classes (Atom, Quote, Lambda, Builtin, Unit) to represent both code (forms)
# and runtime values. There is no separate AST: code is data.
#
# Naming guidance:
# - SExpression: Use in reader/special-form code to denote syntactic forms (code-as-data).
# - LispValue:  Use in evaluator/runtime code to denote evaluated values.
# Both aliases resolve to `Any` and are interchangeable.

from typing import Any, Callable

# Runtime value alias
LispValue = Any
# Forms alias (used interchangeably with LispValue)
SExpression = LispValue

# Native operation signature: (args, env) -> value
NativeFn = Callable[..., LispValue]

__version__ = "0.1.0"
