"""Error hierarchy for Wisp.

Every failure carries the offending value, a snapshot of the local bindings of
the scope it happened in, and the fixed message for its kind. Errors are raised
at the point of violation and are never recovered from inside the evaluator.
"""

from __future__ import annotations

from typing import Optional

from wisp import LispValue


class WispError(Exception):
    """ Base class for all Wisp errors"""

    message = "unknown exception"

    def __init__(self, value: LispValue, scope: Optional[dict[str, LispValue]] = None):
        super().__init__(self.message)
        self.value = value
        self.scope = scope

    def description(self) -> str:
        # Imported here: value rendering depends on the types package, which imports us.
        from wisp.types.value import debug, render_scope

        return (
            f"error: the expression `{debug(self.value)}` failed in scope "
            f"{render_scope(self.scope or {})} with message \"{self.message}\""
        )

    def __str__(self) -> str:
        return self.description()


class TooFewArgs(WispError):
    """ Raised when a function receives fewer arguments than it requires"""
    message = "too few arguments to function"


class TooManyArgs(WispError):
    """ Raised when a function receives more arguments than it accepts"""
    message = "too many arguments to function"


class InvalidArgument(WispError):
    """ Raised when an argument has the right type but an unusable value"""
    message = "invalid argument"


class MismatchedTypes(WispError):
    """ Raised when an operation receives a value of the wrong type"""
    message = "mismatched types"


class CallNonFunction(WispError):
    """ Raised when a non-callable value is applied"""
    message = "called non-function"


class InvalidLambda(WispError):
    """ Raised when a lambda's parameter list is malformed"""
    message = "invalid lambda"


class InvalidBinOp(WispError):
    """ Raised when a binary operator is applied to incompatible operands"""
    message = "invalid binary operation"


class InvalidOrder(WispError):
    """ Raised when ordering is requested for a non-numeric value"""
    message = "cannot order expression"


class BadCast(WispError):
    """ Raised when a value cannot be cast to the requested type"""
    message = "cannot cast"


class AtomNotDefined(WispError):
    """ Raised when an atom is looked up before it is bound"""
    message = "atom not defined"


class EvalEmptyList(WispError):
    """ Raised when the empty list is evaluated as a call"""
    message = "evaluated empty list"


class IndexOutOfRange(WispError):
    """ Raised when a list position does not exist"""
    message = "index out of range"


class MalformedProgram(WispError):
    """ Raised by the reader when source text cannot be parsed"""
    message = "malformed program"


class InternalError(WispError):
    """ Raised on an unreachable interpreter state"""
    message = "internal virtual machine error"


def arity_error(expected: int, provided: int) -> type[WispError]:
    """Pick TooManyArgs or TooFewArgs by comparing the argument counts."""
    return TooManyArgs if provided > expected else TooFewArgs
