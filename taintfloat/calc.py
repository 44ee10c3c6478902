"""Expression evaluator: computes a parsed expression with the float wrappers.

Literals become verified floats where the policy allows and unverified ones
otherwise (nan, and inf under the bounded policy). The final value goes
through sanitize(), so an invalid result surfaces as the FloatError that
names the first operation that went wrong.
"""

from __future__ import annotations

import math
import operator
from typing import Callable

from .errors import FloatError
from .floats import (
    Unverified,
    UnverifiedF32,
    UnverifiedF64,
    Verified,
    VerifiedF32,
    VerifiedF64,
    sanitize,
)
from .parse import Binary, Call, Expr, Name, Number, Unary, parse

CONSTANTS: dict[str, float] = {
    "e": math.e,
    "inf": math.inf,
    "nan": math.nan,
    "pi": math.pi,
    "tau": math.tau,
}

BINARY_OPS: dict[str, Callable] = {
    "+": operator.add,
    "-": operator.sub,
    "*": operator.mul,
    "/": operator.truediv,
    "%": operator.mod,
    "^": operator.pow,
}

# name -> (wrapper method, arity)
FUNCTIONS: dict[str, tuple[str, int]] = {
    "abs": ("abs", 1),
    "acos": ("acos", 1),
    "acosh": ("acosh", 1),
    "asin": ("asin", 1),
    "asinh": ("asinh", 1),
    "atan": ("atan", 1),
    "atan2": ("atan2", 2),
    "atanh": ("atanh", 1),
    "cbrt": ("cbrt", 1),
    "ceil": ("ceil", 1),
    "cos": ("cos", 1),
    "cosh": ("cosh", 1),
    "degrees": ("to_degrees", 1),
    "exp": ("exp", 1),
    "exp2": ("exp2", 1),
    "expm1": ("exp_m1", 1),
    "floor": ("floor", 1),
    "fma": ("mul_add", 3),
    "fract": ("fract", 1),
    "hypot": ("hypot", 2),
    "ln": ("ln", 1),
    "ln1p": ("ln_1p", 1),
    "log": ("log", 2),
    "log10": ("log10", 1),
    "log2": ("log2", 1),
    "max": ("max", 2),
    "min": ("min", 2),
    "pow": ("powf", 2),
    "radians": ("to_radians", 1),
    "recip": ("recip", 1),
    "round": ("round", 1),
    "signum": ("signum", 1),
    "sin": ("sin", 1),
    "sinh": ("sinh", 1),
    "sqrt": ("sqrt", 1),
    "tan": ("tan", 1),
    "tanh": ("tanh", 1),
    "trunc": ("trunc", 1),
}


class EvaluationError(Exception):
    """Unknown name or wrong argument count."""

    def __init__(self, msg: str, col: int):
        self.msg: str = msg
        self.col: int = col
        super().__init__(msg + " at col " + str(col))


class Evaluator:
    def __init__(self, f32: bool = False):
        self.verified: type[Verified] = VerifiedF32 if f32 else VerifiedF64
        self.unverified: type[Unverified] = UnverifiedF32 if f32 else UnverifiedF64

    def literal(self, value: float) -> Verified | Unverified:
        try:
            return self.verified(value)
        except FloatError:
            return self.unverified(value)

    def eval(self, expr: Expr) -> Verified | Unverified:
        if isinstance(expr, Number):
            return self.literal(expr.value)
        if isinstance(expr, Name):
            if expr.name not in CONSTANTS:
                raise EvaluationError("unknown constant '" + expr.name + "'", expr.col)
            return self.literal(CONSTANTS[expr.name])
        if isinstance(expr, Unary):
            operand = self.eval(expr.operand)
            if expr.op == "-":
                return -operand
            return operand
        if isinstance(expr, Binary):
            left = self.eval(expr.left)
            right = self.eval(expr.right)
            return BINARY_OPS[expr.op](left, right)
        if isinstance(expr, Call):
            return self.call(expr)
        raise EvaluationError("unsupported expression", expr.col)

    def call(self, expr: Call) -> Verified | Unverified:
        if expr.name not in FUNCTIONS:
            raise EvaluationError("unknown function '" + expr.name + "'", expr.col)
        method, arity = FUNCTIONS[expr.name]
        if len(expr.args) != arity:
            raise EvaluationError(
                expr.name
                + "() takes "
                + str(arity)
                + " argument"
                + ("" if arity == 1 else "s")
                + ", got "
                + str(len(expr.args)),
                expr.col,
            )
        args = [self.eval(a) for a in expr.args]
        return getattr(args[0], method)(*args[1:])


def calculate(source: str, f32: bool = False) -> Verified:
    """Parse, evaluate and sanitize `source`. Raises FloatError for invalid results."""
    return sanitize(Evaluator(f32).eval(parse(source)))
