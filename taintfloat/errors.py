"""Diagnostic records and the error hierarchy raised by sanitization."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from .bits import FloatClass


class Operation(Enum):
    """Operation that produced an invalid value, by its display name."""

    ADD = "Addition"
    SUB = "Subtraction"
    MUL = "Multiplication"
    DIV = "Division"
    REM = "Remainder"
    POW = "Power"
    NEG = "Negation"
    ABS = "Absolute value"
    FLOOR = "Floor"
    CEIL = "Ceiling"
    ROUND = "Rounding"
    TRUNC = "Truncation"
    FRACT = "Fractional part"
    SIGNUM = "Sign"
    SQRT = "Square root"
    CBRT = "Cube root"
    RECIP = "Reciprocal"
    MUL_ADD = "Fused multiply-add"
    EXP = "Exponential"
    EXP2 = "Base-2 exponential"
    EXP_M1 = "Exponential minus one"
    LN = "Natural logarithm"
    LN_1P = "Natural logarithm of one plus"
    LOG = "Logarithm"
    LOG2 = "Base-2 logarithm"
    LOG10 = "Base-10 logarithm"
    HYPOT = "Hypotenuse"
    TO_DEGREES = "Degree conversion"
    TO_RADIANS = "Radian conversion"
    SIN = "Sine"
    COS = "Cosine"
    TAN = "Tangent"
    ASIN = "Arcsine"
    ACOS = "Arccosine"
    ATAN = "Arctangent"
    ATAN2 = "Two-argument arctangent"
    SINH = "Hyperbolic sine"
    COSH = "Hyperbolic cosine"
    TANH = "Hyperbolic tangent"
    ASINH = "Inverse hyperbolic sine"
    ACOSH = "Inverse hyperbolic cosine"
    ATANH = "Inverse hyperbolic tangent"
    MIN = "Minimum"
    MAX = "Maximum"

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True)
class SourceLocation:
    file: str
    line: int

    def __str__(self) -> str:
        return f"{self.file}:{self.line}"


@dataclass(frozen=True)
class DiagnosticRecord:
    """Why an operation produced NaN: the operation and its operand classes."""

    operation: Operation
    operands: tuple[FloatClass, ...]
    location: SourceLocation | None = None

    def describe(self) -> str:
        """The message without the source location prefix."""
        names = " by ".join(str(c) for c in self.operands)
        return f"{self.operation} of {names} resulted in NaN"

    def __str__(self) -> str:
        if self.location is None:
            return self.describe()
        return f"{self.location}: {self.describe()}"


def sanitization_message(cls: FloatClass) -> str:
    return f"Sanitization of {cls}"


# ============================================================
# Errors
# ============================================================


class FloatError(Exception):
    """Base error for values that cannot become verified."""

    def __init__(self, msg: str):
        super().__init__(msg)
        self.msg = msg


class NaNEncountered(FloatError):
    """A NaN reached sanitization; `record` says where it came from, if known."""

    def __init__(self, record: DiagnosticRecord | None = None):
        if record is None:
            super().__init__(sanitization_message(FloatClass.NAN))
        else:
            super().__init__(str(record))
        self.record = record
        self.classification = FloatClass.NAN


class PositiveInfinity(FloatError):
    def __init__(self) -> None:
        super().__init__(sanitization_message(FloatClass.POS_INFINITY))
        self.classification = FloatClass.POS_INFINITY


class NegativeInfinity(FloatError):
    def __init__(self) -> None:
        super().__init__(sanitization_message(FloatClass.NEG_INFINITY))
        self.classification = FloatClass.NEG_INFINITY


class PayloadOverflow(FloatError):
    """A diagnostic index does not fit the payload bits of the float format."""

    def __init__(self, index: int, fmt_name: str, limit: int):
        super().__init__(
            f"diagnostic index {index} does not fit a {fmt_name} NaN payload "
            f"(largest index is {limit})"
        )
        self.index = index
        self.fmt_name = fmt_name
        self.limit = limit


class RegistryFault(RuntimeError):
    """A payload named a diagnostic that is not registered.

    Only a consumed-twice or corrupted payload can cause this, so it is kept
    outside the FloatError hierarchy.
    """
