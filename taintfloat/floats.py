"""Verified and unverified floats, and the arithmetic that moves between them.

A verified float is never NaN (and, under the bounded policy, never
infinite). Arithmetic on any mix of verified, unverified and plain numbers
yields an unverified float and never raises; the only way back to a verified
float is `sanitize()`, which raises a FloatError for an invalid value.

With diagnostics enabled, the first operation that turns valid operands into
NaN registers a DiagnosticRecord and hides its index in the NaN's payload.
Later operations pass that NaN through untouched, so `sanitize()` reports
the earliest failure. The diagnostic or release implementation of the
arithmetic is chosen once, when this module is imported.
"""

from __future__ import annotations

import logging
import math
import os
import sys
from typing import Callable, ClassVar

from . import native
from .bits import F32, F64, FloatFormat, classify
from .config import get_settings
from .errors import (
    DiagnosticRecord,
    NaNEncountered,
    NegativeInfinity,
    Operation,
    PayloadOverflow,
    PositiveInfinity,
    SourceLocation,
)
from .nanpack import Payload, decode_float, encode_float, is_payloaded
from .registry import get_registry

logger = logging.getLogger(__name__)

_SETTINGS = get_settings()

DIAGNOSTICS: bool = _SETTINGS.diagnostics
BOUNDED: bool = _SETTINGS.policy == "bounded"
CAPTURE_LOCATION: bool = _SETTINGS.capture_location

_PACKAGE_DIR: str = os.path.dirname(__file__) + os.sep


# ---------------------------------------------------------------------------
# Layer 1: Diagnostic capture
# ---------------------------------------------------------------------------


def _caller_location() -> SourceLocation | None:
    """First frame outside this package, best effort."""
    frame = sys._getframe(1)
    while frame is not None and frame.f_code.co_filename.startswith(_PACKAGE_DIR):
        frame = frame.f_back
    if frame is None:
        return None
    return SourceLocation(frame.f_code.co_filename, frame.f_lineno)


def _register(op: Operation, operands: tuple[float, ...], fmt: FloatFormat) -> float:
    location = _caller_location() if CAPTURE_LOCATION else None
    record = DiagnosticRecord(op, tuple(classify(x) for x in operands), location)
    registry = get_registry()
    index = registry.insert(record)
    try:
        return encode_float(index, fmt)
    except PayloadOverflow as e:
        registry.remove(index)
        logger.warning("%s; dropping diagnostic: %s", e.msg, record)
        return fmt.from_bits(fmt.empty_nan)


# ---------------------------------------------------------------------------
# Layer 2: Operator contract
# ---------------------------------------------------------------------------


def _apply_diagnostic(
    op: Operation, fn: Callable[..., float], fmt: FloatFormat, *operands: float
) -> float:
    # The leftmost already-diagnosed operand wins and is returned as is.
    for raw in operands:
        if raw != raw and is_payloaded(raw, fmt):
            return raw
    result = fmt.narrow(fn(*operands))
    if result != result:
        return _register(op, operands, fmt)
    return result


def _apply_release(
    op: Operation, fn: Callable[..., float], fmt: FloatFormat, *operands: float
) -> float:
    return fmt.narrow(fn(*operands))


_apply = _apply_diagnostic if DIAGNOSTICS else _apply_release


def _to_float(value: object) -> float:
    """float(value), with ints beyond the double range rounded to infinity."""
    try:
        return float(value)
    except OverflowError:
        return math.inf if value > 0 else -math.inf


def _verify(raw: float, fmt: FloatFormat) -> float:
    """Return raw if it may be verified, else raise the matching FloatError."""
    if raw != raw:
        if DIAGNOSTICS:
            decoded = decode_float(raw, fmt)
            if isinstance(decoded, Payload):
                raise NaNEncountered(get_registry().remove(decoded.index))
        raise NaNEncountered()
    if BOUNDED and math.isinf(raw):
        if raw > 0.0:
            raise PositiveInfinity()
        raise NegativeInfinity()
    return raw


# ---------------------------------------------------------------------------
# Layer 3: Wrapper types
# ---------------------------------------------------------------------------


class _Float:
    """Shared plumbing of the verified and unverified wrappers."""

    __slots__ = ("_raw",)

    FORMAT: ClassVar[FloatFormat]
    _verified: ClassVar[type[Verified]]
    _unverified: ClassVar[type[Unverified]]

    @classmethod
    def _from_raw(cls, raw: float):
        obj = object.__new__(cls)
        obj._raw = raw
        return obj

    @property
    def raw(self) -> float:
        return self._raw

    def __float__(self) -> float:
        return self._raw

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self._raw!r})"

    def __str__(self) -> str:
        return str(self._raw)

    def __format__(self, spec: str) -> str:
        return format(self._raw, spec)

    # ── Operands ─────────────────────────────────────────────

    def _coerce(self, other: object) -> float | None:
        if isinstance(other, _Float):
            if other.FORMAT is not self.FORMAT:
                return None
            return other._raw
        if isinstance(other, (float, int)):
            return self.FORMAT.narrow(_to_float(other))
        return None

    def _compared(self, other: object) -> float | int | None:
        # Plain numbers compare exactly, unrounded, so equal values hash alike.
        if isinstance(other, _Float):
            return self._coerce(other)
        if isinstance(other, (float, int)):
            return other
        return None

    def _operand(self, other: object) -> float:
        raw = self._coerce(other)
        if raw is None:
            raise TypeError(
                f"unsupported operand for {type(self).__name__}: {type(other).__name__}"
            )
        return raw

    def _binary(self, other: object, op: Operation, fn: Callable[..., float]):
        b = self._coerce(other)
        if b is None:
            return NotImplemented
        return self._unverified._from_raw(_apply(op, fn, self.FORMAT, self._raw, b))

    def _rbinary(self, other: object, op: Operation, fn: Callable[..., float]):
        a = self._coerce(other)
        if a is None:
            return NotImplemented
        return self._unverified._from_raw(_apply(op, fn, self.FORMAT, a, self._raw))

    def _same(self, op: Operation, fn: Callable[[float], float]):
        return type(self)._from_raw(_apply(op, fn, self.FORMAT, self._raw))

    def _taint(
        self, op: Operation, fn: Callable[..., float], *others: object
    ) -> Unverified:
        operands = (self._raw,) + tuple(self._operand(o) for o in others)
        return self._unverified._from_raw(_apply(op, fn, self.FORMAT, *operands))

    # ── Comparison ───────────────────────────────────────────

    def __eq__(self, other: object) -> bool:
        b = self._compared(other)
        if b is None:
            return NotImplemented
        return self._raw == b

    def __ne__(self, other: object) -> bool:
        b = self._compared(other)
        if b is None:
            return NotImplemented
        return self._raw != b

    def __lt__(self, other: object) -> bool:
        b = self._compared(other)
        if b is None:
            return NotImplemented
        return self._raw < b

    def __le__(self, other: object) -> bool:
        b = self._compared(other)
        if b is None:
            return NotImplemented
        return self._raw <= b

    def __gt__(self, other: object) -> bool:
        b = self._compared(other)
        if b is None:
            return NotImplemented
        return self._raw > b

    def __ge__(self, other: object) -> bool:
        b = self._compared(other)
        if b is None:
            return NotImplemented
        return self._raw >= b

    # ── Binary operators, always unverified ──────────────────

    def __add__(self, other):
        return self._binary(other, Operation.ADD, native.add)

    def __radd__(self, other):
        return self._rbinary(other, Operation.ADD, native.add)

    def __sub__(self, other):
        return self._binary(other, Operation.SUB, native.sub)

    def __rsub__(self, other):
        return self._rbinary(other, Operation.SUB, native.sub)

    def __mul__(self, other):
        return self._binary(other, Operation.MUL, native.mul)

    def __rmul__(self, other):
        return self._rbinary(other, Operation.MUL, native.mul)

    def __truediv__(self, other):
        return self._binary(other, Operation.DIV, native.div)

    def __rtruediv__(self, other):
        return self._rbinary(other, Operation.DIV, native.div)

    def __mod__(self, other):
        return self._binary(other, Operation.REM, native.rem)

    def __rmod__(self, other):
        return self._rbinary(other, Operation.REM, native.rem)

    def __pow__(self, other):
        return self._binary(other, Operation.POW, native.powf)

    def __rpow__(self, other):
        return self._rbinary(other, Operation.POW, native.powf)

    # ── Same kind as the input ───────────────────────────────

    def __neg__(self):
        return self._same(Operation.NEG, native.neg)

    def __pos__(self):
        return self

    def __abs__(self):
        return self._same(Operation.ABS, native.abs_)

    def abs(self):
        return self._same(Operation.ABS, native.abs_)

    def floor(self):
        return self._same(Operation.FLOOR, native.floor)

    def ceil(self):
        return self._same(Operation.CEIL, native.ceil)

    def round(self):
        """Round half away from zero."""
        return self._same(Operation.ROUND, native.round_half_away)

    def trunc(self):
        return self._same(Operation.TRUNC, native.trunc)

    def signum(self):
        return self._same(Operation.SIGNUM, native.signum)

    def to_radians(self):
        return self._same(Operation.TO_RADIANS, native.to_radians)

    def cbrt(self):
        return self._same(Operation.CBRT, native.cbrt)

    def atan(self):
        return self._same(Operation.ATAN, native.atan)

    def tanh(self):
        return self._same(Operation.TANH, native.tanh)

    def _pair(
        self, other: object, op: Operation, fn: Callable[[float, float], float]
    ):
        """Verified only when both operands are verified."""
        b = self._operand(other)
        if isinstance(self, Verified) and isinstance(other, Verified):
            kind = self._verified
        else:
            kind = self._unverified
        return kind._from_raw(_apply(op, fn, self.FORMAT, self._raw, b))

    def atan2(self, other):
        return self._pair(other, Operation.ATAN2, native.atan2)

    def min(self, other):
        """Smaller operand; NaN if either is NaN, and -0.0 is below 0.0."""
        return self._pair(other, Operation.MIN, native.minimum)

    def max(self, other):
        return self._pair(other, Operation.MAX, native.maximum)

    # ── Always unverified ────────────────────────────────────

    def powf(self, exponent) -> Unverified:
        return self._taint(Operation.POW, native.powf, exponent)

    def powi(self, exponent: int) -> Unverified:
        if not isinstance(exponent, int):
            raise TypeError(f"powi exponent must be int, got {type(exponent).__name__}")
        return self._taint(Operation.POW, native.powf, float(exponent))

    def sqrt(self) -> Unverified:
        return self._taint(Operation.SQRT, native.sqrt)

    def recip(self) -> Unverified:
        return self._taint(Operation.RECIP, native.recip)

    def mul_add(self, a, b) -> Unverified:
        """self * a + b, rounded once."""
        fn = native.mul_add_f32 if self.FORMAT is F32 else native.mul_add
        return self._taint(Operation.MUL_ADD, fn, a, b)

    def exp(self) -> Unverified:
        return self._taint(Operation.EXP, native.exp)

    def exp2(self) -> Unverified:
        return self._taint(Operation.EXP2, native.exp2)

    def exp_m1(self) -> Unverified:
        return self._taint(Operation.EXP_M1, native.exp_m1)

    def ln(self) -> Unverified:
        return self._taint(Operation.LN, native.ln)

    def ln_1p(self) -> Unverified:
        return self._taint(Operation.LN_1P, native.ln_1p)

    def log(self, base) -> Unverified:
        return self._taint(Operation.LOG, native.log, base)

    def log2(self) -> Unverified:
        return self._taint(Operation.LOG2, native.log2)

    def log10(self) -> Unverified:
        return self._taint(Operation.LOG10, native.log10)

    def hypot(self, other) -> Unverified:
        return self._taint(Operation.HYPOT, native.hypot, other)

    def to_degrees(self) -> Unverified:
        return self._taint(Operation.TO_DEGREES, native.to_degrees)

    def fract(self) -> Unverified:
        return self._taint(Operation.FRACT, native.fract)

    def sin(self) -> Unverified:
        return self._taint(Operation.SIN, native.sin)

    def cos(self) -> Unverified:
        return self._taint(Operation.COS, native.cos)

    def tan(self) -> Unverified:
        return self._taint(Operation.TAN, native.tan)

    def sin_cos(self) -> tuple[Unverified, Unverified]:
        return self.sin(), self.cos()

    def asin(self) -> Unverified:
        return self._taint(Operation.ASIN, native.asin)

    def acos(self) -> Unverified:
        return self._taint(Operation.ACOS, native.acos)

    def sinh(self) -> Unverified:
        return self._taint(Operation.SINH, native.sinh)

    def cosh(self) -> Unverified:
        return self._taint(Operation.COSH, native.cosh)

    def asinh(self) -> Unverified:
        return self._taint(Operation.ASINH, native.asinh)

    def acosh(self) -> Unverified:
        return self._taint(Operation.ACOSH, native.acosh)

    def atanh(self) -> Unverified:
        return self._taint(Operation.ATANH, native.atanh)


class Verified(_Float):
    """A float known not to be NaN.

    Under the bounded policy it is not infinite either. Constructing one
    validates the value and raises FloatError; a NaN carrying a diagnostic
    payload raises NaNEncountered with the record attached, consuming it.
    """

    __slots__ = ()

    def __init__(self, raw: float | int | Verified):
        if isinstance(raw, Unverified):
            raise TypeError(
                f"{type(self).__name__} cannot wrap {type(raw).__name__}; "
                "use .sanitize()"
            )
        self._raw = _verify(self.FORMAT.narrow(_to_float(raw)), self.FORMAT)

    @classmethod
    def try_new(cls, raw: float | int | _Float):
        return cls(raw)

    def __hash__(self) -> int:
        return hash(self._raw)

    def taint(self) -> Unverified:
        return self._unverified._from_raw(self._raw)


class Unverified(_Float):
    """Any float, typically fresh out of arithmetic and not yet checked."""

    __slots__ = ()

    def __init__(self, raw: float | int | _Float):
        self._raw = self.FORMAT.narrow(_to_float(raw))

    def sanitize(self) -> Verified:
        """The only conversion from unverified to verified."""
        return self._verified._from_raw(_verify(self._raw, self.FORMAT))

    def is_nan(self) -> bool:
        return self._raw != self._raw

    def is_infinite(self) -> bool:
        return math.isinf(self._raw)

    def is_finite(self) -> bool:
        return math.isfinite(self._raw)

    @property
    def diagnosed(self) -> bool:
        """Whether a diagnostic is attached; does not consume it."""
        return DIAGNOSTICS and is_payloaded(self._raw, self.FORMAT)


class VerifiedF64(Verified):
    __slots__ = ()
    FORMAT = F64


class UnverifiedF64(Unverified):
    __slots__ = ()
    FORMAT = F64


class VerifiedF32(Verified):
    __slots__ = ()
    FORMAT = F32


class UnverifiedF32(Unverified):
    __slots__ = ()
    FORMAT = F32


for _pair in ((VerifiedF64, UnverifiedF64), (VerifiedF32, UnverifiedF32)):
    for _cls in _pair:
        _cls._verified, _cls._unverified = _pair
del _pair, _cls


# ---------------------------------------------------------------------------
# Layer 4: Module-level entry points (binary64)
# ---------------------------------------------------------------------------


def try_new(raw: float | int) -> VerifiedF64:
    return VerifiedF64(raw)


def taint(raw: float | int) -> UnverifiedF64:
    return UnverifiedF64(raw)


def sanitize(value: _Float | float | int) -> Verified:
    if isinstance(value, Unverified):
        return value.sanitize()
    if isinstance(value, Verified):
        return value
    return VerifiedF64(value)
