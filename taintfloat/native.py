"""Raw float operations with IEEE 754 results instead of Python exceptions.

Python raises ZeroDivisionError, ValueError or OverflowError where IEEE 754
returns an infinity or NaN. Each function here takes the fast path through
the builtin operator or `math`, and only on the exceptional path works out
the IEEE result from the operands' signs and categories.
"""

from __future__ import annotations

from fractions import Fraction
import math

INF: float = math.inf
NAN: float = math.nan


def _negative(x: float) -> bool:
    return math.copysign(1.0, x) < 0.0


def _is_odd_integer(y: float) -> bool:
    return math.isfinite(y) and y == math.floor(y) and math.fmod(y, 2.0) != 0.0


# ---------------------------------------------------------------------------
# Layer 1: Arithmetic
# ---------------------------------------------------------------------------


def add(a: float, b: float) -> float:
    return a + b


def sub(a: float, b: float) -> float:
    return a - b


def mul(a: float, b: float) -> float:
    return a * b


def div(a: float, b: float) -> float:
    try:
        return a / b
    except ZeroDivisionError:
        if a != a:
            return a
        if a == 0.0:
            return NAN
        if _negative(a) != _negative(b):
            return -INF
        return INF


def rem(a: float, b: float) -> float:
    """Truncating remainder: a - trunc(a/b) * b. Sign follows dividend."""
    try:
        return math.fmod(a, b)
    except ValueError:
        # fmod(x, 0) and fmod(inf, y)
        return NAN


def _pow_overflow(a: float, b: float) -> float:
    if _negative(a) and _is_odd_integer(b):
        return -INF
    return INF


def powf(a: float, b: float) -> float:
    try:
        return math.pow(a, b)
    except OverflowError:
        return _pow_overflow(a, b)
    except ValueError:
        if a == 0.0:
            return _pow_overflow(a, b)
        return NAN


def recip(a: float) -> float:
    return div(1.0, a)


F32_MAX: float = 3.4028234663852886e38


def _round_f64(exact: Fraction) -> float:
    try:
        return float(exact)
    except OverflowError:
        return INF if exact > 0 else -INF


def _round_f32(exact: Fraction) -> float:
    """Round an exact value to binary32, nearest-even, in one step."""
    x = abs(exact)
    e = x.numerator.bit_length() - x.denominator.bit_length()
    if x < Fraction(2) ** e:
        e -= 1
    # Quantum of a 24-bit significand; subnormals share the 2^-149 quantum.
    q = max(e, -126) - 23
    r = math.ldexp(round(x / Fraction(2) ** q), q)
    if r > F32_MAX:
        r = INF
    return -r if exact < 0 else r


def _mul_add(a: float, b: float, c: float, rounding) -> float:
    if not (math.isfinite(a) and math.isfinite(b) and math.isfinite(c)):
        return a * b + c
    exact = Fraction(a) * Fraction(b) + Fraction(c)
    if exact == 0:
        if c == 0.0 and (a == 0.0 or b == 0.0):
            return math.copysign(0.0, a) * math.copysign(0.0, b) + c
        return 0.0
    return rounding(exact)


def mul_add(a: float, b: float, c: float) -> float:
    """Fused a * b + c with a single rounding."""
    return _mul_add(a, b, c, _round_f64)


def mul_add_f32(a: float, b: float, c: float) -> float:
    """Fused a * b + c on binary32 operands, rounded once to binary32.

    Rounding to a double first and then to binary32 can land on a tie the
    exact value was not on.
    """
    return _mul_add(a, b, c, _round_f32)


def minimum(a: float, b: float) -> float:
    """IEEE 754-2019 minimum: NaN if either operand is NaN, -0 below +0."""
    if a != a:
        return a
    if b != b:
        return b
    if a == b:
        return a if _negative(a) else b
    return a if a < b else b


def maximum(a: float, b: float) -> float:
    if a != a:
        return a
    if b != b:
        return b
    if a == b:
        return b if _negative(a) else a
    return a if a > b else b


# ---------------------------------------------------------------------------
# Layer 2: Rounding and sign
# ---------------------------------------------------------------------------


def floor(a: float) -> float:
    if not math.isfinite(a):
        return a
    return math.copysign(float(math.floor(a)), a)


def ceil(a: float) -> float:
    if not math.isfinite(a):
        return a
    return math.copysign(float(math.ceil(a)), a)


def trunc(a: float) -> float:
    if not math.isfinite(a):
        return a
    return math.copysign(float(math.trunc(a)), a)


def round_half_away(a: float) -> float:
    """Round to nearest, ties away from zero."""
    if not math.isfinite(a):
        return a
    t = math.trunc(a)
    if abs(a - t) >= 0.5:
        t += 1 if a > 0.0 else -1
    return math.copysign(float(t), a)


def fract(a: float) -> float:
    if not math.isfinite(a):
        return a - a
    return a - trunc(a)


def abs_(a: float) -> float:
    return abs(a)


def neg(a: float) -> float:
    return -a


def signum(a: float) -> float:
    if a != a:
        return a
    return math.copysign(1.0, a)


# ---------------------------------------------------------------------------
# Layer 3: Roots, exponentials, logarithms
# ---------------------------------------------------------------------------


def sqrt(a: float) -> float:
    try:
        return math.sqrt(a)
    except ValueError:
        return NAN


def cbrt(a: float) -> float:
    return math.cbrt(a)


def exp(a: float) -> float:
    try:
        return math.exp(a)
    except OverflowError:
        return INF


def exp2(a: float) -> float:
    try:
        return math.exp2(a)
    except OverflowError:
        return INF


def exp_m1(a: float) -> float:
    try:
        return math.expm1(a)
    except OverflowError:
        return INF


def _log_domain(a: float, pole: float) -> float:
    return -INF if a == pole else NAN


def ln(a: float) -> float:
    try:
        return math.log(a)
    except ValueError:
        return _log_domain(a, 0.0)


def ln_1p(a: float) -> float:
    try:
        return math.log1p(a)
    except ValueError:
        return _log_domain(a, -1.0)


def log2(a: float) -> float:
    try:
        return math.log2(a)
    except ValueError:
        return _log_domain(a, 0.0)


def log10(a: float) -> float:
    try:
        return math.log10(a)
    except ValueError:
        return _log_domain(a, 0.0)


def log(a: float, base: float) -> float:
    return div(ln(a), ln(base))


def hypot(a: float, b: float) -> float:
    try:
        return math.hypot(a, b)
    except OverflowError:
        return INF


# ---------------------------------------------------------------------------
# Layer 4: Trigonometry
# ---------------------------------------------------------------------------


def _domain(fn, a: float) -> float:
    try:
        return fn(a)
    except ValueError:
        return NAN


def sin(a: float) -> float:
    return _domain(math.sin, a)


def cos(a: float) -> float:
    return _domain(math.cos, a)


def tan(a: float) -> float:
    return _domain(math.tan, a)


def asin(a: float) -> float:
    return _domain(math.asin, a)


def acos(a: float) -> float:
    return _domain(math.acos, a)


def atan(a: float) -> float:
    return math.atan(a)


def atan2(a: float, b: float) -> float:
    return math.atan2(a, b)


def sinh(a: float) -> float:
    try:
        return math.sinh(a)
    except OverflowError:
        return math.copysign(INF, a)


def cosh(a: float) -> float:
    try:
        return math.cosh(a)
    except OverflowError:
        return INF


def tanh(a: float) -> float:
    return math.tanh(a)


def asinh(a: float) -> float:
    return math.asinh(a)


def acosh(a: float) -> float:
    return _domain(math.acosh, a)


def atanh(a: float) -> float:
    try:
        return math.atanh(a)
    except ValueError:
        if a == 1.0:
            return INF
        if a == -1.0:
            return -INF
        return NAN


def to_degrees(a: float) -> float:
    return math.degrees(a)


def to_radians(a: float) -> float:
    return math.radians(a)
