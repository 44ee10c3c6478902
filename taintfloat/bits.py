"""IEEE 754 formats, exact bit reinterpretation, and float classification.

Every raw value is a Python ``float`` (binary64). The binary32 format is
carried inside it: finite values are binary32-representable doubles and NaNs
keep their binary32 mantissa in the top 23 bits of the double's mantissa, so
the conversion in both directions is exact and never canonicalizes a NaN.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
import math
import struct
from typing import Callable

# ---------------------------------------------------------------------------
# Layer 1: Constants and same-width reinterpretation
# ---------------------------------------------------------------------------

MASK64: int = 0xFFFFFFFFFFFFFFFF
F64_SIGN: int = 0x8000000000000000
F64_INF: int = 0x7FF0000000000000
F64_QUIET: int = 0x0008000000000000
F64_FRAC: int = 0x000FFFFFFFFFFFFF

MASK32: int = 0xFFFFFFFF
F32_SIGN: int = 0x80000000
F32_INF: int = 0x7F800000
F32_QUIET: int = 0x00400000
F32_FRAC: int = 0x007FFFFF

# Distance between the binary32 and binary64 mantissa fields.
_FRAC_SHIFT: int = 52 - 23

_DOUBLE = struct.Struct("<d")
_U64 = struct.Struct("<Q")
_SINGLE = struct.Struct("<f")
_U32 = struct.Struct("<I")


def f64_bits(x: float) -> int:
    """Reinterpret a double as its 64-bit pattern (memcpy, sNaNs preserved)."""
    return _U64.unpack(_DOUBLE.pack(x))[0]


def f64_from_bits(ui: int) -> float:
    return _DOUBLE.unpack(_U64.pack(ui & MASK64))[0]


def f32_bits(x: float) -> int:
    """Reinterpret a binary32-valued double as its 32-bit pattern.

    Finite doubles outside the binary32 range round to the signed infinity.
    """
    ui: int = f64_bits(x)
    sign: int = (ui >> 63) & 1
    if (ui & ~F64_SIGN) > F64_INF:
        frac: int = (ui & F64_FRAC) >> _FRAC_SHIFT
        if frac == 0:
            # The payload lived below binary32 precision; keep it a NaN.
            frac = F32_QUIET
        return (sign << 31) | F32_INF | frac
    try:
        return _U32.unpack(_SINGLE.pack(x))[0]
    except OverflowError:
        return (sign << 31) | F32_INF


def f32_from_bits(ui: int) -> float:
    ui = ui & MASK32
    frac: int = ui & F32_FRAC
    if (ui & ~F32_SIGN & MASK32) > F32_INF:
        sign: int = (ui >> 31) & 1
        return f64_from_bits((sign << 63) | F64_INF | (frac << _FRAC_SHIFT))
    return _SINGLE.unpack(_U32.pack(ui))[0]


def _round_f32(x: float) -> float:
    return f32_from_bits(f32_bits(x))


def _identity(x: float) -> float:
    return x


# ---------------------------------------------------------------------------
# Layer 2: Formats
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class FloatFormat:
    """Bit layout of one IEEE 754 width, as seen by the payload codec."""

    name: str
    width: int
    inf: int
    quiet: int
    payload_mask: int
    to_bits: Callable[[float], int]
    from_bits: Callable[[int], float]
    narrow: Callable[[float], float]

    @property
    def sign(self) -> int:
        return 1 << (self.width - 1)

    @property
    def empty_nan(self) -> int:
        """The canonical quiet NaN with no payload bits."""
        return self.inf | self.quiet

    def is_nan(self, ui: int) -> bool:
        return (ui & (self.sign - 1)) > self.inf

    def __repr__(self) -> str:
        return self.name


F32 = FloatFormat(
    name="F32",
    width=32,
    inf=F32_INF,
    quiet=F32_QUIET,
    payload_mask=0x1FFFFF,
    to_bits=f32_bits,
    from_bits=f32_from_bits,
    narrow=_round_f32,
)

F64 = FloatFormat(
    name="F64",
    width=64,
    inf=F64_INF,
    quiet=F64_QUIET,
    payload_mask=0x7FFFFFFFFFFFF,
    to_bits=f64_bits,
    from_bits=f64_from_bits,
    narrow=_identity,
)


# ---------------------------------------------------------------------------
# Layer 3: Classification
# ---------------------------------------------------------------------------


class FloatClass(Enum):
    """Category of a raw value, rendered the way diagnostics name operands."""

    POS_ZERO = "zero"
    NEG_ZERO = "negative zero"
    POS_INFINITY = "infinity"
    NEG_INFINITY = "negative infinity"
    NAN = "NaN"
    OTHER = "value"

    def __str__(self) -> str:
        return self.value


def classify(raw: float) -> FloatClass:
    if raw != raw:
        return FloatClass.NAN
    negative: bool = math.copysign(1.0, raw) < 0.0
    if raw == 0.0:
        return FloatClass.NEG_ZERO if negative else FloatClass.POS_ZERO
    if math.isinf(raw):
        return FloatClass.NEG_INFINITY if negative else FloatClass.POS_INFINITY
    return FloatClass.OTHER
