"""NaN payload codec: a diagnostic index stored in a quiet NaN's mantissa.

Layout (binary64; binary32 is the same with its own masks)::

    sign | exponent (all ones) | quiet bit | payload bits
                                    1        index + 1

Payload 0 is an ordinary NaN. Only quiet NaNs carry payloads: a signalling
NaN handed in by a caller decodes as EmptyNaN whatever its low bits hold.
"""

from __future__ import annotations

from dataclasses import dataclass

from .bits import F64, FloatFormat
from .errors import PayloadOverflow


@dataclass(frozen=True)
class NotNaN:
    pass


@dataclass(frozen=True)
class EmptyNaN:
    pass


@dataclass(frozen=True)
class Payload:
    index: int


Decoded = NotNaN | EmptyNaN | Payload


def max_index(fmt: FloatFormat = F64) -> int:
    """Largest index that still fits the payload bits of `fmt`."""
    return fmt.payload_mask - 1


def encode(index: int, fmt: FloatFormat = F64) -> int:
    """Bit pattern of a quiet NaN carrying `index`."""
    if index < 0:
        raise ValueError(f"payload index must be non-negative, got {index}")
    payload: int = index + 1
    if payload > fmt.payload_mask:
        raise PayloadOverflow(index, fmt.name, max_index(fmt))
    return fmt.empty_nan | payload


def decode(ui: int, fmt: FloatFormat = F64) -> Decoded:
    if not fmt.is_nan(ui):
        return NotNaN()
    if (ui & fmt.quiet) == 0:
        return EmptyNaN()
    payload: int = ui & fmt.payload_mask
    if payload == 0:
        return EmptyNaN()
    return Payload(payload - 1)


def encode_float(index: int, fmt: FloatFormat = F64) -> float:
    return fmt.from_bits(encode(index, fmt))


def decode_float(raw: float, fmt: FloatFormat = F64) -> Decoded:
    if raw == raw:
        return NotNaN()
    return decode(fmt.to_bits(raw), fmt)


def is_payloaded(raw: float, fmt: FloatFormat = F64) -> bool:
    if raw == raw:
        return False
    return isinstance(decode(fmt.to_bits(raw), fmt), Payload)
