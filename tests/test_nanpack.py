"""NaN payload codec: encode/decode, boundaries, and foreign NaNs."""

import math
import random

import pytest

from taintfloat.bits import F32, F64, f32_from_bits, f64_bits, f64_from_bits
from taintfloat.errors import PayloadOverflow
from taintfloat.nanpack import (
    EmptyNaN,
    NotNaN,
    Payload,
    decode,
    decode_float,
    encode,
    encode_float,
    is_payloaded,
    max_index,
)

SEED = 0xF64
FORMATS = [F32, F64]


def test_index_zero_is_one_above_canonical_nan():
    assert encode(0, F64) - 1 == f64_bits(math.nan) & 0x7FFFFFFFFFFFFFFF
    assert encode(0, F32) - 1 == 0x7FC00000


@pytest.mark.parametrize("fmt", FORMATS, ids=lambda f: f.name)
def test_encoded_values_are_nan(fmt):
    for index in (0, 1, 4931, max_index(fmt)):
        assert math.isnan(encode_float(index, fmt))


@pytest.mark.parametrize("fmt", FORMATS, ids=lambda f: f.name)
def test_decode_recovers_index(fmt):
    rng = random.Random(SEED)
    indices = [0, 1, 2, max_index(fmt) - 1, max_index(fmt)]
    indices += [rng.randint(0, max_index(fmt)) for _ in range(200)]
    for index in indices:
        assert decode(encode(index, fmt), fmt) == Payload(index)
        assert decode_float(encode_float(index, fmt), fmt) == Payload(index)


@pytest.mark.parametrize("fmt", FORMATS, ids=lambda f: f.name)
def test_encode_at_mask_boundary_overflows(fmt):
    encode(fmt.payload_mask - 1, fmt)
    with pytest.raises(PayloadOverflow) as exc:
        encode(fmt.payload_mask, fmt)
    assert exc.value.index == fmt.payload_mask
    assert exc.value.limit == fmt.payload_mask - 1
    with pytest.raises(PayloadOverflow):
        encode(fmt.payload_mask + 12345, fmt)


def test_f32_overflow_at_21_bits():
    with pytest.raises(PayloadOverflow):
        encode(0x20_0000, F32)


def test_negative_index_rejected():
    with pytest.raises(ValueError):
        encode(-1)


@pytest.mark.parametrize("raw", [0.0, -0.0, 1.0, -2.5, math.inf, -math.inf, 5e-324])
def test_not_nan(raw: float):
    assert decode_float(raw) == NotNaN()
    assert decode_float(raw, F32) == NotNaN()
    assert not is_payloaded(raw)


def test_empty_nan():
    assert decode(F64.empty_nan) == EmptyNaN()
    assert decode(F32.empty_nan, F32) == EmptyNaN()
    assert decode_float(math.nan) == EmptyNaN()
    assert decode_float(-math.nan) == EmptyNaN()
    assert decode_float(math.inf - math.inf) == EmptyNaN()
    assert not is_payloaded(math.nan)


def test_signalling_nans_are_never_payloads():
    for ui in (0x7FF0000000000001, 0x7FF0000000001234, 0xFFF0000000000001):
        raw = f64_from_bits(ui)
        assert math.isnan(raw)
        assert decode_float(raw) == EmptyNaN()
        assert not is_payloaded(raw)
    assert decode_float(f32_from_bits(0x7F800001), F32) == EmptyNaN()


def test_sign_does_not_affect_payload():
    raw = encode_float(41)
    assert decode_float(-raw) == Payload(41)
    assert is_payloaded(-raw)
