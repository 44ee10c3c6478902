"""taintfloat: verified/unverified floats with NaN-payload diagnostics."""

from __future__ import annotations

from .bits import F32 as F32, F64 as F64, FloatClass as FloatClass, classify
from .errors import (
    DiagnosticRecord as DiagnosticRecord,
    FloatError as FloatError,
    NaNEncountered as NaNEncountered,
    NegativeInfinity as NegativeInfinity,
    Operation as Operation,
    PayloadOverflow as PayloadOverflow,
    PositiveInfinity as PositiveInfinity,
    RegistryFault as RegistryFault,
    SourceLocation as SourceLocation,
)
from .floats import (
    DIAGNOSTICS as DIAGNOSTICS,
    Unverified as Unverified,
    UnverifiedF32 as UnverifiedF32,
    UnverifiedF64 as UnverifiedF64,
    Verified as Verified,
    VerifiedF32 as VerifiedF32,
    VerifiedF64 as VerifiedF64,
    sanitize,
    taint,
    try_new,
)
from .nanpack import (
    EmptyNaN as EmptyNaN,
    NotNaN as NotNaN,
    Payload as Payload,
    decode,
    decode_float,
    encode,
    encode_float,
    is_payloaded,
)
from .registry import ErrorRegistry as ErrorRegistry, get_registry

__all__ = [
    "DIAGNOSTICS",
    "DiagnosticRecord",
    "EmptyNaN",
    "ErrorRegistry",
    "F32",
    "F64",
    "FloatClass",
    "FloatError",
    "NaNEncountered",
    "NegativeInfinity",
    "NotNaN",
    "Operation",
    "Payload",
    "PayloadOverflow",
    "PositiveInfinity",
    "RegistryFault",
    "SourceLocation",
    "Unverified",
    "UnverifiedF32",
    "UnverifiedF64",
    "Verified",
    "VerifiedF32",
    "VerifiedF64",
    "classify",
    "decode",
    "decode_float",
    "encode",
    "encode_float",
    "get_registry",
    "is_payloaded",
    "sanitize",
    "taint",
    "try_new",
]
