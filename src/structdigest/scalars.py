"""Fixed-width numeric types.

Python numbers are unbounded and untyped with respect to width and
signedness. These thin subclasses carry that information so that
`Int32(7)`, `UInt8(7)` and a plain `7` produce different digests while
behaving like ordinary numbers everywhere else.
"""
from __future__ import annotations

import struct
from typing import Dict, Type

from .kinds import Kind, TypeTag


class _FixedInt(int):
    _bits = 64
    _signed = True

    def __new__(cls, value=0):
        v = int.__new__(cls, value)
        if cls._signed:
            lo, hi = -(1 << (cls._bits - 1)), (1 << (cls._bits - 1)) - 1
        else:
            lo, hi = 0, (1 << cls._bits) - 1
        if not lo <= int(v) <= hi:
            raise OverflowError(f"{int(v)} out of range for {cls.__name__}")
        return v

    def __repr__(self) -> str:
        return f"{type(self).__name__}({int(self)})"


class Int8(_FixedInt):
    _bits = 8


class Int16(_FixedInt):
    _bits = 16


class Int32(_FixedInt):
    _bits = 32


class Int64(_FixedInt):
    _bits = 64


class UInt(_FixedInt):
    _bits = 64
    _signed = False


class UInt8(_FixedInt):
    _bits = 8
    _signed = False


class UInt16(_FixedInt):
    _bits = 16
    _signed = False


class UInt32(_FixedInt):
    _bits = 32
    _signed = False


class UInt64(_FixedInt):
    _bits = 64
    _signed = False


def _to_single(x: float) -> float:
    return struct.unpack("<f", struct.pack("<f", x))[0]


class Float32(float):
    """Single-precision float; the value is rounded on construction."""

    def __new__(cls, value=0.0):
        return float.__new__(cls, _to_single(float(value)))

    def __repr__(self) -> str:
        return f"Float32({float(self)!r})"


class Complex64(complex):
    """Complex number with single-precision parts."""

    def __new__(cls, real=0.0, imag=0.0):
        c = complex(real, imag)
        return complex.__new__(cls, _to_single(c.real), _to_single(c.imag))

    def __repr__(self) -> str:
        return f"Complex64({complex(self)!r})"


# exact-type lookup; subclasses of int/float/complex fall back to the base tag
FIXED_WIDTH: Dict[Type, "tuple[Kind, TypeTag]"] = {
    Int8: (Kind.SIGNED_INTEGER, TypeTag.INT8),
    Int16: (Kind.SIGNED_INTEGER, TypeTag.INT16),
    Int32: (Kind.SIGNED_INTEGER, TypeTag.INT32),
    Int64: (Kind.SIGNED_INTEGER, TypeTag.INT64),
    UInt: (Kind.UNSIGNED_INTEGER, TypeTag.UINT),
    UInt8: (Kind.UNSIGNED_INTEGER, TypeTag.UINT8),
    UInt16: (Kind.UNSIGNED_INTEGER, TypeTag.UINT16),
    UInt32: (Kind.UNSIGNED_INTEGER, TypeTag.UINT32),
    UInt64: (Kind.UNSIGNED_INTEGER, TypeTag.UINT64),
    Float32: (Kind.FLOAT, TypeTag.FLOAT32),
    Complex64: (Kind.COMPLEX, TypeTag.COMPLEX64),
}


def fixed_width_of(value) -> "tuple[Kind, TypeTag] | None":
    for cls in type(value).__mro__:
        hit = FIXED_WIDTH.get(cls)
        if hit is not None:
            return hit
    return None
