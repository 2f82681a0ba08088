"""Structural kinds and the one-byte type tags written ahead of payloads."""
from __future__ import annotations

import enum


class Kind(enum.Enum):
    NIL = "nil"
    UNSIGNED_INTEGER = "unsigned_integer"
    SIGNED_INTEGER = "signed_integer"
    FLOAT = "float"
    COMPLEX = "complex"
    BOOLEAN = "boolean"
    STRING = "string"
    SEQUENCE = "sequence"
    MAPPING = "mapping"
    AGGREGATE = "aggregate"
    UNSUPPORTED = "unsupported"


class TypeTag(enum.IntEnum):
    """Tag byte identifying the concrete type family of an encoded value.

    Values are part of the encoding: renumbering changes every digest.
    """

    BOOL = 1
    INT = 2
    INT8 = 3
    INT16 = 4
    INT32 = 5
    INT64 = 6
    UINT = 7
    UINT8 = 8
    UINT16 = 9
    UINT32 = 10
    UINT64 = 11
    BIG_INT = 12
    FLOAT32 = 13
    FLOAT64 = 14
    COMPLEX64 = 15
    COMPLEX128 = 16
    STRING = 17
    LIST = 18
    TUPLE = 19
    DEQUE = 20
    BYTES = 21
    BYTEARRAY = 22
    DICT = 23
    SET = 24
    STRUCT = 25
    FROZENSET = 26

    def byte(self) -> bytes:
        return bytes((self.value,))

