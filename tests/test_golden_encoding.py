import dataclasses
import struct

from structdigest import (
    Complex64,
    Float32,
    Int32,
    Ref,
    TypeTag,
    UInt,
    UInt8,
)
from tests.utils_digest import enc_float, enc_int, enc_str, raw, u64


@dataclasses.dataclass
class Empty:
    pass


@dataclasses.dataclass
class Pair:
    key: str
    value: int


def test_signed_int_is_tag_plus_8_bytes_le():
    assert raw(1) == b"\x02" + b"\x01" + b"\x00" * 7
    assert raw(-1) == b"\x02" + b"\xff" * 8


def test_fixed_width_tags():
    assert raw(Int32(5)) == enc_int(5, TypeTag.INT32)
    assert raw(UInt8(7)) == TypeTag.UINT8.byte() + u64(7)
    assert raw(UInt(2 ** 64 - 1)) == TypeTag.UINT.byte() + b"\xff" * 8


def test_big_int_is_length_framed():
    v = 2 ** 64
    assert raw(v) == TypeTag.BIG_INT.byte() + u64(9) + b"\x00" * 8 + b"\x01"


def test_bool_is_single_byte():
    assert raw(True) == b"\x01\x01"
    assert raw(False) == b"\x01\x00"


def test_floats_and_complex():
    assert raw(1.5) == enc_float(1.5)
    assert raw(Float32(0.5)) == TypeTag.FLOAT32.byte() + struct.pack("<d", 0.5)
    assert raw(3 + 4j) == TypeTag.COMPLEX128.byte() + struct.pack("<dd", 3.0, 4.0)
    assert raw(Complex64(1, 2)) == TypeTag.COMPLEX64.byte() + struct.pack("<dd", 1.0, 2.0)


def test_string_is_length_framed_utf8():
    assert raw("hi") == enc_str("hi")
    assert raw("") == TypeTag.STRING.byte() + u64(0)
    assert raw("é") == TypeTag.STRING.byte() + u64(2) + "é".encode("utf-8")


def test_empty_containers_write_type_name():
    assert raw([]) == b"list"
    assert raw(()) == b"tuple"
    assert raw({}) == b"dict"
    assert raw(set()) == b"set"
    assert raw(b"") == b"bytes"
    assert raw({}, declared_type=dict[int, str]) == b"dict[int, str]"
    assert raw([], declared_type=list[str]) == b"list[str]"


def test_sequence_keeps_order():
    assert raw([1, "a"]) == TypeTag.LIST.byte() + enc_int(1) + enc_str("a")
    assert raw(("a", 1)) == TypeTag.TUPLE.byte() + enc_str("a") + enc_int(1)


def test_bytes_are_sequences_of_uint8():
    assert raw(b"\x05") == TypeTag.BYTES.byte() + TypeTag.UINT8.byte() + u64(5)


def test_mapping_pairs_in_key_order():
    expected = TypeTag.DICT.byte() + enc_str("a") + enc_int(1) + enc_str("b") + enc_int(2)
    assert raw({"b": 2, "a": 1}) == expected


def test_nil_encodings():
    assert raw(None) == b""
    assert raw(Ref.nil()) == b""
    assert raw(Ref.nil(int)) == b"*int"
    assert raw(None, declared_type=int) == b"*int"


def test_typed_nil_differs_from_empty_container():
    assert raw(Ref.nil(list)) != raw([])
    assert raw(None, declared_type=dict[int, str]) != raw({}, declared_type=dict[int, str])
    assert raw(None, declared_type=dict[int, str]) == b"*dict[int, str]"


def test_aggregate_header_and_members():
    mod = Pair.__module__.encode()
    assert raw(Empty()) == b"Empty" + Empty.__module__.encode()
    assert raw(Pair("k", 3)) == b"Pair" + mod + TypeTag.STRUCT.byte() + enc_str("k") + enc_int(3)
