"""Canonical encoder: writes the type-tagged byte form of a value to a sink.

Encoding rules
--------------
- scalars: tag byte + fixed-width little-endian payload (8 bytes for
  integers, IEEE-754 double for floats, two doubles for complex, one byte
  for booleans). Every integer width, `Int8` through `UInt64`, is widened
  to 8 bytes; the tag alone carries the declared width. Integers outside
  the signed 64-bit range use `BIG_INT` with an explicit length.
- strings: tag + 8-byte length + UTF-8 bytes.
- sequences: tag + elements in order; an empty sequence writes only its
  type name so `list[int]` and `list[str]` stay apart.
- mappings: tag + key/value pairs in canonical key order; sets write keys
  only. Empty ones write only their type name.
- aggregates: qualified name + module, then tag + members in declared
  order. A member-less aggregate stops after the names.
- nil: ``*`` + the declared pointee type name when concrete, otherwise
  nothing. The marker keeps a typed nil apart from an empty container of
  the same type.
"""
from __future__ import annotations

import logging
import struct
from typing import Any, Tuple

from .classify import Resolved, ValueClassifier, is_live_resource
from .config import DigestConfig, TextPolicy
from .errors import DepthExceeded, DigestError, SinkWriteFailure, UnsupportedType
from .guard import CycleGuard
from .kinds import Kind, TypeTag
from .ordering import canonical_key_order
from .sinks import BufferSink, HashSink
from .typenames import container_name, element_type, mapping_types, type_name

log = logging.getLogger("structdigest.encoder")

_INT64_MIN = -(1 << 63)
_INT64_MAX = (1 << 63) - 1


def _u64(n: int) -> bytes:
    return n.to_bytes(8, "little", signed=False)


def _overrides_str(cls: type) -> bool:
    return cls.__str__ is not object.__str__


class CanonicalEncoder:
    """Encodes values into one sink, sharing one cycle guard.

    An encoder is built per top-level call; it is not reusable across
    calls because the guard remembers every identity it has seen.
    """

    def __init__(self, sink: HashSink, config: DigestConfig, guard: CycleGuard | None = None):
        self.sink = sink
        self.config = config
        self.guard = guard if guard is not None else CycleGuard()
        self.classifier = ValueClassifier(config.max_depth)
        self._handlers = {
            Kind.NIL: self._encode_nil,
            Kind.BOOLEAN: self._encode_scalar,
            Kind.SIGNED_INTEGER: self._encode_scalar,
            Kind.UNSIGNED_INTEGER: self._encode_scalar,
            Kind.FLOAT: self._encode_scalar,
            Kind.COMPLEX: self._encode_scalar,
            Kind.STRING: self._encode_string,
            Kind.SEQUENCE: self._encode_sequence,
            Kind.MAPPING: self._encode_mapping,
            Kind.AGGREGATE: self._encode_aggregate,
            Kind.UNSUPPORTED: self._encode_unsupported,
        }

    def write(self, data: bytes) -> None:
        try:
            n = self.sink.write(data)
        except DigestError:
            raise
        except Exception as exc:
            raise SinkWriteFailure(f"sink write failed: {exc}") from exc
        if n is not None and n != len(data):
            raise SinkWriteFailure(f"short write: {n} of {len(data)} bytes")

    def encode(self, value: Any, declared: Any = None, depth: int = 0) -> None:
        if depth > self.config.max_depth:
            raise DepthExceeded(type_name(type(value)), self.config.max_depth)
        r = self.classifier.resolve(value, declared, depth, self.guard)
        if r is None:
            log.debug("reference to %s already visited, skipping", type_name(type(value)))
            return
        if r.reference and not self.guard.enter(r.value):
            log.debug("%s already visited, skipping", r.type_name)
            return
        self._handlers[r.kind](r)

    # scalars

    def _encode_nil(self, r: Resolved) -> None:
        if r.declared is not None:
            self.write(b"*" + type_name(r.declared).encode("utf-8"))

    def _encode_scalar(self, r: Resolved) -> None:
        self.write(self.scalar_bytes(r))

    @staticmethod
    def scalar_bytes(r: Resolved) -> bytes:
        v = r.value
        tag = r.tag
        if r.kind is Kind.BOOLEAN:
            return tag.byte() + (b"\x01" if v else b"\x00")
        if r.kind is Kind.UNSIGNED_INTEGER:
            return tag.byte() + _u64(int(v))
        if r.kind is Kind.SIGNED_INTEGER:
            v = int(v)
            if tag is TypeTag.INT and not _INT64_MIN <= v <= _INT64_MAX:
                size = (v.bit_length() + 8) // 8
                return TypeTag.BIG_INT.byte() + _u64(size) + v.to_bytes(size, "little", signed=True)
            return tag.byte() + v.to_bytes(8, "little", signed=True)
        if r.kind is Kind.FLOAT:
            return tag.byte() + struct.pack("<d", float(v))
        if r.kind is Kind.COMPLEX:
            c = complex(v)
            return tag.byte() + struct.pack("<dd", c.real, c.imag)
        raise UnsupportedType(type_name(type(v)), "not a scalar")

    def _encode_string(self, r: Resolved) -> None:
        raw = str(r.value).encode("utf-8", "surrogatepass")
        self.write(TypeTag.STRING.byte() + _u64(len(raw)) + raw)

    # containers

    def _encode_sequence(self, r: Resolved) -> None:
        seq = r.value
        if len(seq) == 0:
            self.write(container_name(seq, r.declared).encode("utf-8"))
            return
        self.write(r.tag.byte())
        if isinstance(seq, (bytes, bytearray)):
            self.write(b"".join(TypeTag.UINT8.byte() + _u64(b) for b in seq))
            return
        for idx, item in enumerate(seq):
            try:
                self.encode(item, element_type(seq, r.declared, idx), r.depth + 1)
            except DigestError as exc:
                exc.add_context(f"[{idx}]")
                raise

    def _encode_mapping(self, r: Resolved) -> None:
        m = r.value
        if len(m) == 0:
            self.write(container_name(m, r.declared).encode("utf-8"))
            return
        self.write(r.tag.byte())
        is_set = r.tag in (TypeTag.SET, TypeTag.FROZENSET)
        if is_set:
            key_decl, val_decl = element_type(m, r.declared, 0), None
        else:
            key_decl, val_decl = mapping_types(m, r.declared)
        values = None if is_set else m
        for key in self.ordered_keys(m, key_decl, r.depth + 1, values, val_decl):
            try:
                self.encode(key, key_decl, r.depth + 1)
            except DigestError as exc:
                exc.add_context(f"<{key!r}>")
                raise
            if is_set:
                continue
            try:
                self.encode(m[key], val_decl, r.depth + 1)
            except DigestError as exc:
                exc.add_context(f"{{{key!r}}}")
                raise

    def ordered_keys(self, keys, declared: Any, depth: int, values=None, value_declared: Any = None):
        """Keys in canonical order; `values`, when given, breaks ties by entry."""

        def classify(key: Any) -> Tuple[str, Kind, Any]:
            res = self.classifier.resolve(key, declared, depth)
            return res.type_name, res.kind, res.value

        def render(key: Any) -> bytes:
            return self._scratch(key, declared, depth)

        def entry(key: Any) -> bytes:
            out = render(key)
            if values is not None:
                out += self._scratch(values[key], value_declared, depth)
            return out

        return canonical_key_order(keys, classify, render, entry)

    def _scratch(self, value: Any, declared: Any, depth: int) -> bytes:
        # a copy of the guard: identities already on the path stay cut off
        scratch = BufferSink()
        CanonicalEncoder(scratch, self.config, self.guard.copy()).encode(value, declared, depth)
        return scratch.finalize()

    def _encode_aggregate(self, r: Resolved) -> None:
        schema = r.schema
        obj = r.value
        cls = type(obj)
        self.write(cls.__qualname__.encode("utf-8"))
        self.write(cls.__module__.encode("utf-8"))

        if self.config.text_policy is TextPolicy.RENDER and _overrides_str(cls):
            text = str(obj).encode("utf-8", "surrogatepass")
            self.write(TypeTag.STRUCT.byte() + TypeTag.STRING.byte() + _u64(len(text)) + text)
            return

        members = list(schema.values(obj))
        if not members:
            return
        self.write(TypeTag.STRUCT.byte())
        for member, value in members:
            try:
                self.encode(value, member.declared, r.depth + 1)
            except DigestError as exc:
                exc.add_context(f".{member.name}")
                raise

    def _encode_unsupported(self, r: Resolved) -> None:
        reason = "live runtime resource" if is_live_resource(r.value) else "no declared schema"
        raise UnsupportedType(type_name(type(r.value)), reason)
