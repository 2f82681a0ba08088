"""Value classification: resolve references and pick the structural kind."""
from __future__ import annotations

import array
import collections
import collections.abc
import dataclasses
from typing import Any, Optional

from .errors import DepthExceeded
from .guard import CycleGuard
from .kinds import Kind, TypeTag
from .refs import Ref
from .scalars import fixed_width_of
from .schema import AggregateSchema, registered_schema, schema_for
from .typenames import is_concrete, pointee_of, type_name

DEFAULT_MAX_DEPTH = 100

_SEQUENCE_TAGS = (
    (bytearray, TypeTag.BYTEARRAY),
    (bytes, TypeTag.BYTES),
    (list, TypeTag.LIST),
    (tuple, TypeTag.TUPLE),
    (collections.deque, TypeTag.DEQUE),
)

# containers that cannot close a cycle on their own
_IMMUTABLE = (bytes, tuple)


@dataclasses.dataclass
class Resolved:
    """Outcome of classifying one value.

    `declared` is the declared type that applies to `value` after all
    indirections; for NIL it is the pointee type, or None when the nil has
    no concrete type.
    """

    kind: Kind
    value: Any
    depth: int
    declared: Any = None
    tag: Optional[TypeTag] = None
    schema: Optional[AggregateSchema] = None
    reference: bool = False

    @property
    def type_name(self) -> str:
        if self.kind is Kind.NIL:
            return type_name(self.declared) if self.declared is not None else "None"
        return type_name(type(self.value))


class ValueClassifier:
    """Resolves `Ref` chains and maps the final value to a `Kind`."""

    def __init__(self, max_depth: int = DEFAULT_MAX_DEPTH):
        self.max_depth = max_depth

    def resolve(
        self,
        value: Any,
        declared: Any = None,
        depth: int = 0,
        guard: Optional[CycleGuard] = None,
    ) -> Optional[Resolved]:
        """Classify `value`, following references.

        Every dereference counts against the depth limit. When a guard is
        given, each non-nil `Ref` is entered before being followed, and
        None is returned if one was already visited.
        """
        origin = value
        while isinstance(value, Ref):
            if value.is_nil:
                pointee = value.pointee if value.pointee is not None else pointee_of(declared)
                return self._nil(pointee, depth)
            depth += 1
            if depth > self.max_depth:
                raise DepthExceeded(type_name(type(origin)), self.max_depth)
            if guard is not None and not guard.enter(value):
                return None
            declared = value.pointee
            value = value.target

        if value is None:
            return self._nil(pointee_of(declared), depth)
        return self.classify(value, declared, depth)

    def _nil(self, pointee: Any, depth: int) -> Resolved:
        if not is_concrete(pointee):
            pointee = None
        return Resolved(Kind.NIL, None, depth, declared=pointee)

    def classify(self, value: Any, declared: Any = None, depth: int = 0) -> Resolved:
        """Map a non-reference value to its kind and tag."""
        if isinstance(value, bool):
            return Resolved(Kind.BOOLEAN, value, depth, declared, TypeTag.BOOL)

        schema = registered_schema(value)
        if schema is not None:
            return self._aggregate(value, declared, depth, schema)

        fixed = fixed_width_of(value)
        if fixed is not None:
            kind, tag = fixed
            return Resolved(kind, value, depth, declared, tag)
        if isinstance(value, int):
            return Resolved(Kind.SIGNED_INTEGER, value, depth, declared, TypeTag.INT)
        if isinstance(value, float):
            return Resolved(Kind.FLOAT, value, depth, declared, TypeTag.FLOAT64)
        if isinstance(value, complex):
            return Resolved(Kind.COMPLEX, value, depth, declared, TypeTag.COMPLEX128)
        if isinstance(value, str):
            return Resolved(Kind.STRING, value, depth, declared, TypeTag.STRING)

        schema = schema_for(value)
        if schema is not None:
            # named tuples land here before the plain tuple check
            return self._aggregate(value, declared, depth, schema)

        for cls, tag in _SEQUENCE_TAGS:
            if isinstance(value, cls):
                return Resolved(
                    Kind.SEQUENCE, value, depth, declared, tag,
                    reference=not isinstance(value, _IMMUTABLE),
                )
        if isinstance(value, collections.abc.Mapping):
            return Resolved(Kind.MAPPING, value, depth, declared, TypeTag.DICT, reference=True)
        if isinstance(value, frozenset):
            return Resolved(Kind.MAPPING, value, depth, declared, TypeTag.FROZENSET)
        if isinstance(value, set):
            return Resolved(Kind.MAPPING, value, depth, declared, TypeTag.SET, reference=True)
        # memoryview, array.array and everything else without a declared schema
        return Resolved(Kind.UNSUPPORTED, value, depth, declared)

    def _aggregate(self, value: Any, declared: Any, depth: int, schema: AggregateSchema) -> Resolved:
        return Resolved(
            Kind.AGGREGATE, value, depth, declared, TypeTag.STRUCT,
            schema=schema, reference=not schema.immutable,
        )


def is_live_resource(value: Any) -> bool:
    """True for objects that stand for runtime machinery rather than data."""
    return callable(value) or isinstance(value, (type, memoryview, array.array))
