"""Aggregate schemas: which members of a record take part in its digest.

Membership is always declared, never inferred from attribute visibility:

- dataclasses contribute their `fields()`; a field with
  ``metadata={"digest": False}`` is left out
- named tuples contribute `_fields`
- any class may list its members in ``__digest_fields__``
- other classes are registered with `register_aggregate`

Lookup for registered classes follows the MRO, so registering a base
class covers its subclasses.
"""
from __future__ import annotations

import collections.abc
import dataclasses
import datetime
import decimal
import enum
import fractions
import functools
import io
import logging
import pathlib
import queue
import threading
import typing
import uuid
from typing import Any, Callable, Dict, Iterator, Optional, Sequence, Tuple

from .errors import UnsupportedType
from .typenames import strip_optional, type_name

log = logging.getLogger("structdigest.schema")

DIGEST_FIELDS_ATTR = "__digest_fields__"

Extractor = Callable[[Any], Sequence[Any]]


@dataclasses.dataclass(frozen=True)
class Member:
    name: str
    declared: Any = None


@dataclasses.dataclass(frozen=True)
class AggregateSchema:
    """Declared member list for one class.

    `extract`, when set, produces the member values in order; otherwise
    members are read as attributes.
    """

    cls: type
    members: Tuple[Member, ...]
    extract: Optional[Extractor] = None
    immutable: bool = False

    def values(self, obj: Any) -> Iterator[Tuple[Member, Any]]:
        if self.extract is not None:
            values = tuple(self.extract(obj))
            for idx, v in enumerate(values):
                m = self.members[idx] if idx < len(self.members) else Member(str(idx))
                yield m, v
            return
        for m in self.members:
            try:
                value = getattr(obj, m.name)
            except AttributeError as exc:
                raise UnsupportedType(f"{type_name(self.cls)}.{m.name}", "missing member") from exc
            yield m, value


_registry: Dict[type, AggregateSchema] = {}
_registry_lock = threading.Lock()


def _hints(cls: type) -> Dict[str, Any]:
    try:
        return typing.get_type_hints(cls)
    except Exception:
        # unresolvable forward refs; keep the raw annotations
        out: Dict[str, Any] = {}
        for klass in reversed(cls.__mro__):
            out.update(getattr(klass, "__annotations__", {}) or {})
        return out


_UNSUPPORTED_DECLARED = (
    io.IOBase,
    queue.Queue,
    type(threading.Lock()),
    collections.abc.Generator,
    collections.abc.Coroutine,
    collections.abc.AsyncGenerator,
)


def check_declared(tp: Any) -> Optional[str]:
    """Return a reason string if a declared member type can never be hashed."""
    tp = strip_optional(tp)
    origin = typing.get_origin(tp) or tp
    if origin is collections.abc.Callable or origin is typing.Callable:
        return "callables have no canonical encoding"
    if isinstance(origin, type) and issubclass(origin, _UNSUPPORTED_DECLARED):
        return f"{type_name(origin)} is a live runtime resource"
    return None


def _validate(cls: type, members: Sequence[Member]) -> None:
    for m in members:
        reason = check_declared(m.declared)
        if reason:
            raise UnsupportedType(f"{type_name(cls)}.{m.name}", reason)


def register_aggregate(
    cls: type,
    extract: Optional[Extractor] = None,
    *,
    fields: Optional[Sequence[str]] = None,
    immutable: bool = False,
) -> AggregateSchema:
    """Register `cls` as an aggregate.

    Give either `extract`, a callable returning the member values in
    declared order, or `fields`, a list of attribute names. Mark value
    types that cannot take part in a cycle as `immutable`; they are not
    tracked by the cycle guard.
    """
    if not isinstance(cls, type):
        raise TypeError(f"register_aggregate expects a class, got {cls!r}")
    if (extract is None) == (fields is None):
        raise TypeError("register_aggregate needs exactly one of extract or fields")
    if extract is not None and not callable(extract):
        raise TypeError("extract must be callable")
    hints = _hints(cls)
    names = tuple(fields or ())
    members = tuple(Member(n, hints.get(n)) for n in names)
    _validate(cls, members)
    schema = AggregateSchema(cls, members, extract=extract, immutable=immutable)
    with _registry_lock:
        _registry[cls] = schema
    _schema_for_class.cache_clear()
    log.debug("registered aggregate %s with %d members", type_name(cls), len(members))
    return schema


def unregister_aggregate(cls: type) -> None:
    with _registry_lock:
        _registry.pop(cls, None)
    _schema_for_class.cache_clear()


def digest_fields(*names: str):
    """Class decorator declaring the members that take part in the digest."""

    def wrap(cls):
        hints = _hints(cls)
        _validate(cls, [Member(n, hints.get(n)) for n in names])
        setattr(cls, DIGEST_FIELDS_ATTR, tuple(names))
        _schema_for_class.cache_clear()
        return cls

    return wrap


def _dataclass_schema(cls: type) -> AggregateSchema:
    hints = _hints(cls)
    members = []
    for f in dataclasses.fields(cls):
        if f.metadata.get("digest", True) is False:
            continue
        declared = hints.get(f.name, f.type)
        members.append(Member(f.name, declared))
    frozen = cls.__dataclass_params__.frozen
    return AggregateSchema(cls, tuple(members), immutable=frozen)


def _namedtuple_schema(cls: type) -> AggregateSchema:
    hints = _hints(cls)
    members = tuple(Member(n, hints.get(n)) for n in cls._fields)
    return AggregateSchema(cls, members, immutable=True)


def _is_namedtuple_class(cls: type) -> bool:
    return issubclass(cls, tuple) and isinstance(getattr(cls, "_fields", None), tuple)


@functools.lru_cache(maxsize=1024)
def _schema_for_class(cls: type) -> Optional[AggregateSchema]:
    for klass in cls.__mro__:
        schema = _registry.get(klass)
        if schema is not None:
            return schema
    declared = getattr(cls, DIGEST_FIELDS_ATTR, None)
    if declared is not None:
        hints = _hints(cls)
        return AggregateSchema(cls, tuple(Member(n, hints.get(n)) for n in declared))
    if dataclasses.is_dataclass(cls):
        return _dataclass_schema(cls)
    if _is_namedtuple_class(cls):
        return _namedtuple_schema(cls)
    return None


def registered_schema(value: Any) -> Optional[AggregateSchema]:
    """Schema from the explicit registry only (checked before scalar kinds)."""
    for klass in type(value).__mro__:
        schema = _registry.get(klass)
        if schema is not None:
            return schema
    return None


def schema_for(value: Any) -> Optional[AggregateSchema]:
    if isinstance(value, type):
        return None
    return _schema_for_class(type(value))


def _register_builtin_value_types() -> None:
    register_aggregate(datetime.datetime, lambda d: (d.isoformat(),), immutable=True)
    register_aggregate(datetime.date, lambda d: (d.year, d.month, d.day), immutable=True)
    register_aggregate(datetime.time, lambda t: (t.isoformat(),), immutable=True)
    register_aggregate(
        datetime.timedelta,
        lambda d: (d.days, d.seconds, d.microseconds),
        immutable=True,
    )
    register_aggregate(uuid.UUID, lambda u: (u.bytes,), immutable=True)
    register_aggregate(decimal.Decimal, lambda d: (str(d),), immutable=True)
    register_aggregate(
        fractions.Fraction,
        lambda f: (f.numerator, f.denominator),
        immutable=True,
    )
    register_aggregate(pathlib.PurePath, lambda p: (str(p),), immutable=True)
    register_aggregate(enum.Enum, lambda e: (e.value,), immutable=True)


_register_builtin_value_types()
