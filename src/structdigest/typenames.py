"""Canonical type names and declared-type helpers.

Type names are written into the digest for empty containers, typed nils
and aggregates, so they must not depend on memory addresses or on how a
type hint happened to be spelled (`List[int]` and `list[int]` name the
same thing).
"""
from __future__ import annotations

import collections.abc
import types
import typing
from typing import Any, Optional, Tuple

from .refs import Ref

_UNION_TYPES: Tuple[Any, ...] = (typing.Union,)
if hasattr(types, "UnionType"):
    _UNION_TYPES = _UNION_TYPES + (types.UnionType,)

_NONE_TYPE = type(None)


def type_name(tp: Any) -> str:
    """Return the canonical name of a class or type hint."""
    if tp is None or tp is _NONE_TYPE:
        return "None"
    if tp is Ellipsis:
        return "..."
    if tp is typing.Any:
        return "Any"
    if isinstance(tp, typing.TypeVar):
        return tp.__name__
    if isinstance(tp, str):
        return tp
    if isinstance(tp, typing.ForwardRef):
        return tp.__forward_arg__
    origin = typing.get_origin(tp)
    if origin is not None:
        args = typing.get_args(tp)
        if origin in _UNION_TYPES:
            return " | ".join(type_name(a) for a in args)
        if origin is typing.Literal:
            return "Literal[" + ", ".join(repr(a) for a in args) + "]"
        base = type_name(origin)
        if not args:
            return base
        return base + "[" + ", ".join(_arg_name(a) for a in args) + "]"
    if isinstance(tp, type):
        if tp.__module__ == "builtins":
            return tp.__qualname__
        return f"{tp.__module__}.{tp.__qualname__}"
    return repr(tp)


def _arg_name(arg: Any) -> str:
    if isinstance(arg, list):
        # Callable[[int], str] parameter lists
        return "[" + ", ".join(type_name(a) for a in arg) + "]"
    return type_name(arg)


def strip_optional(tp: Any) -> Any:
    """Drop ``None`` from a union; a single remaining member is returned bare."""
    if typing.get_origin(tp) in _UNION_TYPES:
        members = [a for a in typing.get_args(tp) if a is not _NONE_TYPE]
        if len(members) == 1:
            return members[0]
        if not members:
            return None
        return typing.Union[tuple(members)]
    return tp


def pointee_of(declared: Any) -> Any:
    """Return the declared type a nil stands for, unwrapping Optional and Ref."""
    tp = strip_optional(declared)
    if tp is Ref or typing.get_origin(tp) is Ref:
        args = typing.get_args(tp)
        return strip_optional(args[0]) if args else None
    return tp


def is_concrete(tp: Any) -> bool:
    """True for a type that names something more specific than "any value"."""
    if tp is None or tp is typing.Any or tp is object:
        return False
    if isinstance(tp, (str, typing.ForwardRef)):
        return True
    origin = typing.get_origin(tp)
    if origin is not None:
        return origin not in _UNION_TYPES and isinstance(origin, type)
    return isinstance(tp, type)


def container_args(value: Any, declared: Any) -> Tuple[Any, ...]:
    """Return the declared type arguments that apply to a runtime container.

    `dict[int, str]` applies to a dict but not to a list; abstract origins
    such as `Mapping[str, int]` apply to any matching instance.
    """
    tp = strip_optional(declared)
    origin = typing.get_origin(tp)
    if not isinstance(origin, type):
        return ()
    if not isinstance(value, origin):
        return ()
    return typing.get_args(tp)


def container_name(value: Any, declared: Any) -> str:
    base = type_name(type(value))
    args = container_args(value, declared)
    if not args:
        return base
    return base + "[" + ", ".join(_arg_name(a) for a in args) + "]"


def element_type(value: Any, declared: Any, index: int) -> Any:
    """Declared type of the element at `index` of a sequence or set."""
    args = container_args(value, declared)
    if not args:
        return None
    if isinstance(value, tuple) and not (len(args) == 2 and args[1] is Ellipsis):
        if args == ((),):
            return None
        return args[index] if index < len(args) else None
    return args[0]


def mapping_types(value: Any, declared: Any) -> Tuple[Optional[Any], Optional[Any]]:
    args = container_args(value, declared)
    if isinstance(value, collections.abc.Mapping) and len(args) == 2:
        return args[0], args[1]
    return None, None
