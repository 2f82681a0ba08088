"""Explicit references.

Python names are already references, so a plain object never needs a
pointer around it. `Ref` exists for the cases a bare object cannot
express: a *typed* nil (`Ref.nil(int)` differs from `Ref.nil(str)`), and
an explicit indirection that hashes exactly like its target.
"""
from __future__ import annotations

import itertools
from typing import Any, Generic, Optional, TypeVar

T = TypeVar("T")

_tokens = itertools.count(1)


class Ref(Generic[T]):
    """Reference to `target` with a declared pointee type.

    `pointee` defaults to `type(target)`; a nil reference built without one
    has no concrete type and hashes like a bare ``None``.
    Each instance gets an opaque identity token used for cycle detection.
    """

    __slots__ = ("target", "pointee", "token")

    def __init__(self, target: Optional[T] = None, pointee: Any = None):
        self.target = target
        if pointee is None and target is not None:
            pointee = type(target)
        self.pointee = pointee
        self.token = next(_tokens)

    @classmethod
    def nil(cls, pointee: Any = None) -> "Ref[Any]":
        return cls(None, pointee)

    @property
    def is_nil(self) -> bool:
        return self.target is None

    def __repr__(self) -> str:
        if self.is_nil:
            return f"Ref.nil({getattr(self.pointee, '__name__', self.pointee)!r})"
        return f"Ref({self.target!r})"
