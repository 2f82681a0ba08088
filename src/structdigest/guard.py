"""Per-call record of reference identities already descended into."""
from __future__ import annotations

from typing import Any, Dict, Hashable

from .refs import Ref


class CycleGuard:
    """Visited set for one top-level digest computation.

    `Ref` instances are keyed by their identity token. Other objects are
    keyed by ``id()``; the guard keeps a strong reference to every object
    it has seen, so an id cannot be recycled by a new object while the
    computation runs.

    Entries are never removed. A shared object reached a second time is
    treated exactly like a back-edge of a cycle: nothing more is emitted
    for it.
    """

    __slots__ = ("_seen",)

    def __init__(self) -> None:
        self._seen: Dict[Hashable, Any] = {}

    @staticmethod
    def identity(obj: Any) -> Hashable:
        if isinstance(obj, Ref):
            return ("ref", obj.token)
        return ("obj", id(obj))

    def __contains__(self, obj: Any) -> bool:
        return self.identity(obj) in self._seen

    def enter(self, obj: Any) -> bool:
        """Mark `obj` visited. Returns False if it already was."""
        key = self.identity(obj)
        if key in self._seen:
            return False
        self._seen[key] = obj
        return True

    def __len__(self) -> int:
        return len(self._seen)

    def copy(self) -> "CycleGuard":
        """Snapshot for scratch encodings that must not mark the real guard."""
        other = CycleGuard()
        other._seen = dict(self._seen)
        return other
