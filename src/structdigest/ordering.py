"""Canonical ordering for mapping keys and set members.

Dict iteration order is insertion order and set order depends on hash
seeds, so neither can go into a digest directly. Keys are sorted by
their type name first, which clusters same-typed keys, then by kind
rank so that nil and non-nil keys under one declared type never compare
raw values, then by value where a natural order exists, and otherwise by
a canonical rendering of the key: its own encoded bytes.

Keys that still tie (several NaNs, distinct references to equal targets)
are ordered by a tie-break rendering, the encoded key and value of the
entry, so the result does not depend on input order.
"""
from __future__ import annotations

import itertools
import math
from typing import Any, Callable, Iterable, List, Optional, Tuple

from .kinds import Kind

# (type name, kind, resolved value) of a key after indirections are resolved
Classify = Callable[[Any], Tuple[str, Kind, Any]]
Render = Callable[[Any], bytes]

_NUMERIC = (Kind.SIGNED_INTEGER, Kind.UNSIGNED_INTEGER, Kind.FLOAT)


def _value_key(kind: Kind, value: Any, key: Any, render: Render) -> Tuple:
    if kind is Kind.NIL:
        return (0,)
    if kind is Kind.BOOLEAN:
        return (1, bool(value))
    if kind in _NUMERIC:
        if isinstance(value, float) and math.isnan(value):
            return (2, 1)
        return (2, 0, value)
    if kind is Kind.STRING:
        return (3, value)
    return (4, render(key))


def canonical_key_order(
    keys: Iterable[Any],
    classify: Classify,
    render: Render,
    tiebreak: Optional[Render] = None,
) -> List[Any]:
    """Return `keys` sorted in canonical order.

    `classify` maps a key to ``(type name, kind, resolved value)``;
    `render` returns the canonical bytes of a key for kinds with no
    natural order. `tiebreak` (default: `render`) orders keys whose sort
    keys are equal.
    """
    tiebreak = tiebreak or render
    decorated = []
    for k in keys:
        name, kind, value = classify(k)
        decorated.append(((name, _value_key(kind, value, k, render)), k))
    decorated.sort(key=lambda pair: pair[0])

    out: List[Any] = []
    for _, group in itertools.groupby(decorated, key=lambda pair: pair[0]):
        tied = [k for _, k in group]
        if len(tied) > 1:
            tied.sort(key=tiebreak)
        out.extend(tied)
    return out
