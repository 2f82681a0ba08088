"""Hash sinks: where encoded bytes go.

A sink is anything with ``write(data) -> int | None`` and
``finalize() -> bytes``. `hashlib` objects speak ``update``/``digest``
instead; `as_sink` wraps them.
"""
from __future__ import annotations

from typing import Any, Optional, Protocol, runtime_checkable


@runtime_checkable
class HashSink(Protocol):
    def write(self, data: bytes) -> Optional[int]:
        ...

    def finalize(self) -> bytes:
        ...


class HashlibSink:
    """Adapter for `hashlib`-style objects (``update``/``digest``)."""

    def __init__(self, hasher: Any):
        self.hasher = hasher

    def write(self, data: bytes) -> int:
        self.hasher.update(data)
        return len(data)

    def finalize(self) -> bytes:
        return self.hasher.digest()

    @property
    def name(self) -> str:
        return getattr(self.hasher, "name", type(self.hasher).__name__)


class BufferSink:
    """Collects the raw canonical encoding; `finalize` returns it unchanged."""

    def __init__(self) -> None:
        self.buffer = bytearray()

    def write(self, data: bytes) -> int:
        self.buffer.extend(data)
        return len(data)

    def finalize(self) -> bytes:
        return bytes(self.buffer)


def as_sink(obj: Any) -> HashSink:
    if hasattr(obj, "write") and hasattr(obj, "finalize"):
        return obj
    if hasattr(obj, "update") and hasattr(obj, "digest"):
        return HashlibSink(obj)
    raise TypeError(f"{type(obj).__name__} is not a hash sink (needs write/finalize or update/digest)")
