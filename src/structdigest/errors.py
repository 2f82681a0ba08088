"""Error taxonomy for structural digests.

Every failure raised while walking a value derives from `DigestError`.
Enclosing containers add positional context to `path` on the way out, so
a failure deep inside a structure reads like `... at $[2].owner{'id'}`.
"""
from __future__ import annotations

from typing import List


class DigestError(Exception):
    """Base class for errors raised while computing a digest."""

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message
        self.path: List[str] = []

    def add_context(self, segment: str) -> None:
        # frames unwind innermost first
        self.path.insert(0, segment)

    @property
    def location(self) -> str:
        return "$" + "".join(self.path)

    def __str__(self) -> str:
        if not self.path:
            return self.message
        return f"{self.message} at {self.location}"


class DepthExceeded(DigestError):
    """Indirection chain or nesting went past the configured depth limit."""

    def __init__(self, type_name: str, limit: int):
        super().__init__(f"depth exceeded for type {type_name} (limit {limit})")
        self.type_name = type_name
        self.limit = limit


class UnsupportedType(DigestError):
    """Value resolves to a kind that has no canonical encoding."""

    def __init__(self, type_name: str, reason: str = ""):
        msg = f"unsupported type {type_name}"
        if reason:
            msg = f"{msg}: {reason}"
        super().__init__(msg)
        self.type_name = type_name


class SinkWriteFailure(DigestError):
    """The hash sink rejected a write."""
