"""structdigest: deterministic, type-aware digests of Python values.

Structurally equal values of the same types always hash alike; a change
of content or of type changes the digest. Unordered collections are put
in canonical order and self-referential structures terminate.
"""

__version__ = "0.1.0"

from .classify import DEFAULT_MAX_DEPTH, Resolved, ValueClassifier
from .config import DigestConfig, TextPolicy, load_config
from .digest import Digest, Short, compute_digest, sha256_digest
from .encoder import CanonicalEncoder
from .errors import DepthExceeded, DigestError, SinkWriteFailure, UnsupportedType
from .guard import CycleGuard
from .kinds import Kind, TypeTag
from .ordering import canonical_key_order
from .refs import Ref
from .scalars import (
    Complex64,
    Float32,
    Int8,
    Int16,
    Int32,
    Int64,
    UInt,
    UInt8,
    UInt16,
    UInt32,
    UInt64,
)
from .schema import digest_fields, register_aggregate, unregister_aggregate
from .sinks import BufferSink, HashlibSink, HashSink, as_sink

__all__ = [
    "BufferSink",
    "CanonicalEncoder",
    "Complex64",
    "CycleGuard",
    "DEFAULT_MAX_DEPTH",
    "DepthExceeded",
    "Digest",
    "DigestConfig",
    "DigestError",
    "Float32",
    "HashSink",
    "HashlibSink",
    "Int16",
    "Int32",
    "Int64",
    "Int8",
    "Kind",
    "Ref",
    "Resolved",
    "Short",
    "SinkWriteFailure",
    "TextPolicy",
    "TypeTag",
    "UInt",
    "UInt16",
    "UInt32",
    "UInt64",
    "UInt8",
    "UnsupportedType",
    "ValueClassifier",
    "as_sink",
    "canonical_key_order",
    "compute_digest",
    "digest_fields",
    "load_config",
    "register_aggregate",
    "sha256_digest",
    "unregister_aggregate",
]
