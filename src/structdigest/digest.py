"""Entry point: compute the structural digest of a value."""
from __future__ import annotations

import hashlib
import logging
from typing import Any

from .config import ConfigLike, load_config
from .encoder import CanonicalEncoder
from .errors import DepthExceeded
from .guard import CycleGuard
from .sinks import HashlibSink, as_sink
from .typenames import type_name

log = logging.getLogger("structdigest.digest")


class Short(bytes):
    """First four bytes of a `Digest`."""

    def __str__(self) -> str:
        return self.hex()


class Digest(bytes):
    """Finalized digest bytes; ``str()`` gives the hex form."""

    def __str__(self) -> str:
        return self.hex()

    def short(self) -> Short:
        return Short(self[:4])


def compute_digest(value: Any, sink: Any, config: ConfigLike = None, *, declared_type: Any = None) -> Digest:
    """Encode `value` into `sink` and return the finalized digest.

    `sink` is any object with ``write``/``finalize`` or a `hashlib` object.
    `declared_type` plays the role of a static type for the top-level
    value: it names typed nils and empty containers (``dict[int, str]``).

    The sink is neither reset nor owned; on error nothing is finalized.
    Running out of interpreter stack before `max_depth` is reached is
    reported as `DepthExceeded` as well.
    """
    cfg = load_config(config)
    target = as_sink(sink)
    encoder = CanonicalEncoder(target, cfg, CycleGuard())
    log.debug("computing digest of %s", type_name(type(value)))
    try:
        encoder.encode(value, declared_type)
    except RecursionError as exc:
        raise DepthExceeded(type_name(type(value)), cfg.max_depth) from exc
    out = Digest(target.finalize())
    log.debug("digest of %s is %s (%d identities visited)", type_name(type(value)), out.short(), len(encoder.guard))
    return out


def sha256_digest(value: Any, config: ConfigLike = None, *, declared_type: Any = None) -> Digest:
    return compute_digest(value, HashlibSink(hashlib.sha256()), config, declared_type=declared_type)
