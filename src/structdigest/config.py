"""Digest configuration.

Plain dicts are accepted wherever a `DigestConfig` is, read with the
same ``cfg.get(key, default)`` defaults.
"""
from __future__ import annotations

import dataclasses
import enum
from typing import Any, Dict, Optional, Union

from .classify import DEFAULT_MAX_DEPTH


class TextPolicy(enum.Enum):
    """How aggregates that define their own ``__str__`` are hashed.

    STRUCTURAL walks the declared members of every aggregate. RENDER
    hashes ``str(value)`` instead for classes overriding ``__str__``.
    The policy is fixed per call; it never varies inside one digest.
    """

    STRUCTURAL = "structural"
    RENDER = "render"


@dataclasses.dataclass(frozen=True)
class DigestConfig:
    max_depth: int = DEFAULT_MAX_DEPTH
    text_policy: TextPolicy = TextPolicy.STRUCTURAL

    def __post_init__(self):
        if isinstance(self.max_depth, bool) or not isinstance(self.max_depth, int):
            raise ValueError(f"max_depth must be an int, got {self.max_depth!r}")
        if self.max_depth < 1:
            raise ValueError(f"max_depth must be positive, got {self.max_depth}")
        if not isinstance(self.text_policy, TextPolicy):
            raise ValueError(f"text_policy must be a TextPolicy, got {self.text_policy!r}")


ConfigLike = Union[None, DigestConfig, Dict[str, Any]]


def load_config(config: ConfigLike = None) -> DigestConfig:
    """Return a `DigestConfig` from None, an existing config or a dict."""
    if config is None:
        return DigestConfig()
    if isinstance(config, DigestConfig):
        return config
    if not isinstance(config, dict):
        raise ValueError(f"unsupported config type {type(config).__name__}")
    cfg = config
    unknown = set(cfg) - {f.name for f in dataclasses.fields(DigestConfig)}
    if unknown:
        raise ValueError(f"unknown config keys: {', '.join(sorted(unknown))}")
    try:
        max_depth = int(cfg.get("max_depth", DEFAULT_MAX_DEPTH))
    except (TypeError, ValueError) as exc:
        raise ValueError(f"max_depth must be an int, got {cfg.get('max_depth')!r}") from exc
    policy_raw: Optional[Any] = cfg.get("text_policy", TextPolicy.STRUCTURAL)
    if isinstance(policy_raw, str):
        policy_raw = policy_raw.lower()
    try:
        policy = TextPolicy(policy_raw) if not isinstance(policy_raw, TextPolicy) else policy_raw
    except ValueError as exc:
        raise ValueError(f"unknown text_policy {policy_raw!r}") from exc
    return DigestConfig(max_depth=max_depth, text_policy=policy)
