"""Configuration schemas and helpers for bSFS computation."""

from __future__ import annotations

from dataclasses import asdict, dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Literal, Mapping, Union

import numpy as np
import yaml

from .errors import ConfigError

MODES = ("matrix", "indices")


@dataclass(slots=True)
class BSFSConfig:
    """Options controlling how a block is classified and aggregated."""

    strict: bool = False
    mode: Literal["matrix", "indices"] = "matrix"
    count_dtype: str = "int64"
    extra_populations: List[str] = field(default_factory=list)

    def validate(self) -> "BSFSConfig":
        if self.mode not in MODES:
            raise ConfigError(f"Unknown aggregation mode '{self.mode}', expected one of {MODES}")
        try:
            dtype = np.dtype(self.count_dtype)
        except TypeError as exc:
            raise ConfigError(f"Invalid count dtype '{self.count_dtype}'") from exc
        if not np.issubdtype(dtype, np.integer):
            raise ConfigError(f"Count dtype must be an integer type, got '{self.count_dtype}'")
        return self


def to_dict(cfg: BSFSConfig) -> Dict[str, Any]:
    """Convert a config object into a dict for logging/serialization."""

    return asdict(cfg)


def _from_mapping(payload: Mapping[str, Any]) -> BSFSConfig:
    field_names = set(BSFSConfig.__dataclass_fields__)
    options = {**to_dict(BSFSConfig()), **{k: v for k, v in payload.items() if k in field_names}}
    extra = options["extra_populations"] or []
    if not isinstance(extra, (list, tuple)):
        raise ConfigError("extra_populations must be a list of population labels")
    options["extra_populations"] = list(extra)
    return BSFSConfig(**options)


def load_yaml_config(path: Union[str, Path]) -> BSFSConfig:
    """Load a :class:`BSFSConfig` from a YAML file.

    The options may sit at the top level of the document or under a ``bsfs``
    key. Unknown keys are ignored.
    """

    with open(path, "r", encoding="utf-8") as handle:
        raw = yaml.safe_load(handle) or {}

    if not isinstance(raw, Mapping):
        raise ConfigError(f"Config file '{path}' must contain a mapping")
    section = raw.get("bsfs", raw)
    if not isinstance(section, Mapping):
        raise ConfigError(f"'bsfs' section of '{path}' must be a mapping")

    return _from_mapping(section).validate()


__all__ = ["MODES", "BSFSConfig", "load_yaml_config", "to_dict"]
