"""Analysis configuration: defaults, ``.deadwood.json`` and overrides."""

from __future__ import annotations

import dataclasses
import json
import logging
import os
from pathlib import Path
from typing import Any

from deadwood.errors import ConfigError
from deadwood.models import AnalysisConfig

logger = logging.getLogger(__name__)

CONFIG_FILE = ".deadwood.json"
ENV_TARGET_DIR = "DEADWOOD_TARGET_DIR"
ENV_PORT = "DEADWOOD_PORT"

_TUPLE_FIELDS = {
    "extensions", "skip_dirs", "exclude_patterns", "entry_names",
    "entry_dirs", "extra_entry_points", "barrel_names",
}
_INT_FIELDS = {"max_chains", "max_depth", "workers"}


def load_config(target_dir: Path | str, **overrides: Any) -> AnalysisConfig:
    """Build an AnalysisConfig for *target_dir*.

    Values from ``.deadwood.json`` in the target directory are applied first,
    then every override that is not ``None``.
    """
    target = Path(target_dir)
    values: dict[str, Any] = read_config_file(target / CONFIG_FILE)
    values.update({k: v for k, v in overrides.items() if v is not None})
    values["target_dir"] = target

    known = {f.name for f in dataclasses.fields(AnalysisConfig)}
    kwargs: dict[str, Any] = {}
    for key, value in values.items():
        if key not in known:
            logger.warning("Ignoring unknown config key %r", key)
            continue
        kwargs[key] = _coerce(key, value)
    return AnalysisConfig(**kwargs)


def read_config_file(path: Path) -> dict[str, Any]:
    if not path.is_file():
        return {}
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except ValueError as exc:
        raise ConfigError(f"Malformed config file {path}: {exc}") from exc
    if not isinstance(data, dict):
        raise ConfigError(f"Config file {path} must contain a JSON object")
    logger.info("Loaded config from %s", path)
    return data


def default_target_dir() -> Path:
    return Path(os.environ.get(ENV_TARGET_DIR, ".")).resolve()


def default_port(fallback: int = 8000) -> int:
    raw = os.environ.get(ENV_PORT)
    if not raw:
        return fallback
    try:
        return int(raw)
    except ValueError:
        logger.warning("Ignoring non-integer %s=%r", ENV_PORT, raw)
        return fallback


def _coerce(key: str, value: Any) -> Any:
    if key in _TUPLE_FIELDS:
        if isinstance(value, str):
            return (value,)
        if not isinstance(value, (list, tuple)):
            raise ConfigError(f"{key} must be a list of strings")
        return tuple(str(v) for v in value)
    if key in _INT_FIELDS:
        if value is None:
            return None
        if isinstance(value, bool) or not isinstance(value, int):
            raise ConfigError(f"{key} must be an integer")
        return value
    if key == "follow_reexports":
        return bool(value)
    return value
