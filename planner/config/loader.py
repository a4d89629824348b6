"""YAML config loader with hashing and runtime get/set."""

import hashlib
import json
from pathlib import Path
from typing import Any

import yaml

from planner.config.schema import PlannerConfig


def load_config(path: str | Path | None) -> PlannerConfig:
    """Load and validate config from a YAML file.

    A missing path or an empty file yields the defaults.
    """
    if path is None:
        return PlannerConfig()
    path = Path(path)
    if not path.exists():
        return PlannerConfig()
    with open(path) as f:
        raw = yaml.safe_load(f) or {}
    return PlannerConfig(**raw)


def config_hash(config: PlannerConfig) -> str:
    """Compute a deterministic SHA256 hash of the config."""
    data = config.model_dump_json(indent=None)
    return hashlib.sha256(data.encode()).hexdigest()[:16]


def get_config_value(config: PlannerConfig, dotted_key: str) -> Any:
    """Get a config value by dotted key path. E.g. 'routing.short_term_days'."""
    obj: Any = config
    for part in dotted_key.split("."):
        if hasattr(obj, part):
            obj = getattr(obj, part)
        elif isinstance(obj, dict):
            obj = obj[part]
        else:
            raise KeyError(f"Config key not found: {dotted_key}")
    return obj


def set_config_value(config: PlannerConfig, dotted_key: str, value: Any) -> PlannerConfig:
    """Set a config value by dotted key path and re-validate.

    Returns a new PlannerConfig instance.
    """
    data = json.loads(config.model_dump_json())
    parts = dotted_key.split(".")
    target = data
    for part in parts[:-1]:
        if part not in target:
            raise KeyError(f"Config key not found: {dotted_key}")
        target = target[part]
    if parts[-1] not in target:
        raise KeyError(f"Config key not found: {dotted_key}")
    old_value = target[parts[-1]]
    if isinstance(value, str):
        if isinstance(old_value, bool):
            value = value.lower() in ("1", "true", "yes", "on")
        elif isinstance(old_value, int):
            value = int(value)
        elif isinstance(old_value, float):
            value = float(value)
    target[parts[-1]] = value
    return PlannerConfig(**data)


def save_config(config: PlannerConfig, path: str | Path) -> None:
    """Write the full validated config back to YAML, creating parent dirs."""
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    with open(path, "w") as f:
        yaml.safe_dump(config.model_dump(mode="json"), f, sort_keys=False)
