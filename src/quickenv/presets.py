"""Preset operations over the loaded config state.

Functions here mutate the config dict in place; callers decide when to
persist it with ``config.save_config``.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Any, Mapping

from .errors import KeyNotFoundError, PresetNotFoundError
from .validation import validate_pair


@dataclass(frozen=True)
class ApplyStatus:
    """How much of a preset is already present in an environment."""

    total: int
    applied: int
    status: str  # "applied" | "partial" | "none"

    @property
    def label(self) -> str:
        return "not-applied" if self.status == "none" else self.status


def preset_names(cfg: dict[str, Any]) -> list[str]:
    """Sorted preset names."""
    return sorted(cfg.get("envs", {}))


def has_preset(cfg: dict[str, Any], name: str | None) -> bool:
    return bool(name) and name in cfg.get("envs", {})


def get_preset(cfg: dict[str, Any], name: str | None) -> dict[str, str]:
    """Return the variables of a preset.

    Raises:
        PresetNotFoundError: If the preset does not exist.
    """
    if not has_preset(cfg, name):
        raise PresetNotFoundError(name)
    variables = cfg["envs"][name]
    return variables if isinstance(variables, dict) else {}


def ensure_preset(cfg: dict[str, Any], name: str) -> dict[str, str]:
    """Return the preset, creating an empty one if needed."""
    envs = cfg.setdefault("envs", {})
    if not isinstance(envs.get(name), dict):
        envs[name] = {}
    return envs[name]


def set_variable(cfg: dict[str, Any], name: str, key: str, value: object) -> None:
    """Validate and store ``name.KEY = value``, creating the preset if needed."""
    key, value = validate_pair(key, value)
    ensure_preset(cfg, name)[key] = value


def delete_variable(cfg: dict[str, Any], name: str, key: str) -> None:
    variables = get_preset(cfg, name)
    if key not in variables:
        raise KeyNotFoundError(key)
    del variables[key]


def delete_preset(cfg: dict[str, Any], name: str) -> None:
    """Remove a preset; clears the current marker if it pointed there."""
    get_preset(cfg, name)
    del cfg["envs"][name]
    if cfg.get("current") == name:
        cfg["current"] = None


def set_current(cfg: dict[str, Any], name: str) -> None:
    get_preset(cfg, name)
    cfg["current"] = name


def initial_index(names: list[str], current: str | None) -> int:
    """Index of the current preset in names, or 0."""
    if current and current in names:
        return names.index(current)
    return 0


def apply_status(
    variables: Mapping[str, object], environ: Mapping[str, str] | None = None
) -> ApplyStatus:
    """Compare a preset against an environment (default: os.environ).

    An empty preset counts as applied.
    """
    env = os.environ if environ is None else environ
    total = len(variables)
    if total == 0:
        return ApplyStatus(total=0, applied=0, status="applied")
    applied = sum(1 for key, value in variables.items() if env.get(key) == str(value))
    if applied == total:
        status = "applied"
    elif applied > 0:
        status = "partial"
    else:
        status = "none"
    return ApplyStatus(total=total, applied=applied, status=status)
