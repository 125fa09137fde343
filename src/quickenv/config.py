"""Configuration storage for quickenv.

All state lives in a single JSON file:

    ~/.quick-env/config.json
    {"current": "dev", "envs": {"dev": {"API_URL": "http://localhost"}}}

The directory can be moved with QUICKENV_HOME.
"""

from __future__ import annotations

import copy
import json
import logging
import os
import tempfile
from pathlib import Path
from typing import Any

from .errors import ConfigError

logger = logging.getLogger(__name__)

# Default config
DEFAULT_CONFIG: dict[str, Any] = {
    "current": None,
    "envs": {},
}

_TRUTHY = ("1", "true", "yes", "on")


def get_config_dir() -> Path:
    """Get the quickenv config directory."""
    override = os.environ.get("QUICKENV_HOME")
    if override:
        return Path(os.path.expanduser(override))
    return Path.home() / ".quick-env"


def get_config_path() -> Path:
    """Get the path to the config file."""
    return get_config_dir() / "config.json"


def get_log_path() -> Path:
    """Get the path to the debug log file."""
    return get_config_dir() / "debug.log"


def is_debug_enabled() -> bool:
    """Check if debug logging is enabled."""
    return os.environ.get("QUICKENV_DEBUG", "").strip().lower() in _TRUTHY


def ensure_dirs() -> None:
    """Ensure the config directory exists."""
    get_config_dir().mkdir(parents=True, exist_ok=True)


def default_config() -> dict[str, Any]:
    return copy.deepcopy(DEFAULT_CONFIG)


def load_config() -> dict[str, Any]:
    """Load the preset state.

    A missing or blank file yields the default state. Anything that cannot
    be parsed into a JSON object raises ConfigError; the file is never
    reset behind the user's back.
    """
    ensure_dirs()
    config_path = get_config_path()

    try:
        raw = config_path.read_text(encoding="utf-8")
    except FileNotFoundError:
        logger.debug("No config at %s, using defaults", config_path)
        return default_config()
    except (OSError, UnicodeDecodeError) as exc:
        raise ConfigError(config_path, str(exc)) from exc

    if not raw.strip():
        return default_config()

    try:
        config = json.loads(raw)
    except json.JSONDecodeError as exc:
        raise ConfigError(config_path, str(exc)) from exc

    if not isinstance(config, dict):
        raise ConfigError(config_path, "top level is not an object")

    if not isinstance(config.get("envs"), dict):
        config["envs"] = {}
    config.setdefault("current", None)
    logger.debug("Loaded %d preset(s) from %s", len(config["envs"]), config_path)
    return config


def save_config(config: dict[str, Any]) -> None:
    """Save the preset state, replacing the file atomically."""
    ensure_dirs()
    config_path = get_config_path()
    _atomic_write(config_path, json.dumps(config, indent=2, ensure_ascii=False) + "\n")
    logger.debug("Saved config to %s", config_path)


def _atomic_write(path: Path, content: str) -> None:
    """Write content to a temp file beside ``path``, then rename over it."""
    path.parent.mkdir(parents=True, exist_ok=True)

    fd = None
    tmp_path = None
    try:
        fd, tmp_path = tempfile.mkstemp(dir=path.parent, prefix="config.", suffix=".tmp")
        os.write(fd, content.encode("utf-8"))
        os.fsync(fd)
        os.close(fd)
        fd = None
        os.replace(tmp_path, path)
        tmp_path = None
    except OSError:
        if fd is not None:
            os.close(fd)
        if tmp_path is not None and os.path.exists(tmp_path):
            os.unlink(tmp_path)
        raise
