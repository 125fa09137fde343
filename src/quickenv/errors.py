"""Custom exceptions for quickenv."""

from __future__ import annotations


class QuickenvError(Exception):
    """Base exception for all quickenv errors.

    Carries the user-facing message, an optional hint line, and the
    process exit code the CLI should use when reporting it.
    """

    exit_code = 1
    style = "red"

    def __init__(self, message: str, hint: str | None = None):
        super().__init__(message)
        self.message = message
        self.hint = hint


class ConfigError(QuickenvError):
    """The config file exists but cannot be read or parsed."""

    def __init__(self, path, reason: str = ""):
        super().__init__(
            f"Config file is corrupted or unreadable: {path}",
            hint="Please back up and fix the JSON, then retry.",
        )
        self.path = path
        self.reason = reason


class ValidationError(QuickenvError):
    """A KEY or VALUE is not acceptable."""


class PresetNotFoundError(QuickenvError):
    """Named preset does not exist."""

    def __init__(self, name: str | None):
        super().__init__(
            f"Preset not found: {name or '(missing)'}",
            hint="Use `quickenv list` to view existing presets.",
        )
        self.name = name


class KeyNotFoundError(QuickenvError):
    """KEY does not exist in the preset."""

    def __init__(self, key: str):
        super().__init__(f"KEY not found: {key}")
        self.key = key


class UserCancelled(QuickenvError):
    """The user backed out of an interactive choice."""

    style = "yellow"

    def __init__(self, message: str = "Cancelled."):
        super().__init__(message)
