"""KEY / VALUE validation."""

from __future__ import annotations

import re

from .errors import ValidationError

KEY_PATTERN = re.compile(r"[A-Z0-9_]+")

INVALID_KEY_MESSAGE = "Invalid KEY. Use uppercase letters, digits, and underscores (^[A-Z0-9_]+$)"
NEWLINE_MESSAGE = "Value contains newline. Use single-line string."


def is_valid_key(key: str) -> bool:
    """Check that key is one or more of A-Z, 0-9 and underscore."""
    return bool(KEY_PATTERN.fullmatch(key))


def has_newline(value: object) -> bool:
    """Check whether value contains a line break."""
    text = str(value)
    return "\n" in text or "\r" in text


def validate_key(key: str) -> str:
    if not is_valid_key(key):
        raise ValidationError(INVALID_KEY_MESSAGE)
    return key


def validate_value(value: object) -> str:
    if has_newline(value):
        raise ValidationError(NEWLINE_MESSAGE)
    return str(value)


def validate_pair(key: str, value: object) -> tuple[str, str]:
    """Validate a KEY/VALUE pair, returning the value as a string."""
    return validate_key(key), validate_value(value)
