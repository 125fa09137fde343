"""Keyboard input helpers for the selector.

Keys arrive as the raw sequences a terminal sends; these helpers compare
them against readchar's symbolic names so the menu logic never deals with
byte values directly.
"""

from __future__ import annotations

import readchar


def is_enter(key: str) -> bool:
    """Check if key is Enter/Return."""
    return key in (readchar.key.ENTER, readchar.key.CR, readchar.key.LF)


def is_escape(key: str) -> bool:
    """Check if key is Escape (handles terminal variations)."""
    return key in (readchar.key.ESC, "\x1b\x1b")


def is_interrupt(key: str) -> bool:
    """Check if key is Ctrl+C delivered as a character."""
    return key == readchar.key.CTRL_C


def is_cancel(key: str) -> bool:
    """Check if key ends the menu without a pick (Escape or Ctrl+C)."""
    return is_escape(key) or is_interrupt(key)


def is_up(key: str) -> bool:
    """Check if key is up arrow."""
    return key in (readchar.key.UP, "\x1bOA")


def is_down(key: str) -> bool:
    """Check if key is down arrow."""
    return key in (readchar.key.DOWN, "\x1bOB")
