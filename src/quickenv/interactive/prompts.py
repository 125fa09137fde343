"""Text and confirmation prompts.

On a terminal these use questionary; without one they read plain lines
from stdin so scripted input still works.
"""

from __future__ import annotations

import sys

import questionary
from rich.markup import escape

from ..display import console
from .core import custom_style


def _is_interactive() -> bool:
    try:
        return sys.stdin.isatty() and sys.stdout.isatty()
    except (AttributeError, ValueError):
        return False


def _read_line(message: str) -> str | None:
    try:
        return console.input(f"[cyan]{escape(message)}[/cyan] ")
    except EOFError:
        return None


def ask_text(message: str, default: str = "") -> str | None:
    """Ask for one line of text.

    Returns:
        The answer, or None if the user cancelled (Ctrl+C / end of input).
    """
    if not _is_interactive():
        return _read_line(message)
    return questionary.text(message, default=default, style=custom_style).ask()


def ask_confirm(message: str) -> bool:
    """Ask a yes/no question that defaults to No."""
    if not _is_interactive():
        answer = _read_line(f"{message} (y/N)")
        return (answer or "").strip().lower() in ("y", "yes")
    return bool(questionary.confirm(message, default=False, style=custom_style).ask())
