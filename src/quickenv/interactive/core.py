"""Core utilities for interactive flows.

Menu labels, the questionary style, and choose(), which maps a list of
(label, value) options onto the list selector.
"""

from __future__ import annotations

from typing import Any, Sequence

from questionary import Style
from rich.markup import escape

from ..selector import Cancelled, select

# Custom style for questionary
custom_style = Style(
    [
        ("qmark", "fg:cyan bold"),
        ("question", "fg:cyan"),
        ("answer", "fg:green"),
        ("instruction", "fg:gray"),
    ]
)

# Special menu entries
CREATE_PRESET = "[green]Create new preset…[/green]"
CREATE_KEY = "[green]Create KEY…[/green]"
DELETE_PRESET = "[red]Delete entire preset…[/red]"
BACK = "[yellow]Back[/yellow]"
CANCEL = "[dim]Cancel[/dim]"


def choose(
    options: Sequence[tuple[str, Any]],
    title: str,
    initial_index: int = 0,
) -> Any | None:
    """Show a menu of (label, value) options and return the picked value.

    Returns None when the user cancels. NonInteractiveError from the
    selector propagates so callers can tell "no terminal" apart from
    "nothing chosen".
    """
    labels = [label for label, _ in options]
    result = select(labels, title=title, initial_index=initial_index)
    if isinstance(result, Cancelled):
        return None
    return options[result.index][1]


def name_options(names: Sequence[str], kind: str = "preset") -> list[tuple[str, Any]]:
    """Options for user-supplied names, escaped for Rich markup."""
    return [(escape(name), (kind, name)) for name in names]
