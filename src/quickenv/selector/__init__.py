"""Arrow-key list selector drawn on stderr.

A small, reusable single-choice menu for CLI prompts whose stdout must stay
clean for piping.

Example:
    from quickenv.selector import Cancelled, NonInteractiveError, select

    try:
        result = select(["dev", "staging", "prod"], title="Select a preset:")
    except NonInteractiveError:
        ...  # print a plain list instead
    if isinstance(result, Cancelled):
        ...
"""

from .keys import (
    is_cancel,
    is_down,
    is_enter,
    is_escape,
    is_interrupt,
    is_up,
)
from .menu import (
    Cancelled,
    ListSelector,
    MenuState,
    Picked,
    SelectionResult,
    plain_text,
    select,
)
from .terminal import NonInteractiveError, TerminalSession
from .themes import DEFAULT_THEME, Theme

__all__ = [
    # Main entry points
    "select",
    "ListSelector",
    "MenuState",
    # Outcomes
    "Picked",
    "Cancelled",
    "SelectionResult",
    "plain_text",
    # Terminal
    "TerminalSession",
    "NonInteractiveError",
    # Theming
    "Theme",
    "DEFAULT_THEME",
    # Key helpers
    "is_enter",
    "is_escape",
    "is_interrupt",
    "is_cancel",
    "is_up",
    "is_down",
]
