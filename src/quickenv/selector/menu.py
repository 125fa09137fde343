"""Interactive list selector rendered on stderr.

This module provides the ListSelector class and the select() helper for
picking one label out of a list with the arrow keys. The menu block is
drawn on the error stream so stdout stays free for machine output (the
shell ``eval`` of ``quickenv use``), and every redraw overwrites the
previous block in place.

Example:
    from quickenv.selector import Picked, select

    result = select(["dev", "staging", "prod"], title="Select a preset:")
    if isinstance(result, Picked):
        print(result.item)
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Protocol, Sequence, Union

from rich.console import Console
from rich.control import Control, ControlType
from rich.text import Text

from .keys import is_cancel, is_down, is_enter, is_up
from .terminal import TerminalSession
from .themes import DEFAULT_THEME, Theme

logger = logging.getLogger(__name__)


def plain_text(label: str) -> str:
    """Strip Rich markup and ANSI styling from a label."""
    return Text.from_ansi(Text.from_markup(label).plain).plain


@dataclass(frozen=True)
class Picked:
    """The user confirmed ``item`` (at ``index``) with Enter."""

    item: str
    index: int = 0

    @property
    def plain(self) -> str:
        return plain_text(self.item)


@dataclass(frozen=True)
class Cancelled:
    """The user left the menu with Escape or Ctrl+C."""


SelectionResult = Union[Picked, Cancelled]


class KeySource(Protocol):
    """Anything that yields key presses, one per call."""

    def read_key(self) -> str: ...


@dataclass
class MenuState:
    """Mutable state of one menu session.

    Attributes:
        items: Labels in display order.
        selected_index: Index of the highlighted label.
        rendered_line_count: Lines written by the last render, i.e. how
            many lines the next redraw has to erase.
    """

    items: tuple[str, ...]
    selected_index: int = 0
    rendered_line_count: int = field(default=0)

    def move(self, delta: int) -> None:
        """Move the highlight, wrapping at both ends."""
        count = len(self.items)
        self.selected_index = (self.selected_index + delta + count) % count

    @property
    def selected(self) -> str:
        return self.items[self.selected_index]


class ListSelector:
    """Modal single-choice menu driven by arrow keys.

    Keyboard controls:
        - Up/Down: Move the highlight (wraps around)
        - Enter: Pick the highlighted item
        - Esc/Ctrl+C: Cancel
        - Anything else is ignored

    Args:
        items: Non-empty sequence of labels (Rich markup allowed).
        title: Line shown above the items.
        initial_index: Starting highlight, clamped into range.
        console: Rich Console to draw on (stderr console if not provided).
        theme: Optional Theme for customizing appearance.

    Raises:
        ValueError: If items is empty.
    """

    def __init__(
        self,
        items: Sequence[str],
        title: str = "Select:",
        initial_index: int = 0,
        console: Console | None = None,
        theme: Theme | None = None,
    ):
        if not items:
            raise ValueError("Menu must have at least one item")

        self.title = title
        self.console = console or Console(stderr=True, highlight=False)
        self.theme = theme or DEFAULT_THEME
        start = max(0, min(initial_index, len(items) - 1))
        self.state = MenuState(items=tuple(items), selected_index=start)

    def build_lines(self) -> list[str]:
        """Build the markup lines for the current state."""
        theme = self.theme
        lines = [f"[{theme.title_color}]{_one_line(self.title)}[/]"]
        for index, item in enumerate(self.state.items):
            label = _one_line(item)
            if index == self.state.selected_index:
                pointer = f"[{theme.selected_color}]{theme.cursor_icon}[/]"
                label = f"[{theme.selected_color}]{label}[/]"
            else:
                pointer = " "
            lines.append(f" {pointer} {label}")
        lines.append(f"[{theme.dim_color}]{theme.hint}[/]")
        return lines

    def erase(self) -> None:
        """Erase the block drawn by the last render."""
        count = self.state.rendered_line_count
        if count <= 0:
            return
        codes = ((ControlType.CURSOR_UP, 1), (ControlType.ERASE_IN_LINE, 2)) * count
        # Console.control() drops codes when TERM is dumb, but the lines
        # above were still printed and must go.
        with self.console:
            self.console.file.write(Control(*codes).segment.text)
        self.state.rendered_line_count = 0

    def render(self) -> None:
        """Replace the previous block with one for the current state."""
        lines = self.build_lines()
        self.erase()
        for line in lines:
            # One logical line must stay one physical line, or the next
            # erase would leave fragments behind.
            self.console.print(line, no_wrap=True, overflow="crop", highlight=False)
        self.state.rendered_line_count = len(lines)

    def handle_key(self, key: str) -> SelectionResult | None:
        """Apply one key press; return the outcome once the menu is done."""
        if is_up(key):
            self.state.move(-1)
            self.render()
        elif is_down(key):
            self.state.move(+1)
            self.render()
        elif is_enter(key):
            return Picked(self.state.selected, self.state.selected_index)
        elif is_cancel(key):
            return Cancelled()
        return None

    def run(self, keys: KeySource) -> SelectionResult:
        """Draw the menu and block until the user picks or cancels.

        The drawn block is erased on every way out, including errors
        raised by the key source.
        """
        try:
            self.render()
            while True:
                try:
                    key = keys.read_key()
                except KeyboardInterrupt:
                    return Cancelled()
                outcome = self.handle_key(key)
                if outcome is not None:
                    return outcome
        finally:
            self.erase()


def _one_line(label: str) -> str:
    return label.replace("\r", " ").replace("\n", " ")


def select(
    items: Sequence[str],
    title: str = "Select:",
    initial_index: int = 0,
    *,
    console: Console | None = None,
    theme: Theme | None = None,
    terminal: TerminalSession | None = None,
) -> SelectionResult:
    """Run one menu session on the controlling terminal.

    Args:
        items: Non-empty sequence of labels.
        title: Line shown above the items.
        initial_index: Starting highlight.
        console: Console to draw on (defaults to stderr).
        theme: Visual theme.
        terminal: Session to read keys from; opened on demand if omitted.

    Returns:
        Picked with the chosen label, or Cancelled.

    Raises:
        NonInteractiveError: If no interactive terminal is available.
        ValueError: If items is empty.
    """
    selector = ListSelector(items, title, initial_index, console=console, theme=theme)
    session = terminal if terminal is not None else TerminalSession.open()
    with session as term:
        result = selector.run(term)
    logger.debug("Menu %r finished with %r", title, result)
    return result
