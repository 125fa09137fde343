"""Configurable theme for the list selector.

The Theme dataclass holds the visual elements of a menu block (colors,
pointer glyph, hint line). Colors use Rich markup names.
"""

from dataclasses import dataclass


@dataclass
class Theme:
    """Visual theme for the selector.

    Attributes:
        title_color: Style for the title line.
        selected_color: Style for the pointer and the selected label.
        dim_color: Style for the hint line.

        cursor_icon: Pointer shown next to the selected item.
        hint: Trailing line explaining the keys.
    """

    # Colors
    title_color: str = "bold cyan"
    selected_color: str = "bold green"
    dim_color: str = "dim"

    # Icons
    cursor_icon: str = "›"

    hint: str = "↑/↓ to move, Enter to confirm, Esc to cancel"


# Default theme used when none is specified
DEFAULT_THEME = Theme()
