"""Interactive command palette for quickenv.

Shown when `quickenv` is run without a subcommand.
"""

from __future__ import annotations

MENU = [
    ("list", "List all presets"),
    ("use", "Interactively choose and export"),
    ("show", "Show variables for a preset"),
    ("set", "Interactive set variables"),
    ("edit", "Interactive edit variables (select preset/KEY)"),
    ("del", "Interactive delete key or entire preset"),
    ("current", "Print current preset name"),
    ("help", "Show usage"),
    ("exit", "Exit"),
]


def menu_labels() -> list[str]:
    width = max(len(cmd) for cmd, _ in MENU)
    return [f"[cyan]{cmd.ljust(width)}[/cyan]  [dim]{desc}[/dim]" for cmd, desc in MENU]


def interactive_menu() -> None:
    """Loop over the command palette until Exit or cancel.

    Errors from a command are reported and the palette is shown again.
    NonInteractiveError raised by a command propagates to the caller.
    """
    import argparse
    import logging

    from .. import cli
    from ..display import error, print_usage
    from ..errors import QuickenvError
    from ..selector import Cancelled, NonInteractiveError
    from . import core

    logger = logging.getLogger(__name__)
    handlers = {
        "list": cli.cmd_list,
        "use": cli.cmd_use,
        "show": cli.cmd_show,
        "set": cli.cmd_set,
        "edit": cli.cmd_edit,
        "del": cli.cmd_del,
        "current": cli.cmd_current,
    }

    while True:
        try:
            result = core.select(menu_labels(), title="Select a command:")
        except NonInteractiveError:
            print_usage()
            return
        if isinstance(result, Cancelled):
            print_usage()
            return

        command = MENU[result.index][0]
        logger.debug("Palette command: %s", command)
        if command == "exit":
            return
        if command == "help":
            print_usage()
            continue

        args = argparse.Namespace(command=command, name=None, key=None, value=[])
        try:
            handlers[command](args)
        except QuickenvError as exc:
            error(exc.message, exc.hint, style=exc.style)
