"""CLI interface for quickenv."""

from __future__ import annotations

import argparse
import logging
import sys

from . import __version__, config, display, presets
from .errors import QuickenvError, UserCancelled
from .selector import NonInteractiveError

logger = logging.getLogger(__name__)


def _pick_preset(cfg: dict, names: list[str]) -> str | None:
    """Menu over preset names. None if cancelled; NonInteractiveError propagates."""
    from .interactive import core

    picked = core.choose(
        core.name_options(names),
        title="Select a preset:",
        initial_index=presets.initial_index(names, cfg.get("current")),
    )
    return picked[1] if picked else None


def cmd_init(args):
    """Print the shell helper function."""
    from .shell import init_script

    sys.stdout.write(init_script())


def cmd_list(args):
    """List presets; picking one shows its variables."""
    cfg = config.load_config()
    names = presets.preset_names(cfg)
    if not names:
        display.console.print("[dim](no presets)[/dim]")
        return

    try:
        name = _pick_preset(cfg, names)
    except NonInteractiveError:
        name = None
    if name is None:
        display.print_preset_list(cfg)
        return

    display.print_preset_summary(name, presets.get_preset(cfg, name))


def cmd_show(args):
    """Show variables for a preset."""
    cfg = config.load_config()
    name = args.name
    if not name:
        names = presets.preset_names(cfg)
        if not names:
            display.console.print("[dim](no presets)[/dim]")
            return
        try:
            name = _pick_preset(cfg, names)
        except NonInteractiveError:
            display.print_current_summary(cfg)
            return
        if name is None:
            display.warn("Cancelled.")
            return

    display.print_preset_details(cfg, name)


def cmd_use(args):
    """Mark a preset current and print its export statements."""
    from .shell import format_exports

    cfg = config.load_config()
    name = args.name
    if not name:
        names = presets.preset_names(cfg)
        if not names:
            raise QuickenvError("No presets available. Run `quickenv set` to create variables first.")
        try:
            name = _pick_preset(cfg, names)
        except NonInteractiveError:
            raise QuickenvError(
                "Non-interactive environment. Provide a name: quickenv use <name>"
            ) from None
        if name is None:
            raise UserCancelled()

    exports = format_exports(presets.get_preset(cfg, name))
    presets.set_current(cfg, name)
    config.save_config(cfg)
    logger.debug("Activated preset %s", name)
    sys.stdout.write(exports)


def cmd_set(args):
    """Set variables; non-interactive when KEY is given."""
    cfg = config.load_config()
    if args.name and args.key:
        value = " ".join(args.value)
        presets.set_variable(cfg, args.name, args.key, value)
        config.save_config(cfg)
        display.console.print(f"Saved: {args.name}.{args.key}", markup=False)
        return

    from .interactive.editor import run_set

    run_set(cfg, preset=args.name)


def cmd_edit(args):
    """Interactively edit variables."""
    from .interactive.editor import run_edit

    run_edit(config.load_config())


def cmd_del(args):
    """Delete a KEY, or open the interactive delete flow."""
    cfg = config.load_config()
    if args.name and args.key:
        presets.delete_variable(cfg, args.name, args.key)
        config.save_config(cfg)
        display.console.print(f"Deleted: {args.name}.{args.key}", markup=False)
        return

    from .interactive.editor import run_delete

    run_delete(cfg, preset=args.name)


def cmd_current(args):
    """Print the current preset name."""
    cfg = config.load_config()
    current = cfg.get("current")
    if not current:
        raise QuickenvError("No current preset set.")
    sys.stdout.write(f"{current}\n")


def cmd_help(args):
    """Show usage."""
    display.print_usage()


COMMANDS = ("init", "list", "show", "use", "set", "edit", "del", "current", "help")


def build_parser() -> argparse.ArgumentParser:
    """Build the CLI argument parser."""
    parser = argparse.ArgumentParser(
        prog="quickenv",
        description="quickenv: Multi-preset environment variables CLI",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        add_help=False,
    )
    parser.add_argument("-h", "--help", action="store_true", help="Show usage")
    parser.add_argument("--version", action="version", version=f"quickenv {__version__}")

    subparsers = parser.add_subparsers(dest="command")

    # init
    init_p = subparsers.add_parser("init", help="Print shell function")
    init_p.set_defaults(func=cmd_init)

    # list
    list_p = subparsers.add_parser("list", help="List all presets")
    list_p.set_defaults(func=cmd_list)

    # show
    show_p = subparsers.add_parser("show", help="Show variables for a preset")
    show_p.add_argument("name", nargs="?", help="Preset name (menu if omitted)")
    show_p.set_defaults(func=cmd_show)

    # use
    use_p = subparsers.add_parser("use", help="Print exports for a preset and make it current")
    use_p.add_argument("name", nargs="?", help="Preset name (menu if omitted)")
    use_p.set_defaults(func=cmd_use)

    # set
    set_p = subparsers.add_parser("set", help="Set variables (interactive without KEY)")
    set_p.add_argument("name", nargs="?", help="Preset name")
    set_p.add_argument("key", nargs="?", help="Variable name (A-Z, 0-9, _)")
    set_p.add_argument("value", nargs="*", default=[], help="Value (words are joined by spaces)")
    set_p.set_defaults(func=cmd_set)

    # edit
    edit_p = subparsers.add_parser("edit", help="Interactive edit variables")
    edit_p.set_defaults(func=cmd_edit)

    # del
    del_p = subparsers.add_parser("del", help="Delete a key or an entire preset")
    del_p.add_argument("name", nargs="?", help="Preset name")
    del_p.add_argument("key", nargs="?", help="Variable to delete")
    del_p.set_defaults(func=cmd_del)

    # current
    current_p = subparsers.add_parser("current", help="Print current preset name")
    current_p.set_defaults(func=cmd_current)

    # help
    help_p = subparsers.add_parser("help", help="Show usage")
    help_p.set_defaults(func=cmd_help)

    return parser


def main(argv: list[str] | None = None) -> None:
    """Main entry point."""
    from .log import setup_logging

    setup_logging()
    argv = sys.argv[1:] if argv is None else list(argv)

    if argv and not argv[0].startswith("-") and argv[0] not in COMMANDS:
        display.error(f"Unknown command: {argv[0]}")
        display.print_usage()
        sys.exit(1)

    parser = build_parser()
    args = parser.parse_args(argv)
    if args.help:
        display.print_usage()
        return
    logger.debug("Command: %s", args.command)

    try:
        if args.command is None:
            from .interactive import interactive_menu

            interactive_menu()
        else:
            args.func(args)
    except QuickenvError as exc:
        display.error(exc.message, exc.hint, style=exc.style)
        sys.exit(exc.exit_code)
    except NonInteractiveError:
        display.error("Non-interactive environment. Use command form instead.")
        sys.exit(1)
    except KeyboardInterrupt:
        display.err_console.print()
        sys.exit(130)
    except EOFError:
        # tty hung up while a menu was waiting for a key
        display.err_console.print()
        display.error("Terminal input closed.")
        sys.exit(1)
