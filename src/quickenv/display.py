"""Console output for quickenv.

Human-readable output goes through Rich consoles. ``console`` writes to
stdout, ``err_console`` to stderr; both can be swapped in tests with
set_console() / set_err_console().
"""

from __future__ import annotations

from typing import Any, Mapping

from rich.console import Console
from rich.markup import escape

from . import presets

_console_instance: Console | None = None
_err_console_instance: Console | None = None


def _get_console() -> Console:
    """Get the stdout console, creating one if needed."""
    global _console_instance
    if _console_instance is None:
        _console_instance = Console(highlight=False)
    return _console_instance


def _get_err_console() -> Console:
    """Get the stderr console, creating one if needed."""
    global _err_console_instance
    if _err_console_instance is None:
        _err_console_instance = Console(stderr=True, highlight=False)
    return _err_console_instance


def set_console(new_console: Console | None) -> None:
    """Set the stdout console (for testing).

    Example:
        from io import StringIO
        from rich.console import Console
        from quickenv import display

        output = StringIO()
        display.set_console(Console(file=output, width=120))
        # ... run code ...
        display.set_console(None)  # Reset
    """
    global _console_instance
    _console_instance = new_console


def set_err_console(new_console: Console | None) -> None:
    """Set the stderr console (for testing)."""
    global _err_console_instance
    _err_console_instance = new_console


class _ConsoleProxy:
    """Proxy that delegates to whichever console is current.

    Lets set_console() affect modules that imported ``console`` earlier.
    """

    def __init__(self, getter):
        self._getter = getter

    def __getattr__(self, name: str):
        return getattr(self._getter(), name)


console = _ConsoleProxy(_get_console)
err_console = _ConsoleProxy(_get_err_console)


def error(message: str, hint: str | None = None, style: str = "red") -> None:
    """Report a problem on stderr."""
    err_console.print(f"[{style}]{escape(message)}[/{style}]")
    if hint:
        err_console.print(f"[dim]{escape(hint)}[/dim]")


def warn(message: str) -> None:
    err_console.print(f"[yellow]{escape(message)}[/yellow]")


def success(message: str) -> None:
    console.print(f"[green]{escape(message)}[/green]")


def print_aligned_vars(variables: Mapping[str, Any]) -> None:
    """Print KEY = value lines, sorted, with keys padded to one width."""
    if not variables:
        console.print("[dim](no variables)[/dim]")
        return
    width = max(len(key) for key in variables)
    for key in sorted(variables):
        key_col = f"[bold cyan]{escape(key.ljust(width))}[/bold cyan]"
        console.print(f"{key_col} [dim]=[/dim] {escape(str(variables[key]))}")


def print_preset_list(cfg: dict[str, Any]) -> None:
    """Plain listing of all presets, marking the current one."""
    names = presets.preset_names(cfg)
    if not names:
        console.print("[dim](no presets)[/dim]")
        return
    current = cfg.get("current")
    console.print(f"[bold cyan]Presets[/bold cyan] [dim]({len(names)})[/dim]")
    for name in names:
        count = len(cfg["envs"].get(name) or {})
        meta = [str(count)]
        if name == current:
            meta.append("current")
            bullet = "[green]★[/green]"
            label = f"[bold green]{escape(name)}[/bold green]"
        else:
            bullet = "[bright_black]•[/bright_black]"
            label = escape(name)
        console.print(f" {bullet} {label} [dim]\\[{' · '.join(meta)}][/dim]")


def print_preset_summary(name: str, variables: Mapping[str, Any]) -> None:
    """Header with the variable count, then the variables."""
    console.print(
        f"[bold cyan]Preset: [/bold cyan]{escape(name)} [dim]\\[{len(variables)}][/dim]"
    )
    console.print()
    print_aligned_vars(variables)


def print_preset_details(
    cfg: dict[str, Any], name: str, environ: Mapping[str, str] | None = None
) -> None:
    """Header with count, current marker and apply status, then variables."""
    variables = presets.get_preset(cfg, name)
    is_current = cfg.get("current") == name
    status = presets.apply_status(variables, environ)

    meta = str(len(variables)) + (" · current" if is_current else "") + f" · {status.label}"
    shown = f"[green]{escape(name)}[/green]" if is_current else escape(name)
    console.print(f"[bold cyan]Preset: [/bold cyan]{shown} [dim]\\[{meta}][/dim]")
    console.print()
    print_aligned_vars(variables)


def print_current_summary(cfg: dict[str, Any], environ: Mapping[str, str] | None = None) -> None:
    """Show the current preset, or explain that none is selected."""
    name = cfg.get("current")
    if not presets.has_preset(cfg, name):
        console.print("[bold cyan]Current preset: [/bold cyan][yellow]-[/yellow]")
        console.print()
        console.print(
            "[dim]No preset selected. Run `quickenv use` to choose "
            "or `quickenv list` to view.[/dim]"
        )
        return

    variables = presets.get_preset(cfg, name)
    status = presets.apply_status(variables, environ)
    tag_style = "green" if status.status == "applied" else "yellow"
    console.print(
        f"[bold cyan]Current preset: [/bold cyan][green]{escape(name)}[/green] "
        f"[dim]\\[{status.applied}/{status.total} · [/dim]"
        f"[{tag_style}]{status.label}[/{tag_style}][dim]][/dim]"
    )
    console.print()
    print_aligned_vars(variables)


USAGE = """\
quickenv - Multi-preset environment variables CLI

Usage:
  quickenv                   Open interactive command palette
  quickenv init              Print shell function
  quickenv list              List all presets
  quickenv show [name]       Show variables for a preset
  quickenv use [name]        Interactively choose when name omitted
  quickenv set [name KEY VALUE]
                             Set a variable (interactive without arguments)
  quickenv edit              Interactive edit variables (select preset/KEY)
  quickenv del [name] [KEY]  Delete a key or an entire preset
  quickenv current           Print current preset name
"""


def print_usage() -> None:
    console.print(escape(USAGE), end="")
