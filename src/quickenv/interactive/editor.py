"""Interactive set / edit / delete flows.

Each flow works on a loaded config dict and saves after every change, so
quitting half-way keeps what was already confirmed.
"""

from __future__ import annotations

import logging
from typing import Any

from rich.markup import escape

from .. import config, presets
from ..display import console, error, success, warn
from ..selector import NonInteractiveError
from ..validation import INVALID_KEY_MESSAGE, NEWLINE_MESSAGE, has_newline, is_valid_key
from .core import (
    BACK,
    CANCEL,
    CREATE_KEY,
    CREATE_PRESET,
    DELETE_PRESET,
    choose,
    name_options,
)
from .prompts import ask_confirm, ask_text

logger = logging.getLogger(__name__)

NEXT_ACTIONS = [
    ("Add another key", "another"),
    ("Change preset", "change"),
    ("Finish", "finish"),
]


def pick_preset(cfg: dict[str, Any], title: str = "Select a preset:") -> str | None:
    """Let the user pick an existing preset; None if cancelled."""
    names = presets.preset_names(cfg)
    picked = choose(
        name_options(names),
        title=title,
        initial_index=presets.initial_index(names, cfg.get("current")),
    )
    return picked[1] if picked else None


def _ask_new_preset_name(cfg: dict[str, Any], message: str = "Enter new preset name:") -> str | None:
    answer = ask_text(message)
    name = (answer or "").strip()
    if not name:
        error("Preset name cannot be empty.")
        return None
    presets.ensure_preset(cfg, name)
    return name


def _ask_key(message: str = "Enter KEY (uppercase, A-Z0-9_):") -> str | None:
    """Ask for a KEY until it is valid; None if cancelled."""
    answer = ask_text(message)
    while answer is not None:
        key = answer.strip()
        if is_valid_key(key):
            return key
        warn(INVALID_KEY_MESSAGE)
        answer = ask_text("Re-enter KEY:")
    return None


def _ask_value(message: str = "Enter VALUE (single line):") -> str | None:
    answer = ask_text(message)
    if answer is None:
        return None
    value = answer.strip()
    if has_newline(value):
        error(NEWLINE_MESSAGE)
        return None
    return value


def _choose_preset_by_text(cfg: dict[str, Any]) -> str | None:
    """Numbered fallback when no terminal is available for the menu."""
    names = presets.preset_names(cfg)
    current = cfg.get("current")
    console.print("[cyan]Select a preset:[/cyan]")
    for index, name in enumerate(names, start=1):
        if name == current:
            console.print(f"  \\[{index}] * [green]{escape(name)}[/green]")
        else:
            console.print(f"  \\[{index}]   {escape(name)}")
    console.print(f"[dim]  \\[{len(names) + 1}] Create new preset[/dim]")

    choice = (ask_text("Enter index or name:") or "").strip()
    if not choice:
        error("Invalid input.")
        return None
    if choice.isdigit():
        number = int(choice)
        if 1 <= number <= len(names):
            return names[number - 1]
        if number == len(names) + 1:
            return _ask_new_preset_name(cfg)
    if not presets.has_preset(cfg, choice):
        if not ask_confirm(f"Preset `{choice}` does not exist. Create it?"):
            warn("Cancelled.")
            return None
        presets.ensure_preset(cfg, choice)
    return choice


def _choose_preset_for_set(cfg: dict[str, Any], title: str) -> str | None:
    names = presets.preset_names(cfg)
    if not names:
        return _ask_new_preset_name(cfg, "No presets yet. Enter a new preset name:")

    options = name_options(names) + [(CREATE_PRESET, "create"), (CANCEL, "cancel")]
    try:
        picked = choose(
            options,
            title=title,
            initial_index=presets.initial_index(names, cfg.get("current")),
        )
    except NonInteractiveError:
        return _choose_preset_by_text(cfg)

    if picked is None or picked == "cancel":
        warn("Cancelled.")
        return None
    if picked == "create":
        return _ask_new_preset_name(cfg)
    return picked[1]


def _next_action(name: str) -> str:
    try:
        action = choose(NEXT_ACTIONS, title=f"Next action for {escape(name)}:")
    except NonInteractiveError:
        return "finish"
    return action or "finish"


def run_set(cfg: dict[str, Any], preset: str | None = None) -> None:
    """Add variables to a preset, one KEY/VALUE pair at a time."""
    if preset:
        presets.ensure_preset(cfg, preset)
        name = preset
    else:
        name = _choose_preset_for_set(cfg, "Select a preset for setting variables:")
    if name is None:
        return

    while True:
        key = _ask_key()
        if key is None:
            warn("Cancelled.")
            return

        variables = presets.ensure_preset(cfg, name)
        if key in variables and not ask_confirm(
            f"KEY exists (current: {variables[key]}). Overwrite?"
        ):
            warn("Not overwritten. Cancelled.")
        else:
            value = _ask_value()
            if value is None:
                return
            presets.set_variable(cfg, name, key, value)
            config.save_config(cfg)
            logger.debug("Set %s.%s", name, key)
            success(f"Saved: {name}.{key}")

        action = _next_action(name)
        if action == "change":
            new_name = _choose_preset_for_set(cfg, "Select a preset:")
            if new_name:
                name = new_name
        elif action != "another":
            return


def _create_key(cfg: dict[str, Any], name: str) -> bool:
    """Create (or overwrite) a KEY in the preset; False if cancelled."""
    key = _ask_key("Enter new KEY (uppercase, A-Z0-9_):")
    if key is None:
        return False
    if key in presets.get_preset(cfg, name) and not ask_confirm("KEY exists. Overwrite?"):
        return False
    value = _ask_value()
    if value is None:
        return False
    presets.set_variable(cfg, name, key, value)
    config.save_config(cfg)
    success(f"Saved: {name}.{key}")
    return True


def _edit_key(cfg: dict[str, Any], name: str, key: str) -> bool:
    """Edit one value; Enter keeps it, '-' clears it. False if cancelled."""
    old_value = presets.get_preset(cfg, name)[key]
    console.print(f"[dim]Current value: {escape(str(old_value))}[/dim]")
    answer = ask_text("Enter new value (Enter to keep, '-' to clear):")
    if answer is None:
        return False
    value = answer.strip()
    if value == "":
        value = old_value
    elif value == "-":
        value = ""
    presets.set_variable(cfg, name, key, value)
    config.save_config(cfg)
    success(f"Saved: {name}.{key}")
    return True


def run_edit(cfg: dict[str, Any]) -> None:
    """Pick a preset, then edit or create its keys until Back / Cancel."""
    if not presets.preset_names(cfg):
        error("No presets to edit. Run `quickenv set` first.")
        return

    while True:
        name = pick_preset(cfg)
        if name is None:
            warn("Cancelled.")
            return

        while True:
            keys = sorted(presets.get_preset(cfg, name))
            options = name_options(keys, kind="key") + [
                (CREATE_KEY, "create"),
                (BACK, "back"),
                (CANCEL, "cancel"),
            ]
            picked = choose(options, title=f"Select a KEY to edit (preset: {escape(name)})")
            if picked is None or picked == "cancel":
                warn("Cancelled.")
                return
            if picked == "back":
                break
            if picked == "create":
                done = _create_key(cfg, name)
            else:
                done = _edit_key(cfg, name, picked[1])
            if not done:
                warn("Cancelled.")
                return


def _delete_within_preset(cfg: dict[str, Any], name: str) -> str:
    """Delete keys of one preset until the user leaves.

    Returns "back", "cancel" or "deleted" (the whole preset is gone).
    """
    while True:
        keys = sorted(presets.get_preset(cfg, name))
        extras = [(DELETE_PRESET, "delete-preset"), (BACK, "back"), (CANCEL, "cancel")]
        if keys:
            options = name_options(keys, kind="key") + extras
            title = f"Select a KEY to delete (preset: {escape(name)})"
        else:
            options = extras
            title = f"Preset {escape(name)} has no variables"

        picked = choose(options, title=title)
        if picked is None or picked == "cancel":
            return "cancel"
        if picked == "back":
            return "back"

        if picked == "delete-preset":
            if not ask_confirm(f"Confirm delete the entire preset `{name}`?"):
                return "cancel"
            presets.delete_preset(cfg, name)
            config.save_config(cfg)
            success(f"Deleted preset: {name}")
            return "deleted"

        key = picked[1]
        if not ask_confirm(f"Confirm delete `{name}.{key}`?"):
            return "cancel"
        presets.delete_variable(cfg, name, key)
        config.save_config(cfg)
        success(f"Deleted: {name}.{key}")


def run_delete(cfg: dict[str, Any], preset: str | None = None) -> None:
    """Delete keys or whole presets, starting at ``preset`` if given."""
    if not presets.preset_names(cfg):
        error("No presets to delete.")
        return
    if preset is not None:
        presets.get_preset(cfg, preset)

    name = preset
    while True:
        if name is None:
            name = pick_preset(cfg)
            if name is None:
                warn("Cancelled.")
                return

        outcome = _delete_within_preset(cfg, name)
        if outcome == "cancel":
            warn("Cancelled.")
            return
        if outcome == "deleted" and not presets.preset_names(cfg):
            return
        name = None
