"""Shell output: export statements and the wrapper function."""

from __future__ import annotations

from typing import Mapping

from .errors import ValidationError
from .validation import has_newline, is_valid_key

SHELL_FUNCTION = """\
# quickenv shell helper (bash/zsh)
quickenv() {
  if [ "$1" = "use" ]; then
    shift
    local __out
    __out="$(command quickenv use "$@" </dev/tty)" || return $?
    eval "$__out"
  else
    command quickenv "$@"
  fi
}
"""


def shell_quote(value: object) -> str:
    """Single-quote a value for POSIX shells.

    Embedded single quotes become ``'\\''`` (close, escaped quote, reopen).
    """
    return "'" + str(value).replace("'", "'\\''") + "'"


def check_exportable(variables: Mapping[str, object]) -> None:
    """Raise ValidationError for the first pair that cannot be exported."""
    for key, value in variables.items():
        if not is_valid_key(key):
            raise ValidationError(f"Invalid key name: {key}. Should match [A-Z0-9_]+")
        if has_newline(value):
            raise ValidationError(
                f"Value contains newline; cannot export: {key}",
                hint="Please make it a single line via `quickenv set`.",
            )


def format_exports(variables: Mapping[str, object]) -> str:
    """Render one ``export KEY='value';`` line per variable.

    Returns an empty string for an empty mapping, otherwise the lines
    joined with a trailing newline.
    """
    check_exportable(variables)
    lines = [f"export {key}={shell_quote(value)};" for key, value in variables.items()]
    return "\n".join(lines) + "\n" if lines else ""


def init_script() -> str:
    """Shell function that evals ``quickenv use`` output.

    Usage: source <(quickenv init)
    """
    return SHELL_FUNCTION
